"""Fill a single bar to an exact unit capacity.

The filler places the required tokens, then keeps drawing random values from
the level's pool, throwing away any draw that would overflow the bar. The
loop is bounded; if it runs out of attempts the remaining space is padded
with the smallest catalog value (a demisemiquaver), even when the level does
not allow it. The result is shuffled so required tokens do not always lead.

Repairs are reported on the returned :class:`BarFill` and logged, never
raised.
"""

import dataclasses
import logging
import typing

import rhythmquiz.constants
import rhythmquiz.durations
import rhythmquiz.sequence_utils


logger = logging.getLogger(__name__)


@dataclasses.dataclass
class BarFill:

	"""
	The tokens of one bar plus a record of any repairs made to reach capacity.
	"""

	tokens: typing.List[rhythmquiz.durations.DurationType]
	padded_units: int = 0		# units added as smallest-value padding
	trimmed_tokens: int = 0		# required tokens popped because they overflowed
	attempts: int = 0			# random draws made

	@property
	def units (self) -> int:

		"""
		Total length of the bar in units.
		"""

		return sum(token.units for token in self.tokens)


def fill_bar (
	required: typing.Sequence[rhythmquiz.durations.DurationType],
	pool: typing.Sequence[rhythmquiz.durations.DurationType],
	rng: rhythmquiz.sequence_utils.RandomSource,
	capacity: int = rhythmquiz.constants.UNITS_PER_BAR,
	max_attempts: int = rhythmquiz.constants.MAX_FILL_ATTEMPTS
) -> BarFill:

	"""
	Build one bar containing ``required`` and random ``pool`` values.

	Parameters:
		required: Tokens that must be placed first
		pool: Values to draw from uniformly (may be empty)
		rng: Random source
		capacity: Exact length of the bar in units
		max_attempts: Maximum number of random draws

	Returns:
		A :class:`BarFill` whose tokens sum to ``capacity``.
	"""

	if capacity <= 0:
		raise ValueError("Capacity must be positive")

	if max_attempts < 0:
		raise ValueError("max_attempts cannot be negative")

	tokens = list(required)
	used = sum(token.units for token in tokens)
	trimmed = 0

	while used > capacity and tokens:
		dropped = tokens.pop()
		used -= dropped.units
		trimmed += 1

	if trimmed:
		logger.warning(f"Required tokens overflowed the bar; dropped {trimmed} token(s)")

	attempts = 0

	if pool:

		while used < capacity and attempts < max_attempts:
			attempts += 1
			candidate = rhythmquiz.sequence_utils.pick(pool, rng)

			if used + candidate.units > capacity:
				continue

			tokens.append(candidate)
			used += candidate.units

	padded = capacity - used

	if padded > 0:
		logger.debug(f"Padding bar with {padded} x {rhythmquiz.durations.SMALLEST.name} after {attempts} attempts")
		tokens.extend([rhythmquiz.durations.SMALLEST] * padded)
		used += padded

	if used != capacity:
		logger.warning(f"Bar units mismatch: {used} != {capacity}")

	return BarFill(
		tokens = rhythmquiz.sequence_utils.shuffle(tokens, rng),
		padded_units = max(0, padded),
		trimmed_tokens = trimmed,
		attempts = attempts
	)
