"""Two-bar rhythm generation for a difficulty level.

:class:`RhythmGenerator` resolves a level's pool and required tokens, shares
the required tokens out between the two bars, and fills each bar with
:func:`~rhythmquiz.bar_filler.fill_bar`. All randomness comes from the
generator's ``rng`` so a seeded or scripted source makes output repeatable::

    gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(7))
    rhythm = gen.generate("medium")

``generate_for_level`` is a convenience wrapper that builds a throwaway
generator per call.
"""

import logging
import random
import typing

import rhythmquiz.bar_filler
import rhythmquiz.constants
import rhythmquiz.durations
import rhythmquiz.levels
import rhythmquiz.rhythm
import rhythmquiz.sequence_utils


logger = logging.getLogger(__name__)


def is_feature_token (token: rhythmquiz.durations.DurationType) -> bool:

	"""
	True for the tokens that define a level's character (dotted values and triplet groups).
	"""

	return token.is_dotted or token.is_triplet


def placement_order (required: typing.Sequence[rhythmquiz.durations.DurationType]) -> typing.List[rhythmquiz.durations.DurationType]:

	"""
	Order required tokens for placement: feature tokens first, then longest first.
	"""

	features = [token for token in required if is_feature_token(token)]
	plain = [token for token in required if not is_feature_token(token)]

	return features + sorted(plain, key=lambda token: token.units, reverse=True)


def distribute_required (
	required: typing.Sequence[rhythmquiz.durations.DurationType],
	rng: rhythmquiz.sequence_utils.RandomSource,
	capacity: int = rhythmquiz.constants.UNITS_PER_BAR
) -> typing.List[typing.List[rhythmquiz.durations.DurationType]]:

	"""
	Share required tokens out between the two bars.

	Each token goes to a bar chosen by a fair coin. When it does not fit there
	it moves to the other bar; when neither bar has room it is left out. A
	token is never split across bars.

	Feature tokens are always attempted. A plain token is skipped when placing
	it would leave too little space for the plain tokens still to come, so the
	rhythm keeps as many of the required values as possible. For medium this
	drops the semibreve and keeps the other six.
	"""

	buckets: typing.List[typing.List[rhythmquiz.durations.DurationType]] = [[] for _ in range(rhythmquiz.constants.BARS_PER_RHYTHM)]
	used = [0] * rhythmquiz.constants.BARS_PER_RHYTHM

	order = placement_order(required)
	plain_remaining = sum(token.units for token in order if not is_feature_token(token))

	for token in order:

		if not is_feature_token(token):

			plain_remaining -= token.units
			free = len(used) * capacity - sum(used)

			if free - token.units < plain_remaining:
				logger.debug(f"Skipping required {token.name} to leave room for shorter values")
				continue

		first = rhythmquiz.sequence_utils.coin(rng)
		target = next((i for i in (first, 1 - first) if used[i] + token.units <= capacity), None)

		if target is None:
			logger.debug(f"No room for required {token.name}; leaving it out")
			continue

		buckets[target].append(token)
		used[target] += token.units

	return buckets


class RhythmGenerator:

	"""
	Builds rhythms for any configured level from one random source.
	"""

	def __init__ (
		self,
		rng: typing.Optional[rhythmquiz.sequence_utils.RandomSource] = None,
		levels: typing.Optional[typing.Mapping[str, rhythmquiz.levels.LevelPolicy]] = None,
		fill_attempts: int = rhythmquiz.constants.MAX_FILL_ATTEMPTS
	) -> None:

		"""
		Create a generator.

		Parameters:
			rng: Random source (a new unseeded ``random.Random`` when omitted)
			levels: Level table (defaults to the built-in easy/medium/difficult)
			fill_attempts: Random-draw budget per bar
		"""

		if fill_attempts < 0:
			raise ValueError("fill_attempts cannot be negative")

		self.rng: rhythmquiz.sequence_utils.RandomSource = rng if rng is not None else random.Random()
		self.levels = dict(levels) if levels is not None else dict(rhythmquiz.levels.LEVELS)
		self.fill_attempts = fill_attempts


	def get_level (self, level_key: str) -> rhythmquiz.levels.LevelPolicy:

		"""
		Return the policy for ``level_key`` or raise ``InvalidLevelError``.
		"""

		return rhythmquiz.levels.get_level(level_key, self.levels)


	def generate (self, level_key: str) -> rhythmquiz.rhythm.Rhythm:

		"""
		Generate one two-bar rhythm for a level.
		"""

		policy = self.get_level(level_key)
		pool = rhythmquiz.levels.allowed_pool(policy)
		required = rhythmquiz.levels.resolve_required_tokens(policy, self.rng)

		buckets = distribute_required(required, self.rng)

		fills = [
			rhythmquiz.bar_filler.fill_bar(
				required = bucket,
				pool = pool,
				rng = self.rng,
				max_attempts = self.fill_attempts
			)
			for bucket in buckets
		]

		return rhythmquiz.rhythm.Rhythm(
			bars = tuple(tuple(fill.tokens) for fill in fills),
			padded_units = sum(fill.padded_units for fill in fills),
			trimmed_tokens = sum(fill.trimmed_tokens for fill in fills)
		)


def generate_for_level (level_key: str, rng: typing.Optional[rhythmquiz.sequence_utils.RandomSource] = None) -> rhythmquiz.rhythm.Rhythm:

	"""Generate a rhythm for ``level_key`` with the built-in levels."""

	return RhythmGenerator(rng=rng).generate(level_key)
