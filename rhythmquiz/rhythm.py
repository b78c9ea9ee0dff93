"""Two-bar rhythms and their canonical keys.

A :class:`Rhythm` is what one quiz option shows and plays: two bars, each an
ordered tuple of :class:`~rhythmquiz.durations.DurationType` tokens summing
to 32 units. :func:`canonical_key` turns a rhythm into a string so that
options with the same shape can be detected and discarded.
"""

import dataclasses
import typing

import rhythmquiz.constants
import rhythmquiz.durations


Bar = typing.Tuple[rhythmquiz.durations.DurationType, ...]

TOKEN_SEPARATOR = "-"
BAR_SEPARATOR = "|"


@dataclasses.dataclass (frozen=True)
class Rhythm:

	"""
	An immutable sequence of bars, in playback order.

	``padded_units`` and ``trimmed_tokens`` record how much the bar filler had
	to repair while building the rhythm; they take no part in equality.
	"""

	bars: typing.Tuple[Bar, ...]
	padded_units: int = dataclasses.field(default=0, compare=False)
	trimmed_tokens: int = dataclasses.field(default=0, compare=False)

	def __post_init__ (self) -> None:

		# Accept lists from callers but always store tuples.
		object.__setattr__(self, "bars", tuple(tuple(bar) for bar in self.bars))


	@property
	def tokens (self) -> typing.List[rhythmquiz.durations.DurationType]:

		"""
		All tokens across every bar, in order.
		"""

		return [token for bar in self.bars for token in bar]


	def units_per_bar (self) -> typing.List[int]:

		"""
		Return the unit sum of each bar.
		"""

		return [sum(token.units for token in bar) for bar in self.bars]


	def is_well_formed (self, capacity: int = rhythmquiz.constants.UNITS_PER_BAR) -> bool:

		"""
		True when every bar sums to exactly ``capacity`` units.
		"""

		return all(total == capacity for total in self.units_per_bar())


	def copy (self) -> "Rhythm":

		"""
		Return a deep copy that shares no token objects with this rhythm.
		"""

		return Rhythm(
			bars = tuple(tuple(dataclasses.replace(token) for token in bar) for bar in self.bars),
			padded_units = self.padded_units,
			trimmed_tokens = self.trimmed_tokens
		)


def token_key (token: rhythmquiz.durations.DurationType) -> str:

	"""
	Encode one token for the canonical key.
	"""

	if token.is_triplet:
		base_name = token.base.name if token.base is not None else ""
		return f"triplet:{base_name}"

	return f"{token.name}:{token.units}:{token.notation}:{token.dots}"


def canonical_key (rhythm: Rhythm) -> str:

	"""
	Return a deterministic string for the shape of a rhythm.

	Token order within a bar and bar order are both significant, so two
	rhythms share a key only when they would be drawn and played identically.
	"""

	return BAR_SEPARATOR.join(
		TOKEN_SEPARATOR.join(token_key(token) for token in bar)
		for bar in rhythm.bars
	)


def same_shape (a: Rhythm, b: Rhythm) -> bool:

	"""Return True when two rhythms have equal canonical keys."""

	return canonical_key(a) == canonical_key(b)
