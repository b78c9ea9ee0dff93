"""Duration catalog.

Every rhythmic value the quiz can use is a :class:`DurationType`. The six base
types are module constants; dotted variants and triplet groups are derived
from them with :func:`dotted_of` and :func:`triplet_group`::

    import rhythmquiz.durations as dur

    dur.CROTCHET.units                  # 8
    dur.dotted_of(dur.MINIM).units      # 24
    dur.triplet_group(dur.QUAVER).units # 8 (three quaver-triplets in one beat)

Each type carries the notation code a renderer needs (``w h q 8 16 32``), its
dot count and, for triplet groups, the base value of the three sub-notes.
"""

import dataclasses
import typing

import rhythmquiz.constants


@dataclasses.dataclass (frozen=True)
class DurationType:

	"""
	An immutable rhythmic value measured in units (1 unit = one demisemiquaver).
	"""

	name: str
	units: int
	notation: str						# renderer duration code: 'w', 'h', 'q', '8', '16', '32'
	dots: int = 0
	is_triplet: bool = False
	base: typing.Optional["DurationType"] = None
	sub_count: int = 1					# 3 for triplet groups

	@property
	def is_dotted (self) -> bool:

		"""
		True when the value carries at least one dot.
		"""

		return self.dots > 0


	@property
	def sub_units (self) -> float:

		"""
		Length of each sub-note in units (the whole length for plain values).
		"""

		return self.units / self.sub_count


SEMIBREVE = DurationType(name="semibreve", units=32, notation="w")
MINIM = DurationType(name="minim", units=16, notation="h")
CROTCHET = DurationType(name="crotchet", units=8, notation="q")
QUAVER = DurationType(name="quaver", units=4, notation="8")
SEMIQUAVER = DurationType(name="semiquaver", units=2, notation="16")
DEMISEMIQUAVER = DurationType(name="demisemiquaver", units=1, notation="32")

# Longest first.
CATALOG: typing.Dict[str, DurationType] = {
	d.name: d for d in (SEMIBREVE, MINIM, CROTCHET, QUAVER, SEMIQUAVER, DEMISEMIQUAVER)
}

BASE_TYPE_NAMES: typing.Tuple[str, ...] = tuple(CATALOG)

# Padding value used when a bar cannot be completed by random sampling.
SMALLEST = DEMISEMIQUAVER


def get_type (name: str) -> DurationType:

	"""
	Return the base duration type called ``name``.

	Raises ``KeyError`` for names outside the catalog.
	"""

	try:
		return CATALOG[name]

	except KeyError:
		raise KeyError(f"Unknown duration type {name!r}. Known types: {', '.join(BASE_TYPE_NAMES)}") from None


def dotted_of (duration: DurationType) -> DurationType:

	"""
	Return the single-dotted form of a duration (one and a half times as long).
	"""

	return DurationType(
		name = f"dotted-{duration.name}",
		units = (duration.units * 3) // 2,
		notation = duration.notation,
		dots = 1
	)


def triplet_group (base: DurationType) -> DurationType:

	"""
	Return a triplet group of three ``base`` notes squeezed into one crotchet beat.
	"""

	return DurationType(
		name = f"triplet-{base.name}",
		units = rhythmquiz.constants.UNITS_PER_QUARTER,
		notation = base.notation,
		is_triplet = True,
		base = base,
		sub_count = rhythmquiz.constants.TRIPLET_SUB_NOTES
	)
