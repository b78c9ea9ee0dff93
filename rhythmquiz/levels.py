"""Difficulty levels.

A :class:`LevelPolicy` says which base durations a level may use, which
tokens every question must contain, and whether dotted values and triplet
groups are switched on. The ``required`` tuple holds base type names plus two
directives:

- ``"dotted"``: one dotted value, derived from the first allowed base type
  that is a minim or shorter.
- ``"triplet"``: one quaver triplet group.

``half_of_types`` replaces the fixed list with a fresh random half of the
allowed base types on every question.
"""

import dataclasses
import logging
import typing

import rhythmquiz.durations
import rhythmquiz.sequence_utils


logger = logging.getLogger(__name__)

DOTTED = "dotted"
TRIPLET = "triplet"
DIRECTIVES = (DOTTED, TRIPLET)

# Longest value a required dotted token may be derived from.
MAX_DOTTED_BASE_UNITS = 16


class InvalidLevelError (ValueError):

	"""
	Raised when a level key is not one of the configured levels.
	"""

	def __init__ (self, key: str, known: typing.Iterable[str]) -> None:

		self.key = key
		self.known = tuple(known)

		super().__init__(f"Unknown level {key!r}. Known levels: {', '.join(self.known)}")


@dataclasses.dataclass (frozen=True)
class LevelPolicy:

	"""
	Read-only generation rules for one difficulty level.
	"""

	name: str
	allowed: typing.Tuple[str, ...]
	required: typing.Tuple[str, ...] = ()
	allow_dotted: bool = False
	allow_triplets: bool = False
	half_of_types: bool = False


EASY = LevelPolicy(
	name = "easy",
	allowed = ("semibreve", "minim", "crotchet", "quaver"),
	required = ("semibreve", "minim", "crotchet", "quaver")
)

MEDIUM = LevelPolicy(
	name = "medium",
	allowed = ("semibreve", "minim", "crotchet", "quaver", "semiquaver"),
	required = ("semibreve", "minim", "crotchet", "quaver", "semiquaver", DOTTED, TRIPLET),
	allow_dotted = True,
	allow_triplets = True
)

DIFFICULT = LevelPolicy(
	name = "difficult",
	allowed = rhythmquiz.durations.BASE_TYPE_NAMES,
	half_of_types = True
)

LEVELS: typing.Dict[str, LevelPolicy] = {
	EASY.name: EASY,
	MEDIUM.name: MEDIUM,
	DIFFICULT.name: DIFFICULT,
}


def get_level (key: str, levels: typing.Optional[typing.Mapping[str, LevelPolicy]] = None) -> LevelPolicy:

	"""
	Look up a level by key, failing fast on unknown keys.
	"""

	if levels is None:
		levels = LEVELS

	if key not in levels:
		raise InvalidLevelError(key, levels)

	return levels[key]


def triplet_template () -> rhythmquiz.durations.DurationType:

	"""
	Return the triplet group used by every level: three quavers in one beat.
	"""

	return rhythmquiz.durations.triplet_group(rhythmquiz.durations.QUAVER)


def allowed_pool (policy: LevelPolicy) -> typing.List[rhythmquiz.durations.DurationType]:

	"""
	Return every value the filler may sample for a level.

	Base types come first, followed by their dotted forms when dotted values
	are enabled and the triplet group when triplets are enabled.
	"""

	pool = [rhythmquiz.durations.get_type(name) for name in policy.allowed]

	if policy.allow_dotted:
		pool.extend([rhythmquiz.durations.dotted_of(d) for d in pool])

	if policy.allow_triplets:
		pool.append(triplet_template())

	return pool


def _dotted_requirement (policy: LevelPolicy) -> rhythmquiz.durations.DurationType:

	for name in policy.allowed:
		duration = rhythmquiz.durations.get_type(name)
		if duration.units <= MAX_DOTTED_BASE_UNITS:
			return rhythmquiz.durations.dotted_of(duration)

	return rhythmquiz.durations.dotted_of(rhythmquiz.durations.CROTCHET)


def resolve_required_tokens (policy: LevelPolicy, rng: rhythmquiz.sequence_utils.RandomSource) -> typing.List[rhythmquiz.durations.DurationType]:

	"""
	Return the tokens a question at this level must contain.

	Fixed lists resolve the same way every time. Half-of-types levels draw
	``max(1, N // 2)`` distinct types from the level's N allowed base types
	on every call.
	"""

	if policy.half_of_types:
		names = policy.allowed
		count = max(1, len(names) // 2)
		chosen = rhythmquiz.sequence_utils.sample(names, count, rng)
		logger.debug(f"Level {policy.name!r} requires {chosen}")
		return [rhythmquiz.durations.get_type(name) for name in chosen]

	tokens: typing.List[rhythmquiz.durations.DurationType] = []

	for entry in policy.required:

		if entry == DOTTED:
			tokens.append(_dotted_requirement(policy))

		elif entry == TRIPLET:
			tokens.append(triplet_template())

		else:
			tokens.append(rhythmquiz.durations.get_type(entry))

	return tokens


def policy_from_mapping (name: str, mapping: typing.Mapping[str, typing.Any]) -> LevelPolicy:

	"""
	Build a validated level from a configuration mapping.

	Example (YAML):
		```yaml
		levels:
		  dotted-only:
		    allowed: [minim, crotchet, quaver]
		    required: [dotted]
		    allow_dotted: true
		```
	"""

	if not isinstance(mapping, typing.Mapping):
		raise ValueError(f"Level {name!r} must be a mapping")

	unknown_keys = set(mapping) - {"allowed", "required", "allow_dotted", "allow_triplets", "half_of_types"}

	if unknown_keys:
		raise ValueError(f"Level {name!r} has unknown settings: {', '.join(sorted(unknown_keys))}")

	allowed = tuple(mapping.get("allowed", ()))
	required = tuple(mapping.get("required", ()))

	if not allowed:
		raise ValueError(f"Level {name!r} must allow at least one duration type")

	for type_name in allowed:
		if type_name not in rhythmquiz.durations.CATALOG:
			raise ValueError(f"Level {name!r} allows unknown duration type {type_name!r}")

	for entry in required:
		if entry not in rhythmquiz.durations.CATALOG and entry not in DIRECTIVES:
			raise ValueError(f"Level {name!r} requires unknown token {entry!r}")

	return LevelPolicy(
		name = name,
		allowed = allowed,
		required = required,
		allow_dotted = bool(mapping.get("allow_dotted", False)),
		allow_triplets = bool(mapping.get("allow_triplets", False)),
		half_of_types = bool(mapping.get("half_of_types", False))
	)
