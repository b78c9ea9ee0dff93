"""Multiple-choice option sets.

:func:`build_options` surrounds a correct rhythm with distractors drawn from
the same level, keeps only shapes it has not seen (by canonical key), and
shuffles the result. When the level's random space is too small to find
enough distinct shapes within the attempt budget, the remaining slots are
filled with copies of the correct rhythm; ``OptionSet.duplicates`` says how
many.
"""

import dataclasses
import logging
import typing

import rhythmquiz.constants
import rhythmquiz.generator
import rhythmquiz.rhythm
import rhythmquiz.sequence_utils


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class OptionSet:

	"""
	The options of one question and the index of the correct one.
	"""

	options: typing.Tuple[rhythmquiz.rhythm.Rhythm, ...]
	correct_index: int
	attempts: int = dataclasses.field(default=0, compare=False)
	duplicates: int = dataclasses.field(default=0, compare=False)

	@property
	def correct (self) -> rhythmquiz.rhythm.Rhythm:

		"""
		The reference answer.
		"""

		return self.options[self.correct_index]


	def is_correct (self, selected_index: int) -> bool:

		"""
		True when ``selected_index`` points at the reference answer.
		"""

		return is_correct(selected_index, self.correct_index)


def is_correct (selected_index: int, correct_index: int) -> bool:

	"""Compare a selected option index against the correct one."""

	return selected_index == correct_index


def build_options (
	correct: rhythmquiz.rhythm.Rhythm,
	level_key: str,
	generator: typing.Optional[rhythmquiz.generator.RhythmGenerator] = None,
	rng: typing.Optional[rhythmquiz.sequence_utils.RandomSource] = None,
	max_attempts: int = rhythmquiz.constants.MAX_OPTION_ATTEMPTS,
	option_count: int = rhythmquiz.constants.OPTION_COUNT
) -> OptionSet:

	"""
	Build a shuffled option set around ``correct``.

	Parameters:
		correct: The reference rhythm
		level_key: Level used to generate distractors
		generator: Rhythm source (a new one sharing ``rng`` when omitted)
		rng: Random source for the final shuffle (defaults to the generator's)
		max_attempts: Budget of distractor generations
		option_count: Number of options to return

	Never fails for a valid level; in the worst case every option is a copy
	of the correct rhythm.
	"""

	if option_count < 1:
		raise ValueError("option_count must be at least 1")

	if max_attempts < 0:
		raise ValueError("max_attempts cannot be negative")

	if generator is None:
		generator = rhythmquiz.generator.RhythmGenerator(rng=rng)

	if rng is None:
		rng = generator.rng

	# Validate the level even when no distractor is needed.
	generator.get_level(level_key)

	options: typing.List[rhythmquiz.rhythm.Rhythm] = [correct]
	seen = {rhythmquiz.rhythm.canonical_key(correct)}
	attempts = 0

	while len(options) < option_count and attempts < max_attempts:
		attempts += 1
		candidate = generator.generate(level_key)
		key = rhythmquiz.rhythm.canonical_key(candidate)

		if key in seen:
			continue

		options.append(candidate)
		seen.add(key)

	duplicates = option_count - len(options)

	if duplicates:
		logger.debug(f"Only {len(options)} distinct shapes for {level_key!r} after {attempts} attempts; duplicating the answer {duplicates} time(s)")
		options.extend(correct.copy() for _ in range(duplicates))

	order = rhythmquiz.sequence_utils.shuffle(range(option_count), rng)

	return OptionSet(
		options = tuple(options[i] for i in order),
		correct_index = order.index(0),
		attempts = attempts,
		duplicates = duplicates
	)
