import itertools
import random
import typing

import pytest

import rhythmquiz.durations as dur
import rhythmquiz.generator
import rhythmquiz.levels
import rhythmquiz.options
import rhythmquiz.rhythm


class ScriptedGenerator (rhythmquiz.generator.RhythmGenerator):

	"""
	Generator test double that returns prepared rhythms in turn, repeating the last one.
	"""

	def __init__ (self, rhythms: typing.Sequence[rhythmquiz.rhythm.Rhythm]) -> None:

		super().__init__(rng=random.Random(0))
		self.rhythms = list(rhythms)
		self.calls = 0

	def generate (self, level_key: str) -> rhythmquiz.rhythm.Rhythm:

		self.get_level(level_key)
		rhythm = self.rhythms[min(self.calls, len(self.rhythms) - 1)]
		self.calls += 1
		return rhythm.copy()


def _bars (*bars: typing.Sequence[dur.DurationType]) -> rhythmquiz.rhythm.Rhythm:

	return rhythmquiz.rhythm.Rhythm(bars=tuple(tuple(bar) for bar in bars))


SEMIBREVES = _bars([dur.SEMIBREVE], [dur.SEMIBREVE])
MINIMS = _bars([dur.MINIM, dur.MINIM], [dur.SEMIBREVE])
CROTCHETS = _bars([dur.CROTCHET] * 4, [dur.SEMIBREVE])
QUAVERS = _bars([dur.QUAVER] * 8, [dur.SEMIBREVE])


@pytest.mark.parametrize("level", ["easy", "medium", "difficult"])
def test_four_options_with_correct_answer (level: str) -> None:

	"""The option set always has four entries and points at the correct rhythm."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(21))

	for _ in range(20):
		correct = gen.generate(level)
		option_set = rhythmquiz.options.build_options(correct, level, generator=gen)

		assert len(option_set.options) == 4
		assert 0 <= option_set.correct_index <= 3
		assert rhythmquiz.rhythm.canonical_key(option_set.correct) == rhythmquiz.rhythm.canonical_key(correct)


@pytest.mark.parametrize("level", ["easy", "medium", "difficult"])
def test_options_are_distinct (level: str) -> None:

	"""Without budget exhaustion all four options have different shapes."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(22))

	for _ in range(20):
		option_set = rhythmquiz.options.build_options(gen.generate(level), level, generator=gen)
		keys = [rhythmquiz.rhythm.canonical_key(option) for option in option_set.options]

		assert option_set.duplicates == 0
		assert len(set(keys)) == 4


def test_duplicate_candidates_are_skipped () -> None:

	"""Candidates already seen are rejected until new shapes turn up."""

	gen = ScriptedGenerator([SEMIBREVES, SEMIBREVES, MINIMS, MINIMS, CROTCHETS, QUAVERS])
	option_set = rhythmquiz.options.build_options(SEMIBREVES, "easy", generator=gen)

	keys = {rhythmquiz.rhythm.canonical_key(option) for option in option_set.options}

	assert option_set.attempts == 6
	assert option_set.duplicates == 0
	assert keys == {rhythmquiz.rhythm.canonical_key(r) for r in (SEMIBREVES, MINIMS, CROTCHETS, QUAVERS)}


def test_exhausted_budget_duplicates_correct_answer () -> None:

	"""When every candidate repeats the answer, remaining slots are copies of it."""

	gen = ScriptedGenerator([SEMIBREVES])
	option_set = rhythmquiz.options.build_options(SEMIBREVES, "easy", generator=gen, max_attempts=25)

	assert option_set.attempts == 25
	assert option_set.duplicates == 3
	assert all(rhythmquiz.rhythm.same_shape(option, SEMIBREVES) for option in option_set.options)
	assert len({id(option) for option in option_set.options}) == 4


def test_duplication_only_after_budget () -> None:

	"""A late distinct candidate is still accepted if it arrives within the budget."""

	gen = ScriptedGenerator([SEMIBREVES] * 10 + [MINIMS])
	option_set = rhythmquiz.options.build_options(SEMIBREVES, "easy", generator=gen, max_attempts=15)

	assert option_set.attempts == 15
	assert option_set.duplicates == 2
	assert any(rhythmquiz.rhythm.same_shape(option, MINIMS) for option in option_set.options)


def test_correct_position_is_randomised () -> None:

	"""The correct answer can appear in any of the four slots."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(23))
	positions = {rhythmquiz.options.build_options(gen.generate("easy"), "easy", generator=gen).correct_index for _ in range(60)}

	assert positions == {0, 1, 2, 3}


def test_unknown_level_raises () -> None:

	"""An unknown level fails before any generation."""

	with pytest.raises(rhythmquiz.levels.InvalidLevelError):
		rhythmquiz.options.build_options(SEMIBREVES, "expert", rng=random.Random(1))


def test_is_correct () -> None:

	"""Index comparison is a plain equality."""

	assert rhythmquiz.options.is_correct(2, 2)
	assert not rhythmquiz.options.is_correct(1, 2)


def test_option_set_is_correct () -> None:

	"""The option set answers for its own correct index."""

	gen = ScriptedGenerator([MINIMS, CROTCHETS, QUAVERS])
	option_set = rhythmquiz.options.build_options(SEMIBREVES, "easy", generator=gen)

	results = [option_set.is_correct(i) for i in range(4)]

	assert results.count(True) == 1
	assert results[option_set.correct_index]


def test_every_ordering_is_possible () -> None:

	"""The final shuffle can produce any permutation of the four options."""

	rng = random.Random(24)
	seen = set()

	for _ in range(400):
		gen = ScriptedGenerator([MINIMS, CROTCHETS, QUAVERS])
		option_set = rhythmquiz.options.build_options(SEMIBREVES, "easy", generator=gen, rng=rng)
		seen.add(tuple(rhythmquiz.rhythm.canonical_key(option) for option in option_set.options))

	assert len(seen) == len(list(itertools.permutations(range(4))))
