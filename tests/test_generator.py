import random

import pytest

import conftest
import rhythmquiz.bar_filler
import rhythmquiz.durations as dur
import rhythmquiz.generator
import rhythmquiz.levels


@pytest.mark.parametrize("level", ["easy", "medium", "difficult"])
def test_every_bar_is_full (level: str) -> None:

	"""All generated bars sum to exactly 32 units."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(100))

	for _ in range(100):
		rhythm = gen.generate(level)
		assert len(rhythm.bars) == 2
		assert rhythm.units_per_bar() == [32, 32]


def test_easy_uses_only_easy_values () -> None:

	"""Easy rhythms contain no dotted values, triplets or short values."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(5))
	allowed = {"semibreve", "minim", "crotchet", "quaver"}

	for _ in range(100):
		rhythm = gen.generate("easy")
		for token in rhythm.tokens:
			assert token.name in allowed
			assert not token.is_dotted
			assert not token.is_triplet


def test_easy_contains_every_required_value () -> None:

	"""All four easy values appear somewhere in each rhythm."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(6))

	for _ in range(100):
		names = {token.name for token in gen.generate("easy").tokens}
		assert {"semibreve", "minim", "crotchet", "quaver"} <= names


def test_medium_contains_dotted_and_triplet () -> None:

	"""Each medium rhythm has at least one dotted value and one triplet group."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(7))

	for _ in range(200):
		tokens = gen.generate("medium").tokens
		assert any(token.is_dotted for token in tokens)
		assert any(token.is_triplet for token in tokens)


def test_medium_keeps_every_value_but_the_semibreve () -> None:

	"""Medium rhythms always contain a minim, crotchet, quaver and semiquaver alongside the features."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(12))

	for _ in range(300):
		names = {token.name for token in gen.generate("medium").tokens}
		assert {"minim", "crotchet", "quaver", "semiquaver", "dotted-minim", "triplet-quaver"} <= names


def test_distribute_medium_places_six_of_seven () -> None:

	"""Whichever bars the features land in, only the semibreve is left out."""

	required = rhythmquiz.levels.resolve_required_tokens(rhythmquiz.levels.MEDIUM, random.Random(0))
	rng = random.Random(13)

	for _ in range(300):
		buckets = rhythmquiz.generator.distribute_required(required, rng)
		placed = [token for bucket in buckets for token in bucket]
		assert len(placed) == 6
		assert dur.SEMIBREVE not in placed
		assert all(sum(token.units for token in bucket) <= 32 for bucket in buckets)


def test_difficult_stays_within_catalog () -> None:

	"""Difficult rhythms only use catalog base values."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(8))

	for _ in range(100):
		for token in gen.generate("difficult").tokens:
			assert token.name in dur.CATALOG


def test_zero_source_first_bar_is_one_semibreve (zero_rng: conftest.ScriptedRandom) -> None:

	"""With every draw at 0.0 the first bar of an easy rhythm is a single semibreve."""

	rhythm = rhythmquiz.generator.RhythmGenerator(rng=zero_rng).generate("easy")

	assert rhythm.bars[0] == (dur.SEMIBREVE,)
	assert sum(token.units for token in rhythm.bars[0]) == 32

	# The first bar is complete without any padding.
	buckets = rhythmquiz.generator.distribute_required(rhythmquiz.levels.resolve_required_tokens(rhythmquiz.levels.EASY, zero_rng), zero_rng)
	fill = rhythmquiz.bar_filler.fill_bar(buckets[0], rhythmquiz.levels.allowed_pool(rhythmquiz.levels.EASY), zero_rng)

	assert buckets[0] == [dur.SEMIBREVE]
	assert fill.tokens == [dur.SEMIBREVE]
	assert fill.padded_units == 0
	assert fill.attempts == 0


def test_unknown_level_raises () -> None:

	"""An unknown level is a programming error."""

	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(1))

	with pytest.raises(rhythmquiz.levels.InvalidLevelError):
		gen.generate("impossible")


def test_generate_for_level_wrapper () -> None:

	"""The module-level helper builds a well-formed rhythm."""

	rhythm = rhythmquiz.generator.generate_for_level("medium", rng=random.Random(3))

	assert rhythm.is_well_formed()


def test_custom_level () -> None:

	"""Generators accept their own level table."""

	level = rhythmquiz.levels.LevelPolicy(name="crotchets", allowed=("crotchet",), required=("crotchet",))
	gen = rhythmquiz.generator.RhythmGenerator(rng=random.Random(1), levels={"crotchets": level})

	rhythm = gen.generate("crotchets")

	assert rhythm.bars == ((dur.CROTCHET,) * 4, (dur.CROTCHET,) * 4)
	assert rhythm.padded_units == 0


def test_placement_order_puts_features_first () -> None:

	"""Dotted and triplet tokens are placed before plain ones, which go longest first."""

	triplet = dur.triplet_group(dur.QUAVER)
	dotted = dur.dotted_of(dur.MINIM)

	order = rhythmquiz.generator.placement_order([dur.QUAVER, dur.SEMIBREVE, triplet, dur.MINIM, dotted])

	assert order == [triplet, dotted, dur.SEMIBREVE, dur.MINIM, dur.QUAVER]


def test_distribute_moves_tokens_that_do_not_fit (zero_rng: conftest.ScriptedRandom) -> None:

	"""A token that does not fit in its chosen bar goes to the other one."""

	buckets = rhythmquiz.generator.distribute_required([dur.SEMIBREVE, dur.MINIM, dur.CROTCHET], zero_rng)

	assert buckets == [[dur.SEMIBREVE], [dur.MINIM, dur.CROTCHET]]


def test_distribute_drops_tokens_with_no_room () -> None:

	"""A token that fits in neither bar is left out rather than split."""

	buckets = rhythmquiz.generator.distribute_required([dur.SEMIBREVE] * 3, random.Random(1))

	assert sorted(len(bucket) for bucket in buckets) == [1, 1]


def test_distribute_uses_both_bars () -> None:

	"""Small required tokens land in either bar."""

	rng = random.Random(4)
	seen = set()

	for _ in range(50):
		buckets = rhythmquiz.generator.distribute_required([dur.QUAVER], rng)
		seen.add(0 if buckets[0] else 1)

	assert seen == {0, 1}
