import rhythmquiz.durations as dur
import rhythmquiz.notation
import rhythmquiz.rhythm


def test_token_labels () -> None:

	"""Dashes become spaces; triplets name their base value."""

	assert rhythmquiz.notation.token_label(dur.CROTCHET) == "crotchet"
	assert rhythmquiz.notation.token_label(dur.dotted_of(dur.MINIM)) == "dotted minim"
	assert rhythmquiz.notation.token_label(dur.triplet_group(dur.QUAVER)) == "Triplet (quaver)"


def test_describe_lists_bars () -> None:

	"""Each bar becomes one numbered line."""

	rhythm = rhythmquiz.rhythm.Rhythm(bars=((dur.MINIM, dur.MINIM), (dur.SEMIBREVE,)))

	assert rhythmquiz.notation.describe(rhythm) == [
		"Bar 1  minim   minim",
		"Bar 2  semibreve",
	]
