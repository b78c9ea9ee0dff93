"""Timing, budget and MIDI constants.

All rhythmic lengths are expressed in **units**, where one unit is a
demisemiquaver (thirty-second note):

- `UNITS_PER_QUARTER = 8`: one crotchet beat
- `UNITS_PER_BAR = 32`: one bar of 4/4
- `BARS_PER_RHYTHM = 2`: every question is two bars long

The retry budgets bound the two best-effort loops in the engine: filling a bar
with random tokens and collecting distinct distractors.
"""

# Units

UNITS_PER_QUARTER = 8
BEATS_PER_BAR = 4
UNITS_PER_BAR = UNITS_PER_QUARTER * BEATS_PER_BAR
BARS_PER_RHYTHM = 2
TRIPLET_SUB_NOTES = 3

# Retry budgets

MAX_FILL_ATTEMPTS = 1000
MAX_OPTION_ATTEMPTS = 200
OPTION_COUNT = 4
MAX_TRIES = 3

# Playback

DEFAULT_BPM = 96
MIDI_TICKS_PER_BEAT = 480
MIDI_PERCUSSION_CHANNEL = 9		# GM channel 10, 0-indexed
CLICK_NOTE_ACCENT = 76			# GM hi wood block
CLICK_NOTE_NORMAL = 77			# GM low wood block
CLICK_VELOCITY_ACCENT = 120
CLICK_VELOCITY_NORMAL = 90
CLICK_LENGTH_SECONDS = 0.15
