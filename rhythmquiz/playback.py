"""Metronome-style playback of rhythms.

The engine only knows unit lengths; this module turns them into time at a
given tempo. Each plain token is one click lasting ``units`` units, and each
triplet group is three equal clicks sharing the group's units. The first
click of every bar is accented.

Three outputs are available:

- :func:`click_schedule`: a plain list of :class:`Click` records
- :func:`rhythm_to_midi` / :func:`save_midi`: a standard MIDI file
- :class:`MetronomePlayer`: real-time playback on a MIDI output port
"""

import dataclasses
import logging
import time
import typing

import mido

import rhythmquiz.constants
import rhythmquiz.rhythm


logger = logging.getLogger(__name__)


class PlaybackError (Exception):
	pass


@dataclasses.dataclass (frozen=True)
class Click:

	"""
	One audible event: start and length in seconds.
	"""

	time: float
	duration: float
	accent: bool
	bar: int


def seconds_per_unit (bpm: float) -> float:

	"""
	Return the length of one unit (a demisemiquaver) at ``bpm`` crotchets per minute.
	"""

	if bpm <= 0:
		raise ValueError("BPM must be positive")

	return (60.0 / bpm) / rhythmquiz.constants.UNITS_PER_QUARTER


def _unit_events (rhythm: rhythmquiz.rhythm.Rhythm) -> typing.Iterator[typing.Tuple[float, float, bool, int]]:

	"""
	Yield ``(start_units, length_units, accent, bar_index)`` for every audible event.
	"""

	cursor = 0.0

	for bar_index, bar in enumerate(rhythm.bars):

		first_in_bar = True

		for token in bar:

			length = token.sub_units

			for sub_index in range(token.sub_count):
				yield cursor, length, first_in_bar and sub_index == 0, bar_index
				cursor += length

			first_in_bar = False


def click_schedule (rhythm: rhythmquiz.rhythm.Rhythm, bpm: float = rhythmquiz.constants.DEFAULT_BPM) -> typing.List[Click]:

	"""
	Return the clicks of a rhythm with times in seconds from the start.
	"""

	spu = seconds_per_unit(bpm)

	return [
		Click(time=start * spu, duration=length * spu, accent=accent, bar=bar)
		for start, length, accent, bar in _unit_events(rhythm)
	]


def total_duration (rhythm: rhythmquiz.rhythm.Rhythm, bpm: float = rhythmquiz.constants.DEFAULT_BPM) -> float:

	"""
	Return the playing time of a rhythm in seconds.
	"""

	return sum(token.units for token in rhythm.tokens) * seconds_per_unit(bpm)


def _click_message (accent: bool, on: bool) -> mido.Message:

	note = rhythmquiz.constants.CLICK_NOTE_ACCENT if accent else rhythmquiz.constants.CLICK_NOTE_NORMAL
	velocity = rhythmquiz.constants.CLICK_VELOCITY_ACCENT if accent else rhythmquiz.constants.CLICK_VELOCITY_NORMAL

	return mido.Message(
		'note_on' if on else 'note_off',
		channel = rhythmquiz.constants.MIDI_PERCUSSION_CHANNEL,
		note = note,
		velocity = velocity if on else 0
	)


def rhythm_to_midi (rhythm: rhythmquiz.rhythm.Rhythm, bpm: float = rhythmquiz.constants.DEFAULT_BPM) -> mido.MidiFile:

	"""
	Render a rhythm as a single-track type 1 MIDI file of percussion clicks.

	Each click lasts the full length of its note, so note-off and the next
	note-on share a tick.
	"""

	if bpm <= 0:
		raise ValueError("BPM must be positive")

	ticks_per_unit = rhythmquiz.constants.MIDI_TICKS_PER_BEAT / rhythmquiz.constants.UNITS_PER_QUARTER

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = rhythmquiz.constants.MIDI_TICKS_PER_BEAT
	track = mido.MidiTrack()
	mid.tracks.append(track)

	track.append(mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(bpm), time=0))
	track.append(mido.MetaMessage('time_signature', numerator=rhythmquiz.constants.BEATS_PER_BAR, denominator=4, time=0))

	# (tick, order, message): note-offs sort before note-ons on the same tick.
	events: typing.List[typing.Tuple[int, int, mido.Message]] = []

	for start, length, accent, _ in _unit_events(rhythm):
		on_tick = int(round(start * ticks_per_unit))
		off_tick = int(round((start + length) * ticks_per_unit))
		events.append((on_tick, 1, _click_message(accent, on=True)))
		events.append((off_tick, 0, _click_message(accent, on=False)))

	events.sort(key=lambda event: (event[0], event[1]))

	last_tick = 0

	for tick, _, message in events:
		message.time = max(0, tick - last_tick)
		track.append(message)
		last_tick = tick

	track.append(mido.MetaMessage('end_of_track', time=0))

	return mid


def save_midi (rhythm: rhythmquiz.rhythm.Rhythm, filename: str, bpm: float = rhythmquiz.constants.DEFAULT_BPM) -> None:

	"""
	Write a rhythm to ``filename`` as a MIDI file.
	"""

	mid = rhythm_to_midi(rhythm, bpm)

	try:
		mid.save(filename)

	except OSError as e:
		raise PlaybackError(f"Failed to save MIDI file {filename}: {e}") from e

	logger.info(f"Saved {filename}")


class MetronomePlayer:

	"""
	Plays rhythms as clicks on a MIDI output port.

	All playback state (the open port and the playing flag) lives on the
	player; nothing is shared between players.
	"""

	def __init__ (self, output_device_name: typing.Optional[str] = None, bpm: float = rhythmquiz.constants.DEFAULT_BPM) -> None:

		"""
		Open the output port (the backend's default port when no name is given).
		"""

		seconds_per_unit(bpm)

		self.bpm = bpm
		self.output_device_name = output_device_name
		self.playing = False

		try:
			self.port = mido.open_output(output_device_name)

		except (OSError, IOError) as e:
			raise PlaybackError(f"Failed to open MIDI output {output_device_name!r}: {e}") from e

		logger.info(f"Opened MIDI output: {output_device_name or 'default'}")


	def set_bpm (self, bpm: float) -> None:

		"""
		Change the tempo for subsequent playback.
		"""

		seconds_per_unit(bpm)
		self.bpm = bpm


	def play (self, rhythm: rhythmquiz.rhythm.Rhythm) -> float:

		"""
		Play a rhythm, blocking until the last click ends. Returns the elapsed seconds.
		"""

		clicks = click_schedule(rhythm, self.bpm)

		# (time, order, message): note-offs sort before note-ons at the same instant.
		timeline: typing.List[typing.Tuple[float, int, mido.Message]] = []

		for click in clicks:
			timeline.append((click.time, 1, _click_message(click.accent, on=True)))
			timeline.append((click.time + min(click.duration, rhythmquiz.constants.CLICK_LENGTH_SECONDS), 0, _click_message(click.accent, on=False)))

		timeline.sort(key=lambda event: (event[0], event[1]))

		self.playing = True
		start = time.perf_counter()

		try:

			for at, _, message in timeline:

				if not self.playing:
					break

				delay = at - (time.perf_counter() - start)

				if delay > 0:
					time.sleep(delay)

				# stop() may have closed the port while we slept.
				if not self.playing:
					break

				self.port.send(message)

		except (OSError, IOError, ValueError) as e:
			raise PlaybackError(f"MIDI send failed: {e}") from e

		finally:
			self.playing = False

		return time.perf_counter() - start


	def stop (self) -> None:

		"""
		Stop playback, silence the click notes and close the port.
		"""

		self.playing = False

		try:
			for accent in (True, False):
				self.port.send(_click_message(accent, on=False))
			self.port.close()

		except (OSError, IOError):
			logger.exception("MIDI stop failed (device may be disconnected)")
