import random
import typing

import mido
import pytest


class FakeMidiOut:

	"""Minimal MIDI output stub that records what it is sent."""

	def __init__ (self, name: typing.Optional[str] = None) -> None:

		self.name = name
		self.sent: typing.List[mido.Message] = []
		self.closed = False

	def send (self, message: mido.Message) -> None:

		"""Record outgoing MIDI messages."""

		self.sent.append(message)

	def close (self) -> None:

		"""Mark the fake device closed."""

		self.closed = True


class ScriptedRandom:

	"""
	A random source that replays a fixed list of values, then repeats the last one.
	"""

	def __init__ (self, values: typing.Sequence[float]) -> None:

		self.values = list(values)
		self.calls = 0

	def random (self) -> float:

		"""Return the next scripted value."""

		value = self.values[min(self.calls, len(self.values) - 1)]
		self.calls += 1
		return value


# Module-level reference so tests can reach the most recently opened FakeMidiOut.
_current_fake_output: typing.Optional[FakeMidiOut] = None


def _fake_open_output (name: typing.Optional[str] = None) -> FakeMidiOut:

	"""Return a fake MIDI output regardless of the name."""

	global _current_fake_output
	fake = FakeMidiOut(name)
	_current_fake_output = fake
	return fake


@pytest.fixture
def patch_midi (monkeypatch: pytest.MonkeyPatch) -> typing.Callable[[], typing.Optional[FakeMidiOut]]:

	"""Patch mido to use a fake MIDI output; returns a getter for the last opened port."""

	monkeypatch.setattr(mido, "open_output", _fake_open_output)
	return lambda: _current_fake_output


@pytest.fixture
def zero_rng () -> ScriptedRandom:

	"""A random source that always returns 0.0."""

	return ScriptedRandom([0.0])


@pytest.fixture
def rng () -> random.Random:

	"""A seeded random source for repeatable generation."""

	return random.Random(1234)
