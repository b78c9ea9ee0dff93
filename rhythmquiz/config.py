"""YAML configuration.

All keys are optional::

    quiz:
      level: medium
      max_tries: 3
      seed: 42
    generation:
      fill_attempts: 1000
      option_attempts: 200
    playback:
      bpm: 96
      midi_output: "IAC Driver Bus 1"
    levels:
      syncopation:
        allowed: [crotchet, quaver, semiquaver]
        required: [dotted]
        allow_dotted: true

Entries under ``levels`` are added to (or replace) the built-in
easy/medium/difficult levels.
"""

import dataclasses
import logging
import os
import typing

import yaml

import rhythmquiz.constants
import rhythmquiz.levels


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.yaml"


@dataclasses.dataclass
class QuizConfig:

	"""
	Settings for a quiz run.
	"""

	level: str = "easy"
	max_tries: int = rhythmquiz.constants.MAX_TRIES
	seed: typing.Optional[int] = None
	fill_attempts: int = rhythmquiz.constants.MAX_FILL_ATTEMPTS
	option_attempts: int = rhythmquiz.constants.MAX_OPTION_ATTEMPTS
	bpm: float = rhythmquiz.constants.DEFAULT_BPM
	midi_output: typing.Optional[str] = None
	levels: typing.Dict[str, rhythmquiz.levels.LevelPolicy] = dataclasses.field(default_factory=lambda: dict(rhythmquiz.levels.LEVELS))

	def validate (self) -> None:

		"""
		Raise ``ValueError`` for inconsistent settings.
		"""

		if self.level not in self.levels:
			raise rhythmquiz.levels.InvalidLevelError(self.level, self.levels)

		if self.max_tries < 1:
			raise ValueError("max_tries must be at least 1")

		if self.fill_attempts < 0 or self.option_attempts < 0:
			raise ValueError("Attempt budgets cannot be negative")

		if self.bpm <= 0:
			raise ValueError("BPM must be positive")


def _section (data: typing.Mapping[str, typing.Any], name: str) -> typing.Mapping[str, typing.Any]:

	section = data.get(name) or {}

	if not isinstance(section, typing.Mapping):
		raise ValueError(f"Config section {name!r} must be a mapping")

	return section


def config_from_mapping (data: typing.Optional[typing.Mapping[str, typing.Any]]) -> QuizConfig:

	"""
	Build a validated :class:`QuizConfig` from parsed YAML.
	"""

	config = QuizConfig()

	if not data:
		return config

	if not isinstance(data, typing.Mapping):
		raise ValueError("Config root must be a mapping")

	quiz = _section(data, "quiz")
	generation = _section(data, "generation")
	playback = _section(data, "playback")
	levels = _section(data, "levels")

	for name, mapping in levels.items():
		config.levels[str(name)] = rhythmquiz.levels.policy_from_mapping(str(name), mapping)

	try:
		config.level = str(quiz.get("level", config.level))
		config.max_tries = int(quiz.get("max_tries", config.max_tries))
		seed = quiz.get("seed", config.seed)
		config.seed = int(seed) if seed is not None else None
		config.fill_attempts = int(generation.get("fill_attempts", config.fill_attempts))
		config.option_attempts = int(generation.get("option_attempts", config.option_attempts))
		config.bpm = float(playback.get("bpm", config.bpm))

	except (TypeError, ValueError) as e:
		raise ValueError(f"Invalid config value: {e}") from e

	config.midi_output = playback.get("midi_output", config.midi_output)

	config.validate()

	return config


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> QuizConfig:

	"""
	Load configuration from a YAML file, falling back to defaults when it is missing.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return QuizConfig()

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f)

	return config_from_mapping(data)
