"""Terminal rhythm quiz.

Usage::

    python -m rhythmquiz --level medium --midi-out "IAC Driver Bus 1"
    python -m rhythmquiz --level difficult --export ./answers --seed 7

Each question prints four two-bar options as text. The correct rhythm is
played on a MIDI port (``--play`` / ``--midi-out``) or written to a MIDI file
(``--export``); type the option number to answer, ``p`` to replay, ``q`` to
quit.
"""

import argparse
import logging
import os
import typing

import rhythmquiz.config
import rhythmquiz.constants
import rhythmquiz.generator
import rhythmquiz.notation
import rhythmquiz.playback
import rhythmquiz.quiz
import rhythmquiz.sequence_utils


logger = logging.getLogger(__name__)


def build_parser () -> argparse.ArgumentParser:

	"""
	Return the command-line parser.
	"""

	parser = argparse.ArgumentParser(prog="rhythmquiz", description="Rhythm ear-training quiz")
	parser.add_argument("--config", default=rhythmquiz.config.DEFAULT_CONFIG_PATH, help="YAML config file (default: config.yaml)")
	parser.add_argument("--level", help="Difficulty level (easy, medium, difficult or a configured level)")
	parser.add_argument("--seed", type=int, help="Seed for repeatable questions")
	parser.add_argument("--bpm", type=float, help="Playback tempo in crotchets per minute")
	parser.add_argument("--play", action="store_true", help="Play the rhythm on the default MIDI output")
	parser.add_argument("--midi-out", help="Play the rhythm on this MIDI output")
	parser.add_argument("--export", metavar="DIR", help="Write each question's rhythm to DIR as a MIDI file")
	parser.add_argument("--questions", type=int, default=0, help="Stop after this many questions (default: unlimited)")
	return parser


def run_quiz (
	session: rhythmquiz.quiz.QuizSession,
	input_fn: typing.Optional[typing.Callable[[str], str]] = None,
	output_fn: typing.Optional[typing.Callable[[str], None]] = None,
	player: typing.Optional[rhythmquiz.playback.MetronomePlayer] = None,
	export_dir: typing.Optional[str] = None,
	bpm: float = rhythmquiz.constants.DEFAULT_BPM,
	questions: int = 0
) -> int:

	"""
	Run questions until the user quits or ``questions`` have been asked.

	Returns the number of questions answered correctly.
	"""

	if input_fn is None:
		input_fn = input

	if output_fn is None:
		output_fn = print

	while questions <= 0 or session.questions_asked < questions:

		option_set = session.new_question()

		output_fn(f"\nQuestion {session.questions_asked} ({session.level})")

		for index, option in enumerate(option_set.options):
			output_fn(f"Option {index + 1}")
			for line in rhythmquiz.notation.describe(option):
				output_fn(f"  {line}")

		if export_dir:
			filename = os.path.join(export_dir, f"question_{session.questions_asked:03d}.mid")
			rhythmquiz.playback.save_midi(option_set.correct, filename, bpm)
			output_fn(f"Rhythm written to {filename}")

		if player is not None:
			player.play(option_set.correct)

		while session.is_open:

			reply = input_fn(f"Your answer (1-{len(option_set.options)}, p to replay, q to quit): ").strip().lower()

			if reply == "q":
				return session.questions_correct

			if reply == "p":
				if player is not None:
					player.play(option_set.correct)
				else:
					output_fn("No MIDI output; use --play or --midi-out to hear the rhythm.")
				continue

			try:
				selected = int(reply) - 1
				result = session.answer(selected)

			except ValueError:
				output_fn(f"Enter a number between 1 and {len(option_set.options)}.")
				continue

			output_fn(rhythmquiz.quiz.feedback_message(result))

	return session.questions_correct


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Entry point for ``python -m rhythmquiz``.
	"""

	logging.basicConfig(level=logging.INFO)

	args = build_parser().parse_args(argv)
	config = rhythmquiz.config.load_config(args.config)

	if args.level is not None:
		config.level = args.level

	if args.seed is not None:
		config.seed = args.seed

	if args.bpm is not None:
		config.bpm = args.bpm

	if args.midi_out is not None:
		config.midi_output = args.midi_out

	config.validate()

	generator = rhythmquiz.generator.RhythmGenerator(
		rng = rhythmquiz.sequence_utils.make_rng(config.seed),
		levels = config.levels,
		fill_attempts = config.fill_attempts
	)

	session = rhythmquiz.quiz.QuizSession(
		level = config.level,
		generator = generator,
		max_tries = config.max_tries,
		option_attempts = config.option_attempts
	)

	player: typing.Optional[rhythmquiz.playback.MetronomePlayer] = None

	if args.play or config.midi_output:
		try:
			player = rhythmquiz.playback.MetronomePlayer(config.midi_output, bpm=config.bpm)
		except rhythmquiz.playback.PlaybackError as e:
			logger.warning(f"{e}. Continuing without audio.")

	if args.export:
		os.makedirs(args.export, exist_ok=True)

	try:
		score = run_quiz(session, player=player, export_dir=args.export, bpm=config.bpm, questions=args.questions)
		print(f"\nScore: {score}/{session.questions_asked}")

	except (KeyboardInterrupt, EOFError):
		print()

	finally:
		if player is not None:
			player.stop()


if __name__ == "__main__":
	main()
