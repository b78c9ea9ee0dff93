"""Option quality benchmark.

Builds many questions per level and reports how often the engine had to fall
back: bars padded with demisemiquavers, required tokens trimmed, and option
sets that needed copies of the correct rhythm because too few distinct
distractors turned up.

Usage:
    python benchmarks/option_quality.py [--questions N] [--seed SEED]
                                        [--option-attempts N] [--level LEVEL]

Options:
    --questions N         Questions per level (default: 500)
    --seed SEED           Random seed (default: unseeded)
    --option-attempts N   Distractor budget per question (default: 200)
    --level LEVEL         Only measure this level (default: all built-in levels)
"""

import argparse
import logging
import random
import statistics

# Suppress engine logging during the benchmark; we want clean output.
logging.basicConfig(level=logging.ERROR)

import rhythmquiz.constants
import rhythmquiz.generator
import rhythmquiz.levels
import rhythmquiz.options

# ---------------------------------------------------------------------------


def _measure (level: str, questions: int, rng: random.Random, option_attempts: int) -> dict:

	gen = rhythmquiz.generator.RhythmGenerator(rng=rng)

	padded_rhythms = 0
	trimmed_rhythms = 0
	duplicated_sets = 0
	attempts = []

	for _ in range(questions):

		correct = gen.generate(level)
		option_set = rhythmquiz.options.build_options(correct, level, generator=gen, max_attempts=option_attempts)

		for option in option_set.options:
			padded_rhythms += option.padded_units > 0
			trimmed_rhythms += option.trimmed_tokens > 0

		duplicated_sets += option_set.duplicates > 0
		attempts.append(option_set.attempts)

	total_rhythms = questions * rhythmquiz.constants.OPTION_COUNT

	return {
		"padded": padded_rhythms / total_rhythms,
		"trimmed": trimmed_rhythms / total_rhythms,
		"duplicated": duplicated_sets / questions,
		"mean_attempts": statistics.mean(attempts),
		"max_attempts": max(attempts),
	}


def _print_report (level: str, result: dict) -> None:

	print(f"\n  {level}")
	print(f"  Rhythms padded        : {result['padded']:.2%}")
	print(f"  Rhythms trimmed       : {result['trimmed']:.2%}")
	print(f"  Sets with duplicates  : {result['duplicated']:.2%}")
	print(f"  Distractor attempts   : mean {result['mean_attempts']:.2f}, max {result['max_attempts']}")


def main () -> None:

	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--questions",       type=int, default=500,  help="Questions per level (default: 500)")
	parser.add_argument("--seed",            type=int, default=None, help="Random seed")
	parser.add_argument("--option-attempts", type=int, default=rhythmquiz.constants.MAX_OPTION_ATTEMPTS, help="Distractor budget per question")
	parser.add_argument("--level",           type=str, default=None, help="Only measure this level")
	args = parser.parse_args()

	levels = [args.level] if args.level else list(rhythmquiz.levels.LEVELS)
	rng = random.Random(args.seed)

	print(f"\nOption quality over {args.questions} questions per level")

	for level in levels:
		_print_report(level, _measure(level, args.questions, rng, args.option_attempts))

	print()


if __name__ == "__main__":
	main()
