import logging
import os
import random

import rhythmquiz
import rhythmquiz.notation
import rhythmquiz.playback

logging.basicConfig(level=logging.INFO)

OUTPUT_DIR = "questions"
BPM = 96

# A fixed seed makes the same questions every run.
generator = rhythmquiz.RhythmGenerator(rng=random.Random(2024))

os.makedirs(OUTPUT_DIR, exist_ok=True)

for level in ("easy", "medium", "difficult"):

	correct = generator.generate(level)
	question = rhythmquiz.build_options(correct, level, generator=generator)

	print(f"\n{level} - correct option is {question.correct_index + 1}")

	for index, option in enumerate(question.options):
		marker = "*" if question.is_correct(index) else " "
		print(f"{marker} Option {index + 1}")
		for line in rhythmquiz.notation.describe(option):
			print(f"    {line}")

	# Every option as its own file, so the answer can be compared by ear.
	for index, option in enumerate(question.options):
		rhythmquiz.playback.save_midi(option, os.path.join(OUTPUT_DIR, f"{level}_option_{index + 1}.mid"), bpm=BPM)
