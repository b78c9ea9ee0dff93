"""
rhythmquiz - two-bar rhythm questions for ear training.

Each question is a short rhythm in 4/4 plus three plausible alternatives.
The engine fills bars with note values drawn from a difficulty level's
palette, makes sure the level's signature values appear, and only keeps
distractors whose shape differs from everything already chosen.

Levels:

- **easy** - semibreve, minim, crotchet and quaver, all four in every question.
- **medium** - adds semiquavers, dotted values and quaver triplets; every
  question contains at least one dotted value and one triplet group.
- **difficult** - all six values down to the demisemiquaver, with a fresh
  random half of them required in each question.

Rhythms are measured in units (1 unit = one demisemiquaver, 32 units per
bar), so playback only needs a tempo to turn them into clicks.

Minimal example:

    ```python
    import random
    import rhythmquiz

    gen = rhythmquiz.RhythmGenerator(rng=random.Random(42))
    correct = gen.generate("medium")
    question = rhythmquiz.build_options(correct, "medium", generator=gen)

    question.correct_index          # 0-3
    rhythmquiz.canonical_key(question.correct) == rhythmquiz.canonical_key(correct)
    ```

Package-level exports: ``RhythmGenerator``, ``build_options``,
``canonical_key``, ``QuizSession``, ``InvalidLevelError``.
"""

import rhythmquiz.generator
import rhythmquiz.levels
import rhythmquiz.options
import rhythmquiz.quiz
import rhythmquiz.rhythm


RhythmGenerator = rhythmquiz.generator.RhythmGenerator
generate_for_level = rhythmquiz.generator.generate_for_level
build_options = rhythmquiz.options.build_options
canonical_key = rhythmquiz.rhythm.canonical_key
QuizSession = rhythmquiz.quiz.QuizSession
InvalidLevelError = rhythmquiz.levels.InvalidLevelError
