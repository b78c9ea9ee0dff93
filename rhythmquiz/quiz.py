"""Question-and-answer session with a limited number of tries.

A :class:`QuizSession` owns the current :class:`~rhythmquiz.options.OptionSet`
and counts wrong answers. Front ends subscribe to ``"question"`` and
``"answer"`` events to redraw cards or show feedback::

    session = rhythmquiz.quiz.QuizSession(level="medium")
    session.on("answer", lambda result: print(rhythmquiz.quiz.feedback_message(result)))

    options = session.new_question()
    session.answer(2)
"""

import dataclasses
import logging
import typing

import rhythmquiz.constants
import rhythmquiz.generator
import rhythmquiz.options


logger = logging.getLogger(__name__)

EVENTS = ("question", "answer")

CallbackType = typing.Callable[..., typing.Any]


class QuizStateError (RuntimeError):

	"""
	Raised when an answer arrives with no open question.
	"""

	pass


@dataclasses.dataclass (frozen=True)
class AnswerResult:

	"""
	Outcome of one answer.
	"""

	selected_index: int
	correct: bool
	tries_remaining: int
	finished: bool
	correct_index: int


class QuizSession:

	"""
	Generates questions for one level and scores answers against them.
	"""

	def __init__ (
		self,
		level: str = "easy",
		generator: typing.Optional[rhythmquiz.generator.RhythmGenerator] = None,
		max_tries: int = rhythmquiz.constants.MAX_TRIES,
		option_attempts: int = rhythmquiz.constants.MAX_OPTION_ATTEMPTS
	) -> None:

		"""
		Create a session.

		Parameters:
			level: Starting level key
			generator: Rhythm generator (a fresh unseeded one when omitted)
			max_tries: Answers allowed per question
			option_attempts: Distractor budget passed to ``build_options``
		"""

		if max_tries < 1:
			raise ValueError("max_tries must be at least 1")

		self.generator = generator if generator is not None else rhythmquiz.generator.RhythmGenerator()
		self.generator.get_level(level)

		self.level = level
		self.max_tries = max_tries
		self.option_attempts = option_attempts

		self.current: typing.Optional[rhythmquiz.options.OptionSet] = None
		self.tries_remaining = 0
		self.questions_asked = 0
		self.questions_correct = 0

		self._listeners: typing.Dict[str, typing.List[CallbackType]] = {name: [] for name in EVENTS}


	def on (self, event_name: str, callback: CallbackType) -> None:

		"""
		Register a callback for ``"question"`` (receives the OptionSet) or ``"answer"`` (receives the AnswerResult).
		"""

		if event_name not in self._listeners:
			raise ValueError(f"Unknown event {event_name!r}")

		self._listeners[event_name].append(callback)


	def off (self, event_name: str, callback: CallbackType) -> None:

		"""
		Unregister a callback. Raises ``ValueError`` if it was not registered.
		"""

		if event_name not in self._listeners or callback not in self._listeners[event_name]:
			raise ValueError(f"Callback not registered for event {event_name!r}")

		self._listeners[event_name].remove(callback)


	def _emit (self, event_name: str, payload: typing.Any) -> None:

		for callback in list(self._listeners[event_name]):
			callback(payload)


	@property
	def is_open (self) -> bool:

		"""
		True while the current question can still be answered.
		"""

		return self.current is not None and self.tries_remaining > 0


	def set_level (self, level: str) -> None:

		"""
		Switch level for subsequent questions.
		"""

		self.generator.get_level(level)
		self.level = level


	def new_question (self) -> rhythmquiz.options.OptionSet:

		"""
		Discard the current question and build a new one.
		"""

		correct = self.generator.generate(self.level)

		self.current = rhythmquiz.options.build_options(
			correct,
			self.level,
			generator = self.generator,
			max_attempts = self.option_attempts
		)

		self.tries_remaining = self.max_tries
		self.questions_asked += 1

		if self.current.duplicates:
			logger.info(f"Question {self.questions_asked} has {self.current.duplicates} duplicate option(s)")

		self._emit("question", self.current)

		return self.current


	def answer (self, selected_index: int) -> AnswerResult:

		"""
		Score an answer for the open question.

		A correct answer, or a wrong one that uses the last try, closes the
		question.
		"""

		if self.current is None:
			raise QuizStateError("No question has been asked yet")

		if self.tries_remaining <= 0:
			raise QuizStateError("The current question is already finished")

		if not 0 <= selected_index < len(self.current.options):
			raise ValueError(f"Option index {selected_index} is out of range (0-{len(self.current.options) - 1})")

		correct = self.current.is_correct(selected_index)

		if correct:
			self.tries_remaining = 0
			self.questions_correct += 1

		else:
			self.tries_remaining -= 1

		result = AnswerResult(
			selected_index = selected_index,
			correct = correct,
			tries_remaining = self.tries_remaining,
			finished = self.tries_remaining == 0,
			correct_index = self.current.correct_index
		)

		self._emit("answer", result)

		return result


def feedback_message (result: AnswerResult) -> str:

	"""
	Return the message a front end shows after an answer.
	"""

	if result.correct:
		return "Correct!"

	if result.tries_remaining > 0:
		word = "try" if result.tries_remaining == 1 else "tries"
		return f"Not quite. {result.tries_remaining} {word} left."

	return f"Out of tries! The correct option was option {result.correct_index + 1}."
