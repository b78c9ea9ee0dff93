"""Plain-text labels for tokens and rhythms.

Used by the terminal quiz, and by any front end that cannot draw notation.
"""

import typing

import rhythmquiz.durations
import rhythmquiz.rhythm


def token_label (token: rhythmquiz.durations.DurationType) -> str:

	"""Return a readable name such as ``dotted minim`` or ``Triplet (quaver)``."""

	if token.is_triplet:
		base = token.base.name if token.base is not None else "quaver"
		return f"Triplet ({base})"

	return (token.name or "note").replace("-", " ")


def describe (rhythm: rhythmquiz.rhythm.Rhythm, separator: str = "   ") -> typing.List[str]:

	"""
	Return one line per bar, e.g. ``Bar 1  minim   crotchet   crotchet``.
	"""

	return [
		f"Bar {index + 1}  " + separator.join(token_label(token) for token in bar)
		for index, bar in enumerate(rhythm.bars)
	]
