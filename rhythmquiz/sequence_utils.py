"""Random selection helpers driven by a unit-interval random source.

Every helper takes an explicit ``rng`` and only ever calls ``rng.random()``,
so a ``random.Random`` instance, a seeded one, or a scripted test double that
returns fixed values all work interchangeably.
"""

import random
import typing

T = typing.TypeVar("T")


@typing.runtime_checkable
class RandomSource (typing.Protocol):

	"""
	Anything that yields uniform floats in ``[0, 1)``.
	"""

	def random (self) -> float:

		...


def make_rng (seed: typing.Optional[int] = None) -> random.Random:

	"""Return a fresh ``random.Random``, seeded when ``seed`` is given."""

	return random.Random(seed)


def random_index (n: int, rng: RandomSource) -> int:

	"""Return a uniform index in ``range(n)``.

	Parameters:
		n: Number of slots (must be positive)
		rng: Random source
	"""

	if n <= 0:
		raise ValueError("n must be positive")

	# Clamp in case a source returns exactly 1.0.
	return min(int(rng.random() * n), n - 1)


def pick (items: typing.Sequence[T], rng: RandomSource) -> T:

	"""Pick one item uniformly at random."""

	if not items:
		raise ValueError("Cannot pick from an empty sequence")

	return items[random_index(len(items), rng)]


def coin (rng: RandomSource) -> int:

	"""Return 0 or 1 with equal probability."""

	return 0 if rng.random() < 0.5 else 1


def shuffle (items: typing.Iterable[T], rng: RandomSource) -> typing.List[T]:

	"""Return a uniformly permuted copy of ``items`` (Fisher-Yates).

	Example:
		```python
		order = rhythmquiz.sequence_utils.shuffle([0, 1, 2, 3], rng)
		```
	"""

	result = list(items)

	for i in range(len(result) - 1, 0, -1):
		j = random_index(i + 1, rng)
		result[i], result[j] = result[j], result[i]

	return result


def sample (items: typing.Sequence[T], k: int, rng: RandomSource) -> typing.List[T]:

	"""Choose ``k`` distinct positions from ``items`` without replacement.

	The result keeps selection order. ``k`` larger than the pool is an error.
	"""

	if k < 0:
		raise ValueError("k cannot be negative")

	if k > len(items):
		raise ValueError(f"Cannot sample {k} items from a pool of {len(items)}")

	pool = list(items)
	chosen: typing.List[T] = []

	for _ in range(k):
		chosen.append(pool.pop(random_index(len(pool), rng)))

	return chosen
