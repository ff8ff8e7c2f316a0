from __future__ import annotations

import math
import random
from collections.abc import Callable, MutableSequence, Sequence
from typing import Protocol, TypeVar

from loguru import logger

from .errors import DegenerateGenerationError

T = TypeVar("T")

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10

# Upper bound for any resample loop in a round generator.
MAX_GENERATION_ATTEMPTS = 500


class RandomSource(Protocol):
    """Injectable randomness used by every round generator.

    ``random.Random`` satisfies this protocol; tests normally pass a
    ``SeededRng`` so generated rounds are reproducible.
    """

    def randint(self, a: int, b: int) -> int: ...

    def random(self) -> float: ...

    def choice(self, seq: Sequence[T]) -> T: ...

    def sample(self, population: Sequence[T], k: int) -> list[T]: ...

    def shuffle(self, x: MutableSequence[object]) -> None: ...


class SeededRng:
    """Seeded RNG wrapper to keep deterministic streams explicit."""

    def __init__(self, seed: int) -> None:
        self._seed = int(seed)
        self._rng = random.Random(self._seed)

    @property
    def seed(self) -> int:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)

    def random(self) -> float:
        return self._rng.random()

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def sample(self, population: Sequence[T], k: int) -> list[T]:
        return self._rng.sample(population, k)

    def shuffle(self, x: MutableSequence[object]) -> None:
        # random.Random.shuffle is Fisher-Yates, i.e. a uniform permutation.
        self._rng.shuffle(x)


def clamp_difficulty(level: int) -> int:
    """Clamp a difficulty level into [MIN_DIFFICULTY, MAX_DIFFICULTY]."""

    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(level)))


def round_half_up(x: float) -> int:
    # Matches the rounding used for the on-screen percentages.
    return int(math.floor(x + 0.5))


def grid_side(level: int, *, step: int, lo: int = 3, hi: int = 5) -> int:
    """Grid side length growing by one every ``step`` difficulty levels."""

    return min(hi, lo + clamp_difficulty(level) // step)


def build_choices(
    rng: RandomSource,
    *,
    answer: int,
    count: int,
    propose: Callable[[], int],
    accept: Callable[[int], bool],
    label: str,
) -> tuple[int, ...]:
    """Collect ``count`` unique values (answer included once) in shuffled order.

    ``propose`` draws a candidate distractor and ``accept`` filters it. The loop
    is bounded by MAX_GENERATION_ATTEMPTS; running out of attempts raises
    DegenerateGenerationError.
    """

    values = [answer]
    seen = {answer}
    for _ in range(MAX_GENERATION_ATTEMPTS):
        if len(values) >= count:
            break
        candidate = int(propose())
        if candidate in seen or not accept(candidate):
            continue
        values.append(candidate)
        seen.add(candidate)
    if len(values) < count:
        logger.error(
            "{} generator produced {} of {} unique choices for answer {}",
            label,
            len(values),
            count,
            answer,
        )
        raise DegenerateGenerationError(
            f"{label}: only {len(values)} unique choices after {MAX_GENERATION_ATTEMPTS} attempts"
        )

    rng.shuffle(values)
    return tuple(values)
