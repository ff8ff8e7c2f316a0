from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .catalog import GameKind
from .cognitive_core import RandomSource, build_choices, clamp_difficulty


class SeriesFamily(StrEnum):
    ARITHMETIC = "arithmetic"
    GEOMETRIC = "geometric"
    ALTERNATING = "alternating"


@dataclass(frozen=True, slots=True)
class NumberSeriesRound:
    """Logic Flow: four revealed terms, choose the fifth."""

    family: SeriesFamily
    terms: tuple[int, ...]
    correct_value: int
    choices: tuple[int, ...]
    kind: GameKind = field(default=GameKind.LOGIC, init=False)

    def evaluate(self, response: object) -> bool | None:
        if isinstance(response, bool) or not isinstance(response, int):
            return None
        if response not in self.choices:
            return None
        return response == self.correct_value


def _arithmetic(rng: RandomSource, d: int) -> tuple[list[int], int]:
    start = rng.randint(1, 20)
    step = rng.randint(1, d)
    terms = [start + step * i for i in range(4)]
    return terms, start + step * 4


def _geometric(rng: RandomSource, d: int) -> tuple[list[int], int]:
    ratio = rng.randint(2, min(4, 2 + d // 4))
    start = rng.randint(1, 5)
    terms = [start * ratio**i for i in range(4)]
    return terms, start * ratio**4


def _alternating(rng: RandomSource, d: int) -> tuple[list[int], int]:
    hi = 2 + d // 3
    s1 = rng.randint(1, hi)
    s2 = rng.randint(1, hi)
    c = rng.randint(1, 20)
    terms = [c]
    for step in (s1, s2, s1):
        c += step
        terms.append(c)
    return terms, c + s2


def pick_family(rng: RandomSource) -> SeriesFamily:
    roll = rng.random()
    if roll < 0.4:
        return SeriesFamily.ARITHMETIC
    if roll < 0.7:
        return SeriesFamily.GEOMETRIC
    return SeriesFamily.ALTERNATING


def generate_number_series_round(rng: RandomSource, *, difficulty: int) -> NumberSeriesRound:
    d = clamp_difficulty(difficulty)
    family = pick_family(rng)
    if family is SeriesFamily.ARITHMETIC:
        terms, answer = _arithmetic(rng, d)
    elif family is SeriesFamily.GEOMETRIC:
        terms, answer = _geometric(rng, d)
    else:
        terms, answer = _alternating(rng, d)

    choices = build_choices(
        rng,
        answer=answer,
        count=4,
        propose=lambda: answer + rng.randint(-10, 9),
        accept=lambda v: v > 0,
        label="number_series",
    )
    return NumberSeriesRound(family=family, terms=tuple(terms), correct_value=answer, choices=choices)
