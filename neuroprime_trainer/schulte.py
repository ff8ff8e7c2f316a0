from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource, grid_side


@dataclass(frozen=True, slots=True)
class SchulteRound:
    """Focus Finder: find and press ``target`` in a shuffled number grid."""

    size: int
    cells: tuple[int, ...]  # row-major, a permutation of 1..size*size
    target: int
    kind: GameKind = field(default=GameKind.SCHULTE, init=False)

    def evaluate(self, response: object) -> bool | None:
        # Response is the pressed cell index.
        if isinstance(response, bool) or not isinstance(response, int):
            return None
        if not 0 <= response < len(self.cells):
            return None
        return self.cells[response] == self.target


def shuffled_numbers(rng: RandomSource, count: int) -> tuple[int, ...]:
    values = list(range(1, count + 1))
    rng.shuffle(values)
    return tuple(values)


def generate_schulte_round(rng: RandomSource, *, difficulty: int) -> SchulteRound:
    size = grid_side(difficulty, step=3)
    total = size * size
    return SchulteRound(
        size=size,
        cells=shuffled_numbers(rng, total),
        target=rng.randint(1, total),
    )
