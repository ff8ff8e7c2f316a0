from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource, grid_side
from .schulte import shuffled_numbers


@dataclass(frozen=True, slots=True)
class OrderPathRound:
    """Order Path: press every number of the grid in ascending order."""

    size: int
    cells: tuple[int, ...]  # row-major, a permutation of 1..size*size
    kind: GameKind = field(default=GameKind.ORDER, init=False)

    @property
    def max_value(self) -> int:
        return self.size * self.size


def generate_order_path_round(rng: RandomSource, *, difficulty: int) -> OrderPathRound:
    size = grid_side(difficulty, step=3)
    return OrderPathRound(size=size, cells=shuffled_numbers(rng, size * size))
