from __future__ import annotations

import math
from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource, clamp_difficulty, grid_side

MIN_TARGETS = 3
MAX_TARGET_FRACTION = 0.6


@dataclass(frozen=True, slots=True)
class MemoryGridRound:
    """Grid Recall: memorise the lit cells, then press them all."""

    grid_size: int
    targets: frozenset[int]  # row-major cell indices
    kind: GameKind = field(default=GameKind.MEMORY, init=False)

    @property
    def cell_count(self) -> int:
        return self.grid_size * self.grid_size


def target_count_for(difficulty: int, cell_count: int) -> int:
    cap = int(math.floor(cell_count * MAX_TARGET_FRACTION))
    return min(cap, MIN_TARGETS + clamp_difficulty(difficulty) // 2)


def memorize_duration_s(difficulty: int, *, longest_s: float = 2.5, shortest_s: float = 0.8) -> float:
    """How long targets stay visible; shrinks 150 ms per level down to a floor."""

    return max(shortest_s, longest_s - 0.15 * clamp_difficulty(difficulty))


def generate_memory_grid_round(rng: RandomSource, *, difficulty: int) -> MemoryGridRound:
    size = grid_side(difficulty, step=4)
    cells = size * size
    count = target_count_for(difficulty, cells)
    targets = rng.sample(range(cells), count)
    return MemoryGridRound(grid_size=size, targets=frozenset(int(i) for i in targets))
