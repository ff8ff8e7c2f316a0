from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource, grid_side

REFLEX_ICONS = ("zap", "circle", "square", "triangle", "star")


@dataclass(frozen=True, slots=True)
class ReflexRound:
    size: int
    icons: tuple[str, ...]  # decorative noise, row-major
    active_index: int
    kind: GameKind = field(default=GameKind.REFLEX, init=False)

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def evaluate(self, response: object) -> bool | None:
        if isinstance(response, bool) or not isinstance(response, int):
            return None
        if not 0 <= response < self.cell_count:
            return None
        return response == self.active_index


def generate_reflex_round(rng: RandomSource, *, difficulty: int) -> ReflexRound:
    size = grid_side(difficulty, step=4)
    total = size * size
    active = rng.randint(0, total - 1)
    icons = tuple(rng.choice(REFLEX_ICONS) for _ in range(total))
    return ReflexRound(size=size, icons=icons, active_index=active)
