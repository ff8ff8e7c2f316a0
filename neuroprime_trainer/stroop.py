from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource

STROOP_COLORS: tuple[tuple[str, tuple[int, int, int]], ...] = (
    ("RED", (239, 68, 68)),
    ("BLUE", (59, 130, 246)),
    ("GREEN", (34, 197, 94)),
    ("YELLOW", (250, 204, 21)),
    ("PURPLE", (168, 85, 247)),
)


@dataclass(frozen=True, slots=True)
class StroopRound:
    word: str
    color_name: str
    color_rgb: tuple[int, int, int]
    is_match: bool
    kind: GameKind = field(default=GameKind.STROOP, init=False)

    def evaluate(self, response: object) -> bool | None:
        # Response is the participant's "does the meaning match the ink?" answer.
        if not isinstance(response, bool):
            return None
        return response is self.is_match


def generate_stroop_round(rng: RandomSource, *, difficulty: int) -> StroopRound:
    _ = difficulty
    word_idx = rng.randint(0, len(STROOP_COLORS) - 1)
    color_idx = rng.randint(0, len(STROOP_COLORS) - 1)
    color_name, color_rgb = STROOP_COLORS[color_idx]
    return StroopRound(
        word=STROOP_COLORS[word_idx][0],
        color_name=color_name,
        color_rgb=color_rgb,
        is_match=word_idx == color_idx,
    )
