from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class GameKind(StrEnum):
    MATH = "math"
    STROOP = "stroop"
    MEMORY = "memory"
    SCHULTE = "schulte"
    VISUAL = "visual"
    LOGIC = "logic"
    FLANKER = "flanker"
    REFLEX = "reflex"
    ORDER = "order"


class Dimension(StrEnum):
    CALCULATION = "calculation"
    EXECUTION = "execution"
    MEMORY = "memory"
    ATTENTION = "attention"
    VISUAL = "visual"
    ABSTRACTION = "abstraction"


@dataclass(frozen=True, slots=True)
class GameDefinition:
    """Catalog entry for a mini-game.

    The engine only looks at ``id``; the rest is presentation metadata.
    """

    id: str
    name: str
    dimension: Dimension
    description: str = ""

    @property
    def kind(self) -> GameKind:
        return GameKind(self.id)


GAMES: tuple[GameDefinition, ...] = (
    GameDefinition("math", "Speed Math", Dimension.CALCULATION, "Rapid fire arithmetic to boost processing speed."),
    GameDefinition("stroop", "Color Mind", Dimension.EXECUTION, "Challenge your inhibitory control."),
    GameDefinition("memory", "Grid Recall", Dimension.MEMORY, "Spatial memory training. Find all the blocks."),
    GameDefinition("schulte", "Focus Finder", Dimension.ATTENTION, "Scan the grid for the requested number."),
    GameDefinition("visual", "Shape Shift", Dimension.VISUAL, "Find the matching shape among distractions."),
    GameDefinition("logic", "Logic Flow", Dimension.ABSTRACTION, "Deduce number patterns and series."),
    GameDefinition("flanker", "Arrow Focus", Dimension.ATTENTION, "Focus on the center. Red means reverse!"),
    GameDefinition("reflex", "Quick Reflex", Dimension.EXECUTION, "Test your motor reaction speed."),
    GameDefinition("order", "Order Path", Dimension.ATTENTION, "Select numbers in ascending order."),
)

_BY_ID = {g.id: g for g in GAMES}


def definition_for(game_id: str) -> GameDefinition:
    """Look up a catalog entry; unknown ids raise KeyError."""

    try:
        return _BY_ID[str(game_id)]
    except KeyError:
        raise KeyError(f"unknown game id: {game_id!r}") from None
