"""Round registry: the tagged union of round payloads and their generators.

Every round dataclass carries a ``kind`` tag (``GameKind``). Consumers branch
on the concrete type and finish with ``unknown_round`` so a new variant that
is not handled fails loudly instead of silently rendering nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import NoReturn, Union

from .catalog import GameKind
from .cognitive_core import RandomSource, clamp_difficulty
from .flanker import FlankerRound, generate_flanker_round
from .math_sprint import MathRound, generate_math_round
from .memory_grid import MemoryGridRound, generate_memory_grid_round
from .number_series import NumberSeriesRound, generate_number_series_round
from .order_path import OrderPathRound, generate_order_path_round
from .reflex import ReflexRound, generate_reflex_round
from .schulte import SchulteRound, generate_schulte_round
from .stroop import StroopRound, generate_stroop_round
from .visual_match import VisualMatchRound, generate_visual_match_round

RoundSpec = Union[
    MathRound,
    StroopRound,
    MemoryGridRound,
    SchulteRound,
    VisualMatchRound,
    NumberSeriesRound,
    FlankerRound,
    ReflexRound,
    OrderPathRound,
]

# Rounds resolved by a single interaction.
SingleResponseRound = Union[
    MathRound,
    StroopRound,
    SchulteRound,
    VisualMatchRound,
    NumberSeriesRound,
    FlankerRound,
    ReflexRound,
]

RoundGenerator = Callable[..., RoundSpec]

GENERATORS: dict[GameKind, RoundGenerator] = {
    GameKind.MATH: generate_math_round,
    GameKind.STROOP: generate_stroop_round,
    GameKind.MEMORY: generate_memory_grid_round,
    GameKind.SCHULTE: generate_schulte_round,
    GameKind.VISUAL: generate_visual_match_round,
    GameKind.LOGIC: generate_number_series_round,
    GameKind.FLANKER: generate_flanker_round,
    GameKind.REFLEX: generate_reflex_round,
    GameKind.ORDER: generate_order_path_round,
}

MULTI_STEP_KINDS = frozenset({GameKind.MEMORY, GameKind.ORDER})


def generate_round(kind: GameKind, rng: RandomSource, *, difficulty: int) -> RoundSpec:
    """Generate a fresh round of ``kind`` at ``difficulty`` (clamped to 1..10)."""

    return GENERATORS[GameKind(kind)](rng, difficulty=clamp_difficulty(difficulty))


def is_single_response(round_spec: RoundSpec) -> bool:
    return round_spec.kind not in MULTI_STEP_KINDS


def unknown_round(round_spec: object) -> NoReturn:
    raise TypeError(f"unsupported round type: {type(round_spec).__name__}")
