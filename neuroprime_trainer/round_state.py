"""Per-round interaction state.

Each state is an immutable value; ``press``/``respond`` return the next state.
A transition that is not legal from the current state returns the same object,
which callers use to tell an ignored interaction from an accepted one.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Union

from .memory_grid import MemoryGridRound
from .order_path import OrderPathRound
from .rounds import RoundSpec, SingleResponseRound, is_single_response, unknown_round


class RoundOutcome(StrEnum):
    CORRECT = "correct"
    INCORRECT = "incorrect"


class RecallPhase(StrEnum):
    MEMORIZE = "memorize"
    RECALL = "recall"
    RESOLVED = "resolved"


@dataclass(frozen=True, slots=True)
class SingleResponseState:
    round: SingleResponseRound
    outcome: RoundOutcome | None = None

    @property
    def resolved(self) -> bool:
        return self.outcome is not None

    def respond(self, response: object) -> "SingleResponseState":
        if self.resolved:
            return self
        verdict = self.round.evaluate(response)
        if verdict is None:
            return self
        return replace(self, outcome=RoundOutcome.CORRECT if verdict else RoundOutcome.INCORRECT)


@dataclass(frozen=True, slots=True)
class MemoryRecallState:
    """Memorize -> Recall -> Resolved."""

    round: MemoryGridRound
    phase: RecallPhase = RecallPhase.MEMORIZE
    selected: frozenset[int] = frozenset()
    outcome: RoundOutcome | None = None

    @property
    def resolved(self) -> bool:
        return self.phase is RecallPhase.RESOLVED

    @property
    def marks_visible(self) -> bool:
        return self.phase is RecallPhase.MEMORIZE

    def begin_recall(self) -> "MemoryRecallState":
        if self.phase is not RecallPhase.MEMORIZE:
            return self
        return replace(self, phase=RecallPhase.RECALL)

    def press(self, index: int) -> "MemoryRecallState":
        if self.phase is not RecallPhase.RECALL:
            return self
        if not 0 <= index < self.round.cell_count or index in self.selected:
            return self
        if index not in self.round.targets:
            return replace(self, phase=RecallPhase.RESOLVED, outcome=RoundOutcome.INCORRECT)
        selected = self.selected | {index}
        if selected == self.round.targets:
            return replace(self, selected=selected, phase=RecallPhase.RESOLVED, outcome=RoundOutcome.CORRECT)
        return replace(self, selected=selected)

    def respond(self, response: object) -> "MemoryRecallState":
        if isinstance(response, bool) or not isinstance(response, int):
            return self
        return self.press(response)


@dataclass(frozen=True, slots=True)
class OrderPathState:
    round: OrderPathRound
    expected_next: int = 1
    outcome: RoundOutcome | None = None

    @property
    def resolved(self) -> bool:
        return self.outcome is not None

    @property
    def cleared(self) -> frozenset[int]:
        """Cell indices already pressed in order."""

        return frozenset(i for i, v in enumerate(self.round.cells) if v < self.expected_next)

    def press(self, index: int) -> "OrderPathState":
        if self.resolved or not 0 <= index < len(self.round.cells):
            return self
        value = self.round.cells[index]
        if value != self.expected_next:
            return replace(self, outcome=RoundOutcome.INCORRECT)
        if value == self.round.max_value:
            return replace(self, outcome=RoundOutcome.CORRECT)
        return replace(self, expected_next=self.expected_next + 1)

    def respond(self, response: object) -> "OrderPathState":
        if isinstance(response, bool) or not isinstance(response, int):
            return self
        return self.press(response)


RoundState = Union[SingleResponseState, MemoryRecallState, OrderPathState]


def initial_round_state(round_spec: RoundSpec) -> RoundState:
    if isinstance(round_spec, MemoryGridRound):
        return MemoryRecallState(round=round_spec)
    if isinstance(round_spec, OrderPathRound):
        return OrderPathState(round=round_spec)
    if is_single_response(round_spec):
        return SingleResponseState(round=round_spec)  # type: ignore[arg-type]
    unknown_round(round_spec)
