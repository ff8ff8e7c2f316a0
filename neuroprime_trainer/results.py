from __future__ import annotations

from dataclasses import dataclass

from .catalog import GameKind
from .round_state import RoundOutcome
from .scoring import accuracy_percent, performance_index


@dataclass(frozen=True, slots=True)
class RoundEvent:
    """One resolved round, recorded at resolution time."""

    index: int
    kind: GameKind
    difficulty: int  # level the round was played at
    outcome: RoundOutcome
    points: int
    presented_at_s: float
    resolved_at_s: float

    @property
    def is_correct(self) -> bool:
        return self.outcome is RoundOutcome.CORRECT

    @property
    def response_time_s(self) -> float:
        return max(0.0, self.resolved_at_s - self.presented_at_s)


@dataclass(frozen=True, slots=True)
class SessionResult:
    """The only artifact handed to the long-term statistics store."""

    performance_index: int
    accuracy: int
    difficulty_reached: int


def session_result(*, score: int, difficulty: int, correct_count: int, total_count: int) -> SessionResult:
    return SessionResult(
        performance_index=performance_index(score, difficulty),
        accuracy=accuracy_percent(correct_count, total_count),
        difficulty_reached=int(difficulty),
    )


def mean_response_time_s(events: list[RoundEvent]) -> float | None:
    if not events:
        return None
    return sum(e.response_time_s for e in events) / len(events)
