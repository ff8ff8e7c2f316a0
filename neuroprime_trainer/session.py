"""Timed adaptive training session.

The session is an explicit ``SessionState`` value plus one pure transition per
event (tick, resolution, next round, round-state change). ``SessionController``
owns the current value, the timer queue and the completion/exit callbacks; it
is host-agnostic and is driven either by a UI loop calling ``update()`` every
frame or by a test advancing a fake clock.

Lifecycle: RUNNING -> ENDED (time expired, ``on_complete`` fires once) or
RUNNING -> CANCELLED (``exit()``, ``on_exit`` fires, no result).
"""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum

from loguru import logger

from .catalog import GameDefinition, GameKind
from .cognitive_core import RandomSource, SeededRng, clamp_difficulty
from .config import SessionConfig
from .difficulty import adapt_difficulty
from .memory_grid import memorize_duration_s
from .results import RoundEvent, SessionResult, mean_response_time_s, session_result
from .round_state import MemoryRecallState, RecallPhase, RoundOutcome, RoundState, initial_round_state
from .rounds import RoundSpec, generate_round
from .scheduler import Clock, EventScheduler, TimerHandle
from .scoring import award

CompletionCallback = Callable[[int, int, int], None]
ExitCallback = Callable[[], None]

# time_remaining_s counts whole seconds, one per tick.
TICK_INTERVAL_S = 1.0


class SessionPhase(StrEnum):
    RUNNING = "running"
    ENDED = "ended"
    CANCELLED = "cancelled"


class Feedback(StrEnum):
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass(frozen=True, slots=True)
class SessionState:
    kind: GameKind
    current_round: RoundSpec
    round_state: RoundState
    score: int = 0
    difficulty: int = 1
    streak: int = 0
    time_remaining_s: int = 60
    correct_count: int = 0
    total_count: int = 0


def initial_state(kind: GameKind, rng: RandomSource, *, config: SessionConfig) -> SessionState:
    difficulty = clamp_difficulty(config.start_difficulty)
    first = generate_round(kind, rng, difficulty=difficulty)
    return SessionState(
        kind=GameKind(kind),
        current_round=first,
        round_state=initial_round_state(first),
        difficulty=difficulty,
        time_remaining_s=int(config.duration_s),
    )


def apply_tick(state: SessionState) -> SessionState:
    return replace(state, time_remaining_s=max(0, state.time_remaining_s - 1))


def apply_round_state(state: SessionState, round_state: RoundState) -> SessionState:
    return replace(state, round_state=round_state)


def apply_resolution(state: SessionState, *, is_correct: bool) -> SessionState:
    """Score with the pre-answer difficulty, then adapt difficulty and streak."""

    step = adapt_difficulty(state.difficulty, state.streak, is_correct)
    return replace(
        state,
        score=award(state.score, state.difficulty, is_correct),
        difficulty=step.difficulty,
        streak=step.streak,
        correct_count=state.correct_count + (1 if is_correct else 0),
        total_count=state.total_count + 1,
    )


def apply_next_round(state: SessionState, round_spec: RoundSpec) -> SessionState:
    return replace(state, current_round=round_spec, round_state=initial_round_state(round_spec))


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """View model for hosts (pure data)."""

    title: str
    phase: SessionPhase
    kind: GameKind
    round: RoundSpec
    round_state: RoundState
    score: int
    difficulty: int
    streak: int
    time_remaining_s: int
    correct_count: int
    total_count: int
    feedback: Feedback | None
    result: SessionResult | None


class SessionController:
    def __init__(
        self,
        *,
        definition: GameDefinition,
        clock: Clock,
        rng: RandomSource,
        config: SessionConfig | None = None,
        on_complete: CompletionCallback | None = None,
        on_exit: ExitCallback | None = None,
    ) -> None:
        self._definition = definition
        self._config = config or SessionConfig()
        self._rng = rng
        self._scheduler = EventScheduler(clock)
        self._on_complete = on_complete
        self._on_exit = on_exit

        self._phase = SessionPhase.RUNNING
        self._feedback: Feedback | None = None
        self._result: SessionResult | None = None
        self._events: list[RoundEvent] = []
        self._presented_at_s = 0.0

        self._tick_handle: TimerHandle | None = None
        self._advance_handle: TimerHandle | None = None
        self._memorize_handle: TimerHandle | None = None

        self._state = initial_state(definition.kind, rng, config=self._config)
        start = clock.now()
        self._tick_handle = self._scheduler.call_at(start + TICK_INTERVAL_S, self._on_tick)
        self._present_round(start)
        logger.info(
            "Session started: game={} duration={}s difficulty={}",
            definition.id,
            self._config.duration_s,
            self._state.difficulty,
        )

    @property
    def definition(self) -> GameDefinition:
        return self._definition

    @property
    def config(self) -> SessionConfig:
        return self._config

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def feedback(self) -> Feedback | None:
        return self._feedback

    @property
    def result(self) -> SessionResult | None:
        return self._result

    def events(self) -> list[RoundEvent]:
        return list(self._events)

    def pending_timers(self) -> int:
        return self._scheduler.pending_count()

    def update(self) -> None:
        """Deliver every timer event due by now."""

        self._scheduler.run_due()

    def respond(self, response: object) -> bool:
        """Deliver one participant interaction. Returns True if it was accepted.

        ``response`` depends on the round: a picked value for Math and Number
        Series, a bool for Stroop, an option index for Visual Match, a
        ``Direction`` (or its key) for Flanker, and a cell index for the grid
        games.
        """

        # Due timers first, so an answer after expiry is never counted.
        self.update()
        if self._phase is not SessionPhase.RUNNING or self._feedback is not None:
            return False

        current = self._state.round_state
        nxt = current.respond(response)
        if nxt is current:
            return False
        self._state = apply_round_state(self._state, nxt)
        if nxt.outcome is not None:
            self._resolve(nxt.outcome)
        return True

    def exit(self) -> bool:
        """Cancel the session before expiry. No result is emitted."""

        if self._phase is not SessionPhase.RUNNING:
            return False
        self._phase = SessionPhase.CANCELLED
        self._teardown()
        logger.info(
            "Session cancelled: game={} remaining={}s rounds={}",
            self._definition.id,
            self._state.time_remaining_s,
            self._state.total_count,
        )
        if self._on_exit is not None:
            self._on_exit()
        return True

    def snapshot(self) -> SessionSnapshot:
        s = self._state
        return SessionSnapshot(
            title=self._definition.name,
            phase=self._phase,
            kind=s.kind,
            round=s.current_round,
            round_state=s.round_state,
            score=s.score,
            difficulty=s.difficulty,
            streak=s.streak,
            time_remaining_s=s.time_remaining_s,
            correct_count=s.correct_count,
            total_count=s.total_count,
            feedback=self._feedback,
            result=self._result,
        )

    def mean_response_time_s(self) -> float | None:
        return mean_response_time_s(self._events)

    # -- timer callbacks -------------------------------------------------

    def _on_tick(self, due_s: float) -> None:
        self._state = apply_tick(self._state)
        if self._state.time_remaining_s <= 0:
            self._finish()
            return
        self._tick_handle = self._scheduler.call_at(due_s + TICK_INTERVAL_S, self._on_tick)

    def _on_memorize_elapsed(self, due_s: float) -> None:
        _ = due_s
        self._memorize_handle = None
        rs = self._state.round_state
        if isinstance(rs, MemoryRecallState):
            self._state = apply_round_state(self._state, rs.begin_recall())

    def _on_advance(self, due_s: float) -> None:
        self._advance_handle = None
        self._feedback = None
        nxt = generate_round(self._state.kind, self._rng, difficulty=self._state.difficulty)
        self._state = apply_next_round(self._state, nxt)
        self._present_round(due_s)

    # -- internals -------------------------------------------------------

    def _present_round(self, at_s: float) -> None:
        self._presented_at_s = float(at_s)
        rs = self._state.round_state
        if isinstance(rs, MemoryRecallState) and rs.phase is RecallPhase.MEMORIZE:
            window = memorize_duration_s(
                self._state.difficulty,
                longest_s=self._config.memorize_longest_s,
                shortest_s=self._config.memorize_shortest_s,
            )
            self._memorize_handle = self._scheduler.call_at(at_s + window, self._on_memorize_elapsed)

    def _resolve(self, outcome: RoundOutcome) -> None:
        is_correct = outcome is RoundOutcome.CORRECT
        before = self._state
        self._state = apply_resolution(before, is_correct=is_correct)
        now = self._scheduler.clock.now()

        self._events.append(
            RoundEvent(
                index=len(self._events),
                kind=before.kind,
                difficulty=before.difficulty,
                outcome=outcome,
                points=self._state.score - before.score,
                presented_at_s=self._presented_at_s,
                resolved_at_s=now,
            )
        )
        logger.debug(
            "Round {} {}: score={} streak={} difficulty {}->{}",
            len(self._events),
            outcome.value,
            self._state.score,
            self._state.streak,
            before.difficulty,
            self._state.difficulty,
        )

        self._feedback = Feedback.CORRECT if is_correct else Feedback.WRONG
        pause = (
            self._config.reflex_feedback_pause_s
            if before.kind is GameKind.REFLEX
            else self._config.feedback_pause_s
        )
        self._advance_handle = self._scheduler.call_at(now + pause, self._on_advance)

    def _finish(self) -> None:
        if self._phase is not SessionPhase.RUNNING:
            return
        self._phase = SessionPhase.ENDED
        self._teardown()
        s = self._state
        self._result = session_result(
            score=s.score,
            difficulty=s.difficulty,
            correct_count=s.correct_count,
            total_count=s.total_count,
        )
        logger.info(
            "Session ended: game={} score={} performance={} accuracy={}% difficulty={}",
            self._definition.id,
            s.score,
            self._result.performance_index,
            self._result.accuracy,
            self._result.difficulty_reached,
        )
        if self._on_complete is not None:
            self._on_complete(
                self._result.performance_index,
                self._result.accuracy,
                self._result.difficulty_reached,
            )

    def _teardown(self) -> None:
        # The live round is abandoned as-is; only the timers go.
        for handle in (self._tick_handle, self._advance_handle, self._memorize_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._advance_handle = None
        self._memorize_handle = None
        self._scheduler.cancel_all()
        self._feedback = None


def start_session(
    definition: GameDefinition,
    *,
    clock: Clock,
    rng: RandomSource | None = None,
    seed: int | None = None,
    config: SessionConfig | None = None,
    on_complete: CompletionCallback | None = None,
    on_exit: ExitCallback | None = None,
) -> SessionController:
    """Start a session at difficulty 1, streak 0, score 0 and a full clock."""

    if rng is None:
        rng = SeededRng(seed if seed is not None else random.SystemRandom().randint(1, 2**31 - 1))
    return SessionController(
        definition=definition,
        clock=clock,
        rng=rng,
        config=config,
        on_complete=on_complete,
        on_exit=on_exit,
    )
