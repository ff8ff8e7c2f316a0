from __future__ import annotations

import math

import pytest

from neuroprime_trainer.cognitive_core import SeededRng
from neuroprime_trainer.memory_grid import (
    MIN_TARGETS,
    MemoryGridRound,
    generate_memory_grid_round,
    memorize_duration_s,
)
from neuroprime_trainer.round_state import MemoryRecallState, RecallPhase, RoundOutcome


def _round() -> MemoryGridRound:
    return MemoryGridRound(grid_size=3, targets=frozenset({0, 4, 8}))


@pytest.mark.parametrize("difficulty", range(1, 11))
def test_target_count_bounds(difficulty: int) -> None:
    rng = SeededRng(600 + difficulty)
    for _ in range(50):
        r = generate_memory_grid_round(rng, difficulty=difficulty)
        assert 3 <= r.grid_size <= 5
        assert MIN_TARGETS <= len(r.targets) <= math.floor(0.6 * r.cell_count)
        assert all(0 <= i < r.cell_count for i in r.targets)


def test_grid_and_target_count_grow_with_difficulty() -> None:
    easy = generate_memory_grid_round(SeededRng(1), difficulty=1)
    hard = generate_memory_grid_round(SeededRng(1), difficulty=10)
    assert easy.grid_size < hard.grid_size
    assert len(easy.targets) < len(hard.targets)


def test_memorize_window_shrinks_to_floor() -> None:
    windows = [memorize_duration_s(d) for d in range(1, 11)]
    assert windows == sorted(windows, reverse=True)
    assert windows[0] == pytest.approx(2.35)
    assert min(windows) >= 0.8


def test_presses_ignored_while_memorizing() -> None:
    state = MemoryRecallState(round=_round())
    assert state.marks_visible
    assert state.press(0) is state


def test_non_target_press_resolves_incorrect() -> None:
    state = MemoryRecallState(round=_round()).begin_recall()
    state = state.press(0)
    assert state.phase is RecallPhase.RECALL
    state = state.press(1)
    assert state.phase is RecallPhase.RESOLVED
    assert state.outcome is RoundOutcome.INCORRECT
    # Resolved rounds ignore further presses.
    assert state.press(4) is state


def test_full_target_set_resolves_correct() -> None:
    state = MemoryRecallState(round=_round()).begin_recall()
    for idx in (8, 0):
        state = state.press(idx)
        assert state.outcome is None
    # Repeated press on a selected cell is not a new answer.
    assert state.press(8) is state
    state = state.press(4)
    assert state.outcome is RoundOutcome.CORRECT
    assert state.selected == frozenset({0, 4, 8})


def test_out_of_grid_and_non_int_responses_ignored() -> None:
    state = MemoryRecallState(round=_round()).begin_recall()
    assert state.press(9) is state
    assert state.respond("4") is state
    assert state.respond(True) is state
