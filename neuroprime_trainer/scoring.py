from __future__ import annotations

from .cognitive_core import clamp_difficulty, round_half_up

BASE_POINTS = 100
LEVEL_BONUS_PCT = 20  # +20% per level


def points_for(difficulty: int) -> int:
    """Points for a correct answer at ``difficulty`` (the level before adapting)."""

    # floor(100 * (1 + 0.2 * d)) in integer arithmetic.
    return BASE_POINTS + (BASE_POINTS * LEVEL_BONUS_PCT * clamp_difficulty(difficulty)) // 100


def award(score: int, difficulty: int, is_correct: bool) -> int:
    if not is_correct:
        return int(score)
    return int(score) + points_for(difficulty)


def performance_index(score: int, difficulty: int) -> int:
    """End-of-session summary in [0, 100]."""

    raw = round_half_up(score / 20.0 + clamp_difficulty(difficulty) * 6)
    return max(0, min(100, raw))


def accuracy_percent(correct_count: int, total_count: int) -> int:
    if total_count <= 0:
        return 0
    return max(0, min(100, round_half_up(100.0 * correct_count / total_count)))
