from __future__ import annotations

from dataclasses import dataclass

from .cognitive_core import MAX_DIFFICULTY, MIN_DIFFICULTY, clamp_difficulty

STREAK_FOR_LEVEL_UP = 3


@dataclass(frozen=True, slots=True)
class DifficultyStep:
    difficulty: int
    streak: int


def adapt_difficulty(difficulty: int, streak: int, is_correct: bool) -> DifficultyStep:
    """Streak ramp: every 3rd consecutive correct answer raises the level by one,
    any miss resets the streak and drops the level by one.

    The returned difficulty applies to the next generated round.
    """

    d = clamp_difficulty(difficulty)
    if is_correct:
        new_streak = max(0, int(streak)) + 1
        if new_streak % STREAK_FOR_LEVEL_UP == 0 and d < MAX_DIFFICULTY:
            d += 1
        return DifficultyStep(difficulty=d, streak=new_streak)

    if d > MIN_DIFFICULTY:
        d -= 1
    return DifficultyStep(difficulty=d, streak=0)
