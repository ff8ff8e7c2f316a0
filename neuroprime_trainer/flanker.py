from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .catalog import GameKind
from .cognitive_core import RandomSource, clamp_difficulty

SEQUENCE_LENGTH = 5
REVERSE_FLOOR = 3


class Direction(StrEnum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


@dataclass(frozen=True, slots=True)
class FlankerRound:
    """Arrow Focus: respond to the centre arrow, or its opposite when reversed."""

    sequence: tuple[Direction, ...]
    center_index: int
    expected_key: Direction
    is_reversed: bool
    kind: GameKind = field(default=GameKind.FLANKER, init=False)

    @property
    def target(self) -> Direction:
        return self.sequence[self.center_index]

    @property
    def is_congruent(self) -> bool:
        return all(d is self.target for d in self.sequence)

    def evaluate(self, response: object) -> bool | None:
        # Accepts a Direction or its plain string key ("up", "left", ...).
        try:
            key = Direction(str(response))
        except ValueError:
            return None
        return key is self.expected_key


def incongruent_probability(difficulty: int) -> float:
    return min(1.0, 0.2 + 0.08 * clamp_difficulty(difficulty))


def reverse_probability(difficulty: int) -> float:
    d = clamp_difficulty(difficulty)
    if d < REVERSE_FLOOR:
        return 0.0
    return min(1.0, 0.15 + 0.05 * d)


def generate_flanker_round(rng: RandomSource, *, difficulty: int) -> FlankerRound:
    d = clamp_difficulty(difficulty)
    directions = tuple(Direction)
    target = rng.choice(directions)

    is_incongruent = rng.random() < incongruent_probability(d)
    is_reversed = d >= REVERSE_FLOOR and rng.random() < reverse_probability(d)

    flanker = target
    if is_incongruent:
        flanker = rng.choice(tuple(x for x in directions if x is not target))

    center = SEQUENCE_LENGTH // 2
    sequence = [flanker] * SEQUENCE_LENGTH
    sequence[center] = target

    return FlankerRound(
        sequence=tuple(sequence),
        center_index=center,
        expected_key=target.opposite if is_reversed else target,
        is_reversed=is_reversed,
    )
