from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from .catalog import GameKind
from .cognitive_core import RandomSource, clamp_difficulty


class ShapeGroup(StrEnum):
    CIRCLE = "circle"
    DIAMOND = "diamond"
    STAR = "star"
    TRIANGLE = "triangle"
    SQUARE = "square"


# Shapes within a group look alike; higher levels draw distractors from the
# target's own group.
SHAPE_GROUPS: dict[ShapeGroup, tuple[str, ...]] = {
    ShapeGroup.CIRCLE: ("ring", "disc", "dot_ring", "double_ring", "target", "hatched_disc"),
    ShapeGroup.DIAMOND: ("diamond", "hollow_diamond", "four_petal", "slim_diamond", "lozenge", "notched_diamond"),
    ShapeGroup.STAR: ("star5", "hollow_star", "star6", "star8", "star7", "star4"),
    ShapeGroup.TRIANGLE: ("triangle_up", "hollow_triangle", "small_triangle", "small_hollow_triangle", "wedge_right", "hollow_wedge_right"),
    ShapeGroup.SQUARE: ("square", "hollow_square", "small_square", "small_hollow_square", "tiny_square", "rounded_square"),
}

ROTATIONS = (0, 90, 180, 270)

SIMILAR_DISTRACTOR_FLOOR = 4
SIMILAR_DISTRACTOR_P = 0.6


def group_of(shape: str) -> ShapeGroup:
    for group, shapes in SHAPE_GROUPS.items():
        if shape in shapes:
            return group
    raise KeyError(shape)


@dataclass(frozen=True, slots=True)
class VisualMatchOption:
    shape: str
    rotation: int
    is_match: bool


@dataclass(frozen=True, slots=True)
class VisualMatchRound:
    """Shape Shift: pick the option with the same shape as the target (any rotation)."""

    target_shape: str
    target_rotation: int
    options: tuple[VisualMatchOption, ...]
    kind: GameKind = field(default=GameKind.VISUAL, init=False)

    @property
    def match_index(self) -> int:
        return next(i for i, o in enumerate(self.options) if o.is_match)

    def evaluate(self, response: object) -> bool | None:
        # Response is the picked option index.
        if isinstance(response, bool) or not isinstance(response, int):
            return None
        if not 0 <= response < len(self.options):
            return None
        return self.options[response].is_match


def option_count_for(difficulty: int) -> int:
    return min(9, 3 + int(clamp_difficulty(difficulty) / 1.5))


def generate_visual_match_round(rng: RandomSource, *, difficulty: int) -> VisualMatchRound:
    d = clamp_difficulty(difficulty)
    groups = tuple(SHAPE_GROUPS)
    target_group = rng.choice(groups)
    target_shape = rng.choice(SHAPE_GROUPS[target_group])
    target_rotation = rng.choice(ROTATIONS)

    same_group = tuple(s for s in SHAPE_GROUPS[target_group] if s != target_shape)
    other_groups = tuple(s for g in groups if g is not target_group for s in SHAPE_GROUPS[g])

    options = [VisualMatchOption(shape=target_shape, rotation=rng.choice(ROTATIONS), is_match=True)]
    for _ in range(option_count_for(d) - 1):
        if d >= SIMILAR_DISTRACTOR_FLOOR and rng.random() < SIMILAR_DISTRACTOR_P:
            shape = rng.choice(same_group)
        else:
            shape = rng.choice(other_groups)
        options.append(VisualMatchOption(shape=shape, rotation=rng.choice(ROTATIONS), is_match=False))

    rng.shuffle(options)
    return VisualMatchRound(
        target_shape=target_shape,
        target_rotation=target_rotation,
        options=tuple(options),
    )
