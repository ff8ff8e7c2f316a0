from __future__ import annotations

from dataclasses import dataclass, field

from .catalog import GameKind
from .cognitive_core import RandomSource, build_choices, clamp_difficulty


@dataclass(frozen=True, slots=True)
class MathRound:
    """Speed Math: solve ``expression`` by picking one of four choices."""

    operand1: int
    operand2: int
    operator: str  # "+", "-" or "*"
    correct_value: int
    choices: tuple[int, ...]
    kind: GameKind = field(default=GameKind.MATH, init=False)

    @property
    def expression(self) -> str:
        return f"{self.operand1} {self.operator} {self.operand2}"

    def evaluate(self, response: object) -> bool | None:
        """Return correctness of a picked value, or None if it is not a choice."""

        if isinstance(response, bool) or not isinstance(response, int):
            return None
        if response not in self.choices:
            return None
        return response == self.correct_value


def operators_for(difficulty: int) -> tuple[str, ...]:
    d = clamp_difficulty(difficulty)
    ops = ["+"]
    if d >= 3:
        ops.append("-")
    if d >= 5:
        ops.append("*")
    return tuple(ops)


def generate_math_round(rng: RandomSource, *, difficulty: int) -> MathRound:
    d = clamp_difficulty(difficulty)
    op = rng.choice(operators_for(d))

    if op == "*":
        hi = d + 3
        a = rng.randint(2, hi)
        b = rng.randint(2, hi)
        answer = a * b
    else:
        hi = 10 if d < 3 else 10 * d
        a = rng.randint(1, hi)
        b = rng.randint(1, hi)
        if op == "-":
            if a < b:
                a, b = b, a
            answer = a - b
        else:
            answer = a + b

    choices = build_choices(
        rng,
        answer=answer,
        count=4,
        propose=lambda: answer + rng.randint(-5, 4),
        accept=lambda v: v >= 0,
        label="math",
    )
    return MathRound(operand1=a, operand2=b, operator=op, correct_value=answer, choices=choices)
