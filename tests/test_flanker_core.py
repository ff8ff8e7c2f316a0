from __future__ import annotations

import pytest

from neuroprime_trainer.cognitive_core import SeededRng
from neuroprime_trainer.flanker import (
    REVERSE_FLOOR,
    Direction,
    FlankerRound,
    generate_flanker_round,
    incongruent_probability,
    reverse_probability,
)


def test_reversed_up_target_expects_down() -> None:
    r = FlankerRound(
        sequence=(Direction.LEFT, Direction.LEFT, Direction.UP, Direction.LEFT, Direction.LEFT),
        center_index=2,
        expected_key=Direction.UP.opposite,
        is_reversed=True,
    )
    assert r.target is Direction.UP
    assert r.expected_key is Direction.DOWN
    assert r.evaluate("down") is True
    assert r.evaluate(Direction.UP) is False
    assert r.evaluate("sideways") is None


def test_generated_reversed_rounds_expect_opposite_of_target() -> None:
    rng = SeededRng(321)
    reversed_seen = 0
    for _ in range(400):
        r = generate_flanker_round(rng, difficulty=6)
        assert len(r.sequence) == 5 and r.center_index == 2
        if r.is_reversed:
            reversed_seen += 1
            assert r.expected_key is r.target.opposite
        else:
            assert r.expected_key is r.target
    assert reversed_seen > 0


@pytest.mark.parametrize("difficulty", range(1, REVERSE_FLOOR))
def test_reverse_never_below_floor(difficulty: int) -> None:
    rng = SeededRng(difficulty)
    assert reverse_probability(difficulty) == 0.0
    assert not any(generate_flanker_round(rng, difficulty=difficulty).is_reversed for _ in range(300))


def test_flankers_are_uniform_and_differ_from_target_when_incongruent() -> None:
    rng = SeededRng(8)
    for _ in range(300):
        r = generate_flanker_round(rng, difficulty=10)
        flankers = {d for i, d in enumerate(r.sequence) if i != r.center_index}
        assert len(flankers) == 1
        # Level 10 is always incongruent.
        assert r.target not in flankers
        assert not r.is_congruent


def test_probabilities_increase_with_difficulty() -> None:
    inc = [incongruent_probability(d) for d in range(1, 11)]
    rev = [reverse_probability(d) for d in range(1, 11)]
    assert inc == sorted(inc)
    assert rev == sorted(rev)
    assert all(0.0 <= p <= 1.0 for p in inc + rev)
    assert rev[REVERSE_FLOOR - 1] > 0.0
