from __future__ import annotations

import pytest

from neuroprime_trainer.catalog import GameKind
from neuroprime_trainer.cognitive_core import MAX_GENERATION_ATTEMPTS, SeededRng, build_choices
from neuroprime_trainer.errors import DegenerateGenerationError
from neuroprime_trainer.math_sprint import MathRound, generate_math_round, operators_for
from neuroprime_trainer.number_series import SeriesFamily, generate_number_series_round
from neuroprime_trainer.reflex import generate_reflex_round
from neuroprime_trainer.rounds import GENERATORS, generate_round
from neuroprime_trainer.schulte import generate_schulte_round
from neuroprime_trainer.stroop import STROOP_COLORS, generate_stroop_round
from neuroprime_trainer.visual_match import generate_visual_match_round, group_of, option_count_for

LEVELS = range(1, 11)


@pytest.mark.parametrize("difficulty", LEVELS)
def test_math_choices_are_four_unique_non_negative_values_with_answer_once(difficulty: int) -> None:
    rng = SeededRng(1000 + difficulty)
    for _ in range(200):
        r = generate_math_round(rng, difficulty=difficulty)
        assert len(r.choices) == 4
        assert len(set(r.choices)) == 4
        assert r.choices.count(r.correct_value) == 1
        assert all(v >= 0 for v in r.choices)
        assert r.operator in operators_for(difficulty)


def test_math_answer_matches_expression_and_subtraction_never_negative() -> None:
    rng = SeededRng(77)
    seen_ops = set()
    for _ in range(400):
        r = generate_math_round(rng, difficulty=10)
        seen_ops.add(r.operator)
        if r.operator == "+":
            assert r.correct_value == r.operand1 + r.operand2
        elif r.operator == "-":
            assert r.operand1 >= r.operand2
            assert r.correct_value == r.operand1 - r.operand2
        else:
            assert r.correct_value == r.operand1 * r.operand2
    assert seen_ops == {"+", "-", "*"}


def test_math_operand_range_grows_with_difficulty() -> None:
    easy = [generate_math_round(SeededRng(s), difficulty=1) for s in range(300)]
    hard = [generate_math_round(SeededRng(s), difficulty=8) for s in range(300)]
    assert max(max(r.operand1, r.operand2) for r in easy) <= 10
    assert max(max(r.operand1, r.operand2) for r in hard) > 10


def test_math_evaluate_rejects_values_outside_choices() -> None:
    r = MathRound(operand1=2, operand2=3, operator="+", correct_value=5, choices=(4, 5, 6, 7))
    assert r.evaluate(5) is True
    assert r.evaluate(6) is False
    assert r.evaluate(99) is None
    assert r.evaluate(True) is None
    assert r.expression == "2 + 3"


@pytest.mark.parametrize("difficulty", LEVELS)
def test_number_series_choices_unique_positive_and_series_consistent(difficulty: int) -> None:
    rng = SeededRng(2000 + difficulty)
    families = set()
    for _ in range(200):
        r = generate_number_series_round(rng, difficulty=difficulty)
        families.add(r.family)
        assert len(r.terms) == 4
        assert len(set(r.choices)) == 4
        assert r.choices.count(r.correct_value) == 1
        assert all(v > 0 for v in r.choices)

        t = r.terms
        if r.family is SeriesFamily.ARITHMETIC:
            step = t[1] - t[0]
            assert t[2] - t[1] == step and t[3] - t[2] == step
            assert r.correct_value == t[3] + step
        elif r.family is SeriesFamily.GEOMETRIC:
            ratio = t[1] // t[0]
            assert t[1] == t[0] * ratio and t[3] == t[2] * ratio
            assert r.correct_value == t[3] * ratio
        else:
            s1, s2 = t[1] - t[0], t[2] - t[1]
            assert t[3] - t[2] == s1
            assert r.correct_value == t[3] + s2
    assert families == set(SeriesFamily)


def test_stroop_match_iff_word_equals_colour() -> None:
    rng = SeededRng(5)
    names = [name for name, _ in STROOP_COLORS]
    matches = 0
    for _ in range(300):
        r = generate_stroop_round(rng, difficulty=1)
        assert r.word in names and r.color_name in names
        assert r.is_match == (r.word == r.color_name)
        assert r.evaluate(r.is_match) is True
        assert r.evaluate(not r.is_match) is False
        assert r.evaluate("yes") is None
        matches += r.is_match
    assert 0 < matches < 300


@pytest.mark.parametrize("difficulty", LEVELS)
def test_visual_match_has_exactly_one_matching_option(difficulty: int) -> None:
    rng = SeededRng(3000 + difficulty)
    for _ in range(100):
        r = generate_visual_match_round(rng, difficulty=difficulty)
        assert 3 <= len(r.options) <= 9
        assert len(r.options) == option_count_for(difficulty)
        matches = [o for o in r.options if o.is_match]
        assert len(matches) == 1
        assert matches[0].shape == r.target_shape
        assert all(o.shape != r.target_shape for o in r.options if not o.is_match)
        assert r.evaluate(r.match_index) is True


def test_visual_match_option_count_monotonic_and_distractors_grow_similar() -> None:
    counts = [option_count_for(d) for d in LEVELS]
    assert counts == sorted(counts)
    assert counts[0] == 3 and counts[-1] == 9

    def same_group_share(difficulty: int) -> float:
        rng = SeededRng(99)
        same = total = 0
        for _ in range(200):
            r = generate_visual_match_round(rng, difficulty=difficulty)
            g = group_of(r.target_shape)
            for o in r.options:
                if not o.is_match:
                    total += 1
                    same += group_of(o.shape) is g
        return same / total

    assert same_group_share(1) == 0.0
    assert same_group_share(9) > 0.3


@pytest.mark.parametrize("difficulty", LEVELS)
def test_schulte_grid_is_permutation_and_target_inside(difficulty: int) -> None:
    rng = SeededRng(4000 + difficulty)
    r = generate_schulte_round(rng, difficulty=difficulty)
    assert 3 <= r.size <= 5
    assert sorted(r.cells) == list(range(1, r.size * r.size + 1))
    assert 1 <= r.target <= r.size * r.size
    idx = r.cells.index(r.target)
    assert r.evaluate(idx) is True
    assert r.evaluate((idx + 1) % len(r.cells)) is False
    assert r.evaluate(len(r.cells)) is None


@pytest.mark.parametrize("difficulty", LEVELS)
def test_reflex_has_exactly_one_active_cell(difficulty: int) -> None:
    rng = SeededRng(5000 + difficulty)
    r = generate_reflex_round(rng, difficulty=difficulty)
    assert len(r.icons) == r.size * r.size
    assert 0 <= r.active_index < r.cell_count
    assert r.evaluate(r.active_index) is True
    assert r.evaluate(-1) is None


def test_grid_sizes_grow_with_difficulty() -> None:
    sizes = [generate_reflex_round(SeededRng(1), difficulty=d).size for d in LEVELS]
    assert sizes == sorted(sizes)
    assert sizes[0] == 3 and sizes[-1] == 5


def test_every_kind_is_registered_and_tagged() -> None:
    assert set(GENERATORS) == set(GameKind)
    rng = SeededRng(11)
    for kind in GameKind:
        r = generate_round(kind, rng, difficulty=4)
        assert r.kind is kind


def test_generator_determinism_same_seed_same_sequence() -> None:
    for kind in GameKind:
        r1, r2 = SeededRng(2468), SeededRng(2468)
        seq1 = [generate_round(kind, r1, difficulty=d) for d in LEVELS]
        seq2 = [generate_round(kind, r2, difficulty=d) for d in LEVELS]
        assert seq1 == seq2


def test_out_of_range_difficulty_is_clamped() -> None:
    low = generate_round(GameKind.SCHULTE, SeededRng(3), difficulty=-4)
    high = generate_round(GameKind.SCHULTE, SeededRng(3), difficulty=42)
    assert low.size == 3
    assert high.size == 5


def test_build_choices_gives_up_after_bounded_attempts() -> None:
    calls = 0

    def propose() -> int:
        nonlocal calls
        calls += 1
        return calls

    with pytest.raises(DegenerateGenerationError):
        build_choices(
            SeededRng(1),
            answer=0,
            count=4,
            propose=propose,
            accept=lambda v: False,
            label="unsatisfiable",
        )
    assert calls <= MAX_GENERATION_ATTEMPTS


def test_build_choices_stops_proposing_once_full() -> None:
    values = iter(range(1, 100))
    choices = build_choices(
        SeededRng(2),
        answer=50,
        count=4,
        propose=lambda: next(values),
        accept=lambda v: v % 2 == 0,
        label="evens",
    )
    assert sorted(choices) == [2, 4, 6, 50]
