"""Unit tests for the progression suggestion rule."""

import pytest

from fittrack.services.progression import (
    Suggestion,
    Technique,
    has_suggestion,
    suggest,
    technique_to_rpe,
)


def test_good_technique_high_reps_adds_weight():
    assert suggest(60, 8, 9) == Suggestion(weight=62.5, reps=8)


def test_regular_technique_low_reps_adds_rep():
    assert suggest(60, 5, 6) == Suggestion(weight=60, reps=6)


def test_poor_technique_keeps_everything():
    assert suggest(60, 8, 3) == Suggestion(weight=60, reps=8)


def test_weight_branch_never_touches_reps():
    assert suggest(60, 10, 9) == Suggestion(weight=62.5, reps=10)


def test_missing_rating_returns_input():
    assert suggest(42.5, 4, None) == Suggestion(weight=42.5, reps=4)
    assert not has_suggestion(42.5, 4, None)


@pytest.mark.parametrize(
    ("weight", "reps", "rpe", "expected"),
    [
        # rating >= 8 but reps < 8: nothing
        (80, 7, 10, Suggestion(80, 7)),
        # rating 4-7 with exactly 7 reps: nothing
        (80, 7, 5, Suggestion(80, 7)),
        # boundaries of the middle band
        (80, 6, 4, Suggestion(80, 7)),
        (80, 6, 7, Suggestion(80, 7)),
        # rating 8 with low reps is outside both branches
        (80, 5, 8, Suggestion(80, 5)),
        # low ratings are never reduced
        (80, 3, 1, Suggestion(80, 3)),
    ],
)
def test_rule_boundaries(weight, reps, rpe, expected):
    assert suggest(weight, reps, rpe) == expected


def test_deterministic():
    results = {suggest(60, 8, 9) for _ in range(10)}
    assert results == {Suggestion(62.5, 8)}


def test_has_suggestion_reflects_change():
    assert has_suggestion(60, 8, 9)
    assert has_suggestion(60, 5, 6)
    assert not has_suggestion(60, 8, 3)


def test_differs_from():
    s = Suggestion(weight=62.5, reps=8)
    assert s.differs_from(60, 8)
    assert not s.differs_from(62.5, 8)


def test_technique_mapping():
    assert technique_to_rpe(Technique.poor) == 3
    assert technique_to_rpe(Technique.regular) == 6
    assert technique_to_rpe(Technique.good) == 9
    assert technique_to_rpe("good") == 9
