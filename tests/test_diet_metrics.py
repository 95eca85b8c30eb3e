"""
Tests for the diet adherence analyzer.

The analyzer is a pure function over meals in creation order, so these tests
use plain mock meals and never touch the database.
"""

import itertools

import pytest

from test_fixtures import make_meal, make_meals
from services.diet_metrics import DietReport, best_diet_sequence, build_diet_report


def _longest_run(flags):
    best = run = 0
    for flag in flags:
        run = run + 1 if flag else 0
        best = max(best, run)
    return best


def _is_contiguous_subrun(sub, seq):
    if not sub:
        return True
    ids = [m.id for m in seq]
    start = ids.index(sub[0].id)
    return ids[start : start + len(sub)] == [m.id for m in sub]


# =============================================================================
# SCENARIOS
# =============================================================================


def test_middle_run_is_longest():
    """[T, T, F, T, T, T, F] -> best run is the three meals in the middle"""
    meals = make_meals([True, True, False, True, True, True, False])

    report = build_diet_report(meals)

    assert report.total == 7
    assert report.in_diet_count == 5
    assert report.off_diet_count == 2
    assert len(report.best_sequence) == 3
    assert report.best_sequence == meals[3:6]


def test_empty_input():
    report = build_diet_report([])

    assert report == DietReport(total=0, in_diet_count=0, off_diet_count=0, best_sequence=[])


def test_all_off_diet_has_no_sequence():
    meals = make_meals([False, False, False])

    report = build_diet_report(meals)

    assert report.best_sequence == []
    assert report.off_diet_count == 3


def test_all_in_diet_returns_whole_input():
    meals = make_meals([True] * 5)

    assert best_diet_sequence(meals) == meals


def test_first_of_equal_runs_wins():
    """Equal-length runs: the earliest one is kept (strictly-greater replacement)"""
    meals = make_meals([True, True, False, True, True])

    best = best_diet_sequence(meals)

    assert best == meals[0:2]


def test_later_longer_run_replaces_earlier():
    meals = make_meals([True, False, True, True, False, True])

    assert best_diet_sequence(meals) == meals[2:4]


def test_single_meal():
    meal = make_meal(in_diet=True)

    assert best_diet_sequence([meal]) == [meal]
    assert best_diet_sequence([make_meal(in_diet=False)]) == []


def test_best_sequence_is_a_copy():
    """Mutating the result must not affect later computations on the input"""
    meals = make_meals([True, True])

    best = best_diet_sequence(meals)
    best.clear()

    assert len(meals) == 2
    assert best_diet_sequence(meals) == meals


def test_report_is_idempotent():
    meals = make_meals([True, False, True, True, False, True, True, True])

    assert build_diet_report(meals) == build_diet_report(meals)


# =============================================================================
# PROPERTIES (every in/off pattern up to 8 meals)
# =============================================================================


@pytest.mark.parametrize("length", range(0, 9))
def test_report_properties_hold_for_all_patterns(length):
    for flags in itertools.product([True, False], repeat=length):
        meals = make_meals(list(flags))
        report = build_diet_report(meals)

        assert report.in_diet_count + report.off_diet_count == report.total
        assert report.total == len(meals)
        assert all(m.in_diet for m in report.best_sequence)
        assert _is_contiguous_subrun(report.best_sequence, meals)
        assert len(report.best_sequence) == _longest_run(flags)
