"""Tests for pivot rescue strategies and the rescue-driven reduction."""

from __future__ import annotations

import random

import pytest

from f2matrix import F2, ShapeMismatchError, UnresolvableDependencyError
from f2matrix.resolver import (
    resolve_by_column_swap,
    resolve_by_row_swap,
    resolve_linear_dependency,
)


def _call(strategy, rows):
    # Rows 0 and 1 hold the pivots for columns 1 and 2; column 3 is missing.
    a = F2(4, 4, rows)
    g, p = strategy(a, F2.identity(4), F2.identity(4), 0, 1, 2, 3, 3)
    return a, g, p


def test_row_and_column_search_prefers_pivot_column():
    # Row 3 reduces to 0b1001: column 3 is used even though column 0 is lower.
    a0 = F2(4, 4, [10, 13, 0, 14])
    a, g, p = _call(resolve_linear_dependency, a0.rows)
    assert a.rows == [10, 13, 9, 0]
    assert g.rows == [1, 2, 11, 4]
    assert p.is_equal(F2.identity(4))
    assert (g @ a0 @ p).is_equal(a)


def test_row_and_column_search_swaps_row_and_column():
    a0 = F2(4, 4, [10, 13, 1, 1])
    a, g, p = _call(resolve_linear_dependency, a0.rows)
    assert a.rows == [3, 13, 8, 8]
    assert g.rows == [1, 2, 8, 4]
    assert p.rows == [8, 2, 4, 1]
    assert (g @ a0 @ p).is_equal(a)


def test_row_and_column_search_skips_target_row():
    # Only the target row carries a free bit; it is not a candidate.
    with pytest.raises(UnresolvableDependencyError):
        _call(resolve_linear_dependency, [10, 13, 1, 0])


def test_row_and_column_search_fails_without_candidates():
    with pytest.raises(UnresolvableDependencyError) as excinfo:
        _call(resolve_linear_dependency, [10, 13, 0, 0])
    assert excinfo.value.pivot_bit == 3


def test_row_swap_strategy():
    a, g, p = _call(resolve_by_row_swap, [10, 13, 0, 14])
    assert a.rows == [10, 13, 9, 0]
    assert g.rows == [1, 2, 11, 4]
    assert p.is_equal(F2.identity(4))
    with pytest.raises(UnresolvableDependencyError):
        _call(resolve_by_row_swap, [10, 13, 1, 1])


def test_column_swap_strategy_uses_target_row():
    a, g, p = _call(resolve_by_column_swap, [10, 13, 1, 1])
    assert a.rows == [3, 13, 8, 8]
    assert g.is_equal(F2.identity(4))
    assert p.rows == [8, 2, 4, 1]
    with pytest.raises(UnresolvableDependencyError):
        _call(resolve_by_column_swap, [10, 13, 0, 14])


def test_rescue_core_with_row_swap():
    a0 = F2(4, 4, [10, 13, 12, 14])
    a = a0.copy()
    g, p = a.partial_gaussian_with_rescue(0, 1, 2, 3, resolve_linear_dependency)
    assert a.rows == [3, 4, 9, 1]
    assert g.rows == [10, 9, 11, 6]
    assert p.is_equal(F2.identity(4))
    assert a.check_gaussian(0, 1, 3)
    assert (g @ a0 @ p).is_equal(a)


def test_rescue_core_defaults_to_row_and_column_search():
    a = F2(4, 4, [10, 13, 12, 14])
    a.partial_gaussian_with_rescue(0, 1, 2, 3)
    assert a.rows == [3, 4, 9, 1]


def test_rescue_core_with_column_swap():
    a0 = F2(4, 4, [10, 13, 12, 13])
    a = a0.copy()
    g, p = a.partial_gaussian_with_rescue(0, 1, 2, 3, resolve_by_column_swap)
    assert a.rows == [3, 5, 8, 13]
    assert p.rows == [8, 2, 4, 1]
    assert a.check_gaussian(0, 1, 3)
    assert (g @ a0 @ p).is_equal(a)


def test_rescue_core_pulls_row_from_outside_window():
    a0 = F2(4, 3, [1, 2, 0, 4])
    a = a0.copy()
    g, p = a.partial_gaussian_with_rescue(0, 0, 2, 2)
    assert a.rows == [1, 2, 4, 0]
    assert g.rows == [1, 2, 8, 4]
    assert p.is_equal(F2.identity(3))
    assert (g @ a0 @ p).is_equal(a)


def test_rescue_core_without_rescue_needed():
    a0 = F2(4, 4, [10, 7, 4, 1])
    a = a0.copy()
    g, p = a.partial_gaussian_with_rescue(0, 1, 2, 3)
    assert a.rows == [3, 4, 9, 1]
    assert p.is_equal(F2.identity(4))
    assert (g @ a0 @ p).is_equal(a)


def test_rescue_core_unresolvable():
    a = F2(4, 4, [10, 13, 0, 0])
    with pytest.raises(UnresolvableDependencyError):
        a.partial_gaussian_with_rescue(0, 1, 2, 3)


def test_rescue_core_propagates_callback_error():
    class Boom(Exception):
        pass

    def failing(a, g, p, start_row, start_col, stop_row, stop_col, pivot_bit):
        raise Boom(pivot_bit)

    a = F2(4, 4, [10, 13, 12, 14])
    with pytest.raises(Boom):
        a.partial_gaussian_with_rescue(0, 1, 2, 3, failing)
    # Intermediate state: the first two columns were already reduced.
    assert a.rows == [10, 13, 1, 14]


def test_rescue_core_rejects_rescue_that_installs_nothing():
    def idle(a, g, p, start_row, start_col, stop_row, stop_col, pivot_bit):
        return g, p

    a = F2(4, 4, [10, 13, 12, 14])
    with pytest.raises(UnresolvableDependencyError):
        a.partial_gaussian_with_rescue(0, 1, 2, 3, idle)


def test_rescue_core_requires_tall_enough_window():
    with pytest.raises(ShapeMismatchError):
        F2(4, 4).partial_gaussian_with_rescue(0, 0, 1, 3)


@pytest.mark.parametrize("seed", range(20))
def test_rescue_core_accounting_law(seed):
    rng = random.Random(seed)
    n, m = 6, 8
    a0 = F2(n, m, [rng.getrandbits(m) for _ in range(n)])
    a = a0.copy()
    start_row, start_col, stop_row, stop_col = 1, 2, 4, 5
    try:
        g, p = a.partial_gaussian_with_rescue(start_row, start_col, stop_row, stop_col)
    except UnresolvableDependencyError as exc:
        # Besides the pivot rows found so far, only the target row can add rank.
        assert a0.rank() <= exc.pivot_bit - start_col + 1
        return
    assert a.check_gaussian(start_row, start_col, stop_col - start_col + 1)
    assert (g @ a0 @ p).is_equal(a)
