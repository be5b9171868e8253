"""Gaussian elimination over GF(2), full and restricted to a window.

The window routines take inclusive bounds: rows start_row..stop_row and
columns start_col..stop_col. The reduced window has its diagonal on
(start_row + k, start_col + k).

partial_gaussian_with_rescue() additionally returns two accumulators, G
(n x n) and P (m x m), both starting as the identity. Every row operation
on the input is repeated on G and every column swap on P, so that on
success G @ A0 @ P == A, where A0 is the input at entry.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Tuple

from .bits import column_mask, gf2_rank
from .errors import IndexOutOfBoundsError, ShapeMismatchError, UnresolvableDependencyError
from .resolver import resolve_linear_dependency

if TYPE_CHECKING:
    from .matrix import F2

LOG = logging.getLogger(__name__)

# rescue(a, g, p, start_row, start_col, stop_row, stop_col, pivot_bit) -> (g, p)
Rescue = Callable[["F2", "F2", "F2", int, int, int, int, int], Tuple["F2", "F2"]]


def _check_window(
    f: "F2", start_row: int, start_col: int, stop_row: int, stop_col: int
) -> None:
    if not (0 <= start_row <= stop_row < f.n):
        raise IndexOutOfBoundsError(
            f"Row window [{start_row}, {stop_row}] invalid for {f.n} rows."
        )
    if not (0 <= start_col <= stop_col < f.m):
        raise IndexOutOfBoundsError(
            f"Column window [{start_col}, {stop_col}] invalid for {f.m} columns."
        )


def _find_pivot(f: "F2", pivot_bit: int, first_row: int, last_row: int) -> Optional[int]:
    bit = 1 << pivot_bit
    for r in range(first_row, last_row + 1):
        if f.rows[r] & bit:
            return r
    return None


def _eliminate_below(
    f: "F2", target_row: int, pivot_bit: int, last_row: int, g: Optional["F2"] = None
) -> None:
    bit = 1 << pivot_bit
    for r in range(target_row + 1, last_row + 1):
        if f.rows[r] & bit:
            f.xor_rows(r, target_row)
            if g is not None:
                g.xor_rows(r, target_row)


def _back_substitute(
    f: "F2",
    start_row: int,
    start_col: int,
    stop_row: int,
    stop_col: int,
    g: Optional["F2"] = None,
) -> None:
    for pivot_bit in range(stop_col, start_col - 1, -1):
        target_row = start_row + pivot_bit - start_col
        # Columns that never received a pivot are left alone.
        if target_row > stop_row or not (f.rows[target_row] >> pivot_bit) & 1:
            continue
        bit = 1 << pivot_bit
        for r in range(start_row, stop_row + 1):
            if r != target_row and f.rows[r] & bit:
                f.xor_rows(r, target_row)
                if g is not None:
                    g.xor_rows(r, target_row)


def gaussian_elimination(f: "F2") -> "F2":
    """Reduce f in place; a square full-rank matrix becomes the identity.

    Pivots live on the diagonal. A column whose diagonal row cannot be
    filled from the rows below is skipped, so rank-deficient input keeps
    zero rows under the pivots found. Columns past the last row (m > n)
    have no candidate rows and are skipped as well.
    """
    if f.n == 0 or f.m == 0:
        return f
    for pivot_bit in range(min(f.n, f.m)):
        r = _find_pivot(f, pivot_bit, pivot_bit, f.n - 1)
        if r is None:
            continue
        if r != pivot_bit:
            f.swap_rows(pivot_bit, r)
        _eliminate_below(f, pivot_bit, pivot_bit, f.n - 1)
    _back_substitute(f, 0, 0, f.n - 1, f.m - 1)
    return f


def partial_gaussian(
    f: "F2", start_row: int, start_col: int, stop_row: int, stop_col: int
) -> "F2":
    """Reduce the window to the identity where the window allows it.

    Row operations act on entire rows, not only on the window columns.
    """
    _check_window(f, start_row, start_col, stop_row, stop_col)
    for pivot_bit in range(start_col, stop_col + 1):
        target_row = start_row + pivot_bit - start_col
        if target_row > stop_row:
            break
        r = _find_pivot(f, pivot_bit, target_row, stop_row)
        if r is None:
            continue
        if r != target_row:
            f.swap_rows(target_row, r)
        _eliminate_below(f, target_row, pivot_bit, stop_row)
    _back_substitute(f, start_row, start_col, stop_row, stop_col)
    return f


def partial_gaussian_with_rescue(
    f: "F2",
    start_row: int,
    start_col: int,
    stop_row: int,
    stop_col: int,
    rescue: Optional[Rescue] = None,
) -> Tuple["F2", "F2"]:
    """Force the window to the identity and return the accumulators (G, P).

    When no row of the window holds a 1 in the current pivot column, rescue
    is called to bring one in (default: resolver.resolve_linear_dependency)
    and the same column is searched again. Errors raised by rescue
    propagate; f, G and P are then left in their intermediate state.
    """
    _check_window(f, start_row, start_col, stop_row, stop_col)
    if stop_row - start_row < stop_col - start_col:
        raise ShapeMismatchError(
            f"Window rows {start_row}..{stop_row} cannot hold an identity "
            f"over columns {start_col}..{stop_col}."
        )
    if rescue is None:
        rescue = resolve_linear_dependency

    g = type(f).identity(f.n)
    p = type(f).identity(f.m)
    for pivot_bit in range(start_col, stop_col + 1):
        target_row = start_row + pivot_bit - start_col
        r = _find_pivot(f, pivot_bit, target_row, stop_row)
        if r is None:
            LOG.debug(
                "No pivot for column %d in rows %d..%d; rescuing.",
                pivot_bit,
                target_row,
                stop_row,
            )
            g, p = rescue(f, g, p, start_row, start_col, stop_row, stop_col, pivot_bit)
            r = _find_pivot(f, pivot_bit, target_row, stop_row)
            if r is None:
                raise UnresolvableDependencyError(
                    f"Rescue left no pivot for column {pivot_bit}.",
                    pivot_bit=pivot_bit,
                )
        if r != target_row:
            f.swap_rows(target_row, r)
            g.swap_rows(target_row, r)
        _eliminate_below(f, target_row, pivot_bit, stop_row, g)
    _back_substitute(f, start_row, start_col, stop_row, stop_col, g)
    return g, p


def check_gaussian(f: "F2", start_row: int, start_col: int, n: int) -> bool:
    """True iff the n x n square at (start_row, start_col) is the identity."""
    if start_row < 0 or start_col < 0 or start_row + n > f.n or start_col + n > f.m:
        return False
    mask = column_mask(start_col, start_col + n - 1)
    for k in range(n):
        if (f.rows[start_row + k] & mask) ^ (1 << (start_col + k)):
            return False
    return True


def rank(f: "F2") -> int:
    return gf2_rank(f.rows, f.m)


__all__ = [
    "Rescue",
    "gaussian_elimination",
    "partial_gaussian",
    "partial_gaussian_with_rescue",
    "check_gaussian",
    "rank",
]
