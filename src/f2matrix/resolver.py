"""Pivot rescue strategies for partial_gaussian_with_rescue().

A strategy is called when no row of the window holds a 1 in the current
pivot column. It receives (a, g, p, start_row, start_col, stop_row,
stop_col, pivot_bit), moves a usable pivot into the target row
start_row + pivot_bit - start_col, repeats every row operation on g and
every column swap on p, and returns (g, p). When nothing can be moved in
it raises UnresolvableDependencyError.

Rows start_row..target_row-1 and columns start_col..pivot_bit-1 already
hold pivots and are never swapped out. The row scans skip the target row
itself as well; only resolve_by_column_swap works inside the target row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Tuple

from .bits import column_mask
from .errors import UnresolvableDependencyError

if TYPE_CHECKING:
    from .matrix import F2

LOG = logging.getLogger(__name__)


def _reduce_against_pivots(
    a: "F2", row: int, start_row: int, start_col: int, pivot_bit: int
) -> int:
    """Clear the bits of row in the pivot columns start_col..pivot_bit-1."""
    for col in range(start_col, pivot_bit):
        if (row >> col) & 1:
            row ^= a.rows[start_row + col - start_col]
    return row


def _install_pivot(
    a: "F2",
    g: "F2",
    p: "F2",
    row: int,
    col: int,
    start_row: int,
    start_col: int,
    pivot_bit: int,
) -> None:
    target_row = start_row + pivot_bit - start_col
    if row != target_row:
        a.swap_rows(row, target_row)
        g.swap_rows(row, target_row)
    # The new row may still carry ones in columns that already have pivots.
    for c in range(start_col, pivot_bit):
        if (a.rows[target_row] >> c) & 1:
            pivot_row = start_row + c - start_col
            a.xor_rows(target_row, pivot_row)
            g.xor_rows(target_row, pivot_row)
    if col != pivot_bit:
        a.swap_cols(col, pivot_bit)
        p.swap_cols(col, pivot_bit)


def _rescue(
    a: "F2",
    g: "F2",
    p: "F2",
    start_row: int,
    start_col: int,
    pivot_bit: int,
    candidate_rows: Iterable[int],
    allowed_cols: int,
) -> Tuple["F2", "F2"]:
    for r in candidate_rows:
        reduced = _reduce_against_pivots(a, a.rows[r], start_row, start_col, pivot_bit)
        hits = reduced & allowed_cols
        if not hits:
            continue
        if hits & (1 << pivot_bit):
            c = pivot_bit
        else:
            c = (hits & -hits).bit_length() - 1
        LOG.debug("Pivot for column %d taken from (%d, %d).", pivot_bit, r, c)
        _install_pivot(a, g, p, r, c, start_row, start_col, pivot_bit)
        return g, p
    LOG.debug("No pivot candidate left for column %d.", pivot_bit)
    raise UnresolvableDependencyError(
        f"Cannot resolve linear dependency at column {pivot_bit}.",
        pivot_bit=pivot_bit,
    )


def _free_rows(a: "F2", start_row: int, target_row: int) -> Iterable[int]:
    return (r for r in range(a.n) if not start_row <= r <= target_row)


def resolve_linear_dependency(
    a: "F2",
    g: "F2",
    p: "F2",
    start_row: int,
    start_col: int,
    stop_row: int,
    stop_col: int,
    pivot_bit: int,
) -> Tuple["F2", "F2"]:
    """Swap in both a row and a column to supply the missing pivot.

    Rows outside start_row..target_row are scanned top to bottom. Each is
    first cleared on the fixed columns with the pivot rows; the first row
    left with a 1 outside the fixed columns supplies the pivot, taken from
    pivot_bit itself when set, else from its lowest free column.
    """
    target_row = start_row + pivot_bit - start_col
    fixed_cols = column_mask(start_col, pivot_bit - 1)
    allowed_cols = ((1 << a.m) - 1) & ~fixed_cols
    return _rescue(
        a,
        g,
        p,
        start_row,
        start_col,
        pivot_bit,
        _free_rows(a, start_row, target_row),
        allowed_cols,
    )


def resolve_by_row_swap(
    a: "F2",
    g: "F2",
    p: "F2",
    start_row: int,
    start_col: int,
    stop_row: int,
    stop_col: int,
    pivot_bit: int,
) -> Tuple["F2", "F2"]:
    """Only swap rows; p is returned unchanged."""
    target_row = start_row + pivot_bit - start_col
    return _rescue(
        a,
        g,
        p,
        start_row,
        start_col,
        pivot_bit,
        _free_rows(a, start_row, target_row),
        1 << pivot_bit,
    )


def resolve_by_column_swap(
    a: "F2",
    g: "F2",
    p: "F2",
    start_row: int,
    start_col: int,
    stop_row: int,
    stop_col: int,
    pivot_bit: int,
) -> Tuple["F2", "F2"]:
    """Only swap columns; the target row is the sole candidate."""
    target_row = start_row + pivot_bit - start_col
    fixed_cols = column_mask(start_col, pivot_bit - 1)
    allowed_cols = ((1 << a.m) - 1) & ~fixed_cols
    return _rescue(a, g, p, start_row, start_col, pivot_bit, [target_row], allowed_cols)


__all__ = [
    "resolve_linear_dependency",
    "resolve_by_row_swap",
    "resolve_by_column_swap",
]
