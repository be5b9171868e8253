"""Row primitives over GF(2) using int bitsets (LSB = column 0)."""

from __future__ import annotations

from typing import Iterable, List, Sequence


def row_from_bits(bits: Iterable[int]) -> int:
    """Pack a sequence of bits into an int bitset (LSB = column 0)."""
    row = 0
    for i, b in enumerate(bits):
        if b & 1:
            row |= 1 << i
    return row


def bits_from_row(row: int, n_cols: int) -> List[int]:
    """Unpack the first n_cols bits of a row, column 0 first."""
    return [(row >> j) & 1 for j in range(n_cols)]


def bit_indices(row: int) -> List[int]:
    indices: List[int] = []
    while row:
        lsb = row & -row
        indices.append(lsb.bit_length() - 1)
        row -= lsb
    return indices


def column_mask(start_col: int, stop_col: int) -> int:
    """Mask with ones on columns start_col..stop_col (both inclusive)."""
    if stop_col < start_col:
        return 0
    return ((1 << (stop_col - start_col + 1)) - 1) << start_col


def add_bits(x: int) -> int:
    """Sum of the bits of x over GF(2), i.e. its parity."""
    return x.bit_count() & 1


def partial_xor(x: int, y: int, start_col: int, stop_col: int) -> int:
    """Return x XOR (y restricted to columns start_col..stop_col inclusive)."""
    return x ^ (y & column_mask(start_col, stop_col))


def gf2_rank(rows: Sequence[int], n_cols: int) -> int:
    """Compute rank over GF(2) via Gaussian elimination."""
    work = list(rows)
    rank = 0
    row_idx = 0
    for col in range(n_cols):
        if row_idx == len(work):
            break
        pivot = None
        for r in range(row_idx, len(work)):
            if (work[r] >> col) & 1:
                pivot = r
                break
        if pivot is None:
            continue
        work[row_idx], work[pivot] = work[pivot], work[row_idx]
        for r in range(len(work)):
            if r != row_idx and ((work[r] >> col) & 1):
                work[r] ^= work[row_idx]
        rank += 1
        row_idx += 1
    return rank


__all__ = [
    "row_from_bits",
    "bits_from_row",
    "bit_indices",
    "column_mask",
    "add_bits",
    "partial_xor",
    "gf2_rank",
]
