"""Conversion between F2 matrices and numpy uint8 arrays."""

from __future__ import annotations

import numpy as np

from .bits import bit_indices, row_from_bits
from .errors import ShapeMismatchError
from .matrix import F2


def from_array(arr) -> F2:
    """Build an F2 matrix from a 2-D integer array; entries are taken mod 2."""
    a = np.asarray(arr, dtype=np.int64)
    if a.ndim != 2:
        raise ShapeMismatchError(f"Expected a 2-D array, got {a.ndim} dimensions.")
    n, m = a.shape
    rows = [row_from_bits((a[i] % 2).tolist()) for i in range(n)]
    return F2(n, m, rows)


def to_array(f: F2) -> np.ndarray:
    out = np.zeros((f.n, f.m), dtype=np.uint8)
    for i, row in enumerate(f.rows):
        for j in bit_indices(row):
            out[i, j] = 1
    return out


__all__ = ["from_array", "to_array"]
