"""Dense matrices over GF(2) with int bitset rows."""

from __future__ import annotations

import operator
import random
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from . import gaussian
from .bits import add_bits, bit_indices, partial_xor, row_from_bits
from .errors import (
    IndexOutOfBoundsError,
    NonSquareSubmatrixError,
    ShapeMismatchError,
    SubmatrixTooLargeError,
)
from .printing import format_matrix


@dataclass
class F2:
    """Matrix over GF(2).

    Row i is a Python int whose bit j (LSB = column 0) is the entry (i, j).
    Bits at positions >= m are never set.
    """

    n: int
    m: int
    rows: Optional[List[int]] = None

    def __post_init__(self) -> None:
        if self.n < 0 or self.m < 0:
            raise ShapeMismatchError(
                f"Matrix dimensions must be nonnegative, got {self.n}x{self.m}."
            )
        data = self.rows
        self.rows = [0] * self.n
        if data is not None:
            self.set(data)

    @classmethod
    def identity(cls, n: int, m: Optional[int] = None) -> "F2":
        return cls(n, n if m is None else m).set_to_identity()

    @classmethod
    def from_rows(cls, rows: Sequence[int], m: int) -> "F2":
        return cls(len(rows), m, list(rows))

    @classmethod
    def from_bits(cls, bit_rows: Sequence[Sequence[int]]) -> "F2":
        """Build a matrix from nested lists of 0/1 entries."""
        if not bit_rows:
            return cls(0, 0)
        m = len(bit_rows[0])
        for bits in bit_rows:
            if len(bits) != m:
                raise ShapeMismatchError("All rows must have the same length.")
        return cls(len(bit_rows), m, [row_from_bits(bits) for bits in bit_rows])

    def _check_row(self, i: int) -> None:
        if i < 0 or i >= self.n:
            raise IndexOutOfBoundsError(f"Row index {i} out of range for {self.n} rows.")

    def _check_col(self, j: int) -> None:
        if j < 0 or j >= self.m:
            raise IndexOutOfBoundsError(
                f"Column index {j} out of range for {self.m} columns."
            )

    def set(self, data: Iterable[int]) -> "F2":
        """Replace the row contents with a copy of data."""
        try:
            new_rows = [operator.index(row) for row in data]
        except TypeError as exc:
            raise ShapeMismatchError("Rows must be integer bitsets.") from exc
        if len(new_rows) != self.n:
            raise ShapeMismatchError(f"Expected {self.n} rows, got {len(new_rows)}.")
        for i, row in enumerate(new_rows):
            if row < 0 or row.bit_length() > self.m:
                raise ShapeMismatchError(
                    f"Row {i} ({row}) does not fit in {self.m} columns."
                )
        self.rows = new_rows
        return self

    def set_to_identity(self) -> "F2":
        self.rows = [(1 << i) if i < self.m else 0 for i in range(self.n)]
        return self

    def copy(self) -> "F2":
        return F2(self.n, self.m, self.rows)

    def at(self, i: int, j: int) -> int:
        self._check_row(i)
        self._check_col(j)
        return (self.rows[i] >> j) & 1

    def set_bit(self, i: int, j: int, value: int) -> None:
        self._check_row(i)
        self._check_col(j)
        if value & 1:
            self.rows[i] |= 1 << j
        else:
            self.rows[i] &= ~(1 << j)

    def is_equal(self, other: "F2") -> bool:
        if self.n != other.n or self.m != other.m:
            return False
        return all(a == b for a, b in zip(self.rows, other.rows))

    def is_zero(self) -> bool:
        return not any(self.rows)

    def weight(self) -> int:
        """Number of nonzero entries."""
        return sum(row.bit_count() for row in self.rows)

    def swap_rows(self, i: int, j: int) -> None:
        self._check_row(i)
        self._check_row(j)
        self.rows[i], self.rows[j] = self.rows[j], self.rows[i]

    def swap_cols(self, i: int, j: int) -> None:
        self._check_col(i)
        self._check_col(j)
        if i == j:
            return
        flip = (1 << i) | (1 << j)
        for r, row in enumerate(self.rows):
            # Only rows whose two bits differ change.
            if ((row >> i) ^ (row >> j)) & 1:
                self.rows[r] = row ^ flip

    def xor_rows(
        self,
        target: int,
        source: int,
        start_col: Optional[int] = None,
        stop_col: Optional[int] = None,
    ) -> None:
        """Add row source into row target, optionally only on a column range."""
        self._check_row(target)
        self._check_row(source)
        if start_col is None and stop_col is None:
            self.rows[target] ^= self.rows[source]
            return
        lo = 0 if start_col is None else start_col
        hi = self.m - 1 if stop_col is None else stop_col
        self._check_col(lo)
        self._check_col(hi)
        self.rows[target] = partial_xor(self.rows[target], self.rows[source], lo, hi)

    def get_col(self, j: int) -> int:
        """Column j as a bitset whose bit i is the entry (i, j)."""
        self._check_col(j)
        col = 0
        for i, row in enumerate(self.rows):
            if (row >> j) & 1:
                col |= 1 << i
        return col

    def transpose(self) -> "F2":
        result = [0] * self.m
        for i, row in enumerate(self.rows):
            for k in bit_indices(row):
                result[k] |= 1 << i
        self.rows = result
        self.n, self.m = self.m, self.n
        return self

    def get_submatrix(
        self, start_row: int, start_col: int, stop_row: int, stop_col: int
    ) -> "F2":
        """Copy of rows [start_row, stop_row) and columns [start_col, stop_col)."""
        if not (0 <= start_row <= stop_row <= self.n):
            raise IndexOutOfBoundsError(
                f"Row range [{start_row}, {stop_row}) invalid for {self.n} rows."
            )
        if not (0 <= start_col <= stop_col <= self.m):
            raise IndexOutOfBoundsError(
                f"Column range [{start_col}, {stop_col}) invalid for {self.m} columns."
            )
        width = stop_col - start_col
        mask = (1 << width) - 1
        rows = [(self.rows[i] >> start_col) & mask for i in range(start_row, stop_row)]
        return F2(stop_row - start_row, width, rows)

    def set_submatrix(self, sub: "F2", start_row: int, start_col: int) -> "F2":
        """Overwrite the window at (start_row, start_col) with sub."""
        if start_row < 0 or start_col < 0:
            raise IndexOutOfBoundsError("Submatrix position must be nonnegative.")
        if sub.n + start_row > self.n or sub.m + start_col > self.m:
            raise SubmatrixTooLargeError(
                f"{sub.n}x{sub.m} submatrix does not fit at ({start_row}, {start_col}) "
                f"in a {self.n}x{self.m} matrix."
            )
        keep = ~(((1 << sub.m) - 1) << start_col)
        for k, row in enumerate(sub.rows):
            i = start_row + k
            self.rows[i] = (self.rows[i] & keep) ^ (row << start_col)
        return self

    def partial_transpose(self, start_row: int, start_col: int, n: int) -> "F2":
        """Transpose the n x n square whose upper-left corner is (start_row, start_col)."""
        if (
            n < 0
            or start_row < 0
            or start_col < 0
            or start_row + n > self.n
            or start_col + n > self.m
        ):
            raise NonSquareSubmatrixError(
                f"Cannot transpose a {n}x{n} square at ({start_row}, {start_col}) "
                f"in a {self.n}x{self.m} matrix."
            )
        square = self.get_submatrix(start_row, start_col, start_row + n, start_col + n)
        return self.set_submatrix(square.transpose(), start_row, start_col)

    def permute_cols(self, rng: Optional[random.Random] = None) -> "F2":
        """Randomly swap columns in place and return the m x m permutation matrix.

        rng defaults to random.SystemRandom (os.urandom). Pass a seeded
        random.Random for reproducible permutations.
        """
        if rng is None:
            rng = random.SystemRandom()
        perm = F2.identity(self.m)
        for i in range(self.m):
            k = rng.randrange(self.m)
            if k == i:
                continue
            self.swap_cols(i, k)
            perm.swap_cols(i, k)
        return perm

    def add(self, other: "F2") -> "F2":
        if self.n != other.n or self.m != other.m:
            raise ShapeMismatchError(
                f"Cannot add {other.n}x{other.m} to {self.n}x{self.m}."
            )
        self.rows = [a ^ b for a, b in zip(self.rows, other.rows)]
        return self

    def mul(self, other: "F2") -> "F2":
        """Replace self by self * other."""
        if self.m != other.n:
            raise ShapeMismatchError(
                f"Cannot multiply {self.n}x{self.m} by {other.n}x{other.m}."
            )
        cols = [other.get_col(j) for j in range(other.m)]
        self.rows = [
            row_from_bits(add_bits(row & col) for col in cols) for row in self.rows
        ]
        self.m = other.m
        return self

    def __add__(self, other: "F2") -> "F2":
        return self.copy().add(other)

    def __matmul__(self, other: "F2") -> "F2":
        return self.copy().mul(other)

    def gaussian_elimination(self) -> "F2":
        return gaussian.gaussian_elimination(self)

    def partial_gaussian(
        self, start_row: int, start_col: int, stop_row: int, stop_col: int
    ) -> "F2":
        return gaussian.partial_gaussian(self, start_row, start_col, stop_row, stop_col)

    def partial_gaussian_with_rescue(
        self,
        start_row: int,
        start_col: int,
        stop_row: int,
        stop_col: int,
        rescue: Optional[Callable[..., Tuple["F2", "F2"]]] = None,
    ) -> Tuple["F2", "F2"]:
        return gaussian.partial_gaussian_with_rescue(
            self, start_row, start_col, stop_row, stop_col, rescue
        )

    def check_gaussian(self, start_row: int, start_col: int, n: int) -> bool:
        return gaussian.check_gaussian(self, start_row, start_col, n)

    def rank(self) -> int:
        return gaussian.rank(self)

    def __str__(self) -> str:
        return format_matrix(self, " ", "\n")


__all__ = ["F2"]
