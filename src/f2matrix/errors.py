"""Exceptions raised by F2 matrix operations."""

from __future__ import annotations

from typing import Optional


class F2Error(Exception):
    """Base class for all f2matrix errors."""


class ShapeMismatchError(F2Error, ValueError):
    """Matrix dimensions disagree (add, mul, set, construction)."""


class IndexOutOfBoundsError(F2Error, IndexError):
    """A row or column index lies outside the matrix."""


class SubmatrixTooLargeError(F2Error, ValueError):
    """The submatrix does not fit at the requested position."""


class NonSquareSubmatrixError(F2Error, ValueError):
    """The square window for a partial transpose leaves the matrix."""


class UnresolvableDependencyError(F2Error, RuntimeError):
    def __init__(self, message: str, *, pivot_bit: Optional[int] = None) -> None:
        super().__init__(message)
        self.pivot_bit = pivot_bit


__all__ = [
    "F2Error",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "SubmatrixTooLargeError",
    "NonSquareSubmatrixError",
    "UnresolvableDependencyError",
]
