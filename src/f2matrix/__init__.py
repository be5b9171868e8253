"""f2matrix: dense matrices over GF(2) and partial Gaussian reduction."""

from .arrays import from_array, to_array
from .bits import (
    add_bits,
    bit_indices,
    bits_from_row,
    column_mask,
    gf2_rank,
    partial_xor,
    row_from_bits,
)
from .errors import (
    F2Error,
    IndexOutOfBoundsError,
    NonSquareSubmatrixError,
    ShapeMismatchError,
    SubmatrixTooLargeError,
    UnresolvableDependencyError,
)
from .gaussian import (
    check_gaussian,
    gaussian_elimination,
    partial_gaussian,
    partial_gaussian_with_rescue,
    rank,
)
from .matrix import F2
from .printing import (
    format_latex,
    format_matrix,
    pretty_print,
    print_csv,
    print_latex,
    print_slim,
)
from .resolver import (
    resolve_by_column_swap,
    resolve_by_row_swap,
    resolve_linear_dependency,
)

__all__ = [
    "F2",
    "F2Error",
    "ShapeMismatchError",
    "IndexOutOfBoundsError",
    "SubmatrixTooLargeError",
    "NonSquareSubmatrixError",
    "UnresolvableDependencyError",
    "row_from_bits",
    "bits_from_row",
    "bit_indices",
    "column_mask",
    "add_bits",
    "partial_xor",
    "gf2_rank",
    "gaussian_elimination",
    "partial_gaussian",
    "partial_gaussian_with_rescue",
    "check_gaussian",
    "rank",
    "resolve_linear_dependency",
    "resolve_by_row_swap",
    "resolve_by_column_swap",
    "format_matrix",
    "format_latex",
    "pretty_print",
    "print_latex",
    "print_csv",
    "print_slim",
    "from_array",
    "to_array",
]
