"""Text renderings of F2 matrices."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Optional, TextIO

if TYPE_CHECKING:
    from .matrix import F2

LATEX_BEGIN = "\\begin{bmatrix}\n"
LATEX_END = "\\end{bmatrix}\n"


def format_matrix(f: "F2", val_sep: str, line_sep: str) -> str:
    """Render each row as its m bits joined by val_sep, followed by line_sep."""
    lines = []
    for row in f.rows:
        lines.append(val_sep.join(str((row >> j) & 1) for j in range(f.m)) + line_sep)
    return "".join(lines)


def format_latex(f: "F2") -> str:
    return LATEX_BEGIN + format_matrix(f, " & ", " \\\\\n") + LATEX_END


def pretty_print(f: "F2", file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_matrix(f, " ", "\n"))


def print_latex(f: "F2", file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_latex(f))


def print_csv(f: "F2", file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_matrix(f, ", ", "\n"))


def print_slim(f: "F2", file: Optional[TextIO] = None) -> None:
    (file or sys.stdout).write(format_matrix(f, "", "\n"))


__all__ = [
    "format_matrix",
    "format_latex",
    "pretty_print",
    "print_latex",
    "print_csv",
    "print_slim",
]
