"""Textbook matrix multiplication with floating-point operation counting."""

from __future__ import annotations

from typing import Tuple

from matrix_analyzer.constants import FLOPS_PER_INNER_STEP
from matrix_analyzer.matrix.generator import Matrix


def multiply_with_flops(a: Matrix, b: Matrix, n: int) -> Tuple[Matrix, int]:
    """Multiply two ``n`` x ``n`` matrices with the naive triple loop.

    Every innermost iteration counts one multiply and one add, so the returned
    operation count is exactly ``2 * n**3`` whatever the matrix contents.
    """
    result: Matrix = [[0.0] * n for _ in range(n)]
    flops = 0

    for i in range(n):
        row_a = a[i]
        row_result = result[i]
        for j in range(n):
            total = 0.0
            for k in range(n):
                total += row_a[k] * b[k][j]
                flops += FLOPS_PER_INNER_STEP
            row_result[j] = total

    return result, flops
