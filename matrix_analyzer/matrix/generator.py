"""Random square matrices for the benchmark."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from matrix_analyzer.constants import MATRIX_VALUE_HIGH, MATRIX_VALUE_LOW

Matrix = List[List[float]]


def generate_random_matrix(n: int, rng: Optional[np.random.Generator] = None) -> Matrix:
    """Return an ``n`` x ``n`` matrix of uniform values in [0, 10).

    The values are drawn with numpy and handed back as nested Python lists,
    which is what the pure-Python multiplication loop indexes fastest. A fresh
    unseeded generator is used unless one is passed in.
    """
    if n <= 0:
        return []
    generator = rng if rng is not None else np.random.default_rng()
    values = generator.uniform(MATRIX_VALUE_LOW, MATRIX_VALUE_HIGH, size=(n, n))
    return values.tolist()
