import numpy as np
import pytest

from matrix_analyzer.matrix.generator import generate_random_matrix
from matrix_analyzer.matrix.multiply import multiply_with_flops


def test_generated_matrix_shape_and_range():
    matrix = generate_random_matrix(5)
    assert len(matrix) == 5
    assert all(len(row) == 5 for row in matrix)
    assert all(0.0 <= value < 10.0 for row in matrix for value in row)


def test_generate_zero_size_is_empty():
    assert generate_random_matrix(0) == []


def test_generator_uses_injected_rng():
    first = generate_random_matrix(3, np.random.default_rng(7))
    second = generate_random_matrix(3, np.random.default_rng(7))
    assert first == second


@pytest.mark.parametrize("n", [1, 2, 5, 12])
def test_flop_count_is_two_n_cubed(n):
    a = generate_random_matrix(n)
    b = generate_random_matrix(n)
    _, flops = multiply_with_flops(a, b, n)
    assert flops == 2 * n ** 3


def test_flop_count_independent_of_values():
    zeros = [[0.0] * 4 for _ in range(4)]
    _, flops = multiply_with_flops(zeros, zeros, 4)
    assert flops == 128


def test_zero_size_product():
    result, flops = multiply_with_flops([], [], 0)
    assert result == []
    assert flops == 0


def test_product_matches_numpy():
    rng = np.random.default_rng(3)
    a = generate_random_matrix(6, rng)
    b = generate_random_matrix(6, rng)
    result, _ = multiply_with_flops(a, b, 6)
    np.testing.assert_allclose(np.array(result), np.array(a) @ np.array(b))


def test_known_product():
    a = [[1.0, 2.0], [3.0, 4.0]]
    b = [[5.0, 6.0], [7.0, 8.0]]
    result, flops = multiply_with_flops(a, b, 2)
    assert result == [[19.0, 22.0], [43.0, 50.0]]
    assert flops == 16
