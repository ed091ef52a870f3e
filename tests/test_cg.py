import numpy as np
import pytest

from gridsolvers.cg import CGResult, CSRMatrix, conjugate_gradient, main, poisson_matrix


def _dense(matrix: CSRMatrix) -> np.ndarray:
    dense = np.zeros((matrix.n, matrix.n))
    for row in range(matrix.n):
        start, stop = matrix.row_start[row], matrix.row_start[row + 1]
        dense[row, matrix.col_indices[start:stop]] += matrix.values[start:stop]
    return dense


def test_matvec_small_matrix():
    m = CSRMatrix([1.0, 2.0, 3.0], [0, 1, 1], [0, 2, 3])
    np.testing.assert_allclose(m.matvec([1.0, 1.0]), [3.0, 3.0])


def test_matvec_handles_empty_rows():
    m = CSRMatrix([5.0], [1], [0, 0, 1])
    np.testing.assert_allclose(m.matvec([2.0, 3.0]), [0.0, 15.0])


def test_matvec_rejects_wrong_length():
    m = CSRMatrix([1.0], [0], [0, 1])
    with pytest.raises(ValueError):
        m.matvec([1.0, 2.0])


def test_csr_rejects_inconsistent_arrays():
    with pytest.raises(ValueError):
        CSRMatrix([1.0, 2.0], [0], [0, 2])
    with pytest.raises(ValueError):
        CSRMatrix([1.0], [3], [0, 1])


def test_poisson_single_cell():
    m = poisson_matrix(1)
    np.testing.assert_array_equal(m.values, [4.0])
    np.testing.assert_array_equal(m.col_indices, [0])
    np.testing.assert_array_equal(m.row_start, [0, 1])


def test_poisson_entry_order():
    m = poisson_matrix(2)
    np.testing.assert_array_equal(m.row_start, [0, 3, 6, 9, 12])
    np.testing.assert_array_equal(
        m.col_indices, [0, 1, 2, 1, 0, 3, 2, 0, 3, 3, 1, 2]
    )
    np.testing.assert_array_equal(m.values[m.row_start[:-1]], [4.0] * 4)


@pytest.mark.parametrize("grid_size", [2, 3, 5])
def test_poisson_is_symmetric_and_diagonally_dominant(grid_size):
    dense = _dense(poisson_matrix(grid_size))
    np.testing.assert_array_equal(dense, dense.T)
    off = np.abs(dense).sum(axis=1) - np.abs(np.diag(dense))
    assert np.all(np.diag(dense) >= off)


def test_poisson_nnz_count():
    g = 4
    m = poisson_matrix(g)
    assert m.nnz == g * g + 4 * g * (g - 1)


def test_poisson_rejects_empty_grid():
    with pytest.raises(ValueError):
        poisson_matrix(0)


def test_cg_solves_poisson_system():
    m = poisson_matrix(6)
    b = np.ones(m.n)
    result = conjugate_gradient(m, b, np.zeros(m.n), 1000, 1e-10)
    assert result.converged
    assert result.residual < 1e-10
    np.testing.assert_allclose(m.matvec(result.x), b, atol=1e-8)
    np.testing.assert_allclose(result.x, np.linalg.solve(_dense(m), b), atol=1e-8)


def test_cg_respects_iteration_limit():
    m = poisson_matrix(8)
    result = conjugate_gradient(m, np.ones(m.n), None, 1, 1e-12)
    assert isinstance(result, CGResult)
    assert not result.converged
    assert result.iterations == 1


def test_cg_does_not_modify_initial_guess():
    m = poisson_matrix(3)
    x0 = np.zeros(m.n)
    conjugate_gradient(m, np.ones(m.n), x0, 100, 1e-10)
    np.testing.assert_array_equal(x0, np.zeros(m.n))


def test_cg_reports_progress_on_first_iteration():
    m = poisson_matrix(20)
    calls = []
    conjugate_gradient(m, np.ones(m.n), None, 3, 1e-14, lambda i, r: calls.append((i, r)))
    assert [i for i, _ in calls] == [0]
    assert calls[0][1] > 0


def test_cg_zero_rhs_converges_immediately():
    m = poisson_matrix(3)
    result = conjugate_gradient(m, np.zeros(m.n))
    assert result.converged
    assert result.iterations == 0
    np.testing.assert_array_equal(result.x, np.zeros(m.n))


def test_cg_rejects_bad_shapes():
    m = poisson_matrix(2)
    with pytest.raises(ValueError):
        conjugate_gradient(m, np.ones(3))
    with pytest.raises(ValueError):
        conjugate_gradient(m, np.ones(4), np.zeros(5))


def test_main_prints_temperature(capsys):
    assert main(["--grid-size", "4"]) == 0
    out = capsys.readouterr().out
    assert "Final residual" in out
    assert "Temperature distribution:" in out
    assert "Temperature at (2, 0) = " in out