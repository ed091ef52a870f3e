"""Conjugate-gradient solver for sparse symmetric systems in CSR form.

The command solves the steady heat equation on a square grid: a five-point
Laplacian with a unit heat source in every cell.
"""

from __future__ import annotations

import argparse
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

REPORT_INTERVAL = 100


@dataclass
class CSRMatrix:
    """Square sparse matrix in compressed sparse row layout."""

    values: np.ndarray
    col_indices: np.ndarray
    row_start: np.ndarray

    def __post_init__(self) -> None:
        self.values = np.asarray(self.values, dtype=float)
        self.col_indices = np.asarray(self.col_indices, dtype=np.int64)
        self.row_start = np.asarray(self.row_start, dtype=np.int64)
        if self.row_start.ndim != 1 or self.row_start.size < 1:
            raise ValueError("row_start needs one entry per row plus one")
        if self.values.shape != self.col_indices.shape:
            raise ValueError("values and col_indices must have the same length")
        if self.row_start[0] != 0 or self.row_start[-1] != self.values.size:
            raise ValueError("row_start must begin at 0 and end at the number of entries")
        if np.any(np.diff(self.row_start) < 0):
            raise ValueError("row_start must not decrease")
        n = self.n
        if self.col_indices.size and (
            self.col_indices.min() < 0 or self.col_indices.max() >= n
        ):
            raise ValueError("column index out of range")

    @property
    def n(self) -> int:
        """Number of rows (and columns)."""
        return self.row_start.size - 1

    @property
    def nnz(self) -> int:
        """Number of stored entries."""
        return self.values.size

    def matvec(self, x) -> np.ndarray:
        """Return the product of the matrix with vector ``x``."""
        x = np.asarray(x, dtype=float)
        if x.shape != (self.n,):
            raise ValueError(f"vector must have length {self.n}")
        rows = np.repeat(np.arange(self.n), np.diff(self.row_start))
        return np.bincount(
            rows, weights=self.values * x[self.col_indices], minlength=self.n
        )


def poisson_matrix(grid_size: int) -> CSRMatrix:
    """Five-point Laplacian (4 on the diagonal, -1 per neighbour) on a square grid.

    Entries of a row are stored diagonal first, then the upper, left, right
    and lower neighbours.
    """
    if grid_size < 1:
        raise ValueError("grid size must be at least 1")
    n = grid_size * grid_size
    i = np.arange(n)
    candidates = np.stack([i, i - grid_size, i - 1, i + 1, i + grid_size], axis=1)
    present = np.stack(
        [
            np.ones(n, dtype=bool),
            i >= grid_size,
            i % grid_size != 0,
            (i + 1) % grid_size != 0,
            i < n - grid_size,
        ],
        axis=1,
    )
    weights = np.broadcast_to(np.array([4.0, -1.0, -1.0, -1.0, -1.0]), (n, 5))
    row_start = np.concatenate(([0], np.cumsum(present.sum(axis=1))))
    return CSRMatrix(weights[present], candidates[present], row_start)


@dataclass
class CGResult:
    """Outcome of a conjugate-gradient solve."""

    x: np.ndarray
    iterations: int
    residual: float
    converged: bool


def conjugate_gradient(
    matrix: CSRMatrix,
    b,
    x0=None,
    max_iterations: int = 1000,
    tolerance: float = 1e-8,
    report: Callable[[int, float], None] | None = None,
) -> CGResult:
    """Solve ``matrix @ x = b`` by conjugate gradients.

    Stops once the residual norm drops below ``tolerance`` or after
    ``max_iterations`` iterations. ``report(iteration, residual)`` is called
    every hundredth iteration that has not yet converged.
    """
    if max_iterations < 0:
        raise ValueError("max_iterations must not be negative")
    n = matrix.n
    b = np.asarray(b, dtype=float)
    if b.shape != (n,):
        raise ValueError(f"right-hand side must have length {n}")
    x = np.zeros(n) if x0 is None else np.array(x0, dtype=float)
    if x.shape != (n,):
        raise ValueError(f"initial guess must have length {n}")

    r = b - matrix.matvec(x)
    p = r.copy()
    rsold = float(r @ r)
    if rsold == 0.0:
        return CGResult(x, 0, 0.0, True)

    residual = math.sqrt(rsold)
    for iteration in range(max_iterations):
        ap = matrix.matvec(p)
        pap = float(p @ ap)
        if pap == 0.0:
            raise ZeroDivisionError("search direction has zero curvature")
        alpha = rsold / pap
        x += alpha * p
        r -= alpha * ap
        rsnew = float(r @ r)
        residual = math.sqrt(rsnew)

        if residual < tolerance:
            return CGResult(x, iteration + 1, residual, True)
        if report is not None and iteration % REPORT_INTERVAL == 0:
            report(iteration, residual)

        p = r + (rsnew / rsold) * p
        rsold = rsnew

    return CGResult(x, max_iterations, residual, False)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Steady heat distribution on a square grid by conjugate gradients."
    )
    parser.add_argument("--grid-size", type=int, default=2000, help="cells per side")
    parser.add_argument("--max-iterations", type=int, default=1000)
    parser.add_argument("--tolerance", type=float, default=1e-8)
    args = parser.parse_args(argv)
    if args.grid_size < 1:
        parser.error("grid size must be at least 1")
    if args.max_iterations < 0:
        parser.error("max iterations must not be negative")

    grid_size = args.grid_size
    matrix = poisson_matrix(grid_size)
    n = matrix.n
    b = np.ones(n)

    def progress(iteration: int, residual: float) -> None:
        print(f"{iteration} residual {residual:g}")

    t1 = time.perf_counter()
    result = conjugate_gradient(
        matrix, b, np.zeros(n), args.max_iterations, args.tolerance, progress
    )
    if result.converged:
        print(f"Final residual {result.residual:g}")
    elapsed_ms = (time.perf_counter() - t1) * 1000.0
    print(f"{elapsed_ms:g}ms")

    print("Temperature distribution:")
    i = n // 2
    print(f"Temperature at ({i // grid_size}, {i % grid_size}) = {result.x[i]:g}")
    if (i + 1) % grid_size == 0:
        print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())