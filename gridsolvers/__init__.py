"""Structured-grid solvers: Euler flow past a cylinder, conjugate gradient and Jacobi relaxation."""

__version__ = "0.1.0"
__all__ = ["cg", "euler", "laplace"]