# gridsolvers

Three small numerical solvers on regular grids, written with NumPy:

- **`gridsolvers.euler`**: the compressible 2D Euler equations (ratio of
  specific heats 1.4) in a channel with a cylindrical obstacle, advanced with
  a Lax–Friedrichs scheme. The left edge is a fixed inflow, the right edge a
  zero-gradient outflow, and the top and bottom edges are reflective walls.
- **`gridsolvers.cg`**: the conjugate gradient method on a square matrix in
  compressed sparse row form, with a builder for the five-point Poisson
  matrix of a square grid.
- **`gridsolvers.laplace`**: Jacobi relaxation of the Laplace equation on a
  rectangular mesh. The left edge holds a half sine wave, the right edge the
  same wave damped by `exp(-pi)`, and the top and bottom edges are zero.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Command line

Each solver has a command that prints its progress and timing.

```
gridsolvers-euler [--steps N] [--nx N] [--ny N]
gridsolvers-cg [--grid-size N] [--max-iterations N] [--tolerance T]
gridsolvers-laplace [--imax N] [--jmax N] [--iter-max N]
```

- `gridsolvers-euler` runs 2000 steps on a 200 × 100 grid by default and
  prints the total kinetic energy every 50 steps.
- `gridsolvers-cg` solves the heat problem with a unit source in every cell
  (default grid 2000 × 2000, at most 1000 iterations, tolerance 1e-8). It
  prints the residual every 100 iterations, the final residual if it
  converged, and the temperature at the middle cell.
- `gridsolvers-laplace` relaxes a 4096 × 4096 interior for at most 100 sweeps
  by default, printing the error every 10 sweeps. At the end it compares the
  last error with the reference value of the default run and prints whether
  the run passed.

The default sizes of `gridsolvers-cg` and `gridsolvers-laplace` are large.
Pass smaller sizes for a quick run.

## Library use

### Euler flow

```python
from gridsolvers.euler import EulerConfig, simulate

config = EulerConfig(nx=100, ny=50)
for step, kinetic, state in simulate(config, 100):
    if step % 10 == 0:
        print(step, kinetic)
```

`EulerConfig` is a frozen dataclass that holds the grid size, the domain
lengths, the cylinder's centre and radius, and the free-stream state. It
raises `ValueError` when a value is invalid. `simulate(config, steps)` is a
generator. After each step it yields the step number, the total kinetic
energy and the current `FlowState`.

To drive the loop yourself, start from `initial_state(config)` and take the
step size from `time_step(config)`. On each step, call
`apply_boundaries(state, config)`, which fills the ghost cells in place, and
then `state = lax_friedrichs_step(state, dt, config)`, which returns a new
state. `total_kinetic_energy(state)` sums over the interior cells. The
helpers `pressure`, `flux_x` and `flux_y` work on single values and on NumPy
arrays alike.

### Conjugate gradient

```python
import numpy as np
from gridsolvers.cg import poisson_matrix, conjugate_gradient

matrix = poisson_matrix(50)
b = np.ones(matrix.n)
result = conjugate_gradient(matrix, b, max_iterations=1000, tolerance=1e-8)
print(result.converged, result.iterations, result.residual)
print(result.x[matrix.n // 2])
```

`CSRMatrix(values, col_indices, row_start)` checks that its layout is
consistent. `matvec(x)` returns the matrix–vector product. The
`conjugate_gradient` function returns a `CGResult` with `x`, `iterations`,
`residual` and `converged`. If you pass a callable as `report`, it is called
as `report(iteration, residual)` every hundredth iteration that has not yet
converged.

### Jacobi relaxation

```python
from gridsolvers.laplace import solve

result = solve(64, 64, 100, 1e-6)
print(result.iterations, result.error)
```

The sweeps stop once the largest change in a sweep is at most `tol`, or after
`iter_max` sweeps. `initial_grid(imax, jmax)` builds the mesh with its
boundary values, with shape `(jmax + 2, imax + 2)`. `jacobi_sweep(grid)`
performs one sweep and returns the new grid together with the largest change.

## What it does not do

The solvers keep their results in memory. They do not write fields to files
for plotting or visualisation. The commands print only progress and summary
values.