"""Two-dimensional compressible Euler flow past a cylinder.

The conservative variables (density, x/y momentum and total energy) live on a
cell-centred grid with one layer of ghost cells on every side. Interior cells
are advanced with a Lax-Friedrichs scheme; cells inside the cylinder are held
fixed as a solid obstacle.
"""

from __future__ import annotations

import argparse
import math
import time
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

GAMMA = 1.4
"""Ratio of specific heats."""

CFL = 0.5
"""Courant number used to choose the time step."""

REPORT_INTERVAL = 50


@dataclass(frozen=True)
class EulerConfig:
    """Grid, obstacle and free-stream parameters of a simulation."""

    nx: int = 200
    ny: int = 100
    lx: float = 2.0
    ly: float = 1.0
    cx: float = 0.5
    cy: float = 0.5
    radius: float = 0.1
    rho0: float = 1.0
    u0: float = 1.0
    v0: float = 0.0
    p0: float = 1.0

    def __post_init__(self) -> None:
        if self.nx < 1 or self.ny < 1:
            raise ValueError("the grid needs at least one cell in each direction")
        if self.lx <= 0 or self.ly <= 0:
            raise ValueError("domain lengths must be positive")
        if self.rho0 <= 0:
            raise ValueError("free-stream density must be positive")
        if self.radius < 0:
            raise ValueError("cylinder radius must not be negative")

    @property
    def dx(self) -> float:
        return self.lx / self.nx

    @property
    def dy(self) -> float:
        return self.ly / self.ny

    @property
    def e0(self) -> float:
        """Total energy per volume of the free stream."""
        return self.p0 / (GAMMA - 1.0) + 0.5 * self.rho0 * (self.u0**2 + self.v0**2)

    @property
    def shape(self) -> tuple[int, int]:
        """Array shape including ghost cells."""
        return self.nx + 2, self.ny + 2


@dataclass
class FlowState:
    """Conservative variables and solid mask, indexed [i, j] with ghost cells."""

    rho: np.ndarray
    rhou: np.ndarray
    rhov: np.ndarray
    energy: np.ndarray
    solid: np.ndarray

    def copy(self) -> FlowState:
        return FlowState(
            self.rho.copy(),
            self.rhou.copy(),
            self.rhov.copy(),
            self.energy.copy(),
            self.solid.copy(),
        )


def pressure(rho, rhou, rhov, energy):
    """Pressure of an ideal gas from the conservative variables."""
    u = rhou / rho
    v = rhov / rho
    kinetic = 0.5 * rho * (u * u + v * v)
    return (GAMMA - 1.0) * (energy - kinetic)


def flux_x(rho, rhou, rhov, energy):
    """Flux in the x direction as (mass, x-momentum, y-momentum, energy)."""
    u = rhou / rho
    p = pressure(rho, rhou, rhov, energy)
    return rhou, rhou * u + p, rhov * u, (energy + p) * u


def flux_y(rho, rhou, rhov, energy):
    """Flux in the y direction as (mass, x-momentum, y-momentum, energy)."""
    v = rhov / rho
    p = pressure(rho, rhou, rhov, energy)
    return rhov, rhou * v, rhov * v + p, (energy + p) * v


def initial_state(config: EulerConfig) -> FlowState:
    """Free stream everywhere, with the cylinder's cells marked solid and at rest."""
    i = np.arange(config.nx + 2)
    j = np.arange(config.ny + 2)
    x = (i - 0.5) * config.dx
    y = (j - 0.5) * config.dy
    xx, yy = np.meshgrid(x, y, indexing="ij")
    solid = (xx - config.cx) ** 2 + (yy - config.cy) ** 2 <= config.radius**2

    shape = config.shape
    rho = np.full(shape, config.rho0)
    rhou = np.where(solid, 0.0, config.rho0 * config.u0)
    rhov = np.where(solid, 0.0, config.rho0 * config.v0)
    energy = np.where(solid, config.p0 / (GAMMA - 1.0), config.e0)
    return FlowState(rho, rhou, rhov, energy, solid)


def time_step(config: EulerConfig) -> float:
    """Time step from the CFL condition on the free stream."""
    c0 = math.sqrt(GAMMA * config.p0 / config.rho0)
    return CFL * min(config.dx, config.dy) / (abs(config.u0) + c0) / 2.0


def apply_boundaries(state: FlowState, config: EulerConfig) -> None:
    """Fill the ghost cells of ``state`` in place.

    Left: fixed inflow. Right: zero-gradient outflow. Bottom and top:
    reflective walls.
    """
    nx, ny = config.nx, config.ny

    state.rho[0, :] = config.rho0
    state.rhou[0, :] = config.rho0 * config.u0
    state.rhov[0, :] = config.rho0 * config.v0
    state.energy[0, :] = config.e0

    for field in (state.rho, state.rhou, state.rhov, state.energy):
        field[nx + 1, :] = field[nx, :]

    for ghost, inner in ((0, 1), (ny + 1, ny)):
        state.rho[:, ghost] = state.rho[:, inner]
        state.rhou[:, ghost] = state.rhou[:, inner]
        state.rhov[:, ghost] = -state.rhov[:, inner]
        state.energy[:, ghost] = state.energy[:, inner]


def lax_friedrichs_step(state: FlowState, dt: float, config: EulerConfig) -> FlowState:
    """Advance the interior by one step; return a new state, leaving ``state`` as is."""
    fields = (state.rho, state.rhou, state.rhov, state.energy)
    east = tuple(f[2:, 1:-1] for f in fields)
    west = tuple(f[:-2, 1:-1] for f in fields)
    north = tuple(f[1:-1, 2:] for f in fields)
    south = tuple(f[1:-1, :-2] for f in fields)

    fx_east = flux_x(*east)
    fx_west = flux_x(*west)
    fy_north = flux_y(*north)
    fy_south = flux_y(*south)

    dtdx = dt / (2 * config.dx)
    dtdy = dt / (2 * config.dy)
    solid = state.solid[1:-1, 1:-1]

    result = state.copy()
    targets = (result.rho, result.rhou, result.rhov, result.energy)
    for k, (target, current) in enumerate(zip(targets, fields)):
        average = 0.25 * (east[k] + west[k] + north[k] + south[k])
        updated = average - (
            dtdx * (fx_east[k] - fx_west[k]) + dtdy * (fy_north[k] - fy_south[k])
        )
        target[1:-1, 1:-1] = np.where(solid, current[1:-1, 1:-1], updated)
    return result


def total_kinetic_energy(state: FlowState) -> float:
    """Sum of kinetic energy over the interior cells."""
    rho = state.rho[1:-1, 1:-1]
    u = state.rhou[1:-1, 1:-1] / rho
    v = state.rhov[1:-1, 1:-1] / rho
    return float(np.sum(0.5 * rho * (u * u + v * v)))


def simulate(
    config: EulerConfig | None = None, steps: int = 2000
) -> Iterator[tuple[int, float, FlowState]]:
    """Run the simulation, yielding (step, total kinetic energy, state) after each step."""
    if steps < 0:
        raise ValueError("the number of steps must not be negative")
    config = config or EulerConfig()
    state = initial_state(config)
    dt = time_step(config)
    for n in range(steps):
        apply_boundaries(state, config)
        state = lax_friedrichs_step(state, dt, config)
        yield n, total_kinetic_energy(state), state


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Euler flow past a cylinder with a Lax-Friedrichs scheme."
    )
    parser.add_argument("--steps", type=int, default=2000, help="number of time steps")
    parser.add_argument("--nx", type=int, default=200, help="cells in x")
    parser.add_argument("--ny", type=int, default=100, help="cells in y")
    args = parser.parse_args(argv)

    try:
        config = EulerConfig(nx=args.nx, ny=args.ny)
        if args.steps < 0:
            raise ValueError("the number of steps must not be negative")
    except ValueError as exc:
        parser.error(str(exc))

    t_start = time.perf_counter()
    initial_state(config)
    print(f"Kernel execution time: {time.perf_counter() - t_start:f} seconds")

    t_start = time.perf_counter()
    for n, kinetic, _ in simulate(config, args.steps):
        if n % REPORT_INTERVAL == 0:
            print(f"Step {n} completed, total kinetic energy: {kinetic:g}")
    elapsed = time.perf_counter() - t_start
    print(f"Time stepping kernel execution time: {elapsed:f} seconds")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())