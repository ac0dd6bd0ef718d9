"""Fixed-step and time-warped fourth-order Runge-Kutta integrators.

Both integrators are generic over the state dimension: they only rely on
the RHS contract ``f(t, x, theta) -> dx`` with ``dx.shape == x.shape``.

The warped variant rescales the step of every iteration by
``G(t_i, config)`` evaluated at the current simulated time, so the elapsed
time after ``steps`` iterations is the path-dependent sum of the warped
increments rather than ``steps * dt``. The RHS itself never sees the warp.

Preconditions left to the caller: ``dt > 0`` (a non-positive step is not
rejected; it integrates backward or stalls).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.exceptions import ValidationError
from primal_sweep.perturbation.config import PerturbationConfig, PerturbationMode
from primal_sweep.perturbation.functions import time_warp

logger = logging.getLogger(__name__)

RHSFunction = Callable[[float, npt.NDArray[Any], npt.NDArray[Any]], npt.ArrayLike]
StepCallback = Callable[[int, float, npt.NDArray[Any]], None]
WarpFunction = Callable[[float, PerturbationConfig], float]


def _evaluate(
    f: RHSFunction,
    t: float,
    x: npt.NDArray[Any],
    theta: npt.NDArray[Any],
) -> npt.NDArray[Any]:
    dx = np.asarray(f(t, x, theta), dtype=float)
    if dx.shape != x.shape:
        raise ValidationError(
            f"RHS returned derivative of shape {dx.shape} for state of shape {x.shape}"
        )
    return dx


def _prepare(
    x0: npt.ArrayLike,
    theta: npt.ArrayLike,
    steps: int,
) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
    """Private state copy and read-only parameter copy for one run."""
    if steps < 0:
        raise ValidationError(f"steps must be non-negative, got {steps}")
    x = np.array(x0, dtype=float)
    if x.ndim != 1:
        raise ValidationError(f"State vector must be 1-D, got shape {x.shape}")
    th = np.array(theta, dtype=float)
    th.setflags(write=False)
    return x, th


def rk4_step(
    f: RHSFunction,
    t: float,
    x: npt.NDArray[Any],
    dt: float,
    theta: npt.NDArray[Any],
) -> npt.NDArray[Any]:
    """Classic 4th-order Runge-Kutta step.

    Args:
        f: Right-hand side function dx/dt = f(t, x, theta)
        t: Current time
        x: Current state, shape (state_dim,)
        dt: Time step size
        theta: Parameter vector

    Returns:
        Updated state, shape (state_dim,)

    Raises:
        ValidationError: If ``f`` returns a derivative of the wrong shape.
    """
    k1 = _evaluate(f, t, x, theta)
    k2 = _evaluate(f, t + 0.5 * dt, x + 0.5 * dt * k1, theta)
    k3 = _evaluate(f, t + 0.5 * dt, x + 0.5 * dt * k2, theta)
    k4 = _evaluate(f, t + dt, x + dt * k3, theta)
    return x + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


def rk4(
    f: RHSFunction,
    t0: float,
    x0: npt.ArrayLike,
    dt: float,
    steps: int,
    theta: npt.ArrayLike,
    callback: StepCallback | None = None,
) -> npt.NDArray[Any]:
    """Integrate ``steps`` fixed RK4 steps of size ``dt`` from ``(t0, x0)``.

    Args:
        f: RHS function ``f(t, x, theta)``.
        t0: Initial time.
        x0: Initial state, shape (state_dim,). Never mutated.
        dt: Step size.
        steps: Number of steps; 0 returns a copy of ``x0``.
        theta: Parameter vector, passed read-only to ``f``.
        callback: Optional ``callback(step, t, x)`` called after every step
            with a copy of the state.

    Returns:
        Terminal state, shape (state_dim,).
    """
    x, th = _prepare(x0, theta, steps)
    t = float(t0)
    for step in range(steps):
        x = rk4_step(f, t, x, dt, th)
        t += dt
        if callback is not None:
            callback(step + 1, t, x.copy())
    return x


def rk4_warp(
    f: RHSFunction,
    t0: float,
    x0: npt.ArrayLike,
    dt: float,
    steps: int,
    theta: npt.ArrayLike,
    config: PerturbationConfig,
    callback: StepCallback | None = None,
    warp: WarpFunction | None = None,
) -> npt.NDArray[Any]:
    """Integrate ``steps`` RK4 steps whose size is warped in time.

    Iteration ``i`` uses ``dt_i = dt * warp(t_i, config)`` for all four
    stages, the state advance and the time advance.

    Args:
        f: RHS function ``f(t, x, theta)``.
        t0: Initial time.
        x0: Initial state. Never mutated.
        dt: Nominal step size.
        steps: Number of steps; 0 returns a copy of ``x0``.
        theta: Parameter vector, passed read-only to ``f``.
        config: Perturbation configuration handed to the warp function.
        callback: Optional ``callback(step, t, x)`` called after every step.
        warp: Step multiplier ``warp(t, config)``. Defaults to
            :func:`~primal_sweep.perturbation.functions.time_warp`.

    Returns:
        Terminal state, shape (state_dim,).
    """
    if warp is None:
        warp = time_warp
    x, th = _prepare(x0, theta, steps)
    t = float(t0)
    for step in range(steps):
        dt_i = dt * float(warp(t, config))
        x = rk4_step(f, t, x, dt_i, th)
        t += dt_i
        if callback is not None:
            callback(step + 1, t, x.copy())
    return x


def integrate(
    f: RHSFunction,
    config: PerturbationConfig,
    t0: float,
    x0: npt.ArrayLike,
    dt: float,
    steps: int,
    theta: npt.ArrayLike,
    callback: StepCallback | None = None,
) -> npt.NDArray[Any]:
    """Run ``rk4_warp`` for the TimeWarp mode and ``rk4`` for every other mode."""
    if config.mode is PerturbationMode.TIME_WARP:
        return rk4_warp(f, t0, x0, dt, steps, theta, config, callback=callback)
    return rk4(f, t0, x0, dt, steps, theta, callback=callback)


def _collect(
    t0: float, x0: npt.ArrayLike
) -> tuple[list[float], list[npt.NDArray[Any]], StepCallback]:
    times = [float(t0)]
    states = [np.array(x0, dtype=float)]

    def _record(step: int, t: float, x: npt.NDArray[Any]) -> None:
        times.append(t)
        states.append(x)

    return times, states, _record


def rk4_trajectory(
    f: RHSFunction,
    t0: float,
    x0: npt.ArrayLike,
    dt: float,
    steps: int,
    theta: npt.ArrayLike,
) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
    """Fixed-step RK4 keeping every point.

    Returns:
        Tuple of (times, states) with shapes (steps + 1,) and
        (steps + 1, state_dim); the first entry is the initial point.
    """
    times, states, record = _collect(t0, x0)
    rk4(f, t0, x0, dt, steps, theta, callback=record)
    return np.array(times), np.vstack(states)


def rk4_warp_trajectory(
    f: RHSFunction,
    t0: float,
    x0: npt.ArrayLike,
    dt: float,
    steps: int,
    theta: npt.ArrayLike,
    config: PerturbationConfig,
    warp: WarpFunction | None = None,
) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
    """Time-warped RK4 keeping every point (see :func:`rk4_trajectory`)."""
    times, states, record = _collect(t0, x0)
    rk4_warp(f, t0, x0, dt, steps, theta, config, callback=record, warp=warp)
    return np.array(times), np.vstack(states)


__all__ = [
    "RHSFunction",
    "StepCallback",
    "WarpFunction",
    "rk4_step",
    "rk4",
    "rk4_warp",
    "integrate",
    "rk4_trajectory",
    "rk4_warp_trajectory",
]
