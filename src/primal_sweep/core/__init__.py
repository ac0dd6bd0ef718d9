"""Integrator core: fixed-step and time-warped RK4."""

from __future__ import annotations

from primal_sweep.core.integrator import (
    RHSFunction,
    StepCallback,
    integrate,
    rk4,
    rk4_step,
    rk4_trajectory,
    rk4_warp,
    rk4_warp_trajectory,
)

__all__ = [
    "RHSFunction",
    "StepCallback",
    "rk4_step",
    "rk4",
    "rk4_warp",
    "integrate",
    "rk4_trajectory",
    "rk4_warp_trajectory",
]
