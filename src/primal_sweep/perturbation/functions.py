"""Primal Logic perturbation functions.

Four stateless functions used by the RHS models and the warped integrator:

- ``residual`` (R): additive residual ``alpha * sin(lambda * t) * x``
- ``modulation`` (M): bounded parameter factor ``1 + alpha * tanh(lambda * x)``
- ``control`` (U): exogenous forcing ``alpha * cos(lambda * t)``
- ``time_warp`` (G): step multiplier ``max(1e-6, 1 + alpha * sin(lambda * t))``

All of them accept numpy scalars or arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from primal_sweep.perturbation.config import PerturbationConfig

# Lower bound of the time-warp multiplier; keeps the effective step positive.
WARP_FLOOR: float = 1e-6


def residual(x: Any, t: Any, config: PerturbationConfig) -> Any:
    """Additive residual proportional to ``x`` and oscillating in time."""
    return config.alpha * np.sin(config.lambda_ * t) * x


def modulation(x: Any, t: Any, config: PerturbationConfig) -> Any:
    """Multiplicative factor in ``(1 - |alpha|, 1 + |alpha|)``; saturates for large ``|x|``.

    ``t`` is accepted for signature symmetry with :func:`residual`.
    """
    return 1.0 + config.alpha * np.tanh(config.lambda_ * x)


def control(t: Any, config: PerturbationConfig) -> Any:
    """State-independent forcing term."""
    return config.alpha * np.cos(config.lambda_ * t)


def time_warp(t: Any, config: PerturbationConfig) -> Any:
    """Strictly positive step multiplier.

    Uses ``fmax`` so a NaN argument still yields the floor.
    """
    return np.fmax(WARP_FLOOR, 1.0 + config.alpha * np.sin(config.lambda_ * t))


R = residual
M = modulation
U = control
G = time_warp


__all__ = [
    "WARP_FLOOR",
    "residual",
    "modulation",
    "control",
    "time_warp",
    "R",
    "M",
    "U",
    "G",
]
