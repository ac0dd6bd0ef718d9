"""Primal Logic perturbation layer."""

from __future__ import annotations

from primal_sweep.perturbation.config import PerturbationConfig, PerturbationMode
from primal_sweep.perturbation.functions import (
    WARP_FLOOR,
    G,
    M,
    R,
    U,
    control,
    modulation,
    residual,
    time_warp,
)

__all__ = [
    "PerturbationConfig",
    "PerturbationMode",
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
