"""Utility modules including registry system."""

from __future__ import annotations

from primal_sweep.utils.constants import (
    FARADAY,
    NERNST_RELAXATION_RATE,
    POISEUILLE_RELAXATION_RATE,
    R_GAS,
)
from primal_sweep.utils.logging import JSONFormatter, RunTracer, setup_logging
from primal_sweep.utils.registry import MODEL_REGISTRY, Registry

__all__ = [
    "Registry",
    "MODEL_REGISTRY",
    "R_GAS",
    "FARADAY",
    "NERNST_RELAXATION_RATE",
    "POISEUILLE_RELAXATION_RATE",
    "JSONFormatter",
    "RunTracer",
    "setup_logging",
]
