"""primal-sweep exception hierarchy.

All library-specific exceptions inherit from :class:`PrimalSweepError`,
enabling callers to catch the broad base class or narrow subtypes.
"""

from __future__ import annotations


class PrimalSweepError(Exception):
    """Base exception for all primal-sweep errors."""


class SolverError(PrimalSweepError):
    """Integration failures (non-finite state when the sweep is strict)."""


class ValidationError(PrimalSweepError):
    """Invalid inputs, shapes, or contract violations by an RHS function."""


class ConfigurationError(PrimalSweepError):
    """Sweep or model configuration errors (missing/invalid parameters)."""


class RegistryError(PrimalSweepError):
    """Registry lookup or registration failures."""


class ResultSinkError(PrimalSweepError):
    """The result file cannot be opened or written."""


__all__ = [
    "PrimalSweepError",
    "SolverError",
    "ValidationError",
    "ConfigurationError",
    "RegistryError",
    "ResultSinkError",
]
