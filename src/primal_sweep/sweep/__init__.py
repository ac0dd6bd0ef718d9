"""Perturbation sweep driver and result sink."""

from __future__ import annotations

from primal_sweep.sweep.driver import RunResult, RunSpec, SweepDriver, SweepSummary, run_sweep
from primal_sweep.sweep.sink import DEFAULT_HEADER, ResultSink, format_value, read_results

__all__ = [
    "RunSpec",
    "RunResult",
    "SweepSummary",
    "SweepDriver",
    "run_sweep",
    "DEFAULT_HEADER",
    "ResultSink",
    "format_value",
    "read_results",
]
