"""Sweep driver: integrate every model over the perturbation grid.

Loop nesting is mode -> alpha -> lambda -> model, so rows appear in that
order in the result file. Each run owns private copies of its initial
state and parameters; with ``workers > 1`` runs are dispatched to a thread
pool and their results are written back in submission order by the
calling thread only.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.core.integrator import integrate
from primal_sweep.exceptions import ConfigurationError, SolverError
from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.config import PerturbationConfig
from primal_sweep.sweep.sink import ResultSink
from primal_sweep.utils.config import SweepConfig
from primal_sweep.utils.logging import RunTracer
from primal_sweep.utils.numerical import is_finite_state
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSpec:
    """Everything needed to execute one sweep point."""

    model_key: str
    perturbation: PerturbationConfig
    initial_state: tuple[float, ...]
    params: tuple[float, ...]
    dt: float
    steps: int

    @property
    def run_id(self) -> str:
        p = self.perturbation
        return f"{self.model_key}/{p.mode.value}/a={p.alpha}/l={p.lambda_}"


@dataclass
class RunResult:
    """Terminal state of one run plus diagnostics."""

    spec: RunSpec
    label: str
    final_state: npt.NDArray[Any]
    conservation_error: float | None = None

    @property
    def finite(self) -> bool:
        return is_finite_state(self.final_state)

    def rows(self) -> list[list[Any]]:
        """Result rows: the final state, then the conservation diagnostic if any."""
        p = self.spec.perturbation
        rows: list[list[Any]] = [[self.label, p.mode, p.alpha, p.lambda_, *self.final_state]]
        if self.conservation_error is not None:
            err_label = f"{self.label}_mass_err"
            rows.append([err_label, p.mode, p.alpha, p.lambda_, self.conservation_error])
        return rows


@dataclass
class SweepSummary:
    """Aggregate outcome of a sweep."""

    output: str
    runs: int = 0
    rows: int = 0
    nonfinite_runs: list[str] = field(default_factory=list)
    max_conservation_error: float = 0.0
    elapsed: float = 0.0


class SweepDriver:
    """Run the cross-product of modes x alphas x lambdas x models.

    Attributes:
        config: Sweep configuration.
    """

    def __init__(self, config: SweepConfig | None = None):
        """Initialize the driver and resolve all model keys.

        Args:
            config: Sweep configuration. Defaults to the reference sweep.

        Raises:
            RegistryError: If a model key is not registered.
            ConfigurationError: If an override names an unknown model.
        """
        self.config = config if config is not None else SweepConfig()
        self._models: list[tuple[str, type[AbstractModel]]] = [
            (key, MODEL_REGISTRY.get(key)) for key in self.config.models
        ]
        unknown = [key for key in self.config.overrides if key not in MODEL_REGISTRY]
        if unknown:
            raise ConfigurationError(f"Overrides given for unknown models: {', '.join(unknown)}")

        logger.info(
            f"Initialized SweepDriver: {len(self.config.modes)} modes x "
            f"{len(self.config.alphas)} alphas x {len(self.config.lambdas)} lambdas x "
            f"{len(self._models)} models"
        )

    @property
    def num_runs(self) -> int:
        cfg = self.config
        return len(cfg.modes) * len(cfg.alphas) * len(cfg.lambdas) * len(self._models)

    def _build_spec(
        self,
        key: str,
        model_cls: type[AbstractModel],
        perturbation: PerturbationConfig,
    ) -> RunSpec:
        override = self.config.overrides.get(key)
        x0 = model_cls.default_initial_state
        theta = model_cls.default_params
        dt = model_cls.default_dt
        steps = model_cls.default_steps
        if override is not None:
            if override.initial_state is not None:
                x0 = tuple(override.initial_state)
            if override.params is not None:
                theta = tuple(override.params)
            if override.dt is not None:
                dt = override.dt
            if override.steps is not None:
                steps = override.steps

        if steps > self.config.max_steps:
            raise ConfigurationError(
                f"{key}: {steps} steps exceeds the per-run budget of {self.config.max_steps}"
            )
        return RunSpec(
            model_key=key,
            perturbation=perturbation,
            initial_state=tuple(float(v) for v in x0),
            params=tuple(float(v) for v in theta),
            dt=float(dt),
            steps=int(steps),
        )

    def run_specs(self) -> Iterator[RunSpec]:
        """Yield run specifications in sweep order (model innermost)."""
        cfg = self.config
        for mode in cfg.modes:
            for alpha in cfg.alphas:
                for lambda_ in cfg.lambdas:
                    perturbation = PerturbationConfig(mode, alpha, lambda_)
                    for key, model_cls in self._models:
                        yield self._build_spec(key, model_cls, perturbation)

    def execute(self, spec: RunSpec) -> RunResult:
        """Integrate one run to its horizon.

        Floating-point warnings are suppressed so numerical blow-up surfaces
        as inf/NaN in the result rather than as an exception.

        Raises:
            ValidationError: If the state/parameter lengths do not match the
                model or the model violates the RHS contract.
            SolverError: If the result is non-finite and the sweep is strict.
        """
        model = MODEL_REGISTRY.get(spec.model_key)(spec.perturbation)
        model.check_shapes(spec.initial_state, spec.params)

        with RunTracer(spec.run_id), np.errstate(all="ignore"):
            if not model.validate_parameters(spec.params):
                logger.warning(f"Physically invalid parameters for {model.label}: {spec.params}")

            logger.debug(f"Integrating {model!r}: dt={spec.dt}, steps={spec.steps}")
            x_final = integrate(
                model,
                spec.perturbation,
                0.0,
                spec.initial_state,
                spec.dt,
                spec.steps,
                spec.params,
            )
            result = RunResult(
                spec=spec,
                label=model.label,
                final_state=x_final,
                conservation_error=model.conservation_error(x_final, spec.params),
            )

            if not result.finite:
                if self.config.fail_on_nonfinite:
                    raise SolverError(f"Non-finite final state in run {spec.run_id}: {x_final}")
                logger.warning(f"Non-finite final state: {x_final}")
            if result.conservation_error is not None:
                logger.debug(f"Conservation error: {result.conservation_error:.3e}")

        return result

    def results(self, specs: list[RunSpec] | None = None) -> Iterator[RunResult]:
        """Execute every run, yielding results in sweep order.

        Args:
            specs: Prebuilt run specifications. Defaults to :meth:`run_specs`.

        When a parallel run raises, queued runs are cancelled and the error
        propagates without waiting for them.
        """
        if specs is None:
            specs = list(self.run_specs())
        if self.config.workers == 1:
            for spec in specs:
                yield self.execute(spec)
            return

        logger.info(f"Dispatching {len(specs)} runs to {self.config.workers} workers")
        executor = ThreadPoolExecutor(max_workers=self.config.workers)
        try:
            yield from executor.map(self.execute, specs)
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown()

    def run(self, sink: ResultSink, specs: list[RunSpec] | None = None) -> SweepSummary:
        """Execute the sweep, writing every result to ``sink``.

        Args:
            sink: Open result sink.
            specs: Prebuilt run specifications. Defaults to :meth:`run_specs`.

        Returns:
            Sweep summary.
        """
        start = time.perf_counter()
        summary = SweepSummary(output=str(sink.path))

        for result in self.results(specs):
            rows = result.rows()
            sink.write_rows(rows)
            summary.runs += 1
            summary.rows += len(rows)
            if not result.finite:
                summary.nonfinite_runs.append(result.spec.run_id)
            if result.conservation_error is not None and np.isfinite(result.conservation_error):
                summary.max_conservation_error = max(
                    summary.max_conservation_error, result.conservation_error
                )

        summary.elapsed = time.perf_counter() - start
        logger.info(
            f"Sweep complete: {summary.runs} runs, {summary.rows} rows, "
            f"{len(summary.nonfinite_runs)} non-finite, {summary.elapsed:.1f}s"
        )
        return summary


def run_sweep(config: SweepConfig | None = None, output: str | Path | None = None) -> SweepSummary:
    """Run a sweep and write its result file.

    Args:
        config: Sweep configuration. Defaults to the reference sweep.
        output: Result path; overrides ``config.output``.

    Returns:
        Sweep summary.

    Raises:
        ConfigurationError: If a run exceeds the step budget. The result
            file is left untouched.
        ResultSinkError: If the result file cannot be written.
    """
    config = config if config is not None else SweepConfig()
    driver = SweepDriver(config)
    specs = list(driver.run_specs())
    with ResultSink(output if output is not None else config.output) as sink:
        return driver.run(sink, specs)


__all__ = ["RunSpec", "RunResult", "SweepSummary", "SweepDriver", "run_sweep"]
