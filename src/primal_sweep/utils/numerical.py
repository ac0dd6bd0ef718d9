"""Numerical utilities for cross-checking the fixed-step integrators."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, cast

import numpy as np
import numpy.typing as npt
from scipy.integrate import solve_ivp

from primal_sweep.exceptions import SolverError

logger = logging.getLogger(__name__)


def integrate_reference(
    func: Callable[..., Any],
    t_span: tuple[float, float],
    x0: npt.ArrayLike,
    theta: npt.ArrayLike,
    t_eval: npt.NDArray[Any] | None = None,
    method: str = "DOP853",
    rtol: float = 1e-12,
    atol: float = 1e-14,
    **kwargs: Any,
) -> npt.NDArray[Any]:
    """High-accuracy reference solution using the scipy backend.

    Args:
        func: RHS function ``f(t, x, theta)``.
        t_span: Integration interval (t_start, t_end).
        x0: Initial condition, shape (state_dim,).
        theta: Parameter vector forwarded to ``func``.
        t_eval: Time points for solution output. Defaults to ``t_end`` only.
        method: solve_ivp method.
        rtol: Relative tolerance.
        atol: Absolute tolerance.
        **kwargs: Additional arguments for solve_ivp.

    Returns:
        Solution array, shape (n_times, state_dim).

    Raises:
        SolverError: If solve_ivp reports failure.
    """
    theta_arr = np.asarray(theta, dtype=float)
    if t_eval is None:
        t_eval = np.array([t_span[1]])

    sol = solve_ivp(
        lambda t, x: func(t, x, theta_arr),
        t_span,
        np.asarray(x0, dtype=float),
        method=method,
        t_eval=t_eval,
        rtol=rtol,
        atol=atol,
        **kwargs,
    )
    if not sol.success:
        raise SolverError(f"Reference integration failed: {sol.message}")
    return cast(npt.NDArray[Any], sol.y.T)  # (n_times, state_dim)


def convergence_order(errors: Sequence[float], ratio: float = 2.0) -> npt.NDArray[Any]:
    """Observed convergence order from errors at successively refined steps.

    For step sizes ``h, h/ratio, h/ratio**2, ...`` the order between two
    levels is ``log(e_i / e_{i+1}) / log(ratio)``.

    Args:
        errors: Absolute errors, coarsest first.
        ratio: Refinement factor between consecutive step sizes.

    Returns:
        Observed orders, shape (len(errors) - 1,).
    """
    errs = np.asarray(errors, dtype=float)
    if errs.ndim != 1 or errs.size < 2:
        raise ValueError("Need at least two errors to estimate an order")
    return cast(npt.NDArray[Any], np.log(errs[:-1] / errs[1:]) / np.log(ratio))


def is_finite_state(x: npt.ArrayLike) -> bool:
    """True if every component of ``x`` is finite."""
    return bool(np.all(np.isfinite(x)))


__all__ = ["integrate_reference", "convergence_order", "is_finite_state"]
