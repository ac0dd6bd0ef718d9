"""SIR epidemic model."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.functions import control, modulation, residual
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@MODEL_REGISTRY.register("sir")
class SIRModel(AbstractModel):
    """Mass-action SIR epidemic model.

        infection = beta * S * I / N
        recovery  = gamma * I

        dS/dt = -infection
        dI/dt = infection - recovery
        dR/dt = recovery

    The unperturbed flows cancel, so S + I + R stays equal to N. ParamMod
    (beta *= M(I)) and TimeWarp keep that balance for any alpha; Residual
    (R applied to every component) and Control (U added to dI) do not.

    State: [S, I, R]. Parameters: [beta, gamma, N].
    """

    __slots__ = ()

    label = "SIR"
    state_labels = ("S", "I", "R")
    param_labels = ("beta", "gamma", "N")
    default_initial_state = (999.0, 1.0, 0.0)
    default_params = (0.3, 0.1, 1000.0)
    default_dt = 1e-2
    default_steps = 10_000

    @staticmethod
    def _flows(S: Any, I: Any, beta: Any, gamma: Any, N: Any) -> tuple[Any, Any, Any]:
        infection = beta * S * I / N
        recovery = gamma * I
        return -infection, infection - recovery, recovery

    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        S, I, _ = x
        beta, gamma, N = theta
        return np.array(self._flows(S, I, beta, gamma, N))

    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        S, I, Rc = x
        beta, gamma, N = theta
        dS, dI, dR = self._flows(S, I, beta, gamma, N)
        cfg = self.config
        return np.array(
            [dS + residual(S, t, cfg), dI + residual(I, t, cfg), dR + residual(Rc, t, cfg)]
        )

    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        S, I, _ = x
        beta, gamma, N = theta
        beta = beta * modulation(I, t, self.config)
        return np.array(self._flows(S, I, beta, gamma, N))

    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        S, I, _ = x
        beta, gamma, N = theta
        dS, dI, dR = self._flows(S, I, beta, gamma, N)
        return np.array([dS, dI + control(t, self.config), dR])

    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return self.base_rhs(t, x, theta)

    def conservation_error(self, x: npt.ArrayLike, theta: npt.ArrayLike) -> float:
        """|S + I + R - N|."""
        S, I, Rc = np.asarray(x, dtype=float)
        N = float(np.asarray(theta, dtype=float)[2])
        return abs((S + I + Rc) - N)

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        beta, gamma, N = np.asarray(theta, dtype=float)
        if N <= 0:
            logger.error("Population N must be positive")
            return False
        if beta < 0 or gamma < 0:
            logger.error("beta and gamma must be non-negative")
            return False
        return True


__all__ = ["SIRModel"]
