"""Volumetric flow relaxing toward steady Hagen-Poiseuille flow."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.functions import control, modulation, residual
from primal_sweep.utils.constants import POISEUILLE_RELAXATION_RATE
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@MODEL_REGISTRY.register("poiseuille")
class PoiseuilleModel(AbstractModel):
    """First-order relaxation of a flow rate Q toward laminar pipe flow.

        Q_ss = pi * r^4 * dP / (8 * mu * L)
        dQ/dt = k * (Q_ss - Q),  k = 5

    ParamMod scales the radius r by M(Q).

    State: [Q]. Parameters: [dP, mu, L, r].
    """

    __slots__ = ()

    label = "POISEUILLE"
    state_labels = ("Q",)
    param_labels = ("dP", "mu", "L", "r")
    default_initial_state = (0.0,)
    default_params = (100.0, 3.5, 10.0, 0.5)
    default_dt = 1e-2
    default_steps = 20_000

    @staticmethod
    def steady_flow(dP: Any, mu: Any, L: Any, r: Any) -> Any:
        """Hagen-Poiseuille volumetric flow rate."""
        return (np.pi * r**4 * dP) / (8.0 * mu * L)

    def _relax(self, Q: Any, Q_ss: Any) -> Any:
        return POISEUILLE_RELAXATION_RATE * (Q_ss - Q)

    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        dP, mu, L, r = theta
        return np.array([self._relax(x[0], self.steady_flow(dP, mu, L, r))])

    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        Q = x[0]
        dP, mu, L, r = theta
        dQ = self._relax(Q, self.steady_flow(dP, mu, L, r))
        return np.array([dQ + residual(Q, t, self.config)])

    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        Q = x[0]
        dP, mu, L, r = theta
        r = r * modulation(Q, t, self.config)
        return np.array([self._relax(Q, self.steady_flow(dP, mu, L, r))])

    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        dP, mu, L, r = theta
        dQ = self._relax(x[0], self.steady_flow(dP, mu, L, r))
        return np.array([dQ + control(t, self.config)])

    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return self.base_rhs(t, x, theta)

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        dP, mu, L, r = np.asarray(theta, dtype=float)
        if mu <= 0 or L <= 0:
            logger.error("Viscosity mu and length L must be positive")
            return False
        if r <= 0:
            logger.error("Radius r must be positive")
            return False
        return True


__all__ = ["PoiseuilleModel"]
