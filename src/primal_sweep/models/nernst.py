"""Membrane potential relaxing toward the Nernst equilibrium."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.functions import control, modulation, residual
from primal_sweep.utils.constants import FARADAY, NERNST_RELAXATION_RATE, R_GAS
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@MODEL_REGISTRY.register("nernst")
class NernstModel(AbstractModel):
    """First-order relaxation of a potential E toward the Nernst potential.

        E_N = (R * T / (z * F)) * ln(C_out / C_in)
        dE/dt = k * (E_N - E),  k = 10

    ParamMod scales the temperature T by M(E). A non-positive concentration
    ratio yields a non-finite E_N, which propagates into the state.

    State: [E] (V). Parameters: [T (K), z, C_out, C_in].
    """

    __slots__ = ()

    label = "NERNST"
    state_labels = ("E",)
    param_labels = ("T", "z", "C_out", "C_in")
    default_initial_state = (-0.07,)
    default_params = (310.0, 1.0, 145.0, 15.0)
    default_dt = 1e-2
    default_steps = 20_000

    @staticmethod
    def equilibrium_potential(T: Any, z: Any, C_out: Any, C_in: Any) -> Any:
        """Nernst potential E_N in volts."""
        return (R_GAS * T / (z * FARADAY)) * np.log(C_out / C_in)

    def _relax(self, E: Any, E_N: Any) -> Any:
        return NERNST_RELAXATION_RATE * (E_N - E)

    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        T, z, C_out, C_in = theta
        return np.array([self._relax(x[0], self.equilibrium_potential(T, z, C_out, C_in))])

    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        E = x[0]
        T, z, C_out, C_in = theta
        dE = self._relax(E, self.equilibrium_potential(T, z, C_out, C_in))
        return np.array([dE + residual(E, t, self.config)])

    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        E = x[0]
        T, z, C_out, C_in = theta
        T = T * modulation(E, t, self.config)
        return np.array([self._relax(E, self.equilibrium_potential(T, z, C_out, C_in))])

    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        T, z, C_out, C_in = theta
        dE = self._relax(x[0], self.equilibrium_potential(T, z, C_out, C_in))
        return np.array([dE + control(t, self.config)])

    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return self.base_rhs(t, x, theta)

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        T, z, C_out, C_in = np.asarray(theta, dtype=float)
        if T <= 0:
            logger.error("Temperature T must be positive")
            return False
        if z == 0:
            logger.error("Valence z must be non-zero")
            return False
        if C_out <= 0 or C_in <= 0:
            logger.error("Concentrations must be positive")
            return False
        return True


__all__ = ["NernstModel"]
