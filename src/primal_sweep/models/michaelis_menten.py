"""Michaelis-Menten enzyme kinetics."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.functions import control, modulation, residual
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@MODEL_REGISTRY.register("michaelis_menten")
class MichaelisMentenModel(AbstractModel):
    """Michaelis-Menten conversion of substrate into product.

    Rate law: v = (V_max * S) / (K_m + S)

        dS/dt = -v
        dP/dt = +v

    so S + P is conserved.

    Perturbations act on the rate v before it is distributed:
    - Residual: v += R(S)
    - ParamMod: V_max *= M(S), then v is recomputed
    - Control: v += U(t)

    State: [S, P]. Parameters: [V_max, K_m].
    """

    __slots__ = ()

    label = "MM"
    state_labels = ("S", "P")
    param_labels = ("V_max", "K_m")
    default_initial_state = (1.0, 0.0)
    default_params = (1.0, 0.5)
    default_dt = 1e-3
    default_steps = 10_000

    @staticmethod
    def _rate(S: Any, V_max: Any, K_m: Any) -> Any:
        return V_max * S / (K_m + S)

    @staticmethod
    def _distribute(v: Any) -> npt.NDArray[Any]:
        return np.array([-v, v])

    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        V_max, K_m = theta
        return self._distribute(self._rate(x[0], V_max, K_m))

    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        S = x[0]
        V_max, K_m = theta
        v = self._rate(S, V_max, K_m) + residual(S, t, self.config)
        return self._distribute(v)

    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        S = x[0]
        V_max, K_m = theta
        V_max = V_max * modulation(S, t, self.config)
        return self._distribute(self._rate(S, V_max, K_m))

    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        V_max, K_m = theta
        v = self._rate(x[0], V_max, K_m) + control(t, self.config)
        return self._distribute(v)

    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return self.base_rhs(t, x, theta)

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        V_max, K_m = np.asarray(theta, dtype=float)
        if V_max <= 0:
            logger.error("V_max must be positive")
            return False
        if K_m <= 0:
            logger.error("K_m must be positive")
            return False
        return True


__all__ = ["MichaelisMentenModel"]
