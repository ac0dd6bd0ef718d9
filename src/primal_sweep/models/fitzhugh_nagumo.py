"""FitzHugh-Nagumo neuron model."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import numpy.typing as npt

from primal_sweep.models.base import AbstractModel
from primal_sweep.perturbation.functions import control, modulation, residual
from primal_sweep.utils.registry import MODEL_REGISTRY

logger = logging.getLogger(__name__)


@MODEL_REGISTRY.register("fitzhugh_nagumo")
class FitzHughNagumoModel(AbstractModel):
    """FitzHugh-Nagumo excitable neuron with a cubic v-nullcline.

        dv/dt = v - v^3 / 3 - w
        dw/dt = (v + a - b * w) / c

    ParamMod scales both a (by M(v)) and b (by M(w)). Control forces the
    membrane variable v.

    State: [v, w]. Parameters: [a, b, c].
    """

    __slots__ = ()

    label = "FHN"
    state_labels = ("v", "w")
    param_labels = ("a", "b", "c")
    default_initial_state = (-1.0, 1.0)
    default_params = (0.7, 0.8, 12.5)
    default_dt = 1e-3
    default_steps = 50_000

    @staticmethod
    def _derivative(v: Any, w: Any, a: Any, b: Any, c: Any) -> tuple[Any, Any]:
        dv = v - v * v * v / 3.0 - w
        dw = (v + a - b * w) / c
        return dv, dw

    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        v, w = x
        a, b, c = theta
        return np.array(self._derivative(v, w, a, b, c))

    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        v, w = x
        a, b, c = theta
        dv, dw = self._derivative(v, w, a, b, c)
        return np.array([dv + residual(v, t, self.config), dw + residual(w, t, self.config)])

    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        v, w = x
        a, b, c = theta
        a = a * modulation(v, t, self.config)
        b = b * modulation(w, t, self.config)
        return np.array(self._derivative(v, w, a, b, c))

    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        v, w = x
        a, b, c = theta
        dv, dw = self._derivative(v, w, a, b, c)
        return np.array([dv + control(t, self.config), dw])

    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        return self.base_rhs(t, x, theta)

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        c = np.asarray(theta, dtype=float)[2]
        if c == 0:
            logger.error("Time-scale parameter c must be non-zero")
            return False
        return True


__all__ = ["FitzHughNagumoModel"]
