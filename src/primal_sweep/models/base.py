"""Base abstract class for perturbable RHS models."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np
import numpy.typing as npt

from primal_sweep.exceptions import ConfigurationError, ValidationError
from primal_sweep.perturbation.config import PerturbationConfig, PerturbationMode

logger = logging.getLogger(__name__)

# Every mode must map to a handler; TimeWarp maps to an explicit no-op handler.
MODE_HANDLERS: dict[PerturbationMode, str] = {
    PerturbationMode.RESIDUAL: "residual_rhs",
    PerturbationMode.PARAM_MOD: "param_mod_rhs",
    PerturbationMode.CONTROL: "control_rhs",
    PerturbationMode.TIME_WARP: "time_warp_rhs",
}

if set(MODE_HANDLERS) != set(PerturbationMode):
    raise ConfigurationError(
        f"MODE_HANDLERS does not cover {set(PerturbationMode) - set(MODE_HANDLERS)}"
    )


class AbstractModel(ABC):
    """Abstract base class for ODE right-hand-side models.

    A model instance is an immutable value bound to one
    :class:`PerturbationConfig`. Calling it evaluates the perturbed
    derivative, so an instance can be handed directly to the integrators::

        model = SIRModel(PerturbationConfig(PerturbationMode.CONTROL, 0.1, 1.0))
        dx = model(t, x, theta)

    Subclasses implement the unperturbed law in ``base_rhs`` and one handler
    per perturbation mode. All handlers are abstract, so a model that does
    not handle a mode cannot be instantiated.

    Class attributes:
        label: Token written to the result file.
        state_labels: Names of the state components.
        param_labels: Names of the parameter vector entries.
        default_initial_state: Initial state of the reference run.
        default_params: Parameter vector of the reference run.
        default_dt: Step size of the reference run.
        default_steps: Step count of the reference run.
    """

    __slots__ = ("_config",)

    label: ClassVar[str]
    state_labels: ClassVar[tuple[str, ...]]
    param_labels: ClassVar[tuple[str, ...]]
    default_initial_state: ClassVar[tuple[float, ...]]
    default_params: ClassVar[tuple[float, ...]]
    default_dt: ClassVar[float]
    default_steps: ClassVar[int]

    def __init__(self, config: PerturbationConfig):
        """Initialize model.

        Args:
            config: Perturbation applied on every evaluation.
        """
        self._config = config
        logger.debug(f"Initialized {self.__class__.__name__}: config={config}")

    @property
    def config(self) -> PerturbationConfig:
        return self._config

    @property
    def state_dim(self) -> int:
        return len(self.state_labels)

    def __call__(
        self,
        t: float,
        x: npt.NDArray[Any],
        theta: npt.NDArray[Any],
    ) -> npt.NDArray[Any]:
        """Perturbed derivative dx/dt, dispatched on the configured mode."""
        try:
            handler = MODE_HANDLERS[self._config.mode]
        except KeyError:
            raise ConfigurationError(
                f"{self.__class__.__name__} has no handler for mode {self._config.mode}"
            ) from None
        return getattr(self, handler)(t, x, theta)  # type: ignore[no-any-return]

    @abstractmethod
    def base_rhs(self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]) -> npt.NDArray[Any]:
        """Unperturbed physical derivative."""
        raise NotImplementedError("Subclasses must implement base_rhs()")

    @abstractmethod
    def residual_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        """Derivative with the additive residual R applied."""
        raise NotImplementedError("Subclasses must implement residual_rhs()")

    @abstractmethod
    def param_mod_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        """Derivative recomputed with one parameter scaled by M."""
        raise NotImplementedError("Subclasses must implement param_mod_rhs()")

    @abstractmethod
    def control_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        """Derivative with the forcing U added to one component."""
        raise NotImplementedError("Subclasses must implement control_rhs()")

    @abstractmethod
    def time_warp_rhs(
        self, t: float, x: npt.NDArray[Any], theta: npt.NDArray[Any]
    ) -> npt.NDArray[Any]:
        """Derivative under TimeWarp; the warp lives in the integrator."""
        raise NotImplementedError("Subclasses must implement time_warp_rhs()")

    def get_initial_state(self) -> npt.NDArray[Any]:
        """Initial state of the reference run, shape (state_dim,)."""
        return np.array(self.default_initial_state, dtype=float)

    def get_default_params(self) -> npt.NDArray[Any]:
        """Parameter vector of the reference run."""
        return np.array(self.default_params, dtype=float)

    def check_shapes(self, x: npt.ArrayLike, theta: npt.ArrayLike) -> None:
        """Validate state and parameter vector lengths.

        Raises:
            ValidationError: On a length mismatch.
        """
        x_len = np.size(x)
        theta_len = np.size(theta)
        if x_len != self.state_dim:
            raise ValidationError(
                f"{self.label}: state has {x_len} components, expected {self.state_dim} "
                f"({', '.join(self.state_labels)})"
            )
        if theta_len != len(self.param_labels):
            raise ValidationError(
                f"{self.label}: parameter vector has {theta_len} entries, expected "
                f"{len(self.param_labels)} ({', '.join(self.param_labels)})"
            )

    def validate_parameters(self, theta: npt.ArrayLike) -> bool:
        """Validate parameters are physically reasonable.

        Returns:
            True if parameters are valid, False otherwise.
        """
        # Default: No validation (override in subclasses)
        return True

    def conservation_error(self, x: npt.ArrayLike, theta: npt.ArrayLike) -> float | None:
        """Deviation of the model's conserved quantity, or None if it has none."""
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize model configuration to dictionary."""
        return {
            "type": self.__class__.__name__,
            "label": self.label,
            "state_dim": self.state_dim,
            "perturbation": self._config.to_dict(),
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> AbstractModel:
        """Deserialize model from configuration dictionary.

        Args:
            config: Configuration dictionary from to_dict().

        Returns:
            Model instance.
        """
        return cls(PerturbationConfig.from_dict(config["perturbation"]))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AbstractModel):
            return NotImplemented
        return type(self) is type(other) and self._config == other._config

    def __hash__(self) -> int:
        return hash((type(self), self._config))

    def __repr__(self) -> str:
        """String representation."""
        cfg = self._config
        return (
            f"{self.__class__.__name__}("
            f"mode={cfg.mode.value}, alpha={cfg.alpha}, lambda={cfg.lambda_})"
        )


__all__ = ["AbstractModel", "MODE_HANDLERS"]
