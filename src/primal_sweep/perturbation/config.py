"""Perturbation modes and the per-run perturbation configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from primal_sweep.exceptions import ConfigurationError


class PerturbationMode(Enum):
    """Closed set of Primal Logic perturbation strategies.

    The enum value is the token written to the result file.
    """

    RESIDUAL = "Residual"
    PARAM_MOD = "ParamMod"
    CONTROL = "Control"
    TIME_WARP = "TimeWarp"

    @classmethod
    def parse(cls, value: str | PerturbationMode) -> PerturbationMode:
        """Resolve a mode from its token (``"ParamMod"``) or member name (``"param_mod"``).

        Raises:
            ConfigurationError: If the value names no mode.
        """
        if isinstance(value, cls):
            return value
        for mode in cls:
            if value == mode.value or str(value).upper() == mode.name:
                return mode
        available = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Unknown perturbation mode '{value}'. Available: {available}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PerturbationConfig:
    """Immutable perturbation settings for one integration run.

    Attributes:
        mode: Active perturbation strategy.
        alpha: Perturbation amplitude. ``alpha == 0`` disables every mode.
        lambda_: Perturbation rate / frequency.
    """

    mode: PerturbationMode
    alpha: float = 0.0
    lambda_: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", PerturbationMode.parse(self.mode))
        object.__setattr__(self, "alpha", float(self.alpha))
        object.__setattr__(self, "lambda_", float(self.lambda_))

    def to_dict(self) -> dict[str, Any]:
        return {"mode": self.mode.value, "alpha": self.alpha, "lambda": self.lambda_}

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> PerturbationConfig:
        return cls(
            mode=PerturbationMode.parse(config["mode"]),
            alpha=config.get("alpha", 0.0),
            lambda_=config.get("lambda", config.get("lambda_", 1.0)),
        )


__all__ = ["PerturbationMode", "PerturbationConfig"]
