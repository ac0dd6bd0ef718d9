"""Configuration management for primal-sweep."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, Field, field_validator

from primal_sweep.exceptions import ConfigurationError
from primal_sweep.perturbation.config import PerturbationMode

logger = logging.getLogger(__name__)

DEFAULT_MODELS: list[str] = [
    "michaelis_menten",
    "sir",
    "fitzhugh_nagumo",
    "nernst",
    "poiseuille",
]


class ModelRunConfig(BaseModel):
    """Per-model overrides of the default run setup."""

    initial_state: list[float] | None = Field(None, description="Initial state x0")
    params: list[float] | None = Field(None, description="Parameter vector theta")
    dt: float | None = Field(None, description="Nominal step size")
    steps: int | None = Field(None, ge=0, description="Number of integration steps")


class LoggingConfig(BaseModel):
    """Configuration for structured logging."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format ('text' or 'json')")
    log_file: str | None = Field(None, description="Log file path")
    module_levels: dict[str, str] = Field(
        default_factory=dict,
        description="Per-module log levels",
    )


class SweepConfig(BaseModel):
    """Top-level sweep configuration.

    Defaults reproduce the reference sweep: 4 modes x 3 amplitudes x
    4 rates over all five models.
    """

    modes: list[PerturbationMode] = Field(
        default_factory=lambda: list(PerturbationMode),
        description="Perturbation modes, outermost loop",
    )
    alphas: list[float] = Field(
        default_factory=lambda: [-0.1, 0.0, 0.1],
        description="Perturbation amplitudes",
    )
    lambdas: list[float] = Field(
        default_factory=lambda: [0.5, 1.0, 1.5, 2.0],
        description="Perturbation rates",
    )
    models: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MODELS),
        description="Model registry keys, innermost loop",
    )
    overrides: dict[str, ModelRunConfig] = Field(
        default_factory=dict,
        description="Run setup overrides keyed by model registry key",
    )
    output: str = Field(default="results.csv", description="Result file path")
    workers: int = Field(default=1, ge=1, description="Concurrent integration workers")
    max_steps: int = Field(default=1_000_000, ge=0, description="Per-run step budget")
    fail_on_nonfinite: bool = Field(
        default=False,
        description="Raise SolverError instead of recording non-finite results",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("modes", mode="before")
    @classmethod
    def _parse_modes(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            try:
                return [PerturbationMode.parse(v) for v in value]
            except ConfigurationError as exc:
                raise ValueError(str(exc)) from exc
        return value


def _interpolate_env_vars(text: str) -> str:
    """Replace ${VAR:default} patterns with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(3)  # group 3 is after the optional colon
        value = os.environ.get(var_name)
        if value is not None:
            return value
        if default is not None:
            return cast(str, default)
        return match.group(0)  # Leave unchanged if no env var and no default

    return re.sub(r"\$\{(\w+)(:([^}]*))?\}", _replace, text)


def load_config(path: str | Path) -> SweepConfig:
    """Load a sweep configuration from YAML with env var interpolation.

    Supports ``${VAR}`` and ``${VAR:default}`` syntax for environment
    variable substitution in string values. An empty file yields the
    default sweep.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        raw_text = path.read_text()
        interpolated = _interpolate_env_vars(raw_text)
        data = yaml.safe_load(interpolated)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root must be a mapping, got {type(data).__name__}")

    try:
        config = SweepConfig(**data)
    except Exception as exc:
        raise ConfigurationError(f"Invalid config structure: {exc}") from exc

    logger.info(f"Loaded config from {path}")
    return config


def save_config(config: SweepConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration object.
        path: Output path.

    Raises:
        ConfigurationError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        data = config.model_dump(mode="json")
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    except Exception as exc:
        raise ConfigurationError(f"Failed to save config to {path}: {exc}") from exc

    logger.info(f"Saved config to {path}")


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    For nested dicts, recursively merges rather than replacing.
    For all other types, the override value wins.

    Args:
        base: Base configuration.
        override: Override values (takes precedence).

    Returns:
        New merged configuration dictionary.
    """
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


__all__ = [
    "DEFAULT_MODELS",
    "ModelRunConfig",
    "LoggingConfig",
    "SweepConfig",
    "load_config",
    "save_config",
    "merge_configs",
]
