"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from primal_sweep.perturbation import PerturbationConfig, PerturbationMode
from primal_sweep.utils.config import DEFAULT_MODELS, ModelRunConfig, SweepConfig


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for property-style checks."""
    return np.random.default_rng(12345)


@pytest.fixture
def residual_config() -> PerturbationConfig:
    return PerturbationConfig(PerturbationMode.RESIDUAL, alpha=0.1, lambda_=1.5)


@pytest.fixture
def warp_config() -> PerturbationConfig:
    return PerturbationConfig(PerturbationMode.TIME_WARP, alpha=0.5, lambda_=2.0)


@pytest.fixture
def small_sweep_config(tmp_path) -> SweepConfig:
    """Two modes x two amplitudes x one rate over all models, 50 steps each."""
    return SweepConfig(
        modes=[PerturbationMode.RESIDUAL, PerturbationMode.TIME_WARP],
        alphas=[0.0, 0.1],
        lambdas=[1.0],
        overrides={key: ModelRunConfig(steps=50) for key in DEFAULT_MODELS},
        output=str(tmp_path / "results.csv"),
    )
