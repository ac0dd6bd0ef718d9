"""Tests for the primal-sweep exception hierarchy."""

from __future__ import annotations

import pytest

from primal_sweep.exceptions import (
    ConfigurationError,
    PrimalSweepError,
    RegistryError,
    ResultSinkError,
    SolverError,
    ValidationError,
)

SUBCLASSES = [SolverError, ValidationError, ConfigurationError, RegistryError, ResultSinkError]


# ── Inheritance chain ────────────────────────────────────────────────


class TestInheritance:
    """All custom exceptions inherit from PrimalSweepError."""

    @pytest.mark.parametrize("exc_cls", SUBCLASSES)
    def test_subclass_of_base(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, PrimalSweepError)

    @pytest.mark.parametrize("exc_cls", [PrimalSweepError, *SUBCLASSES])
    def test_subclass_of_exception(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, Exception)

    def test_base_not_subclass_of_subtypes(self) -> None:
        assert not issubclass(PrimalSweepError, SolverError)

    def test_validation_error_is_not_value_error(self) -> None:
        assert not issubclass(ValidationError, ValueError)


# ── Error message propagation ────────────────────────────────────────


class TestMessagePropagation:
    @pytest.mark.parametrize("exc_cls", [PrimalSweepError, *SUBCLASSES])
    def test_message_preserved(self, exc_cls: type) -> None:
        msg = f"test message for {exc_cls.__name__}"
        assert str(exc_cls(msg)) == msg

    def test_catch_base_catches_subtype(self) -> None:
        with pytest.raises(PrimalSweepError):
            raise SolverError("solver blew up")


# ── Code paths raise the library types ───────────────────────────────


class TestCodePaths:
    def test_registry_lookup(self) -> None:
        from primal_sweep.utils.registry import MODEL_REGISTRY

        with pytest.raises(RegistryError, match="not found"):
            MODEL_REGISTRY.get("nonexistent_model_xyz")

    def test_unknown_mode(self) -> None:
        from primal_sweep.perturbation import PerturbationMode

        with pytest.raises(ConfigurationError, match="Unknown perturbation mode"):
            PerturbationMode.parse("Sideways")

    def test_negative_steps(self) -> None:
        from primal_sweep.core import rk4

        with pytest.raises(ValidationError, match="non-negative"):
            rk4(lambda t, x, theta: -x, 0.0, [1.0], 0.1, -1, [])

    def test_closed_sink(self, tmp_path) -> None:
        from primal_sweep.sweep.sink import ResultSink

        with pytest.raises(ResultSinkError):
            ResultSink(tmp_path / "r.csv").write_row(["x"])
