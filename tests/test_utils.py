"""Tests for registry system and constants."""

from __future__ import annotations

import pytest

from primal_sweep.exceptions import RegistryError
from primal_sweep.utils import (
    FARADAY,
    MODEL_REGISTRY,
    NERNST_RELAXATION_RATE,
    POISEUILLE_RELAXATION_RATE,
    R_GAS,
    Registry,
)

# ---------------------------------------------------------------------------
# Registry Tests
# ---------------------------------------------------------------------------


class TestRegistry:
    """Tests for the plugin registry system."""

    def test_register_and_get(self):
        reg = Registry("test")

        @reg.register("my_class")
        class MyClass:
            pass

        assert reg.get("my_class") is MyClass

    def test_get_missing_key_raises(self):
        reg = Registry("test")

        @reg.register("present")
        class Present:
            pass

        with pytest.raises(RegistryError, match="Available: present"):
            reg.get("nonexistent")

    def test_list_keys_sorted(self):
        reg = Registry("test")

        @reg.register("beta")
        class B:
            pass

        @reg.register("alpha")
        class A:
            pass

        assert reg.list_keys() == ["alpha", "beta"]
        assert len(reg) == 2

    def test_contains(self):
        reg = Registry("test")

        @reg.register("exists")
        class X:
            pass

        assert "exists" in reg
        assert "nope" not in reg

    def test_repr(self):
        reg = Registry("test_repr")

        @reg.register("foo")
        class Foo:
            pass

        assert repr(reg) == "Registry('test_repr', keys=[foo])"

    def test_overwrite_keeps_latest(self, caplog):
        reg = Registry("test")

        @reg.register("same_key")
        class First:
            pass

        @reg.register("same_key")
        class Second:
            pass

        assert reg.get("same_key") is Second
        assert "Overwriting" in caplog.text

    def test_register_returns_original_class(self):
        reg = Registry("test")

        @reg.register("cls")
        class Original:
            value = 42

        assert Original.value == 42


# ---------------------------------------------------------------------------
# Global Registry Tests
# ---------------------------------------------------------------------------


class TestModelRegistry:
    """The global registry holds every built-in model after import."""

    @pytest.mark.parametrize(
        "key", ["michaelis_menten", "sir", "fitzhugh_nagumo", "nernst", "poiseuille"]
    )
    def test_builtin_model_registered(self, key):
        assert key in MODEL_REGISTRY

    def test_unknown_model(self):
        with pytest.raises(RegistryError, match="not found in models registry"):
            MODEL_REGISTRY.get("lorenz")


# ---------------------------------------------------------------------------
# Constants Tests
# ---------------------------------------------------------------------------


class TestConstants:
    """Tests for physical constants."""

    def test_r_gas_value(self):
        """R_GAS should be the universal gas constant in J/(mol*K)."""
        assert R_GAS == pytest.approx(8.314462618)

    def test_faraday_value(self):
        assert FARADAY == pytest.approx(96485.33212)

    def test_thermal_voltage_at_body_temperature(self):
        assert R_GAS * 310.0 / FARADAY == pytest.approx(0.02671, abs=1e-5)

    def test_relaxation_rates(self):
        assert NERNST_RELAXATION_RATE == 10.0
        assert POISEUILLE_RELAXATION_RATE == 5.0

    @pytest.mark.parametrize(
        "value", [R_GAS, FARADAY, NERNST_RELAXATION_RATE, POISEUILLE_RELAXATION_RATE]
    )
    def test_constants_are_floats(self, value):
        assert isinstance(value, float)
