"""Tests for primal_sweep.utils.numerical."""

from __future__ import annotations

import numpy as np
import pytest

from primal_sweep.exceptions import SolverError
from primal_sweep.utils.numerical import convergence_order, integrate_reference, is_finite_state


class TestIntegrateReference:
    def test_exponential_decay(self):
        """dy/dt = -k y, y(0) = 1 -> y(t) = exp(-k t)."""
        t_eval = np.linspace(0.0, 2.0, 50)
        result = integrate_reference(
            lambda t, y, theta: -theta[0] * y, (0.0, 2.0), [1.0], [1.5], t_eval=t_eval
        )
        np.testing.assert_allclose(result[:, 0], np.exp(-1.5 * t_eval), rtol=1e-10)

    def test_default_returns_final_point(self):
        result = integrate_reference(lambda t, y, theta: -y, (0.0, 1.0), [1.0, 2.0], [])
        assert result.shape == (1, 2)
        np.testing.assert_allclose(result[0], [np.exp(-1.0), 2.0 * np.exp(-1.0)], rtol=1e-10)

    def test_time_dependent_rhs(self):
        """dy/dt = cos(t) -> y(t) = sin(t)."""
        result = integrate_reference(
            lambda t, y, theta: np.cos(t) * np.ones_like(y), (0.0, 3.0), [0.0], []
        )
        assert result[0, 0] == pytest.approx(np.sin(3.0), abs=1e-10)

    def test_failure_raises_solver_error(self):
        """y' = y^2 blows up at t = 1."""
        with pytest.raises(SolverError, match="Reference integration failed"):
            integrate_reference(lambda t, y, theta: y**2, (0.0, 2.0), [1.0], [])


class TestConvergenceOrder:
    def test_fourth_order(self):
        errors = [1e-4 / 16.0**k for k in range(4)]
        np.testing.assert_allclose(convergence_order(errors), [4.0, 4.0, 4.0])

    def test_custom_ratio(self):
        np.testing.assert_allclose(convergence_order([1.0, 1.0 / 9.0], ratio=3.0), [2.0])

    def test_needs_two_errors(self):
        with pytest.raises(ValueError, match="at least two"):
            convergence_order([1e-3])


class TestIsFiniteState:
    def test_finite(self):
        assert is_finite_state(np.array([1.0, -2.0, 0.0]))

    @pytest.mark.parametrize("bad", [np.nan, np.inf, -np.inf])
    def test_non_finite(self, bad):
        assert not is_finite_state([0.0, bad])

    def test_returns_python_bool(self):
        assert type(is_finite_state([1.0])) is bool
