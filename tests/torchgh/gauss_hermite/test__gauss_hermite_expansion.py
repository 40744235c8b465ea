import math

import hypothesis
import pytest
import torch
import torch.testing

from torchgh.testing.strategies import expansion_orders


def gaussian(height, center, width):
    def f(x):
        return height * torch.exp(-0.5 * ((x - center) / width) ** 2)

    return f


def skewed_density(h3):
    """Standard normal density times 1 + h3 H_3(x)."""
    from torchgh.polynomial import hermite_polynomial_a_vandermonde

    def f(x):
        return (
            torch.exp(-0.5 * x * x)
            / math.sqrt(2 * math.pi)
            * (1 + h3 * hermite_polynomial_a_vandermonde(x, 3)[..., 3])
        )

    return f


class TestGaussHermiteExpansion:
    """Tests for the GaussHermiteExpansion constructor."""

    def test_fits_gaussian(self):
        from torchgh.gauss_hermite import (
            GaussHermiteExpansion,
            gauss_hermite_expansion,
        )

        height, center, width = 2.0, 0.5, 1.2

        expansion = gauss_hermite_expansion(
            gaussian(height, center, width), 4
        )

        assert isinstance(expansion, GaussHermiteExpansion)
        assert expansion.converged
        assert expansion.order == 4
        assert expansion.amplitude.item() == pytest.approx(
            height * width * math.sqrt(2 * math.pi), rel=1e-6
        )
        assert expansion.center.item() == pytest.approx(center, abs=1e-6)
        assert expansion.width.item() == pytest.approx(width, rel=1e-6)
        torch.testing.assert_close(
            expansion.coefficients,
            torch.tensor([1.0, 0.0, 0.0, 0.0, 0.0], dtype=torch.float64),
            atol=1e-5,
            rtol=0,
        )

    def test_given_envelope_skips_fit(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        calls = []

        def f(x):
            calls.append(x.shape)
            return skewed_density(0.1)(x)

        expansion = gauss_hermite_expansion(f, 4, 1.0, 0.0, 1.0)

        # One call per half of the projection grid
        assert len(calls) == 2
        assert expansion.converged
        assert expansion.amplitude.item() == 1.0
        assert expansion.center.item() == 0.0
        assert expansion.width.item() == 1.0
        torch.testing.assert_close(
            expansion.coefficients,
            torch.tensor([1.0, 0.0, 0.0, 0.1, 0.0], dtype=torch.float64),
            atol=1e-12,
            rtol=0,
        )

    @pytest.mark.parametrize(
        "envelope",
        [
            (None, None, None),
            (1.0, None, 1.0),
            (math.nan, 0.0, 1.0),
            (1.0, 0.0, math.inf),
        ],
    )
    def test_incomplete_envelope_is_fitted(self, envelope):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            gaussian(1.0, 0.3, 0.9), 2, *envelope
        )

        assert expansion.center.item() == pytest.approx(0.3, abs=1e-6)
        assert expansion.width.item() == pytest.approx(0.9, rel=1e-6)

    def test_envelope_independent_of_order(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        f = skewed_density(0.08)

        low = gauss_hermite_expansion(f, 2)
        high = gauss_hermite_expansion(f, 8)

        torch.testing.assert_close(low.center, high.center)
        torch.testing.assert_close(low.width, high.width)
        torch.testing.assert_close(
            low.coefficients, high.coefficients[:3], atol=1e-12, rtol=0
        )

    def test_envelope_fit_absorbs_low_moments(self):
        """h_1 and h_2 vanish for the best-fit Gaussian"""
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(skewed_density(0.08), 4)

        assert expansion.converged
        assert abs(expansion.coefficients[1].item()) < 1e-4
        assert abs(expansion.coefficients[2].item()) < 1e-4

    def test_full_fit_recovers_exact_envelope(self):
        from torchgh.gauss_hermite import FitOrder, gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            skewed_density(0.05), 4, fit_order=FitOrder.FULL
        )

        assert expansion.converged
        assert expansion.amplitude.item() == pytest.approx(1.0, abs=1e-5)
        assert expansion.center.item() == pytest.approx(0.0, abs=1e-5)
        assert expansion.width.item() == pytest.approx(1.0, abs=1e-5)
        torch.testing.assert_close(
            expansion.coefficients,
            torch.tensor([1.0, 0.0, 0.0, 0.05, 0.0], dtype=torch.float64),
            atol=1e-4,
            rtol=0,
        )

    def test_fit_order_from_string(self):
        from torchgh.gauss_hermite import FitOrder, gauss_hermite_expansion

        f = skewed_density(0.05)

        from_string = gauss_hermite_expansion(f, 3, fit_order="full")
        from_enum = gauss_hermite_expansion(f, 3, fit_order=FitOrder.FULL)

        torch.testing.assert_close(
            from_string.coefficients, from_enum.coefficients
        )

    @pytest.mark.parametrize("order", [-1, 0, 1])
    def test_order_too_low(self, order):
        from torchgh.gauss_hermite import OrderError, gauss_hermite_expansion

        with pytest.raises(OrderError):
            gauss_hermite_expansion(gaussian(1.0, 0.0, 1.0), order)

    def test_errors_are_value_errors(self):
        from torchgh.gauss_hermite import GaussHermiteError, OrderError

        assert issubclass(GaussHermiteError, ValueError)
        assert issubclass(OrderError, GaussHermiteError)

    def test_dtype(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            gaussian(1.0, 0.0, 1.0), 3, 1.0, 0.0, 1.0, dtype=torch.float32
        )

        assert expansion.amplitude.dtype == torch.float32
        assert expansion.coefficients.dtype == torch.float32

    @hypothesis.given(order=expansion_orders())
    @hypothesis.settings(deadline=None, max_examples=10)
    def test_coefficient_count(self, order):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            gaussian(1.0, 0.0, 1.0), order, 1.0, 0.0, 1.0
        )

        assert expansion.coefficients.shape == (order + 1,)
        assert expansion.order == order


class TestGaussHermiteExpansionEvaluate:
    """Tests for evaluating an expansion."""

    def test_reproduces_gaussian(self):
        from torchgh.gauss_hermite import (
            gauss_hermite_expansion,
            gauss_hermite_expansion_evaluate,
        )

        f = gaussian(2.0, 0.5, 1.2)
        expansion = gauss_hermite_expansion(f, 6)
        x = torch.linspace(-4.0, 5.0, 37, dtype=torch.float64)

        torch.testing.assert_close(
            gauss_hermite_expansion_evaluate(expansion, x),
            f(x),
            atol=1e-5,
            rtol=0,
        )

    def test_reproduces_series(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        f = skewed_density(0.1)
        expansion = gauss_hermite_expansion(f, 5, 1.0, 0.0, 1.0)
        x = torch.linspace(-3.0, 3.0, 13, dtype=torch.float64)

        torch.testing.assert_close(expansion(x), f(x))

    def test_value_at_center(self):
        """Only even terms contribute at y = 0"""
        from torchgh.gauss_hermite import (
            GaussHermiteExpansion,
            gauss_hermite_expansion_evaluate,
        )

        expansion = GaussHermiteExpansion(
            amplitude=torch.tensor(3.0, dtype=torch.float64),
            center=torch.tensor(1.0, dtype=torch.float64),
            width=torch.tensor(2.0, dtype=torch.float64),
            coefficients=torch.tensor(
                [1.0, 0.5, 0.2, -0.3, 0.1], dtype=torch.float64
            ),
            converged=torch.tensor(True),
            batch_size=[],
        )

        result = gauss_hermite_expansion_evaluate(expansion, 1.0)

        h0, h2, h4 = 1.0, -1 / math.sqrt(2), math.sqrt(6) / 4
        expected = 3.0 / (2.0 * math.sqrt(2 * math.pi)) * (
            1.0 + 0.2 * h2 + 0.1 * h4
        )
        assert result.item() == pytest.approx(expected, rel=1e-12)

    def test_empty_coefficients(self):
        from torchgh.gauss_hermite import (
            GaussHermiteExpansion,
            gauss_hermite_expansion_evaluate,
        )

        expansion = GaussHermiteExpansion(
            amplitude=torch.tensor(1.0, dtype=torch.float64),
            center=torch.tensor(0.0, dtype=torch.float64),
            width=torch.tensor(1.0, dtype=torch.float64),
            coefficients=torch.zeros(0, dtype=torch.float64),
            converged=torch.tensor(True),
            batch_size=[],
        )
        x = torch.linspace(-1.0, 1.0, 5, dtype=torch.float64)

        result = gauss_hermite_expansion_evaluate(expansion, x)

        torch.testing.assert_close(result, torch.zeros_like(x))

    def test_shape(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            gaussian(1.0, 0.0, 1.0), 3, 1.0, 0.0, 1.0
        )

        assert expansion(torch.zeros(2, 4, dtype=torch.float64)).shape == (
            2,
            4,
        )


class TestGaussHermiteExpansionNorm:
    """Tests for the integral of an expansion."""

    def test_gaussian(self):
        from torchgh.gauss_hermite import (
            gauss_hermite_expansion,
            gauss_hermite_expansion_norm,
        )

        expansion = gauss_hermite_expansion(gaussian(2.0, 0.5, 1.2), 6)

        assert gauss_hermite_expansion_norm(expansion).item() == (
            pytest.approx(2.0 * 1.2 * math.sqrt(2 * math.pi), rel=1e-5)
        )

    def test_matches_numerical_integral(self):
        from torchgh.gauss_hermite import (
            GaussHermiteExpansion,
            gauss_hermite_expansion_evaluate,
            gauss_hermite_expansion_norm,
        )

        expansion = GaussHermiteExpansion(
            amplitude=torch.tensor(2.0, dtype=torch.float64),
            center=torch.tensor(-0.5, dtype=torch.float64),
            width=torch.tensor(0.7, dtype=torch.float64),
            coefficients=torch.tensor(
                [1.0, 0.3, 0.2, 0.5, 0.1, -0.05, 0.02], dtype=torch.float64
            ),
            converged=torch.tensor(True),
            batch_size=[],
        )
        x = torch.linspace(-12.0, 12.0, 24001, dtype=torch.float64)

        expected = torch.trapezoid(
            gauss_hermite_expansion_evaluate(expansion, x), x
        )

        assert gauss_hermite_expansion_norm(expansion).item() == (
            pytest.approx(expected.item(), rel=1e-9)
        )

    def test_odd_terms_do_not_contribute(self):
        from torchgh.gauss_hermite import (
            GaussHermiteExpansion,
            gauss_hermite_expansion_norm,
        )

        expansion = GaussHermiteExpansion(
            amplitude=torch.tensor(1.5, dtype=torch.float64),
            center=torch.tensor(0.0, dtype=torch.float64),
            width=torch.tensor(1.0, dtype=torch.float64),
            coefficients=torch.tensor(
                [0.0, 4.0, 0.0, -2.0], dtype=torch.float64
            ),
            converged=torch.tensor(True),
            batch_size=[],
        )

        assert gauss_hermite_expansion_norm(expansion).item() == 0.0


class TestGaussHermiteExpansionDegenerate:
    """Numerical degeneracy is reported through values, never raised."""

    def test_zero_function(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(torch.zeros_like, 4)

        assert not expansion.converged
        assert expansion.amplitude.item() == 0.0
        assert expansion.width.item() > 0
        assert expansion.coefficients.shape == (5,)
        assert torch.isfinite(expansion.coefficients).all()
        assert torch.all(expansion.coefficients == 0)

        x = torch.linspace(-5.0, 5.0, 11, dtype=torch.float64)

        torch.testing.assert_close(expansion(x), torch.zeros_like(x))

    def test_narrow_distant_spike(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            lambda x: 1e3 * torch.exp(-0.5 * ((x - 500.0) / 0.01) ** 2), 6
        )

        assert torch.isfinite(expansion.amplitude)
        assert torch.isfinite(expansion.center)
        assert torch.isfinite(expansion.width)
        assert expansion.width.item() > 0
        assert torch.isfinite(expansion.coefficients).all()

    def test_zero_amplitude(self):
        from torchgh.gauss_hermite import gauss_hermite_expansion

        expansion = gauss_hermite_expansion(
            gaussian(1.0, 0.0, 1.0), 2, 0.0, 0.0, 1.0
        )

        assert not torch.isfinite(expansion.coefficients).any()
