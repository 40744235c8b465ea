import numpy as np
import pytest
import torch
import torch.testing


class TestGaussLegendreNodesWeights:
    @pytest.mark.parametrize("n", [1, 2, 3, 5, 10, 33])
    def test_matches_numpy(self, n):
        from torchgh.quadrature import gauss_legendre_nodes_weights

        nodes, weights = gauss_legendre_nodes_weights(n, dtype=torch.float64)
        expected_nodes, expected_weights = np.polynomial.legendre.leggauss(n)

        torch.testing.assert_close(
            nodes, torch.from_numpy(expected_nodes), atol=1e-12, rtol=1e-12
        )
        torch.testing.assert_close(
            weights, torch.from_numpy(expected_weights), atol=1e-12, rtol=1e-12
        )

    def test_weights_sum_to_two(self):
        from torchgh.quadrature import gauss_legendre_nodes_weights

        _, weights = gauss_legendre_nodes_weights(17, dtype=torch.float64)

        assert weights.sum().item() == pytest.approx(2.0, rel=1e-13)

    def test_dtype(self):
        from torchgh.quadrature import gauss_legendre_nodes_weights

        nodes, weights = gauss_legendre_nodes_weights(4, dtype=torch.float32)

        assert nodes.dtype == torch.float32
        assert weights.dtype == torch.float32


class TestGaussKronrodNodesWeights:
    def test_sizes_and_sums(self):
        from torchgh.quadrature import gauss_kronrod_nodes_weights

        nodes, k_weights, g_weights = gauss_kronrod_nodes_weights(
            21, dtype=torch.float64
        )

        assert nodes.shape == (21,)
        assert k_weights.shape == (21,)
        assert g_weights.shape == (21,)
        assert k_weights.sum().item() == pytest.approx(2.0, rel=1e-12)
        assert g_weights.sum().item() == pytest.approx(2.0, rel=1e-12)

    def test_nodes_symmetric(self):
        from torchgh.quadrature import gauss_kronrod_nodes_weights

        nodes, _, _ = gauss_kronrod_nodes_weights(21, dtype=torch.float64)

        torch.testing.assert_close(
            torch.sort(nodes).values, torch.sort(-nodes).values
        )

    def test_gauss_nodes_match_legendre(self):
        """The embedded Gauss rule of K21 is the 10-point Legendre rule."""
        from torchgh.quadrature import (
            gauss_kronrod_nodes_weights,
            gauss_legendre_nodes_weights,
        )

        nodes, _, g_weights = gauss_kronrod_nodes_weights(
            21, dtype=torch.float64
        )
        gauss_nodes, _ = gauss_legendre_nodes_weights(10, dtype=torch.float64)

        torch.testing.assert_close(
            torch.sort(nodes[g_weights != 0]).values,
            torch.sort(gauss_nodes).values,
            atol=1e-12,
            rtol=1e-12,
        )

    @pytest.mark.parametrize("order", [7, 15, 17])
    def test_invalid_order(self, order):
        from torchgh.quadrature import gauss_kronrod_nodes_weights

        with pytest.raises(ValueError):
            gauss_kronrod_nodes_weights(order)
