"""Quadrature rule classes."""

from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from torchgh.quadrature._nodes import (
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)


def _as_tensors(
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    dtype: Optional[torch.dtype],
    device: Optional[torch.device],
) -> Tuple[Tensor, Tensor]:
    if isinstance(a, Tensor):
        dtype = dtype or a.dtype
        device = device or a.device
    elif isinstance(b, Tensor):
        dtype = dtype or b.dtype
        device = device or b.device
    else:
        dtype = dtype or torch.float64
        device = device or torch.device("cpu")

    if not isinstance(a, Tensor):
        a = torch.tensor(a, dtype=dtype, device=device)
    if not isinstance(b, Tensor):
        b = torch.tensor(b, dtype=dtype, device=device)

    return a.to(dtype=dtype, device=device), b.to(dtype=dtype, device=device)


class GaussLegendre:
    """
    Gauss-Legendre quadrature rule.

    Exact for polynomials of degree <= 2n-1.

    Parameters
    ----------
    n : int
        Number of quadrature points.

    Examples
    --------
    >>> rule = GaussLegendre(4)
    >>> nodes, weights = rule.nodes_and_weights(a=0, b=1)
    >>> weights.sum()
    tensor(1., dtype=torch.float64)

    Attributes
    ----------
    n : int
        Number of points.
    """

    def __init__(self, n: int):
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        self.n = n
        self._cache: dict = {}

    def _get_base_nodes_weights(
        self,
        dtype: torch.dtype,
        device: torch.device,
    ) -> Tuple[Tensor, Tensor]:
        """Get cached base nodes/weights on [-1, 1]."""
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = gauss_legendre_nodes_weights(
                self.n, dtype=dtype, device=device
            )
        return self._cache[key]

    def nodes_and_weights(
        self,
        a: Union[float, Tensor] = -1.0,
        b: Union[float, Tensor] = 1.0,
        *,
        dtype: Optional[torch.dtype] = None,
        device: Optional[torch.device] = None,
    ) -> Tuple[Tensor, Tensor]:
        """
        Return nodes and weights scaled to [a, b].

        If a and b are batched tensors, returns batched nodes/weights.

        Parameters
        ----------
        a, b : float or Tensor
            Integration bounds. Can be batched.
        dtype : torch.dtype, optional
            Output dtype. Inferred from a/b if not specified.
        device : torch.device, optional
            Output device. Inferred from a/b if not specified.

        Returns
        -------
        nodes : Tensor
            Shape (*batch, n) if a/b are batched, else (n,).
        weights : Tensor
            Shape (*batch, n) if a/b are batched, else (n,).
        """
        a, b = _as_tensors(a, b, dtype, device)
        base_nodes, base_weights = self._get_base_nodes_weights(
            a.dtype, a.device
        )

        # x' = (b - a) / 2 * x + (a + b) / 2, weights scale by (b - a) / 2
        half_width = ((b - a) / 2).unsqueeze(-1)
        center = ((a + b) / 2).unsqueeze(-1)

        return half_width * base_nodes + center, half_width * base_weights


class GaussKronrod:
    """
    Gauss-Kronrod quadrature rule with embedded error estimation.

    Uses the G10-K21 pair.

    Parameters
    ----------
    order : int
        Kronrod order. Only 21 is available.

    Examples
    --------
    >>> rule = GaussKronrod(21)
    >>> result, error = rule.integrate_with_error(torch.sin, 0, torch.pi)

    Attributes
    ----------
    order : int
        Number of Kronrod points.
    """

    def __init__(self, order: int = 21):
        if order != 21:
            raise ValueError(f"order must be 21, got {order}")
        self.order = order
        self._cache: dict = {}

    def _get_nodes_weights(
        self,
        dtype: torch.dtype,
        device: torch.device,
    ) -> Tuple[Tensor, Tensor, Tensor]:
        """Get cached nodes and weights."""
        key = (str(dtype), str(device))
        if key not in self._cache:
            self._cache[key] = gauss_kronrod_nodes_weights(
                self.order, dtype=dtype, device=device
            )
        return self._cache[key]

    def integrate_with_error(
        self,
        f: Callable[[Tensor], Tensor],
        a: Union[float, Tensor],
        b: Union[float, Tensor],
    ) -> Tuple[Tensor, Tensor]:
        """
        Integrate f from a to b with an error estimate.

        Parameters
        ----------
        f : callable
            Integrand. Receives the nodes, shape (order,), and returns
            values of shape (*outputs, order) so that vector-valued
            integrands are integrated componentwise.
        a, b : float or Tensor
            Integration bounds (scalars).

        Returns
        -------
        result : Tensor
            Kronrod approximation, shape (*outputs).
        error : Tensor
            Estimated error |Kronrod - Gauss|, shape (*outputs).
        """
        a, b = _as_tensors(a, b, None, None)
        nodes, k_weights, g_weights = self._get_nodes_weights(
            a.dtype, a.device
        )

        half_width = (b - a) / 2
        center = (a + b) / 2

        values = f(half_width * nodes + center)

        kronrod_result = (values * (half_width * k_weights)).sum(dim=-1)
        gauss_result = (values * (half_width * g_weights)).sum(dim=-1)

        return kronrod_result, torch.abs(kronrod_result - gauss_result)
