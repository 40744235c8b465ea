import math
from typing import Callable, Optional, Union

import torch
from torch import Tensor

from torchgh.polynomial import hermite_polynomial_a_vandermonde

from ._gauss_hermite_grid import (
    QUADRATURE_ORDER,
    as_parameter,
    evaluate_function,
    half_nodes,
)


def gauss_hermite_coefficients(
    f: Callable[[Tensor], Tensor],
    order: int,
    amplitude: Union[float, Tensor],
    center: Union[float, Tensor],
    width: Union[float, Tensor],
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    r"""Gauss-Hermite coefficients of a function for a given envelope.

    .. math::

        h_i = \frac{\sqrt{2}\, w}{a} \int_{-\infty}^{\infty}
              f(c + w y)\, H_i(y)\, e^{-y^2/2}\, dy

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function of x.
    order : int
        Highest coefficient index.
    amplitude, center, width : float or Tensor
        Envelope of the expansion.

    Returns
    -------
    Tensor
        Coefficients h_0..h_order, shape (order + 1,). When the envelope is
        the best-fit Gaussian of ``f``, h_0 is close to 1 and h_1, h_2 close
        to 0. A zero amplitude gives non-finite coefficients.

    Notes
    -----
    The integral uses the equally spaced nodes y = p / N, p = 0..N^2, of the
    non-negative half-line. The negative half is folded in through the
    parity of the Hermite functions, H_i(-y) = (-1)^i H_i(y), so that each
    node carries f at both c + w y and c - w y.
    """
    amplitude = as_parameter(amplitude, dtype, device)
    center = as_parameter(center, dtype, device)
    width = as_parameter(width, dtype, device)

    y = half_nodes(dtype=dtype, device=device)

    f_plus = evaluate_function(f, center + width * y)
    f_minus = torch.cat(
        [
            torch.zeros(1, dtype=dtype, device=device),
            evaluate_function(f, center - width * y[1:]),
        ]
    )

    hpoly = hermite_polynomial_a_vandermonde(y, order)
    parity = torch.where(
        torch.arange(order + 1, device=device) % 2 == 1, -1.0, 1.0
    ).to(dtype)

    mult = (
        math.sqrt(2.0)
        * width
        / amplitude
        / QUADRATURE_ORDER
        * torch.exp(-0.5 * y * y)
    )
    folded = f_plus.unsqueeze(-1) + parity * f_minus.unsqueeze(-1)

    return (mult.unsqueeze(-1) * folded * hpoly).sum(dim=0)
