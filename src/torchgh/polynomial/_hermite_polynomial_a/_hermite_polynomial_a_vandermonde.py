"""Astrophysicists' Hermite polynomials H_0..H_N at given points."""

import math

import torch
from torch import Tensor


def hermite_polynomial_a_vandermonde(
    y: Tensor,
    degree: int,
) -> Tensor:
    """Generate the astrophysicists' Hermite Vandermonde matrix.

    V[..., n] = H_n(y[...])

    Parameters
    ----------
    y : Tensor
        Evaluation points (scaled coordinate), any shape.
    degree : int
        Maximum degree (output has degree+1 trailing entries). A negative
        degree gives an empty trailing dimension.

    Returns
    -------
    Tensor
        Shape (*y.shape, degree+1).

    Notes
    -----
    This is the normalization of van der Marel & Franx (1993), neither the
    probabilists' nor the physicists' one:
        H_0(y) = 1
        H_1(y) = sqrt(2) * y
        H_{n+1}(y) = (sqrt(2) * y * H_n(y) - sqrt(n) * H_{n-1}(y)) / sqrt(n+1)

    With this choice
        int H_n(y) H_m(y) exp(-y^2) dy / (2 pi) = delta_mn / (2 sqrt(pi)),
        dH_n/dy = sqrt(2n) H_{n-1},
    and H_n(y) = He_n(sqrt(2) y) / sqrt(n!) = H^phys_n(y) / sqrt(2^n n!)
    in terms of the probabilists' and physicists' polynomials.

    Examples
    --------
    >>> y = torch.tensor([0.0, 1.0], dtype=torch.float64)
    >>> hermite_polynomial_a_vandermonde(y, degree=2)
    tensor([[ 1.0000,  0.0000, -0.7071],
            [ 1.0000,  1.4142,  0.7071]], dtype=torch.float64)
    """
    if degree < 0:
        return y.new_zeros((*y.shape, 0))

    # Build columns without in-place ops for autograd compatibility
    columns = [torch.ones_like(y)]

    if degree >= 1:
        sqrt2_y = math.sqrt(2.0) * y
        columns.append(sqrt2_y)

        sqrt_n = 1.0
        for n in range(1, degree):
            sqrt_n_plus_1 = math.sqrt(n + 1)
            columns.append(
                (sqrt2_y * columns[n] - sqrt_n * columns[n - 1])
                / sqrt_n_plus_1
            )
            sqrt_n = sqrt_n_plus_1

    return torch.stack(columns, dim=-1)
