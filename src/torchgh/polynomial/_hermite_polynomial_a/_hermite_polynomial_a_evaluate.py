import torch
from torch import Tensor

from ._hermite_polynomial_a_vandermonde import (
    hermite_polynomial_a_vandermonde,
)


def hermite_polynomial_a_evaluate(
    coefficients: Tensor,
    y: Tensor,
) -> Tensor:
    """Evaluate sum_n coefficients[n] * H_n(y) in the astrophysicists' basis.

    Parameters
    ----------
    coefficients : Tensor
        Series coefficients, shape (N,).
    y : Tensor
        Evaluation points, any shape.

    Returns
    -------
    Tensor
        Series values, same shape as y. Zero for an empty series.
    """
    n = coefficients.shape[-1]
    if n == 0:
        return torch.zeros_like(y)

    basis = hermite_polynomial_a_vandermonde(y, n - 1)
    return (basis * coefficients.to(basis.dtype)).sum(dim=-1)
