import math
from typing import Union

import torch
from torch import Tensor

from torchgh.polynomial import hermite_polynomial_a_evaluate

from ._gauss_hermite_expansion import GaussHermiteExpansion


def gauss_hermite_expansion_evaluate(
    expansion: GaussHermiteExpansion,
    x: Union[float, Tensor],
) -> Tensor:
    r"""Evaluate a Gauss-Hermite expansion at x.

    .. math::

        f(x) = \frac{a}{w \sqrt{2\pi}} e^{-y^2/2} \sum_{i=0}^{N} h_i H_i(y),
        \quad y = (x - c) / w

    Parameters
    ----------
    expansion : GaussHermiteExpansion
        Expansion to evaluate.
    x : float or Tensor
        Evaluation points, any shape.

    Returns
    -------
    Tensor
        Values with the shape of ``x``. An expansion without coefficients
        evaluates to zero.

    Examples
    --------
    >>> expansion = gauss_hermite_expansion(f, 4, 1.0, 0.0, 1.0)
    >>> gauss_hermite_expansion_evaluate(expansion, torch.tensor([0.0]))
    """
    coefficients = expansion.coefficients
    x = torch.as_tensor(x, dtype=coefficients.dtype, device=coefficients.device)

    if coefficients.numel() == 0:
        return torch.zeros_like(x)

    y = (x - expansion.center) / expansion.width
    envelope = (
        expansion.amplitude
        / (expansion.width * math.sqrt(2 * math.pi))
        * torch.exp(-0.5 * y * y)
    )

    return envelope * hermite_polynomial_a_evaluate(coefficients, y)
