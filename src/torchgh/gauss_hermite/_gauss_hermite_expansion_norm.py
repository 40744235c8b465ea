from torch import Tensor

from ._gauss_hermite_expansion import GaussHermiteExpansion
from ._gauss_hermite_normalization import gauss_hermite_normalization


def gauss_hermite_expansion_norm(expansion: GaussHermiteExpansion) -> Tensor:
    r"""Integral of a Gauss-Hermite expansion over the real line.

    .. math::

        \int f(x)\, dx = a \sum_{n \text{ even}} h_n\,
                         \frac{\sqrt{n!}}{n!!}

    Parameters
    ----------
    expansion : GaussHermiteExpansion
        Expansion to integrate.

    Returns
    -------
    Tensor
        Scalar integral. Odd terms do not contribute.
    """
    coefficients = expansion.coefficients

    total = coefficients.new_zeros(())
    for n in range(0, coefficients.shape[-1], 2):
        total = total + coefficients[n] * gauss_hermite_normalization(n)

    return expansion.amplitude * total
