"""Least-squares model for the Gaussian envelope of a Gauss-Hermite expansion."""

import enum
import math
from typing import Callable

import torch
from torch import Tensor

from torchgh.optimization import OptimizeResult, levenberg_marquardt
from torchgh.polynomial import hermite_polynomial_a_vandermonde

from ._gauss_hermite_grid import evaluate_function, symmetric_nodes


class FitOrder(enum.Enum):
    """Which parameters the envelope fit adjusts.

    ENVELOPE
        Only amplitude, center and width, with h_0 = 1, h_1 = h_2 = 0 and no
        higher terms. The best-fit Gaussian is then the same for every
        expansion order, adding terms does not change the lower ones, and
        the projected h_1, h_2 come out close to zero.
    FULL
        Amplitude, center, width and h_3..h_order together, still with
        h_0 = 1, h_1 = h_2 = 0. The fitted center and width then depend on
        the truncation order, and projecting the function afterwards gives
        h_1, h_2 != 0. Neither variant is the absolute best fit at a given
        order, which would need h_1 and h_2 to be free as well.
    """

    ENVELOPE = "envelope"
    FULL = "full"


def _model(params: Tensor):
    """Scaled nodes, Hermite array, series and model values for ``params``."""
    order = params.shape[0] - 1
    width = params[2]

    y = symmetric_nodes(dtype=params.dtype, device=params.device)
    hpoly = hermite_polynomial_a_vandermonde(y, order)
    series = 1 + (hpoly[:, 3:] * params[3:]).sum(dim=-1)
    model = (
        torch.exp(-0.5 * y * y)
        * series
        / (math.sqrt(2 * math.pi) * torch.sqrt(width))
    )

    return y, hpoly, series, model


def gauss_hermite_residuals(
    f: Callable[[Tensor], Tensor],
    params: Tensor,
) -> Tensor:
    r"""Residuals of a Gauss-Hermite model against a function.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function of x.
    params : Tensor
        ``[amplitude, center, width, h_3, ..., h_K]``, shape (K + 1,), K >= 2.

    Returns
    -------
    Tensor
        Shape (2 N^2 + 1,) with N = ``QUADRATURE_ORDER``. At the scaled
        nodes y_p = (p - N^2) / N and x_p = center + width * y_p,

        .. math::

            r_p = \sqrt{w} f(x_p) - \frac{a}{\sqrt{2\pi w}}
                  e^{-y_p^2/2} \left(1 + \sum_{n=3}^{K} h_n H_n(y_p)\right)

    Notes
    -----
    The sqrt(width) weighting equalizes the sensitivity of the objective to
    the width across very different width scales.
    """
    y, _, _, model = _model(params)
    amplitude, center, width = params[0], params[1], params[2]

    return torch.sqrt(width) * evaluate_function(
        f, center + width * y
    ) - amplitude * model


def gauss_hermite_residuals_jacobian(
    f: Callable[[Tensor], Tensor],
    params: Tensor,
) -> Tensor:
    """Partial derivatives of ``gauss_hermite_residuals`` w.r.t. ``params``.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function of x (unused; the derivatives are those of the
        model at the sample points).
    params : Tensor
        ``[amplitude, center, width, h_3, ..., h_K]``, shape (K + 1,).

    Returns
    -------
    Tensor
        Shape (2 N^2 + 1, K + 1).

    Notes
    -----
    The sample points x_p move with center and width, so the derivatives
    are taken with x_p held fixed and y = (x - center) / width varying.
    They coincide with the exact derivatives of the residuals wherever the
    model matches the function.
    """
    y, hpoly, series, model = _model(params)
    amplitude, width = params[0], params[2]

    scaled = model * amplitude / width
    jacobian = torch.stack(
        [-model, -scaled * y, scaled * (1 - y * y)],
        dim=-1,
    )

    if params.shape[0] > 3:
        coefficient_columns = (-model * amplitude / series).unsqueeze(
            -1
        ) * hpoly[:, 3:]
        jacobian = torch.cat([jacobian, coefficient_columns], dim=-1)

    return jacobian


def gauss_hermite_fit(
    f: Callable[[Tensor], Tensor],
    x0: Tensor,
    *,
    tol: float = 1e-6,
    max_evaluations: int = 100,
    damping: float = 1e-3,
) -> OptimizeResult:
    """Fit a Gauss-Hermite model to a function by Levenberg-Marquardt.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function of x.
    x0 : Tensor
        Starting parameters ``[amplitude, center, width, h_3, ..., h_K]``.
        Three entries fit the envelope only (``FitOrder.ENVELOPE``); more
        entries fit the higher coefficients as well (``FitOrder.FULL``).
    tol : float
        Convergence tolerance. Default: 1e-6.
    max_evaluations : int
        Budget of residual evaluations. Default: 100.
    damping : float
        Initial damping of the solver. Default: 1e-3.

    Returns
    -------
    OptimizeResult
        ``x`` holds the parameters current at termination, ``converged``
        tells whether the tolerance was met within the budget. A poor seed
        may give a poor, but well-formed, result.
    """
    return levenberg_marquardt(
        lambda params: gauss_hermite_residuals(f, params),
        x0,
        jacobian=lambda params: gauss_hermite_residuals_jacobian(f, params),
        tol=tol,
        max_evaluations=max_evaluations,
        damping=damping,
    )
