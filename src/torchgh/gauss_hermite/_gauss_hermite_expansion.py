"""GaussHermiteExpansion tensorclass and its constructor."""

from __future__ import annotations

import math
from typing import Callable, Optional, Union

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from ._gauss_hermite_classic_moments import gauss_hermite_classic_moments
from ._gauss_hermite_coefficients import gauss_hermite_coefficients
from ._gauss_hermite_fit import FitOrder, gauss_hermite_fit
from ._order_error import OrderError


@tensorclass
class GaussHermiteExpansion:
    """Gauss-Hermite expansion of a function of one variable.

    Represents

        f(x) = a / (w sqrt(2 pi)) exp(-y^2 / 2) sum_{i=0}^{N} h_i H_i(y),
        y = (x - c) / w,

    where H_i are the astrophysicists' Hermite polynomials
    (``hermite_polynomial_a_vandermonde``).

    Attributes
    ----------
    amplitude : Tensor
        Scalar a, the integral of the base Gaussian.
    center : Tensor
        Scalar c, the center of the base Gaussian.
    width : Tensor
        Scalar w > 0, the dispersion of the base Gaussian.
    coefficients : Tensor
        h_0..h_N, shape (N + 1,). h_0 is close to 1 and h_1, h_2 close to 0
        when the envelope is the best-fit Gaussian.
    converged : Tensor
        Boolean scalar. False if the envelope fit stopped at its evaluation
        budget; the expansion is still usable but may be poor. Also False
        when no envelope could be estimated (see ``gauss_hermite_expansion``).

    Notes
    -----
    Built once by ``gauss_hermite_expansion`` and not modified afterwards;
    none of the functions operating on it write to its fields.
    """

    amplitude: Tensor
    center: Tensor
    width: Tensor
    coefficients: Tensor
    converged: Tensor

    @property
    def order(self) -> int:
        return self.coefficients.shape[-1] - 1

    def __call__(self, x: Tensor) -> Tensor:
        from ._gauss_hermite_expansion_evaluate import (
            gauss_hermite_expansion_evaluate,
        )

        return gauss_hermite_expansion_evaluate(self, x)


def gauss_hermite_expansion(
    f: Callable[[Tensor], Tensor],
    order: int,
    amplitude: Union[float, Tensor, None] = None,
    center: Union[float, Tensor, None] = None,
    width: Union[float, Tensor, None] = None,
    *,
    fit_order: Union[FitOrder, str] = FitOrder.ENVELOPE,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> GaussHermiteExpansion:
    """Construct the Gauss-Hermite expansion of a function.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Elementwise function of x. Called on batches of points; must not
        have side effects.
    order : int
        Highest coefficient index, at least 2.
    amplitude, center, width : float or Tensor, optional
        Envelope of the expansion. If any of them is None or NaN (so that
        their sum is not finite), the envelope is estimated: the classic
        moments of ``f`` seed a Levenberg-Marquardt fit of a Gaussian to
        ``f``, and the fitted values are used.
    fit_order : FitOrder or str
        Parameters adjusted by the fit. ``FitOrder.ENVELOPE`` (default)
        fits the Gaussian alone, which keeps the envelope independent of
        ``order``; ``FitOrder.FULL`` also fits h_3..h_order.
    dtype : torch.dtype
        Working precision.
    device : torch.device, optional
        Working device.

    Returns
    -------
    GaussHermiteExpansion
        If the envelope is estimated and no usable Gaussian is found
        (``f`` integrates to zero over the sampled points, or the fit ends
        on a non-finite or zero amplitude or on a non-positive width), the
        result has all-zero coefficients, amplitude 0, unit width and
        ``converged`` False.

    Raises
    ------
    OrderError
        If order < 2.

    Examples
    --------
    >>> f = lambda x: torch.exp(-0.5 * ((x - 1.0) / 2.0) ** 2)
    >>> expansion = gauss_hermite_expansion(f, 4)
    >>> expansion.center, expansion.width  # approx 1.0, 2.0
    """
    if order < 2:
        raise OrderError(f"order must be >= 2, got {order}")

    fit_order = FitOrder(fit_order)

    envelope = [
        math.nan if value is None else float(value)
        for value in (amplitude, center, width)
    ]

    converged = torch.tensor(True, device=device)
    degenerate = False

    if not math.isfinite(sum(envelope)):
        moments = gauss_hermite_classic_moments(f, dtype=dtype, device=device)

        if moments[0].item() == 0:
            # Nothing to fit: f vanishes wherever the moments looked
            converged = torch.tensor(False, device=device)
            degenerate = True
        else:
            fit_params = order if fit_order is FitOrder.FULL else 2
            x0 = torch.cat(
                [
                    moments,
                    torch.zeros(fit_params - 2, dtype=dtype, device=device),
                ]
            )

            result = gauss_hermite_fit(f, x0)
            amplitude, center, width = result.x[0], result.x[1], result.x[2]
            converged = result.converged.to(device=converged.device)

            envelope_is_valid = (
                torch.isfinite(result.x[:3]).all()
                and amplitude.item() != 0
                and width.item() > 0
            )
            if not envelope_is_valid:
                converged = torch.tensor(False, device=device)
                degenerate = True
    else:
        amplitude, center, width = envelope

    if degenerate:
        # Empty expansion on a unit-width envelope at the weighted mean
        amplitude, center, width = 0.0, moments[1], 1.0

    amplitude = torch.as_tensor(amplitude, dtype=dtype, device=device)
    center = torch.as_tensor(center, dtype=dtype, device=device)
    width = torch.as_tensor(width, dtype=dtype, device=device)

    if degenerate:
        coefficients = torch.zeros(order + 1, dtype=dtype, device=device)
    else:
        coefficients = gauss_hermite_coefficients(
            f, order, amplitude, center, width, dtype=dtype, device=device
        )

    return GaussHermiteExpansion(
        amplitude=amplitude,
        center=center,
        width=width,
        coefficients=coefficients,
        converged=converged,
        batch_size=[],
    )
