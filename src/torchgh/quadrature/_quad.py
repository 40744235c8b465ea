"""Adaptive quadrature using Gauss-Kronrod rules."""

import heapq
import warnings
from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from torchgh.quadrature._exceptions import QuadratureWarning
from torchgh.quadrature._rules import GaussKronrod


def quad_info(
    f: Callable[[Tensor], Tensor],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    epsabs: float = 0.0,
    epsrel: float = 1.49e-8,
    max_evaluations: int = 1000,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, dict]:
    """
    Compute a definite integral by adaptive bisection with a G10-K21 rule.

    Parameters
    ----------
    f : callable
        Integrand. Receives a tensor of nodes of shape ``(n,)`` and returns
        a tensor of shape ``(*outputs, n)``; every leading component is
        integrated at once, over the same subdivision.
    a, b : float or Tensor
        Integration bounds (scalars only, not batched).
    epsabs : float
        Absolute error tolerance.
    epsrel : float
        Relative error tolerance.
    max_evaluations : int
        Budget of integrand evaluations (counted per node). No interval
        is bisected once the next bisection would exceed it.
    dtype : torch.dtype
        Working precision when neither bound is a tensor.
    device : torch.device, optional
        Working device when neither bound is a tensor.

    Returns
    -------
    result : Tensor
        Integral approximation, shape ``(*outputs)``.
    error : Tensor
        Estimated absolute error, shape ``(*outputs)``.
    info : dict
        Information dict with keys:
        - "neval": Number of integrand evaluations
        - "nsubintervals": Number of subintervals used
        - "converged": Whether tolerance was achieved

    Warns
    -----
    QuadratureWarning
        If the budget is exhausted before the tolerance is reached. The
        best estimate is returned nonetheless.

    Notes
    -----
    The tolerance test is applied to the Euclidean norms over all output
    components, ``|error| <= epsabs + epsrel * |result|``, so that a
    component which integrates to zero does not prevent convergence.

    Examples
    --------
    >>> result, error, info = quad_info(torch.sin, 0, torch.pi)
    >>> info["converged"]
    True
    """
    rule = GaussKronrod(21)

    if isinstance(a, Tensor):
        dtype, device = a.dtype, a.device
    elif isinstance(b, Tensor):
        dtype, device = b.dtype, b.device

    a_val = float(a)
    b_val = float(b)

    def integrate(left: float, right: float) -> Tuple[Tensor, Tensor]:
        return rule.integrate_with_error(
            f,
            torch.tensor(left, dtype=dtype, device=device),
            torch.tensor(right, dtype=dtype, device=device),
        )

    def converged(result: Tensor, error: Tensor) -> bool:
        tolerance = epsabs + epsrel * torch.linalg.vector_norm(result)
        return bool(torch.linalg.vector_norm(error) <= tolerance)

    total_result, total_error = integrate(a_val, b_val)
    neval = rule.order
    nsubintervals = 1

    # Max-heap by error: (-error, counter, left, right, result, error)
    heap = [
        (
            -torch.linalg.vector_norm(total_error).item(),
            0,
            a_val,
            b_val,
            total_result,
            total_error,
        )
    ]

    while not converged(total_result, total_error):
        if neval + 2 * rule.order > max_evaluations:
            warnings.warn(
                f"Quadrature did not converge within {max_evaluations} "
                f"evaluations. Error: "
                f"{torch.linalg.vector_norm(total_error).item():.2e}",
                QuadratureWarning,
            )
            return (
                total_result,
                total_error,
                {
                    "neval": neval,
                    "nsubintervals": nsubintervals,
                    "converged": False,
                },
            )

        _, _, left, right, _, _ = heapq.heappop(heap)
        mid = (left + right) / 2

        result_left, error_left = integrate(left, mid)
        result_right, error_right = integrate(mid, right)
        neval += 2 * rule.order
        nsubintervals += 1

        heapq.heappush(
            heap,
            (
                -torch.linalg.vector_norm(error_left).item(),
                2 * nsubintervals - 1,
                left,
                mid,
                result_left,
                error_left,
            ),
        )
        heapq.heappush(
            heap,
            (
                -torch.linalg.vector_norm(error_right).item(),
                2 * nsubintervals,
                mid,
                right,
                result_right,
                error_right,
            ),
        )

        # Totals over the leaf intervals
        total_result = torch.stack([leaf[4] for leaf in heap]).sum(dim=0)
        total_error = torch.stack([leaf[5] for leaf in heap]).sum(dim=0)

    return (
        total_result,
        total_error,
        {
            "neval": neval,
            "nsubintervals": nsubintervals,
            "converged": True,
        },
    )
