"""Fixed equally spaced nodes shared by the fit and the projection.

The integral of g(y) exp(-y^2/2) over the real line is approximated by
(1/N) sum_{p=-N^2}^{N^2} g(p/N) exp(-(p/N)^2/2) with N = QUADRATURE_ORDER.
For smooth g this is far more accurate than its simplicity suggests, and
it needs no polynomial structure of g.
"""

from typing import Callable, Optional, Union

import torch
from torch import Tensor

QUADRATURE_ORDER = 7


def symmetric_nodes(
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    """Scaled abscissas (p - N^2) / N for p = 0..2 N^2, shape (2 N^2 + 1,)."""
    n = QUADRATURE_ORDER
    p = torch.arange(2 * n * n + 1, dtype=dtype, device=device)
    return (p - n * n) / n


def half_nodes(
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    """Non-negative scaled abscissas p / N for p = 0..N^2, shape (N^2 + 1,)."""
    n = QUADRATURE_ORDER
    return torch.arange(n * n + 1, dtype=dtype, device=device) / n


def as_parameter(
    value: Union[float, Tensor],
    dtype: torch.dtype,
    device: Optional[torch.device],
) -> Tensor:
    return torch.as_tensor(value, dtype=dtype, device=device)


def evaluate_function(f: Callable[[Tensor], Tensor], x: Tensor) -> Tensor:
    """Evaluate a user function on a batch of points in the working dtype."""
    return torch.as_tensor(f(x), dtype=x.dtype, device=x.device)
