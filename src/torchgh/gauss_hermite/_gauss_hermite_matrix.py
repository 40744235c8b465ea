import math
from typing import Optional, Sequence, Union

import torch
from torch import Tensor

from torchgh.polynomial import hermite_polynomial_a_vandermonde
from torchgh.quadrature import MAX_GAUSS_LEGENDRE_NODES, GaussLegendre
from torchgh.spline import (
    BSplineBasis,
    DegreeError,
    b_spline_basis_from_grid,
    b_spline_nonzero_basis,
)

from ._gauss_hermite_grid import as_parameter

SUPPORTED_DEGREES = (0, 1, 2, 3)


def _gauss_hermite_matrix(
    basis: BSplineBasis,
    order: int,
    amplitude: Tensor,
    center: Tensor,
    width: Tensor,
) -> Tensor:
    grid = basis.grid
    degree = basis.degree

    # B_j(x) H_m(y) is a polynomial of degree degree + order times a
    # Gaussian, integrated approximately with a fixed rule per segment
    num_nodes = min(
        MAX_GAUSS_LEGENDRE_NODES, max((degree + order + 1) // 2 + 1, 3)
    )
    nodes, weights = GaussLegendre(num_nodes).nodes_and_weights(
        0.0, 1.0, dtype=grid.dtype, device=grid.device
    )

    left = grid[:-1].unsqueeze(-1)
    dx = (grid[1:] - grid[:-1]).unsqueeze(-1)
    x = left + dx * nodes
    leftmost, bspl = b_spline_nonzero_basis(basis, x)

    y = (x - center) / width
    hpoly = hermite_polynomial_a_vandermonde(y, order)
    mult = math.sqrt(2.0) / amplitude * dx * weights * torch.exp(-0.5 * y * y)

    # (segment, node, m, b) contributions to T[m, leftmost + b]
    contributions = (
        mult[..., None, None] * hpoly[..., :, None] * bspl[..., None, :]
    )
    columns = leftmost.unsqueeze(-1) + torch.arange(
        degree + 1, device=grid.device
    )

    result = torch.zeros(
        order + 1, basis.num_basis, dtype=grid.dtype, device=grid.device
    )
    result.index_add_(
        1,
        columns.reshape(-1),
        contributions.permute(2, 0, 1, 3).reshape(order + 1, -1),
    )
    return result


def gauss_hermite_matrix(
    degree: int,
    grid: Union[Sequence[float], Tensor],
    order: int,
    amplitude: Union[float, Tensor],
    center: Union[float, Tensor],
    width: Union[float, Tensor],
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tensor:
    r"""Linear map from B-spline amplitudes to Gauss-Hermite coefficients.

    A function represented over a B-spline basis of the given degree,
    f(x) = sum_j A_j B_j(x), has the Gauss-Hermite coefficients
    h_m = sum_j C[m, j] A_j, where C is the matrix returned here:

    .. math::

        C_{mj} = \frac{\sqrt{2}}{a} \int B_j(x)\, H_m(y)\, e^{-y^2/2}\, dx,
        \quad y = (x - c) / w

    Parameters
    ----------
    degree : int
        B-spline degree, one of ``SUPPORTED_DEGREES`` (0, 1, 2, 3).
    grid : sequence of float or Tensor
        Breakpoints of the B-spline basis, strictly increasing.
    order : int
        Highest Gauss-Hermite coefficient index.
    amplitude, center, width : float or Tensor
        Envelope of the expansion.

    Returns
    -------
    Tensor
        Shape (order + 1, len(grid) + degree - 1). Column j belongs to the
        j-th basis function of the grid.

    Raises
    ------
    DegreeError
        If degree is not supported.
    KnotError
        If the grid is not strictly increasing.

    Notes
    -----
    Each grid segment is integrated with a Gauss-Legendre rule of
    max(3, (degree + order + 1) // 2 + 1) nodes, capped at
    ``MAX_GAUSS_LEGENDRE_NODES``. The rule would be exact without the
    Gaussian weight; with it, the result is an approximation whose accuracy
    improves as the segments shrink relative to the width.

    Examples
    --------
    >>> grid = torch.linspace(-4.0, 4.0, 41, dtype=torch.float64)
    >>> matrix = gauss_hermite_matrix(3, grid, 6, 1.0, 0.0, 1.0)
    >>> matrix.shape
    torch.Size([7, 43])
    """
    if degree not in SUPPORTED_DEGREES:
        raise DegreeError(
            f"B-spline degree must be one of {SUPPORTED_DEGREES}, got {degree}"
        )

    basis = b_spline_basis_from_grid(grid, degree, dtype=dtype, device=device)

    return _gauss_hermite_matrix(
        basis,
        order,
        as_parameter(amplitude, dtype, device),
        as_parameter(center, dtype, device),
        as_parameter(width, dtype, device),
    )
