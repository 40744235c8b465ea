from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

import torch
from torch import Tensor

if TYPE_CHECKING:
    from ._b_spline_basis_from_grid import BSplineBasis


def b_spline_nonzero_basis(
    basis: BSplineBasis,
    x: Tensor,
) -> Tuple[Tensor, Tensor]:
    """
    Evaluate the basis functions that can be nonzero at each point.

    Parameters
    ----------
    basis : BSplineBasis
        Basis built by ``b_spline_basis_from_grid``.
    x : Tensor
        Query points, shape (*query_shape). Points outside the grid are
        assigned to the nearest end segment.

    Returns
    -------
    leftmost : Tensor
        Index of the first possibly-nonzero basis function, ``int64``,
        shape (*query_shape). Equals the grid segment containing x.
    values : Tensor
        Values of basis functions ``leftmost, ..., leftmost + degree``,
        shape (*query_shape, degree + 1).

    Notes
    -----
    Uses the triangular scheme of Piegl & Tiller (The NURBS Book,
    algorithm A2.2), which needs only the ``2 * degree`` knots around the
    segment and never divides by zero on a strictly increasing grid.
    """
    grid = basis.grid
    knots = basis.knots
    degree = basis.degree

    query_shape = x.shape
    x_flat = x.reshape(-1).to(grid.dtype)

    segment = torch.searchsorted(grid, x_flat, right=True) - 1
    segment = segment.clamp(0, grid.shape[0] - 2)
    span = segment + degree

    values = [torch.ones_like(x_flat)]
    left = []
    right = []

    for j in range(1, degree + 1):
        left.append(x_flat - knots[span + 1 - j])
        right.append(knots[span + j] - x_flat)

        saved = torch.zeros_like(x_flat)
        for r in range(j):
            temp = values[r] / (right[r] + left[j - 1 - r])
            values[r] = saved + right[r] * temp
            saved = left[j - 1 - r] * temp
        values.append(saved)

    return (
        segment.reshape(query_shape),
        torch.stack(values, dim=-1).reshape(*query_shape, degree + 1),
    )
