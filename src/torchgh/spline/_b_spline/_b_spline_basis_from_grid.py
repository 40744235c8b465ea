from typing import Optional

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._degree_error import DegreeError
from .._knot_error import KnotError


@tensorclass
class BSplineBasis:
    """B-spline basis of fixed degree over a grid of breakpoints.

    Attributes
    ----------
    grid : Tensor
        Breakpoints, shape (n_grid,). Strictly increasing.
    knots : Tensor
        Clamped knot vector, shape (n_grid + 2 * degree,): the grid with its
        end points repeated ``degree`` extra times.
    degree : int
        Polynomial degree (stored as metadata, not tensor)

    Notes
    -----
    The basis has ``n_grid + degree - 1`` functions. On the segment
    ``[grid[n], grid[n+1]]`` exactly the functions ``n, ..., n + degree``
    are nonzero. Functions expanded in the basis vanish outside the grid.
    """

    grid: Tensor
    knots: Tensor
    degree: int

    @property
    def num_basis(self) -> int:
        return self.grid.shape[0] + self.degree - 1


def b_spline_basis_from_grid(
    grid: Tensor,
    degree: int,
    *,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> BSplineBasis:
    """Build the clamped B-spline basis of the given degree over a grid.

    Parameters
    ----------
    grid : Tensor or sequence of float
        Breakpoints, strictly increasing, at least two of them.
    degree : int
        Polynomial degree, non-negative.

    Returns
    -------
    BSplineBasis

    Raises
    ------
    DegreeError
        If degree is negative.
    KnotError
        If the grid has fewer than two points or is not strictly increasing.

    Examples
    --------
    >>> basis = b_spline_basis_from_grid(torch.tensor([0.0, 1.0, 2.0]), 2)
    >>> basis.knots
    tensor([0., 0., 0., 1., 2., 2., 2.], dtype=torch.float64)
    >>> basis.num_basis
    4
    """
    if degree < 0:
        raise DegreeError(f"Degree must be non-negative, got {degree}")

    grid = torch.as_tensor(grid, dtype=dtype, device=device).flatten()

    if grid.shape[0] < 2:
        raise KnotError(
            f"Grid must contain at least 2 points, got {grid.shape[0]}"
        )
    if not torch.all(grid[1:] > grid[:-1]):
        raise KnotError("Grid must be strictly increasing")

    knots = torch.cat(
        [grid[:1].repeat(degree), grid, grid[-1:].repeat(degree)]
    )

    return BSplineBasis(
        grid=grid,
        knots=knots,
        degree=degree,
        batch_size=[],
    )
