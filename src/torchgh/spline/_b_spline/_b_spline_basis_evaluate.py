from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from ._b_spline_nonzero_basis import b_spline_nonzero_basis

if TYPE_CHECKING:
    from ._b_spline_basis_from_grid import BSplineBasis


def b_spline_basis_evaluate(
    basis: BSplineBasis,
    amplitudes: Tensor,
    x: Tensor,
) -> Tensor:
    """
    Evaluate the function sum_j amplitudes[j] * B_j(x).

    Parameters
    ----------
    basis : BSplineBasis
        Basis built by ``b_spline_basis_from_grid``.
    amplitudes : Tensor
        Expansion coefficients, shape (basis.num_basis,).
    x : Tensor
        Query points, shape (*query_shape).

    Returns
    -------
    Tensor
        Values, shape (*query_shape). Zero outside ``[grid[0], grid[-1]]``.

    Raises
    ------
    ValueError
        If the number of amplitudes does not match the basis.
    """
    if amplitudes.shape[-1] != basis.num_basis:
        raise ValueError(
            f"Expected {basis.num_basis} amplitudes, got {amplitudes.shape[-1]}"
        )

    x = x.to(basis.grid.dtype)
    leftmost, values = b_spline_nonzero_basis(basis, x)

    index = leftmost.unsqueeze(-1) + torch.arange(
        basis.degree + 1, device=leftmost.device
    )
    result = (amplitudes.to(values.dtype)[index] * values).sum(dim=-1)

    inside = (x >= basis.grid[0]) & (x <= basis.grid[-1])
    return torch.where(inside, result, torch.zeros_like(result))
