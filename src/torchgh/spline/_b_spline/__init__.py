from ._b_spline_basis_evaluate import b_spline_basis_evaluate
from ._b_spline_basis_from_grid import (
    BSplineBasis,
    b_spline_basis_from_grid,
)
from ._b_spline_nonzero_basis import b_spline_nonzero_basis

__all__ = [
    "BSplineBasis",
    "b_spline_basis_evaluate",
    "b_spline_basis_from_grid",
    "b_spline_nonzero_basis",
]
