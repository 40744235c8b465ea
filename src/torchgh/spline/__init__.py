"""B-spline bases over a grid of breakpoints.

B-Spline Bases
--------------
b_spline_basis_from_grid
    Build the clamped basis of a given degree over a grid.
b_spline_nonzero_basis
    Evaluate only the degree + 1 basis functions nonzero at each point.
b_spline_basis_evaluate
    Evaluate a function expanded in the basis.

Data Types
----------
BSplineBasis
    Grid, clamped knots and degree.

Exceptions
----------
SplineError
    Base exception for spline operations.
KnotError
    Invalid grid or knot vector.
DegreeError
    Invalid or unsupported degree.
"""

from ._b_spline import (
    BSplineBasis,
    b_spline_basis_evaluate,
    b_spline_basis_from_grid,
    b_spline_nonzero_basis,
)
from ._degree_error import DegreeError
from ._knot_error import KnotError
from ._spline_error import SplineError

__all__ = [
    "BSplineBasis",
    "DegreeError",
    "KnotError",
    "SplineError",
    "b_spline_basis_evaluate",
    "b_spline_basis_from_grid",
    "b_spline_nonzero_basis",
]
