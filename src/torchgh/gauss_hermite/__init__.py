"""Gauss-Hermite expansions of functions of one variable.

Expansions
----------
gauss_hermite_expansion
    Build the expansion of a function, fitting the envelope if not given.
gauss_hermite_expansion_evaluate
    Evaluate an expansion.
gauss_hermite_expansion_norm
    Integral of an expansion over the real line.
gauss_hermite_normalization
    Integral of a single Hermite basis function.

Projection
----------
gauss_hermite_coefficients
    Coefficients of a function for a given envelope.
gauss_hermite_matrix
    Linear map from B-spline amplitudes to coefficients.

Envelope Estimation
-------------------
gauss_hermite_classic_moments
    Normalization, mean and standard deviation of a function.
gauss_hermite_residuals, gauss_hermite_residuals_jacobian
    Least-squares model of a truncated expansion.
gauss_hermite_fit
    Levenberg-Marquardt fit of the model.

Data Types
----------
GaussHermiteExpansion
    Envelope, coefficients and convergence flag.
FitOrder
    Parameters adjusted by the envelope fit.

Exceptions
----------
GaussHermiteError
    Base exception for expansion operations.
OrderError
    Invalid expansion order or basis index.
"""

from ._gauss_hermite_classic_moments import gauss_hermite_classic_moments
from ._gauss_hermite_coefficients import gauss_hermite_coefficients
from ._gauss_hermite_error import GaussHermiteError
from ._gauss_hermite_expansion import (
    GaussHermiteExpansion,
    gauss_hermite_expansion,
)
from ._gauss_hermite_expansion_evaluate import gauss_hermite_expansion_evaluate
from ._gauss_hermite_expansion_norm import gauss_hermite_expansion_norm
from ._gauss_hermite_fit import (
    FitOrder,
    gauss_hermite_fit,
    gauss_hermite_residuals,
    gauss_hermite_residuals_jacobian,
)
from ._gauss_hermite_grid import QUADRATURE_ORDER
from ._gauss_hermite_matrix import SUPPORTED_DEGREES, gauss_hermite_matrix
from ._gauss_hermite_normalization import gauss_hermite_normalization
from ._order_error import OrderError

__all__ = [
    "FitOrder",
    "GaussHermiteError",
    "GaussHermiteExpansion",
    "OrderError",
    "QUADRATURE_ORDER",
    "SUPPORTED_DEGREES",
    "gauss_hermite_classic_moments",
    "gauss_hermite_coefficients",
    "gauss_hermite_expansion",
    "gauss_hermite_expansion_evaluate",
    "gauss_hermite_expansion_norm",
    "gauss_hermite_fit",
    "gauss_hermite_matrix",
    "gauss_hermite_normalization",
    "gauss_hermite_residuals",
    "gauss_hermite_residuals_jacobian",
]
