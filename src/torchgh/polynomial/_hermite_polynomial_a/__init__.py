"""Astrophysicists' Hermite polynomials (Gauss-Hermite expansion basis)."""

from ._hermite_polynomial_a_evaluate import (
    hermite_polynomial_a_evaluate,
)
from ._hermite_polynomial_a_vandermonde import (
    hermite_polynomial_a_vandermonde,
)

__all__ = [
    "hermite_polynomial_a_evaluate",
    "hermite_polynomial_a_vandermonde",
]
