"""Orthogonal polynomial families used by the expansion engine.

Astrophysicists' Hermite
------------------------
hermite_polynomial_a_vandermonde
    H_0..H_N at given points via the three-term recurrence.
hermite_polynomial_a_evaluate
    Evaluate a coefficient series.
"""

from ._hermite_polynomial_a import (
    hermite_polynomial_a_evaluate,
    hermite_polynomial_a_vandermonde,
)

__all__ = [
    "hermite_polynomial_a_evaluate",
    "hermite_polynomial_a_vandermonde",
]
