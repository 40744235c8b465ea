"""
Numerical integration (quadrature) module.

Function-based integration (evaluates callable):
    quad_info

Quadrature rule classes:
    GaussLegendre, GaussKronrod

Node/weight computation for Gaussian quadrature:
    gauss_legendre_nodes_weights, gauss_kronrod_nodes_weights

Warnings:
    QuadratureWarning
"""

from torchgh.quadrature._exceptions import QuadratureWarning
from torchgh.quadrature._nodes import (
    MAX_GAUSS_LEGENDRE_NODES,
    gauss_kronrod_nodes_weights,
    gauss_legendre_nodes_weights,
)
from torchgh.quadrature._quad import quad_info
from torchgh.quadrature._rules import (
    GaussKronrod,
    GaussLegendre,
)

__all__ = [
    # Function-based
    "quad_info",
    # Rule classes
    "GaussLegendre",
    "GaussKronrod",
    # Node/weight computation
    "MAX_GAUSS_LEGENDRE_NODES",
    "gauss_legendre_nodes_weights",
    "gauss_kronrod_nodes_weights",
    # Warnings
    "QuadratureWarning",
]
