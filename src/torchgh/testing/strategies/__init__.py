"""Hypothesis strategies for Gauss-Hermite testing."""

from ._envelopes import envelopes
from ._expansion_orders import expansion_orders
from ._grids import grids
from ._scaled_coordinates import scaled_coordinates

__all__ = [
    "envelopes",
    "expansion_orders",
    "grids",
    "scaled_coordinates",
]
