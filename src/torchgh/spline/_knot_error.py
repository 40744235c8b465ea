from ._spline_error import SplineError


class KnotError(SplineError):
    """Raised for invalid grids or knot vectors (non-monotonic, too short)."""

    pass
