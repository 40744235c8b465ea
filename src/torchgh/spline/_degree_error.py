from ._spline_error import SplineError


class DegreeError(SplineError):
    """Raised when degree is unsupported or invalid for given knot count."""

    pass
