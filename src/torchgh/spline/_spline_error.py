class SplineError(ValueError):
    """Base exception for spline operations."""

    pass
