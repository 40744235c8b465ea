class GaussHermiteError(ValueError):
    """Base exception for Gauss-Hermite expansion operations."""

    pass
