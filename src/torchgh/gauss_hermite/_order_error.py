from ._gauss_hermite_error import GaussHermiteError


class OrderError(GaussHermiteError):
    """Raised for an expansion order or basis index out of range."""

    pass
