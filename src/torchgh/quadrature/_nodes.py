"""Node and weight computation for quadrature rules."""

from typing import Optional, Tuple

import torch
from torch import Tensor

# Largest Gauss-Legendre rule handed out for per-segment integration.
MAX_GAUSS_LEGENDRE_NODES = 33


def gauss_legendre_nodes_weights(
    n: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor]:
    """
    Compute Gauss-Legendre nodes and weights on [-1, 1].

    Uses the Golub-Welsch algorithm (eigenvalues of symmetric tridiagonal matrix).

    Parameters
    ----------
    n : int
        Number of quadrature points.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Quadrature nodes, shape (n,), sorted ascending.
    weights : Tensor
        Quadrature weights, shape (n,).

    Raises
    ------
    ValueError
        If n < 1.

    Notes
    -----
    Gauss-Legendre quadrature is exact for polynomials of degree <= 2n-1.

    The Jacobi matrix for Legendre polynomials has zero diagonal and
    off-diagonal entries k / sqrt(4k^2 - 1). Its eigenvalues are the nodes,
    and the squared first components of its eigenvectors, times 2, are the
    weights.

    References
    ----------
    Golub, G. H., & Welsch, J. H. (1969). Calculation of Gauss quadrature rules.
    Mathematics of Computation, 23(106), 221-230.

    Examples
    --------
    >>> nodes, weights = gauss_legendre_nodes_weights(3)
    >>> weights.sum()
    tensor(2., dtype=torch.float64)
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")

    if n == 1:
        return (
            torch.tensor([0.0], dtype=dtype, device=device),
            torch.tensor([2.0], dtype=dtype, device=device),
        )

    # Eigendecomposition in float64 regardless of the requested dtype
    k = torch.arange(1, n, dtype=torch.float64, device=device)
    off_diag = k / torch.sqrt(4 * k**2 - 1)
    jacobi = torch.diag(off_diag, diagonal=1) + torch.diag(off_diag, diagonal=-1)

    eigenvalues, eigenvectors = torch.linalg.eigh(jacobi)

    order = torch.argsort(eigenvalues)
    nodes = eigenvalues[order]
    weights = 2 * eigenvectors[0, order] ** 2

    return nodes.to(dtype), weights.to(dtype)


# Gauss-Kronrod tables (QUADPACK). Only the non-negative half is stored:
# - positive nodes, starting with the zero node
# - Kronrod weights for each positive node
# - Gauss weights, zero where the node is a Kronrod-only node

_GK21_POSITIVE_NODES = [
    0.000000000000000000000000000000000,
    0.148874338981631210884826001129720,
    0.294392862701460198131126603103866,
    0.433395394129247190799265943165784,
    0.562757134668604683339000099272694,
    0.679409568299024406234327365114874,
    0.780817726586416897063717578345042,
    0.865063366688984510732096688423493,
    0.930157491355708226001207180059508,
    0.973906528517171720077964012084452,
    0.995657163025808080735527280689003,
]

_GK21_POSITIVE_K_WEIGHTS = [
    0.149445554002916905664936468389821,
    0.147739104901338491374841515972068,
    0.142775938577060080797094273138717,
    0.134709217311473325928054001771707,
    0.123491976262065851077958109831074,
    0.109387158802297641899210590325805,
    0.093125454583697605535065465083366,
    0.075039674810919952767043140916190,
    0.054755896574351996031381300244580,
    0.032558162307964727478818972459390,
    0.011694638867371874278064396062192,
]

# G10 has no zero node
_GK21_POSITIVE_G_WEIGHTS = [
    0.0,
    0.295524224714752870173892994651338,
    0.0,
    0.269266719309996355091226921569469,
    0.0,
    0.219086362515982043995534934228163,
    0.0,
    0.149451349150580593145776339657697,
    0.0,
    0.066671344308688137593568809893332,
    0.0,
]

_GK_DATA = {
    21: (
        _GK21_POSITIVE_NODES,
        _GK21_POSITIVE_K_WEIGHTS,
        _GK21_POSITIVE_G_WEIGHTS,
    ),
}


def gauss_kronrod_nodes_weights(
    order: int,
    dtype: torch.dtype = torch.float64,
    device: Optional[torch.device] = None,
) -> Tuple[Tensor, Tensor, Tensor]:
    """
    Compute Gauss-Kronrod nodes and weights on [-1, 1].

    Parameters
    ----------
    order : int
        Kronrod order. Only 21 (G10-K21) is tabulated.
    dtype : torch.dtype
        Data type for output tensors.
    device : torch.device, optional
        Device for output tensors.

    Returns
    -------
    nodes : Tensor
        Kronrod nodes, shape (order,), sorted ascending.
    kronrod_weights : Tensor
        Kronrod weights, shape (order,).
    gauss_weights : Tensor
        Weights of the embedded Gauss rule on the same nodes, shape
        (order,). Zero at the nodes that belong to the Kronrod rule only.

    Raises
    ------
    ValueError
        If order is not implemented.

    Notes
    -----
    The difference between the Kronrod and the embedded Gauss result is
    the usual error estimate of adaptive quadrature.

    References
    ----------
    Piessens, R., et al. (1983). QUADPACK: A subroutine package for automatic integration.
    """
    if order not in _GK_DATA:
        raise ValueError(f"order must be 21, got {order}")

    positive_nodes, positive_k_weights, positive_g_weights = _GK_DATA[order]

    def reflect(values, sign):
        half = torch.tensor(values, dtype=dtype, device=device)
        return torch.cat([sign * half[1:].flip(0), half])

    return (
        reflect(positive_nodes, -1.0),
        reflect(positive_k_weights, 1.0),
        reflect(positive_g_weights, 1.0),
    )
