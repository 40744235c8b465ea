from typing import Callable, Optional

import torch
from torch import Tensor

from torchgh.optimization._result import OptimizeResult


def levenberg_marquardt(
    residuals: Callable[[Tensor], Tensor],
    x0: Tensor,
    *,
    jacobian: Optional[Callable[[Tensor], Tensor]] = None,
    tol: Optional[float] = None,
    max_evaluations: int = 100,
    damping: float = 1e-3,
) -> OptimizeResult:
    r"""
    Levenberg-Marquardt algorithm for nonlinear least squares.

    Finds parameters x that minimize the sum of squared residuals:

    .. math::

        \min_x \|r(x)\|^2 = \min_x \sum_i r_i(x)^2

    The algorithm interpolates between Gauss-Newton (fast near optimum)
    and gradient descent (robust far from optimum) using an adaptive
    damping parameter.

    Parameters
    ----------
    residuals : Callable[[Tensor], Tensor]
        Residual function. Takes parameters of shape ``(n,)`` and returns
        residuals of shape ``(m,)`` where ``m >= n``.
    x0 : Tensor
        Initial parameter guess of shape ``(n,)``.
    jacobian : Callable, optional
        Jacobian of residuals. If None, computed via ``torch.func.jacrev``.
        Should return a tensor of shape ``(m, n)``.
    tol : float, optional
        Convergence tolerance. The iteration stops when the gradient norm
        falls below ``tol``, or when an accepted step changes every
        parameter by less than ``tol * (|x| + tol)``. Default: ``sqrt(eps)``
        for dtype.
    max_evaluations : int
        Budget of residual evaluations. Each iteration evaluates the
        residuals once, at the trial point; Jacobian evaluations are not
        counted. Default: 100.
    damping : float
        Initial Levenberg-Marquardt damping parameter. Default: 1e-3.

    Returns
    -------
    OptimizeResult
        ``x`` holds the parameters current at termination. ``converged``
        is False when the budget ran out first; the parameters are
        returned all the same.

    Examples
    --------
    Fit a line y = ax + b to data:

    >>> x_data = torch.tensor([0., 1., 2., 3.])
    >>> y_data = torch.tensor([1., 3., 5., 7.])  # y = 2x + 1
    >>> def residuals(params):
    ...     a, b = params[0], params[1]
    ...     return a * x_data + b - y_data
    >>> levenberg_marquardt(residuals, torch.zeros(2)).x
    tensor([2., 1.])

    References
    ----------
    - Levenberg, K. "A method for the solution of certain non-linear
      problems in least squares." Quarterly of applied mathematics 2.2
      (1944): 164-168.
    - Marquardt, D.W. "An algorithm for least-squares estimation of
      nonlinear parameters." Journal of the society for Industrial and
      Applied Mathematics 11.2 (1963): 431-441.
    """
    if tol is None:
        tol = torch.finfo(x0.dtype).eps ** 0.5

    if jacobian is None:
        jacobian = torch.func.jacrev(residuals)

    x = x0.detach().clone()
    mu = damping
    n = x.numel()
    eye = torch.eye(n, dtype=x.dtype, device=x.device)

    def linearize(x: Tensor, r: Tensor):
        J = jacobian(x)

        # Ensure J is 2D
        if J.dim() == 1:
            J = J.unsqueeze(0)

        # Gradient g = J^T @ r, Hessian approximation J^T @ J
        return J.T @ r, J.T @ J

    r = residuals(x)
    g, JtJ = linearize(x, r)
    num_evaluations = 1
    num_iterations = 0
    converged = False

    while num_evaluations < max_evaluations:
        num_iterations += 1

        if torch.linalg.vector_norm(g) < tol:
            converged = True
            break

        # Damped normal equations: (J^T J + mu * I) delta = -g
        delta, info = torch.linalg.solve_ex(JtJ + mu * eye, -g)
        if info.item() != 0 or not torch.isfinite(delta).all():
            # Singular system, increase damping
            if mu >= 1e10:
                break
            mu = min(mu * 10, 1e10)
            continue

        x_new = x + delta
        r_new = residuals(x_new)
        num_evaluations += 1

        actual_reduction = torch.sum(r**2) - torch.sum(r_new**2)
        predicted_reduction = -2 * (g @ delta) - delta @ JtJ @ delta

        # Avoid division by zero
        rho = actual_reduction / (predicted_reduction + 1e-30)

        if rho > 0.25:
            # Good step, accept and decrease damping
            x = x_new
            r = r_new
            mu = max(mu / 3, 1e-10)

            if torch.all(delta.abs() < tol * (x.abs() + tol)):
                converged = True
                break

            g, JtJ = linearize(x, r)
        else:
            # Bad step, reject and increase damping
            mu = min(mu * 2, 1e10)

    return OptimizeResult(
        x=x,
        converged=torch.tensor(converged),
        num_iterations=torch.tensor(num_iterations, dtype=torch.int64),
        fun=torch.sum(r**2),
    )
