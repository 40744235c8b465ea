from typing import NamedTuple, Optional

from torch import Tensor


class OptimizeResult(NamedTuple):
    """Result of an optimization routine.

    Parameters
    ----------
    x : Tensor
        Solution tensor, the parameters current when the routine stopped.
    converged : Tensor
        Boolean scalar tensor. False when the evaluation budget ran out
        before the stopping criterion was met.
    num_iterations : Tensor
        Number of iterations performed. ``int64`` scalar.
    fun : Tensor, optional
        Objective value at the solution ``x``.
    """

    x: Tensor
    converged: Tensor
    num_iterations: Tensor
    fun: Optional[Tensor] = None
