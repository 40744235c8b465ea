from ._levenberg_marquardt import levenberg_marquardt
from ._result import OptimizeResult

__all__ = [
    "OptimizeResult",
    "levenberg_marquardt",
]
