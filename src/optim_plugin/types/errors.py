"""
Exceptions raised by the fitting and minimization operations.
"""

from optim_plugin.types.optimization import MinimizationResult


class OptimizationError(RuntimeError):
    """Base class for numerical solver failures."""


class ConvergenceError(OptimizationError):
    """Raised when a curve fit does not converge."""


class MaxEvaluationsExceeded(OptimizationError):
    """Raised when a minimization exhausts its evaluation budget.

    ``result`` holds the best point found before the budget ran out. It is
    not guaranteed to be a minimum.
    """

    def __init__(self, message: str, result: MinimizationResult):
        super().__init__(message)
        self.result = result


class UnderdeterminedFitError(ValueError):
    """Raised when there are fewer usable samples than model parameters."""
