"""
Shared types for optim-plugin.
"""

from optim_plugin.types.optimization import (
    FitResult,
    MinimizationResult,
    ObjectiveFunction,
    ParametricModel,
    Sample,
    Tolerances,
)
from optim_plugin.types.errors import (
    ConvergenceError,
    MaxEvaluationsExceeded,
    OptimizationError,
    UnderdeterminedFitError,
)

__all__ = [
    "FitResult",
    "MinimizationResult",
    "ObjectiveFunction",
    "ParametricModel",
    "Sample",
    "Tolerances",
    "ConvergenceError",
    "MaxEvaluationsExceeded",
    "OptimizationError",
    "UnderdeterminedFitError",
]
