"""
Value types shared by curve fitting and function minimization.
"""

from dataclasses import dataclass
from typing import Callable, Sequence, TypeAlias

import numpy as np


ValueFunc: TypeAlias = Callable[[np.ndarray, np.ndarray], np.ndarray]
GradientFunc: TypeAlias = Callable[[np.ndarray, np.ndarray], Sequence]
ObjectiveFunction: TypeAlias = Callable[[np.ndarray], float]


@dataclass(frozen=True, slots=True)
class Sample:
    """A single observed (x, y) point."""
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class ParametricModel:
    """A parameterized univariate function with its parameter gradient.

    ``value(x, params)`` returns the model prediction at every ``x``.
    ``gradient(x, params)`` returns one partial derivative per parameter,
    each either an array shaped like ``x`` or a scalar.
    """
    name: str
    param_names: tuple[str, ...]
    value: ValueFunc
    gradient: GradientFunc
    expression: str = ""

    @property
    def n_params(self) -> int:
        return len(self.param_names)

    def __call__(self, x, params) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        return np.asarray(
            self.value(x, np.asarray(params, dtype=np.float64)), dtype=np.float64
        )

    def jacobian(self, x, params) -> np.ndarray:
        """Partial derivatives stacked into shape ``(len(x), n_params)``."""
        x = np.atleast_1d(np.asarray(x, dtype=np.float64))
        partials = self.gradient(x, np.asarray(params, dtype=np.float64))
        if len(partials) != self.n_params:
            raise ValueError(
                f"Model '{self.name}' gradient returned {len(partials)} partials, "
                f"expected {self.n_params}"
            )
        columns = [
            np.broadcast_to(np.asarray(p, dtype=np.float64), x.shape) for p in partials
        ]
        return np.column_stack(columns)


@dataclass(frozen=True, slots=True)
class Tolerances:
    """Convergence thresholds for the simplex search."""
    relative: float = 1e-5
    absolute: float = 1e-10


@dataclass(frozen=True)
class FitResult:
    """Result of a least-squares curve fit."""
    params: tuple[float, ...]
    param_names: tuple[str, ...]
    sum_of_squares: float
    rms_error: float
    n_evaluations: int = 0
    message: str = ""

    def to_dict(self) -> dict[str, float]:
        """Map parameter names to fitted values."""
        return dict(zip(self.param_names, self.params))


@dataclass(frozen=True)
class MinimizationResult:
    """Result of a function minimization."""
    point: tuple[float, ...]
    value: float
    n_evaluations: int = 0
    n_iterations: int = 0
    message: str = ""
