"""
Linear model: f(x) = a * x + b.
"""

import numpy as np

from optim_plugin.types.optimization import ParametricModel


PARAM_NAMES = ("a", "b")

DEFAULT_GUESS = (1.0, 0.0)


def value(x: np.ndarray, params: np.ndarray) -> np.ndarray:
    a, b = params
    return a * x + b


def gradient(x: np.ndarray, params: np.ndarray) -> tuple[np.ndarray, float]:
    return x, 1.0


MODEL = ParametricModel(
    name="linear",
    param_names=PARAM_NAMES,
    value=value,
    gradient=gradient,
    expression="a * x + b",
)
