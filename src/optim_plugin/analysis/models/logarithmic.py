"""
Logarithmic model: f(x) = a * log(x) + b.
"""

import numpy as np

from optim_plugin.types.optimization import ParametricModel


PARAM_NAMES = ("a", "b")

DEFAULT_GUESS = (1.0, 0.0)


def value(x: np.ndarray, params: np.ndarray) -> np.ndarray:
    a, b = params
    return a * np.log(x) + b


def gradient(x: np.ndarray, params: np.ndarray) -> tuple[np.ndarray, float]:
    # Linear in both parameters, so the partials do not depend on params
    return np.log(x), 1.0


MODEL = ParametricModel(
    name="logarithmic",
    param_names=PARAM_NAMES,
    value=value,
    gradient=gradient,
    expression="a * log(x) + b",
)
