"""
Exponential decay model: f(x) = amplitude * exp(-rate * x) + offset.
"""

import numpy as np

from optim_plugin.types.optimization import ParametricModel


PARAM_NAMES = ("amplitude", "rate", "offset")

DEFAULT_GUESS = (1.0, 0.1, 0.0)


def value(x: np.ndarray, params: np.ndarray) -> np.ndarray:
    amplitude, rate, offset = params
    return amplitude * np.exp(-rate * x) + offset


def gradient(x: np.ndarray, params: np.ndarray) -> tuple[np.ndarray, np.ndarray, float]:
    """Partial derivatives with respect to (amplitude, rate, offset).

    Args:
        x: Sample positions
        params: Current (amplitude, rate, offset)

    Returns:
        Tuple of partials, one per parameter
    """
    amplitude, rate, _ = params
    decay = np.exp(-rate * x)
    return decay, -amplitude * x * decay, 1.0


MODEL = ParametricModel(
    name="exponential",
    param_names=PARAM_NAMES,
    value=value,
    gradient=gradient,
    expression="amplitude * exp(-rate * x) + offset",
)
