"""Example model plugin: power law.

A plugin model for curve fitting.
Demonstrates the model plugin interface: parameter names, value and gradient.
"""

import numpy as np


PLUGIN_NAME = "power_law"
PLUGIN_TYPE = "model"
PLUGIN_VERSION = "1.0.0"

PARAM_NAMES = ("scale", "exponent")
DEFAULT_GUESS = (1.0, 1.0)
EXPRESSION = "scale * x^exponent"


def value(x: np.ndarray, params: np.ndarray) -> np.ndarray:
    """Evaluate the power law.

    Model: f(x) = scale * x ** exponent (x > 0)

    Args:
        x: Sample positions (1D array)
        params: (scale, exponent)

    Returns:
        Model predictions at x
    """
    scale, exponent = params
    return scale * np.power(x, exponent)


def gradient(x: np.ndarray, params: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    scale, exponent = params
    powered = np.power(x, exponent)
    return powered, scale * powered * np.log(x)
