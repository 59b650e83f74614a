"""
Text reports for fit and minimization results.

Reports go to the ``optim_plugin`` log at INFO level and are also returned so
callers can echo or store them.
"""

import logging
import math
from typing import Sequence

from optim_plugin.analysis.fitting import rms_error
from optim_plugin.constants import DECIMALS
from optim_plugin.types.optimization import (
    FitResult,
    MinimizationResult,
    ParametricModel,
    Sample,
)

logger = logging.getLogger(__name__)


def format_number(value: float, decimals: int = DECIMALS) -> str:
    """Format ``value`` with a fixed number of decimals."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return f"{value:.{decimals}f}"


def format_tuple(values: Sequence[float], decimals: int = DECIMALS) -> str:
    return "(" + ", ".join(format_number(v, decimals) for v in values) + ")"


def _heading(title: str) -> str:
    return f"\n{title}\n{'-' * len(title)}\n\n"


def report_fit(
    result: FitResult,
    samples: Sequence[Sample] | None = None,
    model: ParametricModel | None = None,
    decimals: int = DECIMALS,
) -> str:
    """Log the estimated parameters and the RMS error of a fit.

    When ``model`` and ``samples`` are both given the RMS error is recomputed
    from them; otherwise the value stored on the result is used.
    """
    names = ", ".join(result.param_names)
    text = (
        _heading("Curve fitting example")
        + f"estimated ({names}) = {format_tuple(result.params, decimals)}"
    )
    logger.info(text)

    rms = result.rms_error
    if model is not None and samples:
        rms = rms_error(model, samples, result.params)
    error_line = f"Mean root of squared error: {format_number(rms, decimals)}"
    logger.info(error_line)

    return f"{text}\n{error_line}"


def report_minimization(
    result: MinimizationResult,
    function_name: str = "Rosenbrock",
    decimals: int = DECIMALS,
) -> str:
    """Log the minimum location and value."""
    text = (
        _heading(f"Minimization ({function_name} function)")
        + f"Minimum found at {format_tuple(result.point, decimals)}\n"
        + f"with value {format_number(result.value, decimals)}"
    )
    logger.info(text)
    return text
