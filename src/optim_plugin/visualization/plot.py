"""
Matplotlib plots of fitted curves.
"""

import logging
from pathlib import Path
from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from optim_plugin.analysis.fitting import samples_to_arrays
from optim_plugin.constants import PLOT_MARGIN, PLOT_POINTS
from optim_plugin.types.optimization import FitResult, ParametricModel, Sample

logger = logging.getLogger(__name__)


def padded_range(values: Sequence[float], margin: float = PLOT_MARGIN) -> tuple[float, float]:
    """Return (low, high) extended by ``margin`` times the data range.

    A zero range is padded relative to the value itself (or by ``margin``
    around zero) so the axis never collapses.
    """
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        raise ValueError("Cannot compute limits of an empty series")
    if margin < 0:
        raise ValueError(f"margin must be >= 0, got {margin}")
    low = float(np.min(arr))
    high = float(np.max(arr))
    window = high - low
    if window == 0:
        window = abs(low) or 1.0
    return low - window * margin, high + window * margin


def plot_limits(
    xs: Sequence[float], ys: Sequence[float], margin: float = PLOT_MARGIN
) -> tuple[float, float, float, float]:
    """Axis limits (xmin, xmax, ymin, ymax) padded on every side."""
    xmin, xmax = padded_range(xs, margin)
    ymin, ymax = padded_range(ys, margin)
    return xmin, xmax, ymin, ymax


def fit_curve_points(
    model: ParametricModel,
    params: Sequence[float],
    x_data: np.ndarray,
    *,
    log_x: bool = True,
    n_points: int = PLOT_POINTS,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample the fitted curve uniformly across the data range.

    With ``log_x`` the abscissa is log(x) and sampling is uniform in log(x).
    """
    if n_points < 2:
        raise ValueError(f"n_points must be >= 2, got {n_points}")
    if log_x:
        if np.any(x_data <= 0):
            raise ValueError("log_x requires all x values to be positive")
        log_data = np.log(x_data)
        axis = np.linspace(log_data.min(), log_data.max(), n_points)
        return axis, model(np.exp(axis), params)
    axis = np.linspace(x_data.min(), x_data.max(), n_points)
    return axis, model(axis, params)


def plot_fit(
    model: ParametricModel,
    result: FitResult,
    samples: Sequence[Sample],
    *,
    log_x: bool = True,
    output: Path | None = None,
    show: bool = False,
    n_points: int = PLOT_POINTS,
    margin: float = PLOT_MARGIN,
    title: str = "Curve fit",
) -> Figure:
    """Draw the fitted curve as a line and the samples as crosses.

    Args:
        model: Model that was fitted
        result: Fit result holding the parameters
        samples: Observed points
        log_x: Plot against log(x) (semi-logarithmic graph)
        output: Optional PNG path to save the figure
        show: Open an interactive window
        n_points: Number of points on the smooth curve
        margin: Fraction of the data range added around the axes

    Returns:
        The matplotlib Figure
    """
    x_data, y_data = samples_to_arrays(samples)
    curve_x, curve_y = fit_curve_points(
        model, result.params, x_data, log_x=log_x, n_points=n_points
    )
    points_x = np.log(x_data) if log_x else x_data

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(curve_x, curve_y, "-", color="tab:blue", linewidth=1.5, label="Fit")
    ax.plot(points_x, y_data, "x", color="black", markersize=8, label="Data")

    xmin, xmax, ymin, ymax = plot_limits(points_x, y_data, margin)
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_xlabel("log(x)" if log_x else "x")
    ax.set_ylabel("y")
    ax.set_title(title)
    ax.legend()

    if output is not None:
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
        try:
            fig.savefig(output, dpi=100, bbox_inches="tight")
        except OSError:
            plt.close(fig)
            raise
        logger.info("Saved plot to %s", output)
    if show:
        plt.show()

    return fig
