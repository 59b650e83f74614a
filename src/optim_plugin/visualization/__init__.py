"""
Reporting of optimization results: log text and plots.
"""

from optim_plugin.visualization.report import (
    format_number,
    format_tuple,
    report_fit,
    report_minimization,
)
from optim_plugin.visualization.plot import (
    fit_curve_points,
    padded_range,
    plot_fit,
    plot_limits,
)

__all__ = [
    "format_number",
    "format_tuple",
    "report_fit",
    "report_minimization",
    "fit_curve_points",
    "padded_range",
    "plot_fit",
    "plot_limits",
]
