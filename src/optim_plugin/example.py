"""Optimization example: curve fitting and function minimization.

Entry point invoked by the host. ``run`` fits ``a * log(x) + b`` to three
observed points with Levenberg-Marquardt, then minimizes the Rosenbrock
function with the Nelder-Mead simplex method, logging and plotting results.
"""

import logging

import matplotlib.pyplot as plt

from optim_plugin.analysis.fitting import fit_curve
from optim_plugin.analysis.minimization import minimize_function
from optim_plugin.analysis.models import get_default_guess, get_model
from optim_plugin.analysis.objectives import get_objective
from optim_plugin.io.config import FitConfig, MinimizeConfig, PlotConfig, RunConfig
from optim_plugin.types.errors import MaxEvaluationsExceeded, OptimizationError
from optim_plugin.types.optimization import FitResult, MinimizationResult
from optim_plugin.visualization.plot import plot_fit
from optim_plugin.visualization.report import format_tuple, report_fit, report_minimization

PLUGIN_NAME = "optimization_example"
PLUGIN_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


def run(arg: str = "", config: RunConfig | None = None, show: bool = False) -> bool:
    """Run both examples in order.

    Args:
        arg: Host invocation argument (unused)
        config: Settings; defaults reproduce the built-in examples
        show: Open plot windows

    Returns:
        True if both examples completed
    """
    config = config or RunConfig()
    fit_result = fit_example(config.fit, config.plot, show=show)
    min_result = minimize_example(config.minimize)
    return fit_result is not None and min_result is not None


def fit_example(
    fit_config: FitConfig | None = None,
    plot_config: PlotConfig | None = None,
    show: bool = False,
) -> FitResult | None:
    """Fit the configured model and report it.

    Returns:
        The fit result, or None if the fit or its plot failed (the failure
        is logged)
    """
    fit_config = fit_config or FitConfig()
    plot_config = plot_config or PlotConfig()

    try:
        model = get_model(fit_config.model)
        initial_guess = fit_config.initial_guess or get_default_guess(fit_config.model)
        result = fit_curve(
            model,
            fit_config.samples,
            initial_guess,
            max_evaluations=fit_config.max_evaluations,
        )
    except (OptimizationError, ValueError) as e:
        logger.error("Curve fitting example aborted: %s", e)
        return None

    report_fit(result, fit_config.samples, model)

    if plot_config.enabled and (show or plot_config.output is not None):
        try:
            fig = plot_fit(
                model,
                result,
                fit_config.samples,
                log_x=plot_config.log_x,
                output=plot_config.output,
                show=show,
                margin=plot_config.margin,
            )
        except (OSError, ValueError) as e:
            logger.error("Curve fitting example aborted while plotting: %s", e)
            return None
        plt.close(fig)

    return result


def minimize_example(
    minimize_config: MinimizeConfig | None = None,
) -> MinimizationResult | None:
    """Minimize the configured objective and report it.

    Returns:
        The minimization result, or None if the budget was exhausted (the
        failure and the best point reached are logged)
    """
    minimize_config = minimize_config or MinimizeConfig()
    try:
        objective = get_objective(minimize_config.objective)
        start = minimize_config.initial_point or objective.default_start
        result = minimize_function(
            objective,
            start,
            minimize_config.max_evaluations,
            minimize_config.tolerances,
            steps=minimize_config.steps,
        )
    except MaxEvaluationsExceeded as e:
        logger.error("Minimization example aborted: %s", e)
        logger.error(
            "Best point before the budget ran out: %s (not guaranteed optimal)",
            format_tuple(e.result.point),
        )
        return None
    except ValueError as e:
        logger.error("Minimization example aborted: %s", e)
        return None

    report_minimization(result, objective.name.capitalize())
    return result
