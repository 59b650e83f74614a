"""
Least-squares curve fitting with the Levenberg-Marquardt method.
"""

import logging
from typing import Sequence

import numpy as np
from scipy import optimize

from optim_plugin.constants import DEFAULT_FIT_MAX_EVALUATIONS, DEFAULT_FIT_TOLERANCE
from optim_plugin.types.errors import ConvergenceError, UnderdeterminedFitError
from optim_plugin.types.optimization import FitResult, ParametricModel, Sample

logger = logging.getLogger(__name__)


def samples_to_arrays(samples: Sequence[Sample]) -> tuple[np.ndarray, np.ndarray]:
    """Split samples into x and y arrays."""
    x_data = np.array([s.x for s in samples], dtype=np.float64)
    y_data = np.array([s.y for s in samples], dtype=np.float64)
    return x_data, y_data


def sum_of_squares(
    model: ParametricModel, samples: Sequence[Sample], params: Sequence[float]
) -> float:
    """Sum of squared residuals of ``model`` at ``params``."""
    x_data, y_data = samples_to_arrays(samples)
    residuals = y_data - model(x_data, params)
    return float(np.sum(residuals**2))


def rms_error(
    model: ParametricModel, samples: Sequence[Sample], params: Sequence[float]
) -> float:
    """Root of the mean squared residual."""
    if not samples:
        raise ValueError("samples must not be empty")
    return float(np.sqrt(sum_of_squares(model, samples, params) / len(samples)))


def fit_curve(
    model: ParametricModel,
    samples: Sequence[Sample],
    initial_guess: Sequence[float],
    *,
    max_evaluations: int | None = DEFAULT_FIT_MAX_EVALUATIONS,
    tolerance: float = DEFAULT_FIT_TOLERANCE,
) -> FitResult:
    """Fit ``model`` to ``samples`` by minimizing the squared residuals.

    Args:
        model: Parametric model providing value and gradient
        samples: Observed (x, y) points
        initial_guess: Starting parameter values, one per model parameter
        max_evaluations: Cap on residual evaluations (None for the solver default)
        tolerance: Relative tolerance on cost reduction and parameter step

    Returns:
        FitResult with the fitted parameters and residual statistics

    Raises:
        ValueError: If samples are empty or the guess has the wrong length
        UnderdeterminedFitError: If fewer usable samples than parameters remain
        ConvergenceError: If the solver does not converge or the Jacobian is singular
    """
    if len(samples) == 0:
        raise ValueError("samples must not be empty")

    p0 = np.asarray(initial_guess, dtype=np.float64)
    if p0.ndim != 1 or p0.size != model.n_params:
        raise ValueError(
            f"Initial guess has {p0.size} values but model '{model.name}' "
            f"has {model.n_params} parameters {list(model.param_names)}"
        )

    # Clean data
    x_data, y_data = samples_to_arrays(samples)
    mask = np.isfinite(x_data) & np.isfinite(y_data)
    x_clean = x_data[mask]
    y_clean = y_data[mask]
    n_valid_points = int(np.sum(mask))
    if n_valid_points < len(samples):
        logger.warning(
            "Dropped %d non-finite sample(s) before fitting",
            len(samples) - n_valid_points,
        )

    if n_valid_points < model.n_params:
        raise UnderdeterminedFitError(
            f"Model '{model.name}' has {model.n_params} parameters but only "
            f"{n_valid_points} usable sample(s)"
        )

    def residual_func(params):
        return y_clean - model(x_clean, params)

    def residual_jacobian(params):
        return -model.jacobian(x_clean, params)

    if not np.all(np.isfinite(residual_func(p0))):
        raise ValueError(
            f"Model '{model.name}' is not finite at the initial guess {p0.tolist()}"
        )

    logger.debug(
        "Fitting %s to %d samples from %s", model.name, n_valid_points, p0.tolist()
    )
    result = optimize.least_squares(
        residual_func,
        p0,
        jac=residual_jacobian,
        method="lm",
        ftol=tolerance,
        xtol=tolerance,
        gtol=tolerance,
        max_nfev=max_evaluations,
    )
    logger.debug(
        "Solver finished: status=%d nfev=%d message=%s",
        result.status,
        result.nfev,
        result.message,
    )

    if result.status == 0:
        raise ConvergenceError(
            f"Fit of '{model.name}' did not converge after "
            f"{result.nfev} evaluations"
        )
    if not result.success:
        raise ConvergenceError(f"Fit of '{model.name}' failed: {result.message}")
    if not np.all(np.isfinite(result.x)) or not np.all(np.isfinite(result.fun)):
        raise ConvergenceError(f"Fit of '{model.name}' produced non-finite values")

    # Normal equations are singular if the Jacobian loses rank
    rank = np.linalg.matrix_rank(result.jac)
    if rank < model.n_params:
        raise ConvergenceError(
            f"Fit of '{model.name}' is singular: Jacobian rank {rank} "
            f"< {model.n_params} parameters"
        )

    ss_res = float(np.sum(result.fun**2))
    return FitResult(
        params=tuple(float(v) for v in result.x),
        param_names=model.param_names,
        sum_of_squares=ss_res,
        rms_error=float(np.sqrt(ss_res / n_valid_points)),
        n_evaluations=int(result.nfev),
        message=str(result.message),
    )
