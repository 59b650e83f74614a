"""
Derivative-free function minimization with the Nelder-Mead simplex method.
"""

import logging
from typing import Callable, Sequence

import numpy as np
from scipy import optimize

from optim_plugin.constants import DEFAULT_MAX_EVALUATIONS, DEFAULT_STEP
from optim_plugin.types.errors import MaxEvaluationsExceeded
from optim_plugin.types.optimization import MinimizationResult, Tolerances

logger = logging.getLogger(__name__)


def build_initial_simplex(
    initial_point: Sequence[float], steps: Sequence[float] | None = None
) -> np.ndarray:
    """Build the N+1 starting vertices around ``initial_point``.

    The first vertex is the start point itself; vertex ``i + 1`` is the start
    point moved by ``steps[i]`` along axis ``i``.

    Args:
        initial_point: Start point with N coordinates
        steps: Per-axis displacement; defaults to DEFAULT_STEP on every axis

    Returns:
        Array of shape (N + 1, N)
    """
    x0 = np.asarray(initial_point, dtype=np.float64)
    if x0.ndim != 1 or x0.size == 0:
        raise ValueError("initial_point must be a non-empty sequence of numbers")
    if not np.all(np.isfinite(x0)):
        raise ValueError(f"initial_point must be finite, got {x0.tolist()}")

    if steps is None:
        step_array = np.full(x0.size, DEFAULT_STEP)
    else:
        step_array = np.asarray(steps, dtype=np.float64)
    if step_array.shape != x0.shape:
        raise ValueError(
            f"steps has {step_array.size} values but initial_point has {x0.size}"
        )
    if np.any(step_array == 0) or not np.all(np.isfinite(step_array)):
        raise ValueError(f"steps must be finite and non-zero, got {step_array.tolist()}")

    simplex = np.tile(x0, (x0.size + 1, 1))
    simplex[1:] += np.diag(step_array)
    return simplex


def values_converged(values: Sequence[float], tolerances: Tolerances) -> bool:
    """Check whether the function values over a simplex are close enough.

    The spread between the largest and smallest vertex value must not exceed
    ``max(relative * max|f|, absolute)``.
    """
    values = np.asarray(values, dtype=np.float64)
    if not np.all(np.isfinite(values)):
        return False
    spread = float(np.max(values) - np.min(values))
    threshold = max(
        tolerances.relative * float(np.max(np.abs(values))), tolerances.absolute
    )
    return spread <= threshold


def minimize_function(
    f: Callable[[np.ndarray], float],
    initial_point: Sequence[float],
    max_evaluations: int = DEFAULT_MAX_EVALUATIONS,
    tolerances: Tolerances | None = None,
    *,
    steps: Sequence[float] | None = None,
) -> MinimizationResult:
    """Minimize ``f`` starting from ``initial_point``.

    scipy's Nelder-Mead is driven one iteration at a time so that the search
    stops as soon as the spread of function values over the simplex is
    within ``max(tolerances.relative * max|f|, tolerances.absolute)``.
    Values are cached per vertex, so resuming from a simplex costs no new
    evaluations.

    Raises:
        ValueError: If the inputs are malformed
        MaxEvaluationsExceeded: If the budget runs out first; the best point
            found so far is attached as ``exc.result``
    """
    if max_evaluations < 1:
        raise ValueError(f"max_evaluations must be >= 1, got {max_evaluations}")
    if tolerances is None:
        tolerances = Tolerances()
    if tolerances.relative < 0 or tolerances.absolute < 0:
        raise ValueError(f"tolerances must be non-negative, got {tolerances}")

    simplex = build_initial_simplex(initial_point, steps)
    cache: dict[tuple[float, ...], float] = {}

    def objective(point):
        key = tuple(point.tolist())
        if key not in cache:
            cache[key] = float(f(point))
        return cache[key]

    logger.debug(
        "Minimizing from %s (max_evaluations=%d, relative=%g, absolute=%g)",
        simplex[0].tolist(),
        max_evaluations,
        tolerances.relative,
        tolerances.absolute,
    )

    values = np.array([objective(vertex) for vertex in simplex])
    n_iterations = 0
    while True:
        order = np.argsort(values, kind="stable")
        simplex, values = simplex[order], values[order]
        if values_converged(values, tolerances):
            break
        # Revisited vertices are free, so iterations are capped as well
        if len(cache) >= max_evaluations or n_iterations >= max_evaluations:
            best = MinimizationResult(
                point=tuple(float(v) for v in simplex[0]),
                value=float(values[0]),
                n_evaluations=len(cache),
                n_iterations=n_iterations,
                message="Maximum number of function evaluations has been exceeded.",
            )
            raise MaxEvaluationsExceeded(
                f"Minimization did not converge within {max_evaluations} evaluations "
                f"(best value {best.value:g} at {list(best.point)})",
                best,
            )

        # Zero tolerances keep scipy from stopping on its own criteria
        step = optimize.minimize(
            objective,
            simplex[0],
            method="Nelder-Mead",
            options={
                "initial_simplex": simplex,
                "maxiter": 1,
                "xatol": 0.0,
                "fatol": 0.0,
            },
        )
        simplex, values = step.final_simplex
        n_iterations += 1

    logger.debug(
        "Solver finished: nfev=%d nit=%d best=%g",
        len(cache),
        n_iterations,
        values[0],
    )

    return MinimizationResult(
        point=tuple(float(v) for v in simplex[0]),
        value=float(values[0]),
        n_evaluations=len(cache),
        n_iterations=n_iterations,
        message="Simplex function values converged.",
    )
