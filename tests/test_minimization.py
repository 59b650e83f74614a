import numpy as np
import pytest

from optim_plugin.analysis.minimization import (
    build_initial_simplex,
    minimize_function,
    values_converged,
)
from optim_plugin.analysis.objectives import get_objective, rosenbrock
from optim_plugin.types.errors import MaxEvaluationsExceeded
from optim_plugin.types.optimization import Tolerances


def test_rosenbrock_minimum_is_found():
    result = minimize_function(
        rosenbrock, (0.0, 0.0), 10000, Tolerances(1e-5, 1e-10), steps=(0.2, 0.2)
    )

    np.testing.assert_allclose(result.point, (1.0, 1.0), atol=1e-3)
    assert result.value == pytest.approx(0.0, abs=1e-6)
    assert 0 < result.n_evaluations <= 10000


def test_minimization_is_deterministic():
    first = minimize_function(rosenbrock, (0.0, 0.0), 10000, steps=(0.2, 0.2))
    second = minimize_function(rosenbrock, (0.0, 0.0), 10000, steps=(0.2, 0.2))

    assert first == second


def test_exhausted_budget_reports_best_point():
    with pytest.raises(MaxEvaluationsExceeded) as excinfo:
        minimize_function(rosenbrock, (0.0, 0.0), 10, steps=(0.2, 0.2))

    best = excinfo.value.result
    assert len(best.point) == 2
    assert best.value <= rosenbrock(np.array([0.0, 0.0]))


def test_sphere_reaches_origin():
    objective = get_objective("sphere")

    result = minimize_function(objective, objective.default_start, 10000)

    np.testing.assert_allclose(result.point, objective.known_minimum, atol=1e-3)


def test_himmelblau_reaches_a_minimum():
    # Four global minima, all with value 0
    objective = get_objective("himmelblau")

    result = minimize_function(objective, objective.default_start, 10000)

    assert result.value < 1e-6


def test_initial_simplex_layout():
    simplex = build_initial_simplex((1.0, 2.0), (0.2, 0.5))

    np.testing.assert_allclose(simplex, [[1.0, 2.0], [1.2, 2.0], [1.0, 2.5]])


def test_default_simplex_step():
    simplex = build_initial_simplex((0.0, 0.0, 0.0))

    assert simplex.shape == (4, 3)
    np.testing.assert_allclose(np.diag(simplex[1:]), 0.2)


def test_invalid_inputs_are_rejected():
    with pytest.raises(ValueError):
        minimize_function(rosenbrock, (), 100)
    with pytest.raises(ValueError):
        minimize_function(rosenbrock, (0.0, 0.0), 0)
    with pytest.raises(ValueError):
        minimize_function(rosenbrock, (0.0, 0.0), 100, steps=(0.2,))
    with pytest.raises(ValueError):
        minimize_function(rosenbrock, (0.0, 0.0), 100, steps=(0.2, 0.0))
    with pytest.raises(ValueError):
        minimize_function(rosenbrock, (0.0, 0.0), 100, Tolerances(-1.0, 1e-10))


def _shifted_rosenbrock(point):
    return 10.0 + rosenbrock(point)


def test_relative_tolerance_alone_stops_the_search():
    # Initial vertex values 11, 10.8 and 15 already lie within half of the largest
    result = minimize_function(
        _shifted_rosenbrock, (0.0, 0.0), 60, Tolerances(relative=0.5, absolute=0.0),
        steps=(0.2, 0.2),
    )

    assert result.value == pytest.approx(10.8)
    assert result.n_evaluations == 3
    assert result.n_iterations == 0


def test_tight_relative_tolerance_needs_more_evaluations():
    with pytest.raises(MaxEvaluationsExceeded) as excinfo:
        minimize_function(
            _shifted_rosenbrock, (0.0, 0.0), 60, Tolerances(relative=1e-12, absolute=0.0),
            steps=(0.2, 0.2),
        )

    assert excinfo.value.result.value < 10.8


def test_absolute_tolerance_alone_stops_the_search():
    result = minimize_function(
        rosenbrock, (0.0, 0.0), 10000, Tolerances(relative=0.0, absolute=1e-10),
        steps=(0.2, 0.2),
    )

    np.testing.assert_allclose(result.point, (1.0, 1.0), atol=1e-3)


def test_values_converged_uses_larger_threshold():
    assert values_converged([10.0, 10.4], Tolerances(relative=0.05, absolute=0.0))
    assert not values_converged([10.0, 11.0], Tolerances(relative=0.05, absolute=0.0))
    assert values_converged([0.0, 1e-11], Tolerances(relative=0.5, absolute=1e-10))
    assert not values_converged([0.0, float("nan")], Tolerances(relative=1.0, absolute=1.0))
