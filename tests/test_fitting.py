import numpy as np
import pytest

from optim_plugin.analysis.fitting import fit_curve, rms_error, sum_of_squares
from optim_plugin.analysis.models import get_default_guess, get_model, list_models
from optim_plugin.types.errors import ConvergenceError, UnderdeterminedFitError
from optim_plugin.types.optimization import Sample


def test_logarithmic_fit_reduces_squared_error(example_samples):
    model = get_model("logarithmic")

    result = fit_curve(model, example_samples, (1, 0))

    assert result.param_names == ("a", "b")
    assert result.sum_of_squares < sum_of_squares(model, example_samples, (1, 0))


def test_logarithmic_fit_matches_linear_least_squares(example_samples):
    # a * log(x) + b is linear in (a, b), so polyfit on log(x) gives the optimum
    x = np.log([s.x for s in example_samples])
    y = np.array([s.y for s in example_samples])
    a_expected, b_expected = np.polyfit(x, y, 1)

    result = fit_curve(get_model("logarithmic"), example_samples, (1, 0))

    np.testing.assert_allclose(result.params, (a_expected, b_expected), rtol=1e-6)
    assert result.rms_error == pytest.approx(
        rms_error(get_model("logarithmic"), example_samples, result.params)
    )
    assert result.to_dict()["a"] == result.params[0]


def test_fit_is_deterministic(example_samples):
    model = get_model("logarithmic")

    first = fit_curve(model, example_samples, (1, 0))
    second = fit_curve(model, example_samples, (1, 0))

    assert first == second


def test_exponential_fit_recovers_parameters():
    x = np.linspace(0, 10, 25)
    y = 10.0 * np.exp(-0.5 * x) + 2.0
    samples = [Sample(float(a), float(b)) for a, b in zip(x, y)]

    result = fit_curve(get_model("exponential"), samples, (5.0, 0.2, 0.0))

    np.testing.assert_allclose(result.params, (10.0, 0.5, 2.0), rtol=1e-5)
    assert result.sum_of_squares < 1e-12


def test_single_sample_is_underdetermined():
    with pytest.raises(UnderdeterminedFitError):
        fit_curve(get_model("logarithmic"), [Sample(1.1, 5.9)], (1, 0))


def test_non_finite_samples_are_dropped(example_samples):
    model = get_model("logarithmic")
    noisy = example_samples + [Sample(float("nan"), 1.0), Sample(3.0, float("inf"))]

    clean_result = fit_curve(model, example_samples, (1, 0))
    noisy_result = fit_curve(model, noisy, (1, 0))

    np.testing.assert_allclose(noisy_result.params, clean_result.params)


def test_non_finite_samples_count_towards_underdetermined_check():
    samples = [Sample(2.0, 1.0), Sample(float("nan"), 2.0)]

    with pytest.raises(UnderdeterminedFitError):
        fit_curve(get_model("linear"), samples, (1, 0))


def test_singular_gradient_raises_convergence_error():
    # log(1) == 0, so the column for ``a`` vanishes
    samples = [Sample(1.0, 1.0), Sample(1.0, 2.0), Sample(1.0, 3.0)]

    with pytest.raises(ConvergenceError):
        fit_curve(get_model("logarithmic"), samples, (1, 0))


def test_evaluation_cap_raises_convergence_error():
    x = np.linspace(0, 10, 25)
    y = 10.0 * np.exp(-0.5 * x) + 2.0
    samples = [Sample(float(a), float(b)) for a, b in zip(x, y)]

    with pytest.raises(ConvergenceError, match=r"did not converge after \d+ evaluations"):
        fit_curve(get_model("exponential"), samples, (1.0, 0.01, 0.0), max_evaluations=2)


def test_invalid_inputs_are_rejected(example_samples):
    model = get_model("logarithmic")

    with pytest.raises(ValueError):
        fit_curve(model, [], (1, 0))
    with pytest.raises(ValueError):
        fit_curve(model, example_samples, (1, 0, 0))
    with pytest.raises(ValueError):
        # log of a negative x is not finite at the start
        fit_curve(model, [Sample(-1.0, 1.0), Sample(2.0, 2.0)], (1, 0))


def test_model_jacobian_broadcasts_constant_partials():
    model = get_model("logarithmic")
    x = np.array([1.0, np.e, np.e**2])

    jac = model.jacobian(x, (2.0, 3.0))

    assert jac.shape == (3, 2)
    np.testing.assert_allclose(jac[:, 0], [0.0, 1.0, 2.0])
    np.testing.assert_allclose(jac[:, 1], 1.0)


def test_registry_lookup():
    assert {"logarithmic", "linear", "exponential"} <= set(list_models())
    assert get_default_guess("logarithmic") == (1.0, 0.0)
    with pytest.raises(ValueError, match="Unknown model"):
        get_model("missing")
