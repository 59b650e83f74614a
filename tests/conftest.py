"""Shared fixtures for optim-plugin tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from optim_plugin.analysis import models, objectives
from optim_plugin.types.optimization import Sample


@pytest.fixture
def example_samples() -> list[Sample]:
    """The three observed points of the curve fitting example."""
    return [Sample(1.1, 5.9), Sample(20.2, 4.8), Sample(100.3, 3.7)]


@pytest.fixture(autouse=True)
def restore_registries():
    """Unregister plugin models and objectives added by a test."""
    builtin_models = set(models.MODELS)
    builtin_objectives = set(objectives.OBJECTIVES)
    yield
    for name in set(models.MODELS) - builtin_models:
        models.unregister_model(name)
    for name in set(objectives.OBJECTIVES) - builtin_objectives:
        objectives.unregister_objective(name)
