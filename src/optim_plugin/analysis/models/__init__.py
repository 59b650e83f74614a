"""
Parametric models for curve fitting.
"""

from optim_plugin.analysis.models import exponential, linear, logarithmic
from optim_plugin.types.optimization import ParametricModel

MODELS: dict[str, ParametricModel] = {
    "logarithmic": logarithmic.MODEL,
    "linear": linear.MODEL,
    "exponential": exponential.MODEL,
}

DEFAULT_GUESSES: dict[str, tuple[float, ...]] = {
    "logarithmic": logarithmic.DEFAULT_GUESS,
    "linear": linear.DEFAULT_GUESS,
    "exponential": exponential.DEFAULT_GUESS,
}


def get_model(model_name: str) -> ParametricModel:
    if model_name not in MODELS:
        available = ", ".join(MODELS.keys())
        raise ValueError(f"Unknown model: {model_name}. Available models: {available}")
    return MODELS[model_name]


def get_default_guess(model_name: str) -> tuple[float, ...]:
    """Return the initial guess a model ships with.

    Falls back to all ones when the model did not declare one.
    """
    model = get_model(model_name)
    return DEFAULT_GUESSES.get(model_name, (1.0,) * model.n_params)


def list_models() -> list[str]:
    """Return all registered model names."""
    return list(MODELS.keys())


def register_plugin_model(
    model: ParametricModel, default_guess: tuple[float, ...] | None = None
) -> None:
    """Register a plugin model at runtime.

    Args:
        model: Model definition with value and gradient callables
        default_guess: Optional initial guess, one value per parameter

    Raises:
        ValueError: If the name is already registered or the guess has the wrong length
    """
    if model.name in MODELS:
        raise ValueError(
            f"Model '{model.name}' is already registered. "
            f"Plugin models must have unique names."
        )
    if default_guess is not None and len(default_guess) != model.n_params:
        raise ValueError(
            f"Default guess for '{model.name}' has {len(default_guess)} values, "
            f"expected {model.n_params}"
        )

    MODELS[model.name] = model
    if default_guess is not None:
        DEFAULT_GUESSES[model.name] = tuple(float(v) for v in default_guess)


def unregister_model(model_name: str) -> None:
    """Remove a model from the registry (no-op if absent)."""
    MODELS.pop(model_name, None)
    DEFAULT_GUESSES.pop(model_name, None)


__all__ = [
    "get_model",
    "get_default_guess",
    "list_models",
    "register_plugin_model",
    "unregister_model",
    "MODELS",
    "DEFAULT_GUESSES",
]
