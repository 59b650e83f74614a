'''
Curve fitting, function minimization, and the model/objective registries.
'''

from .models import get_model, get_default_guess, list_models
from .objectives import get_objective, list_objectives
from .fitting import fit_curve, rms_error, sum_of_squares
from .minimization import build_initial_simplex, minimize_function, values_converged

__all__ = [
    "get_model",
    "get_default_guess",
    "list_models",
    "get_objective",
    "list_objectives",
    "fit_curve",
    "rms_error",
    "sum_of_squares",
    "build_initial_simplex",
    "minimize_function",
    "values_converged",
]
