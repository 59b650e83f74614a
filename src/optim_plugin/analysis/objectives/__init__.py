"""
Objective functions for derivative-free minimization.
"""

from dataclasses import dataclass

import numpy as np

from optim_plugin.types.optimization import ObjectiveFunction


@dataclass(frozen=True, slots=True)
class Objective:
    """A named scalar function with a suggested starting point."""
    name: str
    func: ObjectiveFunction
    default_start: tuple[float, ...]
    expression: str = ""
    known_minimum: tuple[float, ...] | None = None

    def __call__(self, point) -> float:
        return float(self.func(np.asarray(point, dtype=np.float64)))


def rosenbrock(point: np.ndarray) -> float:
    x, y = point
    return (1 - x) * (1 - x) + 100 * (y - x * x) * (y - x * x)


def sphere(point: np.ndarray) -> float:
    return float(np.sum(np.square(point)))


def himmelblau(point: np.ndarray) -> float:
    x, y = point
    return (x * x + y - 11) ** 2 + (x + y * y - 7) ** 2


OBJECTIVES: dict[str, Objective] = {
    "rosenbrock": Objective(
        name="rosenbrock",
        func=rosenbrock,
        default_start=(0.0, 0.0),
        expression="(1 - x)^2 + 100 * (y - x^2)^2",
        known_minimum=(1.0, 1.0),
    ),
    "sphere": Objective(
        name="sphere",
        func=sphere,
        default_start=(1.0, 1.0),
        expression="sum(x_i^2)",
        known_minimum=(0.0, 0.0),
    ),
    "himmelblau": Objective(
        name="himmelblau",
        func=himmelblau,
        default_start=(0.0, 0.0),
        expression="(x^2 + y - 11)^2 + (x + y^2 - 7)^2",
        # One of four minima, all with value 0
        known_minimum=(3.0, 2.0),
    ),
}


def get_objective(objective_name: str) -> Objective:
    if objective_name not in OBJECTIVES:
        available = ", ".join(OBJECTIVES.keys())
        raise ValueError(
            f"Unknown objective: {objective_name}. Available objectives: {available}"
        )
    return OBJECTIVES[objective_name]


def list_objectives() -> list[str]:
    """Return all registered objective names."""
    return list(OBJECTIVES.keys())


def register_plugin_objective(objective: Objective) -> None:
    """Register a plugin objective at runtime.

    Raises:
        ValueError: If an objective with the same name is already registered
    """
    if objective.name in OBJECTIVES:
        raise ValueError(
            f"Objective '{objective.name}' is already registered. "
            f"Plugin objectives must have unique names."
        )
    OBJECTIVES[objective.name] = objective


def unregister_objective(objective_name: str) -> None:
    """Remove an objective from the registry (no-op if absent)."""
    OBJECTIVES.pop(objective_name, None)


__all__ = [
    "Objective",
    "OBJECTIVES",
    "get_objective",
    "list_objectives",
    "register_plugin_objective",
    "unregister_objective",
    "rosenbrock",
    "sphere",
    "himmelblau",
]
