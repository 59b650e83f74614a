"""
Run configuration - loading a YAML file into typed settings.

Every section is optional; missing values fall back to the defaults of the
built-in examples.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from optim_plugin import constants
from optim_plugin.io.samples_csv import load_samples_csv
from optim_plugin.types.optimization import Sample, Tolerances

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FitConfig:
    model: str = constants.DEFAULT_MODEL
    samples: list[Sample] = field(
        default_factory=lambda: [Sample(x, y) for x, y in constants.DEFAULT_SAMPLES]
    )
    initial_guess: tuple[float, ...] | None = None
    max_evaluations: int = constants.DEFAULT_FIT_MAX_EVALUATIONS


@dataclass(slots=True)
class MinimizeConfig:
    objective: str = constants.DEFAULT_OBJECTIVE
    initial_point: tuple[float, ...] | None = None
    steps: tuple[float, ...] | None = None
    max_evaluations: int = constants.DEFAULT_MAX_EVALUATIONS
    tolerances: Tolerances = field(
        default_factory=lambda: Tolerances(
            relative=constants.DEFAULT_RELATIVE_TOLERANCE,
            absolute=constants.DEFAULT_ABSOLUTE_TOLERANCE,
        )
    )


@dataclass(slots=True)
class PlotConfig:
    enabled: bool = True
    output: Path | None = None
    log_x: bool = True
    margin: float = constants.PLOT_MARGIN


@dataclass(slots=True)
class RunConfig:
    fit: FitConfig = field(default_factory=FitConfig)
    minimize: MinimizeConfig = field(default_factory=MinimizeConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    plugin_dir: Path | None = None


_SECTION_KEYS = {
    "fit": {"model", "samples", "samples_csv", "initial_guess", "max_evaluations"},
    "minimize": {"objective", "initial_point", "steps", "max_evaluations", "tolerances"},
    "plot": {"enabled", "output", "log_x", "margin"},
    "plugins": {"directory"},
}


# =============================================================================
# PUBLIC API
# =============================================================================


def load_config(file_path: Path) -> RunConfig:
    """Load a run configuration from YAML.

    Relative paths in the file are resolved against the file's directory.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML cannot be parsed or a value is malformed
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to load YAML file {file_path}: {e}") from e

    if not isinstance(data, Mapping):
        raise ValueError(f"Config file {file_path} must contain a mapping at top level")

    try:
        return parse_config(data, base_dir=file_path.parent)
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid config file {file_path}: {e}") from e


def parse_config(data: Mapping[str, Any], base_dir: Path | None = None) -> RunConfig:
    """Build a RunConfig from an already parsed mapping."""
    base_dir = base_dir or Path.cwd()
    _warn_unknown_keys(data)

    config = RunConfig()
    fit_section = _section(data, "fit")
    minimize_section = _section(data, "minimize")
    plot_section = _section(data, "plot")
    plugins_section = _section(data, "plugins")

    if "model" in fit_section:
        config.fit.model = str(fit_section["model"])
    if "samples" in fit_section and "samples_csv" in fit_section:
        raise ValueError("fit: give either 'samples' or 'samples_csv', not both")
    if "samples" in fit_section:
        config.fit.samples = _parse_samples(fit_section["samples"])
    if "samples_csv" in fit_section:
        config.fit.samples = load_samples_csv(
            _resolve(fit_section["samples_csv"], base_dir)
        )
    if fit_section.get("initial_guess") is not None:
        config.fit.initial_guess = _float_tuple(fit_section["initial_guess"], "initial_guess")
    if "max_evaluations" in fit_section:
        config.fit.max_evaluations = _positive_int(
            fit_section["max_evaluations"], "fit.max_evaluations"
        )

    if "objective" in minimize_section:
        config.minimize.objective = str(minimize_section["objective"])
    if minimize_section.get("initial_point") is not None:
        config.minimize.initial_point = _float_tuple(
            minimize_section["initial_point"], "initial_point"
        )
    if "steps" in minimize_section:
        steps = minimize_section["steps"]
        config.minimize.steps = None if steps is None else _float_tuple(steps, "steps")
    if "max_evaluations" in minimize_section:
        config.minimize.max_evaluations = _positive_int(
            minimize_section["max_evaluations"], "minimize.max_evaluations"
        )
    if "tolerances" in minimize_section:
        tolerances = minimize_section["tolerances"] or {}
        if not isinstance(tolerances, Mapping):
            raise ValueError("minimize.tolerances must be a mapping")
        config.minimize.tolerances = Tolerances(
            relative=float(tolerances.get("relative", constants.DEFAULT_RELATIVE_TOLERANCE)),
            absolute=float(tolerances.get("absolute", constants.DEFAULT_ABSOLUTE_TOLERANCE)),
        )

    if "enabled" in plot_section:
        config.plot.enabled = bool(plot_section["enabled"])
    if plot_section.get("output") is not None:
        config.plot.output = _resolve(plot_section["output"], base_dir)
    if "log_x" in plot_section:
        config.plot.log_x = bool(plot_section["log_x"])
    if "margin" in plot_section:
        config.plot.margin = float(plot_section["margin"])

    if plugins_section.get("directory") is not None:
        config.plugin_dir = _resolve(plugins_section["directory"], base_dir)

    return config


# =============================================================================
# PRIVATE HELPERS
# =============================================================================


def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"Section '{name}' must be a mapping")
    return section


def _warn_unknown_keys(data: Mapping[str, Any]) -> None:
    for key, value in data.items():
        if key not in _SECTION_KEYS:
            logger.warning("Ignoring unknown config section: %s", key)
            continue
        if isinstance(value, Mapping):
            for sub_key in value:
                if sub_key not in _SECTION_KEYS[key]:
                    logger.warning("Ignoring unknown config key: %s.%s", key, sub_key)


def _parse_samples(raw: Any) -> list[Sample]:
    if not isinstance(raw, list) or not raw:
        raise ValueError("fit.samples must be a non-empty list of [x, y] pairs")
    samples = []
    for item in raw:
        if isinstance(item, Mapping):
            samples.append(Sample(x=float(item["x"]), y=float(item["y"])))
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            samples.append(Sample(x=float(item[0]), y=float(item[1])))
        else:
            raise ValueError(f"Invalid sample entry: {item!r}")
    return samples


def _float_tuple(raw: Any, name: str) -> tuple[float, ...]:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError(f"{name} must be a non-empty list of numbers")
    return tuple(float(v) for v in raw)


def _positive_int(raw: Any, name: str) -> int:
    value = int(raw)
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _resolve(raw: Any, base_dir: Path) -> Path:
    path = Path(str(raw)).expanduser()
    return path if path.is_absolute() else base_dir / path
