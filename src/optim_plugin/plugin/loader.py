"""Plugin loading and registration for optim-plugin.

Turns discovered plugin modules into registered models and objectives.
"""

import logging
from pathlib import Path

from optim_plugin.analysis.models import register_plugin_model
from optim_plugin.analysis.objectives import Objective, register_plugin_objective
from optim_plugin.constants import DEFAULT_PLUGIN_DIR
from optim_plugin.plugin.scanner import PluginScanner
from optim_plugin.types.optimization import ParametricModel

logger = logging.getLogger(__name__)


def model_from_module(name: str, module: object) -> ParametricModel:
    return ParametricModel(
        name=name,
        param_names=tuple(str(p) for p in getattr(module, "PARAM_NAMES")),
        value=getattr(module, "value"),
        gradient=getattr(module, "gradient"),
        expression=getattr(module, "EXPRESSION", ""),
    )


def objective_from_module(name: str, module: object) -> Objective:
    known_minimum = getattr(module, "KNOWN_MINIMUM", None)
    return Objective(
        name=name,
        func=getattr(module, "value"),
        default_start=tuple(float(v) for v in getattr(module, "DEFAULT_START")),
        expression=getattr(module, "EXPRESSION", ""),
        known_minimum=(
            tuple(float(v) for v in known_minimum) if known_minimum is not None else None
        ),
    )


def load_plugins(plugin_dir: Path | None = None) -> PluginScanner:
    """Load and register all plugins from the plugin directory.

    Registration failures (for example a name clash with a built-in model)
    are logged and recorded in ``scanner.errors``; they never abort loading.

    Args:
        plugin_dir: Path to plugin directory. Defaults to ~/.optim_plugin/plugins

    Returns:
        Loaded PluginScanner instance with all discovered plugins
    """
    if plugin_dir is None:
        plugin_dir = DEFAULT_PLUGIN_DIR

    logger.info("Loading plugins from %s", plugin_dir)

    scanner = PluginScanner(plugin_dir)
    scanner.scan()

    registered = 0
    for plugin_data in scanner.list_plugins():
        plugin_name = plugin_data["name"]
        plugin_type = plugin_data["type"]
        module = plugin_data["module"]

        try:
            if plugin_type == "model":
                default_guess = getattr(module, "DEFAULT_GUESS", None)
                register_plugin_model(
                    model_from_module(plugin_name, module),
                    tuple(default_guess) if default_guess is not None else None,
                )
            else:
                register_plugin_objective(objective_from_module(plugin_name, module))
            registered += 1
            logger.debug(
                "Registered %s plugin '%s' from %s",
                plugin_type,
                plugin_name,
                plugin_data.get("path", plugin_dir),
            )
        except Exception as e:
            scanner.errors[plugin_name] = str(e)
            logger.error(
                "Failed to register %s plugin '%s': %s", plugin_type, plugin_name, e
            )

    logger.info(
        "Plugin loading complete: %d plugin(s) registered (dir=%s)",
        registered,
        plugin_dir,
    )

    return scanner
