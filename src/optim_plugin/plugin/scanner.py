"""Plugin discovery and loading for optim-plugin.

Uses importlib.util for file-based loading, compatible with PyInstaller.
"""

import importlib.util
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

PLUGIN_TYPES = ("model", "objective")


class PluginScanner:
    """Scans a directory for model and objective plugin files.

    A plugin is a ``.py`` file declaring ``PLUGIN_NAME`` and ``PLUGIN_TYPE``.
    Files whose name starts with an underscore are skipped.
    """

    def __init__(self, plugin_dir: Path):
        self.plugin_dir = Path(plugin_dir)
        self.plugins: dict[str, dict[str, object]] = {}
        self.errors: dict[str, str] = {}

    def scan(self) -> None:
        """Scan plugin directory recursively and load all valid plugins."""
        if not self.plugin_dir.exists():
            logger.info("Plugin directory does not exist, skipping: %s", self.plugin_dir)
            return

        logger.info("Scanning for plugins in %s", self.plugin_dir)

        plugin_files = sorted(
            f for f in self.plugin_dir.rglob("*.py") if not f.name.startswith("_")
        )

        logger.debug("Found %d potential plugin files", len(plugin_files))

        for plugin_file in plugin_files:
            self._load_plugin(plugin_file)

        counts = {
            plugin_type: len(self.list_plugins(plugin_type)) for plugin_type in PLUGIN_TYPES
        }
        logger.info(
            "Loaded %d plugins (models=%d, objectives=%d)",
            len(self.plugins),
            counts["model"],
            counts["objective"],
        )
        if self.errors:
            logger.warning("Failed to load %d plugins", len(self.errors))
            for name, error in self.errors.items():
                logger.debug("  %s: %s", name, error)

    def _load_plugin(self, plugin_file: Path) -> None:
        """Load a single plugin file using importlib.

        Args:
            plugin_file: Path to .py file
        """
        relative = plugin_file.relative_to(self.plugin_dir).with_suffix("")
        plugin_key = relative.as_posix()
        module_name = "optim_plugin_user." + ".".join(relative.parts)

        try:
            spec = importlib.util.spec_from_file_location(module_name, plugin_file)

            if spec is None or spec.loader is None:
                raise ValueError("Could not create module spec")

            module = importlib.util.module_from_spec(spec)

            # Registered while executing so the plugin can import itself
            sys.modules[module_name] = module

            try:
                spec.loader.exec_module(module)
            except Exception:
                del sys.modules[module_name]
                raise

            plugin_data = self._validate_plugin(plugin_key, module)

            if plugin_data is None:
                self.errors[plugin_key] = "Invalid plugin structure"
                return

            name = plugin_data["name"]
            if name in self.plugins:
                self.errors[plugin_key] = f"Duplicate plugin name: {name}"
                return

            self.plugins[name] = plugin_data
            logger.debug(
                "Loaded plugin: %s (%s v%s) from %s",
                name,
                plugin_data["type"],
                plugin_data["version"],
                plugin_data["path"],
            )

        except Exception as e:
            self.errors[plugin_key] = str(e)
            logger.debug("Error loading %s: %s", plugin_file, e)

    def _validate_plugin(self, name: str, module: object) -> dict[str, object] | None:
        """Validate plugin has required attributes.

        Returns:
            Plugin metadata dict if valid, None otherwise
        """
        for attr in ("PLUGIN_NAME", "PLUGIN_TYPE"):
            if not hasattr(module, attr):
                logger.debug("%s: Missing %s", name, attr)
                return None

        plugin_type = getattr(module, "PLUGIN_TYPE")

        if plugin_type == "model":
            required = ["PARAM_NAMES", "value", "gradient"]
        elif plugin_type == "objective":
            required = ["value", "DEFAULT_START"]
        else:
            logger.debug("%s: Invalid PLUGIN_TYPE: %s", name, plugin_type)
            return None

        for attr in required:
            if not hasattr(module, attr):
                logger.debug("%s: Missing %s", name, attr)
                return None

        for func_name in ("value", "gradient"):
            if hasattr(module, func_name) and not callable(getattr(module, func_name)):
                logger.debug("%s: %s is not callable", name, func_name)
                return None

        return {
            "name": getattr(module, "PLUGIN_NAME"),
            "type": plugin_type,
            "version": getattr(module, "PLUGIN_VERSION", "0.0.1"),
            "module": module,
            "path": getattr(module, "__file__", "unknown"),
        }

    def get_plugin(self, name: str) -> dict[str, object] | None:
        """Get a loaded plugin by name."""
        return self.plugins.get(name)

    def list_plugins(self, plugin_type: str | None = None) -> list[dict[str, object]]:
        """List all loaded plugins, optionally filtered by type ("model" or "objective")."""
        plugins = list(self.plugins.values())
        if plugin_type:
            plugins = [p for p in plugins if p["type"] == plugin_type]
        return plugins
