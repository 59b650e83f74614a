"""Plugin system for optim-plugin.

Discovers user-supplied models and objectives and registers them.

Example:
    Load plugins before running a fit::

        from optim_plugin.plugin import load_plugins

        scanner = load_plugins()  # Scans ~/.optim_plugin/plugins by default
        model_names = [p["name"] for p in scanner.list_plugins("model")]
"""

from optim_plugin.plugin.scanner import PluginScanner
from optim_plugin.plugin.loader import load_plugins

__all__ = ["PluginScanner", "load_plugins"]
