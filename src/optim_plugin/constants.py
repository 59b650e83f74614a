"""Default values used by the example runs, the CLI and the config loader."""

from pathlib import Path

# Fitting example
DEFAULT_MODEL = "logarithmic"
DEFAULT_SAMPLES = ((1.1, 5.9), (20.2, 4.8), (100.3, 3.7))
DEFAULT_FIT_MAX_EVALUATIONS = 1000
DEFAULT_FIT_TOLERANCE = 1e-10

# Minimization example
DEFAULT_OBJECTIVE = "rosenbrock"
DEFAULT_STEP = 0.2
DEFAULT_MAX_EVALUATIONS = 10000
DEFAULT_RELATIVE_TOLERANCE = 1e-5
DEFAULT_ABSOLUTE_TOLERANCE = 1e-10

# Reporting
DECIMALS = 5
PLOT_POINTS = 200
PLOT_MARGIN = 0.1

DEFAULT_PLUGIN_DIR = Path.home() / ".optim_plugin" / "plugins"
