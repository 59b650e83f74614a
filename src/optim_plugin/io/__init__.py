"""
IO utilities: sample CSV files and YAML run configuration.
"""

from optim_plugin.io.samples_csv import (
    load_samples_csv,
    samples_to_dataframe,
    write_samples_csv,
)
from optim_plugin.io.config import (
    FitConfig,
    MinimizeConfig,
    PlotConfig,
    RunConfig,
    load_config,
    parse_config,
)

__all__ = [
    "load_samples_csv",
    "samples_to_dataframe",
    "write_samples_csv",
    "FitConfig",
    "MinimizeConfig",
    "PlotConfig",
    "RunConfig",
    "load_config",
    "parse_config",
]
