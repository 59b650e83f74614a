"""Command-line entry point for optim-plugin."""

import logging
from pathlib import Path

import typer

from optim_plugin import constants, example
from optim_plugin.analysis.models import MODELS, list_models
from optim_plugin.analysis.objectives import OBJECTIVES, list_objectives
from optim_plugin.io.config import (
    FitConfig,
    MinimizeConfig,
    PlotConfig,
    RunConfig,
    load_config,
)
from optim_plugin.io.samples_csv import load_samples_csv
from optim_plugin.plugin import load_plugins
from optim_plugin.types.optimization import Tolerances

plugin_dir_option = typer.Option(
    None,
    "--plugins",
    "-p",
    file_okay=False,
    dir_okay=True,
    help="Directory with model/objective plugin files. Defaults to ~/.optim_plugin/plugins.",
)


app = typer.Typer(help="Curve fitting and minimization examples")
logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show solver details."),
) -> None:
    """optim-plugin commands."""
    # Configure basic logging so info-level messages are visible by default.
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(levelname)s: %(message)s",
        )
        logging.getLogger("matplotlib").setLevel(logging.WARNING)
    elif verbose:
        logging.getLogger("optim_plugin").setLevel(logging.DEBUG)
    return None


def _load_run_config(config_path: Path | None) -> RunConfig:
    if config_path is None:
        return RunConfig()
    try:
        return load_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"Failed to load config: {exc}", err=True)
        raise typer.Exit(code=1)


@app.command()
def run(
    arg: str = typer.Argument("", help="Host invocation argument (unused)."),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", exists=True, dir_okay=False, help="YAML run configuration."
    ),
    plugin_dir: Path | None = plugin_dir_option,
    show: bool = typer.Option(False, "--show", help="Open the plot window."),
) -> None:
    """Run the curve fitting example followed by the minimization example."""
    config = _load_run_config(config_path)
    load_plugins(plugin_dir or config.plugin_dir)
    if not example.run(arg, config=config, show=show):
        raise typer.Exit(code=1)


@app.command()
def fit(
    model: str = typer.Option(constants.DEFAULT_MODEL, "--model", "-m", help="Model name."),
    samples_csv: Path | None = typer.Option(
        None,
        "--samples",
        "-s",
        exists=True,
        dir_okay=False,
        help="CSV with x and y columns. Defaults to the example points.",
    ),
    guess: list[float] | None = typer.Option(
        None, "--guess", "-g", help="Initial parameter value (repeat once per parameter)."
    ),
    max_evaluations: int = typer.Option(constants.DEFAULT_FIT_MAX_EVALUATIONS, "--max-evaluations", min=1),
    plot_path: Path | None = typer.Option(None, "--plot", help="Save the plot as PNG."),
    linear_x: bool = typer.Option(False, "--linear-x", help="Plot against x instead of log(x)."),
    plugin_dir: Path | None = plugin_dir_option,
) -> None:
    """Fit a model to samples with Levenberg-Marquardt."""
    load_plugins(plugin_dir)
    if model not in list_models():
        typer.echo(f"Unknown model '{model}'. Available: {', '.join(list_models())}", err=True)
        raise typer.Exit(code=1)

    fit_config = FitConfig(model=model, max_evaluations=max_evaluations)
    if samples_csv is not None:
        try:
            fit_config.samples = load_samples_csv(samples_csv)
        except ValueError as exc:
            typer.echo(f"Failed to read samples: {exc}", err=True)
            raise typer.Exit(code=1)
    if guess:
        fit_config.initial_guess = tuple(guess)

    plot_config = PlotConfig(
        enabled=plot_path is not None, output=plot_path, log_x=not linear_x
    )
    if example.fit_example(fit_config, plot_config) is None:
        raise typer.Exit(code=1)


@app.command()
def minimize(
    objective: str = typer.Option(constants.DEFAULT_OBJECTIVE, "--objective", "-o", help="Objective name."),
    start: list[float] | None = typer.Option(
        None, "--start", help="Start coordinate (repeat once per dimension)."
    ),
    step: list[float] | None = typer.Option(
        None, "--step", help="Initial simplex step (repeat once per dimension)."
    ),
    max_evaluations: int = typer.Option(constants.DEFAULT_MAX_EVALUATIONS, "--max-evaluations", min=1),
    relative: float = typer.Option(constants.DEFAULT_RELATIVE_TOLERANCE, "--rel-tol", min=0.0),
    absolute: float = typer.Option(constants.DEFAULT_ABSOLUTE_TOLERANCE, "--abs-tol", min=0.0),
    plugin_dir: Path | None = plugin_dir_option,
) -> None:
    """Minimize an objective with the Nelder-Mead simplex method."""
    load_plugins(plugin_dir)
    if objective not in list_objectives():
        typer.echo(
            f"Unknown objective '{objective}'. Available: {', '.join(list_objectives())}",
            err=True,
        )
        raise typer.Exit(code=1)

    minimize_config = MinimizeConfig(
        objective=objective,
        initial_point=tuple(start) if start else None,
        steps=tuple(step) if step else None,
        max_evaluations=max_evaluations,
        tolerances=Tolerances(relative=relative, absolute=absolute),
    )
    if example.minimize_example(minimize_config) is None:
        raise typer.Exit(code=1)


@app.command("models")
def models_command(plugin_dir: Path | None = plugin_dir_option) -> None:
    """List the available fit models."""
    load_plugins(plugin_dir)
    for name in list_models():
        model = MODELS[name]
        typer.echo(f"{name}: {model.expression} ({', '.join(model.param_names)})")


@app.command("objectives")
def objectives_command(plugin_dir: Path | None = plugin_dir_option) -> None:
    """List the available objective functions."""
    load_plugins(plugin_dir)
    for name in list_objectives():
        typer.echo(f"{name}: {OBJECTIVES[name].expression}")


if __name__ == "__main__":
    app()
