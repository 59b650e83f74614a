"""
Sample CSV format for curve fitting input.

CSV Format
----------
Two numeric columns named ``x`` and ``y``, one observation per row. Lines
starting with ``#`` are comments. Rows with non-numeric values are kept as
NaN and dropped by the fitter.
"""

from pathlib import Path
from typing import Sequence

import pandas as pd

from optim_plugin.types.optimization import Sample


def load_samples_csv(csv_path: Path) -> list[Sample]:
    """
    Load samples from a CSV file with ``x`` and ``y`` columns.

    Args:
        csv_path: Path to the CSV file

    Returns:
        List of Sample in file order
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"Sample CSV file not found: {csv_path}")

    df = pd.read_csv(csv_path, comment="#")

    required_cols = {"x", "y"}
    if not required_cols.issubset(df.columns):
        missing = required_cols - set(df.columns)
        raise ValueError(f"CSV missing required columns: {sorted(missing)}")

    df["x"] = pd.to_numeric(df["x"], errors="coerce")
    df["y"] = pd.to_numeric(df["y"], errors="coerce")

    if df.empty:
        raise ValueError(f"Sample CSV file has no rows: {csv_path}")

    return [Sample(x=float(x), y=float(y)) for x, y in zip(df["x"], df["y"])]


def samples_to_dataframe(samples: Sequence[Sample]) -> pd.DataFrame:
    """Build a DataFrame with ``x`` and ``y`` columns."""
    return pd.DataFrame(
        {"x": [s.x for s in samples], "y": [s.y for s in samples]},
        columns=["x", "y"],
    )


def write_samples_csv(samples: Sequence[Sample], output_path: Path) -> None:
    """
    Write samples to CSV.

    Args:
        samples: Samples to write
        output_path: Path where to save the CSV file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    samples_to_dataframe(samples).to_csv(output_path, index=False, float_format="%.6f")
