"""Tests for plugin discovery and registration."""

import sys
from pathlib import Path

import numpy as np
import pytest

from optim_plugin.analysis.fitting import fit_curve
from optim_plugin.analysis.minimization import minimize_function
from optim_plugin.analysis.models import (
    DEFAULT_GUESSES,
    get_default_guess,
    get_model,
    list_models,
    unregister_model,
)
from optim_plugin.analysis.objectives import get_objective, list_objectives, unregister_objective
from optim_plugin.plugin import PluginScanner, load_plugins
from optim_plugin.types.optimization import Sample

EXAMPLE_PLUGIN_DIR = Path(__file__).resolve().parents[1] / "examples" / "plugins"

QUADRATIC_PLUGIN = '''
import numpy as np

PLUGIN_NAME = "quadratic"
PLUGIN_TYPE = "model"
PLUGIN_VERSION = "2.0.0"
PARAM_NAMES = ("a", "c")
DEFAULT_GUESS = (1.0, 0.0)
EXPRESSION = "a * x^2 + c"


def value(x, params):
    a, c = params
    return a * x**2 + c


def gradient(x, params):
    return x**2, 1.0
'''

BOWL_PLUGIN = '''
PLUGIN_NAME = "bowl"
PLUGIN_TYPE = "objective"
DEFAULT_START = (3.0, -2.0)
KNOWN_MINIMUM = (1.0, 1.0)


def value(point):
    x, y = point
    return (x - 1) ** 2 + 2 * (y - 1) ** 2
'''


def _write(directory: Path, name: str, source: str) -> Path:
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(source)
    return path


def test_scanner_finds_models_and_objectives(tmp_path: Path):
    _write(tmp_path, "quadratic.py", QUADRATIC_PLUGIN)
    _write(tmp_path, "nested/bowl.py", BOWL_PLUGIN)
    _write(tmp_path, "_private.py", "raise RuntimeError('never imported')\n")

    scanner = PluginScanner(tmp_path)
    scanner.scan()

    assert sorted(scanner.plugins) == ["bowl", "quadratic"]
    assert scanner.get_plugin("quadratic")["version"] == "2.0.0"
    assert [p["name"] for p in scanner.list_plugins("objective")] == ["bowl"]
    assert scanner.errors == {}


def test_scanner_records_invalid_plugins(tmp_path: Path):
    _write(tmp_path, "no_metadata.py", "x = 1\n")
    _write(tmp_path, "bad_type.py", 'PLUGIN_NAME = "b"\nPLUGIN_TYPE = "feature"\n')
    _write(tmp_path, "no_gradient.py", 'PLUGIN_NAME = "g"\nPLUGIN_TYPE = "model"\nPARAM_NAMES = ("a",)\n\ndef value(x, p):\n    return x\n')
    _write(tmp_path, "broken.py", "def oops(:\n")

    scanner = PluginScanner(tmp_path)
    scanner.scan()

    assert scanner.plugins == {}
    assert set(scanner.errors) == {"no_metadata", "bad_type", "no_gradient", "broken"}


def test_same_file_name_in_different_folders(tmp_path: Path):
    _write(tmp_path, "first/shape.py", QUADRATIC_PLUGIN)
    _write(tmp_path, "second/shape.py", BOWL_PLUGIN)
    _write(tmp_path, "first/broken.py", "def oops(:\n")
    _write(tmp_path, "second/broken.py", "x = 1\n")

    scanner = PluginScanner(tmp_path)
    scanner.scan()

    assert sorted(scanner.plugins) == ["bowl", "quadratic"]
    assert sys.modules["optim_plugin_user.first.shape"].PLUGIN_NAME == "quadratic"
    assert sys.modules["optim_plugin_user.second.shape"].PLUGIN_NAME == "bowl"
    assert set(scanner.errors) == {"first/broken", "second/broken"}


def test_missing_directory_is_skipped(tmp_path: Path):
    scanner = PluginScanner(tmp_path / "nope")
    scanner.scan()

    assert scanner.plugins == {}


def test_load_plugins_registers_models_and_objectives(tmp_path: Path):
    _write(tmp_path, "quadratic.py", QUADRATIC_PLUGIN)
    _write(tmp_path, "bowl.py", BOWL_PLUGIN)

    load_plugins(tmp_path)

    assert "quadratic" in list_models()
    assert "bowl" in list_objectives()
    assert get_default_guess("quadratic") == (1.0, 0.0)

    samples = [Sample(x, 3.0 * x**2 - 1.0) for x in (0.0, 1.0, 2.0, 3.0)]
    fit = fit_curve(get_model("quadratic"), samples, get_default_guess("quadratic"))
    np.testing.assert_allclose(fit.params, (3.0, -1.0), atol=1e-8)

    bowl = get_objective("bowl")
    result = minimize_function(bowl, bowl.default_start, 10000)
    np.testing.assert_allclose(result.point, bowl.known_minimum, atol=1e-3)


def test_name_clash_with_builtin_is_recorded(tmp_path: Path):
    _write(
        tmp_path,
        "my_linear.py",
        QUADRATIC_PLUGIN.replace('PLUGIN_NAME = "quadratic"', 'PLUGIN_NAME = "linear"'),
    )

    scanner = load_plugins(tmp_path)

    assert "linear" in scanner.errors
    assert get_model("linear").expression == "a * x + b"


def test_registrations_do_not_leak_between_tests():
    with pytest.raises(ValueError):
        get_model("quadratic")


def test_bundled_example_plugins_load():
    scanner = load_plugins(EXAMPLE_PLUGIN_DIR)

    assert scanner.errors == {}
    assert "power_law" in list_models()
    assert "booth" in list_objectives()


def test_unregister_removes_plugin_entries(tmp_path: Path):
    _write(tmp_path, "quadratic.py", QUADRATIC_PLUGIN)
    _write(tmp_path, "bowl.py", BOWL_PLUGIN)
    load_plugins(tmp_path)

    unregister_model("quadratic")
    unregister_objective("bowl")

    assert "quadratic" not in list_models()
    assert "quadratic" not in DEFAULT_GUESSES
    assert "bowl" not in list_objectives()
    unregister_model("quadratic")
