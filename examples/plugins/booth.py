"""Example objective plugin: Booth function.

Minimum f(1, 3) = 0.
"""

PLUGIN_NAME = "booth"
PLUGIN_TYPE = "objective"
PLUGIN_VERSION = "1.0.0"

DEFAULT_START = (0.0, 0.0)
KNOWN_MINIMUM = (1.0, 3.0)
EXPRESSION = "(x + 2y - 7)^2 + (2x + y - 5)^2"


def value(point) -> float:
    x, y = point
    return (x + 2 * y - 7) ** 2 + (2 * x + y - 5) ** 2
