"""
optim-plugin: curve fitting and function minimization examples for an
image-analysis host.
"""

__version__ = "1.0.0"
