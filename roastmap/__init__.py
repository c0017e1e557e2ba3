"""
Roastmap package initializer.
Defines package version and exposes CLI.
"""
__version__ = "1.0.0"

from .cli import cli  # noqa: E402
