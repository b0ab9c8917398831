# discover/__init__.py
"""
discover package initializer.
Defines package version and exposes the CLI entry point.
"""
__version__ = "0.2.0"

# Expose CLI entry point without shadowing the discover.cli module
from discover.cli import cli as main_cli  # noqa: E402

__all__ = ["__version__", "main_cli"]
