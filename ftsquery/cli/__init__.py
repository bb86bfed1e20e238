"""Full-text condition CLI.

Command-line interface for normalizing and inspecting search conditions,
built with Click and Rich.
"""

from ftsquery.cli.main import cli, main

__all__ = ["cli", "main"]
