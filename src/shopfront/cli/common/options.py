"""
Reusable Typer Options Module

Common option definitions shared by the main callback. Each is a
``typer.Option`` used as ``Annotated`` metadata, e.g.
``verbose: Annotated[int, verbose_option] = 0``.
"""

from __future__ import annotations

import typer

# Count-based so -vv works
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: from config.",
)

json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of human-readable format.",
)

config_option = typer.Option(
    "--config",
    "-c",
    help="Path to a TOML configuration file.",
    dir_okay=False,
)

version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)
