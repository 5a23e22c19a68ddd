"""Command-line surface for nexus-spec."""

from nexus_spec.ui.cli import CLIError, build_parser, run_cli

__all__ = ["CLIError", "build_parser", "run_cli"]
