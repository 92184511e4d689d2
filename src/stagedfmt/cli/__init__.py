"""CLI package for stagedfmt.

Key modules:
- argument_parser: argparse parser for the run/install/uninstall commands
- main: ``stagedfmt`` console script entry point
- commands/: command implementations
"""

from .argument_parser import create_parser, parse_args

__all__ = [
    "parse_args",
    "create_parser"
]
