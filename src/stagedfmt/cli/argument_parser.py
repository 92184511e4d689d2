"""CLI argument parser for stagedfmt.

Supported commands:
- run: Check staged files and reformat the ones that fail (default)
- install: Install the pre-commit hook into the current repository
- uninstall: Remove the pre-commit hook

Invoked without a command, as git does when it runs the hook, the parser
behaves as if ``run`` had been given. ``-C`` is accepted before or after the
command; given in both places, the one after the command wins.

Usage:
    from stagedfmt.cli.argument_parser import parse_args

    args = parse_args(["run", "--check-only"])
    print(f"Command: {args.subcommand}")
"""

import argparse
from typing import List, Optional

from .. import __version__

COMMANDS = ["run", "install", "uninstall"]
DEFAULT_COMMAND = "run"

# Options handled by the top-level parser itself
_TOP_LEVEL_OPTIONS = {"-h", "--help", "--version"}


def _add_common_arguments(parser: argparse.ArgumentParser, default=None) -> None:
    """Add arguments shared by every command."""
    parser.add_argument(
        "-C", "--directory",
        default=default,
        help="Run as if started in this directory (default: current directory)"
    )


def _create_run_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "run",
        help="Check staged files and reformat the ones that fail",
        description="Check the staged files matching the suffix with cargo fmt. "
                    "If any of them is not formatted, rewrite it in place and "
                    "exit with status 1 so the commit is aborted."
    )
    _add_common_arguments(parser, default=argparse.SUPPRESS)
    parser.add_argument(
        "--suffix",
        default=None,
        help="Filename suffix of files to check (default: $STAGEDFMT_SUFFIX or .rs)"
    )
    parser.add_argument(
        "--cargo",
        default=None,
        help="cargo executable (default: $STAGEDFMT_CARGO or cargo)"
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Report unformatted files and block the commit without rewriting them"
    )
    return parser


def _create_install_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "install",
        help="Install the pre-commit hook",
        description="Write a pre-commit hook that runs 'stagedfmt run' into the "
                    "repository's hooks directory."
    )
    _add_common_arguments(parser, default=argparse.SUPPRESS)
    parser.add_argument(
        "--force",
        action="store_true",
        help="Back up an existing pre-commit hook to pre-commit.bak and replace it"
    )
    return parser


def _create_uninstall_parser(subparsers) -> argparse.ArgumentParser:
    parser = subparsers.add_parser(
        "uninstall",
        help="Remove the pre-commit hook",
        description="Remove the hook written by 'stagedfmt install' and restore "
                    "a backed-up hook if there is one."
    )
    _add_common_arguments(parser, default=argparse.SUPPRESS)
    return parser


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="stagedfmt",
        description="Pre-commit hook that keeps staged Rust files formatted with cargo fmt",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # install the hook in the current repository
  stagedfmt install

  # run the check by hand
  stagedfmt run

  # only report, never rewrite
  stagedfmt run --check-only

environment:
  STAGEDFMT_SUFFIX       filename suffix to check (default .rs)
  STAGEDFMT_CARGO        cargo executable (default cargo)
  STAGEDFMT_CHECK_ONLY   report without rewriting (true/false)
  STAGEDFMT_DEBUG        debug logging and timing (true/false)
  STAGEDFMT_LOG_LEVEL    logging level (DEBUG/INFO/WARNING/ERROR)
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    _add_common_arguments(parser)

    subparsers = parser.add_subparsers(
        dest="subcommand",
        help="available commands",
        metavar="COMMAND"
    )

    _create_run_parser(subparsers)
    _create_install_parser(subparsers)
    _create_uninstall_parser(subparsers)

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Arguments without the program name. None means no arguments,
            which is how git invokes the hook.

    Returns:
        Parsed arguments namespace; ``subcommand`` is always set

    Raises:
        SystemExit: If parsing fails or --help/--version is given
    """
    args = list(args or [])
    parser = create_parser()
    if not args:
        return parser.parse_args([DEFAULT_COMMAND])

    names_command = any(arg in COMMANDS for arg in args)
    if args[0].startswith("-") and args[0] not in _TOP_LEVEL_OPTIONS and not names_command:
        return parser.parse_args([DEFAULT_COMMAND] + args)

    namespace = parser.parse_args(args)
    if namespace.subcommand is None:
        # a command name was only an option value, as in "-C install"
        namespace = parser.parse_args([DEFAULT_COMMAND] + args)
    return namespace
