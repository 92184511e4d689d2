"""Main CLI entry point for the ``stagedfmt`` console script.

Parses the command line, configures logging from the environment and
dispatches to the command implementation. Every exception type is turned into
an exit code here, so commands simply raise.
"""

import logging
import signal
import sys
import time
from typing import Any, Callable, Dict, List, NoReturn, Optional

import psutil

from ..config import HookConfig
from ..exceptions import (
    CommandFailedError,
    ExecutableNotFoundError,
    FormatterNotFoundError,
    GitCommandError,
    HookInstallError,
    StagedFmtError,
)
from ..output_utils import (
    EXIT_FORMATTER_MISSING,
    EXIT_GIT_ERROR,
    EXIT_INSTALL_REFUSED,
    EXIT_INTERRUPTED,
    EXIT_UNEXPECTED,
)
from ..utils.logging import configure_logging
from .argument_parser import parse_args
from .commands.install_hook import execute_install, execute_uninstall
from .commands.run_hook import execute_run

logger = logging.getLogger(__name__)

PERFORMANCE_THRESHOLD_MS = 2000

COMMAND_REGISTRY: Dict[str, Callable[..., int]] = {
    "run": execute_run,
    "install": lambda args, config: execute_install(args),
    "uninstall": lambda args, config: execute_uninstall(args),
}


def _setup_signal_handlers() -> None:
    """Treat SIGTERM like Ctrl-C.

    SIGINT keeps Python's default handler, which raises KeyboardInterrupt.
    SIGTERM is turned into the same exception so both end in the
    KeyboardInterrupt branch of ``_execute_command_safely`` and exit 130.
    """
    def signal_handler(signum: int, frame: Any) -> None:
        logger.debug(f"received signal: {signum}")
        raise KeyboardInterrupt

    if hasattr(signal, 'SIGTERM'):
        signal.signal(signal.SIGTERM, signal_handler)


class PerformanceMonitor:
    """Log elapsed time, and in debug mode memory growth, for one command."""

    def __init__(self, command: str, debug: bool = False):
        self.command = command
        self.debug = debug
        self.start_time = time.perf_counter()
        self.memory_start = None
        if debug:
            self.memory_start = psutil.Process().memory_info().rss / 1024 / 1024  # MB

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.perf_counter() - self.start_time) * 1000
        if elapsed_ms > PERFORMANCE_THRESHOLD_MS:
            logger.info(f"{self.command} took {elapsed_ms:.0f}ms")
        elif self.debug:
            logger.debug(f"{self.command} took {elapsed_ms:.2f}ms")

        if self.debug and self.memory_start is not None:
            memory_end = psutil.Process().memory_info().rss / 1024 / 1024  # MB
            logger.debug(
                f"{self.command} memory: {memory_end - self.memory_start:+.1f}MB "
                f"(start: {self.memory_start:.1f}MB, end: {memory_end:.1f}MB)"
            )


def _exit_code_for(error: StagedFmtError) -> int:
    if isinstance(error, FormatterNotFoundError):
        return EXIT_FORMATTER_MISSING
    if isinstance(error, ExecutableNotFoundError):
        return EXIT_GIT_ERROR
    if isinstance(error, GitCommandError):
        return EXIT_GIT_ERROR
    if isinstance(error, HookInstallError):
        return EXIT_INSTALL_REFUSED
    return EXIT_UNEXPECTED


def _execute_command_safely(command_name: str, args: Any, config: HookConfig) -> int:
    """Run one command and map any failure to an exit code."""
    command_func = COMMAND_REGISTRY[command_name]
    try:
        with PerformanceMonitor(command_name, debug=config.debug):
            return command_func(args, config)

    except KeyboardInterrupt:
        logger.debug(f"{command_name} interrupted")
        print("\ninterrupted", file=sys.stderr)
        return EXIT_INTERRUPTED
    except StagedFmtError as e:
        logger.debug(f"{command_name} failed: {e.get_full_details()}")
        if isinstance(e, CommandFailedError) and e.stderr:
            print(e.stderr.rstrip(), file=sys.stderr)
        print(e.get_user_message(), file=sys.stderr)
        return _exit_code_for(e)
    except Exception as e:
        logger.exception(f"{command_name} failed unexpectedly")
        print(f"stagedfmt: unexpected error: {e}", file=sys.stderr)
        return EXIT_UNEXPECTED


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """Entry point of the ``stagedfmt`` console script.

    Git runs the installed hook with no arguments, which selects ``run``.
    """
    args = parse_args(sys.argv[1:] if argv is None else argv)
    config = HookConfig.from_env()
    configure_logging(config.log_level, debug=config.debug)
    _setup_signal_handlers()

    exit_code = _execute_command_safely(args.subcommand, args, config)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
