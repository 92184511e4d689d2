"""run command: execute the pre-commit check."""

import logging
from argparse import Namespace

from ...config import HookConfig
from ...runner import HookRunner

logger = logging.getLogger(__name__)


def config_from_args(args: Namespace, base: HookConfig) -> HookConfig:
    """Apply the ``run`` flags on top of the environment configuration."""
    return base.with_overrides(
        suffix=getattr(args, "suffix", None),
        cargo=getattr(args, "cargo", None),
        check_only=True if getattr(args, "check_only", False) else None,
    )


def execute_run(args: Namespace, base: HookConfig) -> int:
    """Entry point for ``stagedfmt run``.

    Returns:
        0 when nothing needed formatting, 1 when the commit must be aborted
    """
    config = config_from_args(args, base)
    runner = HookRunner.for_repository(config, args.directory)
    result = runner.run()
    logger.debug(f"hook finished: {result.outcome.value}")
    return result.exit_code
