"""The pre-commit hook itself.

A run moves through two states: it starts out *checking* the staged files and
ends either *clean* (nothing to do) or *reformatted and blocked*. Only the
formatter check decides which.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, TextIO

from . import git
from .config import HookConfig
from .formatter import CargoFormatter
from .models import HookOutcome, HookResult
from .output_utils import format_file_list

logger = logging.getLogger(__name__)


class HookRunner:
    """Check staged files and reformat the ones that fail.

    Args:
        config: Hook settings
        root: Repository root; file paths are relative to it
        formatter: Formatter to use (defaults to ``CargoFormatter`` at ``root``)
        list_files: Callable returning the staged files for a suffix
        stream: Where the diagnostic line is written (defaults to stderr)
    """

    def __init__(
        self,
        config: HookConfig,
        root: Path,
        formatter: Optional[CargoFormatter] = None,
        list_files: Optional[Callable[[str], List[str]]] = None,
        stream: Optional[TextIO] = None,
    ):
        self.config = config
        self.root = Path(root)
        self.formatter = formatter or CargoFormatter(
            cargo=config.cargo, cwd=self.root, rustfmt_config=config.rustfmt_config
        )
        self._list_files = list_files or (
            lambda suffix: git.list_staged_files(suffix, cwd=self.root)
        )
        self.stream = stream

    @classmethod
    def for_repository(cls, config: HookConfig, cwd: Optional[Path] = None) -> "HookRunner":
        """Create a runner for the repository containing ``cwd``."""
        return cls(config, git.repository_root(cwd))

    def run(self) -> HookResult:
        """Run the hook once.

        Returns:
            HookResult; its ``exit_code`` is non-zero when the commit must be
            aborted so the reformatted files can be re-staged.
        """
        staged = self._list_files(self.config.suffix)
        if not staged:
            logger.debug(f"no staged '{self.config.suffix}' files")
            return HookResult(HookOutcome.NO_FILES)

        check = self.formatter.check(staged)
        if check.passed:
            logger.debug(f"{len(staged)} file(s) already formatted")
            return HookResult(HookOutcome.CLEAN, staged_files=staged)

        flagged = check.flagged_files
        stream = self.stream or sys.stderr

        if self.config.check_only:
            print(f"{self.formatter.name} would reformat {format_file_list(flagged)}", file=stream)
            return HookResult(HookOutcome.REFORMATTED, staged_files=staged)

        print(f"Running {self.formatter.name} for {format_file_list(flagged)}", file=stream)

        self.formatter.format(flagged)
        return HookResult(HookOutcome.REFORMATTED, staged_files=staged, reformatted_files=flagged)
