"""Pre-commit hook that keeps staged Rust files formatted.

The hook lists the staged files ending in a suffix (``.rs`` by default), runs
``cargo fmt --check`` over them and, when any of them is not formatted,
rewrites those files in place and fails so the commit is aborted. The user
then re-stages the reformatted files and commits again.

Basic Usage:
    from stagedfmt import HookConfig, HookRunner

    runner = HookRunner.for_repository(HookConfig.from_env())
    result = runner.run()
    if result.blocked:
        print("re-stage:", result.reformatted_files)

Command line:
    stagedfmt install     # write .git/hooks/pre-commit
    stagedfmt             # same as `stagedfmt run`
"""

__version__ = "1.0.0"

from .config import HookConfig
from .exceptions import (
    CommandFailedError,
    ExecutableNotFoundError,
    FormatterCrashedError,
    FormatterNotFoundError,
    GitCommandError,
    GitNotFoundError,
    HookInstallError,
    StagedFmtError,
    UserError,
)
from .formatter import CargoFormatter
from .git import list_staged_files, repository_root
from .models import CheckResult, HookOutcome, HookResult
from .runner import HookRunner

__all__ = [
    "__version__",
    # Core
    "HookRunner",
    "HookConfig",
    "CargoFormatter",
    "list_staged_files",
    "repository_root",
    # Results
    "CheckResult",
    "HookOutcome",
    "HookResult",
    # Exceptions
    "StagedFmtError",
    "UserError",
    "HookInstallError",
    "ExecutableNotFoundError",
    "FormatterNotFoundError",
    "GitNotFoundError",
    "CommandFailedError",
    "GitCommandError",
    "FormatterCrashedError",
]
