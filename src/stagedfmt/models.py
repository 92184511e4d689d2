"""Result types produced by a hook run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .output_utils import EXIT_REFORMATTED, EXIT_SUCCESS


class HookOutcome(Enum):
    """Terminal state reached by one hook run."""
    NO_FILES = "no_files"          # nothing staged with the suffix
    CLEAN = "clean"                # every staged file already formatted
    REFORMATTED = "reformatted"    # files were rewritten, commit blocked

    @property
    def exit_code(self) -> int:
        if self is HookOutcome.REFORMATTED:
            return EXIT_REFORMATTED
        return EXIT_SUCCESS


@dataclass
class CheckResult:
    """Outcome of a check-only formatter run.

    Attributes:
        passed: True when every checked file is already formatted
        flagged_files: Files that need formatting, in staged order
        returncode: Formatter exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    passed: bool
    flagged_files: List[str] = field(default_factory=list)
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


@dataclass
class HookResult:
    """Outcome of a full hook run."""

    outcome: HookOutcome
    staged_files: List[str] = field(default_factory=list)
    reformatted_files: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code

    @property
    def blocked(self) -> bool:
        return self.outcome is HookOutcome.REFORMATTED
