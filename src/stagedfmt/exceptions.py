"""Exception hierarchy for stagedfmt.

Every error raised by the hook derives from :class:`StagedFmtError`, which
carries a standardized error code, a suggested fix and a context dictionary.
The CLI maps these types to exit codes in a single place.

Categories:
- User errors: a hook install conflict, a bad argument
- System errors: git or the formatter executable missing
- External errors: git or the formatter exiting unexpectedly
"""

from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ErrorCategory(Enum):
    """Broad classification of a failure."""
    USER = "user"             # the user can fix it directly
    SYSTEM = "system"         # environment problem (missing tool, not a repo)
    EXTERNAL = "external"     # a collaborator process misbehaved


class StagedFmtError(Exception):
    """Base exception for all stagedfmt errors.

    Attributes:
        message: Human readable error message
        error_code: Standardized error code (CATEGORY_SPECIFIC_CODE)
        suggested_fix: Hint shown to the user under the message
        context: Extra information about the failure
        category: Error category
    """

    def __init__(
        self,
        message: str,
        error_code: str = "UNKNOWN_ERROR",
        suggested_fix: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        category: Union[str, ErrorCategory] = ErrorCategory.EXTERNAL,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.suggested_fix = suggested_fix
        self.context = context or {}
        self.category = category if isinstance(category, ErrorCategory) else ErrorCategory(category)

    def get_user_message(self) -> str:
        """Return the message and, when present, the suggested fix."""
        user_msg = f"stagedfmt: {self.message}"
        if self.suggested_fix:
            user_msg += f"\nhint: {self.suggested_fix}"
        return user_msg

    def get_full_details(self) -> Dict[str, Any]:
        """Return all error details, used for debug logging."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "suggested_fix": self.suggested_fix,
            "context": self.context,
        }

    def add_context(self, key: str, value: Any) -> None:
        self.context[key] = value


# ===== User errors =====

class UserError(StagedFmtError):
    """Base class for errors the user can correct directly."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("category", ErrorCategory.USER)
        super().__init__(message, **kwargs)


class HookInstallError(UserError):
    """Installing or removing the pre-commit shim was refused."""

    def __init__(self, message: str, hook_path: Union[str, Path] = None, **kwargs):
        self.hook_path = Path(hook_path) if hook_path else None
        kwargs.setdefault("error_code", "USER_HOOK_CONFLICT")
        kwargs.setdefault(
            "suggested_fix",
            "Re-run with --force to back up the existing hook and replace it"
        )
        if self.hook_path:
            kwargs.setdefault("context", {}).update({"hook_path": str(self.hook_path)})
        super().__init__(message, **kwargs)


# ===== System errors =====

class ExecutableNotFoundError(StagedFmtError):
    """A required external executable could not be started."""

    def __init__(self, message: str, executable: str = None, **kwargs):
        self.executable = executable
        kwargs.setdefault("category", ErrorCategory.SYSTEM)
        kwargs.setdefault("error_code", "SYSTEM_EXECUTABLE_NOT_FOUND")
        if self.executable:
            kwargs.setdefault("context", {})["executable"] = self.executable
        super().__init__(message, **kwargs)


class FormatterNotFoundError(ExecutableNotFoundError):
    """The formatter executable is not installed or not on PATH."""

    def __init__(self, executable: str, **kwargs):
        kwargs.setdefault("error_code", "SYSTEM_FORMATTER_NOT_FOUND")
        kwargs.setdefault(
            "suggested_fix",
            "Install rustfmt (`rustup component add rustfmt`) or point "
            "STAGEDFMT_CARGO at the cargo executable"
        )
        super().__init__(
            f"formatter executable not found: {executable}",
            executable=executable,
            **kwargs,
        )


class GitNotFoundError(ExecutableNotFoundError):
    """The git executable is not installed or not on PATH."""

    def __init__(self, executable: str = "git", **kwargs):
        kwargs.setdefault("error_code", "SYSTEM_GIT_NOT_FOUND")
        kwargs.setdefault("suggested_fix", "Install git and make sure it is on PATH")
        super().__init__(
            f"git executable not found: {executable}",
            executable=executable,
            **kwargs,
        )


# ===== External errors =====

class CommandFailedError(StagedFmtError):
    """An external command exited with an unexpected status."""

    def __init__(
        self,
        message: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
        **kwargs
    ):
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        kwargs.setdefault("category", ErrorCategory.EXTERNAL)
        context = kwargs.setdefault("context", {})
        if self.command:
            context["command"] = " ".join(self.command)
        if returncode is not None:
            context["returncode"] = returncode
        if stderr:
            context["stderr"] = stderr.strip()
        super().__init__(message, **kwargs)


class GitCommandError(CommandFailedError):
    """git exited with a non-zero status."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "EXTERNAL_GIT_FAILED")
        kwargs.setdefault("suggested_fix", "Run the hook from inside a git working tree")
        super().__init__(message, **kwargs)


class FormatterCrashedError(CommandFailedError):
    """The formatter exited with a status other than pass or fail."""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("error_code", "EXTERNAL_FORMATTER_FAILED")
        kwargs.setdefault(
            "suggested_fix",
            "Run `cargo fmt --check` by hand to see the formatter's own error"
        )
        super().__init__(message, **kwargs)
