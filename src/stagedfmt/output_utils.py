"""Exit codes and message helpers shared by the hook and the CLI."""

from typing import Iterable

EXIT_SUCCESS = 0
EXIT_REFORMATTED = 1
EXIT_FORMATTER_MISSING = 2
EXIT_GIT_ERROR = 3
EXIT_UNEXPECTED = 4
EXIT_INSTALL_REFUSED = 5
EXIT_INTERRUPTED = 130


def format_file_list(files: Iterable[str]) -> str:
    """Join file paths into the single-line form used in messages."""
    return " ".join(files)
