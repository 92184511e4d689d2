"""Queries against the git repository the hook runs in."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import GitCommandError, GitNotFoundError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# cached (staged) paths, excluding deletions, NUL separated
STAGED_FILES_ARGS = ["diff", "--cached", "--name-only", "--diff-filter=d", "-z"]


def run_git(args: List[str], cwd: Optional[PathLike] = None, git: str = "git") -> str:
    """Run a git command and return its standard output.

    Args:
        args: Arguments after the git executable
        cwd: Working directory (defaults to the current one)
        git: git executable

    Returns:
        Captured standard output

    Raises:
        GitNotFoundError: If the git executable cannot be started
        GitCommandError: If git exits with a non-zero status
    """
    cmd = [git] + list(args)
    logger.debug(f"running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd, cwd=cwd, capture_output=True, text=True, check=False
        )
    except FileNotFoundError as e:
        raise GitNotFoundError(git) from e

    if result.returncode != 0:
        raise GitCommandError(
            f"git {args[0]} failed with exit status {result.returncode}",
            command=cmd,
            returncode=result.returncode,
            stderr=result.stderr,
        )
    return result.stdout


def filter_by_suffix(paths: List[str], suffix: str) -> List[str]:
    """Keep the paths ending in ``suffix``, preserving order."""
    return [path for path in paths if path.endswith(suffix)]


def list_staged_files(suffix: str, cwd: Optional[PathLike] = None, git: str = "git") -> List[str]:
    """List staged, non-deleted files whose path ends in ``suffix``.

    Paths are relative to the repository root, in the order git reports them.
    """
    output = run_git(STAGED_FILES_ARGS, cwd=cwd, git=git)
    staged = [path for path in output.split("\0") if path]
    matching = filter_by_suffix(staged, suffix)
    logger.debug(f"{len(staged)} staged file(s), {len(matching)} matching '{suffix}'")
    return matching


def repository_root(cwd: Optional[PathLike] = None, git: str = "git") -> Path:
    """Return the top-level directory of the working tree."""
    return Path(run_git(["rev-parse", "--show-toplevel"], cwd=cwd, git=git).strip())


def hooks_directory(cwd: Optional[PathLike] = None, git: str = "git") -> Path:
    """Return the directory git loads hooks from.

    Honors ``core.hooksPath`` and linked worktrees through ``--git-path``.
    """
    hooks = Path(run_git(["rev-parse", "--git-path", "hooks"], cwd=cwd, git=git).strip())
    if not hooks.is_absolute():
        hooks = Path(cwd or Path.cwd()) / hooks
    return hooks
