"""install / uninstall commands.

``install`` writes a small ``pre-commit`` shell script into the repository's
hooks directory. The script runs ``stagedfmt run`` with the interpreter that
performed the install. An existing hook that we did not write is kept: the
install is refused unless ``--force`` is given, in which case the old hook is
moved aside to ``pre-commit.bak`` and restored again by ``uninstall``.
"""

import logging
import os
import shutil
import stat
import sys
from argparse import Namespace
from pathlib import Path
from typing import Optional

from ... import git
from ...exceptions import HookInstallError
from ...output_utils import EXIT_SUCCESS

logger = logging.getLogger(__name__)

HOOK_NAME = "pre-commit"
BACKUP_SUFFIX = ".bak"
SHIM_MARKER = "# installed by stagedfmt"

SHIM_TEMPLATE = """#!/bin/sh
{marker}
exec "{python}" -m stagedfmt run
"""


def render_shim(python: Optional[str] = None) -> str:
    """Return the hook script content."""
    return SHIM_TEMPLATE.format(marker=SHIM_MARKER, python=python or sys.executable)


def is_stagedfmt_hook(path: Path) -> bool:
    """Tell whether ``path`` is a hook written by ``install``."""
    try:
        return SHIM_MARKER in path.read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return False


def _make_executable(path: Path) -> None:
    mode = path.stat().st_mode
    path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


def install_hook(hooks_dir: Path, force: bool = False, python: Optional[str] = None) -> Path:
    """Write the pre-commit shim into ``hooks_dir``.

    Args:
        hooks_dir: git hooks directory
        force: Back up and replace a hook we did not write
        python: Interpreter the shim runs (defaults to the current one)

    Returns:
        Path of the installed hook

    Raises:
        HookInstallError: If a foreign hook exists and ``force`` is False
    """
    hooks_dir.mkdir(parents=True, exist_ok=True)
    hook_path = hooks_dir / HOOK_NAME

    if hook_path.exists() and not is_stagedfmt_hook(hook_path):
        if not force:
            raise HookInstallError(
                f"a different pre-commit hook already exists: {hook_path}",
                hook_path=hook_path,
            )
        backup = hook_path.with_name(HOOK_NAME + BACKUP_SUFFIX)
        shutil.move(str(hook_path), str(backup))
        logger.info(f"moved existing hook to {backup}")

    hook_path.write_text(render_shim(python), encoding="utf-8")
    _make_executable(hook_path)
    return hook_path


def uninstall_hook(hooks_dir: Path) -> bool:
    """Remove the shim from ``hooks_dir`` and restore a backed-up hook.

    Returns:
        True if a shim was removed, False if none was installed

    Raises:
        HookInstallError: If the installed pre-commit hook is not ours
    """
    hook_path = hooks_dir / HOOK_NAME
    if not hook_path.exists():
        return False

    if not is_stagedfmt_hook(hook_path):
        raise HookInstallError(
            f"refusing to remove a pre-commit hook not installed by stagedfmt: {hook_path}",
            hook_path=hook_path,
            suggested_fix="Remove the hook by hand if it is no longer wanted",
        )

    hook_path.unlink()
    backup = hook_path.with_name(HOOK_NAME + BACKUP_SUFFIX)
    if backup.exists():
        os.replace(backup, hook_path)
        logger.info(f"restored previous hook from {backup}")
    return True


def execute_install(args: Namespace) -> int:
    """Entry point for ``stagedfmt install``."""
    hooks_dir = git.hooks_directory(args.directory)
    hook_path = install_hook(hooks_dir, force=args.force)
    print(f"Installed pre-commit hook -> {hook_path}")
    return EXIT_SUCCESS


def execute_uninstall(args: Namespace) -> int:
    """Entry point for ``stagedfmt uninstall``."""
    hooks_dir = git.hooks_directory(args.directory)
    if uninstall_hook(hooks_dir):
        print(f"Removed pre-commit hook from {hooks_dir}")
    else:
        print(f"No pre-commit hook installed in {hooks_dir}")
    return EXIT_SUCCESS
