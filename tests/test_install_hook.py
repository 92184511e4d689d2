"""Tests for the install / uninstall commands."""

import os
import sys
from argparse import Namespace

import pytest

from stagedfmt.cli.commands.install_hook import (
    SHIM_MARKER,
    execute_install,
    execute_uninstall,
    install_hook,
    is_stagedfmt_hook,
    render_shim,
    uninstall_hook,
)
from stagedfmt.exceptions import HookInstallError

FOREIGN_HOOK = "#!/bin/sh\necho other hook\n"


@pytest.fixture
def hooks_dir(tmp_path):
    return tmp_path / "hooks"


class TestShim:
    def test_render_uses_interpreter(self):
        shim = render_shim("/usr/bin/python3")
        assert shim.startswith("#!/bin/sh\n")
        assert SHIM_MARKER in shim
        assert 'exec "/usr/bin/python3" -m stagedfmt run' in shim

    def test_render_defaults_to_current_interpreter(self):
        assert sys.executable in render_shim()

    def test_marker_detection(self, tmp_path):
        ours = tmp_path / "ours"
        ours.write_text(render_shim(), encoding="utf-8")
        theirs = tmp_path / "theirs"
        theirs.write_text(FOREIGN_HOOK, encoding="utf-8")

        assert is_stagedfmt_hook(ours) is True
        assert is_stagedfmt_hook(theirs) is False
        assert is_stagedfmt_hook(tmp_path / "missing") is False


class TestInstall:
    def test_fresh_install(self, hooks_dir):
        hook = install_hook(hooks_dir, python="/usr/bin/python3")

        assert hook == hooks_dir / "pre-commit"
        assert is_stagedfmt_hook(hook)
        assert os.access(hook, os.X_OK)

    def test_reinstall_overwrites_own_hook(self, hooks_dir):
        install_hook(hooks_dir, python="/old/python")
        hook = install_hook(hooks_dir, python="/new/python")

        assert "/new/python" in hook.read_text(encoding="utf-8")
        assert not (hooks_dir / "pre-commit.bak").exists()

    def test_foreign_hook_is_refused(self, hooks_dir):
        hooks_dir.mkdir()
        (hooks_dir / "pre-commit").write_text(FOREIGN_HOOK, encoding="utf-8")

        with pytest.raises(HookInstallError) as exc_info:
            install_hook(hooks_dir)

        assert exc_info.value.hook_path == hooks_dir / "pre-commit"
        assert (hooks_dir / "pre-commit").read_text(encoding="utf-8") == FOREIGN_HOOK

    def test_force_backs_up_foreign_hook(self, hooks_dir):
        hooks_dir.mkdir()
        (hooks_dir / "pre-commit").write_text(FOREIGN_HOOK, encoding="utf-8")

        install_hook(hooks_dir, force=True)

        assert (hooks_dir / "pre-commit.bak").read_text(encoding="utf-8") == FOREIGN_HOOK
        assert is_stagedfmt_hook(hooks_dir / "pre-commit")


class TestUninstall:
    def test_nothing_installed(self, hooks_dir):
        hooks_dir.mkdir()
        assert uninstall_hook(hooks_dir) is False

    def test_removes_own_hook(self, hooks_dir):
        install_hook(hooks_dir)

        assert uninstall_hook(hooks_dir) is True
        assert not (hooks_dir / "pre-commit").exists()

    def test_restores_backup(self, hooks_dir):
        hooks_dir.mkdir()
        (hooks_dir / "pre-commit").write_text(FOREIGN_HOOK, encoding="utf-8")
        install_hook(hooks_dir, force=True)

        uninstall_hook(hooks_dir)

        assert (hooks_dir / "pre-commit").read_text(encoding="utf-8") == FOREIGN_HOOK
        assert not (hooks_dir / "pre-commit.bak").exists()

    def test_refuses_foreign_hook(self, hooks_dir):
        hooks_dir.mkdir()
        (hooks_dir / "pre-commit").write_text(FOREIGN_HOOK, encoding="utf-8")

        with pytest.raises(HookInstallError):
            uninstall_hook(hooks_dir)
        assert (hooks_dir / "pre-commit").exists()


class TestCommands:
    def test_install_into_repository(self, git_repo, capsys):
        code = execute_install(Namespace(directory=str(git_repo.path), force=False))

        hook = git_repo.path / ".git" / "hooks" / "pre-commit"
        assert code == 0
        assert is_stagedfmt_hook(hook)
        assert "Installed pre-commit hook" in capsys.readouterr().out

    def test_uninstall_from_repository(self, git_repo, capsys):
        execute_install(Namespace(directory=str(git_repo.path), force=False))
        capsys.readouterr()

        code = execute_uninstall(Namespace(directory=str(git_repo.path)))

        assert code == 0
        assert not (git_repo.path / ".git" / "hooks" / "pre-commit").exists()
        assert "Removed pre-commit hook" in capsys.readouterr().out

    def test_uninstall_when_absent(self, git_repo, capsys):
        code = execute_uninstall(Namespace(directory=str(git_repo.path)))

        assert code == 0
        assert "No pre-commit hook installed" in capsys.readouterr().out
