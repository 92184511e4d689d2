"""pytest configuration and shared fixtures for stagedfmt tests."""

import json
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

from fixtures.sample_data import FAKE_CARGO_SOURCE


def _git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    )
    return result.stdout


class GitRepo:
    """Temporary git repository with helpers to write and stage files."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str) -> str:
        return _git(self.path, *args)

    def write(self, name: str, content: str) -> Path:
        path = self.path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def read(self, name: str) -> str:
        return (self.path / name).read_text(encoding="utf-8")

    def stage(self, name: str, content: str) -> Path:
        path = self.write(name, content)
        self.git("add", "--", name)
        return path

    def commit(self, message: str = "commit") -> None:
        self.git("commit", "-q", "--no-verify", "-m", message)


@pytest.fixture
def git_repo(tmp_path):
    """An initialized, empty git repository."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    repo_path = tmp_path / "repo"
    repo_path.mkdir()
    _git(repo_path, "init", "-q")
    _git(repo_path, "config", "user.email", "dev@example.com")
    _git(repo_path, "config", "user.name", "Dev")
    _git(repo_path, "config", "commit.gpgsign", "false")
    return GitRepo(repo_path)


@pytest.fixture
def fake_cargo(tmp_path, monkeypatch):
    """Install a stand-in ``cargo`` executable and return a helper for it."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "cargo"
    script.write_text(f"#!{sys.executable}\n{FAKE_CARGO_SOURCE}", encoding="utf-8")
    script.chmod(0o755)

    log = tmp_path / "cargo-calls.jsonl"
    monkeypatch.setenv("FAKE_CARGO_LOG", str(log))

    class FakeCargo:
        path = str(script)

        @staticmethod
        def calls() -> List[Dict[str, Any]]:
            if not log.exists():
                return []
            return [json.loads(line) for line in log.read_text(encoding="utf-8").splitlines()]

    return FakeCargo()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every STAGEDFMT_* variable from the environment."""
    for key in ("STAGEDFMT_SUFFIX", "STAGEDFMT_CARGO", "STAGEDFMT_CHECK_ONLY",
                "STAGEDFMT_DEBUG", "STAGEDFMT_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI attaches to the package logger."""
    yield
    logger = logging.getLogger("stagedfmt")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
