"""cargo fmt wrapper used by the hook.

The formatter is driven in two modes over an explicit file list:

- check-only mode (``cargo fmt --check``) reports which files are not in
  canonical form without touching them
- mutating mode (``cargo fmt``) rewrites those files in place

Every invocation passes ``--config skip_children=true`` so rustfmt judges each
listed file on its own instead of following ``mod`` declarations into the
rest of the crate.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .config import DEFAULT_CARGO, DEFAULT_RUSTFMT_CONFIG
from .exceptions import FormatterCrashedError, FormatterNotFoundError
from .models import CheckResult

logger = logging.getLogger(__name__)

# rustfmt --check exits 1 when at least one file would be reformatted
CHECK_FAILED_RETURNCODE = 1


class CargoFormatter:
    """Run ``cargo fmt`` against a list of files.

    Args:
        cargo: cargo executable
        cwd: Directory the file paths are relative to (the repository root)
        rustfmt_config: ``key=value`` options forwarded to rustfmt
    """

    def __init__(
        self,
        cargo: str = DEFAULT_CARGO,
        cwd: Optional[Union[str, Path]] = None,
        rustfmt_config: Sequence[str] = DEFAULT_RUSTFMT_CONFIG,
    ):
        self.cargo = cargo
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.rustfmt_config = list(rustfmt_config)

    @property
    def name(self) -> str:
        return "cargo fmt"

    def _config_args(self) -> List[str]:
        args = []
        for option in self.rustfmt_config:
            args.extend(["--config", option])
        return args

    def check_command(self, files: Sequence[str]) -> List[str]:
        """Build the check-only command line."""
        return (
            [self.cargo, "fmt", "--check", "--", "--files-with-diff"]
            + list(files)
            + self._config_args()
        )

    def format_command(self, files: Sequence[str]) -> List[str]:
        """Build the mutating command line."""
        return [self.cargo, "fmt", "--"] + list(files) + self._config_args()

    def _run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        logger.debug(f"running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd, cwd=self.cwd, capture_output=True, text=True, check=False
            )
        except FileNotFoundError as e:
            raise FormatterNotFoundError(self.cargo) from e

    def check(self, files: Sequence[str]) -> CheckResult:
        """Check ``files`` without modifying them.

        Returns:
            CheckResult whose ``flagged_files`` lists the non-conforming files

        Raises:
            FormatterNotFoundError: If cargo cannot be started
            FormatterCrashedError: If cargo exits with neither pass nor fail
        """
        cmd = self.check_command(files)
        result = self._run(cmd)

        if result.returncode == 0:
            return CheckResult(passed=True, returncode=0, stdout=result.stdout, stderr=result.stderr)

        if result.returncode != CHECK_FAILED_RETURNCODE:
            raise FormatterCrashedError(
                f"{self.name} --check exited with status {result.returncode}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        flagged = self.parse_flagged_files(result.stdout, files)
        if not flagged and result.stderr.strip():
            # rustfmt also exits 1 when it cannot parse a file
            raise FormatterCrashedError(
                f"{self.name} --check failed without listing any staged file",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )
        if not flagged:
            # nothing we can map back; treat the whole batch as flagged
            logger.debug("check output named no staged file, flagging the whole batch")
            flagged = list(files)

        return CheckResult(
            passed=False,
            flagged_files=flagged,
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def format(self, files: Sequence[str]) -> None:
        """Rewrite ``files`` in place.

        Raises:
            FormatterNotFoundError: If cargo cannot be started
            FormatterCrashedError: If cargo exits with a non-zero status
        """
        cmd = self.format_command(files)
        result = self._run(cmd)
        if result.returncode != 0:
            raise FormatterCrashedError(
                f"{self.name} exited with status {result.returncode}",
                command=cmd,
                returncode=result.returncode,
                stderr=result.stderr,
            )

    def parse_flagged_files(self, output: str, files: Sequence[str]) -> List[str]:
        """Map the ``--files-with-diff`` listing back onto ``files``.

        rustfmt prints one path per line, absolute or relative to ``cwd``.
        Lines naming anything outside ``files`` are ignored. The result keeps
        the order of ``files``.
        """
        by_path: Dict[Path, str] = {self._resolve(name): name for name in files}
        reported = set()
        for line in output.splitlines():
            line = line.strip()
            if not line:
                continue
            staged = by_path.get(self._resolve(line))
            if staged is not None:
                reported.add(staged)
        return [name for name in files if name in reported]

    def _resolve(self, name: str) -> Path:
        path = Path(name)
        if not path.is_absolute():
            path = self.cwd / path
        return path.resolve()
