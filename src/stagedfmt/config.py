"""Runtime configuration for the hook.

Settings come from ``STAGEDFMT_*`` environment variables and can be
overridden by command line flags. There is no configuration file.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Tuple

DEFAULT_SUFFIX = ".rs"
DEFAULT_CARGO = "cargo"
DEFAULT_LOG_LEVEL = "WARNING"

# rustfmt options passed on every invocation; each file is judged on its own
DEFAULT_RUSTFMT_CONFIG: Tuple[str, ...] = ("skip_children=true",)


def env_flag(env: Mapping[str, str], key: str, default: bool = False) -> bool:
    """Read a boolean flag from an environment mapping.

    Args:
        env: Environment mapping to read from
        key: Variable name
        default: Value used when the variable is unset or empty

    Returns:
        True for "true", "1", "yes" or "on" (case-insensitive)
    """
    value = env.get(key)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("true", "1", "yes", "on")


@dataclass(frozen=True)
class HookConfig:
    """Settings for one hook invocation."""

    suffix: str = DEFAULT_SUFFIX
    cargo: str = DEFAULT_CARGO
    check_only: bool = False
    debug: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    rustfmt_config: Tuple[str, ...] = field(default=DEFAULT_RUSTFMT_CONFIG)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "HookConfig":
        """Build a configuration from ``STAGEDFMT_*`` environment variables."""
        env = os.environ if env is None else env
        return cls(
            suffix=env.get("STAGEDFMT_SUFFIX") or DEFAULT_SUFFIX,
            cargo=env.get("STAGEDFMT_CARGO") or DEFAULT_CARGO,
            check_only=env_flag(env, "STAGEDFMT_CHECK_ONLY"),
            debug=env_flag(env, "STAGEDFMT_DEBUG"),
            log_level=(env.get("STAGEDFMT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
        )

    def with_overrides(self, **overrides: Any) -> "HookConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
