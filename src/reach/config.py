# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for reach."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"reach/{__version__}"


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ProbeSettings:
    """Per-run probe settings. Read-only once the run starts."""

    timeout: int = 15
    max_redirects: int = 20
    color_enabled: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_redirects < 0:
            raise ValueError(f"max_redirects must not be negative, got {self.max_redirects}")

    @classmethod
    def from_env(cls) -> ProbeSettings:
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _int_env("REACH_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_redirects = _int_env("REACH_MAX_REDIRECTS", cls.max_redirects)
        if max_redirects < 0:
            max_redirects = cls.max_redirects
        # NO_COLOR only needs to be present, whatever its value.
        no_color = _bool_env("REACH_NO_COLOR", False) or bool(os.getenv("NO_COLOR"))
        return cls(
            timeout=timeout,
            max_redirects=max_redirects,
            color_enabled=not no_color,
            user_agent=os.getenv("REACH_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("REACH_VERIFY_SSL", cls.verify_ssl),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()
