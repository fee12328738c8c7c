# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for reach."""

from __future__ import annotations

import logging
import os


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use.

    Log records go to stderr so they never interleave with the progress line on stdout.
    """
    effective_level = (level or os.getenv("REACH_LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["setup_logging"]
