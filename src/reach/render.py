# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal output: transient progress lines, per-hop status lines and error lines."""

from __future__ import annotations

import shutil
import sys
from typing import TextIO

from colorama import Back, Fore, Style

from .errors import ReachError
from .http.models import StatusClass
from .models.probe import Hop

_STATUS_COLORS: dict[StatusClass, str] = {
    StatusClass.SUCCESS: Back.LIGHTGREEN_EX + Fore.BLACK,
    StatusClass.REDIRECT: Back.LIGHTCYAN_EX + Fore.BLACK,
    StatusClass.CLIENT_ERROR: Back.LIGHTRED_EX + Fore.BLACK,
    StatusClass.SERVER_ERROR: Back.LIGHTMAGENTA_EX + Fore.BLACK,
}
_REASON_BADGE = Back.LIGHTWHITE_EX + Fore.BLACK


def _default_clear_width() -> int:
    return max(shutil.get_terminal_size((80, 24)).columns - 1, 1)


class ProgressRenderer:
    """Writes every line by first wiping the current one, so progress overwrites in place."""

    def __init__(self, color_enabled: bool = True, stream: TextIO | None = None, clear_width: int | None = None):
        self.color_enabled = color_enabled
        self.stream = stream if stream is not None else sys.stdout
        self.clear_width = clear_width if clear_width is not None else _default_clear_width()

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def clear(self) -> None:
        self._write("\r" + " " * self.clear_width + "\r")

    def progress(self, text: str) -> None:
        self.clear()
        self._write(text)

    def status(self, hop: Hop) -> None:
        self.clear()
        if not self.color_enabled:
            self._write(f"{hop.status_line} ")
            return

        color = _STATUS_COLORS.get(hop.status_class, "")
        reason = f"{_REASON_BADGE} {hop.reason_phrase} {Style.RESET_ALL}"
        suffix = f"-> {hop.location or ''}" if hop.is_redirect else ""
        self._write(f"{color} {hop.status_code} {Style.RESET_ALL}{reason} {suffix}")

    def error_line(self, name: str, detail: str) -> None:
        self.clear()
        if self.color_enabled:
            self._write(f"{Fore.LIGHTRED_EX}{name}:{Style.RESET_ALL} {detail}")
        else:
            self._write(f"{name}: {detail}")

    def error(self, error: ReachError) -> None:
        self.error_line(error.label, error.detail)

    def newline(self) -> None:
        self._write("\n")


__all__ = ["ProgressRenderer"]
