# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""reach CLI."""

from __future__ import annotations

import argparse
import dataclasses
import sys

import colorama

from ..config import ProbeSettings, load_probe_settings
from ..log import setup_logging
from ..runtime import Reach
from ..version import __version__

USAGE = """Usage: reach [OPTIONS] URL

Options:
  -c, --nocolor               Print output without colors
  --maxredirects=REDIRECTS    Maximum redirects to follow [default: 20]
  --timeout=SECONDS           HTTP request timeout in seconds [default: 15]
  --ignore-ssl-errors         Skip TLS certificate verification
  --help                      Display this help message
  --version                   Display version and license info
"""

VERSION_TEXT = f"""reach {__version__}
License AGPLv3+: GNU AGPL version 3 or later <https://gnu.org/licenses/agpl.html>.
This is free software: you are free to change and redistribute it.
There is NO WARRANTY, to the extent permitted by law."""


class UsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return parsed


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="reach", add_help=False, allow_abbrev=False)
    parser.add_argument("url", nargs="?", help="Target URL to probe")
    parser.add_argument("-c", "--nocolor", action="store_true", help="Print output without colors")
    parser.add_argument("--maxredirects", type=_non_negative_int, default=None, help="Maximum redirects to follow")
    parser.add_argument("--timeout", type=_positive_int, default=None, help="HTTP request timeout in seconds")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--help", action="store_true", help="Display usage instructions")
    parser.add_argument("--version", action="store_true", help="Display version and license information")
    return parser


def settings_from_args(args: argparse.Namespace, base: ProbeSettings | None = None) -> ProbeSettings:
    settings = base or load_probe_settings()
    overrides: dict[str, object] = {}
    if args.nocolor:
        overrides["color_enabled"] = False
    if args.maxredirects is not None:
        overrides["max_redirects"] = args.maxredirects
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.ignore_ssl_errors:
        overrides["verify_ssl"] = False
    return dataclasses.replace(settings, **overrides) if overrides else settings


def main(argv: list[str] | None = None) -> int:
    setup_logging()
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError:
        print(USAGE)
        return 0

    if args.help:
        print(USAGE)
        return 0
    if args.version:
        print(VERSION_TEXT)
        return 0
    if not args.url:
        print(USAGE)
        return 0

    settings = settings_from_args(args)
    if settings.color_enabled:
        colorama.just_fix_windows_console()

    # Failures are reported as text; the exit status stays 0 either way.
    with Reach(settings=settings, stream=sys.stdout) as reach:
        result = reach.probe(args.url)
        reach.report(result)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
