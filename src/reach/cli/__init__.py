# SPDX-FileCopyrightText: 2025 reach contributors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Command-line entrypoint."""
