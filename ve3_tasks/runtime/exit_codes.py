"""Shared exit codes for the task runner."""

from __future__ import annotations

# SPDX-License-Identifier: MIT

EXIT_CODES: dict[str, int] = {
    "success": 0,
    "internal_error": 1,
    "missing_resource": 66,
    "config_error": 78,
    "command_not_found": 127,
    "interrupted": 130,
}


def normalise_returncode(returncode: int) -> int:
    """Map ``subprocess`` signal codes (negative) onto the shell convention."""

    if returncode < 0:
        return 128 + (-returncode)
    return returncode
