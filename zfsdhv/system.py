"""Helpers for locating system binaries and formatting sizes."""

from __future__ import annotations

import logging
import os
import stat

logger = logging.getLogger(__name__)

SEARCH_PATHS = [
    "/sbin",
    "/usr/sbin",
    "/bin",
    "/usr/bin",
    "/usr/local/bin",
    "/usr/local/sbin",
]

_UNITS = (
    ("T", 1024**4),
    ("G", 1024**3),
    ("M", 1024**2),
    ("K", 1024),
)


def find_path(file: str) -> str:
    """Return the full path of an executable found in the system directories."""
    for directory in SEARCH_PATHS:
        full = os.path.join(directory, file)
        logger.debug("%s", full)
        if os.path.exists(full) and is_executable(full):
            return full
    raise FileNotFoundError(f"file '{file}' not found")


def is_executable(path: str) -> bool:
    """Tell whether ``path`` is a regular file with any execute bit set."""
    try:
        info = os.stat(path)
    except OSError:
        return False
    return not stat.S_ISDIR(info.st_mode) and bool(info.st_mode & 0o111)


def format_bytes(size: int) -> str:
    """Format ``size`` in the largest binary unit that divides it exactly."""
    for suffix, unit in _UNITS:
        if size % unit == 0:
            return f"{int(size / unit)}{suffix}"
    return f"{size}B"