"""Thin wrappers around the ``zfs`` command."""

from __future__ import annotations

import logging
import re
import subprocess

from . import system
from .config import DynamicHostVolumeParameters

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class ZfsError(RuntimeError):
    """Raised when a ``zfs`` command cannot be found, run or understood."""


def _zfs_binary() -> str:
    try:
        return system.find_path("zfs")
    except FileNotFoundError as exc:
        raise ZfsError(f"zfs not found: {exc}") from exc


def build_create_args(
    mount: str, path: str, quota: str, params: DynamicHostVolumeParameters
) -> list[str]:
    """Return the arguments of ``zfs create`` for a dataset at ``path``."""
    args = ["create", "-o", f"mountpoint={mount}"]
    options = (
        ("quota", quota),
        ("recordsize", params.record_size),
        ("atime", params.atime),
        ("compression", params.compression),
    )
    for name, value in options:
        if value:
            args += ["-o", f"{name}={value}"]
    args.append(path)
    return args


def create_volume(
    mount: str, path: str, quota: str, params: DynamicHostVolumeParameters
) -> None:
    """Create the ZFS dataset ``path`` mounted at ``mount``."""
    args = build_create_args(mount, path, quota, params)
    zfs = _zfs_binary()
    logger.info("Creating zfs dataset with command: zfs %s", " ".join(args))
    try:
        subprocess.run([zfs, *args], stdout=subprocess.DEVNULL, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ZfsError(f"failed to create zfs dataset: {exc}") from exc


def destroy(path: str) -> None:
    """Forcibly destroy the ZFS dataset ``path``."""
    zfs = _zfs_binary()
    try:
        subprocess.run([zfs, "destroy", "-f", path], stdout=subprocess.DEVNULL, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ZfsError(f"failed to destroy zfs dataset: {exc}") from exc


def _get_property(prop: str, path: str, label: str) -> int:
    zfs = _zfs_binary()
    try:
        result = subprocess.run(
            [zfs, "get", "-Hp", "-o", "value", prop, path],
            stdout=subprocess.PIPE,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise ZfsError(f"failed to read {label} storage space: {exc}") from exc
    text = result.stdout.decode(errors="replace")
    match = _LEADING_INT.match(text)
    if match is None:
        raise ZfsError(f"failed to parse output: {text.strip()!r} is not an integer")
    return int(match.group(1))


def get_used_space(path: str) -> int:
    """Return the bytes used by the dataset ``path``."""
    return _get_property("used", path, "used")


def get_avail_space(path: str) -> int:
    """Return the bytes still available to the dataset ``path``."""
    return _get_property("avail", path, "avail")