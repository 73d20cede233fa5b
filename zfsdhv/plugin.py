"""The fingerprint, create and delete operations of the host volume plugin."""

from __future__ import annotations

import json
import logging
import os
import posixpath
import shutil
from dataclasses import asdict, dataclass

from . import zfs
from .config import (
    VERSION,
    ConfigError,
    DynamicHostVolumeConfig,
    DynamicHostVolumeParameters,
)
from .system import format_bytes

logger = logging.getLogger(__name__)


class PluginError(RuntimeError):
    """Raised when a plugin operation fails."""


@dataclass(frozen=True)
class FingerprintResponse:
    version: str

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))


@dataclass(frozen=True)
class VolumeCreateResponse:
    path: str
    bytes: int

    def to_json(self) -> str:
        return json.dumps(asdict(self), separators=(",", ":"))


def _join(*parts: str) -> str:
    present = [part for part in parts if part]
    if not present:
        return ""
    return posixpath.normpath(posixpath.join(*present))


def _params_or_defaults(cfg: DynamicHostVolumeConfig) -> DynamicHostVolumeParameters:
    try:
        return cfg.get_params()
    except ConfigError as exc:
        logger.warning("Warning: Unable to parse parameters, using defaults: %s", exc)
        return DynamicHostVolumeParameters()


def _dataset_path(params: DynamicHostVolumeParameters, cfg: DynamicHostVolumeConfig) -> str:
    return _join(params.pool, "nomad", cfg.namespace, cfg.volume_id)


def fingerprint(cfg: DynamicHostVolumeConfig) -> FingerprintResponse:
    """Print the plugin version as JSON."""
    response = FingerprintResponse(version=VERSION)
    print(response.to_json(), end="")
    return response


def create(cfg: DynamicHostVolumeConfig) -> VolumeCreateResponse:
    """Create the dataset and mount directory, then print path and free bytes."""
    if not cfg.volumes_dir:
        raise PluginError("variable 'DHV_VOLUMES_DIR' must not be empty")
    if not cfg.volume_id:
        raise PluginError("variable 'DHV_VOLUME_ID' must not be empty")
    if cfg.capacity_min_bytes <= 0:
        raise PluginError("variable 'DHV_CAPACITY_MIN_BYTES' must be greater than zero")
    if cfg.capacity_min_bytes > cfg.capacity_max_bytes:
        raise PluginError(
            "variable 'DHV_CAPACITY_MIN_BYTES' can not be greater than 'DHV_CAPACITY_MAX_BYTES'"
        )

    params = _params_or_defaults(cfg)
    quota = format_bytes(cfg.capacity_min_bytes)
    dataset = _dataset_path(params, cfg)
    mount = _join(cfg.volumes_dir, cfg.volume_id)

    try:
        os.makedirs(mount, mode=0o755, exist_ok=True)
    except OSError as exc:
        raise PluginError(f"failed to create volume directory: {exc}") from exc

    logger.info("Create ZFS dataset...")
    try:
        zfs.create_volume(mount, dataset, quota, params)
    except zfs.ZfsError as exc:
        raise PluginError(f"failed to create volume: {exc}") from exc

    try:
        avail = zfs.get_avail_space(dataset)
    except zfs.ZfsError as exc:
        raise PluginError(f"failed to get avail dataset storage space: {exc}") from exc

    response = VolumeCreateResponse(path=mount, bytes=avail)
    print(response.to_json(), end="")
    return response


def _remove_all(path: str) -> None:
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
    except FileNotFoundError:
        pass


def delete(cfg: DynamicHostVolumeConfig) -> None:
    """Destroy the dataset and remove its mount directory."""
    if not cfg.volumes_dir:
        raise PluginError(
            "variable 'DHV_VOLUMES_DIR' must not be empty when 'DHV_CREATED_PATH' is not provided"
        )
    if not cfg.volume_id:
        raise PluginError(
            "variable 'DHV_VOLUME_ID' must not be empty when 'DHV_CREATED_PATH' is not provided"
        )

    params = _params_or_defaults(cfg)
    dataset = _dataset_path(params, cfg)
    mount = _join(cfg.volumes_dir, cfg.volume_id)

    try:
        zfs.destroy(dataset)
    except zfs.ZfsError as exc:
        raise PluginError(f"failed to destroy dataset: {exc}") from exc

    try:
        _remove_all(mount)
    except OSError as exc:
        logger.warning("Warning: Failed to remove '%s': %s", mount, exc)