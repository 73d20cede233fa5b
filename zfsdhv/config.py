"""Configuration handed to the plugin through ``DHV_*`` environment variables."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

VERSION = "1.0.0"

DEFAULT_POOL = "tank"
DEFAULT_RECORD_SIZE = "128K"
DEFAULT_ATIME = "off"
DEFAULT_COMPRESSION = "lz4"

ENV_PREFIX = "DHV_"


class ConfigError(ValueError):
    """Raised when the configuration or its parameters cannot be read."""


@dataclass
class DynamicHostVolumeParameters:
    """ZFS dataset options taken from the volume's JSON parameters."""

    pool: str = DEFAULT_POOL
    record_size: str = DEFAULT_RECORD_SIZE
    atime: str = DEFAULT_ATIME
    compression: str = DEFAULT_COMPRESSION


# JSON key -> attribute of DynamicHostVolumeParameters
_PARAMETER_KEYS = {
    "pool": "pool",
    "recordsize": "record_size",
    "atime": "atime",
    "compression": "compression",
}

# environment variable (without prefix) -> attribute of DynamicHostVolumeConfig
_ENV_KEYS = {
    "OPERATION": "operation",
    "VOLUMES_DIR": "volumes_dir",
    "VOLUME_ID": "volume_id",
    "PLUGIN_DIR": "plugin_dir",
    "NAMESPACE": "namespace",
    "VOLUME_NAME": "volume_name",
    "NODE_ID": "node_id",
    "NODE_POOL": "node_pool",
    "PARAMETERS": "parameters",
    "CAPACITY_MIN_BYTES": "capacity_min_bytes",
    "CAPACITY_MAX_BYTES": "capacity_max_bytes",
    "CREATED_PATH": "created_path",
}


def _parse_int(name: str, text: str) -> int:
    text = text.strip()
    try:
        return int(text, 0)
    except ValueError:
        try:
            return int(text, 10)
        except ValueError:
            raise ConfigError(
                f"unable to unmarshal config: cannot parse {name}={text!r} as integer"
            ) from None


@dataclass
class DynamicHostVolumeConfig:
    """Everything the host passes to the plugin for one operation."""

    operation: str = ""
    volumes_dir: str = ""
    volume_id: str = ""
    plugin_dir: str = ""
    namespace: str = ""
    volume_name: str = ""
    node_id: str = ""
    node_pool: str = ""
    parameters: str = "{}"
    capacity_min_bytes: int = -1
    capacity_max_bytes: int = 0
    created_path: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DynamicHostVolumeConfig:
        """Build a configuration from ``DHV_*`` variables; empty values are ignored."""
        env = os.environ if environ is None else environ
        int_fields = {f.name for f in fields(cls) if f.type in ("int", int)}
        values: dict[str, object] = {}
        for key, attr in _ENV_KEYS.items():
            name = ENV_PREFIX + key
            raw = env.get(name, "")
            if raw == "":
                continue
            values[attr] = _parse_int(name, raw) if attr in int_fields else raw
        return cls(**values)

    def get_params(self) -> DynamicHostVolumeParameters:
        """Return the dataset parameters, defaults overridden by the JSON parameters."""
        params = DynamicHostVolumeParameters()
        if not self.parameters:
            return params
        try:
            document = json.loads(self.parameters)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"unable to parse parameters as json: {exc}") from exc
        if not isinstance(document, dict):
            raise ConfigError(
                "unable to parse parameters as json: expected an object, "
                f"got {type(document).__name__}"
            )
        for key, value in document.items():
            attr = _PARAMETER_KEYS.get(key.lower())
            if attr is None or value is None:
                continue
            if not isinstance(value, str):
                raise ConfigError(
                    f"unable to parse parameters as json: field {key!r} must be a string"
                )
            setattr(params, attr, value)
        return params


def load_config(environ: Mapping[str, str] | None = None) -> DynamicHostVolumeConfig:
    """Read the configuration from the environment."""
    return DynamicHostVolumeConfig.from_env(environ)