# zfsdhv

A Nomad dynamic host volume plugin that gives each volume its own ZFS dataset.
Nomad runs the plugin with one operation argument and passes the volume
details in `DHV_*` environment variables. The plugin writes its JSON answer to
standard output and its log lines to standard error.

## Installation

```
pip install .
```

The `zfs` executable must be in one of `/sbin`, `/usr/sbin`, `/bin`,
`/usr/bin`, `/usr/local/bin` or `/usr/local/sbin`. Those directories are
searched in that order.

## Operations

```
zfsdhv fingerprint
zfsdhv create
zfsdhv delete
```

- `fingerprint` prints the plugin version as compact JSON:
  `{"version":"1.0.0"}`. Nomad also runs it at startup to check the plugin.
- `create` needs `DHV_VOLUMES_DIR` and `DHV_VOLUME_ID`. It also needs
  `DHV_CAPACITY_MIN_BYTES` greater than zero and no greater than
  `DHV_CAPACITY_MAX_BYTES`. It creates the directory
  `<volumes dir>/<volume id>` and then runs `zfs create` for the dataset
  `<pool>/nomad/<namespace>/<volume id>`. The dataset's mountpoint is that
  directory. Its quota is the minimum capacity written in the largest binary
  unit that divides it exactly, for example `10G`, `512M` or `1000B`. The
  `recordsize`, `atime` and `compression` options are also passed to
  `zfs create`. The command then prints `{"path":...,"bytes":...}`, where
  `bytes` is the dataset's `avail` property.
- `delete` needs `DHV_VOLUMES_DIR` and `DHV_VOLUME_ID`. It runs
  `zfs destroy -f` on the dataset, then removes the mount directory. If the
  directory cannot be removed, it only logs a warning.

When an operation fails, or the arguments cannot be parsed, the plugin prints
`{"error":"..."}` and exits with status 1. Run without an operation, it prints
its help and exits with status 0.

## Environment

| Variable | Meaning |
| --- | --- |
| `DHV_VOLUMES_DIR` | Directory that holds the volume mounts (required) |
| `DHV_VOLUME_ID` | Volume identifier (required) |
| `DHV_NAMESPACE` | Nomad namespace, used in the dataset path |
| `DHV_CAPACITY_MIN_BYTES` | Quota in bytes (create; default `-1`) |
| `DHV_CAPACITY_MAX_BYTES` | Upper bound for the minimum (create; default `0`) |
| `DHV_PARAMETERS` | JSON object of dataset options (default `{}`) |

The plugin also reads `DHV_OPERATION`, `DHV_PLUGIN_DIR`, `DHV_VOLUME_NAME`,
`DHV_NODE_ID`, `DHV_NODE_POOL` and `DHV_CREATED_PATH` into its configuration.
Empty variables count as unset. If a capacity variable is not an integer, the
command fails with a configuration error.

`DHV_PARAMETERS` accepts these keys, matched without regard to case:

| Key | Default |
| --- | --- |
| `pool` | `tank` |
| `recordsize` | `128K` |
| `atime` | `off` |
| `compression` | `lz4` |

For example:

```json
{"pool": "data", "compression": "zstd"}
```

Other keys and `null` values are ignored. `create` and `delete` log a warning
and use all the defaults in these cases:

- the value is not valid JSON;
- it is not an object;
- a known key has a value that is not a string.

## Library use

```python
from zfsdhv.config import load_config
from zfsdhv.system import format_bytes
from zfsdhv.zfs import build_create_args

cfg = load_config({"DHV_VOLUMES_DIR": "/srv/volumes", "DHV_VOLUME_ID": "vol1"})
params = cfg.get_params()
print(params.pool, format_bytes(10 * 1024 ** 3))  # tank 10G
print(build_create_args("/srv/volumes/vol1", "tank/nomad/vol1", "10G", params))
```

The modules are:

- `zfsdhv.config`: `load_config`, `DynamicHostVolumeConfig`,
  `DynamicHostVolumeParameters` and `ConfigError`.
- `zfsdhv.system`: `find_path`, `is_executable` and `format_bytes`.
- `zfsdhv.zfs`: `build_create_args`, `create_volume`, `destroy`,
  `get_used_space`, `get_avail_space` and `ZfsError`.
- `zfsdhv.plugin`: `fingerprint`, `create`, `delete`, `PluginError` and the
  response dataclasses.
- `zfsdhv.cli`: `main` and `build_parser`.

## Tests

```
pip install .[test]
pytest
```