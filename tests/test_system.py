import os

import pytest

from zfsdhv import system
from zfsdhv.system import find_path, format_bytes, is_executable

_FACTORS = {"B": 1, "K": 1024, "M": 1024**2, "G": 1024**3, "T": 1024**4}


def _parse(text):
    return int(text[:-1]) * _FACTORS[text[-1]]


def test_format_bytes_pinned_values():
    assert format_bytes(128 * 1024) == "128K"
    assert format_bytes(1) == "1B"
    assert format_bytes(3 * 1024**3) == "3G"
    assert format_bytes(5 * 1024**4) == "5T"


@pytest.mark.parametrize(
    "size", [1, 7, 1023, 1024, 1536, 1024**2, 3 * 1024**2 + 1024, 1024**3, 2 * 1024**4]
)
def test_format_bytes_round_trip(size):
    assert _parse(format_bytes(size)) == size


def test_format_bytes_picks_largest_unit():
    text = format_bytes(1024**4)
    assert text.endswith("T")
    assert format_bytes(1024**3 * 1025).endswith("G")


def test_is_executable(tmp_path):
    script = tmp_path / "tool"
    script.write_text("#!/bin/sh\n")
    assert is_executable(str(script)) is False
    script.chmod(0o755)
    assert is_executable(str(script)) is True
    assert is_executable(str(tmp_path)) is False
    assert is_executable(str(tmp_path / "missing")) is False


def test_find_path(tmp_path, monkeypatch):
    first = tmp_path / "a"
    second = tmp_path / "b"
    first.mkdir()
    second.mkdir()
    (first / "tool").write_text("plain file")
    executable = second / "tool"
    executable.write_text("#!/bin/sh\n")
    executable.chmod(0o755)
    monkeypatch.setattr(system, "SEARCH_PATHS", [str(first), str(second)])
    assert find_path("tool") == os.path.join(str(second), "tool")


def test_find_path_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(system, "SEARCH_PATHS", [str(tmp_path)])
    with pytest.raises(FileNotFoundError, match="file 'nothing' not found"):
        find_path("nothing")