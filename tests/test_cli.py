import json

import pytest

from zfsdhv.cli import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "DHV_VOLUMES_DIR",
        "DHV_VOLUME_ID",
        "DHV_CAPACITY_MIN_BYTES",
        "DHV_CAPACITY_MAX_BYTES",
        "DHV_PARAMETERS",
    ):
        monkeypatch.delenv(key, raising=False)


def test_parser_knows_commands():
    parser = build_parser()
    for name in ("fingerprint", "create", "delete"):
        assert parser.parse_args([name]).command == name


def test_fingerprint(capsys):
    assert main(["fingerprint"]) == 0
    assert capsys.readouterr().out == '{"version":"1.0.0"}'


def test_create_without_config_reports_error(capsys):
    assert main(["create"]) == 1
    error = json.loads(capsys.readouterr().out)["error"]
    assert error == "variable 'DHV_VOLUMES_DIR' must not be empty"


def test_delete_without_volume_id(capsys, monkeypatch, tmp_path):
    monkeypatch.setenv("DHV_VOLUMES_DIR", str(tmp_path))
    assert main(["delete"]) == 1
    error = json.loads(capsys.readouterr().out)["error"]
    assert "DHV_VOLUME_ID" in error


def test_bad_config_reports_setup_error(capsys, monkeypatch):
    monkeypatch.setenv("DHV_CAPACITY_MIN_BYTES", "many")
    assert main(["fingerprint"]) == 1
    error = json.loads(capsys.readouterr().out)["error"]
    assert error.startswith("failed to setup dynamic host volume config")


def test_unknown_command(capsys):
    assert main(["bogus"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert "bogus" in payload["error"]


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "fingerprint" in capsys.readouterr().out