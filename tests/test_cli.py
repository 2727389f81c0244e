import json

import httpx
import pytest

from planespotter import cli, storage
from planespotter.config import ENV_KEYS
from planespotter.ingestors.opensky import OpenSkyClient

STATES = [["3c6444", "DLH9LF  ", "Germany", 1, 2, 8.5, 50.0, 1000.0, False, 100.0, 150.4, 0.0]]


@pytest.fixture
def save_path(tmp_path):
    return str(tmp_path / "data" / "save.json")


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def _patch_client(monkeypatch, status_code=200, states=STATES):
    def handler(request: httpx.Request):
        return httpx.Response(status_code, json={"time": 1, "states": states})

    def fake_client(**kwargs):
        return OpenSkyClient(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "OpenSkyClient", fake_client)


def test_init_creates_save_file(save_path, capsys):
    cli.main(["--save-path", save_path, "init"])

    assert "Created save file" in capsys.readouterr().out
    assert storage.load(save_path).registry.seen_count == 0

    cli.main(["--save-path", save_path, "init"])
    assert "already exists" in capsys.readouterr().out


def test_init_from_env(save_path, clean_env, monkeypatch):
    monkeypatch.setenv("LATITUDE", "48.0")
    monkeypatch.setenv("LONGITUDE", "2.0")
    monkeypatch.setenv("OPENSKY_USERNAME", "blah")
    monkeypatch.setenv("OPENSKY_PASSWORD", "fluff")
    monkeypatch.setenv("SPOT_DISTANCE_KM", "8")
    monkeypatch.setenv("CHECK_FREQ_SECONDS", "9")

    cli.main(["--save-path", save_path, "init", "--from-env"])

    config = storage.load(save_path).config
    assert config.position.latitude == 48.0
    assert config.api_auth.username == "blah"
    assert config.check_freq_seconds == 9


def test_set_config_then_show_json(save_path, capsys):
    cli.main(
        [
            "--save-path",
            save_path,
            "set-config",
            "--latitude",
            "51.5",
            "--longitude",
            "-0.12",
            "--username",
            "me",
            "--password",
            "secret",
        ]
    )
    assert "Saved config" in capsys.readouterr().out

    cli.main(["--save-path", save_path, "show", "--json"])
    output = json.loads(capsys.readouterr().out)

    assert output["config"]["latitude"] == 51.5
    assert output["config"]["password"] == "********"
    assert output["config"]["spot_distance_km"] == 20
    assert output["seen_count"] == 0
    assert output["callsigns"] == []


def test_set_config_rejects_invalid_position(save_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(
            [
                "--save-path",
                save_path,
                "set-config",
                "--latitude",
                "10",
                "--longitude",
                "100",
                "--username",
                "me",
                "--password",
                "secret",
            ]
        )

    assert exc_info.value.code == 1
    assert "Longitude of 100 invalid" in capsys.readouterr().err


def test_show_without_save_file_fails(save_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--save-path", save_path, "show"])

    assert exc_info.value.code == 1
    assert "No save file" in capsys.readouterr().err


def test_poll_records_new_aircraft(save_path, monkeypatch, capsys):
    _patch_client(monkeypatch)
    storage.create_if_absent(save_path)

    cli.main(["--save-path", save_path, "--notifier", "log", "poll"])

    assert "New aircraft: 1 (total seen 1)" in capsys.readouterr().out
    assert storage.load(save_path).registry.callsigns == ["DLH9LF"]

    cli.main(["--save-path", save_path, "--notifier", "log", "poll"])
    assert "New aircraft: 0 (total seen 1)" in capsys.readouterr().out


def test_poll_reports_fetch_error(save_path, monkeypatch, capsys):
    _patch_client(monkeypatch, status_code=500)
    storage.create_if_absent(save_path)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--save-path", save_path, "--notifier", "log", "poll"])

    assert exc_info.value.code == 1
    assert "Error updating planes" in capsys.readouterr().err


def test_init_from_env_leaves_existing_save_file(save_path, clean_env, monkeypatch, capsys):
    storage.create_if_absent(save_path)
    monkeypatch.setenv("LATITUDE", "40.730610")
    monkeypatch.setenv("OPENSKY_USERNAME", "")

    cli.main(["--save-path", save_path, "init", "--from-env"])

    assert "already exists" in capsys.readouterr().out
    assert storage.load(save_path).config.api_auth.username == ""
