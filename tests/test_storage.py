import json

import pytest

from planespotter import storage
from planespotter.errors import SaveCorrupted, SaveNotFound
from planespotter.models.geo import Position
from planespotter.models.save_state import ApiAuth, Config, SaveState, SeenRegistry

DEFAULT_DOCUMENT = {
    "Position": {"Latitude": 40.73061, "Longitude": -73.935242},
    "ApiAuth": {"Username": "", "Password": ""},
    "SpotDistanceKm": 20,
    "CheckFreqSeconds": 60,
    "SeenCount": 0,
    "Callsigns": [],
}


def test_create_if_absent_writes_defaults(tmp_path):
    save_path = tmp_path / "save.json"

    assert storage.create_if_absent(save_path) is True

    assert json.loads(save_path.read_text()) == DEFAULT_DOCUMENT
    state = storage.load(save_path)
    assert state.registry.seen_count == 0
    assert state.registry.callsigns == []
    assert state.config == Config()


def test_create_if_absent_is_idempotent(tmp_path):
    save_path = tmp_path / "save.json"
    storage.create_if_absent(save_path)
    state = storage.load(save_path)
    state.registry.record_if_new("BAW123")
    storage.save(save_path, state)
    before = save_path.read_bytes()

    assert storage.create_if_absent(save_path) is False
    assert save_path.read_bytes() == before


def test_create_if_absent_seeds_bootstrap_config(tmp_path):
    save_path = tmp_path / "nested" / "save.json"
    config = Config(
        position=Position(latitude=51.5, longitude=-0.12),
        api_auth=ApiAuth(username="abc", password="def"),
        spot_distance_km=8,
        check_freq_seconds=9,
    )

    storage.create_if_absent(save_path, config=config)

    state = storage.load(save_path)
    assert state.config == config
    assert state.registry == SeenRegistry()


def test_load_missing_file(tmp_path):
    with pytest.raises(SaveNotFound):
        storage.load(tmp_path / "missing.json")


@pytest.mark.parametrize("content", ["", "{not json", "[1, 2]", '{"SeenCount": "many"}'])
def test_load_corrupted_file(tmp_path, content):
    save_path = tmp_path / "save.json"
    save_path.write_text(content)

    with pytest.raises(SaveCorrupted):
        storage.load(save_path)


def test_save_of_load_round_trips_bytes(tmp_path):
    save_path = tmp_path / "save.json"
    storage.create_if_absent(save_path)
    original = save_path.read_bytes()

    storage.save(save_path, storage.load(save_path))

    assert save_path.read_bytes() == original
    assert not (tmp_path / "save.json.tmp").exists()


def test_load_accepts_null_callsigns(tmp_path):
    save_path = tmp_path / "save.json"
    document = dict(DEFAULT_DOCUMENT, Callsigns=None)
    save_path.write_text(json.dumps(document))

    state = storage.load(save_path)

    assert state.registry.callsigns == []


def test_save_config_keeps_registry(tmp_path):
    save_path = tmp_path / "save.json"
    storage.create_if_absent(save_path)
    state = storage.load(save_path)
    state.registry.record_if_new("testcallsign")
    storage.save(save_path, state)

    new_config = Config(
        position=Position(latitude=48.0, longitude=2.0),
        api_auth=ApiAuth(username="blah", password="fluff"),
        spot_distance_km=8,
        check_freq_seconds=9,
    )
    storage.save_config(save_path, new_config)

    document = json.loads(save_path.read_text())
    assert document == {
        "Position": {"Latitude": 48.0, "Longitude": 2.0},
        "ApiAuth": {"Username": "blah", "Password": "fluff"},
        "SpotDistanceKm": 8,
        "CheckFreqSeconds": 9,
        "SeenCount": 1,
        "Callsigns": ["testcallsign"],
    }


def test_save_config_creates_missing_file(tmp_path):
    save_path = tmp_path / "save.json"

    state = storage.save_config(save_path, Config(spot_distance_km=5))

    assert state.config.spot_distance_km == 5
    assert storage.load(save_path).registry.seen_count == 0


def test_record_if_new_is_idempotent():
    registry = SeenRegistry()

    assert registry.record_if_new("BAW123") is True
    assert registry.seen_count == 1

    for _ in range(3):
        assert registry.record_if_new("BAW123") is False
    assert registry.seen_count == 1
    assert registry.callsigns == ["BAW123"]


def test_record_if_new_preserves_insertion_order():
    registry = SeenRegistry()
    for callsign in ["DLH4AB", "BAW123", "DLH4AB", "EZY99"]:
        registry.record_if_new(callsign)

    assert registry.callsigns == ["DLH4AB", "BAW123", "EZY99"]
    assert registry.seen_count == len(registry.callsigns)
    assert "EZY99" in registry


def test_save_state_document_is_flat():
    state = SaveState()

    assert list(state.to_document()) == list(DEFAULT_DOCUMENT)
    assert SaveState.from_document(state.to_document()) == state
