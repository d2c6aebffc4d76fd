"""Tests for seed loading."""

import json

import pytest

from agm_tracker.core.error_handler import DataError, FileIOError
from agm_tracker.core.logger import AuditAction, ProjectLogger
from agm_tracker.storage import load_json_seed, load_seed, save_seed, seed_dict, snapshot_from_dict


def test_builtin_seed(seed_snapshot):
    assert [t.id for t in seed_snapshot.teams][:2] == ["COMMITTEE_BOOK", "COMMITTEE_PROCUREMENT"]
    assert [p.id for p in seed_snapshot.phases] == [1, 2, 3, 4, 5]
    assert [t.id for t in seed_snapshot.phases[2].tasks] == ["3.1", "3.2a", "3.2b"]
    assert len(seed_snapshot.agenda_items) == 32
    assert all(item.status == "Drafting" for item in seed_snapshot.agenda_items)


def test_seed_dict_returns_copies():
    data = seed_dict()
    data["phases"][0]["tasks"][0]["status"] = "Completed"
    assert seed_dict()["phases"][0]["tasks"][0]["status"] == "Pending"


def test_load_seed_writes_import_audit():
    load_seed()
    entry = ProjectLogger().get_audit_logs(action=AuditAction.IMPORT, limit=1)[0]
    assert entry.entity_id == "built-in"


def test_json_round_trip(tmp_path, seed_snapshot):
    path = save_seed(seed_snapshot, tmp_path / "seed.json")
    assert load_seed(path) == seed_snapshot


def test_json_with_legacy_keys(tmp_path):
    path = tmp_path / "legacy.json"
    path.write_text(json.dumps({
        "teams": [{"id": "T", "name": "Team", "color": "bg-red-100"}],
        "phases": [{"id": "1", "name": "P", "tasks": [
            {"id": "1.1", "title": "t", "startDate": "2026-01-01", "endDate": "2026-01-02",
             "team": "T", "progress": 10, "logs": [{"id": 1, "date": "2026-01-01",
                                                     "message": "m", "author": "Admin"}]},
        ]}],
        "agendaItems": [{"id": 1, "title": "a", "responsibleTeam": "T"}],
    }), encoding="utf-8")

    snapshot = load_json_seed(path)

    task = snapshot.phases[0].tasks[0]
    assert snapshot.phases[0].id == 1
    assert task.team_id == "T"
    assert task.logs[0].timestamp == "2026-01-01"
    assert snapshot.agenda_items[0].responsible_team_id == "T"


def test_missing_keys_raise_data_error():
    with pytest.raises(DataError):
        snapshot_from_dict({"teams": []})


def test_non_object_root_raises_data_error():
    with pytest.raises(DataError):
        snapshot_from_dict([])


def test_bad_entity_raises_data_error():
    with pytest.raises(DataError):
        snapshot_from_dict({"teams": [{"name": "no id"}], "phases": [], "agendaItems": []})


def test_invalid_json_raises_data_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(DataError):
        load_json_seed(path)


def test_missing_file_raises_file_io_error(tmp_path):
    with pytest.raises(FileIOError):
        load_json_seed(tmp_path / "missing.json")
