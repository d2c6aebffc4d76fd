"""Tests for entity models and display helpers."""

from datetime import date, datetime

from agm_tracker.models import (
    AgendaItem, Phase, Task, Team, TrackingLog, TaskStatus, AgendaStatus, UserRole,
    DATE_SENTINEL, task_status_label, agenda_status_label, author_label,
    parse_date, format_thai_date, format_thai_datetime, find_team, team_display_name,
)

from conftest import make_task


# --- Status tables ---


def test_task_status_values():
    assert TaskStatus.get_all_values() == ["Pending", "In Progress", "Completed", "Critical", "Delayed"]
    assert TaskStatus.is_valid("In Progress")
    assert not TaskStatus.is_valid("Done")


def test_agenda_status_values():
    assert AgendaStatus.get_all_values() == ["Drafting", "Reviewing", "Finalized"]


def test_status_labels_fall_back_to_raw_value():
    assert task_status_label(TaskStatus.COMPLETED) == "เสร็จสิ้น"
    assert agenda_status_label(AgendaStatus.FINALIZED) == "สมบูรณ์"
    assert task_status_label("Unknown") == "Unknown"


def test_author_label():
    assert author_label(UserRole.ADMIN) == "Admin"
    assert author_label(UserRole.STAFF) == "Staff"


# --- Dates ---


def test_parse_date_accepts_date_or_full_datetime():
    assert parse_date("2026-02-07") == date(2026, 2, 7)
    assert parse_date("2026-02-07T10:00:00") == date(2026, 2, 7)
    assert parse_date("2026-02-07T10:00:00Z") == date(2026, 2, 7)
    assert parse_date(datetime(2026, 2, 7, 8)) == date(2026, 2, 7)


def test_parse_date_invalid_returns_none():
    assert parse_date("2026-02-30") is None
    assert parse_date("") is None
    assert parse_date(None) is None
    assert parse_date("not a date") is None
    assert parse_date("2026-02-01garbage") is None
    assert parse_date("2026-02-07T25:00") is None


def test_format_thai_date_uses_buddhist_era():
    assert format_thai_date("2026-03-13") == "13/03/2569"


def test_format_thai_datetime():
    assert format_thai_datetime("2026-02-07T09:05:00") == "07/02/2569 09:05"


def test_format_invalid_date_is_sentinel():
    assert format_thai_date("garbage") == DATE_SENTINEL
    assert format_thai_datetime(None) == DATE_SENTINEL


# --- TrackingLog ---


def test_tracking_log_create():
    log = TrackingLog.create("ok", "Admin", timestamp=datetime(2026, 2, 7, 9, 0), log_id="x1")
    assert log.id == "x1"
    assert log.timestamp == "2026-02-07T09:00:00"
    assert log.author == "Admin"


def test_tracking_log_from_legacy_date_key():
    log = TrackingLog.from_dict({"id": 1, "date": "2026-01-01", "message": "m", "author": "Staff"})
    assert log.id == "1"
    assert log.timestamp == "2026-01-01"


# --- Task ---


def test_task_with_log_prepends():
    first = TrackingLog("1", "2026-02-01T00:00:00", "first", "Admin")
    second = TrackingLog("2", "2026-02-02T00:00:00", "second", "Admin")
    task = make_task().with_log(first).with_log(second)
    assert [log.id for log in task.logs] == ["2", "1"]


def test_task_validation_start_after_end():
    task = make_task(start="2026-03-01", end="2026-02-01")
    assert not task.validate()


def test_task_validation_unparseable_dates_are_accepted():
    assert make_task(start="??", end="2026-02-01").validate()


def test_task_validation_progress_and_status():
    assert not make_task(progress_percent=101).validate()
    assert not make_task(status="Done").validate()
    assert not make_task(task_id=" ").validate()


def test_task_from_legacy_keys():
    task = Task.from_dict({
        "id": "1.1", "title": "t", "startDate": "2026-01-01", "endDate": "2026-01-02",
        "team": "TEAM_A", "progress": 50,
    })
    assert task.team_id == "TEAM_A"
    assert task.progress_percent == 50
    assert task.status == TaskStatus.PENDING


def test_task_to_dict_uses_camel_case():
    data = make_task(responsible_person="Somchai", is_milestone=True).to_dict()
    assert data["teamId"] == "TEAM_A"
    assert data["isMilestone"] is True
    assert data["responsiblePerson"] == "Somchai"
    assert "progressPercent" not in data


# --- Phase ---


def test_phase_replace_and_remove():
    phase = Phase(id=1, name="P", tasks=(make_task("a"), make_task("b")))
    updated = phase.replace_task(make_task("a", status="Completed"))
    assert updated.get_task("a").status == "Completed"
    assert phase.get_task("a").status == "Pending"
    assert [t.id for t in updated.remove_task("a").tasks] == ["b"]


# --- Team ---


def test_team_create_generates_surrogate_id():
    team = Team.create("  Finance  ")
    assert team.id.startswith("TEAM_")
    assert len(team.id) == len("TEAM_") + 8
    assert team.name == "Finance"


def test_team_from_legacy_color_key():
    team = Team.from_dict({"id": "T", "name": "n", "color": "bg-red-100"})
    assert team.color_tag == "bg-red-100"


def test_team_lookup_missing_returns_none_and_raw_id():
    teams = [Team(id="T1", name="One")]
    assert find_team(teams, "T2") is None
    assert team_display_name(teams, "T2") == "T2"
    assert team_display_name(teams, "T1") == "One"


# --- AgendaItem ---


def test_agenda_item_from_legacy_team_key():
    item = AgendaItem.from_dict({"id": 3, "title": "x", "responsibleTeam": "T1"})
    assert item.id == "3"
    assert item.responsible_team_id == "T1"
    assert item.status == AgendaStatus.DRAFTING


def test_agenda_item_invalid_status():
    assert not AgendaItem(id="1", title="x", responsible_team_id="T", status="Done").validate()
