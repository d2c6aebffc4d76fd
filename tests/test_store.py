"""Tests for the tracking store mutations."""

from collections import Counter
from dataclasses import replace

import pytest

from agm_tracker.core.error_handler import PermissionDeniedError, ValidationError
from agm_tracker.core.logger import AuditAction, LogCategory, LogLevel, ProjectLogger
from agm_tracker.core.manager import ProjectTrackingStore
from agm_tracker.models import AgendaItem, Team, team_display_name

from conftest import FIXED_NOW, make_task


# --- Snapshot ---


def test_seed_counts(store):
    stats = store.get_statistics()
    assert stats["teams"] == 5
    assert stats["phases"] == 5
    assert stats["tasks"] == 13
    assert stats["agenda_items"] == 32


def test_mutation_does_not_change_old_snapshot(small_store):
    before = small_store.snapshot
    small_store.set_task_status(1, "1.1", "Completed")
    assert before.phases[0].tasks[0].status == "Pending"
    assert small_store.get_task(1, "1.1").status == "Completed"


def test_snapshot_dict_round_trip(small_store):
    data = small_store.snapshot.to_dict()
    assert set(data) == {"teams", "phases", "agendaItems"}
    assert type(small_store.snapshot).from_dict(data) == small_store.snapshot


# --- Teams ---


def test_add_team_appends(small_store):
    assert small_store.add_team(Team(id="TEAM_C", name="Team C"))
    assert [t.id for t in small_store.teams] == ["TEAM_A", "TEAM_B", "TEAM_C"]


def test_add_team_duplicate_id_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.add_team(Team(id="TEAM_A", name="Again"))


def test_add_team_empty_id_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.add_team(Team(id="", name="Nameless"))


def test_update_team(small_store):
    assert small_store.update_team(Team(id="TEAM_A", name="Renamed"))
    assert small_store.get_team("TEAM_A").name == "Renamed"


def test_delete_team_leaves_dangling_references(small_store):
    assert small_store.delete_team("TEAM_A")
    task = small_store.get_task(1, "1.1")
    assert task.team_id == "TEAM_A"
    assert small_store.get_team(task.team_id) is None
    assert team_display_name(small_store.teams, task.team_id) == "TEAM_A"


def test_delete_unknown_team_is_noop(small_store):
    before = small_store.snapshot
    assert small_store.delete_team("NOPE") is False
    assert small_store.snapshot is before


def test_update_unknown_team_is_noop(small_store):
    before = small_store.snapshot
    assert small_store.update_team(Team(id="NOPE", name="Ghost")) is False
    assert small_store.snapshot is before


# --- Agenda items ---


def test_add_agenda_item_prepends(small_store):
    item = AgendaItem(id="C", title="New", responsible_team_id="TEAM_A")
    assert small_store.add_agenda_item(item)
    assert [a.id for a in small_store.agenda_items] == ["C", "A", "B"]


def test_update_agenda_item_keeps_position(small_store):
    item = replace(small_store.get_agenda_item("B"), status="Reviewing")
    assert small_store.update_agenda_item(item)
    assert [a.id for a in small_store.agenda_items] == ["A", "B"]
    assert small_store.get_agenda_item("B").status == "Reviewing"


def test_delete_agenda_item(small_store):
    assert small_store.delete_agenda_item("A")
    assert [a.id for a in small_store.agenda_items] == ["B"]


def test_append_agenda_log(small_store):
    assert small_store.append_agenda_log("A", "drafted", "Staff")
    item = small_store.get_agenda_item("A")
    assert item.logs[0].message == "drafted"
    assert item.logs[0].author == "Staff"
    assert item.logs[0].timestamp == FIXED_NOW.isoformat()
    assert item.title == "Agenda A"


def test_append_agenda_log_unknown_item(small_store):
    assert small_store.append_agenda_log("Z", "x", "Admin") is False


def test_update_unknown_agenda_item_is_noop(small_store):
    before = small_store.snapshot
    item = AgendaItem(id="Z", title="Missing", responsible_team_id="TEAM_A")
    assert small_store.update_agenda_item(item) is False
    assert small_store.snapshot is before


def test_set_agenda_status_invalid_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.set_agenda_status("A", "Approved")


# --- Tasks ---


def test_add_task_appends_to_phase(small_store):
    assert small_store.add_task(2, make_task("2.2"))
    assert [t.id for t in small_store.get_phase(2).tasks] == ["2.1", "2.2"]


def test_add_task_unknown_phase(small_store):
    assert small_store.add_task(99, make_task("x")) is False


def test_add_invalid_task_to_unknown_phase_is_noop(small_store):
    task = make_task("x", start="2026-03-01", end="2026-02-01")
    assert small_store.add_task(99, task) is False


def test_add_task_duplicate_in_phase_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.add_task(1, make_task("1.1"))


def test_add_task_start_after_end_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.add_task(1, make_task("1.9", start="2026-03-01", end="2026-02-01"))


def test_add_then_delete_task_round_trip(small_store):
    before = Counter(small_store.get_phase(1).tasks)
    small_store.add_task(1, make_task("1.9"))
    small_store.delete_task(1, "1.9")
    assert Counter(small_store.get_phase(1).tasks) == before


def test_update_task(small_store):
    task = replace(small_store.get_task(1, "1.2"), title="Renamed", progress_percent=50)
    assert small_store.update_task(1, task)
    assert small_store.get_task(1, "1.2").title == "Renamed"


def test_update_task_wrong_phase_is_noop(small_store):
    task = small_store.get_task(1, "1.2")
    assert small_store.update_task(2, task) is False


def test_update_unknown_task_with_invalid_dates_is_noop(small_store):
    task = make_task("9.9", start="2026-03-01", end="2026-02-01")
    assert small_store.update_task(1, task) is False


def test_delete_unknown_task_is_noop(small_store):
    before = small_store.snapshot
    assert small_store.delete_task(1, "9.9") is False
    assert small_store.delete_task(99, "1.1") is False
    assert small_store.snapshot is before


def test_append_task_log_stale_ids_are_noop(small_store):
    before = small_store.snapshot
    assert small_store.append_task_log(2, "1.1", "wrong phase", "Admin") is False
    assert small_store.append_task_log(1, "9.9", "wrong task", "Admin") is False
    assert small_store.snapshot is before


def test_append_task_log_is_monotonic(small_store):
    small_store.append_task_log(1, "1.1", "first", "Admin")
    before = len(small_store.get_task(1, "1.1").logs)

    assert small_store.append_task_log(1, "1.1", "second", "Staff")

    logs = small_store.get_task(1, "1.1").logs
    assert len(logs) == before + 1
    assert logs[0].message == "second"
    assert logs[0].id != logs[1].id


def test_append_task_log_leaves_other_tasks(small_store):
    other = small_store.get_task(1, "1.2")
    small_store.append_task_log(1, "1.1", "note", "Admin")
    assert small_store.get_task(1, "1.2") is other


def test_find_task(small_store):
    assert small_store.find_task("2.1")[0] == 2
    assert small_store.find_task("nope") is None


# --- Roles ---


def test_author_follows_role(small_store):
    small_store.set_role("staff")
    assert small_store.author == "Staff"


def test_invalid_role_raises(small_store):
    with pytest.raises(ValidationError):
        small_store.set_role("root")


def test_staff_is_cosmetic_by_default(small_store):
    small_store.set_role("staff")
    assert small_store.delete_agenda_item("A")


def test_enforced_staff_cannot_mutate(small_store):
    store = ProjectTrackingStore(small_store.snapshot, role="staff", enforce_role_permissions=True)
    with pytest.raises(PermissionDeniedError):
        store.delete_task(1, "1.1")
    with pytest.raises(PermissionDeniedError):
        store.add_team(Team(id="X", name="X"))
    assert store.append_task_log(1, "1.1", "still allowed", store.author)


# --- Logging ---


def test_mutations_write_audit_entries(small_store):
    small_store.add_task(2, make_task("2.2"))
    small_store.append_task_log(2, "2.2", "note", "Admin")
    small_store.delete_task(2, "2.2")

    actions = [e.action for e in ProjectLogger().get_audit_logs(entity_type="Task")]
    assert actions == [AuditAction.DELETE, AuditAction.APPEND_LOG, AuditAction.CREATE]


def test_update_audit_has_before_and_after(small_store):
    small_store.set_task_status(1, "1.1", "In Progress")
    entry = ProjectLogger().get_audit_logs(action=AuditAction.UPDATE, entity_id="1.1")[0]
    assert entry.before_data["status"] == "Pending"
    assert entry.after_data["status"] == "In Progress"


def test_stale_id_logs_warning(small_store):
    small_store.delete_task(1, "missing")
    warnings = ProjectLogger().get_logs(level=LogLevel.WARNING, category=LogCategory.DATA)
    assert warnings
    assert warnings[0].metadata["entity_id"] == "1/missing"


def test_audit_user_is_role_label(small_store):
    small_store.set_role("staff")
    small_store.append_agenda_log("A", "x", small_store.author)
    assert ProjectLogger().get_audit_logs(limit=1)[0].user == "Staff"
