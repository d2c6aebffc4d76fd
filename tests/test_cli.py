"""Tests for the interactive CLI and the entry point."""

import pytest

from agm_tracker.cli import CLIInterface, resolve_status, TASK_STATUS_ALIASES
from agm_tracker.core.error_handler import ValidationError
from agm_tracker.core.notification_manager import NotificationService
from agm_tracker.main import main

from conftest import TODAY


@pytest.fixture
def cli(store, settings):
    return CLIInterface(store, NotificationService(), settings)


def _feed(monkeypatch, answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


# --- Status parsing ---


def test_resolve_status_aliases():
    assert resolve_status("in-progress", TASK_STATUS_ALIASES) == "In Progress"
    assert resolve_status("In Progress", TASK_STATUS_ALIASES) == "In Progress"
    assert resolve_status("DONE", TASK_STATUS_ALIASES) == "Completed"


def test_resolve_status_unknown_raises():
    with pytest.raises(ValidationError):
        resolve_status("finished", TASK_STATUS_ALIASES)


# --- Views ---


def test_dashboard(cli, capsys):
    cli._execute_command("dashboard")
    out = capsys.readouterr().out
    assert "34 วัน" in out
    assert "13/03/2569" in out
    assert "0/32" in out


def test_timeline_filtered_by_team(cli, capsys):
    cli._execute_command("t team=FINANCE")
    out = capsys.readouterr().out
    assert "[2.1]" in out
    assert "[1.1]" not in out


def test_timeline_no_match(cli, capsys):
    cli._execute_command("timeline status=delayed")
    assert "ไม่พบงานตามเงื่อนไข" in capsys.readouterr().out


def test_timeline_bad_filter_raises(cli):
    with pytest.raises(ValidationError):
        cli._execute_command("timeline team")


def test_notifications(cli, capsys):
    cli._execute_command("n")
    out = capsys.readouterr().out
    assert "เกินกำหนด: 1.1" in out
    assert len(cli.notification_service.notifications) == 8


def test_notifications_all_on_track(cli, capsys):
    cli._execute_command("today 2025-10-01")
    cli._execute_command("notifications")
    assert "เยี่ยมมาก" in capsys.readouterr().out


def test_teams_shows_dangling_after_delete(cli, capsys):
    cli._execute_command("delete-team VENDOR")
    cli._execute_command("teams")
    out = capsys.readouterr().out
    assert "VENDOR: (ไม่พบทีม)" in out


# --- Mutations ---


def test_task_status_change(cli, store):
    cli._execute_command('task-status 2 2.1 "in progress"')
    assert store.get_task(2, "2.1").status == "In Progress"


def test_task_status_unknown_task(cli, capsys):
    cli._execute_command("task-status 2 9.9 completed")
    assert "ไม่พบงาน" in capsys.readouterr().out


def test_agenda_status_change(cli, store):
    cli._execute_command("agenda-status 3 finalized")
    assert store.get_agenda_item("3").status == "Finalized"


def test_log_task_keeps_message_case(cli, store):
    cli._execute_command("log-task 3 3.2a Proof OK from Vendor")
    log = store.get_task(3, "3.2a").logs[0]
    assert log.message == "Proof OK from Vendor"
    assert log.author == "Admin"


def test_log_agenda_as_staff(cli, store):
    cli._execute_command("role staff")
    cli._execute_command("log-agenda 2 ส่งร่างแล้ว")
    assert store.get_agenda_item("2").logs[0].author == "Staff"


def test_add_and_delete_task(cli, store, monkeypatch):
    _feed(monkeypatch, ["5.2", "สรุปผลการประชุม", "", "2026-03-14", "2026-03-20", "COMMITTEE_BOOK", "", "n"])
    cli._execute_command("add-task 5")
    assert store.get_task(5, "5.2").title == "สรุปผลการประชุม"
    assert store.get_task(5, "5.2").responsible_person is None

    cli._execute_command("delete-task 5 5.2")
    assert store.get_task(5, "5.2") is None


def test_add_agenda_prepends(cli, store, monkeypatch):
    _feed(monkeypatch, ["33", "วาระเพิ่มเติม", "FINANCE", "บัญชี"])
    cli._execute_command("add-agenda")
    assert store.agenda_items[0].id == "33"


def test_add_team(cli, store, monkeypatch):
    _feed(monkeypatch, ["ฝ่ายประชาสัมพันธ์", ""])
    cli._execute_command("add-team")
    assert store.teams[-1].name == "ฝ่ายประชาสัมพันธ์"
    assert store.teams[-1].id.startswith("TEAM_")


def test_edit_task_keeps_blank_fields(cli, store, monkeypatch):
    before = store.get_task(1, "1.1")
    # title, description, start, end, team, person, progress
    _feed(monkeypatch, ["", "", "", "2026-02-15", "", "", "60"])
    cli._execute_command("edit-task 1 1.1")

    task = store.get_task(1, "1.1")
    assert task.title == before.title
    assert task.start_date == before.start_date
    assert task.end_date == "2026-02-15"
    assert task.progress_percent == 60
    assert task.logs == before.logs


def test_edit_task_progress_out_of_range_raises(cli, store, monkeypatch):
    before = store.get_task(1, "1.1")
    _feed(monkeypatch, ["", "", "", "", "", "", "150"])
    with pytest.raises(ValidationError):
        cli._execute_command("edit-task 1 1.1")
    assert store.get_task(1, "1.1") is before


def test_edit_task_unknown(cli, capsys):
    cli._execute_command("edit-task 1 9.9")
    assert "ไม่พบงาน" in capsys.readouterr().out


def test_edit_agenda_item(cli, store, monkeypatch):
    _feed(monkeypatch, ["หัวข้อใหม่", "FINANCE", ""])
    cli._execute_command("edit-agenda 1")
    item = store.get_agenda_item("1")
    assert item.title == "หัวข้อใหม่"
    assert item.responsible_team_id == "FINANCE"
    assert item.responsible_person == "เลขานุการ"


def test_edit_team(cli, store, monkeypatch):
    _feed(monkeypatch, ["ฝ่ายการเงิน", "bg-green-500", ""])
    cli._execute_command("edit-team FINANCE")
    team = store.get_team("FINANCE")
    assert team.name == "ฝ่ายการเงิน"
    assert team.color_tag == "bg-green-500"


def test_phase_id_must_be_numeric(cli):
    with pytest.raises(ValidationError):
        cli._execute_command("delete-task one 1.1")


# --- Session ---


def test_today_command(cli, capsys):
    cli._execute_command("today 2026-03-01")
    assert cli.current_date.isoformat() == "2026-03-01"
    cli._execute_command("today tomorrow")
    assert "รูปแบบวันที่ไม่ถูกต้อง" in capsys.readouterr().out
    assert cli.current_date.isoformat() == "2026-03-01"


def test_role_invalid(cli, store, capsys):
    cli._execute_command("role root")
    assert store.role == "admin"


def test_iso_date_display(cli, settings, capsys):
    settings.ui.date_display = "iso"
    cli._execute_command("today")
    assert TODAY.isoformat() in capsys.readouterr().out


def test_export(cli, tmp_path, capsys):
    cli._execute_command(f"export {tmp_path / 'out.xlsx'}")
    assert (tmp_path / "out.xlsx").exists()


def test_audit_view(cli, capsys):
    cli._execute_command("agenda-status 3 reviewing")
    cli._execute_command("audit 1")
    assert "UPDATE AgendaItem 3" in capsys.readouterr().out


def test_unknown_command(cli, capsys):
    cli._execute_command("launch")
    assert "ไม่รู้จักคำสั่ง" in capsys.readouterr().out


def test_run_loop_reports_errors_and_exits(cli, monkeypatch, capsys):
    _feed(monkeypatch, ["task-status 2 2.1 bogus", "dashboard", "q"])
    assert cli.run() == 0
    out = capsys.readouterr().out
    assert "ข้อผิดพลาด" in out
    assert cli.command_history == ["task-status 2 2.1 bogus", "dashboard", "q"]


def test_run_loop_ends_on_eof(cli, monkeypatch):
    def eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", eof)
    assert cli.run() == 0


# --- Entry point ---


def test_main_summary(capsys):
    assert main(["--summary"]) == 0
    out = capsys.readouterr().out
    assert "ภาพรวมโครงการ" in out
    assert "ศูนย์แจ้งเตือน" in out


def test_main_export(tmp_path):
    target = tmp_path / "report.xlsx"
    assert main(["--export", str(target), "--today", "2026-02-10"]) == 0
    assert target.exists()


def test_main_invalid_today(capsys):
    assert main(["--today", "someday", "--summary"]) == 1


def test_main_missing_seed(tmp_path, capsys):
    assert main(["--seed", str(tmp_path / "missing.json"), "--summary"]) == 1
