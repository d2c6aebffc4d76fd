"""Tests for Excel export and import."""

import pytest
from openpyxl import Workbook, load_workbook

from agm_tracker.core.error_handler import BusinessLogicError, DataError, FileIOError
from agm_tracker.core.filters import TaskFilterCriteria
from agm_tracker.core.logger import AuditAction, ProjectLogger
from agm_tracker.external import SHEET_NAMES, ExcelExporter, ExcelImporter, ExcelManager
from agm_tracker.storage import load_seed

from conftest import TODAY


AGM_DATE = "2026-03-13"


@pytest.fixture
def tracked_store(store):
    store.set_task_status(2, "2.1", "Completed")
    store.append_task_log(2, "2.1", "ปิดบัญชีแล้ว", "Admin")
    store.append_task_log(2, "2.1", "ส่งผู้สอบบัญชี", "Staff")
    store.set_agenda_status("1", "Finalized")
    store.append_agenda_log("1", "ได้รับต้นฉบับ", "Staff")
    return store


def _export(tmp_path, snapshot, **kwargs):
    path = tmp_path / "report.xlsx"
    result = ExcelExporter().export_to_file(str(path), snapshot, TODAY, AGM_DATE, **kwargs)
    return path, result


# --- Export ---


def test_export_writes_all_sheets(tmp_path, tracked_store):
    path, result = _export(tmp_path, tracked_store.snapshot)

    assert result.success
    assert result.exported_counts["tasks"] == 13
    assert result.exported_counts["agenda_items"] == 32
    assert result.exported_counts["logs"] == 3

    workbook = load_workbook(path)
    assert workbook.sheetnames == [
        SHEET_NAMES[key] for key in ("dashboard", "teams", "phases", "timeline", "agenda", "logs")
    ]


def test_export_dashboard_values(tmp_path, tracked_store):
    path, _ = _export(tmp_path, tracked_store.snapshot)

    sheet = load_workbook(path)[SHEET_NAMES["dashboard"]]
    values = {sheet.cell(row=r, column=1).value: sheet.cell(row=r, column=2).value
              for r in range(3, 12)}
    assert values["ระยะเวลาคงเหลือ (วัน)"] == 34
    assert values["ความคืบหน้าภาพรวม (%)"] == 8
    assert values["ข้อมูล ณ วันที่"] == "07/02/2569"


def test_export_ids_are_text(tmp_path, tracked_store):
    path, _ = _export(tmp_path, tracked_store.snapshot)

    agenda = load_workbook(path)[SHEET_NAMES["agenda"]]
    assert agenda.cell(row=2, column=1).value == "1"


def test_export_filtered_timeline(tmp_path, tracked_store):
    criteria = TaskFilterCriteria(team_id="FINANCE")
    path, result = _export(tmp_path, tracked_store.snapshot, criteria=criteria)

    assert result.exported_counts["tasks"] == 4
    timeline = load_workbook(path)[SHEET_NAMES["timeline"]]
    assert [row[1] for row in timeline.iter_rows(min_row=2, values_only=True)] == ["1.3", "2.1", "2.2", "2.4"]


def test_export_missing_directory_raises(tmp_path, seed_snapshot):
    with pytest.raises(FileIOError):
        ExcelExporter().export_to_file(str(tmp_path / "nope" / "r.xlsx"), seed_snapshot, TODAY, AGM_DATE)


def test_export_writes_audit_entry(tmp_path, seed_snapshot):
    _export(tmp_path, seed_snapshot)
    entry = ProjectLogger().get_audit_logs(action=AuditAction.EXPORT, limit=1)[0]
    assert entry.entity_name == "report.xlsx"


# --- Import ---


def test_round_trip(tmp_path, tracked_store):
    path, _ = _export(tmp_path, tracked_store.snapshot)

    snapshot = ExcelImporter().import_seed(path)

    assert snapshot == tracked_store.snapshot


def test_round_trip_keeps_log_order(tmp_path, tracked_store):
    path, _ = _export(tmp_path, tracked_store.snapshot)

    task = ExcelImporter().import_seed(path).phases[1].get_task("2.1")

    assert [log.message for log in task.logs] == ["ส่งผู้สอบบัญชี", "ปิดบัญชีแล้ว"]


def test_load_seed_from_xlsx(tmp_path, seed_snapshot):
    path, _ = _export(tmp_path, seed_snapshot)
    assert load_seed(path) == seed_snapshot


def test_invalid_row_becomes_warning(tmp_path, seed_snapshot):
    path, _ = _export(tmp_path, seed_snapshot)
    workbook = load_workbook(path)
    workbook[SHEET_NAMES["timeline"]].cell(row=2, column=10).value = "Done"
    workbook.save(path)

    importer = ExcelImporter()
    snapshot = importer.import_seed(path)

    assert len(snapshot.all_tasks()) == 12
    assert importer.last_result.imported_counts["tasks"] == 12
    assert importer.last_result.warnings[0]["sheet"] == SHEET_NAMES["timeline"]
    assert importer.last_result.warnings[0]["row"] == 2


def test_missing_sheet_raises(tmp_path):
    path = tmp_path / "empty.xlsx"
    workbook = Workbook()
    workbook.active.title = SHEET_NAMES["teams"]
    workbook.save(path)

    with pytest.raises(DataError):
        ExcelImporter().import_seed(path)


def test_missing_required_column_raises(tmp_path, seed_snapshot):
    path, _ = _export(tmp_path, seed_snapshot)
    workbook = load_workbook(path)
    workbook[SHEET_NAMES["timeline"]].cell(row=1, column=2).value = "something else"
    workbook.save(path)

    with pytest.raises(DataError):
        ExcelImporter().import_seed(path)


def test_unreadable_file_raises(tmp_path):
    path = tmp_path / "not_excel.xlsx"
    path.write_text("plain text", encoding="utf-8")

    with pytest.raises(FileIOError):
        ExcelImporter().import_seed(path)


# --- Manager ---


def test_manager_uses_settings(tmp_path, store, settings):
    settings.external.default_export_file = str(tmp_path / "default.xlsx")
    result = ExcelManager(store, settings).export_excel()
    assert result.file_path.endswith("default.xlsx")


def test_manager_export_disabled(store, settings):
    settings.external.excel_export_enabled = False
    with pytest.raises(BusinessLogicError):
        ExcelManager(store, settings).export_excel("x.xlsx")


def test_manager_import_disabled(store, settings):
    settings.external.excel_import_enabled = False
    with pytest.raises(BusinessLogicError):
        ExcelManager(store, settings).import_excel("x.xlsx")
