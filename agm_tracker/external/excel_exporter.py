"""
Excelエクスポート機能
ダッシュボード・タイムライン・議題・進捗記録をワークブックへ出力
"""

import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import xlsxwriter
from xlsxwriter.exceptions import FileCreateError

from ..core.logger import ProjectLogger, LogCategory, AuditAction
from ..core.error_handler import handle_errors, FileIOError
from ..core.manager import TrackingSnapshot
from ..core.filters import TaskFilterCriteria, filter_tasks
from ..core.metrics import dashboard_summary
from ..models.base import (
    DateInput, TaskStatus, AgendaStatus, task_status_label, agenda_status_label,
    format_thai_date, DATE_SENTINEL
)
from ..models.team import team_display_name


# シート名（インポート時も同じ名前で検索する）
SHEET_NAMES = {
    'dashboard': 'Dashboard',
    'phases': 'Phases',
    'timeline': 'Timeline',
    'agenda': 'Agenda',
    'teams': 'Teams',
    'logs': 'Logs',
}

# (項目キー, 見出し)
TEAM_COLUMNS: List[Tuple[str, str]] = [
    ('id', 'รหัสทีม'),
    ('name', 'ชื่อทีม'),
    ('description', 'รายละเอียด'),
    ('colorTag', 'สีแสดงผล'),
]

PHASE_COLUMNS: List[Tuple[str, str]] = [
    ('id', 'ระยะที่'),
    ('name', 'ชื่อระยะ'),
    ('period', 'ช่วงเวลา'),
    ('description', 'รายละเอียด'),
]

TIMELINE_COLUMNS: List[Tuple[str, str]] = [
    ('phaseId', 'ระยะที่'),
    ('id', 'รหัสงาน'),
    ('title', 'ชื่องาน'),
    ('description', 'รายละเอียด'),
    ('startDate', 'วันเริ่ม'),
    ('endDate', 'วันสิ้นสุด'),
    ('teamId', 'รหัสทีม'),
    ('teamName', 'ทีมรับผิดชอบ'),
    ('responsiblePerson', 'ผู้รับผิดชอบ'),
    ('status', 'สถานะ'),
    ('statusLabel', 'สถานะ (แสดงผล)'),
    ('isMilestone', 'Milestone'),
    ('progressPercent', 'ความคืบหน้า (%)'),
]

AGENDA_COLUMNS: List[Tuple[str, str]] = [
    ('id', 'ลำดับ'),
    ('title', 'หัวข้อ'),
    ('responsibleTeamId', 'รหัสทีม'),
    ('teamName', 'ทีมรับผิดชอบ'),
    ('responsiblePerson', 'ผู้รับผิดชอบ'),
    ('status', 'สถานะ'),
    ('statusLabel', 'สถานะ (แสดงผล)'),
]

LOG_COLUMNS: List[Tuple[str, str]] = [
    ('ownerType', 'ประเภท'),
    ('phaseId', 'ระยะที่'),
    ('ownerId', 'รหัสรายการ'),
    ('id', 'รหัสบันทึก'),
    ('timestamp', 'เวลา'),
    ('author', 'ผู้บันทึก'),
    ('message', 'ข้อความ'),
]

OWNER_TASK = "Task"
OWNER_AGENDA = "AgendaItem"


class ExportResult:
    """エクスポート結果クラス"""

    def __init__(self):
        self.success = False
        self.file_path = ""
        self.exported_counts = {
            'teams': 0,
            'phases': 0,
            'tasks': 0,
            'agenda_items': 0,
            'logs': 0
        }
        self.file_size = 0
        self.processing_time = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式で取得"""
        return {
            'success': self.success,
            'file_path': self.file_path,
            'exported_counts': self.exported_counts.copy(),
            'file_size': self.file_size,
            'processing_time': self.processing_time
        }


class ExcelStyleManager:
    """Excelスタイル管理クラス"""

    STATUS_COLORS = {
        TaskStatus.COMPLETED: ('#C6EFCE', '#006100'),
        AgendaStatus.FINALIZED: ('#C6EFCE', '#006100'),
        TaskStatus.IN_PROGRESS: ('#DDEBF7', '#1F4E78'),
        AgendaStatus.REVIEWING: ('#FFEB9C', '#9C5700'),
        TaskStatus.CRITICAL: ('#FFC7CE', '#9C0006'),
        TaskStatus.DELAYED: ('#FFC7CE', '#9C0006'),
    }

    def create_formats(self, workbook) -> Dict[str, Any]:
        """xlsxwriter用フォーマット作成"""
        formats = {}

        formats['title'] = workbook.add_format({
            'bold': True,
            'font_size': 14
        })

        formats['header'] = workbook.add_format({
            'bold': True,
            'font_color': 'white',
            'bg_color': '#4472C4',
            'border': 1,
            'align': 'center',
            'valign': 'vcenter'
        })

        formats['cell'] = workbook.add_format({
            'border': 1,
            'valign': 'top'
        })

        formats['wrap'] = workbook.add_format({
            'border': 1,
            'valign': 'top',
            'text_wrap': True
        })

        formats['critical'] = workbook.add_format({
            'bold': True,
            'font_color': '#9C0006'
        })

        for status, (bg_color, font_color) in self.STATUS_COLORS.items():
            formats[f'status_{status}'] = workbook.add_format({
                'border': 1,
                'bg_color': bg_color,
                'font_color': font_color
            })

        return formats

    @staticmethod
    def status_format(status: str, formats: Dict[str, Any]):
        return formats.get(f'status_{status}', formats['cell'])


class ExcelExporter:
    """
    Excelエクスポート
    ストアのスナップショットをレポート用ワークブックに出力する
    """

    def __init__(self):
        self.logger = ProjectLogger()
        self.style_manager = ExcelStyleManager()

        self.export_stats = {
            'total_exports': 0,
            'successful_exports': 0,
            'total_entities': 0
        }

    @handle_errors()
    def export_to_file(self, file_path: str, snapshot: TrackingSnapshot,
                       current_date: DateInput, agm_date: DateInput,
                       criteria: Optional[TaskFilterCriteria] = None,
                       critical_countdown_days: int = 14) -> ExportResult:
        """
        スナップショットをExcelファイルにエクスポート

        Args:
            file_path: 出力ファイルパス
            snapshot: 出力するスナップショット
            current_date: 基準日
            agm_date: 株主総会開催日
            criteria: タイムラインシートの絞り込み条件
            critical_countdown_days: 緊急扱いの残日数

        Returns:
            エクスポート結果

        Raises:
            FileIOError: ファイルを書き込めない場合
        """
        start_time = datetime.now()
        result = ExportResult()

        directory = os.path.dirname(os.path.abspath(file_path))
        if not os.path.isdir(directory):
            raise FileIOError(f"出力先ディレクトリが存在しません: {directory}", file_path=file_path)

        self.logger.info(
            LogCategory.DATA,
            f"Excelエクスポート開始: {file_path}",
            module="external.excel_exporter"
        )

        workbook = xlsxwriter.Workbook(file_path)
        formats = self.style_manager.create_formats(workbook)

        try:
            self._write_dashboard(workbook, formats, snapshot, current_date, agm_date,
                                  critical_countdown_days)
            self._write_teams(workbook, formats, snapshot, result)
            self._write_phases(workbook, formats, snapshot, result)
            self._write_timeline(workbook, formats, snapshot, criteria, result)
            self._write_agenda(workbook, formats, snapshot, result)
            self._write_logs(workbook, formats, snapshot, result)
        finally:
            try:
                workbook.close()
            except (OSError, FileCreateError) as e:
                raise FileIOError(f"Excelファイルを書き込めません: {file_path}",
                                  file_path=file_path, original_exception=e)

        result.file_path = file_path
        result.file_size = os.path.getsize(file_path)
        result.success = True
        result.processing_time = (datetime.now() - start_time).total_seconds()

        self.export_stats['total_exports'] += 1
        self.export_stats['successful_exports'] += 1
        self.export_stats['total_entities'] += sum(result.exported_counts.values())

        self.logger.audit(
            AuditAction.EXPORT,
            "Workbook",
            file_path,
            os.path.basename(file_path),
            f"Excelエクスポート: {result.exported_counts}"
        )
        self.logger.info(
            LogCategory.DATA,
            f"Excelエクスポート完了: size={result.file_size:,} bytes, "
            f"time={result.processing_time:.2f}s",
            module="external.excel_exporter",
            result_summary=result.to_dict()
        )

        return result

    # ==================== シート出力 ====================

    @staticmethod
    def _write_header(sheet, columns: List[Tuple[str, str]], formats: Dict[str, Any],
                      widths: List[int]) -> None:
        for col, (_, header) in enumerate(columns):
            sheet.write_string(0, col, header, formats['header'])
        for col, width in enumerate(widths):
            sheet.set_column(col, col, width)
        sheet.freeze_panes(1, 0)

    def _write_dashboard(self, workbook, formats: Dict[str, Any], snapshot: TrackingSnapshot,
                         current_date: DateInput, agm_date: DateInput,
                         critical_countdown_days: int) -> None:
        """ダッシュボードシート"""
        sheet = workbook.add_worksheet(SHEET_NAMES['dashboard'])
        sheet.set_column(0, 0, 32)
        sheet.set_column(1, 1, 24)

        summary = dashboard_summary(snapshot.phases, snapshot.agenda_items, agm_date,
                                    current_date, critical_countdown_days)
        agenda = summary['agenda']
        milestone = summary['next_milestone']

        sheet.write_string(0, 0, "สรุปภาพรวมโครงการ AGM", formats['title'])

        rows = [
            ("ข้อมูล ณ วันที่", format_thai_date(current_date)),
            ("วันประชุมใหญ่", format_thai_date(agm_date)),
            ("ระยะเวลาคงเหลือ (วัน)",
             DATE_SENTINEL if summary['days_to_agm'] is None else summary['days_to_agm']),
            ("ความคืบหน้าภาพรวม (%)", summary['overall_progress']),
            ("งานที่เสร็จสิ้น", f"{summary['completed_tasks']}/{summary['total_tasks']}"),
            ("ความพร้อมวาระการประชุม",
             f"{agenda.finalized}/{agenda.total} ({agenda.finalized_percent}%)"),
            ("จุดที่ต้องเร่งแก้ไข", summary['overdue_count']),
            ("ใกล้กำหนดส่ง", summary['upcoming_count']),
            ("Milestone ถัดไป",
             f"{milestone.id} {milestone.title} ({format_thai_date(milestone.end_date)})"
             if milestone else "-"),
        ]

        for offset, (label, value) in enumerate(rows, start=2):
            sheet.write_string(offset, 0, label, formats['cell'])
            sheet.write(offset, 1, value, formats['cell'])

        if summary['is_critical']:
            sheet.write_string(len(rows) + 3, 0, "สถานะ: วิกฤต", formats['critical'])

    def _write_teams(self, workbook, formats, snapshot: TrackingSnapshot, result: ExportResult) -> None:
        """チームシート"""
        sheet = workbook.add_worksheet(SHEET_NAMES['teams'])
        self._write_header(sheet, TEAM_COLUMNS, formats, [24, 30, 40, 30])

        for row, team in enumerate(snapshot.teams, start=1):
            values = {
                'id': team.id,
                'name': team.name,
                'description': team.description or "",
                'colorTag': team.color_tag,
            }
            for col, (key, _) in enumerate(TEAM_COLUMNS):
                sheet.write_string(row, col, values[key], formats['cell'])
            result.exported_counts['teams'] += 1

    def _write_phases(self, workbook, formats, snapshot: TrackingSnapshot, result: ExportResult) -> None:
        """フェーズシート"""
        sheet = workbook.add_worksheet(SHEET_NAMES['phases'])
        self._write_header(sheet, PHASE_COLUMNS, formats, [8, 45, 24, 50])

        for row, phase in enumerate(snapshot.phases, start=1):
            sheet.write_number(row, 0, phase.id, formats['cell'])
            sheet.write_string(row, 1, phase.name, formats['cell'])
            sheet.write_string(row, 2, phase.period, formats['cell'])
            sheet.write_string(row, 3, phase.description, formats['wrap'])
            result.exported_counts['phases'] += 1

    def _write_timeline(self, workbook, formats, snapshot: TrackingSnapshot,
                        criteria: Optional[TaskFilterCriteria], result: ExportResult) -> None:
        """タイムラインシート（絞り込み条件を適用）"""
        sheet = workbook.add_worksheet(SHEET_NAMES['timeline'])
        self._write_header(sheet, TIMELINE_COLUMNS, formats,
                           [8, 10, 36, 45, 12, 12, 24, 28, 24, 12, 16, 10, 14])

        phases = filter_tasks(snapshot.phases, criteria) if criteria else snapshot.phases

        row = 1
        for phase in phases:
            for task in phase.tasks:
                sheet.write_number(row, 0, phase.id, formats['cell'])
                sheet.write_string(row, 1, task.id, formats['cell'])
                sheet.write_string(row, 2, task.title, formats['cell'])
                sheet.write_string(row, 3, task.description, formats['wrap'])
                sheet.write_string(row, 4, task.start_date, formats['cell'])
                sheet.write_string(row, 5, task.end_date, formats['cell'])
                sheet.write_string(row, 6, task.team_id, formats['cell'])
                sheet.write_string(row, 7, team_display_name(snapshot.teams, task.team_id), formats['cell'])
                sheet.write_string(row, 8, task.responsible_person or "", formats['cell'])
                sheet.write_string(row, 9, task.status,
                                   self.style_manager.status_format(task.status, formats))
                sheet.write_string(row, 10, task_status_label(task.status), formats['cell'])
                sheet.write_boolean(row, 11, task.is_milestone, formats['cell'])
                if task.progress_percent is not None:
                    sheet.write_number(row, 12, task.progress_percent, formats['cell'])
                else:
                    sheet.write_blank(row, 12, None, formats['cell'])
                row += 1
                result.exported_counts['tasks'] += 1

    def _write_agenda(self, workbook, formats, snapshot: TrackingSnapshot, result: ExportResult) -> None:
        """議題シート"""
        sheet = workbook.add_worksheet(SHEET_NAMES['agenda'])
        self._write_header(sheet, AGENDA_COLUMNS, formats, [8, 60, 24, 28, 20, 12, 16])

        for row, item in enumerate(snapshot.agenda_items, start=1):
            sheet.write_string(row, 0, item.id, formats['cell'])
            sheet.write_string(row, 1, item.title, formats['wrap'])
            sheet.write_string(row, 2, item.responsible_team_id, formats['cell'])
            sheet.write_string(row, 3, team_display_name(snapshot.teams, item.responsible_team_id),
                               formats['cell'])
            sheet.write_string(row, 4, item.responsible_person or "", formats['cell'])
            sheet.write_string(row, 5, item.status,
                               self.style_manager.status_format(item.status, formats))
            sheet.write_string(row, 6, agenda_status_label(item.status), formats['cell'])
            result.exported_counts['agenda_items'] += 1

    def _write_logs(self, workbook, formats, snapshot: TrackingSnapshot, result: ExportResult) -> None:
        """進捗記録シート（各所有者内は新しい順）"""
        sheet = workbook.add_worksheet(SHEET_NAMES['logs'])
        self._write_header(sheet, LOG_COLUMNS, formats, [12, 8, 10, 34, 28, 12, 60])

        rows = []
        for phase in snapshot.phases:
            for task in phase.tasks:
                rows.extend((OWNER_TASK, phase.id, task.id, log) for log in task.logs)
        for item in snapshot.agenda_items:
            rows.extend((OWNER_AGENDA, None, item.id, log) for log in item.logs)

        for row, (owner_type, phase_id, owner_id, log) in enumerate(rows, start=1):
            sheet.write_string(row, 0, owner_type, formats['cell'])
            if phase_id is not None:
                sheet.write_number(row, 1, phase_id, formats['cell'])
            else:
                sheet.write_blank(row, 1, None, formats['cell'])
            sheet.write_string(row, 2, owner_id, formats['cell'])
            sheet.write_string(row, 3, log.id, formats['cell'])
            sheet.write_string(row, 4, log.timestamp, formats['cell'])
            sheet.write_string(row, 5, log.author, formats['cell'])
            sheet.write_string(row, 6, log.message, formats['wrap'])
            result.exported_counts['logs'] += 1

    def get_export_statistics(self) -> Dict[str, Any]:
        """エクスポート統計を取得"""
        return self.export_stats.copy()

    def __str__(self) -> str:
        return f"ExcelExporter(exports={self.export_stats['total_exports']})"
