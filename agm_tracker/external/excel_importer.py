"""
Excelインポート機能
エクスポート形式のワークブックからシード状態を復元
"""

from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from ..core.logger import ProjectLogger, LogCategory
from ..core.error_handler import DataError, FileIOError
from ..core.manager import TrackingSnapshot
from ..models.base import DEFAULT_COLOR_TAG, TaskStatus, AgendaStatus
from ..models.team import Team
from ..models.task import Task
from ..models.phase import Phase
from ..models.agenda_item import AgendaItem
from ..models.tracking_log import TrackingLog
from .excel_exporter import (
    SHEET_NAMES, TEAM_COLUMNS, PHASE_COLUMNS, TIMELINE_COLUMNS,
    AGENDA_COLUMNS, LOG_COLUMNS, OWNER_TASK, OWNER_AGENDA
)


class ImportResult:
    """インポート結果クラス"""

    def __init__(self):
        self.success = False
        self.imported_counts = {
            'teams': 0,
            'phases': 0,
            'tasks': 0,
            'agenda_items': 0,
            'logs': 0
        }
        self.warnings: List[Dict[str, Any]] = []
        self.processing_time = 0.0

    def add_warning(self, sheet: str, row_num: int, message: str):
        """警告を追加"""
        self.warnings.append({
            'sheet': sheet,
            'row': row_num,
            'message': message
        })

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式で取得"""
        return {
            'success': self.success,
            'imported_counts': self.imported_counts.copy(),
            'warning_count': len(self.warnings),
            'warnings': list(self.warnings),
            'processing_time': self.processing_time
        }


def _text(value: Any) -> str:
    """セル値を文字列化（空セルは空文字）"""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.date().isoformat()
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


class ExcelImporter:
    """
    Excelインポート
    ExcelExporter が出力したワークブックを読み込む
    """

    def __init__(self):
        self.logger = ProjectLogger()
        self.last_result: Optional[ImportResult] = None

    def import_seed(self, file_path: Union[str, Path]) -> TrackingSnapshot:
        """
        ワークブックからスナップショットを復元

        Args:
            file_path: 入力ファイルパス

        Returns:
            復元されたスナップショット

        Raises:
            FileIOError: ファイルを開けない場合
            DataError: 必須シート・必須列が無い場合
        """
        start_time = datetime.now()
        result = ImportResult()
        path = Path(file_path)

        try:
            workbook = load_workbook(path, read_only=True, data_only=True)
        except (OSError, InvalidFileException, BadZipFile) as e:
            raise FileIOError(f"Excelファイルを開けません: {path}",
                              file_path=str(path), original_exception=e)

        try:
            teams = self._read_teams(self._sheet(workbook, 'teams'), result)
            phases = self._read_phases(self._sheet(workbook, 'phases'), result)
            tasks_by_phase = self._read_tasks(self._sheet(workbook, 'timeline'), result)
            agenda_items = self._read_agenda(self._sheet(workbook, 'agenda'), result)

            logs_sheet = self._sheet(workbook, 'logs', required=False)
            task_logs, agenda_logs = (
                self._read_logs(logs_sheet, result) if logs_sheet is not None else ({}, {})
            )
        finally:
            workbook.close()

        phases = tuple(
            phase.with_tasks(
                replace(task, logs=tuple(task_logs.get((phase.id, task.id), ())))
                for task in tasks_by_phase.get(phase.id, [])
            )
            for phase in phases
        )

        known_phase_ids = {phase.id for phase in phases}
        for phase_id in tasks_by_phase:
            if phase_id not in known_phase_ids:
                result.add_warning(SHEET_NAMES['timeline'], 0,
                                   f"未登録のフェーズのタスクをスキップしました: {phase_id}")

        agenda_items = tuple(
            replace(item, logs=tuple(agenda_logs.get(item.id, ())))
            for item in agenda_items
        )

        result.success = True
        result.processing_time = (datetime.now() - start_time).total_seconds()
        self.last_result = result

        self.logger.info(
            LogCategory.DATA,
            f"Excelインポート完了: {path} {result.imported_counts}",
            module="external.excel_importer",
            warning_count=len(result.warnings)
        )

        return TrackingSnapshot(teams=tuple(teams), phases=phases, agenda_items=agenda_items)

    # ==================== シート読み込み ====================

    def _sheet(self, workbook, key: str, required: bool = True) -> Optional[Worksheet]:
        name = SHEET_NAMES[key]
        if name in workbook.sheetnames:
            return workbook[name]
        if required:
            raise DataError(f"必須シートがありません: {name}", data_type="workbook")
        return None

    @staticmethod
    def _rows(sheet: Worksheet, columns: List[Tuple[str, str]], required: Tuple[str, ...] = ('id',)):
        """
        見出し行で列を特定して行データを辞書で返す

        Yields:
            (行番号, {項目キー: 値})
        """
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            return

        by_header = {label: key for key, label in columns}
        index = {by_header[_text(cell)]: col for col, cell in enumerate(header)
                 if _text(cell) in by_header}

        missing = [label for key, label in columns if key in required and key not in index]
        if missing:
            raise DataError(f"必須列がありません: {sheet.title}: {', '.join(missing)}",
                            data_type="workbook")

        for row_num, row in enumerate(rows, start=2):
            if row is None or all(cell is None for cell in row):
                continue
            yield row_num, {key: (row[col] if col < len(row) else None) for key, col in index.items()}

    def _read_teams(self, sheet: Worksheet, result: ImportResult) -> List[Team]:
        teams = []
        for row_num, data in self._rows(sheet, TEAM_COLUMNS):
            team = Team(
                id=_text(data.get('id')),
                name=_text(data.get('name')),
                color_tag=_text(data.get('colorTag')) or DEFAULT_COLOR_TAG,
                description=_optional_text(data.get('description')),
            )
            if not team.validate():
                result.add_warning(sheet.title, row_num, "; ".join(team.get_validation_errors()))
                continue
            teams.append(team)
            result.imported_counts['teams'] += 1
        return teams

    def _read_phases(self, sheet: Worksheet, result: ImportResult) -> List[Phase]:
        phases = []
        for row_num, data in self._rows(sheet, PHASE_COLUMNS):
            phase_id = self._phase_id(data.get('id'))
            if phase_id is None:
                result.add_warning(sheet.title, row_num, f"無効なフェーズID: {data.get('id')}")
                continue
            phases.append(Phase(
                id=phase_id,
                name=_text(data.get('name')),
                period=_text(data.get('period')),
                description=_text(data.get('description')),
            ))
            result.imported_counts['phases'] += 1
        return phases

    def _read_tasks(self, sheet: Worksheet, result: ImportResult) -> Dict[int, List[Task]]:
        tasks: Dict[int, List[Task]] = {}
        for row_num, data in self._rows(sheet, TIMELINE_COLUMNS, required=('phaseId', 'id')):
            phase_id = self._phase_id(data.get('phaseId'))
            if phase_id is None:
                result.add_warning(sheet.title, row_num, f"無効なフェーズID: {data.get('phaseId')}")
                continue

            progress = data.get('progressPercent')
            task = Task(
                id=_text(data.get('id')),
                title=_text(data.get('title')),
                description=_text(data.get('description')),
                start_date=_text(data.get('startDate')),
                end_date=_text(data.get('endDate')),
                team_id=_text(data.get('teamId')),
                responsible_person=_optional_text(data.get('responsiblePerson')),
                status=_text(data.get('status')) or TaskStatus.PENDING,
                is_milestone=bool(data.get('isMilestone')),
                progress_percent=int(progress) if isinstance(progress, (int, float)) else None,
            )
            if not task.validate():
                result.add_warning(sheet.title, row_num, "; ".join(task.get_validation_errors()))
                continue

            tasks.setdefault(phase_id, []).append(task)
            result.imported_counts['tasks'] += 1
        return tasks

    def _read_agenda(self, sheet: Worksheet, result: ImportResult) -> List[AgendaItem]:
        items = []
        for row_num, data in self._rows(sheet, AGENDA_COLUMNS):
            item = AgendaItem(
                id=_text(data.get('id')),
                title=_text(data.get('title')),
                responsible_team_id=_text(data.get('responsibleTeamId')),
                responsible_person=_optional_text(data.get('responsiblePerson')),
                status=_text(data.get('status')) or AgendaStatus.DRAFTING,
            )
            if not item.validate():
                result.add_warning(sheet.title, row_num, "; ".join(item.get_validation_errors()))
                continue
            items.append(item)
            result.imported_counts['agenda_items'] += 1
        return items

    def _read_logs(self, sheet: Worksheet, result: ImportResult):
        """進捗記録を所有者ごとに読み込み（シート上の順序を維持）"""
        task_logs: Dict[Tuple[int, str], List[TrackingLog]] = {}
        agenda_logs: Dict[str, List[TrackingLog]] = {}

        for row_num, data in self._rows(sheet, LOG_COLUMNS, required=('ownerType', 'ownerId')):
            log = TrackingLog(
                id=_text(data.get('id')),
                timestamp=_text(data.get('timestamp')),
                message=_text(data.get('message')),
                author=_text(data.get('author')),
            )
            owner_type = _text(data.get('ownerType'))
            owner_id = _text(data.get('ownerId'))

            if owner_type == OWNER_TASK:
                phase_id = self._phase_id(data.get('phaseId'))
                task_logs.setdefault((phase_id, owner_id), []).append(log)
            elif owner_type == OWNER_AGENDA:
                agenda_logs.setdefault(owner_id, []).append(log)
            else:
                result.add_warning(sheet.title, row_num, f"不明な所有者種別: {owner_type}")
                continue

            result.imported_counts['logs'] += 1

        return task_logs, agenda_logs

    @staticmethod
    def _phase_id(value: Any) -> Optional[int]:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def __str__(self) -> str:
        return f"ExcelImporter(last_result={self.last_result.to_dict() if self.last_result else None})"
