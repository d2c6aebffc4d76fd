"""
外部連携層統合インターフェース
Excel連携機能の統合API
"""

from pathlib import Path
from typing import Optional

from ..core.logger import ProjectLogger, LogCategory
from ..core.error_handler import BusinessLogicError
from ..core.filters import TaskFilterCriteria
from ..core.manager import ProjectTrackingStore, TrackingSnapshot
from ..config.settings import SystemSettings, get_settings
from .excel_importer import ExcelImporter, ImportResult
from .excel_exporter import ExcelExporter, ExportResult, SHEET_NAMES


class ExcelManager:
    """
    Excel連携統合管理クラス
    設定に従ってエクスポート・インポートを実行する
    """

    def __init__(self, store: ProjectTrackingStore, settings: Optional[SystemSettings] = None):
        """
        Excel管理の初期化

        Args:
            store: トラッキングストア
            settings: システム設定（省略時はグローバル設定）
        """
        self.store = store
        self.settings = settings or get_settings()
        self.logger = ProjectLogger()

        self.importer = ExcelImporter()
        self.exporter = ExcelExporter()

    def export_excel(self, file_path: str = None,
                     criteria: Optional[TaskFilterCriteria] = None) -> ExportResult:
        """
        現在の状態をExcelファイルにエクスポート

        Args:
            file_path: 出力ファイルパス（省略時は設定の既定ファイル）
            criteria: タイムラインシートの絞り込み条件

        Returns:
            エクスポート結果
        """
        if not self.settings.external.excel_export_enabled:
            raise BusinessLogicError("Excelエクスポートは設定で無効になっています",
                                     entity_type="Workbook")

        target = file_path or self.settings.external.default_export_file
        project = self.settings.project

        return self.exporter.export_to_file(
            target,
            self.store.snapshot,
            current_date=project.current_date(),
            agm_date=project.agm_date,
            criteria=criteria,
            critical_countdown_days=project.critical_countdown_days
        )

    def import_excel(self, file_path: str) -> TrackingSnapshot:
        """
        Excelファイルからスナップショットを読み込み

        ストアには反映しない。呼び出し側で新しいストアを構築する。
        """
        if not self.settings.external.excel_import_enabled:
            raise BusinessLogicError("Excelインポートは設定で無効になっています",
                                     entity_type="Workbook")

        snapshot = self.importer.import_seed(file_path)
        self.logger.info(
            LogCategory.DATA,
            f"Excelインポート実行: {Path(file_path).name}",
            module="external"
        )
        return snapshot

    @property
    def last_import_result(self) -> Optional[ImportResult]:
        return self.importer.last_result


__all__ = [
    'ExcelManager',
    'ExcelImporter',
    'ImportResult',
    'ExcelExporter',
    'ExportResult',
    'SHEET_NAMES'
]
