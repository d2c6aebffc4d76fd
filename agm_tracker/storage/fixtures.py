"""
シードデータ読み込み
JSONファイル・Excelファイル・組み込みデータから初期状態を構築
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from ..core.manager import TrackingSnapshot
from ..core.logger import ProjectLogger, LogCategory, AuditAction
from ..core.error_handler import DataError, FileIOError
from .seed_data import seed_dict


REQUIRED_KEYS = ('teams', 'phases', 'agendaItems')


def snapshot_from_dict(data: Dict[str, Any], source: str = "<dict>") -> TrackingSnapshot:
    """
    シード形式の辞書からスナップショットを構築

    Args:
        data: teams / phases / agendaItems を持つ辞書
        source: エラーメッセージ用の読み込み元

    Raises:
        DataError: 形式が不正な場合
    """
    if not isinstance(data, dict):
        raise DataError(f"シードデータのルートはオブジェクトである必要があります: {source}",
                        data_type="seed")

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise DataError(f"シードデータに必須キーがありません: {', '.join(missing)} ({source})",
                        data_type="seed")

    try:
        return TrackingSnapshot.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise DataError(f"シードデータの形式が不正です: {source}: {e}",
                        data_type="seed", original_exception=e)


def load_json_seed(file_path: Union[str, Path]) -> TrackingSnapshot:
    """JSONファイルからスナップショットを読み込み"""
    path = Path(file_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DataError(f"シードファイルのJSONが不正です: {path}: {e}",
                        data_type="seed", original_exception=e)
    except OSError as e:
        raise FileIOError(f"シードファイルを読み込めません: {path}",
                          file_path=str(path), original_exception=e)

    return snapshot_from_dict(data, str(path))


def load_seed(path: Union[str, Path, None] = None) -> TrackingSnapshot:
    """
    初期状態を読み込み

    Args:
        path: シードファイル（.json または .xlsx）。省略時は組み込みデータ

    Returns:
        初期スナップショット
    """
    logger = ProjectLogger()

    if path is None:
        snapshot = snapshot_from_dict(seed_dict(), "built-in")
        source = "built-in"
    elif Path(path).suffix.lower() == '.xlsx':
        from ..external.excel_importer import ExcelImporter
        snapshot = ExcelImporter().import_seed(path)
        source = str(path)
    else:
        snapshot = load_json_seed(path)
        source = str(path)

    logger.audit(
        AuditAction.IMPORT,
        "Seed",
        source,
        Path(source).name,
        f"Teams={len(snapshot.teams)}, Phases={len(snapshot.phases)}, "
        f"Tasks={len(snapshot.all_tasks())}, AgendaItems={len(snapshot.agenda_items)}"
    )
    logger.info(
        LogCategory.DATA,
        f"シードデータ読み込み完了: {source}",
        module="storage.fixtures"
    )
    return snapshot


def save_seed(snapshot: TrackingSnapshot, file_path: Union[str, Path]) -> Path:
    """
    スナップショットをシード形式のJSONで書き出し

    明示的なエクスポート用途のみ。ストアの状態は自動保存しない。
    """
    path = Path(file_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(snapshot.to_dict(), f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise FileIOError(f"シードファイルを書き込めません: {path}",
                          file_path=str(path), original_exception=e)

    ProjectLogger().audit(AuditAction.EXPORT, "Seed", str(path), path.name, "シードJSON書き出し")
    return path
