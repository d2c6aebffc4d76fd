"""
基底定義
ステータス定義・日付ヘルパー・表示ラベル表
"""

from datetime import date, datetime
from typing import Any, Dict, Optional, Union


DateInput = Union[str, date, datetime, None]

# 日付を表示できない場合の表示値
DATE_SENTINEL = "-"

# 仏暦への変換オフセット
BUDDHIST_ERA_OFFSET = 543


class StatusEnum:
    """ステータス管理用の基底クラス"""

    @classmethod
    def get_all_values(cls) -> list[str]:
        """全ステータス値を取得"""
        return [value for key, value in cls.__dict__.items()
                if not key.startswith('_') and not callable(value)
                and not isinstance(value, (classmethod, staticmethod))]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """ステータス値の妥当性チェック"""
        return value in cls.get_all_values()


class TaskStatus(StatusEnum):
    """タスクステータス定義"""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CRITICAL = "Critical"
    DELAYED = "Delayed"


class AgendaStatus(StatusEnum):
    """議題ステータス定義"""
    DRAFTING = "Drafting"
    REVIEWING = "Reviewing"
    FINALIZED = "Finalized"


class UserRole(StatusEnum):
    """利用者ロール定義（表示上のラベルのみ）"""
    ADMIN = "admin"
    STAFF = "staff"


# 画面表示用のタイ語ラベル
TASK_STATUS_LABELS: Dict[str, str] = {
    TaskStatus.PENDING: "รอดำเนินการ",
    TaskStatus.IN_PROGRESS: "กำลังดำเนินการ",
    TaskStatus.COMPLETED: "เสร็จสิ้น",
    TaskStatus.CRITICAL: "วิกฤต/เร่งด่วน",
    TaskStatus.DELAYED: "ล่าช้า",
}

AGENDA_STATUS_LABELS: Dict[str, str] = {
    AgendaStatus.DRAFTING: "กำลังร่าง",
    AgendaStatus.REVIEWING: "รอตรวจสอบ",
    AgendaStatus.FINALIZED: "สมบูรณ์",
}

ROLE_AUTHOR_LABELS: Dict[str, str] = {
    UserRole.ADMIN: "Admin",
    UserRole.STAFF: "Staff",
}

DEFAULT_COLOR_TAG = "bg-slate-100 text-slate-700"


def task_status_label(status: str) -> str:
    """タスクステータスの表示ラベルを取得（未知の値はそのまま）"""
    return TASK_STATUS_LABELS.get(status, status)


def agenda_status_label(status: str) -> str:
    """議題ステータスの表示ラベルを取得（未知の値はそのまま）"""
    return AGENDA_STATUS_LABELS.get(status, status)


def author_label(role: str) -> str:
    """ロールから記録者ラベルを取得"""
    return ROLE_AUTHOR_LABELS.get(role, role)


def parse_date(value: DateInput) -> Optional[date]:
    """
    暦日を解析

    Args:
        value: YYYY-MM-DD 文字列・date・datetime

    Returns:
        解析結果（解析できない場合はNone）
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        # 日付以外の接尾辞は完全なISO日時の場合のみ許可
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_datetime(value: DateInput) -> Optional[datetime]:
    """日時を解析（解析できない場合はNone）"""
    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        parsed = parse_date(text)
        if parsed is None:
            return None
        return datetime(parsed.year, parsed.month, parsed.day)


def format_thai_date(value: DateInput) -> str:
    """
    タイ式の日付表示（DD/MM/仏暦年）

    Args:
        value: 日付

    Returns:
        表示文字列（不正な日付は "-"）
    """
    parsed = parse_datetime(value)
    if parsed is None:
        return DATE_SENTINEL

    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year + BUDDHIST_ERA_OFFSET}"


def format_thai_datetime(value: DateInput) -> str:
    """タイ式の日時表示（DD/MM/仏暦年 HH:MM）"""
    parsed = parse_datetime(value)
    if parsed is None:
        return DATE_SENTINEL

    return f"{format_thai_date(parsed)} {parsed.hour:02d}:{parsed.minute:02d}"


def clean_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """値がNoneの任意項目を除いた辞書を返す"""
    return {key: value for key, value in data.items() if value is not None}
