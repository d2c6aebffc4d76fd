# ====================
# models/__init__.py
# ====================
"""
データモデルパッケージ
AGM報告書トラッカーのエンティティクラス
"""

from .base import (
    StatusEnum, TaskStatus, AgendaStatus, UserRole,
    TASK_STATUS_LABELS, AGENDA_STATUS_LABELS, DATE_SENTINEL,
    task_status_label, agenda_status_label, author_label,
    parse_date, parse_datetime, format_thai_date, format_thai_datetime
)
from .tracking_log import TrackingLog
from .team import Team, find_team, team_display_name
from .task import Task
from .phase import Phase
from .agenda_item import AgendaItem
from .notification import (
    Notification, NotificationType, NotificationPriority, NOTIFICATION_TYPE_LABELS
)

__version__ = "1.0.0"

__all__ = [
    # ステータス定義
    'StatusEnum',
    'TaskStatus',
    'AgendaStatus',
    'UserRole',

    # エンティティクラス
    'TrackingLog',
    'Team',
    'Task',
    'Phase',
    'AgendaItem',
    'Notification',

    # 通知定数
    'NotificationType',
    'NotificationPriority',
    'NOTIFICATION_TYPE_LABELS',

    # 表示ラベル・日付ヘルパー
    'TASK_STATUS_LABELS',
    'AGENDA_STATUS_LABELS',
    'DATE_SENTINEL',
    'task_status_label',
    'agenda_status_label',
    'author_label',
    'parse_date',
    'parse_datetime',
    'format_thai_date',
    'format_thai_datetime',

    # 参照解決
    'find_team',
    'team_display_name'
]
