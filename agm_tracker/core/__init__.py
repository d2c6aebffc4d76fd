# ====================
# core/__init__.py
# ====================
"""
コア機能パッケージ
トラッキングストア・派生指標・フィルタ・ログ・エラーハンドリング
"""

from .manager import ProjectTrackingStore, TrackingSnapshot
from .metrics import (
    AgendaReadiness, overall_progress, phase_progress, days_remaining,
    overdue_tasks, upcoming_tasks, agenda_readiness, team_workload,
    next_milestone, dashboard_summary, all_tasks
)
from .filters import TaskFilterCriteria, filter_tasks, ALL
from .notification_manager import NotificationGenerator, NotificationService
from .logger import (
    ProjectLogger, LogLevel, LogCategory, AuditAction,
    LogEntry, AuditEntry, LogStatistics
)
from .error_handler import (
    TrackerError, ValidationError, DataError,
    FileIOError, BusinessLogicError, PermissionDeniedError,
    ErrorHandler, ErrorSeverity, ErrorCategory,
    handle_errors, validate_input, get_error_handler
)

__version__ = "1.0.0"

__all__ = [
    # ストア
    'ProjectTrackingStore',
    'TrackingSnapshot',

    # 派生指標
    'AgendaReadiness',
    'overall_progress',
    'phase_progress',
    'days_remaining',
    'overdue_tasks',
    'upcoming_tasks',
    'agenda_readiness',
    'team_workload',
    'next_milestone',
    'dashboard_summary',
    'all_tasks',

    # フィルタ
    'TaskFilterCriteria',
    'filter_tasks',
    'ALL',

    # 通知
    'NotificationGenerator',
    'NotificationService',

    # ログ関連
    'ProjectLogger',
    'LogLevel',
    'LogCategory',
    'AuditAction',
    'LogEntry',
    'AuditEntry',
    'LogStatistics',

    # エラーハンドリング関連
    'TrackerError',
    'ValidationError',
    'DataError',
    'FileIOError',
    'BusinessLogicError',
    'PermissionDeniedError',
    'ErrorHandler',
    'ErrorSeverity',
    'ErrorCategory',

    # デコレータ
    'handle_errors',
    'validate_input',

    # ユーティリティ
    'get_error_handler'
]
