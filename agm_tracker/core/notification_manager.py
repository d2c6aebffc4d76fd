"""
通知管理システム
期限超過・期限接近タスクからの通知生成と配信制御
"""

from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from ..models.base import DateInput, TaskStatus, format_thai_date, parse_date
from ..models.task import Task
from ..models.phase import Phase
from ..models.notification import (
    Notification, NotificationType, NotificationPriority
)
from .metrics import overdue_tasks, upcoming_tasks, DEFAULT_UPCOMING_WINDOW_DAYS
from .logger import ProjectLogger, LogCategory


ALL_ON_TRACK_MESSAGE = "เยี่ยมมาก! ภารกิจทั้งหมดเป็นไปตามแผน"
ALL_ON_TRACK_DETAIL = "ไม่มีงานค้างหรือใกล้กำหนดส่งในขณะนี้"


class NotificationGenerator:
    """
    通知生成エンジン
    派生指標の結果を通知オブジェクトへ変換する
    """

    def __init__(self, upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
                 enable_overdue: bool = True, enable_upcoming: bool = True):
        self.upcoming_window_days = upcoming_window_days
        self.enable_overdue = enable_overdue
        self.enable_upcoming = enable_upcoming

    def generate(self, phases: Iterable[Phase], current_date: DateInput) -> List[Notification]:
        """
        期限超過・期限接近の通知を生成

        Args:
            phases: フェーズ一覧
            current_date: 基準日

        Returns:
            通知一覧（期限超過が先、各々入力順）
        """
        current = parse_date(current_date)
        # 同一タスクが複数フェーズに属する場合もフェーズごとに通知する
        owned = [(phase.id, task) for phase in phases for task in phase.tasks]

        notifications = []

        if self.enable_overdue:
            for phase_id, task in owned:
                if overdue_tasks([task], current):
                    notifications.append(self._create_overdue(task, phase_id, current))

        if self.enable_upcoming:
            for phase_id, task in owned:
                if upcoming_tasks([task], current, self.upcoming_window_days):
                    notifications.append(self._create_upcoming(task, phase_id, current))

        return notifications

    def _create_overdue(self, task: Task, phase_id: Optional[int], current) -> Notification:
        """期限超過通知を作成"""
        label = "ล่าช้า" if task.status == TaskStatus.DELAYED else "เกินกำหนด"
        notification = Notification(
            NotificationType.DEADLINE_OVERDUE,
            task.id,
            task.title,
            f"{label}: {task.id} {task.title} (กำหนดส่ง: {format_thai_date(task.end_date)})",
            priority=NotificationPriority.HIGH,
            phase_id=phase_id,
            team_id=task.team_id,
            responsible_person=task.responsible_person,
            as_of=current
        )

        end = task.end
        if end is not None and current is not None and end < current:
            notification.add_metadata('days_overdue', (current - end).days)
        notification.add_metadata('status', task.status)
        return notification

    def _create_upcoming(self, task: Task, phase_id: Optional[int], current) -> Notification:
        """期限接近通知を作成"""
        days_left = (task.end - current).days
        priority = NotificationPriority.HIGH if days_left <= 1 else NotificationPriority.MEDIUM

        notification = Notification(
            NotificationType.DEADLINE_APPROACHING,
            task.id,
            task.title,
            f"ใกล้กำหนด: {task.id} {task.title} (กำหนดส่ง: {format_thai_date(task.end_date)}, "
            f"เหลือ {days_left} วัน)",
            priority=priority,
            phase_id=phase_id,
            team_id=task.team_id,
            responsible_person=task.responsible_person,
            as_of=current
        )
        notification.add_metadata('days_left', days_left)
        notification.add_metadata('status', task.status)
        return notification


class NotificationService:
    """
    通知サービス
    通知の生成・ハンドラーへの配信・集計
    """

    def __init__(self, generator: Optional[NotificationGenerator] = None, enabled: bool = True):
        """
        通知サービスの初期化

        Args:
            generator: 通知生成エンジン
            enabled: 通知を有効にするか
        """
        self.logger = ProjectLogger()
        self.generator = generator or NotificationGenerator()
        self.enabled = enabled

        # 配信先コールバック
        self.notification_handlers: List[Callable[[Notification], None]] = []

        # 直近のチェック結果
        self.notifications: List[Notification] = []

        self.stats = {
            'total_generated': 0,
            'total_delivered': 0,
            'last_check_time': None,
            'last_as_of': None,
            'errors': 0
        }

    @classmethod
    def from_settings(cls, settings) -> 'NotificationService':
        """通知設定セクションからサービスを作成"""
        return cls(
            NotificationGenerator(
                upcoming_window_days=settings.upcoming_window_days,
                enable_overdue=settings.enable_overdue,
                enable_upcoming=settings.enable_upcoming
            ),
            enabled=settings.enabled
        )

    # ==================== 通知ハンドラー管理 ====================

    def add_notification_handler(self, handler: Callable[[Notification], None]) -> None:
        """
        通知配信ハンドラーを追加

        Args:
            handler: 通知を受け取るコールバック関数
        """
        self.notification_handlers.append(handler)
        self.logger.debug(
            LogCategory.SYSTEM,
            f"通知ハンドラー追加: {getattr(handler, '__name__', repr(handler))}",
            module="core.notification_manager"
        )

    def remove_notification_handler(self, handler: Callable[[Notification], None]) -> bool:
        """通知配信ハンドラーを削除"""
        if handler not in self.notification_handlers:
            return False
        self.notification_handlers.remove(handler)
        return True

    def _deliver_notification(self, notification: Notification) -> None:
        """通知を全ハンドラーに配信"""
        delivered_count = 0

        for handler in self.notification_handlers:
            try:
                handler(notification)
                delivered_count += 1
            except Exception as e:
                # 1つのハンドラーの失敗で他への配信を止めない
                self.logger.error(
                    LogCategory.ERROR,
                    f"通知配信エラー: {getattr(handler, '__name__', repr(handler))} - {e}",
                    module="core.notification_manager",
                    exception=e,
                    notification_key=notification.key
                )
                self.stats['errors'] += 1

        self.stats['total_delivered'] += delivered_count

    # ==================== 通知チェック ====================

    def check_and_generate_notifications(self, phases: Iterable[Phase],
                                         current_date: DateInput) -> List[Notification]:
        """
        通知をチェックして配信

        Args:
            phases: フェーズ一覧
            current_date: 基準日

        Returns:
            生成された通知一覧
        """
        if not self.enabled:
            self.notifications = []
            return []

        notifications = self.generator.generate(phases, current_date)

        for notification in notifications:
            self._deliver_notification(notification)

        self.notifications = notifications
        self.stats['total_generated'] += len(notifications)
        self.stats['last_check_time'] = datetime.now()
        self.stats['last_as_of'] = parse_date(current_date)

        self.logger.info(
            LogCategory.SYSTEM,
            f"通知チェック完了: {len(notifications)}件",
            module="core.notification_manager",
            as_of=str(current_date)
        )

        return notifications

    def get_notifications(self, notification_type: str = None,
                          priority: str = None) -> List[Notification]:
        """直近の通知を種別・優先度で絞り込み"""
        return [
            n for n in self.notifications
            if (notification_type is None or n.type == notification_type)
            and (priority is None or n.priority == priority)
        ]

    def is_all_on_track(self) -> bool:
        """期限超過・期限接近が一件もないか"""
        return not self.notifications

    def get_notification_summary(self) -> Dict[str, Any]:
        """通知サマリーを取得"""
        overdue = self.get_notifications(NotificationType.DEADLINE_OVERDUE)
        upcoming = self.get_notifications(NotificationType.DEADLINE_APPROACHING)
        last_check = self.stats['last_check_time']

        return {
            'total': len(self.notifications),
            'overdue': len(overdue),
            'upcoming': len(upcoming),
            'high_priority': len(self.get_notifications(priority=NotificationPriority.HIGH)),
            'all_on_track': self.is_all_on_track(),
            'message': ALL_ON_TRACK_MESSAGE if self.is_all_on_track() else None,
            'service_stats': {
                **self.stats,
                'last_check_time': last_check.isoformat() if last_check else None,
                'last_as_of': self.stats['last_as_of'].isoformat() if self.stats['last_as_of'] else None,
            }
        }

    def __str__(self) -> str:
        return (f"NotificationService(enabled={self.enabled}, "
                f"notifications={len(self.notifications)}, "
                f"handlers={len(self.notification_handlers)})")
