"""
通知モデル
期限超過・期限接近タスクの通知
"""

from datetime import date
from typing import Any, Dict, Optional


class NotificationType:
    """通知種別定義"""
    DEADLINE_OVERDUE = "overdue"
    DEADLINE_APPROACHING = "upcoming"


class NotificationPriority:
    """通知優先度定義"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


NOTIFICATION_TYPE_LABELS: Dict[str, str] = {
    NotificationType.DEADLINE_OVERDUE: "สิ่งที่ต้องดำเนินการด่วน (เกินกำหนด)",
    NotificationType.DEADLINE_APPROACHING: "ใกล้ถึงกำหนดส่ง",
}


class Notification:
    """
    通知クラス
    通知センターに表示する1件分の情報
    """

    def __init__(self,
                 notification_type: str,
                 entity_id: str,
                 entity_name: str,
                 message: str,
                 priority: str = NotificationPriority.MEDIUM,
                 phase_id: Optional[int] = None,
                 team_id: Optional[str] = None,
                 responsible_person: Optional[str] = None,
                 as_of: Optional[date] = None):
        """
        通知の初期化

        Args:
            notification_type: 通知種別
            entity_id: 対象タスクID
            entity_name: 対象タスク名
            message: 通知メッセージ
            priority: 通知優先度
            phase_id: 所属フェーズID
            team_id: 担当チームID
            responsible_person: 担当者
            as_of: 判定基準日
        """
        self.type: str = notification_type
        self.entity_id: str = entity_id
        self.entity_type: str = "Task"
        self.entity_name: str = entity_name
        self.message: str = message
        self.priority: str = priority
        self.phase_id: Optional[int] = phase_id
        self.team_id: Optional[str] = team_id
        self.responsible_person: Optional[str] = responsible_person
        self.as_of: Optional[date] = as_of
        self.metadata: Dict[str, Any] = {}

    @property
    def key(self) -> str:
        """重複判定用キー"""
        return f"{self.type}:{self.phase_id}:{self.entity_id}"

    def is_overdue(self) -> bool:
        return self.type == NotificationType.DEADLINE_OVERDUE

    def add_metadata(self, key: str, value: Any) -> None:
        """メタデータを追加"""
        self.metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        """メタデータを取得"""
        return self.metadata.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        """通知を辞書形式に変換"""
        return {
            'type': self.type,
            'entity_id': self.entity_id,
            'entity_type': self.entity_type,
            'entity_name': self.entity_name,
            'message': self.message,
            'priority': self.priority,
            'phase_id': self.phase_id,
            'team_id': self.team_id,
            'responsible_person': self.responsible_person,
            'as_of': self.as_of.isoformat() if self.as_of else None,
            'metadata': self.metadata.copy(),
        }

    def __str__(self) -> str:
        return f"Notification(type='{self.type}', entity='{self.entity_name}', priority='{self.priority}')"

    def __repr__(self) -> str:
        return (f"Notification(type='{self.type}', entity_id='{self.entity_id}', "
                f"phase_id={self.phase_id}, priority='{self.priority}')")
