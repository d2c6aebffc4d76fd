"""
進捗記録モデル
タスク・議題に付随する追記専用のメモ
"""

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TrackingLog:
    """
    進捗記録クラス
    作成後は変更しない（新しい記録は常にリスト先頭へ追加）
    """

    id: str
    timestamp: str
    message: str
    author: str

    @classmethod
    def create(cls, message: str, author: str,
               timestamp: Optional[datetime] = None,
               log_id: Optional[str] = None) -> 'TrackingLog':
        """
        新しい進捗記録を作成

        Args:
            message: 記録内容
            author: 記録者ラベル
            timestamp: 記録時刻（省略時は現在時刻）
            log_id: 記録ID（省略時はUUID）

        Returns:
            作成された進捗記録
        """
        stamp = timestamp or datetime.now()
        return cls(
            id=log_id or uuid.uuid4().hex,
            timestamp=stamp.isoformat(),
            message=message,
            author=author,
        )

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'message': self.message,
            'author': self.author,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrackingLog':
        """辞書から復元（旧形式の 'date' キーにも対応）"""
        return cls(
            id=str(data['id']),
            timestamp=data.get('timestamp', data.get('date', '')),
            message=data.get('message', ''),
            author=data.get('author', ''),
        )

    def __str__(self) -> str:
        return f"TrackingLog(author='{self.author}', message='{self.message[:20]}')"
