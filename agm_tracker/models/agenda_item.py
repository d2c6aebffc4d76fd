"""
議題モデル
報告書の内容セクション（起草・確認・確定の進行を管理）
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Tuple

from .base import AgendaStatus, clean_dict
from .tracking_log import TrackingLog


@dataclass(frozen=True)
class AgendaItem:
    """議題クラス"""

    id: str
    title: str
    responsible_team_id: str
    status: str = AgendaStatus.DRAFTING
    responsible_person: Optional[str] = None
    logs: Tuple[TrackingLog, ...] = field(default_factory=tuple)

    def is_finalized(self) -> bool:
        """確定済みかどうか"""
        return self.status == AgendaStatus.FINALIZED

    def with_log(self, log: TrackingLog) -> 'AgendaItem':
        """進捗記録を先頭に追加した議題を返す"""
        return replace(self, logs=(log,) + tuple(self.logs))

    def get_validation_errors(self) -> List[str]:
        """妥当性検証エラーの一覧を取得"""
        errors = []
        if not self.id or not str(self.id).strip():
            errors.append("議題IDが空です")
        if not AgendaStatus.is_valid(self.status):
            errors.append(f"無効な議題ステータス: {self.status}")
        return errors

    def validate(self) -> bool:
        """妥当性検証"""
        return not self.get_validation_errors()

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return clean_dict({
            'id': self.id,
            'title': self.title,
            'responsibleTeamId': self.responsible_team_id,
            'responsiblePerson': self.responsible_person,
            'status': self.status,
            'logs': [log.to_dict() for log in self.logs],
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AgendaItem':
        """辞書から復元（旧形式の 'responsibleTeam' キーにも対応）"""
        return cls(
            id=str(data['id']),
            title=data.get('title', ''),
            responsible_team_id=data.get('responsibleTeamId', data.get('responsibleTeam', '')),
            responsible_person=data.get('responsiblePerson'),
            status=data.get('status', AgendaStatus.DRAFTING),
            logs=tuple(TrackingLog.from_dict(log) for log in data.get('logs') or []),
        )

    def __str__(self) -> str:
        return f"AgendaItem(id='{self.id}', title='{self.title}', status='{self.status}')"
