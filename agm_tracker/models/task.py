"""
タスクモデル
フェーズに所属するスケジュール上の作業単位
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from .base import TaskStatus, clean_dict, parse_date
from .tracking_log import TrackingLog


@dataclass(frozen=True)
class Task:
    """
    タスククラス
    期間・担当チーム・ステータス・進捗記録を持つ
    """

    id: str
    title: str
    start_date: str
    end_date: str
    team_id: str
    description: str = ""
    status: str = TaskStatus.PENDING
    responsible_person: Optional[str] = None
    is_milestone: bool = False
    progress_percent: Optional[int] = None
    logs: Tuple[TrackingLog, ...] = field(default_factory=tuple)

    @property
    def start(self) -> Optional[date]:
        """開始日（解析できない場合はNone）"""
        return parse_date(self.start_date)

    @property
    def end(self) -> Optional[date]:
        """終了日（解析できない場合はNone）"""
        return parse_date(self.end_date)

    def is_completed(self) -> bool:
        """完了状態かどうか"""
        return self.status == TaskStatus.COMPLETED

    def is_delayed(self) -> bool:
        """遅延状態かどうか"""
        return self.status == TaskStatus.DELAYED

    def with_log(self, log: TrackingLog) -> 'Task':
        """進捗記録を先頭に追加したタスクを返す"""
        return replace(self, logs=(log,) + tuple(self.logs))

    def get_validation_errors(self) -> List[str]:
        """妥当性検証エラーの一覧を取得"""
        errors = []

        if not self.id or not str(self.id).strip():
            errors.append("タスクIDが空です")

        if not TaskStatus.is_valid(self.status):
            errors.append(f"無効なタスクステータス: {self.status}")

        if self.progress_percent is not None and not (0 <= self.progress_percent <= 100):
            errors.append(f"進捗率は0-100の範囲である必要があります: {self.progress_percent}")

        # 両方の日付が解析できる場合のみ前後関係を検証
        start, end = self.start, self.end
        if start and end and start > end:
            errors.append(f"開始日が終了日より後です: {self.start_date} > {self.end_date}")

        return errors

    def validate(self) -> bool:
        """妥当性検証"""
        return not self.get_validation_errors()

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return clean_dict({
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'teamId': self.team_id,
            'responsiblePerson': self.responsible_person,
            'status': self.status,
            'isMilestone': self.is_milestone,
            'progressPercent': self.progress_percent,
            'logs': [log.to_dict() for log in self.logs],
        })

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """辞書から復元（旧形式の 'team' / 'progress' キーにも対応）"""
        progress = data.get('progressPercent', data.get('progress'))
        return cls(
            id=str(data['id']),
            title=data.get('title', ''),
            description=data.get('description', ''),
            start_date=data.get('startDate', ''),
            end_date=data.get('endDate', ''),
            team_id=data.get('teamId', data.get('team', '')),
            responsible_person=data.get('responsiblePerson'),
            status=data.get('status', TaskStatus.PENDING),
            is_milestone=bool(data.get('isMilestone', False)),
            progress_percent=int(progress) if progress is not None else None,
            logs=tuple(TrackingLog.from_dict(log) for log in data.get('logs') or []),
        )

    def __str__(self) -> str:
        return f"Task(id='{self.id}', title='{self.title}', status='{self.status}')"
