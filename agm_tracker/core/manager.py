"""
トラッキングストア
チーム・フェーズ（タスク）・議題の一元管理と不変更新
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..models.base import UserRole, author_label
from ..models.team import Team, find_team
from ..models.task import Task
from ..models.phase import Phase
from ..models.agenda_item import AgendaItem
from ..models.tracking_log import TrackingLog
from .logger import ProjectLogger, LogCategory, AuditAction
from .error_handler import (
    handle_errors, ValidationError, PermissionDeniedError
)


@dataclass(frozen=True)
class TrackingSnapshot:
    """
    ストアの状態スナップショット
    変更操作のたびに新しいインスタンスへ差し替えられる
    """

    teams: Tuple[Team, ...] = field(default_factory=tuple)
    phases: Tuple[Phase, ...] = field(default_factory=tuple)
    agenda_items: Tuple[AgendaItem, ...] = field(default_factory=tuple)

    def all_tasks(self) -> List[Task]:
        """全タスクをフェーズ順・フェーズ内順で取得"""
        return [task for phase in self.phases for task in phase.tasks]

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'teams': [team.to_dict() for team in self.teams],
            'phases': [phase.to_dict() for phase in self.phases],
            'agendaItems': [item.to_dict() for item in self.agenda_items],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrackingSnapshot':
        """辞書から復元"""
        return cls(
            teams=tuple(Team.from_dict(t) for t in data.get('teams') or []),
            phases=tuple(Phase.from_dict(p) for p in data.get('phases') or []),
            agenda_items=tuple(AgendaItem.from_dict(a) for a in data.get('agendaItems') or []),
        )


class ProjectTrackingStore:
    """
    プロジェクトトラッキングストア
    3つのルートコレクションを所有し、構造的な変更操作を提供する

    存在しないIDを指定した操作は何もせずFalseを返す。
    """

    def __init__(self,
                 snapshot: Optional[TrackingSnapshot] = None,
                 clock: Callable[[], datetime] = None,
                 log_id_factory: Callable[[], str] = None,
                 role: str = UserRole.ADMIN,
                 enforce_role_permissions: bool = False):
        """
        ストアの初期化

        Args:
            snapshot: 初期状態（省略時は空）
            clock: 進捗記録のタイムスタンプ取得関数
            log_id_factory: 進捗記録ID生成関数
            role: 操作ロール
            enforce_role_permissions: ロールによる変更制限を有効にするか
        """
        self._snapshot = snapshot or TrackingSnapshot()
        self._clock = clock or datetime.now
        self._log_id_factory = log_id_factory or (lambda: uuid.uuid4().hex)
        self.enforce_role_permissions = enforce_role_permissions

        self.logger = ProjectLogger()
        self.role = UserRole.ADMIN
        self.set_role(role)

        self.logger.info(
            LogCategory.SYSTEM,
            f"トラッキングストアが初期化されました: Teams={len(self.teams)}, "
            f"Phases={len(self.phases)}, Tasks={len(self.all_tasks())}, "
            f"AgendaItems={len(self.agenda_items)}",
            module="core.manager"
        )

    # ==================== 状態参照 ====================

    @property
    def snapshot(self) -> TrackingSnapshot:
        """現在のスナップショット"""
        return self._snapshot

    @property
    def teams(self) -> Tuple[Team, ...]:
        return self._snapshot.teams

    @property
    def phases(self) -> Tuple[Phase, ...]:
        return self._snapshot.phases

    @property
    def agenda_items(self) -> Tuple[AgendaItem, ...]:
        return self._snapshot.agenda_items

    def all_tasks(self) -> List[Task]:
        """全タスクを取得"""
        return self._snapshot.all_tasks()

    def get_team(self, team_id: str) -> Optional[Team]:
        return find_team(self.teams, team_id)

    def get_phase(self, phase_id: int) -> Optional[Phase]:
        """IDでフェーズを取得"""
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def get_task(self, phase_id: int, task_id: str) -> Optional[Task]:
        """フェーズ内のタスクを取得"""
        phase = self.get_phase(phase_id)
        return phase.get_task(task_id) if phase else None

    def find_task(self, task_id: str) -> Optional[Tuple[int, Task]]:
        """
        全フェーズからタスクを検索

        Returns:
            (フェーズID, タスク)。見つからない場合はNone
        """
        for phase in self.phases:
            task = phase.get_task(task_id)
            if task is not None:
                return phase.id, task
        return None

    def get_agenda_item(self, item_id: str) -> Optional[AgendaItem]:
        """IDで議題を取得"""
        for item in self.agenda_items:
            if item.id == item_id:
                return item
        return None

    # ==================== ロール ====================

    def set_role(self, role: str) -> None:
        """
        操作ロールを設定

        Args:
            role: "admin" または "staff"
        """
        if not UserRole.is_valid(role):
            raise ValidationError(f"無効なロール: {role}", field="role", value=role)

        self.role = role
        self.logger.set_user_context(author_label(role))

    @property
    def author(self) -> str:
        """現在のロールに対応する記録者ラベル"""
        return author_label(self.role)

    def _check_permission(self, operation: str) -> None:
        """変更操作の権限を確認"""
        if self.enforce_role_permissions and self.role != UserRole.ADMIN:
            raise PermissionDeniedError(
                f"ロール '{self.role}' には操作 '{operation}' の権限がありません",
                role=self.role,
                operation=operation
            )

    # ==================== 内部ヘルパー ====================

    def _commit(self, **changes) -> None:
        """新しいスナップショットへ差し替え"""
        self._snapshot = replace(self._snapshot, **changes)

    def _not_found(self, operation: str, entity_type: str, entity_id: Any) -> bool:
        self.logger.warning(
            LogCategory.DATA,
            f"{entity_type}が見つからないため操作をスキップしました: {operation}",
            module="core.manager",
            entity_id=str(entity_id)
        )
        return False

    def _new_log(self, message: str, author: str) -> TrackingLog:
        return TrackingLog.create(
            message,
            author,
            timestamp=self._clock(),
            log_id=self._log_id_factory()
        )

    @staticmethod
    def _ensure_valid(entity, entity_type: str) -> None:
        errors = entity.get_validation_errors()
        if errors:
            raise ValidationError(
                f"{entity_type}の妥当性検証に失敗しました: {'; '.join(errors)}",
                field=entity_type,
                value=getattr(entity, 'id', None)
            )

    # ==================== チーム管理 ====================

    @handle_errors()
    def add_team(self, team: Team) -> bool:
        """
        チームを末尾に追加

        Args:
            team: 追加するチーム

        Returns:
            追加成功の可否

        Raises:
            ValidationError: IDが空または重複している場合
        """
        self._check_permission("add_team")
        self._ensure_valid(team, "Team")

        if self.get_team(team.id) is not None:
            raise ValidationError(f"チームIDが重複しています: {team.id}", field="id", value=team.id)

        self._commit(teams=self.teams + (team,))

        self.logger.audit(
            AuditAction.CREATE,
            "Team",
            team.id,
            team.name,
            "チーム追加",
            after_data=team.to_dict()
        )
        return True

    @handle_errors()
    def update_team(self, team: Team) -> bool:
        """同一IDのチームを置換"""
        self._check_permission("update_team")

        old_team = self.get_team(team.id)
        if old_team is None:
            return self._not_found("update_team", "Team", team.id)

        self._ensure_valid(team, "Team")

        self._commit(teams=tuple(team if t.id == team.id else t for t in self.teams))

        self.logger.audit(
            AuditAction.UPDATE,
            "Team",
            team.id,
            team.name,
            "チーム更新",
            before_data=old_team.to_dict(),
            after_data=team.to_dict()
        )
        return True

    @handle_errors()
    def delete_team(self, team_id: str) -> bool:
        """
        チームを削除

        参照しているタスク・議題はそのまま残す（表示時はIDで代替）。
        """
        self._check_permission("delete_team")

        old_team = self.get_team(team_id)
        if old_team is None:
            return self._not_found("delete_team", "Team", team_id)

        self._commit(teams=tuple(t for t in self.teams if t.id != team_id))

        self.logger.audit(
            AuditAction.DELETE,
            "Team",
            team_id,
            old_team.name,
            "チーム削除",
            before_data=old_team.to_dict()
        )
        return True

    # ==================== 議題管理 ====================

    @handle_errors()
    def add_agenda_item(self, item: AgendaItem) -> bool:
        """議題を先頭に追加（新しい順）"""
        self._check_permission("add_agenda_item")
        self._ensure_valid(item, "AgendaItem")

        self._commit(agenda_items=(item,) + self.agenda_items)

        self.logger.audit(
            AuditAction.CREATE,
            "AgendaItem",
            item.id,
            item.title,
            "議題追加",
            after_data=item.to_dict()
        )
        return True

    @handle_errors()
    def update_agenda_item(self, item: AgendaItem) -> bool:
        """同一IDの議題を置換（並び順は維持）"""
        self._check_permission("update_agenda_item")

        old_item = self.get_agenda_item(item.id)
        if old_item is None:
            return self._not_found("update_agenda_item", "AgendaItem", item.id)

        self._ensure_valid(item, "AgendaItem")

        self._commit(agenda_items=tuple(
            item if a.id == item.id else a for a in self.agenda_items
        ))

        self.logger.audit(
            AuditAction.UPDATE,
            "AgendaItem",
            item.id,
            item.title,
            "議題更新",
            before_data=old_item.to_dict(),
            after_data=item.to_dict()
        )
        return True

    @handle_errors()
    def delete_agenda_item(self, item_id: str) -> bool:
        """議題を削除"""
        self._check_permission("delete_agenda_item")

        old_item = self.get_agenda_item(item_id)
        if old_item is None:
            return self._not_found("delete_agenda_item", "AgendaItem", item_id)

        self._commit(agenda_items=tuple(a for a in self.agenda_items if a.id != item_id))

        self.logger.audit(
            AuditAction.DELETE,
            "AgendaItem",
            item_id,
            old_item.title,
            "議題削除",
            before_data=old_item.to_dict()
        )
        return True

    def append_agenda_log(self, item_id: str, message: str, author: str) -> bool:
        """
        議題に進捗記録を追加（先頭へ）

        Args:
            item_id: 議題ID
            message: 記録内容
            author: 記録者ラベル

        Returns:
            追加成功の可否
        """
        item = self.get_agenda_item(item_id)
        if item is None:
            return self._not_found("append_agenda_log", "AgendaItem", item_id)

        log = self._new_log(message, author)
        updated = item.with_log(log)
        self._commit(agenda_items=tuple(
            updated if a.id == item_id else a for a in self.agenda_items
        ))

        self.logger.audit(
            AuditAction.APPEND_LOG,
            "AgendaItem",
            item_id,
            item.title,
            message,
            log_id=log.id
        )
        return True

    # ==================== タスク管理 ====================

    def _map_phase(self, phase_id: int, func: Callable[[Phase], Phase]) -> None:
        self._commit(phases=tuple(
            func(p) if p.id == phase_id else p for p in self.phases
        ))

    @handle_errors()
    def add_task(self, phase_id: int, task: Task) -> bool:
        """
        フェーズ末尾にタスクを追加

        Args:
            phase_id: フェーズID
            task: 追加するタスク

        Returns:
            追加成功の可否（フェーズが存在しない場合False）
        """
        self._check_permission("add_task")

        phase = self.get_phase(phase_id)
        if phase is None:
            return self._not_found("add_task", "Phase", phase_id)

        self._ensure_valid(task, "Task")

        if phase.has_task(task.id):
            raise ValidationError(
                f"フェーズ内でタスクIDが重複しています: {task.id}",
                field="id",
                value=task.id
            )

        self._map_phase(phase_id, lambda p: p.append_task(task))

        self.logger.audit(
            AuditAction.CREATE,
            "Task",
            task.id,
            task.title,
            f"タスク追加: Phase={phase_id}",
            after_data=task.to_dict(),
            phase_id=phase_id
        )
        return True

    @handle_errors()
    def update_task(self, phase_id: int, task: Task) -> bool:
        """指定フェーズ内の同一IDタスクを置換"""
        self._check_permission("update_task")

        old_task = self.get_task(phase_id, task.id)
        if old_task is None:
            return self._not_found("update_task", "Task", f"{phase_id}/{task.id}")

        self._ensure_valid(task, "Task")

        self._map_phase(phase_id, lambda p: p.replace_task(task))

        self.logger.audit(
            AuditAction.UPDATE,
            "Task",
            task.id,
            task.title,
            f"タスク更新: Phase={phase_id}",
            before_data=old_task.to_dict(),
            after_data=task.to_dict(),
            phase_id=phase_id
        )
        return True

    @handle_errors()
    def delete_task(self, phase_id: int, task_id: str) -> bool:
        """指定フェーズ内のタスクを削除"""
        self._check_permission("delete_task")

        old_task = self.get_task(phase_id, task_id)
        if old_task is None:
            return self._not_found("delete_task", "Task", f"{phase_id}/{task_id}")

        self._map_phase(phase_id, lambda p: p.remove_task(task_id))

        self.logger.audit(
            AuditAction.DELETE,
            "Task",
            task_id,
            old_task.title,
            f"タスク削除: Phase={phase_id}",
            before_data=old_task.to_dict(),
            phase_id=phase_id
        )
        return True

    def append_task_log(self, phase_id: int, task_id: str, message: str, author: str) -> bool:
        """タスクに進捗記録を追加（先頭へ）"""
        task = self.get_task(phase_id, task_id)
        if task is None:
            return self._not_found("append_task_log", "Task", f"{phase_id}/{task_id}")

        log = self._new_log(message, author)
        self._map_phase(phase_id, lambda p: p.map_task(task_id, lambda t: t.with_log(log)))

        self.logger.audit(
            AuditAction.APPEND_LOG,
            "Task",
            task_id,
            task.title,
            message,
            log_id=log.id,
            phase_id=phase_id
        )
        return True

    # ==================== 便利操作 ====================

    def set_task_status(self, phase_id: int, task_id: str, status: str) -> bool:
        """タスクのステータスのみを変更"""
        task = self.get_task(phase_id, task_id)
        if task is None:
            return self._not_found("set_task_status", "Task", f"{phase_id}/{task_id}")
        return self.update_task(phase_id, replace(task, status=status))

    def set_agenda_status(self, item_id: str, status: str) -> bool:
        """議題のステータスのみを変更"""
        item = self.get_agenda_item(item_id)
        if item is None:
            return self._not_found("set_agenda_status", "AgendaItem", item_id)
        return self.update_agenda_item(replace(item, status=status))

    def get_statistics(self) -> Dict[str, Any]:
        """件数統計を取得"""
        return {
            'teams': len(self.teams),
            'phases': len(self.phases),
            'tasks': len(self.all_tasks()),
            'agenda_items': len(self.agenda_items),
            'role': self.role,
        }

    def __str__(self) -> str:
        return (f"ProjectTrackingStore(teams={len(self.teams)}, phases={len(self.phases)}, "
                f"agenda_items={len(self.agenda_items)})")
