"""
フェーズモデル
タスクを所有する期間区切りの上位階層
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional, Tuple

from .task import Task


@dataclass(frozen=True)
class Phase:
    """
    フェーズクラス
    タスク一覧を排他的に所有する（タスクはフェーズ外に存在しない）
    """

    id: int
    name: str
    period: str = ""
    description: str = ""
    tasks: Tuple[Task, ...] = field(default_factory=tuple)

    def get_task(self, task_id: str) -> Optional[Task]:
        """IDでタスクを取得"""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def has_task(self, task_id: str) -> bool:
        """タスクが存在するかどうか"""
        return self.get_task(task_id) is not None

    def with_tasks(self, tasks) -> 'Phase':
        """タスク一覧を差し替えたフェーズを返す"""
        return replace(self, tasks=tuple(tasks))

    def append_task(self, task: Task) -> 'Phase':
        """タスクを末尾に追加したフェーズを返す"""
        return self.with_tasks(tuple(self.tasks) + (task,))

    def replace_task(self, task: Task) -> 'Phase':
        """同一IDのタスクを置換したフェーズを返す"""
        return self.with_tasks(task if t.id == task.id else t for t in self.tasks)

    def remove_task(self, task_id: str) -> 'Phase':
        """タスクを除いたフェーズを返す"""
        return self.with_tasks(t for t in self.tasks if t.id != task_id)

    def map_task(self, task_id: str, func: Callable[[Task], Task]) -> 'Phase':
        """指定タスクに変換関数を適用したフェーズを返す"""
        return self.with_tasks(func(t) if t.id == task_id else t for t in self.tasks)

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'id': self.id,
            'name': self.name,
            'period': self.period,
            'description': self.description,
            'tasks': [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Phase':
        """辞書から復元"""
        return cls(
            id=int(data['id']),
            name=data.get('name', ''),
            period=data.get('period', ''),
            description=data.get('description', ''),
            tasks=tuple(Task.from_dict(task) for task in data.get('tasks') or []),
        )

    def __str__(self) -> str:
        return f"Phase(id={self.id}, name='{self.name}', tasks={len(self.tasks)})"
