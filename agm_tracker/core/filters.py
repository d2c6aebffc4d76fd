"""
フィルタエンジン
ステータス・担当チーム・期間によるタスク絞り込み
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, List, Optional, Union

from ..models.base import TaskStatus, parse_date
from ..models.task import Task
from ..models.phase import Phase
from .error_handler import ValidationError


# 条件を指定しないことを表す値
ALL = "All"


@dataclass(frozen=True)
class TaskFilterCriteria:
    """
    タスク絞り込み条件
    Noneまたは "All" の項目は条件として扱わない
    """

    status: Optional[str] = ALL
    team_id: Optional[str] = ALL
    start_date_from: Union[str, date, None] = None
    end_date_to: Union[str, date, None] = None

    def __post_init__(self):
        if self.status not in (None, ALL) and not TaskStatus.is_valid(self.status):
            raise ValidationError(f"無効なタスクステータス: {self.status}",
                                  field="status", value=self.status)

        for name in ('start_date_from', 'end_date_to'):
            value = getattr(self, name)
            if value not in (None, "") and parse_date(value) is None:
                raise ValidationError(f"日付を解析できません: {value}", field=name, value=value)

    @property
    def start_from(self) -> Optional[date]:
        return parse_date(self.start_date_from)

    @property
    def end_to(self) -> Optional[date]:
        return parse_date(self.end_date_to)

    def is_empty(self) -> bool:
        """絞り込み条件が一つもないか"""
        return (self.status in (None, ALL) and self.team_id in (None, ALL)
                and self.start_from is None and self.end_to is None)

    def matches(self, task: Task) -> bool:
        """
        タスクが全条件を満たすか（論理積）

        日付条件がある場合、該当日付を解析できないタスクは除外する。
        """
        if self.status not in (None, ALL) and task.status != self.status:
            return False

        if self.team_id not in (None, ALL) and task.team_id != self.team_id:
            return False

        start_from = self.start_from
        if start_from is not None:
            start = task.start
            if start is None or start < start_from:
                return False

        end_to = self.end_to
        if end_to is not None:
            end = task.end
            if end is None or end > end_to:
                return False

        return True


def filter_tasks(phases: Iterable[Phase], criteria: Optional[TaskFilterCriteria] = None) -> List[Phase]:
    """
    条件に合うタスクだけを残したフェーズ一覧を返す

    Args:
        phases: フェーズ一覧
        criteria: 絞り込み条件（省略時は全件）

    Returns:
        タスクが1件以上残ったフェーズ（元の順序を維持）
    """
    criteria = criteria or TaskFilterCriteria()
    result = []

    for phase in phases:
        tasks = tuple(task for task in phase.tasks if criteria.matches(task))
        if tasks:
            result.append(replace(phase, tasks=tasks))

    return result
