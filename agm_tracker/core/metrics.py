"""
派生指標エンジン
進捗率・残日数・期限超過/接近タスク・議題準備状況の算出

すべて純粋関数であり、基準日は必ず引数で受け取る。
日付が解析できないタスクは期限判定の対象外とする。
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models.base import DateInput, TaskStatus, AgendaStatus, parse_date
from ..models.task import Task
from ..models.phase import Phase
from ..models.agenda_item import AgendaItem
from .error_handler import validate_input


DEFAULT_UPCOMING_WINDOW_DAYS = 3
DEFAULT_CRITICAL_COUNTDOWN_DAYS = 14


@dataclass(frozen=True)
class AgendaReadiness:
    """議題準備状況"""

    drafting: int
    reviewing: int
    finalized: int
    total: int
    finalized_ratio: float

    @property
    def finalized_percent(self) -> int:
        """確定率（整数%）"""
        return round_half_up(self.finalized_ratio * 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'drafting': self.drafting,
            'reviewing': self.reviewing,
            'finalized': self.finalized,
            'total': self.total,
            'finalized_ratio': self.finalized_ratio,
        }


def round_half_up(value: float) -> int:
    """四捨五入（0.5は切り上げ）"""
    return math.floor(value + 0.5)


def all_tasks(phases: Iterable[Phase]) -> List[Task]:
    """フェーズ順・フェーズ内順でタスクを平坦化"""
    return [task for phase in phases for task in phase.tasks]


def overall_progress(phases: Iterable[Phase], current_date: DateInput = None) -> int:
    """
    全体進捗率を算出

    Args:
        phases: フェーズ一覧
        current_date: 基準日（算出には使用しない）

    Returns:
        完了タスク率（0-100の整数）。タスクが0件の場合は0
    """
    tasks = all_tasks(phases)
    total = len(tasks)
    if total == 0:
        return 0

    completed = sum(1 for task in tasks if task.status == TaskStatus.COMPLETED)
    return round_half_up(100 * completed / total)


def phase_progress(phase: Phase) -> int:
    """フェーズ単位の進捗率（タスク0件は0）"""
    return overall_progress([phase])


def days_remaining(target_date: DateInput, current_date: DateInput) -> Optional[int]:
    """
    目標日までの残日数

    暦日同士の差のため切り上げは常に整数そのものとなる。
    目標日を過ぎている場合は負数を返す。
    いずれかの日付が解析できない場合はNone。
    """
    target = parse_date(target_date)
    current = parse_date(current_date)
    if target is None or current is None:
        return None
    return (target - current).days


def _days_until_due(task: Task, current: Optional[date]) -> Optional[int]:
    end = task.end
    if end is None or current is None:
        return None
    return (end - current).days


def overdue_tasks(tasks: Iterable[Task], current_date: DateInput) -> List[Task]:
    """
    期限超過タスクを抽出

    Delayedのタスク、または未完了で終了日が基準日より前のタスク。
    入力順を維持する。
    """
    current = parse_date(current_date)
    result = []

    for task in tasks:
        if task.status == TaskStatus.DELAYED:
            result.append(task)
            continue

        if task.status == TaskStatus.COMPLETED:
            continue

        diff = _days_until_due(task, current)
        if diff is not None and diff < 0:
            result.append(task)

    return result


@validate_input(
    lambda tasks, current_date, within_days=DEFAULT_UPCOMING_WINDOW_DAYS: within_days >= 0,
    "期限接近日数は0以上である必要があります"
)
def upcoming_tasks(tasks: Iterable[Task], current_date: DateInput,
                   within_days: int = DEFAULT_UPCOMING_WINDOW_DAYS) -> List[Task]:
    """
    期限接近タスクを抽出

    Completed/Delayed以外で、終了日までの残日数が0以上within_days以下のタスク。
    """
    current = parse_date(current_date)
    result = []

    for task in tasks:
        if task.status in (TaskStatus.COMPLETED, TaskStatus.DELAYED):
            continue

        diff = _days_until_due(task, current)
        if diff is not None and 0 <= diff <= within_days:
            result.append(task)

    return result


def agenda_readiness(agenda_items: Sequence[AgendaItem]) -> AgendaReadiness:
    """
    議題準備状況を集計

    Returns:
        ステータス別件数と確定率（議題0件の場合は0.0）
    """
    counts = {status: 0 for status in AgendaStatus.get_all_values()}
    for item in agenda_items:
        if item.status in counts:
            counts[item.status] += 1

    total = len(agenda_items)
    finalized = counts[AgendaStatus.FINALIZED]

    return AgendaReadiness(
        drafting=counts[AgendaStatus.DRAFTING],
        reviewing=counts[AgendaStatus.REVIEWING],
        finalized=finalized,
        total=total,
        finalized_ratio=finalized / total if total else 0.0,
    )


def team_workload(phases: Iterable[Phase], agenda_items: Iterable[AgendaItem]) -> Dict[str, Dict[str, int]]:
    """
    チームIDごとの担当件数

    削除済みチームのIDもそのまま集計する。
    """
    workload: Dict[str, Dict[str, int]] = {}

    def entry(team_id: str) -> Dict[str, int]:
        return workload.setdefault(team_id, {'tasks': 0, 'open_tasks': 0, 'agenda_items': 0})

    for task in all_tasks(phases):
        counts = entry(task.team_id)
        counts['tasks'] += 1
        if not task.is_completed():
            counts['open_tasks'] += 1

    for item in agenda_items:
        entry(item.responsible_team_id)['agenda_items'] += 1

    return workload


def next_milestone(phases: Iterable[Phase], current_date: DateInput) -> Optional[Task]:
    """基準日以降で最も近い未完了マイルストーン"""
    current = parse_date(current_date)
    if current is None:
        return None

    candidates = [
        task for task in all_tasks(phases)
        if task.is_milestone and not task.is_completed()
        and task.end is not None and task.end >= current
    ]
    if not candidates:
        return None

    return min(candidates, key=lambda task: task.end)


def dashboard_summary(phases: Sequence[Phase],
                      agenda_items: Sequence[AgendaItem],
                      agm_date: DateInput,
                      current_date: DateInput,
                      critical_countdown_days: int = DEFAULT_CRITICAL_COUNTDOWN_DAYS,
                      upcoming_window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS) -> Dict[str, Any]:
    """
    ダッシュボード表示用の集計

    Args:
        phases: フェーズ一覧
        agenda_items: 議題一覧
        agm_date: 株主総会開催日
        current_date: 基準日
        critical_countdown_days: 残日数がこれ未満で緊急扱い
        upcoming_window_days: 期限接近とみなす日数

    Returns:
        集計結果の辞書
    """
    tasks = all_tasks(phases)
    days_to_agm = days_remaining(agm_date, current_date)
    milestone = next_milestone(phases, current_date)

    return {
        'days_to_agm': days_to_agm,
        'is_critical': days_to_agm is not None and days_to_agm < critical_countdown_days,
        'overall_progress': overall_progress(phases, current_date),
        'completed_tasks': sum(1 for task in tasks if task.is_completed()),
        'total_tasks': len(tasks),
        'overdue_count': len(overdue_tasks(tasks, current_date)),
        'upcoming_count': len(upcoming_tasks(tasks, current_date, upcoming_window_days)),
        'agenda': agenda_readiness(agenda_items),
        'phase_progress': {phase.id: phase_progress(phase) for phase in phases},
        'next_milestone': milestone,
    }
