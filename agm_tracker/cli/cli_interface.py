"""
CLIインターフェース
対話式コマンドラインインターフェース
"""

import shlex
from dataclasses import replace
from datetime import date
from typing import Dict, List

from ..core.manager import ProjectTrackingStore
from ..core.notification_manager import NotificationService, ALL_ON_TRACK_MESSAGE, ALL_ON_TRACK_DETAIL
from ..core.filters import TaskFilterCriteria, filter_tasks, ALL
from ..core.metrics import dashboard_summary, team_workload
from ..core.logger import LogCategory
from ..core.error_handler import TrackerError, ValidationError
from ..config.settings import SystemSettings, DateDisplay
from ..external import ExcelManager
from ..models.base import (
    TaskStatus, AgendaStatus, UserRole, DateInput,
    task_status_label, agenda_status_label, format_thai_date, format_thai_datetime,
    parse_date, DATE_SENTINEL
)
from ..models.notification import NotificationType, NOTIFICATION_TYPE_LABELS
from ..models.team import Team, team_display_name
from ..models.task import Task
from ..models.agenda_item import AgendaItem


# コマンド引数で使えるステータスの別名
TASK_STATUS_ALIASES: Dict[str, str] = {
    'pending': TaskStatus.PENDING,
    'in-progress': TaskStatus.IN_PROGRESS,
    'inprogress': TaskStatus.IN_PROGRESS,
    'completed': TaskStatus.COMPLETED,
    'done': TaskStatus.COMPLETED,
    'critical': TaskStatus.CRITICAL,
    'delayed': TaskStatus.DELAYED,
}

AGENDA_STATUS_ALIASES: Dict[str, str] = {
    'drafting': AgendaStatus.DRAFTING,
    'reviewing': AgendaStatus.REVIEWING,
    'finalized': AgendaStatus.FINALIZED,
}


def resolve_status(value: str, aliases: Dict[str, str]) -> str:
    """
    ステータス指定を正規の値に変換

    Raises:
        ValidationError: 該当するステータスが無い場合
    """
    key = value.strip().lower().replace(' ', '-').replace('_', '-')
    if key in aliases:
        return aliases[key]
    for status in aliases.values():
        if status.lower() == value.strip().lower():
            return status
    raise ValidationError(f"สถานะไม่ถูกต้อง: {value}", field="status", value=value)


class CLIInterface:
    """
    コマンドラインインターフェース
    対話式メニューシステム
    """

    def __init__(self, store: ProjectTrackingStore, notification_service: NotificationService,
                 settings: SystemSettings):
        """
        CLIインターフェースの初期化

        Args:
            store: トラッキングストア
            notification_service: 通知サービス
            settings: システム設定
        """
        self.store = store
        self.notification_service = notification_service
        self.settings = settings
        self.logger = store.logger
        self.excel = ExcelManager(store, settings)

        # 表示上の基準日（メトリクスには常に引数で渡す）
        self.current_date: date = settings.project.current_date()
        self.running = True

        self.command_history: List[str] = []

    # ==================== メインループ ====================

    def run(self) -> int:
        """
        CLIインターフェースを実行

        Returns:
            終了コード
        """
        self._show_welcome()
        self._show_help()

        while self.running:
            try:
                command = self._get_user_input()
                if command:
                    self.command_history.append(command)
                    self._execute_command(command)

            except KeyboardInterrupt:
                print("\nยกเลิกการทำงาน")
                if self._confirm("ต้องการออกจากโปรแกรมหรือไม่?"):
                    break
            except EOFError:
                print()
                break
            except TrackerError as e:
                print(f"ข้อผิดพลาด: {e.message}")
            except Exception as e:
                print(f"ข้อผิดพลาด: {e}")
                self.logger.error(
                    LogCategory.ERROR,
                    f"CLI実行エラー: {e}",
                    module="cli.cli_interface",
                    exception=e
                )

        print("ออกจากโปรแกรม")
        return 0

    def _show_welcome(self) -> None:
        """ウェルカムメッセージを表示"""
        print("=" * 60)
        print(self.settings.project.project_name)
        print("=" * 60)

        stats = self.store.get_statistics()
        print(f"ทีม: {stats['teams']} | ระยะ: {stats['phases']} | "
              f"งาน: {stats['tasks']} | วาระ: {stats['agenda_items']}")
        print(f"ข้อมูล ณ วันที่ {self._fmt_date(self.current_date)} | "
              f"บทบาท: {self.store.author}")
        print()

    def _show_help(self) -> None:
        """ヘルプメッセージを表示"""
        print("คำสั่งหลัก:")
        print("  help, h                              - แสดงคำสั่ง")
        print("  dashboard, d                         - ภาพรวมโครงการ")
        print("  timeline, t [status=] [team=] [from=] [to=] - แผนงานตามระยะ")
        print("  agenda, a                            - วาระการประชุม")
        print("  teams                                - ทีมรับผิดชอบ")
        print("  notifications, n                     - ศูนย์แจ้งเตือน")
        print("  show-task <ระยะ> <รหัสงาน>            - รายละเอียดงานและบันทึก")
        print("  show-agenda <ลำดับ>                  - รายละเอียดวาระและบันทึก")
        print("  task-status <ระยะ> <รหัสงาน> <สถานะ>   - เปลี่ยนสถานะงาน")
        print("  agenda-status <ลำดับ> <สถานะ>         - เปลี่ยนสถานะวาระ")
        print("  log-task <ระยะ> <รหัสงาน> <ข้อความ>    - เพิ่มบันทึกความคืบหน้างาน")
        print("  log-agenda <ลำดับ> <ข้อความ>          - เพิ่มบันทึกความคืบหน้าวาระ")
        print("  add-task <ระยะ> | edit-task <ระยะ> <รหัสงาน> | delete-task <ระยะ> <รหัสงาน>")
        print("  add-agenda | edit-agenda <ลำดับ> | delete-agenda <ลำดับ>")
        print("  add-team | edit-team <รหัสทีม> | delete-team <รหัสทีม>")
        print("  export [ไฟล์]                         - ส่งออกรายงาน Excel")
        print("  role <admin|staff>                   - สลับบทบาท")
        print("  today <YYYY-MM-DD>                   - เปลี่ยนวันที่อ้างอิง")
        print("  audit [จำนวน]                         - ประวัติการแก้ไขล่าสุด")
        print("  exit, quit, q                        - ออกจากโปรแกรม")
        print()

    def _get_user_input(self) -> str:
        """ユーザー入力を取得"""
        prompt = f"[AGM|{self.store.author}|{self._fmt_date(self.current_date)}]> "
        return input(prompt).strip()

    def _execute_command(self, command: str) -> None:
        """コマンドを実行"""
        if not command:
            return

        parts = shlex.split(command)
        cmd = parts[0].lower()
        args = parts[1:]

        if cmd in ['help', 'h']:
            self._show_help()
        elif cmd in ['exit', 'quit', 'q']:
            self.running = False
        elif cmd in ['dashboard', 'd']:
            self.show_dashboard()
        elif cmd in ['timeline', 't']:
            self._show_timeline(args)
        elif cmd in ['agenda', 'a']:
            self._show_agenda()
        elif cmd == 'teams':
            self._show_teams()
        elif cmd in ['notifications', 'n']:
            self.show_notifications()
        elif cmd == 'show-task':
            self._show_task(args)
        elif cmd == 'show-agenda':
            self._show_agenda_item(args)
        elif cmd == 'task-status':
            self._set_task_status(args)
        elif cmd == 'agenda-status':
            self._set_agenda_status(args)
        elif cmd == 'log-task':
            self._log_task(args)
        elif cmd == 'log-agenda':
            self._log_agenda(args)
        elif cmd == 'add-task':
            self._add_task(args)
        elif cmd == 'edit-task':
            self._edit_task(args)
        elif cmd == 'delete-task':
            self._delete_task(args)
        elif cmd == 'add-agenda':
            self._add_agenda_item()
        elif cmd == 'edit-agenda':
            self._edit_agenda_item(args)
        elif cmd == 'delete-agenda':
            self._delete_agenda_item(args)
        elif cmd == 'add-team':
            self._add_team()
        elif cmd == 'edit-team':
            self._edit_team(args)
        elif cmd == 'delete-team':
            self._delete_team(args)
        elif cmd == 'export':
            self._export(args)
        elif cmd == 'role':
            self._switch_role(args)
        elif cmd == 'today':
            self._set_today(args)
        elif cmd == 'audit':
            self._show_audit(args)
        else:
            print(f"ไม่รู้จักคำสั่ง: {command}")
            print("พิมพ์ 'help' เพื่อดูรายการคำสั่ง")

    # ==================== 表示 ====================

    def show_dashboard(self) -> None:
        """ダッシュボードを表示"""
        project = self.settings.project
        summary = dashboard_summary(
            self.store.phases,
            self.store.agenda_items,
            project.agm_date,
            self.current_date,
            critical_countdown_days=project.critical_countdown_days,
            upcoming_window_days=self.settings.notifications.upcoming_window_days
        )
        agenda = summary['agenda']

        print("\n=== ภาพรวมโครงการ ===")
        state = "วิกฤต" if summary['is_critical'] else "ปกติ"
        days_left = summary['days_to_agm']
        print(f"ระยะเวลาคงเหลือ: {DATE_SENTINEL if days_left is None else days_left} วัน "
              f"(วันประชุมใหญ่ {self._fmt_date(project.agm_date)}, สถานะ {state})")
        print(f"ความคืบหน้าภาพรวม: {summary['overall_progress']}% "
              f"({summary['completed_tasks']}/{summary['total_tasks']} งาน)")
        print(f"ความพร้อมวาระ: {agenda.finalized}/{agenda.total} ({agenda.finalized_percent}%) | "
              f"{agenda_status_label(AgendaStatus.DRAFTING)} {agenda.drafting} | "
              f"{agenda_status_label(AgendaStatus.REVIEWING)} {agenda.reviewing}")
        print(f"จุดที่ต้องเร่งแก้ไข: {summary['overdue_count']} รายการ | "
              f"ใกล้กำหนดส่ง: {summary['upcoming_count']} รายการ")

        milestone = summary['next_milestone']
        if milestone:
            print(f"Milestone ถัดไป: {milestone.id} {milestone.title} "
                  f"({self._fmt_date(milestone.end_date)})")

        print("\nความคืบหน้ารายระยะ:")
        for phase in self.store.phases:
            print(f"  {phase.name}: {summary['phase_progress'][phase.id]}%")
        print()

    def _show_timeline(self, args: List[str]) -> None:
        """タイムラインを表示（key=value 形式の絞り込み）"""
        criteria = self._parse_criteria(args)
        phases = filter_tasks(self.store.phases, criteria)

        if not self.settings.ui.show_completed_tasks and criteria.status != TaskStatus.COMPLETED:
            phases = [p.with_tasks(t for t in p.tasks if not t.is_completed()) for p in phases]
            phases = [p for p in phases if p.tasks]

        if not phases:
            print("ไม่พบงานตามเงื่อนไข")
            return

        for phase in phases:
            print(f"\n=== {phase.name} ({phase.period}) ===")
            for task in phase.tasks:
                self._print_task_line(task)
        print()

    def _parse_criteria(self, args: List[str]) -> TaskFilterCriteria:
        values = {}
        for arg in args:
            key, sep, value = arg.partition('=')
            if not sep:
                raise ValidationError(f"รูปแบบเงื่อนไขไม่ถูกต้อง: {arg}", field="filter", value=arg)
            values[key.strip().lower()] = value.strip()

        status = values.get('status', ALL)
        if status and status != ALL:
            status = resolve_status(status, TASK_STATUS_ALIASES)

        return TaskFilterCriteria(
            status=status or ALL,
            team_id=values.get('team') or ALL,
            start_date_from=values.get('from') or None,
            end_date_to=values.get('to') or None,
        )

    def _print_task_line(self, task: Task) -> None:
        mark = "◆" if task.is_milestone else "-"
        team = team_display_name(self.store.teams, task.team_id)
        print(f"  {mark} [{task.id}] {task.title}")
        print(f"      {self._fmt_date(task.start_date)} - {self._fmt_date(task.end_date)} | "
              f"{task_status_label(task.status)} | {team}"
              + (f" | {task.responsible_person}" if task.responsible_person else ""))

    def _show_agenda(self) -> None:
        """議題一覧を表示"""
        if not self.store.agenda_items:
            print("ยังไม่มีวาระ")
            return

        print("\n=== วาระการประชุม ===")
        for item in self.store.agenda_items:
            team = team_display_name(self.store.teams, item.responsible_team_id)
            print(f"  {item.id:>3}. [{agenda_status_label(item.status)}] {item.title}")
            print(f"       {team}" + (f" | {item.responsible_person}" if item.responsible_person else ""))
        print()

    def _show_teams(self) -> None:
        """チーム一覧と担当件数を表示"""
        workload = team_workload(self.store.phases, self.store.agenda_items)

        print("\n=== ทีมรับผิดชอบ ===")
        for team in self.store.teams:
            counts = workload.get(team.id, {'tasks': 0, 'open_tasks': 0, 'agenda_items': 0})
            print(f"  {team.id}: {team.name}")
            if team.description:
                print(f"      {team.description}")
            print(f"      งาน {counts['tasks']} (ค้าง {counts['open_tasks']}) | "
                  f"วาระ {counts['agenda_items']}")

        known = {team.id for team in self.store.teams}
        dangling = [team_id for team_id in workload if team_id not in known]
        for team_id in dangling:
            print(f"  {team_id}: (ไม่พบทีม) งาน {workload[team_id]['tasks']} | "
                  f"วาระ {workload[team_id]['agenda_items']}")
        print()

    def show_notifications(self) -> None:
        """通知センターを表示"""
        notifications = self.notification_service.check_and_generate_notifications(
            self.store.phases, self.current_date
        )

        print(f"\n=== ศูนย์แจ้งเตือนและติดตามงาน ({self._fmt_date(self.current_date)}) ===")

        if not notifications:
            print(ALL_ON_TRACK_MESSAGE)
            print(ALL_ON_TRACK_DETAIL)
            print()
            return

        for notification_type in (NotificationType.DEADLINE_OVERDUE, NotificationType.DEADLINE_APPROACHING):
            group = [n for n in notifications if n.type == notification_type]
            if not group:
                continue
            print(f"\n{NOTIFICATION_TYPE_LABELS[notification_type]}")
            for notification in group:
                print(f"  [{notification.priority.upper()}] {notification.message}")
                if notification.responsible_person:
                    print(f"      ผู้รับผิดชอบ: {notification.responsible_person}")
        print()

    def _show_task(self, args: List[str]) -> None:
        if len(args) < 2:
            print("วิธีใช้: show-task <ระยะ> <รหัสงาน>")
            return

        task = self.store.get_task(self._phase_id(args[0]), args[1])
        if task is None:
            print("ไม่พบงาน")
            return

        self._print_task_line(task)
        if task.description:
            print(f"      {task.description}")
        if task.progress_percent is not None:
            print(f"      ความคืบหน้า: {task.progress_percent}%")
        self._print_logs(task.logs)

    def _show_agenda_item(self, args: List[str]) -> None:
        if not args:
            print("วิธีใช้: show-agenda <ลำดับ>")
            return

        item = self.store.get_agenda_item(args[0])
        if item is None:
            print("ไม่พบวาระ")
            return

        print(f"  {item.id}. {item.title} [{agenda_status_label(item.status)}]")
        self._print_logs(item.logs)

    def _print_logs(self, logs) -> None:
        if not logs:
            print("      (ยังไม่มีบันทึก)")
            return
        print("      บันทึกความคืบหน้า:")
        for log in logs:
            print(f"      - {format_thai_datetime(log.timestamp)} {log.author}: {log.message}")

    # ==================== 変更操作 ====================

    def _set_task_status(self, args: List[str]) -> None:
        """タスクステータス更新"""
        if len(args) < 3:
            print("วิธีใช้: task-status <ระยะ> <รหัสงาน> <สถานะ>")
            print("สถานะ: pending, in-progress, completed, critical, delayed")
            return

        status = resolve_status(" ".join(args[2:]), TASK_STATUS_ALIASES)
        if self.store.set_task_status(self._phase_id(args[0]), args[1], status):
            print(f"✓ เปลี่ยนสถานะงาน {args[1]} เป็น '{task_status_label(status)}'")
        else:
            print("ไม่พบงาน")

    def _set_agenda_status(self, args: List[str]) -> None:
        """議題ステータス更新"""
        if len(args) < 2:
            print("วิธีใช้: agenda-status <ลำดับ> <สถานะ>")
            print("สถานะ: drafting, reviewing, finalized")
            return

        status = resolve_status(args[1], AGENDA_STATUS_ALIASES)
        if self.store.set_agenda_status(args[0], status):
            print(f"✓ เปลี่ยนสถานะวาระ {args[0]} เป็น '{agenda_status_label(status)}'")
        else:
            print("ไม่พบวาระ")

    def _log_task(self, args: List[str]) -> None:
        if len(args) < 3:
            print("วิธีใช้: log-task <ระยะ> <รหัสงาน> <ข้อความ>")
            return

        message = " ".join(args[2:])
        if self.store.append_task_log(self._phase_id(args[0]), args[1], message, self.store.author):
            print("✓ บันทึกความคืบหน้าเรียบร้อย")
        else:
            print("ไม่พบงาน")

    def _log_agenda(self, args: List[str]) -> None:
        if len(args) < 2:
            print("วิธีใช้: log-agenda <ลำดับ> <ข้อความ>")
            return

        message = " ".join(args[1:])
        if self.store.append_agenda_log(args[0], message, self.store.author):
            print("✓ บันทึกความคืบหน้าเรียบร้อย")
        else:
            print("ไม่พบวาระ")

    def _add_task(self, args: List[str]) -> None:
        """タスク作成"""
        if not args:
            print("วิธีใช้: add-task <ระยะ>")
            return

        phase_id = self._phase_id(args[0])
        if self.store.get_phase(phase_id) is None:
            print("ไม่พบระยะ")
            return

        print("\n=== เพิ่มงาน ===")
        task_id = input("รหัสงาน: ").strip()
        title = input("ชื่องาน: ").strip()
        if not task_id or not title:
            print("ต้องระบุรหัสงานและชื่องาน")
            return

        task = Task(
            id=task_id,
            title=title,
            description=input("รายละเอียด (ไม่บังคับ): ").strip(),
            start_date=input("วันเริ่ม (YYYY-MM-DD): ").strip(),
            end_date=input("วันสิ้นสุด (YYYY-MM-DD): ").strip(),
            team_id=input("รหัสทีม: ").strip(),
            responsible_person=input("ผู้รับผิดชอบ (ไม่บังคับ): ").strip() or None,
            is_milestone=self._confirm("เป็น Milestone หรือไม่?"),
        )

        if self.store.add_task(phase_id, task):
            print(f"✓ เพิ่มงาน '{task.title}' แล้ว")

    def _delete_task(self, args: List[str]) -> None:
        if len(args) < 2:
            print("วิธีใช้: delete-task <ระยะ> <รหัสงาน>")
            return

        if self.store.delete_task(self._phase_id(args[0]), args[1]):
            print(f"✓ ลบงาน {args[1]} แล้ว")
        else:
            print("ไม่พบงาน")

    def _edit_task(self, args: List[str]) -> None:
        """タスク編集（空入力は現在値を維持）"""
        if len(args) < 2:
            print("วิธีใช้: edit-task <ระยะ> <รหัสงาน>")
            return

        phase_id = self._phase_id(args[0])
        task = self.store.get_task(phase_id, args[1])
        if task is None:
            print("ไม่พบงาน")
            return

        print(f"\n=== แก้ไขงาน {task.id} === (เว้นว่างเพื่อคงค่าเดิม)")
        current_progress = "" if task.progress_percent is None else str(task.progress_percent)
        updated = replace(
            task,
            title=self._prompt("ชื่องาน", task.title),
            description=self._prompt("รายละเอียด", task.description),
            start_date=self._prompt("วันเริ่ม (YYYY-MM-DD)", task.start_date),
            end_date=self._prompt("วันสิ้นสุด (YYYY-MM-DD)", task.end_date),
            team_id=self._prompt("รหัสทีม", task.team_id),
            responsible_person=self._prompt("ผู้รับผิดชอบ", task.responsible_person or "") or None,
            progress_percent=self._parse_progress(self._prompt("ความคืบหน้า (%)", current_progress)),
        )

        if self.store.update_task(phase_id, updated):
            print(f"✓ แก้ไขงาน '{updated.title}' แล้ว")

    def _add_agenda_item(self) -> None:
        print("\n=== เพิ่มวาระ ===")
        item_id = input("ลำดับ: ").strip()
        title = input("หัวข้อ: ").strip()
        if not item_id or not title:
            print("ต้องระบุลำดับและหัวข้อ")
            return

        item = AgendaItem(
            id=item_id,
            title=title,
            responsible_team_id=input("รหัสทีม: ").strip(),
            responsible_person=input("ผู้รับผิดชอบ (ไม่บังคับ): ").strip() or None,
        )

        if self.store.add_agenda_item(item):
            print(f"✓ เพิ่มวาระ '{item.title}' แล้ว")

    def _delete_agenda_item(self, args: List[str]) -> None:
        if not args:
            print("วิธีใช้: delete-agenda <ลำดับ>")
            return

        if self.store.delete_agenda_item(args[0]):
            print(f"✓ ลบวาระ {args[0]} แล้ว")
        else:
            print("ไม่พบวาระ")

    def _edit_agenda_item(self, args: List[str]) -> None:
        """議題編集（空入力は現在値を維持）"""
        if not args:
            print("วิธีใช้: edit-agenda <ลำดับ>")
            return

        item = self.store.get_agenda_item(args[0])
        if item is None:
            print("ไม่พบวาระ")
            return

        print(f"\n=== แก้ไขวาระ {item.id} === (เว้นว่างเพื่อคงค่าเดิม)")
        updated = replace(
            item,
            title=self._prompt("หัวข้อ", item.title),
            responsible_team_id=self._prompt("รหัสทีม", item.responsible_team_id),
            responsible_person=self._prompt("ผู้รับผิดชอบ", item.responsible_person or "") or None,
        )

        if self.store.update_agenda_item(updated):
            print(f"✓ แก้ไขวาระ '{updated.title}' แล้ว")

    def _add_team(self) -> None:
        print("\n=== เพิ่มทีม ===")
        name = input("ชื่อทีม: ").strip()
        if not name:
            print("ต้องระบุชื่อทีม")
            return

        team = Team.create(name, description=input("รายละเอียด (ไม่บังคับ): ").strip())
        if self.store.add_team(team):
            print(f"✓ เพิ่มทีม '{team.name}' แล้ว (รหัส: {team.id})")

    def _delete_team(self, args: List[str]) -> None:
        if not args:
            print("วิธีใช้: delete-team <รหัสทีม>")
            return

        if self.store.delete_team(args[0]):
            print(f"✓ ลบทีม {args[0]} แล้ว (งานและวาระที่อ้างอิงยังคงอยู่)")
        else:
            print("ไม่พบทีม")

    def _edit_team(self, args: List[str]) -> None:
        """チーム編集（IDは変更不可）"""
        if not args:
            print("วิธีใช้: edit-team <รหัสทีม>")
            return

        team = self.store.get_team(args[0])
        if team is None:
            print("ไม่พบทีม")
            return

        print(f"\n=== แก้ไขทีม {team.id} === (เว้นว่างเพื่อคงค่าเดิม)")
        updated = replace(
            team,
            name=self._prompt("ชื่อทีม", team.name),
            color_tag=self._prompt("สีประจำทีม", team.color_tag),
            description=self._prompt("รายละเอียด", team.description or "") or None,
        )

        if self.store.update_team(updated):
            print(f"✓ แก้ไขทีม '{updated.name}' แล้ว")

    # ==================== その他 ====================

    def _export(self, args: List[str]) -> None:
        result = self.excel.export_excel(args[0] if args else None)
        print(f"✓ ส่งออกรายงานแล้ว: {result.file_path} ({result.exported_counts['tasks']} งาน)")

    def _switch_role(self, args: List[str]) -> None:
        if not args:
            print(f"บทบาทปัจจุบัน: {self.store.author}")
            return

        role = args[0].lower()
        if not UserRole.is_valid(role):
            print("บทบาทต้องเป็น admin หรือ staff")
            return

        self.store.set_role(role)
        print(f"✓ เปลี่ยนบทบาทเป็น {self.store.author}")

    def _set_today(self, args: List[str]) -> None:
        if not args:
            print(f"วันที่อ้างอิง: {self._fmt_date(self.current_date)}")
            return

        parsed = parse_date(args[0])
        if parsed is None:
            print("รูปแบบวันที่ไม่ถูกต้อง (YYYY-MM-DD)")
            return

        self.current_date = parsed
        print(f"✓ วันที่อ้างอิง: {self._fmt_date(parsed)}")

    def _show_audit(self, args: List[str]) -> None:
        """監査ログを新しい順に表示"""
        limit = int(args[0]) if args and args[0].isdigit() else 10
        entries = self.logger.get_audit_logs(limit=limit)

        if not entries:
            print("ยังไม่มีประวัติการแก้ไข")
            return

        print("\n=== ประวัติการแก้ไขล่าสุด ===")
        for entry in entries:
            print(f"  {format_thai_datetime(entry.timestamp)} [{entry.user}] "
                  f"{entry.action} {entry.entity_type} {entry.entity_id} {entry.entity_name}")
        print()

    # ==================== ユーティリティ ====================

    @staticmethod
    def _phase_id(value: str) -> int:
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"รหัสระยะต้องเป็นตัวเลข: {value}", field="phase_id", value=value)

    def _fmt_date(self, value: DateInput) -> str:
        if self.settings.ui.date_display == DateDisplay.ISO.value:
            parsed = parse_date(value)
            return parsed.isoformat() if parsed else "-"
        return format_thai_date(value)

    @staticmethod
    def _prompt(label: str, current: str) -> str:
        """現在値を表示して入力を受け付ける"""
        value = input(f"{label} [{current}]: ").strip()
        return value or current

    @staticmethod
    def _parse_progress(value: str):
        if not value:
            return None
        try:
            return int(value)
        except ValueError:
            raise ValidationError(f"ความคืบหน้าต้องเป็นตัวเลข: {value}", field="progress_percent", value=value)

    def _confirm(self, message: str) -> bool:
        """確認ダイアログ"""
        while True:
            response = input(f"{message} (y/n): ").strip().lower()
            if response in ['y', 'yes', 'ใช่']:
                return True
            elif response in ['n', 'no', 'ไม่']:
                return False
            else:
                print("กรุณาตอบ y หรือ n")

    def __str__(self) -> str:
        return f"CLIInterface(commands={len(self.command_history)}, today={self.current_date})"
