#!/usr/bin/env python3
"""
AGMレポートトラッカー メインエントリーポイント
アプリケーション起動・初期化・例外ハンドリング
"""

import sys
import logging
import argparse
from typing import List, Optional

from . import __version__
from .core.manager import ProjectTrackingStore
from .core.notification_manager import NotificationService
from .core.logger import ProjectLogger, LogCategory
from .core.error_handler import get_error_handler, TrackerError
from .config.settings import SystemSettings
from .storage import load_seed
from .cli.cli_interface import CLIInterface


class ApplicationManager:
    """
    アプリケーション管理クラス
    起動・初期化・シャットダウンの制御
    """

    def __init__(self):
        self.settings: Optional[SystemSettings] = None
        self.store: Optional[ProjectTrackingStore] = None
        self.notification_service: Optional[NotificationService] = None
        self.logger: Optional[ProjectLogger] = None
        self.error_handler = get_error_handler()
        self.is_initialized = False

    def initialize(self, config_file: str = None, seed_path: str = None,
                   log_level: str = None, role: str = None, today: str = None) -> bool:
        """
        アプリケーションを初期化

        Args:
            config_file: 設定ファイルパス
            seed_path: 初期データファイル（JSON / xlsx）
            log_level: コンソールのログレベル
            role: 操作ロール（設定より優先）
            today: 基準日 YYYY-MM-DD（設定より優先）

        Returns:
            初期化成功の可否
        """
        try:
            # 設定読み込み（ファイルは自動生成しない）
            self.settings = SystemSettings(config_file)
            for error in self.settings.load_errors:
                print(f"คำเตือน: โหลดไฟล์ตั้งค่าไม่สำเร็จ ใช้ค่าเริ่มต้นแทน ({error})")

            if log_level:
                self.settings.logging.level = log_level
            if role:
                self.settings.ui.user_role = role
            if today:
                self.settings.project.simulated_today = today

            errors = self.settings.validate_settings()
            if errors:
                for section, messages in errors.items():
                    for message in messages:
                        print(f"การตั้งค่าไม่ถูกต้อง [{section}]: {message}")
                return False

            # ログ管理システム初期化
            self.logger = ProjectLogger()
            logging_settings = self.settings.logging
            if logging_settings.log_directory:
                self.logger.configure_file_output(
                    logging_settings.log_directory,
                    max_file_size_mb=logging_settings.max_file_size_mb,
                    backup_count=logging_settings.backup_count
                )
            # コンソールは既定でWARNING以上（--log-level 指定時のみ変更）
            if not logging_settings.enable_console_output:
                self.logger.set_console_level("CRITICAL")
            elif log_level:
                self.logger.set_console_level(log_level)
            logging.getLogger().setLevel(getattr(logging, logging_settings.level, logging.INFO))
            self.logger.audit_enabled = logging_settings.enable_audit_log

            self.logger.info(
                LogCategory.SYSTEM,
                "アプリケーション初期化開始",
                module="main",
                config_file=config_file,
                seed_path=seed_path
            )

            # 初期状態を読み込んでストアを構築
            snapshot = load_seed(seed_path)
            self.store = ProjectTrackingStore(
                snapshot,
                role=self.settings.ui.user_role,
                enforce_role_permissions=self.settings.security.enforce_role_permissions
            )

            # 通知サービス初期化
            self.notification_service = NotificationService.from_settings(self.settings.notifications)

            self.is_initialized = True

            stats = self.store.get_statistics()
            self.logger.info(
                LogCategory.SYSTEM,
                f"初期化完了 - Teams: {stats['teams']}, Phases: {stats['phases']}, "
                f"Tasks: {stats['tasks']}, AgendaItems: {stats['agenda_items']}",
                module="main",
                statistics=stats
            )
            return True

        except TrackerError as e:
            print(f"เริ่มต้นระบบไม่สำเร็จ: {e.message}")
            if self.logger:
                self.logger.critical(
                    LogCategory.SYSTEM,
                    f"初期化エラー: {e.message}",
                    module="main",
                    exception=e
                )
            return False

    def create_cli(self) -> CLIInterface:
        return CLIInterface(self.store, self.notification_service, self.settings)

    def run_cli(self) -> int:
        """
        CLIモードでアプリケーションを実行

        Returns:
            終了コード
        """
        return self.create_cli().run()

    def print_summary(self) -> int:
        """ダッシュボードと通知を表示して終了"""
        cli = self.create_cli()
        cli.show_dashboard()
        cli.show_notifications()
        return 0

    def export(self, file_path: str) -> int:
        """Excelレポートを出力して終了"""
        try:
            result = self.create_cli().excel.export_excel(file_path)
        except TrackerError as e:
            print(f"ส่งออกรายงานไม่สำเร็จ: {e.message}")
            return 1

        print(f"ส่งออกรายงานแล้ว: {result.file_path}")
        return 0

    def shutdown(self) -> None:
        """アプリケーションを終了"""
        if not self.is_initialized:
            return

        error_stats = self.error_handler.get_error_statistics()
        if error_stats['total_errors'] > 0:
            self.logger.info(
                LogCategory.SYSTEM,
                "セッション終了時エラー統計",
                module="main",
                error_statistics=error_stats
            )

        self.logger.info(LogCategory.SYSTEM, "アプリケーション終了", module="main")

    def __enter__(self):
        """コンテキストマネージャー開始"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """コンテキストマネージャー終了"""
        self.shutdown()


def create_argument_parser() -> argparse.ArgumentParser:
    """コマンドライン引数パーサーを作成"""
    parser = argparse.ArgumentParser(
        prog="agm-tracker",
        description="AGM 2569 Report Tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用例:
  %(prog)s                          # CLIモードで起動
  %(prog)s --summary                # ダッシュボードと通知を表示
  %(prog)s --today 2026-02-07 --summary
  %(prog)s --seed seed.json --export report.xlsx
  %(prog)s --role staff
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        metavar='FILE',
        help='設定ファイルパス（省略時はデフォルト設定）'
    )

    parser.add_argument(
        '--seed',
        type=str,
        metavar='FILE',
        help='初期データファイル（.json / .xlsx、省略時は組み込みデータ）'
    )

    parser.add_argument(
        '--today',
        type=str,
        metavar='YYYY-MM-DD',
        help='基準日を指定'
    )

    parser.add_argument(
        '--role',
        choices=['admin', 'staff'],
        help='操作ロール'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='ログレベルを指定'
    )

    parser.add_argument(
        '--summary',
        action='store_true',
        help='ダッシュボードと通知を表示して終了'
    )

    parser.add_argument(
        '--export',
        type=str,
        metavar='FILE',
        help='Excelレポートを出力して終了'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def main(argv: List[str] = None) -> int:
    """メイン関数"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        with ApplicationManager() as app:
            if not app.initialize(
                config_file=args.config,
                seed_path=args.seed,
                log_level=args.log_level,
                role=args.role,
                today=args.today
            ):
                return 1

            if args.export:
                return app.export(args.export)

            if args.summary:
                return app.print_summary()

            return app.run_cli()

    except KeyboardInterrupt:
        print("\n\nยกเลิกการทำงาน")
        return 0


if __name__ == "__main__":
    sys.exit(main())
