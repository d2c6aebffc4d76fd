"""
システム設定管理
プロジェクト日程・通知・表示・ロール設定の一元管理
"""

import json
import os
from dataclasses import dataclass, asdict, fields
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.base import UserRole, parse_date


class LogLevel(Enum):
    """ログレベル定義"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# 対応している表示言語
SUPPORTED_LANGUAGES = ("th",)


class DateDisplay(Enum):
    """日付表示形式"""
    THAI = "thai"
    ISO = "iso"


@dataclass
class LoggingSettings:
    """ログ設定"""
    level: str = LogLevel.INFO.value
    log_directory: Optional[str] = None
    max_file_size_mb: int = 100
    backup_count: int = 5
    enable_console_output: bool = True
    enable_audit_log: bool = True


@dataclass
class ProjectSettings:
    """プロジェクト日程設定"""
    project_name: str = "AGM 2569 Report Tracker"
    agm_date: str = "2026-03-13"
    simulated_today: Optional[str] = "2026-02-07"
    critical_countdown_days: int = 14

    def current_date(self) -> date:
        """基準日（模擬日付が未設定なら実日付）"""
        return parse_date(self.simulated_today) or date.today()


@dataclass
class NotificationSettings:
    """通知設定"""
    enabled: bool = True
    upcoming_window_days: int = 3
    enable_overdue: bool = True
    enable_upcoming: bool = True


@dataclass
class UISettings:
    """UI設定"""
    language: str = "th"
    user_role: str = UserRole.ADMIN
    date_display: str = DateDisplay.THAI.value
    show_completed_tasks: bool = True


@dataclass
class SecuritySettings:
    """セキュリティ設定"""
    enforce_role_permissions: bool = False


@dataclass
class ExternalIntegrationSettings:
    """外部連携設定"""
    excel_import_enabled: bool = True
    excel_export_enabled: bool = True
    default_export_file: str = "agm_report.xlsx"


SECTION_TYPES = {
    'logging': LoggingSettings,
    'project': ProjectSettings,
    'notifications': NotificationSettings,
    'ui': UISettings,
    'security': SecuritySettings,
    'external': ExternalIntegrationSettings,
}


def _build_section(section_cls, data: Dict[str, Any]):
    """既知の項目だけを使って設定セクションを生成"""
    known = {f.name for f in fields(section_cls)}
    return section_cls(**{key: value for key, value in data.items() if key in known})


class SystemSettings:
    """
    システム設定統合管理クラス

    設定ファイルは読み込み専用として扱い、自動生成しない。
    保存は save_settings() を明示的に呼んだ場合のみ行う。
    """

    def __init__(self, config_file: str = None):
        """
        設定管理の初期化

        Args:
            config_file: 設定ファイルパス（省略時はデフォルト設定のみ）
        """
        self.config_file = Path(config_file) if config_file else None
        self.load_errors: List[str] = []

        self._set_defaults()

        if self.config_file is not None:
            self.load_settings()

    def _set_defaults(self) -> None:
        self.logging = LoggingSettings()
        self.project = ProjectSettings()
        self.notifications = NotificationSettings()
        self.ui = UISettings()
        self.security = SecuritySettings()
        self.external = ExternalIntegrationSettings()

    def load_settings(self) -> bool:
        """
        設定ファイルから設定を読み込み

        Returns:
            読み込み成功の可否（ファイルが無い場合はデフォルトのままTrue）
        """
        if self.config_file is None or not self.config_file.exists():
            return True

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise TypeError("設定ファイルのルートはオブジェクトである必要があります")

            for section, section_cls in SECTION_TYPES.items():
                if isinstance(data.get(section), dict):
                    setattr(self, section, _build_section(section_cls, data[section]))

            return True

        except (json.JSONDecodeError, TypeError, ValueError, OSError) as e:
            # 読み込みエラーの場合はデフォルト設定を使用
            self._set_defaults()
            self.load_errors.append(f"設定読み込みエラー（デフォルト設定を使用）: {e}")
            return False

    def save_settings(self, file_path: str = None) -> bool:
        """
        設定をファイルに保存

        Args:
            file_path: 保存先（省略時は読み込み元）

        Returns:
            保存成功の可否
        """
        target = Path(file_path) if file_path else self.config_file
        if target is None:
            return False

        target.parent.mkdir(parents=True, exist_ok=True)

        # 一時ファイルに書き込み後、置換
        temp_file = target.with_suffix('.tmp')
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(self.get_all_settings(), f, ensure_ascii=False, indent=2)
        os.replace(temp_file, target)

        return True

    def update_setting(self, section: str, key: str, value: Any) -> bool:
        """
        個別設定を更新（メモリ上のみ）

        Args:
            section: 設定セクション（project, notifications等）
            key: 設定キー
            value: 設定値

        Returns:
            更新成功の可否
        """
        section_obj = getattr(self, section, None) if section in SECTION_TYPES else None
        if section_obj is None or not hasattr(section_obj, key):
            return False

        setattr(section_obj, key, value)
        return True

    def validate_settings(self) -> Dict[str, List[str]]:
        """
        設定の妥当性を検証

        Returns:
            セクション別のエラーメッセージ
        """
        errors = {}

        log_errors = []
        valid_levels = [level.value for level in LogLevel]
        if self.logging.level not in valid_levels:
            log_errors.append(f"無効なログレベル: {self.logging.level}")
        if self.logging.max_file_size_mb < 1:
            log_errors.append("ログファイルサイズは1MB以上である必要があります")
        if self.logging.backup_count < 1:
            log_errors.append("バックアップ数は1以上である必要があります")
        if log_errors:
            errors['logging'] = log_errors

        project_errors = []
        if parse_date(self.project.agm_date) is None:
            project_errors.append(f"無効な総会日: {self.project.agm_date}")
        if self.project.simulated_today and parse_date(self.project.simulated_today) is None:
            project_errors.append(f"無効な模擬日付: {self.project.simulated_today}")
        if self.project.critical_countdown_days < 0:
            project_errors.append("緊急扱いの日数は0以上である必要があります")
        if project_errors:
            errors['project'] = project_errors

        notif_errors = []
        if self.notifications.upcoming_window_days < 0:
            notif_errors.append("期限接近日数は0以上である必要があります")
        if notif_errors:
            errors['notifications'] = notif_errors

        ui_errors = []
        if not UserRole.is_valid(self.ui.user_role):
            ui_errors.append(f"無効なロール: {self.ui.user_role}")
        if self.ui.language not in SUPPORTED_LANGUAGES:
            ui_errors.append(f"未対応の表示言語: {self.ui.language}")
        valid_displays = [display.value for display in DateDisplay]
        if self.ui.date_display not in valid_displays:
            ui_errors.append(f"無効な日付表示形式: {self.ui.date_display}")
        if ui_errors:
            errors['ui'] = ui_errors

        return errors

    def get_all_settings(self) -> Dict[str, Any]:
        """全設定を辞書として取得"""
        return {section: asdict(getattr(self, section)) for section in SECTION_TYPES}

    def __str__(self) -> str:
        return f"SystemSettings(config_file='{self.config_file}')"


# グローバル設定インスタンス
_global_settings: Optional[SystemSettings] = None


def get_settings(config_file: str = None) -> SystemSettings:
    """
    グローバル設定インスタンスを取得

    Args:
        config_file: 設定ファイルパス（初回のみ使用）

    Returns:
        設定インスタンス
    """
    global _global_settings

    if _global_settings is None:
        _global_settings = SystemSettings(config_file)

    return _global_settings


def reset_global_settings() -> None:
    """グローバル設定インスタンスをリセット"""
    global _global_settings
    _global_settings = None
