# ====================
# config/__init__.py
# ====================
"""
設定管理パッケージ
システム設定・プロジェクト日程設定
"""

from .settings import (
    SystemSettings, LoggingSettings, ProjectSettings,
    NotificationSettings, UISettings, SecuritySettings,
    ExternalIntegrationSettings, LogLevel, DateDisplay,
    get_settings, reset_global_settings
)

__version__ = "1.0.0"

__all__ = [
    # メイン設定クラス
    'SystemSettings',

    # 設定データクラス
    'LoggingSettings',
    'ProjectSettings',
    'NotificationSettings',
    'UISettings',
    'SecuritySettings',
    'ExternalIntegrationSettings',

    # 列挙型
    'LogLevel',
    'DateDisplay',

    # ユーティリティ関数
    'get_settings',
    'reset_global_settings'
]
