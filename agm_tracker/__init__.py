# ====================
# agm_tracker/__init__.py
# ====================
"""
AGMレポートトラッカー
株主総会資料作成の進捗を追跡するインメモリ管理ツール
"""

__version__ = "1.0.0"

from .core.manager import ProjectTrackingStore, TrackingSnapshot
from .core.notification_manager import NotificationService
from .config.settings import SystemSettings
from .storage import load_seed

__all__ = [
    # ストア
    'ProjectTrackingStore',
    'TrackingSnapshot',

    # サービス
    'NotificationService',

    # 設定・初期データ
    'SystemSettings',
    'load_seed',

    '__version__'
]
