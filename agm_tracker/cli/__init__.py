# ====================
# cli/__init__.py
# ====================
"""
CLIインターフェースパッケージ
ダッシュボード・タイムライン・議題・通知の対話操作
"""

from .cli_interface import CLIInterface, resolve_status, TASK_STATUS_ALIASES, AGENDA_STATUS_ALIASES

__version__ = "1.0.0"

__all__ = [
    'CLIInterface',
    'resolve_status',
    'TASK_STATUS_ALIASES',
    'AGENDA_STATUS_ALIASES'
]
