# ====================
# storage/__init__.py
# ====================
"""
シードデータパッケージ
初期状態の読み込み（状態の永続化は行わない）
"""

from .fixtures import load_seed, load_json_seed, save_seed, snapshot_from_dict
from .seed_data import seed_dict

__version__ = "1.0.0"

__all__ = [
    'load_seed',
    'load_json_seed',
    'save_seed',
    'snapshot_from_dict',
    'seed_dict'
]
