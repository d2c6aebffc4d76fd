"""
ログ管理システム
アプリケーションログ・監査証跡・統計情報を提供
"""

import json
import logging
import logging.handlers
import threading
import traceback
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional


class LogLevel:
    """ログレベル定義"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogCategory:
    """ログカテゴリ定義"""
    SYSTEM = "SYSTEM"
    DATA = "DATA"
    USER = "USER"
    AUDIT = "AUDIT"
    ERROR = "ERROR"


class AuditAction:
    """監査アクション定義"""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    APPEND_LOG = "APPEND_LOG"
    EXPORT = "EXPORT"
    IMPORT = "IMPORT"


class LogEntry:
    """ログエントリクラス"""

    def __init__(self,
                 level: str,
                 category: str,
                 message: str,
                 module: str = None,
                 user: str = None):
        """
        ログエントリの初期化

        Args:
            level: ログレベル
            category: ログカテゴリ
            message: ログメッセージ
            module: モジュール名
            user: 操作ロールのラベル
        """
        self.id = str(uuid.uuid4())
        self.timestamp = datetime.now()
        self.level = level
        self.category = category
        self.message = message
        self.module = module or "unknown"
        self.user = user or "system"
        self.metadata: Dict[str, Any] = {}

    def add_metadata(self, key: str, value: Any) -> None:
        """メタデータを追加"""
        self.metadata[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat(),
            'level': self.level,
            'category': self.category,
            'message': self.message,
            'module': self.module,
            'user': self.user,
            'metadata': self.metadata.copy()
        }


class AuditEntry:
    """監査エントリクラス"""

    def __init__(self,
                 action: str,
                 entity_type: str,
                 entity_id: str,
                 entity_name: str,
                 user: str,
                 details: str = ""):
        """
        監査エントリの初期化

        Args:
            action: 実行されたアクション
            entity_type: 対象エンティティタイプ
            entity_id: 対象エンティティID
            entity_name: 対象エンティティ名
            user: 実行ロールのラベル
            details: 詳細情報
        """
        self.id = str(uuid.uuid4())
        self.timestamp = datetime.now()
        self.action = action
        self.entity_type = entity_type
        self.entity_id = str(entity_id)
        self.entity_name = entity_name
        self.user = user
        self.details = details
        self.before_data: Optional[Dict[str, Any]] = None
        self.after_data: Optional[Dict[str, Any]] = None
        self.metadata: Dict[str, Any] = {}

    def set_data_change(self, before: Dict[str, Any], after: Dict[str, Any]) -> None:
        """変更前後のデータを設定"""
        self.before_data = before.copy() if before else None
        self.after_data = after.copy() if after else None

    def add_metadata(self, key: str, value: Any) -> None:
        """メタデータを追加"""
        self.metadata[key] = value

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'id': self.id,
            'timestamp': self.timestamp.isoformat(),
            'action': self.action,
            'entity_type': self.entity_type,
            'entity_id': self.entity_id,
            'entity_name': self.entity_name,
            'user': self.user,
            'details': self.details,
            'before_data': self.before_data,
            'after_data': self.after_data,
            'metadata': self.metadata.copy()
        }


class LogStatistics:
    """ログ統計クラス"""

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """統計をリセット"""
        self.start_time = datetime.now()
        self.level_counts = {level: 0 for level in [
            LogLevel.DEBUG, LogLevel.INFO, LogLevel.WARNING,
            LogLevel.ERROR, LogLevel.CRITICAL
        ]}
        self.category_counts: Dict[str, int] = {}
        self.total_entries = 0
        self.error_count = 0
        self.last_error: Optional[datetime] = None

    def update(self, entry: LogEntry) -> None:
        """統計を更新"""
        self.total_entries += 1
        self.level_counts[entry.level] = self.level_counts.get(entry.level, 0) + 1
        self.category_counts[entry.category] = self.category_counts.get(entry.category, 0) + 1

        if entry.level in [LogLevel.ERROR, LogLevel.CRITICAL]:
            self.error_count += 1
            self.last_error = entry.timestamp

    def get_summary(self) -> Dict[str, Any]:
        """統計サマリーを取得"""
        return {
            'start_time': self.start_time.isoformat(),
            'total_entries': self.total_entries,
            'error_count': self.error_count,
            'error_rate': (self.error_count / self.total_entries) * 100 if self.total_entries > 0 else 0,
            'last_error': self.last_error.isoformat() if self.last_error else None,
            'level_counts': self.level_counts.copy(),
            'category_counts': self.category_counts.copy()
        }


class ProjectLogger:
    """
    AGMトラッカー専用ログ管理クラス
    プロセス内で単一のインスタンスを共有する
    """

    _instance: Optional['ProjectLogger'] = None
    _lock = threading.Lock()

    def __new__(cls, log_dir: str = None) -> 'ProjectLogger':
        """シングルトンインスタンスを取得"""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, log_dir: str = None):
        """
        ログ管理システムの初期化

        Args:
            log_dir: ログディレクトリパス（省略時はファイル出力なし）
        """
        if self._initialized:
            if log_dir and self.log_dir is None:
                self.configure_file_output(log_dir)
            return

        self.log_dir: Optional[Path] = None

        self.log_entries: List[LogEntry] = []
        self.audit_entries: List[AuditEntry] = []

        self.statistics = LogStatistics()
        self._lock_entries = threading.RLock()

        # 設定
        self.max_entries_in_memory = 10000
        self.audit_enabled = True
        self.max_log_file_size = 100 * 1024 * 1024  # 100MB
        self.backup_count = 5
        self._file_handlers: List[logging.Handler] = []

        self._setup_python_logging()
        if log_dir:
            self.configure_file_output(log_dir)

        # 現在の操作ロール
        self.current_user = "system"

        self._initialized = True

        self.info(LogCategory.SYSTEM, "ログ管理システムが初期化されました", module="core.logger")

    def _setup_python_logging(self) -> None:
        """Python標準ログの設定（コンソール出力のみ）"""
        root_logger = logging.getLogger()
        if root_logger.level == logging.NOTSET or root_logger.level > logging.INFO:
            root_logger.setLevel(logging.INFO)

        self.console_handler = logging.StreamHandler()
        self.console_handler.setLevel(logging.WARNING)
        self.console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))
        root_logger.addHandler(self.console_handler)

    def configure_file_output(self, log_dir: str,
                              max_file_size_mb: int = None,
                              backup_count: int = None) -> None:
        """
        ファイル出力を有効化

        Args:
            log_dir: ログディレクトリパス
            max_file_size_mb: ローテーションサイズ（MB）
            backup_count: 世代数
        """
        if max_file_size_mb:
            self.max_log_file_size = max_file_size_mb * 1024 * 1024
        if backup_count:
            self.backup_count = backup_count

        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        root_logger = logging.getLogger()
        for handler in self._file_handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._file_handlers = []

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

        app_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "application.log",
            maxBytes=self.max_log_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        app_handler.setFormatter(formatter)

        error_handler = logging.handlers.RotatingFileHandler(
            self.log_dir / "error.log",
            maxBytes=self.max_log_file_size,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        for handler in (app_handler, error_handler):
            root_logger.addHandler(handler)
            self._file_handlers.append(handler)

    def set_console_level(self, level: str) -> None:
        """コンソール出力レベルを設定"""
        self.console_handler.setLevel(getattr(logging, level, logging.WARNING))

    def set_user_context(self, user: str) -> None:
        """操作ロールのラベルを設定"""
        self.current_user = user

    def _log(self, level: str, category: str, message: str,
             module: str = None, **metadata) -> None:
        """内部ログ処理"""
        with self._lock_entries:
            entry = LogEntry(level, category, message, module, self.current_user)

            for key, value in metadata.items():
                entry.add_metadata(key, value)

            self.log_entries.append(entry)

            # メモリ制限チェック
            if len(self.log_entries) > self.max_entries_in_memory:
                self.log_entries = self.log_entries[-self.max_entries_in_memory//2:]

            self.statistics.update(entry)

            # Python標準ログに出力
            logger = logging.getLogger(module or 'agm_tracker')
            log_message = f"[{category}] {message}"

            if metadata:
                log_message += f" | {json.dumps(metadata, ensure_ascii=False, default=str)}"

            logger.log(getattr(logging, level, logging.INFO), log_message)

    def debug(self, category: str, message: str, module: str = None, **metadata) -> None:
        """デバッグログ"""
        self._log(LogLevel.DEBUG, category, message, module, **metadata)

    def info(self, category: str, message: str, module: str = None, **metadata) -> None:
        """情報ログ"""
        self._log(LogLevel.INFO, category, message, module, **metadata)

    def warning(self, category: str, message: str, module: str = None, **metadata) -> None:
        """警告ログ"""
        self._log(LogLevel.WARNING, category, message, module, **metadata)

    def error(self, category: str, message: str, module: str = None,
              exception: Exception = None, **metadata) -> None:
        """エラーログ"""
        if exception:
            metadata['exception_type'] = type(exception).__name__
            metadata['exception_message'] = str(exception)
            metadata['traceback'] = ''.join(
                traceback.format_exception(type(exception), exception, exception.__traceback__)
            )

        self._log(LogLevel.ERROR, category, message, module, **metadata)

    def critical(self, category: str, message: str, module: str = None,
                 exception: Exception = None, **metadata) -> None:
        """クリティカルログ"""
        if exception:
            metadata['exception_type'] = type(exception).__name__
            metadata['exception_message'] = str(exception)

        self._log(LogLevel.CRITICAL, category, message, module, **metadata)

    def audit(self, action: str, entity_type: str, entity_id: str,
              entity_name: str, details: str = "",
              before_data: Dict[str, Any] = None,
              after_data: Dict[str, Any] = None, **metadata) -> Optional[AuditEntry]:
        """監査ログ（無効化されている場合はNone）"""
        if not self.audit_enabled:
            return None

        with self._lock_entries:
            entry = AuditEntry(action, entity_type, entity_id, entity_name,
                               self.current_user, details)

            if before_data or after_data:
                entry.set_data_change(before_data, after_data)

            for key, value in metadata.items():
                entry.add_metadata(key, value)

            self.audit_entries.append(entry)

            if len(self.audit_entries) > self.max_entries_in_memory:
                self.audit_entries = self.audit_entries[-self.max_entries_in_memory//2:]

            audit_logger = logging.getLogger('audit')
            audit_logger.info(json.dumps(
                {
                    'action': entry.action,
                    'entity_type': entry.entity_type,
                    'entity_id': entry.entity_id,
                    'entity_name': entry.entity_name,
                    'user': entry.user,
                    'details': entry.details
                },
                ensure_ascii=False, default=str
            ))

            return entry

    def get_logs(self, level: str = None, category: str = None,
                 module: str = None, user: str = None,
                 limit: Optional[int] = 1000) -> List[LogEntry]:
        """ログエントリを検索（新しい順）"""
        with self._lock_entries:
            filtered_logs = []

            for entry in reversed(self.log_entries):
                if level and entry.level != level:
                    continue
                if category and entry.category != category:
                    continue
                if module and entry.module != module:
                    continue
                if user and entry.user != user:
                    continue

                filtered_logs.append(entry)

                if limit is not None and len(filtered_logs) >= limit:
                    break

            return filtered_logs

    def get_audit_logs(self, action: str = None, entity_type: str = None,
                       entity_id: str = None, user: str = None,
                       limit: Optional[int] = 1000) -> List[AuditEntry]:
        """監査ログを検索（新しい順）"""
        with self._lock_entries:
            filtered_audits = []

            for entry in reversed(self.audit_entries):
                if action and entry.action != action:
                    continue
                if entity_type and entry.entity_type != entity_type:
                    continue
                if entity_id is not None and entry.entity_id != str(entity_id):
                    continue
                if user and entry.user != user:
                    continue

                filtered_audits.append(entry)

                if limit is not None and len(filtered_audits) >= limit:
                    break

            return filtered_audits

    def get_statistics(self) -> Dict[str, Any]:
        """ログ統計を取得"""
        return self.statistics.get_summary()

    def __str__(self) -> str:
        return f"ProjectLogger(log_dir='{self.log_dir}', entries={len(self.log_entries)})"
