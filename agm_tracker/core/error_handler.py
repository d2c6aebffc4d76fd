"""
エラーハンドリングシステム
デコレータパターンによる一元的エラー管理
"""

import functools
import threading
from datetime import datetime
from typing import Any, Callable, Dict, List


class ErrorSeverity:
    """エラー重要度定義"""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ErrorCategory:
    """エラーカテゴリ定義"""
    VALIDATION = "VALIDATION"      # 入力値の不正
    DATA = "DATA"                  # シードデータの不正
    FILE_IO = "FILE_IO"            # ファイルI/Oエラー
    PERMISSION = "PERMISSION"      # ロール権限エラー
    BUSINESS = "BUSINESS"          # 業務ルール違反
    SYSTEM = "SYSTEM"              # システムエラー


class TrackerError(Exception):
    """AGMトラッカー基底例外クラス"""

    def __init__(self,
                 message: str,
                 category: str = ErrorCategory.SYSTEM,
                 severity: str = ErrorSeverity.MEDIUM,
                 details: Dict[str, Any] = None,
                 original_exception: Exception = None):
        """
        例外の初期化

        Args:
            message: エラーメッセージ
            category: エラーカテゴリ
            severity: エラー重要度
            details: 詳細情報
            original_exception: 元の例外
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now()
        self.error_id = f"{self.timestamp.strftime('%Y%m%d_%H%M%S')}_{id(self)}"

    def to_dict(self) -> Dict[str, Any]:
        """辞書形式に変換"""
        return {
            'error_id': self.error_id,
            'timestamp': self.timestamp.isoformat(),
            'message': self.message,
            'category': self.category,
            'severity': self.severity,
            'details': self.details.copy(),
            'original_exception': {
                'type': type(self.original_exception).__name__ if self.original_exception else None,
                'message': str(self.original_exception) if self.original_exception else None
            }
        }


class ValidationError(TrackerError):
    """バリデーションエラー"""

    def __init__(self, message: str, field: str = None, value: Any = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            **kwargs
        )
        if field:
            self.details['field'] = field
        if value is not None:
            self.details['value'] = str(value)


class DataError(TrackerError):
    """シードデータ関連エラー"""

    def __init__(self, message: str, data_type: str = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.DATA,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )
        if data_type:
            self.details['data_type'] = data_type


class FileIOError(TrackerError):
    """ファイルI/Oエラー"""

    def __init__(self, message: str, file_path: str = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.FILE_IO,
            severity=ErrorSeverity.HIGH,
            **kwargs
        )
        if file_path:
            self.details['file_path'] = str(file_path)


class BusinessLogicError(TrackerError):
    """ビジネスロジックエラー"""

    def __init__(self, message: str, entity_type: str = None, entity_id: str = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.BUSINESS,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )
        if entity_type:
            self.details['entity_type'] = entity_type
        if entity_id:
            self.details['entity_id'] = str(entity_id)


class PermissionDeniedError(TrackerError):
    """ロール権限エラー"""

    def __init__(self, message: str, role: str = None, operation: str = None, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.MEDIUM,
            **kwargs
        )
        if role:
            self.details['role'] = role
        if operation:
            self.details['operation'] = operation


class ErrorHandler:
    """
    エラー記録管理クラス
    発生したエラーの履歴・統計を保持してログへ出力する
    """

    def __init__(self, max_history_size: int = 1000):
        self.error_history: List[Dict[str, Any]] = []
        self.error_counts: Dict[str, int] = {}
        self._lock = threading.RLock()
        self.max_history_size = max_history_size

        # ログ管理システム（遅延インポート）
        self._logger = None

    @property
    def logger(self):
        """ログ管理システムのインスタンスを取得"""
        if self._logger is None:
            from .logger import ProjectLogger
            self._logger = ProjectLogger()
        return self._logger

    def handle_error(self, error: Exception, context: Dict[str, Any] = None) -> TrackerError:
        """
        エラーを記録

        Args:
            error: 発生した例外
            context: コンテキスト情報

        Returns:
            記録したTrackerError（標準例外はラップ済み）
        """
        with self._lock:
            if not isinstance(error, TrackerError):
                error = self.wrap_exception(error)

            record = error.to_dict()
            record['context'] = context or {}
            record['thread_id'] = threading.get_ident()
            self._add_to_history(record)

            self.logger.error(
                error.category,
                error.message,
                module=context.get('module', 'error_handler') if context else 'error_handler',
                exception=error.original_exception,
                error_id=error.error_id,
                severity=error.severity
            )
            return error

    @staticmethod
    def wrap_exception(error: Exception) -> TrackerError:
        """標準例外をTrackerErrorにラップ"""
        error_mapping = {
            ValueError: (ErrorCategory.VALIDATION, ErrorSeverity.LOW),
            TypeError: (ErrorCategory.VALIDATION, ErrorSeverity.LOW),
            KeyError: (ErrorCategory.DATA, ErrorSeverity.MEDIUM),
            FileNotFoundError: (ErrorCategory.FILE_IO, ErrorSeverity.MEDIUM),
            PermissionError: (ErrorCategory.FILE_IO, ErrorSeverity.HIGH),
            OSError: (ErrorCategory.SYSTEM, ErrorSeverity.HIGH),
        }

        category, severity = error_mapping.get(type(error), (ErrorCategory.SYSTEM, ErrorSeverity.MEDIUM))

        return TrackerError(
            message=str(error),
            category=category,
            severity=severity,
            original_exception=error
        )

    def _add_to_history(self, error_record: Dict[str, Any]) -> None:
        self.error_history.append(error_record)

        error_key = f"{error_record['category']}:{error_record['message']}"
        self.error_counts[error_key] = self.error_counts.get(error_key, 0) + 1

        # 履歴サイズ制限
        if len(self.error_history) > self.max_history_size:
            self.error_history = self.error_history[-self.max_history_size // 2:]

    def get_error_statistics(self) -> Dict[str, Any]:
        """エラー統計を取得"""
        with self._lock:
            total_errors = len(self.error_history)

            if total_errors == 0:
                return {'total_errors': 0}

            category_counts = {}
            severity_counts = {}

            for record in self.error_history[-100:]:  # 最新100件
                category = record.get('category', 'UNKNOWN')
                severity = record.get('severity', 'UNKNOWN')

                category_counts[category] = category_counts.get(category, 0) + 1
                severity_counts[severity] = severity_counts.get(severity, 0) + 1

            return {
                'total_errors': total_errors,
                'category_counts': category_counts,
                'severity_counts': severity_counts,
                'top_errors': dict(sorted(self.error_counts.items(), key=lambda x: x[1], reverse=True)[:10])
            }

    def clear_history(self) -> int:
        """エラー履歴をクリア"""
        with self._lock:
            count = len(self.error_history)
            self.error_history.clear()
            self.error_counts.clear()
            return count


# グローバルエラーハンドラーインスタンス
_global_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """グローバルエラーハンドラーを取得"""
    return _global_error_handler


def handle_errors(log_errors: bool = True):
    """
    エラーハンドリングデコレータ

    例外を履歴とログに記録したうえで、そのまま再送出する。

    Args:
        log_errors: エラーログ出力フラグ
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if log_errors:
                    _global_error_handler.handle_error(e, {
                        'function': func.__name__,
                        'module': func.__module__
                    })
                raise

        return wrapper
    return decorator


def validate_input(validation_func: Callable = None, error_message: str = None):
    """
    入力値検証デコレータ

    Args:
        validation_func: 検証関数（関数と同じ引数を受け取りboolを返す）
        error_message: エラーメッセージ
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if validation_func:
                try:
                    if not validation_func(*args, **kwargs):
                        raise ValidationError(
                            error_message or f"入力値の検証に失敗しました: {func.__name__}"
                        )
                except Exception as e:
                    if not isinstance(e, ValidationError):
                        raise ValidationError(
                            error_message or f"検証エラー: {str(e)}",
                            original_exception=e
                        )
                    raise

            return func(*args, **kwargs)

        return wrapper
    return decorator
