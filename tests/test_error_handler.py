"""Tests for error recording and the handling decorators."""

import pytest

from agm_tracker.core.error_handler import (
    ErrorCategory, ErrorSeverity, TrackerError, ValidationError,
    get_error_handler, handle_errors, validate_input,
)
from agm_tracker.core.logger import LogLevel, ProjectLogger
from agm_tracker.models import Team


# --- handle_errors ---


def test_tracker_error_is_recorded_and_reraised():
    @handle_errors()
    def fail():
        raise ValidationError("bad input", field="id")

    with pytest.raises(ValidationError):
        fail()

    history = get_error_handler().error_history
    assert len(history) == 1
    assert history[0]["category"] == ErrorCategory.VALIDATION
    assert history[0]["context"]["function"] == "fail"


def test_plain_exception_is_wrapped_in_record_but_reraised_as_is():
    @handle_errors()
    def fail():
        raise KeyError("missing")

    with pytest.raises(KeyError):
        fail()

    record = get_error_handler().error_history[-1]
    assert record["category"] == ErrorCategory.DATA
    assert record["original_exception"]["type"] == "KeyError"


def test_log_errors_false_skips_history():
    @handle_errors(log_errors=False)
    def fail():
        raise ValueError("quiet")

    with pytest.raises(ValueError):
        fail()
    assert get_error_handler().error_history == []


def test_recorded_error_is_logged():
    @handle_errors()
    def fail():
        raise TrackerError("boom", severity=ErrorSeverity.HIGH)

    with pytest.raises(TrackerError):
        fail()

    errors = ProjectLogger().get_logs(level=LogLevel.ERROR)
    assert errors[0].message == "boom"


def test_store_validation_failure_reaches_statistics(small_store):
    with pytest.raises(ValidationError):
        small_store.add_team(Team(id="TEAM_A", name="Again"))

    stats = get_error_handler().get_error_statistics()
    assert stats["total_errors"] == 1
    assert stats["category_counts"] == {ErrorCategory.VALIDATION: 1}


def test_statistics_empty_and_clear():
    handler = get_error_handler()
    assert handler.get_error_statistics() == {"total_errors": 0}
    handler.handle_error(ValueError("x"))
    assert handler.clear_history() == 1
    assert handler.error_counts == {}


# --- validate_input ---


def test_validate_input_rejects_and_wraps():
    @validate_input(lambda n: n > 0, "must be positive")
    def double(n):
        return n * 2

    assert double(2) == 4
    with pytest.raises(ValidationError, match="must be positive"):
        double(0)
    with pytest.raises(ValidationError):
        double("x")
