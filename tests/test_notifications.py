"""Tests for notification generation and delivery."""

from agm_tracker.config.settings import NotificationSettings
from agm_tracker.core.notification_manager import (
    ALL_ON_TRACK_MESSAGE, NotificationGenerator, NotificationService,
)
from agm_tracker.models import NotificationPriority, NotificationType

from conftest import TODAY, make_phase, make_task


def _phases():
    return [
        make_phase(1, [
            make_task("1.1", end="2026-02-01"),
            make_task("1.2", end="2026-02-20", status="Delayed"),
        ]),
        make_phase(2, [
            make_task("2.1", end="2026-02-08", responsible_person="Somchai"),
            make_task("2.2", end="2026-02-10"),
            make_task("2.3", end="2026-02-01", status="Completed"),
        ]),
    ]


# --- Generator ---


def test_overdue_first_then_upcoming():
    notifications = NotificationGenerator().generate(_phases(), TODAY)
    assert [(n.type, n.entity_id) for n in notifications] == [
        (NotificationType.DEADLINE_OVERDUE, "1.1"),
        (NotificationType.DEADLINE_OVERDUE, "1.2"),
        (NotificationType.DEADLINE_APPROACHING, "2.1"),
        (NotificationType.DEADLINE_APPROACHING, "2.2"),
    ]


def test_overdue_metadata_and_priority():
    overdue = NotificationGenerator().generate(_phases(), TODAY)[0]
    assert overdue.priority == NotificationPriority.HIGH
    assert overdue.phase_id == 1
    assert overdue.get_metadata("days_overdue") == 6
    assert overdue.message.startswith("เกินกำหนด")


def test_delayed_label():
    delayed = NotificationGenerator().generate(_phases(), TODAY)[1]
    assert delayed.message.startswith("ล่าช้า")
    assert delayed.get_metadata("days_overdue") is None


def test_upcoming_priority_by_days_left():
    notifications = NotificationGenerator().generate(_phases(), TODAY)
    tomorrow, later = notifications[2], notifications[3]
    assert tomorrow.priority == NotificationPriority.HIGH
    assert tomorrow.get_metadata("days_left") == 1
    assert tomorrow.responsible_person == "Somchai"
    assert tomorrow.phase_id == 2
    assert later.priority == NotificationPriority.MEDIUM
    assert "เหลือ 3 วัน" in later.message


def test_shared_task_instance_notified_per_phase(small_store):
    shared = make_task("X", end="2026-02-01")
    assert small_store.add_task(1, shared)
    assert small_store.add_task(2, shared)

    notifications = [
        n for n in NotificationGenerator().generate(small_store.snapshot.phases, TODAY)
        if n.entity_id == "X"
    ]
    assert [n.phase_id for n in notifications] == [1, 2]
    assert len({n.key for n in notifications}) == 2


def test_disabled_kinds():
    generator = NotificationGenerator(enable_overdue=False)
    assert all(n.type == NotificationType.DEADLINE_APPROACHING for n in generator.generate(_phases(), TODAY))


# --- Service ---


def test_service_delivers_to_handlers():
    received = []
    service = NotificationService()
    service.add_notification_handler(received.append)

    notifications = service.check_and_generate_notifications(_phases(), TODAY)

    assert received == notifications
    assert service.stats["total_delivered"] == 4


def test_failing_handler_does_not_block_others():
    received = []

    def broken(notification):
        raise RuntimeError("boom")

    service = NotificationService()
    service.add_notification_handler(broken)
    service.add_notification_handler(received.append)
    service.check_and_generate_notifications(_phases(), TODAY)

    assert len(received) == 4
    assert service.stats["errors"] == 4


def test_remove_handler():
    service = NotificationService()
    handler = lambda n: None
    service.add_notification_handler(handler)
    assert service.remove_notification_handler(handler)
    assert not service.remove_notification_handler(handler)


def test_summary_counts():
    service = NotificationService()
    service.check_and_generate_notifications(_phases(), TODAY)
    summary = service.get_notification_summary()
    assert summary["total"] == 4
    assert summary["overdue"] == 2
    assert summary["upcoming"] == 2
    assert summary["high_priority"] == 3
    assert summary["all_on_track"] is False
    assert summary["service_stats"]["last_as_of"] == "2026-02-07"


def test_all_on_track():
    service = NotificationService()
    service.check_and_generate_notifications([make_phase(1, [make_task("x", end="2026-04-01")])], TODAY)
    assert service.is_all_on_track()
    assert service.get_notification_summary()["message"] == ALL_ON_TRACK_MESSAGE


def test_disabled_service_generates_nothing():
    service = NotificationService.from_settings(NotificationSettings(enabled=False))
    assert service.check_and_generate_notifications(_phases(), TODAY) == []


def test_from_settings_window():
    service = NotificationService.from_settings(NotificationSettings(upcoming_window_days=1))
    ids = [n.entity_id for n in service.check_and_generate_notifications(_phases(), TODAY)]
    assert "2.1" in ids
    assert "2.2" not in ids
