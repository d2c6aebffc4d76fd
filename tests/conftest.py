"""Shared test fixtures for the AGM tracker."""

import itertools
from datetime import date, datetime

import pytest

from agm_tracker.config.settings import SystemSettings, reset_global_settings
from agm_tracker.core.error_handler import get_error_handler
from agm_tracker.core.logger import ProjectLogger
from agm_tracker.core.manager import ProjectTrackingStore, TrackingSnapshot
from agm_tracker.models import AgendaItem, Phase, Task, Team
from agm_tracker.storage import load_seed


TODAY = date(2026, 2, 7)
FIXED_NOW = datetime(2026, 2, 7, 9, 30)


def make_task(task_id="T1", end="2026-02-20", status="Pending", start="2026-02-01",
              team_id="TEAM_A", **kwargs) -> Task:
    return Task(
        id=task_id,
        title=kwargs.pop("title", f"Task {task_id}"),
        start_date=start,
        end_date=end,
        team_id=team_id,
        status=status,
        **kwargs,
    )


def make_phase(phase_id=1, tasks=()) -> Phase:
    return Phase(id=phase_id, name=f"Phase {phase_id}", period="", tasks=tuple(tasks))


@pytest.fixture(autouse=True)
def clean_globals():
    logger = ProjectLogger()
    logger.log_entries.clear()
    logger.audit_entries.clear()
    logger.set_user_context("system")
    logger.audit_enabled = True
    get_error_handler().clear_history()
    reset_global_settings()
    yield
    reset_global_settings()


@pytest.fixture
def seed_snapshot() -> TrackingSnapshot:
    return load_seed()


@pytest.fixture
def log_ids():
    counter = itertools.count(1)
    return lambda: f"log-{next(counter)}"


@pytest.fixture
def store(seed_snapshot, log_ids) -> ProjectTrackingStore:
    return ProjectTrackingStore(seed_snapshot, clock=lambda: FIXED_NOW, log_id_factory=log_ids)


@pytest.fixture
def small_store(log_ids) -> ProjectTrackingStore:
    snapshot = TrackingSnapshot(
        teams=(Team(id="TEAM_A", name="Team A"), Team(id="TEAM_B", name="Team B")),
        phases=(
            make_phase(1, [make_task("1.1", end="2026-02-01"), make_task("1.2", team_id="TEAM_B")]),
            make_phase(2, [make_task("2.1", end="2026-02-09")]),
        ),
        agenda_items=(
            AgendaItem(id="A", title="Agenda A", responsible_team_id="TEAM_A"),
            AgendaItem(id="B", title="Agenda B", responsible_team_id="TEAM_B"),
        ),
    )
    return ProjectTrackingStore(snapshot, clock=lambda: FIXED_NOW, log_id_factory=log_ids)


@pytest.fixture
def settings() -> SystemSettings:
    return SystemSettings()
