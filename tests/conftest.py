"""Shared test fixtures for the predictive scheduler test suite."""

import pytest
from datetime import datetime

from predictive_scheduler.engine.scheduler import PredictiveScheduler
from predictive_scheduler.models.task import (
    CalendarEvent,
    EnergyLevel,
    Task,
    TaskStatus,
    TimeRange,
    UserContext,
)


# ── Time ────────────────────────────────────────────────────────────────

@pytest.fixture
def now():
    """Fixed 'now' for deterministic tests: Monday 2026-02-16 08:00 (local, naive)."""
    return datetime(2026, 2, 16, 8, 0)


@pytest.fixture
def at(now):
    """Build a datetime on the test day from hour and minute."""
    def _at(hour, minute=0, day_offset=0):
        return now.replace(day=now.day + day_offset, hour=hour, minute=minute)

    return _at


# ── Task Factories ──────────────────────────────────────────────────────

@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances with sensible defaults.

    Usage:
        task = make_task(estimated_minutes=60, energy_required=EnergyLevel.HIGH)
    """
    _counter = 0

    def _factory(**overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "task_id": f"test-task-{_counter}",
            "title": f"Test Task {_counter}",
            "estimated_minutes": 30,
            "energy_required": EnergyLevel.MEDIUM,
            "context": [],
            "status": TaskStatus.TODO,
        }
        defaults.update(overrides)
        return Task(**defaults)

    return _factory


# ── Context ─────────────────────────────────────────────────────────────

@pytest.fixture
def make_context(now):
    """Factory for UserContext with a flat productivity curve (50 every hour).

    A flat curve keeps every contextual multiplier neutral unless a test
    overrides it.
    """
    def _factory(**overrides):
        defaults = {
            "current_time": now,
            "current_energy_level": EnergyLevel.MEDIUM,
            "productivity_by_hour": {hour: 50 for hour in range(24)},
            "work_hours": TimeRange("09:00", "17:00"),
            "focus_hours": [],
            "upcoming_events": [],
            "recent_tags": [],
        }
        defaults.update(overrides)
        return UserContext(**defaults)

    return _factory


@pytest.fixture
def context(make_context):
    return make_context()


@pytest.fixture
def make_event():
    """Factory for calendar events, blocking unless stated otherwise."""
    def _factory(start_at, end_at, is_blocking=True):
        return CalendarEvent(start_at=start_at, end_at=end_at, is_blocking=is_blocking)

    return _factory


# ── Scheduler ───────────────────────────────────────────────────────────

@pytest.fixture
def scheduler():
    """Fresh scheduler with default configuration and an empty store."""
    return PredictiveScheduler()

