"""Tests for whole-day schedule generation."""

import pytest
from datetime import date, timedelta

from predictive_scheduler.engine.scheduler import generate_schedule
from predictive_scheduler.models.schedule import ScheduleSlot, SlotType
from predictive_scheduler.models.task import TaskStatus


def layout(schedule):
    return [(s.slot_type, s.start_at.strftime("%H:%M"), s.end_at.strftime("%H:%M")) for s in schedule.slots]


def assert_no_overlap(slots):
    """Every pair of slots is disjoint as half-open intervals."""
    for i, a in enumerate(slots):
        for b in slots[i + 1:]:
            assert a.end_at <= b.start_at or b.end_at <= a.start_at, (
                f"{a.slot_type} {a.start_at:%H:%M}-{a.end_at:%H:%M} overlaps "
                f"{b.slot_type} {b.start_at:%H:%M}-{b.end_at:%H:%M}"
            )


def task_slot_for(schedule, task_id):
    return next(s for s in schedule.slots if s.slot_type == SlotType.TASK and s.task_id == task_id)


# ═══════════════════════════════════════════════════════════════════════════
# Allocation
# ═══════════════════════════════════════════════════════════════════════════


class TestAllocation:
    def test_empty_task_list(self, scheduler, context, now):
        schedule = scheduler.generate_daily_schedule([], context, now)
        assert schedule.slots == []
        assert schedule.total_productive_minutes == 0
        assert schedule.total_break_minutes == 0
        assert schedule.unscheduled_tasks == []
        assert schedule.overflow_tasks == []

    def test_single_task_gets_trailing_buffer(self, scheduler, make_task, context, now):
        schedule = scheduler.generate_daily_schedule([make_task(estimated_minutes=30)], context, now)
        assert layout(schedule) == [
            (SlotType.TASK, "09:00", "09:30"),
            (SlotType.BUFFER, "09:30", "09:35"),
        ]
        assert schedule.total_productive_minutes == 30

    def test_long_day_overflows(self, scheduler, make_task, context, now):
        tasks = [make_task(estimated_minutes=120) for _ in range(5)]

        schedule = scheduler.generate_daily_schedule(tasks, context, now)

        assert layout(schedule) == [
            (SlotType.TASK, "09:00", "11:00"),
            (SlotType.BUFFER, "11:00", "11:05"),
            (SlotType.BREAK, "11:05", "11:20"),
            (SlotType.TASK, "11:20", "13:20"),
            (SlotType.BUFFER, "13:20", "13:25"),
            (SlotType.BREAK, "13:25", "13:40"),
            (SlotType.TASK, "13:40", "15:40"),
            (SlotType.BUFFER, "15:40", "15:45"),
        ]
        assert schedule.scheduled_task_ids() == [t.task_id for t in tasks[:3]]
        assert schedule.overflow_tasks == tasks[3:]
        assert schedule.unscheduled_tasks == []
        assert schedule.total_productive_minutes == 360
        assert schedule.total_break_minutes == 30

    def test_break_forced_after_continuous_work(self, scheduler, make_task, context, now):
        tasks = [make_task(estimated_minutes=m) for m in (60, 25, 30)]

        schedule = scheduler.generate_daily_schedule(tasks, context, now)

        assert layout(schedule) == [
            (SlotType.TASK, "09:00", "10:00"),
            (SlotType.BUFFER, "10:00", "10:05"),
            (SlotType.TASK, "10:05", "10:30"),
            (SlotType.BUFFER, "10:30", "10:35"),
            (SlotType.BREAK, "10:35", "10:50"),
            (SlotType.TASK, "10:50", "11:20"),
            (SlotType.BUFFER, "11:20", "11:25"),
        ]
        assert schedule.total_break_minutes == 15

    def test_no_break_below_threshold(self, scheduler, make_task, context, now):
        tasks = [make_task(estimated_minutes=40), make_task(estimated_minutes=40)]
        schedule = scheduler.generate_daily_schedule(tasks, context, now)
        assert all(s.slot_type != SlotType.BREAK for s in schedule.slots)

    def test_tasks_skip_blocked_events(self, scheduler, make_task, make_context, make_event, at, now):
        context = make_context(upcoming_events=[make_event(at(10), at(11))])
        tasks = [make_task(estimated_minutes=45) for _ in range(3)]

        schedule = scheduler.generate_daily_schedule(tasks, context, now)

        assert layout(schedule) == [
            (SlotType.TASK, "09:00", "09:45"),
            (SlotType.BUFFER, "09:45", "09:50"),
            (SlotType.BLOCKED, "10:00", "11:00"),
            (SlotType.TASK, "11:05", "11:50"),
            (SlotType.BUFFER, "11:50", "11:55"),
            (SlotType.BREAK, "11:55", "12:10"),
            (SlotType.TASK, "12:10", "12:55"),
            (SlotType.BUFFER, "12:55", "13:00"),
        ]
        assert_no_overlap(schedule.slots)

    def test_break_moves_past_blocked_event(self, scheduler, make_task, make_context, make_event, at, now):
        context = make_context(upcoming_events=[make_event(at(10, 45), at(12))])
        first = make_task(estimated_minutes=90)
        second = make_task(estimated_minutes=10)

        schedule = scheduler.generate_daily_schedule([first, second], context, now)

        assert layout(schedule) == [
            (SlotType.TASK, "09:00", "10:30"),
            (SlotType.BUFFER, "10:30", "10:35"),
            (SlotType.BLOCKED, "10:45", "12:00"),
            (SlotType.BREAK, "12:05", "12:20"),
            (SlotType.TASK, "12:20", "12:30"),
            (SlotType.BUFFER, "12:30", "12:35"),
        ]
        assert_no_overlap(schedule.slots)

    def test_task_longer_than_day_overflows(self, scheduler, make_task, context, now):
        task = make_task(estimated_minutes=600)
        schedule = scheduler.generate_daily_schedule([task], context, now)
        assert schedule.slots == []
        assert schedule.overflow_tasks == [task]

    def test_task_ending_exactly_at_day_end_fits(self, scheduler, make_task, context, now):
        schedule = scheduler.generate_daily_schedule([make_task(estimated_minutes=480)], context, now)
        assert layout(schedule)[0] == (SlotType.TASK, "09:00", "17:00")

    def test_duplicate_task_scheduled_once(self, scheduler, make_task, context, now):
        task = make_task(estimated_minutes=30)
        schedule = scheduler.generate_daily_schedule([task, task], context, now)
        assert schedule.scheduled_task_ids() == [task.task_id]

    def test_duplicate_overflow_listed_once(self, scheduler, make_task, context, now):
        task = make_task(estimated_minutes=600)
        schedule = scheduler.generate_daily_schedule([task, task], context, now)
        assert schedule.overflow_tasks == [task]


# ═══════════════════════════════════════════════════════════════════════════
# Calendar seeding
# ═══════════════════════════════════════════════════════════════════════════


class TestCalendarSeeding:
    def test_non_blocking_events_not_seeded(self, scheduler, make_task, make_context, make_event, at, now):
        context = make_context(upcoming_events=[make_event(at(9), at(10), is_blocking=False)])
        schedule = scheduler.generate_daily_schedule([make_task()], context, now)
        assert all(s.slot_type != SlotType.BLOCKED for s in schedule.slots)
        assert schedule.slots[0].start_at == at(9)

    def test_events_on_other_days_not_seeded(self, scheduler, make_task, make_context, make_event, at, now):
        context = make_context(upcoming_events=[make_event(at(9, day_offset=1), at(17, day_offset=1))])
        schedule = scheduler.generate_daily_schedule([make_task()], context, now)
        assert all(s.slot_type != SlotType.BLOCKED for s in schedule.slots)

    def test_schedule_for_later_day(self, scheduler, make_task, make_context, make_event, at):
        context = make_context(upcoming_events=[make_event(at(9, day_offset=1), at(10, day_offset=1))])
        task = make_task()
        schedule = scheduler.generate_daily_schedule([task], context, at(0, day_offset=1))
        assert layout(schedule)[0] == (SlotType.BLOCKED, "09:00", "10:00")
        assert task_slot_for(schedule, task.task_id).start_at == at(10, 5, day_offset=1)

    def test_accepts_plain_date(self, scheduler, make_task, context, at):
        schedule = scheduler.generate_daily_schedule([make_task()], context, date(2026, 2, 17))
        assert schedule.slots[0].start_at == at(9, day_offset=1)


# ═══════════════════════════════════════════════════════════════════════════
# Task bookkeeping
# ═══════════════════════════════════════════════════════════════════════════


class TestBookkeeping:
    def test_every_open_task_accounted_for(self, scheduler, make_task, context, now):
        tasks = [
            make_task(estimated_minutes=200),
            make_task(estimated_minutes=200),
            make_task(estimated_minutes=200),
            make_task(status=TaskStatus.DONE),
            make_task(status=TaskStatus.ARCHIVED),
        ]

        schedule = scheduler.generate_daily_schedule(tasks, context, now)

        scheduled = set(schedule.scheduled_task_ids())
        overflow = {t.task_id for t in schedule.overflow_tasks}
        unscheduled = {t.task_id for t in schedule.unscheduled_tasks}
        open_ids = {t.task_id for t in tasks if not t.is_closed}

        assert scheduled | overflow | unscheduled == open_ids
        assert not scheduled & overflow
        assert not scheduled & unscheduled
        assert not overflow & unscheduled

    def test_closed_tasks_never_appear(self, scheduler, make_task, context, now):
        done = make_task(status=TaskStatus.DONE)
        archived = make_task(status=TaskStatus.ARCHIVED)
        schedule = scheduler.generate_daily_schedule([done, archived], context, now)
        assert schedule.slots == []
        assert schedule.overflow_tasks == []
        assert schedule.unscheduled_tasks == []

    def test_in_progress_tasks_are_scheduled(self, scheduler, make_task, context, now):
        task = make_task(status=TaskStatus.IN_PROGRESS)
        schedule = scheduler.generate_daily_schedule([task], context, now)
        assert schedule.scheduled_task_ids() == [task.task_id]

    def test_urgent_tasks_first(self, scheduler, make_task, context, now):
        later = make_task(due_at=now + timedelta(days=5))
        no_due = make_task()
        sooner = make_task(due_at=now + timedelta(days=1))

        schedule = scheduler.generate_daily_schedule([later, no_due, sooner], context, now)

        assert schedule.scheduled_task_ids() == [sooner.task_id, later.task_id, no_due.task_id]

    def test_totals_match_slots(self, scheduler, make_task, context, now):
        tasks = [make_task(estimated_minutes=m) for m in (50, 45, 35, 20)]
        schedule = scheduler.generate_daily_schedule(tasks, context, now)
        assert schedule.total_productive_minutes == sum(s.duration_minutes for s in schedule.task_slots())
        assert schedule.total_break_minutes == sum(
            s.duration_minutes for s in schedule.slots if s.slot_type == SlotType.BREAK)

    def test_slots_sorted_disjoint_and_scored(self, scheduler, make_task, make_context, make_event, at, now):
        context = make_context(upcoming_events=[make_event(at(11), at(12)), make_event(at(14), at(15))])
        tasks = [make_task(estimated_minutes=m, context=["work"]) for m in (70, 40, 55, 30, 25)]

        schedule = scheduler.generate_daily_schedule(tasks, context, now)

        starts = [s.start_at for s in schedule.slots]
        assert starts == sorted(starts)
        assert_no_overlap(schedule.slots)
        for slot in schedule.task_slots():
            assert 0 <= slot.score <= 100


# ═══════════════════════════════════════════════════════════════════════════
# Next-slot search
# ═══════════════════════════════════════════════════════════════════════════


class TestFindNextAvailableSlot:
    @pytest.fixture
    def builder(self, scheduler):
        return scheduler.daily_builder

    def test_empty_day(self, builder, at):
        assert builder.find_next_available_slot(at(9), 60, at(17), []) == at(9)

    def test_jumps_past_conflict_plus_buffer(self, builder, at):
        existing = [ScheduleSlot(at(9, 30), at(10), SlotType.BLOCKED)]
        assert builder.find_next_available_slot(at(9), 60, at(17), existing) == at(10, 5)

    def test_gap_that_fits_is_used(self, builder, at):
        existing = [ScheduleSlot(at(10), at(11), SlotType.BLOCKED)]
        assert builder.find_next_available_slot(at(9), 60, at(17), existing) == at(9)

    def test_touching_slots_do_not_conflict(self, builder, at):
        existing = [ScheduleSlot(at(8), at(9), SlotType.BLOCKED)]
        assert builder.find_next_available_slot(at(9), 30, at(17), existing) == at(9)

    def test_none_when_nothing_fits(self, builder, at):
        existing = [ScheduleSlot(at(9), at(16, 30), SlotType.BLOCKED)]
        assert builder.find_next_available_slot(at(9), 60, at(17), existing) is None

    def test_result_is_conflict_free(self, builder, at):
        existing = [
            ScheduleSlot(at(9, 10), at(9, 40), SlotType.TASK),
            ScheduleSlot(at(9, 50), at(10, 20), SlotType.BLOCKED),
            ScheduleSlot(at(10, 40), at(11), SlotType.BREAK),
        ]
        start = builder.find_next_available_slot(at(9), 30, at(17), existing)
        proposal = ScheduleSlot(start, start + timedelta(minutes=30))
        assert not any(proposal.overlaps(s) for s in existing)
        assert start == at(11, 5)


# ═══════════════════════════════════════════════════════════════════════════
# Output formats
# ═══════════════════════════════════════════════════════════════════════════


class TestOutput:
    def test_to_dict(self, scheduler, make_task, context, now):
        task = make_task()
        overflow = make_task(estimated_minutes=600)
        schedule = scheduler.generate_daily_schedule([task, overflow], context, now)

        data = schedule.to_dict()

        assert data['date'] == "2026-02-16"
        assert data['slots'][0] == {
            'start_at': "2026-02-16T09:00:00",
            'end_at': "2026-02-16T09:30:00",
            'type': SlotType.TASK,
            'task_id': task.task_id,
            'score': 50,
        }
        assert data['overflow_tasks'] == [overflow.task_id]
        assert data['total_productive_minutes'] == 30

    def test_human_readable(self, scheduler, make_task, context, now):
        task = make_task(title="Write report", estimated_minutes=30)
        overflow = make_task(title="Huge migration", estimated_minutes=600)
        schedule = scheduler.generate_daily_schedule([task, overflow], context, now)

        text = schedule.to_human_readable({task.task_id: task.title})

        assert text.startswith("=== Daily Schedule: 2026-02-16 ===")
        assert "09:00-09:30  Write report (score 50.0)" in text
        assert "09:30-09:35  [buffer]" in text
        assert "Overflow: Huge migration" in text
        assert text.endswith("=" * 50)

    def test_convenience_function_defaults_to_context_day(self, make_task, context, at):
        schedule = generate_schedule([make_task()], context)
        assert schedule.slots[0].start_at == at(9)
