"""Greedy whole-day allocation with buffers, breaks and overflow."""

import logging
from datetime import datetime
from typing import List, Optional, Set

from ..models.schedule import DailySchedule, ScheduleSlot, SlotType
from ..models.task import Task, UserContext
from ..policies.base import OrderingPolicy
from ..utils import config as defaults
from ..utils.datetime_utils import add_minutes, get_work_day_bounds, is_same_day
from ..utils.stats import round_half_up
from .predictor import DurationPredictor
from .scorer import SlotScorer

logger = logging.getLogger(__name__)


class DailyScheduleBuilder:
    """Allocates a task list into one work day."""

    def __init__(
        self,
        predictor: DurationPredictor,
        scorer: SlotScorer,
        policy: OrderingPolicy,
        config: dict,
    ):
        """Initialize builder with its collaborators and configuration."""
        self.predictor = predictor
        self.scorer = scorer
        self.policy = policy
        self.config = config
        self.scheduling_config = config.get('scheduling', {})
        self.buffer_minutes = self.scheduling_config.get('buffer_minutes', defaults.BUFFER_BETWEEN_TASKS)
        self.slot_minutes = self.scheduling_config.get('default_slot_minutes', defaults.DEFAULT_SLOT_DURATION)
        self.break_minutes = self.scheduling_config.get('break_minutes', defaults.BREAK_DURATION)
        self.max_continuous_minutes = self.scheduling_config.get(
            'max_continuous_work_minutes', defaults.MAX_CONTINUOUS_WORK)

    def generate_daily_schedule(
        self,
        tasks: List[Task],
        context: UserContext,
        target_date: datetime,
    ) -> DailySchedule:
        """Generate a schedule for one day."""
        day_start, day_end = get_work_day_bounds(target_date, context.work_hours)

        slots: List[ScheduleSlot] = [
            ScheduleSlot(event.start_at, event.end_at, SlotType.BLOCKED)
            for event in context.blocking_events()
            if is_same_day(event.start_at, target_date)
        ]

        scheduled: Set[str] = set()
        overflow: List[Task] = []
        overflow_ids: Set[str] = set()

        current_time = day_start
        continuous_work_minutes = 0

        for task in self.policy.order_tasks(tasks, context.current_time):
            if task.task_id in scheduled or task.is_closed:
                continue

            duration = self.predictor.predict_duration(task, context).value
            start = self.find_next_available_slot(current_time, duration, day_end, slots)

            if start is not None and continuous_work_minutes >= self.max_continuous_minutes:
                break_slot = self._place_break(start, day_end, slots)
                if break_slot is None:
                    start = None
                else:
                    slots.append(break_slot)
                    logger.info(
                        f"Break at {break_slot.start_at:%H:%M} after {continuous_work_minutes}min of work")
                    current_time = break_slot.end_at
                    continuous_work_minutes = 0
                    start = self.find_next_available_slot(current_time, duration, day_end, slots)

            if start is None:
                logger.info(f"Overflow: no {duration}min window left for {task.task_id}")
                if task.task_id not in overflow_ids:
                    overflow.append(task)
                    overflow_ids.add(task.task_id)
                continue

            task_slot = ScheduleSlot(start, add_minutes(start, duration), SlotType.TASK, task_id=task.task_id)
            task_slot.score = self.scorer.score_slot_for_task(task, task_slot, context)
            buffer_slot = ScheduleSlot(
                task_slot.end_at, add_minutes(task_slot.end_at, self.buffer_minutes), SlotType.BUFFER)
            slots.extend([task_slot, buffer_slot])
            scheduled.add(task.task_id)

            current_time = buffer_slot.end_at
            continuous_work_minutes += duration + self.buffer_minutes

        slots.sort(key=lambda s: s.start_at)

        total_productive = sum(s.duration_minutes for s in slots if s.slot_type == SlotType.TASK)
        total_break = sum(s.duration_minutes for s in slots if s.slot_type == SlotType.BREAK)

        unscheduled = [
            t for t in tasks
            if t.task_id not in scheduled and t.task_id not in overflow_ids and not t.is_closed
        ]

        logger.info(
            f"Scheduled {len(scheduled)} tasks on {target_date.date()}, "
            f"{len(overflow)} overflow, {len(unscheduled)} unscheduled")

        return DailySchedule(
            date=target_date,
            slots=slots,
            total_productive_minutes=round_half_up(total_productive),
            total_break_minutes=round_half_up(total_break),
            unscheduled_tasks=unscheduled,
            overflow_tasks=overflow,
        )

    def find_next_available_slot(
        self,
        start: datetime,
        duration_minutes: float,
        day_end: datetime,
        existing: List[ScheduleSlot],
    ) -> Optional[datetime]:
        """Earliest conflict-free start at or after start that ends by day_end.

        On a conflict the candidate jumps past the conflicting slot plus the
        inter-task buffer.
        """
        candidate = start

        while add_minutes(candidate, duration_minutes) <= day_end:
            proposal = ScheduleSlot(candidate, add_minutes(candidate, duration_minutes))
            conflict = next((s for s in existing if proposal.overlaps(s)), None)

            if conflict is None:
                return candidate

            if conflict.end_at > candidate:
                candidate = add_minutes(conflict.end_at, self.buffer_minutes)
            else:
                candidate = add_minutes(candidate, self.slot_minutes)

        return None

    def _place_break(
        self,
        start: datetime,
        day_end: datetime,
        existing: List[ScheduleSlot],
    ) -> Optional[ScheduleSlot]:
        """Break at start, or at the next window where it does not collide."""
        break_start = self.find_next_available_slot(start, self.break_minutes, day_end, existing)
        if break_start is None:
            return None
        return ScheduleSlot(break_start, add_minutes(break_start, self.break_minutes), SlotType.BREAK)
