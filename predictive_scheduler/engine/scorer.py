"""Slot scoring against productivity, energy, context and focus windows."""

import logging

from ..models.schedule import ScheduleSlot
from ..models.task import EnergyLevel, Task, UserContext
from ..utils import config as defaults
from ..utils.datetime_utils import is_within_time_range
from ..utils.stats import clamp

logger = logging.getLogger(__name__)

WORK_CONTEXT = "work"
PERSONAL_CONTEXT = "personal"
MORNING_HOURS = range(9, 12)
HIGH_ENERGY_AFTERNOON_HOURS = range(14, 17)
LOW_ENERGY_AFTERNOON_HOURS = range(14, 18)


class SlotScorer:
    """Scores how well a slot's start hour suits a task, from 0 to 100."""

    def __init__(self, config: dict):
        """Initialize scorer with configuration."""
        self.config = config
        self.scoring_config = config.get('scoring', {})

    def _setting(self, key: str, default):
        return self.scoring_config.get(key, default)

    def is_focus_hour(self, hour: int, context: UserContext) -> bool:
        """Check if an hour falls in any configured focus window."""
        return any(is_within_time_range(hour, r) for r in context.focus_hours)

    def score_slot_for_task(self, task: Task, slot: ScheduleSlot, context: UserContext) -> float:
        """Score a candidate slot for a task."""
        hour = slot.start_at.hour
        score = self._setting('base_score', defaults.BASE_SCORE)

        productivity = context.productivity_at(hour)
        score += (productivity - 50) * self._setting('productivity_weight', defaults.PRODUCTIVITY_WEIGHT)

        # High energy work suits the morning; low energy work the afternoon
        if task.energy_required == EnergyLevel.HIGH:
            if hour in MORNING_HOURS:
                score += self._setting('high_energy_morning_bonus', defaults.HIGH_ENERGY_MORNING_BONUS)
            elif hour in HIGH_ENERGY_AFTERNOON_HOURS:
                score += self._setting('high_energy_afternoon_bonus', defaults.HIGH_ENERGY_AFTERNOON_BONUS)
        elif task.energy_required == EnergyLevel.LOW:
            if hour in LOW_ENERGY_AFTERNOON_HOURS:
                score += self._setting('low_energy_afternoon_bonus', defaults.LOW_ENERGY_AFTERNOON_BONUS)

        in_work_hours = is_within_time_range(hour, context.work_hours)
        if WORK_CONTEXT in task.context:
            if in_work_hours:
                score += self._setting('work_context_bonus', defaults.WORK_CONTEXT_BONUS)
            else:
                score += self._setting('work_context_penalty', defaults.WORK_CONTEXT_PENALTY)

        if PERSONAL_CONTEXT in task.context:
            if not in_work_hours:
                score += self._setting('personal_context_bonus', defaults.PERSONAL_CONTEXT_BONUS)
            else:
                score += self._setting('personal_context_penalty', defaults.PERSONAL_CONTEXT_PENALTY)

        focus_minimum = self._setting('focus_task_min_minutes', defaults.FOCUS_TASK_MIN_MINUTES)
        if task.focus_time_minutes and task.focus_time_minutes > focus_minimum:
            if self.is_focus_hour(hour, context):
                score += self._setting('focus_match_bonus', defaults.FOCUS_MATCH_BONUS)
            else:
                score += self._setting('focus_miss_penalty', defaults.FOCUS_MISS_PENALTY)

        score = clamp(score, 0, 100)
        logger.debug(f"Scored {slot.start_at:%Y-%m-%d %H:%M} for {task.task_id}: {score:.1f}")
        return score
