"""On-time completion likelihood for a scheduled slot."""

import logging
from typing import List

from ..models.schedule import SchedulePrediction, ScheduleSlot
from ..models.task import EnergyLevel, Task, TimeRange, UserContext
from ..utils import config as defaults
from ..utils.datetime_utils import format_hour
from ..utils.stats import clamp
from .predictor import DurationPredictor

logger = logging.getLogger(__name__)


class CompletionPredictor:
    """Estimates whether a task will finish inside its slot."""

    def __init__(self, predictor: DurationPredictor, config: dict):
        """Initialize completion predictor with configuration."""
        self.predictor = predictor
        self.config = config
        self.completion_config = config.get('completion', {})

    def _setting(self, key: str, default):
        return self.completion_config.get(key, default)

    def predict_completion(self, task: Task, slot: ScheduleSlot, context: UserContext) -> SchedulePrediction:
        """Predict completion probability and risks for a scheduled slot."""
        duration = self.predictor.predict_duration(task, context)
        slot_minutes = slot.duration_minutes

        probability = self._setting('base_probability', defaults.BASE_COMPLETION_PROBABILITY)
        risk_factors: List[str] = []

        if duration.value > slot_minutes:
            overrun = (duration.value - slot_minutes) / duration.value
            probability -= overrun * self._setting('overrun_penalty_weight', defaults.OVERRUN_PENALTY_WEIGHT)
            risk_factors.append("Task may exceed allocated time")

        prediction_config = self.predictor.prediction_config
        productivity = context.productivity_at(slot.start_at.hour)
        if productivity < prediction_config.get('low_productivity_threshold', defaults.LOW_PRODUCTIVITY_THRESHOLD):
            probability -= self._setting('low_productivity_penalty', defaults.LOW_PRODUCTIVITY_PENALTY)
            risk_factors.append("Scheduled during low-productivity hours")
        elif productivity > prediction_config.get('high_productivity_threshold', defaults.HIGH_PRODUCTIVITY_THRESHOLD):
            probability += self._setting('peak_productivity_bonus', defaults.PEAK_PRODUCTIVITY_BONUS)

        if task.energy_required == EnergyLevel.HIGH and context.current_energy_level == EnergyLevel.LOW:
            probability -= self._setting('energy_mismatch_penalty', defaults.ENERGY_MISMATCH_PENALTY)
            risk_factors.append("Energy level mismatch")

        probability *= duration.confidence
        probability = clamp(
            probability,
            self._setting('min_probability', defaults.MIN_COMPLETION_PROBABILITY),
            self._setting('max_probability', defaults.MAX_COMPLETION_PROBABILITY),
        )

        logger.debug(f"Completion probability for {task.task_id}: {probability:.2f}")
        return SchedulePrediction(
            completion_probability=probability,
            predicted_duration=duration.value,
            optimal_time_slots=self.find_peak_productivity_slots(context),
            risk_factors=risk_factors,
        )

    def find_peak_productivity_slots(self, context: UserContext) -> List[TimeRange]:
        """Group consecutive peak-productivity hours into ranges."""
        threshold = self.predictor.prediction_config.get(
            'high_productivity_threshold', defaults.HIGH_PRODUCTIVITY_THRESHOLD)
        peak_hours = sorted(int(h) for h, p in context.productivity_by_hour.items() if p > threshold)

        ranges = []
        group: List[int] = []
        for hour in peak_hours:
            if group and hour != group[-1] + 1:
                ranges.append(TimeRange(format_hour(group[0]), format_hour(group[-1] + 1)))
                group = []
            group.append(hour)

        if group:
            ranges.append(TimeRange(format_hour(group[0]), format_hour(group[-1] + 1)))

        return ranges
