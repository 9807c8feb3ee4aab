"""Core predictive scheduling engine."""

import logging
from datetime import date, datetime
from typing import List, Optional, Union

from ..learning.store import InMemoryPatternStore, PatternStore, pattern_key
from ..models.pattern import CompletionRecord, PatternSample, TaskPattern
from ..models.schedule import (
    DailySchedule,
    MLPrediction,
    SchedulePrediction,
    ScheduleRecommendation,
    ScheduleSlot,
)
from ..models.task import Task, UserContext
from ..policies.base import OrderingPolicy
from ..policies.urgency import UrgencyPolicy
from ..utils import config as defaults
from ..utils.config import get_default_config
from .availability import AvailabilityScanner
from .completion import CompletionPredictor
from .daily import DailyScheduleBuilder
from .predictor import DurationPredictor
from .scorer import SlotScorer
from .slot_finder import SlotFinder

logger = logging.getLogger(__name__)


class PredictiveScheduler:
    """Learns task durations and allocates tasks into the user's day."""

    def __init__(
        self,
        config: Optional[dict] = None,
        store: Optional[PatternStore] = None,
        policy: Optional[OrderingPolicy] = None,
    ):
        """Initialize scheduler with configuration, pattern store and ordering policy."""
        self.config = config if config is not None else get_default_config()
        self.store = store if store is not None else InMemoryPatternStore()
        self.policy = policy if policy is not None else UrgencyPolicy(self.config)
        self.scheduling_config = self.config.get('scheduling', {})
        self.prediction_config = self.config.get('prediction', {})

        self.predictor = DurationPredictor(self.store, self.config)
        self.scorer = SlotScorer(self.config)
        self.scanner = AvailabilityScanner()
        self.slot_finder = SlotFinder(self.predictor, self.scorer, self.scanner, self.config)
        self.daily_builder = DailyScheduleBuilder(self.predictor, self.scorer, self.policy, self.config)
        self.completion_predictor = CompletionPredictor(self.predictor, self.config)

    def learn_from_completion(self, task: Task, actual_minutes: float, completed_at: datetime) -> None:
        """Record a finished task and update the statistics of its pattern.

        Call exactly once per real completion; every call adds one sample.
        """
        if actual_minutes < 0:
            raise ValueError(f"actual_minutes must be non-negative, got {actual_minutes}")

        self.store.append_completion(
            task.task_id,
            CompletionRecord(
                completed_at=completed_at,
                actual_minutes=actual_minutes,
                energy_after=task.energy_required,
            ),
        )

        estimated = task.estimated_minutes
        if estimated is None:
            estimated = self.prediction_config.get('default_estimate_minutes', defaults.DEFAULT_ESTIMATE_MINUTES)
        sample = PatternSample(
            estimated=estimated,
            actual=actual_minutes,
            day_of_week=completed_at.weekday(),
            hour_of_day=completed_at.hour,
        )
        tolerance = self.prediction_config.get('on_time_tolerance', defaults.ON_TIME_TOLERANCE)

        key = pattern_key(task)
        pattern = self.store.upsert(key, lambda p: p.add_sample(sample, tolerance))
        logger.debug(
            f"Learned {actual_minutes}min for {task.task_id} under {key}: "
            f"{pattern.sample_count} samples, avg {pattern.average_duration:.1f}min")

    def get_pattern(self, task: Task) -> Optional[TaskPattern]:
        """Snapshot of the learned pattern a task belongs to."""
        return self.store.get(pattern_key(task))

    def get_history(self, task_id: str) -> List[CompletionRecord]:
        """Completion history of one task."""
        return self.store.get_history(task_id)

    def predict_duration(self, task: Task, context: UserContext) -> MLPrediction:
        """Predict how long a task will take."""
        return self.predictor.predict_duration(task, context)

    def score_slot_for_task(self, task: Task, slot: ScheduleSlot, context: UserContext) -> float:
        """Score a candidate slot for a task."""
        return self.scorer.score_slot_for_task(task, slot, context)

    def get_available_blocks(self, context: UserContext, days_ahead: int) -> List[ScheduleSlot]:
        """Free blocks over the coming days."""
        return self.scanner.get_available_blocks(context, days_ahead)

    def find_optimal_slots(
        self,
        task: Task,
        context: UserContext,
        days_ahead: Optional[int] = None,
    ) -> ScheduleRecommendation:
        """Find the best slot and alternatives for a task."""
        if days_ahead is None:
            days_ahead = self.scheduling_config.get('days_ahead', 7)
        return self.slot_finder.find_optimal_slots(task, context, days_ahead)

    def generate_daily_schedule(
        self,
        tasks: List[Task],
        context: UserContext,
        target_date: Union[date, datetime],
    ) -> DailySchedule:
        """Generate a full daily schedule."""
        if not isinstance(target_date, datetime):
            target_date = datetime.combine(target_date, datetime.min.time())
        return self.daily_builder.generate_daily_schedule(tasks, context, target_date)

    def predict_completion(self, task: Task, slot: ScheduleSlot, context: UserContext) -> SchedulePrediction:
        """Predict completion probability for a scheduled task."""
        return self.completion_predictor.predict_completion(task, slot, context)


def create_scheduler(config: Optional[dict] = None) -> PredictiveScheduler:
    """Create a new scheduler instance."""
    return PredictiveScheduler(config)


def generate_schedule(
    tasks: List[Task],
    context: UserContext,
    target_date: Optional[Union[date, datetime]] = None,
) -> DailySchedule:
    """Quick schedule generation with a fresh scheduler."""
    if target_date is None:
        target_date = context.current_time
    return PredictiveScheduler().generate_daily_schedule(tasks, context, target_date)


def find_best_time_for_task(task: Task, context: UserContext) -> ScheduleRecommendation:
    """Best time for a single task with a fresh scheduler."""
    return PredictiveScheduler().find_optimal_slots(task, context)
