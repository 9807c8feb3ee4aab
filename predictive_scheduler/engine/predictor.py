"""Duration prediction from learned patterns and context."""

import logging
from typing import List, Optional

from ..learning.store import PatternStore, pattern_key
from ..models.features import PredictionFeatures
from ..models.pattern import TaskPattern
from ..models.schedule import MLPrediction
from ..models.task import EnergyLevel, Task, UserContext
from ..utils import config as defaults
from ..utils.stats import decay_weights, mean, round_half_up, weighted_mean

logger = logging.getLogger(__name__)

ENERGY_VALUES = {
    EnergyLevel.HIGH: 1.0,
    EnergyLevel.MEDIUM: 0.5,
    EnergyLevel.LOW: 0.0,
}
NO_DUE_DATE_DAYS = 365
DEFAULT_COMPLETION_RATE = 0.7
SECONDS_PER_DAY = 24 * 3600


class DurationPredictor:
    """Predicts task duration with a recency-weighted average plus adjustments."""

    def __init__(self, store: PatternStore, config: dict):
        """Initialize predictor with a pattern store and configuration."""
        self.store = store
        self.config = config
        self.prediction_config = config.get('prediction', {})

    def _setting(self, key: str, default):
        return self.prediction_config.get(key, default)

    def default_estimate(self, task: Task) -> float:
        """Caller estimate, or the configured default when absent."""
        if task.estimated_minutes is None:
            return self._setting('default_estimate_minutes', defaults.DEFAULT_ESTIMATE_MINUTES)
        return task.estimated_minutes

    def extract_features(self, task: Task, context: UserContext) -> PredictionFeatures:
        """Compute prediction features for a task."""
        return self._build_features(task, context, self.store.get(pattern_key(task)))

    def _build_features(
        self,
        task: Task,
        context: UserContext,
        pattern: Optional[TaskPattern],
    ) -> PredictionFeatures:
        now = context.current_time
        history = self.store.get_history(task.task_id)

        task_age = 0.0
        if task.created_at is not None:
            task_age = (now - task.created_at).total_seconds() / SECONDS_PER_DAY

        days_until_due = float(NO_DUE_DATE_DAYS)
        if task.due_at is not None:
            days_until_due = (task.due_at - now).total_seconds() / SECONDS_PER_DAY

        return PredictionFeatures(
            task_age=task_age,
            estimated_duration=self.default_estimate(task),
            actual_duration_history=[r.actual_minutes for r in history],
            completion_rate_for_similar=pattern.completion_rate if pattern else DEFAULT_COMPLETION_RATE,
            hour_of_day=now.hour,
            day_of_week=now.weekday(),
            days_until_due=days_until_due,
            energy_level=ENERGY_VALUES[context.current_energy_level],
            recent_task_count=len(context.recent_tags),
            similar_tasks_completed=pattern.sample_count if pattern else 0,
            average_delay_for_type=pattern.average_delay() if pattern else 0.0,
            user_productivity_score=mean(list(context.productivity_by_hour.values())),
        )

    def predict_duration(self, task: Task, context: UserContext) -> MLPrediction:
        """Predict how many minutes a task will take."""
        pattern = self.store.get(pattern_key(task))
        features = self._build_features(task, context, pattern)

        predicted_minutes = self.default_estimate(task)
        confidence = self._setting('base_confidence', defaults.BASE_CONFIDENCE)
        explanation: List[str] = []

        min_samples = self._setting('min_samples', defaults.MIN_PATTERN_SAMPLES)
        if pattern is not None and pattern.sample_count >= min_samples:
            window = self._setting('sample_window', defaults.SAMPLE_WINDOW)
            recent = pattern.samples[-window:]
            weights = decay_weights(len(recent), self._setting('recency_decay', defaults.RECENCY_DECAY))
            predicted_minutes = weighted_mean([s.actual for s in recent], weights)
            confidence = min(
                self._setting('max_confidence', defaults.MAX_CONFIDENCE),
                confidence + pattern.sample_count * self._setting(
                    'confidence_per_sample', defaults.CONFIDENCE_PER_SAMPLE),
            )
            explanation.append(f"Based on {pattern.sample_count} similar task completions")

        productivity = context.productivity_at(context.current_time.hour)
        if productivity < self._setting('low_productivity_threshold', defaults.LOW_PRODUCTIVITY_THRESHOLD):
            predicted_minutes *= self._setting('low_productivity_factor', defaults.LOW_PRODUCTIVITY_FACTOR)
            explanation.append("Adjusted for lower productivity time")
        elif productivity > self._setting('high_productivity_threshold', defaults.HIGH_PRODUCTIVITY_THRESHOLD):
            predicted_minutes *= self._setting('peak_productivity_factor', defaults.PEAK_PRODUCTIVITY_FACTOR)
            explanation.append("Adjusted for peak productivity time")

        if task.energy_required == EnergyLevel.HIGH and context.current_energy_level == EnergyLevel.LOW:
            predicted_minutes *= self._setting('energy_mismatch_factor', defaults.ENERGY_MISMATCH_FACTOR)
            explanation.append("Energy level mismatch may slow progress")

        if features.recent_task_count > self._setting('fatigue_task_count', defaults.FATIGUE_TASK_COUNT):
            predicted_minutes *= self._setting('fatigue_factor', defaults.FATIGUE_FACTOR)
            explanation.append("Many recent tasks may cause fatigue")

        prediction = MLPrediction(
            value=round_half_up(predicted_minutes),
            confidence=confidence,
            features=features.top_features(),
            explanation=". ".join(explanation),
        )
        logger.debug(f"Predicted {prediction.value}min for {task.task_id} (confidence {confidence:.2f})")
        return prediction
