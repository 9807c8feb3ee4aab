"""Prediction features extracted for a task."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass
class PredictionFeatures:
    """Computed features for a task at prediction time."""

    task_age: float
    estimated_duration: float
    completion_rate_for_similar: float
    hour_of_day: int
    day_of_week: int
    days_until_due: float
    energy_level: float
    recent_task_count: int
    similar_tasks_completed: int
    average_delay_for_type: float
    user_productivity_score: float
    actual_duration_history: List[float] = field(default_factory=list)

    def importance(self) -> List[tuple]:
        """Heuristic importance of the named features, in listing order."""
        return [
            ('hourOfDay', 1.0 if 9 < self.hour_of_day < 11 else 0.5),
            ('energyLevel', self.energy_level),
            ('taskAge', 1.0 if self.task_age > 7 else 0.3),
            ('daysUntilDue', 1.0 if self.days_until_due < 3 else 0.2),
            ('completionRate', self.completion_rate_for_similar),
        ]

    def top_features(self, count: int = 3) -> List[str]:
        """Names of the most important features, highest first."""
        ranked = sorted(self.importance(), key=lambda item: -item[1])
        return [name for name, _ in ranked[:count]]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
