"""Learned completion history and per-pattern statistics."""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List

from ..utils.config import ON_TIME_TOLERANCE
from ..utils.stats import mean, standard_deviation


@dataclass
class CompletionRecord:
    """One recorded completion of a task."""

    completed_at: datetime
    actual_minutes: float
    energy_after: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'completed_at': self.completed_at.isoformat(),
            'actual_minutes': self.actual_minutes,
            'energy_after': self.energy_after,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompletionRecord':
        return cls(
            completed_at=datetime.fromisoformat(data['completed_at']),
            actual_minutes=data['actual_minutes'],
            energy_after=data['energy_after'],
        )


@dataclass
class PatternSample:
    """Estimated vs. actual minutes for one completion of a similar task."""

    estimated: float
    actual: float
    day_of_week: int
    hour_of_day: int


@dataclass
class TaskPattern:
    """Aggregate statistics for tasks sharing a pattern key.

    Statistics are rebuilt from the full sample list on every append.
    """

    samples: List[PatternSample] = field(default_factory=list)
    average_duration: float = 0.0
    standard_deviation: float = 0.0
    completion_rate: float = 0.0

    @property
    def sample_count(self) -> int:
        return len(self.samples)

    def add_sample(self, sample: PatternSample, tolerance: float = ON_TIME_TOLERANCE) -> None:
        """Append a sample and recompute statistics."""
        self.samples.append(sample)
        self.recompute(tolerance)

    def recompute(self, tolerance: float = ON_TIME_TOLERANCE) -> None:
        """Recompute average, deviation and completion rate from all samples.

        A sample counts as completed on time when its actual minutes stay
        within ``tolerance`` times the estimate.
        """
        durations = [s.actual for s in self.samples]
        self.average_duration = mean(durations)
        self.standard_deviation = standard_deviation(durations)
        if self.samples:
            on_time = sum(1 for s in self.samples if s.actual <= s.estimated * tolerance)
            self.completion_rate = on_time / len(self.samples)
        else:
            self.completion_rate = 0.0

    def average_delay(self) -> float:
        """Mean of actual minus estimated minutes."""
        return mean([s.actual - s.estimated for s in self.samples])

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TaskPattern':
        """Restore a pattern with the statistics it was saved with."""
        return cls(
            samples=[PatternSample(**s) for s in data['samples']],
            average_duration=data['average_duration'],
            standard_deviation=data['standard_deviation'],
            completion_rate=data['completion_rate'],
        )
