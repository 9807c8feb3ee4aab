"""Schedule and prediction result models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .task import Task, TimeRange


class SlotType:
    TASK = "task"
    BREAK = "break"
    BUFFER = "buffer"
    BLOCKED = "blocked"


@dataclass
class ScheduleSlot:
    """Half-open time interval [start_at, end_at) with an allocation type."""

    start_at: datetime
    end_at: datetime
    slot_type: str = SlotType.TASK
    task_id: Optional[str] = None
    score: Optional[float] = None

    @property
    def duration_minutes(self) -> float:
        return (self.end_at - self.start_at).total_seconds() / 60

    def overlaps(self, other: 'ScheduleSlot') -> bool:
        """Check whether two half-open intervals intersect."""
        return self.start_at < other.end_at and self.end_at > other.start_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            'start_at': self.start_at.isoformat(),
            'end_at': self.end_at.isoformat(),
            'type': self.slot_type,
            'task_id': self.task_id,
            'score': self.score,
        }


@dataclass
class MLPrediction:
    """Predicted minutes with confidence and the features behind it."""

    value: int
    confidence: float
    features: List[str] = field(default_factory=list)
    explanation: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'confidence': self.confidence,
            'features': list(self.features),
            'explanation': self.explanation,
        }


@dataclass
class ScheduleRecommendation:
    """Best slot for a single task plus ranked alternatives."""

    task: Task
    suggested_slot: ScheduleSlot
    score: float
    reasoning: List[str] = field(default_factory=list)
    alternatives: List[ScheduleSlot] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'task': self.task.to_dict(),
            'suggested_slot': self.suggested_slot.to_dict(),
            'score': self.score,
            'reasoning': list(self.reasoning),
            'alternatives': [slot.to_dict() for slot in self.alternatives],
        }


@dataclass
class SchedulePrediction:
    """Likelihood of finishing a task inside its scheduled slot."""

    completion_probability: float
    predicted_duration: int
    optimal_time_slots: List[TimeRange] = field(default_factory=list)
    risk_factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'completion_probability': self.completion_probability,
            'predicted_duration': self.predicted_duration,
            'optimal_time_slots': [r.to_dict() for r in self.optimal_time_slots],
            'risk_factors': list(self.risk_factors),
        }


@dataclass
class DailySchedule:
    """Complete allocation of one day."""

    date: datetime
    slots: List[ScheduleSlot]
    total_productive_minutes: int
    total_break_minutes: int
    unscheduled_tasks: List[Task] = field(default_factory=list)
    overflow_tasks: List[Task] = field(default_factory=list)

    def task_slots(self) -> List[ScheduleSlot]:
        return [s for s in self.slots if s.slot_type == SlotType.TASK]

    def scheduled_task_ids(self) -> List[str]:
        return [s.task_id for s in self.task_slots()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert schedule to dictionary for JSON export."""
        return {
            'date': self.date.date().isoformat(),
            'slots': [slot.to_dict() for slot in self.slots],
            'total_productive_minutes': self.total_productive_minutes,
            'total_break_minutes': self.total_break_minutes,
            'unscheduled_tasks': [t.task_id for t in self.unscheduled_tasks],
            'overflow_tasks': [t.task_id for t in self.overflow_tasks],
        }

    def to_human_readable(self, titles: Optional[Dict[str, str]] = None) -> str:
        """Generate human-readable log format."""
        titles = titles or {}
        lines = [
            f"=== Daily Schedule: {self.date.date()} ===",
            "",
            "Slots:",
        ]

        for slot in self.slots:
            span = f"{slot.start_at:%H:%M}-{slot.end_at:%H:%M}"
            if slot.slot_type == SlotType.TASK:
                label = titles.get(slot.task_id, slot.task_id)
                lines.append(f"  {span}  {label} (score {slot.score:.1f})")
            else:
                lines.append(f"  {span}  [{slot.slot_type}]")

        lines.extend([
            "",
            "Summary:",
            f"  Productive minutes: {self.total_productive_minutes}",
            f"  Break minutes: {self.total_break_minutes}",
        ])

        if self.overflow_tasks:
            lines.append("  Overflow: " + ", ".join(t.title for t in self.overflow_tasks))
        if self.unscheduled_tasks:
            lines.append("  Unscheduled: " + ", ".join(t.title for t in self.unscheduled_tasks))

        lines.append("=" * 50)

        return "\n".join(lines)
