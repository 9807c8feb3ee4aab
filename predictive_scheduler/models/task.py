"""Task, calendar and user context data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


class EnergyLevel:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    ALL = (LOW, MEDIUM, HIGH)


class TaskStatus:
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    DONE = "done"
    ARCHIVED = "archived"

    CLOSED = (DONE, ARCHIVED)


def _check_energy(value: str) -> None:
    if value not in EnergyLevel.ALL:
        raise ValueError(f"Unknown energy level {value!r}, expected one of {EnergyLevel.ALL}")


@dataclass
class TimeRange:
    """Wall-clock range in "HH:MM" format."""

    start: str
    end: str

    def to_dict(self) -> Dict[str, str]:
        return {'start': self.start, 'end': self.end}


@dataclass
class CalendarEvent:
    """A calendar entry; only blocking events take time away from tasks."""

    start_at: datetime
    end_at: datetime
    is_blocking: bool = True
    event_id: Optional[str] = None
    title: str = ""


@dataclass
class Task:
    """Represents a schedulable task with metadata."""

    task_id: str
    title: str
    estimated_minutes: Optional[int] = None
    energy_required: str = EnergyLevel.MEDIUM
    context: List[str] = field(default_factory=list)
    due_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    status: str = TaskStatus.TODO
    focus_time_minutes: Optional[int] = None

    def __post_init__(self):
        """Validate the energy requirement."""
        _check_energy(self.energy_required)

    @property
    def is_closed(self) -> bool:
        """Done or archived tasks are never scheduled."""
        return self.status in TaskStatus.CLOSED

    def to_dict(self) -> Dict:
        """Convert task to dictionary for JSON export."""
        return {
            'task_id': self.task_id,
            'title': self.title,
            'estimated_minutes': self.estimated_minutes,
            'energy_required': self.energy_required,
            'context': list(self.context),
            'due_at': self.due_at.isoformat() if self.due_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'status': self.status,
            'focus_time_minutes': self.focus_time_minutes,
        }


@dataclass
class UserContext:
    """Snapshot of the scheduling environment at prediction time."""

    current_time: datetime
    current_energy_level: str = EnergyLevel.MEDIUM
    productivity_by_hour: Dict[int, float] = field(default_factory=dict)
    work_hours: TimeRange = field(default_factory=lambda: TimeRange("09:00", "17:00"))
    focus_hours: List[TimeRange] = field(default_factory=list)
    upcoming_events: List[CalendarEvent] = field(default_factory=list)
    recent_tags: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate the current energy level."""
        _check_energy(self.current_energy_level)

    def productivity_at(self, hour: int, default: float = 50) -> float:
        """Productivity score for an hour, or default when unknown."""
        return self.productivity_by_hour.get(hour, default)

    def blocking_events(self) -> List[CalendarEvent]:
        """Events that take time away from scheduling."""
        return [e for e in self.upcoming_events if e.is_blocking]
