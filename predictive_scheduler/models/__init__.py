"""Data models."""

from .task import CalendarEvent, EnergyLevel, Task, TaskStatus, TimeRange, UserContext
from .pattern import CompletionRecord, PatternSample, TaskPattern
from .features import PredictionFeatures
from .schedule import (
    DailySchedule,
    MLPrediction,
    SchedulePrediction,
    ScheduleRecommendation,
    ScheduleSlot,
    SlotType,
)

__all__ = [
    'CalendarEvent', 'EnergyLevel', 'Task', 'TaskStatus', 'TimeRange', 'UserContext',
    'CompletionRecord', 'PatternSample', 'TaskPattern', 'PredictionFeatures',
    'DailySchedule', 'MLPrediction', 'SchedulePrediction', 'ScheduleRecommendation',
    'ScheduleSlot', 'SlotType',
]
