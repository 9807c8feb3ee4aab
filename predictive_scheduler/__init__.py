"""Predictive task scheduling engine."""

from .engine.scheduler import PredictiveScheduler, create_scheduler, find_best_time_for_task, generate_schedule
from .learning.store import InMemoryPatternStore, PatternStore
from .models import (
    CalendarEvent,
    DailySchedule,
    EnergyLevel,
    MLPrediction,
    SchedulePrediction,
    ScheduleRecommendation,
    ScheduleSlot,
    SlotType,
    Task,
    TaskStatus,
    TimeRange,
    UserContext,
)

__version__ = "0.1.0"

__all__ = [
    'PredictiveScheduler', 'create_scheduler', 'find_best_time_for_task', 'generate_schedule',
    'InMemoryPatternStore', 'PatternStore',
    'CalendarEvent', 'DailySchedule', 'EnergyLevel', 'MLPrediction', 'SchedulePrediction',
    'ScheduleRecommendation', 'ScheduleSlot', 'SlotType', 'Task', 'TaskStatus', 'TimeRange',
    'UserContext',
]
