"""Predictive scheduling engine components."""

from .availability import AvailabilityScanner
from .completion import CompletionPredictor
from .daily import DailyScheduleBuilder
from .predictor import DurationPredictor
from .scheduler import PredictiveScheduler, create_scheduler, find_best_time_for_task, generate_schedule
from .scorer import SlotScorer
from .slot_finder import SlotFinder

__all__ = [
    'AvailabilityScanner', 'CompletionPredictor', 'DailyScheduleBuilder', 'DurationPredictor',
    'PredictiveScheduler', 'SlotScorer', 'SlotFinder',
    'create_scheduler', 'find_best_time_for_task', 'generate_schedule',
]
