"""Utility functions."""

from .config import load_config, get_default_config, merge_config
from .datetime_utils import parse_clock, get_work_day_bounds, is_same_day, is_within_time_range
from .stats import mean, standard_deviation, clamp

__all__ = [
    'load_config', 'get_default_config', 'merge_config',
    'parse_clock', 'get_work_day_bounds', 'is_same_day', 'is_within_time_range',
    'mean', 'standard_deviation', 'clamp',
]
