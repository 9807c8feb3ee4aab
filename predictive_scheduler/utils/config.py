"""Configuration management."""

import copy
import json
import yaml
from pathlib import Path
from typing import Dict, Any


# Scheduling
DEFAULT_SLOT_DURATION = 30  # minutes
BUFFER_BETWEEN_TASKS = 5  # minutes
MAX_CONTINUOUS_WORK = 90  # minutes before a break is forced
BREAK_DURATION = 15  # minutes

# Prediction
DEFAULT_ESTIMATE_MINUTES = 30
MIN_PATTERN_SAMPLES = 3
SAMPLE_WINDOW = 10
RECENCY_DECAY = 0.9
BASE_CONFIDENCE = 0.5
CONFIDENCE_PER_SAMPLE = 0.05
MAX_CONFIDENCE = 0.9
LOW_PRODUCTIVITY_THRESHOLD = 40
HIGH_PRODUCTIVITY_THRESHOLD = 70
LOW_PRODUCTIVITY_FACTOR = 1.2
PEAK_PRODUCTIVITY_FACTOR = 0.9
ENERGY_MISMATCH_FACTOR = 1.3
FATIGUE_TASK_COUNT = 5
FATIGUE_FACTOR = 1.1
ON_TIME_TOLERANCE = 1.2

# Slot scoring
BASE_SCORE = 50
PRODUCTIVITY_WEIGHT = 0.3
HIGH_ENERGY_MORNING_BONUS = 15
HIGH_ENERGY_AFTERNOON_BONUS = 5
LOW_ENERGY_AFTERNOON_BONUS = 10
WORK_CONTEXT_BONUS = 15
WORK_CONTEXT_PENALTY = -10
PERSONAL_CONTEXT_BONUS = 15
PERSONAL_CONTEXT_PENALTY = -5
FOCUS_MATCH_BONUS = 20
FOCUS_MISS_PENALTY = -10
FOCUS_TASK_MIN_MINUTES = 30

# Completion prediction
BASE_COMPLETION_PROBABILITY = 0.7
OVERRUN_PENALTY_WEIGHT = 0.3
LOW_PRODUCTIVITY_PENALTY = 0.15
PEAK_PRODUCTIVITY_BONUS = 0.1
ENERGY_MISMATCH_PENALTY = 0.2
MIN_COMPLETION_PROBABILITY = 0.1
MAX_COMPLETION_PROBABILITY = 0.95


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML or JSON file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            loaded = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            loaded = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    return merge_config(get_default_config(), loaded or {})


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        'scheduling': {
            'default_slot_minutes': DEFAULT_SLOT_DURATION,
            'buffer_minutes': BUFFER_BETWEEN_TASKS,
            'max_continuous_work_minutes': MAX_CONTINUOUS_WORK,
            'break_minutes': BREAK_DURATION,
            'days_ahead': 7,
            'alternatives': 3,
        },
        'prediction': {
            'default_estimate_minutes': DEFAULT_ESTIMATE_MINUTES,
            'min_samples': MIN_PATTERN_SAMPLES,
            'sample_window': SAMPLE_WINDOW,
            'recency_decay': RECENCY_DECAY,
            'base_confidence': BASE_CONFIDENCE,
            'confidence_per_sample': CONFIDENCE_PER_SAMPLE,
            'max_confidence': MAX_CONFIDENCE,
            'low_productivity_threshold': LOW_PRODUCTIVITY_THRESHOLD,
            'high_productivity_threshold': HIGH_PRODUCTIVITY_THRESHOLD,
            'low_productivity_factor': LOW_PRODUCTIVITY_FACTOR,
            'peak_productivity_factor': PEAK_PRODUCTIVITY_FACTOR,
            'energy_mismatch_factor': ENERGY_MISMATCH_FACTOR,
            'fatigue_task_count': FATIGUE_TASK_COUNT,
            'fatigue_factor': FATIGUE_FACTOR,
            'on_time_tolerance': ON_TIME_TOLERANCE,
        },
        'scoring': {
            'base_score': BASE_SCORE,
            'productivity_weight': PRODUCTIVITY_WEIGHT,
            'high_energy_morning_bonus': HIGH_ENERGY_MORNING_BONUS,
            'high_energy_afternoon_bonus': HIGH_ENERGY_AFTERNOON_BONUS,
            'low_energy_afternoon_bonus': LOW_ENERGY_AFTERNOON_BONUS,
            'work_context_bonus': WORK_CONTEXT_BONUS,
            'work_context_penalty': WORK_CONTEXT_PENALTY,
            'personal_context_bonus': PERSONAL_CONTEXT_BONUS,
            'personal_context_penalty': PERSONAL_CONTEXT_PENALTY,
            'focus_match_bonus': FOCUS_MATCH_BONUS,
            'focus_miss_penalty': FOCUS_MISS_PENALTY,
            'focus_task_min_minutes': FOCUS_TASK_MIN_MINUTES,
        },
        'completion': {
            'base_probability': BASE_COMPLETION_PROBABILITY,
            'overrun_penalty_weight': OVERRUN_PENALTY_WEIGHT,
            'low_productivity_penalty': LOW_PRODUCTIVITY_PENALTY,
            'peak_productivity_bonus': PEAK_PRODUCTIVITY_BONUS,
            'energy_mismatch_penalty': ENERGY_MISMATCH_PENALTY,
            'min_probability': MIN_COMPLETION_PROBABILITY,
            'max_probability': MAX_COMPLETION_PROBABILITY,
        },
        'evaluation': {
            'task_count': 30,
            'completions_per_task': 4,
            'overrun_mean': 1.2,
            'overrun_std': 0.3,
            'due_date_range_days': 14,
        },
    }
