"""Offline evaluation of duration prediction accuracy."""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List

from ..engine.scheduler import PredictiveScheduler
from ..models.task import UserContext
from .generator import Completion

logger = logging.getLogger(__name__)


class EvaluationResult:
    """Prediction error of learned vs. naive estimates."""

    def __init__(self):
        self.samples = 0
        self.learned_errors: List[float] = []
        self.naive_errors: List[float] = []
        self.confidences: List[float] = []

    @property
    def mean_absolute_error(self) -> float:
        return sum(self.learned_errors) / len(self.learned_errors) if self.learned_errors else 0.0

    @property
    def naive_mean_absolute_error(self) -> float:
        return sum(self.naive_errors) / len(self.naive_errors) if self.naive_errors else 0.0

    @property
    def mean_confidence(self) -> float:
        return sum(self.confidences) / len(self.confidences) if self.confidences else 0.0

    @property
    def improvement_percent(self) -> float:
        naive = self.naive_mean_absolute_error
        if naive == 0:
            return 0.0
        return (naive - self.mean_absolute_error) / naive * 100

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON export."""
        return {
            'samples': self.samples,
            'mean_absolute_error': self.mean_absolute_error,
            'naive_mean_absolute_error': self.naive_mean_absolute_error,
            'mean_confidence': self.mean_confidence,
            'improvement_percent': self.improvement_percent,
        }


class Evaluator:
    """Replays a completion stream and scores each prediction before learning from it."""

    def __init__(self, config: dict):
        """Initialize evaluator with configuration."""
        self.config = config

    def evaluate(self, completions: List[Completion], context: UserContext) -> EvaluationResult:
        """Predict, compare, then learn, for every completion in order."""
        scheduler = PredictiveScheduler(self.config)
        default_estimate = scheduler.predictor.default_estimate
        result = EvaluationResult()

        for task, actual, completed_at in completions:
            moment = replace(context, current_time=completed_at)
            prediction = scheduler.predict_duration(task, moment)

            result.samples += 1
            result.learned_errors.append(abs(prediction.value - actual))
            result.naive_errors.append(abs(default_estimate(task) - actual))
            result.confidences.append(prediction.confidence)

            scheduler.learn_from_completion(task, actual, completed_at)

        logger.info(
            f"Evaluated {result.samples} predictions: MAE {result.mean_absolute_error:.1f}min "
            f"vs naive {result.naive_mean_absolute_error:.1f}min")
        return result

    def run_evaluation(self, completions: List[Completion], context: UserContext,
                       output_dir: str = "results") -> EvaluationResult:
        """Evaluate and write the report to output_dir."""
        result = self.evaluate(completions, context)

        output_path = Path(output_dir)
        output_path.mkdir(exist_ok=True)
        with open(output_path / 'evaluation_results.json', 'w') as f:
            json.dump(result.to_dict(), f, indent=2)

        self._print_summary(result)
        return result

    def _print_summary(self, result: EvaluationResult):
        """Print evaluation report."""
        print("\n" + "=" * 60)
        print("DURATION PREDICTION EVALUATION")
        print("=" * 60)
        print(f"{'Predictions':<40} {result.samples:<15}")
        print(f"{'Learned MAE (minutes)':<40} {result.mean_absolute_error:<15.2f}")
        print(f"{'Naive estimate MAE (minutes)':<40} {result.naive_mean_absolute_error:<15.2f}")
        print(f"{'Mean confidence':<40} {result.mean_confidence:<15.2f}")
        print(f"{'Improvement (%)':<40} {result.improvement_percent:<15.2f}")
        print("=" * 60)
