"""Evaluation and simulation modules."""

from .generator import TaskGenerator
from .evaluator import EvaluationResult, Evaluator

__all__ = ['TaskGenerator', 'EvaluationResult', 'Evaluator']
