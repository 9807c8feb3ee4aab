"""Task ordering policy implementations."""

from .base import OrderingPolicy
from .urgency import UrgencyPolicy

__all__ = ['OrderingPolicy', 'UrgencyPolicy']
