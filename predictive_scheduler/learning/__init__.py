"""Pattern learning storage."""

from .store import InMemoryPatternStore, PatternStore, pattern_key

__all__ = ['InMemoryPatternStore', 'PatternStore', 'pattern_key']
