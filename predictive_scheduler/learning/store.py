"""Keyed storage for learned task patterns and completion history.

Writers touching the same pattern key or task id are serialized; readers get
snapshot copies so they never iterate a list a writer is appending to.
"""

import copy
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ..models.pattern import CompletionRecord, TaskPattern
from ..models.task import Task

logger = logging.getLogger(__name__)

GENERAL_CONTEXT = "general"
DURATION_BUCKET_MINUTES = 30


def pattern_key(task: Task) -> str:
    """Group similar tasks by context tags, energy and estimate bucket."""
    context_key = "_".join(sorted(task.context)) or GENERAL_CONTEXT
    if task.estimated_minutes:
        bucket = int(task.estimated_minutes // DURATION_BUCKET_MINUTES) * DURATION_BUCKET_MINUTES
    else:
        bucket = DURATION_BUCKET_MINUTES
    return f"{context_key}:{task.energy_required}:{bucket}"


class PatternStore(ABC):
    """Abstract store for task patterns and per-task completion history."""

    @abstractmethod
    def get(self, key: str) -> Optional[TaskPattern]:
        """Return a snapshot of the pattern under key, if any."""
        pass

    @abstractmethod
    def upsert(self, key: str, update: Callable[[TaskPattern], None]) -> TaskPattern:
        """Apply update to the pattern under key, creating it if needed."""
        pass

    @abstractmethod
    def append_completion(self, task_id: str, record: CompletionRecord) -> None:
        """Append a completion record to a task's history."""
        pass

    @abstractmethod
    def get_history(self, task_id: str) -> List[CompletionRecord]:
        """Return a copy of a task's completion history."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all known pattern keys."""
        pass

    @abstractmethod
    def task_ids(self) -> List[str]:
        """Return all task ids with recorded history."""
        pass

    def to_dict(self) -> Dict[str, Any]:
        """Serialize patterns and history for host-owned persistence."""
        return {
            'patterns': {key: self.get(key).to_dict() for key in self.keys()},
            'history': {
                task_id: [r.to_dict() for r in self.get_history(task_id)]
                for task_id in self.task_ids()
            },
        }

    @abstractmethod
    def load_dict(self, data: Dict[str, Any]) -> None:
        """Replace the store contents with a serialized snapshot."""
        pass


class InMemoryPatternStore(PatternStore):
    """Process-local store with one lock per pattern key and per task id."""

    def __init__(self):
        self._patterns: Dict[str, TaskPattern] = {}
        self._history: Dict[str, List[CompletionRecord]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, name: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock

    def get(self, key: str) -> Optional[TaskPattern]:
        with self._lock_for(f"pattern:{key}"):
            pattern = self._patterns.get(key)
            return copy.deepcopy(pattern) if pattern is not None else None

    def upsert(self, key: str, update: Callable[[TaskPattern], None]) -> TaskPattern:
        with self._lock_for(f"pattern:{key}"):
            pattern = self._patterns.get(key)
            if pattern is None:
                with self._registry_lock:
                    pattern = self._patterns[key] = TaskPattern()
                logger.info(f"Created pattern {key}")
            update(pattern)
            return copy.deepcopy(pattern)

    def append_completion(self, task_id: str, record: CompletionRecord) -> None:
        with self._lock_for(f"history:{task_id}"):
            records = self._history.get(task_id)
            if records is None:
                with self._registry_lock:
                    records = self._history[task_id] = []
            records.append(record)

    def get_history(self, task_id: str) -> List[CompletionRecord]:
        with self._lock_for(f"history:{task_id}"):
            return list(self._history.get(task_id, []))

    def keys(self) -> List[str]:
        with self._registry_lock:
            return sorted(self._patterns)

    def task_ids(self) -> List[str]:
        with self._registry_lock:
            return sorted(self._history)

    def load_dict(self, data: Dict[str, Any]) -> None:
        patterns = {
            key: TaskPattern.from_dict(value)
            for key, value in data['patterns'].items()
        }
        history = {
            task_id: [CompletionRecord.from_dict(r) for r in records]
            for task_id, records in data['history'].items()
        }
        with self._registry_lock:
            self._patterns = patterns
            self._history = history
        logger.info(f"Loaded {len(patterns)} patterns and history for {len(history)} tasks")
