"""Deadline urgency ordering policy."""

import math
from datetime import datetime
from typing import List

from ..models.task import Task
from .base import OrderingPolicy


class UrgencyPolicy(OrderingPolicy):
    """Soonest due date first; tasks without a due date go last."""

    def order_tasks(self, tasks: List[Task], now: datetime) -> List[Task]:
        """Order tasks by time remaining until due."""

        def sort_key(task: Task) -> float:
            if task.due_at is None:
                return math.inf
            return (task.due_at - now).total_seconds()

        return sorted(tasks, key=sort_key)

    def get_policy_name(self) -> str:
        """Return policy name."""
        return "URGENCY"
