"""Synthetic task, context and completion generator."""

import random
from datetime import datetime, timedelta
from typing import List, Tuple

from ..models.task import CalendarEvent, EnergyLevel, Task, TaskStatus, TimeRange, UserContext

Completion = Tuple[Task, float, datetime]


class TaskGenerator:
    """Generates deterministic task sets, contexts and completion streams."""

    CONTEXTS = [['work'], ['work', 'writing'], ['personal'], ['admin'], []]
    TITLES = ['Review', 'Draft', 'Plan', 'Fix', 'Call', 'Refactor', 'Research', 'Pay']

    def __init__(self, seed: int = 42, config: dict = None):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
        self.config = config or {}
        self.eval_config = self.config.get('evaluation', {})

    def generate_tasks(self, count: int, start_date: datetime, due_date_range_days: int = 14) -> List[Task]:
        """Generate a set of tasks with realistic properties."""
        tasks = []

        for i in range(count):
            # Vary task sizes (mostly small, some long focus work)
            if self.random.random() < 0.6:
                estimated_minutes = self.random.choice([15, 20, 30, 45])
            else:
                estimated_minutes = self.random.choice([60, 90, 120])

            due_at = None
            if self.random.random() < 0.7:
                due_at = start_date + timedelta(days=self.random.randint(0, due_date_range_days),
                                                hours=self.random.randint(0, 8))

            focus_time = estimated_minutes if estimated_minutes >= 60 else None

            tasks.append(Task(
                task_id=f"task_{i:03d}",
                title=f"{self.random.choice(self.TITLES)} item {i}",
                estimated_minutes=estimated_minutes,
                energy_required=self.random.choice(EnergyLevel.ALL),
                context=list(self.random.choice(self.CONTEXTS)),
                due_at=due_at,
                created_at=start_date - timedelta(days=self.random.randint(0, 10)),
                status=TaskStatus.TODO,
                focus_time_minutes=focus_time,
            ))

        return tasks

    def generate_context(self, now: datetime) -> UserContext:
        """Generate a user context with a two-peak productivity curve."""
        productivity = {}
        for hour in range(24):
            if 9 <= hour <= 11:
                base = 80
            elif 14 <= hour <= 16:
                base = 72
            elif 8 <= hour <= 18:
                base = 55
            else:
                base = 25
            productivity[hour] = max(0, min(100, base + self.random.randint(-5, 5)))

        day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        events = [
            CalendarEvent(day + timedelta(hours=12), day + timedelta(hours=13), True, "lunch", "Lunch"),
            CalendarEvent(day + timedelta(hours=15), day + timedelta(hours=15, minutes=30), True, "standup",
                          "Team sync"),
            CalendarEvent(day + timedelta(hours=16), day + timedelta(hours=17), False, "office-hours",
                          "Office hours"),
        ]

        return UserContext(
            current_time=now,
            current_energy_level=EnergyLevel.MEDIUM,
            productivity_by_hour=productivity,
            work_hours=TimeRange("09:00", "17:00"),
            focus_hours=[TimeRange("09:00", "11:00")],
            upcoming_events=events,
            recent_tags=['work', 'admin'],
        )

    def generate_completions(
        self,
        tasks: List[Task],
        end_date: datetime,
        per_task: int = 4,
        overrun_mean: float = 1.2,
        overrun_std: float = 0.3,
    ) -> List[Completion]:
        """Generate a chronological stream of past completions for the tasks."""
        completions = []

        for task in tasks:
            for _ in range(per_task):
                overrun = self.random.gauss(overrun_mean, overrun_std)
                actual = max(5.0, round((task.estimated_minutes or 30) * overrun))
                completed_at = end_date - timedelta(
                    days=self.random.randint(1, 60),
                    hours=self.random.randint(0, 8),
                )
                completions.append((task, actual, completed_at))

        completions.sort(key=lambda item: item[2])
        return completions

    def generate_task_stream(
        self,
        start_date: datetime,
        task_count: int = None,
    ) -> Tuple[List[Task], UserContext, List[Completion]]:
        """Generate tasks, a context and their completion history."""
        task_count = task_count or self.eval_config.get('task_count', 30)

        tasks = self.generate_tasks(
            task_count, start_date, self.eval_config.get('due_date_range_days', 14))
        context = self.generate_context(start_date)
        completions = self.generate_completions(
            tasks,
            start_date,
            per_task=self.eval_config.get('completions_per_task', 4),
            overrun_mean=self.eval_config.get('overrun_mean', 1.2),
            overrun_std=self.eval_config.get('overrun_std', 0.3),
        )

        return tasks, context, completions
