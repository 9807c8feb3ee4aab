"""Best-slot recommendation for a single task."""

import logging
from typing import List

from ..models.schedule import ScheduleRecommendation, ScheduleSlot, SlotType
from ..models.task import EnergyLevel, Task, UserContext
from ..utils import config as defaults
from ..utils.datetime_utils import add_minutes
from .availability import AvailabilityScanner
from .predictor import DurationPredictor
from .scorer import MORNING_HOURS, SlotScorer

logger = logging.getLogger(__name__)

NO_SLOT_REASON = "No available time slots found"


class SlotFinder:
    """Picks the highest scoring free block for one task."""

    def __init__(
        self,
        predictor: DurationPredictor,
        scorer: SlotScorer,
        scanner: AvailabilityScanner,
        config: dict,
    ):
        """Initialize slot finder with its collaborators and configuration."""
        self.predictor = predictor
        self.scorer = scorer
        self.scanner = scanner
        self.config = config
        self.scheduling_config = config.get('scheduling', {})

    def find_optimal_slots(
        self,
        task: Task,
        context: UserContext,
        days_ahead: int = 7,
    ) -> ScheduleRecommendation:
        """Recommend the best slot for a task and up to three alternatives."""
        prediction = self.predictor.predict_duration(task, context)
        blocks = self.scanner.get_available_blocks(context, days_ahead)

        scored = [(block, self.scorer.score_slot_for_task(task, block, context)) for block in blocks]
        scored.sort(key=lambda item: -item[1])

        if not scored:
            logger.info(f"No free blocks for {task.task_id} in the next {days_ahead} days")
            return ScheduleRecommendation(
                task=task,
                suggested_slot=ScheduleSlot(
                    context.current_time,
                    add_minutes(context.current_time, prediction.value),
                    SlotType.TASK,
                    task_id=task.task_id,
                ),
                score=0,
                reasoning=[NO_SLOT_REASON],
                alternatives=[],
            )

        best_block, best_score = scored[0]
        suggested = self._task_slot(task, best_block, prediction.value, best_score)

        alternative_count = self.scheduling_config.get('alternatives', 3)
        alternatives = [
            self._task_slot(task, block, prediction.value, score)
            for block, score in scored[1:1 + alternative_count]
        ]

        return ScheduleRecommendation(
            task=task,
            suggested_slot=suggested,
            score=best_score,
            reasoning=[self.explain_slot_choice(task, suggested, context)],
            alternatives=alternatives,
        )

    def explain_slot_choice(self, task: Task, slot: ScheduleSlot, context: UserContext) -> str:
        """One-sentence reason for choosing a slot."""
        hour = slot.start_at.hour
        reasons: List[str] = []

        high = self.predictor.prediction_config.get(
            'high_productivity_threshold', defaults.HIGH_PRODUCTIVITY_THRESHOLD)
        if context.productivity_at(hour) > high:
            reasons.append("high productivity period")

        if task.energy_required == EnergyLevel.HIGH and hour in MORNING_HOURS:
            reasons.append("morning energy alignment")

        if task.focus_time_minutes and self.scorer.is_focus_hour(hour, context):
            reasons.append("focus time block")

        reason = ", ".join(reasons) if reasons else "available slot"
        return f"{slot.start_at:%A} at {slot.start_at:%H:%M}: {reason}"

    @staticmethod
    def _task_slot(task: Task, block: ScheduleSlot, minutes: int, score: float) -> ScheduleSlot:
        return ScheduleSlot(
            block.start_at,
            add_minutes(block.start_at, minutes),
            SlotType.TASK,
            task_id=task.task_id,
            score=score,
        )
