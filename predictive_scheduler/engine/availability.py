"""Free time derivation from work hours and blocking calendar events."""

import logging
from datetime import timedelta
from typing import List

from ..models.schedule import ScheduleSlot, SlotType
from ..models.task import UserContext
from ..utils.datetime_utils import get_work_day_bounds, is_same_day

logger = logging.getLogger(__name__)


class AvailabilityScanner:
    """Derives free blocks for a range of days."""

    def get_available_blocks(self, context: UserContext, days_ahead: int) -> List[ScheduleSlot]:
        """Get free work-hour blocks from today through days_ahead - 1."""
        blocks = []
        blocking = context.blocking_events()

        for day in range(days_ahead):
            date = context.current_time + timedelta(days=day)
            day_start, day_end = get_work_day_bounds(date, context.work_hours)

            events = sorted(
                (e for e in blocking if is_same_day(e.start_at, date)),
                key=lambda e: e.start_at,
            )

            cursor = day_start
            for event in events:
                if event.start_at > cursor:
                    blocks.append(ScheduleSlot(cursor, min(event.start_at, day_end), SlotType.TASK))
                cursor = max(cursor, event.end_at)

            if cursor < day_end:
                blocks.append(ScheduleSlot(cursor, day_end, SlotType.TASK))

        logger.debug(f"Found {len(blocks)} free blocks over {days_ahead} days")
        return [b for b in blocks if b.end_at > b.start_at]
