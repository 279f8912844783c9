"""Staff availability persistence."""
import logging
from typing import Iterable, List, Set, Tuple

from academy import db
from academy.models.availability import AvailabilitySlot
from academy.services.slot_merger import TimeRange, expand_ranges, merge_slots
from academy.utils.time_utils import to_time
from academy.utils.validators import ValidationError

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class AvailabilityService:
    """Reads and replaces the availability rows of one staff member."""

    def __init__(self, start_hour: int = 7, end_hour: int = 21):
        self.start_hour = start_hour
        self.end_hour = end_hour

    @classmethod
    def from_config(cls, config) -> 'AvailabilityService':
        return cls(config.get('AVAILABILITY_START_HOUR', 7), config.get('AVAILABILITY_END_HOUR', 21))

    def check_cells(self, cells: Iterable[Cell]) -> Set[Cell]:
        cells = set(cells)
        for day, hour in cells:
            if not self.start_hour <= hour < self.end_hour:
                raise ValidationError(
                    f"Hour {hour} is outside the availability grid "
                    f"({self.start_hour:02d}:00-{self.end_hour:02d}:00)"
                )
        return cells

    @staticmethod
    def get_ranges(user_id: int) -> List[TimeRange]:
        rows = AvailabilitySlot.query.filter_by(user_id=user_id).order_by(
            AvailabilitySlot.day_of_week, AvailabilitySlot.start_time
        ).all()
        return [row.to_range() for row in rows]

    def get_selection(self, user_id: int) -> Set[Cell]:
        return expand_ranges(self.get_ranges(user_id))

    def replace(self, user_id: int, cells: Iterable[Cell]) -> List[TimeRange]:
        """Swap the user's stored ranges for the merged selection.

        Delete and insert share one transaction; on any failure the session
        is rolled back and the previous rows stay in place.
        """
        ranges = merge_slots(self.check_cells(cells))
        try:
            AvailabilitySlot.query.filter_by(user_id=user_id).delete(synchronize_session=False)
            for time_range in ranges:
                db.session.add(AvailabilitySlot(
                    user_id=user_id,
                    day_of_week=time_range.day_of_week,
                    start_time=to_time(time_range.start_time),
                    end_time=to_time(time_range.end_time),
                ))
            db.session.commit()
        except Exception:
            db.session.rollback()
            logger.exception("Availability save failed for user %s", user_id)
            raise

        logger.info("Saved %d availability ranges for user %s", len(ranges), user_id)
        return ranges

    def add_range(self, user_id: int, time_range: TimeRange) -> List[TimeRange]:
        """Add a manually entered range on top of what is stored."""
        added = expand_ranges([time_range])
        if not added:
            raise ValidationError("Range must cover at least one whole hour")
        return self.replace(user_id, self.get_selection(user_id) | added)

    def clear(self, user_id: int) -> None:
        self.replace(user_id, [])
