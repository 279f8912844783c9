"""Layout arithmetic for the weekly schedule grid.

Events are drawn as absolutely positioned overlays on a fixed time axis. The
functions here are called on every pointer move during a drag, so none of
them look at stored events.
"""
from dataclasses import dataclass
from typing import Dict, List, Mapping, Set, Tuple

from academy.utils.time_utils import TimeLike, format_hour, to_minutes

Cell = Tuple[int, int]

# Grid columns run Monday..Saturday, Sunday last when shown (0 = Sunday)
WEEKDAY_ORDER = (1, 2, 3, 4, 5, 6, 0)


@dataclass(frozen=True)
class DragSelection:
    """A drag rectangle collapsed into what quick-create needs."""

    days: Tuple[int, ...]
    start_time: str
    end_time: str

    def to_dict(self) -> Dict:
        return {
            'days': list(self.days),
            'start_time': self.start_time,
            'end_time': self.end_time,
        }


@dataclass(frozen=True)
class GridLayout:
    grid_start_hour: int = 7
    grid_end_hour: int = 22
    slot_minutes: int = 30
    day_count: int = 7
    pixels_per_slot: int = 30

    def __post_init__(self):
        if self.slot_minutes <= 0 or 60 % self.slot_minutes:
            raise ValueError("slot_minutes must divide an hour")
        if self.day_count not in (6, 7):
            raise ValueError("day_count must be 6 or 7")
        if not 0 <= self.grid_start_hour < self.grid_end_hour <= 24:
            raise ValueError("grid hours out of range")

    @classmethod
    def from_config(cls, config: Mapping) -> 'GridLayout':
        return cls(
            grid_start_hour=config.get('GRID_START_HOUR', 7),
            grid_end_hour=config.get('GRID_END_HOUR', 22),
            slot_minutes=config.get('GRID_SLOT_MINUTES', 30),
            day_count=7 if config.get('GRID_INCLUDE_SUNDAY', True) else 6,
            pixels_per_slot=config.get('GRID_PIXELS_PER_SLOT', 30),
        )

    @property
    def slots_per_hour(self) -> int:
        return 60 // self.slot_minutes

    def visible_days(self) -> List[int]:
        return list(WEEKDAY_ORDER[:self.day_count])

    def total_height(self) -> int:
        hours = self.grid_end_hour - self.grid_start_hour
        return hours * self.slots_per_hour * self.pixels_per_slot

    def top_offset(self, start_time: TimeLike) -> int:
        """Pixels from the top of the grid; clamped at 0 before grid start."""
        minutes_from_start = to_minutes(start_time) - self.grid_start_hour * 60
        if minutes_from_start <= 0:
            return 0
        return (minutes_from_start // self.slot_minutes) * self.pixels_per_slot

    def height(self, start_time: TimeLike, end_time: TimeLike) -> int:
        """Overlay height in whole pixels; never less than one slot."""
        duration = to_minutes(end_time) - to_minutes(start_time)
        return max(duration * self.pixels_per_slot // self.slot_minutes, self.pixels_per_slot)

    def place(self, event: Mapping) -> Dict:
        return {
            'top': self.top_offset(event['start_time']),
            'height': self.height(event['start_time'], event['end_time']),
        }

    def cells_in_rectangle(self, anchor: Cell, cursor: Cell) -> Set[Cell]:
        """Every (day, hour) cell inside the rectangle spanned by two corners."""
        min_day, max_day = sorted((anchor[0], cursor[0]))
        min_hour, max_hour = sorted((anchor[1], cursor[1]))
        return {
            (day, hour)
            for day in range(min_day, max_day + 1)
            for hour in range(min_hour, max_hour + 1)
        }

    def selection_bounds(self, anchor: Cell, cursor: Cell) -> DragSelection:
        """One start/end pair for the hour span, one entry per selected day."""
        min_day, max_day = sorted((anchor[0], cursor[0]))
        min_hour, max_hour = sorted((anchor[1], cursor[1]))
        return DragSelection(
            days=tuple(range(min_day, max_day + 1)),
            start_time=format_hour(min_hour),
            end_time=format_hour(max_hour + 1),
        )
