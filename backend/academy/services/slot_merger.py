"""Conversion between availability grid cells and stored time ranges.

The availability calendar works on one-hour cells addressed by
``(day_of_week, hour)``. What gets stored is the minimal list of contiguous
ranges per day; reading it back expands the ranges into cells again.
"""
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Set, Tuple, Union

from academy.utils.time_utils import format_hour, format_time, parse_time, to_minutes
from academy.utils.validators import ValidationError, require_fields, validate_day_of_week

Cell = Tuple[int, int]


@dataclass(frozen=True)
class TimeRange:
    """One contiguous block of time on a single day."""

    day_of_week: int
    start_time: str
    end_time: str

    def __post_init__(self):
        validate_day_of_week(self.day_of_week)
        # Normalise HH:MM:SS and time objects to HH:MM
        object.__setattr__(self, 'start_time', format_time(self.start_time))
        object.__setattr__(self, 'end_time', format_time(self.end_time))
        if to_minutes(self.start_time) >= to_minutes(self.end_time):
            raise ValidationError(
                f"start_time must be before end_time ({self.start_time} >= {self.end_time})"
            )

    @classmethod
    def from_dict(cls, row: Mapping) -> 'TimeRange':
        require_fields(dict(row), ['day_of_week', 'start_time', 'end_time'])
        return cls(
            day_of_week=row['day_of_week'],
            start_time=row['start_time'],
            end_time=row['end_time'],
        )

    def to_dict(self) -> Dict:
        return {
            'day_of_week': self.day_of_week,
            'start_time': self.start_time,
            'end_time': self.end_time,
        }


def merge_slots(selection: Iterable[Cell]) -> List[TimeRange]:
    """Collapse selected hour cells into the fewest contiguous ranges.

    Ranges never span two days. The result is ordered by day, then start.
    """
    hours_by_day = defaultdict(set)
    for day, hour in selection:
        hours_by_day[day].add(hour)

    ranges = []
    for day in sorted(hours_by_day):
        hours = sorted(hours_by_day[day])
        run_start = hours[0]
        run_end = hours[0] + 1

        for hour in hours[1:]:
            if hour == run_end:
                run_end = hour + 1
            else:
                ranges.append(TimeRange(day, format_hour(run_start), format_hour(run_end)))
                run_start = hour
                run_end = hour + 1

        ranges.append(TimeRange(day, format_hour(run_start), format_hour(run_end)))

    return ranges


def expand_ranges(ranges: Iterable[Union[TimeRange, Mapping]]) -> Set[Cell]:
    """Every whole hour ``[start_hour, end_hour)`` covered by the ranges.

    Minutes are ignored; the availability grid has one-hour resolution.
    """
    cells = set()
    for time_range in ranges:
        if not isinstance(time_range, TimeRange):
            time_range = TimeRange.from_dict(time_range)
        start_hour, _ = parse_time(time_range.start_time)
        end_hour, _ = parse_time(time_range.end_time)
        for hour in range(start_hour, end_hour):
            cells.add((time_range.day_of_week, hour))
    return cells
