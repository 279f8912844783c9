"""Curriculum week gating.

A student enters the twelve-week program at the week matching their level and
works forward; a week is open once every earlier week of their track is done.
Weeks numbered 100 and above are reinforcement weeks: they sit outside the
sequence and are shown on their own, gated only by their own completion flag.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Set

LEVEL_START_WEEK = {
    'A1': 1,
    'A2': 3,
    'B1': 5,
    'B2': 7,
    'C1': 9,
    'C2': 11,
}

REINFORCEMENT_WEEK_START = 100

NOTHING_UNLOCKED = 0

COMPLETED = 'completed'
CURRENT = 'current'
LOCKED = 'locked'
AVAILABLE = 'available'


def is_reinforcement_week(week_number: int) -> bool:
    return week_number >= REINFORCEMENT_WEEK_START


def current_week(
    level: Optional[str],
    completed_week_numbers: Iterable[int],
    week_numbers: Iterable[int],
) -> int:
    """Lowest incomplete week from the level's starting week onward.

    Returns ``NOTHING_UNLOCKED`` without a level (or without any regular
    weeks). When the track is finished, or the level starts past the last
    week, the highest regular week is returned.
    """
    if not level:
        return NOTHING_UNLOCKED

    regular = sorted({n for n in week_numbers if not is_reinforcement_week(n)})
    if not regular:
        return NOTHING_UNLOCKED

    completed = set(completed_week_numbers)
    start = LEVEL_START_WEEK.get(level, 1)
    for number in regular:
        if number >= start and number not in completed:
            return number
    return regular[-1]


def week_status(week_number: int, current: int, completed_week_numbers: Iterable[int]) -> str:
    if is_reinforcement_week(week_number):
        raise ValueError(f"Week {week_number} is a reinforcement week and is not sequentially gated")
    # weeks below the level's entry point count as done
    if week_number in set(completed_week_numbers):
        return COMPLETED
    if current != NOTHING_UNLOCKED and week_number < current:
        return COMPLETED
    if week_number == current:
        return CURRENT
    return LOCKED


def reinforcement_status(is_completed: bool) -> str:
    return COMPLETED if is_completed else AVAILABLE


def is_topic_interactive(status: str) -> bool:
    """Topics of locked weeks cannot be opened or changed."""
    return status != LOCKED


def build_week_overview(
    level: Optional[str],
    weeks: Iterable[Mapping],
    completed_week_numbers: Iterable[int],
) -> Dict:
    """Annotate program weeks with their status for one student.

    ``weeks`` are mappings with at least ``week_number``; they are copied,
    never mutated.
    """
    weeks = list(weeks)
    completed: Set[int] = set(completed_week_numbers)
    current = current_week(level, completed, (w['week_number'] for w in weeks))

    regular: List[Dict] = []
    reinforcement: List[Dict] = []
    for week in sorted(weeks, key=lambda w: w['week_number']):
        entry = dict(week)
        number = week['week_number']
        if is_reinforcement_week(number):
            entry['status'] = reinforcement_status(number in completed)
            entry['interactive'] = True
            reinforcement.append(entry)
        else:
            status = week_status(number, current, completed)
            entry['status'] = status
            entry['interactive'] = is_topic_interactive(status)
            regular.append(entry)

    return {
        'current_week': current,
        'weeks': regular,
        'reinforcement_weeks': reinforcement,
    }
