"""Sequential gating of program weeks."""
import pytest

from academy.services.week_unlock import (
    NOTHING_UNLOCKED, build_week_overview, current_week, is_topic_interactive,
    reinforcement_status, week_status
)

WEEKS = list(range(1, 13))


def test_no_level_unlocks_nothing():
    assert current_week(None, {1, 2}, WEEKS) == NOTHING_UNLOCKED


def test_current_week_is_first_incomplete():
    completed = {1, 2, 3}
    current = current_week('A1', completed, WEEKS)
    assert current == 4
    assert week_status(4, current, completed) == 'current'
    assert week_status(2, current, completed) == 'completed'
    assert week_status(5, current, completed) == 'locked'


def test_level_sets_starting_week():
    assert current_week('B1', set(), WEEKS) == 5
    assert current_week('C2', set(), WEEKS) == 11


def test_all_done_returns_highest_week():
    assert current_week('C1', set(WEEKS), WEEKS) == 12


def test_level_start_past_last_week_clamps():
    assert current_week('C2', set(), [1, 2, 3]) == 3


def test_reinforcement_weeks_do_not_affect_current_week():
    assert current_week('A1', {101}, WEEKS + [101]) == current_week('A1', set(), WEEKS + [101])
    assert current_week('A1', set(), [101, 102]) == NOTHING_UNLOCKED
    with pytest.raises(ValueError):
        week_status(101, 1, set())


def test_reinforcement_status():
    assert reinforcement_status(True) == 'completed'
    assert reinforcement_status(False) == 'available'


def test_topic_interactivity():
    assert is_topic_interactive('current')
    assert is_topic_interactive('completed')
    assert not is_topic_interactive('locked')


def test_build_week_overview():
    weeks = [{'week_number': n, 'title': f'W{n}'} for n in [3, 1, 2, 101]]
    overview = build_week_overview('A1', weeks, {1, 101})

    assert overview['current_week'] == 2
    assert [(w['week_number'], w['status']) for w in overview['weeks']] == [
        (1, 'completed'), (2, 'current'), (3, 'locked')
    ]
    assert overview['weeks'][2]['interactive'] is False
    assert overview['reinforcement_weeks'][0]['status'] == 'completed'
    assert 'status' not in weeks[0]


def test_weeks_below_entry_week_are_not_locked():
    current = current_week('A2', set(), WEEKS)
    assert current == 3
    assert week_status(1, current, set()) == 'completed'
    assert week_status(2, current, set()) == 'completed'
    assert week_status(3, current, set()) == 'current'
    assert week_status(4, current, set()) == 'locked'


def test_no_level_locks_every_week():
    assert week_status(1, NOTHING_UNLOCKED, set()) == 'locked'
