"""Weekly grid layout arithmetic."""
import pytest

from academy.services.grid_layout import GridLayout


@pytest.fixture
def layout():
    return GridLayout(grid_start_hour=7, grid_end_hour=22, slot_minutes=30,
                      day_count=7, pixels_per_slot=30)


def test_top_offset(layout):
    assert layout.top_offset('07:00') == 0
    assert layout.top_offset('08:00') == 60
    assert layout.top_offset('08:45') == 90


def test_top_offset_clamps_before_grid_start(layout):
    assert layout.top_offset('06:00') == 0


def test_height(layout):
    assert layout.height('09:00', '10:30') == 90
    assert isinstance(layout.height('09:00', '10:30'), int)
    assert layout.height('09:00', '09:45') == 45
    assert layout.height('09:00', '09:00') == layout.pixels_per_slot
    assert layout.height('10:00', '09:00') == layout.pixels_per_slot


def test_place(layout):
    assert layout.place({'start_time': '08:00', 'end_time': '09:00'}) == {'top': 60, 'height': 60}


def test_cells_in_rectangle(layout):
    assert layout.cells_in_rectangle((1, 9), (1, 9)) == {(1, 9)}
    cells = layout.cells_in_rectangle((3, 11), (1, 9))
    assert len(cells) == 9
    assert (2, 10) in cells


def test_selection_bounds(layout):
    selection = layout.selection_bounds((3, 11), (1, 9))
    assert selection.days == (1, 2, 3)
    assert selection.start_time == '09:00'
    assert selection.end_time == '12:00'


def test_visible_days_and_height():
    assert GridLayout(day_count=7).visible_days() == [1, 2, 3, 4, 5, 6, 0]
    assert GridLayout(day_count=6).visible_days() == [1, 2, 3, 4, 5, 6]
    assert GridLayout().total_height() == 15 * 2 * 30


def test_from_config():
    layout = GridLayout.from_config({'GRID_START_HOUR': 8, 'GRID_INCLUDE_SUNDAY': False})
    assert layout.grid_start_hour == 8
    assert layout.day_count == 6


def test_rejects_bad_configuration():
    with pytest.raises(ValueError):
        GridLayout(slot_minutes=25)
    with pytest.raises(ValueError):
        GridLayout(day_count=5)
