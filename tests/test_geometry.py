import dataclasses

import pytest

from hecto.geometry import Location, Position, Size


@pytest.mark.parametrize(
    "position",
    [Position(col=5, row=3), Position(col=0, row=9), Position(col=12, row=0)],
)
def test_subtracting_itself_gives_origin(position):
    assert position.saturating_sub(position) == Position()


def test_subtracting_origin_is_identity():
    position = Position(col=7, row=4)
    assert position.saturating_sub(Position()) == position


def test_subtraction_of_smaller_position_is_exact():
    big = Position(col=10, row=8)
    small = Position(col=3, row=2)
    result = big.saturating_sub(small)
    assert result.col + small.col == big.col
    assert result.row + small.row == big.row


def test_subtraction_saturates_at_zero():
    small = Position(col=1, row=2)
    big = Position(col=5, row=6)
    assert small.saturating_sub(big) == Position()


def test_subtraction_saturates_each_component_independently():
    a = Position(col=5, row=1)
    b = Position(col=2, row=4)
    result = a.saturating_sub(b)
    assert result.row == 0
    assert result.col + b.col == a.col


def test_values_are_immutable():
    location = Location(grapheme_idx=2, line_idx=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        location.line_idx = 5  # type: ignore[misc]
    assert location == Location(grapheme_idx=2, line_idx=3)
    assert location.line_idx == 3


def test_replace_keeps_other_fields():
    size = Size(height=20, width=80)
    taller = dataclasses.replace(size, height=40)
    assert taller.width == size.width
    assert taller != size


def test_locations_compare_by_value():
    assert Location(grapheme_idx=1, line_idx=2) == Location(grapheme_idx=1, line_idx=2)
    assert Location(grapheme_idx=1, line_idx=2) != Location(grapheme_idx=2, line_idx=1)