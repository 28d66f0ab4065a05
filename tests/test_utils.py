import pytest

from greencart.utils import format_hours, is_valid_time, minutes_to_time, round_half_up, time_to_minutes


@pytest.mark.parametrize("value, minutes", [
    ("09:00", 540),
    ("12:30", 750),
    ("00:00", 0),
    ("23:59", 1439),
    ("7:05", 425),
])
def test_time_to_minutes(value, minutes):
    assert time_to_minutes(value) == minutes


@pytest.mark.parametrize("minutes, value", [
    (540, "09:00"),
    (750, "12:30"),
    (0, "00:00"),
    (1439, "23:59"),
    (1500, "01:00"),
])
def test_minutes_to_time(minutes, value):
    assert minutes_to_time(minutes) == value


def test_time_to_minutes_rejects_garbage():
    with pytest.raises(ValueError):
        time_to_minutes("25:00")
    assert is_valid_time("noon") is False


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(-0.4) == 0
    assert isinstance(round_half_up(10.2), int)


def test_format_hours():
    assert format_hours(1.5) == "1h 30m"
    assert format_hours(0.2) == "0h 12m"
