"""Tests for the clock helpers and the TimePoint / Resident models."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError
from helpers import MONDAY, SUNDAY, TUESDAY

from src.signage.models import ClockTime, Resident, TimePoint, TimeWindow
from src.signage.timeutils import (
    current_timepoint,
    greeting_for,
    is_time_active,
    is_time_in_range,
    parse_hhmm,
)


class TestParseHHMM:
    @pytest.mark.parametrize(
        "value, expected",
        [("00:00", 0), ("09:05", 545), ("9:05", 545), ("23:59", 1439), (" 10:00 ", 600)],
    )
    def test_valid(self, value, expected):
        assert parse_hhmm(value) == expected

    @pytest.mark.parametrize("value", ["", None, "24:00", "12:60", "1200", "ab:cd", "10:0"])
    def test_invalid(self, value):
        assert parse_hhmm(value) is None


class TestWindows:
    def test_is_time_active(self):
        assert is_time_active("", 1439)
        assert is_time_active("nonsense", 1439)
        assert is_time_active("18:00", 18 * 60)
        assert not is_time_active("18:00", 18 * 60 + 1)

    def test_is_time_in_range_inclusive(self):
        window = TimeWindow(
            start=ClockTime(hour=11, minute=15), end=ClockTime(hour=12, minute=30)
        )
        assert is_time_in_range(window, 675)
        assert is_time_in_range(window, 750)
        assert not is_time_in_range(window, 674)
        assert not is_time_in_range(window, 751)

    def test_no_midnight_wrap(self):
        window = TimeWindow(
            start=ClockTime(hour=22, minute=0), end=ClockTime(hour=2, minute=0)
        )
        assert not is_time_in_range(window, 23 * 60)
        assert not is_time_in_range(window, 60)


class TestTimePoint:
    def test_from_datetime_monday(self):
        tp = TimePoint.from_datetime(datetime(2026, 10, 19, 9, 45, 30))
        assert (tp.hour, tp.minute) == (9, 45)
        assert tp.weekday_index == 0
        assert tp.week_number == 43
        assert tp.calendar_date == MONDAY
        assert tp.minutes_since_midnight == 585

    def test_sunday_is_six(self):
        tp = TimePoint.from_datetime(datetime.combine(SUNDAY, datetime.min.time()))
        assert tp.weekday_index == 6
        assert tp.week_number == 43

    def test_frozen(self):
        tp = TimePoint.from_datetime(datetime(2026, 10, 20, 8, 0))
        with pytest.raises(ValidationError):
            tp.hour = 9

    def test_current_timepoint(self):
        tp = current_timepoint("Europe/Berlin")
        assert 0 <= tp.hour <= 23
        assert tp.week_number >= 1


class TestGreeting:
    @pytest.mark.parametrize(
        "hour, greeting",
        [
            (5, "Guten Morgen"),
            (10, "Guten Morgen"),
            (11, "Es ist Mittagszeit"),
            (14, "Es ist Nachmittag"),
            (18, "Guten Abend"),
            (22, "Gute Nacht"),
            (3, "Gute Nacht"),
        ],
    )
    def test_greeting_for(self, hour, greeting):
        assert greeting_for(hour) == greeting


class TestResident:
    def _resident(self, **fields):
        data = {
            "id": "r1",
            "firstName": "Erika",
            "lastName": "Muster",
            "birthDate": "1940-10-20",
        }
        data.update(fields)
        return Resident.model_validate(data)

    def test_camel_case_fields(self):
        resident = self._resident()
        assert resident.first_name == "Erika"
        assert resident.full_name == "Erika Muster"
        assert resident.active is True

    def test_age_on(self):
        assert self._resident().age_on(TUESDAY) == 86

    def test_hidden_age(self):
        assert self._resident(hideAge=True).age_on(TUESDAY) is None

    def test_malformed_birth_date(self):
        resident = self._resident(birthDate="unbekannt")
        assert resident.birthday is None
        assert resident.age_on(date(2026, 1, 1)) is None

    def test_datetime_birth_date(self):
        resident = self._resident(birthDate="1940-10-20T00:00:00.000Z")
        assert resident.birthday == date(1940, 10, 20)
