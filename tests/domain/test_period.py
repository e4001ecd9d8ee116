"""Tests for the Period value object."""

from datetime import date

import pytest

from src.domain.models import Period, months_of_year


def test_previous_and_next_wrap_across_years():
    assert Period(2024, 1).previous() == Period(2023, 12)
    assert Period(2023, 12).next() == Period(2024, 1)
    assert Period(2024, 6).previous() == Period(2024, 5)


def test_key_is_zero_padded_and_parse_round_trips():
    period = Period(2024, 3)

    assert period.key == "2024-03"
    assert str(period) == "2024-03"
    assert Period.parse("2024-03") == period


@pytest.mark.parametrize("raw", ["2024", "2024-13", "24-x", "2024/03"])
def test_parse_rejects_invalid_keys(raw):
    with pytest.raises(ValueError):
        Period.parse(raw)


def test_month_out_of_range_is_rejected():
    with pytest.raises(ValueError):
        Period(2024, 0)


def test_periods_order_chronologically():
    assert Period(2023, 12) < Period(2024, 1) < Period(2024, 2)
    assert Period(2023, 12).months_until(Period(2024, 2)) == 2


def test_day_bounds_and_membership():
    february = Period(2024, 2)

    assert february.first_day == date(2024, 2, 1)
    assert february.last_day == date(2024, 2, 29)
    assert february.contains(date(2024, 2, 29))
    assert not february.contains(date(2024, 3, 1))


def test_months_of_year_lists_twelve_periods():
    months = months_of_year(2024)

    assert len(months) == 12
    assert months[0] == Period(2024, 1)
    assert months[-1] == Period(2024, 12)
