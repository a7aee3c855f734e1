"""Formatting helpers — names, dates and clock times."""

from datetime import date, time

from teacher_api.core.formatting import clock, day_month_year, full_name, iso_date


def test_full_name_skips_blank_parts():
    assert full_name("Ana", None, " ", "Pérez") == "Ana Pérez"
    assert full_name(None, None) == ""


def test_dates_and_times():
    assert day_month_year(date(2024, 3, 5)) == "05/03/2024"
    assert day_month_year(None) is None
    assert iso_date(date(2024, 3, 5)) == "2024-03-05"
    assert iso_date(None) is None
    assert clock(time(8, 5)) == "08:05:00"
