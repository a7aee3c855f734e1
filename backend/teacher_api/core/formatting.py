"""Presentation helpers shared by services: names, dates, times."""

from datetime import date, time


def full_name(*parts: str | None) -> str:
    """Join non-blank name parts with single spaces."""
    return " ".join(
        str(p).strip() for p in parts if p is not None and str(p).strip()
    ).strip()


def day_month_year(value: date | None) -> str | None:
    """DD/MM/YYYY, the format observations are shown in."""
    if value is None:
        return None
    return value.strftime("%d/%m/%Y")


def iso_date(value: date | None) -> str | None:
    return value.isoformat() if value else None


def clock(value: time | None) -> str | None:
    """HH:MM:SS, as the database renders time columns."""
    return value.strftime("%H:%M:%S") if value else None
