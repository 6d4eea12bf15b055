import datetime as dt
from typing import Optional


def number(value: float) -> str:
    # 72.0 -> "72", 71.4 -> "71.4"
    return f"{value:g}"


def with_unit(value: float, unit: Optional[str] = None) -> str:
    return f"{number(value)}{unit}" if unit else number(value)


def signed(value: float, digits: int = 1) -> str:
    return f"{'+' if value >= 0 else ''}{value:.{digits}f}"


def short_date(day: dt.date) -> str:
    return day.strftime("%m/%d")


def month_day(day: dt.date) -> str:
    return f"{day:%b} {day.day}"


def weekday_month_day(day: dt.date) -> str:
    return f"{day:%a} • {day:%b} {day.day}"


def long_date(day: dt.date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


def days_ago(day: dt.date, today: dt.date) -> str:
    n = (today - day).days
    if n == 0:
        return "today"
    if n == 1:
        return "yesterday"
    if n == -1:
        return "tomorrow"
    if n < 0:
        return f"in {-n} days"
    return f"{n} days ago"
