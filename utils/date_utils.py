"""
Local-date helpers shared by the engine.

All calendar comparisons are done on the local date of evaluation. Naive
datetimes are taken as local already; aware ones are converted first.
"""

from datetime import date, datetime, time
from typing import Optional, Union


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def to_local_date(value: Optional[Union[date, datetime]]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_naive(value).date()
    return value


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def today_local() -> date:
    return date.today()


def years_before(moment: datetime, years: int = 1) -> datetime:
    """Same month, day and time `years` earlier; Feb 29 rolls over to Mar 1."""
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        return moment.replace(year=moment.year - years, month=3, day=1)
