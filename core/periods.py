"""Relative time windows used to scope totals and the category chart.

Every bound is a local calendar day built from a (year, month, day) triple.
Nothing is converted between timezones and no bound is derived by
subtracting instants, so daylight-saving changes cannot shift a day.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

from core.domain import Period

DateLike = Union[str, date]

_ISO_DAY_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def coerce_period(value: Union[Period, str]) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(value)
    except ValueError:
        raise ValueError(f"Unknown period: {value!r}") from None


def to_date(day: DateLike) -> date:
    """Return the calendar day of an ISO "YYYY-MM-DD" string or a date.

    Raises ValueError for anything that is not a valid ISO date.
    """
    if isinstance(day, datetime):
        return local_day(day)
    if isinstance(day, date):
        return day
    text = str(day).strip()
    if not _ISO_DAY_RE.fullmatch(text):
        raise ValueError(f"Not a YYYY-MM-DD date: {day!r}")
    return date.fromisoformat(text)


def local_day(now: datetime) -> date:
    return date(now.year, now.month, now.day)


def today_iso(now: Optional[datetime] = None) -> str:
    return local_day(now or datetime.now()).isoformat()


def start_of_week(now: datetime) -> date:
    today = local_day(now)
    weekday = today.isoweekday() % 7        # Sunday=0 .. Saturday=6
    monday_offset = (weekday + 6) % 7       # Monday=0 .. Sunday=6
    return today - timedelta(days=monday_offset)


def start_of_month(now: datetime) -> date:
    return date(now.year, now.month, 1)


def start_of_year(now: datetime) -> date:
    return date(now.year, 1, 1)


def _midnight(day: date, now: datetime) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=now.tzinfo)


def is_within_period(day: DateLike, period: Union[Period, str], now: Optional[datetime] = None) -> bool:
    """Decide whether ``day`` falls inside ``period`` as seen from ``now``.

    ``today`` only has a lower bound. ``week``, ``month`` and ``year`` cap the
    window at the live ``now`` instant, so a transaction dated today is in the
    window whatever the time of day, and one dated tomorrow is not.
    """
    period = coerce_period(period)
    if period is Period.ALL_TIME:
        return True

    now = now or datetime.now()
    d = to_date(day)

    if period is Period.TODAY:
        return d >= local_day(now)

    if period is Period.WEEK:
        start = start_of_week(now)
    elif period is Period.MONTH:
        start = start_of_month(now)
    else:
        start = start_of_year(now)
    return start <= d and _midnight(d, now) <= now


def is_future_date(day: DateLike, now: Optional[datetime] = None) -> bool:
    """True when ``day`` is strictly after the local day of ``now``."""
    return to_date(day) > local_day(now or datetime.now())
