"""
Timespan parsing.

Parses exactly one course date line as shown on the course page, e.g.

    Mo, 21.10.2019 10:00 - 13:00

into an Interval in the institution's timezone.

Rules:
- the first 4 characters ("Mo, ") are dropped, the weekday is NOT checked
- the rest must be exactly: <DD.MM.YYYY> <HH:MM> - <HH:MM>
- start and end share the same date

DST: local times are attached with fold=0, which means the offset in effect
before a transition wins. A time inside the autumn overlap resolves to the
earlier (summer time) instant; a time inside the spring gap is read with the
winter offset and therefore lands one hour later on the wall clock.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional

from coursecal.config import TIMEZONE
from coursecal.errors import ParseError
from coursecal.model import Interval

WEEKDAY_PREFIX_LEN = 4

DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M"


def _localize(naive: datetime, tz: tzinfo) -> datetime:
    """
    Attach tz (fold=0) and normalize via UTC so nonexistent wall times
    become real ones.
    """
    aware = naive.replace(tzinfo=tz, fold=0)
    return aware.astimezone(timezone.utc).astimezone(tz)


def parse_timespan(text: str, tz: Optional[tzinfo] = None) -> Interval:
    """
    Parse "<wd>, DD.MM.YYYY HH:MM - HH:MM" into an Interval.

    Raises ParseError for a wrong token count, invalid date/time values or a
    session that does not end after it starts.
    """
    zone = tz if tz is not None else TIMEZONE

    if len(text) <= WEEKDAY_PREFIX_LEN:
        raise ParseError(f"Timespan too short: {text!r}")

    tokens = text[WEEKDAY_PREFIX_LEN:].split(" ")
    if len(tokens) != 4:
        raise ParseError(f"Expected 'DD.MM.YYYY HH:MM - HH:MM', got {text!r}")

    date_str, start_str, _sep, end_str = tokens

    try:
        day = datetime.strptime(date_str, DATE_FORMAT).date()
        start_time = datetime.strptime(start_str, TIME_FORMAT).time()
        end_time = datetime.strptime(end_str, TIME_FORMAT).time()
    except ValueError as exc:
        raise ParseError(f"Invalid date/time in {text!r}: {exc}") from exc

    local_start = datetime.combine(day, start_time)
    local_end = datetime.combine(day, end_time)
    if local_start >= local_end:
        raise ParseError(f"Session ends before it starts: {text!r}")

    try:
        return Interval(_localize(local_start, zone), _localize(local_end, zone))
    except ValueError as exc:
        # only reachable when a DST gap swallows the whole session
        raise ParseError(f"Empty interval after DST resolution: {text!r}") from exc
