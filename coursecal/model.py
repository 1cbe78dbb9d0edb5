"""
Central data model definitions used across the project.

All values are immutable and live for exactly one course run:

    Interval -> Occurrence -> Course -> CalendarEvent -> CalendarDocument
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple


@dataclass(frozen=True)
class Interval:
    """
    A start/end pair of timezone-aware instants (institution's local zone).

    Comparison is done on the absolute (UTC) instants, never on wall-clock
    values, so intervals around DST transitions stay correct.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("Interval requires timezone-aware datetimes")
        if self.start_utc >= self.end_utc:
            raise ValueError(f"Interval start {self.start} is not before end {self.end}")

    @property
    def start_utc(self) -> datetime:
        return self.start.astimezone(timezone.utc)

    @property
    def end_utc(self) -> datetime:
        return self.end.astimezone(timezone.utc)

    @property
    def local_start(self) -> datetime:
        return self.start.replace(tzinfo=None)

    @property
    def local_end(self) -> datetime:
        return self.end.replace(tzinfo=None)


@dataclass(frozen=True)
class Occurrence:
    """
    One scheduled session of a course.

    `id` is the session anchor from the course page
    ("link_to_details_<id>" without the prefix).
    """

    id: str
    interval: Interval


@dataclass(frozen=True)
class Course:
    name: str
    occurrences: Tuple[Occurrence, ...]


@dataclass(frozen=True)
class CalendarEvent:
    """
    One VEVENT. Timestamps are stored in UTC.
    """

    uid: str
    start: datetime
    end: datetime
    dtstamp: datetime
    summary: str
    related_to: Optional[str] = None
    reltype: str = "CHILD"


@dataclass(frozen=True)
class CalendarDocument:
    events: Tuple[CalendarEvent, ...]
    version: str = "2.0"
    prodid: str = "-//coursecal//coursecal//EN"

    def __post_init__(self) -> None:
        if not self.events:
            raise ValueError("CalendarDocument needs at least one event")
