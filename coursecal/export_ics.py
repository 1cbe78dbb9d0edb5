"""
iCalendar (.ics) export.

A Course becomes one VCALENDAR with one VEVENT per occurrence. All events of
a course are linked to the first occurrence ("series anchor") via
RELATED-TO;RELTYPE=CHILD, so calendar apps can treat them as one series.

Output is deterministic: DTSTAMP is the event's own start, never "now",
so re-running on an unchanged page gives a byte-identical file.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List

from coursecal.errors import EmptyCourseError, WriteError
from coursecal.model import CalendarDocument, CalendarEvent, Course

CRLF = "\r\n"

# RFC 5545: content lines SHOULD NOT be longer than 75 octets
LINE_LENGTH = 75


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------


def build_calendar(course: Course, link_first_event_to_self: bool = True) -> CalendarDocument:
    """
    Convert a Course into a CalendarDocument.

    The first event is related to itself unless link_first_event_to_self
    is False, in which case it carries no RELATED-TO at all.
    """
    if not course.occurrences:
        raise EmptyCourseError(f"Course {course.name!r} has no sessions")

    anchor = course.occurrences[0].id

    events: List[CalendarEvent] = []
    for i, occ in enumerate(course.occurrences):
        start = occ.interval.start_utc
        related_to = anchor if (i > 0 or link_first_event_to_self) else None
        events.append(
            CalendarEvent(
                uid=occ.id,
                start=start,
                end=occ.interval.end_utc,
                dtstamp=start,
                summary=course.name,
                related_to=related_to,
            )
        )

    return CalendarDocument(events=tuple(events))


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS TEXT values.
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_utc(dt: datetime) -> str:
    """
    Format an aware datetime as compact UTC 'YYYYMMDDTHHMMSSZ'.
    """
    return dt.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _fold(line: str) -> str:
    """
    Fold a content line at 75 octets; continuation lines start with a space.
    Never splits a multi-byte UTF-8 character.
    """
    if len(line.encode("utf-8")) <= LINE_LENGTH:
        return line

    chunks: list[str] = []
    current = ""
    size = 0
    limit = LINE_LENGTH
    for ch in line:
        n = len(ch.encode("utf-8"))
        if size + n > limit:
            chunks.append(current)
            current = ""
            size = 0
            # the leading space of a continuation line counts too
            limit = LINE_LENGTH - 1
        current += ch
        size += n
    chunks.append(current)
    return (CRLF + " ").join(chunks)


def _event_lines(event: CalendarEvent) -> list[str]:
    lines = [
        "BEGIN:VEVENT",
        f"UID:{_ics_escape(event.uid)}",
        f"DTSTAMP:{_dt_utc(event.dtstamp)}",
        f"DTSTART:{_dt_utc(event.start)}",
        f"DTEND:{_dt_utc(event.end)}",
        f"SUMMARY:{_ics_escape(event.summary)}",
    ]
    if event.related_to is not None:
        lines.append(f"RELATED-TO;RELTYPE={event.reltype}:{_ics_escape(event.related_to)}")
    lines.append("END:VEVENT")
    return lines


def render_ics(document: CalendarDocument) -> str:
    """
    Serialize a CalendarDocument to ICS text (CRLF line endings).
    """
    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append(f"VERSION:{document.version}")
    lines.append(f"PRODID:{document.prodid}")

    for event in document.events:
        lines.extend(_event_lines(event))

    lines.append("END:VCALENDAR")

    return CRLF.join(_fold(line) for line in lines) + CRLF


def write_calendar(document: CalendarDocument, out_path: str | Path) -> Path:
    """
    Write the calendar to out_path (overwrites). Returns the path written.
    """
    out = Path(out_path)
    data = render_ics(document).encode("utf-8")
    try:
        out.parent.mkdir(parents=True, exist_ok=True)
        # bytes, so CRLF survives on every platform
        out.write_bytes(data)
    except OSError as exc:
        raise WriteError(f"Cannot write {out}: {exc}") from exc
    return out
