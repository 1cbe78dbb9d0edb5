"""
Configuration constants and the built-in course list.

The course list is plain data handed to the driver
(coursecal.scrape.run_courses), so tests can pass their own list.
"""

from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo


# ---------------------------------------------------------------------------
# Institution
# ---------------------------------------------------------------------------

BASE_URL = "https://www.fu-berlin.de/vv"
LOCALE = "de"

# All course pages list local Berlin wall-clock times
TIMEZONE = ZoneInfo("Europe/Berlin")

REQUEST_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Course list
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CourseRequest:
    """
    One course to fetch: catalogue id, semester id and output file name.
    """

    course_id: str
    semester_id: str
    filename: str


WS19 = "498562"

DEFAULT_COURSES: tuple[CourseRequest, ...] = (
    CourseRequest("524870", WS19, "oc1_vorlesung.ics"),
    CourseRequest("524871", WS19, "oc1_uebung.ics"),
    CourseRequest("525101", WS19, "bc1_vorlesung.ics"),
    CourseRequest("525102", WS19, "bc1_uebung.ics"),
    CourseRequest("503925", WS19, "botanik_vorlesung.ics"),
    CourseRequest("503926", WS19, "botanik_seminar_a.ics"),
    CourseRequest("503927", WS19, "botanik_seminar_b.ics"),
)
