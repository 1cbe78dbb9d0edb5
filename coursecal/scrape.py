"""
Fetch-and-persist driver.

For every CourseRequest, strictly one after another:

    fetch page -> extract Course -> build calendar -> write .ics

By default the first failure aborts the whole run and nothing is written
for the failing course. keep_going=True is an opt-in batch mode that
processes every course and reports the failures at the end instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

import requests

from coursecal.config import BASE_URL, LOCALE, REQUEST_TIMEOUT, CourseRequest
from coursecal.errors import CourseCalError, DecodeError, FetchError
from coursecal.export_ics import build_calendar, write_calendar
from coursecal.extract import extract_course
from coursecal.model import CalendarDocument


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


def course_url(request: CourseRequest) -> str:
    """
    e.g. https://www.fu-berlin.de/vv/de/lv/524870?sm=498562
    """
    return f"{BASE_URL}/{LOCALE}/lv/{request.course_id}?sm={request.semester_id}"


def fetch_course_page(
    request: CourseRequest,
    session: Optional[requests.Session] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> str:
    """
    GET the course page and return its body decoded as UTF-8.
    """
    http = session if session is not None else requests
    url = course_url(request)

    try:
        # redirects are not followed: only a direct 2xx answer is the course page
        resp = http.get(url, timeout=timeout, allow_redirects=False)
        # read the full body before looking at the status
        body = resp.content
    except requests.RequestException as exc:
        raise FetchError(f"Request for {url} failed: {exc}") from exc

    try:
        resp.raise_for_status()
    except requests.HTTPError as exc:
        raise FetchError(f"HTTP {resp.status_code} for {url}") from exc
    if not 200 <= resp.status_code < 300:
        raise FetchError(f"HTTP {resp.status_code} for {url}")

    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"Response from {url} is not valid UTF-8: {exc}") from exc


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def course_calendar(
    request: CourseRequest,
    session: Optional[requests.Session] = None,
    link_first_event_to_self: bool = True,
) -> CalendarDocument:
    html = fetch_course_page(request, session=session)
    course = extract_course(html)
    return build_calendar(course, link_first_event_to_self=link_first_event_to_self)


def save_course(
    request: CourseRequest,
    out_dir: str | Path = ".",
    session: Optional[requests.Session] = None,
    link_first_event_to_self: bool = True,
) -> Path:
    """
    Build the calendar for one course and write it to out_dir/<filename>.
    """
    print(f"FETCH {request.course_id}")
    calendar = course_calendar(request, session=session, link_first_event_to_self=link_first_event_to_self)

    out_path = write_calendar(calendar, Path(out_dir) / request.filename)
    print(f"WROTE {out_path} ({len(calendar.events)} events)")
    return out_path


@dataclass
class CourseResult:
    request: CourseRequest
    path: Optional[Path] = None
    error: Optional[CourseCalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def run_courses(
    course_requests: Iterable[CourseRequest],
    out_dir: str | Path = ".",
    session: Optional[requests.Session] = None,
    keep_going: bool = False,
    link_first_event_to_self: bool = True,
) -> List[CourseResult]:
    """
    Process all course requests sequentially with one shared HTTP session.

    keep_going=False: the first CourseCalError propagates, later courses are
    not touched. keep_going=True: every course is attempted and its error is
    recorded in the returned CourseResult.
    """
    if session is None:
        with requests.Session() as own_session:
            return run_courses(
                course_requests,
                out_dir=out_dir,
                session=own_session,
                keep_going=keep_going,
                link_first_event_to_self=link_first_event_to_self,
            )

    results: List[CourseResult] = []
    for request in course_requests:
        try:
            path = save_course(
                request,
                out_dir=out_dir,
                session=session,
                link_first_event_to_self=link_first_event_to_self,
            )
        except CourseCalError as exc:
            exc.course_id = request.course_id
            if not keep_going:
                raise
            print(f"FAIL  {request.course_id}")
            results.append(CourseResult(request=request, error=exc))
            continue
        results.append(CourseResult(request=request, path=path))

    return results
