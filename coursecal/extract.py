"""
Course page extraction (HTML -> Course).

Page structure we rely on:

    <div class="subc"><h1>Course name</h1></div>
    <a class="link_to_details" id="link_to_details_<session id>">
        <span class="course_date_time">Mo, 21.10.2019 10:00 - 13:00</span>
    </a>

Important rules:
- 1 details link = 1 Occurrence, in document order (no sorting, no dedup)
- anything missing is an error, never a skipped session
"""

from __future__ import annotations

from datetime import tzinfo
from typing import List, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from coursecal.errors import ExtractionError, ParseError
from coursecal.model import Course, Occurrence
from coursecal.timespan import parse_timespan

NAME_SELECTOR = ".subc h1"
DETAILS_SELECTOR = ".link_to_details"
DATE_TIME_SELECTOR = ".course_date_time"
ID_PREFIX = "link_to_details_"


def _soup(document: Union[str, BeautifulSoup]) -> BeautifulSoup:
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document, "html.parser")


def extract_course_name(soup: BeautifulSoup) -> str:
    """
    Return the trimmed text of the first <h1> inside the "subc" section.
    """
    heading = soup.select_one(NAME_SELECTOR)
    if heading is None:
        raise ExtractionError("Course has no name/title (no h1 inside .subc)")
    return heading.get_text().strip()


def _occurrence_from_node(node: Tag, tz: Optional[tzinfo]) -> Occurrence:
    raw_id = node.get("id")
    if not raw_id:
        raise ExtractionError("Details link without id attribute")
    occurrence_id = raw_id[len(ID_PREFIX):] if raw_id.startswith(ID_PREFIX) else raw_id
    if not occurrence_id:
        raise ExtractionError(f"Details link with empty session id: {raw_id!r}")

    date_node = node.select_one(DATE_TIME_SELECTOR)
    if date_node is None:
        raise ExtractionError(f"Session {occurrence_id} has no course date/time")

    date_text = date_node.get_text().strip()
    try:
        interval = parse_timespan(date_text, tz)
    except ParseError as exc:
        raise ExtractionError(f"Session {occurrence_id}: {exc}") from exc

    return Occurrence(id=occurrence_id, interval=interval)


def extract_occurrences(soup: BeautifulSoup, tz: Optional[tzinfo] = None) -> List[Occurrence]:
    return [_occurrence_from_node(node, tz) for node in soup.select(DETAILS_SELECTOR)]


def extract_course(document: Union[str, BeautifulSoup], tz: Optional[tzinfo] = None) -> Course:
    """
    Parse a course page and return its Course (name + occurrences).
    """
    soup = _soup(document)
    name = extract_course_name(soup)
    occurrences = extract_occurrences(soup, tz)
    return Course(name=name, occurrences=tuple(occurrences))
