"""
Unit tests for course page extraction.

Contract:
- name = first <h1> inside .subc (trimmed); missing -> ExtractionError
- 1 .link_to_details = 1 Occurrence, in document order
- id = id attribute without "link_to_details_"
- missing id / missing date line / bad date line -> ExtractionError
"""

import unittest
from datetime import datetime, timezone
from pathlib import Path

from bs4 import BeautifulSoup

from coursecal.errors import ExtractionError, ParseError
from coursecal.extract import extract_course, extract_course_name, extract_occurrences

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "course_page.html"


def _session(session_id: str, text: str) -> str:
    return (
        f'<a class="link_to_details" id="link_to_details_{session_id}">'
        f'<span class="course_date_time">{text}</span></a>'
    )


def _page(name_html: str, sessions: str) -> str:
    return f"<html><body>{name_html}<div>{sessions}</div></body></html>"


NAME = '<div class="subc"><h1>  Botanik Seminar A  </h1></div>'


class TestExtractCourse(unittest.TestCase):
    def test_fixture_page(self) -> None:
        course = extract_course(FIXTURE.read_text(encoding="utf-8"))

        self.assertEqual(course.name, "Organische Chemie I – Vorlesung")
        self.assertEqual([o.id for o in course.occurrences], ["1130987", "1130988"])
        self.assertEqual(
            course.occurrences[0].interval.start_utc,
            datetime(2019, 10, 21, 8, 0, tzinfo=timezone.utc),
        )

    def test_document_order_is_kept(self) -> None:
        # later date first: no sorting
        sessions = (
            _session("C", "Mi, 06.11.2019 12:00 - 14:00")
            + _session("A", "Mi, 23.10.2019 12:00 - 14:00")
            + _session("B", "Mi, 30.10.2019 12:00 - 14:00")
            + _session("A", "Mi, 23.10.2019 12:00 - 14:00")
        )
        course = extract_course(_page(NAME, sessions))

        self.assertEqual(course.name, "Botanik Seminar A")
        self.assertEqual([o.id for o in course.occurrences], ["C", "A", "B", "A"])

    def test_accepts_parsed_soup(self) -> None:
        soup = BeautifulSoup(_page(NAME, _session("1", "Di, 22.10.2019 08:00 - 10:00")), "html.parser")
        course = extract_course(soup)
        self.assertEqual(len(course.occurrences), 1)

    def test_page_without_sessions_gives_empty_course(self) -> None:
        course = extract_course(_page(NAME, ""))
        self.assertEqual(course.occurrences, ())

    def test_missing_name_fails(self) -> None:
        html = _page("<h1>Not in subc</h1>", _session("1", "Di, 22.10.2019 08:00 - 10:00"))
        with self.assertRaises(ExtractionError):
            extract_course(html)

    def test_first_heading_wins(self) -> None:
        soup = BeautifulSoup('<div class="subc"><h1>First</h1><h1>Second</h1></div>', "html.parser")
        self.assertEqual(extract_course_name(soup), "First")

    def test_missing_id_fails(self) -> None:
        html = _page(NAME, '<a class="link_to_details"><span class="course_date_time">Di, 22.10.2019 08:00 - 10:00</span></a>')
        with self.assertRaises(ExtractionError):
            extract_course(html)

    def test_empty_session_id_fails(self) -> None:
        html = _page(NAME, '<a class="link_to_details" id="link_to_details_"><span class="course_date_time">Di, 22.10.2019 08:00 - 10:00</span></a>')
        with self.assertRaises(ExtractionError):
            extract_course(html)

    def test_missing_date_time_fails(self) -> None:
        html = _page(NAME, '<a class="link_to_details" id="link_to_details_9"><span>nothing</span></a>')
        with self.assertRaises(ExtractionError):
            extract_course(html)

    def test_bad_date_line_fails_whole_extraction(self) -> None:
        sessions = _session("1", "Di, 22.10.2019 08:00 - 10:00") + _session("2", "Di, 29.10.2019 10:00 - 08:00")
        with self.assertRaises(ExtractionError) as ctx:
            extract_course(_page(NAME, sessions))
        self.assertIsInstance(ctx.exception.__cause__, ParseError)
        self.assertIn("2", str(ctx.exception))

    def test_extract_occurrences_only(self) -> None:
        soup = BeautifulSoup(_session("77", "Fr, 25.10.2019 14:00 - 16:00"), "html.parser")
        occs = extract_occurrences(soup)
        self.assertEqual(len(occs), 1)
        self.assertEqual(occs[0].id, "77")
        self.assertEqual(occs[0].interval.local_start, datetime(2019, 10, 25, 14, 0))


if __name__ == "__main__":
    unittest.main()
