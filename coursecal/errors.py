"""
Error types.

Every failure in the pipeline is fatal for the course being processed.
Each error carries the name of the stage that failed so the CLI can
tell the user where things went wrong:

    fetch -> decode -> extract (parse) -> build -> write
"""

from __future__ import annotations

from typing import Optional


class CourseCalError(Exception):
    """
    Base class for all errors raised by coursecal.
    """

    stage = "unknown"
    course_id: Optional[str] = None


class FetchError(CourseCalError):
    stage = "fetch"


class DecodeError(CourseCalError):
    stage = "decode"


class ParseError(CourseCalError, ValueError):
    """
    A schedule line like "Mo, 21.10.2019 10:00 - 13:00" could not be parsed.
    """

    stage = "parse"


class ExtractionError(CourseCalError):
    """
    The course page is missing an element we need (name, session id, date line).
    """

    stage = "extract"


class EmptyCourseError(CourseCalError):
    stage = "build"


class WriteError(CourseCalError):
    stage = "write"
