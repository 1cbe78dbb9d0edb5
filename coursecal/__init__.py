"""
coursecal: FU Berlin course pages -> .ics calendars.
"""

from coursecal.errors import CourseCalError, ParseError
from coursecal.export_ics import build_calendar, render_ics, write_calendar
from coursecal.extract import extract_course
from coursecal.timespan import parse_timespan

__all__ = [
    "CourseCalError",
    "ParseError",
    "build_calendar",
    "extract_course",
    "parse_timespan",
    "render_ics",
    "write_calendar",
]
