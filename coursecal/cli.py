"""
CLI (Command Line Interface).

    coursecal                     # build all built-in courses into ./
    coursecal --out-dir cal/      # write the .ics files somewhere else
    coursecal --keep-going        # don't stop at the first failing course

The course list itself is fixed (coursecal.config.DEFAULT_COURSES).
Exit code is 0 on success and 1 if any course failed.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from coursecal.config import DEFAULT_COURSES
from coursecal.errors import CourseCalError
from coursecal.scrape import run_courses

console = Console()
err_console = Console(stderr=True)


def _report_error(course_id: str | None, exc: CourseCalError) -> None:
    msg = f"[{exc.stage}] {course_id or '?'}: {exc}"
    err_console.print(f"[bold red]error[/] {escape(msg)}", highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coursecal",
        description="Turn FU Berlin course pages into .ics calendar files",
    )
    parser.add_argument("--out-dir", "-o", type=Path, default=Path("."), help="Directory for the .ics files")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Process all courses even if one fails (report failures at the end)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Exits via SystemExit with a return code.
    """
    args = build_parser().parse_args(argv)

    try:
        results = run_courses(DEFAULT_COURSES, out_dir=args.out_dir, keep_going=args.keep_going)
    except CourseCalError as exc:
        _report_error(exc.course_id, exc)
        raise SystemExit(1)

    failed = [r for r in results if not r.ok]
    for r in failed:
        _report_error(r.request.course_id, r.error)

    console.print(f"Calendars written: {len(results) - len(failed)}/{len(results)}")
    raise SystemExit(1 if failed else 0)
