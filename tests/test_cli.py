"""
Tests for the CLI entry point.

run_courses is patched so no network access happens.
"""

import io
import unittest
from pathlib import Path
from unittest import mock

from rich.console import Console

from coursecal.cli import main
from coursecal.config import DEFAULT_COURSES, CourseRequest
from coursecal.errors import FetchError
from coursecal.scrape import CourseResult


class TestCLI(unittest.TestCase):
    def test_success_exits_zero(self) -> None:
        results = [CourseResult(request=c, path=Path(c.filename)) for c in DEFAULT_COURSES]
        with mock.patch("coursecal.cli.run_courses", return_value=results) as run:
            with self.assertRaises(SystemExit) as ctx:
                main(["--out-dir", "cal"])

        self.assertEqual(ctx.exception.code, 0)
        run.assert_called_once_with(DEFAULT_COURSES, out_dir=Path("cal"), keep_going=False)

    def test_error_exits_nonzero(self) -> None:
        err = FetchError("HTTP 404")
        err.course_id = "524870"
        stderr = io.StringIO()
        with mock.patch("coursecal.cli.run_courses", side_effect=err), mock.patch(
            "coursecal.cli.err_console", Console(file=stderr, width=200)
        ):
            with self.assertRaises(SystemExit) as ctx:
                main([])

        self.assertNotEqual(ctx.exception.code, 0)
        self.assertIn("[fetch] 524870: HTTP 404", stderr.getvalue())

    def test_keep_going_reports_failures(self) -> None:
        req = CourseRequest("1", "2", "x.ics")
        results = [CourseResult(request=req, error=FetchError("HTTP 500"))]
        with mock.patch("coursecal.cli.run_courses", return_value=results) as run:
            with self.assertRaises(SystemExit) as ctx:
                main(["--keep-going"])

        self.assertEqual(ctx.exception.code, 1)
        self.assertTrue(run.call_args.kwargs["keep_going"])


if __name__ == "__main__":
    unittest.main()
