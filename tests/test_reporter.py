import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from src.reader import Failure, Success
from src.reporter import RunStats, format_bytes, format_duration, summary_rows, write_error_log


class FormattingTests(unittest.TestCase):
    def test_format_bytes(self) -> None:
        self.assertEqual(format_bytes(0), "0 B")
        self.assertEqual(format_bytes(500), "500 B")
        self.assertEqual(format_bytes(1023), "1023 B")
        self.assertEqual(format_bytes(1024), "1.00 KB")
        self.assertEqual(format_bytes(1536), "1.50 KB")
        self.assertEqual(format_bytes(1024 * 1024 - 1), "1024.00 KB")
        self.assertEqual(format_bytes(1024 * 1024), "1.00 MB")
        self.assertEqual(format_bytes(1024 ** 3), "1.00 GB")

    def test_format_duration(self) -> None:
        self.assertEqual(format_duration(0.5), "500ms")
        self.assertEqual(format_duration(5), "5.000s")
        self.assertEqual(format_duration(65), "1m 5s")
        self.assertEqual(format_duration(3665), "1h 1m")


class RunStatsTests(unittest.TestCase):
    def test_from_outcomes_counts_successes_and_failures(self) -> None:
        outcomes = [
            Success(Path("a.json"), {"x": 1}, 8),
            Failure(Path("b.json"), "invalid JSON", 8),
            Success(Path("c.json"), {"y": 2}, 12),
        ]
        stats = RunStats.from_outcomes(outcomes, bytes_written=16, elapsed=0.25)
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.succeeded, 2)
        self.assertEqual(stats.failed, 1)
        self.assertEqual(stats.bytes_read, 20)
        self.assertEqual(stats.bytes_written, 16)
        self.assertAlmostEqual(stats.success_rate, 66.6666, places=3)
        self.assertEqual(stats.success_rate_text(), "66.7%")

    def test_empty_run_has_no_success_rate(self) -> None:
        stats = RunStats()
        self.assertIsNone(stats.success_rate)
        self.assertEqual(stats.success_rate_text(), "n/a")
        rows = dict(summary_rows(stats))
        self.assertEqual(rows["Success rate"], "n/a")

    def test_summary_rows(self) -> None:
        stats = RunStats(total=2, succeeded=1, failed=1, bytes_read=2048, bytes_written=8)
        rows = dict(summary_rows(stats))
        self.assertEqual(rows["Input size"], "2.00 KB")
        self.assertEqual(rows["Output size"], "8 B")
        self.assertEqual(rows["Success rate"], "50.0%")
        validation = dict(summary_rows(stats, validation=True))
        self.assertEqual(validation["Invalid"], "1")
        self.assertNotIn("Output size", validation)


class ErrorLogTests(unittest.TestCase):
    def test_error_log_lists_each_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_path = Path(tmp_dir) / "logs" / "errors.log"
            failures = [
                Failure(Path("data/b.json"), "invalid JSON in data/b.json: Expecting value"),
                Failure(Path("data/c.json"), "cannot open data/c.json: Permission denied"),
            ]
            write_error_log(log_path, failures, now=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc))
            lines = log_path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(lines[0], "jconvert error log")
        self.assertEqual(lines[1], "generated: 2024-01-02T03:04:05Z")
        self.assertEqual(lines[2], "errors: 2")
        self.assertIn(f"file: {Path('data/b.json')}", lines)
        self.assertIn("error: cannot open data/c.json: Permission denied", lines)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
