import json
import tempfile
import unittest
from pathlib import Path

from src.common.config import RunConfig, WriteMode
from src.common.errors import DestinationExists, InputNotFound
from src.jconvert import run


class PipelineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        base = Path(self.tmpdir.name)
        self.input_dir = base / "input"
        self.input_dir.mkdir()
        self.output = base / "merged.jsonl"

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def _write(self, name: str, content: str) -> None:
        (self.input_dir / name).write_text(content, encoding="utf-8")

    def _config(self, **overrides) -> RunConfig:
        values = {"input_dir": self.input_dir, "output": self.output, "progress": False}
        values.update(overrides)
        return RunConfig(**values)

    def test_valid_and_invalid_file(self) -> None:
        self._write("a.json", '{"x":1}')
        self._write("b.json", "not json")
        result = run(self._config())
        self.assertEqual(result.stats.succeeded, 1)
        self.assertEqual(result.stats.failed, 1)
        self.assertEqual(self.output.read_text(encoding="utf-8"), '{"x":1}\n')
        self.assertEqual([failure.path.name for failure in result.failures], ["b.json"])

    def test_unparseable_files_do_not_abort_the_run(self) -> None:
        self._write("a.json", '{"x":1}')
        self._write("b.json", "[" * 100000 + "]" * 100000)
        self._write("c.json", '{"s":"\\ud800"}')
        self._write("d.json", '{"y":2}')
        self.output.write_text("prior\n", encoding="utf-8")
        for threads in (1, 4):
            result = run(self._config(threads=threads))
            self.assertEqual(result.stats.succeeded, 2)
            self.assertEqual(result.stats.failed, 2)
            self.assertEqual(self.output.read_text(encoding="utf-8"), '{"x":1}\n{"y":2}\n')

    def test_output_is_identical_for_any_thread_count(self) -> None:
        for index in range(30):
            self._write(f"doc_{index:03d}.json", json.dumps({"n": index, "tags": ["a", "b"]}, indent=4))
        self._write("doc_bad.json", "{")

        run(self._config(threads=1))
        single = self.output.read_bytes()
        run(self._config(threads=8))
        parallel = self.output.read_bytes()

        self.assertEqual(single, parallel)
        lines = single.decode("utf-8").splitlines()
        self.assertEqual(len(lines), 30)
        self.assertEqual(json.loads(lines[0]), {"n": 0, "tags": ["a", "b"]})
        self.assertEqual(json.loads(lines[-1])["n"], 29)

    def test_pattern_selects_matching_files(self) -> None:
        self._write("foo_SUM_1.json", '{"keep":true}')
        self._write("bar.json", '{"keep":false}')
        result = run(self._config(pattern="*_SUM_*"))
        self.assertEqual([path.name for path in result.files], ["foo_SUM_1.json"])
        self.assertEqual(self.output.read_text(encoding="utf-8"), '{"keep":true}\n')

    def test_dry_run_writes_nothing(self) -> None:
        self._write("a.json", '{"x":1}')
        self._write("b.json", '{"y":2}')
        result = run(self._config(dry_run=True))
        self.assertEqual([path.name for path in result.files], ["a.json", "b.json"])
        self.assertEqual(result.outcomes, [])
        self.assertFalse(result.wrote_output)
        self.assertFalse(self.output.exists())

    def test_dry_run_lists_same_files_as_real_run(self) -> None:
        for name in ("b.json", "a.json", "c.json"):
            self._write(name, "{}")
        dry = run(self._config(dry_run=True))
        real = run(self._config())
        self.assertEqual(dry.files, real.files)

    def test_error_mode_leaves_existing_destination_untouched(self) -> None:
        self._write("a.json", '{"x":1}')
        self.output.write_text("original\n", encoding="utf-8")
        with self.assertRaises(DestinationExists):
            run(self._config(mode=WriteMode.ERROR))
        self.assertEqual(self.output.read_text(encoding="utf-8"), "original\n")

    def test_append_mode_keeps_prior_lines(self) -> None:
        self._write("a.json", '{"x":1}')
        self.output.write_text('{"prior":1}\n', encoding="utf-8")
        run(self._config(mode=WriteMode.APPEND))
        self.assertEqual(self.output.read_text(encoding="utf-8"), '{"prior":1}\n{"x":1}\n')

    def test_validate_only_reports_without_output(self) -> None:
        self._write("a.json", '{"x":1}')
        self._write("b.json", "[1, 2")
        result = run(self._config(validate_only=True))
        self.assertFalse(self.output.exists())
        self.assertEqual(result.stats.succeeded, 1)
        self.assertEqual(result.stats.failed, 1)
        self.assertEqual(result.stats.bytes_written, 0)

    def test_fields_and_error_log(self) -> None:
        self._write("a.json", '{"id": 1, "user": {"name": "Ann"}, "noise": true}')
        self._write("b.json", "oops")
        log_path = self.output.parent / "errors.log"
        run(self._config(fields=("id", "user.name"), log=log_path))
        self.assertEqual(self.output.read_text(encoding="utf-8"), '{"id":1,"user_name":"Ann"}\n')
        self.assertIn("b.json", log_path.read_text(encoding="utf-8"))

    def test_byte_totals(self) -> None:
        self._write("a.json", '{"x": 1}')
        result = run(self._config())
        self.assertEqual(result.stats.bytes_read, len('{"x": 1}'))
        self.assertEqual(result.stats.bytes_written, len('{"x":1}\n'))

    def test_empty_directory_writes_nothing(self) -> None:
        result = run(self._config())
        self.assertEqual(result.files, [])
        self.assertIsNone(result.stats)
        self.assertFalse(self.output.exists())

    def test_missing_input_directory_is_fatal(self) -> None:
        with self.assertRaises(InputNotFound):
            run(self._config(input_dir=self.input_dir / "missing"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
