"""
Test cases for the jsonloc command-line checker.
"""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr
from unittest.mock import patch

from jsonloc.cli import EXIT_LOAD_ERROR, EXIT_OK, EXIT_PARSE_ERROR, main


class TestCommandLine(unittest.TestCase):
    """Test exit codes and error output."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def _write(self, name, content):
        path = os.path.join(self._tmp.name, name)
        with open(path, "wb") as f:
            f.write(content)
        return path

    def _run(self, argv):
        err = io.StringIO()
        with redirect_stderr(err):
            status = main(argv)
        return status, err.getvalue()

    def test_valid_file(self):
        path = self._write("ok.json", b'{"a": [1, 2]}\n')
        self.assertEqual(self._run([path]), (EXIT_OK, ""))

    def test_invalid_file_reports_location(self):
        path = self._write("bad.json", b'{\n\t"a": [1, 2,]\n}\n')
        status, output = self._run([path])
        self.assertEqual(status, EXIT_PARSE_ERROR)
        self.assertEqual(output, f"{path}:2:20: expected value, found ']'\n")

    def test_tab_size_option(self):
        path = self._write("bad.json", b'{\n\t"a": [1, 2,]\n}\n')
        status, output = self._run(["--tab-size", "4", path])
        self.assertEqual(status, EXIT_PARSE_ERROR)
        self.assertTrue(output.startswith(f"{path}:2:16: "))

    def test_context_option(self):
        path = self._write("bad.json", b"[1 2]")
        status, output = self._run(["--context", path])
        self.assertEqual(status, EXIT_PARSE_ERROR)
        self.assertEqual(output.splitlines()[1:], ["[1 2]", "   ^"])

    def test_relaxed_and_allow(self):
        path = self._write("relaxed.json", b"['a', .5]")
        self.assertEqual(self._run([path])[0], EXIT_PARSE_ERROR)
        self.assertEqual(self._run(["--relaxed", path])[0], EXIT_OK)
        self.assertEqual(
            self._run(
                ["--allow", "single_quote_strings", "--allow", "number_to_start_with_dot", path]
            )[0],
            EXIT_OK,
        )
        self.assertEqual(self._run(["--allow", "single_quote_strings", path])[0], EXIT_PARSE_ERROR)

    def test_missing_file(self):
        status, output = self._run([os.path.join(self._tmp.name, "missing.json")])
        self.assertEqual(status, EXIT_LOAD_ERROR)
        self.assertTrue(output.startswith("jsonloc: "))

    def test_worst_status_wins(self):
        good = self._write("good.json", b"[]")
        bad = self._write("bad.json", b"[")
        self.assertEqual(self._run([good, bad])[0], EXIT_PARSE_ERROR)

    def test_stdin(self):
        fake_stdin = io.TextIOWrapper(io.BytesIO(b'{"a": }'))
        with patch("sys.stdin", fake_stdin):
            status, output = self._run(["-"])
        self.assertEqual(status, EXIT_PARSE_ERROR)
        self.assertEqual(output, "<stdin>:1:7: expected value, found '}'\n")

    def test_invalid_tab_size(self):
        with redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["--tab-size", "0", "x.json"])


if __name__ == '__main__':
    unittest.main()
