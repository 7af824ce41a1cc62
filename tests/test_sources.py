"""
Unit tests for reading source documents into text or rows.
"""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

from courseadvisor.errors import SourceDecodeError
from courseadvisor.sources import (
    extract_rows,
    extract_text,
    fetch_text,
    html_to_text,
    is_tabular,
    is_url,
)


CURRICULUM_HTML = """
<html><head><style>td { color: red }</style><script>var x = 1;</script></head>
<body>
<h2>Semester 1</h2>
<table>
  <tr><td>CS101</td><td>Intro to CS</td><td>AC</td><td>3</td><td>1</td><td>2</td><td>6</td><td>-</td><td>6</td></tr>
  <tr><td>MATH101</td><td>Calculus I</td><td>UC</td><td>3</td><td>1</td><td>0</td><td>4</td><td>-</td><td>4</td></tr>
</table>
</body></html>
"""

class TestHtml(unittest.TestCase):
    def test_rows_become_lines(self) -> None:
        text = html_to_text(CURRICULUM_HTML)
        self.assertEqual(
            text.splitlines(),
            [
                "Semester 1",
                "CS101 Intro to CS AC 3 1 2 6 - 6",
                "MATH101 Calculus I UC 3 1 0 4 - 4",
            ],
        )


class TestFiles(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_text_file(self) -> None:
        path = self.tmp / "curriculum.txt"
        path.write_text("Semester 1\nCS101 Intro 6\n", encoding="utf-8")
        self.assertEqual(extract_text(path), "Semester 1\nCS101 Intro 6\n")

    def test_bom_is_dropped(self) -> None:
        path = self.tmp / "available.txt"
        path.write_bytes(b"\xef\xbb\xbfCS101 Intro\n")
        self.assertEqual(extract_text(str(path)), "CS101 Intro\n")

    def test_html_file(self) -> None:
        path = self.tmp / "curriculum.html"
        path.write_text(CURRICULUM_HTML, encoding="utf-8")
        self.assertIn("CS101 Intro to CS AC 3 1 2 6 - 6", extract_text(path).splitlines())

    def test_invalid_utf8(self) -> None:
        path = self.tmp / "transcript.txt"
        path.write_bytes(b"CS101 \xff\xfe Intro")
        with self.assertRaises(SourceDecodeError):
            extract_text(path)

    def test_missing_file(self) -> None:
        with self.assertRaises(SourceDecodeError):
            extract_text(self.tmp / "missing.txt")

    def test_unsupported_format(self) -> None:
        path = self.tmp / "transcript.pdf"
        path.write_bytes(b"%PDF-1.4")
        with self.assertRaises(SourceDecodeError) as ctx:
            extract_text(path)
        self.assertEqual(ctx.exception.kind, "SourceDecodeError")

    def test_csv_rows(self) -> None:
        path = self.tmp / "transcript.csv"
        path.write_text("Code,Grade,Credits\nCS101,A,6\nMATH101,F,4\n", encoding="utf-8")
        self.assertEqual(
            extract_rows(path),
            [{"Code": "CS101", "Grade": "A", "Credits": "6"}, {"Code": "MATH101", "Grade": "F", "Credits": "4"}],
        )

    def test_csv_field_too_large(self) -> None:
        path = self.tmp / "transcript.csv"
        path.write_text("Code,Title\nCS101," + "x" * 200_000 + "\n", encoding="utf-8")
        with self.assertRaises(SourceDecodeError):
            extract_rows(path)

    def test_html_is_not_tabular(self) -> None:
        path = self.tmp / "transcript.html"
        path.write_text("<table><tr><th>Code</th></tr></table>", encoding="utf-8")
        self.assertFalse(is_tabular(path))
        with self.assertRaises(SourceDecodeError):
            extract_rows(path)

    def test_json_rows(self) -> None:
        path = self.tmp / "transcript.json"
        rows = [{"Code": "CS101", "Grade": "A", "Credits": 6}]
        path.write_text(json.dumps(rows), encoding="utf-8")
        self.assertEqual(extract_rows(path), rows)

    def test_json_not_a_row_list(self) -> None:
        path = self.tmp / "transcript.json"
        path.write_text(json.dumps({"Code": "CS101"}), encoding="utf-8")
        with self.assertRaises(SourceDecodeError):
            extract_rows(path)

    def test_json_invalid(self) -> None:
        path = self.tmp / "transcript.json"
        path.write_text("[{", encoding="utf-8")
        with self.assertRaises(SourceDecodeError):
            extract_rows(path)

    def test_is_tabular(self) -> None:
        self.assertTrue(is_tabular("transcript.csv"))
        self.assertTrue(is_tabular(Path("transcript.JSON")))
        self.assertFalse(is_tabular("transcript.txt"))
        self.assertFalse(is_tabular("https://example.edu/transcript.csv"))


class TestFetch(unittest.TestCase):
    def test_is_url(self) -> None:
        self.assertTrue(is_url("https://example.edu/curriculum"))
        self.assertFalse(is_url("curriculum.txt"))
        self.assertFalse(is_url(Path("http")))

    @mock.patch("courseadvisor.sources.requests.get")
    def test_fetch_text(self, get) -> None:
        resp = mock.Mock()
        resp.text = CURRICULUM_HTML
        resp.content = CURRICULUM_HTML.encode("utf-8")
        get.return_value = resp

        text = extract_text("https://example.edu/curriculum")

        get.assert_called_once_with("https://example.edu/curriculum", timeout=30)
        resp.raise_for_status.assert_called_once_with()
        self.assertIn("MATH101 Calculus I UC 3 1 0 4 - 4", text.splitlines())

    @mock.patch("courseadvisor.sources.requests.get")
    def test_fetch_error(self, get) -> None:
        get.side_effect = requests.ConnectionError("down")
        with self.assertRaises(SourceDecodeError):
            fetch_text("https://example.edu/curriculum")


if __name__ == "__main__":
    unittest.main()
