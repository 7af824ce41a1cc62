"""
Unit tests for the offered-course list parser.
"""

import unittest

from courseadvisor.available import normalize_code, parse_available_courses, parse_available_line


class TestAvailableLine(unittest.TestCase):
    def test_code_title(self) -> None:
        c = parse_available_line("CS101 Introduction to Computer Science")
        assert c is not None
        self.assertEqual((c.code, c.title), ("CS101", "Introduction to Computer Science"))

    def test_spaced_code(self) -> None:
        c = parse_available_line("CS 101 Intro")
        assert c is not None
        self.assertEqual((c.code, c.title), ("CS101", "Intro"))

    def test_suffixed_code(self) -> None:
        c = parse_available_line("CS101L Intro Lab")
        assert c is not None
        self.assertEqual(c.code, "CS101L")

    def test_code_only_uses_code_as_title(self) -> None:
        c = parse_available_line("CS101")
        assert c is not None
        self.assertEqual((c.code, c.title), ("CS101", "CS101"))

    def test_unrecognised(self) -> None:
        self.assertIsNone(parse_available_line("Spring term offerings"))
        self.assertIsNone(parse_available_line(""))


class TestAvailableCourses(unittest.TestCase):
    def test_duplicates_collapse_last_title_wins(self) -> None:
        text = "CS101 Intro\nMATH101 Calculus\nCS 101 Introduction to CS\n"
        courses = parse_available_courses(text)
        self.assertEqual([c.code for c in courses], ["CS101", "MATH101"])
        self.assertEqual(courses[0].title, "Introduction to CS")

    def test_normalize_code(self) -> None:
        self.assertEqual(normalize_code(" CS  101 "), "CS101")


if __name__ == "__main__":
    unittest.main()
