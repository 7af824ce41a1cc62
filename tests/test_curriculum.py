"""
Unit tests for curriculum parsing.

Rules covered:
- semester markers (number, "Semester N", ordinal, "Year N") set the context
- three course layouts, most detailed first, first match wins
- no course before a semester context exists
- output keeps document order, duplicates included
"""

import unittest

from courseadvisor.curriculum import (
    SemesterTracker,
    parse_curriculum,
    parse_curriculum_line,
    split_prerequisites,
)
from courseadvisor.model import Category


CURRICULUM = """
Semester 1
CS101 Introduction to Computer Science AC 3 1 2 6 - 6
MATH101 Calculus I UC 3 1 0 4 - 4
Semester 2
CS102 Data Structures AC 3 1 2 6 CS101 6
CS201 Algorithms 6 8 FC
HIST101 World History 3
"""


class TestSemesterTracker(unittest.TestCase):
    def test_semester_n(self) -> None:
        t = SemesterTracker()
        self.assertEqual(t.classify("Semester 3"), 3)
        self.assertEqual(t.current, 3)

    def test_leading_number(self) -> None:
        t = SemesterTracker()
        self.assertEqual(t.classify("4 CS401 Compilers 6"), 4)

    def test_ordinal_semester(self) -> None:
        t = SemesterTracker()
        self.assertEqual(t.classify("2nd Semester"), 2)

    def test_year(self) -> None:
        t = SemesterTracker()
        self.assertEqual(t.classify("Year 3"), 3)

    def test_no_marker_keeps_state(self) -> None:
        t = SemesterTracker(current=5)
        self.assertEqual(t.classify("CS101 Intro 6"), 5)

    def test_marker_may_move_backwards(self) -> None:
        t = SemesterTracker()
        t.classify("Semester 4")
        self.assertEqual(t.classify("Semester 1"), 1)


class TestParseCurriculumLine(unittest.TestCase):
    def test_full_layout(self) -> None:
        course = parse_curriculum_line(
            "CS102 Data Structures AC 3 1 2 6 CS101, MATH101 7", SemesterTracker(current=2)
        )
        self.assertIsNotNone(course)
        assert course is not None

        self.assertEqual(course.semester, 2)
        self.assertEqual(course.code, "CS102")
        self.assertEqual(course.title, "Data Structures")
        self.assertEqual(course.category, Category.AREA_CORE)
        self.assertEqual((course.lecture, course.tutorial, course.lab), (3, 1, 2))
        self.assertEqual(course.total_credit, 6)
        self.assertEqual(course.prerequisites, ("CS101", "MATH101"))
        self.assertEqual(course.ects, 7)

    def test_full_layout_without_prerequisites(self) -> None:
        course = parse_curriculum_line("CS101 Intro AC 3 0 2 4 6", SemesterTracker(current=1))
        assert course is not None
        self.assertEqual(course.total_credit, 4)
        self.assertEqual(course.prerequisites, ())
        self.assertEqual(course.ects, 6)

    def test_dash_prerequisite_dropped(self) -> None:
        course = parse_curriculum_line("CS101 Intro AC 3 1 2 6 - 6", SemesterTracker(current=1))
        assert course is not None
        self.assertEqual(course.prerequisites, ())

    def test_reduced_layout(self) -> None:
        course = parse_curriculum_line("CS201 Algorithms 6 8 FC", SemesterTracker(current=3))
        assert course is not None
        self.assertEqual(course.category, Category.FACULTY_CORE)
        self.assertEqual((course.lecture, course.tutorial, course.lab), (0, 0, 0))
        self.assertEqual(course.total_credit, 6)
        self.assertEqual(course.ects, 8)

    def test_minimal_layout_defaults(self) -> None:
        course = parse_curriculum_line("HIST101 World History 3", SemesterTracker(current=1))
        assert course is not None
        self.assertEqual(course.title, "World History")
        self.assertEqual(course.category, Category.UNIVERSITY_CORE)
        self.assertEqual(course.total_credit, 3)
        self.assertEqual(course.ects, 3)

    def test_category_case_insensitive(self) -> None:
        course = parse_curriculum_line("cs101 intro ae 3 1 2 6 - 6", SemesterTracker(current=1))
        assert course is not None
        self.assertEqual(course.code, "CS101")
        self.assertEqual(course.category, Category.AREA_ELECTIVE)

    def test_generic_category_tokens(self) -> None:
        course = parse_curriculum_line("CS499 Capstone CORE 3 0 0 3 - 5", SemesterTracker(current=8))
        assert course is not None
        self.assertEqual(course.category, Category.GENERIC)

    def test_no_semester_context_skips_line(self) -> None:
        self.assertIsNone(parse_curriculum_line("CS101 Intro AC 3 1 2 6 - 6", SemesterTracker()))

    def test_unrecognised_line_skipped(self) -> None:
        self.assertIsNone(parse_curriculum_line("Total credits for the programme", SemesterTracker(current=1)))

    def test_blank_line(self) -> None:
        self.assertIsNone(parse_curriculum_line("   ", SemesterTracker(current=1)))

    def test_leading_number_sets_semester_on_same_line(self) -> None:
        t = SemesterTracker()
        course = parse_curriculum_line("1 CS101 Intro to CS 6", t)
        assert course is not None
        self.assertEqual(course.semester, 1)
        self.assertEqual(course.code, "CS101")


class TestParseCurriculum(unittest.TestCase):
    def test_document(self) -> None:
        courses = parse_curriculum(CURRICULUM)
        self.assertEqual([c.code for c in courses], ["CS101", "MATH101", "CS102", "CS201", "HIST101"])
        self.assertEqual([c.semester for c in courses], [1, 1, 2, 2, 2])
        self.assertEqual(courses[2].prerequisites, ("CS101",))

    def test_section_letter_codes(self) -> None:
        text = (
            "Semester 1\n"
            "CS101 Programming AC 3 0 0 3 - 4\n"
            "CS101L Programming Lab AC 0 0 2 1 - 2\n"
            "PHYS121L Physics Lab 1 2 UC\n"
            "CHEM101L Chemistry Lab 1\n"
        )
        courses = parse_curriculum(text)
        self.assertEqual([c.code for c in courses], ["CS101", "CS101L", "PHYS121L", "CHEM101L"])
        self.assertEqual(courses[1].title, "Programming Lab")
        self.assertEqual((courses[1].lab, courses[1].total_credit, courses[1].ects), (2, 1, 2))

    def test_lines_before_first_marker_are_skipped(self) -> None:
        text = "CS999 Orphan Course 3\nSemester 1\nCS101 Intro 6\n"
        self.assertEqual([c.code for c in parse_curriculum(text)], ["CS101"])

    def test_semester_zero_is_no_context(self) -> None:
        text = "Semester 0\nCS101 Intro 6\n"
        self.assertEqual(parse_curriculum(text), [])

    def test_backward_marker(self) -> None:
        text = "Semester 3\nCS301 Networks 6\nSemester 1\nCS101 Intro 6\n"
        self.assertEqual([(c.code, c.semester) for c in parse_curriculum(text)], [("CS301", 3), ("CS101", 1)])

    def test_duplicates_are_kept(self) -> None:
        text = "Semester 1\nCS101 Intro 6\nSemester 2\nCS101 Intro 6\n"
        self.assertEqual([c.code for c in parse_curriculum(text)], ["CS101", "CS101"])

    def test_idempotent(self) -> None:
        self.assertEqual(parse_curriculum(CURRICULUM), parse_curriculum(CURRICULUM))


class TestSplitPrerequisites(unittest.TestCase):
    def test_split(self) -> None:
        self.assertEqual(split_prerequisites("CS101, MATH101"), ("CS101", "MATH101"))

    def test_placeholders(self) -> None:
        self.assertEqual(split_prerequisites("-"), ())
        self.assertEqual(split_prerequisites(None), ())
        self.assertEqual(split_prerequisites("CS101, -, "), ("CS101",))


if __name__ == "__main__":
    unittest.main()
