"""
Curriculum parsing (text -> CurriculumCourse records).

- Tracks the semester the current block of lines belongs to
- Extracts course rows with three layouts, most detailed first
- Keeps every extracted row in document order (duplicates included)

Important rules:
- 1 line = at most 1 course
- No course is emitted before a semester marker has been seen
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from courseadvisor.model import Category, CurriculumCourse
from courseadvisor.strategies import LineStrategy, compile_pattern, first_match, to_int

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Semester markers
# ---------------------------------------------------------------------------

SEMESTER_MARKERS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("leading_number", re.compile(r"^(\d+)\s+")),  # "1 CS101 ..."
    ("semester_n", re.compile(r"semester\s+(\d+)", re.IGNORECASE)),  # "Semester 1"
    ("ordinal_semester", re.compile(r"^(\d+)(?:st|nd|rd|th)\s+semester", re.IGNORECASE)),  # "1st Semester"
    ("year_n", re.compile(r"^year\s+(\d+)", re.IGNORECASE)),  # "Year 1"
)


class SemesterTracker:
    """
    Remembers the semester of the block currently being read.

    Markers may move the context backwards ("Semester 1" after "Semester 4"
    starts a new block); lines without a marker keep the last known value.
    """

    def __init__(self, current: Optional[int] = None) -> None:
        self.current = current

    def classify(self, line: str) -> Optional[int]:
        """
        Detect a semester marker in ``line``; update and return the context.
        """
        for name, pattern in SEMESTER_MARKERS:
            match = pattern.search(line)
            if match:
                self.current = int(match.group(1))
                logger.debug("semester marker (%s): %d", name, self.current)
                break
        return self.current


# ---------------------------------------------------------------------------
# Course layouts
# ---------------------------------------------------------------------------

CODE = r"[A-Z]{2,4}\d{3,4}[A-Z]?"
CATEGORY_TOKEN = r"AC|FC|UC|FE|AE|UE|CORE|ELECTIVE"

CURRICULUM_STRATEGIES: Tuple[LineStrategy, ...] = (
    # CODE TITLE CATEGORY L T P CREDIT [PREREQ, ...] ECTS
    LineStrategy(
        name="full",
        pattern=compile_pattern(
            rf"({CODE})\s+(.+?)\s+({CATEGORY_TOKEN})\s+(\d+)\s+(\d+)\s+(\d+)\s+(\d+)(?:\s+(.+?))?\s+(\d+)",
            ignore_case=True,
        ),
        fields=("code", "title", "category", "lecture", "tutorial", "lab", "total_credit", "prerequisites", "ects"),
    ),
    # CODE TITLE CREDITS ECTS CATEGORY
    LineStrategy(
        name="reduced",
        pattern=compile_pattern(rf"({CODE})\s+(.+?)\s+(\d+)\s+(\d+)\s+({CATEGORY_TOKEN})", ignore_case=True),
        fields=("code", "title", "total_credit", "ects", "category"),
    ),
    # CODE TITLE CREDITS (ECTS assumed equal to credits)
    LineStrategy(
        name="minimal",
        pattern=compile_pattern(rf"({CODE})\s+(.+?)\s+(\d+)"),
        fields=("code", "title", ("total_credit", "ects")),
        defaults={"category": Category.UNIVERSITY_CORE.value},
    ),
)

CURRICULUM_CONVERTERS = {
    "lecture": to_int,
    "tutorial": to_int,
    "lab": to_int,
    "total_credit": to_int,
    "ects": to_int,
}


def split_prerequisites(raw: Optional[str]) -> Tuple[str, ...]:
    """
    "CS101, MATH101" -> ("CS101", "MATH101"); placeholder dashes are dropped.
    """
    if not raw:
        return ()
    parts = [p.strip() for p in raw.split(",")]
    return tuple(p for p in parts if p and p != "-")


def _build_course(semester: int, record: Dict[str, Any]) -> CurriculumCourse:
    return CurriculumCourse(
        semester=semester,
        code=record["code"].upper(),
        title=record["title"],
        category=Category.from_token(record["category"]),
        lecture=record.get("lecture", 0),
        tutorial=record.get("tutorial", 0),
        lab=record.get("lab", 0),
        total_credit=record.get("total_credit", 0),
        prerequisites=split_prerequisites(record.get("prerequisites")),
        ects=record.get("ects", 0),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_curriculum_line(line: str, tracker: SemesterTracker) -> Optional[CurriculumCourse]:
    """
    Classify one line, then try the course layouts against it.

    Returns None for blank lines, unrecognised lines and lines seen
    before any semester context exists.
    """
    raw = line.strip()
    if not raw:
        return None

    semester = tracker.classify(raw)

    hit = first_match(CURRICULUM_STRATEGIES, raw, CURRICULUM_CONVERTERS)
    if hit is None or not semester:
        return None

    _, record = hit
    return _build_course(semester, record)


def parse_curriculum(text: str) -> List[CurriculumCourse]:
    """
    Parse a whole curriculum document into course records, in document order.
    """
    tracker = SemesterTracker()
    courses: List[CurriculumCourse] = []

    for line in text.splitlines():
        course = parse_curriculum_line(line, tracker)
        if course is not None:
            courses.append(course)
            logger.debug("curriculum course: %s - %s (semester %d)", course.code, course.title, course.semester)

    logger.info("Parsed %d courses from curriculum", len(courses))
    return courses
