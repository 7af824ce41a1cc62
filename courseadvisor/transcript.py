"""
Transcript parsing (rows or text lines -> CompletedCourse records).

Two input modes:
- Row mode: spreadsheet-like rows ({column name: value}) from a tabular export
- Line mode: free text where every line may follow a different layout

Line mode tries an ordered table of layouts and keeps the first hit. Real
transcripts are inconsistent line to line, so the goal is a plausible record
for every recognisable course code, not perfect fields: several layouts
assume 3 credits / 3 ECTS when the line has none, and grade "P" (passing)
when the line carries no grade.

Records are keyed by course code; a later line for the same code replaces
the earlier record (re-takes are listed after the original attempt).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from courseadvisor.config import ASSUMED_GRADE, DEFAULT_CREDITS, DEFAULT_ECTS
from courseadvisor.model import CompletedCourse, CompletedCourses, StudentInfo
from courseadvisor.strategies import LineStrategy, compile_pattern, first_match, to_number

logger = logging.getLogger(__name__)


CODE = r"[A-Z]{2,4}\d{3,4}"
# two-letter fail tokens before single letters; a retake marker stays part of the token
GRADE = r"(?:\(rst\)\s*)?(?:FF|FD|F\*?|[A-F][+-]?|W|P)(?:\s*\(rst\))?"
SIGNED_GRADE = r"[A-F][+-]?"
# a sign cannot be part of a course code, so "ENGL121C+" is unambiguous
GLUED_GRADE = r"[A-F][+-]"
DEC = r"\d+\.\d+"
DEC_COMMA = r"\d+,\d+"
NUM = r"\d+\.?\d*"

# Assumed when a layout carries neither grade nor credit columns
NO_GRADE = {"grade": ASSUMED_GRADE, "title": ""}
ASSUMED_CREDITS = {"credits": DEFAULT_CREDITS, "ects": DEFAULT_ECTS}


def _s(name: str, pattern: str, fields: Tuple[Any, ...], defaults: Optional[Dict[str, Any]] = None,
       fallbacks: Optional[Dict[str, Any]] = None) -> LineStrategy:
    return LineStrategy(name=name, pattern=compile_pattern(pattern), fields=fields,
                        defaults=defaults or {}, fallbacks=fallbacks or {})


# ---------------------------------------------------------------------------
# Line layouts (ORDER IS PRIORITY: first match wins)
# ---------------------------------------------------------------------------

# "PHYS121F 6.00 12.00 3,00": the trailing letter stays part of the code
KEEP_SUFFIX = _s(
    "code_numeric_columns",
    rf"({CODE}[A-Z]?)\s+({DEC})\s+({DEC})\s+({DEC_COMMA})",
    ("code", "ects", "grade_points", "credits"),
    NO_GRADE,
)

# "PHYS121F 6.00 12.00 3,00": the trailing letter is read as the grade
SPLIT_SUFFIX = _s(
    "suffix_grade_numeric_columns",
    rf"({CODE})([A-Z])\s+({DEC})\s+({DEC})\s+(\d+[,.]\d+)",
    ("code", "grade", "ects", "grade_points", "credits"),
    {"title": ""},
)

LINE_STRATEGIES: Tuple[LineStrategy, ...] = (
    # CS101 Intro to CS 6.00 A 6.00 24.00
    _s("full_record", rf"({CODE})\s+(.+?)\s+({DEC})\s+({GRADE})\s+({DEC})\s+({DEC})",
       ("code", "title", "ects", "grade", "credits", "grade_points")),
    # CS101 Intro to CS A 6 6
    _s("grade_credits_ects", rf"({CODE})\s+(.+?)\s+({GRADE})\s+(\d+)\s+(\d+)",
       ("code", "title", "grade", "credits", "ects"),
       {"grade_points": 0.0}),
    # ENGL121 C+ 4.00 3.00 6,90
    _s("separate_grade_comma", rf"({CODE}[A-Z]?)\s+({SIGNED_GRADE})\s+({DEC})\s+({DEC})\s+({DEC_COMMA})",
       ("code", "grade", "ects", "grade_points", "credits"),
       {"title": ""}),
    # ENGR101 B- 2.00 2.00 5.40
    _s("separate_grade_decimal", rf"({CODE}[A-Z]?)\s+({SIGNED_GRADE})\s+({DEC})\s+({DEC})\s+({DEC})",
       ("code", "grade", "ects", "grade_points", "credits"),
       {"title": ""}),
    # ENGL121C+ 4.00 3.00 6,90
    _s("embedded_grade_comma", rf"({CODE})({GLUED_GRADE})\s+({DEC})\s+({DEC})\s+({DEC_COMMA})",
       ("code", "grade", "ects", "grade_points", "credits"),
       {"title": ""}),
    # ENGR101B- 2.00 2.00 5.40
    _s("embedded_grade_decimal", rf"({CODE})({GLUED_GRADE})\s+({DEC})\s+({DEC})\s+({DEC})",
       ("code", "grade", "ects", "grade_points", "credits"),
       {"title": ""}),
    KEEP_SUFFIX,
    # CS101 | Intro to CS | A | 6
    _s("table_columns", rf"({CODE}[A-Z]?)\s*[|\t]\s*(.+?)\s*[|\t]\s*({GRADE})\s*[|\t]\s*({NUM})",
       ("code", "title", "grade", ("credits", "ects")),
       {"grade_points": 0.0},
       ASSUMED_CREDITS),
    # CS101 Intro to CS B+ 6.50
    _s("grade_decimal_credits", rf"({CODE}[A-Z]?)\s+(.+?)\s+({GRADE})\s+({DEC})",
       ("code", "title", "grade", ("credits", "ects")),
       {"grade_points": 0.0}),
    # CS101 Intro to CS A 6
    _s("grade_credits", rf"({CODE}[A-Z]?)\s+(.+?)\s+({GRADE})\s+(\d+)",
       ("code", "title", "grade", ("credits", "ects")),
       {"grade_points": 0.0}),
    # CS101 6.00 24.00 6.00
    _s("numeric_triplet", rf"({CODE}[A-Z]?)\s+({NUM})\s+({NUM})\s+({NUM})",
       ("code", "ects", "grade_points", "credits"),
       NO_GRADE,
       ASSUMED_CREDITS),
    # PHYS121F Physics I B
    _s("suffix_code_title_grade", rf"({CODE}[A-Z])\s+(.+?)\s+({GRADE})(?=\s|$)",
       ("code", "title", "grade"),
       {**ASSUMED_CREDITS, "grade_points": 0.0}),
    # PHYS121F B
    _s("suffix_code_grade", rf"({CODE}[A-Z])\s+({GRADE})(?=\s|$)",
       ("code", "grade"),
       {**ASSUMED_CREDITS, "grade_points": 0.0, "title": ""}),
    # CS101 6
    _s("code_number", rf"({CODE}[A-Z]?)\s+({NUM})",
       ("code", ("credits", "ects")),
       {**NO_GRADE, "grade_points": 0.0},
       ASSUMED_CREDITS),
    # CS101 Intro to CS
    _s("code_title", rf"({CODE}[A-Z]?)\s+(.+?)(?=\s+\d|$)",
       ("code", "title"),
       {**NO_GRADE, **ASSUMED_CREDITS, "grade_points": 0.0}),
)


def line_strategies(split_grade_suffix: bool = False) -> Tuple[LineStrategy, ...]:
    """
    Return the line layout table.

    "PHYS121F" is ambiguous: an F-suffixed course code, or PHYS121 graded F.
    By default the code is kept whole (graded "P") and the recommendation
    engine reconciles it through its base code. With ``split_grade_suffix``
    the splitting layout is tried right before the keeping one, so the
    letter becomes the grade.
    """
    if not split_grade_suffix:
        return LINE_STRATEGIES
    pos = LINE_STRATEGIES.index(KEEP_SUFFIX)
    return LINE_STRATEGIES[:pos] + (SPLIT_SUFFIX,) + LINE_STRATEGIES[pos:]


TRANSCRIPT_CONVERTERS = {
    "credits": to_number,
    "ects": to_number,
    "grade_points": to_number,
}


# ---------------------------------------------------------------------------
# Student metadata
# ---------------------------------------------------------------------------

STUDENT_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = (
    (re.compile(r"Student No[:\s]+(\d+)"), "student_no"),
    (re.compile(r"Name[:\s]+(.+)"), "name"),
    (re.compile(r"Department[:\s-]+Program[:\s]+(.+)"), "program"),
    (re.compile(r"Program[:\s]+(.+)"), "program"),
)


def extract_student_info(line: str, info: StudentInfo) -> StudentInfo:
    """
    Apply every label pattern to ``line``; later matches overwrite earlier ones.
    """
    for pattern, key in STUDENT_PATTERNS:
        match = pattern.search(line)
        if match:
            info = info.with_field(key, match.group(1).strip())
            logger.debug("student info %s: %s", key, getattr(info, key))
    return info


# ---------------------------------------------------------------------------
# Result container
# ---------------------------------------------------------------------------


@dataclass
class TranscriptResult:
    completed: CompletedCourses = field(default_factory=CompletedCourses)
    student_info: StudentInfo = field(default_factory=StudentInfo)


# ---------------------------------------------------------------------------
# Line mode
# ---------------------------------------------------------------------------


def parse_transcript_line(
    line: str,
    strategies: Optional[Tuple[LineStrategy, ...]] = None,
) -> Optional[CompletedCourse]:
    """
    Parse one free-text transcript line into a CompletedCourse (or None).
    """
    raw = line.strip()
    if not raw:
        return None

    hit = first_match(strategies or LINE_STRATEGIES, raw, TRANSCRIPT_CONVERTERS)
    if hit is None:
        return None

    _, record = hit
    return CompletedCourse.create(
        code=record["code"],
        title=record.get("title", ""),
        grade=record.get("grade", ASSUMED_GRADE),
        credits=record.get("credits", 0.0),
        ects=record.get("ects", 0.0),
        grade_points=record.get("grade_points", 0.0),
    )


def parse_transcript_text(text: str, split_grade_suffix: bool = False) -> TranscriptResult:
    """
    Parse a free-text transcript (line mode).
    """
    strategies = line_strategies(split_grade_suffix)
    result = TranscriptResult()

    for line in text.splitlines():
        result.student_info = extract_student_info(line, result.student_info)

        course = parse_transcript_line(line, strategies)
        if course is None:
            continue
        result.completed.add(course)
        logger.debug("completed course: %s - %s (%s credits)", course.code, course.grade, course.credits)

    logger.info("Parsed %d completed courses from transcript", len(result.completed))
    return result


# ---------------------------------------------------------------------------
# Row mode
# ---------------------------------------------------------------------------


def _cell(row: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = row.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def parse_transcript_row(row: Mapping[str, Any]) -> Optional[CompletedCourse]:
    """
    Convert one spreadsheet row; rows without a code or a grade are ignored.
    """
    code = _cell(row, "Code")
    grade = _cell(row, "Grade")
    if not code or not grade:
        return None

    semester = _cell(row, "Semester")
    return CompletedCourse.create(
        code=code,
        title=_cell(row, "Title of Course", "Title"),
        grade=grade,
        credits=to_number(row.get("Credits")),
        ects=to_number(row.get("ECTS Credits")) or to_number(row.get("ECTS")),
        grade_points=to_number(row.get("Gr.Pts")),
        semester=semester or None,
    )


def parse_transcript_rows(rows: Iterable[Mapping[str, Any]]) -> TranscriptResult:
    """
    Parse a tabular transcript (row mode). No student metadata is read.
    """
    result = TranscriptResult()
    for row in rows:
        course = parse_transcript_row(row)
        if course is not None:
            result.completed.add(course)

    logger.info("Parsed %d completed courses from transcript rows", len(result.completed))
    return result
