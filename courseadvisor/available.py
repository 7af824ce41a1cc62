"""
Available-course parsing (text -> AvailableCourse records).

Each line of the offering list may look like:
    CS101 Introduction to Computer Science
    CS 101 Introduction to Computer Science
    CS101L Introduction to Computer Science Lab
    CS101
Codes are normalised by removing internal whitespace. The same code listed
twice collapses into one entry; the later title wins.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Optional, Tuple

from courseadvisor.model import AvailableCourse
from courseadvisor.strategies import LineStrategy, compile_pattern, first_match

logger = logging.getLogger(__name__)


AVAILABLE_STRATEGIES: Tuple[LineStrategy, ...] = (
    LineStrategy("code_title", compile_pattern(r"([A-Z]{2,4}\d{3,4})\s+(.+)"), ("code", "title")),
    LineStrategy("spaced_code_title", compile_pattern(r"([A-Z]{2,4}\s+\d{3,4})\s+(.+)"), ("code", "title")),
    LineStrategy("suffixed_code_title", compile_pattern(r"([A-Z]{2,4}\d{3,4}[A-Z]?)\s+(.+)"), ("code", "title")),
    # no title on the line: the code doubles as the title
    LineStrategy("code_only", compile_pattern(r"([A-Z]{2,4}\d{3,4})\s*$"), (("code", "title"),)),
)

_WHITESPACE = re.compile(r"\s+")


def normalize_code(code: str) -> str:
    return _WHITESPACE.sub("", code.strip())


def parse_available_line(line: str) -> Optional[AvailableCourse]:
    raw = line.strip()
    if not raw:
        return None

    hit = first_match(AVAILABLE_STRATEGIES, raw)
    if hit is None:
        return None

    _, record = hit
    return AvailableCourse(code=normalize_code(record["code"]), title=record["title"])


def parse_available_courses(text: str) -> List[AvailableCourse]:
    """
    Parse the list of courses offered next term, one entry per code.
    """
    by_code: Dict[str, AvailableCourse] = {}
    for line in text.splitlines():
        course = parse_available_line(line)
        if course is None:
            continue
        by_code[course.code] = course
        logger.debug("available course: %s - %s", course.code, course.title)

    logger.info("Parsed %d available courses", len(by_code))
    return list(by_code.values())
