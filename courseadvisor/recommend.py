"""
Course recommendation.

Given one student's ParseResult, decide which curriculum courses to suggest:

1. Estimate the current semester from passed credits (linear heuristic)
2. Drop courses already passed (exact code or base code match)
3. Keep only courses that are offered AND whose prerequisites are passed
4. Put each candidate into exactly one bucket, first matching rule wins:
       next semester -> electives -> missed -> future
5. Rank the next-semester bucket by priority (stable, highest first)
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, Set

from courseadvisor.config import (
    CATCH_UP_BONUS,
    CATEGORY_WEIGHTS,
    CREDITS_PER_SEMESTER,
    CURRENT_SEMESTER_BONUS,
    DELAY_PENALTY,
    DELAY_PENALTY_LATE,
    FINAL_SEMESTER,
    NEXT_SEMESTER_BONUS,
    SEMESTER_WINDOW,
    UNLOCK_BONUS,
)
from courseadvisor.errors import MissingInputError
from courseadvisor.model import (
    Category,
    CompletedCourses,
    CurriculumCourse,
    ParseResult,
    RankedCourse,
    Recommendations,
)

logger = logging.getLogger(__name__)

_TRAILING_LETTER = re.compile(r"[A-Z]$")


# ---------------------------------------------------------------------------
# Standing
# ---------------------------------------------------------------------------


def passed_credits(completed: CompletedCourses) -> float:
    return sum(course.credits for course in completed.passing())


def estimate_semester(completed: CompletedCourses) -> int:
    """
    floor(passed credits / CREDITS_PER_SEMESTER) + 1
    """
    total = passed_credits(completed)
    estimated = int(total // CREDITS_PER_SEMESTER) + 1
    logger.debug("passed credits %s -> estimated semester %d", total, estimated)
    return estimated


def base_code(code: str) -> str:
    """
    "PHYS121F" -> "PHYS121" (one trailing uppercase letter removed).
    """
    return _TRAILING_LETTER.sub("", code)


def completion_codes(completed: CompletedCourses) -> Set[str]:
    """
    Codes that count as done: every passed code plus its base code.
    """
    codes: Set[str] = set()
    for code, course in completed.items():
        if course.passed:
            codes.add(code)
            codes.add(base_code(code))
    return codes


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------


def prerequisites_met(course: CurriculumCourse, completed: CompletedCourses) -> bool:
    """
    True when every prerequisite was taken AND passed (no prerequisites: True).
    """
    for prereq in course.prerequisites:
        record = completed.get(prereq)
        if record is None or not record.passed:
            return False
    return True


# ---------------------------------------------------------------------------
# Ranking
# ---------------------------------------------------------------------------


def count_unlocks(course: CurriculumCourse, curriculum: Sequence[CurriculumCourse]) -> int:
    """
    Number of other curriculum entries listing ``course`` as a prerequisite.
    """
    return sum(1 for other in curriculum if other.code != course.code and course.code in other.prerequisites)


def is_next_semester(course: CurriculumCourse, current: int, done: Set[str]) -> bool:
    sem = course.semester
    if sem == current or sem == current + 1:
        return True
    # students past the nominal programme catch up on anything left over
    if current > FINAL_SEMESTER and sem <= FINAL_SEMESTER and course.code not in done:
        return True
    return current - SEMESTER_WINDOW <= sem <= current + SEMESTER_WINDOW


def calculate_priority(course: CurriculumCourse, current: int, curriculum: Sequence[CurriculumCourse]) -> int:
    priority = CATEGORY_WEIGHTS.get(course.category.value, 0)

    if course.semester == current:
        priority += CURRENT_SEMESTER_BONUS
    if course.semester == current + 1:
        priority += NEXT_SEMESTER_BONUS

    if current > FINAL_SEMESTER and course.semester <= FINAL_SEMESTER:
        priority += CATCH_UP_BONUS

    if course.semester < current:
        priority -= DELAY_PENALTY_LATE if current > FINAL_SEMESTER else DELAY_PENALTY

    priority += count_unlocks(course, curriculum) * UNLOCK_BONUS
    return priority


def recommendation_reason(course: CurriculumCourse, current: int, curriculum: Sequence[CurriculumCourse]) -> str:
    reasons: List[str] = []

    if course.semester == current:
        reasons.append("Current semester course")
    elif course.semester == current + 1:
        reasons.append("Next semester course")
    elif course.semester < current:
        reasons.append("Delayed from previous semester")

    if course.category is Category.AREA_CORE:
        reasons.append("Area Core requirement")
    if course.category is Category.FACULTY_CORE:
        reasons.append("Faculty Core requirement")

    unlocks = count_unlocks(course, curriculum)
    if unlocks > 0:
        reasons.append(f"Prerequisite for {unlocks} other courses")

    return ", ".join(reasons)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def recommend_courses(result: ParseResult) -> Recommendations:
    """
    Build the four recommendation buckets for one student.

    Raises MissingInputError if no curriculum has been extracted.
    """
    curriculum = result.curriculum
    if not curriculum:
        raise MissingInputError("No curriculum loaded; parse a curriculum document first")

    completed = result.completed
    current = estimate_semester(completed)
    done = completion_codes(completed)
    offered = result.available_codes

    logger.info(
        "Recommending for semester %d (%d curriculum, %d available, %d completed)",
        current,
        len(curriculum),
        len(offered),
        len(completed),
    )

    recs = Recommendations()

    for course in curriculum:
        if course.code in done:
            logger.debug("skip %s: already completed", course.code)
            continue
        if course.code not in offered:
            logger.debug("skip %s: not offered", course.code)
            continue
        if not prerequisites_met(course, completed):
            logger.debug("skip %s: prerequisites not met", course.code)
            continue

        if is_next_semester(course, current, done):
            recs.next_semester.append(
                RankedCourse(
                    course=course,
                    priority=calculate_priority(course, current, curriculum),
                    reason=recommendation_reason(course, current, curriculum),
                )
            )
        elif course.category.is_elective:
            recs.electives.append(course)
        elif course.semester < current:
            recs.missed.append(course)
        else:
            recs.future.append(course)

    # sorted() is stable: equal priorities keep curriculum order
    recs.next_semester = sorted(recs.next_semester, key=lambda r: -r.priority)

    logger.info(
        "Recommendations: next=%d electives=%d missed=%d future=%d",
        len(recs.next_semester),
        len(recs.electives),
        len(recs.missed),
        len(recs.future),
    )
    return recs
