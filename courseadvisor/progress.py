"""
Progress reporting.

Aggregates over one student's ParseResult:
- ECTS and credits of passed courses
- per category: how many curriculum entries exist and how many were passed
- overall completion percentage (0 when the curriculum is empty)
"""

from __future__ import annotations

import math
from typing import Dict

from courseadvisor.model import ParseResult, ProgressReport
from courseadvisor.recommend import estimate_semester


def completion_percentage(completed_count: int, required_count: int) -> int:
    """
    Round-half-up percentage; an empty curriculum yields 0 instead of failing.
    """
    if required_count <= 0:
        return 0
    return int(math.floor(100 * completed_count / required_count + 0.5))


def category_stats(result: ParseResult) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = {}
    for course in result.curriculum:
        entry = stats.setdefault(course.category.value, {"required": 0, "completed": 0})
        # duplicates in the curriculum are counted once per entry
        entry["required"] += 1
        record = result.completed.get(course.code)
        if record is not None and record.passed:
            entry["completed"] += 1
    return stats


def generate_progress_report(result: ParseResult) -> ProgressReport:
    passed = result.completed.passing()

    return ProgressReport(
        student_info=result.student_info,
        current_semester=estimate_semester(result.completed),
        total_ects=sum(c.ects for c in passed),
        total_credits=sum(c.credits for c in passed),
        completed_courses=len(passed),
        total_required_courses=len(result.curriculum),
        category_stats=category_stats(result),
        completion_percentage=completion_percentage(len(passed), len(result.curriculum)),
    )
