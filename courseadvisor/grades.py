"""
Grade evaluation.

Closed-world, default-true policy: a grade fails only if it is one of the
known failing tokens or carries a retake marker. Unknown or garbled tokens
count as passing.
"""

from __future__ import annotations

from courseadvisor.config import FAILING_GRADES, RETAKE_MARKERS


def is_passing(grade: str) -> bool:
    token = (grade or "").strip()
    if token in FAILING_GRADES:
        return False
    if any(marker in token for marker in RETAKE_MARKERS):
        return False
    return True
