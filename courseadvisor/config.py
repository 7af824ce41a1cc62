"""
Configuration constants for the course advisor.

All tunable values used by the extractors and the recommendation engine
live here so that policy changes do not require touching the algorithms.
"""

from __future__ import annotations

from pathlib import Path


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

PACKAGE_DIR = Path(__file__).resolve().parent
PARSED_DATA_FILENAME = "parsed_data.json"


def default_data_path() -> Path:
    """
    Return the default location of the persisted parsed data.
    """
    return PACKAGE_DIR / "data" / PARSED_DATA_FILENAME


# ---------------------------------------------------------------------------
# Grades
# ---------------------------------------------------------------------------

# Exact grade tokens that mean the course was NOT passed.
# W = withdrawn, F* / FF / FD = institution-specific fail variants
FAILING_GRADES = {"F", "F*", "FF", "FD", "W"}

# Substrings that force a failing result whatever the letter grade is.
# "(rst)" marks a retaken attempt on the transcript.
RETAKE_MARKERS = ("(rst)",)

# Grade assumed when a transcript line carries no grade at all
ASSUMED_GRADE = "P"


# ---------------------------------------------------------------------------
# Standing
# ---------------------------------------------------------------------------

# Coarse linear heuristic: each semester is worth roughly this many credits
CREDITS_PER_SEMESTER = 20

# Nominal length of the programme; students beyond it get catch-up courses
FINAL_SEMESTER = 8

# Courses within this many semesters of the estimate count as "next semester"
SEMESTER_WINDOW = 2


# ---------------------------------------------------------------------------
# Transcript defaults
# ---------------------------------------------------------------------------

# Credits / ECTS assumed by transcript formats that omit them
DEFAULT_CREDITS = 3.0
DEFAULT_ECTS = 3.0


# ---------------------------------------------------------------------------
# Priority weights
# ---------------------------------------------------------------------------

CATEGORY_WEIGHTS = {"AC": 10, "FC": 8, "UC": 6}
CURRENT_SEMESTER_BONUS = 5
NEXT_SEMESTER_BONUS = 3
CATCH_UP_BONUS = 4
DELAY_PENALTY = 2
DELAY_PENALTY_LATE = 1
UNLOCK_BONUS = 2
