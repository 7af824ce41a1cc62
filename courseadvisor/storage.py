"""
Persistent storage for one student's parsed data.

This module manages the file:

    data/parsed_data.json

Schema:
    {
      "curriculum":       [CurriculumCourse, ...],
      "completedCourses": [[code, CompletedCourse], ...],
      "availableCourses": [AvailableCourse, ...],
      "studentInfo":      {studentNo?, name?, program?},
      "timestamp":        ISO-8601
    }

completedCourses is stored as explicit [code, record] pairs (not an object)
so that order and last-write-wins replacement stay auditable. Saving always
replaces the whole file; nothing is merged with an earlier run.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from courseadvisor.config import default_data_path
from courseadvisor.errors import MissingInputError, SourceDecodeError
from courseadvisor.model import (
    AvailableCourse,
    CompletedCourses,
    CurriculumCourse,
    ParseResult,
    StudentInfo,
)

logger = logging.getLogger(__name__)


def to_payload(result: ParseResult, timestamp: str | None = None) -> Dict[str, Any]:
    """
    Build the persisted record for ``result``.
    """
    return {
        "curriculum": [c.to_dict() for c in result.curriculum],
        "completedCourses": result.completed.to_pairs(),
        "availableCourses": [c.to_dict() for c in result.available],
        "studentInfo": result.student_info.to_dict(),
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
    }


def from_payload(data: Any) -> ParseResult:
    """
    Rebuild a ParseResult from a persisted record.

    Raises SourceDecodeError when the record does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise SourceDecodeError("Parsed data must be a JSON object")

    try:
        return ParseResult(
            curriculum=tuple(CurriculumCourse.from_dict(c) for c in data.get("curriculum") or []),
            completed=CompletedCourses.from_pairs(data.get("completedCourses") or []),
            available=tuple(AvailableCourse.from_dict(c) for c in data.get("availableCourses") or []),
            student_info=StudentInfo.from_dict(data.get("studentInfo") or {}),
        )
    except (AttributeError, TypeError, ValueError) as exc:
        raise SourceDecodeError(f"Parsed data has an unexpected shape: {exc}") from exc


def save_parsed_data(result: ParseResult, path: str | Path | None = None) -> Path:
    """
    Write ``result`` to parsed_data.json (or ``path``) and return the file path.

    Creates parent directories if needed.
    """
    data_path = Path(path) if path is not None else default_data_path()
    data_path.parent.mkdir(parents=True, exist_ok=True)

    payload = to_payload(result)
    data_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")

    logger.info("Parsed data saved to %s", data_path)
    return data_path


def load_parsed_data(path: str | Path | None = None) -> ParseResult:
    """
    Load parsed_data.json (or ``path``).

    Unlike a fresh install's empty state, a missing file here means the caller
    asked for data that was never parsed: MissingInputError. Corrupt files
    raise SourceDecodeError.
    """
    data_path = Path(path) if path is not None else default_data_path()

    if not data_path.exists():
        raise MissingInputError(f"No parsed data at {data_path}; run the parse step first")

    try:
        data = json.loads(data_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SourceDecodeError(f"Cannot read parsed data from {data_path}: {exc}") from exc

    result = from_payload(data)
    logger.info(
        "Parsed data loaded from %s (%d curriculum, %d completed, %d available)",
        data_path,
        len(result.curriculum),
        len(result.completed),
        len(result.available),
    )
    return result
