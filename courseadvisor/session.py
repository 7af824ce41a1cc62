"""
Advisor session: one student's run through the pipeline.

    sources -> extractors -> ParseResult -> recommendations + progress report

A session owns exactly one ParseResult. Parsing builds a complete new result
and only then replaces the old one, so a failure on any of the three
documents leaves the session untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from courseadvisor.available import parse_available_courses
from courseadvisor.curriculum import parse_curriculum
from courseadvisor.errors import MissingInputError
from courseadvisor.model import ParseResult
from courseadvisor.progress import generate_progress_report
from courseadvisor.recommend import recommend_courses
from courseadvisor.sources import extract_rows, extract_text, is_tabular
from courseadvisor.storage import load_parsed_data, save_parsed_data, to_payload
from courseadvisor.transcript import TranscriptResult, parse_transcript_rows, parse_transcript_text

logger = logging.getLogger(__name__)


def read_transcript(source: str | Path, split_grade_suffix: bool = False) -> TranscriptResult:
    """
    Row mode for spreadsheet exports, line mode for everything else.
    """
    if is_tabular(source):
        return parse_transcript_rows(extract_rows(source))
    return parse_transcript_text(extract_text(source), split_grade_suffix=split_grade_suffix)


def parse_documents(
    curriculum: str | Path,
    transcript: str | Path,
    available: str | Path,
    split_grade_suffix: bool = False,
) -> ParseResult:
    """
    Read and extract all three documents into one ParseResult.
    """
    courses = parse_curriculum(extract_text(curriculum))
    record = read_transcript(transcript, split_grade_suffix=split_grade_suffix)
    offered = parse_available_courses(extract_text(available))

    return ParseResult(
        curriculum=tuple(courses),
        completed=record.completed,
        available=tuple(offered),
        student_info=record.student_info,
    )


def build_report(result: ParseResult) -> Dict[str, Any]:
    """
    {progressReport: {...}, recommendations: {...}} for one ParseResult.
    """
    recommendations = recommend_courses(result)
    progress = generate_progress_report(result)
    return {
        "progressReport": progress.to_dict(),
        "recommendations": recommendations.to_dict(),
    }


class AdvisorSession:
    """
    Holds the current ParseResult of one student; never shared between students.
    """

    def __init__(self, result: Optional[ParseResult] = None, split_grade_suffix: bool = False) -> None:
        self.result = result
        self.split_grade_suffix = split_grade_suffix

    def parse_documents(self, curriculum: str | Path, transcript: str | Path, available: str | Path) -> ParseResult:
        # all three must succeed before anything is committed
        result = parse_documents(curriculum, transcript, available, split_grade_suffix=self.split_grade_suffix)
        self.result = result
        logger.info(
            "Session parsed %d curriculum, %d completed, %d available courses",
            len(result.curriculum),
            len(result.completed),
            len(result.available),
        )
        return result

    def _require_result(self) -> ParseResult:
        if self.result is None:
            raise MissingInputError("Nothing parsed or loaded in this session")
        return self.result

    def save(self, path: str | Path | None = None) -> Path:
        return save_parsed_data(self._require_result(), path)

    def load(self, path: str | Path | None = None) -> ParseResult:
        self.result = load_parsed_data(path)
        return self.result

    def parsed_data(self) -> Dict[str, Any]:
        return to_payload(self._require_result())

    def recommend(self) -> Dict[str, Any]:
        return build_report(self._require_result())
