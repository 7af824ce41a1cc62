"""
CourseAdvisor – extract curriculum / transcript / offering lists from loosely
formatted text and recommend the courses to take next.

    from courseadvisor import AdvisorSession

    session = AdvisorSession()
    session.parse_documents("curriculum.txt", "transcript.txt", "available.txt")
    report = session.recommend()
"""

from pathlib import Path

from courseadvisor.errors import AdvisorError, MissingInputError, SourceDecodeError
from courseadvisor.model import ParseResult
from courseadvisor.session import AdvisorSession, build_report, parse_documents

__version__ = Path(__file__).with_name("VERSION").read_text(encoding="utf-8").strip()

__all__ = [
    "__version__",
    "AdvisorError",
    "AdvisorSession",
    "MissingInputError",
    "ParseResult",
    "SourceDecodeError",
    "build_report",
    "parse_documents",
]
