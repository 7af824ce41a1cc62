"""
Central data model definitions used across the project.

This module defines the canonical structure of every record that flows
through the advisor so that:
- extractors, engines and storage share the same field names
- the wire format (camelCase JSON) is produced in exactly one place
- results are plain values that can be passed around without hidden state
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from courseadvisor.grades import is_passing


class Category(Enum):
    """
    Curriculum requirement classification.

    The values are the tokens used in curriculum documents. The generic
    "CORE" / "ELECTIVE" tokens (and anything unknown) map to GENERIC.
    """

    AREA_CORE = "AC"
    FACULTY_CORE = "FC"
    UNIVERSITY_CORE = "UC"
    AREA_ELECTIVE = "AE"
    FACULTY_ELECTIVE = "FE"
    UNIVERSITY_ELECTIVE = "UE"
    GENERIC = "GENERIC"

    @classmethod
    def from_token(cls, token: str) -> "Category":
        try:
            return cls(token.strip().upper())
        except ValueError:
            return cls.GENERIC

    @property
    def is_elective(self) -> bool:
        return self in (Category.AREA_ELECTIVE, Category.FACULTY_ELECTIVE, Category.UNIVERSITY_ELECTIVE)


def _num(value: Any, default: float = 0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    return default


@dataclass(frozen=True)
class CurriculumCourse:
    """
    One row of the curriculum (a required or elective course in a semester).
    """

    semester: int
    code: str
    title: str
    category: Category
    lecture: int = 0
    tutorial: int = 0
    lab: int = 0
    total_credit: float = 0
    prerequisites: Tuple[str, ...] = ()
    ects: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "semester": self.semester,
            "code": self.code,
            "title": self.title,
            "category": self.category.value,
            "lecture": self.lecture,
            "tutorial": self.tutorial,
            "lab": self.lab,
            "totalCredit": self.total_credit,
            "prerequisites": list(self.prerequisites),
            "ects": self.ects,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CurriculumCourse":
        return cls(
            semester=int(_num(data.get("semester"), 0)),
            code=str(data.get("code", "")),
            title=str(data.get("title", "")),
            category=Category.from_token(str(data.get("category", ""))),
            lecture=int(_num(data.get("lecture"))),
            tutorial=int(_num(data.get("tutorial"))),
            lab=int(_num(data.get("lab"))),
            total_credit=_num(data.get("totalCredit")),
            prerequisites=tuple(str(p) for p in data.get("prerequisites") or []),
            ects=_num(data.get("ects")),
        )


@dataclass(frozen=True)
class CompletedCourse:
    """
    One course taken by the student, as read from the transcript.

    ``passed`` is decided once when the record is created and stored with it.
    """

    code: str
    title: str
    grade: str
    credits: float
    ects: float
    grade_points: float
    passed: bool
    semester: Optional[str] = None

    @classmethod
    def create(
        cls,
        code: str,
        title: str,
        grade: str,
        credits: float = 0,
        ects: float = 0,
        grade_points: float = 0,
        semester: Optional[str] = None,
    ) -> "CompletedCourse":
        return cls(
            code=code,
            title=title,
            grade=grade,
            credits=credits,
            ects=ects,
            grade_points=grade_points,
            passed=is_passing(grade),
            semester=semester,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "code": self.code,
            "title": self.title,
            "grade": self.grade,
            "credits": self.credits,
            "ects": self.ects,
            "gradePoints": self.grade_points,
        }
        if self.semester is not None:
            out["semester"] = self.semester
        out["passed"] = self.passed
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletedCourse":
        grade = str(data.get("grade", ""))
        passed = data.get("passed")
        semester = data.get("semester")
        return cls(
            code=str(data.get("code", "")),
            title=str(data.get("title", "")),
            grade=grade,
            credits=_num(data.get("credits")),
            ects=_num(data.get("ects")),
            grade_points=_num(data.get("gradePoints")),
            # stored value wins; only records written without it are re-evaluated
            passed=passed if isinstance(passed, bool) else is_passing(grade),
            semester=str(semester) if semester is not None else None,
        )


class CompletedCourses:
    """
    Ordered association list of (code, CompletedCourse) with a lookup index.

    Putting a code that already exists replaces its record in place, so a
    re-take listed later in the transcript wins while the first-seen order
    of codes is preserved.
    """

    def __init__(self, pairs: Optional[List[Tuple[str, CompletedCourse]]] = None) -> None:
        self._pairs: List[Tuple[str, CompletedCourse]] = []
        self._index: Dict[str, int] = {}
        for code, course in pairs or []:
            self.put(code, course)

    def put(self, code: str, course: CompletedCourse) -> None:
        pos = self._index.get(code)
        if pos is None:
            self._index[code] = len(self._pairs)
            self._pairs.append((code, course))
        else:
            self._pairs[pos] = (code, course)

    def add(self, course: CompletedCourse) -> None:
        self.put(course.code, course)

    def get(self, code: str) -> Optional[CompletedCourse]:
        pos = self._index.get(code)
        return None if pos is None else self._pairs[pos][1]

    def items(self) -> List[Tuple[str, CompletedCourse]]:
        return list(self._pairs)

    def passing(self) -> List[CompletedCourse]:
        return [course for _, course in self._pairs if course.passed]

    def __contains__(self, code: object) -> bool:
        return code in self._index

    def __iter__(self) -> Iterator[str]:
        return (code for code, _ in self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompletedCourses):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"CompletedCourses({self._pairs!r})"

    def to_pairs(self) -> List[List[Any]]:
        return [[code, course.to_dict()] for code, course in self._pairs]

    @classmethod
    def from_pairs(cls, pairs: List[Any]) -> "CompletedCourses":
        out = cls()
        for pair in pairs:
            code, data = pair
            out.put(str(code), CompletedCourse.from_dict(data))
        return out


@dataclass(frozen=True)
class AvailableCourse:
    """
    A course offered in the upcoming term.
    """

    code: str
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "title": self.title}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AvailableCourse":
        return cls(code=str(data.get("code", "")), title=str(data.get("title", "")))


@dataclass(frozen=True)
class StudentInfo:
    """
    Free-form student metadata picked up from the transcript, if present.
    """

    student_no: Optional[str] = None
    name: Optional[str] = None
    program: Optional[str] = None

    def with_field(self, key: str, value: str) -> "StudentInfo":
        return replace(self, **{key: value})

    def to_dict(self) -> Dict[str, str]:
        out: Dict[str, str] = {}
        if self.student_no is not None:
            out["studentNo"] = self.student_no
        if self.name is not None:
            out["name"] = self.name
        if self.program is not None:
            out["program"] = self.program
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StudentInfo":
        def _opt(key: str) -> Optional[str]:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(student_no=_opt("studentNo"), name=_opt("name"), program=_opt("program"))


@dataclass(frozen=True)
class ParseResult:
    """
    Everything extracted for one student: the input of the engines.

    A new parse produces a new ParseResult; nothing is merged into an old one.
    """

    curriculum: Tuple[CurriculumCourse, ...] = ()
    completed: CompletedCourses = field(default_factory=CompletedCourses)
    available: Tuple[AvailableCourse, ...] = ()
    student_info: StudentInfo = field(default_factory=StudentInfo)

    @property
    def available_codes(self) -> frozenset:
        return frozenset(c.code for c in self.available)


@dataclass(frozen=True)
class RankedCourse:
    """
    A next-semester recommendation: the curriculum course plus its ranking.
    """

    course: CurriculumCourse
    priority: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        out = self.course.to_dict()
        out["priority"] = self.priority
        out["reason"] = self.reason
        return out


@dataclass
class Recommendations:
    """
    The four disjoint recommendation buckets.
    """

    next_semester: List[RankedCourse] = field(default_factory=list)
    electives: List[CurriculumCourse] = field(default_factory=list)
    missed: List[CurriculumCourse] = field(default_factory=list)
    future: List[CurriculumCourse] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nextSemesterCourses": [c.to_dict() for c in self.next_semester],
            "availableElectives": [c.to_dict() for c in self.electives],
            "missedCourses": [c.to_dict() for c in self.missed],
            "futureRecommendations": [c.to_dict() for c in self.future],
        }


@dataclass
class ProgressReport:
    """
    Aggregate completion statistics for one student.
    """

    student_info: StudentInfo
    current_semester: int
    total_ects: float
    total_credits: float
    completed_courses: int
    total_required_courses: int
    category_stats: Dict[str, Dict[str, int]]
    completion_percentage: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "studentInfo": self.student_info.to_dict(),
            "currentSemester": self.current_semester,
            "totalECTS": self.total_ects,
            "totalCredits": self.total_credits,
            "completedCourses": self.completed_courses,
            "totalRequiredCourses": self.total_required_courses,
            "categoryStats": {k: dict(v) for k, v in self.category_stats.items()},
            "completionPercentage": self.completion_percentage,
        }
