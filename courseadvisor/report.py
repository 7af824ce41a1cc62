"""
Terminal rendering of a recommendation report (rich tables).

Works on the report dict produced by session.build_report(), so the same
output can be printed for a fresh parse or for reloaded data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table


def _safe_str(x: Any) -> str:
    return "" if x is None else str(x)


def _fmt_num(x: Any) -> str:
    if isinstance(x, float) and x.is_integer():
        return str(int(x))
    return _safe_str(x)


def _progress_table(progress: Dict[str, Any]) -> Table:
    table = Table(title="Progress", box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    info = progress.get("studentInfo") or {}
    for label, key in (("Student No", "studentNo"), ("Name", "name"), ("Program", "program")):
        if info.get(key):
            table.add_row(label, _safe_str(info[key]))

    table.add_row("Estimated semester", _safe_str(progress.get("currentSemester")))
    table.add_row("Credits passed", _fmt_num(progress.get("totalCredits")))
    table.add_row("ECTS passed", _fmt_num(progress.get("totalECTS")))
    table.add_row(
        "Courses passed",
        f"{progress.get('completedCourses', 0)} / {progress.get('totalRequiredCourses', 0)}"
        f" ({progress.get('completionPercentage', 0)}%)",
    )
    return table


def _category_table(progress: Dict[str, Any]) -> Optional[Table]:
    stats = progress.get("categoryStats") or {}
    if not stats:
        return None

    table = Table(title="By category", box=box.SIMPLE)
    table.add_column("Category")
    table.add_column("Completed", justify="right")
    table.add_column("Required", justify="right")
    for category in sorted(stats):
        entry = stats[category]
        table.add_row(category, _safe_str(entry.get("completed")), _safe_str(entry.get("required")))
    return table


def _course_table(title: str, courses: List[Dict[str, Any]], ranked: bool = False) -> Table:
    table = Table(title=f"{title} ({len(courses)})", box=box.SIMPLE)
    if ranked:
        table.add_column("#", justify="right")
    table.add_column("Code", style="bold cyan")
    table.add_column("Title")
    table.add_column("Sem", justify="right")
    table.add_column("Cat")
    table.add_column("ECTS", justify="right")
    if ranked:
        table.add_column("Priority", justify="right")
        table.add_column("Reason")

    for i, c in enumerate(courses, start=1):
        row = [
            _safe_str(c.get("code")),
            _safe_str(c.get("title")),
            _safe_str(c.get("semester")),
            _safe_str(c.get("category")),
            _fmt_num(c.get("ects")),
        ]
        if ranked:
            row = [str(i)] + row + [_safe_str(c.get("priority")), _safe_str(c.get("reason"))]
        table.add_row(*row)
    return table


def render_report(report: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Print the progress summary followed by the four recommendation buckets.
    """
    console = console or Console()
    progress = report.get("progressReport") or {}
    recs = report.get("recommendations") or {}

    console.print("\n=== Course Advisor ===")
    console.print(_progress_table(progress))

    categories = _category_table(progress)
    if categories is not None:
        console.print(categories)

    console.print(_course_table("Next semester", recs.get("nextSemesterCourses") or [], ranked=True))

    for title, key in (
        ("Available electives", "availableElectives"),
        ("Missed courses", "missedCourses"),
        ("Future courses", "futureRecommendations"),
    ):
        courses = recs.get(key) or []
        if courses:
            console.print(_course_table(title, courses))
