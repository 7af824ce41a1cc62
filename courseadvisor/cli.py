"""
CLI (Command Line Interface).

    courseadvisor parse <curriculum> <transcript> <available> [--out FILE]
    courseadvisor recommend [--data FILE] [--json]
    courseadvisor show [--data FILE]
    courseadvisor advise <curriculum> <transcript> <available> [--json]

Note:
- "parse" + "recommend" is the two-step flow (parsed data is persisted in between)
- "advise" runs the whole pipeline in one go without writing anything
- Errors are printed as "Error [kind]: message" with exit code 1
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from courseadvisor.config import default_data_path
from courseadvisor.errors import AdvisorError
from courseadvisor.report import render_report
from courseadvisor.session import AdvisorSession


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _data_path(args: argparse.Namespace) -> Path:
    return Path(args.data) if args.data else default_data_path()


def _cmd_parse(args: argparse.Namespace) -> int:
    """
    Parse the three documents and persist the result.
    """
    session = AdvisorSession(split_grade_suffix=args.split_grade_suffix)
    result = session.parse_documents(args.curriculum, args.transcript, args.available)
    out = session.save(args.out or default_data_path())

    print(f"Curriculum courses: {len(result.curriculum)}")
    print(f"Completed courses:  {len(result.completed)}")
    print(f"Available courses:  {len(result.available)}")
    print(f"Parsed data written to: {out}")
    return 0


def _cmd_recommend(args: argparse.Namespace) -> int:
    """
    Load persisted data and print recommendations.
    """
    session = AdvisorSession()
    session.load(_data_path(args))
    report = session.recommend()

    if args.json:
        _print_json(report)
    else:
        render_report(report)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    """
    Print the persisted parsed data as JSON.
    """
    session = AdvisorSession()
    session.load(_data_path(args))
    _print_json(session.parsed_data())
    return 0


def _cmd_advise(args: argparse.Namespace) -> int:
    """
    Parse and recommend in one step, nothing is saved.
    """
    session = AdvisorSession(split_grade_suffix=args.split_grade_suffix)
    session.parse_documents(args.curriculum, args.transcript, args.available)
    report = session.recommend()

    if args.json:
        _print_json(report)
    else:
        render_report(report)
    return 0


def _add_document_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("curriculum", type=str, help="Curriculum document (.txt, .html or URL)")
    p.add_argument("transcript", type=str, help="Transcript (.txt/.html text, or .csv/.json rows)")
    p.add_argument("available", type=str, help="Offered courses list (.txt, .html or URL)")
    p.add_argument(
        "--split-grade-suffix",
        action="store_true",
        help="Read a letter glued to a course code (PHYS121F) as the grade",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="courseadvisor", description="CourseAdvisor CLI")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Parse documents and save the result")
    _add_document_args(p_parse)
    p_parse.add_argument("--out", type=str, default=None, help="Output JSON path")

    p_rec = sub.add_parser("recommend", help="Recommend courses from saved data")
    p_rec.add_argument("--data", type=str, default=None, help="Parsed data JSON path")
    p_rec.add_argument("--json", action="store_true", help="Print the report as JSON")

    p_show = sub.add_parser("show", help="Show saved parsed data")
    p_show.add_argument("--data", type=str, default=None, help="Parsed data JSON path")

    p_advise = sub.add_parser("advise", help="Parse documents and recommend without saving")
    _add_document_args(p_advise)
    p_advise.add_argument("--json", action="store_true", help="Print the report as JSON")

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    handlers = {
        "parse": _cmd_parse,
        "recommend": _cmd_recommend,
        "show": _cmd_show,
        "advise": _cmd_advise,
    }

    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args))
    except AdvisorError as exc:
        print(f"Error [{exc.kind}]: {exc.message}")
        raise SystemExit(1)
