"""
Source documents (files / URLs -> plain text or rows).

The extractors only ever see UTF-8 text or a list of {column: value} rows.
This module produces them from the formats we can read directly:

- .txt / .text / .md       -> text
- .html / .htm (or a URL)  -> text, one line per table row / block
- .csv / .json             -> rows

Binary office formats (docx, pdf, xlsx, ...) must be converted to one of the
above beforehand; they raise SourceDecodeError here.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import requests
from bs4 import BeautifulSoup

from courseadvisor.errors import SourceDecodeError

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = {".txt", ".text", ".md", ""}
HTML_SUFFIXES = {".html", ".htm"}
ROW_SUFFIXES = {".csv", ".json"}

REQUEST_TIMEOUT = 30


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def _read_utf8(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8-sig")
    except OSError as exc:
        raise SourceDecodeError(f"Cannot read {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SourceDecodeError(f"{path} is not valid UTF-8 text") from exc


def html_to_text(html: str) -> str:
    """
    Flatten an HTML page into lines.

    Each table row becomes ONE line with its cells separated by spaces so that
    curriculum/transcript rows keep the shape the line extractors expect.
    """
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style"]):
        tag.decompose()

    for row in soup.select("tr"):
        cells = [c.get_text(" ", strip=True) for c in row.find_all(["td", "th"])]
        row.replace_with(soup.new_string("\n" + " ".join(c for c in cells if c) + "\n"))

    text = soup.get_text("\n")
    lines = [line.strip() for line in text.splitlines()]
    return "\n".join(line for line in lines if line)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def fetch_text(url: str) -> str:
    """
    Download a page and flatten it to text.
    """
    try:
        resp = requests.get(url, timeout=REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise SourceDecodeError(f"Cannot fetch {url}: {exc}") from exc

    logger.info("Fetched %s (%d bytes)", url, len(resp.content))
    return html_to_text(resp.text)


def extract_text(source: str | Path) -> str:
    """
    Return the text content of a document (path or http(s) URL).
    """
    if is_url(source):
        return fetch_text(str(source))

    path = Path(source)
    suffix = path.suffix.lower()

    if suffix in HTML_SUFFIXES:
        return html_to_text(_read_utf8(path))
    if suffix in TEXT_SUFFIXES or suffix == ".csv":
        return _read_utf8(path)

    raise SourceDecodeError(f"Unsupported document format '{suffix}' for {path.name}; convert it to text first")


def extract_rows(source: str | Path) -> List[Dict[str, Any]]:
    """
    Return the rows of a tabular document (.csv, .json list of objects).
    """
    path = Path(source)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        reader = csv.DictReader(io.StringIO(_read_utf8(path)))
        try:
            return [dict(row) for row in reader]
        except csv.Error as exc:
            raise SourceDecodeError(f"{path.name} is not valid CSV: {exc}") from exc

    if suffix == ".json":
        try:
            data = json.loads(_read_utf8(path))
        except json.JSONDecodeError as exc:
            raise SourceDecodeError(f"{path.name} is not valid JSON: {exc}") from exc
        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise SourceDecodeError(f"{path.name} must contain a list of row objects")
        return data

    raise SourceDecodeError(f"Unsupported tabular format '{suffix}' for {path.name}")


def is_tabular(source: str | Path) -> bool:
    """
    True for sources read in row mode (spreadsheet exports).
    """
    return not is_url(source) and Path(source).suffix.lower() in ROW_SUFFIXES
