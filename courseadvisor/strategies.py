"""
Data-driven line extraction.

Every extractor is described by an ordered table of LineStrategy entries.
Each entry couples a regex with the attribute name(s) its groups feed,
plus the values to assume for attributes the format does not carry.
Strategies are tried in table order and the first match wins, so the
order of a table IS its priority. Supporting a new layout means adding a
row to a table, not touching control flow.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Pattern, Tuple, Union

logger = logging.getLogger(__name__)

# A group feeds one attribute ("title") or several at once (("credits", "ects")).
FieldSpec = Union[str, Tuple[str, ...]]
Converters = Dict[str, Callable[[str], Any]]


# ---------------------------------------------------------------------------
# Numeric helpers
# ---------------------------------------------------------------------------


def to_number(raw: Any, default: float = 0.0) -> float:
    """
    Parse a float, accepting decimal commas ("6,90").

    Anything unparsable becomes ``default`` instead of failing the parse.
    """
    if raw is None:
        return default
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip().replace(",", ".")
    if not text:
        return default
    try:
        return float(text)
    except ValueError:
        return default


def to_int(raw: Any, default: int = 0) -> int:
    return int(to_number(raw, float(default)))


# ---------------------------------------------------------------------------
# Strategy table entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LineStrategy:
    """
    One named extraction rule: ``line -> record`` or ``None``.

    defaults:  attributes the layout never captures (e.g. grade "P")
    fallbacks: values used when a captured attribute converts to 0/empty
    """

    name: str
    pattern: Pattern[str]
    fields: Tuple[FieldSpec, ...]
    defaults: Dict[str, Any] = field(default_factory=dict)
    fallbacks: Dict[str, Any] = field(default_factory=dict)

    def apply(self, line: str, converters: Optional[Converters] = None) -> Optional[Dict[str, Any]]:
        match = self.pattern.search(line)
        if match is None:
            return None

        record: Dict[str, Any] = dict(self.defaults)
        for targets, raw in zip(self.fields, match.groups()):
            if raw is None:
                continue
            for target in (targets,) if isinstance(targets, str) else targets:
                value: Any = raw.strip()
                convert = (converters or {}).get(target)
                if convert is not None:
                    value = convert(value)
                if not value and target in self.fallbacks:
                    value = self.fallbacks[target]
                record[target] = value
        return record


def first_match(
    strategies: Iterable[LineStrategy],
    line: str,
    converters: Optional[Converters] = None,
) -> Optional[Tuple[str, Dict[str, Any]]]:
    """
    Try the strategies in order and return (strategy name, record) of the first hit.
    """
    for strategy in strategies:
        record = strategy.apply(line, converters)
        if record is not None:
            logger.debug("line %r matched %s", line, strategy.name)
            return strategy.name, record
    return None


def compile_pattern(pattern: str, ignore_case: bool = False) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE if ignore_case else 0)
