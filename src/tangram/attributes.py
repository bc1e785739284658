"""Decoders for the small languages embedded in directive attributes.

Each decoder turns an attribute value (or name) into a typed record once,
so the renderer and the widget codegen never match regular expressions at
the point of use. Decoders return None for input that does not parse;
callers treat that as "attribute absent".

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

_INT_PREFIX_RE = re.compile(r"\s*([+-]?\d+)")
_ORDER_BY_RE = re.compile(r"^(index):(asc|desc)$")
_FILTER_RE = re.compile(r"^(tag):(.+)$")
_TRAM_TRIGGER_RE = re.compile(r"^tg:(forward|backward)-(\d{1,3})(|%|vh|px)(|\+|-)$")
_SCHEDULER_STEP_RE = re.compile(r"^tg:(\d+)$")


def parse_int(value: str | None) -> int | None:
    """Parse a leading decimal integer, ignoring trailing text.

    Example:
        >>> parse_int("300ms")
        300
        >>> parse_int("abc") is None
        True
    """
    if value is None:
        return None
    match = _INT_PREFIX_RE.match(value)
    return int(match.group(1)) if match else None


@dataclass(frozen=True, slots=True)
class OrderBy:
    """``order-by="index:asc"`` / ``order-by="index:desc"``."""

    key: str
    descending: bool

    @classmethod
    def parse(cls, value: str | None) -> OrderBy | None:
        match = _ORDER_BY_RE.match(value or "")
        if match is None:
            return None
        return cls(match.group(1), match.group(2) == "desc")


@dataclass(frozen=True, slots=True)
class TagFilter:
    """``filter="tag:NAME"``."""

    tag: str

    @classmethod
    def parse(cls, value: str | None) -> TagFilter | None:
        match = _FILTER_RE.match(value or "")
        return cls(match.group(2)) if match else None


@dataclass(frozen=True, slots=True)
class TramTrigger:
    """``tg:forward-50%+="classes"`` on an element inside a tram widget.

    Attributes:
        direction: ``forward`` or ``backward``
        distance: Scroll distance, 0-999
        unit: ``""``, ``%``, ``vh`` or ``px``
        suffix: ``""``, ``+`` or ``-``
        value: The attribute value (class tokens)
    """

    direction: str
    distance: int
    unit: str
    suffix: str
    value: str

    @classmethod
    def parse(cls, name: str, value: str) -> TramTrigger | None:
        match = _TRAM_TRIGGER_RE.match(name)
        if match is None:
            return None
        direction, distance, unit, suffix = match.groups()
        return cls(direction, int(distance), unit, suffix, value)

    @property
    def data_attribute(self) -> str:
        return f"data-tram-{self.direction}-{self.distance}{self.unit}{self.suffix}"


@dataclass(frozen=True, slots=True)
class SchedulerStep:
    """``tg:1500="classes"`` on a scheduler root."""

    time: str
    value: str

    @classmethod
    def parse(cls, name: str, value: str) -> SchedulerStep | None:
        match = _SCHEDULER_STEP_RE.match(name)
        return cls(match.group(1), value) if match else None

    @property
    def data_attribute(self) -> str:
        return f"data-scheduler-{self.time}"


@lru_cache(maxsize=256)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a path glob.

    ``*`` and ``?`` never cross ``/``; ``**`` crosses any number of
    directories, and ``**/`` may also match none.

    Example:
        >>> bool(glob_to_regex("blog/**/*").fullmatch("blog/2024/05/a"))
        True
    """
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        if pattern.startswith("**/", i):
            parts.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile("".join(parts))
