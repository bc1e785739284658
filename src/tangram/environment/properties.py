"""Front matter and document properties.

Properties are plain nested dicts parsed from TOML. The sections consumed by
the renderer are ``main`` (title, html-class, root-url, layout, wrapper,
index, tags, draft, embedded-only and arbitrary scalars), ``data``, ``meta``,
``link``, ``links``, ``font``, ``stylesheets`` and ``javascripts``.

Merging is always copy-on-write: ``merge_properties`` returns fresh dicts
and never mutates its inputs, so a template's front matter stays read-only
no matter how many documents inherit from it.
"""

from __future__ import annotations

import datetime
import re
import tomllib
from collections.abc import Mapping
from typing import Any

from tangram.dom import Document, find_by_name, text_content
from tangram.environment.exceptions import ErrorCode, FrontMatterError, SiteConfigError

Properties = dict[str, Any]

DEFAULT_SITE_PROPERTIES: Properties = {
    "main": {
        "scheme": "http",
        "host": "localhost",
        "port": 3000,
    }
}

_FENCE = "---"
_TOML_LINE_RE = re.compile(r"line (\d+)")


def merge_properties(base: Mapping[str, Any], override: Mapping[str, Any]) -> Properties:
    """Recursively merge *override* over *base*.

    Mappings are merged key by key; lists and scalars in *override* replace
    the value in *base*.

    Example:
        >>> merge_properties({"main": {"a": 1, "b": 2}}, {"main": {"b": 3}})
        {'main': {'a': 1, 'b': 3}}
    """
    merged: Properties = {}
    for key, value in base.items():
        merged[key] = _copy_value(value)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = merge_properties(current, value)
        else:
            merged[key] = _copy_value(value)
    return merged


def _copy_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return merge_properties({}, value)
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


def section(properties: Mapping[str, Any], name: str) -> dict[str, Any]:
    """Return a mapping section of *properties*, or an empty dict."""
    value = properties.get(name)
    return value if isinstance(value, dict) else {}


def normalize_site_properties(properties: Properties) -> Properties:
    """Fill in ``main.root-url`` from scheme, host and port when absent."""
    normalized = merge_properties({}, properties)
    main = normalized.setdefault("main", {})
    if not isinstance(main.get("root-url"), str):
        scheme = main.get("scheme", "http")
        host = main.get("host", "localhost")
        port = main.get("port")
        default_port = {"http": 80, "https": 443}.get(scheme)
        if port is None or port == default_port:
            main["root-url"] = f"{scheme}://{host}/"
        else:
            main["root-url"] = f"{scheme}://{host}:{port}/"
    elif not main["root-url"].endswith("/"):
        main["root-url"] += "/"
    return normalized


def split_front_matter(source: str, filename: str | None = None) -> tuple[Properties, str]:
    """Split a template source into (front matter, body).

    Front matter is a TOML block fenced by ``---`` lines at the very start
    of the file. Sources without a fence have empty front matter.

    Raises:
        FrontMatterError: If the fence is unclosed or the TOML is invalid
    """
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FENCE:
        return {}, source

    for index in range(1, len(lines)):
        if lines[index].strip() == _FENCE:
            toml_source = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return _parse_toml(toml_source, filename, source), body

    raise FrontMatterError(
        "Front matter is not closed with '---'",
        filename=filename,
        lineno=1,
        source=source,
        code=ErrorCode.UNCLOSED_FRONT_MATTER,
    )


def _parse_toml(toml_source: str, filename: str | None, source: str) -> Properties:
    try:
        return tomllib.loads(toml_source)
    except tomllib.TOMLDecodeError as e:
        match = _TOML_LINE_RE.search(str(e))
        # +1 for the opening fence
        lineno = int(match.group(1)) + 1 if match else None
        raise FrontMatterError(
            f"Invalid front matter: {e}", filename=filename, lineno=lineno, source=source
        ) from e


def parse_site_config(source: str, filename: str | None = None) -> Properties:
    """Parse ``site.toml``."""
    try:
        return tomllib.loads(source)
    except tomllib.TOMLDecodeError as e:
        match = _TOML_LINE_RE.search(str(e))
        raise SiteConfigError(
            f"Invalid site configuration: {e}",
            filename=filename or "site.toml",
            lineno=int(match.group(1)) if match else None,
            source=source,
        ) from e


def strip_front_matter(source: str) -> str:
    """Return the body of *source* without parsing its front matter."""
    lines = source.splitlines(keepends=True)
    if not lines or lines[0].strip() != _FENCE:
        return source
    for index in range(1, len(lines)):
        if lines[index].strip() == _FENCE:
            return "".join(lines[index + 1 :])
    return source


def format_value(value: Any) -> str:
    """Format a property value as plain (unescaped) text.

    TOML dates render as ``YYYY-MM-DD``, local times as ``HH:MM:SS`` and
    offset date-times as a UTC timestamp with millisecond precision
    (``2024-05-01T09:30:00.000Z``). Booleans are lowercased as in TOML.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            return value.isoformat(timespec="seconds")
        utc = value.astimezone(datetime.UTC)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, datetime.time):
        return value.strftime("%H:%M:%S")
    return str(value)


def get_title(properties: Mapping[str, Any], dom: Document) -> str | None:
    """Document title: ``main.title``, else the text of the first heading.

    Headings are searched by level, so an ``h2`` early in the document loses
    to an ``h1`` further down.
    """
    title = section(properties, "main").get("title")
    if isinstance(title, str):
        return title
    for level in range(1, 7):
        heading = find_by_name(f"h{level}", dom.children)
        if heading is not None:
            return text_content(heading).strip()
    return None
