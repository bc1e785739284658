"""HTML escaping helpers.

Text nodes in the tangram DOM always hold markup-ready data, so anything
that turns an arbitrary value into a text node goes through ``html_escape``.
"""

from __future__ import annotations

import html
import re

# Single-pass escaping via str.translate()
_ESCAPE_TABLE = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#39;",
    }
)

# Attribute values are always emitted double-quoted
_ATTRIBUTE_ESCAPE_TABLE = str.maketrans({"&": "&amp;", '"': "&quot;"})

_CAMEL_BOUNDARY_RE = re.compile(r"([a-z])([A-Z])")


def html_escape(value: object) -> str:
    """Escape a value for inclusion in HTML text or attribute content.

    Example:
        >>> html_escape('<tg:component name="x">')
        '&lt;tg:component name=&quot;x&quot;&gt;'
    """
    return str(value).translate(_ESCAPE_TABLE)


def attribute_escape(value: str) -> str:
    """Escape a decoded attribute value for a double-quoted attribute.

    Example:
        >>> attribute_escape('a && "b"')
        'a &amp;&amp; &quot;b&quot;'
    """
    return value.translate(_ATTRIBUTE_ESCAPE_TABLE)


def html_unescape(value: str) -> str:
    """Decode character references in markup-ready text."""
    return html.unescape(value)


def js_quote(value: str) -> str:
    """Escape single quotes for embedding inside a '...' JavaScript string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def to_kebab_case(name: str) -> str:
    """Convert ``camelCase`` to ``camel-case``; other input is only lowercased."""
    return _CAMEL_BOUNDARY_RE.sub(r"\1-\2", name).lower()
