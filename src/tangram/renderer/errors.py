"""Inline error markers for directives that cannot be resolved."""

from __future__ import annotations

import logging

from tangram.dom import Element, Text, to_html
from tangram.utils.constants import ERROR_MARKER_CLASS
from tangram.utils.html import html_escape

logger = logging.getLogger(__name__)


def error_marker(node: Element) -> Element:
    """Replace *node* with a visible marker showing its escaped source.

    Example:
        >>> to_html(error_marker(Element("tg:component", {"name": "x"})))
        '<span class="inline-block bg-error text-black m-1 py-1 px-2">&lt;tg:component name=&quot;x&quot;&gt;&lt;/tg:component&gt;</span>'
    """
    source = to_html(node)
    logger.debug(f"Unresolved directive: {source}")
    return Element("span", {"class": ERROR_MARKER_CLASS}, [Text(html_escape(source))])
