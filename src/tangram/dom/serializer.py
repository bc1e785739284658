"""Serialize tangram DOM nodes back to HTML text."""

from __future__ import annotations

from tangram.dom.nodes import Comment, Document, Element, Node, Text
from tangram.utils.constants import VOID_ELEMENTS
from tangram.utils.html import attribute_escape


def _format_attrs(attrs: dict[str, str]) -> str:
    parts: list[str] = []
    for name, value in attrs.items():
        if value == "":
            parts.append(name)
        else:
            parts.append(f'{name}="{attribute_escape(value)}"')
    return "".join(" " + p for p in parts)


def _write(node: Node, buf: list[str]) -> None:
    if isinstance(node, Text):
        buf.append(node.data)
    elif isinstance(node, Element):
        buf.append(f"<{node.name}{_format_attrs(node.attrs)}>")
        if node.name in VOID_ELEMENTS:
            return
        for child in node.children:
            _write(child, buf)
        buf.append(f"</{node.name}>")
    elif isinstance(node, Comment):
        buf.append(f"<!--{node.data}-->")
    elif isinstance(node, Document):
        for child in node.children:
            _write(child, buf)


def to_html(node: Node | list[Node]) -> str:
    """Serialize a node, or a list of sibling nodes, to HTML.

    Text data is written verbatim. Attribute values are stored decoded and
    get their ampersands and double quotes escaped.

    Example:
        >>> to_html(Element("a", {"href": "/", "hidden": ""}, [Text("Home")]))
        '<a href="/" hidden>Home</a>'
    """
    buf: list[str] = []
    if isinstance(node, list):
        for n in node:
            _write(n, buf)
    else:
        _write(node, buf)
    return "".join(buf)


def to_document_html(document: Document) -> str:
    """Serialize a complete output document with its doctype."""
    return "<!DOCTYPE html>\n" + to_html(document) + "\n"
