"""Tree queries over tangram DOM nodes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from tangram.dom.nodes import Document, Element, Node, Text
from tangram.utils.html import html_unescape


def iter_elements(nodes: Iterable[Node]) -> Iterator[Element]:
    """Yield every element below *nodes* in document order (pre-order)."""
    for node in nodes:
        if isinstance(node, Element):
            yield node
            yield from iter_elements(node.children)
        elif isinstance(node, Document):
            yield from iter_elements(node.children)


def find_all(predicate: Callable[[Element], bool], nodes: Iterable[Node]) -> list[Element]:
    """Return all elements matching *predicate*, in document order."""
    return [el for el in iter_elements(nodes) if predicate(el)]


def find(predicate: Callable[[Element], bool], nodes: Iterable[Node]) -> Element | None:
    """Return the first element matching *predicate*, or None."""
    for el in iter_elements(nodes):
        if predicate(el):
            return el
    return None


def find_by_name(name: str, nodes: Iterable[Node]) -> Element | None:
    return find(lambda el: el.name == name, nodes)


def text_content(node: Node | Iterable[Node]) -> str:
    """Concatenated, decoded text of a node and its descendants."""
    if isinstance(node, Text):
        return html_unescape(node.data)
    if isinstance(node, (Element, Document)):
        return text_content(node.children)
    if isinstance(node, Node):
        return ""
    return "".join(text_content(child) for child in node)
