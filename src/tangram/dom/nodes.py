"""Mutable DOM nodes for tangram templates.

Every template owns its tree exclusively. The renderer never mutates a
template's tree: it builds fresh elements for its output and deep-copies
any source subtree it splices into another position (``clone()``).
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Node:
    """Base class for all DOM nodes."""

    def clone(self) -> Node:
        raise NotImplementedError


@dataclass(slots=True)
class Text(Node):
    """Text content.

    ``data`` is markup-ready: parsed text is re-escaped by the parser and
    values inserted by the renderer are escaped beforehand.
    """

    data: str

    def clone(self) -> Text:
        return Text(self.data)


@dataclass(slots=True)
class Comment(Node):
    """HTML comment: <!-- data -->"""

    data: str

    def clone(self) -> Comment:
        return Comment(self.data)


@dataclass(slots=True)
class Element(Node):
    """An element with ordered attributes and children.

    Attributes:
        name: Lowercased tag name (``div``, ``tg:component``)
        attrs: Attribute name → unescaped value ("" for bare attributes)
        children: Child nodes in document order
    """

    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def clone(self) -> Element:
        return Element(self.name, dict(self.attrs), [c.clone() for c in self.children])

    def shallow_copy(self) -> Element:
        """Copy name and attributes, leaving children empty."""
        return Element(self.name, dict(self.attrs))

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attrs.get(name, default)

    def has(self, name: str) -> bool:
        return name in self.attrs


@dataclass(slots=True)
class Document(Node):
    """Root of a parsed fragment or a complete output document."""

    children: list[Node] = field(default_factory=list)

    def clone(self) -> Document:
        return Document([c.clone() for c in self.children])
