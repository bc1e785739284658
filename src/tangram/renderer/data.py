"""Property directives: ``tg:prop``, ``tg:data`` and ``tg:if-complete``."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from tangram.dom import Element, Node, Text, find_all
from tangram.environment.properties import Properties, format_value, section
from tangram.render_context import RenderState
from tangram.utils.html import html_escape

_PLACEHOLDER_NAMES = frozenset({"tg:prop", "tg:data", "tg:slot"})


def _is_placeholder(element: Element) -> bool:
    return element.name in _PLACEHOLDER_NAMES


class PropertyDirectiveMixin:
    """Mixin for directives that read document properties.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    if TYPE_CHECKING:

        def render_children(
            self, nodes: Sequence[Node], properties: Properties, state: RenderState
        ) -> list[Node]: ...

    def _render_prop(self, node: Element, properties: Properties, state: RenderState) -> list[Node]:
        """``<tg:prop name="x">``: ``main.x`` as text, else the children."""
        value = section(properties, "main").get(node.get("name") or "")
        if not value:
            return self.render_children(node.children, properties, state)
        return [Text(html_escape(format_value(value)))]

    def _render_data(self, node: Element, properties: Properties, state: RenderState) -> list[Node]:
        """``<tg:data name="x">``: ``data.x`` as text, else the children.

        Dates, times and date-times are formatted as ISO 8601 text.
        """
        value = section(properties, "data").get(node.get("name") or "")
        if not value:
            return self.render_children(node.children, properties, state)
        return [Text(html_escape(format_value(value)))]

    def _render_if_complete(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """Render the children only if every placeholder inside resolves."""
        main = section(properties, "main")
        data = section(properties, "data")
        for placeholder in find_all(_is_placeholder, node.children):
            name = placeholder.get("name") or ""
            if placeholder.name == "tg:prop":
                resolved = main.get(name) is not None
            elif placeholder.name == "tg:data":
                resolved = data.get(name) is not None
            else:
                resolved = name in state.inserts
            if not resolved:
                return []
        return self.render_children(node.children, properties, state)
