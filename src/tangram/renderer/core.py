"""Renderer core: directive dispatch and generic element handling.

The Renderer rewrites a template's DOM into output nodes. Every node maps
to zero or more output nodes; directive elements (``tg:*``) are expanded
through a closed dispatch table, everything else is copied with its
attributes interpolated and its children rendered recursively.

Directive handlers live in mixins grouped by concern:

- EmbeddingMixin: content, slots, segments, components, articles
- PropertyDirectiveMixin: prop, data, if-complete
- LinkDirectiveMixin: link, links, label, if-current, ``<a href="#">``
- MediaDirectiveMixin: animation, symbol, app, plugin

Rendering never raises on a well-formed tree. An unresolvable directive
is replaced by an inline error marker and the rest of the document still
builds.

Example:
    >>> renderer = Renderer(site_data, SymbolTable.load())
    >>> html = to_document_html(renderer.render_document(site_data.get("pages/index.html")))

"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from tangram.dom import Document, Element, Node
from tangram.environment.properties import Properties, format_value, section
from tangram.environment.repository import (
    SiteData,
    Template,
    document_properties,
    get_layout,
    get_wrapper,
)
from tangram.render_context import RenderState
from tangram.renderer.data import PropertyDirectiveMixin
from tangram.renderer.embedding import EmbeddingMixin
from tangram.renderer.errors import error_marker
from tangram.renderer.head import build_head
from tangram.renderer.links import LinkDirectiveMixin
from tangram.renderer.media import MediaDirectiveMixin
from tangram.renderer.postprocess import postprocess
from tangram.renderer.widgets import apply_roles, install_hook
from tangram.symbols import SymbolTable

logger = logging.getLogger(__name__)

DirectiveHandler = Callable[[Element, Properties, RenderState], list[Node]]

_INTERPOLATION_RE = re.compile(r"\$\{(\w+(?:-\w+)*)\}")

# Reactive attributes written by hand in a template are dropped; only
# widget codegen may produce them.
_PURGED_ATTRIBUTE_RE = re.compile(r"^(on|x-|:|@)")


def interpolate(value: str, data: Mapping[str, Any]) -> str:
    """Expand ``${name}`` against *data*; unknown names are kept as written.

    Example:
        >>> interpolate("card-${color}", {"color": "red"})
        'card-red'
    """

    def replace(match: re.Match[str]) -> str:
        resolved = data.get(match.group(1))
        return match.group(0) if resolved is None else format_value(resolved)

    return _INTERPOLATION_RE.sub(replace, value)


class Renderer(
    EmbeddingMixin,
    PropertyDirectiveMixin,
    LinkDirectiveMixin,
    MediaDirectiveMixin,
):
    """Render templates of one SiteData snapshot.

    Attributes:
        _data: The site being rendered (read-only during a render)
        _symbols: Material Symbols name → codepoint table
        _dispatch: Directive element name → handler

    """

    __slots__ = ("_data", "_dispatch", "_symbols")

    def __init__(self, data: SiteData, symbols: SymbolTable) -> None:
        self._data = data
        self._symbols = symbols
        self._dispatch: dict[str, DirectiveHandler] = {
            "tg:content": self._render_content,
            "tg:segment": self._render_segment,
            "tg:component": self._render_component,
            "tg:shared-component": self._render_shared_component,
            "tg:slot": self._render_slot,
            "tg:prop": self._render_prop,
            "tg:data": self._render_data,
            "tg:if-complete": self._render_if_complete,
            "tg:article": self._render_article,
            "tg:articles": self._render_articles,
            "tg:if-embedded": self._render_if_embedded,
            "tg:unless-embedded": self._render_unless_embedded,
            "tg:link": self._render_link,
            "tg:links": self._render_links,
            "tg:if-current": self._render_if_current,
            "tg:label": self._render_label,
            "tg:animation": self._render_animation,
            "tg:symbol": self._render_symbol,
            "tg:plugin": self._render_plugin,
            "tg:app": self._render_app,
            "a": self._render_anchor,
        }

    @property
    def data(self) -> SiteData:
        return self._data

    # =========================================================================
    # Node rendering
    # =========================================================================

    def render(self, node: Node, properties: Properties, state: RenderState) -> list[Node]:
        """Render one source node into zero or more output nodes."""
        if not isinstance(node, Element):
            return [node.clone()]
        handler = self._dispatch.get(node.name, self._render_element)
        return handler(node, properties, state)

    def render_children(
        self, nodes: Sequence[Node], properties: Properties, state: RenderState
    ) -> list[Node]:
        result: list[Node] = []
        for node in nodes:
            result.extend(self.render(node, properties, state))
        return result

    def _render_element(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """Copy an ordinary element and render its children.

        Widget roots and roles on the copy are translated here (pass 1).
        Roles are read against the incoming state, so a widget root never
        plays a role in its own widget.
        """
        data = section(properties, "data")
        attrs = {
            name: interpolate(value, data)
            for name, value in node.attrs.items()
            if not _PURGED_ATTRIBUTE_RE.match(name)
        }
        element = Element(node.name, attrs)
        child_state = install_hook(element, state)
        apply_roles(element, state)
        element.children = self.render_children(node.children, properties, child_state)
        return [element]

    def _error(self, node: Element) -> list[Node]:
        return [error_marker(node)]

    # =========================================================================
    # Documents
    # =========================================================================

    def render_document(self, template: Template) -> Document:
        """Render a page or article into a complete HTML document.

        The template's content goes into its wrapper's ``tg:content``, and
        the result into its layout's. A layout supplies its own ``<body>``;
        otherwise the content is placed in one.
        """
        wrapper = get_wrapper(self._data, template)
        layout = get_layout(self._data, template, wrapper)
        properties = document_properties(template, wrapper, layout, self._data.properties)
        state = RenderState(path=template.path)

        nodes = self.render_children(template.dom.children, properties, state.enter(template))
        for outer in (wrapper, layout):
            if outer is not None:
                outer_state = state.enter(outer, nodes, template.inserts)
                nodes = self.render_children(outer.dom.children, properties, outer_state)
        nodes = postprocess(nodes)

        head = build_head(
            properties,
            self._data.icons,
            for_distribution=self._data.options.for_distribution,
        )
        html_attrs: dict[str, str] = {}
        html_class = section(properties, "main").get("html-class")
        if isinstance(html_class, str):
            html_attrs["class"] = html_class
        if layout is None:
            body: list[Node] = [Element("body", {}, nodes)]
        else:
            body = nodes
        logger.debug(
            f"Rendered {template.path} "
            f"(wrapper={wrapper.path if wrapper else None}, "
            f"layout={layout.path if layout else None})"
        )
        return Document([Element("html", html_attrs, [head, *body])])
