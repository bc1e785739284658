"""Embedding directives: content, slots, segments, components and articles.

Provides the mixin that splices one template into another. Uses inline
TYPE_CHECKING declarations for host attributes.

Inner content (the directive's children other than ``tg:insert``) is
rendered in the caller's context before the callee runs; ``tg:content``
then substitutes a fresh copy of it. Inserts travel unrendered and are
rendered by ``tg:slot`` in the callee's context.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from tangram._types import TemplateKind
from tangram.analysis.articles import query_articles
from tangram.dom import Element, Node
from tangram.environment.properties import Properties, merge_properties
from tangram.environment.repository import (
    SiteData,
    Template,
    document_properties,
    get_wrapper,
)
from tangram.render_context import RenderState
from tangram.utils.html import to_kebab_case

SEGMENT_CONTAINERS = frozenset({"page", "layout", "segment", "wrapper"})
ARTICLE_CONTAINERS = frozenset({"page", "segment", "wrapper", "layout"})

SHARED_COMPONENT_PREFIX = "shared_components/"


def split_inserts(node: Element) -> tuple[dict[str, Element], list[Node]]:
    """Separate a directive's named ``tg:insert`` children from the rest."""
    inserts: dict[str, Element] = {}
    rest: list[Node] = []
    for child in node.children:
        if isinstance(child, Element) and child.name == "tg:insert":
            name = child.get("name")
            if name:
                inserts[name] = child
        else:
            rest.append(child)
    return inserts, rest


def with_data_attributes(properties: Properties, node: Element) -> Properties:
    """Copy ``data-*`` attributes of a directive into ``data``.

    ``data-user-name="x"`` becomes ``data["user-name"] = "x"``.
    """
    data = {
        to_kebab_case(name[5:]): value
        for name, value in node.attrs.items()
        if name.startswith("data-")
    }
    if not data:
        return properties
    return merge_properties(properties, {"data": data})


def _in_container(state: RenderState, allowed: frozenset[str]) -> bool:
    return state.container is not None and state.container.kind in allowed


class EmbeddingMixin:
    """Mixin for directives that embed other templates.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    # ─────────────────────────────────────────────────────────────────────────
    # Host attributes and cross-mixin dependencies (type-check only)
    # ─────────────────────────────────────────────────────────────────────────
    if TYPE_CHECKING:
        _data: SiteData

        def render_children(
            self, nodes: Sequence[Node], properties: Properties, state: RenderState
        ) -> list[Node]: ...
        def _error(self, node: Element) -> list[Node]: ...

    def _render_content(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:content>``: the inner content handed down by the caller."""
        if state.inner_content is None:
            return self._error(node)
        return [child.clone() for child in state.inner_content]

    def _render_slot(self, node: Element, properties: Properties, state: RenderState) -> list[Node]:
        """``<tg:slot name="x">``: matching insert, else the default children."""
        insert = state.inserts.get(node.get("name") or "")
        source = insert if insert is not None else node
        return self.render_children(source.children, properties, state)

    def _embed_template(
        self,
        template: Template,
        node: Element,
        properties: Properties,
        caller_state: RenderState,
        callee_state: RenderState,
    ) -> list[Node]:
        local_properties = with_data_attributes(
            merge_properties(properties, template.front_matter), node
        )
        inserts, rest = split_inserts(node)
        inner_content = self.render_children(rest, properties, caller_state)
        local_state = callee_state.enter(template, inner_content, inserts)
        return self.render_children(template.dom.children, local_properties, local_state)

    def _render_segment(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        name = node.get("name") or ""
        if name in state.segment_stack or not _in_container(state, SEGMENT_CONTAINERS):
            return self._error(node)
        segment = self._data.get(f"segments/{name}.html")
        if segment is None or segment.kind is not TemplateKind.SEGMENT:
            return self._error(node)
        return self._embed_template(segment, node, properties, state, state.with_segment(name))

    def _render_component(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        name = node.get("name") or ""
        if name in state.component_stack:
            return self._error(node)
        # Shared components are self-contained: no ordinary component below one.
        if any(entry.startswith(SHARED_COMPONENT_PREFIX) for entry in state.component_stack):
            return self._error(node)
        component = self._data.get(f"components/{name}.html")
        if component is None:
            return self._error(node)
        return self._embed_template(
            component, node, properties, state, state.with_component(name)
        )

    def _render_shared_component(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        name = SHARED_COMPONENT_PREFIX + (node.get("name") or "")
        if name in state.component_stack:
            return self._error(node)
        component = self._data.get(f"{name}.html")
        if component is None:
            return self._error(node)
        return self._embed_template(
            component, node, properties, state, state.with_component(name)
        )

    # =========================================================================
    # Articles
    # =========================================================================

    def _render_article(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:article name="x">``: embed ``articles/x.html``."""
        if not _in_container(state, ARTICLE_CONTAINERS):
            return self._error(node)
        article = self._data.get(f"articles/{node.get('name') or ''}.html")
        if article is None or article.path in state.article_stack:
            return self._error(node)
        if not self._data.is_visible(article):
            return []
        return self._embed_article(article, node, properties, state)

    def _render_articles(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:articles pattern="blog/*">``: embed every matching article."""
        if not _in_container(state, ARTICLE_CONTAINERS):
            return self._error(node)
        articles = query_articles(
            self._data.articles,
            pattern=node.get("pattern"),
            filter_value=node.get("filter"),
            order_by=node.get("order-by"),
            include_drafts=self._data.options.build_drafts,
        )
        result: list[Node] = []
        for article in articles:
            if article.path in state.article_stack:
                result.extend(self._error(node))
            else:
                result.extend(self._embed_article(article, node, properties, state))
        return result

    def _embed_article(
        self,
        article: Template,
        node: Element,
        properties: Properties,
        state: RenderState,
    ) -> list[Node]:
        """Render *article* (and its wrapper) in place of *node*.

        The article sees its own document properties plus the directive's
        ``data-*`` attributes. Widget items keep numbering across
        consecutive embeds because the item counter is shared.
        """
        inserts, rest = split_inserts(node)
        inner_content = self.render_children(rest, properties, state)

        wrapper = get_wrapper(self._data, article)
        article_properties = with_data_attributes(
            document_properties(article, wrapper, None, self._data.properties), node
        )
        embedded_state = state.with_article(article.path)
        content = self.render_children(
            article.dom.children,
            article_properties,
            embedded_state.enter(article, inner_content, inserts),
        )
        if wrapper is None:
            return content
        return self.render_children(
            wrapper.dom.children,
            article_properties,
            embedded_state.enter(wrapper, content, article.inserts),
        )

    def _render_if_embedded(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        if state.container is None or not state.container.is_article:
            return self._error(node)
        if state.path == state.container.path:
            return []
        return self.render_children(node.children, properties, state)

    def _render_unless_embedded(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        if state.container is None or not state.container.is_article:
            return self._error(node)
        if state.path != state.container.path:
            return []
        return self.render_children(node.children, properties, state)
