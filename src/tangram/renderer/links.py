"""Link directives: ``tg:link``, ``tg:links``, ``tg:label`` and ``<a href="#">``.

A link directive resolves a target (a page or article URL), then renders
its children with the target recorded in the state. Inside, every
``<a href="#">`` points at the target and ``tg:label`` prints its label.

When the target is the document being rendered, the children are replaced
by the content of their ``tg:if-current`` element (or nothing).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from tangram.analysis.articles import query_articles
from tangram.dom import Element, Node, Text, find_by_name
from tangram.environment.properties import Properties, get_title
from tangram.environment.repository import (
    SiteData,
    Template,
    document_properties,
    get_wrapper,
    url_for,
)
from tangram.render_context import RenderState
from tangram.utils.html import html_escape


class LinkDirectiveMixin:
    """Mixin for link directives.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    if TYPE_CHECKING:
        _data: SiteData

        def render_children(
            self, nodes: Sequence[Node], properties: Properties, state: RenderState
        ) -> list[Node]: ...
        def _render_element(
            self, node: Element, properties: Properties, state: RenderState
        ) -> list[Node]: ...
        def _error(self, node: Element) -> list[Node]: ...

    def _render_link(self, node: Element, properties: Properties, state: RenderState) -> list[Node]:
        """``<tg:link href="/about.html">`` or ``<tg:link pattern="blog/*">``.

        Without ``href`` the first article matching ``pattern`` (and
        ``filter``/``order-by``) is the target. Links to drafts render
        nothing unless drafts are built.
        """
        href = node.get("href")
        if href is None:
            matches = query_articles(
                self._data.articles,
                pattern=node.get("pattern"),
                filter_value=node.get("filter"),
                order_by=node.get("order-by"),
                include_drafts=self._data.options.build_drafts,
            )
            if not matches:
                return self._error(node)
            href = matches[0].url

        target = self._data.find_by_url(href)
        if target is not None and not self._data.is_visible(target):
            return []

        label = node.get("label")
        if label is None and target is not None:
            label = get_title(target.front_matter, target.dom)

        link_state = state.for_link("link", href, label)
        is_current = href == url_for(state.path)
        return self._render_link_body(node, properties, link_state, is_current)

    def _render_links(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:links pattern="blog/*">``: the link body once per article."""
        if state.container is None or state.container.kind == "links":
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
            article_properties = self._article_properties(article)
            title = article_properties["main"].get("title")
            link_state = state.for_link(
                "links",
                article.url,
                title if isinstance(title, str) else None,
                article.inserts,
            )
            nodes = self._render_link_body(
                node, article_properties, link_state, article.path == state.path
            )
            result.extend(n for n in nodes if isinstance(n, Element))
        return result

    def _article_properties(self, article: Template) -> Properties:
        wrapper = get_wrapper(self._data, article)
        return document_properties(article, wrapper, None, self._data.properties)

    def _link_children(self, node: Element) -> list[Node]:
        """The link body: a named component's content, else the children."""
        if name := node.get("component"):
            component = self._data.get(f"components/{name}.html")
            if component is not None:
                return component.dom.children
        elif name := node.get("shared-component"):
            component = self._data.get(f"shared_components/{name}.html")
            if component is not None:
                return component.dom.children
        return node.children

    def _render_link_body(
        self,
        node: Element,
        properties: Properties,
        state: RenderState,
        is_current: bool,
    ) -> list[Node]:
        children = self._link_children(node)
        if is_current:
            fallback = find_by_name("tg:if-current", children)
            if fallback is None:
                return []
            return self.render_children(fallback.children, properties, state)
        return self.render_children(children, properties, state)

    def _render_if_current(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        # Only reached outside the current-page case, where it renders nothing.
        return []

    def _render_label(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        if state.container is None or not state.container.is_link:
            return self._error(node)
        if not state.label:
            return []
        return [Text(html_escape(state.label))]

    def _render_anchor(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<a href="#">`` inside a link points at the link's target."""
        result = self._render_element(node, properties, state)
        if node.get("href") == "#" and state.target_path is not None:
            for element in result:
                if isinstance(element, Element):
                    element.attrs["href"] = state.target_path
        return result
