"""Dependency analysis for incremental rebuilds.

Computes the set of template names a template references, directly or
through the templates it embeds. A name is recorded even when no template
of that name exists yet, so that adding the missing file later finds its
dependents. The result is a conservative superset: draft articles and
links whose target is never rendered still count.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from tangram.analysis.articles import query_articles
from tangram.dom import Element, Node
from tangram.environment.repository import SiteData, Template, get_wrapper


class DependencyWalker:
    """Collect dependency names by walking template DOM trees.

    Handlers are discovered from ``_visit_<directive>`` methods, with dashes
    in directive names mapped to underscores (``tg:shared-component`` →
    ``_visit_shared_component``).

    Example:
        >>> walker = DependencyWalker(site_data)
        >>> sorted(walker.analyze(site_data.get("pages/index.html")))
        ['components/card', 'layouts/default', 'pages/_wrapper']

    """

    def __init__(self, data: SiteData) -> None:
        self._data = data
        self._names: set[str] = set()
        self._visited: set[str] = set()
        self._dispatch: dict[str, Callable[[Element], None]] = {}
        for name in dir(self):
            if name.startswith("_visit_"):
                method = getattr(self, name)
                if callable(method):
                    self._dispatch["tg:" + name[7:].replace("_", "-")] = method

    def analyze(self, template: Template) -> frozenset[str]:
        """Return the names *template* depends on, transitively."""
        self._names = set()
        self._visited = {template.path}
        self._walk_template(template)
        self._names.discard(template.name)
        return frozenset(self._names)

    def _walk_template(self, template: Template) -> None:
        # Outer templates are named from front matter, so missing ones count too
        wrapper = get_wrapper(self._data, template)
        shared = template.main.get("wrapper")
        if template.kind.renders_standalone and isinstance(shared, str):
            self._reference(f"shared_wrappers/{shared}")
        elif wrapper is not None:
            self._reference(wrapper.name)
        layout = template.main.get("layout")
        if not isinstance(layout, str) and wrapper is not None:
            layout = wrapper.main.get("layout")
        if isinstance(layout, str):
            self._reference(f"layouts/{layout}")
        self._walk(template.dom.children)
        for insert in template.inserts.values():
            self._walk(insert.children)

    def _reference(self, name: str) -> None:
        self._names.add(name)
        path = name + ".html"
        if path in self._visited:
            return
        self._visited.add(path)
        template = self._data.get(path)
        if template is not None:
            self._walk_template(template)

    def _walk(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            if not isinstance(node, Element):
                continue
            handler = self._dispatch.get(node.name)
            if handler is not None:
                handler(node)
            self._walk(node.children)

    def _visit_component(self, node: Element) -> None:
        if name := node.get("name"):
            self._reference(f"components/{name}")

    def _visit_shared_component(self, node: Element) -> None:
        if name := node.get("name"):
            self._reference(f"shared_components/{name}")

    def _visit_segment(self, node: Element) -> None:
        if name := node.get("name"):
            self._reference(f"segments/{name}")

    def _visit_article(self, node: Element) -> None:
        if name := node.get("name"):
            self._reference(f"articles/{name}")

    def _visit_articles(self, node: Element) -> None:
        for article in self._query(node):
            self._reference(article.name)

    def _visit_links(self, node: Element) -> None:
        self._link_components(node)
        for article in self._query(node):
            self._names.add(article.name)

    def _visit_link(self, node: Element) -> None:
        self._link_components(node)
        href = node.get("href")
        if href is not None:
            target = self._data.find_by_url(href)
            if target is not None:
                self._names.add(target.name)
        elif node.has("pattern"):
            for article in self._query(node)[:1]:
                self._names.add(article.name)

    def _link_components(self, node: Element) -> None:
        if name := node.get("component"):
            self._reference(f"components/{name}")
        if name := node.get("shared-component"):
            self._reference(f"shared_components/{name}")

    def _query(self, node: Element) -> list[Template]:
        return query_articles(
            self._data.articles,
            pattern=node.get("pattern"),
            filter_value=node.get("filter"),
            order_by=node.get("order-by"),
            include_drafts=True,
        )


def compute_dependencies(data: SiteData, template: Template) -> frozenset[str]:
    """Recompute and store *template*'s dependency set from scratch."""
    template.dependencies = DependencyWalker(data).analyze(template)
    return template.dependencies


def compute_all_dependencies(data: SiteData) -> None:
    walker = DependencyWalker(data)
    for template in data.templates.values():
        template.dependencies = walker.analyze(template)
