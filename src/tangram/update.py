"""Incremental update engine.

Applies a single-file change to a loaded site and re-renders exactly the
documents it can affect. The change kind selects the propagation rule:

=================  =====================================================
site-config        reload everything, re-render every document
page               reload it, recompute its dependencies, re-render it
article            as page, then re-render every page or article naming it
segment            re-render pages naming it
component,         re-render articles and pages naming it
shared-component
wrapper            recompute dependents, then re-render them; a new
                   wrapper is attached to the templates in its directory
layout             as wrapper, and wrappers naming it recompute first
unrecognized       nothing
=================  =====================================================

Dependency sets are recomputed from scratch for every template touched; the
graph is never patched. A source that no longer exists is dropped and its
dependents are re-rendered against the remaining site.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from tangram._types import ChangeKind, TemplateKind
from tangram.analysis.dependencies import compute_all_dependencies, compute_dependencies
from tangram.environment.repository import (
    SiteData,
    Template,
    classify_path,
    load_template,
    normalize_path,
    wrapper_candidates,
)

if TYPE_CHECKING:
    from tangram.site import Site

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class UpdateResult:
    """Outcome of one incremental update.

    Attributes:
        kind: Classification the change was handled as
        path: Changed source path, relative to the source root
        outputs: Output path → HTML for every re-rendered document
        removed: Output paths whose source no longer produces a document
    """

    kind: ChangeKind
    path: str
    outputs: Mapping[str, str] = field(default_factory=dict)
    removed: tuple[str, ...] = ()

    @property
    def changed(self) -> bool:
        return bool(self.outputs or self.removed)


class UpdateEngine:
    """Propagate source changes through a Site's dependency sets.

    Handlers are looked up by ChangeKind; each returns the templates to
    re-render, with their dependency sets already recomputed.

    """

    __slots__ = ("_handlers", "_site")

    def __init__(self, site: Site) -> None:
        self._site = site
        self._handlers: dict[ChangeKind, Callable[[Template, bool], list[Template]]] = {
            ChangeKind.PAGE: self._page_changed,
            ChangeKind.ARTICLE: self._article_changed,
            ChangeKind.SEGMENT: self._segment_changed,
            ChangeKind.COMPONENT: self._component_changed,
            ChangeKind.SHARED_COMPONENT: self._component_changed,
            ChangeKind.WRAPPER: self._wrapper_changed,
            ChangeKind.LAYOUT: self._layout_changed,
        }

    @property
    def data(self) -> SiteData:
        return self._site.data

    def update(self, path: str, kind: ChangeKind | None = None) -> UpdateResult:
        """Handle a change of the source at *path*."""
        path = normalize_path(path)
        if kind is None:
            kind = classify_path(path)

        if kind is ChangeKind.SITE_CONFIG:
            self._site.reload()
            targets = [self.data.templates[p] for p in self._site.renderable_paths()]
            return self._render(kind, path, targets)

        template_kind = kind.template_kind
        if template_kind is None:
            logger.debug(f"Ignoring change to {path}")
            return UpdateResult(kind, path)

        if not self._site.loader.exists(path):
            return self._removed(kind, path)

        is_new = self.data.get(path) is None
        template = load_template(self._site.loader, path, template_kind, self.data.properties)
        self.data.register(template)
        if is_new:
            logger.info(f"Registered new {template_kind.value}: {path}")
        targets = self._handlers[kind](template, is_new)
        return self._render(kind, path, targets)

    # =========================================================================
    # Propagation rules
    # =========================================================================

    def _page_changed(self, page: Template, is_new: bool) -> list[Template]:
        compute_dependencies(self.data, page)
        return [page]

    def _article_changed(self, article: Template, is_new: bool) -> list[Template]:
        if is_new:
            # Pattern-based directives may now match the new article.
            compute_all_dependencies(self.data)
        else:
            compute_dependencies(self.data, article)
        return [article, *self._dependents(article.name, (self.data.pages, self.data.articles))]

    def _segment_changed(self, segment: Template, is_new: bool) -> list[Template]:
        compute_dependencies(self.data, segment)
        return self._dependents(segment.name, (self.data.pages,))

    def _component_changed(self, component: Template, is_new: bool) -> list[Template]:
        compute_dependencies(self.data, component)
        return self._dependents(component.name, (self.data.articles, self.data.pages))

    def _wrapper_changed(self, wrapper: Template, is_new: bool) -> list[Template]:
        compute_dependencies(self.data, wrapper)
        targets = self._dependents(wrapper.name, (self.data.articles, self.data.pages))
        if is_new:
            seen = {t.path for t in targets}
            for template in self._attached_to(wrapper):
                if template.path not in seen:
                    compute_dependencies(self.data, template)
                    targets.append(template)
        return targets

    def _layout_changed(self, layout: Template, is_new: bool) -> list[Template]:
        compute_dependencies(self.data, layout)
        for wrapper in self.data.wrappers:
            if layout.name in wrapper.dependencies:
                compute_dependencies(self.data, wrapper)
        return self._dependents(layout.name, (self.data.articles, self.data.pages))

    def _removed(self, kind: ChangeKind, path: str) -> UpdateResult:
        template = self.data.remove(path)
        if template is None:
            return UpdateResult(kind, path)
        logger.info(f"Removed {template.kind.value}: {path}")
        removed: tuple[str, ...] = ()
        if template.kind.renders_standalone:
            removed = (template.output_path,)
        targets = self._dependents(template.name, (self.data.pages, self.data.articles))
        result = self._render(kind, path, targets)
        return UpdateResult(kind, path, result.outputs, (*removed, *result.removed))

    # =========================================================================
    # Helpers
    # =========================================================================

    def _dependents(
        self, name: str, groups: Iterable[list[Template]]
    ) -> list[Template]:
        """Templates naming *name*, with freshly recomputed dependency sets."""
        dependents: list[Template] = []
        for group in groups:
            for template in group:
                if name in template.dependencies:
                    compute_dependencies(self.data, template)
                    dependents.append(template)
        return dependents

    def _attached_to(self, wrapper: Template) -> list[Template]:
        """Pages or articles whose wrapper lookup now reaches *wrapper*."""
        if wrapper.path.startswith("shared_wrappers/"):
            stem = wrapper.name.removeprefix("shared_wrappers/")
            return [
                template
                for template in [*self.data.pages, *self.data.articles]
                if template.main.get("wrapper") == stem
            ]
        return [
            template
            for template in [*self.data.pages, *self.data.articles]
            if "wrapper" not in template.main and wrapper.path in wrapper_candidates(template.path)
        ]

    def _render(self, kind: ChangeKind, path: str, targets: Iterable[Template]) -> UpdateResult:
        outputs: dict[str, str] = {}
        removed: list[str] = []
        for template in targets:
            if template.kind not in (TemplateKind.PAGE, TemplateKind.ARTICLE):
                continue
            html = self._site.render(template.path)
            if html is None:
                removed.append(template.output_path)
                continue
            outputs[template.output_path] = html
            logger.info(f"Rendered {template.output_path}")
        return UpdateResult(kind, path, outputs, tuple(removed))
