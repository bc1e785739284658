"""Template repository: typed templates loaded from a site's sources.

A site's source tree is laid out by category::

    site.toml
    pages/**.html            pages/**/_wrapper.html
    articles/**.html         articles/**/_wrapper.html
    layouts/*.html           shared_wrappers/*.html
    segments/*.html          components/*.html
    shared_components/*.html icons/*

Every template is keyed by its path relative to the source root. Names used
by directives and dependency sets are the same paths without ``.html``
(``components/card``, ``articles/blog/first``).
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tangram._types import ChangeKind, TemplateKind
from tangram.dom import Document, Element, parse_html
from tangram.environment.exceptions import FrontMatterError, SiteConfigError
from tangram.environment.properties import (
    DEFAULT_SITE_PROPERTIES,
    Properties,
    get_title,
    merge_properties,
    normalize_site_properties,
    parse_site_config,
    section,
    split_front_matter,
    strip_front_matter,
)
from tangram.utils.constants import ICON_FILES

if TYPE_CHECKING:
    from tangram.environment.loaders import Loader
    from tangram.site import SiteOptions

logger = logging.getLogger(__name__)

SITE_CONFIG = "site.toml"
WRAPPER_FILENAME = "_wrapper.html"

# Directory prefix → kind. Wrappers are recognized before this table.
_CATEGORY_PREFIXES: tuple[tuple[str, TemplateKind], ...] = (
    ("pages/", TemplateKind.PAGE),
    ("articles/", TemplateKind.ARTICLE),
    ("layouts/", TemplateKind.LAYOUT),
    ("shared_wrappers/", TemplateKind.WRAPPER),
    ("segments/", TemplateKind.SEGMENT),
    ("components/", TemplateKind.COMPONENT),
    ("shared_components/", TemplateKind.SHARED_COMPONENT),
)


@dataclass(slots=True)
class Template:
    """A loaded template source.

    ``dom``, ``front_matter``, ``inserts`` and ``dependencies`` are replaced
    wholesale when the source changes; the renderer treats all of them as
    read-only.

    Attributes:
        kind: Template category
        path: Source path relative to the source root
        dom: Parsed body (front matter removed, inserts lifted)
        front_matter: Parsed TOML front matter
        inserts: Top-level ``tg:insert`` elements of a page or article by name
        dependencies: Names of templates this one references, transitively
    """

    kind: TemplateKind
    path: str
    dom: Document
    front_matter: Properties = field(default_factory=dict)
    inserts: dict[str, Element] = field(default_factory=dict)
    dependencies: frozenset[str] = frozenset()

    @property
    def name(self) -> str:
        """Dependency name: the path without its ``.html`` suffix."""
        return self.path.removesuffix(".html")

    @property
    def main(self) -> dict[str, Any]:
        return section(self.front_matter, "main")

    @property
    def is_draft(self) -> bool:
        return self.main.get("draft") is True

    @property
    def embedded_only(self) -> bool:
        return self.main.get("embedded-only") is True

    @property
    def url(self) -> str:
        return url_for(self.path)

    @property
    def output_path(self) -> str:
        return output_path_for(self.path)


@dataclass(slots=True)
class SiteData:
    """Every template of a site plus site-wide properties and options.

    Mutated only by the update engine, between renders.
    """

    properties: Properties
    options: SiteOptions
    templates: dict[str, Template] = field(default_factory=dict)
    icons: tuple[str, ...] = ()

    def get(self, path: str) -> Template | None:
        return self.templates.get(path)

    def of_kind(self, kind: TemplateKind) -> list[Template]:
        """Templates of one kind, ordered by path."""
        return sorted(
            (t for t in self.templates.values() if t.kind is kind), key=lambda t: t.path
        )

    @property
    def pages(self) -> list[Template]:
        return self.of_kind(TemplateKind.PAGE)

    @property
    def articles(self) -> list[Template]:
        return self.of_kind(TemplateKind.ARTICLE)

    @property
    def wrappers(self) -> list[Template]:
        return self.of_kind(TemplateKind.WRAPPER)

    def register(self, template: Template) -> None:
        self.templates[template.path] = template

    def remove(self, path: str) -> Template | None:
        return self.templates.pop(path, None)

    def find_by_url(self, url: str) -> Template | None:
        """Page or article published at *url* (``/``, ``/about.html``)."""
        if url.endswith("/"):
            candidates = (url, url + "index.html")
        else:
            candidates = (url,)
        for template in self.templates.values():
            if template.kind.renders_standalone and template.url in candidates:
                return template
        return None

    def is_visible(self, template: Template) -> bool:
        """False for drafts unless drafts are being built."""
        return self.options.build_drafts or not template.is_draft


# =============================================================================
# Paths
# =============================================================================


def normalize_path(path: str) -> str:
    """POSIX path relative to the source root (strips a leading ``src/``)."""
    posix = path.replace("\\", "/").lstrip("/")
    return posix.removeprefix("src/")


def classify_path(path: str) -> ChangeKind:
    """Classify a changed source path.

    Example:
        >>> classify_path("src/pages/docs/_wrapper.html")
        <ChangeKind.WRAPPER: 'wrapper'>
    """
    path = normalize_path(path)
    if path == SITE_CONFIG:
        return ChangeKind.SITE_CONFIG
    if not path.endswith(".html"):
        return ChangeKind.UNRECOGNIZED
    if posixpath.basename(path) == WRAPPER_FILENAME and path.startswith(("pages/", "articles/")):
        return ChangeKind.WRAPPER
    for prefix, kind in _CATEGORY_PREFIXES:
        if path.startswith(prefix):
            return ChangeKind(kind.value)
    return ChangeKind.UNRECOGNIZED


def url_for(path: str) -> str:
    """Public URL of a page or article.

    ``pages/index.html`` → ``/``, ``pages/docs/index.html`` → ``/docs/``,
    ``pages/about.html`` → ``/about.html``,
    ``articles/blog/a.html`` → ``/articles/blog/a.html``.
    """
    url = "/" + output_path_for(path)
    if url == "/index.html" or url.endswith("/index.html"):
        return url.removesuffix("index.html")
    return url


def output_path_for(path: str) -> str:
    """Output file path relative to the distribution directory."""
    return path.removeprefix("pages/")


# =============================================================================
# Loading
# =============================================================================


def load_template(
    loader: Loader,
    path: str,
    kind: TemplateKind,
    site_properties: Properties | None = None,
) -> Template:
    """Load one template through *loader*.

    Front matter errors are logged and the template is loaded with empty
    front matter.

    Raises:
        TemplateNotFoundError: If the loader has no such source
    """
    source, filename = loader.get_source(path)
    try:
        front_matter, body = split_front_matter(source, filename or path)
    except FrontMatterError as e:
        logger.warning(e.format_compact())
        front_matter, body = {}, strip_front_matter(source)

    dom = parse_html(body)
    inserts: dict[str, Element] = {}
    if kind.renders_standalone:
        inserts = _lift_inserts(dom)
        if site_properties is not None:
            root_url = section(site_properties, "main").get("root-url", "/")
            url = root_url + url_for(path).removeprefix("/")
            front_matter = merge_properties(front_matter, {"main": {"url": url}})

    return Template(kind=kind, path=path, dom=dom, front_matter=front_matter, inserts=inserts)


def _lift_inserts(dom: Document) -> dict[str, Element]:
    inserts: dict[str, Element] = {}
    kept = []
    for child in dom.children:
        if isinstance(child, Element) and child.name == "tg:insert":
            name = child.get("name")
            if name:
                inserts.setdefault(name, child)
        else:
            kept.append(child)
    dom.children = kept
    return inserts


def template_kind_for(path: str) -> TemplateKind | None:
    return classify_path(path).template_kind


def load_site_properties(loader: Loader) -> Properties:
    """Site-wide properties: ``site.toml`` merged over defaults, normalized."""
    properties = merge_properties({}, DEFAULT_SITE_PROPERTIES)
    if loader.exists(SITE_CONFIG):
        source, filename = loader.get_source(SITE_CONFIG)
        try:
            properties = merge_properties(properties, parse_site_config(source, filename))
        except SiteConfigError as e:
            logger.warning(e.format_compact())
    return normalize_site_properties(properties)


def load_site_data(loader: Loader, options: SiteOptions) -> SiteData:
    """Load every template of a site."""
    properties = load_site_properties(loader)
    data = SiteData(properties=properties, options=options, icons=detect_icons(loader))
    for path in loader.list_templates():
        kind = template_kind_for(path)
        if kind is None:
            continue
        data.register(load_template(loader, path, kind, properties))
    logger.debug(f"Loaded {len(data.templates)} templates")
    return data


def detect_icons(loader: Loader) -> tuple[str, ...]:
    return tuple(name for name in ICON_FILES if loader.exists(f"icons/{name}"))


# =============================================================================
# Wrapper, layout and document properties
# =============================================================================


def get_wrapper(data: SiteData, template: Template) -> Template | None:
    """Wrapper applied to a page or article.

    ``main.wrapper = "name"`` selects ``shared_wrappers/name.html``.
    Otherwise the nearest ``_wrapper.html`` walking up from the template's
    directory to its category root applies.
    """
    if not template.kind.renders_standalone:
        return None
    shared = template.main.get("wrapper")
    if isinstance(shared, str):
        return data.get(f"shared_wrappers/{shared}.html")
    for candidate in wrapper_candidates(template.path):
        wrapper = data.get(candidate)
        if wrapper is not None:
            return wrapper
    return None


def wrapper_candidates(path: str) -> list[str]:
    """``_wrapper.html`` paths that could apply to *path*, nearest first."""
    root = path.split("/", 1)[0]
    directory = posixpath.dirname(path)
    candidates: list[str] = []
    while directory and (directory == root or directory.startswith(root + "/")):
        candidates.append(f"{directory}/{WRAPPER_FILENAME}")
        directory = posixpath.dirname(directory)
    return candidates


def get_layout(
    data: SiteData, template: Template, wrapper: Template | None = None
) -> Template | None:
    """Layout named by ``main.layout`` of the template, else of its wrapper."""
    name = template.main.get("layout")
    if not isinstance(name, str) and wrapper is not None:
        name = wrapper.main.get("layout")
    if isinstance(name, str):
        return data.get(f"layouts/{name}.html")
    return None


def document_properties(
    template: Template,
    wrapper: Template | None,
    layout: Template | None,
    site_properties: Properties,
) -> Properties:
    """Merge site ← layout ← wrapper ← template properties and set the title."""
    properties = merge_properties({}, site_properties)
    for source in (layout, wrapper, template):
        if source is not None:
            properties = merge_properties(properties, source.front_matter)
    main = properties.setdefault("main", {})
    properties.setdefault("data", {})
    title = get_title(properties, template.dom)
    if title is not None:
        main["title"] = title
    return properties
