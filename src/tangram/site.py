"""Site: the entry point for building a tangram site.

Owns the loaded SiteData, the symbol table, the renderer and the
incremental update engine.

Example:
    >>> from tangram import Site
    >>> site = Site.from_directory("mysite")
    >>> outputs = site.build()
    >>> outputs["index.html"][:15]
    '<!DOCTYPE html>'

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tangram._types import ChangeKind
from tangram.analysis.dependencies import compute_all_dependencies
from tangram.dom import Document, to_document_html
from tangram.environment.exceptions import TemplateNotFoundError
from tangram.environment.loaders import FileSystemLoader, Loader
from tangram.environment.repository import (
    SiteData,
    Template,
    get_wrapper,
    load_site_data,
    normalize_path,
)
from tangram.renderer import Renderer
from tangram.symbols import SymbolTable
from tangram.update import UpdateEngine, UpdateResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SiteOptions:
    """Build options.

    Attributes:
        build_drafts: Include templates whose ``main.draft`` is true
        for_distribution: Omit the live-reload script from ``<head>``
    """

    build_drafts: bool = False
    for_distribution: bool = False


class Site:
    """A site loaded from a source tree.

    Attributes:
        loader: Source loader (root is the site's ``src/`` directory)
        options: Build options
        symbols: Material Symbols table passed to the renderer
        data: Current SiteData snapshot
        renderer: Renderer bound to ``data``

    """

    def __init__(
        self,
        loader: Loader,
        *,
        build_drafts: bool = False,
        for_distribution: bool = False,
        symbols: SymbolTable | None = None,
    ) -> None:
        self.loader = loader
        self.options = SiteOptions(build_drafts=build_drafts, for_distribution=for_distribution)
        self.symbols = symbols if symbols is not None else SymbolTable.load()
        self.data: SiteData
        self.renderer: Renderer
        self.reload()
        self._updates = UpdateEngine(self)

    @classmethod
    def from_directory(cls, root: str | Path, **kwargs: bool) -> Site:
        """Load the site whose sources live in ``<root>/src``."""
        return cls(FileSystemLoader(Path(root) / "src"), **kwargs)

    def reload(self) -> None:
        """Load every template and site property again."""
        self.data = load_site_data(self.loader, self.options)
        compute_all_dependencies(self.data)
        self.renderer = Renderer(self.data, self.symbols)

    def get_template(self, path: str) -> Template:
        """Loaded template at *path* (``pages/index.html``).

        Raises:
            TemplateNotFoundError: If no template is loaded at *path*
        """
        template = self.data.get(normalize_path(path))
        if template is None:
            raise TemplateNotFoundError(f"Template '{path}' not found")
        return template

    # =========================================================================
    # Rendering
    # =========================================================================

    def is_renderable(self, template: Template) -> bool:
        """True if *template* produces an output document of its own.

        Drafts are skipped unless drafts are built. Articles marked
        ``embedded-only`` (directly or through their wrapper) are skipped.
        """
        if not template.kind.renders_standalone or not self.data.is_visible(template):
            return False
        if template.embedded_only:
            return False
        wrapper = get_wrapper(self.data, template)
        return wrapper is None or not wrapper.embedded_only

    def render_document(self, path: str) -> Document | None:
        template = self.data.get(normalize_path(path))
        if template is None:
            logger.warning(f"Cannot render unknown template: {path}")
            return None
        if not self.is_renderable(template):
            return None
        return self.renderer.render_document(template)

    def render(self, path: str) -> str | None:
        """Render the page or article at *path* to HTML.

        Returns None for unknown paths and for templates that are not
        built (drafts, embedded-only articles, non-page kinds).
        """
        document = self.render_document(path)
        if document is None:
            return None
        return to_document_html(document)

    def renderable_paths(self) -> list[str]:
        """Paths of every page and article that produces output."""
        return [
            t.path for t in [*self.data.pages, *self.data.articles] if self.is_renderable(t)
        ]

    def build(self) -> dict[str, str]:
        """Render every renderable template: output path → HTML."""
        outputs: dict[str, str] = {}
        for path in self.renderable_paths():
            html = self.render(path)
            if html is not None:
                outputs[self.data.templates[path].output_path] = html
        logger.info(f"Built {len(outputs)} documents")
        return outputs

    def write(self, dist: str | Path) -> list[Path]:
        """Build the site and write each document below *dist*."""
        written: list[Path] = []
        for output_path, html in self.build().items():
            target = Path(dist) / output_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            written.append(target)
        return written

    # =========================================================================
    # Incremental updates
    # =========================================================================

    def update(self, path: str, kind: ChangeKind | None = None) -> UpdateResult:
        """Apply a change to the source at *path* and re-render what it affects.

        *kind* defaults to the classification of *path*.
        """
        return self._updates.update(path, kind)
