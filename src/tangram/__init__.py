"""Tangram: a static-site template compiler.

Turns a tree of HTML templates (pages, articles, layouts, wrappers,
segments, components, shared components) into complete HTML documents,
and keeps the output current as single source files change.

Quickstart:
    >>> from tangram import DictLoader, Site
    >>> site = Site(DictLoader({"pages/index.html": "<h1>Hello, world!</h1>"}))
    >>> "<h1>Hello, world!</h1>" in site.render("pages/index.html")
    True

Directory sites:
    >>> site = Site.from_directory("mysite")   # reads mysite/src/**
    >>> site.write("mysite/dist")

Architecture:
Source → Loader → SiteData (templates + dependency sets) → Renderer → Document

Pipeline stages:
1. **Repository**: Loads templates, splits TOML front matter, classifies paths
2. **Analysis**: Computes each template's dependency set
3. **Renderer**: Expands ``tg:*`` directives and widget attributes (pass 1)
4. **Postprocess**: Finalizes widgets and strips ``tg:*`` attributes (pass 2)
5. **Head**: Assembles ``<head>`` from document properties

Incremental updates:
    >>> result = site.update("src/components/card.html")
    >>> sorted(result.outputs)
    ['index.html']

"""

from tangram._types import ChangeKind, TemplateKind
from tangram.dom import Document, Element, Text, parse_html, to_document_html, to_html
from tangram.environment import (
    DictLoader,
    ErrorCode,
    FileSystemLoader,
    FrontMatterError,
    Loader,
    SiteConfigError,
    SiteData,
    TangramError,
    Template,
    TemplateNotFoundError,
)
from tangram.render_context import RenderState
from tangram.renderer import Renderer
from tangram.site import Site, SiteOptions
from tangram.symbols import SymbolTable
from tangram.update import UpdateEngine, UpdateResult

__version__ = "0.1.0"

__all__ = [
    "ChangeKind",
    "DictLoader",
    "Document",
    "Element",
    "ErrorCode",
    "FileSystemLoader",
    "FrontMatterError",
    "Loader",
    "RenderState",
    "Renderer",
    "Site",
    "SiteConfigError",
    "SiteData",
    "SiteOptions",
    "SymbolTable",
    "TangramError",
    "Template",
    "TemplateKind",
    "TemplateNotFoundError",
    "Text",
    "UpdateEngine",
    "UpdateResult",
    "__version__",
    "parse_html",
    "to_document_html",
    "to_html",
]
