"""Closed vocabularies shared across tangram.

TemplateKind names the seven template categories a site is built from.
ChangeKind is the classification the update engine switches on when a
single source file changes.
"""

from __future__ import annotations

from enum import Enum


class TemplateKind(Enum):
    """Category of a template source file."""

    PAGE = "page"
    ARTICLE = "article"
    LAYOUT = "layout"
    WRAPPER = "wrapper"
    SEGMENT = "segment"
    COMPONENT = "component"
    SHARED_COMPONENT = "shared-component"

    @property
    def renders_standalone(self) -> bool:
        """True for kinds that produce an output document of their own."""
        return self in (TemplateKind.PAGE, TemplateKind.ARTICLE)


class ChangeKind(Enum):
    """Classification of a changed source path.

    Template categories mirror TemplateKind; SITE_CONFIG is ``site.toml``
    and UNRECOGNIZED covers everything the update engine ignores.
    """

    SITE_CONFIG = "site-config"
    PAGE = "page"
    ARTICLE = "article"
    COMPONENT = "component"
    SHARED_COMPONENT = "shared-component"
    SEGMENT = "segment"
    LAYOUT = "layout"
    WRAPPER = "wrapper"
    UNRECOGNIZED = "unrecognized"

    @property
    def template_kind(self) -> TemplateKind | None:
        """The matching TemplateKind, or None for non-template changes."""
        try:
            return TemplateKind(self.value)
        except ValueError:
            return None
