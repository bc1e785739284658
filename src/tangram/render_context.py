"""Per-render state threaded through directive expansion.

RenderState is immutable: each directive derives the state its children see
with one of the ``with_*``/``enter`` constructors, so a branch can never
leak state into its siblings. The single exception is ItemCounter, a cell
deliberately shared by every state derived inside one widget scope so that
items are numbered continuously across sequential embeds.

"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from tangram.dom import Element, Node

if TYPE_CHECKING:
    from tangram.environment.repository import Template


@dataclass(frozen=True, slots=True)
class Container:
    """The construct that decides which directives are legal.

    ``kind`` is a TemplateKind value (``page``, ``article``, ``segment``...)
    or ``link``/``links`` inside the link directives.
    """

    kind: str
    path: str = ""

    @classmethod
    def of(cls, template: Template) -> Container:
        return cls(template.kind.value, template.path)

    @property
    def is_article(self) -> bool:
        return self.kind == "article"

    @property
    def is_link(self) -> bool:
        return self.kind in ("link", "links")


@dataclass(slots=True)
class ItemCounter:
    """Running index of widget items within one widget scope."""

    value: int = 0

    def next(self) -> int:
        index = self.value
        self.value += 1
        return index


@dataclass(frozen=True, slots=True)
class RenderState:
    """State for one position in the render tree.

    Attributes:
        path: Template path of the document being rendered
        container: Current directive-legality context
        inner_content: Rendered nodes for ``tg:content``, or None if unset
        inserts: ``tg:insert`` elements by name, for ``tg:slot``
        hook_name: Active widget, or None outside any widget
        items: Item counter shared across the active widget scope
        transition_duration: Switcher/rotator transition in milliseconds
        component_stack: Component names on the current path (cycle check)
        segment_stack: Segment names on the current path (cycle check)
        article_stack: Article paths being embedded on the current path
        target_path: Href resolved by the enclosing link directive
        label: Label text provided by the enclosing link directive
    """

    path: str
    container: Container | None = None
    inner_content: tuple[Node, ...] | None = None
    inserts: Mapping[str, Element] = field(default_factory=dict)
    hook_name: str | None = None
    items: ItemCounter = field(default_factory=ItemCounter)
    transition_duration: int = 0
    component_stack: tuple[str, ...] = ()
    segment_stack: tuple[str, ...] = ()
    article_stack: tuple[str, ...] = ()
    target_path: str | None = None
    label: str | None = None

    def enter(
        self,
        template: Template,
        inner_content: list[Node] | tuple[Node, ...] | None = None,
        inserts: Mapping[str, Element] | None = None,
    ) -> RenderState:
        """State for rendering *template*'s body."""
        return replace(
            self,
            container=Container.of(template),
            inner_content=tuple(inner_content) if inner_content is not None else None,
            inserts=inserts if inserts is not None else {},
        )

    def with_component(self, name: str) -> RenderState:
        return replace(self, component_stack=(*self.component_stack, name))

    def with_segment(self, name: str) -> RenderState:
        return replace(self, segment_stack=(*self.segment_stack, name))

    def for_link(
        self,
        kind: str,
        target_path: str | None,
        label: str | None = None,
        inserts: Mapping[str, Element] | None = None,
    ) -> RenderState:
        """State inside ``tg:link``/``tg:links``."""
        return replace(
            self,
            container=Container(kind),
            target_path=target_path,
            label=label,
            inserts=inserts if inserts is not None else self.inserts,
        )

    def with_hook(self, hook_name: str, transition_duration: int = 0) -> RenderState:
        """State for the descendants of a widget root."""
        return replace(
            self,
            hook_name=hook_name,
            items=ItemCounter(),
            transition_duration=transition_duration,
        )

    def with_article(self, path: str) -> RenderState:
        return replace(self, article_stack=(*self.article_stack, path))
