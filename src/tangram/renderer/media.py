"""Media directives: ``tg:animation``, ``tg:symbol``, ``tg:app`` and ``tg:plugin``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tangram.dom import Element, Node, Text
from tangram.environment.properties import Properties
from tangram.render_context import RenderState
from tangram.utils.constants import (
    SYMBOL_FILL_VALUES,
    SYMBOL_GRADE_VALUES,
    SYMBOL_OPTICAL_SIZE_VALUES,
    SYMBOL_WEIGHT_VALUES,
)
from tangram.utils.html import html_escape

if TYPE_CHECKING:
    from tangram.environment.repository import SiteData
    from tangram.symbols import SymbolTable

_ANIMATION_FLAGS = ("autoplay", "loop", "hover", "click")
_ANIMATION_PASSTHROUGH = ("class", "width", "height")

# (attribute, CSS axis name, accepted values)
_SYMBOL_AXES: tuple[tuple[str, str, tuple[int, ...]], ...] = (
    ("fill", "FILL", SYMBOL_FILL_VALUES),
    ("wght", "wght", SYMBOL_WEIGHT_VALUES),
    ("grad", "GRAD", SYMBOL_GRADE_VALUES),
    ("opsz", "opsz", SYMBOL_OPTICAL_SIZE_VALUES),
)

_APP_OUTER_STYLE = "width: 100%; height: 300px; padding: 16px; backdrop-filter: invert(50%);"
_APP_INNER_STYLE = (
    "width: 100%; height: 100%; background-color: white; opacity: 50%; "
    "display: flex; justify-content: center; align-items: center; font-size: 1.5rem;"
)


def symbol_classes(symbol_style: str) -> str:
    """Class list for a ``symbol-style`` value (``rounded``, ``sharp-bold``).

    Example:
        >>> symbol_classes("sharp-bold")
        'material-symbols-sharp material-symbols-sharp-bold'
    """
    style, _, variant = symbol_style.partition("-")
    if not variant:
        return f"material-symbols-{style}"
    return f"material-symbols-{style} material-symbols-{style}-{variant}"


def font_variation_settings(node: Element) -> str | None:
    """``font-variation-settings`` for the valid axis attributes of *node*."""
    settings = []
    for attr, axis, accepted in _SYMBOL_AXES:
        value = node.get(attr)
        if value is not None and value in {str(v) for v in accepted}:
            settings.append(f"'{axis}' {value}")
    if not settings:
        return None
    return f"font-variation-settings: {', '.join(settings)}"


class MediaDirectiveMixin:
    """Mixin for directives that emit self-contained media placeholders.

    Host attributes and cross-mixin dependencies are declared via inline
    TYPE_CHECKING blocks.

    """

    if TYPE_CHECKING:
        _data: SiteData
        _symbols: SymbolTable

        def _error(self, node: Element) -> list[Node]: ...

    def _render_animation(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:animation src="...">`` → a Lottie ``<canvas>``."""
        src = node.get("src")
        if not src:
            return self._error(node)
        canvas = Element("canvas", {"data-animation": "lottie", "data-src": src})
        for flag in _ANIMATION_FLAGS:
            if node.get(flag) in ("true", "false"):
                canvas.attrs[f"data-{flag}"] = node.attrs[flag]
        for name in _ANIMATION_PASSTHROUGH:
            if node.get(name):
                canvas.attrs[name] = node.attrs[name]
        return [canvas]

    def _render_symbol(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        """``<tg:symbol name="star">`` → a Material Symbols glyph span."""
        codepoint = self._symbols.codepoint(node.get("name"))
        if codepoint is None:
            return self._error(node)
        span = Element(
            "span",
            {"class": symbol_classes(node.get("symbol-style") or "outlined")},
            [Text(f"&#x{codepoint};")],
        )
        style = font_variation_settings(node)
        if style is not None:
            span.attrs["style"] = style
        return [span]

    def _render_plugin(
        self, node: Element, properties: Properties, state: RenderState
    ) -> list[Node]:
        # Expanded in postprocessing.
        return [node.clone()]

    def _render_app(self, node: Element, properties: Properties, state: RenderState) -> list[Node]:
        """``<tg:app name="x">`` → a placeholder box for an app in ``apps``."""
        app = self._find_app(node.get("name"))
        if app is None:
            return self._error(node)
        display_name = app.get("display-name") or app["name"]
        inner = Element("div", {"style": _APP_INNER_STYLE}, [Text(html_escape(display_name))])
        return [Element("div", {"style": _APP_OUTER_STYLE}, [inner])]

    def _find_app(self, name: str | None) -> Mapping[str, Any] | None:
        apps = self._data.properties.get("apps")
        if not name or not isinstance(apps, list):
            return None
        for app in apps:
            if isinstance(app, Mapping) and app.get("name") == name:
                return app
        return None
