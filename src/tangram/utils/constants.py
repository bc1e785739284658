"""Shared constants for tangram."""

from __future__ import annotations

# Elements that never have children or an end tag.
# Source: WHATWG HTML Living Standard, "void elements"
VOID_ELEMENTS: frozenset[str] = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Prefix shared by every directive element and widget attribute.
DIRECTIVE_PREFIX = "tg:"

# Icon files whose presence under icons/ toggles <link> tags in <head>.
ICON_FILES: tuple[str, ...] = ("favicon.ico", "icon.svg", "180.png", "192.png", "512.png")

# Markup for an unresolved directive; the escaped source goes inside.
ERROR_MARKER_CLASS = "inline-block bg-error text-black m-1 py-1 px-2"

# Carousel item lists are repeated this many times for seamless wraparound.
CAROUSEL_REPEAT_COUNT = 3

# Material Symbols axis values accepted on <tg:symbol> and in font config.
SYMBOL_FILL_VALUES: tuple[int, ...] = (0, 1)
SYMBOL_WEIGHT_VALUES: tuple[int, ...] = (100, 200, 300, 400, 500, 600, 700)
SYMBOL_GRADE_VALUES: tuple[int, ...] = (-25, 0, 200)
SYMBOL_OPTICAL_SIZE_VALUES: tuple[int, ...] = (20, 24, 40, 48)
SYMBOL_STYLES: tuple[str, ...] = ("outlined", "rounded", "sharp")

# Weights accepted in font.google-fonts entries.
GOOGLE_FONT_WEIGHTS: tuple[int, ...] = (100, 200, 300, 400, 500, 600, 700, 800, 900)
