"""Assemble ``<head>`` from document properties and site configuration.

Sections are emitted in a fixed order:

1. ``<meta charset>`` and ``<title>``
2. ``<meta name>``, ``<meta http-equiv>``, ``<meta property>``
3. ``<link>`` entries from the ``link`` table and the ``links`` array
4. Google Fonts and Material Symbols
5. ``/css/tailwind.css`` and extra stylesheets
6. Icon links for the icon files present
7. The fixed framework tail, the live-reload script, extra scripts

Keys containing a double quote are skipped throughout.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from tangram.dom import Element, Node, Text
from tangram.environment.properties import section
from tangram.utils.constants import (
    GOOGLE_FONT_WEIGHTS,
    SYMBOL_FILL_VALUES,
    SYMBOL_GRADE_VALUES,
    SYMBOL_OPTICAL_SIZE_VALUES,
    SYMBOL_STYLES,
    SYMBOL_WEIGHT_VALUES,
)
from tangram.utils.html import html_escape

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")
_ROOT_URL_RE = re.compile(r"%\{([^}]+)\}")
_LINK_KEY_RE = re.compile(r"^[a-z]+$")
_VARIANT_RE = re.compile(r"^[0-9a-z-]+$")

GOOGLE_FONTS_CSS = "https://fonts.googleapis.com/css2"


def _meta(**attrs: str) -> Element:
    return Element("meta", {k.replace("_", "-"): v for k, v in attrs.items()})


def _link(attrs: dict[str, str]) -> Element:
    return Element("link", attrs)


def _script(src: str, *, defer: bool = True, module: bool = False) -> Element:
    attrs = {"type": "module", "src": src} if module else {"src": src}
    if defer and not module:
        attrs["defer"] = ""
    return Element("script", attrs)


def _expand_root_url(value: str, properties: Mapping[str, Any]) -> str:
    root_url = section(properties, "main").get("root-url", "/")
    return _ROOT_URL_RE.sub(lambda m: root_url + m.group(1).removeprefix("/"), value)


def _lookup_placeholder(expr: str, properties: Mapping[str, Any]) -> str | None:
    """Resolve ``${a}``, ``${a.b}`` (under ``main``) or ``${a.b.c}``."""
    parts = expr.split(".")
    if len(parts) in (1, 2):
        value: Any = section(properties, "main")
    elif len(parts) == 3:
        value = properties
    else:
        return None
    for part in parts:
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value if isinstance(value, str) else None


def expand_meta_property(value: str, properties: Mapping[str, Any]) -> str:
    """Expand ``${...}`` and ``%{path}`` placeholders in a meta property value.

    Unresolvable ``${...}`` placeholders are left as written.

    Example:
        >>> props = {"main": {"title": "Home", "root-url": "https://example.com/"}}
        >>> expand_meta_property("${title} %{/img/og.png}", props)
        'Home https://example.com/img/og.png'
    """

    def replace(match: re.Match[str]) -> str:
        resolved = _lookup_placeholder(match.group(1), properties)
        return resolved if resolved is not None else match.group(0)

    return _expand_root_url(_PLACEHOLDER_RE.sub(replace, value), properties)


def _meta_elements(properties: Mapping[str, Any]) -> list[Node]:
    meta = section(properties, "meta")
    elements: list[Node] = []

    for name, content in section(meta, "name").items():
        if '"' in name:
            continue
        if isinstance(content, str):
            elements.append(_meta(name=name, content=content))
        elif isinstance(content, list):
            elements.extend(_meta(name=name, content=str(c)) for c in content)

    for name, content in section(meta, "http-equiv").items():
        if '"' in name or not isinstance(content, str):
            continue
        elements.append(_meta(http_equiv=name, content=content))

    for name, content in section(meta, "property").items():
        if '"' in name or not isinstance(content, str):
            continue
        elements.append(_meta(property=name, content=expand_meta_property(content, properties)))

    return elements


def _link_elements(properties: Mapping[str, Any]) -> list[Node]:
    elements: list[Node] = []
    for rel, href in section(properties, "link").items():
        if rel == "stylesheet" or not _LINK_KEY_RE.match(rel) or not isinstance(href, str):
            continue
        elements.append(_link({"rel": rel, "href": _expand_root_url(href, properties)}))

    links = properties.get("links")
    if isinstance(links, list):
        for entry in links:
            if not isinstance(entry, Mapping):
                continue
            attrs = {
                key: value
                for key, value in entry.items()
                if _LINK_KEY_RE.match(key) and isinstance(value, str)
            }
            elements.append(_link(attrs))
    return elements


def _symbol_style_of(key: str) -> tuple[str, str | None]:
    style, _, variant = key.partition("-")
    return style, variant or None


def _material_symbols_params(symbols: Mapping[str, Any]) -> list[str]:
    styles: list[str] = []
    for key in symbols:
        style, _ = _symbol_style_of(key)
        if style in SYMBOL_STYLES and style not in styles:
            styles.append(style)
    return [
        f"family=Material+Symbols+{style.capitalize()}:opsz,wght,FILL,GRAD@"
        "20..48,100..700,0..1,-50..200"
        for style in styles
    ]


def _google_font_params(fonts: Mapping[str, Any]) -> list[str]:
    params: list[str] = []
    for family, value in fonts.items():
        escaped = family.replace(" ", "+")
        if value is True:
            params.append(f"family={escaped}")
        elif isinstance(value, list):
            weights = ";".join(str(w) for w in value if w in GOOGLE_FONT_WEIGHTS)
            params.append(f"family={escaped}:wght@{weights}")
        elif isinstance(value, Mapping):
            normal = value.get("normal") if isinstance(value.get("normal"), list) else []
            italic = value.get("italic") if isinstance(value.get("italic"), list) else []
            weights = [f"0,{w}" for w in normal if w in GOOGLE_FONT_WEIGHTS]
            weights += [f"1,{w}" for w in italic if w in GOOGLE_FONT_WEIGHTS]
            params.append(f"family={escaped}:ital,wght@{';'.join(weights)}")
    return params


def _symbol_declarations(symbols: Mapping[str, Any]) -> list[str]:
    declarations: list[str] = []
    for key, value in symbols.items():
        style, variant = _symbol_style_of(key)
        if variant is not None and not _VARIANT_RE.match(variant):
            continue
        if value is True:
            fill, wght, grad, opsz = 0, 400, 0, 24
        elif isinstance(value, Mapping):
            fill, wght = value.get("fill"), value.get("wght")
            grad, opsz = value.get("grad"), value.get("opsz")
        else:
            continue
        # True == 1 and False == 0, so booleans would pass the table lookups
        if any(isinstance(axis, bool) for axis in (fill, wght, grad, opsz)):
            continue
        if (
            fill not in SYMBOL_FILL_VALUES
            or wght not in SYMBOL_WEIGHT_VALUES
            or grad not in SYMBOL_GRADE_VALUES
            or opsz not in SYMBOL_OPTICAL_SIZE_VALUES
        ):
            continue
        selector = f".material-symbols-{style}"
        if variant is not None:
            selector += f".material-symbols-{style}-{variant}"
        settings = f'"FILL" {fill}, "wght" {wght}, "GRAD" {grad}, "opsz" {opsz}'
        declarations.append(f"{selector} {{ font-variation-settings: {settings}; }}")
    return declarations


def _font_elements(properties: Mapping[str, Any]) -> list[Node]:
    font = section(properties, "font")
    if not font:
        return []
    symbols = section(font, "material-symbols")
    symbol_params = _material_symbols_params(symbols)
    google_params = _google_font_params(section(font, "google-fonts"))

    elements: list[Node] = []
    if symbol_params or google_params:
        elements.append(_link({"rel": "preconnect", "href": "https://fonts.googleapis.com"}))
        elements.append(
            _link({"rel": "preconnect", "href": "https://fonts.gstatic.com", "crossorigin": ""})
        )
    if symbol_params:
        href = f"{GOOGLE_FONTS_CSS}?{'&'.join(symbol_params)}&display=block"
        elements.append(_link({"rel": "stylesheet", "href": href}))
    if google_params:
        href = f"{GOOGLE_FONTS_CSS}?{'&'.join(google_params)}&display=swap"
        elements.append(_link({"rel": "stylesheet", "href": href}))

    declarations = _symbol_declarations(symbols)
    if declarations:
        elements.append(Element("style", {}, [Text("\n" + "\n".join(declarations))]))
    return elements


def _enabled_keys(properties: Mapping[str, Any], name: str) -> list[str]:
    return [
        key for key, value in section(properties, name).items() if value is True and '"' not in key
    ]


def _icon_elements(icons: tuple[str, ...]) -> list[Node]:
    elements: list[Node] = []
    if "favicon.ico" in icons:
        elements.append(_link({"rel": "icon", "href": "/favicon.ico"}))
    if "icon.svg" in icons:
        elements.append(_link({"rel": "icon", "href": "/icon.svg", "type": "image/svg+xml"}))
    if "180.png" in icons:
        elements.append(_link({"rel": "apple-touch-icon", "href": "/180.png"}))
    if "192.png" in icons and "512.png" in icons:
        elements.append(_link({"rel": "manifest", "href": "/manifest.webmanifest"}))
    return elements


def build_head(
    properties: Mapping[str, Any],
    icons: tuple[str, ...] = (),
    *,
    for_distribution: bool = False,
) -> Element:
    """Build the ``<head>`` element of an output document."""
    children: list[Node] = [Element("meta", {"charset": "utf-8"})]

    title = section(properties, "main").get("title")
    if title is not None:
        children.append(Element("title", {}, [Text(html_escape(title))]))

    children.extend(_meta_elements(properties))
    children.extend(_link_elements(properties))
    children.extend(_font_elements(properties))

    children.append(_link({"rel": "stylesheet", "href": "/css/tailwind.css"}))
    for key in _enabled_keys(properties, "stylesheets"):
        children.append(_link({"rel": "stylesheet", "href": f"/css/{key}.css"}))

    children.extend(_icon_elements(icons))

    children.append(Element("style", {}, [Text("[x-cloak] { display: none !important; }")]))
    children.append(_script("/js/tgweb_utilities.js"))
    children.append(_script("/js/alpine.min.js"))
    children.append(_script("/js/tgweb_lottie_player.js", module=True))
    if not for_distribution:
        children.append(_script("/reload/reload.js"))
    for key in _enabled_keys(properties, "javascripts"):
        children.append(_script(f"/js/{key}.js"))

    return Element("head", {}, children)
