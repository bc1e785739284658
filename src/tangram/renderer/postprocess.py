"""Widget codegen, pass 2, over a fully rendered tree.

Runs once per output document, after every directive has been expanded,
so item counts inside a widget are final. This pass:

- writes the ``x-data`` initializer of carousel, switcher and rotator roots
  (item count, interval, transition duration);
- repeats carousel items ``CAROUSEL_REPEAT_COUNT`` times inside the body;
- expands a ``tg:paginator`` into one chooser per item;
- expands ``tg:plugin`` placeholders;
- strips every remaining ``tg:*`` attribute.

The tree is the renderer's own output and is modified in place.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from tangram.attributes import parse_int
from tangram.dom import Element, Node, Text, find_all
from tangram.renderer.widgets import carousel_class_expression
from tangram.utils.constants import CAROUSEL_REPEAT_COUNT, DIRECTIVE_PREFIX

HUBSPOT_EMBED_SRC = "//js.hsforms.net/forms/embed/v2.js"


@dataclass(frozen=True, slots=True)
class WidgetScope:
    """Pass-2 facts about the enclosing widget."""

    hook_name: str
    item_count: int
    repeat_count: int = 1


def postprocess(nodes: Iterable[Node], scope: WidgetScope | None = None) -> list[Node]:
    """Run pass 2 over sibling *nodes*; returns the replacement list."""
    result: list[Node] = []
    for node in nodes:
        result.extend(_postprocess_node(node, scope))
    return result


def _postprocess_node(node: Node, scope: WidgetScope | None) -> list[Node]:
    if not isinstance(node, Element):
        return [node]

    if node.name == "tg:plugin":
        expand = PLUGINS.get(node.get("name") or "")
        if expand is not None:
            return expand(node)

    if node.has("tg:carousel"):
        return [_postprocess_root(node, "carousel")]
    if scope is not None and scope.hook_name == "carousel":
        if node.has("tg:body"):
            return [_postprocess_carousel_body(node, scope)]
        if node.has("tg:paginator"):
            return _postprocess_paginator(node, scope)
    elif node.has("tg:switcher"):
        return [_postprocess_root(node, "switcher")]
    elif node.has("tg:rotator"):
        return [_postprocess_root(node, "rotator")]
    elif scope is not None and node.has("tg:paginator"):
        return _postprocess_paginator(node, scope)

    node.children = postprocess(node.children, scope)
    strip_directive_attributes(node)
    return [node]


def _is_item(element: Element) -> bool:
    return element.has("tg:item")


def _postprocess_root(node: Element, hook_name: str) -> Element:
    items = find_all(_is_item, node.children)
    interval = parse_int(node.get("tg:interval")) or 0
    interval = max(interval, 0)
    duration = parse_int(node.get("tg:transition-duration")) or 0

    if hook_name == "carousel":
        scope = WidgetScope(hook_name, len(items), CAROUSEL_REPEAT_COUNT)
        node.attrs["x-data"] = (
            f"window.tgweb.carousel($el, {len(items)}, {scope.repeat_count}, "
            f"{interval}, {duration})"
        )
    else:
        scope = WidgetScope(hook_name, len(items))
        node.attrs["x-data"] = f"window.tgweb.{hook_name}($el, {interval}, {duration})"

    node.children = postprocess(node.children, scope)
    strip_directive_attributes(node)
    return node


def _postprocess_carousel_body(node: Element, scope: WidgetScope) -> Element:
    items = find_all(_is_item, node.children)
    children: list[Node] = []
    for _ in range(scope.repeat_count):
        for item in items:
            children.extend(_postprocess_node(item.clone(), scope))
    node.children = children
    strip_directive_attributes(node)
    return node


def _postprocess_paginator(node: Element, scope: WidgetScope) -> list[Node]:
    template = node.shallow_copy()
    template.children = postprocess(node.children, scope)
    strip_directive_attributes(template)
    template.attrs.pop("id", None)

    choosers: list[Node] = []
    for n in range(scope.item_count):
        chooser = template.clone()
        chooser.attrs["x-on:click"] = f"choose({n})"
        chooser.attrs["x-bind:class"] = carousel_class_expression(node, n)
        choosers.append(chooser)
    return choosers


def _hubspot_form(node: Element) -> list[Node]:
    loader = Element(
        "script",
        {"charset": "utf-8", "type": "text/javascript", "src": HUBSPOT_EMBED_SRC},
    )
    portal_id = _js_string(node.get("portal-id") or "")
    form_id = _js_string(node.get("form-id") or "")
    body = f"hbspt.forms.create({{portalId: {portal_id}, formId: {form_id}}});"
    return [loader, Element("script", {}, [Text(body)])]


def _js_string(value: str) -> str:
    return json.dumps(value).replace("</", "<\\/")


PLUGINS: dict[str, Callable[[Element], list[Node]]] = {
    "hubspot": _hubspot_form,
}


def strip_directive_attributes(element: Element) -> None:
    """Remove every ``tg:*`` attribute from *element*."""
    for name in [n for n in element.attrs if n.startswith(DIRECTIVE_PREFIX)]:
        del element.attrs[name]
