"""Widget codegen, pass 1: reactive attributes written during rendering.

A widget is declared by a root attribute (``tg:toggler``, ``tg:switcher``,
``tg:rotator``, ``tg:carousel``, ``tg:modal``, ``tg:scheduler``,
``tg:tram``) on the outermost element of the widget. The first such root
met while no widget is active installs the root's ``x-data`` state and
becomes the active hook for every descendant. Descendants carry role
attributes (``tg:prev``, ``tg:item``, ``tg:when``...) that are translated
to click handlers and conditional bindings through ``ROLE_HANDLERS``, a
table keyed by ``(hook, role)``.

Facts that need the whole widget subtree (item counts, carousel
repetition, paginators) are left to pass 2 in ``postprocess``. Role
attributes stay on the element until then.

Numeric role parameters that do not parse are dropped without emitting a
binding.
"""

from __future__ import annotations

from collections.abc import Callable

from tangram.attributes import SchedulerStep, TramTrigger, parse_int
from tangram.dom import Element
from tangram.render_context import RenderState
from tangram.utils.html import js_quote

HOOK_NAMES: tuple[str, ...] = (
    "toggler",
    "switcher",
    "rotator",
    "carousel",
    "modal",
    "scheduler",
    "tram",
)

RootHandler = Callable[[Element, RenderState], RenderState]
RoleHandler = Callable[[Element, RenderState], None]


def _cls(element: Element, kind: str) -> str:
    """Class list from ``tg:<kind>-class``, quoted for a JS string."""
    return js_quote(element.get(f"tg:{kind}-class") or "")


def _choice(element: Element, condition: str) -> str:
    return f"{condition} ? '{_cls(element, 'disabled')}' : '{_cls(element, 'enabled')}'"


# =============================================================================
# Roots
# =============================================================================


def _toggler_root(element: Element, state: RenderState) -> RenderState:
    element.attrs["x-data"] = "{ f: false }"
    element.attrs["x-on:click"] = "f = false"
    element.attrs["x-on:click.outside"] = "f = false"
    return state.with_hook("toggler")


def _transition_duration(element: Element) -> int:
    duration = parse_int(element.get("tg:transition-duration"))
    return duration if duration is not None and duration > 0 else 0


def _switcher_root(element: Element, state: RenderState) -> RenderState:
    return state.with_hook("switcher", _transition_duration(element))


def _rotator_root(element: Element, state: RenderState) -> RenderState:
    return state.with_hook("rotator", _transition_duration(element))


def _carousel_root(element: Element, state: RenderState) -> RenderState:
    return state.with_hook("carousel")


def _modal_root(element: Element, state: RenderState) -> RenderState:
    element.attrs["x-data"] = "{ body: undefined, open: false }"
    element.attrs["x-init"] = "body = $el.querySelector('dialog')"
    if element.has("tg:open"):
        _modal_open(element, state)
    return state.with_hook("modal")


def _scheduler_root(element: Element, state: RenderState) -> RenderState:
    element.attrs["x-data"] = "window.tgweb.scheduler($el)"
    if element.has("tg:init"):
        element.attrs["data-scheduler-init"] = element.attrs["tg:init"]
    for name, value in list(element.attrs.items()):
        step = SchedulerStep.parse(name, value)
        if step is not None:
            element.attrs[step.data_attribute] = step.value
    return state.with_hook("scheduler")


def _tram_root(element: Element, state: RenderState) -> RenderState:
    element.attrs["x-data"] = "window.tgweb.tram($el)"
    _tram_element(element, state)
    return state.with_hook("tram")


ROOT_HANDLERS: dict[str, RootHandler] = {
    "toggler": _toggler_root,
    "switcher": _switcher_root,
    "rotator": _rotator_root,
    "carousel": _carousel_root,
    "modal": _modal_root,
    "scheduler": _scheduler_root,
    "tram": _tram_root,
}


# =============================================================================
# Roles
# =============================================================================


def _toggler_when(element: Element, state: RenderState) -> None:
    when = element.attrs["tg:when"]
    if when == "on":
        element.attrs["x-show"] = "f === true"
        element.attrs["x-cloak"] = ""
    elif when == "off":
        element.attrs["x-show"] = "f === false"


def _toggler_toggle(element: Element, state: RenderState) -> None:
    toggle = element.attrs["tg:toggle"]
    if toggle == "on":
        element.attrs["x-on:click.stop"] = "f = true"
        element.attrs["x-bind:class"] = _choice(element, "f === true")
    elif toggle == "off":
        element.attrs["x-on:click.stop"] = "f = false"
        element.attrs["x-bind:class"] = _choice(element, "f === false")
    elif toggle == "":
        element.attrs["x-on:click.stop"] = "f = !f"
        element.attrs["x-bind:class"] = f"'{_cls(element, 'enabled')}'"


def _transition_effect(element: Element, state: RenderState) -> None:
    if state.transition_duration > 0:
        transition = f"transition: opacity {state.transition_duration}ms"
        shown = "position: absolute; opacity: 1; order: 0"
        hidden = "position: absolute; opacity: 0; order: -1"
        current = "$el.dataset.itemIndex === String(i)"
        initial = f"({current} ? '{shown}' : '{hidden}')"
        animated = f"({current} ? '{shown}; {transition}' : '{hidden}; {transition}')"
        element.attrs["x-bind:style"] = f"initial ? {initial} : {animated}"
    else:
        element.attrs["x-show"] = "$el.dataset.itemIndex === String(i)"


def _switcher_body(element: Element, state: RenderState) -> None:
    element.attrs[f"data-{state.hook_name}-body"] = ""


def _switcher_item(element: Element, state: RenderState) -> None:
    if element.has("tg:body"):
        return
    element.attrs["data-item-index"] = str(state.items.next())
    _transition_effect(element, state)


def _first(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "first()"
    element.attrs["x-bind:class"] = _choice(element, "i === 0")


def _switcher_prev(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "prev()"
    element.attrs["x-bind:class"] = _choice(element, "i === 0")


def _switcher_next(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "next()"
    element.attrs["x-bind:class"] = _choice(element, "i === len - 1")


def _last(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "last()"
    element.attrs["x-bind:class"] = _choice(element, "i === len - 1")


def _rotator_prev(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "prev()"
    element.attrs["x-bind:class"] = f"'{_cls(element, 'enabled')}'"


def _rotator_next(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "next()"
    element.attrs["x-bind:class"] = f"'{_cls(element, 'enabled')}'"


def _switcher_choose(element: Element, state: RenderState) -> None:
    n = parse_int(element.attrs["tg:choose"])
    if n is None:
        return
    element.attrs["x-on:click"] = f"choose({n})"
    element.attrs["x-bind:class"] = (
        f"i == {n} ? '{_cls(element, 'current')}' : '{_cls(element, 'normal')}'"
    )


def carousel_class_expression(element: Element, n: int) -> str:
    """Class binding for the n-th chooser of a carousel or paginator."""
    return (
        f"i % len === {n} ? '{_cls(element, 'current')}' : "
        f"(inTransition ? '{_cls(element, 'disabled')}' : '{_cls(element, 'normal')}')"
    )


def _carousel_frame(element: Element, state: RenderState) -> None:
    element.attrs["data-carousel-frame"] = ""


def _carousel_body(element: Element, state: RenderState) -> None:
    if not element.has("tg:frame"):
        element.attrs["data-carousel-body"] = ""


def _carousel_item(element: Element, state: RenderState) -> None:
    if not element.has("tg:frame") and not element.has("tg:body"):
        element.attrs["data-carousel-item"] = ""


def _carousel_prev(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "prev()"
    element.attrs["x-bind:class"] = _choice(element, "inTransition")


def _carousel_next(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click"] = "next()"
    element.attrs["x-bind:class"] = _choice(element, "inTransition")


def _carousel_choose(element: Element, state: RenderState) -> None:
    n = parse_int(element.attrs["tg:choose"])
    if n is None:
        return
    element.attrs["x-on:click"] = f"choose({n})"
    element.attrs["x-bind:class"] = carousel_class_expression(element, n)


def _modal_open(element: Element, state: RenderState) -> None:
    element.attrs["x-on:click.stop"] = "if (body && !open) body.showModal(); open = true"


def _modal_close(element: Element, state: RenderState) -> None:
    if not element.has("tg:open"):
        element.attrs["x-on:click.stop"] = "if (body && open) body.close(); open = false"


def _tram_element(element: Element, state: RenderState) -> None:
    base = element.get("class")
    element.attrs["data-tram-base-class"] = base or ""
    tokens = base.split(" ") if base is not None else []
    if element.has("tg:init"):
        tokens += element.attrs["tg:init"].split(" ")
    if tokens:
        element.attrs["class"] = " ".join(tokens)

    triggers = [
        trigger
        for name, value in element.attrs.items()
        if (trigger := TramTrigger.parse(name, value)) is not None
    ]
    if not any(name.startswith(("tg:forward-", "tg:backward-")) for name in element.attrs):
        return
    element.attrs["data-tram-trigger"] = ""
    for trigger in triggers:
        element.attrs[trigger.data_attribute] = trigger.value


# Role "*" applies to every element inside the widget.
ROLE_HANDLERS: dict[tuple[str, str], RoleHandler] = {
    ("toggler", "when"): _toggler_when,
    ("toggler", "toggle"): _toggler_toggle,
    ("switcher", "body"): _switcher_body,
    ("switcher", "item"): _switcher_item,
    ("switcher", "first"): _first,
    ("switcher", "prev"): _switcher_prev,
    ("switcher", "next"): _switcher_next,
    ("switcher", "last"): _last,
    ("switcher", "choose"): _switcher_choose,
    ("rotator", "body"): _switcher_body,
    ("rotator", "item"): _switcher_item,
    ("rotator", "first"): _first,
    ("rotator", "prev"): _rotator_prev,
    ("rotator", "next"): _rotator_next,
    ("rotator", "last"): _last,
    ("rotator", "choose"): _switcher_choose,
    ("carousel", "frame"): _carousel_frame,
    ("carousel", "body"): _carousel_body,
    ("carousel", "item"): _carousel_item,
    ("carousel", "prev"): _carousel_prev,
    ("carousel", "next"): _carousel_next,
    ("carousel", "choose"): _carousel_choose,
    ("modal", "open"): _modal_open,
    ("modal", "close"): _modal_close,
    ("tram", "*"): _tram_element,
}


def install_hook(element: Element, state: RenderState) -> RenderState:
    """Install the widget rooted at *element*, if any.

    Returns the state for *element*'s children: unchanged when *element*
    is not a widget root or a widget is already active.
    """
    if state.hook_name is not None:
        return state
    for hook in HOOK_NAMES:
        if element.has(f"tg:{hook}"):
            return ROOT_HANDLERS[hook](element, state)
    return state


def apply_roles(element: Element, state: RenderState) -> None:
    """Translate *element*'s role attributes for the active widget."""
    if state.hook_name is None:
        return
    for (hook, role), handler in ROLE_HANDLERS.items():
        if hook == state.hook_name and (role == "*" or element.has(f"tg:{role}")):
            handler(element, state)
