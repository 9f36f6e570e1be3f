"""Display elements: pure functions from data to markup.

Every element escapes its text, returns ``Markup`` so templates embed it
without double-escaping, and omits optional sections that are absent
instead of failing. None of them hold state.

Icons are Material Design Icons class names (``mdi-...``).
"""

import html
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from kida.template import Markup

from pageshell.views.result import Failure

LOADING_ICON = "mdi-loading mdi-spin"
ERROR_ICON = "mdi-alert-circle-outline"
NOT_FOUND_ICON = "mdi-map-marker-question-outline"


def _e(value: Any) -> str:
    """Escaped text; ``None`` is empty."""
    return "" if value is None else html.escape(str(value), quote=True)


def _attrs(attrs: Mapping[str, Any] | None) -> str:
    """Render extra attributes; ``True`` renders a bare name, falsy values are dropped."""
    if not attrs:
        return ""
    out: list[str] = []
    for name, value in attrs.items():
        if value is True:
            out.append(f" {_e(name)}")
        elif value:
            out.append(f' {_e(name)}="{_e(value)}"')
    return "".join(out)


def icon(name: str | None) -> Markup:
    """An ``<i>`` icon element, or nothing when *name* is empty."""
    if not name:
        return Markup("")
    return Markup(f'<i class="mdi {_e(name)}" aria-hidden="true"></i>')


# ---------------------------------------------------------------------------
# Message / fallback card
# ---------------------------------------------------------------------------


def message_card(
    title: str | None,
    description: str | None = None,
    *,
    icon_name: str | None = None,
    tone: str = "info",
    role: str | None = None,
) -> Markup:
    """Fixed-layout informational card used for loading, error, and not-found states.

    Layout: icon, title, description. A missing title or description
    leaves its element out.
    """
    parts = [
        f'<div class="card message-card message-card--{_e(tone)}"'
        f'{_attrs({"role": role})}>',
        '<div class="card-body">',
    ]
    if icon_name:
        parts.append(f'<div class="message-card__icon">{icon(icon_name)}</div>')
    if title:
        parts.append(f'<h5 class="card-title">{_e(title)}</h5>')
    if description:
        parts.append(f'<p class="card-text">{_e(description)}</p>')
    parts.append("</div></div>")
    return Markup("".join(parts))


def loading_card(title: str = "Loading...") -> Markup:
    """The fallback shown while a deferred page is unresolved."""
    return message_card(title, icon_name=LOADING_ICON, tone="loading", role="status")


def error_card(failure: Failure, title: str = "Something went wrong") -> Markup:
    """Terminal error display for a captured failure."""
    return message_card(
        title,
        failure.description,
        icon_name=ERROR_ICON,
        tone="error",
        role="alert",
    )


def not_found_card(
    title: str = "404 - Not Found",
    description: str | None = "The page you are looking for does not exist.",
) -> Markup:
    """Shown when no route entry matches the navigated path."""
    return message_card(title, description, icon_name=NOT_FOUND_ICON, tone="not-found")


# ---------------------------------------------------------------------------
# Leaf elements
# ---------------------------------------------------------------------------


def card(
    title: str | None = None,
    body: str | None = None,
    *,
    subtitle: str | None = None,
    image: str | None = None,
    footer: str | None = None,
    content: Markup | None = None,
) -> Markup:
    """A content card. Text fields are escaped; *content* is trusted markup."""
    parts = ['<div class="card">']
    if image:
        parts.append(f'<img class="card-img-top" src="{_e(image)}" alt="{_e(title or "")}">')
    parts.append('<div class="card-body">')
    if title:
        parts.append(f'<h5 class="card-title">{_e(title)}</h5>')
    if subtitle:
        parts.append(f'<h6 class="card-subtitle text-muted">{_e(subtitle)}</h6>')
    if body:
        parts.append(f'<p class="card-text">{_e(body)}</p>')
    if content:
        parts.append(str(content))
    parts.append("</div>")
    if footer:
        parts.append(f'<div class="card-footer">{_e(footer)}</div>')
    parts.append("</div>")
    return Markup("".join(parts))


def button(
    label: str,
    *,
    href: str | None = None,
    kind: str = "primary",
    type: str = "button",  # noqa: A002
    icon_name: str | None = None,
    attrs: Mapping[str, Any] | None = None,
) -> Markup:
    """A button, rendered as a link when *href* is given."""
    classes = f"btn btn-{_e(kind)}"
    inner = f"{icon(icon_name)}{_e(label)}" if icon_name else _e(label)
    if href is not None:
        return Markup(f'<a class="{classes}" href="{_e(href)}"{_attrs(attrs)}>{inner}</a>')
    return Markup(f'<button class="{classes}" type="{_e(type)}"{_attrs(attrs)}>{inner}</button>')


def form_field(
    name: str,
    label: str | None = None,
    *,
    value: Any = None,
    type: str = "text",  # noqa: A002
    placeholder: str | None = None,
    required: bool = False,
    error: str | None = None,
) -> Markup:
    """A labelled form input with an optional validation message."""
    field_id = f"field-{name}"
    input_class = "form-control is-invalid" if error else "form-control"
    attrs = {
        "value": "" if value is None else value,
        "placeholder": placeholder,
        "required": required,
    }
    parts = ['<div class="form-group">']
    if label:
        parts.append(f'<label for="{_e(field_id)}">{_e(label)}</label>')
    parts.append(
        f'<input class="{input_class}" id="{_e(field_id)}" name="{_e(name)}" '
        f'type="{_e(type)}"{_attrs(attrs)}>'
    )
    if error:
        parts.append(f'<div class="invalid-feedback">{_e(error)}</div>')
    parts.append("</div>")
    return Markup("".join(parts))


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


def nav_link(href: str, label: str, *, active: bool = False) -> Markup:
    """A navigation list item; the active item gets ``aria-current``."""
    item_class = "nav-item active" if active else "nav-item"
    current = ' aria-current="page"' if active else ""
    return Markup(
        f'<li class="{item_class}"><a class="nav-link" href="{_e(href)}"{current}>'
        f"{_e(label)}</a></li>"
    )


def nav_action(action: str, label: str) -> Markup:
    """A navigation item that POSTs to *action* (logout and similar)."""
    return Markup(
        f'<li class="nav-item"><form class="nav-form" method="post" action="{_e(action)}">'
        f'<button class="nav-link btn btn-link" type="submit">{_e(label)}</button>'
        "</form></li>"
    )


def nav_bar(
    brand: str | None,
    links: Iterable[Markup] | None = None,
    *,
    brand_href: str = "/",
) -> Markup:
    """The site navigation bar. *links* are prebuilt ``nav_link``/``nav_action`` items."""
    items = "".join(str(link) for link in links or ())
    return Markup(
        '<nav class="navbar navbar-expand-lg navbar-dark bg-dark" id="site-nav">'
        f'<a class="navbar-brand" href="{_e(brand_href)}">{_e(brand)}</a>'
        f'<ul class="navbar-nav ml-auto">{items}</ul>'
        "</nav>"
    )


def footer(text: str | None = None) -> Markup:
    """The site footer. Renders an empty footer element when *text* is empty."""
    inner = f'<span class="text-muted">{_e(text)}</span>' if text else ""
    return Markup(f'<footer class="footer" id="site-footer">{inner}</footer>')


# Views offered by a panel navbar. (view, label, icon); graph views
# only make sense while viewing a record.
PANEL_VIEWS: tuple[tuple[str, str, str | None], ...] = (
    ("Grid", "", "mdi-grid"),
    ("2D Graph", "2D", None),
    ("3D Graph", "3D", None),
)


def panel_navbar(
    title: str,
    *,
    icon_name: str | None = None,
    view: str = "Grid",
    action: str | None = None,
    views: Sequence[tuple[str, str, str | None]] = PANEL_VIEWS,
    children: Markup | None = None,
) -> Markup:
    """Navigation bar of a visual panel with view toggles.

    The grid toggle is always offered; the other views are offered only
    while ``action == "view"``. The toggle for *view* is marked active.
    Each toggle carries ``data-view`` so a client script can switch views.
    """
    available = views if action == "view" else views[:1]
    items: list[str] = []
    for view_name, label, view_icon in available:
        item_class = "nav-item active" if view_name == view else "nav-item"
        inner = str(icon(view_icon)) if view_icon else _e(label)
        items.append(
            f'<li class="{item_class}"><button class="nav-link bg-dark border-0" '
            f'type="button" data-view="{_e(view_name)}" '
            f'aria-label="{_e(view_name)}">{inner}</button></li>'
        )

    heading = f"{icon(icon_name)} {_e(title)}" if icon_name else _e(title)
    return Markup(
        '<div class="visual-panel-navbar navbar navbar-expand-lg navbar-dark bg-dark">'
        f'<span class="navbar-brand visual-panel-title">{heading}</span>'
        f'<ul class="navbar-nav ml-auto">{"".join(items)}</ul>'
        f"{children or ''}"
        "</div>"
    )
