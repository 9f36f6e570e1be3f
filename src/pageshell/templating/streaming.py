"""Streamed navigation: shell first, resolved outlet second.

A navigation is delivered as two chunks:

    1. The full page shell with the loading card in the outlet
       (instant first paint; nav and footer are already usable)
    2. The settled outlet (resolved page or error card) as a
       ``<template>`` + inline ``<script>`` pair that moves the content
       into place and sets the outlet's ``data-view-state`` to match.

Not-found pages and already settled pages have nothing to swap and are
sent as the shell alone. htmx navigations never stream: the handler
settles them first and answers with the outlet fragment.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pageshell.shell import Shell

logger = logging.getLogger("pageshell.streaming")


def format_oob_script(outlet_html: str, target_id: str, view_state: str) -> str:
    """Wrap outlet HTML as a ``<template>`` + ``<script>`` pair.

    The script replaces the target's children with the template content
    and writes *view_state* to the target's ``data-view-state``.
    """
    template_id = f"_pageshell_swap_{target_id}"
    return (
        f'<template id="{template_id}">{outlet_html}</template>'
        f"<script>"
        f"(function(){{var t=document.getElementById({json.dumps(template_id)}),"
        f"e=document.getElementById({json.dumps(target_id)});"
        f"if(t&&e){{e.innerHTML='';e.appendChild(t.content.cloneNode(true));"
        f"e.dataset.viewState={json.dumps(view_state)};"
        f"t.remove();}}}})();"
        f"</script>"
    )


async def render_navigation(shell: Shell) -> AsyncIterator[str]:
    """Stream the shell's current navigation.

    The caller has already called ``shell.navigate()``.
    """
    page = shell.navigator.page
    yield shell.render()
    if page is None or not page.deferred.pending:
        return

    await shell.navigator.settle()
    if shell.navigator.page is not page:
        # Superseded by a newer navigation on this shell; its stream owns the outlet
        logger.debug("Navigation to %r superseded before it settled", page.path)
        return
    yield format_oob_script(
        str(shell.render_outlet()),
        shell.config.outlet_id,
        page.state.presented,
    )
