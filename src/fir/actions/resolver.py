"""Directive resolution: ``x-fir-*`` attributes to canonical ``@fir:`` ones.

Per element, every recognized directive is collected and ordered by
precedence. Only the directives sharing the lowest precedence present are
translated; ``append`` and ``prepend`` always translate alongside them.
``x-fir-js:<name>`` and ``x-fir-action-<name>`` attributes only feed the
actions map. All recognized directives are removed from the element.

Example::

    <button x-fir-live="click=>doClick" x-fir-js:doClick="handleMyClick()">

becomes::

    <button @fir:click:ok="handleMyClick()">
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import Tag

from fir.actions.handlers import translate
from fir.actions.info import ActionInfo, directive_name, parse_action_key
from fir.actions.registry import DEFAULT_REGISTRY, ActionHandler, ActionKind, ActionRegistry
from fir.errors import MissingParameterError
from fir.html.dom import elements, parse_html, serialize

logger = logging.getLogger("fir.actions")

_ALWAYS_TRANSLATED = frozenset({ActionKind.APPEND, ActionKind.PREPEND})


def process_render_attributes(
    content: bytes,
    registry: ActionRegistry = DEFAULT_REGISTRY,
    path: str = "<string>",
) -> bytes:
    """Rewrite every element's directives. Unchanged markup is returned as-is."""
    soup = parse_html(content, path)
    changed = False
    for tag in elements(soup):
        changed = resolve_element(tag, registry) or changed
    if not changed:
        return content
    return serialize(soup)


def resolve_element(tag: Tag, registry: ActionRegistry = DEFAULT_REGISTRY) -> bool:
    """Rewrite one element in place. Returns whether anything changed."""
    found: list[tuple[ActionHandler, ActionInfo]] = []
    actions: dict[str, str] = {}
    for key, value in tag.attrs.items():
        name = directive_name(key)
        handler = registry.get(name) if name else None
        if handler is None:
            continue
        info = parse_action_key(key, value or "")
        if handler.kind is ActionKind.JS:
            if not info.params:
                raise MissingParameterError(key, "an action name is required")
            actions[info.params[0].lower()] = info.value
        found.append((handler, info))
    if not found:
        return False

    lines = translate_directives(found, actions)
    for _, info in found:
        del tag.attrs[info.attr_name]
    for key, value in parse_translated(lines):
        if key not in tag.attrs:
            tag.attrs[key] = value
    return True


def translate_directives(
    found: Sequence[tuple[ActionHandler, ActionInfo]],
    actions: dict[str, str],
) -> list[str]:
    """Translate the winning directives into deduplicated attribute lines."""
    exclusive = [pair for pair in found if not pair[0].composes]
    winners = []
    if exclusive:
        top = min(handler.precedence for handler, _ in exclusive)
        for handler, info in exclusive:
            if handler.precedence == top:
                winners.append((handler, info))
            else:
                logger.debug(
                    "ignoring %s: a directive with precedence %d wins",
                    info.attr_name,
                    top,
                )
    winners.extend(pair for pair in found if pair[0].kind in _ALWAYS_TRANSLATED)
    winners.sort(key=lambda pair: pair[0].precedence)

    lines: list[str] = []
    for handler, info in winners:
        for line in translate(handler, info, actions).splitlines():
            line = line.strip()
            if line and line not in lines:
                lines.append(line)
    return lines


def parse_translated(lines: Sequence[str]) -> list[tuple[str, str]]:
    """Split ``key="value"`` lines back into attribute pairs."""
    pairs = []
    for line in lines:
        key, sep, value = line.partition("=")
        if not sep:
            continue
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        pairs.append((key.strip(), value))
    return pairs
