"""Event → template mapping.

Each bound element tells the server which fragment to re-render when an
event fires. This module collects those pairs from ``@fir:`` attribute
keys into an ``EventTemplates`` map::

    <div @fir:create:ok::todo-list="$fir.replace()">   {"create:ok": {"todo-list"}}
    <p @fir:update:pending="...">                       {"update:pending": {"-"}}

``"-"`` stands for the bound element itself, without a named block.
Malformed keys are logged and skipped; one bad attribute never fails a
whole file.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping

from bs4 import BeautifulSoup

from fir.errors import InvalidTemplateNameError
from fir.expression.nodes import STATES
from fir.filters import get_event_filter
from fir.html.dom import elements, is_event_attr, parse_html, strip_event_prefix

logger = logging.getLogger("fir.templates")

type EventTemplates = dict[str, frozenset[str]]

WHOLE_ELEMENT = "-"
BLOCK_STATES = frozenset({"ok", "error"})
TEMPLATE_NAME_RE = re.compile(r"^[ A-Za-z0-9\-:_]*$")


def validate_template_name(name: str) -> str:
    if not TEMPLATE_NAME_RE.match(name):
        raise InvalidTemplateNameError(name)
    return name


def event_templates_from_attr(key: str) -> EventTemplates:
    """The event map contributed by one attribute key."""
    if not is_event_attr(key):
        return {}
    eventns = strip_event_prefix(key).split(".", 1)[0]
    found: dict[str, set[str]] = {}
    for entry in get_event_filter(eventns):
        entry = entry.strip()
        parts = entry.split("::")
        if len(parts) > 2:
            logger.warning("%s: more than one '::' in %r, skipping", key, entry)
            continue
        event_id = parts[0]
        block = parts[1] if len(parts) == 2 else None
        event_parts = event_id.split(":")
        if len(event_parts) != 2 or not event_parts[0]:
            logger.warning("%s: event %r must be written as event:state, skipping", key, event_id)
            continue
        state = event_parts[1]
        if state not in STATES:
            logger.warning("%s: unknown state %r, skipping", key, state)
            continue
        if block is not None:
            if state not in BLOCK_STATES:
                logger.warning(
                    "%s: a block name is only allowed for ok and error, not %r, skipping",
                    key,
                    state,
                )
                continue
            try:
                validate_template_name(block)
            except InvalidTemplateNameError as exc:
                logger.warning("%s: %s, skipping", key, exc)
                continue
        found.setdefault(event_id, set()).add(block or WHOLE_ELEMENT)
    return {event_id: frozenset(names) for event_id, names in found.items()}


def event_templates_from_soup(soup: BeautifulSoup) -> EventTemplates:
    return merge_event_templates(
        *(
            event_templates_from_attr(key)
            for tag in elements(soup)
            for key in tag.attrs
            if is_event_attr(key)
        )
    )


def event_templates_from_html(content: bytes, path: str = "<string>") -> EventTemplates:
    """The event map of a whole document."""
    if not content:
        return {}
    return event_templates_from_soup(parse_html(content, path))


def merge_event_templates(*maps: Mapping[str, Iterable[str]]) -> EventTemplates:
    """Per-event set union. Commutative, associative and idempotent."""
    merged: dict[str, set[str]] = {}
    for event_map in maps:
        for event_id, names in event_map.items():
            merged.setdefault(event_id, set()).update(names)
    return {event_id: frozenset(names) for event_id, names in merged.items()}
