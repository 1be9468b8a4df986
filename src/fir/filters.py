"""Bracket event-filter expansion.

``@fir:[create:ok,update:error]::todo`` is shorthand for two attributes,
``@fir:create:ok::todo`` and ``@fir:update:error::todo``. This module
expands the shorthand and validates each member.

Unlike expression parsing, a malformed bracket group is not fatal:
``get_event_filter`` logs it and hands back the raw string unexpanded.
"""

from __future__ import annotations

import logging
import re

from fir.errors import EventFilterFormatError

logger = logging.getLogger("fir.filters")

_BRACKET_RE = re.compile(r"^(?P<before>.*?)\[(?P<contents>.*?)\](?P<after>.*)$", re.DOTALL)
_MEMBER_RE = re.compile(r"^[A-Za-z0-9-]+:(ok|pending|error|done)$")


def expand_event_filter(raw: str) -> tuple[list[str], bool]:
    """Expand the first ``[...]`` group in ``raw``.

    Returns:
        The expanded strings and whether a bracket group was found.
        Without brackets the input comes back as a singleton.

    Raises:
        EventFilterFormatError: If any member is not ``event:state``.
    """
    match = _BRACKET_RE.match(raw)
    if match is None:
        return [raw], False
    contents = "".join(match["contents"].split())
    members = contents.split(",")
    if not all(_MEMBER_RE.match(m) for m in members):
        raise EventFilterFormatError(raw)
    return [f"{match['before']}{m}{match['after']}" for m in members], True


def get_event_filter(raw: str) -> list[str]:
    """Expand ``raw``, falling back to ``[raw]`` when it is malformed."""
    try:
        expanded, _ = expand_event_filter(raw)
    except EventFilterFormatError as exc:
        logger.warning("%s", exc)
        return [raw]
    return expanded
