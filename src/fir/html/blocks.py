"""Inline block extraction.

An element bound to an event with ``:ok`` or ``:error`` whose children
contain template syntax becomes a named block, so the server can render
just that fragment when the event fires::

    <div @fir:create:ok="$fir.replace()">{{ count }}</div>

becomes::

    <div @fir:create:ok::fir-3f9c0e1a2b4d5e6f="$fir.replace()">{{ count }}</div>

with ``blocks["fir-3f9c0e1a2b4d5e6f"] == "{{ count }}"``.

Block names are derived from a hash of the inner HTML, so identical
fragments share one block and re-running the extraction is a no-op.
"""

from __future__ import annotations

import hashlib
import itertools
import re
import secrets

from fir.html.dom import (
    decode_markup,
    elements,
    inner_html,
    is_event_attr,
    parse_html,
    strip_event_prefix,
)

BLOCK_PREFIX = "fir-"

_PLACEHOLDER_PREFIX = "fir-slot-"
_PLACEHOLDER_RE = re.compile(r"::(fir-slot-[0-9a-f]+-\d+)")
_HASH_NAME_RE = re.compile(r"^fir-[0-9a-f]{16}$")
# An event attribute key followed by "=": @fir:create:ok.prevent=
_EVENT_KEY_RE = re.compile(
    r"(?P<prefix>@fir:|x-on:fir:)(?P<eventns>[^\s=/>\"'.]+)(?P<mods>[^\s=/>\"']*)(?=\s*=)"
)


def hash_id(content: str) -> str:
    """16 hex chars identifying ``content``, ignoring all whitespace."""
    compact = "".join(content.split())
    return hashlib.blake2b(compact.encode("utf-8"), digest_size=8).hexdigest()


def is_template(html: str) -> bool:
    return "{{" in html and "}}" in html


def extract_templates(content: bytes, path: str = "<string>") -> tuple[bytes, dict[str, str]]:
    """Extract inline blocks from ``content``.

    Returns:
        The rewritten markup and a mapping of block name to inner HTML.

    Raises:
        TemplateParseError: If the markup cannot be parsed.
    """
    if not content:
        return content, {}
    text = _add_placeholders(decode_markup(content, path))
    soup = parse_html(text, path)

    blocks: dict[str, str] = {}
    resolved: dict[str, str] = {}
    renamed: dict[str, str] = {}
    # Reverse document order visits descendants before their ancestors,
    # so nested names are final before an outer fragment is hashed.
    for tag in reversed(list(elements(soup))):
        for key in list(tag.attrs):
            name = _block_name(key)
            if name is None:
                continue
            is_placeholder = name.startswith(_PLACEHOLDER_PREFIX)
            if not is_placeholder and not _HASH_NAME_RE.match(name):
                continue
            inner = _rename(_resolve(inner_html(tag), resolved), renamed)
            if not is_template(inner):
                if is_placeholder:
                    resolved[name] = ""
                continue
            block = BLOCK_PREFIX + hash_id(inner)
            blocks[block] = inner
            if is_placeholder:
                resolved[name] = block
            elif block != name:
                renamed[name] = block

    return _rename(_resolve(text, resolved), renamed).encode("utf-8"), blocks


def _add_placeholders(text: str) -> str:
    counter = itertools.count()
    token = secrets.token_hex(4)

    def add(match: re.Match[str]) -> str:
        eventns = match["eventns"]
        if "::" in eventns or not _names_block_states(eventns):
            return match.group()
        placeholder = f"{_PLACEHOLDER_PREFIX}{token}-{next(counter)}"
        return f"{match['prefix']}{eventns}::{placeholder}{match['mods']}"

    return _EVENT_KEY_RE.sub(add, text)


def _names_block_states(eventns: str) -> bool:
    """Whether every event in ``eventns`` has an ``ok`` or ``error`` state."""
    members = eventns.strip("[]").split(",")
    return all(m.strip().endswith((":ok", ":error")) for m in members)


def _block_name(key: str) -> str | None:
    if not is_event_attr(key):
        return None
    eventns = strip_event_prefix(key).split(".", 1)[0]
    if "::" not in eventns:
        return None
    return eventns.split("::", 1)[1]


def _resolve(text: str, resolved: dict[str, str]) -> str:
    """Swap placeholders for their block names; drop the rest."""

    def swap(match: re.Match[str]) -> str:
        block = resolved.get(match[1], "")
        return f"::{block}" if block else ""

    return _PLACEHOLDER_RE.sub(swap, text)


def _rename(text: str, renamed: dict[str, str]) -> str:
    for old, new in renamed.items():
        text = text.replace(f"::{old}", f"::{new}")
    return text
