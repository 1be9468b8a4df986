"""Final attribute pass before markup reaches the template engine.

- ``fir-key`` on an element is copied to descendants that bind events.
- ``@fir:[a:ok,b:ok]::blk`` is split into ``@fir:a:ok::blk`` and
  ``@fir:b:ok::blk``.
- Each bound element gets a ``fir-<event>-<state>[--<block>][--<key>]``
  class so the client can address it.
"""

from __future__ import annotations

from bs4 import Tag

from fir.filters import get_event_filter
from fir.html.dom import EVENT_PREFIXES, elements, is_event_attr, parse_html, serialize, strip_event_prefix

KEY_ATTR = "fir-key"


def write_attributes(content: bytes, path: str = "<string>") -> bytes:
    """Finalize every element. Unchanged markup is returned as-is."""
    if not content:
        return content
    soup = parse_html(content, path)
    tags = list(elements(soup))
    changed = False
    for tag in tags:
        changed = set_key_to_children(tag) or changed
    for tag in tags:
        changed = expand_bracket_attributes(tag) or changed
        changed = add_event_classes(tag) or changed
    if not changed:
        return content
    return serialize(soup)


def set_key_to_children(tag: Tag) -> bool:
    key = tag.attrs.get(KEY_ATTR)
    if key is None:
        return False
    changed = False
    for child in tag.find_all(True):
        if KEY_ATTR in child.attrs or not _binds_events(child):
            continue
        child.attrs[KEY_ATTR] = key
        changed = True
    return changed


def expand_bracket_attributes(tag: Tag) -> bool:
    """Replace bracketed event keys with one attribute per event."""
    if not any(is_event_attr(k) and "[" in k for k in tag.attrs):
        return False
    attrs: dict[str, str] = {}
    changed = False
    for key, value in tag.attrs.items():
        if not (is_event_attr(key) and "[" in key):
            attrs.setdefault(key, value)
            continue
        prefix = _prefix(key)
        raw = strip_event_prefix(key)
        expanded = get_event_filter(raw)
        if expanded == [raw]:
            attrs.setdefault(key, value)
            continue
        for eventns in expanded:
            new_key = prefix + eventns
            if new_key not in tag.attrs:
                attrs.setdefault(new_key, value)
        changed = True
    tag.attrs = attrs
    return changed


def add_event_classes(tag: Tag) -> bool:
    names = [class_name(k, tag.attrs.get(KEY_ATTR)) for k in tag.attrs if is_event_attr(k)]
    names = [n for n in names if n]
    if not names:
        return False
    classes = str(tag.attrs.get("class", "")).split()
    added = False
    for name in names:
        if name not in classes:
            classes.append(name)
            added = True
    if added:
        tag.attrs["class"] = " ".join(classes)
    return added


def class_name(key: str, fir_key: str | None = None) -> str | None:
    """``@fir:create:ok::todo.prevent`` -> ``fir-create-ok--todo``.

    Returns ``None`` for keys that still carry a bracket group.
    """
    eventns = strip_event_prefix(key).split(".", 1)[0]
    if "[" in eventns:
        return None
    name = "fir-" + eventns.replace(":", "-")
    if fir_key:
        name += "--" + fir_key.replace(" ", "-")
    return name


def _binds_events(tag: Tag) -> bool:
    return any(k.startswith(("@", "x-on")) for k in tag.attrs)


def _prefix(key: str) -> str:
    return next(p for p in EVENT_PREFIXES if key.startswith(p))
