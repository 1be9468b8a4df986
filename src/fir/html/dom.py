"""BeautifulSoup helpers shared by the HTML passes.

Templates are parsed with the stdlib-backed ``html.parser`` tree builder,
which leaves fragments as fragments (no ``<html>``/``<body>`` wrapping).
Serialization skips entity substitution so template syntax such as
``{% if a > b %}`` reaches the template engine untouched.
"""

from __future__ import annotations

from collections.abc import Iterator

from bs4 import BeautifulSoup, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.formatter import HTMLFormatter

from fir.errors import TemplateParseError

EVENT_PREFIXES = ("@fir:", "x-on:fir:")

FORMATTER = HTMLFormatter(entity_substitution=None, void_element_close_prefix=None)


def parse_html(content: bytes | str, path: str = "<string>") -> BeautifulSoup:
    """Parse template markup into a tree. ``class`` stays a plain string."""
    markup = decode_markup(content, path) if isinstance(content, bytes) else content
    try:
        return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    except ParserRejectedMarkup as exc:
        raise TemplateParseError(path, str(exc)) from exc


def decode_markup(content: bytes, path: str = "<string>") -> str:
    """Template bytes as text. Anything but UTF-8 is a parse error."""
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TemplateParseError(path, f"not valid UTF-8: {exc}") from exc


def serialize(soup: BeautifulSoup) -> bytes:
    return soup.decode(formatter=FORMATTER).encode("utf-8")


def inner_html(tag: Tag) -> str:
    return tag.decode_contents(formatter=FORMATTER)


def elements(soup: BeautifulSoup | Tag) -> Iterator[Tag]:
    """Every element below ``soup`` in document order."""
    yield from soup.find_all(True)


def is_event_attr(key: str) -> bool:
    return key.startswith(EVENT_PREFIXES)


def strip_event_prefix(key: str) -> str:
    for prefix in EVENT_PREFIXES:
        if key.startswith(prefix):
            return key[len(prefix) :]
    return key
