"""Parsing of ``x-fir-*`` directive keys into ``ActionInfo``.

Key grammar::

    x-fir-<name>[:<param> | :[<p1>,<p2>,...]][.<modifier>...]

Examples::

    x-fir-refresh                 -> refresh, ()
    x-fir-append:todo             -> append, ("todo",)
    x-fir-dispatch:[open,close]   -> dispatch, ("open", "close")
    x-fir-refresh.once.passive    -> refresh, ()
    x-fir-action-save             -> js, ("save",)
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fir.errors import ExpressionSyntaxError

DIRECTIVE_PREFIX = "x-fir-"
ACTION_PREFIX = "action-"

_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")
_PARAM_RE = re.compile(r"^[A-Za-z0-9_-]+$")


@dataclass(frozen=True, slots=True)
class ActionInfo:
    """One directive attribute occurrence, parsed."""

    attr_name: str
    action_name: str
    params: tuple[str, ...] = ()
    value: str = ""


def is_directive(attr_name: str) -> bool:
    return attr_name.lower().startswith(DIRECTIVE_PREFIX)


def parse_action_key(attr_name: str, value: str = "") -> ActionInfo:
    """Parse a directive key.

    ``x-fir-action-<name>`` is the long form of ``x-fir-js:<name>``.

    Raises:
        ExpressionSyntaxError: If the key does not follow the grammar.
    """
    key = attr_name.strip()
    if not is_directive(key):
        raise ExpressionSyntaxError(f"directive must start with {DIRECTIVE_PREFIX!r}", key)
    rest = key[len(DIRECTIVE_PREFIX) :]
    match = _NAME_RE.match(rest)
    if match is None:
        raise ExpressionSyntaxError("missing directive name", key)
    name = match.group().lower()
    rest = rest[match.end() :]

    if name.startswith(ACTION_PREFIX) and len(name) > len(ACTION_PREFIX):
        return ActionInfo(key, "js", (name[len(ACTION_PREFIX) :],), value)

    params: tuple[str, ...] = ()
    if rest.startswith(":"):
        params, rest = _parse_params(rest[1:], key)
    if rest and not rest.startswith("."):
        raise ExpressionSyntaxError("unexpected text in directive", rest)
    return ActionInfo(key, name, params, value)


def _parse_params(text: str, key: str) -> tuple[tuple[str, ...], str]:
    """Split ``text`` into its parameters and the remaining modifier tail."""
    if text.startswith("["):
        end = text.find("]")
        if end < 0:
            raise ExpressionSyntaxError("unterminated parameter list", key)
        inner = "".join(text[1:end].split())
        if not inner:
            return (), text[end + 1 :]
        params = inner.split(",")
        for param in params:
            if not _PARAM_RE.match(param):
                raise ExpressionSyntaxError("invalid parameter list", text[: end + 1])
        return tuple(params), text[end + 1 :]
    match = _NAME_RE.match(text)
    if match is None:
        raise ExpressionSyntaxError("missing parameter after ':'", key)
    return (match.group(),), text[match.end() :]


def directive_name(attr_name: str) -> str | None:
    """The handler name a directive key refers to, without validating the rest."""
    if not is_directive(attr_name):
        return None
    match = _NAME_RE.match(attr_name[len(DIRECTIVE_PREFIX) :])
    if match is None:
        return None
    name = match.group().lower()
    if name.startswith(ACTION_PREFIX) and len(name) > len(ACTION_PREFIX):
        return "js"
    return name
