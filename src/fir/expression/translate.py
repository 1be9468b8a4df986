"""Translate parsed expressions into canonical ``@fir:`` attributes.

The client runtime only understands one attribute shape::

    @fir:<event>:<state>[::<template>][.<modifier>]*="<value>"
    @fir:[<e1>:<s1>,<e2>:<s2>][::<template>][.<modifier>]*="<value>"

Every helper here returns newline-separated attribute lines in that
form; the directive resolver parses them back into attributes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from fir.expression.nodes import EventExpression
from fir.expression.parser import parse_expressions

DEFAULT_ACTION = "$fir.replace()"


def format_attribute(
    events: Iterable[str],
    value: str,
    *,
    template: str | None = None,
    modifiers: Iterable[str] = (),
) -> str:
    """Build one canonical attribute line.

    More than one event id produces the bracketed multi-event form.
    """
    ids = _ordered(events)
    eventns = ids[0] if len(ids) == 1 else "[" + ",".join(ids) + "]"
    if template:
        eventns += f"::{template}"
    mods = "".join(f".{m}" for m in _ordered(modifiers))
    return f'@fir:{eventns}{mods}="{value}"'


def resolve_action(action: str | None, actions: Mapping[str, str] | None) -> str:
    """Map an action name to its JS snippet.

    Names are matched case-insensitively. An unknown name is returned
    as-is so the page can reference handlers defined elsewhere.
    """
    if not action:
        return DEFAULT_ACTION
    if actions:
        for key, value in actions.items():
            if key.lower() == action.lower():
                return value
    return action


def translate_render_expression(
    text: str, actions: Mapping[str, str] | None = None
) -> str:
    """Translate an ``x-fir-live`` value, one line per expression.

    All events of an expression share a single attribute. When several
    bindings name a template or action, the last one wins.

    Example::

        >>> translate_render_expression("create:ok.debounce,update:error->todo=>save")
        '@fir:[create:ok,update:error]::todo.debounce="save"'
    """
    lines = []
    for expression in parse_expressions(text):
        template = action = None
        for binding in expression.bindings:
            if binding.target is None:
                continue
            if binding.target.template:
                template = binding.target.template
            if binding.target.action:
                action = binding.target.action
        events = expression.events
        lines.append(
            format_attribute(
                (e.event_id for e in events),
                resolve_action(action, actions),
                template=template,
                modifiers=_modifiers(events),
            )
        )
    return "\n".join(lines)


def translate_event_expression(
    text: str,
    value: str,
    template: str | None = None,
    extra_modifiers: Iterable[str] = (),
) -> str:
    """Translate a fixed-action directive value, one line per binding.

    Targets written in ``text`` are ignored: the caller decides the value
    and template. ``extra_modifiers`` land after the author's own.
    """
    extra = tuple(extra_modifiers)
    lines = []
    for expression in parse_expressions(text):
        for binding in expression.bindings:
            lines.append(
                format_attribute(
                    (e.event_id for e in binding.events),
                    value,
                    template=template,
                    modifiers=(*_modifiers(binding.events), *extra),
                )
            )
    return "\n".join(lines)


def first_template(text: str) -> str | None:
    """The first ``->template`` written anywhere in ``text``."""
    for expression in parse_expressions(text):
        for binding in expression.bindings:
            if binding.target and binding.target.template:
                return binding.target.template
    return None


def _modifiers(events: Iterable[EventExpression]) -> list[str]:
    return [m for e in events for m in e.modifiers]


def _ordered(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))
