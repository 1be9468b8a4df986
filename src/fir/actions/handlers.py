"""Translation of one directive into canonical attribute lines.

``translate`` is a single ``match`` over ``ActionKind``; each arm decides
the client call and which template, if any, the attribute names.
"""

from __future__ import annotations

from collections.abc import Mapping

from fir.actions.info import ActionInfo
from fir.actions.registry import ActionHandler, ActionKind
from fir.errors import MissingParameterError
from fir.expression.translate import (
    first_template,
    translate_event_expression,
    translate_render_expression,
)

NOHTML = "nohtml"

# Kinds with a fixed client call and no server HTML in the reply.
_FIXED_CALLS = {
    ActionKind.REFRESH: ("$fir.replace()", ()),
    ActionKind.REMOVE: ("$fir.removeEl()", (NOHTML,)),
    ActionKind.REMOVE_PARENT: ("$fir.removeParentEl()", (NOHTML,)),
    ActionKind.RESET: ("$el.reset()", (NOHTML,)),
    ActionKind.TOGGLE_DISABLED: ("$fir.toggleDisabled()", (NOHTML,)),
}


def translate(
    handler: ActionHandler,
    info: ActionInfo,
    actions: Mapping[str, str],
) -> str:
    """Translate ``info`` with ``handler``. May return several lines, or none.

    ``actions`` maps lower-cased action names to JS snippets collected
    from ``x-fir-js:*`` attributes on the same element.

    Raises:
        ExpressionSyntaxError: If the directive value does not parse.
        MissingParameterError: If a required parameter is absent or blank.
    """
    match handler.kind:
        case ActionKind.LIVE:
            return translate_render_expression(info.value, actions)
        case (
            ActionKind.REFRESH
            | ActionKind.REMOVE
            | ActionKind.REMOVE_PARENT
            | ActionKind.RESET
            | ActionKind.TOGGLE_DISABLED
        ):
            call, extra = _FIXED_CALLS[handler.kind]
            return translate_event_expression(info.value, call, extra_modifiers=extra)
        case ActionKind.RUNJS:
            name = _single_param(info)
            snippet = actions.get(name.lower(), "")
            if not snippet.strip():
                raise MissingParameterError(
                    info.attr_name, f"no x-fir-js:{name} snippet on this element"
                )
            return translate_event_expression(info.value, snippet)
        case ActionKind.DISPATCH:
            params = _required_params(info)
            call = "$dispatch({})".format(",".join(f"'{p}'" for p in params))
            return translate_event_expression(
                info.value, call, first_template(info.value), (NOHTML,)
            )
        case ActionKind.TOGGLE_CLASS:
            params = _required_params(info)
            call = "$fir.toggleClass({})".format(",".join(f"'{p}'" for p in params))
            return translate_event_expression(info.value, call)
        case ActionKind.APPEND:
            return translate_event_expression(info.value, "$fir.appendEl()", _single_param(info))
        case ActionKind.PREPEND:
            return translate_event_expression(info.value, "$fir.prependEl()", _single_param(info))
        case ActionKind.REDIRECT:
            url = info.params[0].strip() if info.params else ""
            if not url.startswith("/"):
                url = "/" + url
            return translate_event_expression(info.value, f"$fir.redirect('{url}')")
        case ActionKind.JS:
            return ""


def _single_param(info: ActionInfo) -> str:
    if len(info.params) != 1 or not info.params[0].strip():
        raise MissingParameterError(info.attr_name, "exactly one parameter is required")
    return info.params[0].strip()


def _required_params(info: ActionInfo) -> tuple[str, ...]:
    if not info.params:
        raise MissingParameterError(info.attr_name, "at least one parameter is required")
    for position, param in enumerate(info.params):
        if not param.strip():
            raise MissingParameterError(info.attr_name, f"empty parameter at position {position}")
    return info.params
