"""Action handlers for ``x-fir-*`` directives and the per-element resolver."""

from fir.actions.handlers import translate
from fir.actions.info import ActionInfo, parse_action_key
from fir.actions.registry import (
    DEFAULT_HANDLERS,
    DEFAULT_REGISTRY,
    ActionHandler,
    ActionKind,
    ActionRegistry,
)
from fir.actions.resolver import process_render_attributes, resolve_element

__all__ = [
    "DEFAULT_HANDLERS",
    "DEFAULT_REGISTRY",
    "ActionHandler",
    "ActionInfo",
    "ActionKind",
    "ActionRegistry",
    "parse_action_key",
    "process_render_attributes",
    "resolve_element",
    "translate",
]
