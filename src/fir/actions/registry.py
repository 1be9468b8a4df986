"""Action handler registry.

Every ``x-fir-*`` directive maps to one handler. A handler is a plain
value: a kind tag, the directive name and a precedence. Lower precedence
numbers win when several directives sit on one element.

The registry is immutable. ``DEFAULT_REGISTRY`` is built once at import
from ``DEFAULT_HANDLERS``; a duplicate name there fails the import. To
add handlers, derive a new registry::

    registry = DEFAULT_REGISTRY.register(ActionHandler(ActionKind.REDIRECT, "goto", 95))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from fir.errors import DuplicateHandlerError


class ActionKind(Enum):
    LIVE = "live"
    REFRESH = "refresh"
    REMOVE = "remove"
    RUNJS = "runjs"
    DISPATCH = "dispatch"
    TOGGLE_CLASS = "toggle_class"
    TOGGLE_DISABLED = "toggle_disabled"
    RESET = "reset"
    REMOVE_PARENT = "remove_parent"
    APPEND = "append"
    PREPEND = "prepend"
    REDIRECT = "redirect"
    JS = "js"


# Kinds translated alongside the winning directive instead of competing with it.
COMPOSING_KINDS = frozenset({ActionKind.APPEND, ActionKind.PREPEND, ActionKind.JS})


@dataclass(frozen=True, slots=True)
class ActionHandler:
    """A directive name bound to a translation kind."""

    kind: ActionKind
    name: str
    precedence: int

    @property
    def composes(self) -> bool:
        return self.kind in COMPOSING_KINDS


DEFAULT_HANDLERS: tuple[ActionHandler, ...] = (
    ActionHandler(ActionKind.LIVE, "live", 10),
    ActionHandler(ActionKind.REFRESH, "refresh", 20),
    ActionHandler(ActionKind.REMOVE, "remove", 30),
    ActionHandler(ActionKind.RUNJS, "runjs", 32),
    ActionHandler(ActionKind.DISPATCH, "dispatch", 33),
    ActionHandler(ActionKind.TOGGLE_CLASS, "toggleClass", 33),
    ActionHandler(ActionKind.TOGGLE_DISABLED, "toggle-disabled", 34),
    ActionHandler(ActionKind.RESET, "reset", 35),
    ActionHandler(ActionKind.REMOVE_PARENT, "remove-parent", 40),
    ActionHandler(ActionKind.APPEND, "append", 50),
    ActionHandler(ActionKind.PREPEND, "prepend", 60),
    ActionHandler(ActionKind.REDIRECT, "redirect", 90),
    ActionHandler(ActionKind.JS, "js", 100),
)


class ActionRegistry:
    """Immutable name → handler mapping. Names are case-insensitive."""

    __slots__ = ("_handlers",)

    def __init__(self, handlers: MappingProxyType[str, ActionHandler]) -> None:
        self._handlers = handlers

    @classmethod
    def from_handlers(cls, handlers: Iterable[ActionHandler]) -> ActionRegistry:
        """Build a registry, rejecting duplicate names."""
        table: dict[str, ActionHandler] = {}
        for handler in handlers:
            key = handler.name.lower()
            if key in table:
                raise DuplicateHandlerError(handler.name)
            table[key] = handler
        return cls(MappingProxyType(table))

    def register(self, handler: ActionHandler) -> ActionRegistry:
        """Return a new registry that also contains ``handler``."""
        return ActionRegistry.from_handlers((*self._handlers.values(), handler))

    def get(self, name: str) -> ActionHandler | None:
        return self._handlers.get(name.lower())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._handlers

    def __iter__(self) -> Iterator[ActionHandler]:
        return iter(sorted(self._handlers.values(), key=lambda h: h.precedence))

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        names = ", ".join(h.name for h in self)
        return f"ActionRegistry({names})"


DEFAULT_REGISTRY = ActionRegistry.from_handlers(DEFAULT_HANDLERS)
