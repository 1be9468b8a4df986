"""AST nodes for fir event expressions.

Nodes are transient: created per parse call and discarded once the
expression has been translated into canonical attributes.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_STATE = "ok"
STATES = frozenset({"ok", "error", "pending", "done"})


@dataclass(frozen=True, slots=True)
class EventExpression:
    """One event with an optional state filter: ``create:ok.debounce``

    ``name`` is an identifier: it starts with a letter or ``_``, so
    ``2fa:ok`` is rejected by the parser even though bracket filters
    such as ``[2fa:ok]`` accept a leading digit.
    """

    name: str
    state: str | None = None
    modifiers: tuple[str, ...] = ()

    @property
    def event_id(self) -> str:
        """``name:state``, with a missing state read as ``ok``."""
        return f"{self.name}:{self.state or DEFAULT_STATE}"

    def __str__(self) -> str:
        text = self.name
        if self.state:
            text += f":{self.state}"
        return text + "".join(f".{m}" for m in self.modifiers)


@dataclass(frozen=True, slots=True)
class Target:
    """Where a binding sends its result: ``->template=>action``"""

    template: str | None = None
    action: str | None = None

    def __str__(self) -> str:
        text = ""
        if self.template is not None:
            text += f"->{self.template}"
        if self.action is not None:
            text += f"=>{self.action}"
        return text


@dataclass(frozen=True, slots=True)
class Binding:
    """Event expressions that share exactly one target."""

    events: tuple[EventExpression, ...]
    target: Target | None = None

    def __str__(self) -> str:
        text = ",".join(str(e) for e in self.events)
        return text + (str(self.target) if self.target else "")


@dataclass(frozen=True, slots=True)
class Expression:
    """A ``;``-delimited unit of bindings. Expressions never share targets."""

    bindings: tuple[Binding, ...]

    @property
    def events(self) -> tuple[EventExpression, ...]:
        return tuple(e for b in self.bindings for e in b.events)

    def __str__(self) -> str:
        return ",".join(str(b) for b in self.bindings)
