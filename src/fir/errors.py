"""Fir exception hierarchy.

Shared across the expression parser, the directive resolver, the block
extractor and the template scanner so every module raises and catches
the same types.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence


class FirError(Exception):
    """Base for all fir-specific errors."""


class ConfigurationError(FirError):
    """Raised when compiler or route configuration is invalid.

    Typically raised while building a ``CompilerConfig``, a ``RouteConfig``
    or an ``ActionRegistry``.
    """


class ExpressionSyntaxError(FirError, ValueError):
    """A fir expression or directive key could not be parsed.

    Fatal to the directive being translated: the file carrying it fails
    to compile and no partial output is produced.
    """

    def __init__(self, message: str, fragment: str = "") -> None:
        self.fragment = fragment
        if fragment:
            message = f"{message}: {fragment!r}"
        super().__init__(message)


class EventFilterFormatError(FirError, ValueError):
    """Bracket contents of an event filter are not ``event:state`` pairs.

    Callers log this and fall back to the unexpanded string.
    """

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(
            f"invalid event filter {raw!r}: expected [event:state,...] "
            "with state one of ok, pending, error, done"
        )


class MissingParameterError(FirError, ValueError):
    """A directive that needs parameters was written without them."""

    def __init__(self, directive: str, detail: str) -> None:
        self.directive = directive
        super().__init__(f"{directive}: {detail}")


class InvalidTemplateNameError(FirError, ValueError):
    """A block or template name contains characters outside the allowed set."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"invalid template name {name!r}: "
            "allowed characters are letters, digits, space, '-', ':' and '_'"
        )


class DuplicateHandlerError(ConfigurationError):
    """Two action handlers were registered under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"action handler {name!r} is already registered")


class TemplateParseError(FirError):
    """A template file could not be read or parsed as HTML."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        super().__init__(f"{path}: {detail}")


class TemplateCompileError(FirError):
    """A route's template set failed to compile.

    Carries every per-file error and whatever event map the files that
    did compile contributed.
    """

    def __init__(
        self,
        errors: Sequence[Exception],
        event_templates: Mapping[str, frozenset[str]] | None = None,
    ) -> None:
        self.errors = tuple(errors)
        self.event_templates = dict(event_templates or {})
        first = self.errors[0] if self.errors else "unknown error"
        extra = f" (+{len(self.errors) - 1} more)" if len(self.errors) > 1 else ""
        super().__init__(f"template compile failed: {first}{extra}")
