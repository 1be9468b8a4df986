"""Compiler and route configuration.

Both are frozen dataclasses: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fir.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Settings shared by every route compiled with this config.

    All fields have sensible defaults. Override what you need::

        config = CompilerConfig(template_dir="views", workers=4)
    """

    # Sources
    template_dir: str | Path = "templates"
    extensions: tuple[str, ...] = (".html", ".tmpl")

    # Scan pool size (0 = auto-detect from CPU count)
    workers: int = 0

    # kida environment
    autoescape: bool = True
    debug: bool = False
    filters: dict[str, Callable[..., Any]] = field(default_factory=dict)
    globals: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.workers < 0:
            msg = f"workers must be >= 0, got {self.workers}"
            raise ConfigurationError(msg)
        for ext in self.extensions:
            if not ext.startswith("."):
                msg = f"extension {ext!r} must start with '.'"
                raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class RouteConfig:
    """Which templates make up one route.

    ``content`` and ``layout`` are either paths known to the template
    source or inline template strings. When a layout is given, the
    content template renders first and the result is passed to the
    layout as ``Markup`` under the ``content_block`` context key.
    """

    content: str = ""
    layout: str = ""
    partials: tuple[str, ...] = ()
    content_block: str = "content"

    def __post_init__(self) -> None:
        if not self.content and not self.layout:
            msg = "route needs content, a layout, or both"
            raise ConfigurationError(msg)
