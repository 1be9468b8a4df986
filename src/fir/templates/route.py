"""Route template sets and their cache.

A route is a content template, an optional layout and any partials.
``compile_route`` runs every file through the markup pipeline, merges the
event maps and builds the kida environment. ``RouteTemplateCache`` keeps
the result behind a read-write lock: renders read it, ``reload`` swaps in
a freshly compiled one.

Example::

    cache = RouteTemplateCache(
        RouteConfig(content="todos.html", layout="layout.html"),
        FileSystemSource("templates"),
    )
    html = cache.get().render({"todos": todos})
    fragments = cache.get().render_event("create:ok", {"todos": todos})
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kida import Environment
from kida.utils.html import Markup

from fir._internal.rwlock import ReadWriteLock
from fir.actions.registry import DEFAULT_REGISTRY, ActionRegistry
from fir.config import CompilerConfig, RouteConfig
from fir.errors import TemplateCompileError
from fir.sources import FileSystemSource, TemplateSource
from fir.templates.environment import build_environment
from fir.templates.events import WHOLE_ELEMENT, EventTemplates
from fir.templates.scan import compile_file, merge_parsed, merge_results, parse_files_sync

logger = logging.getLogger("fir.templates")

INLINE_LAYOUT = "__fir_layout__.html"
INLINE_CONTENT = "__fir_content__.html"


@dataclass(frozen=True, slots=True)
class CompiledRoute:
    """Everything needed to render a route and its event fragments."""

    environment: Environment
    entry: str
    layout: str | None
    content_block: str
    event_templates: EventTemplates
    blocks: dict[str, str]
    templates: frozenset[str]

    def lookup(self, event_id: str) -> frozenset[str]:
        """Template and block names to re-render when ``event_id`` fires."""
        return self.event_templates.get(event_id, frozenset())

    def render(self, context: Mapping[str, Any] | None = None) -> str:
        """Render the full page. Content is placed into the layout, if any."""
        ctx = dict(context or {})
        html = self.environment.get_template(self.entry).render(ctx)
        if self.layout is None:
            return html
        ctx[self.content_block] = Markup(html)
        return self.environment.get_template(self.layout).render(ctx)

    def render_template(self, name: str, context: Mapping[str, Any] | None = None) -> str:
        """Render one block, partial, or named ``{% block %}`` of the entry template."""
        ctx = dict(context or {})
        if name in self.blocks or name in self.templates:
            return self.environment.get_template(name).render(ctx)
        return self.environment.get_template(self.entry).render_block(name, ctx)

    def render_event(
        self, event_id: str, context: Mapping[str, Any] | None = None
    ) -> dict[str, str]:
        """Render every named fragment bound to ``event_id``.

        The whole-element marker ``"-"`` has no fragment and is skipped.
        """
        return {
            name: self.render_template(name, context)
            for name in sorted(self.lookup(event_id))
            if name != WHOLE_ELEMENT
        }


def compile_route(
    route: RouteConfig,
    source: TemplateSource | None = None,
    config: CompilerConfig | None = None,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> CompiledRoute:
    """Compile every template of ``route``.

    ``route.content`` and ``route.layout`` name files when ``source`` has
    them and are otherwise taken as inline template text. Without a
    ``source``, templates are read from ``config.template_dir``.

    Raises:
        TemplateCompileError: If any file fails; carries all errors and
            the partial event map.
    """
    config = config or CompilerConfig()
    if source is None:
        source = FileSystemSource(config.template_dir)
    paths: list[str] = []
    inline: dict[str, bytes] = {}

    def add(setting: str, inline_name: str) -> str | None:
        if not setting:
            return None
        if source.exists(setting):
            if setting not in paths:
                paths.append(setting)
            return setting
        inline[inline_name] = setting.encode("utf-8")
        return inline_name

    layout = add(route.layout, INLINE_LAYOUT)
    content = add(route.content, INLINE_CONTENT)
    for partial_path in route.partials:
        if partial_path not in paths:
            paths.append(partial_path)

    parsed = parse_files_sync(source, paths, workers=config.workers, registry=registry)
    inline_parsed = merge_results(
        compile_file(name, markup, registry) for name, markup in inline.items()
    )
    parsed = merge_parsed(parsed, inline_parsed)
    if parsed.errors:
        raise TemplateCompileError(parsed.errors, parsed.event_templates)

    env = build_environment(parsed.files, parsed.blocks, config)
    entry = content or layout
    logger.debug(
        "compiled route %s: %d files, %d blocks, %d events",
        entry,
        len(parsed.files),
        len(parsed.blocks),
        len(parsed.event_templates),
    )
    return CompiledRoute(
        environment=env,
        entry=entry,
        layout=layout if content else None,
        content_block=route.content_block,
        event_templates=parsed.event_templates,
        blocks=parsed.blocks,
        templates=frozenset(parsed.files),
    )


class RouteTemplateCache:
    """A compiled route, rebuilt wholesale on ``reload``."""

    __slots__ = ("_compiled", "_config", "_lock", "_registry", "_route", "_source")

    def __init__(
        self,
        route: RouteConfig,
        source: TemplateSource | None = None,
        config: CompilerConfig | None = None,
        registry: ActionRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self._route = route
        self._source = source
        self._config = config or CompilerConfig()
        self._registry = registry
        self._compiled: CompiledRoute | None = None
        self._lock = ReadWriteLock()

    def get(self) -> CompiledRoute:
        """The compiled route, compiling it on first use."""
        with self._lock.read():
            if self._compiled is not None:
                return self._compiled
        with self._lock.write():
            if self._compiled is None:
                self._compiled = self._compile()
            return self._compiled

    def reload(self) -> CompiledRoute:
        """Recompile and replace the cached route.

        On failure the previous route stays cached and the error propagates.
        """
        with self._lock.write():
            self._compiled = self._compile()
            return self._compiled

    def invalidate(self) -> None:
        with self._lock.write():
            self._compiled = None

    def _compile(self) -> CompiledRoute:
        return compile_route(self._route, self._source, self._config, self._registry)

