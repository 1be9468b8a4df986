"""Per-file template compilation and the concurrent scan over a file set.

Each file runs the full markup pipeline on its own:

1. directives → canonical ``@fir:`` attributes
2. inline blocks extracted and named
3. event map collected from the attribute keys
4. attributes finalized (classes, expanded brackets, keys)

Files are scanned on a bounded pool. Every task sends its own
``FileParseResult`` back over a memory stream; nothing is shared while
the tasks run. Results are merged once all tasks have finished::

    parsed = await parse_files(FileSystemSource("templates"), ["index.html"])
    parsed.event_templates["create:ok"]
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from functools import partial

import anyio
import anyio.to_thread

from fir.actions.registry import DEFAULT_REGISTRY, ActionRegistry
from fir.actions.resolver import process_render_attributes
from fir.errors import FirError, TemplateParseError
from fir.html.blocks import extract_templates
from fir.html.finalize import write_attributes
from fir.sources import TemplateSource
from fir.templates.events import EventTemplates, event_templates_from_html, merge_event_templates

logger = logging.getLogger("fir.templates")


@dataclass(frozen=True, slots=True)
class FileParseResult:
    """Outcome of compiling one file. ``error`` is set instead of raising."""

    name: str
    content: bytes = b""
    event_templates: EventTemplates = field(default_factory=dict)
    blocks: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None


@dataclass(frozen=True, slots=True)
class ParsedFiles:
    """Merged outcome of a scan. Partial when ``errors`` is not empty."""

    files: dict[str, bytes]
    event_templates: EventTemplates
    blocks: dict[str, str]
    errors: tuple[Exception, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


def process_markup(
    name: str,
    content: bytes,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> FileParseResult:
    """Run the markup pipeline on one file's content.

    Raises:
        FirError: On a directive that does not translate or markup that
            does not parse.
    """
    rewritten = process_render_attributes(content, registry, name)
    rewritten, blocks = extract_templates(rewritten, name)
    event_templates = event_templates_from_html(rewritten, name)
    rewritten = write_attributes(rewritten, name)
    blocks = {
        block: write_attributes(html.encode("utf-8"), name).decode("utf-8")
        for block, html in blocks.items()
    }
    logger.debug("%s: %d events, %d blocks", name, len(event_templates), len(blocks))
    return FileParseResult(name, rewritten, event_templates, blocks)


def scan_file(
    source: TemplateSource,
    path: str,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> FileParseResult:
    """Read and compile one file, capturing any failure on the result."""
    try:
        name, content = source.read(path)
    except OSError as exc:
        logger.error("%s: cannot read template: %s", path, exc)
        return FileParseResult(path, error=TemplateParseError(path, str(exc)))
    return compile_file(name, content, registry)


def compile_file(
    name: str,
    content: bytes,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> FileParseResult:
    """``process_markup`` with any failure captured on the result."""
    try:
        return process_markup(name, content, registry)
    except FirError as exc:
        exc.add_note(f"while compiling {name}")
        logger.error("%s: %s", name, exc)
        return FileParseResult(name, error=exc)


def merge_results(results: Iterable[FileParseResult]) -> ParsedFiles:
    """Fold per-file results into one ``ParsedFiles``. Failed files add only their error."""
    files: dict[str, bytes] = {}
    blocks: dict[str, str] = {}
    event_maps = []
    errors = []
    for result in results:
        if result.error is not None:
            errors.append(result.error)
            continue
        files[result.name] = result.content
        blocks.update(result.blocks)
        event_maps.append(result.event_templates)
    return ParsedFiles(files, merge_event_templates(*event_maps), blocks, tuple(errors))


def merge_parsed(*parsed: ParsedFiles) -> ParsedFiles:
    """Combine several scans. Errors keep their order."""
    files: dict[str, bytes] = {}
    blocks: dict[str, str] = {}
    for item in parsed:
        files.update(item.files)
        blocks.update(item.blocks)
    return ParsedFiles(
        files,
        merge_event_templates(*(item.event_templates for item in parsed)),
        blocks,
        tuple(error for item in parsed for error in item.errors),
    )


async def parse_files(
    source: TemplateSource,
    paths: Sequence[str],
    *,
    workers: int = 0,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> ParsedFiles:
    """Compile ``paths`` concurrently, one task per file.

    At most ``workers`` files (default: CPU count) are processed at once.
    A failing file never cancels the others; its error is reported on the
    returned ``ParsedFiles`` next to what the other files contributed.
    """
    limiter = anyio.CapacityLimiter(workers or os.cpu_count() or 1)
    send, receive = anyio.create_memory_object_stream[FileParseResult](
        max_buffer_size=max(len(paths), 1)
    )

    async def scan(path: str) -> None:
        result = await anyio.to_thread.run_sync(
            scan_file, source, path, registry, limiter=limiter
        )
        await send.send(result)

    async with receive:
        async with send:
            async with anyio.create_task_group() as tg:
                for path in paths:
                    tg.start_soon(scan, path)
        results = [result async for result in receive]

    # Merge in request order so "first error" does not depend on scheduling.
    order = {path: i for i, path in enumerate(paths)}
    results.sort(key=lambda r: order.get(r.name, len(order)))
    return merge_results(results)


def parse_files_sync(
    source: TemplateSource,
    paths: Sequence[str],
    *,
    workers: int = 0,
    registry: ActionRegistry = DEFAULT_REGISTRY,
) -> ParsedFiles:
    """Blocking wrapper around ``parse_files`` for callers without an event loop."""
    return anyio.run(partial(parse_files, source, paths, workers=workers, registry=registry))
