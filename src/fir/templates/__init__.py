"""Template compilation: event maps, the concurrent file scan and route caching."""

from fir.templates.events import (
    WHOLE_ELEMENT,
    EventTemplates,
    event_templates_from_attr,
    event_templates_from_html,
    merge_event_templates,
)
from fir.templates.route import CompiledRoute, RouteTemplateCache, compile_route
from fir.templates.scan import (
    FileParseResult,
    ParsedFiles,
    parse_files,
    parse_files_sync,
    process_markup,
    scan_file,
)

__all__ = [
    "WHOLE_ELEMENT",
    "CompiledRoute",
    "EventTemplates",
    "FileParseResult",
    "ParsedFiles",
    "RouteTemplateCache",
    "compile_route",
    "event_templates_from_attr",
    "event_templates_from_html",
    "merge_event_templates",
    "parse_files",
    "parse_files_sync",
    "process_markup",
    "scan_file",
]
