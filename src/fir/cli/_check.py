"""``fir check`` — compile a template directory and report.

Prints each event with the templates it re-renders, then any errors.
Exits with code 1 if a file failed to compile.
"""

import argparse
import sys
from pathlib import Path

from fir.config import CompilerConfig
from fir.errors import ConfigurationError
from fir.sources import FileSystemSource
from fir.templates.scan import parse_files_sync


def run_check(args: argparse.Namespace) -> None:
    root = Path(args.path)
    if not root.is_dir():
        print(f"Error: {root} is not a directory", file=sys.stderr)
        raise SystemExit(1)
    options: dict[str, object] = {"template_dir": root, "workers": args.workers}
    if args.ext:
        options["extensions"] = tuple(args.ext)
    try:
        config = CompilerConfig(**options)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    source = FileSystemSource(root)
    paths = source.find(config.extensions)
    parsed = parse_files_sync(source, paths, workers=config.workers)

    print(f"{len(paths)} templates, {len(parsed.blocks)} blocks")
    for event_id in sorted(parsed.event_templates):
        names = ", ".join(sorted(parsed.event_templates[event_id]))
        print(f"  {event_id} -> {names}")

    if parsed.errors:
        for error in parsed.errors:
            print(f"Error: {error}", file=sys.stderr)
        raise SystemExit(1)
