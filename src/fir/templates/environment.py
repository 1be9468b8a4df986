"""Kida environment for a compiled route.

Every rewritten file and every extracted block becomes a named template
in one ``DictLoader``. Blocks are addressed by their ``fir-<hash>`` name.
"""

from __future__ import annotations

from collections.abc import Mapping

from kida import DictLoader, Environment

from fir.config import CompilerConfig


def build_environment(
    files: Mapping[str, bytes],
    blocks: Mapping[str, str],
    config: CompilerConfig | None = None,
) -> Environment:
    """Create the environment a route renders with.

    ``config.filters`` and ``config.globals`` are merged in on top of
    kida's own.
    """
    config = config or CompilerConfig()
    sources = {name: content.decode("utf-8") for name, content in files.items()}
    sources.update(blocks)
    env = Environment(
        loader=DictLoader(sources),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )
    if config.filters:
        env.update_filters(config.filters)
    for name, value in config.globals.items():
        env.add_global(name, value)
    return env
