"""Fir — event-bound templates compiled for server-pushed DOM updates.

Authors bind browser events to template fragments with compact
expressions or declarative ``x-fir-*`` directives::

    <ul @fir:create:ok::todo-list="$fir.replace()">
      {% for todo in todos %}<li>{{ todo.text }}</li>{% end %}
    </ul>
    <button x-fir-live="delete:ok=>remove">Delete</button>

Basic usage::

    from fir import RouteConfig, RouteTemplateCache, FileSystemSource

    cache = RouteTemplateCache(RouteConfig(content="todos.html"), FileSystemSource("templates"))
    page = cache.get()
    page.render({"todos": todos})
    page.lookup("create:ok")  # frozenset({"todo-list"})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CompiledRoute",
    "CompilerConfig",
    "ConfigurationError",
    "FileSystemSource",
    "FirError",
    "MemorySource",
    "RouteConfig",
    "RouteTemplateCache",
    "compile_route",
    "parse_expressions",
    "translate_render_expression",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fir`` fast while providing a clean top-level API.
    """
    if name in ("CompilerConfig", "RouteConfig"):
        from fir import config as _config

        return getattr(_config, name)

    if name in ("FirError", "ConfigurationError"):
        from fir import errors as _errors

        return getattr(_errors, name)

    if name in ("FileSystemSource", "MemorySource"):
        from fir import sources as _sources

        return getattr(_sources, name)

    if name in ("CompiledRoute", "RouteTemplateCache", "compile_route"):
        from fir.templates import route as _route

        return getattr(_route, name)

    if name in ("parse_expressions", "translate_render_expression"):
        from fir import expression as _expression

        return getattr(_expression, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
