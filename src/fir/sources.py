"""Template source protocols.

A *template source* hands raw template bytes to the compiler. Two
operations are enough:

- **read**: ``source.read(path)`` returns ``(name, content)`` or raises ``OSError``
- **exists**: ``source.exists(path)`` decides whether a route setting is a
  path or an inline template string

``FileSystemSource`` serves a directory on disk; ``MemorySource`` serves
embedded assets (a dict of path to bytes), which is also what tests use.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

# -- Protocols --


@runtime_checkable
class TemplateSource(Protocol):
    """Where template files come from."""

    def read(self, path: str) -> tuple[str, bytes]: ...

    def exists(self, path: str) -> bool: ...

    def find(self, extensions: Iterable[str]) -> list[str]: ...


# -- Implementations --


class FileSystemSource:
    """Templates under a root directory. Paths are relative to the root."""

    __slots__ = ("root",)

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def read(self, path: str) -> tuple[str, bytes]:
        return path, (self.root / path).read_bytes()

    def exists(self, path: str) -> bool:
        try:
            return (self.root / path).is_file()
        except (OSError, ValueError):
            return False

    def find(self, extensions: Iterable[str]) -> list[str]:
        return find(self.root, extensions)

    def __repr__(self) -> str:
        return f"FileSystemSource({str(self.root)!r})"


class MemorySource:
    """Templates held in memory, keyed by path."""

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, bytes | str]) -> None:
        self._files = {
            path: content.encode("utf-8") if isinstance(content, str) else content
            for path, content in files.items()
        }

    def read(self, path: str) -> tuple[str, bytes]:
        try:
            return path, self._files[path]
        except KeyError:
            raise FileNotFoundError(path) from None

    def exists(self, path: str) -> bool:
        return path in self._files

    def find(self, extensions: Iterable[str]) -> list[str]:
        exts = tuple(extensions)
        return sorted(p for p in self._files if p.endswith(exts))


def find(root: str | Path, extensions: Iterable[str]) -> list[str]:
    """Relative paths of files under ``root`` ending in one of ``extensions``.

    Sorted, ``/``-separated, hidden directories skipped.
    """
    root = Path(root)
    exts = tuple(extensions)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for filename in filenames:
            if filename.endswith(exts):
                found.append((Path(dirpath) / filename).relative_to(root).as_posix())
    return sorted(found)
