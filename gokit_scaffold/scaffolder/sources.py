"""Read-only stores of template bodies.

Templates are addressed by a logical, slash-separated key such as
``service-http/go.mod.tmpl``.  The generator only depends on the
:class:`TemplateSource` protocol, so the packaged templates can be swapped for
a directory on disk or an in-memory mapping.
"""

from __future__ import annotations

import importlib.resources
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Protocol


class TemplateSource(Protocol):
    """Anything that can return a template body for a key."""

    def read(self, key: str) -> str:
        """Return the body stored under *key*.

        Raises:
            FileNotFoundError: If no template is stored under *key*.
        """
        ...


def _check_key(key: str) -> list[str]:
    parts = key.split("/")
    if not key or key.startswith("/") or any(part in ("", ".", "..") for part in parts):
        raise FileNotFoundError(f"invalid template key: {key!r}")
    return parts


class PackageTemplateSource:
    """Templates shipped as package data under ``gokit_scaffold/scaffolder/templates``."""

    def __init__(self, package: str = "gokit_scaffold.scaffolder", directory: str = "templates") -> None:
        self.package = package
        self.directory = directory

    def read(self, key: str) -> str:
        resource = importlib.resources.files(self.package).joinpath(self.directory)
        for part in _check_key(key):
            resource = resource.joinpath(part)
        if not resource.is_file():
            raise FileNotFoundError(f"template not found: {key}")
        return resource.read_text(encoding="utf-8")


class DirectoryTemplateSource:
    """Templates read from a directory on disk."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def read(self, key: str) -> str:
        path = self.root.joinpath(*_check_key(key))
        if not path.is_file():
            raise FileNotFoundError(f"template not found: {path}")
        return path.read_text(encoding="utf-8")


class InMemoryTemplateSource:
    """Templates held in a mapping; mostly useful in tests."""

    def __init__(self, templates: Mapping[str, str]) -> None:
        self._templates = MappingProxyType(dict(templates))

    def read(self, key: str) -> str:
        try:
            return self._templates[key]
        except KeyError:
            raise FileNotFoundError(f"template not found: {key}") from None
