"""Template pack manifests.

A manifest maps logical template keys (paths inside the template source) to
output paths relative to the generated project root.  Manifests are static;
everything here is a pure, read-only view over them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from gokit_scaffold.errors import DuplicateOutputPathError, UnknownTemplatePackError

MARKER_FILE_NAME = ".gokit-scaffold"


class TemplatePack(str, Enum):
    """Known template packs."""

    SERVICE_HTTP = "service-http"

    @classmethod
    def from_name(cls, name: str | "TemplatePack") -> "TemplatePack":
        """Map a pack name to its enum member.

        Raises:
            UnknownTemplatePackError: If *name* is not a registered pack.
        """
        if isinstance(name, cls):
            return name
        for pack in cls:
            if pack.value == name:
                return pack
        raise UnknownTemplatePackError(str(name))


@dataclass(frozen=True)
class ManifestEntry:
    """One template rendered to one output file."""

    template_key: str
    output_path: str


_MANIFESTS: dict[TemplatePack, tuple[ManifestEntry, ...]] = {
    TemplatePack.SERVICE_HTTP: (
        ManifestEntry("service-http/.gokit-scaffold.tmpl", MARKER_FILE_NAME),
        ManifestEntry("service-http/README.md.tmpl", "README.md"),
        ManifestEntry("service-http/cmd/server/main.go.tmpl", "cmd/server/main.go"),
        ManifestEntry("service-http/go.mod.tmpl", "go.mod"),
        ManifestEntry("service-http/internal/config/config.go.tmpl", "internal/config/config.go"),
        ManifestEntry("service-http/internal/httpserver/health.go.tmpl", "internal/httpserver/health.go"),
        ManifestEntry("service-http/internal/httpserver/server.go.tmpl", "internal/httpserver/server.go"),
        ManifestEntry("service-http/internal/logging/logging.go.tmpl", "internal/logging/logging.go"),
    ),
}


def template_packs() -> list[str]:
    """Return the names of all registered template packs."""
    return [pack.value for pack in _MANIFESTS]


def sort_manifest(entries: Iterable[ManifestEntry]) -> list[ManifestEntry]:
    """Order *entries* by output path, then template key.

    Raises:
        DuplicateOutputPathError: If two entries share an output path.
    """
    ordered = sorted(entries, key=lambda e: (e.output_path, e.template_key))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.output_path == current.output_path:
            raise DuplicateOutputPathError(
                current.output_path, (previous.template_key, current.template_key)
            )
    return ordered


def resolve_manifest(pack: str | TemplatePack) -> list[ManifestEntry]:
    """Return the ordered manifest entries of *pack*."""
    return sort_manifest(_MANIFESTS[TemplatePack.from_name(pack)])


def output_paths(pack: str | TemplatePack) -> list[str]:
    """Return every output path of *pack*, marker file included."""
    return [entry.output_path for entry in resolve_manifest(pack)]


def required_output_paths(pack: str | TemplatePack) -> list[str]:
    """Return the files a scaffold of *pack* must contain, excluding the marker.

    The marker is checked separately by the directory validator.
    """
    return [path for path in output_paths(pack) if path != MARKER_FILE_NAME]


def render_ascii_tree(pack: str | TemplatePack) -> str:
    """Render the output layout of *pack* as an ASCII tree."""
    return build_ascii_tree(output_paths(pack))


def build_ascii_tree(paths: Iterable[str]) -> str:
    """Render slash-separated *paths* as a sorted, depth-first ASCII tree.

    Example::

        .
        |-- cmd
        |   `-- main.go
        `-- go.mod
    """
    root: dict[str, dict] = {}
    for path in paths:
        node = root
        for part in path.strip().split("/"):
            if part:
                node = node.setdefault(part, {})

    lines = ["."]

    def _render(node: dict[str, dict], prefix: str) -> None:
        names = sorted(node)
        for index, name in enumerate(names):
            last = index == len(names) - 1
            lines.append(f"{prefix}{'`-- ' if last else '|-- '}{name}")
            _render(node[name], prefix + ("    " if last else "|   "))

    _render(root, "")
    return "\n".join(lines)
