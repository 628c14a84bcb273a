"""Main scaffolding orchestrator.

Takes a validated ``ProjectSpecification`` and renders every entry of a
template pack's manifest into the target directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from gokit_scaffold import TOOL_NAME
from gokit_scaffold.errors import OutputWriteError, TemplateError
from gokit_scaffold.utils import write_atomic

from .manifest import ManifestEntry, TemplatePack, resolve_manifest
from .sources import PackageTemplateSource, TemplateSource
from .templates import TemplateRenderer

if TYPE_CHECKING:
    from gokit_scaffold.spec import ProjectSpecification


DEFAULT_FILE_MODE = 0o644


class ProjectGenerator:
    """Renders a template pack into a project directory.

    Entries are processed one at a time in manifest order.  The first failure
    aborts the run; files written before it stay on disk.
    """

    def __init__(
        self,
        source: Optional[TemplateSource] = None,
        renderer: Optional[TemplateRenderer] = None,
        pack: TemplatePack | str = TemplatePack.SERVICE_HTTP,
        file_mode: int = DEFAULT_FILE_MODE,
    ) -> None:
        self.source = source or PackageTemplateSource()
        self.renderer = renderer or TemplateRenderer()
        self.pack = TemplatePack.from_name(pack)
        self.file_mode = file_mode

    # -- Public API --------------------------------------------------------

    def generate(self, spec: ProjectSpecification, tool_version: str) -> list[Path]:
        """Generate the scaffold described by *spec*.

        Args:
            spec: A specification that already passed ``validate_specification``.
            tool_version: Version string recorded in the generated files.

        Returns:
            The written file paths, in manifest order.

        Raises:
            TemplateError: If a template cannot be read or rendered.
            OutputWriteError: If a rendered file cannot be written.
        """
        root = spec.path
        context = self._build_context(spec, tool_version)

        written: list[Path] = []
        for entry in resolve_manifest(self.pack):
            written.append(self._render_entry(root, entry, context))
        return written

    # -- Internals ---------------------------------------------------------

    def _build_context(self, spec: ProjectSpecification, tool_version: str) -> dict[str, Any]:
        """Build the Jinja2 template context from the specification."""
        return {
            "tool": TOOL_NAME,
            "version": tool_version,
            "name": spec.name,
            "module": spec.module,
            "http_port": spec.http_port,
        }

    def _render_entry(self, root: Path, entry: ManifestEntry, context: dict[str, Any]) -> Path:
        try:
            body = self.source.read(entry.template_key)
        except OSError as exc:
            raise TemplateError(entry.template_key, f"read template {entry.template_key}: {exc}") from exc

        content = self.renderer.render(entry.template_key, body, context)

        target = root.joinpath(*entry.output_path.split("/"))
        try:
            write_atomic(target, content, self.file_mode)
        except OSError as exc:
            raise OutputWriteError(target, f"write output file {target}: {exc}") from exc
        return target
