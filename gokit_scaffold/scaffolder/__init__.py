"""gokit-scaffold scaffolder -- renders template packs into project directories.

Quick usage::

    from gokit_scaffold.scaffolder import ProjectGenerator, resolve_manifest

    for entry in resolve_manifest("service-http"):
        print(entry.template_key, "->", entry.output_path)

    ProjectGenerator().generate(spec, "0.1.0")
"""

from gokit_scaffold.scaffolder.generator import ProjectGenerator
from gokit_scaffold.scaffolder.manifest import (
    MARKER_FILE_NAME,
    ManifestEntry,
    TemplatePack,
    build_ascii_tree,
    output_paths,
    render_ascii_tree,
    required_output_paths,
    resolve_manifest,
    template_packs,
)
from gokit_scaffold.scaffolder.sources import (
    DirectoryTemplateSource,
    InMemoryTemplateSource,
    PackageTemplateSource,
    TemplateSource,
)
from gokit_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "MARKER_FILE_NAME",
    "DirectoryTemplateSource",
    "InMemoryTemplateSource",
    "ManifestEntry",
    "PackageTemplateSource",
    "ProjectGenerator",
    "TemplatePack",
    "TemplateRenderer",
    "TemplateSource",
    "build_ascii_tree",
    "output_paths",
    "render_ascii_tree",
    "required_output_paths",
    "resolve_manifest",
    "template_packs",
]
