"""Tests for template pack manifests (gokit_scaffold.scaffolder.manifest).

Covers:
- Pack lookup and the unknown-pack error
- Deterministic ordering and duplicate output path rejection
- Required output paths
- ASCII tree rendering
"""

from __future__ import annotations

import pytest

from gokit_scaffold.errors import DuplicateOutputPathError, TemplateError, UnknownTemplatePackError
from gokit_scaffold.scaffolder.manifest import (
    MARKER_FILE_NAME,
    ManifestEntry,
    TemplatePack,
    build_ascii_tree,
    output_paths,
    render_ascii_tree,
    required_output_paths,
    resolve_manifest,
    sort_manifest,
    template_packs,
)


pytestmark = pytest.mark.unit

REQUIRED_FILES = {
    "README.md",
    "cmd/server/main.go",
    "go.mod",
    "internal/config/config.go",
    "internal/httpserver/health.go",
    "internal/httpserver/server.go",
    "internal/logging/logging.go",
}


# ---------------------------------------------------------------------------
# TemplatePack
# ---------------------------------------------------------------------------


class TestTemplatePack:
    def test_from_name(self):
        assert TemplatePack.from_name("service-http") is TemplatePack.SERVICE_HTTP

    def test_from_member_is_identity(self):
        assert TemplatePack.from_name(TemplatePack.SERVICE_HTTP) is TemplatePack.SERVICE_HTTP

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownTemplatePackError) as exc_info:
            TemplatePack.from_name("service-grpc")
        assert exc_info.value.pack_name == "service-grpc"
        assert "unknown template pack: service-grpc" in str(exc_info.value)

    def test_unknown_pack_is_a_template_error(self):
        with pytest.raises(TemplateError):
            resolve_manifest("nope")

    def test_template_packs(self):
        assert template_packs() == ["service-http"]


# ---------------------------------------------------------------------------
# resolve_manifest / sort_manifest
# ---------------------------------------------------------------------------


class TestResolveManifest:
    def test_sorted_by_output_path(self):
        entries = resolve_manifest("service-http")
        paths = [entry.output_path for entry in entries]
        assert paths == sorted(paths)

    def test_template_keys_belong_to_pack(self):
        for entry in resolve_manifest(TemplatePack.SERVICE_HTTP):
            assert entry.template_key.startswith("service-http/")
            assert entry.template_key.endswith(".tmpl")

    def test_repeated_calls_are_equal(self):
        assert resolve_manifest("service-http") == resolve_manifest("service-http")

    def test_returns_fresh_list(self):
        first = resolve_manifest("service-http")
        first.clear()
        assert resolve_manifest("service-http")

    def test_sort_tie_breaks_on_template_key(self):
        entries = [
            ManifestEntry("b.tmpl", "b"),
            ManifestEntry("a.tmpl", "a"),
        ]
        assert [e.template_key for e in sort_manifest(entries)] == ["a.tmpl", "b.tmpl"]

    def test_duplicate_output_paths_rejected(self):
        entries = [
            ManifestEntry("pack/one.tmpl", "go.mod"),
            ManifestEntry("pack/two.tmpl", "go.mod"),
            ManifestEntry("pack/readme.tmpl", "README.md"),
        ]
        with pytest.raises(DuplicateOutputPathError) as exc_info:
            sort_manifest(entries)
        assert exc_info.value.output_path == "go.mod"
        assert exc_info.value.template_keys == ("pack/one.tmpl", "pack/two.tmpl")


# ---------------------------------------------------------------------------
# Output paths
# ---------------------------------------------------------------------------


class TestOutputPaths:
    def test_output_paths_include_marker(self):
        assert set(output_paths("service-http")) == REQUIRED_FILES | {MARKER_FILE_NAME}

    def test_required_paths_exclude_marker(self):
        required = required_output_paths("service-http")
        assert MARKER_FILE_NAME not in required
        assert set(required) == REQUIRED_FILES
        assert len(required) == 7


# ---------------------------------------------------------------------------
# ASCII tree
# ---------------------------------------------------------------------------


class TestAsciiTree:
    def test_service_http_tree(self):
        expected = "\n".join([
            ".",
            "|-- .gokit-scaffold",
            "|-- README.md",
            "|-- cmd",
            "|   `-- server",
            "|       `-- main.go",
            "|-- go.mod",
            "`-- internal",
            "    |-- config",
            "    |   `-- config.go",
            "    |-- httpserver",
            "    |   |-- health.go",
            "    |   `-- server.go",
            "    `-- logging",
            "        `-- logging.go",
        ])
        assert render_ascii_tree("service-http") == expected

    def test_tree_is_deterministic(self):
        assert render_ascii_tree("service-http") == render_ascii_tree("service-http")

    def test_tree_lists_top_level_entries(self):
        tree = render_ascii_tree("service-http")
        for name in ("cmd", "internal", MARKER_FILE_NAME):
            assert name in tree

    def test_input_order_does_not_matter(self):
        paths = ["b/y", "a", "b/x"]
        assert build_ascii_tree(paths) == build_ascii_tree(list(reversed(paths)))

    def test_empty_segments_ignored(self):
        assert build_ascii_tree(["a//b", " c "]) == ".\n|-- a\n|   `-- b\n`-- c"

    def test_empty_input(self):
        assert build_ascii_tree([]) == "."

    def test_no_trailing_newline(self):
        assert not render_ascii_tree("service-http").endswith("\n")
