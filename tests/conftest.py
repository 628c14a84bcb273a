"""Shared pytest fixtures for the gokit-scaffold test suite.

Provides reusable fixtures for:
- Valid project specifications pointing at temporary directories
- Marker payloads and hand-built scaffold directories
- Freshly generated scaffolds
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from gokit_scaffold import __version__
from gokit_scaffold.scaffolder import MARKER_FILE_NAME, ProjectGenerator, required_output_paths
from gokit_scaffold.spec import ProjectSpecification


# ---------------------------------------------------------------------------
# Specifications
# ---------------------------------------------------------------------------

@pytest.fixture
def hello_spec(tmp_path: Path) -> ProjectSpecification:
    """The canonical hello-api specification targeting an absent directory."""
    return ProjectSpecification(
        name="hello-api",
        module="github.com/example/hello-api",
        directory=tmp_path / "hello-api",
        http_port=8080,
    )


# ---------------------------------------------------------------------------
# Markers & hand-built scaffolds
# ---------------------------------------------------------------------------

@pytest.fixture
def marker_payload() -> dict[str, Any]:
    """A marker record that passes every field check."""
    return {
        "tool": "gokit-scaffold",
        "version": "0.1.0",
        "template_pack": "service-http",
        "spec": {
            "name": "hello-api",
            "module": "github.com/example/hello-api",
            "http_port": 8080,
        },
    }


@pytest.fixture
def write_marker() -> Callable[[Path, Any], Path]:
    """Write a marker payload (or raw text) into a directory."""

    def _write(directory: Path, payload: Any) -> Path:
        path = directory / MARKER_FILE_NAME
        text = payload if isinstance(payload, str) else json.dumps(payload, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def populated_dir(tmp_path: Path) -> Path:
    """A directory with every required file present but no marker."""
    root = tmp_path / "scaffold"
    for relative in required_output_paths("service-http"):
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("ok", encoding="utf-8")
    return root


@pytest.fixture
def manual_scaffold(populated_dir: Path, marker_payload: dict[str, Any], write_marker) -> Path:
    """A hand-built, fully conformant scaffold."""
    write_marker(populated_dir, marker_payload)
    return populated_dir


# ---------------------------------------------------------------------------
# Generated scaffolds
# ---------------------------------------------------------------------------

@pytest.fixture
def generated_scaffold(hello_spec: ProjectSpecification) -> Path:
    """A scaffold produced by the real generator and packaged templates."""
    ProjectGenerator().generate(hello_spec, __version__)
    return hello_spec.path


@pytest.fixture
def golden_dir() -> Path:
    """Directory holding the expected hello-api output."""
    return Path(__file__).parent / "fixtures" / "golden" / "hello-api"
