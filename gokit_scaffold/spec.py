"""Project specifications, the scaffold marker, and scaffold validation.

Two validators live here and deliberately behave differently:

* :func:`validate_specification` is fail-fast.  It checks a proposed
  :class:`ProjectSpecification` in a fixed order (name, module, HTTP port,
  directory) and raises on the first problem.
* :func:`validate_scaffold_dir` is aggregate.  It inspects an existing
  directory and returns every :class:`Violation` it can find, so one run gives
  the complete list of things to fix.
"""

from __future__ import annotations

import json
import os
import re
import stat
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gokit_scaffold import TOOL_NAME
from gokit_scaffold.config import DEFAULT_HTTP_PORT
from gokit_scaffold.errors import MarkerError, SpecificationError
from gokit_scaffold.scaffolder.manifest import (
    MARKER_FILE_NAME,
    TemplatePack,
    required_output_paths,
)

NAME_PATTERN = re.compile(r"^[a-z][a-z0-9-]*$")
MODULE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*(/[a-zA-Z0-9._-]+)+$")
MIN_PORT = 1
MAX_PORT = 65535

_NEW_HINT = f"run `{TOOL_NAME} new` to generate a scaffold first"
_CLEAN_HINT = f"re-run `{TOOL_NAME} new` into a clean directory"


# ---------------------------------------------------------------------------
# Project specification
# ---------------------------------------------------------------------------


class ProjectSpecification(BaseModel):
    """What to generate and where.

    Construction only enforces types; the naming, port and directory rules are
    checked by :func:`validate_specification`.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Service name")
    module: str = Field(..., description="Go module path")
    directory: str = Field(..., description="Output directory")
    http_port: int = Field(default=DEFAULT_HTTP_PORT, strict=True, description="HTTP listen port")

    @field_validator("directory", mode="before")
    @classmethod
    def coerce_path(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value

    @property
    def path(self) -> Path:
        """The output directory as a ``Path``."""
        return Path(self.directory)


def check_name(name: Any) -> None:
    """Raise :class:`SpecificationError` unless *name* is a valid service name."""
    if not isinstance(name, str) or not NAME_PATTERN.fullmatch(name):
        raise SpecificationError("name", f"must match {NAME_PATTERN.pattern}")


def check_module(module: Any) -> None:
    """Raise :class:`SpecificationError` unless *module* is a valid module path."""
    if not isinstance(module, str) or not MODULE_PATTERN.fullmatch(module) or ".." in module:
        raise SpecificationError(
            "module",
            "is invalid: expected a slash-separated module path such as "
            "github.com/acme/service, without `..`",
        )


def check_http_port(port: Any) -> None:
    """Raise :class:`SpecificationError` unless *port* is in 1..65535."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise SpecificationError("http_port", "must be an integer")
    if port < MIN_PORT or port > MAX_PORT:
        raise SpecificationError("http_port", f"must be between {MIN_PORT} and {MAX_PORT}")


def check_directory(directory: str | os.PathLike[str]) -> None:
    """Raise :class:`SpecificationError` unless *directory* is a safe target.

    The target must be given, must not climb out through ``..``, must not be a
    filesystem root, and if it already exists must be an empty directory.
    """
    raw = os.fspath(directory)
    if not raw.strip():
        raise SpecificationError("directory", "is required")

    cleaned = os.path.normpath(raw)
    if ".." in Path(cleaned).parts:
        raise SpecificationError("directory", f"must not contain parent traversal: {raw}")

    absolute = Path(os.path.abspath(cleaned))
    if absolute.parent == absolute:
        raise SpecificationError("directory", "cannot be the filesystem root")

    try:
        info = absolute.stat()
    except FileNotFoundError:
        return
    except OSError as exc:
        raise SpecificationError("directory", f"cannot be inspected: {exc}") from exc

    if not stat.S_ISDIR(info.st_mode):
        raise SpecificationError("directory", f"exists and is not a directory: {absolute}")

    try:
        with os.scandir(absolute) as entries:
            occupied = any(True for _ in entries)
    except OSError as exc:
        raise SpecificationError("directory", f"cannot be read: {exc}") from exc
    if occupied:
        raise SpecificationError("directory", f"is not empty: {absolute}")


def validate_specification(spec: ProjectSpecification) -> None:
    """Check *spec* and raise on the first violated constraint.

    Flag typos (name, module, port) are reported before environmental problems
    with the target directory.

    Raises:
        SpecificationError: Naming the offending field.
    """
    check_name(spec.name)
    check_module(spec.module)
    check_http_port(spec.http_port)
    check_directory(spec.directory)


# ---------------------------------------------------------------------------
# Marker model
# ---------------------------------------------------------------------------


class MarkerSpec(BaseModel):
    """The specification fields echoed into the marker."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., description=f"service name (`{NAME_PATTERN.pattern}`)")
    module: str = Field(..., description="Go module path")
    http_port: int = Field(..., strict=True, description=f"HTTP listen port ({MIN_PORT}-{MAX_PORT})")


class Marker(BaseModel):
    """The record stored in ``.gokit-scaffold`` at the root of a scaffold."""

    model_config = ConfigDict(extra="ignore")

    tool: str = Field(..., description=f"scaffold generator identifier (`{TOOL_NAME}`)")
    version: str = Field(..., description="tool version used to generate the scaffold")
    template_pack: str = Field(
        ..., description=f"template pack name (`{TemplatePack.SERVICE_HTTP.value}`)"
    )
    spec: MarkerSpec

    @classmethod
    def for_specification(
        cls,
        spec: ProjectSpecification,
        version: str,
        pack: TemplatePack = TemplatePack.SERVICE_HTTP,
    ) -> "Marker":
        """Build the marker that generating *spec* writes."""
        return cls(
            tool=TOOL_NAME,
            version=version,
            template_pack=pack.value,
            spec=MarkerSpec(name=spec.name, module=spec.module, http_port=spec.http_port),
        )


def marker_schema_summary() -> list[tuple[str, str]]:
    """Return ``(field, description)`` pairs for every marker field."""
    summary: list[tuple[str, str]] = []
    for name, field in Marker.model_fields.items():
        if name == "spec":
            for spec_name, spec_field in MarkerSpec.model_fields.items():
                summary.append((f"spec.{spec_name}", spec_field.description or ""))
        else:
            summary.append((name, field.description or ""))
    return summary


def _load_marker_payload(path: Path) -> dict[str, Any]:
    """Read and JSON-decode a marker file.

    Raises:
        FileNotFoundError: If the marker does not exist.
        MarkerError: If it cannot be read or is not a JSON object.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise
    except (OSError, UnicodeDecodeError) as exc:
        raise MarkerError(path, f"read marker {path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise MarkerError(path, f"parse marker {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise MarkerError(path, f"parse marker {path}: expected a JSON object")
    return payload


def read_marker(path: str | Path) -> Marker:
    """Load the marker at *path* as a typed :class:`Marker`.

    Unlike :func:`validate_scaffold_dir` this is strict: any schema problem
    raises.

    Raises:
        FileNotFoundError: If the marker does not exist.
        MarkerError: If it is unreadable or does not match the schema.
    """
    path = Path(path)
    payload = _load_marker_payload(path)
    try:
        return Marker.model_validate(payload)
    except ValidationError as exc:
        raise MarkerError(path, f"invalid marker {path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Violations
# ---------------------------------------------------------------------------


class ViolationKind(str, Enum):
    """Categories of scaffold validation findings."""

    DIRECTORY = "directory"
    MARKER_MISSING = "marker_missing"
    MARKER_UNREADABLE = "marker_unreadable"
    MARKER_FIELD = "marker_field"
    MISSING_FILE = "missing_file"
    NOT_A_FILE = "not_a_file"
    STAT_FAILED = "stat_failed"


class Violation(BaseModel):
    """One problem found while validating a scaffold directory."""

    kind: ViolationKind
    subject: str = Field(..., description="Marker field or relative path the finding is about")
    message: str = Field(..., description="Human-readable description with remediation")

    def __str__(self) -> str:
        return self.message


def _field_violation(field: str, message: str) -> Violation:
    return Violation(
        kind=ViolationKind.MARKER_FIELD,
        subject=field,
        message=f"marker field `{field}` {message}",
    )


def _string_field(payload: Mapping[str, Any], key: str, label: str, out: list[Violation]) -> str | None:
    value = payload.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        out.append(_field_violation(label, "is required"))
        return None
    if not isinstance(value, str):
        out.append(_field_violation(label, f"must be a string, got {type(value).__name__}"))
        return None
    return value


def validate_marker(
    payload: Mapping[str, Any],
    pack: TemplatePack = TemplatePack.SERVICE_HTTP,
) -> list[Violation]:
    """Check each marker field independently and return one violation per bad field."""
    violations: list[Violation] = []

    tool = _string_field(payload, "tool", "tool", violations)
    if tool is not None and tool != TOOL_NAME:
        violations.append(_field_violation("tool", f"must be `{TOOL_NAME}`, got {tool!r}"))

    _string_field(payload, "version", "version", violations)

    template_pack = _string_field(payload, "template_pack", "template_pack", violations)
    if template_pack is not None and template_pack != pack.value:
        violations.append(
            _field_violation("template_pack", f"must be `{pack.value}`, got {template_pack!r}")
        )

    spec = payload.get("spec")
    if not isinstance(spec, Mapping):
        spec = {}

    for key, check in (("name", check_name), ("module", check_module)):
        value = _string_field(spec, key, f"spec.{key}", violations)
        if value is None:
            continue
        try:
            check(value)
        except SpecificationError as exc:
            violations.append(_field_violation(f"spec.{key}", exc.message))

    port = spec.get("http_port")
    if port is None:
        violations.append(_field_violation("spec.http_port", "is required"))
    else:
        try:
            check_http_port(port)
        except SpecificationError as exc:
            violations.append(_field_violation("spec.http_port", exc.message))

    return violations


# ---------------------------------------------------------------------------
# Scaffold directory validation
# ---------------------------------------------------------------------------


def validate_scaffold_dir(
    directory: str | os.PathLike[str],
    pack: TemplatePack = TemplatePack.SERVICE_HTTP,
) -> list[Violation]:
    """Return every way *directory* differs from a valid scaffold of *pack*.

    Marker findings come before file findings.  An empty list means the
    directory is a conformant scaffold.  Files that are not part of the
    scaffold are ignored.
    """
    root = Path(os.path.abspath(os.path.normpath(os.fspath(directory))))

    try:
        info = root.stat()
    except FileNotFoundError:
        return [Violation(kind=ViolationKind.DIRECTORY, subject=str(root), message=f"directory not found: {root}")]
    except OSError as exc:
        return [Violation(kind=ViolationKind.DIRECTORY, subject=str(root), message=f"stat directory {root}: {exc}")]
    if not stat.S_ISDIR(info.st_mode):
        return [Violation(kind=ViolationKind.DIRECTORY, subject=str(root), message=f"path is not a directory: {root}")]

    violations: list[Violation] = []

    marker_path = root / MARKER_FILE_NAME
    try:
        payload = _load_marker_payload(marker_path)
    except FileNotFoundError:
        violations.append(
            Violation(
                kind=ViolationKind.MARKER_MISSING,
                subject=MARKER_FILE_NAME,
                message=f"missing {MARKER_FILE_NAME} marker at {marker_path} ({_NEW_HINT})",
            )
        )
    except MarkerError as exc:
        violations.append(
            Violation(kind=ViolationKind.MARKER_UNREADABLE, subject=MARKER_FILE_NAME, message=str(exc))
        )
    else:
        violations.extend(validate_marker(payload, pack))

    for relative in required_output_paths(pack):
        path = root.joinpath(*relative.split("/"))
        try:
            file_info = path.stat()
        except FileNotFoundError:
            violations.append(
                Violation(
                    kind=ViolationKind.MISSING_FILE,
                    subject=relative,
                    message=f"missing required file: {relative} ({_CLEAN_HINT})",
                )
            )
            continue
        except OSError as exc:
            violations.append(
                Violation(
                    kind=ViolationKind.STAT_FAILED,
                    subject=relative,
                    message=f"stat required file {relative}: {exc}",
                )
            )
            continue
        if stat.S_ISDIR(file_info.st_mode):
            violations.append(
                Violation(
                    kind=ViolationKind.NOT_A_FILE,
                    subject=relative,
                    message=f"required file is a directory: {relative}",
                )
            )

    return violations
