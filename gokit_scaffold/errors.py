"""Exception taxonomy for gokit-scaffold.

Every failure raised by the core derives from :class:`ScaffoldError` so the
CLI can map exceptions to exit codes in one place.  Directory validation does
not raise: its findings are returned as :class:`~gokit_scaffold.spec.Violation`
values instead.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all gokit-scaffold failures."""

    exit_code: int = 1


class UsageError(ScaffoldError):
    """Raised for malformed command-line usage (bad or missing flags)."""

    exit_code = 2


class SpecificationError(ScaffoldError):
    """Raised when a project specification field violates its constraint."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        self.message = message
        super().__init__(f"{field} {message}")


class TemplateError(ScaffoldError):
    """Raised when a template cannot be found, parsed, or rendered.

    This signals a packaging defect rather than bad user input.
    """

    def __init__(self, template_key: str, message: str) -> None:
        self.template_key = template_key
        super().__init__(message)


class UnknownTemplatePackError(TemplateError):
    """Raised when a template pack name is not registered."""

    def __init__(self, pack_name: str) -> None:
        self.pack_name = pack_name
        super().__init__(pack_name, f"unknown template pack: {pack_name}")


class DuplicateOutputPathError(TemplateError):
    """Raised when two manifest entries of one pack target the same file."""

    def __init__(self, output_path: str, template_keys: tuple[str, str]) -> None:
        self.output_path = output_path
        self.template_keys = template_keys
        super().__init__(
            template_keys[1],
            f"duplicate output path {output_path} "
            f"(templates {template_keys[0]} and {template_keys[1]})",
        )


class OutputWriteError(ScaffoldError):
    """Raised when a rendered file cannot be written to disk."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)


class MarkerError(ScaffoldError):
    """Raised when a marker file cannot be read or does not match the schema."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(message)
