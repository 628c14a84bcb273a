"""Command line interface for gokit-scaffold.

Usage::

    gokit-scaffold new --name hello-api --module github.com/acme/hello-api
    gokit-scaffold validate --dir ./hello-api
    gokit-scaffold print

Exit codes: 0 on success, 1 on validation or generation failures, 2 on usage
errors.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, NoReturn, Optional, Sequence

from gokit_scaffold import TOOL_NAME, __version__
from gokit_scaffold.config import ScaffoldConfig
from gokit_scaffold.errors import OutputWriteError, ScaffoldError, TemplateError, UsageError
from gokit_scaffold.scaffolder import (
    DirectoryTemplateSource,
    PackageTemplateSource,
    ProjectGenerator,
    TemplatePack,
    TemplateSource,
    render_ascii_tree,
    template_packs,
)
from gokit_scaffold.spec import (
    ProjectSpecification,
    marker_schema_summary,
    validate_scaffold_dir,
    validate_specification,
)
from gokit_scaffold.utils import (
    console,
    err_console,
    print_detail,
    print_error,
    print_info,
    print_problem,
    print_success,
    print_warning,
)

EXAMPLE_COMMAND = (
    f"{TOOL_NAME} new --name hello-api --module github.com/acme/hello-api --http-port 8080"
)

ROOT_USAGE = f"""Usage: {TOOL_NAME} <command> [flags]
Commands:
  new       Generate a new project scaffold
  validate  Validate an existing scaffold
  print     Print embedded template pack details"""


class _ParserExit(Exception):
    """Raised instead of ``sys.exit`` when argparse finishes early (``--help``)."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(status)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports problems as exceptions instead of exiting."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        raise UsageError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        if message:
            sys.stderr.write(message)
        raise _ParserExit(status)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _template_source(config: ScaffoldConfig) -> TemplateSource:
    if config.template_dir is not None:
        return DirectoryTemplateSource(config.template_dir)
    return PackageTemplateSource()


def _run_new(argv: Sequence[str], config: ScaffoldConfig) -> int:
    parser = _ArgumentParser(
        prog=f"{TOOL_NAME} new",
        description="Generate a new project scaffold",
        allow_abbrev=False,
    )
    parser.add_argument("--name", required=True, help="project name (required)")
    parser.add_argument("--module", required=True, help="go module path (required)")
    parser.add_argument("--dir", default="", help="output directory (default ./<name>)")
    parser.add_argument(
        "--http-port",
        type=int,
        default=config.default_http_port,
        help=f"HTTP listen port (default {config.default_http_port})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="list every written file")
    args = parser.parse_args(argv)

    if not args.name or not args.module:
        raise UsageError("--name and --module are required")

    spec = ProjectSpecification(
        name=args.name,
        module=args.module,
        directory=args.dir or os.path.join(".", args.name),
        http_port=args.http_port,
    )
    validate_specification(spec)

    generator = ProjectGenerator(source=_template_source(config))
    try:
        written = generator.generate(spec, __version__)
    except (TemplateError, OutputWriteError) as exc:
        print_error(str(exc))
        print_warning(
            f"{spec.directory} may be partially generated; remove it and "
            f"re-run `{TOOL_NAME} new` into a clean directory"
        )
        return exc.exit_code

    if args.verbose:
        for path in written:
            print_detail(f"wrote {path}")
    print_success(f"Scaffold generated at {spec.directory}")
    return 0


def _run_validate(argv: Sequence[str], config: ScaffoldConfig) -> int:
    parser = _ArgumentParser(
        prog=f"{TOOL_NAME} validate",
        description="Validate an existing scaffold",
        allow_abbrev=False,
    )
    parser.add_argument("--dir", default=".", help="directory to validate (default .)")
    args = parser.parse_args(argv)

    violations = validate_scaffold_dir(args.dir)
    if violations:
        print_error(f"validation failed for {args.dir}")
        for violation in violations:
            print_problem(violation.message)
        return 1

    print_info(f"scaffold is valid: {args.dir}")
    return 0


def _run_print(argv: Sequence[str], config: ScaffoldConfig) -> int:
    parser = _ArgumentParser(
        prog=f"{TOOL_NAME} print",
        description="Print embedded template pack details",
        allow_abbrev=False,
    )
    parser.parse_args(argv)
    print_info(format_print_output(TOOL_NAME, __version__))
    return 0


def format_print_output(tool_name: str, tool_version: str) -> str:
    """Build the text shown by ``print``."""
    pack = TemplatePack.SERVICE_HTTP
    lines = [f"{tool_name} {tool_version}", "", "Template Packs"]
    lines.extend(f"- {name}" for name in template_packs())

    lines.extend(["", f"Generated Outputs Tree ({pack.value})", render_ascii_tree(pack)])

    lines.extend(["", "Marker Schema Summary"])
    lines.extend(f"- `{field}`: {description}" for field, description in marker_schema_summary())

    lines.extend(["", "Example new command", EXAMPLE_COMMAND])
    return "\n".join(lines)


_COMMANDS: dict[str, Callable[[Sequence[str], ScaffoldConfig], int]] = {
    "new": _run_new,
    "validate": _run_validate,
    "print": _run_print,
}


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for ``gokit-scaffold`` and ``python -m gokit_scaffold``."""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args:
        err_console.print(ROOT_USAGE, markup=False)
        return 2

    command, rest = args[0], args[1:]
    if command in ("-h", "--help", "help"):
        console.print(ROOT_USAGE, markup=False)
        return 0

    handler = _COMMANDS.get(command)
    if handler is None:
        print_error(f"unknown command: {command}")
        err_console.print(ROOT_USAGE, markup=False)
        return 2

    try:
        config = ScaffoldConfig.from_env()
    except ValueError as exc:
        print_error(f"invalid configuration: {exc}")
        return 1

    try:
        return handler(rest, config)
    except _ParserExit as exc:
        return exc.status
    except ScaffoldError as exc:
        print_error(str(exc))
        return exc.exit_code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
