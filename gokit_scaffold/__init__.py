"""gokit-scaffold -- generates and validates Go HTTP service scaffolds.

Quick usage::

    from gokit_scaffold.scaffolder import ProjectGenerator
    from gokit_scaffold.spec import ProjectSpecification, validate_specification

    spec = ProjectSpecification(
        name="hello-api",
        module="github.com/example/hello-api",
        directory="./hello-api",
        http_port=8080,
    )
    validate_specification(spec)
    ProjectGenerator().generate(spec, __version__)
"""

TOOL_NAME = "gokit-scaffold"
__version__ = "0.1.0"

__all__ = ["TOOL_NAME", "__version__"]
