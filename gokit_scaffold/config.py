"""gokit-scaffold configuration.

Typed settings for the CLI.  Uses a Pydantic v2 model so values are validated
at construction time and can be loaded from environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


DEFAULT_HTTP_PORT = 8080


class ScaffoldConfig(BaseModel):
    """Defaults applied by the CLI when flags are omitted.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to the commands that need them.
    """

    default_http_port: int = Field(
        default=DEFAULT_HTTP_PORT,
        ge=1,
        le=65535,
        description="HTTP port used when `new` is run without --http-port",
    )
    template_dir: Optional[Path] = Field(
        default=None,
        description="Directory that replaces the packaged templates (for template development)",
    )

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            GOKIT_SCAFFOLD_HTTP_PORT, GOKIT_SCAFFOLD_TEMPLATE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("GOKIT_SCAFFOLD_HTTP_PORT"):
            kwargs["default_http_port"] = int(os.environ["GOKIT_SCAFFOLD_HTTP_PORT"])
        if os.environ.get("GOKIT_SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["GOKIT_SCAFFOLD_TEMPLATE_DIR"])
        return cls(**kwargs)
