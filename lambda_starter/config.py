"""Lambda Starter configuration.

Centralised, typed configuration for the command-line tool.  Settings use
Pydantic v2 models so they are validated at construction time and can be
read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_SNAPSHOT_REPOSITORY = "https://s01.oss.sonatype.org/content/repositories/snapshots/"
DEFAULT_PLUGIN_PORTAL = "https://plugins.gradle.org/m2/"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class StarterConfig(BaseModel):
    """Global Lambda Starter configuration.

    Instances are typically created once by the CLI entry point (usually via
    :meth:`from_env`) and then passed to the pieces that need them.
    """

    output_dir: Path = Field(default=Path("./output"))
    versions_file: Optional[Path] = Field(
        default=None, description="Optional .json or .properties file overriding bundled versions"
    )
    snapshot_repository_url: str = Field(default=DEFAULT_SNAPSHOT_REPOSITORY)
    plugin_portal_url: str = Field(default=DEFAULT_PLUGIN_PORTAL)
    write_files: bool = Field(
        default=True, description="Write the resolved configuration and build fragments to disk"
    )

    @classmethod
    def from_env(cls) -> "StarterConfig":
        """Build a ``StarterConfig`` from environment variables.

        Recognised variables (all optional):
            STARTER_OUTPUT_DIR, STARTER_VERSIONS_FILE,
            STARTER_SNAPSHOT_REPOSITORY, STARTER_PLUGIN_PORTAL,
            STARTER_WRITE_FILES.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STARTER_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STARTER_OUTPUT_DIR"])
        if os.environ.get("STARTER_VERSIONS_FILE"):
            kwargs["versions_file"] = Path(os.environ["STARTER_VERSIONS_FILE"])
        if os.environ.get("STARTER_SNAPSHOT_REPOSITORY"):
            kwargs["snapshot_repository_url"] = os.environ["STARTER_SNAPSHOT_REPOSITORY"]
        if os.environ.get("STARTER_PLUGIN_PORTAL"):
            kwargs["plugin_portal_url"] = os.environ["STARTER_PLUGIN_PORTAL"]
        if os.environ.get("STARTER_WRITE_FILES"):
            kwargs["write_files"] = os.environ["STARTER_WRITE_FILES"].strip().lower() in _TRUE_VALUES
        return cls(**kwargs)
