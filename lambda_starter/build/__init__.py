"""Lambda Starter build configuration.

Key classes:
    BuildPluginAssembler - ResolvedConfiguration -> BuildPluginConfig
    BuildPluginConfig    - Canonical Micronaut build-plugin settings
    VersionCatalog       - Bundled/loaded dependency coordinates
    BuildScriptRenderer  - Gradle fragment rendering (Jinja2)
"""

from .assembler import BuildPluginAssembler
from .coordinates import Coordinate, CoordinateResolver, VersionCatalog, is_snapshot_version
from .models import BuildPluginConfig, Dockerfile, PluginIdentity, Repository
from .renderer import BuildScriptRenderer

__all__ = [
    # Assembly
    "BuildPluginAssembler",
    "BuildPluginConfig",
    "PluginIdentity",
    "Dockerfile",
    "Repository",
    # Coordinates
    "Coordinate",
    "CoordinateResolver",
    "VersionCatalog",
    "is_snapshot_version",
    # Rendering
    "BuildScriptRenderer",
]
