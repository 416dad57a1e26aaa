"""Generation facade.

Runs one non-interactive generation: resolve the selection, assemble the
build-plugin configuration and, on request, write the results to disk.
The wizard produces the ``SelectionSet``; scripted callers build one directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from lambda_starter.build.assembler import BuildPluginAssembler
from lambda_starter.build.coordinates import CoordinateResolver
from lambda_starter.build.models import BuildPluginConfig
from lambda_starter.build.renderer import BuildScriptRenderer
from lambda_starter.config import DEFAULT_PLUGIN_PORTAL, DEFAULT_SNAPSHOT_REPOSITORY
from lambda_starter.features.catalog import FeatureCatalog
from lambda_starter.generator.models import HelpLinks, ResolvedConfiguration, SelectionSet
from lambda_starter.generator.resolver import FeatureResolver
from lambda_starter.utils import save_json

RESOLVED_CONFIGURATION_FILE = "resolved-configuration.json"


@dataclass
class GenerationResult:
    """Outcome of one generation run.

    ``plugin`` is ``None`` for Maven builds, which get no Micronaut Gradle
    plugin configuration.
    """

    resolved: ResolvedConfiguration
    plugin: Optional[BuildPluginConfig]

    @property
    def help_links(self) -> HelpLinks:
        return self.resolved.help_links

    def to_dict(self) -> dict:
        data = self.resolved.to_dict()
        data["build_plugin"] = (
            self.plugin.model_dump(mode="json") if self.plugin is not None else None
        )
        return data


class ProjectStarter:
    """Resolve -> assemble -> (optionally) write.

    The catalog and coordinate resolver are shared read-only; every call to
    :meth:`generate` owns its own selection, resolution and build config.
    """

    def __init__(
        self,
        catalog: FeatureCatalog,
        coordinates: CoordinateResolver,
        *,
        snapshot_repository_url: str = DEFAULT_SNAPSHOT_REPOSITORY,
        plugin_portal_url: str = DEFAULT_PLUGIN_PORTAL,
        renderer: Optional[BuildScriptRenderer] = None,
    ) -> None:
        self.catalog = catalog
        self.resolver = FeatureResolver(catalog)
        self.assembler = BuildPluginAssembler(
            coordinates,
            canonical_jdk=catalog.canonical_jdk,
            snapshot_repository_url=snapshot_repository_url,
            plugin_portal_url=plugin_portal_url,
        )
        self.renderer = renderer or BuildScriptRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, selection: SelectionSet) -> GenerationResult:
        """Resolve *selection* and assemble its build-plugin configuration.

        Raises:
            ConflictError: If the selection violates a compatibility rule.
            CatalogInconsistencyError: If the catalogs are inconsistent.
        """
        resolved = self.resolver.resolve_selection(selection)
        plugin = None
        if self.assembler.should_apply(resolved.options):
            plugin = self.assembler.assemble(resolved)
        return GenerationResult(resolved=resolved, plugin=plugin)

    async def write(self, result: GenerationResult, output_dir: str | Path) -> list[Path]:
        """Write ``resolved-configuration.json`` and the Gradle fragments.

        Returns:
            List of written file paths.
        """
        out = Path(output_dir)
        written = [await save_json(result.to_dict(), out / RESOLVED_CONFIGURATION_FILE)]
        if result.plugin is not None:
            written.extend(await self.renderer.write(result.plugin, out))
        return written
