"""Build configuration assembler.

Turns a ``ResolvedConfiguration`` into one canonical ``BuildPluginConfig``.
Many independent rules contribute to the result (identity, runtimes, AOT,
container image, repositories); each is evaluated exactly once here so the
output never carries two conflicting decisions.
"""

from __future__ import annotations

from typing import Optional

from lambda_starter.build.coordinates import CoordinateResolver
from lambda_starter.build.models import BuildPluginConfig, Dockerfile, PluginIdentity, Repository
from lambda_starter.config import DEFAULT_PLUGIN_PORTAL, DEFAULT_SNAPSHOT_REPOSITORY
from lambda_starter.features.catalog import CatalogInconsistencyError
from lambda_starter.features.models import Capability
from lambda_starter.generator.models import PROPERTY_MICRONAUT_RUNTIME, ResolvedConfiguration
from lambda_starter.options import ApplicationType, JdkVersion, Options, TestFramework

PLUGIN_ARTIFACT_ID = "micronaut-gradle-plugin"
AOT_ARTIFACT_ID = "micronaut-aot-core"

AOT_KEY_SECURITY_JWKS = "micronaut.security.jwks.enabled"
AOT_KEY_SECURITY_OPENID = "micronaut.security.openid-configuration.enabled"

FUNCTION_IMAGE_ARGS: tuple[str, ...] = (
    "-XX:MaximumHeapSizePercent=80",
    "-Dio.netty.allocator.numDirectArenas=0",
    "-Dio.netty.noPreferDirect=true",
)

TEST_RUNTIMES: dict[TestFramework, str] = {
    TestFramework.JUNIT: "junit5",
    TestFramework.KOTEST: "kotest5",
    TestFramework.SPOCK: "spock2",
}


class BuildPluginAssembler:
    """Assembles the Micronaut build-plugin configuration.

    Args:
        coordinates: Version catalog used for the AOT version and for snapshot
            detection.  Only read, never mutated.
        canonical_jdk: JDK version that needs no explicit container image.
        snapshot_repository_url: URL of the snapshot repository appended when
            snapshot artifacts are in use.
        plugin_portal_url: URL of the Gradle Plugin Portal.
    """

    def __init__(
        self,
        coordinates: CoordinateResolver,
        *,
        canonical_jdk: JdkVersion = JdkVersion.JDK_17,
        snapshot_repository_url: str = DEFAULT_SNAPSHOT_REPOSITORY,
        plugin_portal_url: str = DEFAULT_PLUGIN_PORTAL,
    ) -> None:
        self.coordinates = coordinates
        self.canonical_jdk = canonical_jdk
        self.snapshot_repository_url = snapshot_repository_url
        self.plugin_portal_url = plugin_portal_url

    # -- Public API --------------------------------------------------------

    def should_apply(self, options: Options) -> bool:
        """The plugin configuration only feeds Gradle builds."""
        return options.build_tool.is_gradle

    def assemble(self, resolved: ResolvedConfiguration) -> BuildPluginConfig:
        """Produce the build-plugin configuration for *resolved*.

        Raises:
            CatalogInconsistencyError: If AOT is selected but the version
                catalog has no AOT coordinate.
        """
        options = resolved.options
        aot_version, aot_keys = self._aot(resolved)
        plugin = self.coordinates.resolve(PLUGIN_ARTIFACT_ID)

        return BuildPluginConfig(
            id=self.plugin_identity(resolved),
            artifact_id=PLUGIN_ARTIFACT_ID,
            version=plugin.version if plugin else None,
            build_tool=options.build_tool,
            dsl=options.build_tool.gradle_dsl,
            java_version=options.jdk_version,
            incremental=True,
            runtime=resolved.build_properties.get(PROPERTY_MICRONAUT_RUNTIME),
            test_runtime=TEST_RUNTIMES.get(options.test_framework),
            lambda_runtime_main_class=_lambda_runtime_main_class(resolved),
            aot_version=aot_version,
            aot_keys=aot_keys,
            docker_native=self.docker_native(resolved),
            repositories=self.repositories(resolved),
        )

    # -- Decision rules ----------------------------------------------------

    def plugin_identity(self, resolved: ResolvedConfiguration) -> PluginIdentity:
        """``application`` for runnable projects, ``library`` otherwise."""
        if resolved.has(Capability.ENTRY_POINT):
            return PluginIdentity.APPLICATION
        if any(resolved.shape in f.application_for for f in resolved.features):
            return PluginIdentity.APPLICATION
        return PluginIdentity.LIBRARY

    def docker_native(self, resolved: ResolvedConfiguration) -> Optional[Dockerfile]:
        jdk = resolved.options.jdk_version
        deployment = _function_with_image(resolved)
        if deployment is not None and (
            resolved.is_native or resolved.shape is ApplicationType.DEFAULT
        ):
            return Dockerfile(
                base_image=deployment.container_base_image,
                java_version=jdk.as_string(),
                args=FUNCTION_IMAGE_ARGS,
            )
        if jdk is not self.canonical_jdk:
            return Dockerfile(java_version=jdk.as_string())
        return None

    def repositories(self, resolved: ResolvedConfiguration) -> tuple[Repository, ...]:
        """Plugin Portal plus snapshot repository, once, if any artifact is a snapshot."""
        if not any(self._is_snapshot(a) for a in self.artifact_ids(resolved)):
            return ()
        return (
            Repository(name="gradlePluginPortal", url=self.plugin_portal_url),
            Repository(name="sonatypeSnapshots", url=self.snapshot_repository_url),
        )

    def artifact_ids(self, resolved: ResolvedConfiguration) -> list[str]:
        """Artifact ids the build depends on, in deterministic order."""
        artifacts = [PLUGIN_ARTIFACT_ID]
        if resolved.has(Capability.AOT):
            artifacts.append(AOT_ARTIFACT_ID)
        for feature in resolved.features:
            for artifact_id in feature.artifacts:
                if artifact_id not in artifacts:
                    artifacts.append(artifact_id)
        return artifacts

    # -- Internal helpers --------------------------------------------------

    def _aot(self, resolved: ResolvedConfiguration) -> tuple[Optional[str], dict[str, bool]]:
        if not resolved.has(Capability.AOT):
            return None, {}
        coordinate = self.coordinates.resolve(AOT_ARTIFACT_ID)
        if coordinate is None or coordinate.version is None:
            raise CatalogInconsistencyError(f"Coordinate for {AOT_ARTIFACT_ID} not found")
        keys: dict[str, bool] = {}
        if resolved.has(Capability.TOKEN_VALIDATION):
            keys[AOT_KEY_SECURITY_JWKS] = False
        if resolved.has(Capability.OPENID_DISCOVERY):
            keys[AOT_KEY_SECURITY_OPENID] = False
        return coordinate.version, keys

    def _is_snapshot(self, artifact_id: str) -> bool:
        coordinate = self.coordinates.resolve(artifact_id)
        return coordinate is not None and coordinate.is_snapshot


def _function_with_image(resolved: ResolvedConfiguration):
    for feature in resolved.with_tag(Capability.FUNCTION_DEPLOYMENT):
        if feature.container_base_image:
            return feature
    return None


def _lambda_runtime_main_class(resolved: ResolvedConfiguration) -> Optional[str]:
    for feature in resolved.features:
        if feature.lambda_runtime_main_class:
            return feature.lambda_runtime_main_class
    return None
