"""Feature selection resolver.

Merges explicitly selected features with the catalog's default features for
the chosen application shape, validates the merged set against the
compatibility predicates and produces an immutable ``ResolvedConfiguration``.

Resolution is a pure function of its inputs: no I/O, no shared state, and
re-resolving a resolved configuration yields an equal configuration.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from lambda_starter import compatibility
from lambda_starter.features.catalog import (
    GRAALVM_GRADLE_DOCS_URL,
    MICRONAUT_GRADLE_DOCS_URL,
    CatalogInconsistencyError,
    FeatureCatalog,
    StarterError,
)
from lambda_starter.features.models import EXCLUSIVE_CAPABILITIES, Capability, Feature
from lambda_starter.generator.models import (
    PROPERTY_MICRONAUT_RUNTIME,
    HelpLinks,
    ResolvedConfiguration,
    SelectionSet,
)
from lambda_starter.options import ApplicationType, LambdaDeployment, Options


class ConflictError(StarterError):
    """Raised when a selection violates a compatibility rule.

    Attributes:
        rule: Short identifier of the violated rule, e.g. ``"native-language"``.
        features: Names of the features involved, if any.
    """

    def __init__(self, message: str, rule: str, features: Iterable[str] = ()) -> None:
        self.rule = rule
        self.features = tuple(sorted(features))
        super().__init__(message)


class FeatureResolver:
    """Resolves a shape, feature names and options into a validated configuration."""

    def __init__(self, catalog: FeatureCatalog) -> None:
        self.catalog = catalog

    # -- Public API --------------------------------------------------------

    def resolve(
        self,
        shape: ApplicationType,
        feature_names: Iterable[str],
        options: Optional[Options] = None,
    ) -> ResolvedConfiguration:
        """Resolve *feature_names* for *shape*.

        Args:
            shape: The application shape of the run.
            feature_names: Explicitly selected feature names.
            options: Option values; defaults to ``Options()``.

        Returns:
            The resolved configuration.

        Raises:
            ConflictError: If the merged selection violates a compatibility rule.
            CatalogInconsistencyError: If a required feature is missing from
                the catalog.
        """
        options = options or Options()
        selected = self._lookup(feature_names)

        if options.deployment is LambdaDeployment.NATIVE_EXECUTABLE:
            native = self.catalog.first_with(Capability.NATIVE_IMAGE)
            selected.setdefault(native.name, native)

        self._merge_defaults(shape, selected)

        features = tuple(sorted(selected.values(), key=lambda f: f.name))
        self._validate(shape, features, options)

        is_native = any(f.has(Capability.NATIVE_IMAGE) for f in features)
        resolved_options = options.model_copy(
            update={
                "deployment": (
                    LambdaDeployment.NATIVE_EXECUTABLE if is_native else LambdaDeployment.FAT_JAR
                )
            }
        )

        resolved = ResolvedConfiguration(
            shape=shape,
            features=features,
            options=resolved_options,
            build_properties=_build_properties(features, is_native),
        )
        _collect_help_links(resolved, resolved.help_links)
        return resolved

    def resolve_selection(self, selection: SelectionSet) -> ResolvedConfiguration:
        """Resolve a fully populated ``SelectionSet`` (wizard or scripted)."""
        return self.resolve(selection.shape, selection.features, selection.to_options())

    # -- Merging -----------------------------------------------------------

    def _lookup(self, feature_names: Iterable[str]) -> dict[str, Feature]:
        selected: dict[str, Feature] = {}
        unknown: list[str] = []
        for name in feature_names:
            feature = self.catalog.get(name)
            if feature is None:
                unknown.append(name)
            else:
                selected[name] = feature
        if unknown:
            raise ConflictError(
                f"Unknown feature(s): {', '.join(sorted(unknown))}",
                rule="unknown-feature",
                features=unknown,
            )
        return selected

    def _merge_defaults(self, shape: ApplicationType, selected: dict[str, Feature]) -> None:
        """Add required and default features until nothing changes."""
        changed = True
        while changed:
            changed = self._add_required(selected)
            for default in self.catalog.defaults_for(shape):
                if default.name in selected:
                    continue
                if not default.default_when.issubset(selected):
                    continue
                if any(f.exclusive_tags & default.exclusive_tags for f in selected.values()):
                    continue
                selected[default.name] = default
                changed = True

    def _add_required(self, selected: dict[str, Feature]) -> bool:
        changed = False
        pending = list(selected.values())
        while pending:
            feature = pending.pop()
            for name in sorted(feature.requires):
                if name in selected:
                    continue
                required = self.catalog.get(name)
                if required is None:
                    raise CatalogInconsistencyError(
                        f"Feature {feature.name} requires {name}, which is not in the catalog"
                    )
                selected[name] = required
                pending.append(required)
                changed = True
        return changed

    # -- Validation --------------------------------------------------------

    def _validate(
        self,
        shape: ApplicationType,
        features: tuple[Feature, ...],
        options: Options,
    ) -> None:
        unsupported = [f.name for f in features if not compatibility.supports_shape(f, shape)]
        if unsupported:
            raise ConflictError(
                f"Feature(s) {', '.join(unsupported)} do not support {shape.value} applications",
                rule="unsupported-shape",
                features=unsupported,
            )

        for capability in sorted(EXCLUSIVE_CAPABILITIES, key=lambda c: c.value):
            tagged = [f.name for f in features if f.has(capability)]
            if len(tagged) > 1:
                raise ConflictError(
                    f"Only one '{capability.value}' feature may be selected, got: {', '.join(tagged)}",
                    rule="exclusive-capability",
                    features=tagged,
                )

        if not compatibility.supports_test_framework(options.language, options.test_framework):
            raise ConflictError(
                f"{options.test_framework.title} is not supported for {options.language.title}",
                rule="test-framework",
            )

        native = [f.name for f in features if f.has(Capability.NATIVE_IMAGE)]
        if native:
            if not compatibility.supports_native(options.language):
                raise ConflictError(
                    f"{options.language.title} does not support native executables",
                    rule="native-language",
                    features=native,
                )
            if options.jdk_version is not compatibility.NATIVE_JDK:
                raise ConflictError(
                    f"Native executables require JDK {compatibility.NATIVE_JDK.as_string()}, "
                    f"got JDK {options.jdk_version.as_string()}",
                    rule="native-jdk",
                    features=native,
                )

        for feature in features:
            if not compatibility.supports_jdk(feature, options.jdk_version):
                supported = ", ".join(v.as_string() for v in sorted(feature.supported_jdks))
                raise ConflictError(
                    f"{feature.title} supports JDK {supported}, got JDK {options.jdk_version.as_string()}",
                    rule="unsupported-jdk",
                    features=[feature.name],
                )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _build_properties(features: tuple[Feature, ...], is_native: bool) -> dict[str, str]:
    properties: dict[str, str] = {}
    for feature in features:
        runtime = feature.native_runtime if is_native and feature.native_runtime else feature.runtime
        if runtime:
            properties[PROPERTY_MICRONAUT_RUNTIME] = runtime
            break
    return properties


def _collect_help_links(resolved: ResolvedConfiguration, links: HelpLinks) -> None:
    for feature in resolved.features:
        for link in feature.documentation:
            links.add(link.label, link.url)
    options = resolved.options
    if options.build_tool.is_gradle and resolved.has(Capability.BUILD_PLUGIN):
        links.add("Micronaut Gradle Plugin documentation", MICRONAUT_GRADLE_DOCS_URL)
        if compatibility.supports_native(options.language):
            links.add("GraalVM Gradle Plugin documentation", GRAALVM_GRADLE_DOCS_URL)
