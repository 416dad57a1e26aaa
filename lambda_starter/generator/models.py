"""Working and resolved selection models.

``SelectionSet`` is the mutable set of choices collected during one wizard
run (or pre-populated by a scripted caller).  ``ResolvedConfiguration`` is the
resolver's immutable, validated output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from lambda_starter.features.models import Capability, Feature
from lambda_starter.options import (
    ApplicationType,
    BuildTool,
    JdkVersion,
    LambdaDeployment,
    Language,
    Options,
    TestFramework,
)

PROPERTY_MICRONAUT_RUNTIME = "micronaut.runtime"


class HelpLinks:
    """Write-only collector of (label, URL) documentation links.

    Duplicate URLs are ignored; insertion order is preserved.
    """

    def __init__(self) -> None:
        self._links: dict[str, str] = {}

    def add(self, label: str, url: str) -> None:
        if url not in self._links:
            self._links[url] = label

    def items(self) -> list[tuple[str, str]]:
        return [(label, url) for url, label in self._links.items()]

    def __len__(self) -> int:
        return len(self._links)

    def __repr__(self) -> str:
        return f"HelpLinks({self.items()!r})"


@dataclass
class SelectionSet:
    """The working set of one generation run.

    Holds feature names (membership is unique, order irrelevant) plus the
    option values.  ``None`` test framework or build tool means "language
    default".
    """

    shape: ApplicationType = ApplicationType.DEFAULT
    features: set[str] = field(default_factory=set)
    language: Language = Language.JAVA
    test_framework: Optional[TestFramework] = None
    build_tool: Optional[BuildTool] = None
    jdk_version: JdkVersion = JdkVersion.JDK_17
    deployment: LambdaDeployment = LambdaDeployment.FAT_JAR

    def add(self, name: str) -> None:
        self.features.add(name)

    def to_options(self) -> Options:
        return Options(
            language=self.language,
            test_framework=self.test_framework,
            build_tool=self.build_tool,
            jdk_version=self.jdk_version,
            deployment=self.deployment,
        )


@dataclass(frozen=True)
class ResolvedConfiguration:
    """Validated output of the resolver.

    ``features`` is sorted by name so that equal inputs always produce equal
    configurations.  ``help_links`` is a collector for the template layer and
    takes no part in equality.
    """

    shape: ApplicationType
    features: tuple[Feature, ...]
    options: Options
    build_properties: dict[str, str] = field(default_factory=dict)
    help_links: HelpLinks = field(default_factory=HelpLinks, compare=False, repr=False)

    @property
    def feature_names(self) -> frozenset[str]:
        return frozenset(f.name for f in self.features)

    def has(self, capability: Capability) -> bool:
        return any(f.has(capability) for f in self.features)

    def with_tag(self, capability: Capability) -> list[Feature]:
        return [f for f in self.features if f.has(capability)]

    @property
    def is_native(self) -> bool:
        return self.has(Capability.NATIVE_IMAGE)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "shape": self.shape.value,
            "features": sorted(self.feature_names),
            "options": self.options.model_dump(mode="json"),
            "build_properties": dict(self.build_properties),
            "help_links": [{"label": label, "url": url} for label, url in self.help_links.items()],
        }
