"""Pydantic v2 models for the feature catalog.

A ``Feature`` is an immutable descriptor of one composable capability of the
generated project.  What a feature *is* (a trigger, an architecture choice, a
build-plugin contributor, ...) is expressed through ``Capability`` tags rather
than through its Python type.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lambda_starter.options import ApplicationType, JdkVersion


# ---------------------------------------------------------------------------
# Capability tags
# ---------------------------------------------------------------------------

class Capability(str, Enum):
    """Capability tags a feature can carry."""
    TRIGGER = "trigger"
    API_TRIGGER = "api-trigger"
    ARCHITECTURE = "architecture"
    FUNCTION_DEPLOYMENT = "function-deployment"
    NATIVE_IMAGE = "native-image"
    AOT = "aot"
    INFRASTRUCTURE_AS_CODE = "infrastructure-as-code"
    BUILD_PLUGIN = "build-plugin"
    ENTRY_POINT = "entry-point"
    TOKEN_VALIDATION = "token-validation"
    OPENID_DISCOVERY = "openid-discovery"


# At most one resolved feature may carry each of these tags.
EXCLUSIVE_CAPABILITIES: frozenset[Capability] = frozenset({
    Capability.TRIGGER,
    Capability.ARCHITECTURE,
    Capability.FUNCTION_DEPLOYMENT,
    Capability.NATIVE_IMAGE,
    Capability.INFRASTRUCTURE_AS_CODE,
    Capability.BUILD_PLUGIN,
})

ALL_APPLICATION_TYPES: frozenset[ApplicationType] = frozenset(ApplicationType)


# ---------------------------------------------------------------------------
# Documentation links
# ---------------------------------------------------------------------------

class DocLink(BaseModel):
    """A (label, URL) documentation link surfaced to the user."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human-readable link label")
    url: str = Field(..., description="Absolute documentation URL")


# ---------------------------------------------------------------------------
# Feature
# ---------------------------------------------------------------------------

class Feature(BaseModel):
    """A named, immutable capability descriptor."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Stable unique feature name, e.g. 'aws-lambda'")
    title: str = Field(..., description="Human title shown in prompts")
    description: str = Field(default="", description="What the feature adds")
    supports: frozenset[ApplicationType] = Field(
        default=ALL_APPLICATION_TYPES, description="Application shapes this feature supports"
    )
    tags: frozenset[Capability] = Field(
        default_factory=frozenset, description="Capability tags carried by the feature"
    )
    default_for: frozenset[ApplicationType] = Field(
        default_factory=frozenset, description="Shapes for which this is a default feature"
    )
    default_when: frozenset[str] = Field(
        default_factory=frozenset,
        description="Feature names that must all be selected before the default applies",
    )
    requires: frozenset[str] = Field(
        default_factory=frozenset, description="Features pulled in whenever this one is selected"
    )
    runtime: Optional[str] = Field(
        default=None, description="Value contributed to the micronaut.runtime build property"
    )
    native_runtime: Optional[str] = Field(
        default=None, description="Runtime used instead of 'runtime' for native executables"
    )
    lambda_runtime_main_class: Optional[str] = Field(
        default=None, description="Main class of a custom Lambda runtime"
    )
    container_base_image: Optional[str] = Field(
        default=None, description="Container base image required by a deployment target"
    )
    application_for: frozenset[ApplicationType] = Field(
        default_factory=frozenset,
        description="Shapes under which this feature makes the project an application",
    )
    supported_jdks: frozenset[JdkVersion] = Field(
        default_factory=frozenset, description="Supported JDK versions (empty means all)"
    )
    artifacts: tuple[str, ...] = Field(
        default=(), description="Artifact ids contributed to the build"
    )
    documentation: tuple[DocLink, ...] = Field(
        default=(), description="Documentation links for the feature"
    )
    visible: bool = Field(default=True, description="Whether the feature is user-selectable")

    def has(self, capability: Capability) -> bool:
        return capability in self.tags

    @property
    def exclusive_tags(self) -> frozenset[Capability]:
        return self.tags & EXCLUSIVE_CAPABILITIES

    def is_default_for(self, shape: ApplicationType) -> bool:
        return shape in self.default_for
