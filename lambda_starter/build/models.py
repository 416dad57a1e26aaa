"""Pydantic v2 models for the assembled build-plugin configuration."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lambda_starter.options import BuildTool, GradleDsl, JdkVersion


class PluginIdentity(str, Enum):
    """Whether the generated project is an application or a library."""
    APPLICATION = "application"
    LIBRARY = "library"

    @property
    def gradle_plugin_id(self) -> str:
        return f"io.micronaut.{self.value}"


class Dockerfile(BaseModel):
    """Container image settings for the native Docker build."""

    model_config = ConfigDict(frozen=True)

    base_image: Optional[str] = Field(default=None, description="Base image, e.g. 'amazonlinux:2023'")
    java_version: Optional[str] = Field(default=None, description="JDK major version as a string")
    args: tuple[str, ...] = Field(default=(), description="Extra JVM / native-image arguments")


class Repository(BaseModel):
    """A plugin-management repository declaration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Repository name, e.g. 'gradlePluginPortal'")
    url: str = Field(..., description="Repository URL")


class BuildPluginConfig(BaseModel):
    """One canonical build-plugin configuration.

    Owned by the generation run that assembled it and never mutated after
    assembly.
    """

    model_config = ConfigDict(frozen=True)

    id: PluginIdentity = Field(..., description="Application or library plugin")
    artifact_id: str = Field(default="micronaut-gradle-plugin")
    version: Optional[str] = Field(default=None, description="Plugin version from the version catalog")
    build_tool: BuildTool = Field(default=BuildTool.GRADLE)
    dsl: Optional[GradleDsl] = Field(default=None, description="Gradle DSL dialect (None for Maven)")
    java_version: JdkVersion = Field(default=JdkVersion.JDK_17)
    incremental: bool = Field(default=True)
    runtime: Optional[str] = Field(default=None, description="micronaut.runtime value")
    test_runtime: Optional[str] = Field(default=None, description="Test runtime token, e.g. 'junit5'")
    lambda_runtime_main_class: Optional[str] = Field(default=None)
    aot_version: Optional[str] = Field(default=None, description="Micronaut AOT version when AOT is enabled")
    aot_keys: dict[str, bool] = Field(default_factory=dict, description="AOT configuration keys")
    docker_native: Optional[Dockerfile] = Field(default=None)
    repositories: tuple[Repository, ...] = Field(default=(), description="Extra plugin repositories")

    @property
    def gradle_plugin_id(self) -> str:
        return self.id.gradle_plugin_id

    @property
    def aot_enabled(self) -> bool:
        return self.aot_version is not None
