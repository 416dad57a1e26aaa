"""Compatibility predicates.

Pure functions answering "is X legal together with Y" for languages, JDK
versions, deployment modes and feature shapes.  Both the wizard (to offer only
legal candidates) and the resolver (to reject illegal scripted input) use them.
"""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

from lambda_starter.features.models import Feature
from lambda_starter.options import (
    LANGUAGE_BUILD_TOOLS,
    LANGUAGE_TEST_FRAMEWORKS,
    ApplicationType,
    BuildTool,
    JdkVersion,
    LambdaDeployment,
    Language,
    TestFramework,
)

# Native executables are built against exactly one JDK.
NATIVE_JDK: JdkVersion = JdkVersion.JDK_17

T = TypeVar("T")


def supports_native(language: Language) -> bool:
    """Return ``True`` if GraalVM native images support *language*."""
    return language is not Language.GROOVY


def languages_for_deployment(deployment: LambdaDeployment) -> list[Language]:
    """Legal languages for a deployment mode, in declaration order."""
    if deployment is LambdaDeployment.NATIVE_EXECUTABLE:
        return [language for language in Language if supports_native(language)]
    return list(Language)


def jdk_versions_for_deployment(
    deployment: LambdaDeployment,
    feature: Optional[Feature] = None,
) -> list[JdkVersion]:
    """Legal JDK versions for a deployment mode.

    Native executables pin the JDK to :data:`NATIVE_JDK`.  Otherwise the list
    is whatever *feature* (normally the chosen trigger) supports, or every
    version when it declares none.
    """
    if deployment is LambdaDeployment.NATIVE_EXECUTABLE:
        return [NATIVE_JDK]
    return supported_jdks(feature)


def supported_jdks(feature: Optional[Feature]) -> list[JdkVersion]:
    if feature is None or not feature.supported_jdks:
        return list(JdkVersion)
    return sorted(feature.supported_jdks)


def frameworks_for_language(language: Language) -> list[TestFramework]:
    """Legal test frameworks for *language*; the first one is the default."""
    return list(LANGUAGE_TEST_FRAMEWORKS[language])


def build_tools_for(language: Language) -> list[BuildTool]:
    """Legal build tools for *language*; the first one is the default."""
    return list(LANGUAGE_BUILD_TOOLS[language])


def supports_test_framework(language: Language, test_framework: TestFramework) -> bool:
    return test_framework in LANGUAGE_TEST_FRAMEWORKS[language]


def supports_jdk(feature: Feature, jdk_version: JdkVersion) -> bool:
    return not feature.supported_jdks or jdk_version in feature.supported_jdks


def supports_shape(feature: Feature, shape: ApplicationType) -> bool:
    return shape in feature.supports


def default_or_first(candidates: Sequence[T], default: T) -> T:
    """Return *default* when it is a candidate, else the first candidate."""
    if default in candidates:
        return default
    return candidates[0] if candidates else default
