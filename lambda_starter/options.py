"""Generation options for Lambda Starter.

Closed enumerations for every choice a generation run makes (language, build
tool, test framework, JDK, deployment mode, coding style) together with the
immutable ``Options`` bundle handed to the resolver.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------------------------------------------------------------------------
# Application shape
# ---------------------------------------------------------------------------

class ApplicationType(str, Enum):
    """The overall application archetype."""
    DEFAULT = "default"
    CLI = "cli"
    FUNCTION = "function"
    GRPC = "grpc"
    MESSAGING = "messaging"


class CodingStyle(str, Enum):
    """How the user wants to write the application."""
    CONTROLLERS = "controllers"
    HANDLER = "handler"

    @property
    def description(self) -> str:
        return "Controllers" if self is CodingStyle.CONTROLLERS else "Handler"

    @property
    def application_type(self) -> ApplicationType:
        if self is CodingStyle.HANDLER:
            return ApplicationType.FUNCTION
        return ApplicationType.DEFAULT

    @classmethod
    def for_application_type(cls, application_type: ApplicationType) -> "CodingStyle":
        if application_type is ApplicationType.FUNCTION:
            return cls.HANDLER
        return cls.CONTROLLERS


class LambdaDeployment(str, Enum):
    """How the function is packaged and deployed."""
    FAT_JAR = "fat-jar"
    NATIVE_EXECUTABLE = "native-executable"

    @property
    def description(self) -> str:
        if self is LambdaDeployment.NATIVE_EXECUTABLE:
            return "GraalVM Native Executable"
        return "Java runtime"


class YesOrNo(str, Enum):
    YES = "yes"
    NO = "no"

    @property
    def description(self) -> str:
        return self.value.capitalize()


# ---------------------------------------------------------------------------
# Language, build tool, test framework, JDK
# ---------------------------------------------------------------------------

class Language(str, Enum):
    """Source language of the generated project."""
    JAVA = "java"
    GROOVY = "groovy"
    KOTLIN = "kotlin"

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @classmethod
    def default(cls) -> "Language":
        return cls.JAVA


class TestFramework(str, Enum):
    """Test framework of the generated project."""
    __test__ = False  # not a pytest test class

    JUNIT = "junit"
    SPOCK = "spock"
    KOTEST = "kotest"

    @property
    def title(self) -> str:
        return {"junit": "JUnit", "spock": "Spock", "kotest": "Kotest"}[self.value]


class GradleDsl(str, Enum):
    GROOVY = "groovy"
    KOTLIN = "kotlin"


class BuildTool(str, Enum):
    """Build tool of the generated project."""
    GRADLE = "gradle"
    GRADLE_KOTLIN = "gradle_kotlin"
    MAVEN = "maven"

    @property
    def title(self) -> str:
        return {
            "gradle": "Gradle Groovy DSL",
            "gradle_kotlin": "Gradle Kotlin DSL",
            "maven": "Maven",
        }[self.value]

    @property
    def is_gradle(self) -> bool:
        return self is not BuildTool.MAVEN

    @property
    def gradle_dsl(self) -> Optional[GradleDsl]:
        if self is BuildTool.GRADLE:
            return GradleDsl.GROOVY
        if self is BuildTool.GRADLE_KOTLIN:
            return GradleDsl.KOTLIN
        return None


class JdkVersion(int, Enum):
    """Target JDK major version."""
    JDK_17 = 17
    JDK_21 = 21
    JDK_25 = 25

    def as_string(self) -> str:
        return str(self.value)

    @classmethod
    def default(cls) -> "JdkVersion":
        return cls.JDK_17


# Per-language legal test frameworks and build tools; first entry is the default.
LANGUAGE_TEST_FRAMEWORKS: dict[Language, tuple[TestFramework, ...]] = {
    Language.JAVA: (TestFramework.JUNIT, TestFramework.SPOCK),
    Language.GROOVY: (TestFramework.SPOCK, TestFramework.JUNIT),
    Language.KOTLIN: (TestFramework.JUNIT, TestFramework.KOTEST, TestFramework.SPOCK),
}

LANGUAGE_BUILD_TOOLS: dict[Language, tuple[BuildTool, ...]] = {
    Language.JAVA: (BuildTool.GRADLE, BuildTool.GRADLE_KOTLIN, BuildTool.MAVEN),
    Language.GROOVY: (BuildTool.GRADLE, BuildTool.GRADLE_KOTLIN, BuildTool.MAVEN),
    Language.KOTLIN: (BuildTool.GRADLE_KOTLIN, BuildTool.GRADLE, BuildTool.MAVEN),
}


# ---------------------------------------------------------------------------
# Options bundle
# ---------------------------------------------------------------------------

class Options(BaseModel):
    """The option values of one generation run.

    ``test_framework`` and ``build_tool`` fall back to the language defaults
    when they are not given.
    """

    model_config = ConfigDict(frozen=True)

    language: Language = Field(default_factory=Language.default)
    test_framework: TestFramework = Field(default=TestFramework.JUNIT)
    build_tool: BuildTool = Field(default=BuildTool.GRADLE)
    jdk_version: JdkVersion = Field(default_factory=JdkVersion.default)
    deployment: LambdaDeployment = Field(default=LambdaDeployment.FAT_JAR)

    @model_validator(mode="before")
    @classmethod
    def _apply_language_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        language = Language(data.get("language") or Language.default())
        data["language"] = language
        if data.get("test_framework") is None:
            data["test_framework"] = LANGUAGE_TEST_FRAMEWORKS[language][0]
        if data.get("build_tool") is None:
            data["build_tool"] = LANGUAGE_BUILD_TOOLS[language][0]
        if data.get("jdk_version") is None:
            data.pop("jdk_version", None)
        if data.get("deployment") is None:
            data.pop("deployment", None)
        return data

    @property
    def is_native(self) -> bool:
        return self.deployment is LambdaDeployment.NATIVE_EXECUTABLE
