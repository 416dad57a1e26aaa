"""The feature catalog.

``FeatureCatalog`` is an explicitly constructed, read-only registry.  It is
built once (normally through :func:`default_catalog`) and can then be shared
by any number of concurrent generation runs, since nothing mutates it after
construction.  Tests build their own catalogs to stay isolated.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Optional

from lambda_starter.features.models import (
    ALL_APPLICATION_TYPES,
    Capability,
    DocLink,
    Feature,
)
from lambda_starter.options import ApplicationType, JdkVersion, Language


# ---------------------------------------------------------------------------
# Well-known feature names and documentation
# ---------------------------------------------------------------------------

APPLICATION = "application"
AWS_LAMBDA = "aws-lambda"
ORACLE_FUNCTION = "oracle-function"
GRAALVM = "graalvm"
AMAZON_API_GATEWAY = "amazon-api-gateway"
AMAZON_API_GATEWAY_HTTP = "amazon-api-gateway-http"
LAMBDA_FUNCTION_URL = "aws-lambda-function-url"
S3_EVENT_NOTIFICATION = "aws-lambda-s3-event-notification"
SCHEDULED_EVENT = "aws-lambda-scheduled-event"
ARM = "arm"
X86 = "x86"
AWS_CDK = "aws-cdk"
AWS_LAMBDA_CUSTOM_RUNTIME = "aws-lambda-custom-runtime"
PICOCLI = "picocli"
MICRONAUT_AOT = "micronaut-aot"
SECURITY_JWT = "security-jwt"
SECURITY_OAUTH2 = "security-oauth2"
MICRONAUT_BUILD = "micronaut-build"

MICRONAUT_GRADLE_DOCS_URL = "https://micronaut-projects.github.io/micronaut-gradle-plugin/latest/"
GRAALVM_GRADLE_DOCS_URL = "https://graalvm.github.io/native-build-tools/latest/gradle-plugin.html"

_LAMBDA_SHAPES = frozenset({ApplicationType.DEFAULT, ApplicationType.FUNCTION})
_LAMBDA_JDKS = frozenset({JdkVersion.JDK_17, JdkVersion.JDK_21})


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class StarterError(Exception):
    """Base class for errors that terminate a generation run."""


class CatalogInconsistencyError(StarterError):
    """Raised when the catalog lacks a feature or coordinate the engine relies on.

    This is a programming or deployment error, never a user mistake, and is
    never retried.
    """


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class FeatureCatalog:
    """Immutable registry of features, keyed by name.

    Registration order is preserved and used wherever the catalog is iterated,
    so every query is deterministic.

    Attributes:
        default_language: Language offered as the wizard default.
        canonical_jdk: JDK version that needs no explicit container image.
    """

    def __init__(
        self,
        features: Iterable[Feature],
        *,
        default_language: Language = Language.JAVA,
        canonical_jdk: JdkVersion = JdkVersion.JDK_17,
    ) -> None:
        by_name: dict[str, Feature] = {}
        for feature in features:
            if feature.name in by_name:
                raise CatalogInconsistencyError(
                    f"Duplicate feature name in catalog: {feature.name}"
                )
            by_name[feature.name] = feature
        self._features = by_name
        self.default_language = default_language
        self.canonical_jdk = canonical_jdk

    # -- Collection protocol -----------------------------------------------

    def __iter__(self) -> Iterator[Feature]:
        return iter(self._features.values())

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, name: object) -> bool:
        return name in self._features

    @property
    def names(self) -> list[str]:
        return list(self._features)

    # -- Lookups -----------------------------------------------------------

    def get(self, name: str) -> Optional[Feature]:
        return self._features.get(name)

    def require(self, name: str) -> Feature:
        """Return the feature called *name* or raise ``CatalogInconsistencyError``."""
        feature = self._features.get(name)
        if feature is None:
            raise CatalogInconsistencyError(f"Feature {name} not found in catalog")
        return feature

    def with_tag(self, capability: Capability) -> list[Feature]:
        return [f for f in self._features.values() if f.has(capability)]

    def first_with(self, capability: Capability) -> Feature:
        """Return the first feature tagged *capability* or raise."""
        for feature in self._features.values():
            if feature.has(capability):
                return feature
        raise CatalogInconsistencyError(
            f"No feature tagged '{capability.value}' found in catalog"
        )

    def defaults_for(self, shape: ApplicationType) -> list[Feature]:
        return [f for f in self._features.values() if f.is_default_for(shape)]

    def designated_default(self, shape: ApplicationType, capability: Capability) -> Feature:
        """Return the default feature for *shape* that carries *capability*.

        Raises:
            CatalogInconsistencyError: If the catalog declares no such default.
        """
        for feature in self.defaults_for(shape):
            if feature.has(capability):
                return feature
        raise CatalogInconsistencyError(
            f"Default '{capability.value}' feature for {shape.value} applications not found"
        )

    def visible(self) -> list[Feature]:
        return [f for f in self._features.values() if f.visible]


# ---------------------------------------------------------------------------
# Standard catalog
# ---------------------------------------------------------------------------


def default_catalog() -> FeatureCatalog:
    """Build the standard Lambda Starter catalog."""
    return FeatureCatalog(
        [
            Feature(
                name=AWS_LAMBDA,
                title="AWS Lambda",
                description="Deploy the application as an AWS Lambda function",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.FUNCTION_DEPLOYMENT}),
                runtime="lambda_java",
                native_runtime="lambda_provided",
                container_base_image="amazonlinux:2023",
                application_for=frozenset({ApplicationType.DEFAULT}),
                supported_jdks=_LAMBDA_JDKS,
                artifacts=("micronaut-function-aws",),
                documentation=(
                    DocLink(
                        label="Micronaut AWS Lambda Function documentation",
                        url="https://micronaut-projects.github.io/micronaut-aws/latest/guide/index.html#lambda",
                    ),
                    DocLink(label="AWS Lambda", url="https://aws.amazon.com/lambda/"),
                ),
            ),
            Feature(
                name=ORACLE_FUNCTION,
                title="Oracle Cloud Function",
                description="Deploy the application as an Oracle Cloud Function",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.FUNCTION_DEPLOYMENT}),
                runtime="oracle_function",
                application_for=ALL_APPLICATION_TYPES,
                artifacts=("micronaut-oraclecloud-function-http",),
                documentation=(
                    DocLink(
                        label="Micronaut Oracle Cloud Function documentation",
                        url="https://micronaut-projects.github.io/micronaut-oracle-cloud/latest/guide/#functions",
                    ),
                ),
            ),
            Feature(
                name=GRAALVM,
                title="GraalVM Native Image",
                description="Compile the application ahead of time into a native executable",
                tags=frozenset({Capability.NATIVE_IMAGE}),
                documentation=(
                    DocLink(label="GraalVM Native Image", url="https://www.graalvm.org/latest/reference-manual/native-image/"),
                ),
            ),
            Feature(
                name=AMAZON_API_GATEWAY,
                title="Amazon API Gateway REST API",
                description="Invoke the function through an Amazon API Gateway REST API",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.TRIGGER, Capability.API_TRIGGER}),
                default_for=frozenset({ApplicationType.DEFAULT}),
                default_when=frozenset({AWS_LAMBDA}),
                supported_jdks=_LAMBDA_JDKS,
                documentation=(
                    DocLink(label="Amazon API Gateway", url="https://aws.amazon.com/api-gateway/"),
                ),
            ),
            Feature(
                name=AMAZON_API_GATEWAY_HTTP,
                title="Amazon API Gateway HTTP API",
                description="Invoke the function through an Amazon API Gateway HTTP API",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.TRIGGER, Capability.API_TRIGGER}),
                supported_jdks=_LAMBDA_JDKS,
                documentation=(
                    DocLink(
                        label="Amazon API Gateway HTTP APIs",
                        url="https://docs.aws.amazon.com/apigateway/latest/developerguide/http-api.html",
                    ),
                ),
            ),
            Feature(
                name=LAMBDA_FUNCTION_URL,
                title="Lambda Function URL",
                description="Invoke the function through a dedicated HTTPS endpoint",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.TRIGGER, Capability.API_TRIGGER}),
                default_for=frozenset({ApplicationType.FUNCTION}),
                default_when=frozenset({AWS_LAMBDA}),
                supported_jdks=_LAMBDA_JDKS,
                documentation=(
                    DocLink(
                        label="Lambda function URLs",
                        url="https://docs.aws.amazon.com/lambda/latest/dg/lambda-urls.html",
                    ),
                ),
            ),
            Feature(
                name=S3_EVENT_NOTIFICATION,
                title="S3 Event Notification",
                description="Invoke the function when objects change in an S3 bucket",
                supports=frozenset({ApplicationType.FUNCTION}),
                tags=frozenset({Capability.TRIGGER}),
                supported_jdks=_LAMBDA_JDKS,
            ),
            Feature(
                name=SCHEDULED_EVENT,
                title="Scheduled Event",
                description="Invoke the function on an Amazon EventBridge schedule",
                supports=frozenset({ApplicationType.FUNCTION}),
                tags=frozenset({Capability.TRIGGER}),
                supported_jdks=_LAMBDA_JDKS,
            ),
            Feature(
                name=ARM,
                title="ARM",
                description="Run the function on ARM64 (Graviton) processors",
                tags=frozenset({Capability.ARCHITECTURE}),
            ),
            Feature(
                name=X86,
                title="X86",
                description="Run the function on x86_64 processors",
                tags=frozenset({Capability.ARCHITECTURE}),
                default_for=_LAMBDA_SHAPES,
                default_when=frozenset({AWS_LAMBDA}),
            ),
            Feature(
                name=AWS_CDK,
                title="AWS CDK",
                description="Generate infrastructure as code with the AWS Cloud Development Kit",
                tags=frozenset({Capability.INFRASTRUCTURE_AS_CODE}),
                documentation=(
                    DocLink(label="AWS CDK", url="https://aws.amazon.com/cdk/"),
                ),
            ),
            Feature(
                name=AWS_LAMBDA_CUSTOM_RUNTIME,
                title="AWS Lambda Custom Runtime",
                description="Run a native executable on the Lambda custom runtime",
                supports=_LAMBDA_SHAPES,
                tags=frozenset({Capability.ENTRY_POINT}),
                default_for=_LAMBDA_SHAPES,
                default_when=frozenset({AWS_LAMBDA, GRAALVM}),
                requires=frozenset({AWS_LAMBDA}),
                lambda_runtime_main_class="io.micronaut.function.aws.runtime.MicronautLambdaRuntime",
                artifacts=("micronaut-function-aws-custom-runtime",),
            ),
            Feature(
                name=APPLICATION,
                title="Application",
                description="Runnable application with a main class",
                supports=frozenset({ApplicationType.DEFAULT}),
                tags=frozenset({Capability.ENTRY_POINT}),
                default_for=frozenset({ApplicationType.DEFAULT}),
                visible=False,
            ),
            Feature(
                name=PICOCLI,
                title="Picocli",
                description="Command line application built with Picocli",
                supports=frozenset({ApplicationType.CLI}),
                tags=frozenset({Capability.ENTRY_POINT}),
                artifacts=("micronaut-picocli",),
            ),
            Feature(
                name=MICRONAUT_AOT,
                title="Micronaut AOT",
                description="Build-time optimizations through Micronaut AOT",
                tags=frozenset({Capability.AOT}),
                documentation=(
                    DocLink(
                        label="Micronaut AOT documentation",
                        url="https://micronaut-projects.github.io/micronaut-aot/latest/guide/",
                    ),
                ),
            ),
            Feature(
                name=SECURITY_JWT,
                title="Micronaut Security JWT",
                description="Authenticate requests with JSON Web Tokens",
                tags=frozenset({Capability.TOKEN_VALIDATION}),
                artifacts=("micronaut-security-jwt",),
            ),
            Feature(
                name=SECURITY_OAUTH2,
                title="Micronaut Security OAuth 2.0",
                description="Authenticate with OAuth 2.0 and OpenID Connect providers",
                tags=frozenset({Capability.TOKEN_VALIDATION, Capability.OPENID_DISCOVERY}),
                artifacts=("micronaut-security-oauth2",),
            ),
            Feature(
                name=MICRONAUT_BUILD,
                title="Micronaut Build Plugin",
                description="Configures the Micronaut build plugin",
                tags=frozenset({Capability.BUILD_PLUGIN}),
                default_for=ALL_APPLICATION_TYPES,
                visible=False,
            ),
        ],
        default_language=Language.JAVA,
        canonical_jdk=JdkVersion.JDK_17,
    )
