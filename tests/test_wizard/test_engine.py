"""Unit tests for the create-aws-lambda wizard (lambda_starter.wizard.engine)."""

from __future__ import annotations

import pytest

from lambda_starter.features import Capability, CatalogInconsistencyError, Feature, FeatureCatalog
from lambda_starter.features.catalog import (
    AMAZON_API_GATEWAY,
    ARM,
    AWS_CDK,
    AWS_LAMBDA,
    GRAALVM,
    LAMBDA_FUNCTION_URL,
    X86,
)
from lambda_starter.options import (
    ApplicationType,
    BuildTool,
    JdkVersion,
    LambdaDeployment,
    Language,
    TestFramework,
)
from lambda_starter.wizard import (
    TRANSITIONS,
    LambdaWizard,
    WizardStep,
    api_trigger_features,
    trigger_features,
)

ALL_DEFAULTS = [""] * 9


def _run(catalog, scripted_session, answers, shape_hint=None):
    session, reader = scripted_session(answers)
    selection = LambdaWizard(catalog, session).run(shape_hint)
    return selection, session.console.file.getvalue(), reader


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------


class TestTransitions:
    @pytest.mark.unit
    def test_every_step_has_a_successor(self):
        sources = {step for step, _branch in TRANSITIONS}
        assert sources == set(WizardStep) - {WizardStep.DONE}

    @pytest.mark.unit
    def test_exactly_two_reachable_paths(self):
        paths = LambdaWizard.reachable_paths()
        assert len(paths) == 2
        for path in paths:
            assert path[0] is WizardStep.CODING_STYLE
            assert path[-1] is WizardStep.DONE
            assert len(path) == 10

    @pytest.mark.unit
    def test_paths_differ_only_in_trigger_step(self):
        web, function = sorted(
            LambdaWizard.reachable_paths(), key=lambda p: WizardStep.WEB_TRIGGER in p, reverse=True
        )
        assert WizardStep.WEB_TRIGGER in web and WizardStep.FUNCTION_TRIGGER not in web
        assert WizardStep.FUNCTION_TRIGGER in function and WizardStep.WEB_TRIGGER not in function
        assert [s for s in web if s is not WizardStep.WEB_TRIGGER] == [
            s for s in function if s is not WizardStep.FUNCTION_TRIGGER
        ]


# ---------------------------------------------------------------------------
# Trigger ordering
# ---------------------------------------------------------------------------


class TestTriggerOrdering:
    @pytest.mark.unit
    def test_web_triggers_by_title_descending(self, catalog):
        titles = [f.title for f in api_trigger_features(ApplicationType.DEFAULT, catalog)]
        assert titles == [
            "Lambda Function URL",
            "Amazon API Gateway REST API",
            "Amazon API Gateway HTTP API",
        ]

    @pytest.mark.unit
    def test_function_triggers_api_first(self, catalog):
        titles = [f.title for f in trigger_features(ApplicationType.FUNCTION, catalog)]
        assert titles == [
            "Amazon API Gateway HTTP API",
            "Amazon API Gateway REST API",
            "Lambda Function URL",
            "S3 Event Notification",
            "Scheduled Event",
        ]

    @pytest.mark.unit
    def test_triggers_filtered_by_shape(self, catalog):
        for feature in trigger_features(ApplicationType.DEFAULT, catalog):
            assert feature.has(Capability.API_TRIGGER)


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------


class TestControllersPath:
    @pytest.mark.unit
    def test_all_defaults(self, catalog, scripted_session):
        selection, output, reader = _run(catalog, scripted_session, ALL_DEFAULTS)
        assert reader.remaining == 0
        assert selection.shape is ApplicationType.DEFAULT
        assert selection.features == {AMAZON_API_GATEWAY, X86, AWS_CDK}
        assert selection.deployment is LambdaDeployment.FAT_JAR
        assert selection.language is Language.JAVA
        assert selection.test_framework is TestFramework.JUNIT
        assert selection.build_tool is BuildTool.GRADLE
        assert selection.jdk_version is JdkVersion.JDK_17

    @pytest.mark.unit
    def test_prompts(self, catalog, scripted_session):
        _selection, output, _reader = _run(catalog, scripted_session, ALL_DEFAULTS)
        for line in (
            "How do you want to write your application? (enter for Controllers)",
            "Choose your trigger. (enter for Amazon API Gateway REST API)",
            " 1) Lambda Function URL",
            "*2) Amazon API Gateway REST API",
            "How do you want to deploy? (enter for Java runtime)",
            "Choose your Lambda Architecture. (enter for x86)",
            " 1) ARM",
            "*2) X86",
            "Do you want to generate infrastructure as code with CDK? (enter for yes)",
            "Choose your preferred language. (enter for default)",
            "Choose your preferred test framework. (enter for default)",
            "Choose your preferred build tool. (enter for default)",
            "Choose the target JDK. (enter for default)",
        ):
            assert line in output.splitlines(), line

    @pytest.mark.unit
    def test_jdk_candidates_follow_trigger(self, catalog, scripted_session):
        answers = [""] * 8 + ["2"]
        selection, output, _reader = _run(catalog, scripted_session, answers)
        assert selection.jdk_version is JdkVersion.JDK_21
        assert "*1) 17" in output
        assert " 2) 21" in output
        assert ") 25" not in output

    @pytest.mark.unit
    def test_custom_answers(self, catalog, scripted_session):
        # controllers, HTTP API, java runtime, arm, no CDK, kotlin, kotest, default build
        answers = ["1", "3", "1", "1", "2", "3", "2", "", ""]
        selection, _output, _reader = _run(catalog, scripted_session, answers)
        assert selection.features == {"amazon-api-gateway-http", ARM}
        assert selection.language is Language.KOTLIN
        assert selection.test_framework is TestFramework.KOTEST
        assert selection.build_tool is BuildTool.GRADLE_KOTLIN

    @pytest.mark.unit
    def test_invalid_answers_are_retried(self, catalog, scripted_session):
        answers = ["9", "x", ""] + [""] * 8
        selection, output, reader = _run(catalog, scripted_session, answers)
        assert selection.shape is ApplicationType.DEFAULT
        assert "Invalid selection '9', enter a number between 1 and 2" in output
        assert "Invalid selection 'x', enter a number between 1 and 2" in output
        assert reader.remaining == 0


class TestHandlerPath:
    @pytest.mark.unit
    def test_shape_hint_preselects_handler(self, catalog, scripted_session):
        selection, output, _reader = _run(
            catalog, scripted_session, ALL_DEFAULTS, shape_hint=ApplicationType.FUNCTION
        )
        assert "How do you want to write your application? (enter for Handler)" in output
        assert selection.shape is ApplicationType.FUNCTION
        assert LAMBDA_FUNCTION_URL in selection.features

    @pytest.mark.unit
    def test_function_trigger_default(self, catalog, scripted_session):
        answers = ["2"] + [""] * 8
        selection, output, _reader = _run(catalog, scripted_session, answers)
        assert "Choose your trigger. (enter for Lambda Function URL)" in output
        assert "*3) Lambda Function URL" in output
        assert " 4) S3 Event Notification" in output
        assert selection.features == {AWS_LAMBDA, LAMBDA_FUNCTION_URL, X86, AWS_CDK}

    @pytest.mark.unit
    def test_handler_adds_function_deployment(self, catalog, scripted_session):
        selection, _output, _reader = _run(catalog, scripted_session, ["2"] + [""] * 8)
        deployments = {f.name for f in catalog.with_tag(Capability.FUNCTION_DEPLOYMENT)}
        assert selection.features & deployments == {AWS_LAMBDA}

    @pytest.mark.unit
    def test_native_narrows_language_and_jdk(self, catalog, scripted_session):
        answers = ["2", "", "2", "", "", "", "", "", ""]
        selection, output, _reader = _run(catalog, scripted_session, answers)
        assert selection.deployment is LambdaDeployment.NATIVE_EXECUTABLE
        assert GRAALVM in selection.features
        assert "*1) Java" in output
        assert " 2) Kotlin" in output
        assert ") Groovy" not in output
        assert "*1) 17" in output
        assert ") 21" not in output
        assert selection.jdk_version is JdkVersion.JDK_17


# ---------------------------------------------------------------------------
# Catalog variations
# ---------------------------------------------------------------------------


def _small_catalog(**trigger_overrides) -> FeatureCatalog:
    trigger = {
        "name": "web-trigger",
        "title": "Web Trigger",
        "tags": frozenset({Capability.TRIGGER, Capability.API_TRIGGER}),
        "default_for": frozenset({ApplicationType.DEFAULT}),
    }
    trigger.update(trigger_overrides)
    return FeatureCatalog([
        Feature(**trigger),
        Feature(name="iac", title="IaC", tags=frozenset({Capability.INFRASTRUCTURE_AS_CODE})),
    ])


class TestCatalogVariations:
    @pytest.mark.unit
    def test_architecture_step_skipped_without_architectures(self, scripted_session):
        selection, output, reader = _run(_small_catalog(), scripted_session, [""] * 8)
        assert reader.remaining == 0
        assert "Lambda Architecture" not in output
        assert selection.features == {"web-trigger", "iac"}
        assert selection.jdk_version is JdkVersion.JDK_17

    @pytest.mark.unit
    def test_missing_default_trigger_aborts(self, scripted_session):
        catalog = _small_catalog(default_for=frozenset())
        with pytest.raises(CatalogInconsistencyError):
            _run(catalog, scripted_session, ALL_DEFAULTS)

    @pytest.mark.unit
    def test_missing_native_feature_aborts(self, scripted_session):
        with pytest.raises(CatalogInconsistencyError):
            _run(_small_catalog(), scripted_session, ["", "", "2"] + [""] * 6)

    @pytest.mark.unit
    def test_missing_function_deployment_aborts_handler_path(self, scripted_session):
        with pytest.raises(CatalogInconsistencyError):
            _run(_small_catalog(), scripted_session, ["2"] + [""] * 8)

    @pytest.mark.unit
    def test_end_of_input_propagates(self, catalog, scripted_session):
        with pytest.raises(EOFError):
            _run(catalog, scripted_session, ["", ""])


# ---------------------------------------------------------------------------
# Wizard output always resolves
# ---------------------------------------------------------------------------


class TestWizardOutputResolves:
    @pytest.mark.parametrize("answers", [
        ALL_DEFAULTS,
        ["2"] + [""] * 8,
        ["2", "", "2", "", "", "2", "", "", ""],
        ["1", "1", "1", "1", "2", "2", "", "3", "2"],
        ["2", "5", "1", "2", "1", "3", "3", "2", "2"],
    ])
    @pytest.mark.unit
    def test_resolves_without_conflict(self, catalog, resolver, scripted_session, answers):
        selection, _output, _reader = _run(catalog, scripted_session, answers)
        resolved = resolver.resolve_selection(selection)
        assert resolved.shape is selection.shape
        assert selection.features <= resolved.feature_names
