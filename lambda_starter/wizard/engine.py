"""The create-aws-lambda wizard.

An explicit finite-state machine: every step is a ``WizardStep`` and the
``TRANSITIONS`` table maps ``(step, branch)`` to the next step.  Only the
coding-style step branches (on the chosen ``CodingStyle``); every other step
has a single successor keyed by ``None``.  Because the table is data, every
reachable path can be enumerated with :meth:`LambdaWizard.reachable_paths`.

The wizard only offers legal candidates, so a finished ``SelectionSet``
resolves without conflicts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from lambda_starter import compatibility
from lambda_starter.features.catalog import CatalogInconsistencyError, FeatureCatalog
from lambda_starter.features.models import Capability, Feature
from lambda_starter.generator.models import SelectionSet
from lambda_starter.options import ApplicationType, CodingStyle, LambdaDeployment
from lambda_starter.wizard.prompts import PromptSession


class WizardStep(str, Enum):
    CODING_STYLE = "coding-style"
    WEB_TRIGGER = "web-trigger"
    FUNCTION_TRIGGER = "function-trigger"
    DEPLOYMENT = "deployment"
    ARCHITECTURE = "architecture"
    INFRASTRUCTURE = "infrastructure"
    LANGUAGE = "language"
    TEST_FRAMEWORK = "test-framework"
    BUILD_TOOL = "build-tool"
    JDK_VERSION = "jdk-version"
    DONE = "done"


TRANSITIONS: dict[tuple[WizardStep, Optional[CodingStyle]], WizardStep] = {
    (WizardStep.CODING_STYLE, CodingStyle.CONTROLLERS): WizardStep.WEB_TRIGGER,
    (WizardStep.CODING_STYLE, CodingStyle.HANDLER): WizardStep.FUNCTION_TRIGGER,
    (WizardStep.WEB_TRIGGER, None): WizardStep.DEPLOYMENT,
    (WizardStep.FUNCTION_TRIGGER, None): WizardStep.DEPLOYMENT,
    (WizardStep.DEPLOYMENT, None): WizardStep.ARCHITECTURE,
    (WizardStep.ARCHITECTURE, None): WizardStep.INFRASTRUCTURE,
    (WizardStep.INFRASTRUCTURE, None): WizardStep.LANGUAGE,
    (WizardStep.LANGUAGE, None): WizardStep.TEST_FRAMEWORK,
    (WizardStep.TEST_FRAMEWORK, None): WizardStep.BUILD_TOOL,
    (WizardStep.BUILD_TOOL, None): WizardStep.JDK_VERSION,
    (WizardStep.JDK_VERSION, None): WizardStep.DONE,
}

DEFAULT_PROMPT_SUFFIX = "(enter for default)"


# ---------------------------------------------------------------------------
# Trigger ordering
# ---------------------------------------------------------------------------

def api_trigger_features(shape: ApplicationType, catalog: FeatureCatalog) -> list[Feature]:
    """API triggers supporting *shape*, sorted by title descending."""
    candidates = [
        f for f in catalog.with_tag(Capability.API_TRIGGER)
        if compatibility.supports_shape(f, shape)
    ]
    return sorted(candidates, key=lambda f: f.title, reverse=True)


def trigger_features(shape: ApplicationType, catalog: FeatureCatalog) -> list[Feature]:
    """Triggers supporting *shape*: API triggers first, then the rest, each by title."""
    candidates = [
        f for f in catalog.with_tag(Capability.TRIGGER)
        if compatibility.supports_shape(f, shape)
    ]
    return sorted(candidates, key=lambda f: (not f.has(Capability.API_TRIGGER), f.title))


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------

@dataclass
class _RunState:
    selection: SelectionSet
    coding_style: CodingStyle = CodingStyle.CONTROLLERS
    trigger: Optional[Feature] = None


class LambdaWizard:
    """Collects a ``SelectionSet`` through a series of numbered questions.

    The wizard owns nothing but the run it is executing: the catalog is read
    only and the session is the caller's.
    """

    def __init__(self, catalog: FeatureCatalog, session: PromptSession) -> None:
        self.catalog = catalog
        self.session = session
        self._handlers: dict[WizardStep, Callable[[_RunState], Optional[CodingStyle]]] = {
            WizardStep.CODING_STYLE: self._coding_style,
            WizardStep.WEB_TRIGGER: self._web_trigger,
            WizardStep.FUNCTION_TRIGGER: self._function_trigger,
            WizardStep.DEPLOYMENT: self._deployment,
            WizardStep.ARCHITECTURE: self._architecture,
            WizardStep.INFRASTRUCTURE: self._infrastructure,
            WizardStep.LANGUAGE: self._language,
            WizardStep.TEST_FRAMEWORK: self._test_framework,
            WizardStep.BUILD_TOOL: self._build_tool,
            WizardStep.JDK_VERSION: self._jdk_version,
        }

    def run(self, shape_hint: Optional[ApplicationType] = None) -> SelectionSet:
        """Ask every question on the path and return the collected selection.

        Args:
            shape_hint: Pre-selects the matching coding style as the default.

        Raises:
            CatalogInconsistencyError: If a step's default feature is missing.
            EOFError: If the session runs out of input.
        """
        state = _RunState(selection=SelectionSet(language=self.catalog.default_language))
        if shape_hint is not None:
            state.coding_style = CodingStyle.for_application_type(shape_hint)

        step = WizardStep.CODING_STYLE
        while step is not WizardStep.DONE:
            branch = self._handlers[step](state)
            step = TRANSITIONS[(step, branch)]
        return state.selection

    @staticmethod
    def reachable_paths() -> list[list[WizardStep]]:
        """Every step sequence the transition table allows, start to ``DONE``."""
        paths: list[list[WizardStep]] = []
        pending: list[list[WizardStep]] = [[WizardStep.CODING_STYLE]]
        while pending:
            path = pending.pop()
            step = path[-1]
            if step is WizardStep.DONE:
                paths.append(path)
                continue
            for (source, _branch), target in TRANSITIONS.items():
                if source is step:
                    pending.append(path + [target])
        return sorted(paths, key=lambda p: [s.value for s in p])

    # -- Steps -------------------------------------------------------------

    def _coding_style(self, state: _RunState) -> CodingStyle:
        default = state.coding_style
        style = self.session.choose(
            f"How do you want to write your application? (enter for {default.description})",
            list(CodingStyle),
            label=lambda s: s.description,
            default=default,
        )
        state.coding_style = style
        state.selection.shape = style.application_type
        return style

    def _web_trigger(self, state: _RunState) -> None:
        shape = state.selection.shape
        self._choose_trigger(state, api_trigger_features(shape, self.catalog))

    def _function_trigger(self, state: _RunState) -> None:
        # Handlers are always deployed as functions; controllers stay plain applications.
        state.selection.add(self.catalog.first_with(Capability.FUNCTION_DEPLOYMENT).name)
        shape = state.selection.shape
        self._choose_trigger(state, trigger_features(shape, self.catalog))

    def _choose_trigger(self, state: _RunState, candidates: list[Feature]) -> None:
        shape = state.selection.shape
        default = self.catalog.designated_default(shape, Capability.TRIGGER)
        if default not in candidates:
            raise CatalogInconsistencyError(
                f"Default trigger {default.name} is not offered for {shape.value} applications"
            )
        trigger = self.session.choose(
            f"Choose your trigger. (enter for {default.title})",
            candidates,
            label=lambda f: f.title,
            default=default,
        )
        state.trigger = trigger
        state.selection.add(trigger.name)

    def _deployment(self, state: _RunState) -> None:
        deployment = self.session.choose(
            f"How do you want to deploy? (enter for {LambdaDeployment.FAT_JAR.description})",
            list(LambdaDeployment),
            label=lambda d: d.description,
            default=LambdaDeployment.FAT_JAR,
        )
        state.selection.deployment = deployment
        if deployment is LambdaDeployment.NATIVE_EXECUTABLE:
            state.selection.add(self.catalog.first_with(Capability.NATIVE_IMAGE).name)

    def _architecture(self, state: _RunState) -> None:
        candidates = sorted(self.catalog.with_tag(Capability.ARCHITECTURE), key=lambda f: f.name)
        if not candidates:
            return
        default = self.catalog.designated_default(state.selection.shape, Capability.ARCHITECTURE)
        architecture = self.session.choose(
            f"Choose your Lambda Architecture. (enter for {default.name})",
            candidates,
            label=lambda f: f.title,
            default=default,
        )
        state.selection.add(architecture.name)

    def _infrastructure(self, state: _RunState) -> None:
        iac = self.catalog.first_with(Capability.INFRASTRUCTURE_AS_CODE)
        if self.session.yes_or_no(
            "Do you want to generate infrastructure as code with CDK? (enter for yes)"
        ):
            state.selection.add(iac.name)

    def _language(self, state: _RunState) -> None:
        candidates = compatibility.languages_for_deployment(state.selection.deployment)
        state.selection.language = self.session.choose(
            f"Choose your preferred language. {DEFAULT_PROMPT_SUFFIX}",
            candidates,
            label=lambda language: language.title,
            default=compatibility.default_or_first(candidates, self.catalog.default_language),
        )

    def _test_framework(self, state: _RunState) -> None:
        state.selection.test_framework = self.session.choose(
            f"Choose your preferred test framework. {DEFAULT_PROMPT_SUFFIX}",
            compatibility.frameworks_for_language(state.selection.language),
            label=lambda framework: framework.title,
        )

    def _build_tool(self, state: _RunState) -> None:
        state.selection.build_tool = self.session.choose(
            f"Choose your preferred build tool. {DEFAULT_PROMPT_SUFFIX}",
            compatibility.build_tools_for(state.selection.language),
            label=lambda tool: tool.title,
        )

    def _jdk_version(self, state: _RunState) -> None:
        state.selection.jdk_version = self.session.choose(
            f"Choose the target JDK. {DEFAULT_PROMPT_SUFFIX}",
            compatibility.jdk_versions_for_deployment(state.selection.deployment, state.trigger),
            label=lambda version: version.as_string(),
        )
