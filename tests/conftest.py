"""Shared pytest fixtures for the Lambda Starter test suite.

Provides reusable fixtures for:
- The standard feature catalog and a resolver over it
- Version catalogs (bundled and all-snapshot)
- Scripted prompt sessions writing to an in-memory console
"""

from __future__ import annotations

import io
from collections.abc import Iterable

import pytest
from rich.console import Console

from lambda_starter.build.assembler import BuildPluginAssembler
from lambda_starter.build.coordinates import DEFAULT_COORDINATES, VersionCatalog
from lambda_starter.features.catalog import FeatureCatalog, default_catalog
from lambda_starter.generator.resolver import FeatureResolver
from lambda_starter.wizard.prompts import PromptSession


# ---------------------------------------------------------------------------
# Scripted input
# ---------------------------------------------------------------------------


class ScriptedInput:
    """Reader returning canned answers, then raising ``EOFError``.

    Every prompt shown is recorded in ``prompts``.
    """

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError("no more scripted answers")
        return self._answers.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._answers)


def _memory_console() -> Console:
    return Console(file=io.StringIO(), highlight=False, width=200, color_system=None)


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog() -> FeatureCatalog:
    return default_catalog()


@pytest.fixture
def resolver(catalog: FeatureCatalog) -> FeatureResolver:
    return FeatureResolver(catalog)


@pytest.fixture
def coordinates() -> VersionCatalog:
    return VersionCatalog.default()


@pytest.fixture
def snapshot_coordinates() -> VersionCatalog:
    """Every bundled artifact pinned to a snapshot version."""
    return VersionCatalog.from_mapping({
        artifact_id: (group_id, "5.0.0-SNAPSHOT")
        for artifact_id, (group_id, _version) in DEFAULT_COORDINATES.items()
    })


@pytest.fixture
def assembler(coordinates: VersionCatalog) -> BuildPluginAssembler:
    return BuildPluginAssembler(coordinates)


# ---------------------------------------------------------------------------
# Prompt sessions
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_console() -> Console:
    """Console writing to an in-memory buffer (read via ``console.file.getvalue()``)."""
    return _memory_console()


@pytest.fixture
def scripted_session():
    """Factory: ``scripted_session(["", "2"])`` -> (PromptSession, ScriptedInput).

    Usage::

        def test_something(scripted_session):
            session, reader = scripted_session(["", "1"])
    """

    def factory(answers: Iterable[str]) -> tuple[PromptSession, ScriptedInput]:
        reader = ScriptedInput(answers)
        return PromptSession(console=_memory_console(), reader=reader), reader

    return factory
