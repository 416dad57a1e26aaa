"""Dependency coordinates and the version catalog.

The version catalog is an external collaborator: the engine only ever reads
versions from it, through the ``CoordinateResolver`` protocol.  ``VersionCatalog``
is the bundled implementation, built from a mapping, a JSON file or a
Java-style ``.properties`` file.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lambda_starter.features.catalog import CatalogInconsistencyError
from lambda_starter.utils import load_json

_SEMANTIC_VERSION = re.compile(r"^\d+\.\d+\.\d+(?:[-.][0-9A-Za-z.-]+)?$")

SNAPSHOT_SUFFIX = "-SNAPSHOT"


class Coordinate(BaseModel):
    """A Maven-style group/artifact/version triple."""

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., description="Group id, e.g. 'io.micronaut.aot'")
    artifact_id: str = Field(..., description="Artifact id, e.g. 'micronaut-aot-core'")
    version: Optional[str] = Field(default=None, description="Version string, if known")

    @property
    def is_snapshot(self) -> bool:
        return is_snapshot_version(self.version)


class CoordinateResolver(Protocol):
    """Read-only lookup of coordinates by artifact id."""

    def resolve(self, artifact_id: str) -> Optional[Coordinate]:
        ...


def is_snapshot_version(version: Optional[str]) -> bool:
    """Return ``True`` for a valid semantic version ending in ``-SNAPSHOT``.

    Versions that are missing or do not parse as ``MAJOR.MINOR.PATCH[-suffix]``
    are never treated as snapshots.
    """
    if not version or not _SEMANTIC_VERSION.match(version):
        return False
    return version.endswith(SNAPSHOT_SUFFIX)


# Bundled versions: artifact id -> (group id, version).
DEFAULT_COORDINATES: dict[str, tuple[str, str]] = {
    "micronaut-gradle-plugin": ("io.micronaut.gradle", "4.4.4"),
    "micronaut-aot-core": ("io.micronaut.aot", "2.6.0"),
    "micronaut-function-aws": ("io.micronaut.aws", "4.8.0"),
    "micronaut-function-aws-custom-runtime": ("io.micronaut.aws", "4.8.0"),
    "micronaut-oraclecloud-function-http": ("io.micronaut.oraclecloud", "4.3.0"),
    "micronaut-picocli": ("io.micronaut.picocli", "5.6.0"),
    "micronaut-security-jwt": ("io.micronaut.security", "4.11.0"),
    "micronaut-security-oauth2": ("io.micronaut.security", "4.11.0"),
}


class VersionCatalog:
    """In-memory ``CoordinateResolver`` backed by a mapping."""

    def __init__(self, coordinates: Mapping[str, Coordinate]) -> None:
        self._coordinates = dict(coordinates)

    def resolve(self, artifact_id: str) -> Optional[Coordinate]:
        return self._coordinates.get(artifact_id)

    def __contains__(self, artifact_id: object) -> bool:
        return artifact_id in self._coordinates

    def __len__(self) -> int:
        return len(self._coordinates)

    def with_overrides(self, other: "VersionCatalog") -> "VersionCatalog":
        """Return a new catalog where *other*'s entries replace this one's."""
        return VersionCatalog({**self._coordinates, **other._coordinates})

    # -- Construction ------------------------------------------------------

    @classmethod
    def default(cls) -> "VersionCatalog":
        """The bundled versions."""
        return cls.from_mapping(DEFAULT_COORDINATES)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, tuple[str, str]]) -> "VersionCatalog":
        return cls({
            artifact_id: Coordinate(group_id=group_id, artifact_id=artifact_id, version=version)
            for artifact_id, (group_id, version) in mapping.items()
        })

    @classmethod
    def from_file(cls, path: str | Path) -> "VersionCatalog":
        """Load a catalog from a ``.json`` or ``.properties`` file.

        JSON files map artifact ids to ``{"groupId": ..., "version": ...}``.
        Properties files use ``<artifact>.version`` and ``<artifact>.groupId``
        keys; entries without a group id are skipped.

        Raises:
            FileNotFoundError: If *path* does not exist.
            CatalogInconsistencyError: If a JSON file is malformed or one of
                its entries is not a valid coordinate.
        """
        file_path = Path(path)
        if file_path.suffix == ".json":
            try:
                data = load_json(file_path)
            except json.JSONDecodeError as exc:
                raise CatalogInconsistencyError(
                    f"Versions file {file_path} is not valid JSON: {exc}"
                ) from exc
            if set(data) == {"_root"} and not isinstance(data["_root"], dict):
                raise CatalogInconsistencyError(
                    f"Versions file {file_path} must contain a JSON object"
                )
            return cls({
                artifact_id: _json_coordinate(artifact_id, entry, file_path)
                for artifact_id, entry in data.items()
            })
        return cls._from_properties(parse_properties(file_path.read_text(encoding="utf-8")))

    @classmethod
    def _from_properties(cls, properties: Mapping[str, str]) -> "VersionCatalog":
        coordinates: dict[str, Coordinate] = {}
        for key, group_id in properties.items():
            if not key.endswith(".groupId"):
                continue
            artifact_id = key[: -len(".groupId")]
            coordinates[artifact_id] = Coordinate(
                group_id=group_id,
                artifact_id=artifact_id,
                version=properties.get(f"{artifact_id}.version"),
            )
        return cls(coordinates)


def _json_coordinate(artifact_id: str, entry: Any, file_path: Path) -> Coordinate:
    if not isinstance(entry, dict) or not isinstance(entry.get("groupId"), str):
        raise CatalogInconsistencyError(
            f"Versions file {file_path}: entry for {artifact_id} needs a string 'groupId'"
        )
    try:
        return Coordinate(group_id=entry["groupId"], artifact_id=artifact_id, version=entry.get("version"))
    except ValidationError as exc:
        raise CatalogInconsistencyError(
            f"Versions file {file_path}: invalid entry for {artifact_id}"
        ) from exc


def parse_properties(text: str) -> dict[str, str]:
    """Parse the simple ``key=value`` subset of Java properties files.

    Blank lines and lines starting with ``#`` or ``!`` are ignored; ``:`` is
    accepted as a separator as well.
    """
    properties: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue
        match = re.match(r"^([^=:\s]+)\s*[=:]\s*(.*)$", line)
        if match:
            properties[match.group(1)] = match.group(2).strip()
    return properties
