"""Lambda Starter feature catalog.

Key classes:
    Feature          - Immutable capability descriptor
    Capability       - Capability tags (trigger, architecture, ...)
    FeatureCatalog   - Read-only registry injected into the engine
"""

from .catalog import (
    CatalogInconsistencyError,
    FeatureCatalog,
    StarterError,
    default_catalog,
)
from .models import EXCLUSIVE_CAPABILITIES, Capability, DocLink, Feature

__all__ = [
    "Feature",
    "Capability",
    "DocLink",
    "EXCLUSIVE_CAPABILITIES",
    "FeatureCatalog",
    "default_catalog",
    "StarterError",
    "CatalogInconsistencyError",
]
