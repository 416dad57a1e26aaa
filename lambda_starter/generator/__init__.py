"""Lambda Starter generator.

Turns a ``SelectionSet`` into a validated ``ResolvedConfiguration``.

Usage::

    from lambda_starter.features import default_catalog
    from lambda_starter.generator import FeatureResolver, SelectionSet

    resolver = FeatureResolver(default_catalog())
    resolved = resolver.resolve_selection(SelectionSet(features={"aws-lambda"}))
    print(sorted(resolved.feature_names))
"""

from .models import HelpLinks, ResolvedConfiguration, SelectionSet
from .resolver import ConflictError, FeatureResolver

__all__ = [
    "SelectionSet",
    "ResolvedConfiguration",
    "HelpLinks",
    "FeatureResolver",
    "ConflictError",
]
