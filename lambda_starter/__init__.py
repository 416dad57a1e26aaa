"""Lambda Starter -- Micronaut AWS Lambda project scaffolding.

Resolves a set of named features (chosen interactively through the
create-aws-lambda wizard or given as flags) into a validated configuration
and a single canonical Micronaut build-plugin configuration.

Key classes:
    FeatureCatalog        - Read-only feature registry
    LambdaWizard          - Interactive selection wizard
    FeatureResolver       - Selection -> ResolvedConfiguration
    BuildPluginAssembler  - ResolvedConfiguration -> BuildPluginConfig
    ProjectStarter        - Resolve + assemble + write facade
"""

__version__ = "0.1.0"
