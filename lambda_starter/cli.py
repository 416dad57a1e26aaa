"""Command-line entry point.

Subcommands:
    create-aws-lambda  Interactive wizard for an AWS Lambda project
    create             Non-interactive generation from flags
    list-features      Show the selectable features

Resolved configurations are written to ``<output>/resolved-configuration.json``
together with the Gradle build fragments unless ``--dry-run`` is given.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lambda_starter import __version__
from lambda_starter.build.coordinates import VersionCatalog
from lambda_starter.config import StarterConfig
from lambda_starter.features.catalog import FeatureCatalog, StarterError, default_catalog
from lambda_starter.generator.models import SelectionSet
from lambda_starter.generator.resolver import ConflictError
from lambda_starter.options import (
    ApplicationType,
    BuildTool,
    JdkVersion,
    LambdaDeployment,
    Language,
    TestFramework,
)
from lambda_starter.project import GenerationResult, ProjectStarter
from lambda_starter.utils import (
    console,
    print_error,
    print_help_links,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
)
from lambda_starter.wizard.engine import LambdaWizard
from lambda_starter.wizard.prompts import PromptSession


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lambda-starter",
        description="Lambda Starter -- scaffold Micronaut AWS Lambda projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  lambda-starter create-aws-lambda\n"
            "  lambda-starter create --shape function --features aws-lambda,arm --jdk 21\n"
            "  lambda-starter create --features aws-lambda --deployment native-executable --dry-run\n"
            "  lambda-starter list-features\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--output", "-o",
        default=None,
        help="Output directory (default: ./output or STARTER_OUTPUT_DIR)",
    )
    common.add_argument(
        "--versions-file",
        default=None,
        help="JSON or .properties file overriding the bundled dependency versions",
    )
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and print the configuration without writing files",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    wizard = subparsers.add_parser(
        "create-aws-lambda",
        parents=[common],
        help="Answer a few questions to create an AWS Lambda project",
    )
    wizard.add_argument(
        "--shape",
        choices=[ApplicationType.DEFAULT.value, ApplicationType.FUNCTION.value],
        default=None,
        help="Pre-select the coding style default (function -> Handler)",
    )

    create = subparsers.add_parser(
        "create",
        parents=[common],
        help="Create a project from command-line flags",
    )
    create.add_argument(
        "--shape",
        choices=[t.value for t in ApplicationType],
        default=ApplicationType.DEFAULT.value,
        help="Application type (default: default)",
    )
    create.add_argument(
        "--features", "-f",
        default="",
        help="Comma-separated feature names",
    )
    create.add_argument("--lang", choices=[lang.value for lang in Language], default=None)
    create.add_argument("--build", choices=[tool.value for tool in BuildTool], default=None)
    create.add_argument("--test", choices=[fw.value for fw in TestFramework], default=None)
    create.add_argument("--jdk", type=int, choices=[v.value for v in JdkVersion], default=None)
    create.add_argument(
        "--deployment",
        choices=[d.value for d in LambdaDeployment],
        default=LambdaDeployment.FAT_JAR.value,
    )

    subparsers.add_parser("list-features", help="List the selectable features")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def selection_from_args(args: argparse.Namespace, catalog: FeatureCatalog) -> SelectionSet:
    """Build a ``SelectionSet`` from ``create`` flags."""
    return SelectionSet(
        shape=ApplicationType(args.shape),
        features={name.strip() for name in args.features.split(",") if name.strip()},
        language=Language(args.lang) if args.lang else catalog.default_language,
        test_framework=TestFramework(args.test) if args.test else None,
        build_tool=BuildTool(args.build) if args.build else None,
        jdk_version=JdkVersion(args.jdk) if args.jdk else catalog.canonical_jdk,
        deployment=LambdaDeployment(args.deployment),
    )


def load_config(args: argparse.Namespace) -> StarterConfig:
    """Environment configuration with command-line overrides applied."""
    config = StarterConfig.from_env()
    updates: dict = {}
    if getattr(args, "output", None):
        updates["output_dir"] = Path(args.output)
    if getattr(args, "versions_file", None):
        updates["versions_file"] = Path(args.versions_file)
    if getattr(args, "dry_run", False):
        updates["write_files"] = False
    return config.model_copy(update=updates)


def load_coordinates(config: StarterConfig) -> VersionCatalog:
    coordinates = VersionCatalog.default()
    if config.versions_file is not None:
        coordinates = coordinates.with_overrides(VersionCatalog.from_file(config.versions_file))
    return coordinates


def generate(selection: SelectionSet, config: StarterConfig, catalog: FeatureCatalog) -> GenerationResult:
    """Resolve, assemble, print and (unless dry-run) write one project."""
    starter = ProjectStarter(
        catalog,
        load_coordinates(config),
        snapshot_repository_url=config.snapshot_repository_url,
        plugin_portal_url=config.plugin_portal_url,
    )
    result = starter.generate(selection)
    print_result(result)

    if config.write_files:
        written = asyncio.run(starter.write(result, config.output_dir))
        for path in written:
            print_success(f"Wrote {path}")
    else:
        print_warning("Dry run: no files written")
    return result


def print_result(result: GenerationResult) -> None:
    resolved = result.resolved
    options = resolved.options
    summary = {
        "Application type": resolved.shape.value,
        "Features": ", ".join(sorted(resolved.feature_names)) or "(none)",
        "Language": options.language.title,
        "Test framework": options.test_framework.title,
        "Build tool": options.build_tool.title,
        "JDK": options.jdk_version.as_string(),
        "Deployment": options.deployment.description,
    }
    plugin = result.plugin
    if plugin is not None:
        summary["Build plugin"] = f"{plugin.gradle_plugin_id} {plugin.version or ''}".strip()
        summary["Runtime"] = plugin.runtime or "(unset)"
        summary["Test runtime"] = plugin.test_runtime or "(unset)"
        if plugin.docker_native is not None:
            summary["Base image"] = plugin.docker_native.base_image or "(JDK only)"
        if plugin.aot_enabled:
            summary["Micronaut AOT"] = plugin.aot_version
        if plugin.repositories:
            summary["Repositories"] = ", ".join(r.name for r in plugin.repositories)

    print_step_header("Resolved configuration")
    print_summary_table(summary, title="Project")
    print_help_links(result.help_links.items())


def list_features(catalog: FeatureCatalog) -> None:
    table = Table(title="Features", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Capabilities", style="dim")
    table.add_column("Description")
    for feature in catalog.visible():
        tags = ", ".join(sorted(tag.value for tag in feature.tags))
        table.add_row(feature.name, feature.title, tags, escape(feature.description))
    console.print(table)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``lambda-starter`` / ``python -m lambda_starter``."""
    parser = build_parser()
    args = parser.parse_args(argv)
    catalog = default_catalog()

    if args.command == "list-features":
        list_features(catalog)
        return

    config = load_config(args)
    try:
        if args.command == "create-aws-lambda":
            console.print(
                Panel(
                    "[bold bright_cyan]Create AWS Lambda[/bold bright_cyan]\n"
                    f"Output  : {config.output_dir.resolve()}",
                    title="[bold]Lambda Starter[/bold]",
                    border_style="bright_cyan",
                )
            )
            shape_hint = ApplicationType(args.shape) if args.shape else None
            selection = LambdaWizard(catalog, PromptSession(console)).run(shape_hint)
        else:
            selection = selection_from_args(args, catalog)
        generate(selection, config, catalog)
    except ConflictError as exc:
        print_error(f"Error: {exc} ({exc.rule})")
        sys.exit(1)
    except StarterError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)
    except (EOFError, KeyboardInterrupt):
        console.print()
        print_warning("Cancelled")
        sys.exit(1)
    except FileNotFoundError as exc:
        print_error(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
