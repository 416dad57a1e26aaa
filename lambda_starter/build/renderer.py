"""Jinja2 rendering of the Micronaut Gradle build fragments.

Provides the BuildScriptRenderer class which loads Jinja2 templates from the
``lambda_starter/build/templates/`` directory and renders a
``BuildPluginConfig`` as Gradle build-script fragments in either DSL: the
``plugins {}`` / ``micronaut {}`` / ``dockerfileNative`` block and the
``pluginManagement { repositories {} }`` block.  Everything else about the
generated project stays with the caller.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from lambda_starter.build.models import BuildPluginConfig
from lambda_starter.options import GradleDsl


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

BUILD_TEMPLATE = "build.gradle.j2"
SETTINGS_TEMPLATE = "settings.gradle.j2"

_NATIVE_DOCKERFILE_TYPE = "io.micronaut.gradle.docker.NativeImageDockerfile"


# ---------------------------------------------------------------------------
# BuildScriptRenderer
# ---------------------------------------------------------------------------


class BuildScriptRenderer:
    """Renders Gradle fragments for an assembled build-plugin configuration.

    Maven builds have no Gradle fragments: the ``render_*`` methods raise
    ``ValueError`` for them and :meth:`write` writes nothing.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["gradle_literal"] = _gradle_literal_filter
        self.env.filters["assign"] = _assign_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_build_fragment(self, plugin: BuildPluginConfig) -> str:
        """Render the ``plugins``/``micronaut``/``dockerfileNative`` fragment."""
        return self.render(BUILD_TEMPLATE, self._context(plugin))

    def render_settings_fragment(self, plugin: BuildPluginConfig) -> str:
        """Render ``pluginManagement``; empty when no extra repositories are needed."""
        context = self._context(plugin)
        if not plugin.repositories:
            return ""
        return self.render(SETTINGS_TEMPLATE, context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def write(self, plugin: BuildPluginConfig, output_dir: str | Path) -> list[Path]:
        """Write ``build.gradle[.kts]`` and, when needed, ``settings.gradle[.kts]``.

        Returns:
            List of written file paths (empty for Maven builds).
        """
        if plugin.dsl is None:
            return []
        context = self._context(plugin)
        out_base = Path(output_dir)
        written = [
            await self.render_to_file(
                BUILD_TEMPLATE, out_base / script_name("build", plugin.dsl), context
            )
        ]
        if plugin.repositories:
            written.append(
                await self.render_to_file(
                    SETTINGS_TEMPLATE, out_base / script_name("settings", plugin.dsl), context
                )
            )
        return written

    # -- Context -----------------------------------------------------------

    def _context(self, plugin: BuildPluginConfig) -> dict[str, Any]:
        if plugin.dsl is None:
            raise ValueError(f"{plugin.build_tool.title} builds have no Gradle fragments")
        kotlin = plugin.dsl is GradleDsl.KOTLIN
        plugin_line = f'id("{plugin.gradle_plugin_id}")'
        if plugin.version:
            plugin_line += f' version "{plugin.version}"'
        return {
            "plugin": plugin,
            "kotlin": kotlin,
            "plugin_line": plugin_line,
            "docker": plugin.docker_native,
            "dockerfile_type": f"<{_NATIVE_DOCKERFILE_TYPE}>" if kotlin else "",
            "aot_keys": [
                (key, "true" if value else "false")
                for key, value in sorted(plugin.aot_keys.items())
            ],
        }


def script_name(stem: str, dsl: GradleDsl) -> str:
    """``build`` -> ``build.gradle`` or ``build.gradle.kts``."""
    suffix = ".gradle.kts" if dsl is GradleDsl.KOTLIN else ".gradle"
    return stem + suffix


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _gradle_literal_filter(value: Any) -> str:
    """Render a Python value as a Groovy/Kotlin literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"').replace("$", "\\$")
    return f'"{text}"'


def _assign_filter(prop: str, value: Any, kotlin: bool) -> str:
    """Property assignment: ``prop = value`` (Groovy) or ``prop.set(value)`` (Kotlin)."""
    literal = _gradle_literal_filter(value)
    if kotlin:
        return f"{prop}.set({literal})"
    return f"{prop} = {literal}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
