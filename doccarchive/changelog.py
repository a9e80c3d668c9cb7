"""Markdown change log rendering for archive comparisons."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from .differ import ArchiveComparison
from .logging import get_logger
from .text import capitalize_first_word

TEMPLATE_NAME = "changelog.md.j2"
CHANGELOG_SUFFIX = "_ChangeLog.md"


def changelog_file_name(framework_name: str) -> str:
    return f"{capitalize_first_word(framework_name)}{CHANGELOG_SUFFIX}"


class ChangeLogWriter:
    """Renders and writes ``<Framework>_ChangeLog.md`` files."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self.logger = get_logger("changelog")

    def render(
        self,
        comparison: ArchiveComparison,
        *,
        initial_version: Optional[str] = None,
        newer_version: Optional[str] = None,
    ) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            name=capitalize_first_word(comparison.framework_name),
            initial_release=initial_version or "[Release A]",
            newer_release=newer_version or "[Release B]",
            initial_version=initial_version or "[Version 1]",
            newer_version=newer_version or "[Version 2]",
            additions=comparison.result.addition_links,
            removals=comparison.result.removal_links,
        )

    def write(
        self,
        comparison: ArchiveComparison,
        *,
        output_dir: Path | None = None,
        initial_version: Optional[str] = None,
        newer_version: Optional[str] = None,
    ) -> Path:
        """Write the change log beside the initial archive unless ``output_dir`` is given."""
        content = self.render(
            comparison,
            initial_version=initial_version,
            newer_version=newer_version,
        )
        directory = output_dir or comparison.initial.resolve().parent
        target = directory / changelog_file_name(comparison.framework_name)
        target.write_text(content, encoding="utf-8")
        self.logger.info("Wrote change log to %s", target)
        return target

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["CHANGELOG_SUFFIX", "ChangeLogWriter", "changelog_file_name"]
