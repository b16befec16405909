"""Main scaffolding step.

Materialises a :class:`~vibe_generate.scaffolder.tree.TemplateTree` under
``output_dir/project_name`` and then replaces the project-name placeholder in
every UTF-8 text file of the new directory. The copy walk is the same for
on-disk and bundled templates, and the substitution pass runs over the
written files only, so both sources end up with identical results.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, field_validator

from vibe_generate.config import Config

from .catalog import TemplateSource, list_templates, require_template, resolve_template
from .errors import (
    DestinationExistsError,
    InvalidProjectNameError,
    ScaffoldIOError,
    TemplateSourceError,
)
from .tree import TemplateTree

logger = logging.getLogger(__name__)


def validate_project_name(name: str) -> str:
    """Check that *name* is usable as a single directory name.

    Raises:
        InvalidProjectNameError: If the name is empty, contains a path
            separator, or is a relative path marker.
    """
    if not name or not name.strip():
        raise InvalidProjectNameError(name, "name cannot be empty")
    if "/" in name or "\\" in name or (os.altsep and os.altsep in name):
        raise InvalidProjectNameError(name, "name cannot contain path separators")
    if name in (".", ".."):
        raise InvalidProjectNameError(name, "name must not be a relative path marker")
    if "\0" in name:
        raise InvalidProjectNameError(name, "name cannot contain NUL bytes")
    return name


class ScaffoldRequest(BaseModel):
    """One scaffolding job: which template, what name, and where."""

    model_config = {"frozen": True}

    template_name: str
    project_name: str
    output_dir: Path

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        return validate_project_name(value)

    @property
    def destination(self) -> Path:
        """``output_dir/project_name``; must not exist before scaffolding."""
        return self.output_dir / self.project_name


@dataclass
class ScaffoldReport:
    """What a single :meth:`Scaffolder.scaffold` call produced."""

    destination: Path
    files_written: list[Path] = field(default_factory=list)
    files_rewritten: list[Path] = field(default_factory=list)
    directories_created: int = 0


class Scaffolder:
    """Copies a template tree to disk and fills in the project name.

    A ``Scaffolder`` holds no state between calls apart from
    :attr:`last_report`, so one instance can scaffold several projects.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()
        self.last_report: ScaffoldReport | None = None

    # -- Public API --------------------------------------------------------

    def run(self, source: TemplateSource, request: ScaffoldRequest) -> Path:
        """Look up ``request.template_name`` in *source* and scaffold it.

        The template name is checked against the source before anything is
        written under ``request.output_dir``.
        """
        require_template(list_templates(source), request.template_name)
        tree = resolve_template(source, request.template_name)
        return self.scaffold(tree, request.output_dir, request.project_name)

    def scaffold(
        self,
        tree: TemplateTree,
        output_dir: str | Path,
        project_name: str,
    ) -> Path:
        """Create ``output_dir/project_name`` from *tree*.

        Args:
            tree: Root of the template to copy.
            output_dir: Parent directory of the new project. Created if it
                does not exist.
            project_name: Name of the new project directory and the value
                substituted for the placeholder.

        Returns:
            Path to the new project directory.

        Raises:
            DestinationExistsError: The destination is already present.
            TemplateSourceError: The template directory is missing or
                unreadable.
            InvalidProjectNameError: *project_name* is not a plain name.
            ScaffoldIOError: Copying or rewriting a file failed. Files
                written before the failure are left in place.
        """
        validate_project_name(project_name)
        dest = Path(output_dir) / project_name
        if dest.exists() or dest.is_symlink():
            raise DestinationExistsError(dest)

        if not tree.is_dir():
            raise TemplateSourceError(
                f"Template directory not found: {tree.location}",
                path=tree.location,
            )

        report = ScaffoldReport(destination=dest)
        self.last_report = report

        logger.info("Scaffolding %s from %s", dest, tree.location)
        try:
            dest.mkdir(parents=True)
        except FileExistsError as exc:
            # Another writer created it after the existence check.
            raise DestinationExistsError(dest) from exc
        except OSError as exc:
            raise ScaffoldIOError("create directory", dest, exc) from exc
        report.directories_created += 1

        self._copy_tree(tree, dest, report)
        self._replace_placeholders(dest, project_name, report)
        logger.info(
            "Wrote %d files (%d with placeholders) under %s",
            len(report.files_written),
            len(report.files_rewritten),
            dest,
        )
        return dest

    # -- Copy --------------------------------------------------------------

    def _copy_tree(self, tree: TemplateTree, dest: Path, report: ScaffoldReport) -> None:
        """Recursively write the contents of *tree* into the existing *dest*."""
        try:
            file_names = tree.files()
            subdirs = tree.dirs()
        except OSError as exc:
            raise ScaffoldIOError("read template directory", tree.location, exc) from exc

        for name in file_names:
            target = dest / name
            try:
                data = tree.read_file(name)
            except OSError as exc:
                raise ScaffoldIOError("read template file", tree.file_location(name), exc) from exc
            try:
                target.write_bytes(data)
            except OSError as exc:
                raise ScaffoldIOError("write", target, exc) from exc
            logger.debug("Copied %s -> %s", tree.file_location(name), target)
            report.files_written.append(target)

        for subdir in subdirs:
            target_dir = dest / subdir.name
            try:
                target_dir.mkdir()
            except OSError as exc:
                raise ScaffoldIOError("create directory", target_dir, exc) from exc
            report.directories_created += 1
            self._copy_tree(subdir, target_dir, report)

    # -- Placeholder substitution -----------------------------------------

    def _replace_placeholders(
        self, root: Path, project_name: str, report: ScaffoldReport
    ) -> None:
        """Replace the placeholder in every UTF-8 file under *root*.

        Files that are not valid UTF-8 are treated as binary and left alone.
        """
        placeholder = self.config.placeholder

        for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                if not path.is_file():
                    continue
                try:
                    raw = path.read_bytes()
                except OSError as exc:
                    raise ScaffoldIOError("read", path, exc) from exc

                try:
                    text = raw.decode("utf-8")
                except UnicodeDecodeError:
                    logger.debug("Leaving binary file %s untouched", path)
                    continue

                if placeholder not in text:
                    continue

                try:
                    path.write_bytes(text.replace(placeholder, project_name).encode("utf-8"))
                except OSError as exc:
                    raise ScaffoldIOError("write", path, exc) from exc
                logger.debug("Replaced placeholder in %s", path)
                report.files_rewritten.append(path)


def _raise_walk_error(exc: OSError) -> None:
    raise ScaffoldIOError("read", exc.filename or "<unknown>", exc) from exc


# ---------------------------------------------------------------------------
# Convenience function
# ---------------------------------------------------------------------------


def scaffold(
    tree: TemplateTree,
    output_dir: str | Path,
    project_name: str,
    config: Config | None = None,
) -> Path:
    """Scaffold *tree* into ``output_dir/project_name`` (convenience wrapper)."""
    return Scaffolder(config).scaffold(tree, output_dir, project_name)
