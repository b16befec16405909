"""Template discovery and lookup.

The active :class:`TemplateSource` is chosen once per run by
:func:`select_source`: an explicitly configured directory, then a
``templates/`` directory found by walking up from the working directory,
then the snapshot bundled inside the package. The chosen source is passed to
:func:`list_templates` and :func:`resolve_template` explicitly.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path

from vibe_generate.config import Config

from .errors import NoTemplatesError, TemplateNotFoundError, TemplateSourceError
from .tree import BundleTree, FilesystemTree, TemplateTree, is_ignored

logger = logging.getLogger(__name__)

BUNDLE_PACKAGE = "vibe_generate"
BUNDLE_DIR = "templates"


class SourceKind(str, Enum):
    """Where templates are read from."""

    FILESYSTEM = "filesystem"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class TemplateSource:
    """The templates root used for a whole run.

    Exactly one of ``root`` (filesystem) or ``bundle`` (embedded) is set,
    matching ``kind``. Use :meth:`filesystem` / :meth:`embedded` to build one.
    """

    kind: SourceKind
    root: Path | None = None
    bundle: Traversable | None = None

    @classmethod
    def filesystem(cls, root: str | Path) -> TemplateSource:
        return cls(kind=SourceKind.FILESYSTEM, root=Path(root))

    @classmethod
    def embedded(cls, bundle: Traversable | None = None) -> TemplateSource:
        return cls(
            kind=SourceKind.EMBEDDED,
            bundle=bundle if bundle is not None else bundled_templates(),
        )

    def tree(self) -> TemplateTree:
        """Return the root of the source as a :class:`TemplateTree`."""
        if self.kind is SourceKind.FILESYSTEM:
            assert self.root is not None
            return FilesystemTree(self.root)
        assert self.bundle is not None
        return BundleTree(self.bundle, location=f"<bundled {BUNDLE_DIR}>")

    def describe(self) -> str:
        if self.kind is SourceKind.FILESYSTEM:
            return str(self.root)
        return f"bundled {BUNDLE_DIR}"


def bundled_templates() -> Traversable:
    """Return the templates snapshot shipped as package data."""
    return files(BUNDLE_PACKAGE).joinpath(BUNDLE_DIR)


# ---------------------------------------------------------------------------
# Source selection
# ---------------------------------------------------------------------------


def find_templates_root(
    start: str | Path | None = None,
    max_levels: int = 32,
    dir_name: str = "templates",
) -> Path | None:
    """Walk up from *start* looking for a *dir_name* directory.

    Checks *start* itself and then at most *max_levels* parents, stopping at
    the first match or at the filesystem root.

    Args:
        start: Directory to begin in. Defaults to the working directory.
        max_levels: Maximum number of parent directories to visit.
        dir_name: Name of the directory to look for.

    Returns:
        The first matching directory, or ``None`` if none was found.
    """
    current = Path(start) if start is not None else Path.cwd()
    current = current.absolute()

    for _ in range(max_levels + 1):
        candidate = current / dir_name
        if candidate.is_dir():
            return candidate
        if current.parent == current:
            break
        current = current.parent

    return None


def select_source(config: Config, start: str | Path | None = None) -> TemplateSource:
    """Pick the template source for this run.

    Order: ``config.templates_dir`` if it is a directory, then the upward
    search from *start*, then the bundled snapshot.
    """
    if config.templates_dir is not None:
        if config.templates_dir.is_dir():
            logger.debug("Using configured templates dir %s", config.templates_dir)
            return TemplateSource.filesystem(config.templates_dir)
        logger.warning(
            "Configured templates dir %s is not a directory; ignoring it",
            config.templates_dir,
        )

    root = find_templates_root(
        start,
        max_levels=config.max_search_depth,
        dir_name=config.templates_dir_name,
    )
    if root is not None:
        logger.debug("Found templates dir %s", root)
        return TemplateSource.filesystem(root)

    logger.debug("No templates dir found; using bundled templates")
    return TemplateSource.embedded()


# ---------------------------------------------------------------------------
# Listing and lookup
# ---------------------------------------------------------------------------


def list_templates(source: TemplateSource) -> list[str]:
    """Return the template names available in *source*, sorted.

    Raises:
        TemplateSourceError: If the source root cannot be read.
        NoTemplatesError: If the source contains no templates.
    """
    root = source.tree()
    try:
        names = sorted({tree.name for tree in root.dirs()})
    except OSError as exc:
        raise TemplateSourceError(
            f"Cannot read templates from {source.describe()}: {exc.strerror or exc}",
            path=root.location,
        ) from exc

    if not names:
        raise NoTemplatesError(f"No templates found in {source.describe()}")
    return names


def resolve_template(source: TemplateSource, name: str) -> TemplateTree:
    """Return the tree for template *name*.

    Filesystem sources join the path without checking it exists; the
    scaffolder reports a missing directory when it starts copying. Embedded
    sources fail straight away when *name* is not a top-level bundled
    template.

    Raises:
        TemplateNotFoundError: If an embedded template does not exist or
            *name* is a nested path.
    """
    if source.kind is SourceKind.FILESYSTEM:
        assert source.root is not None
        return FilesystemTree(source.root / name)

    root = source.tree()
    assert isinstance(root, BundleTree)
    if name in ("", ".", "..") or "/" in name or "\\" in name or is_ignored(name, True):
        raise TemplateNotFoundError(name, _safe_list(source))
    tree = root.child(name)
    if not tree.is_dir():
        raise TemplateNotFoundError(name, _safe_list(source))
    return tree


def require_template(available: Sequence[str], name: str) -> str:
    """Return *name* if it is one of *available*.

    Raises:
        TemplateNotFoundError: Listing the valid names.
    """
    if name not in available:
        raise TemplateNotFoundError(name, available)
    return name


def _safe_list(source: TemplateSource) -> list[str]:
    try:
        return list_templates(source)
    except (NoTemplatesError, TemplateSourceError):
        return []
