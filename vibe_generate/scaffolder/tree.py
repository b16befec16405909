"""Template tree adapters.

A template is a directory of boilerplate files. It can live on disk (a
``templates/`` checkout next to the project) or inside the installed package
as bundled resource data. Both are exposed through :class:`TemplateTree`, a
small read-only capability (list subdirectories, list files, read file
bytes) that the scaffolder walks without knowing where the bytes come from.
"""

from __future__ import annotations

import errno
import logging
from abc import ABC, abstractmethod
from importlib.resources.abc import Traversable
from pathlib import Path

logger = logging.getLogger(__name__)

# Interpreter caches that appear next to bundled .py files once the package is
# installed. They were never part of a template.
IGNORED_DIRS = frozenset({"__pycache__"})
IGNORED_SUFFIXES = (".pyc", ".pyo")


def is_ignored(name: str, is_dir: bool) -> bool:
    """Return ``True`` for entries that are never copied out of a template."""
    if is_dir:
        return name in IGNORED_DIRS
    return name.endswith(IGNORED_SUFFIXES)


class TemplateTree(ABC):
    """Read-only view of one directory in a template.

    Subdirectories and files are always returned sorted by name so a walk
    over the tree is deterministic.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Directory name of this node."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location used in error messages."""

    @abstractmethod
    def is_dir(self) -> bool:
        """Return ``True`` if this node exists and is a directory."""

    @abstractmethod
    def dirs(self) -> list[TemplateTree]:
        """Return the immediate subdirectories, sorted by name."""

    @abstractmethod
    def files(self) -> list[str]:
        """Return the names of the immediate regular files, sorted."""

    @abstractmethod
    def read_file(self, name: str) -> bytes:
        """Return the raw contents of the file *name* in this directory."""

    def file_location(self, name: str) -> str:
        return f"{self.location}/{name}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.location!r})"


class FilesystemTree(TemplateTree):
    """Template tree backed by a directory on disk.

    Symlinked directories are followed. A link back to one of the directories
    already being walked raises ``OSError(ELOOP)`` instead of recursing.
    """

    def __init__(self, path: str | Path, ancestors: frozenset[Path] = frozenset()) -> None:
        self.path = Path(path)
        self.ancestors = ancestors

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def location(self) -> str:
        return str(self.path)

    def is_dir(self) -> bool:
        return self.path.is_dir()

    def dirs(self) -> list[TemplateTree]:
        seen = self.ancestors | {self.path.resolve()}
        subdirs: list[TemplateTree] = []
        for entry in self._entries():
            if not entry.is_dir() or is_ignored(entry.name, True):
                continue
            if entry.is_symlink() and entry.resolve() in seen:
                raise OSError(errno.ELOOP, "Symlink loop in template", str(entry))
            subdirs.append(FilesystemTree(entry, seen))
        return subdirs

    def files(self) -> list[str]:
        names = []
        for entry in self._entries():
            if entry.is_file():
                if not is_ignored(entry.name, False):
                    names.append(entry.name)
            elif not entry.is_dir():
                # Sockets, fifos and dangling symlinks have nothing to copy.
                logger.debug("Skipping special file %s", entry)
        return names

    def read_file(self, name: str) -> bytes:
        return (self.path / name).read_bytes()

    def file_location(self, name: str) -> str:
        return str(self.path / name)

    def _entries(self) -> list[Path]:
        return sorted(self.path.iterdir(), key=lambda p: p.name)


class BundleTree(TemplateTree):
    """Template tree backed by package resource data.

    Wraps any :class:`~importlib.resources.abc.Traversable`, so the bundle may
    be a plain package directory or a zip archive (``zipfile.Path``).
    """

    def __init__(self, node: Traversable, location: str | None = None) -> None:
        self.node = node
        self._location = location if location is not None else node.name

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def location(self) -> str:
        return self._location

    def is_dir(self) -> bool:
        return self.node.is_dir()

    def dirs(self) -> list[TemplateTree]:
        return [
            BundleTree(child, f"{self._location}/{child.name}")
            for child in self._entries()
            if child.is_dir() and not is_ignored(child.name, True)
        ]

    def files(self) -> list[str]:
        return [
            child.name
            for child in self._entries()
            if child.is_file() and not is_ignored(child.name, False)
        ]

    def read_file(self, name: str) -> bytes:
        return self.node.joinpath(name).read_bytes()

    def child(self, name: str) -> BundleTree:
        """Return the subtree *name* (it may not exist)."""
        return BundleTree(self.node.joinpath(name), f"{self._location}/{name}")

    def _entries(self) -> list[Traversable]:
        if not self.node.is_dir():
            if self.node.is_file():
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", self._location)
            raise FileNotFoundError(errno.ENOENT, "No such directory", self._location)
        return sorted(self.node.iterdir(), key=lambda t: t.name)
