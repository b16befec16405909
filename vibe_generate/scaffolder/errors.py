"""Exceptions raised by template discovery and scaffolding.

Every error derives from :class:`VibeGenerateError` so the CLI can report
any of them with a single handler.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class VibeGenerateError(Exception):
    """Base class for all user-visible vibe-generate failures."""


class TemplateSourceError(VibeGenerateError):
    """Raised when a template source or template tree cannot be read."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = path
        super().__init__(message)


class NoTemplatesError(VibeGenerateError):
    """Raised when the active source holds no templates."""

    def __init__(self, message: str = "No templates found") -> None:
        super().__init__(message)


class TemplateNotFoundError(VibeGenerateError):
    """Raised when a requested template name is not in the source."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = list(available)
        message = f'Unknown template "{name}".'
        if self.available:
            message += f" Available: {', '.join(self.available)}"
        super().__init__(message)


class SelectionCancelledError(VibeGenerateError):
    """Raised when the interactive template prompt is aborted."""

    def __init__(self, message: str = "Template selection cancelled") -> None:
        super().__init__(message)


class DestinationExistsError(VibeGenerateError):
    """Raised when the scaffold destination is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Destination already exists: {path}")


class ScaffoldIOError(VibeGenerateError):
    """Raised when copying or rewriting a file fails part-way through.

    Files written before the failure are left in place.
    """

    def __init__(self, action: str, path: Path | str, cause: OSError) -> None:
        self.action = action
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to {action} {path}: {reason}")


class InvalidProjectNameError(VibeGenerateError):
    """Raised when a project name cannot be used as a directory name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f'Invalid project name "{name}": {reason}')
