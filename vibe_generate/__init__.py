"""vibe-generate: scaffold new projects from boilerplate templates."""

__version__ = "0.1.0"
