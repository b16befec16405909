"""Shared pytest fixtures for the vibe-generate test suite.

Provides reusable fixtures for:
- An on-disk ``templates/`` root with two small templates
- The same templates packed into a zip and exposed as a bundle
- Template sources wrapping each of them
- A helper that snapshots a directory tree for comparisons
"""

from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from vibe_generate.scaffolder import TemplateSource

# Not valid UTF-8 (0x89 cannot start a sequence) but contains the placeholder
# bytes, so it must be copied untouched.
BINARY_ASSET = b"\x89PNG\r\n\x1a\n\x00{{project-name}}\xff\xfe\x00"

TEMPLATE_FILES: dict[str, bytes] = {
    "cli/README.md": b"Welcome to {{project-name}}!",
    "cli/src/main.txt": b"name = {{project-name}}\n{{project-name}} {{project-name}}\n",
    "cli/src/plain.txt": b"no placeholder here\n",
    "cli/assets/logo.png": BINARY_ASSET,
    "cli/{{project-name}}/keep.txt": b"directory names stay as they are\n",
    "web/index.html": b"<title>{{project-name}}</title>\n",
    "web/static/app.css": b"body { margin: 0; }\n",
}

EMPTY_DIRS = ["cli/empty"]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def snapshot(root: Path) -> dict[str, bytes]:
    """Return ``{relative_posix_path: bytes}`` for every file under *root*."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def directories(root: Path) -> set[str]:
    """Return the relative paths of every directory under *root*."""
    return {
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_dir()
    }


def write_templates(root: Path) -> Path:
    """Materialise ``TEMPLATE_FILES`` and ``EMPTY_DIRS`` under *root*."""
    for rel, data in TEMPLATE_FILES.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    for rel in EMPTY_DIRS:
        (root / rel).mkdir(parents=True, exist_ok=True)
    # Stray files at the top level are not templates.
    (root / "NOTES.md").write_text("not a template\n", encoding="utf-8")
    return root


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A ``templates/`` directory on disk holding the ``cli`` and ``web`` templates."""
    return write_templates(tmp_path / "fixtures" / "templates")


@pytest.fixture
def bundle_zip(tmp_path: Path, templates_root: Path) -> Path:
    """The contents of ``templates_root`` packed into a zip archive."""
    archive = tmp_path / "bundle.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for path in sorted(templates_root.rglob("*")):
            arcname = path.relative_to(templates_root).as_posix()
            if path.is_dir():
                zf.writestr(arcname + "/", b"")
            else:
                zf.writestr(arcname, path.read_bytes())
    return archive


@pytest.fixture
def fs_source(templates_root: Path) -> TemplateSource:
    return TemplateSource.filesystem(templates_root)


@pytest.fixture
def bundle_source(bundle_zip: Path) -> TemplateSource:
    return TemplateSource.embedded(zipfile.Path(str(bundle_zip)))


@pytest.fixture(params=["filesystem", "embedded"])
def any_source(request: pytest.FixtureRequest) -> TemplateSource:
    """Each test using this fixture runs once per source kind."""
    if request.param == "filesystem":
        return request.getfixturevalue("fs_source")
    return request.getfixturevalue("bundle_source")


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def template_files() -> dict[str, bytes]:
    """Expected ``{relative_path: bytes}`` of every fixture template file."""
    return dict(TEMPLATE_FILES)


@pytest.fixture
def read_tree():
    """Return the :func:`snapshot` helper."""
    return snapshot


@pytest.fixture
def list_dirs():
    """Return the :func:`directories` helper."""
    return directories
