"""vibe-generate scaffolder -- copies starter templates into new projects.

Templates are listed and resolved from a :class:`TemplateSource` (a
``templates/`` directory on disk or the snapshot bundled with the package),
then :class:`Scaffolder` copies the chosen tree to ``output_dir/project_name``
and replaces ``{{project-name}}`` with the real project name.

Quick usage::

    from vibe_generate.config import Config
    from vibe_generate.scaffolder import Scaffolder, resolve_template, select_source

    config = Config()
    source = select_source(config)
    tree = resolve_template(source, "python-cli")
    project_path = Scaffolder(config).scaffold(tree, "/tmp/output", "acme")
"""

from vibe_generate.scaffolder.catalog import (
    SourceKind,
    TemplateSource,
    bundled_templates,
    find_templates_root,
    list_templates,
    require_template,
    resolve_template,
    select_source,
)
from vibe_generate.scaffolder.errors import (
    DestinationExistsError,
    InvalidProjectNameError,
    NoTemplatesError,
    ScaffoldIOError,
    SelectionCancelledError,
    TemplateNotFoundError,
    TemplateSourceError,
    VibeGenerateError,
)
from vibe_generate.scaffolder.generator import (
    ScaffoldReport,
    ScaffoldRequest,
    Scaffolder,
    scaffold,
    validate_project_name,
)
from vibe_generate.scaffolder.tree import BundleTree, FilesystemTree, TemplateTree

__all__ = [
    # Catalog
    "SourceKind",
    "TemplateSource",
    "bundled_templates",
    "find_templates_root",
    "list_templates",
    "require_template",
    "resolve_template",
    "select_source",
    # Trees
    "BundleTree",
    "FilesystemTree",
    "TemplateTree",
    # Scaffolding
    "ScaffoldReport",
    "ScaffoldRequest",
    "Scaffolder",
    "scaffold",
    "validate_project_name",
    # Errors
    "DestinationExistsError",
    "InvalidProjectNameError",
    "NoTemplatesError",
    "ScaffoldIOError",
    "SelectionCancelledError",
    "TemplateNotFoundError",
    "TemplateSourceError",
    "VibeGenerateError",
]
