"""Command-line entry point for vibe-generate.

Usage::

    vibe-generate --name my-app --template nextjs
    vibe-generate -n my-app -o ~/code          # pick the template interactively
    python -m vibe_generate -n my-app -t rust-cli

Exit codes:
    0: Success
    1: Any error (unknown template, no templates found, destination exists,
       I/O failure, cancelled selection)
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from rich.markup import escape
from rich.prompt import Prompt

from vibe_generate import __version__
from vibe_generate.config import Config
from vibe_generate.scaffolder import (
    Scaffolder,
    ScaffoldRequest,
    SelectionCancelledError,
    TemplateSource,
    VibeGenerateError,
    list_templates,
    require_template,
    select_source,
    validate_project_name,
)
from vibe_generate.utils import console, print_error, print_template_table, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vibe-generate",
        description="Scaffold a new project from a boilerplate template.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  vibe-generate -n my-app -t nextjs\n"
            "  vibe-generate -n my-app -o ~/code\n"
        ),
    )
    parser.add_argument(
        "--template", "-t",
        default=None,
        help="Template to use (e.g. nextjs, rust-cli). Prompts if omitted.",
    )
    parser.add_argument(
        "--name", "-n",
        required=True,
        help="Name of the new project (output directory name and placeholder value)",
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=None,
        help="Directory the project folder is created in (default: current directory)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every copied and rewritten file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def prompt_for_template(available: Sequence[str]) -> str:
    """Ask the user to pick one of *available*.

    Accepts either the number shown in the table or the template name; the
    first template is the default.

    Raises:
        SelectionCancelledError: If the prompt is interrupted or input ends.
    """
    print_template_table(available)
    numbers = [str(i) for i in range(1, len(available) + 1)]

    try:
        answer = Prompt.ask(
            "Select a template",
            choices=numbers + list(available),
            show_choices=False,
            default="1",
            console=console,
        )
    except (KeyboardInterrupt, EOFError) as exc:
        raise SelectionCancelledError() from exc

    if answer in numbers:
        return available[int(answer) - 1]
    return require_template(available, answer)


def choose_template(available: Sequence[str], requested: str | None) -> str:
    """Validate *requested* against *available*, or prompt when it is ``None``."""
    if requested is not None:
        return require_template(available, requested)
    return prompt_for_template(available)


def run(args: argparse.Namespace, config: Config, source: TemplateSource | None = None) -> Path:
    """Execute one scaffolding run and return the new project directory.

    *source* is normally selected from *config*; tests pass a fixed one.
    """
    validate_project_name(args.name)
    if source is None:
        source = select_source(config)
    logger.info("Using templates from %s", source.describe())

    available = list_templates(source)
    template_name = choose_template(available, args.template)

    request = ScaffoldRequest(
        template_name=template_name,
        project_name=args.name,
        output_dir=args.output_dir if args.output_dir is not None else Path.cwd(),
    )

    console.print(
        f"[bold]=>[/bold] Scaffolding project [bold green]{escape(request.project_name)}[/bold green] "
        f"from template [bold green]{escape(template_name)}[/bold green]..."
    )

    scaffolder = Scaffolder(config)
    dest = scaffolder.run(source, request)
    report = scaffolder.last_report

    console.print()
    console.print(
        f"[bold green]Success![/bold green] Project [bold]{escape(request.project_name)}[/bold] "
        f"created at {escape(str(dest))}",
        highlight=False,
    )
    if report is not None:
        console.print(
            f"  {len(report.files_written)} files written, "
            f"{len(report.files_rewritten)} with the project name filled in",
            highlight=False,
        )
    console.print()
    console.print(f"  cd {escape(str(dest))} && get started!", highlight=False)
    return dest


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env(**({"log_level": "DEBUG"} if args.verbose else {}))
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1

    setup_logging(config.log_level)

    try:
        run(args, config)
    except VibeGenerateError as exc:
        logger.debug("Scaffolding failed", exc_info=True)
        print_error(str(exc))
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
