"""{{project-name}} CLI entry point."""

import argparse

from rich.console import Console

from app import PROJECT_NAME

console = Console()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog=PROJECT_NAME)
    parser.add_argument("--name", "-n", default="world", help="Name to greet")
    args = parser.parse_args(argv)
    console.print(f"Hello, {args.name}!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
