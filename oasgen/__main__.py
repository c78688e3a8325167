"""Entry point: python -m oasgen SOURCE_DIR

Scans SOURCE_DIR for OpenAPI YAML documents and writes a generated/
directory (models + client) next to each one.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from .config import SOURCE_DIR_ENV, GeneratorOptions
from .pipeline import generate_all
from .reporting import ConsoleReporter


@click.command()
@click.argument(
    "source_dir",
    envvar=SOURCE_DIR_ENV,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option("-q", "--quiet", is_flag=True, help="Only report warnings and errors.")
def main(source_dir: Path, quiet: bool) -> None:
    """Generate TypeScript models and URL-builder clients from OpenAPI YAML files."""
    summary = generate_all(GeneratorOptions(source_dir=source_dir), reporter=ConsoleReporter(quiet=quiet))
    if not summary.ok:
        sys.exit(1)


if __name__ == "__main__":
    main()
