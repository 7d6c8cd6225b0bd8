"""Main CLI entry point for the searchable package.

Commands:
    show    Display the resolved fields of a setup registry
"""

import sys

import click

from searchable import __version__
from searchable.utils.logger import setup_rich_logging

from .setup_cmd import show


@click.group()
@click.version_option(version=__version__, prog_name="searchable")
def cli():
    """Searchable - inspect per-class search field configuration.

    Examples:

    \b
      searchable show myapp.search:registry        Resolved fields per class
      searchable show myapp.search:build_registry -v  Include options
    """
    setup_rich_logging()


cli.add_command(show)


def main():
    """Entry point for the searchable CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
