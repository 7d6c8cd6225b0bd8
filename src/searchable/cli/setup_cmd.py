"""Setup Display Command for the searchable CLI.

Loads a :class:`SetupRegistry` from the application and prints the resolved
fields of every configured class: inherited and own declarations, grouped as
static, text and dynamic in the order indexers see them.

The registry is named as ``module.path:attribute``. The attribute may be the
registry itself or a zero-argument function returning one (a composition root).
"""

import importlib
import sys
from pathlib import Path

import click
from rich.table import Table

from searchable.base.errors import SearchableError
from searchable.fields.field import DynamicField
from searchable.setup import Setup, SetupRegistry
from searchable.utils.log_filter import quiet_logger

from .styles import Messages, Styles, console


def load_registry(target: str) -> SetupRegistry:
    """Import the registry named by ``module.path:attribute``.

    :raises click.BadParameter: If the target is malformed or does not name a registry
    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter(f"Expected MODULE:ATTRIBUTE, got '{target}'")

    # Allow loading modules from the directory the command is run in
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    with quiet_logger(["setup_registry", "fields", "CONFIG"]):
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise click.BadParameter(f"Cannot import module '{module_name}': {e}") from e

        try:
            obj = getattr(module, attribute)
        except AttributeError as e:
            raise click.BadParameter(f"Module '{module_name}' has no attribute '{attribute}'") from e

        if not isinstance(obj, SetupRegistry) and callable(obj):
            obj = obj()

    if not isinstance(obj, SetupRegistry):
        raise click.BadParameter(f"'{target}' is not a SetupRegistry (got {type(obj).__name__})")
    return obj


def display_setup_contents(registry: SetupRegistry, verbose: bool = False) -> bool:
    """Display the resolved fields of every setup in ``registry``.

    Args:
        registry: Registry to display
        verbose: Whether to show options and the declaring class of each field

    Returns:
        True on success, False if a setup could not be resolved
    """
    stats = registry.get_stats()

    console.print()
    console.print(f"[{Styles.HEADER}]Setup Registry[/{Styles.HEADER}]")
    console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] Configured classes: {stats['setups']}")
    console.print()

    if not stats["setups"]:
        console.print(Messages.warning("No searchable classes configured"))
        return True

    setups = registry.setups()
    try:
        for identity in stats["class_identities"]:
            _display_setup_table(registry, setups[identity], verbose)
    except SearchableError as e:
        console.print(Messages.error(f"Error resolving setups: {e}"))
        return False

    return True


def _declaring_class(registry: SetupRegistry, setup: Setup, factory) -> str:
    """Identity of the setup that owns ``factory`` (the setup itself or an ancestor)."""
    for candidate in [setup, *registry.ancestor_setups(setup.class_identity)]:
        if any(own is factory for own in candidate.own_field_factories(factory.kind)):
            return candidate.class_identity
    return "-"


def _display_setup_table(registry: SetupRegistry, setup: Setup, verbose: bool) -> None:
    """Display one setup's resolved fields in a formatted table."""
    parent = setup.parent()
    title = setup.class_identity
    if parent is not None:
        title += f" [{Styles.DIM}](inherits {parent.class_identity})[/{Styles.DIM}]"
    console.print(f"[{Styles.HEADER}]{title}[/{Styles.HEADER}]\n")

    table = Table(show_header=True, header_style=Styles.HEADER, border_style=Styles.DIM, expand=False)
    table.add_column("Kind", style=Styles.DIM, no_wrap=True)
    table.add_column("Name", style=Styles.ACCENT, no_wrap=True)
    table.add_column("Type", style=Styles.VALUE)
    table.add_column("Indexed As", style=Styles.VALUE)

    if verbose:
        table.add_column("Options", style=Styles.DIM)
        table.add_column("Declared On", style=Styles.DIM)

    for factory in setup.all_field_factories():
        built = factory.build()
        indexed_name = built.indexed_name_for("*") if isinstance(built, DynamicField) else built.indexed_name
        row = [factory.kind.value, factory.name, factory.field_type.name, indexed_name]
        if verbose:
            options = ", ".join(f"{key}={value!r}" for key, value in sorted(factory.options.items()))
            if factory.value_fn is not None:
                options = ", ".join(filter(None, [options, "value_fn"]))
            row += [options or "-", _declaring_class(registry, setup, factory)]
        table.add_row(*row)

    console.print(table)
    console.print()


@click.command()
@click.argument("target")
@click.option("--verbose", "-v", is_flag=True, help="Show options and declaring class of each field")
def show(target: str, verbose: bool):
    """Show resolved fields of every class configured in TARGET (module:attribute)."""
    registry = load_registry(target)
    if not display_setup_contents(registry, verbose=verbose):
        sys.exit(1)
