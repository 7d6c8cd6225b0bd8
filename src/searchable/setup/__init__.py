"""Setup Registry for Searchable Classes.

This package records, for every searchable class, which fields should be
extracted for indexing and how, and resolves that configuration across class
hierarchies so subclasses inherit their ancestors' fields.

Key Components:
    - **SetupRegistry**: Maps class identities to setups; get-or-create and
      inherited lookup
    - **Setup**: Static, text and dynamic field declarations for one class
    - **FieldsBuilder**: Builder handed to configuration blocks
    - **TypeHierarchy**: Class identity and parent relation
      (``ClassHierarchy``, ``DeclaredHierarchy``)

Examples:
    >>> from searchable.setup import SetupRegistry
    >>>
    >>> registry = SetupRegistry()
    >>> registry.configure(Animal, lambda fields: fields.text("name"))
    >>> registry.configure(Dog, lambda fields: fields.dynamic_string("breed"))
    >>> setup = registry.lookup(Dog)
    >>> [factory.name for factory in setup.all_field_factories()]
    ['name', 'breed']
"""

from .dsl import FieldsBuilder
from .hierarchy import ClassHierarchy, DeclaredHierarchy, TypeHierarchy, walk_ancestors
from .manager import SetupRegistry
from .setup import Setup

__all__ = [
    "SetupRegistry",
    "Setup",
    "FieldsBuilder",
    "TypeHierarchy",
    "ClassHierarchy",
    "DeclaredHierarchy",
    "walk_ancestors",
]
