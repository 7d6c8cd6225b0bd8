"""Searchable - per-class field configuration for search indexing.

This package records which fields of each searchable application class should
be indexed and how, and resolves that configuration across class hierarchies
for the components that build search documents and queries.

This package contains:
- Field declarations, types and built field descriptors (``searchable.fields``)
- The setup registry and configuration builder (``searchable.setup``)
- Exceptions (``searchable.base.errors``)
- Configuration and logging utilities (``searchable.utils``)
- A developer CLI for inspecting registries (``searchable.cli``)
"""

__version__ = "0.3.0"

from searchable.base.errors import (
    ConfigurationError,
    CyclicHierarchyError,
    FieldExtractionError,
    InvalidOptionError,
    RegistryError,
    SearchableError,
)
from searchable.setup import ClassHierarchy, DeclaredHierarchy, FieldsBuilder, Setup, SetupRegistry

__all__ = [
    "__version__",
    "SetupRegistry",
    "Setup",
    "FieldsBuilder",
    "ClassHierarchy",
    "DeclaredHierarchy",
    "SearchableError",
    "ConfigurationError",
    "InvalidOptionError",
    "RegistryError",
    "CyclicHierarchyError",
    "FieldExtractionError",
]
