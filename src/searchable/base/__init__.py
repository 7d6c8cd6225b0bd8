"""Base definitions shared across the searchable package."""

from .errors import (
    ConfigurationError,
    CyclicHierarchyError,
    FieldExtractionError,
    InvalidOptionError,
    RegistryError,
    SearchableError,
)

__all__ = [
    "SearchableError",
    "ConfigurationError",
    "InvalidOptionError",
    "RegistryError",
    "CyclicHierarchyError",
    "FieldExtractionError",
]
