"""Exception Hierarchy for Searchable Setups.

This module defines every exception raised by the searchable package. The
hierarchy separates declaration-time problems, which surface while an
application configures its classes during startup, from structural registry
problems and from per-instance value extraction failures that show up while
documents are being built.

Exception Hierarchy:
    - **SearchableError**: Base class for all package exceptions
        - **ConfigurationError**: Malformed field declarations or settings
            - **InvalidOptionError**: Unrecognized or misplaced option key
        - **RegistryError**: Structural problems in the setup registry
            - **CyclicHierarchyError**: Ancestor chain revisits an identity
        - **FieldExtractionError**: Value extraction failed for one field

.. note::
   ``lookup`` on a class with no configured ancestry is not an error. It returns
   ``None`` and callers decide whether to skip the instance.

.. seealso::
   :mod:`searchable.fields.factory` : Raises configuration errors at declaration time
   :mod:`searchable.setup.manager` : Raises registry errors during lookups
"""

from typing import Any


class SearchableError(Exception):
    """Base exception for all searchable package errors."""

    pass


class ConfigurationError(SearchableError):
    """Exception for configuration-related errors.

    Raised when a field declaration or a configuration file is malformed, so
    that misconfiguration fails fast during application startup rather than
    during a live indexing run.
    """

    pass


class InvalidOptionError(ConfigurationError):
    """Exception for option keys a field declaration does not accept.

    :param option: The offending option key
    :type option: str
    :param field_name: Name of the field being declared
    :type field_name: str
    :param message: Optional explicit message
    :type message: str
    """

    def __init__(self, option: str, field_name: str, message: str | None = None):
        self.option = option
        self.field_name = field_name
        super().__init__(message or f"Invalid option '{option}' for field '{field_name}'")


class RegistryError(SearchableError):
    """Exception for registry-related errors.

    Raised when issues occur with setup registration, lookup, or ancestor
    traversal within the setup registry.
    """

    pass


class CyclicHierarchyError(RegistryError):
    """Raised when an ancestor walk revisits an identity or exceeds its bound.

    :param chain: Identities walked before the walk was aborted
    :type chain: list[str]
    """

    def __init__(self, chain: list[str], message: str | None = None):
        self.chain = list(chain)
        super().__init__(message or f"Cyclic type hierarchy: {' -> '.join(self.chain)}")


class FieldExtractionError(SearchableError):
    """Raised when a field value cannot be extracted from an instance.

    The error names the declared field so callers can report exactly which
    declaration failed. The original exception is chained as ``__cause__``.

    :param field_name: Name of the declared field
    :type field_name: str
    :param signature: Signature of the field's declaration
    :type signature: Any
    """

    def __init__(self, field_name: str, signature: Any, message: str | None = None):
        self.field_name = field_name
        self.signature = signature
        super().__init__(message or f"Failed to extract value for field '{field_name}'")
