"""Field value types and declaration kinds.

A :class:`FieldType` is a small tag describing the kind of value a field holds
and the suffix the search engine uses for it in indexed field names. The
built-in tags cover the usual scalar types; applications can create their own
(``FieldType("location", "ll")``) and pass them anywhere a type is expected.
"""

import datetime
from dataclasses import dataclass
from enum import Enum
from typing import Any

from searchable.base.errors import ConfigurationError


class DeclarationKind(Enum):
    """How a field is declared on a setup."""

    STATIC = "static"
    TEXT = "text"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class FieldType:
    """Value type tag.

    :param name: Type name used by the builder helpers
    :param suffix: Suffix appended to indexed field names
    :param text: Whether the type is full-text searchable
    """

    name: str
    suffix: str
    text: bool = False

    def __str__(self) -> str:
        return self.name


TEXT = FieldType("text", "text", text=True)
STRING = FieldType("string", "s")
INTEGER = FieldType("integer", "i")
LONG = FieldType("long", "l")
FLOAT = FieldType("float", "f")
DOUBLE = FieldType("double", "e")
BOOLEAN = FieldType("boolean", "b")
DATE = FieldType("date", "d")
TIME = FieldType("time", "d")

BUILTIN_TYPES: dict[str, FieldType] = {
    t.name: t for t in (TEXT, STRING, INTEGER, LONG, FLOAT, DOUBLE, BOOLEAN, DATE, TIME)
}

# Checked in order with issubclass: bool before int, datetime before date
_PYTHON_TYPES: tuple[tuple[type, FieldType], ...] = (
    (bool, BOOLEAN),
    (int, INTEGER),
    (float, FLOAT),
    (str, STRING),
    (datetime.datetime, TIME),
    (datetime.date, DATE),
)


def resolve_field_type(field_type: Any) -> FieldType:
    """Normalize a type declaration to a :class:`FieldType`.

    Accepts a ``FieldType``, the name of a built-in type (``"integer"``), or a
    Python type (``int``, ``str``, ``datetime.date`` ...).

    :raises ConfigurationError: If the declaration names no known type
    """
    if isinstance(field_type, FieldType):
        return field_type
    if isinstance(field_type, str):
        try:
            return BUILTIN_TYPES[field_type.lower()]
        except KeyError:
            raise ConfigurationError(
                f"Unknown field type '{field_type}' (known: {', '.join(sorted(BUILTIN_TYPES))})"
            ) from None
    if isinstance(field_type, type):
        for python_type, resolved in _PYTHON_TYPES:
            if issubclass(field_type, python_type):
                return resolved
    raise ConfigurationError(f"Cannot use {field_type!r} as a field type")
