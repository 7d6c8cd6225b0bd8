"""Field declarations, types and materialized field descriptors."""

from .extractors import AttributeExtractor, CallableExtractor
from .factory import DynamicFieldFactory, FieldFactory, StaticFieldFactory, TextFieldFactory
from .field import DynamicField, Field
from .types import (
    BOOLEAN,
    BUILTIN_TYPES,
    DATE,
    DOUBLE,
    FLOAT,
    INTEGER,
    LONG,
    STRING,
    TEXT,
    TIME,
    DeclarationKind,
    FieldType,
    resolve_field_type,
)

__all__ = [
    "FieldFactory",
    "StaticFieldFactory",
    "TextFieldFactory",
    "DynamicFieldFactory",
    "Field",
    "DynamicField",
    "AttributeExtractor",
    "CallableExtractor",
    "DeclarationKind",
    "FieldType",
    "resolve_field_type",
    "BUILTIN_TYPES",
    "TEXT",
    "STRING",
    "INTEGER",
    "LONG",
    "FLOAT",
    "DOUBLE",
    "BOOLEAN",
    "DATE",
    "TIME",
]
