"""Concrete field descriptors.

A :class:`Field` is what an indexer consumes: the declared name, its value
type, the name the search engine indexes it under, and the extractor that
pulls the value out of an instance. Fields are produced by
:meth:`FieldFactory.build` and never created by application code directly.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from searchable.base.errors import FieldExtractionError

from .extractors import AttributeExtractor, CallableExtractor
from .types import DeclarationKind, FieldType


@dataclass(frozen=True)
class Field:
    """Materialized static or full-text field.

    :param name: Declared field name
    :param field_type: Value type tag
    :param kind: Declaration kind the field came from
    :param signature: Signature of the originating declaration
    :param extractor: Extractor used by :meth:`value_for`
    :param multiple: Whether the field holds a list of values
    :param stored: Whether the search engine stores the raw value
    :param boost: Relevance boost (full-text fields only)
    """

    name: str
    field_type: FieldType
    kind: DeclarationKind
    signature: Any
    extractor: AttributeExtractor | CallableExtractor = field(compare=False)
    multiple: bool = False
    stored: bool = False
    boost: float | None = None

    @property
    def indexed_name(self) -> str:
        """Name the field is indexed under, e.g. ``title_s`` or ``tags_sm``."""
        if self.field_type.text:
            return f"{self.name}_{self.field_type.suffix}"
        suffix = self.field_type.suffix
        if self.multiple:
            suffix += "m"
        if self.stored:
            suffix += "s"
        return f"{self.name}_{suffix}"

    def value_for(self, instance: Any) -> Any:
        """Extract this field's value from ``instance``.

        :raises FieldExtractionError: If extraction raises; the original
            exception is chained
        """
        try:
            return self.extractor.value_for(instance)
        except Exception as e:
            raise FieldExtractionError(
                self.name,
                self.signature,
                f"Failed to extract value for field '{self.name}' from {type(instance).__name__}: {e}",
            ) from e


@dataclass(frozen=True)
class DynamicField(Field):
    """Materialized dynamic field.

    The declared name is a prefix; the concrete names come from the keys of
    the mapping the extractor returns for each instance.
    """

    def indexed_name_for(self, dynamic_name: str) -> str:
        return f"{self.indexed_name}:{dynamic_name}"

    def values_for(self, instance: Any) -> dict[str, Any]:
        """Extract the dynamic values of ``instance`` keyed by indexed name.

        :raises FieldExtractionError: If extraction fails or does not yield a mapping
        """
        values = self.value_for(instance)
        if values is None:
            return {}
        if not isinstance(values, Mapping):
            raise FieldExtractionError(
                self.name,
                self.signature,
                f"Dynamic field '{self.name}' expected a mapping, got {type(values).__name__}",
            )
        return {self.indexed_name_for(str(key)): value for key, value in values.items()}
