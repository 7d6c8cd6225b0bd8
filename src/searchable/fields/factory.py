"""Field Factories - Declarations of Searchable Fields.

A field factory is the immutable record of one ``field``/``text_field``/
``dynamic_field`` declaration made while configuring a class. It validates its
options when it is created, derives the signature used to deduplicate
declarations inside a setup, and builds the concrete :class:`Field` an indexer
consumes.

Declaration Kinds:
    - **StaticFieldFactory**: Fixed-name fields used for scoping and ordering
    - **TextFieldFactory**: Full-text fields, identified by name alone
    - **DynamicFieldFactory**: Fields whose concrete names come from each instance

Signatures:
    Static and dynamic declarations are identified by kind, name and the ``multiple``
    flag, so a redeclaration with another value type replaces the earlier one. Text
    declarations are identified by name only. The value function and the
    ``using`` option never take part, so two declarations that differ only in
    how the value is derived are the same field.

.. note::
   Unknown option keys fail fast with :class:`InvalidOptionError`. Setting
   ``searchable.strict_options: false`` downgrades unknown keys to warnings;
   options that belong to another declaration kind always fail.

Examples:
    Declaring and building a field::

        >>> factory = StaticFieldFactory("published_at", DATE, {"stored": True})
        >>> factory.signature
        ('static', 'published_at', False)
        >>> factory.build().indexed_name
        'published_at_ds'
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from searchable.base.errors import ConfigurationError, InvalidOptionError
from searchable.utils.config import get_config_value
from searchable.utils.logger import get_logger

from .extractors import AttributeExtractor, CallableExtractor
from .field import DynamicField, Field
from .types import TEXT, DeclarationKind, resolve_field_type

logger = get_logger("fields")

# Option keys accepted by each declaration kind
STATIC_OPTIONS = frozenset({"using", "multiple", "stored"})
TEXT_OPTIONS = frozenset({"using", "boost", "stored"})
DYNAMIC_OPTIONS = frozenset({"using", "multiple", "stored"})
KNOWN_OPTIONS = STATIC_OPTIONS | TEXT_OPTIONS | DYNAMIC_OPTIONS


class FieldFactory(ABC):
    """Abstract base class for immutable field declarations.

    Declarations are made through the concrete kinds
    (:class:`StaticFieldFactory`, :class:`TextFieldFactory`,
    :class:`DynamicFieldFactory`), which define :attr:`kind` and :meth:`build`.

    :param name: Field name
    :type name: str
    :param field_type: A :class:`FieldType`, a built-in type name or a Python type
    :param options: Declaration options, validated against :attr:`allowed_options`
    :type options: Mapping[str, Any], optional
    :param value_fn: Function deriving the value from an instance
    :type value_fn: Callable[[Any], Any], optional
    :raises InvalidOptionError: For unrecognized, misplaced or malformed options
    :raises ConfigurationError: For an invalid name, type or value function
    """

    kind: DeclarationKind
    allowed_options: frozenset[str] = frozenset()

    __slots__ = ("name", "field_type", "options", "value_fn")

    def __init__(
        self,
        name: str,
        field_type: Any,
        options: Mapping[str, Any] | None = None,
        value_fn: Callable[[Any], Any] | None = None,
    ):
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"Field name must be a non-empty string, got {name!r}")
        if value_fn is not None and not callable(value_fn):
            raise ConfigurationError(f"Value function for field '{name}' is not callable: {value_fn!r}")

        resolved_type = resolve_field_type(field_type)
        checked = self._validate_options(name, dict(options or {}))

        if value_fn is not None and "using" in checked:
            raise ConfigurationError(f"Field '{name}' cannot declare both 'using' and a value function")

        object.__setattr__(self, "name", name)
        object.__setattr__(self, "field_type", resolved_type)
        object.__setattr__(self, "options", MappingProxyType(checked))
        object.__setattr__(self, "value_fn", value_fn)
        self._validate_type()

    def __setattr__(self, key: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, {self.field_type.name!r}, {dict(self.options)!r})"

    def _validate_options(self, name: str, options: dict[str, Any]) -> dict[str, Any]:
        """Check option keys and values for this declaration kind."""
        for key in list(options):
            if key in self.allowed_options:
                continue
            if key in KNOWN_OPTIONS:
                raise InvalidOptionError(
                    key, name, f"Option '{key}' is not valid for {self.kind.value} field '{name}'"
                )
            if get_config_value("searchable.strict_options", True):
                raise InvalidOptionError(key, name, f"Unknown option '{key}' for field '{name}'")
            logger.warning(f"Ignoring unknown option '{key}' for field '{name}'")
            del options[key]

        if "using" in options and (not isinstance(options["using"], str) or not options["using"]):
            raise InvalidOptionError("using", name, f"Option 'using' for field '{name}' must name an attribute")
        for flag in ("multiple", "stored"):
            if flag in options and not isinstance(options[flag], bool):
                raise InvalidOptionError(flag, name, f"Option '{flag}' for field '{name}' must be a boolean")
        if "boost" in options:
            boost = options["boost"]
            if isinstance(boost, bool) or not isinstance(boost, (int, float)) or boost <= 0:
                raise InvalidOptionError("boost", name, f"Option 'boost' for field '{name}' must be a positive number")
        return options

    def _validate_type(self) -> None:
        pass

    @property
    def multiple(self) -> bool:
        return bool(self.options.get("multiple", False))

    @property
    def stored(self) -> bool:
        return bool(self.options.get("stored", False))

    @property
    def signature(self) -> Any:
        """Identity key used to deduplicate declarations within a setup."""
        return (self.kind.value, self.name, self.multiple)

    def _extractor(self) -> AttributeExtractor | CallableExtractor:
        if self.value_fn is not None:
            return CallableExtractor(self.value_fn)
        return AttributeExtractor(self.options.get("using", self.name))

    @abstractmethod
    def build(self) -> Field:
        """Materialize the declaration into a :class:`Field`."""


class StaticFieldFactory(FieldFactory):
    """Fixed-name field declaration used for scoping and ordering."""

    kind = DeclarationKind.STATIC
    allowed_options = STATIC_OPTIONS
    __slots__ = ()

    def build(self) -> Field:
        return Field(
            name=self.name,
            field_type=self.field_type,
            kind=self.kind,
            signature=self.signature,
            extractor=self._extractor(),
            multiple=self.multiple,
            stored=self.stored,
        )


class TextFieldFactory(FieldFactory):
    """Full-text field declaration. Identified by name alone."""

    kind = DeclarationKind.TEXT
    allowed_options = TEXT_OPTIONS
    __slots__ = ()

    def __init__(
        self,
        name: str,
        field_type: Any = TEXT,
        options: Mapping[str, Any] | None = None,
        value_fn: Callable[[Any], Any] | None = None,
    ):
        super().__init__(name, field_type, options, value_fn)

    def _validate_type(self) -> None:
        if not self.field_type.text:
            raise ConfigurationError(
                f"Text field '{self.name}' must use a text type, got '{self.field_type.name}'"
            )

    @property
    def boost(self) -> float | None:
        return self.options.get("boost")

    @property
    def signature(self) -> str:
        return self.name

    def build(self) -> Field:
        return Field(
            name=self.name,
            field_type=self.field_type,
            kind=self.kind,
            signature=self.signature,
            extractor=self._extractor(),
            stored=self.stored,
            boost=self.boost,
        )


class DynamicFieldFactory(FieldFactory):
    """Declaration of a field whose concrete names are chosen per instance."""

    kind = DeclarationKind.DYNAMIC
    allowed_options = DYNAMIC_OPTIONS
    __slots__ = ()

    def build(self) -> DynamicField:
        return DynamicField(
            name=self.name,
            field_type=self.field_type,
            kind=self.kind,
            signature=self.signature,
            extractor=self._extractor(),
            multiple=self.multiple,
            stored=self.stored,
        )
