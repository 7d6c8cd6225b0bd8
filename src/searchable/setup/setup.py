"""Setup - Field Configuration for One Searchable Class.

A :class:`Setup` holds the field declarations made for exactly one class, in
three collections:

    - **Static fields**: keyed by declaration signature
    - **Text fields**: keyed by field name
    - **Dynamic fields**: keyed by declaration signature

Declaring a field under a key that already exists replaces the earlier
declaration, so re-running a configuration block never duplicates fields.

Inheritance:
    The effective fields of a class are its own declarations plus those of every
    configured ancestor, with the nearest declaration winning when keys collide.
    Ancestors are looked up through the registry on every call rather than
    stored, so fields added to a parent later and classes whose bases change
    are picked up by the next resolution. Results are never cached.

Thread Safety:
    Each setup guards its collections with a lock. Resolution copies every
    collection it reads under that lock and merges the copies, so concurrent
    declarations never leave a resolver with a torn view.

Examples:
    Resolving inherited fields::

        >>> registry = SetupRegistry()
        >>> registry.configure(Animal, lambda f: f.text("name"))
        >>> registry.configure(Dog, lambda f: f.dynamic_string("breed"))
        >>> [f.name for f in registry.lookup(Dog).all_field_factories()]
        ['name', 'breed']
"""

import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from searchable.base.errors import ConfigurationError
from searchable.fields.factory import (
    DynamicFieldFactory,
    FieldFactory,
    StaticFieldFactory,
    TextFieldFactory,
)
from searchable.fields.field import DynamicField, Field
from searchable.fields.types import TEXT, DeclarationKind
from searchable.utils.logger import get_logger

from .dsl import FieldsBuilder

if TYPE_CHECKING:
    from .manager import SetupRegistry

logger = get_logger("setup_registry")


class Setup:
    """Search configuration for a single class.

    Setups are created by :meth:`SetupRegistry.get_or_create` and are not meant
    to be instantiated directly.

    :param class_identity: Stable identity of the configured class
    :type class_identity: str
    :param registry: Registry used to find ancestor setups
    :type registry: SetupRegistry
    """

    def __init__(self, class_identity: str, registry: "SetupRegistry"):
        self.class_identity = class_identity
        self._registry = registry
        self._lock = threading.RLock()
        self._collections: dict[DeclarationKind, dict[Any, FieldFactory]] = {
            DeclarationKind.STATIC: {},
            DeclarationKind.TEXT: {},
            DeclarationKind.DYNAMIC: {},
        }

    def __repr__(self) -> str:
        return f"Setup({self.class_identity!r})"

    @property
    def clazz(self) -> Any | None:
        """The live class this setup configures, if the hierarchy can resolve it."""
        return self._registry.hierarchy.resolve(self.class_identity)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _store(self, factory: FieldFactory) -> FieldFactory:
        key = factory.signature
        with self._lock:
            collection = self._collections[factory.kind]
            replaced = key in collection
            collection[key] = factory
        if replaced:
            logger.debug(f"Replaced {factory.kind.value} field '{factory.name}' on {self.class_identity}")
        return factory

    def add_field_factory(
        self,
        name: str,
        field_type: Any,
        options: dict[str, Any] | None = None,
        value_fn: Callable[[Any], Any] | None = None,
    ) -> StaticFieldFactory:
        """Declare a static field used for scoping and ordering.

        :raises ConfigurationError: If the declaration is malformed
        """
        return self._store(StaticFieldFactory(name, field_type, options, value_fn))

    def add_text_field_factory(
        self,
        name: str,
        options: dict[str, Any] | None = None,
        value_fn: Callable[[Any], Any] | None = None,
    ) -> TextFieldFactory:
        """Declare a full-text field. Text fields are keyed by name alone.

        :raises ConfigurationError: If the declaration is malformed
        """
        return self._store(TextFieldFactory(name, TEXT, options, value_fn))

    def add_dynamic_field_factory(
        self,
        name: str,
        field_type: Any,
        options: dict[str, Any] | None = None,
        value_fn: Callable[[Any], Any] | None = None,
    ) -> DynamicFieldFactory:
        """Declare a dynamic field.

        :raises ConfigurationError: If the declaration is malformed
        """
        return self._store(DynamicFieldFactory(name, field_type, options, value_fn))

    def evaluate_configuration(self, block: Callable[[FieldsBuilder], Any]) -> "Setup":
        """Run a configuration block against a builder bound to this setup.

        Blocks can be evaluated any number of times; later declarations merge
        into the same collections, replacing entries with the same key.

        :param block: Function receiving a :class:`FieldsBuilder`
        :return: This setup
        :raises ConfigurationError: If ``block`` is not callable or declares
            a malformed field
        """
        if not callable(block):
            raise ConfigurationError(f"Configuration block for {self.class_identity} is not callable: {block!r}")
        logger.info(f"Evaluating configuration for {self.class_identity}")
        block(FieldsBuilder(self))
        return self

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _snapshot(self, kind: DeclarationKind) -> dict[Any, FieldFactory]:
        with self._lock:
            return dict(self._collections[kind])

    def own_field_factories(self, kind: DeclarationKind) -> list[FieldFactory]:
        """This setup's own declarations of ``kind``, without inheritance."""
        return list(self._snapshot(kind).values())

    def parent(self) -> "Setup | None":
        """Setup of the nearest strict ancestor that has one, or ``None``.

        :raises CyclicHierarchyError: If the ancestor chain is cyclic
        """
        return self._registry.parent_of(self.class_identity)

    def _inheritable_collection(self, kind: DeclarationKind) -> dict[Any, FieldFactory]:
        resolved = self._snapshot(kind)
        for ancestor in self._registry.ancestor_setups(self.class_identity):
            for key, factory in ancestor._snapshot(kind).items():
                # nearer declarations win
                resolved.setdefault(key, factory)
        return resolved

    def resolved_field_factories(self, kind: DeclarationKind) -> list[FieldFactory]:
        """Declarations of ``kind`` for this class and all configured ancestors.

        :raises CyclicHierarchyError: If the ancestor chain is cyclic
        """
        return list(self._inheritable_collection(kind).values())

    def field_factories(self) -> list[StaticFieldFactory]:
        return self.resolved_field_factories(DeclarationKind.STATIC)

    def text_field_factories(self) -> list[TextFieldFactory]:
        return self.resolved_field_factories(DeclarationKind.TEXT)

    def dynamic_field_factories(self) -> list[DynamicFieldFactory]:
        return self.resolved_field_factories(DeclarationKind.DYNAMIC)

    def all_field_factories(self) -> list[FieldFactory]:
        """Resolved static, then text, then dynamic declarations.

        Indexers rely on this group order for a stable document layout.
        """
        return [*self.field_factories(), *self.text_field_factories(), *self.dynamic_field_factories()]

    def field_factory(self, name: str) -> FieldFactory | None:
        """First resolved declaration named ``name`` (static, then text, then dynamic)."""
        for factory in self.all_field_factories():
            if factory.name == name:
                return factory
        return None

    # ------------------------------------------------------------------
    # Materialized fields
    # ------------------------------------------------------------------

    def fields(self) -> list[Field]:
        return [factory.build() for factory in self.field_factories()]

    def text_fields(self) -> list[Field]:
        return [factory.build() for factory in self.text_field_factories()]

    def dynamic_fields(self) -> list[DynamicField]:
        return [factory.build() for factory in self.dynamic_field_factories()]
