"""Setup Registry - Class Identity to Field Configuration.

This module provides the :class:`SetupRegistry`, the store that maps each
searchable class to its :class:`Setup`. Applications create one registry at
their composition root, configure their classes against it during startup, and
hand the same registry to the indexing components that later build documents.

Core Functionality:
    - **Get-or-create**: ``get_or_create`` returns the one setup of a class,
      creating it atomically on first use
    - **Inherited lookup**: ``lookup`` returns the setup of a class or of its
      nearest configured ancestor, or ``None`` for unconfigured classes
    - **Configuration**: ``configure`` and the ``searchable`` class decorator
      evaluate a configuration block against a class's setup
    - **Introspection**: ``setups`` and ``get_stats`` describe what is registered

Class Identity:
    Classes are keyed by the stable identity their :class:`TypeHierarchy`
    assigns them (``module.QualName`` for :class:`ClassHierarchy`), never by the
    class object itself. Every operation also accepts an identity string.

.. note::
   ``lookup`` returns an ancestor's setup object unchanged when the class has
   none of its own. Use ``lookup_own`` to tell the two cases apart.

.. warning::
   Ancestor walks are bounded by ``searchable.max_hierarchy_depth`` (default
   64) and raise :class:`CyclicHierarchyError` on cycles.

Examples:
    Application startup::

        >>> registry = SetupRegistry()
        >>> registry.configure(Post, configure_post)
        >>>
        >>> @registry.searchable(lambda fields: fields.text("body"))
        ... class Comment:
        ...     pass

    Indexing::

        >>> setup = registry.lookup(type(instance))
        >>> if setup is not None:
        ...     document = {f.indexed_name: f.value_for(instance) for f in setup.fields()}

.. seealso::
   :class:`Setup` : Per-class field configuration
   :class:`FieldsBuilder` : Builder handed to configuration blocks
"""

import threading
from collections.abc import Callable
from typing import Any

from searchable.base.errors import RegistryError
from searchable.fields.types import DeclarationKind
from searchable.utils.config import get_config_value
from searchable.utils.logger import get_logger

from .dsl import FieldsBuilder
from .hierarchy import ClassHierarchy, TypeHierarchy, walk_ancestors
from .setup import Setup

logger = get_logger("setup_registry")

DEFAULT_MAX_HIERARCHY_DEPTH = 64


class SetupRegistry:
    """Registry of setups keyed by class identity.

    :param hierarchy: Source of class identities and parents; defaults to a
        :class:`ClassHierarchy` over live Python classes
    :type hierarchy: TypeHierarchy, optional
    :param max_hierarchy_depth: Longest ancestor chain walked before giving up;
        defaults to ``searchable.max_hierarchy_depth`` from configuration
    :type max_hierarchy_depth: int, optional
    :raises RegistryError: If the depth bound is not a positive integer
    """

    def __init__(self, hierarchy: TypeHierarchy | None = None, max_hierarchy_depth: int | None = None):
        if max_hierarchy_depth is None:
            max_hierarchy_depth = get_config_value("searchable.max_hierarchy_depth", DEFAULT_MAX_HIERARCHY_DEPTH)
        if isinstance(max_hierarchy_depth, bool) or not isinstance(max_hierarchy_depth, int) or max_hierarchy_depth < 1:
            raise RegistryError(f"max_hierarchy_depth must be a positive integer, got {max_hierarchy_depth!r}")

        self.hierarchy = hierarchy or ClassHierarchy()
        self.max_hierarchy_depth = max_hierarchy_depth
        self._setups: dict[str, Setup] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"SetupRegistry({len(self._setups)} setups)"

    def _identity(self, clazz: Any) -> str:
        if isinstance(clazz, str):
            return clazz
        return self.hierarchy.identity_of(clazz)

    def get_or_create(self, clazz: Any) -> Setup:
        """Return the setup of exactly ``clazz``, creating an empty one if needed.

        Concurrent first calls for the same class all receive the same setup.
        """
        identity = self._identity(clazz)
        with self._lock:
            setup = self._setups.get(identity)
            if setup is None:
                setup = Setup(identity, self)
                self._setups[identity] = setup
                logger.debug(f"Created setup for {identity}")
        return setup

    def lookup_own(self, clazz: Any) -> Setup | None:
        """Return the setup registered for exactly ``clazz``, ignoring ancestors."""
        identity = self._identity(clazz)
        with self._lock:
            return self._setups.get(identity)

    def lookup(self, clazz: Any) -> Setup | None:
        """Return the setup of ``clazz`` or of its nearest configured ancestor.

        :return: The setup, or ``None`` when nothing in the ancestry is configured
        :raises CyclicHierarchyError: If the ancestor chain is cyclic
        """
        identity = self._identity(clazz)
        setup = self.lookup_own(identity)
        if setup is not None:
            return setup
        return self.parent_of(identity)

    def parent_of(self, identity: str) -> Setup | None:
        """Setup of the nearest strict ancestor of ``identity`` that has one."""
        for ancestor in walk_ancestors(self.hierarchy, identity, self.max_hierarchy_depth):
            setup = self.lookup_own(ancestor)
            if setup is not None:
                return setup
        return None

    def ancestors(self, clazz: Any) -> list[str]:
        """Identities of the strict ancestors of ``clazz``, nearest first."""
        return list(walk_ancestors(self.hierarchy, self._identity(clazz), self.max_hierarchy_depth))

    def ancestor_setups(self, clazz: Any) -> list[Setup]:
        """Setups of every configured strict ancestor of ``clazz``, nearest first."""
        setups = []
        for ancestor in self.ancestors(clazz):
            setup = self.lookup_own(ancestor)
            if setup is not None:
                setups.append(setup)
        return setups

    def is_searchable(self, clazz: Any) -> bool:
        """Whether ``clazz`` or any of its ancestors is configured."""
        return self.lookup(clazz) is not None

    def configure(self, clazz: Any, block: Callable[[FieldsBuilder], Any]) -> Setup:
        """Evaluate ``block`` against the setup of ``clazz``, creating it if needed."""
        return self.get_or_create(clazz).evaluate_configuration(block)

    def searchable(self, block: Callable[[FieldsBuilder], Any]) -> Callable[[type], type]:
        """Class decorator form of :meth:`configure`.

        Examples:
            >>> @registry.searchable(lambda fields: fields.text("title"))
            ... class Post:
            ...     title = "Hello"
        """

        def decorator(clazz: type) -> type:
            self.configure(clazz, block)
            return clazz

        return decorator

    def setups(self) -> dict[str, Setup]:
        """Snapshot of all registered setups keyed by identity."""
        with self._lock:
            return dict(self._setups)

    def get_stats(self) -> dict[str, Any]:
        """Registry statistics for debugging and display.

        :return: Number of setups, their identities and own declaration counts
        :rtype: dict[str, Any]
        """
        setups = self.setups()
        return {
            "setups": len(setups),
            "class_identities": sorted(setups),
            "declarations": {
                identity: {kind.value: len(setup.own_field_factories(kind)) for kind in DeclarationKind}
                for identity, setup in setups.items()
            },
        }

    def clear(self) -> None:
        """Remove all setups.

        .. warning::
           Setups are otherwise never removed. Only use for test isolation.
        """
        logger.debug("Clearing setup registry")
        with self._lock:
            self._setups.clear()
