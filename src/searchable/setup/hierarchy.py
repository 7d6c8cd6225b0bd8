"""Type Hierarchies - Class Identity and Ancestry.

Setups are keyed by a stable string identity rather than by live class
objects, and a setup's ancestors are found by asking a :class:`TypeHierarchy`
for them each time they are needed. Keeping identity and ancestry behind this
interface lets the registry tolerate classes being redefined (interactive
reloads, hot code swaps) and lets hosts without Python classes describe their
own type tags.

Implementations:
    - **ClassHierarchy**: Live Python classes, identity ``module.QualName``,
      ancestors in method resolution order
    - **DeclaredHierarchy**: Explicit type tags with parents registered as data

Ancestor walks are bounded: :func:`walk_ancestors` raises
:class:`CyclicHierarchyError` when an identity repeats or when the chain is
longer than the configured maximum depth.
"""

import importlib
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from typing import Any

from searchable.base.errors import CyclicHierarchyError, RegistryError


class TypeHierarchy(ABC):
    """Source of class identities and the ancestry between them."""

    @abstractmethod
    def identity_of(self, clazz: Any) -> str:
        """Return the stable identity of ``clazz``."""

    @abstractmethod
    def parent_of(self, identity: str) -> str | None:
        """Return the identity of the direct parent type, or ``None`` for a root."""

    def ancestors_of(self, identity: str) -> Iterator[str]:
        """Yield the strict ancestors of ``identity``, nearest first.

        The default follows :meth:`parent_of` one step at a time, so a cyclic
        hierarchy yields forever. Use :func:`walk_ancestors` for a bounded walk.
        """
        current = self.parent_of(identity)
        while current is not None:
            yield current
            current = self.parent_of(current)

    def resolve(self, identity: str) -> Any | None:
        """Return the live type registered under ``identity``, if the hierarchy knows one."""
        return None


class ClassHierarchy(TypeHierarchy):
    """Hierarchy of live Python classes.

    The identity of a class is its dotted ``module.QualName``. The most recently
    seen class object for an identity wins, so a reloaded class replaces the
    stale one and its current bases are used from then on. Identities that were
    never seen as classes are imported by dotted path on demand.

    Ancestors follow the method resolution order without ``object``, so a
    configured base reached through a mixin-first class still counts:

        >>> class Dog(Loggable, Animal): ...
        >>> list(ClassHierarchy().ancestors_of("zoo.Dog"))
        ['zoo.Loggable', 'zoo.Animal']
    """

    def __init__(self):
        self._classes: dict[str, type] = {}
        self._lock = threading.Lock()

    def identity_of(self, clazz: Any) -> str:
        if not isinstance(clazz, type):
            raise RegistryError(f"Expected a class, got {clazz!r}")
        identity = f"{clazz.__module__}.{clazz.__qualname__}"
        with self._lock:
            self._classes[identity] = clazz
        return identity

    def resolve(self, identity: str) -> type | None:
        with self._lock:
            clazz = self._classes.get(identity)
        if clazz is None:
            clazz = _import_dotted(identity)
            if clazz is not None:
                with self._lock:
                    self._classes.setdefault(identity, clazz)
        return clazz

    def ancestors_of(self, identity: str) -> Iterator[str]:
        clazz = self.resolve(identity)
        if clazz is None:
            return
        for base in clazz.__mro__[1:]:
            if base is not object:
                yield self.identity_of(base)

    def parent_of(self, identity: str) -> str | None:
        return next(self.ancestors_of(identity), None)


class DeclaredHierarchy(TypeHierarchy):
    """Hierarchy of explicitly declared type tags.

    Examples:
        >>> hierarchy = DeclaredHierarchy({"Dog": "Animal"})
        >>> hierarchy.declare("Puppy", parent="Dog")
        >>> hierarchy.parent_of("Puppy")
        'Dog'
    """

    def __init__(self, parents: Mapping[str, str | None] | None = None):
        self._parents: dict[str, str | None] = dict(parents or {})
        self._lock = threading.Lock()

    def declare(self, identity: str, parent: str | None = None) -> None:
        """Register ``identity`` with an optional parent, replacing any earlier declaration."""
        if not isinstance(identity, str) or not identity:
            raise RegistryError(f"Type identity must be a non-empty string, got {identity!r}")
        with self._lock:
            self._parents[identity] = parent

    def identity_of(self, clazz: Any) -> str:
        if isinstance(clazz, str):
            return clazz
        raise RegistryError(f"DeclaredHierarchy identifies types by string tag, got {clazz!r}")

    def parent_of(self, identity: str) -> str | None:
        with self._lock:
            return self._parents.get(identity)


def walk_ancestors(hierarchy: TypeHierarchy, identity: str, max_depth: int) -> Iterator[str]:
    """Yield the strict ancestors of ``identity``, nearest first.

    :raises CyclicHierarchyError: If an identity repeats or more than
        ``max_depth`` ancestors are walked
    """
    chain = [identity]
    seen = {identity}
    for current in hierarchy.ancestors_of(identity):
        chain.append(current)
        if current in seen:
            raise CyclicHierarchyError(chain)
        if len(chain) - 1 > max_depth:
            raise CyclicHierarchyError(
                chain, f"Type hierarchy of '{identity}' exceeds maximum depth {max_depth}"
            )
        seen.add(current)
        yield current


def _import_dotted(path: str) -> type | None:
    """Import ``package.module.Class`` style paths, returning None when nothing matches.

    :raises RegistryError: If a matching module fails while being imported
    """
    parts = path.split(".")
    if not all(parts):
        return None
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except ImportError:
            continue
        except Exception as e:
            raise RegistryError(f"Importing '{module_name}' to resolve type '{path}' failed: {e}") from e
        try:
            for attribute in parts[split:]:
                obj = getattr(obj, attribute)
        except AttributeError:
            return None
        return obj if isinstance(obj, type) else None
    return None
