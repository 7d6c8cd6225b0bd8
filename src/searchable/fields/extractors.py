"""Value extractors used by built fields."""

from collections.abc import Callable
from typing import Any


class AttributeExtractor:
    """Reads a named attribute from an instance, calling it if it is callable."""

    def __init__(self, attribute: str):
        self.attribute = attribute

    def value_for(self, instance: Any) -> Any:
        value = getattr(instance, self.attribute)
        if callable(value):
            value = value()
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, AttributeExtractor) and other.attribute == self.attribute

    def __hash__(self) -> int:
        return hash((AttributeExtractor, self.attribute))

    def __repr__(self) -> str:
        return f"AttributeExtractor({self.attribute!r})"


class CallableExtractor:
    """Derives the value by calling a function with the instance."""

    def __init__(self, function: Callable[[Any], Any]):
        self.function = function

    def value_for(self, instance: Any) -> Any:
        return self.function(instance)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, CallableExtractor) and other.function is self.function

    def __hash__(self) -> int:
        return hash((CallableExtractor, id(self.function)))

    def __repr__(self) -> str:
        return f"CallableExtractor({getattr(self.function, '__name__', self.function)!r})"
