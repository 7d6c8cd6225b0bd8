"""Configuration builder handed to setup configuration blocks.

A configuration block is a plain function that receives a
:class:`FieldsBuilder` and declares fields on it::

    def configure_post(fields):
        fields.text("title", boost=2.0)
        fields.text("body")
        fields.string("author_name", using="author_display_name")
        fields.integer("comment_count", value_fn=lambda post: len(post.comments))
        fields.time("published_at", stored=True)
        fields.dynamic_string("custom", value_fn=lambda post: post.custom_fields)

    registry.configure(Post, configure_post)

The builder holds nothing but the setup it declares on, so evaluating several
blocks against one setup simply merges their declarations.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from searchable.fields.factory import DynamicFieldFactory, StaticFieldFactory, TextFieldFactory
from searchable.fields.types import (
    BOOLEAN,
    DATE,
    DOUBLE,
    FLOAT,
    INTEGER,
    LONG,
    STRING,
    TIME,
    FieldType,
)

if TYPE_CHECKING:
    from .setup import Setup

ValueFn = Callable[[Any], Any]


def _static_helper(field_type: FieldType):
    def helper(self, *names: str, value_fn: ValueFn | None = None, **options: Any) -> list[StaticFieldFactory]:
        return [self.field(name, field_type, value_fn=value_fn, **options) for name in names]

    helper.__name__ = field_type.name
    helper.__doc__ = f"Declare one or more static {field_type.name} fields."
    return helper


def _dynamic_helper(field_type: FieldType):
    def helper(self, *names: str, value_fn: ValueFn | None = None, **options: Any) -> list[DynamicFieldFactory]:
        return [self.dynamic_field(name, field_type, value_fn=value_fn, **options) for name in names]

    helper.__name__ = f"dynamic_{field_type.name}"
    helper.__doc__ = f"Declare one or more dynamic {field_type.name} fields."
    return helper


class FieldsBuilder:
    """Declaration surface bound to a single :class:`Setup`."""

    def __init__(self, setup: "Setup"):
        self._setup = setup

    @property
    def setup(self) -> "Setup":
        return self._setup

    def field(
        self, name: str, field_type: Any, value_fn: ValueFn | None = None, **options: Any
    ) -> StaticFieldFactory:
        """Declare a static field of ``field_type``."""
        return self._setup.add_field_factory(name, field_type, options, value_fn)

    def text_field(self, name: str, value_fn: ValueFn | None = None, **options: Any) -> TextFieldFactory:
        """Declare a full-text field."""
        return self._setup.add_text_field_factory(name, options, value_fn)

    def dynamic_field(
        self, name: str, field_type: Any, value_fn: ValueFn | None = None, **options: Any
    ) -> DynamicFieldFactory:
        """Declare a dynamic field whose concrete names come from each instance."""
        return self._setup.add_dynamic_field_factory(name, field_type, options, value_fn)

    def text(self, *names: str, value_fn: ValueFn | None = None, **options: Any) -> list[TextFieldFactory]:
        """Declare one or more full-text fields sharing the same options."""
        return [self.text_field(name, value_fn=value_fn, **options) for name in names]

    string = _static_helper(STRING)
    integer = _static_helper(INTEGER)
    long = _static_helper(LONG)
    float = _static_helper(FLOAT)
    double = _static_helper(DOUBLE)
    boolean = _static_helper(BOOLEAN)
    date = _static_helper(DATE)
    time = _static_helper(TIME)

    dynamic_string = _dynamic_helper(STRING)
    dynamic_integer = _dynamic_helper(INTEGER)
    dynamic_long = _dynamic_helper(LONG)
    dynamic_float = _dynamic_helper(FLOAT)
    dynamic_double = _dynamic_helper(DOUBLE)
    dynamic_boolean = _dynamic_helper(BOOLEAN)
    dynamic_date = _dynamic_helper(DATE)
    dynamic_time = _dynamic_helper(TIME)
