from __future__ import annotations

from typing import Any, Callable

import pytest

from eventgen.codegen.core.schema import ClassDescriptor, FieldDescriptor, SourceLocation

FieldFactory = Callable[..., FieldDescriptor]


@pytest.fixture
def widget_class() -> ClassDescriptor:
    """Class ``N.Widget``: unsealed, declared directly in its namespace."""
    return ClassDescriptor(namespace="N", name="Widget")


@pytest.fixture
def make_field(widget_class: ClassDescriptor) -> FieldFactory:
    """Build field descriptors belonging to ``N.Widget`` unless told otherwise."""

    def factory(
        name: str = "_size",
        type: str = "int",
        containing_class: ClassDescriptor | None = None,
        **attributes: Any,
    ) -> FieldDescriptor:
        return FieldDescriptor(
            name=name,
            type=type,
            containing_class=containing_class or widget_class,
            attributes=attributes,
            location=SourceLocation(path="Widget.cs", line=7, column=21),
        )

    return factory
