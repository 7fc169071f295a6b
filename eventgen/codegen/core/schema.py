"""
Descriptor model supplied by the host compilation.

Fields and classes arrive fully materialized and are treated as read-only
for the duration of one synthesis pass.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Location of a declaration in the host's source files."""

    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        if not self.path:
            return "<unknown>"
        if self.line is None:
            return self.path
        if self.column is None:
            return f"{self.path}:{self.line}"
        return f"{self.path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class ClassDescriptor:
    """A class that contains annotated fields."""

    namespace: str
    name: str
    sealed: bool = False
    containing_type: Optional[str] = None  # Set for nested types
    accessibility: Optional[str] = None

    @property
    def is_namespace_member(self) -> bool:
        """True if the class is declared directly in its namespace."""
        return self.containing_type is None

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


@dataclass(frozen=True, eq=False)
class FieldDescriptor:
    """An annotated field together with its raw attribute values."""

    name: str
    type: str
    containing_class: ClassDescriptor
    attributes: Dict[str, Any] = field(default_factory=dict)
    location: SourceLocation = field(default_factory=SourceLocation)


def group_fields_by_class(
    fields: Iterable[FieldDescriptor],
) -> Dict[ClassDescriptor, List[FieldDescriptor]]:
    """
    Group fields by their containing class.

    Classes appear in order of their first field and fields keep their
    declaration order within each class.
    """
    groups: Dict[ClassDescriptor, List[FieldDescriptor]] = {}

    for field_descriptor in fields:
        groups.setdefault(field_descriptor.containing_class, []).append(field_descriptor)

    return groups
