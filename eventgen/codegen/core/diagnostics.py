"""
Diagnostics reported during member synthesis.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .schema import SourceLocation


class DiagnosticSeverity(Enum):
    """Severity of a reported diagnostic."""

    HIDDEN = "hidden"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description of a diagnostic kind."""

    code: str
    title: str
    message_format: str
    category: str
    severity: DiagnosticSeverity


@dataclass(frozen=True)
class SynthesisDiagnostic:
    """A diagnostic instance attached to a source location."""

    descriptor: DiagnosticDescriptor
    location: SourceLocation = field(default_factory=SourceLocation)
    message_args: Tuple[str, ...] = ()

    @property
    def code(self) -> str:
        return self.descriptor.code

    @property
    def severity(self) -> DiagnosticSeverity:
        return self.descriptor.severity

    @property
    def message(self) -> str:
        return self.descriptor.message_format.format(*self.message_args)

    def __str__(self) -> str:
        return f"{self.location}: {self.severity.value} {self.code}: {self.message}"


PROPERTY_NAME_COLLISION = DiagnosticDescriptor(
    code="EVG000",
    title="Property name equals field name",
    message_format='Property name "{0}" is empty or equals the field name "{1}".',
    category="EventGen",
    severity=DiagnosticSeverity.WARNING,
)
