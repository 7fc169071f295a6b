"""
Naming utilities for generated members.

Derives the property, event, trigger-method and payload-type names of a
field from its identifier and the explicit overrides on its attribute.
"""

from dataclasses import dataclass
from typing import Optional

from .config import FieldConfig


@dataclass(frozen=True)
class MemberNames:
    """Final names of the members generated for one field."""

    property: str
    event: str
    method: str
    event_args: str


class NamingPolicy:
    """Derives generated member names from a field identifier."""

    EVENT_SUFFIX = "Changed"
    METHOD_PREFIX = "On"
    EVENT_ARGS_SUFFIX = "EventArgs"

    @staticmethod
    def choose_name(base_identifier: str, override: Optional[str] = None) -> str:
        """
        Choose the name of a generated member.

        Args:
            base_identifier: Identifier the name is derived from
            override: Explicit name; returned verbatim when given

        Returns:
            The chosen name, or an empty string if nothing is left
            after stripping leading underscores
        """
        if override is not None:
            return override

        name = base_identifier.lstrip("_")
        if not name:
            return ""

        if len(name) == 1:
            return name.upper()

        return name[0].upper() + name[1:]

    def derive(self, field_name: str, config: FieldConfig) -> MemberNames:
        """
        Derive all member names for a field.

        The event falls back to the PropertyName override, not to the
        derived property name. The payload type is seeded from the
        MethodName/PropertyName overrides; EventArgsName is not consulted.
        """
        property_name = self.choose_name(field_name, config.property_name)

        event_override = (
            config.event_name if config.event_name is not None else config.property_name
        )
        event_name = self.choose_name(f"{field_name}{self.EVENT_SUFFIX}", event_override)

        method_override = (
            config.method_name if config.method_name is not None else config.property_name
        )
        method_name = self.choose_name(f"{self.METHOD_PREFIX}{event_name}", method_override)
        event_args_name = self.choose_name(
            f"{event_name}{self.EVENT_ARGS_SUFFIX}", method_override
        )

        return MemberNames(
            property=property_name,
            event=event_name,
            method=method_name,
            event_args=event_args_name,
        )


# Convenience functions
def choose_name(base_identifier: str, override: Optional[str] = None) -> str:
    """Choose a member name using the default naming policy."""
    return NamingPolicy.choose_name(base_identifier, override)


def derive_member_names(field_name: str, config: Optional[FieldConfig] = None) -> MemberNames:
    """Derive all member names for a field using the default naming policy."""
    return NamingPolicy().derive(field_name, config or FieldConfig())
