"""
Member synthesis for a single annotated field.

Turns one field descriptor into declaration fragments, one per enabled
artifact kind, or into a diagnostic when no property name can be derived.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ...logging_config import get_logger
from .config import FieldConfig
from .diagnostics import PROPERTY_NAME_COLLISION, SynthesisDiagnostic
from .naming import MemberNames, NamingPolicy
from .schema import ClassDescriptor, FieldDescriptor
from .templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)


class ArtifactKind(Enum):
    """Generated artifact groups; the value is the file name suffix."""

    PROPERTIES = "properties"
    EVENTS = "events"
    TRIGGER_METHODS = "eventMethods"
    PAYLOAD_TYPES = "eventArgs"

    @property
    def title(self) -> str:
        return _KIND_TITLES[self]

    @property
    def is_class_member(self) -> bool:
        """True if declarations of this kind live inside the partial class."""
        return self is not ArtifactKind.PAYLOAD_TYPES


_KIND_TITLES = {
    ArtifactKind.PROPERTIES: "Properties",
    ArtifactKind.EVENTS: "Events",
    ArtifactKind.TRIGGER_METHODS: "Event Methods",
    ArtifactKind.PAYLOAD_TYPES: "Event Args",
}


@dataclass(frozen=True)
class Fragment:
    """Declaration text contributed by one field to one artifact kind."""

    kind: ArtifactKind
    text: str


@dataclass
class SynthesisResult:
    """Fragments and diagnostic produced for one field."""

    fragments: List[Fragment] = field(default_factory=list)
    diagnostic: Optional[SynthesisDiagnostic] = None

    def get(self, kind: ArtifactKind) -> Optional[Fragment]:
        """Get the fragment of the given kind, if one was produced."""
        for fragment in self.fragments:
            if fragment.kind is kind:
                return fragment
        return None


class MemberSynthesizer:
    """Produces member declarations for annotated fields."""

    def __init__(
        self,
        naming_policy: Optional[NamingPolicy] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        self.naming_policy = naming_policy or NamingPolicy()
        self.template_engine = template_engine or get_default_template_engine()

    def synthesize(
        self, field_descriptor: FieldDescriptor, class_descriptor: ClassDescriptor
    ) -> SynthesisResult:
        """
        Synthesize the members of one field.

        Args:
            field_descriptor: The annotated field
            class_descriptor: Class the field belongs to

        Returns:
            SynthesisResult with the fragments, or with a single warning
            and no fragments if the property name is unusable
        """
        field_name = field_descriptor.name
        config = FieldConfig.from_attributes(field_descriptor.attributes)
        names = self.naming_policy.derive(field_name, config)

        if not names.property or names.property == field_name:
            logger.warning(
                "Skipping field %s.%s: property name %r collides with the field name",
                class_descriptor.qualified_name,
                field_name,
                names.property,
            )
            diagnostic = SynthesisDiagnostic(
                descriptor=PROPERTY_NAME_COLLISION,
                location=field_descriptor.location,
                message_args=(names.property, field_name),
            )
            return SynthesisResult(diagnostic=diagnostic)

        args_type = None
        if config.generate_event_args:
            args_type = self._qualify(class_descriptor, names.event_args)

        result = SynthesisResult()

        if config.emit_property:
            result.fragments.append(
                self._render_property(field_descriptor, config, names)
            )
        if config.emit_event:
            result.fragments.append(self._render_event(config, names, args_type))
        if config.emit_method:
            result.fragments.append(
                self._render_method(
                    field_descriptor, class_descriptor, config, names, args_type
                )
            )
        if config.generate_event_args:
            result.fragments.append(
                self._render_event_args(field_descriptor, config, names)
            )

        logger.debug(
            "Synthesized %d fragment(s) for %s.%s",
            len(result.fragments),
            class_descriptor.qualified_name,
            field_name,
        )
        return result

    @staticmethod
    def _qualify(class_descriptor: ClassDescriptor, type_name: str) -> str:
        if not class_descriptor.namespace:
            return type_name
        return f"{class_descriptor.namespace}.{type_name}"

    def _render_property(
        self, field_descriptor: FieldDescriptor, config: FieldConfig, names: MemberNames
    ) -> Fragment:
        text = self.template_engine.render_template(
            "property.cs.j2",
            {
                "summary": config.property_summary,
                "is_virtual": config.is_virtual_property,
                "type": field_descriptor.type,
                "name": names.property,
                "field_name": field_descriptor.name,
                "method_name": names.method,
            },
        )
        return Fragment(ArtifactKind.PROPERTIES, text)

    def _render_event(
        self, config: FieldConfig, names: MemberNames, args_type: Optional[str]
    ) -> Fragment:
        text = self.template_engine.render_template(
            "event.cs.j2",
            {
                "summary": config.event_summary,
                "args_type": args_type,
                "name": names.event,
            },
        )
        return Fragment(ArtifactKind.EVENTS, text)

    def _render_method(
        self,
        field_descriptor: FieldDescriptor,
        class_descriptor: ClassDescriptor,
        config: FieldConfig,
        names: MemberNames,
        args_type: Optional[str],
    ) -> Fragment:
        modifiers = "private" if class_descriptor.sealed else "protected virtual"
        text = self.template_engine.render_template(
            "method.cs.j2",
            {
                "summary": config.method_summary,
                "modifiers": modifiers,
                "name": names.method,
                "type": field_descriptor.type,
                "event_name": names.event,
                "args_type": args_type,
            },
        )
        return Fragment(ArtifactKind.TRIGGER_METHODS, text)

    def _render_event_args(
        self, field_descriptor: FieldDescriptor, config: FieldConfig, names: MemberNames
    ) -> Fragment:
        text = self.template_engine.render_template(
            "event_args.cs.j2",
            {
                "summary": config.event_args_summary,
                "name": names.event_args,
                "type": field_descriptor.type,
            },
        )
        return Fragment(ArtifactKind.PAYLOAD_TYPES, text)
