"""Tests for eventgen.codegen.core.synthesizer."""

from __future__ import annotations

from typing import Callable

import pytest

from eventgen.codegen.core.config import ConfigError
from eventgen.codegen.core.diagnostics import DiagnosticSeverity, PROPERTY_NAME_COLLISION
from eventgen.codegen.core.schema import ClassDescriptor, FieldDescriptor
from eventgen.codegen.core.synthesizer import ArtifactKind, MemberSynthesizer

FieldFactory = Callable[..., FieldDescriptor]


@pytest.fixture
def synthesizer() -> MemberSynthesizer:
    return MemberSynthesizer()


def test_default_field_produces_property_event_and_method(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(make_field("_size"), widget_class)

    assert result.diagnostic is None
    assert [f.kind for f in result.fragments] == [
        ArtifactKind.PROPERTIES,
        ArtifactKind.EVENTS,
        ArtifactKind.TRIGGER_METHODS,
    ]

    prop = result.get(ArtifactKind.PROPERTIES).text
    assert "        public int Size\n" in prop
    assert "get => this._size;" in prop
    assert "this._size = value;" in prop
    assert "this.OnSizeChanged(value);" in prop
    assert "virtual" not in prop
    assert "///" not in prop

    assert result.get(ArtifactKind.EVENTS).text == (
        "        public event System.EventHandler SizeChanged;\n"
    )
    assert result.get(ArtifactKind.TRIGGER_METHODS).text == (
        "        protected virtual void OnSizeChanged(int value) => "
        "this.SizeChanged?.Invoke(this, System.EventArgs.Empty);\n"
    )
    assert result.get(ArtifactKind.PAYLOAD_TYPES) is None


def test_setter_fires_trigger_without_equality_check(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    prop = synthesizer.synthesize(make_field("_size"), widget_class).get(ArtifactKind.PROPERTIES)

    assert "==" not in prop.text
    assert "!=" not in prop.text
    assert "Equals" not in prop.text


def test_generate_event_args_adds_payload_type(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(make_field("_size", GenerateEventArgs=True), widget_class)

    payloads = [f for f in result.fragments if f.kind is ArtifactKind.PAYLOAD_TYPES]
    assert len(payloads) == 1

    payload = payloads[0].text
    assert "    public sealed class SizeChangedEventArgs : System.EventArgs\n" in payload
    assert "public int Value { get; }" in payload
    assert "internal SizeChangedEventArgs(int value) => this.Value = value;" in payload
    assert "public SizeChangedEventArgs(" not in payload

    assert "System.EventHandler<N.SizeChangedEventArgs> SizeChanged;" in (
        result.get(ArtifactKind.EVENTS).text
    )
    assert "Invoke(this, new N.SizeChangedEventArgs(value));" in (
        result.get(ArtifactKind.TRIGGER_METHODS).text
    )


def test_skip_property_suppresses_only_the_property(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(
        make_field("_size", SkipProperty=True, IsVirtualProperty=True, GenerateEventArgs=True),
        widget_class,
    )

    assert result.get(ArtifactKind.PROPERTIES) is None
    assert result.get(ArtifactKind.EVENTS) is not None
    assert result.get(ArtifactKind.TRIGGER_METHODS) is not None
    assert result.get(ArtifactKind.PAYLOAD_TYPES) is not None


def test_skip_event_and_method(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(
        make_field("_size", SkipEvent=True, SkipMethod=True), widget_class
    )

    assert [f.kind for f in result.fragments] == [ArtifactKind.PROPERTIES]


def test_virtual_property(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(make_field("_size", IsVirtualProperty=True), widget_class)

    assert "        public virtual int Size\n" in result.get(ArtifactKind.PROPERTIES).text


def test_sealed_class_gets_private_trigger_method(
    synthesizer: MemberSynthesizer, make_field: FieldFactory
) -> None:
    sealed = ClassDescriptor(namespace="N", name="Gadget", sealed=True)

    result = synthesizer.synthesize(make_field("_size", containing_class=sealed), sealed)

    method = result.get(ArtifactKind.TRIGGER_METHODS).text
    assert method.startswith("        private void OnSizeChanged(int value)")
    assert "virtual" not in method


def test_summaries_become_doc_comments(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(
        make_field(
            "_size",
            PropertySummary="The size.",
            EventSummary="Raised when the size changes.",
            MethodSummary="Raises SizeChanged.",
            EventArgsSummary="Carries the new size.",
            GenerateEventArgs=True,
        ),
        widget_class,
    )

    assert result.get(ArtifactKind.PROPERTIES).text.startswith(
        "        /// <summary>\n"
        "        /// The size.\n"
        "        /// </summary>\n"
        "        public int Size\n"
    )
    assert "        /// Raised when the size changes.\n" in result.get(ArtifactKind.EVENTS).text
    assert "        /// Raises SizeChanged.\n" in result.get(ArtifactKind.TRIGGER_METHODS).text
    assert result.get(ArtifactKind.PAYLOAD_TYPES).text.startswith(
        "    /// <summary>\n    /// Carries the new size.\n    /// </summary>\n"
    )


def test_empty_summary_emits_no_doc_comment(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(make_field("_size", PropertySummary=""), widget_class)

    assert "///" not in result.get(ArtifactKind.PROPERTIES).text


def test_property_name_override_is_used_verbatim(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(
        make_field("_size", PropertyName="length", EventName="LengthChanged"), widget_class
    )

    assert "        public int length\n" in result.get(ArtifactKind.PROPERTIES).text
    assert "this.length(value);" in result.get(ArtifactKind.PROPERTIES).text
    assert "public event System.EventHandler LengthChanged;" in (
        result.get(ArtifactKind.EVENTS).text
    )


@pytest.mark.parametrize("name", ["Count", "_", "___"])
def test_unusable_property_name_yields_single_warning(
    synthesizer: MemberSynthesizer,
    make_field: FieldFactory,
    widget_class: ClassDescriptor,
    name: str,
) -> None:
    field = make_field(name, GenerateEventArgs=True)

    result = synthesizer.synthesize(field, widget_class)

    assert result.fragments == []
    assert result.diagnostic is not None
    assert result.diagnostic.descriptor is PROPERTY_NAME_COLLISION
    assert result.diagnostic.severity is DiagnosticSeverity.WARNING
    assert result.diagnostic.location == field.location


def test_override_equal_to_field_name_yields_warning(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = synthesizer.synthesize(make_field("_size", PropertyName="_size"), widget_class)

    assert result.fragments == []
    assert result.diagnostic.message == (
        'Property name "_size" is empty or equals the field name "_size".'
    )


def test_synthesis_is_idempotent(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    field = make_field("_size", GenerateEventArgs=True, PropertySummary="The size.")

    first = synthesizer.synthesize(field, widget_class)
    second = synthesizer.synthesize(field, widget_class)

    assert first == second


def test_wrongly_typed_attribute_propagates(
    synthesizer: MemberSynthesizer, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    with pytest.raises(ConfigError):
        synthesizer.synthesize(make_field("_size", SkipEvent="yes"), widget_class)
