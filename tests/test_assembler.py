"""Tests for eventgen.codegen.core.assembler."""

from __future__ import annotations

from typing import Callable

import pytest

from eventgen.codegen.core.assembler import ClassAssembler, apply_line_ending
from eventgen.codegen.core.config import DEFAULT_FILE_HEADER, GeneratorConfig
from eventgen.codegen.core.schema import ClassDescriptor, FieldDescriptor
from eventgen.codegen.core.synthesizer import ArtifactKind

FieldFactory = Callable[..., FieldDescriptor]


@pytest.fixture
def assembler() -> ClassAssembler:
    return ClassAssembler()


def test_widget_end_to_end(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(widget_class, [make_field("_size")])

    assert result.diagnostics == []
    assert [a.kind for a in result.artifacts] == [
        ArtifactKind.PROPERTIES,
        ArtifactKind.EVENTS,
        ArtifactKind.TRIGGER_METHODS,
    ]
    assert [a.file_name for a in result.artifacts] == [
        "Widget.g.properties.cs",
        "Widget.g.events.cs",
        "Widget.g.eventMethods.cs",
    ]

    properties = result.get(ArtifactKind.PROPERTIES).text
    assert "public int Size" in properties
    assert "this.OnSizeChanged(value);" in properties

    events = result.get(ArtifactKind.EVENTS).text
    assert "public event System.EventHandler SizeChanged;" in events
    assert "EventHandler<" not in events

    methods = result.get(ArtifactKind.TRIGGER_METHODS).text
    assert "void OnSizeChanged(int value) => this.SizeChanged?.Invoke(" in methods

    assert result.get(ArtifactKind.PAYLOAD_TYPES) is None


def test_member_artifacts_are_wrapped_in_namespace_and_partial_class(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(widget_class, [make_field("_size")])

    events = result.get(ArtifactKind.EVENTS).text
    assert events == (
        DEFAULT_FILE_HEADER
        + "\n\n// Events\n\n"
        + "namespace N\n"
        + "{\n"
        + "    partial class Widget\n"
        + "    {\n"
        + "        public event System.EventHandler SizeChanged;\n"
        + "    }\n"
        + "}\n"
    )


def test_accessibility_is_carried_onto_partial_class(make_field: FieldFactory) -> None:
    widget = ClassDescriptor(namespace="N", name="Widget", accessibility="public")

    result = ClassAssembler().assemble(widget, [make_field("_size", containing_class=widget)])

    assert "\n    public partial class Widget\n" in result.get(ArtifactKind.PROPERTIES).text


def test_payload_types_are_namespace_level(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(widget_class, [make_field("_size", GenerateEventArgs=True)])

    payload = result.get(ArtifactKind.PAYLOAD_TYPES)
    assert payload.file_name == "Widget.g.eventArgs.cs"
    assert "// Event Args\n\nnamespace N\n{\n" in payload.text
    assert "partial class" not in payload.text
    assert "    public sealed class SizeChangedEventArgs : System.EventArgs\n" in payload.text
    assert payload.text.endswith("}\n")


def test_fragments_keep_field_declaration_order(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(
        widget_class, [make_field("_width"), make_field("_height"), make_field("_depth")]
    )

    events = result.get(ArtifactKind.EVENTS).text
    assert events.index("WidthChanged") < events.index("HeightChanged") < events.index(
        "DepthChanged"
    )


def test_kind_skipped_by_every_field_emits_no_artifact(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(
        widget_class,
        [make_field("_width", SkipEvent=True), make_field("_height", SkipEvent=True)],
    )

    assert result.get(ArtifactKind.EVENTS) is None
    assert result.get(ArtifactKind.PROPERTIES) is not None
    assert result.get(ArtifactKind.TRIGGER_METHODS) is not None


def test_fully_skipped_field_emits_nothing(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(
        widget_class, [make_field("_size", SkipProperty=True, SkipEvent=True, SkipMethod=True)]
    )

    assert result.artifacts == []
    assert result.diagnostics == []


def test_collision_affects_only_that_field(
    assembler: ClassAssembler, make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    result = assembler.assemble(widget_class, [make_field("Count"), make_field("_size")])

    assert len(result.diagnostics) == 1
    assert result.diagnostics[0].message_args == ("Count", "Count")

    properties = result.get(ArtifactKind.PROPERTIES).text
    assert "public int Size" in properties
    assert "this.Count" not in properties


def test_nested_class_yields_nothing(make_field: FieldFactory) -> None:
    nested = ClassDescriptor(namespace="N", name="Inner", containing_type="Outer")

    result = ClassAssembler().assemble(
        nested,
        [
            make_field("_size", containing_class=nested),
            make_field("Count", containing_class=nested),
        ],
    )

    assert result.artifacts == []
    assert result.diagnostics == []


def test_threshold_drops_short_bodies(
    make_field: FieldFactory, widget_class: ClassDescriptor
) -> None:
    assembler = ClassAssembler(GeneratorConfig(min_artifact_length=10_000))

    result = assembler.assemble(widget_class, [make_field("_size", GenerateEventArgs=True)])

    assert result.artifacts == []


def test_threshold_is_exclusive(make_field: FieldFactory, widget_class: ClassDescriptor) -> None:
    field = make_field("_size")
    events_body = ClassAssembler().synthesizer.synthesize(field, widget_class).get(
        ArtifactKind.EVENTS
    ).text

    at_length = ClassAssembler(GeneratorConfig(min_artifact_length=len(events_body)))
    below_length = ClassAssembler(GeneratorConfig(min_artifact_length=len(events_body) - 1))

    assert at_length.assemble(widget_class, [field]).get(ArtifactKind.EVENTS) is None
    assert below_length.assemble(widget_class, [field]).get(ArtifactKind.EVENTS) is not None


def test_crlf_line_endings(make_field: FieldFactory, widget_class: ClassDescriptor) -> None:
    assembler = ClassAssembler(GeneratorConfig(line_ending="\r\n"))

    result = assembler.assemble(widget_class, [make_field("_size")])

    for artifact in result.artifacts:
        assert "\r\n" in artifact.text
        assert "\n" not in artifact.text.replace("\r\n", "")


def test_apply_line_ending_normalizes_mixed_input() -> None:
    assert apply_line_ending("a\r\nb\nc", "\r\n") == "a\r\nb\r\nc"
    assert apply_line_ending("a\r\nb\nc", "\n") == "a\nb\nc"
