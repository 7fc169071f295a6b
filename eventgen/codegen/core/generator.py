"""
Generator entry point for the host compilation pipeline.

The host creates a ``GenerationContext`` per pass, calls ``initialize`` once
and ``execute`` with the annotated fields it discovered; generated sources
and diagnostics are collected on the context.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ...logging_config import get_logger
from .assembler import ClassAssembler, apply_line_ending
from .config import ATTRIBUTE_GROUPS, ATTRIBUTE_KEYS, GeneratorConfig
from .diagnostics import DiagnosticSeverity, SynthesisDiagnostic
from .schema import FieldDescriptor, group_fields_by_class
from .synthesizer import MemberSynthesizer
from .templates import TemplateEngine, get_default_template_engine

logger = get_logger(__name__)

ATTRIBUTE_FILE_NAME = "EventAttribute.g.cs"


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


@dataclass(frozen=True)
class GeneratedSource:
    """A source file handed to the host."""

    file_name: str
    text: str
    encoding: str = "utf-8"


class GenerationContext:
    """Collects the sources and diagnostics of one generation pass."""

    def __init__(self):
        self._sources: Dict[str, GeneratedSource] = {}
        self.diagnostics: List[SynthesisDiagnostic] = []

    @property
    def sources(self) -> List[GeneratedSource]:
        return list(self._sources.values())

    def add_source(self, file_name: str, text: str, encoding: str = "utf-8"):
        """
        Add a generated source file.

        Raises:
            GeneratorError: If a source with the same file name was already added
        """
        if file_name in self._sources:
            raise GeneratorError(f"Source file name must be unique: {file_name}")
        self._sources[file_name] = GeneratedSource(file_name, text, encoding)

    def report_diagnostic(self, diagnostic: SynthesisDiagnostic):
        """Report a diagnostic to the host."""
        self.diagnostics.append(diagnostic)

    def get_source(self, file_name: str) -> Optional[GeneratedSource]:
        return self._sources.get(file_name)


class EventGenerator:
    """Synthesizes event members for annotated fields, class by class."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        template_engine: Optional[TemplateEngine] = None,
    ):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self.template_engine = template_engine or get_default_template_engine()
        self.assembler = ClassAssembler(
            self.config, MemberSynthesizer(template_engine=self.template_engine)
        )

    def initialize(self, context: GenerationContext):
        """Contribute the marker attribute declaration, if enabled."""
        if not self.config.emit_attribute_source:
            return

        context.add_source(
            ATTRIBUTE_FILE_NAME, self.render_attribute_source(), self.config.encoding
        )

    def execute(self, context: GenerationContext, fields: Iterable[FieldDescriptor]):
        """
        Run one generation pass.

        Args:
            context: Receives generated sources and diagnostics
            fields: Annotated fields discovered by the host
        """
        groups = group_fields_by_class(fields)
        logger.info("Generating members for %d class(es)", len(groups))

        for class_descriptor, class_fields in groups.items():
            result = self.assembler.assemble(class_descriptor, class_fields)

            for diagnostic in result.diagnostics:
                context.report_diagnostic(diagnostic)

            for artifact in result.artifacts:
                context.add_source(artifact.file_name, artifact.text, self.config.encoding)

    def render_attribute_source(self) -> str:
        """Render the source of the marker attribute class."""
        groups = []
        for keys in ATTRIBUTE_GROUPS:
            group = []
            for key in keys:
                value_type = ATTRIBUTE_KEYS[key][1]
                if value_type is bool:
                    group.append({"type": "bool", "key": key, "initializer": " = false;"})
                else:
                    group.append({"type": "string", "key": key, "initializer": ""})
            groups.append(group)

        text = self.template_engine.render_template(
            "attribute.cs.j2",
            {"namespace": self.config.attribute_namespace, "groups": groups},
        )
        return apply_line_ending(text, self.config.line_ending)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        sources: List[GeneratedSource],
        diagnostics: List[SynthesisDiagnostic] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            sources: Generated source files
            diagnostics: Diagnostics reported during generation
            metadata: Additional metadata about generation
        """
        self.sources = sources
        self.diagnostics = diagnostics or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @property
    def warnings(self) -> List[SynthesisDiagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def get_source(self, file_name: str) -> Optional[GeneratedSource]:
        for source in self.sources:
            if source.file_name == file_name:
                return source
        return None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(sources=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    fields: Iterable[FieldDescriptor], config: Optional[GeneratorConfig] = None
) -> GenerationResult:
    """
    Run a full generation pass with error handling.

    Args:
        fields: Annotated fields to generate members for
        config: Generator configuration

    Returns:
        GenerationResult with sources, diagnostics, and metadata
    """
    fields = list(fields)
    generator = EventGenerator(config)
    context = GenerationContext()

    try:
        generator.initialize(context)
        generator.execute(context, fields)
    except Exception as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "field_count": len(fields),
        "class_count": len(group_fields_by_class(fields)),
        "source_count": len(context.sources),
        "diagnostic_count": len(context.diagnostics),
    }
    logger.info(
        "Generated %d source(s) with %d diagnostic(s)",
        metadata["source_count"],
        metadata["diagnostic_count"],
    )
    return GenerationResult(context.sources, context.diagnostics, metadata)
