"""
Per-class assembly of synthesized members into generated files.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .diagnostics import SynthesisDiagnostic
from .schema import ClassDescriptor, FieldDescriptor
from .synthesizer import ArtifactKind, MemberSynthesizer
from .templates import TemplateEngine

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeneratedArtifact:
    """One generated file for one class."""

    kind: ArtifactKind
    class_descriptor: ClassDescriptor
    text: str

    @property
    def file_name(self) -> str:
        return f"{self.class_descriptor.name}.g.{self.kind.value}.cs"


@dataclass
class AssemblyResult:
    """Artifacts and diagnostics produced for one class."""

    artifacts: List[GeneratedArtifact] = field(default_factory=list)
    diagnostics: List[SynthesisDiagnostic] = field(default_factory=list)

    def get(self, kind: ArtifactKind) -> Optional[GeneratedArtifact]:
        """Get the artifact of the given kind, if one was emitted."""
        for artifact in self.artifacts:
            if artifact.kind is kind:
                return artifact
        return None


class ClassAssembler:
    """Collects member fragments per artifact kind and wraps them into files."""

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        synthesizer: Optional[MemberSynthesizer] = None,
    ):
        self.config = config or GeneratorConfig()
        self.synthesizer = synthesizer or MemberSynthesizer()

    @property
    def template_engine(self) -> TemplateEngine:
        return self.synthesizer.template_engine

    def assemble(
        self, class_descriptor: ClassDescriptor, fields: Iterable[FieldDescriptor]
    ) -> AssemblyResult:
        """
        Assemble the generated artifacts of one class.

        Args:
            class_descriptor: Class to generate members for
            fields: Annotated fields of the class, in declaration order

        Returns:
            AssemblyResult with up to one artifact per kind
        """
        result = AssemblyResult()

        if not class_descriptor.is_namespace_member:
            logger.debug(
                "Skipping nested class %s (contained in %s)",
                class_descriptor.name,
                class_descriptor.containing_type,
            )
            return result

        bodies: Dict[ArtifactKind, List[str]] = {kind: [] for kind in ArtifactKind}

        for field_descriptor in fields:
            synthesis = self.synthesizer.synthesize(field_descriptor, class_descriptor)
            if synthesis.diagnostic is not None:
                result.diagnostics.append(synthesis.diagnostic)
            for fragment in synthesis.fragments:
                bodies[fragment.kind].append(fragment.text)

        for kind in ArtifactKind:
            body = "".join(bodies[kind])
            if len(body) <= self.config.min_artifact_length:
                logger.debug(
                    "No %s emitted for %s", kind.value, class_descriptor.qualified_name
                )
                continue

            text = self._wrap(class_descriptor, kind, body)
            result.artifacts.append(GeneratedArtifact(kind, class_descriptor, text))

        logger.debug(
            "Assembled %s: %d artifact(s), %d diagnostic(s)",
            class_descriptor.qualified_name,
            len(result.artifacts),
            len(result.diagnostics),
        )
        return result

    def _wrap(self, class_descriptor: ClassDescriptor, kind: ArtifactKind, body: str) -> str:
        """Wrap an artifact body into a complete source file."""
        class_declaration = None
        if kind.is_class_member:
            class_declaration = f"partial class {class_descriptor.name}"
            if class_descriptor.accessibility:
                class_declaration = f"{class_descriptor.accessibility} {class_declaration}"

        text = self.template_engine.render_template(
            "class_file.cs.j2",
            {
                "header": self.config.file_header,
                "title": kind.title,
                "namespace": class_descriptor.namespace,
                "class_declaration": class_declaration,
                "body": body,
            },
        )
        return apply_line_ending(text, self.config.line_ending)


def apply_line_ending(text: str, line_ending: str) -> str:
    """Convert ``\\n`` line endings to the configured line ending."""
    text = text.replace("\r\n", "\n")
    if line_ending == "\n":
        return text
    return text.replace("\n", line_ending)
