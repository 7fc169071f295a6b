"""
Core member synthesis components.

Provides the naming policy, field configuration, synthesizer, class
assembler and generator entry point.
"""

from .assembler import AssemblyResult, ClassAssembler, GeneratedArtifact
from .config import (
    ConfigError,
    ConfigManager,
    FieldConfig,
    GeneratorConfig,
    load_config,
)
from .diagnostics import (
    PROPERTY_NAME_COLLISION,
    DiagnosticDescriptor,
    DiagnosticSeverity,
    SynthesisDiagnostic,
)
from .generator import (
    EventGenerator,
    GeneratedSource,
    GenerationContext,
    GenerationResult,
    GeneratorError,
    generate_code,
)
from .naming import MemberNames, NamingPolicy, choose_name, derive_member_names
from .schema import ClassDescriptor, FieldDescriptor, SourceLocation, group_fields_by_class
from .synthesizer import ArtifactKind, Fragment, MemberSynthesizer, SynthesisResult
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Descriptors supplied by the host
    "ClassDescriptor",
    "FieldDescriptor",
    "SourceLocation",
    "group_fields_by_class",
    # Naming
    "MemberNames",
    "NamingPolicy",
    "choose_name",
    "derive_member_names",
    # Configuration
    "FieldConfig",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Diagnostics
    "DiagnosticDescriptor",
    "DiagnosticSeverity",
    "SynthesisDiagnostic",
    "PROPERTY_NAME_COLLISION",
    # Synthesis
    "ArtifactKind",
    "Fragment",
    "MemberSynthesizer",
    "SynthesisResult",
    "ClassAssembler",
    "AssemblyResult",
    "GeneratedArtifact",
    # Generator entry point
    "EventGenerator",
    "GenerationContext",
    "GeneratedSource",
    "GenerationResult",
    "GeneratorError",
    "generate_code",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
