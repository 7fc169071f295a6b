"""
EventGen Code Generation Module

Synthesizes properties, change events, trigger methods and event argument
types for annotated fields.
"""

from .core.generator import EventGenerator, GenerationResult, generate_code
from .core.schema import ClassDescriptor, FieldDescriptor, SourceLocation
from .core.config import FieldConfig, GeneratorConfig, ConfigManager, load_config
from .core.diagnostics import DiagnosticSeverity, SynthesisDiagnostic


def generate_from_descriptors(fields, config=None):
    """
    Generate sources from host-supplied field descriptors.

    Args:
        fields: Annotated FieldDescriptor values
        config: GeneratorConfig, configuration overrides dict, or None

    Returns:
        GenerationResult with generated sources
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)

    return generate_code(fields, config)


__all__ = [
    "EventGenerator",
    "GenerationResult",
    "ClassDescriptor",
    "FieldDescriptor",
    "SourceLocation",
    "FieldConfig",
    "GeneratorConfig",
    "ConfigManager",
    "DiagnosticSeverity",
    "SynthesisDiagnostic",
    "generate_code",
    "generate_from_descriptors",
    "load_config",
]
