"""EventGen: change-notification member synthesis for annotated fields."""

from .codegen import (
    ClassDescriptor,
    FieldDescriptor,
    GeneratorConfig,
    SourceLocation,
    generate_code,
    generate_from_descriptors,
)

__version__ = "0.1.0"

__all__ = [
    "ClassDescriptor",
    "FieldDescriptor",
    "GeneratorConfig",
    "SourceLocation",
    "generate_code",
    "generate_from_descriptors",
]
