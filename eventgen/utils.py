"""Utility functions for loading descriptor snapshots and writing sources.

A descriptor snapshot is a JSON document exported by the host compilation:

    {
      "classes": [
        {
          "namespace": "N",
          "name": "Widget",
          "sealed": false,
          "containing_type": null,
          "accessibility": "public",
          "fields": [
            {"name": "_size", "type": "int", "attributes": {"GenerateEventArgs": true},
             "location": {"path": "Widget.cs", "line": 7, "column": 21}}
          ]
        }
      ]
    }
"""

import json
from pathlib import Path
from typing import Any, Iterable

from .codegen.core.generator import GeneratedSource
from .codegen.core.schema import ClassDescriptor, FieldDescriptor, SourceLocation
from .logging_config import get_logger

logger = get_logger(__name__)


class DescriptorLoaderError(Exception):
    """Custom exception for descriptor loading errors."""

    pass


def load_descriptors_from_file(file_path: str | Path) -> tuple[str, list[FieldDescriptor]]:
    """Load field descriptors from a JSON snapshot file.

    Args:
        file_path: Path to the snapshot file.

    Returns:
        Tuple of (source description, field descriptors in declaration order).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DescriptorLoaderError: If file cannot be read or its content is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load descriptors from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}", exc_info=True)
        raise DescriptorLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise DescriptorLoaderError(f"Error reading file {file_path}: {e}") from e

    fields = parse_descriptors(data)
    logger.info(f"Loaded {len(fields)} field descriptor(s) from {file_path}")
    return str(file_path), fields


def parse_descriptors(data: Any) -> list[FieldDescriptor]:
    """Convert a decoded snapshot into field descriptors.

    Args:
        data: Decoded JSON snapshot.

    Returns:
        Field descriptors, class by class, in declaration order.

    Raises:
        DescriptorLoaderError: If the snapshot structure is invalid.
    """
    if not isinstance(data, dict) or not isinstance(data.get("classes"), list):
        raise DescriptorLoaderError("Snapshot must be an object with a 'classes' list")

    fields: list[FieldDescriptor] = []

    for index, class_data in enumerate(data["classes"]):
        try:
            class_descriptor = ClassDescriptor(
                namespace=class_data["namespace"],
                name=class_data["name"],
                sealed=_checked(class_data, "sealed", bool, False),
                containing_type=_checked(class_data, "containing_type", str),
                accessibility=_checked(class_data, "accessibility", str),
            )
            for field_data in class_data.get("fields", []):
                fields.append(_parse_field(field_data, class_descriptor))
        except (KeyError, TypeError, AttributeError) as e:
            raise DescriptorLoaderError(f"Invalid class entry #{index}: {e!r}") from e

    return fields


def _checked(data: dict[str, Any], key: str, expected: type, default: Any = None) -> Any:
    """Get an optional entry, rejecting values of the wrong JSON type."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, expected):
        raise TypeError(
            f"'{key}' must be {expected.__name__} or null, got {type(value).__name__}"
        )
    return value


def _parse_field(
    field_data: dict[str, Any], class_descriptor: ClassDescriptor
) -> FieldDescriptor:
    location_data = field_data.get("location") or {}
    attributes = field_data.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise TypeError(f"attributes of field {field_data['name']} must be an object")

    return FieldDescriptor(
        name=field_data["name"],
        type=field_data["type"],
        containing_class=class_descriptor,
        attributes=dict(attributes),
        location=SourceLocation(
            path=location_data.get("path"),
            line=location_data.get("line"),
            column=location_data.get("column"),
        ),
    )


def write_sources(sources: Iterable[GeneratedSource], output_dir: str | Path) -> list[Path]:
    """Write generated sources into a directory.

    Args:
        sources: Generated source files.
        output_dir: Target directory, created if missing.

    Returns:
        Paths of the written files.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for source in sources:
        path = output_dir / source.file_name
        # newline="" keeps the configured line endings untouched
        with path.open("w", encoding=source.encoding, newline="") as f:
            f.write(source.text)
        logger.debug(f"Wrote {path}")
        written.append(path)

    logger.info(f"Wrote {len(written)} source file(s) to {output_dir}")
    return written
