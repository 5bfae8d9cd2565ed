"""Schema loading utilities for the reference registry."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import SchemaModel

logger = logging.getLogger(__name__)


def load_schema(content: str, format: str = "yaml") -> SchemaModel:
    """Load a schema from string content.

    Args:
        content: Schema content as string
        format: Format of the content ('yaml' or 'json')

    Returns:
        Validated SchemaModel

    Raises:
        ValueError: If format is not supported, parsing fails or the schema
            is invalid
    """
    data: Any
    if format == "yaml":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")

    if not isinstance(data, dict):
        raise ValueError("Schema must be a mapping")

    try:
        schema = SchemaModel.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid schema: {e}") from e

    logger.debug(
        f"Loaded schema with {len(schema.routes)} routes and {len(schema.resources)} resources"
    )
    return schema


def load_schema_from_file(path: str | Path) -> SchemaModel:
    """Load a schema from a YAML or JSON file.

    Args:
        path: Path to the schema file

    Returns:
        Validated SchemaModel

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or loading fails
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    if path.suffix.lower() in [".yaml", ".yml"]:
        format = "yaml"
    elif path.suffix.lower() == ".json":
        format = "json"
    else:
        raise ValueError(f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json")

    content = path.read_text(encoding="utf-8")
    return load_schema(content, format=format)
