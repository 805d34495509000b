"""
Shared Serialization Utilities.

JSON serialization for workflow documents and graph snapshots.

Usage:
    from utils.serialization import (
        to_json, from_json,
        save_to_file, load_from_file,
    )

    json_str = to_json({"workflowName": "review"})
    data = from_json(json_str)

    save_to_file(data, "workflows/review.json")
    data = load_from_file("workflows/review.json")

Version: 1.0.0
"""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Union


class SerializationError(Exception):
    """Raised when serialization or deserialization fails."""
    pass


def _serialize_value(value: Any) -> Any:
    """
    Serialize a value to a JSON-compatible format.

    Handles:
    - Enum values -> underlying value
    - Pydantic models -> dict (via model_dump with aliases)
    - Objects with to_dict() method
    - Nested dicts and lists
    """
    if value is None:
        return None
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, dict):
        return {k: _serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [_serialize_value(v) for v in value]
    elif hasattr(value, 'to_dict'):
        return _serialize_value(value.to_dict())
    elif hasattr(value, 'model_dump'):
        return _serialize_value(value.model_dump(by_alias=True, mode="json"))
    elif isinstance(value, (str, int, float, bool)):
        return value
    else:
        return str(value)


# =============================================================================
# JSON Serialization
# =============================================================================

def to_json(
    data: Any,
    indent: int = 2,
    sort_keys: bool = False,
) -> str:
    """
    Serialize data to a JSON string.

    Args:
        data: Dictionary (or model) to serialize
        indent: Indentation level (default: 2)
        sort_keys: Sort dictionary keys (default: False)

    Returns:
        JSON string

    Raises:
        SerializationError: If serialization fails
    """
    try:
        serialized = _serialize_value(data)
        return json.dumps(serialized, indent=indent, sort_keys=sort_keys)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to serialize to JSON: {e}") from e


def from_json(json_str: str) -> Dict[str, Any]:
    """
    Deserialize a JSON object.

    Raises:
        SerializationError: If the text is not valid JSON or not an object
    """
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SerializationError(f"Expected a JSON object, got {type(data).__name__}")
    return data


# =============================================================================
# File I/O
# =============================================================================

def save_to_file(data: Any, path: Union[str, Path]) -> None:
    """
    Save data to a JSON file, creating parent directories.

    Raises:
        SerializationError: If serialization fails
        OSError: If the file cannot be written
    """
    path = Path(path)
    content = to_json(data)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')


def load_from_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a JSON object from file.

    Raises:
        SerializationError: If deserialization fails
        FileNotFoundError: If file doesn't exist
    """
    path = Path(path)
    try:
        content = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise SerializationError(f"File is not valid UTF-8: {e}") from e
    return from_json(content)
