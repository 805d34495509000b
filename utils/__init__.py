"""Shared utilities."""

from .serialization import (
    to_json,
    from_json,
    save_to_file,
    load_from_file,
    SerializationError,
)

__all__ = [
    "to_json",
    "from_json",
    "save_to_file",
    "load_from_file",
    "SerializationError",
]
