"""Identifier generation for canvas nodes and edges."""

import uuid

from ..constants import EDGE_ID_PREFIX
from ..defaults import DEFAULT_EDGE_ID_LENGTH


def generate_id(prefix: str) -> str:
    """Return ``<prefix>-<12 hex chars>``."""
    return f"{prefix}-{uuid.uuid4().hex[:DEFAULT_EDGE_ID_LENGTH]}"


def generate_edge_id() -> str:
    return generate_id(EDGE_ID_PREFIX)
