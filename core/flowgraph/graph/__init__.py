"""
Graph Snapshot

Immutable node/edge snapshot with handle-indexed lookups.
"""

from .model import GraphModel, GraphDiff
from .identifiers import generate_id, generate_edge_id

__all__ = [
    "GraphModel",
    "GraphDiff",
    "generate_id",
    "generate_edge_id",
]
