"""
Flow Graph Builders

Fluent builders for creating nodes and graph snapshots.
"""

from .node_builder import NodeBuilder
from .graph_builder import GraphBuilder

__all__ = [
    "NodeBuilder",
    "GraphBuilder",
]
