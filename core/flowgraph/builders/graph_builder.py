"""
Graph Builder

Fluent builder for assembling graph snapshots in code and tests.

Version: 1.0.0
"""

from __future__ import annotations

from typing import List, Optional

from ..spec.node_models import NodeSpec
from ..spec.edge_models import EdgeSpec
from ..graph.model import GraphModel
from ..graph.identifiers import generate_edge_id


class GraphBuilder:
    """
    Fluent builder for creating GraphModel instances.

    Edges are added verbatim, so the builder can produce snapshots that
    violate compile-time invariants (useful for validation tests).
    Construction still rejects duplicate IDs and missing endpoints.

    Usage:
        graph = (GraphBuilder()
            .add_node(NodeBuilder.start().with_id("start").build())
            .add_node(NodeBuilder.step_group("Review").with_id("s1").build())
            .add_node(NodeBuilder.end().with_id("end").build())
            .chain("start", "s1", "end")
            .build())
    """

    def __init__(self):
        self._nodes: List[NodeSpec] = []
        self._edges: List[EdgeSpec] = []

    def add_node(self, node: NodeSpec) -> GraphBuilder:
        self._nodes.append(node)
        return self

    def add_nodes(self, nodes: List[NodeSpec]) -> GraphBuilder:
        self._nodes.extend(nodes)
        return self

    def connect(
        self,
        source: str,
        target: str,
        edge_id: Optional[str] = None,
        source_handle: Optional[str] = None,
        target_handle: Optional[str] = None,
    ) -> GraphBuilder:
        """Add an edge from ``source`` to ``target``."""
        self._edges.append(EdgeSpec(
            id=edge_id or generate_edge_id(),
            source=source,
            target=target,
            source_handle=source_handle,
            target_handle=target_handle,
        ))
        return self

    def chain(self, *node_ids: str) -> GraphBuilder:
        """Connect consecutive node IDs, naming edges ``e-<source>-<target>``."""
        for source, target in zip(node_ids, node_ids[1:]):
            self.connect(source, target, edge_id=f"e-{source}-{target}")
        return self

    def build(self) -> GraphModel:
        """
        Build the GraphModel.

        Raises:
            GraphIntegrityError: On duplicate IDs or missing endpoints
        """
        return GraphModel(self._nodes, self._edges)
