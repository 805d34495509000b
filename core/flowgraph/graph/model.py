"""
Graph Model

Immutable snapshot of the workflow canvas: the current nodes and edges plus
a secondary index keyed by ``(node_id, handle, direction)``.

Every mutation primitive returns a new ``GraphModel`` and leaves the
receiver untouched, so callers can diff the old and new snapshots.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from pydantic import ValidationError

from ..enum import HandleDirection, NodeKind
from ..constants import (
    KEY_NODES,
    KEY_EDGES,
    ERROR_DUPLICATE_NODE,
    ERROR_DUPLICATE_EDGE,
    ERROR_EDGE_ENDPOINT_MISSING,
)
from ..exceptions import (
    DuplicateNodeError,
    EdgeNotFoundError,
    GraphIntegrityError,
    HandleConflictError,
    InvalidEndpointError,
    NodeNotFoundError,
)
from ..spec.node_models import NodeSpec
from ..spec.edge_models import EdgeSpec, HandleKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphDiff:
    """IDs that differ between two snapshots."""
    added_nodes: Set[str] = field(default_factory=set)
    removed_nodes: Set[str] = field(default_factory=set)
    changed_nodes: Set[str] = field(default_factory=set)
    added_edges: Set[str] = field(default_factory=set)
    removed_edges: Set[str] = field(default_factory=set)
    changed_edges: Set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not (
            self.added_nodes or self.removed_nodes or self.changed_nodes
            or self.added_edges or self.removed_edges or self.changed_edges
        )


class GraphModel:
    """
    Snapshot of the workflow graph.

    Construction accepts any node and edge lists, including ones that break
    the compile-time invariants (those are reported by validation). It only
    rejects what cannot be a graph at all: duplicate IDs and edges pointing
    at missing nodes.

    Usage:
        graph = GraphModel()
        graph = graph.add_node(start).add_node(step).add_node(end)
        graph = graph.add_edge(EdgeSpec(id="e1", source="start", target="step"))
        graph = graph.update_node_data("step", title="Review")
    """

    def __init__(
        self,
        nodes: Iterable[NodeSpec] = (),
        edges: Iterable[EdgeSpec] = (),
    ):
        node_map: Dict[str, NodeSpec] = {}
        for node in nodes:
            if node.id in node_map:
                raise GraphIntegrityError(
                    ERROR_DUPLICATE_NODE.format(node_id=node.id),
                    details={"node_id": node.id},
                )
            node_map[node.id] = node

        edge_map: Dict[str, EdgeSpec] = {}
        for edge in edges:
            if edge.id in edge_map:
                raise GraphIntegrityError(
                    ERROR_DUPLICATE_EDGE.format(edge_id=edge.id),
                    details={"edge_id": edge.id},
                )
            for endpoint in (edge.source, edge.target):
                if endpoint not in node_map:
                    raise GraphIntegrityError(
                        ERROR_EDGE_ENDPOINT_MISSING.format(edge_id=edge.id, node_id=endpoint),
                        details={"edge_id": edge.id, "node_id": endpoint},
                    )
            edge_map[edge.id] = edge

        self._init_parts(node_map, edge_map)

    def _init_parts(self, nodes: Dict[str, NodeSpec], edges: Dict[str, EdgeSpec]) -> None:
        self._nodes = nodes
        self._edges = edges
        self._handle_index: Dict[HandleKey, List[str]] = {}
        self._outgoing: Dict[str, List[str]] = {}
        self._incoming: Dict[str, List[str]] = {}
        for edge in edges.values():
            self._handle_index.setdefault(edge.source_key, []).append(edge.id)
            self._handle_index.setdefault(edge.target_key, []).append(edge.id)
            self._outgoing.setdefault(edge.source, []).append(edge.id)
            self._incoming.setdefault(edge.target, []).append(edge.id)

    @classmethod
    def _from_parts(cls, nodes: Dict[str, NodeSpec], edges: Dict[str, EdgeSpec]) -> GraphModel:
        """Build a snapshot from already-checked parts."""
        graph = cls.__new__(cls)
        graph._init_parts(nodes, edges)
        return graph

    @classmethod
    def from_snapshot(cls, snapshot: Mapping[str, Any]) -> GraphModel:
        """
        Build a graph from the durable ``{nodes, edges}`` form.

        Raises:
            GraphIntegrityError: If an entry is malformed or the parts are inconsistent
        """
        raw_nodes = snapshot.get(KEY_NODES) or []
        raw_edges = snapshot.get(KEY_EDGES) or []
        for key, raw in ((KEY_NODES, raw_nodes), (KEY_EDGES, raw_edges)):
            if not isinstance(raw, list):
                raise GraphIntegrityError(
                    f"Malformed graph snapshot: '{key}' must be a list, got {type(raw).__name__}",
                    details={"field": key},
                )
        try:
            nodes = [NodeSpec.model_validate(n) for n in raw_nodes]
            edges = [EdgeSpec.model_validate(e) for e in raw_edges]
        except ValidationError as e:
            raise GraphIntegrityError(
                f"Malformed graph snapshot: {e.errors()[0]['msg']}",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e
        return cls(nodes, edges)

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def nodes(self) -> Tuple[NodeSpec, ...]:
        return tuple(self._nodes.values())

    @property
    def edges(self) -> Tuple[EdgeSpec, ...]:
        return tuple(self._edges.values())

    @property
    def node_ids(self) -> Tuple[str, ...]:
        return tuple(self._nodes)

    @property
    def edge_ids(self) -> Tuple[str, ...]:
        return tuple(self._edges)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GraphModel):
            return NotImplemented
        return self._nodes == other._nodes and self._edges == other._edges

    def __repr__(self) -> str:
        return f"<GraphModel(nodes={len(self._nodes)}, edges={len(self._edges)})>"

    def get_node(self, node_id: str) -> Optional[NodeSpec]:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> Optional[EdgeSpec]:
        return self._edges.get(edge_id)

    def has_edge(self, edge_id: str) -> bool:
        return edge_id in self._edges

    def nodes_of_kind(self, kind: NodeKind) -> List[NodeSpec]:
        return [n for n in self._nodes.values() if n.kind == kind]

    def outgoing_edges(self, node_id: str) -> List[EdgeSpec]:
        return [self._edges[eid] for eid in self._outgoing.get(node_id, [])]

    def incoming_edges(self, node_id: str) -> List[EdgeSpec]:
        return [self._edges[eid] for eid in self._incoming.get(node_id, [])]

    def edges_at_handle(
        self,
        node_id: str,
        handle: Optional[str],
        direction: HandleDirection,
    ) -> List[EdgeSpec]:
        """All edges using ``(node_id, handle)`` as their ``direction`` end."""
        key = HandleKey(node_id, handle, direction)
        return [self._edges[eid] for eid in self._handle_index.get(key, [])]

    def handle_usage(self) -> Dict[HandleKey, List[str]]:
        """Copy of the handle index, for invariant checks."""
        return {key: list(ids) for key, ids in self._handle_index.items()}

    # =========================================================================
    # Node primitives
    # =========================================================================

    def add_node(self, node: NodeSpec) -> GraphModel:
        """
        Return a snapshot with ``node`` added.

        Raises:
            DuplicateNodeError: If the ID is already taken
        """
        if node.id in self._nodes:
            raise DuplicateNodeError(node.id)
        nodes = dict(self._nodes)
        nodes[node.id] = node
        logger.debug(f"Added {node.kind.value} node '{node.id}'")
        return self._from_parts(nodes, dict(self._edges))

    def remove_node(self, node_id: str) -> GraphModel:
        """Return a snapshot without the node and every edge touching it. Missing IDs are a no-op."""
        if node_id not in self._nodes:
            return self
        nodes = {nid: n for nid, n in self._nodes.items() if nid != node_id}
        edges = {eid: e for eid, e in self._edges.items() if not e.touches(node_id)}
        logger.debug(
            f"Removed node '{node_id}' and {len(self._edges) - len(edges)} attached edges"
        )
        return self._from_parts(nodes, edges)

    def update_node_data(self, node_id: str, **changes: Any) -> GraphModel:
        """
        Return a snapshot with ``changes`` merged into the node's payload.

        Raises:
            NodeNotFoundError: If the node does not exist
            NodeValidationError: If the new payload is invalid
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        nodes = dict(self._nodes)
        nodes[node_id] = node.with_data(**changes)
        return self._from_parts(nodes, dict(self._edges))

    def move_node(self, node_id: str, x: float, y: float) -> GraphModel:
        """Return a snapshot with the node at a new canvas position."""
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(node_id)
        nodes = dict(self._nodes)
        nodes[node_id] = node.moved_to(x, y)
        return self._from_parts(nodes, dict(self._edges))

    # =========================================================================
    # Edge primitives
    # =========================================================================

    def _check_edge(self, edge: EdgeSpec, ignore_edge_id: Optional[str] = None) -> None:
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise InvalidEndpointError(endpoint, edge_id=edge.id)
        for key in (edge.source_key, edge.target_key):
            for occupant in self._handle_index.get(key, []):
                if occupant != ignore_edge_id:
                    raise HandleConflictError(
                        key.node_id, key.handle, key.direction.value, occupant
                    )

    def add_edge(self, edge: EdgeSpec) -> GraphModel:
        """
        Return a snapshot with ``edge`` added.

        Raises:
            GraphIntegrityError: If the edge ID is already taken
            InvalidEndpointError: If an endpoint does not exist
            HandleConflictError: If either handle is already in use
        """
        if edge.id in self._edges:
            raise GraphIntegrityError(
                ERROR_DUPLICATE_EDGE.format(edge_id=edge.id),
                details={"edge_id": edge.id},
            )
        self._check_edge(edge)
        edges = dict(self._edges)
        edges[edge.id] = edge
        logger.debug(f"Added edge '{edge.id}': {edge.source} -> {edge.target}")
        return self._from_parts(dict(self._nodes), edges)

    def remove_edge(self, edge_id: str) -> GraphModel:
        """Return a snapshot without the edge. Missing IDs are a no-op."""
        if edge_id not in self._edges:
            return self
        edges = {eid: e for eid, e in self._edges.items() if eid != edge_id}
        logger.debug(f"Removed edge '{edge_id}'")
        return self._from_parts(dict(self._nodes), edges)

    def remove_edges(self, edge_ids: Iterable[str]) -> GraphModel:
        """Return a snapshot without any of the given edges."""
        doomed = set(edge_ids) & set(self._edges)
        if not doomed:
            return self
        edges = {eid: e for eid, e in self._edges.items() if eid not in doomed}
        return self._from_parts(dict(self._nodes), edges)

    def replace_edge(self, edge_id: str, edge: EdgeSpec) -> GraphModel:
        """
        Return a snapshot where ``edge`` takes the place of ``edge_id``.

        The replacement keeps the original's position in edge order. It may
        reuse the old ID or carry a new one.

        Raises:
            EdgeNotFoundError: If ``edge_id`` does not exist
            GraphIntegrityError: If the new ID belongs to a different edge
            InvalidEndpointError: If an endpoint does not exist
            HandleConflictError: If a handle is used by another edge
        """
        if edge_id not in self._edges:
            raise EdgeNotFoundError(edge_id)
        if edge.id != edge_id and edge.id in self._edges:
            raise GraphIntegrityError(
                ERROR_DUPLICATE_EDGE.format(edge_id=edge.id),
                details={"edge_id": edge.id},
            )
        self._check_edge(edge, ignore_edge_id=edge_id)
        edges: Dict[str, EdgeSpec] = {}
        for eid, existing in self._edges.items():
            if eid == edge_id:
                edges[edge.id] = edge
            else:
                edges[eid] = existing
        logger.debug(f"Replaced edge '{edge_id}' with '{edge.id}': {edge.source} -> {edge.target}")
        return self._from_parts(dict(self._nodes), edges)

    # =========================================================================
    # Snapshot export
    # =========================================================================

    def to_snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Serialize to the durable ``{nodes, edges}`` form."""
        return {
            KEY_NODES: [node.to_dict() for node in self._nodes.values()],
            KEY_EDGES: [edge.to_dict() for edge in self._edges.values()],
        }

    def diff(self, other: GraphModel) -> GraphDiff:
        """Describe what changed going from this snapshot to ``other``."""
        return GraphDiff(
            added_nodes=set(other._nodes) - set(self._nodes),
            removed_nodes=set(self._nodes) - set(other._nodes),
            changed_nodes={
                nid for nid in set(self._nodes) & set(other._nodes)
                if self._nodes[nid] != other._nodes[nid]
            },
            added_edges=set(other._edges) - set(self._edges),
            removed_edges=set(self._edges) - set(other._edges),
            changed_edges={
                eid for eid in set(self._edges) & set(other._edges)
                if self._edges[eid] != other._edges[eid]
            },
        )
