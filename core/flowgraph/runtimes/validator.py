"""
Graph Validator

Checks a snapshot against the invariants a graph must satisfy before it
can be compiled. Every violation is collected; nothing is raised here.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Set

from ..enum import NodeKind
from ..constants import (
    ERROR_NO_START_NODE,
    ERROR_MULTIPLE_START_NODES,
    ERROR_NO_END_NODE,
    ERROR_MULTIPLE_END_NODES,
    ERROR_END_UNREACHABLE,
    ERROR_DISCONNECTED_NODES,
    ERROR_DEAD_END_NODES,
    ERROR_CYCLE_DETECTED,
    ERROR_DUPLICATE_HANDLE_USE,
    ERROR_BRANCHING_NODE,
    ERROR_UNASSIGNED_AGENT,
)
from ..graph.model import GraphModel
from ..spec.node_models import NodeSpec
from ..spec.workflow_models import ValidationResult

logger = logging.getLogger(__name__)


class GraphValidator:
    """
    Validates a graph for compilation.

    Structural rules:
    - exactly one start node and one end node
    - no handle used by more than one edge in the same direction
    - end reachable from start
    - every step group reachable from start and able to reach end
    - no cycles
    - a single chain: no node with more than one outgoing or incoming edge

    Agent nodes are reported separately: every executable unit must be
    organized into a step group, so any agent node on the canvas blocks
    compilation.
    """

    def validate(self, graph: GraphModel) -> ValidationResult:
        errors: List[str] = []

        start = self._single_terminal(graph, NodeKind.START, errors)
        end = self._single_terminal(graph, NodeKind.END, errors)

        errors.extend(self._handle_violations(graph))

        disconnected: List[str] = []
        dead_ends: List[str] = []
        if start is not None and end is not None:
            forward = self._reachable(graph, start.id, reverse=False)
            backward = self._reachable(graph, end.id, reverse=True)
            if end.id not in forward:
                errors.append(ERROR_END_UNREACHABLE)

            checked = [n for n in graph.nodes if n.kind == NodeKind.STEP_GROUP]
            disconnected = [n.id for n in checked if n.id not in forward]
            dead_ends = [n.id for n in checked if n.id in forward and n.id not in backward]
            if disconnected:
                errors.append(ERROR_DISCONNECTED_NODES.format(
                    count=len(disconnected), nodes=", ".join(disconnected)
                ))
            if dead_ends:
                errors.append(ERROR_DEAD_END_NODES.format(
                    count=len(dead_ends), nodes=", ".join(dead_ends)
                ))

        cycle_at = self._find_cycle(graph)
        if cycle_at is not None:
            errors.append(ERROR_CYCLE_DETECTED.format(node_id=cycle_at))

        errors.extend(self._branch_violations(graph))

        agents = graph.nodes_of_kind(NodeKind.AGENT)
        unassigned = [
            ERROR_UNASSIGNED_AGENT.format(node_id=n.id, agent=n.data.agent_name)
            for n in agents
        ]

        result = ValidationResult(
            structural_errors=errors,
            unassigned_agents=unassigned,
            disconnected_nodes=disconnected,
            dead_end_nodes=dead_ends,
            unassigned_agent_ids=[n.id for n in agents],
        )
        if not result.is_valid:
            logger.warning(f"Graph validation failed: {result.errors}")
        return result

    # =========================================================================
    # Individual checks
    # =========================================================================

    def _single_terminal(
        self,
        graph: GraphModel,
        kind: NodeKind,
        errors: List[str],
    ) -> Optional[NodeSpec]:
        found = graph.nodes_of_kind(kind)
        if kind == NodeKind.START:
            missing, multiple = ERROR_NO_START_NODE, ERROR_MULTIPLE_START_NODES
        else:
            missing, multiple = ERROR_NO_END_NODE, ERROR_MULTIPLE_END_NODES
        if not found:
            errors.append(missing)
            return None
        if len(found) > 1:
            errors.append(multiple.format(count=len(found)))
            return None
        return found[0]

    def _handle_violations(self, graph: GraphModel) -> List[str]:
        return [
            ERROR_DUPLICATE_HANDLE_USE.format(
                handle=repr(key.handle),
                node_id=key.node_id,
                direction=key.direction.value,
                count=len(edge_ids),
                edges=", ".join(edge_ids),
            )
            for key, edge_ids in graph.handle_usage().items()
            if len(edge_ids) > 1
        ]

    def _branch_violations(self, graph: GraphModel) -> List[str]:
        errors: List[str] = []
        for node in graph.nodes:
            outgoing = len(graph.outgoing_edges(node.id))
            incoming = len(graph.incoming_edges(node.id))
            if outgoing > 1:
                errors.append(ERROR_BRANCHING_NODE.format(
                    node_id=node.id, count=outgoing, direction="outgoing"
                ))
            if incoming > 1:
                errors.append(ERROR_BRANCHING_NODE.format(
                    node_id=node.id, count=incoming, direction="incoming"
                ))
        return errors

    def _reachable(self, graph: GraphModel, origin: str, reverse: bool) -> Set[str]:
        """Breadth-first search along (or against) edge direction."""
        seen: Set[str] = set()
        queue = [origin]
        while queue:
            current = queue.pop(0)
            if current in seen:
                continue
            seen.add(current)
            if reverse:
                neighbours = [e.source for e in graph.incoming_edges(current)]
            else:
                neighbours = [e.target for e in graph.outgoing_edges(current)]
            queue.extend(n for n in neighbours if n not in seen)
        return seen

    def _find_cycle(self, graph: GraphModel) -> Optional[str]:
        """Return a node on some cycle, or None when the graph is acyclic."""
        visiting, done = 1, 2
        marks: Dict[str, int] = {}

        for root in graph.node_ids:
            if root in marks:
                continue
            stack = [(root, iter(graph.outgoing_edges(root)))]
            marks[root] = visiting
            while stack:
                node_id, children = stack[-1]
                edge = next(children, None)
                if edge is None:
                    marks[node_id] = done
                    stack.pop()
                    continue
                state = marks.get(edge.target)
                if state == visiting:
                    return edge.target
                if state is None:
                    marks[edge.target] = visiting
                    stack.append((edge.target, iter(graph.outgoing_edges(edge.target))))
        return None
