"""
Connection Manager

Turns raw "connect these two points" and "move this edge endpoint" gestures
into graph snapshots in which every handle is used by at most one edge as
source and at most one edge as target.

Malformed gestures (unknown node, disallowed self-loop, unknown edge) are
ordinary mis-drags: they leave the graph unchanged instead of raising.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Set, Tuple

from ..enum import HandleDirection
from ..config import ConnectionSettings
from ..graph.model import GraphModel
from ..graph.identifiers import generate_edge_id
from ..spec.edge_models import EdgeSpec
from .gestures import GestureState, begin_reconnect, end_reconnect

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Resolves connection gestures against a ``GraphModel``.

    Usage:
        manager = ConnectionManager()
        graph = manager.connect(graph, "start", None, "step-1", None)

        state = manager.begin_reconnect(GestureState.idle(), "e2")
        graph, state = manager.handle_reconnect(graph, state, "e2", "step-1", None, "step-2", None)
        state = manager.end_reconnect(state)
    """

    def __init__(
        self,
        settings: Optional[ConnectionSettings] = None,
        id_factory: Callable[[], str] = generate_edge_id,
    ):
        self._settings = settings or ConnectionSettings()
        self._id_factory = id_factory

    @property
    def allow_self_loops(self) -> bool:
        return self._settings.allow_self_loops

    # =========================================================================
    # Connection resolution
    # =========================================================================

    def connect(
        self,
        graph: GraphModel,
        source_id: str,
        source_handle: Optional[str],
        target_id: str,
        target_handle: Optional[str],
    ) -> GraphModel:
        """
        Connect ``(source_id, source_handle)`` to ``(target_id, target_handle)``.

        An edge already leaving the source handle is rewired to the new
        target. Failing that, an edge already entering the target handle is
        rewired to the new source. Otherwise a new edge is created. Any other
        edge left on either handle is removed.
        """
        if not self._endpoints_ok(graph, source_id, target_id):
            return graph

        source_conflicts = graph.edges_at_handle(source_id, source_handle, HandleDirection.SOURCE)
        target_conflicts = graph.edges_at_handle(target_id, target_handle, HandleDirection.TARGET)

        if source_conflicts:
            existing = source_conflicts[0]
            edge = existing.rewired(source_id, source_handle, target_id, target_handle)
            logger.debug(f"Rewiring edge '{existing.id}' to target '{target_id}'")
            return self._settle(graph, edge, replacing_id=existing.id)

        if target_conflicts:
            existing = target_conflicts[0]
            edge = existing.rewired(source_id, source_handle, target_id, target_handle)
            logger.debug(f"Rewiring edge '{existing.id}' to source '{source_id}'")
            return self._settle(graph, edge, replacing_id=existing.id)

        edge = EdgeSpec(
            id=self._id_factory(),
            source=source_id,
            target=target_id,
            source_handle=source_handle,
            target_handle=target_handle,
        )
        logger.debug(f"Creating edge '{edge.id}': {source_id} -> {target_id}")
        return self._settle(graph, edge)

    def reconnect(
        self,
        graph: GraphModel,
        edge_id: str,
        new_source_id: str,
        new_source_handle: Optional[str],
        new_target_id: str,
        new_target_handle: Optional[str],
    ) -> GraphModel:
        """
        Move an existing edge's endpoints.

        The edge keeps its ID and is excluded from the conflict search, so
        dropping an endpoint back where it was changes nothing. Other edges
        on the new handles are removed.
        """
        existing = graph.get_edge(edge_id)
        if existing is None:
            logger.debug(f"Ignoring reconnect of unknown edge '{edge_id}'")
            return graph
        if not self._endpoints_ok(graph, new_source_id, new_target_id):
            return graph

        edge = existing.rewired(new_source_id, new_source_handle, new_target_id, new_target_handle)
        if edge == existing and not self._others_on_handles(graph, edge):
            return graph
        logger.debug(f"Reconnecting edge '{edge_id}': {new_source_id} -> {new_target_id}")
        return self._settle(graph, edge, replacing_id=edge_id)

    # =========================================================================
    # Gesture sequencing
    # =========================================================================

    def begin_reconnect(self, state: GestureState, edge_id: Optional[str] = None) -> GestureState:
        return begin_reconnect(state, edge_id)

    def end_reconnect(self, state: GestureState) -> GestureState:
        return end_reconnect(state)

    def handle_connect(
        self,
        graph: GraphModel,
        state: GestureState,
        source_id: str,
        source_handle: Optional[str],
        target_id: str,
        target_handle: Optional[str],
    ) -> Tuple[GraphModel, GestureState]:
        """
        Process a connect signal in the context of the current gesture.

        While a reconnect is in flight the signal belongs to it: it rewires
        the dragged edge when its ID is known and is ignored otherwise.
        """
        if not state.is_reconnecting:
            return self.connect(graph, source_id, source_handle, target_id, target_handle), state
        if state.edge_id is None:
            logger.debug("Ignoring connect signal during reconnect of an unidentified edge")
            return graph, state
        graph = self.reconnect(
            graph, state.edge_id, source_id, source_handle, target_id, target_handle
        )
        return graph, state

    def handle_reconnect(
        self,
        graph: GraphModel,
        state: GestureState,
        edge_id: str,
        new_source_id: str,
        new_source_handle: Optional[str],
        new_target_id: str,
        new_target_handle: Optional[str],
    ) -> Tuple[GraphModel, GestureState]:
        """
        Process the rewire signal of a reconnect gesture.

        The moved edge is remembered only while a reconnect is in flight; a
        stray signal rewires the edge and leaves the gesture state as it was.
        """
        graph = self.reconnect(
            graph, edge_id, new_source_id, new_source_handle, new_target_id, new_target_handle
        )
        if not state.is_reconnecting:
            logger.debug(f"Reconnect signal for '{edge_id}' outside a reconnect gesture")
            return graph, state
        return graph, GestureState.reconnecting(edge_id)

    # =========================================================================
    # Internals
    # =========================================================================

    def _endpoints_ok(self, graph: GraphModel, source_id: str, target_id: str) -> bool:
        for node_id in (source_id, target_id):
            if node_id not in graph:
                logger.debug(f"Ignoring gesture with invalid endpoint '{node_id}'")
                return False
        if source_id == target_id and not self.allow_self_loops:
            logger.debug(f"Ignoring self-loop on '{source_id}'")
            return False
        return True

    def _others_on_handles(self, graph: GraphModel, edge: EdgeSpec) -> Set[str]:
        """IDs of edges other than ``edge`` on its source or target handle."""
        others: Set[str] = set()
        for key in (edge.source_key, edge.target_key):
            for occupant in graph.edges_at_handle(key.node_id, key.handle, key.direction):
                if occupant.id != edge.id:
                    others.add(occupant.id)
        return others

    def _settle(
        self,
        graph: GraphModel,
        edge: EdgeSpec,
        replacing_id: Optional[str] = None,
    ) -> GraphModel:
        """Drop every other edge on the edge's handles, then place it."""
        doomed = self._others_on_handles(graph, edge)
        doomed.discard(replacing_id)
        if doomed:
            logger.debug(f"Removing conflicting edges: {sorted(doomed)}")
        graph = graph.remove_edges(doomed)
        if replacing_id is not None:
            return graph.replace_edge(replacing_id, edge)
        return graph.add_edge(edge)
