"""
Editor Session

Owns the graph snapshot and the connection gesture state for one editing
session, and exposes the operations the canvas UI calls.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from ..config import FlowGraphSettings, get_settings
from ..exceptions import FlowGraphError
from ..graph.model import GraphModel
from ..spec.node_models import NodeSpec
from ..spec.workflow_models import ValidationResult, WorkflowDefinition, WorkflowMetadata
from ..interfaces.graph_interfaces import IAgentCatalog, IWorkflowStorage
from ..builders.node_builder import NodeBuilder
from .connection_manager import ConnectionManager
from .compiler import GraphCompiler
from .gestures import GestureState
from .loader import LoadedWorkflow, WorkflowLoader
from .reconstructor import GraphReconstructor
from .validator import GraphValidator

logger = logging.getLogger(__name__)

MetadataInput = Union[WorkflowMetadata, Mapping[str, Any]]


class EditorSession:
    """
    Single-writer editing session.

    Every mutating call replaces the current snapshot and returns the new
    one, so the UI can re-render from the return value. Gestures are
    processed one at a time in call order.

    Usage:
        session = EditorSession()
        session.add_node(NodeBuilder.start().with_id("start").build())
        session.add_node(NodeBuilder.step_group("Review").with_id("s1").build())
        session.add_node(NodeBuilder.end().with_id("end").build())
        session.connect("start", None, "s1", None)
        session.connect("s1", None, "end", None)
        definition = session.compile({"workflowName": "review"})
    """

    def __init__(
        self,
        graph: Optional[GraphModel] = None,
        settings: Optional[FlowGraphSettings] = None,
        connection_manager: Optional[ConnectionManager] = None,
        catalog: Optional[IAgentCatalog] = None,
    ):
        settings = settings or get_settings()
        validator = GraphValidator()
        self._graph = graph or GraphModel()
        self._state = GestureState.idle()
        self._metadata: Optional[WorkflowMetadata] = None
        self._catalog = catalog
        self._connections = connection_manager or ConnectionManager(settings.connection)
        self._validator = validator
        self._compiler = GraphCompiler(validator)
        self._loader = WorkflowLoader(
            compiler=self._compiler,
            reconstructor=GraphReconstructor(settings.layout),
        )

    @property
    def graph(self) -> GraphModel:
        return self._graph

    @property
    def gesture_state(self) -> GestureState:
        return self._state

    @property
    def metadata(self) -> Optional[WorkflowMetadata]:
        """Metadata of the last loaded or compiled workflow."""
        return self._metadata

    # =========================================================================
    # Connection gestures
    # =========================================================================

    def connect(
        self,
        source_id: str,
        source_handle: Optional[str],
        target_id: str,
        target_handle: Optional[str],
    ) -> GraphModel:
        """Connect signal. Part of the current reconnect gesture if one is in flight."""
        self._graph, self._state = self._connections.handle_connect(
            self._graph, self._state, source_id, source_handle, target_id, target_handle
        )
        return self._graph

    def reconnect_start(self, edge_id: Optional[str] = None) -> GestureState:
        """An edge endpoint started being dragged."""
        self._state = self._connections.begin_reconnect(self._state, edge_id)
        return self._state

    def reconnect(
        self,
        edge_id: str,
        new_source_id: str,
        new_source_handle: Optional[str],
        new_target_id: str,
        new_target_handle: Optional[str],
    ) -> GraphModel:
        """The dragged endpoint was dropped on a handle."""
        self._graph, self._state = self._connections.handle_reconnect(
            self._graph, self._state, edge_id,
            new_source_id, new_source_handle, new_target_id, new_target_handle,
        )
        return self._graph

    def reconnect_end(self) -> GestureState:
        """The drag finished, whether or not it landed on a handle."""
        self._state = self._connections.end_reconnect(self._state)
        return self._state

    # =========================================================================
    # Direct edits
    # =========================================================================

    def add_node(self, node: NodeSpec) -> GraphModel:
        self._graph = self._graph.add_node(node)
        return self._graph

    def add_agent(self, agent_id: str, x: float = 0.0, y: float = 0.0) -> GraphModel:
        """Drop an agent from the palette, using catalog metadata when available."""
        info = self._catalog.get_agent(agent_id) if self._catalog is not None else None
        if info is not None:
            builder = NodeBuilder.agent_from(info)
        else:
            builder = NodeBuilder.agent(agent_id)
        return self.add_node(builder.at(x, y).build())

    def remove_node(self, node_id: str) -> GraphModel:
        self._graph = self._graph.remove_node(node_id)
        return self._graph

    def update_node_data(self, node_id: str, **changes: Any) -> GraphModel:
        self._graph = self._graph.update_node_data(node_id, **changes)
        return self._graph

    def move_node(self, node_id: str, x: float, y: float) -> GraphModel:
        self._graph = self._graph.move_node(node_id, x, y)
        return self._graph

    def remove_edge(self, edge_id: str) -> GraphModel:
        self._graph = self._graph.remove_edge(edge_id)
        return self._graph

    # =========================================================================
    # Compile / load / export
    # =========================================================================

    def validate(self) -> ValidationResult:
        return self._validator.validate(self._graph)

    def compile(self, metadata: Optional[MetadataInput] = None) -> WorkflowDefinition:
        """
        Compile the current graph.

        Raises:
            StructuralInvalidError: If the graph is structurally invalid
            UnassignedAgentError: If agent nodes sit outside any step group
        """
        definition = self._compiler.compile(self._graph, self._resolve_metadata(metadata))
        self._metadata = definition.metadata
        return definition

    def load(self, document: Union[WorkflowDefinition, Mapping[str, Any]]) -> GraphModel:
        """
        Replace the session's graph with a loaded document.

        On failure the current graph is left untouched.
        """
        loaded: LoadedWorkflow = self._loader.load(document)
        self._graph = loaded.graph
        self._metadata = loaded.metadata
        self._state = GestureState.idle()
        return self._graph

    def export(
        self,
        metadata: Optional[MetadataInput] = None,
        include_snapshot: bool = True,
    ) -> Dict[str, Any]:
        """Compile and return the document to persist."""
        metadata = self._resolve_metadata(metadata)
        document = self._loader.dump(metadata, self._graph, include_snapshot=include_snapshot)
        self._metadata = metadata
        return document

    def save(self, storage: IWorkflowStorage, metadata: Optional[MetadataInput] = None) -> str:
        """Export and write to ``storage``; returns the storage location."""
        document = self.export(metadata)
        return storage.save_workflow(self._metadata.workflow_name, document)

    def open(self, storage: IWorkflowStorage, name: str) -> GraphModel:
        """Read a document from ``storage`` and load it."""
        return self.load(storage.load_workflow(name))

    def _resolve_metadata(self, metadata: Optional[MetadataInput]) -> WorkflowMetadata:
        if metadata is None:
            if self._metadata is None:
                raise FlowGraphError("No workflow metadata provided", error_code="MISSING_METADATA")
            return self._metadata
        if isinstance(metadata, WorkflowMetadata):
            return metadata
        return WorkflowMetadata.model_validate(metadata)
