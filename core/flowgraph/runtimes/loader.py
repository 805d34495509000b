"""
Workflow Loader

Import and export of saved workflow documents. A document is the compiled
payload, optionally extended with the raw ``nodes``/``edges`` snapshot the
payload was compiled from.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from ..constants import (
    KEY_WORKFLOW_NAME,
    KEY_WORKFLOW_STEPS,
    KEY_NODES,
    KEY_EDGES,
    ERROR_MISSING_WORKFLOW_NAME,
    ERROR_MISSING_WORKFLOW_STEPS,
)
from ..exceptions import GraphIntegrityError, ReconstructionError
from ..graph.model import GraphModel
from ..spec.workflow_models import WorkflowDefinition, WorkflowMetadata
from .compiler import GraphCompiler
from .reconstructor import GraphReconstructor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedWorkflow:
    """
    Result of loading a workflow document.

    Attributes:
        metadata: Workflow metadata from the document
        graph: Graph to edit
        reconstructed: True when the graph was rebuilt from the step list
            rather than taken from a saved snapshot
    """
    metadata: WorkflowMetadata
    graph: GraphModel
    reconstructed: bool


class WorkflowLoader:
    """
    Loads documents into graphs and dumps graphs into documents.

    Usage:
        loader = WorkflowLoader()
        loaded = loader.load(document)
        document = loader.dump(loaded.metadata, loaded.graph)
    """

    def __init__(
        self,
        compiler: Optional[GraphCompiler] = None,
        reconstructor: Optional[GraphReconstructor] = None,
    ):
        self._compiler = compiler or GraphCompiler()
        self._reconstructor = reconstructor or GraphReconstructor()

    def load(self, document: Union[WorkflowDefinition, Mapping[str, Any]]) -> LoadedWorkflow:
        """
        Load a document.

        The raw snapshot is used as-is when both ``nodes`` and ``edges`` are
        present, preserving layout and scratch nodes the step list cannot
        express. Otherwise the graph is rebuilt from ``workflowSteps``.

        Raises:
            ReconstructionError: If required fields are missing or the document is malformed
        """
        if isinstance(document, WorkflowDefinition):
            document = document.to_payload()
        if not isinstance(document, Mapping):
            raise ReconstructionError([f"expected a mapping, got {type(document).__name__}"])

        missing = []
        if not document.get(KEY_WORKFLOW_NAME):
            missing.append(ERROR_MISSING_WORKFLOW_NAME)
        if document.get(KEY_WORKFLOW_STEPS) is None:
            missing.append(ERROR_MISSING_WORKFLOW_STEPS)
        if missing:
            raise ReconstructionError(missing)

        payload = {k: v for k, v in document.items() if k not in (KEY_NODES, KEY_EDGES)}
        definition = self._reconstructor.parse(payload)

        if document.get(KEY_NODES) is not None and document.get(KEY_EDGES) is not None:
            try:
                graph = GraphModel.from_snapshot(document)
            except GraphIntegrityError as e:
                raise ReconstructionError([e.message]) from e
            logger.info(
                f"Loaded workflow '{definition.workflow_name}' from snapshot "
                f"({len(graph.nodes)} nodes, {len(graph.edges)} edges)"
            )
            return LoadedWorkflow(definition.metadata, graph, reconstructed=False)

        graph = self._reconstructor.from_steps(definition.workflow_steps)
        logger.info(
            f"Reconstructed workflow '{definition.workflow_name}' "
            f"from {len(definition.workflow_steps)} steps"
        )
        return LoadedWorkflow(definition.metadata, graph, reconstructed=True)

    def dump(
        self,
        metadata: Union[WorkflowMetadata, Mapping[str, Any]],
        graph: GraphModel,
        include_snapshot: bool = True,
    ) -> Dict[str, Any]:
        """
        Compile the graph and return the document to persist.

        Raises:
            StructuralInvalidError: If the graph is structurally invalid
            UnassignedAgentError: If agent nodes sit outside any step group
        """
        document = self._compiler.compile_payload(graph, metadata)
        if include_snapshot:
            document.update(graph.to_snapshot())
        return document
