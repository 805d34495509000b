"""
Graph Compiler

Turns a valid graph snapshot into the linear workflow definition consumed
by persistence and external executors.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Set, Union

from utils.serialization import to_json

from ..enum import NodeKind
from ..exceptions import StructuralInvalidError, UnassignedAgentError
from ..graph.model import GraphModel
from ..spec.node_models import NodeSpec
from ..spec.workflow_models import WorkflowDefinition, WorkflowMetadata, WorkflowStep
from .validator import GraphValidator

logger = logging.getLogger(__name__)


class GraphCompiler:
    """
    Compiles ``start -> step group -> ... -> end`` chains into workflow steps.

    Compilation never partially succeeds: the graph is validated first and
    any violation aborts with the complete list of problems.

    Usage:
        compiler = GraphCompiler()
        definition = compiler.compile(graph, WorkflowMetadata(workflow_name="review"))
        payload = definition.to_payload()
    """

    def __init__(self, validator: Optional[GraphValidator] = None):
        self._validator = validator or GraphValidator()

    def compile(
        self,
        graph: GraphModel,
        metadata: Union[WorkflowMetadata, Mapping[str, Any]],
    ) -> WorkflowDefinition:
        """
        Compile the graph.

        Raises:
            StructuralInvalidError: Missing/duplicate terminals, orphans, branches or cycles
            UnassignedAgentError: Agent nodes outside any step group
        """
        if not isinstance(metadata, WorkflowMetadata):
            metadata = WorkflowMetadata.model_validate(metadata)

        result = self._validator.validate(graph)
        if result.structural_errors:
            raise StructuralInvalidError(result.errors)
        if result.unassigned_agents:
            raise UnassignedAgentError(result.errors, result.unassigned_agent_ids)

        steps = [self._to_step(node) for node in self._walk(graph)]
        definition = WorkflowDefinition(
            **metadata.model_dump(include=set(WorkflowMetadata.model_fields)),
            workflow_steps=steps,
        )
        logger.info(f"Compiled workflow '{metadata.workflow_name}' into {len(steps)} steps")
        return definition

    def compile_payload(
        self,
        graph: GraphModel,
        metadata: Union[WorkflowMetadata, Mapping[str, Any]],
    ) -> Dict[str, Any]:
        """Compile and return the durable camelCase structure."""
        return self.compile(graph, metadata).to_payload()

    def compile_json(
        self,
        graph: GraphModel,
        metadata: Union[WorkflowMetadata, Mapping[str, Any]],
    ) -> str:
        """Compile and return indented JSON."""
        return to_json(self.compile_payload(graph, metadata))

    def _walk(self, graph: GraphModel) -> Iterator[NodeSpec]:
        """Yield step groups in chain order from start to end."""
        starts = graph.nodes_of_kind(NodeKind.START)
        node: Optional[NodeSpec] = starts[0] if starts else None
        visited: Set[str] = set()
        while node is not None and not node.is_end and node.id not in visited:
            visited.add(node.id)
            if node.is_step_group:
                yield node
            outgoing = graph.outgoing_edges(node.id)
            node = graph.get_node(outgoing[0].target) if outgoing else None

    def _to_step(self, node: NodeSpec) -> WorkflowStep:
        data = node.data
        return WorkflowStep(
            title=data.title,
            mode=data.mode,
            purpose=data.purpose,
            agents=list(data.agents),
        )
