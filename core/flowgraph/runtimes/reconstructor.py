"""
Graph Reconstructor

Inverse of the compiler: rebuilds a canvas graph from a workflow
definition when no graph snapshot was saved with it.

Version: 1.0.0
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..enum import NodeKind
from ..config import LayoutSettings
from ..constants import (
    RECONSTRUCTED_START_ID,
    RECONSTRUCTED_END_ID,
    RECONSTRUCTED_STEP_ID,
    RECONSTRUCTED_EDGE_ID,
)
from ..defaults import DEFAULT_START_LABEL, DEFAULT_END_LABEL
from ..exceptions import ReconstructionError
from ..graph.model import GraphModel
from ..spec.node_models import NodeSpec, Position, StepGroupNodeData, TerminalNodeData
from ..spec.edge_models import EdgeSpec
from ..spec.workflow_models import WorkflowDefinition, WorkflowStep

logger = logging.getLogger(__name__)


def format_validation_errors(error: ValidationError) -> List[str]:
    """One ``<field path>: <message>`` line per pydantic error."""
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


class GraphReconstructor:
    """
    Builds ``start -> step-1 -> ... -> step-n -> end`` from a step list.

    Nodes are laid out in a single column. An empty step list yields a
    start and an end node with no edge between them; such a graph does not
    compile until a step is added, which is expected.

    Usage:
        graph = GraphReconstructor().reconstruct(definition)
    """

    def __init__(self, layout: Optional[LayoutSettings] = None):
        self._layout = layout or LayoutSettings()

    def reconstruct(
        self,
        source: Union[WorkflowDefinition, Mapping[str, Any]],
    ) -> GraphModel:
        """
        Rebuild a graph from a definition or its serialized form.

        Raises:
            ReconstructionError: If the input is malformed or missing required fields
        """
        definition = self.parse(source)
        return self.from_steps(definition.workflow_steps)

    def parse(self, source: Union[WorkflowDefinition, Mapping[str, Any]]) -> WorkflowDefinition:
        """Validate raw input as a workflow definition."""
        if isinstance(source, WorkflowDefinition):
            return source
        if not isinstance(source, Mapping):
            raise ReconstructionError([f"expected a mapping, got {type(source).__name__}"])
        try:
            return WorkflowDefinition.model_validate(dict(source))
        except ValidationError as e:
            raise ReconstructionError(format_validation_errors(e)) from e

    def from_steps(self, steps: List[WorkflowStep]) -> GraphModel:
        """Rebuild the chain for an already validated step list."""
        layout = self._layout
        nodes: List[NodeSpec] = [
            NodeSpec(
                id=RECONSTRUCTED_START_ID,
                kind=NodeKind.START,
                position=Position(x=layout.x, y=layout.start_y),
                data=TerminalNodeData(label=DEFAULT_START_LABEL),
            )
        ]

        y = layout.first_step_y
        for index, step in enumerate(steps, start=1):
            nodes.append(NodeSpec(
                id=RECONSTRUCTED_STEP_ID.format(index=index),
                kind=NodeKind.STEP_GROUP,
                position=Position(x=layout.x, y=y),
                data=StepGroupNodeData(
                    title=step.title,
                    mode=step.mode,
                    purpose=step.purpose,
                    agents=list(step.agents),
                    label=step.title,
                ),
            ))
            y += layout.spacing_y

        nodes.append(NodeSpec(
            id=RECONSTRUCTED_END_ID,
            kind=NodeKind.END,
            position=Position(x=layout.x, y=y),
            data=TerminalNodeData(label=DEFAULT_END_LABEL),
        ))

        edges: List[EdgeSpec] = []
        if steps:
            chain = [node.id for node in nodes]
            for source, target in zip(chain, chain[1:]):
                edges.append(EdgeSpec(
                    id=RECONSTRUCTED_EDGE_ID.format(source=source, target=target),
                    source=source,
                    target=target,
                ))

        logger.debug(f"Reconstructed graph with {len(steps)} steps")
        return GraphModel(nodes, edges)
