"""
Flow Graph Specification Models

This module contains the data models for canvas nodes, edges and the
compiled workflow form.
"""

from .node_models import (
    Position,
    TerminalNodeData,
    AgentNodeData,
    StepGroupNodeData,
    NodeData,
    NODE_DATA_MODELS,
    NodeSpec,
)
from .edge_models import (
    HandleKey,
    EdgeSpec,
)
from .workflow_models import (
    WorkflowMetadata,
    WorkflowStep,
    WorkflowDefinition,
    WorkflowDocument,
    ValidationResult,
)

__all__ = [
    # Node models
    "Position",
    "TerminalNodeData",
    "AgentNodeData",
    "StepGroupNodeData",
    "NodeData",
    "NODE_DATA_MODELS",
    "NodeSpec",
    # Edge models
    "HandleKey",
    "EdgeSpec",
    # Workflow models
    "WorkflowMetadata",
    "WorkflowStep",
    "WorkflowDefinition",
    "WorkflowDocument",
    "ValidationResult",
]
