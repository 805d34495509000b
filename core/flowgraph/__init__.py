"""
Flow Graph Module

Graph editor core for agent workflows: an in-memory node/edge graph edited
through connection gestures, compiled into a linear list of workflow steps,
and rebuilt from such a list when no graph snapshot was saved.

Version: 1.0.0

Components:
- GraphModel: Immutable node/edge snapshot with handle-indexed lookups
- ConnectionManager: Resolves connect/reconnect gestures, one edge per handle
- GraphCompiler: Validates a graph and emits ordered workflow steps
- GraphReconstructor: Rebuilds a vertical chain graph from workflow steps
- EditorSession: Owns the snapshot and gesture state for one editing session

Usage:
    from core.flowgraph import (
        EditorSession, NodeBuilder, LocalWorkflowStorage, StepMode,
    )

    session = EditorSession()
    session.add_node(NodeBuilder.start().with_id("start").build())
    session.add_node(
        NodeBuilder.step_group("Review")
            .with_id("review")
            .with_mode(StepMode.PARALLEL)
            .with_agents(["code-reviewer", "security-reviewer"])
            .build()
    )
    session.add_node(NodeBuilder.end().with_id("end").build())
    session.connect("start", None, "review", None)
    session.connect("review", None, "end", None)

    definition = session.compile({"workflowName": "review", "workflowPurpose": "PR review"})
    session.save(LocalWorkflowStorage())
"""

# =============================================================================
# ENUMS
# =============================================================================

from .enum import (
    NodeKind,
    StepMode,
    HandleDirection,
    GesturePhase,
)

# =============================================================================
# SPEC MODELS
# =============================================================================

from .spec import (
    # Node models
    Position,
    TerminalNodeData,
    AgentNodeData,
    StepGroupNodeData,
    NodeSpec,
    # Edge models
    HandleKey,
    EdgeSpec,
    # Workflow models
    WorkflowMetadata,
    WorkflowStep,
    WorkflowDefinition,
    WorkflowDocument,
    ValidationResult,
)

# =============================================================================
# INTERFACES
# =============================================================================

from .interfaces import (
    AgentInfo,
    IAgentCatalog,
    IWorkflowStorage,
)

# =============================================================================
# GRAPH
# =============================================================================

from .graph import (
    GraphModel,
    GraphDiff,
    generate_id,
    generate_edge_id,
)

# =============================================================================
# RUNTIMES
# =============================================================================

from .runtimes import (
    GestureState,
    ConnectionManager,
    GraphValidator,
    GraphCompiler,
    GraphReconstructor,
    LoadedWorkflow,
    WorkflowLoader,
    LocalWorkflowStorage,
    EditorSession,
)

# =============================================================================
# BUILDERS
# =============================================================================

from .builders import (
    NodeBuilder,
    GraphBuilder,
)

# =============================================================================
# CONFIGURATION
# =============================================================================

from .config import (
    ConnectionSettings,
    LayoutSettings,
    StorageSettings,
    LoggingSettings,
    FlowGraphSettings,
    configure_logging,
    get_settings,
    reload_settings,
)

# =============================================================================
# EXCEPTIONS
# =============================================================================

from .exceptions import (
    FlowGraphError,
    GraphIntegrityError,
    DuplicateNodeError,
    NodeNotFoundError,
    EdgeNotFoundError,
    InvalidEndpointError,
    HandleConflictError,
    NodeValidationError,
    GraphValidationError,
    StructuralInvalidError,
    UnassignedAgentError,
    ReconstructionError,
    WorkflowStorageError,
    WorkflowNotFoundError,
)

__all__ = [
    # Enums
    "NodeKind",
    "StepMode",
    "HandleDirection",
    "GesturePhase",
    # Spec models
    "Position",
    "TerminalNodeData",
    "AgentNodeData",
    "StepGroupNodeData",
    "NodeSpec",
    "HandleKey",
    "EdgeSpec",
    "WorkflowMetadata",
    "WorkflowStep",
    "WorkflowDefinition",
    "WorkflowDocument",
    "ValidationResult",
    # Interfaces
    "AgentInfo",
    "IAgentCatalog",
    "IWorkflowStorage",
    # Graph
    "GraphModel",
    "GraphDiff",
    "generate_id",
    "generate_edge_id",
    # Runtimes
    "GestureState",
    "ConnectionManager",
    "GraphValidator",
    "GraphCompiler",
    "GraphReconstructor",
    "LoadedWorkflow",
    "WorkflowLoader",
    "LocalWorkflowStorage",
    "EditorSession",
    # Builders
    "NodeBuilder",
    "GraphBuilder",
    # Configuration
    "ConnectionSettings",
    "LayoutSettings",
    "StorageSettings",
    "LoggingSettings",
    "FlowGraphSettings",
    "configure_logging",
    "get_settings",
    "reload_settings",
    # Exceptions
    "FlowGraphError",
    "GraphIntegrityError",
    "DuplicateNodeError",
    "NodeNotFoundError",
    "EdgeNotFoundError",
    "InvalidEndpointError",
    "HandleConflictError",
    "NodeValidationError",
    "GraphValidationError",
    "StructuralInvalidError",
    "UnassignedAgentError",
    "ReconstructionError",
    "WorkflowStorageError",
    "WorkflowNotFoundError",
]
