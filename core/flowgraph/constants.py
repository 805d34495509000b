"""
Flow Graph Module Constants

Defines string constants for the flow graph module to maintain consistency
and enable easy refactoring.

Version: 1.0.0
"""

# =============================================================================
# NODE KINDS
# =============================================================================

NODE_KIND_START = "start"
NODE_KIND_END = "end"
NODE_KIND_AGENT = "agent"
NODE_KIND_STEP_GROUP = "step-group"

# Older saved snapshots spell the step group kind in camel case
LEGACY_NODE_KIND_ALIASES = {
    "stepGroup": NODE_KIND_STEP_GROUP,
}

# =============================================================================
# STEP MODES
# =============================================================================

STEP_MODE_SEQUENTIAL = "sequential"
STEP_MODE_PARALLEL = "parallel"

# =============================================================================
# HANDLE DIRECTIONS
# =============================================================================

HANDLE_DIRECTION_SOURCE = "source"
HANDLE_DIRECTION_TARGET = "target"

# =============================================================================
# GESTURE STATES
# =============================================================================

GESTURE_STATE_IDLE = "idle"
GESTURE_STATE_RECONNECTING = "reconnecting"

# =============================================================================
# ID PREFIXES
# =============================================================================

EDGE_ID_PREFIX = "edge"
RECONSTRUCTED_START_ID = "start"
RECONSTRUCTED_END_ID = "end"
RECONSTRUCTED_STEP_ID = "step-{index}"
RECONSTRUCTED_EDGE_ID = "e-{source}-{target}"

# =============================================================================
# DOCUMENT KEYS
# =============================================================================

KEY_WORKFLOW_NAME = "workflowName"
KEY_WORKFLOW_PURPOSE = "workflowPurpose"
KEY_WORKFLOW_MODEL = "workflowModel"
KEY_WORKFLOW_ARGUMENT_HINT = "workflowArgumentHint"
KEY_WORKFLOW_STEPS = "workflowSteps"
KEY_NODES = "nodes"
KEY_EDGES = "edges"

# =============================================================================
# STORAGE
# =============================================================================

DEFAULT_WORKFLOWS_DIR = "workflows"
FILE_EXT_JSON = ".json"

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_ALLOW_SELF_LOOPS = "FLOWGRAPH_ALLOW_SELF_LOOPS"
ENV_LAYOUT_X = "FLOWGRAPH_LAYOUT_X"
ENV_LAYOUT_START_Y = "FLOWGRAPH_LAYOUT_START_Y"
ENV_LAYOUT_FIRST_STEP_Y = "FLOWGRAPH_LAYOUT_FIRST_STEP_Y"
ENV_LAYOUT_SPACING_Y = "FLOWGRAPH_LAYOUT_SPACING_Y"
ENV_WORKFLOWS_PATH = "WORKFLOWS_PATH"
ENV_CLAUDE_ROOT_PATH = "CLAUDE_ROOT_PATH"
ENV_LOG_LEVEL = "FLOWGRAPH_LOG_LEVEL"

# =============================================================================
# MODEL CONFIG KEYS
# =============================================================================

POPULATE_BY_NAME = "populate_by_name"
FROZEN = "frozen"

# =============================================================================
# FIELD LIMITS
# =============================================================================

MAX_WORKFLOW_NAME_LENGTH = 50
MAX_WORKFLOW_PURPOSE_LENGTH = 5000
MAX_ARGUMENT_HINT_LENGTH = 500
MAX_STEP_TITLE_LENGTH = 100
MAX_STEP_PURPOSE_LENGTH = 500
WORKFLOW_NAME_PATTERN = r"^[a-zA-Z0-9_\s-]+$"

# =============================================================================
# ERROR MESSAGES
# =============================================================================

ERROR_NODE_NOT_FOUND = "Node '{node_id}' not found in graph"
ERROR_EDGE_NOT_FOUND = "Edge '{edge_id}' not found in graph"
ERROR_DUPLICATE_NODE = "Node '{node_id}' already exists in graph"
ERROR_DUPLICATE_EDGE = "Edge '{edge_id}' already exists in graph"
ERROR_EDGE_ENDPOINT_MISSING = "Edge '{edge_id}' references missing node '{node_id}'"
ERROR_HANDLE_OCCUPIED = (
    "Handle {handle} on node '{node_id}' is already used as {direction} by edge '{edge_id}'"
)
ERROR_NO_START_NODE = "Start node is required"
ERROR_MULTIPLE_START_NODES = "Only one start node is allowed (found {count})"
ERROR_NO_END_NODE = "End node is required"
ERROR_MULTIPLE_END_NODES = "Only one end node is allowed (found {count})"
ERROR_END_UNREACHABLE = "End node is not reachable from Start node"
ERROR_DISCONNECTED_NODES = "{count} disconnected nodes found: {nodes}"
ERROR_DEAD_END_NODES = "{count} nodes have no path to End: {nodes}"
ERROR_CYCLE_DETECTED = "Cycle detected in workflow graph at node '{node_id}'"
ERROR_DUPLICATE_HANDLE_USE = (
    "Handle {handle} on node '{node_id}' is used as {direction} by {count} edges: {edges}"
)
ERROR_BRANCHING_NODE = (
    "Node '{node_id}' has {count} {direction} connections; a workflow must be a single chain"
)
ERROR_UNASSIGNED_AGENT = (
    "Agent node '{node_id}' ({agent}) is not organized into a step group"
)
ERROR_STRUCTURAL_INVALID = "Invalid workflow: {errors}"
ERROR_RECONSTRUCTION_FAILED = "Invalid workflow document: {errors}"
ERROR_MISSING_WORKFLOW_NAME = "missing workflowName"
ERROR_MISSING_WORKFLOW_STEPS = "missing or invalid workflowSteps"
