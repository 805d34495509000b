"""
Flow Graph Exceptions Module.

This module defines all custom exceptions used throughout the flow graph subsystem.
"""

from typing import Any, Dict, List, Optional

from .constants import (
    ERROR_NODE_NOT_FOUND,
    ERROR_EDGE_NOT_FOUND,
    ERROR_DUPLICATE_NODE,
    ERROR_HANDLE_OCCUPIED,
    ERROR_STRUCTURAL_INVALID,
    ERROR_RECONSTRUCTION_FAILED,
)


class FlowGraphError(Exception):
    """Base exception for all flow graph errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        parts = [self.message]
        if self.error_code:
            parts.insert(0, f"[{self.error_code}]")
        return " ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


# =============================================================================
# GRAPH MUTATION ERRORS
# =============================================================================

class GraphIntegrityError(FlowGraphError):
    """Raised when a snapshot cannot be represented as a graph at all."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            error_code="GRAPH_INTEGRITY_ERROR",
            details=details,
        )


class DuplicateNodeError(FlowGraphError):
    """Raised when adding a node whose id is already taken."""

    def __init__(self, node_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            ERROR_DUPLICATE_NODE.format(node_id=node_id),
            error_code="DUPLICATE_NODE",
            details=details,
        )
        self.node_id = node_id


class NodeNotFoundError(FlowGraphError):
    """Raised when a node cannot be found in a graph."""

    def __init__(self, node_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            ERROR_NODE_NOT_FOUND.format(node_id=node_id),
            error_code="NODE_NOT_FOUND",
            details=details,
        )
        self.node_id = node_id


class EdgeNotFoundError(FlowGraphError):
    """Raised when an edge cannot be found in a graph."""

    def __init__(self, edge_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            ERROR_EDGE_NOT_FOUND.format(edge_id=edge_id),
            error_code="EDGE_NOT_FOUND",
            details=details,
        )
        self.edge_id = edge_id


class InvalidEndpointError(FlowGraphError):
    """Raised when an edge or gesture references a node id not present in the graph."""

    def __init__(
        self,
        node_id: str,
        edge_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details["node_id"] = node_id
        if edge_id:
            all_details["edge_id"] = edge_id
        super().__init__(
            f"Invalid endpoint: node '{node_id}' does not exist",
            error_code="INVALID_ENDPOINT",
            details=all_details,
        )
        self.node_id = node_id
        self.edge_id = edge_id


class HandleConflictError(FlowGraphError):
    """Raised when an edge would occupy a handle that another edge already uses."""

    def __init__(
        self,
        node_id: str,
        handle: Optional[str],
        direction: str,
        edge_id: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details.update({
            "node_id": node_id,
            "handle": handle,
            "direction": direction,
            "edge_id": edge_id,
        })
        super().__init__(
            ERROR_HANDLE_OCCUPIED.format(
                handle=repr(handle),
                node_id=node_id,
                direction=direction,
                edge_id=edge_id,
            ),
            error_code="HANDLE_CONFLICT",
            details=all_details,
        )
        self.node_id = node_id
        self.handle = handle
        self.direction = direction
        self.edge_id = edge_id


class NodeValidationError(FlowGraphError):
    """Raised when node data fails validation."""

    def __init__(
        self,
        message: str,
        node_id: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details["node_id"] = node_id
        super().__init__(
            message,
            error_code="NODE_VALIDATION_ERROR",
            details=all_details,
        )
        self.node_id = node_id


# =============================================================================
# COMPILATION ERRORS
# =============================================================================

class GraphValidationError(FlowGraphError):
    """
    Raised when a graph cannot be compiled.

    Carries the complete list of violated invariants so the caller can
    show all of them at once.
    """

    def __init__(
        self,
        message: str,
        violations: Optional[List[str]] = None,
        error_code: str = "GRAPH_VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details["violations"] = violations or []
        super().__init__(
            message,
            error_code=error_code,
            details=all_details,
        )
        self.violations = violations or []


class StructuralInvalidError(GraphValidationError):
    """Raised when start/end are missing or duplicated, or the graph has orphans, branches or cycles."""

    def __init__(
        self,
        violations: List[str],
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            ERROR_STRUCTURAL_INVALID.format(errors=", ".join(violations)),
            violations=violations,
            error_code="STRUCTURAL_INVALID",
            details=details,
        )


class UnassignedAgentError(GraphValidationError):
    """Raised when agent nodes exist outside any step group at compile time."""

    def __init__(
        self,
        violations: List[str],
        agent_node_ids: List[str],
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details["agent_node_ids"] = agent_node_ids
        super().__init__(
            ERROR_STRUCTURAL_INVALID.format(errors=", ".join(violations)),
            violations=violations,
            error_code="UNASSIGNED_AGENT",
            details=all_details,
        )
        self.agent_node_ids = agent_node_ids


class ReconstructionError(FlowGraphError):
    """Raised when a step list or saved document is malformed."""

    def __init__(
        self,
        violations: List[str],
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        all_details["violations"] = violations
        super().__init__(
            ERROR_RECONSTRUCTION_FAILED.format(errors="; ".join(violations)),
            error_code="RECONSTRUCTION_ERROR",
            details=all_details,
        )
        self.violations = violations


# =============================================================================
# STORAGE ERRORS
# =============================================================================

class WorkflowStorageError(FlowGraphError):
    """Raised when a workflow document cannot be written or read."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        all_details = details or {}
        if path:
            all_details["path"] = path
        super().__init__(
            message,
            error_code="WORKFLOW_STORAGE_ERROR",
            details=all_details,
        )
        self.path = path


class WorkflowNotFoundError(WorkflowStorageError):
    """Raised when a saved workflow cannot be found."""

    def __init__(self, name: str, path: Optional[str] = None):
        super().__init__(f"Workflow not found: {name}", path=path)
        self.error_code = "WORKFLOW_NOT_FOUND"
        self.name = name
