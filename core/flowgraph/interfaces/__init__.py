"""
Flow Graph Interfaces

This module defines the interfaces of the graph editor's external collaborators.
"""

from .graph_interfaces import (
    # Agent resolution
    AgentInfo,
    IAgentCatalog,
    # Storage
    IWorkflowStorage,
)

__all__ = [
    # Agent resolution
    "AgentInfo",
    "IAgentCatalog",
    # Storage
    "IWorkflowStorage",
]
