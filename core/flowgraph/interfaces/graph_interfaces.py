"""
Flow Graph Interfaces

Defines protocols and abstract base classes for the collaborators the
graph editor core talks to: agent catalogs and workflow storage.

Version: 1.0.0
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ..constants import POPULATE_BY_NAME


# =============================================================================
# AGENT RESOLUTION
# =============================================================================

class AgentInfo(BaseModel):
    """
    Human-readable metadata for an agent reference.

    Attributes:
        agent_id: Opaque agent reference stored in step groups
        name: Display name
        description: Optional description
        path: Optional location of the agent definition
        category: Optional palette category
    """
    agent_id: str = Field(..., alias="agentId", description="Opaque agent reference")
    name: str = Field(..., description="Display name")
    description: Optional[str] = Field(default=None, description="Agent description")
    path: Optional[str] = Field(default=None, description="Agent definition location")
    category: Optional[str] = Field(default=None, description="Palette category")

    model_config = {POPULATE_BY_NAME: True}


@runtime_checkable
class IAgentCatalog(Protocol):
    """
    Protocol for agent directories.

    The core never checks that an agent reference exists; a catalog only
    supplies display metadata when placing agents on the canvas.
    """

    def list_agents(self) -> List[AgentInfo]:
        """List the agents available for placement."""
        ...

    def get_agent(self, agent_id: str) -> Optional[AgentInfo]:
        """
        Look up one agent.

        Args:
            agent_id: Agent reference

        Returns:
            Agent metadata, or None if the catalog does not know it
        """
        ...


# =============================================================================
# STORAGE INTERFACES
# =============================================================================

class IWorkflowStorage(ABC):
    """
    Abstract base class for workflow document storage backends.

    Documents are the compiled payload, optionally extended with the raw
    ``nodes``/``edges`` snapshot.
    """

    @abstractmethod
    def save_workflow(self, name: str, document: Dict[str, Any]) -> str:
        """
        Save a workflow document.

        Args:
            name: Workflow name
            document: Serialized workflow document

        Returns:
            Location the document was written to
        """
        ...

    @abstractmethod
    def load_workflow(self, name: str) -> Dict[str, Any]:
        """
        Load a workflow document.

        Args:
            name: Workflow name

        Raises:
            WorkflowNotFoundError: If no document is stored under the name
        """
        ...

    @abstractmethod
    def delete_workflow(self, name: str) -> bool:
        """
        Delete a workflow document.

        Returns:
            True if deleted, False if not found
        """
        ...

    @abstractmethod
    def list_workflows(self) -> List[str]:
        """List stored workflow names."""
        ...
