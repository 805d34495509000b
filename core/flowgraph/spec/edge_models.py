"""
Edge Specification Models

Defines the directed, handle-scoped connections between canvas nodes.

Version: 1.0.0
"""

from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from pydantic import BaseModel, Field

from ..enum import HandleDirection
from ..constants import FROZEN, POPULATE_BY_NAME


class HandleKey(NamedTuple):
    """
    Identifies one single-slot connection point.

    ``handle`` of ``None`` means the node's only handle.
    """
    node_id: str
    handle: Optional[str]
    direction: HandleDirection


class EdgeSpec(BaseModel):
    """
    A directed edge from ``source`` to ``target``.

    Attributes:
        id: Unique edge identifier
        source: Source node ID
        target: Target node ID
        source_handle: Handle on the source node (serialized as ``sourceHandle``)
        target_handle: Handle on the target node (serialized as ``targetHandle``)
        edge_type: Optional rendering hint kept for layout persistence
    """
    id: str = Field(..., min_length=1, description="Unique edge identifier")
    source: str = Field(..., description="Source node ID")
    target: str = Field(..., description="Target node ID")
    source_handle: Optional[str] = Field(default=None, alias="sourceHandle", description="Source handle")
    target_handle: Optional[str] = Field(default=None, alias="targetHandle", description="Target handle")
    edge_type: Optional[str] = Field(default=None, alias="type", description="Rendering hint")

    model_config = {FROZEN: True, POPULATE_BY_NAME: True}

    @property
    def source_key(self) -> HandleKey:
        return HandleKey(self.source, self.source_handle, HandleDirection.SOURCE)

    @property
    def target_key(self) -> HandleKey:
        return HandleKey(self.target, self.target_handle, HandleDirection.TARGET)

    def touches(self, node_id: str) -> bool:
        """Whether either endpoint is ``node_id``."""
        return self.source == node_id or self.target == node_id

    def rewired(
        self,
        source: str,
        source_handle: Optional[str],
        target: str,
        target_handle: Optional[str],
    ) -> EdgeSpec:
        """Return a copy with new endpoints and the same id."""
        return self.model_copy(update={
            "source": source,
            "source_handle": source_handle,
            "target": target,
            "target_handle": target_handle,
        })

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the durable snapshot form."""
        data = self.model_dump(by_alias=True, mode="json")
        if data.get("type") is None:
            data.pop("type", None)
        return data
