"""
Node Builder

Fluent builder for creating canvas nodes.

Version: 1.0.0
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..spec.node_models import NodeSpec, Position
from ..enum import NodeKind, StepMode
from ..defaults import (
    DEFAULT_STEP_MODE,
    DEFAULT_START_LABEL,
    DEFAULT_END_LABEL,
    DEFAULT_POSITION_X,
    DEFAULT_POSITION_Y,
)
from ..graph.identifiers import generate_id
from ..interfaces.graph_interfaces import AgentInfo


class NodeBuilder:
    """
    Fluent builder for creating NodeSpec instances.

    Usage:
        # Terminals
        start = NodeBuilder.start().with_id("start").build()
        end = NodeBuilder.end().at(100, 650).build()

        # A step group holding two agents
        step = (NodeBuilder.step_group("Review")
            .with_id("step-1")
            .with_purpose("Review the diff")
            .with_mode(StepMode.PARALLEL)
            .with_agents(["code-reviewer", "security-reviewer"])
            .at(100, 250)
            .build())

        # A loose agent from the catalog
        agent = NodeBuilder.agent_from(catalog.get_agent("code-reviewer")).build()
    """

    def __init__(self, kind: NodeKind):
        """Initialize the builder for one node kind."""
        self._kind = kind
        self._id: Optional[str] = None
        self._x: float = DEFAULT_POSITION_X
        self._y: float = DEFAULT_POSITION_Y
        self._data: Dict[str, Any] = {}

    # =========================================================================
    # Entry points
    # =========================================================================

    @classmethod
    def start(cls, label: str = DEFAULT_START_LABEL) -> NodeBuilder:
        return cls(NodeKind.START).with_label(label)

    @classmethod
    def end(cls, label: str = DEFAULT_END_LABEL) -> NodeBuilder:
        return cls(NodeKind.END).with_label(label)

    @classmethod
    def agent(cls, agent_name: str, label: Optional[str] = None) -> NodeBuilder:
        builder = cls(NodeKind.AGENT)
        builder._data["agent_name"] = agent_name
        return builder.with_label(label or agent_name)

    @classmethod
    def agent_from(cls, info: AgentInfo) -> NodeBuilder:
        """Start an agent node from catalog metadata."""
        builder = cls.agent(info.agent_id, label=info.name)
        builder._data["agent_path"] = info.path
        builder._data["category"] = info.category
        return builder.with_description(info.description)

    @classmethod
    def step_group(cls, title: str) -> NodeBuilder:
        builder = cls(NodeKind.STEP_GROUP)
        builder._data.update({
            "title": title,
            "mode": StepMode(DEFAULT_STEP_MODE),
            "agents": [],
        })
        return builder

    # =========================================================================
    # Common settings
    # =========================================================================

    def with_id(self, node_id: str) -> NodeBuilder:
        """Set the node ID."""
        self._id = node_id
        return self

    def at(self, x: float, y: float) -> NodeBuilder:
        """Set the canvas position."""
        self._x = x
        self._y = y
        return self

    def with_label(self, label: str) -> NodeBuilder:
        self._data["label"] = label
        return self

    def with_description(self, description: Optional[str]) -> NodeBuilder:
        self._data["description"] = description
        return self

    # =========================================================================
    # Step group settings
    # =========================================================================

    def with_mode(self, mode: StepMode) -> NodeBuilder:
        self._data["mode"] = mode
        return self

    def with_purpose(self, purpose: Optional[str]) -> NodeBuilder:
        self._data["purpose"] = purpose
        return self

    def with_agents(self, agents: List[str]) -> NodeBuilder:
        """Replace the ordered agent list."""
        self._data["agents"] = list(agents)
        return self

    def add_agent(self, agent_id: str) -> NodeBuilder:
        """Append one agent reference."""
        self._data.setdefault("agents", []).append(agent_id)
        return self

    def build(self) -> NodeSpec:
        """
        Build the NodeSpec.

        A missing ID is generated as ``<kind>-<12 hex chars>``.

        Raises:
            pydantic.ValidationError: If the payload is invalid
        """
        return NodeSpec(
            id=self._id or generate_id(self._kind.value),
            kind=self._kind,
            position=Position(x=self._x, y=self._y),
            data={k: v for k, v in self._data.items() if v is not None},
        )
