"""
Flow Graph Module Enumerations

Version: 1.0.0
"""

from enum import Enum

from .constants import (
    # Node kinds
    NODE_KIND_START,
    NODE_KIND_END,
    NODE_KIND_AGENT,
    NODE_KIND_STEP_GROUP,
    LEGACY_NODE_KIND_ALIASES,
    # Step modes
    STEP_MODE_SEQUENTIAL,
    STEP_MODE_PARALLEL,
    # Handle directions
    HANDLE_DIRECTION_SOURCE,
    HANDLE_DIRECTION_TARGET,
    # Gesture states
    GESTURE_STATE_IDLE,
    GESTURE_STATE_RECONNECTING,
)


class NodeKind(str, Enum):
    """
    Kinds of nodes on the workflow canvas.

    START: Entry point of the workflow (exactly one)
    END: Exit point of the workflow (exactly one)
    AGENT: A single agent dropped from the palette, not yet part of a step
    STEP_GROUP: A compiled unit of execution holding an ordered agent list
    """
    START = NODE_KIND_START
    END = NODE_KIND_END
    AGENT = NODE_KIND_AGENT
    STEP_GROUP = NODE_KIND_STEP_GROUP

    @classmethod
    def _missing_(cls, value):
        alias = LEGACY_NODE_KIND_ALIASES.get(value)
        if alias is not None:
            return cls(alias)
        return None

    @property
    def is_terminal(self) -> bool:
        return self in (NodeKind.START, NodeKind.END)


class StepMode(str, Enum):
    """
    Execution mode hint for a step.

    The value is passed through to the external executor unchanged.
    """
    SEQUENTIAL = STEP_MODE_SEQUENTIAL
    PARALLEL = STEP_MODE_PARALLEL


class HandleDirection(str, Enum):
    """Which end of an edge a handle is used as."""
    SOURCE = HANDLE_DIRECTION_SOURCE
    TARGET = HANDLE_DIRECTION_TARGET


class GesturePhase(str, Enum):
    """
    Phase of the connection gesture state machine.

    IDLE: No gesture in flight; connect signals create or rewire edges
    RECONNECTING: An existing edge endpoint is being dragged
    """
    IDLE = GESTURE_STATE_IDLE
    RECONNECTING = GESTURE_STATE_RECONNECTING
