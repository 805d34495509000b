"""
Connection Gesture State

Two-state machine describing whether an edge endpoint is currently being
dragged. The state is a value passed through the gesture-handling calls,
never an ambient flag.

Version: 1.0.0
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..enum import GesturePhase
from ..constants import FROZEN


class GestureState(BaseModel):
    """
    Either ``IDLE`` or ``RECONNECTING(edge_id)``.

    ``edge_id`` may be unknown when the canvas only reports that a
    reconnect started.
    """
    phase: GesturePhase = Field(default=GesturePhase.IDLE)
    edge_id: Optional[str] = Field(default=None)

    model_config = {FROZEN: True}

    @classmethod
    def idle(cls) -> GestureState:
        return cls()

    @classmethod
    def reconnecting(cls, edge_id: Optional[str] = None) -> GestureState:
        return cls(phase=GesturePhase.RECONNECTING, edge_id=edge_id)

    @property
    def is_reconnecting(self) -> bool:
        return self.phase == GesturePhase.RECONNECTING


def begin_reconnect(state: GestureState, edge_id: Optional[str] = None) -> GestureState:
    """Enter ``RECONNECTING``. A second start replaces the first."""
    return GestureState.reconnecting(edge_id)


def end_reconnect(state: GestureState) -> GestureState:
    """Return to ``IDLE`` from any state, including after an aborted drag."""
    return GestureState.idle()
