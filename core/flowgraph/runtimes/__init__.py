"""
Flow Graph Runtimes

Connection handling, validation, compilation, reconstruction, loading,
local storage and the editing session.
"""

from .gestures import GestureState, begin_reconnect, end_reconnect
from .connection_manager import ConnectionManager
from .validator import GraphValidator
from .compiler import GraphCompiler
from .reconstructor import GraphReconstructor
from .loader import LoadedWorkflow, WorkflowLoader
from .local import LocalWorkflowStorage
from .session import EditorSession

__all__ = [
    # Gestures
    "GestureState",
    "begin_reconnect",
    "end_reconnect",
    "ConnectionManager",
    # Compile / reconstruct
    "GraphValidator",
    "GraphCompiler",
    "GraphReconstructor",
    # Documents
    "LoadedWorkflow",
    "WorkflowLoader",
    "LocalWorkflowStorage",
    # Session
    "EditorSession",
]
