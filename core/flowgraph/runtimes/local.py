"""
Local Workflow Storage

File-based storage for workflow documents. Each workflow is stored as one
JSON file named after the workflow.

Version: 1.0.0
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from utils.serialization import SerializationError, load_from_file, save_to_file

from ..config import StorageSettings
from ..defaults import DEFAULT_FILE_EXTENSION
from ..exceptions import WorkflowNotFoundError, WorkflowStorageError
from ..interfaces.graph_interfaces import IWorkflowStorage

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9]")


class LocalWorkflowStorage(IWorkflowStorage):
    """
    Local file-based storage for workflow documents.

    Layout: ``{storage_path}/{sanitized name}.json`` where every character
    other than a letter or digit is replaced by ``-``.

    Attributes:
        storage_path: Directory holding the documents
        file_extension: File extension to use
    """

    def __init__(
        self,
        storage_path: Optional[str] = None,
        file_extension: str = DEFAULT_FILE_EXTENSION,
    ):
        """
        Initialize local storage.

        Args:
            storage_path: Directory for documents; resolved from the
                environment when omitted
            file_extension: File extension
        """
        if storage_path is None:
            storage_path = StorageSettings.from_env().workflows_path
        self._storage_path = Path(storage_path)
        self._file_extension = file_extension

    @property
    def storage_path(self) -> Path:
        return self._storage_path

    def _sanitize_name(self, name: str) -> str:
        """Sanitize a workflow name for use as filename."""
        return _UNSAFE_FILENAME_CHARS.sub("-", name)

    def path_for(self, name: str) -> Path:
        """Get file path for a workflow."""
        return self._storage_path / f"{self._sanitize_name(name)}{self._file_extension}"

    # =========================================================================
    # WORKFLOW OPERATIONS
    # =========================================================================

    def save_workflow(self, name: str, document: Dict[str, Any]) -> str:
        """Save a workflow document to file and return its path."""
        path = self.path_for(name)
        try:
            save_to_file(document, path)
        except (OSError, SerializationError) as e:
            raise WorkflowStorageError(
                f"Failed to save workflow '{name}': {e}", path=str(path)
            ) from e
        logger.info(f"Saved workflow '{name}' to {path}")
        return str(path)

    def load_workflow(self, name: str) -> Dict[str, Any]:
        """Load a workflow document from file."""
        path = self.path_for(name)
        if not path.exists():
            raise WorkflowNotFoundError(name, path=str(path))
        try:
            document = load_from_file(path)
        except (OSError, SerializationError) as e:
            raise WorkflowStorageError(
                f"Failed to read workflow '{name}': {e}", path=str(path)
            ) from e
        logger.info(f"Loaded workflow '{name}' from {path}")
        return document

    def delete_workflow(self, name: str) -> bool:
        """Delete a workflow file."""
        path = self.path_for(name)
        if not path.exists():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise WorkflowStorageError(
                f"Failed to delete workflow '{name}': {e}", path=str(path)
            ) from e
        logger.info(f"Deleted workflow '{name}'")
        return True

    def list_workflows(self) -> List[str]:
        """List stored workflow file stems, sorted."""
        if not self._storage_path.is_dir():
            return []
        return sorted(f.stem for f in self._storage_path.glob(f"*{self._file_extension}"))
