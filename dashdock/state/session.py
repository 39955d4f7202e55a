"""
Session State - Persists and restores the workspace between runs.

The workspace document is written as JSON. Widget payloads go through the
host's serializer/deserializer, exactly as with ``Workspace.serialize_workspace``
and ``Workspace.restore_workspace``; this class only adds the file I/O.
"""
from typing import Any, Dict, Optional
from pathlib import Path
import json
from loguru import logger

from dashdock.core.config import SessionSettings
from dashdock.layout.codec import Deserializer, Serializer
from dashdock.workspace import Workspace


class SessionState:
    """
    Persists and restores UI session state.

    Usage:
        session = SessionState(workspace, serializer, deserializer,
                               settings=config.data.session)

        # On startup
        session.restore()

        # On shutdown
        session.save()
    """

    def __init__(self, workspace: Workspace, serializer: Serializer, deserializer: Deserializer,
                 settings: Optional[SessionSettings] = None, path: Optional[str] = None):
        self._workspace = workspace
        self._serializer = serializer
        self._deserializer = deserializer
        self._settings = settings or SessionSettings()
        self._save_path = Path(path or self._settings.session_file)

        if self._settings.autosave:
            self._workspace.restored.connect(self._on_restored)

    @property
    def save_path(self) -> Path:
        return self._save_path

    def save(self) -> bool:
        """Write the workspace document to disk."""
        document = self._workspace.serialize_workspace(self._serializer)
        try:
            # Encode before truncating the previous session
            text = json.dumps(document, indent=2)

            self._save_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self._save_path, 'w', encoding="utf-8") as f:
                f.write(text)

            logger.info(f"Session saved to {self._save_path} ({len(document['dashboards'])} dashboards)")
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save session: {e}")
            return False

    def load_document(self) -> Optional[Dict[str, Any]]:
        """Read the raw session document, or None if it is missing or unreadable."""
        if not self._save_path.exists():
            logger.info(f"No session to restore at {self._save_path}")
            return None
        try:
            with open(self._save_path, 'r', encoding="utf-8") as f:
                document = json.load(f)
            logger.debug(f"Loaded session document from {self._save_path}")
            return document
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load session: {e}")
            return None

    def restore(self) -> bool:
        """
        Restore the workspace from disk.

        A missing, unreadable or rejected session leaves the workspace as it is.
        """
        document = self.load_document()
        if document is None:
            return False
        return self._workspace.restore_workspace(document, self._deserializer)

    def _on_restored(self, workspace: Workspace) -> None:
        logger.debug("Workspace restored, refreshing saved session")
        self.save()
