import logging
from pathlib import Path
from threading import Lock

from dir_navigator_mcp.core.controller import NavigationController, validate_root

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages navigation sessions for all callers."""

    def __init__(self, root: str | Path) -> None:
        # Fails with ConfigError before any session exists.
        self._root = validate_root(root)
        # Simple dict as an in-process session storage.
        # Sessions are never persisted across restarts.
        self._storage: dict[str, NavigationController] = {}
        self._lock = Lock()

    @property
    def root(self) -> Path:
        return self._root

    def get_session(self, session_id: str = "default") -> NavigationController:
        """Returns or creates the navigation session for a given id."""
        session = self._storage.get(session_id)
        if session is None:
            with self._lock:
                session = self._storage.get(session_id)
                if session is None:
                    logger.info(f"Creating navigation session '{session_id}' at {self._root}")
                    session = NavigationController(self._root)
                    self._storage[session_id] = session
        return session

    def close(self, session_id: str) -> bool:
        """Drops a session. Returns False if it did not exist."""
        with self._lock:
            return self._storage.pop(session_id, None) is not None

    def session_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._storage)
