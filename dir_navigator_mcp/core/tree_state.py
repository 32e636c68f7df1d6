import logging
from pathlib import Path
from typing import Callable

from dir_navigator_mcp.core.builder import list_directory
from dir_navigator_mcp.models.tree import DirectoryNode
from dir_navigator_mcp.utils.path_utils import normalize_path

logger = logging.getLogger(__name__)

Lister = Callable[[Path], DirectoryNode]


class TreeState:
    """
    Holds the current location and the snapshot of its children.

    The snapshot is replaced as a whole on every rebuild. A rebuild that fails
    leaves both the location and the previous snapshot untouched.
    """

    def __init__(self, initial: Path, lister: Lister = list_directory) -> None:
        self._lister = lister
        location = normalize_path(initial)
        # Raises if the initial location cannot be listed.
        self._snapshot = self._lister(location)
        self._current = location

    def current(self) -> Path:
        return self._current

    def snapshot(self) -> DirectoryNode:
        return self._snapshot

    def set_current(self, path: Path) -> DirectoryNode:
        """
        Moves to ``path`` and rebuilds the snapshot.

        Raises:
            NavigatorIOError: if ``path`` cannot be listed. The current location
                keeps its previous value.
        """
        target = normalize_path(path)
        previous = self._current
        self._current = target
        try:
            self._snapshot = self._lister(target)
        except Exception:
            self._current = previous
            raise
        logger.debug(f"Current location: {previous} -> {target}")
        return self._snapshot

    def invalidate(self) -> DirectoryNode:
        """Rebuilds the snapshot for the current location."""
        self._snapshot = self._lister(self._current)
        return self._snapshot
