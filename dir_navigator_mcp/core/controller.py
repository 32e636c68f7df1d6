"""Navigation controller: the single entry point for a browsing session."""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from threading import Lock

from dir_navigator_mcp.core.builder import list_directory
from dir_navigator_mcp.core.errors import (
    ConfigError,
    ConfigErrorKind,
    IOErrorKind,
    MutationError,
    MutationErrorKind,
    NavigatorIOError,
)
from dir_navigator_mcp.core.history import NavigationHistory
from dir_navigator_mcp.core.mutations import MutationEngine
from dir_navigator_mcp.core.tree_state import TreeState
from dir_navigator_mcp.models.results import (
    AtRoot,
    BackResult,
    Created,
    Deleted,
    DeletedCount,
    DeleteResult,
    EnteredDirectory,
    FileToView,
    NewDirectory,
    NoHistory,
    OpenResult,
    UpResult,
)
from dir_navigator_mcp.models.tree import DirectoryNode
from dir_navigator_mcp.utils.path_utils import (
    is_valid_entry_name,
    is_within,
    is_within_root,
    normalize_path,
    resolve_target,
)

logger = logging.getLogger(__name__)


def validate_root(root: str | Path) -> Path:
    """
    Validates the configured root directory.

    Raises:
        ConfigError: ``ROOT_NOT_FOUND`` if ``root`` is missing or not a directory.
    """
    path = normalize_path(root)
    if not path.is_dir():
        raise ConfigError(
            ConfigErrorKind.ROOT_NOT_FOUND,
            f"Root directory '{root}' does not exist or is not a directory.",
            path,
        )
    return path


class NavigationController:
    """
    Orchestrates listing, history and mutations for one session.

    Every public method holds the session lock for its whole duration, so a
    listing, the optional mutation and the state update are observed together.
    """

    def __init__(self, root: str | Path, engine: MutationEngine | None = None) -> None:
        self._root = validate_root(root)
        self._lock = Lock()
        self._history = NavigationHistory()
        self._engine = engine or MutationEngine()
        try:
            self._state = TreeState(self._root)
        except NavigatorIOError as e:
            raise ConfigError(ConfigErrorKind.ROOT_NOT_FOUND, str(e), self._root) from e
        logger.info(f"Navigation session started at {self._root}")

    @property
    def root(self) -> Path:
        return self._root

    def pwd(self) -> Path:
        with self._lock:
            return self._state.current()

    def snapshot(self) -> DirectoryNode:
        with self._lock:
            return self._state.snapshot()

    def history(self) -> list[Path]:
        with self._lock:
            return self._history.entries()

    def is_at_root(self) -> bool:
        with self._lock:
            return self._state.current() == self._root and self._history.is_empty()

    def list_directory(self, path: str | Path | None = None) -> DirectoryNode:
        """
        Lists ``path`` without moving there.

        Relative paths are taken from the current location; the listed
        directory must be the root or lie below it.
        """
        with self._lock:
            if path is None or path == "":
                return list_directory(self._state.current())
            target = normalize_path(self._state.current() / path)
            if not is_within(target, self._root) or not is_within_root(target, self._root):
                raise NavigatorIOError(
                    IOErrorKind.PERMISSION_DENIED,
                    f"'{path}' is outside the navigable root {self._root}.",
                    target,
                )
            return list_directory(target)

    def open(self, name: str) -> OpenResult:
        """
        Opens an immediate child of the current location.

        Directories are entered and the previous location is pushed to the
        history. Files cause no state change; the caller decides how to view
        them.

        Raises:
            NavigatorIOError: ``NOT_FOUND`` if ``name`` is not a child of the
                current location, ``PERMISSION_DENIED`` if it is a symlink
                leading outside the root, or any error from listing the new
                directory.
        """
        with self._lock:
            current = self._state.current()
            if not isinstance(name, str) or not is_valid_entry_name(name):
                raise NavigatorIOError(
                    IOErrorKind.NOT_FOUND, f"'{name}' is not an entry of {current}.", current
                )
            target = current / name
            if not os.path.lexists(target):
                raise NavigatorIOError(IOErrorKind.NOT_FOUND, f"NotFound: {target}", target)
            if not is_within_root(target, self._root):
                raise NavigatorIOError(
                    IOErrorKind.PERMISSION_DENIED,
                    f"'{name}' points outside the navigable root {self._root}.",
                    target,
                )

            if not target.is_dir():
                logger.info(f"Open requested for file {target}")
                return FileToView(file_to_view=target)

            self._state.set_current(target)
            self._history.push(current)
            logger.info(f"Entered directory {target}")
            return EnteredDirectory(entered_directory=target)

    def back(self) -> BackResult:
        """
        Returns to the most recently left directory.

        If that directory can no longer be listed the entry is discarded along
        with any other vanished entries, the current location is unchanged and
        the error is raised.
        """
        with self._lock:
            previous = self._history.pop()
            if previous is None:
                logger.info("No previous directory")
                return NoHistory()
            try:
                self._state.set_current(previous)
            except NavigatorIOError:
                self._history.prune(Path.is_dir, self._state.current())
                raise
            logger.info(f"Went back to {previous}")
            return NewDirectory(new_directory=previous)

    def up(self) -> UpResult:
        """Moves to the parent of the current location unless already at the root."""
        with self._lock:
            current = self._state.current()
            if current == self._root:
                return AtRoot()
            self._state.set_current(current.parent)
            self._history.push(current)
            return NewDirectory(new_directory=current.parent)

    def refresh(self) -> DirectoryNode:
        with self._lock:
            return self._refresh()

    def create_file(self, name: str) -> Created:
        with self._lock, self._leaving_vanished_location():
            created = self._engine.create_file(self._state.current(), name)
            self._refresh()
            return Created(created=created)

    def create_directory(self, name: str) -> Created:
        with self._lock, self._leaving_vanished_location():
            created = self._engine.create_directory(self._state.current(), name)
            self._refresh()
            return Created(created=created)

    def delete_file(self, path: str | Path) -> Deleted:
        with self._lock, self._leaving_vanished_location():
            target = resolve_target(self._root, self._state.current(), path)
            return self._delete_file(target)

    def delete_directory(self, path: str | Path) -> DeletedCount:
        with self._lock, self._leaving_vanished_location():
            target = resolve_target(self._root, self._state.current(), path)
            return self._delete_directory(target)

    def delete(self, path: str | Path) -> DeleteResult:
        """
        Deletes ``path``, routing to ``delete_file`` or ``delete_directory``.

        Symlinks are always deleted as files.
        """
        with self._lock, self._leaving_vanished_location():
            target = resolve_target(self._root, self._state.current(), path)
            if not os.path.lexists(target):
                raise MutationError(MutationErrorKind.NOT_FOUND, f"No such entry: {target}", target)
            if target.is_dir() and not target.is_symlink():
                return self._delete_directory(target)
            return self._delete_file(target)

    @contextmanager
    def _leaving_vanished_location(self):
        """
        Re-raises mutation errors, first relocating the session if the
        current location no longer exists.
        """
        try:
            yield
        except MutationError:
            if not self._state.current().is_dir():
                self._refresh()
            raise

    def _delete_file(self, target: Path) -> Deleted:
        deleted = self._engine.delete_file(target)
        self._refresh()
        return Deleted(deleted=deleted)

    def _delete_directory(self, target: Path) -> DeletedCount:
        try:
            count = self._engine.delete_directory(target)
        except MutationError as e:
            if e.kind is MutationErrorKind.PARTIAL_DELETE_FAILURE:
                # Part of the tree is gone; the snapshot must show that.
                self._refresh()
            raise
        self._refresh()
        return DeletedCount(deleted_count=count)

    def _refresh(self) -> DirectoryNode:
        try:
            return self._state.invalidate()
        except NavigatorIOError as e:
            if e.kind not in (IOErrorKind.NOT_FOUND, IOErrorKind.NOT_A_DIRECTORY):
                raise
            return self._relocate(e)

    def _relocate(self, error: NavigatorIOError) -> DirectoryNode:
        """Moves to the nearest existing ancestor after the current location vanished."""
        current = self._state.current()
        candidate = current.parent
        while is_within(candidate, self._root):
            if candidate.is_dir():
                snapshot = self._state.set_current(candidate)
                self._history.prune(Path.is_dir, candidate)
                logger.warning(f"{current} no longer exists; moved to {candidate}")
                return snapshot
            if candidate == self._root:
                break
            candidate = candidate.parent
        raise error
