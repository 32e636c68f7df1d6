"""Create and delete operations on the host filesystem."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from dir_navigator_mcp.core.errors import MutationError, MutationErrorKind
from dir_navigator_mcp.utils.path_utils import normalize_path, validate_entry_name

# Настройка логирования
logger = logging.getLogger(__name__)


def _mutation_error_from_os_error(exc: OSError, path: Path, action: str) -> MutationError:
    if isinstance(exc, FileExistsError):
        kind = MutationErrorKind.ALREADY_EXISTS
    elif isinstance(exc, FileNotFoundError):
        kind = MutationErrorKind.NOT_FOUND
    elif isinstance(exc, IsADirectoryError):
        kind = MutationErrorKind.IS_A_DIRECTORY
    elif isinstance(exc, NotADirectoryError):
        kind = MutationErrorKind.NOT_A_DIRECTORY
    else:
        kind = MutationErrorKind.PERMISSION_DENIED
    return MutationError(kind, f"Failed to {action} {path}: {exc.strerror or exc}", path)


class MutationEngine:
    """
    Kind-specific create and delete operations.

    The engine never decides between file and directory deletion on its own:
    ``delete_file`` refuses directories and ``delete_directory`` refuses
    anything else. Nothing is retried.
    """

    def create_file(self, directory: Path, name: str) -> Path:
        """
        Creates an empty file named ``name`` inside ``directory``.

        Raises:
            MutationError: ``INVALID_NAME``, ``ALREADY_EXISTS``, ``NOT_FOUND``
                (directory vanished) or ``PERMISSION_DENIED``.
        """
        target = self._new_entry_path(directory, name)
        try:
            fd = os.open(target, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o666)
        except OSError as e:
            raise _mutation_error_from_os_error(e, target, "create file") from e
        os.close(fd)
        logger.info(f"File created: {target}")
        return target

    def create_directory(self, directory: Path, name: str) -> Path:
        """Creates one directory level named ``name`` inside ``directory``."""
        target = self._new_entry_path(directory, name)
        try:
            os.mkdir(target)
        except OSError as e:
            raise _mutation_error_from_os_error(e, target, "create directory") from e
        logger.info(f"Directory created: {target}")
        return target

    def delete_file(self, path: Path) -> Path:
        """
        Removes a file or a symlink.

        Raises:
            MutationError: ``NOT_FOUND`` if nothing exists at ``path``,
                ``IS_A_DIRECTORY`` if ``path`` is a real directory.
        """
        target = normalize_path(path)
        if not os.path.lexists(target):
            raise MutationError(MutationErrorKind.NOT_FOUND, f"No such file: {target}", target)
        if target.is_dir() and not target.is_symlink():
            raise MutationError(
                MutationErrorKind.IS_A_DIRECTORY,
                f"{target} is a directory; use delete_directory instead.",
                target,
            )
        try:
            os.unlink(target)
        except OSError as e:
            raise _mutation_error_from_os_error(e, target, "delete file") from e
        logger.info(f"File deleted: {target}")
        return target

    def delete_directory(self, path: Path) -> int:
        """
        Recursively deletes a directory, children before parents.

        Children are visited in name order and symlinks are removed without
        being followed. The walk stops at the first entry that cannot be
        removed; everything removed up to that point stays removed.

        Args:
            path: The directory to delete.

        Returns:
            The number of removed entries, the directory itself included.

        Raises:
            MutationError: ``NOT_FOUND``, ``NOT_A_DIRECTORY``, or
                ``PARTIAL_DELETE_FAILURE`` with ``first_failure`` and
                ``deleted_count`` set.
        """
        target = normalize_path(path)
        if not os.path.lexists(target):
            raise MutationError(MutationErrorKind.NOT_FOUND, f"No such directory: {target}", target)
        if target.is_symlink() or not target.is_dir():
            raise MutationError(
                MutationErrorKind.NOT_A_DIRECTORY,
                f"{target} is not a directory; use delete_file instead.",
                target,
            )

        progress = _DeleteProgress()
        try:
            self._remove_tree(target, progress)
        except _DeleteAborted as aborted:
            logger.warning(
                f"Delete of {target} stopped at {aborted.path} after removing {progress.deleted} entries: {aborted.cause}"
            )
            raise MutationError(
                MutationErrorKind.PARTIAL_DELETE_FAILURE,
                f"Failed to delete {aborted.path}: {aborted.cause.strerror or aborted.cause}. "
                f"{progress.deleted} entries were deleted before the failure.",
                target,
                first_failure=aborted.path,
                deleted_count=progress.deleted,
            ) from aborted.cause
        logger.info(f"Directory deleted: {target} ({progress.deleted} entries)")
        return progress.deleted

    def _remove_tree(self, top: Path, progress: "_DeleteProgress") -> None:
        # (directory, remaining children) pairs, deepest last.
        stack = [(top, self._sorted_children(top))]
        while stack:
            directory, children = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                try:
                    os.rmdir(directory)
                except OSError as e:
                    raise _DeleteAborted(directory, e) from e
                progress.deleted += 1
                continue

            child = directory / entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise _DeleteAborted(child, e) from e
            if is_dir:
                stack.append((child, self._sorted_children(child)))
                continue
            try:
                os.unlink(child)
            except OSError as e:
                raise _DeleteAborted(child, e) from e
            progress.deleted += 1

    @staticmethod
    def _sorted_children(directory: Path) -> Iterator[os.DirEntry]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise _DeleteAborted(directory, e) from e
        return iter(entries)

    def _new_entry_path(self, directory: Path, name: str) -> Path:
        validate_entry_name(name)
        target = normalize_path(directory) / name
        if os.path.lexists(target):
            raise MutationError(
                MutationErrorKind.ALREADY_EXISTS, f"{target} already exists.", target
            )
        return target


class _DeleteAborted(Exception):
    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(str(cause))
        self.path = path
        self.cause = cause


@dataclass
class _DeleteProgress:
    deleted: int = 0
