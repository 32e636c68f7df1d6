"""One-level directory listing used to build snapshots."""

import logging
import os
from pathlib import Path

from dir_navigator_mcp.core.errors import io_error_from_os_error
from dir_navigator_mcp.models.tree import DegradedEntry, DirectoryNode, Entry, EntryKind
from dir_navigator_mcp.utils.path_utils import normalize_path

logger = logging.getLogger(__name__)


def _classify(entry: os.DirEntry) -> tuple[EntryKind, bool]:
    # Follows symlinks so a link to a directory can be opened.
    is_symlink = entry.is_symlink()
    if entry.is_dir():
        return EntryKind.DIRECTORY, is_symlink
    if is_symlink:
        # A dangling link has no target to stat; report it as a file so it
        # can still be deleted.
        try:
            entry.stat()
        except FileNotFoundError:
            return EntryKind.FILE, True
    else:
        # Surface unreadable entries (EACCES, EIO) instead of guessing a kind.
        entry.stat(follow_symlinks=False)
    return EntryKind.FILE, is_symlink


def list_directory(path: str | Path) -> DirectoryNode:
    """
    Lists the immediate children of a directory.

    Children are sorted by name. A child whose kind cannot be determined is
    reported in ``DirectoryNode.degraded`` and does not abort the listing.

    Args:
        path: The directory to list.

    Returns:
        A new DirectoryNode snapshot.

    Raises:
        NavigatorIOError: ``NOT_FOUND``, ``NOT_A_DIRECTORY`` or
            ``PERMISSION_DENIED`` if the directory itself cannot be read.
    """
    directory = normalize_path(path)

    children: list[Entry] = []
    degraded: list[DegradedEntry] = []
    try:
        with os.scandir(directory) as entries:
            for dir_entry in entries:
                child_path = directory / dir_entry.name
                try:
                    kind, is_symlink = _classify(dir_entry)
                except OSError as e:
                    logger.warning(f"Could not classify {child_path}: {e}")
                    degraded.append(
                        DegradedEntry(name=dir_entry.name, path=child_path, reason=str(e))
                    )
                    continue
                children.append(
                    Entry(name=dir_entry.name, kind=kind, path=child_path, is_symlink=is_symlink)
                )
    except OSError as e:
        raise io_error_from_os_error(e, directory) from e

    children.sort(key=lambda entry: entry.name)
    degraded.sort(key=lambda entry: entry.name)
    logger.debug(f"Listed {directory}: {len(children)} entries, {len(degraded)} degraded")
    return DirectoryNode(path=directory, children=tuple(children), degraded=tuple(degraded))
