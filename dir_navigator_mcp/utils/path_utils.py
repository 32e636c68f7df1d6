import os
from pathlib import Path

from dir_navigator_mcp.core.errors import MutationError, MutationErrorKind

_SEPARATORS = {sep for sep in (os.sep, os.altsep, "/") if sep}


def normalize_path(path: str | Path) -> Path:
    """
    Returns the absolute, lexically normalized form of a path.

    Symlinks are not resolved, so a location reached through a link keeps the
    link in its path.
    """
    return Path(os.path.abspath(os.path.expanduser(os.fspath(path))))


def is_within(path: Path, ancestor: Path) -> bool:
    """True when ``path`` equals ``ancestor`` or lies below it."""
    return path == ancestor or ancestor in path.parents


def is_within_root(path: Path, root: Path) -> bool:
    """
    True when ``path`` stays inside ``root`` once every symlink on the way is
    resolved.
    """
    return is_within(Path(os.path.realpath(path)), Path(os.path.realpath(root)))


def is_valid_entry_name(name: str) -> bool:
    if not name or name in (".", ".."):
        return False
    if "\x00" in name:
        return False
    return not any(sep in name for sep in _SEPARATORS)


def validate_entry_name(name: str) -> str:
    """
    Checks that a name refers to a single entry of the current directory.

    Raises:
        MutationError: ``INVALID_NAME`` for empty names, ``.``/``..`` and
            anything containing a path separator.
    """
    if not isinstance(name, str) or not is_valid_entry_name(name):
        raise MutationError(
            MutationErrorKind.INVALID_NAME,
            f"Invalid entry name: {name!r}. Names must be non-empty and must not contain path separators.",
        )
    return name


def resolve_target(root: Path, cwd: Path, path_str: str | Path) -> Path:
    """
    Resolves a delete target against the current directory of a session.

    The target must lie strictly below ``root``, also after resolving the
    symlinks leading to it, and must not be the current directory or one of
    its ancestors. The target itself may be a symlink.

    Raises:
        MutationError: ``INVALID_NAME`` if the target escapes those bounds.
    """
    raw = os.fspath(path_str) if path_str is not None else ""
    if not raw:
        raise MutationError(MutationErrorKind.INVALID_NAME, "A target path is required.")

    target = normalize_path(cwd / raw)
    if target == root or not is_within(target, root):
        raise MutationError(
            MutationErrorKind.INVALID_NAME,
            f"Path '{raw}' is outside the navigable root {root}.",
            target,
        )
    if is_within(cwd, target):
        raise MutationError(
            MutationErrorKind.INVALID_NAME,
            f"Path '{raw}' is the current directory or one of its parents.",
            target,
        )
    if not is_within_root(target.parent, root):
        raise MutationError(
            MutationErrorKind.INVALID_NAME,
            f"Path '{raw}' leads outside the navigable root {root} through a symbolic link.",
            target,
        )
    return target
