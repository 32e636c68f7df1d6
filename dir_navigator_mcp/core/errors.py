"""Typed failures raised by the navigation core."""

import errno
from enum import Enum
from pathlib import Path


class IOErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    NOT_A_DIRECTORY = "NotADirectory"
    PERMISSION_DENIED = "PermissionDenied"
    TIMEOUT = "Timeout"


class MutationErrorKind(str, Enum):
    ALREADY_EXISTS = "AlreadyExists"
    INVALID_NAME = "InvalidName"
    NOT_FOUND = "NotFound"
    IS_A_DIRECTORY = "IsADirectory"
    NOT_A_DIRECTORY = "NotADirectory"
    PERMISSION_DENIED = "PermissionDenied"
    PARTIAL_DELETE_FAILURE = "PartialDeleteFailure"


class ConfigErrorKind(str, Enum):
    ROOT_NOT_FOUND = "RootNotFound"


class NavigatorError(Exception):
    """Base class for every failure the core reports to its callers."""

    def __init__(self, kind: Enum, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = path

    def to_dict(self) -> dict:
        return {
            "error_kind": self.kind.value,
            "path": str(self.path) if self.path is not None else None,
        }


class NavigatorIOError(NavigatorError):
    """A listing or navigation step could not read the filesystem."""

    kind: IOErrorKind


class MutationError(NavigatorError):
    """A create or delete operation failed.

    For ``PARTIAL_DELETE_FAILURE`` the error also carries the first path that
    could not be removed and how many entries were removed before the walk
    stopped.
    """

    kind: MutationErrorKind

    def __init__(
        self,
        kind: MutationErrorKind,
        message: str,
        path: Path | None = None,
        first_failure: Path | None = None,
        deleted_count: int = 0,
    ) -> None:
        super().__init__(kind, message, path)
        self.first_failure = first_failure
        self.deleted_count = deleted_count

    def to_dict(self) -> dict:
        data = super().to_dict()
        if self.kind is MutationErrorKind.PARTIAL_DELETE_FAILURE:
            data["first_failure"] = str(self.first_failure)
            data["deleted_count"] = self.deleted_count
        return data


class ConfigError(NavigatorError):
    """The session cannot start with the given configuration."""

    kind: ConfigErrorKind


def io_error_from_os_error(exc: OSError, path: Path) -> NavigatorIOError:
    """Map an ``OSError`` raised while reading ``path`` to a ``NavigatorIOError``."""
    if isinstance(exc, FileNotFoundError) or exc.errno == errno.ENOENT:
        kind = IOErrorKind.NOT_FOUND
    elif isinstance(exc, NotADirectoryError) or exc.errno == errno.ENOTDIR:
        kind = IOErrorKind.NOT_A_DIRECTORY
    elif isinstance(exc, TimeoutError) or exc.errno == errno.ETIMEDOUT:
        kind = IOErrorKind.TIMEOUT
    else:
        # Anything else that stops a read (EACCES, EPERM, EIO) is reported as
        # a permission problem; the caller cannot do more with it.
        kind = IOErrorKind.PERMISSION_DENIED
    return NavigatorIOError(kind, f"{kind.value}: {path} ({exc.strerror or exc})", path)
