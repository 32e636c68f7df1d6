from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Entry(BaseModel):
    """One immediate child of a listed directory."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    path: Path
    is_symlink: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


class DegradedEntry(BaseModel):
    """A child that showed up in the listing but could not be classified."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    reason: str


class DirectoryNode(BaseModel):
    """Snapshot of one directory level, rebuilt on every refresh."""

    model_config = ConfigDict(frozen=True)

    path: Path
    children: tuple[Entry, ...] = ()
    degraded: tuple[DegradedEntry, ...] = ()

    def names(self) -> list[str]:
        return [entry.name for entry in self.children]

    def get(self, name: str) -> Entry | None:
        for entry in self.children:
            if entry.name == name:
                return entry
        return None
