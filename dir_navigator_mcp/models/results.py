"""Outcome values returned by the navigation controller."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)


class EnteredDirectory(_Outcome):
    entered_directory: Path


class FileToView(_Outcome):
    file_to_view: Path


class NewDirectory(_Outcome):
    new_directory: Path


class NoHistory(_Outcome):
    no_history: Literal[True] = True


class AtRoot(_Outcome):
    at_root: Literal[True] = True


class Created(_Outcome):
    created: Path


class Deleted(_Outcome):
    deleted: Path


class DeletedCount(_Outcome):
    deleted_count: int


OpenResult = EnteredDirectory | FileToView
BackResult = NewDirectory | NoHistory
UpResult = NewDirectory | AtRoot
DeleteResult = Deleted | DeletedCount
