"""Pydantic models for the ordinal tree engine.

Request models spell out the required and optional fields of every
operation; result models are what operations return, successful or not.
"""

from enum import Enum
from typing import Annotated
from typing import Any

from pydantic import AfterValidator
from pydantic import BaseModel
from pydantic import Field

from .exceptions import ErrorKind

MAX_FOLDER_NAME_LENGTH = 140


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be empty")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


# === Request Models ===


class SaveFileRequest(BaseModel):
    """Overwrite (and optionally rename or split) a file."""

    tree_folder: NonBlankStr
    filename: NonBlankStr
    content: str
    new_file_name: str | None = None
    split: bool = False


class RenameFolderRequest(BaseModel):
    tree_folder: NonBlankStr
    old_name: NonBlankStr
    new_name: NonBlankStr


class DeleteRequest(BaseModel):
    tree_folder: NonBlankStr
    names: list[str] = Field(..., min_length=1)


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"


class MoveRequest(BaseModel):
    """Swap an item with its previous (up) or next (down) ordinal sibling."""

    tree_folder: NonBlankStr
    filename: NonBlankStr
    direction: Direction


class PasteRequest(BaseModel):
    """Move a batch of root-relative paths into ``target_folder``.

    ``target_ordinal`` is the ordinal the batch is inserted after. It may be
    given as a number or as the ordinal-prefixed name of the sibling.
    """

    target_folder: NonBlankStr
    items: list[str] = Field(..., min_length=1)
    target_ordinal: int | str | None = None


class JoinRequest(BaseModel):
    tree_folder: NonBlankStr
    filenames: list[str] = Field(..., min_length=2)


class MakeFolderRequest(BaseModel):
    """Convert a file into a folder that keeps the file's position."""

    tree_folder: NonBlankStr
    filename: NonBlankStr
    folder_name: NonBlankStr = Field(..., max_length=MAX_FOLDER_NAME_LENGTH)
    remaining_content: str | None = None


class NormalizeRequest(BaseModel):
    tree_folder: NonBlankStr


# === Result Models ===


class ErrorInfo(BaseModel):
    """Error classification attached to failed results."""

    kind: ErrorKind
    error_code: str
    status_code: int
    details: dict[str, Any] = {}


class OperationStatus(BaseModel):
    """Generic status shared by every operation result."""

    success: bool
    message: str
    error: ErrorInfo | None = None


class SaveFileResult(OperationStatus):
    file_name: str | None = None
    parts_written: list[str] = []
    path_map: dict[str, str] = {}


class RenameFolderResult(OperationStatus):
    old_name: str | None = None
    new_name: str | None = None


class DeleteResult(OperationStatus):
    deleted_count: int = 0
    total_items: int = 0
    deleted: list[str] = []
    errors: list[str] = []
    # Single-item calls also carry the simple {success, message} shape.
    legacy: OperationStatus | None = None


class MoveResult(OperationStatus):
    old_name1: str | None = None
    new_name1: str | None = None
    old_name2: str | None = None
    new_name2: str | None = None
    completed_steps: list[str] = []


class PasteItemResult(BaseModel):
    source: str
    destination: str | None = None
    success: bool
    message: str
    error: ErrorInfo | None = None


class PasteResult(OperationStatus):
    pasted_count: int = 0
    total_items: int = 0
    errors: list[str] = []
    items: list[PasteItemResult] = []
    path_map: dict[str, str] = {}


class JoinResult(OperationStatus):
    joined_file: str | None = None
    deleted_files: list[str] = []
    unreadable_files: list[str] = []


class MakeFolderResult(OperationStatus):
    folder_name: str | None = None
    child_file: str | None = None
    completed_steps: list[str] = []


class NormalizeResult(OperationStatus):
    renamed: dict[str, str] = {}
    stray_temp_entries: list[str] = []
    # Temp entry -> the name it had before the interrupted swap or paste.
    stray_original_names: dict[str, str] = {}
    path_map: dict[str, str] = {}
