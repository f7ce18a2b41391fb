"""TreeMutator: the operations bound to one root directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .config import Settings
from .config import get_settings
from .config import resolve_root
from .error_handler import failure_result
from .exceptions import InvalidRequestError
from .logger_config import configure_logging
from .models import DeleteRequest
from .models import JoinRequest
from .models import MakeFolderRequest
from .models import MoveRequest
from .models import NormalizeRequest
from .models import OperationStatus
from .models import PasteRequest
from .models import RenameFolderRequest
from .models import SaveFileRequest
from .operations import delete_file_or_folder
from .operations import join_files
from .operations import make_folder
from .operations import move_up_or_down
from .operations import normalize_ordinals
from .operations import paste_items
from .operations import rename_folder
from .operations import save_file

_DISPATCH = {
    SaveFileRequest: save_file,
    RenameFolderRequest: rename_folder,
    DeleteRequest: delete_file_or_folder,
    MoveRequest: move_up_or_down,
    PasteRequest: paste_items,
    JoinRequest: join_files,
    MakeFolderRequest: make_folder,
    NormalizeRequest: normalize_ordinals,
}


class TreeMutator:
    """Runs tree operations against a single root.

    Attributes:
        root: Absolute directory that every operation is confined to.
    """

    def __init__(self, root: str | os.PathLike):
        self.root = Path(root)

    @classmethod
    def from_root_key(cls, root_key: str, settings: Settings | None = None) -> TreeMutator:
        """Build a mutator for a symbolic root key from settings.

        Raises:
            RootNotConfiguredError: If the key does not map to a directory.
        """
        settings = settings or get_settings()
        configure_logging(settings.log_file, settings.log_level, settings.structured_logging)
        return cls(resolve_root(root_key, settings))

    def execute(self, request: BaseModel) -> OperationStatus:
        """Run whichever operation ``request``'s type belongs to."""
        operation = _DISPATCH.get(type(request))
        if operation is None:
            error = InvalidRequestError(
                f"Unsupported request type: {type(request).__name__}", field="request"
            )
            return failure_result(OperationStatus, error)
        return operation(self.root, request)

    def save_file(self, request: SaveFileRequest | None = None, **fields: Any):
        return save_file(self.root, request, **fields)

    def rename_folder(self, request: RenameFolderRequest | None = None, **fields: Any):
        return rename_folder(self.root, request, **fields)

    def delete_file_or_folder(self, request: DeleteRequest | None = None, **fields: Any):
        return delete_file_or_folder(self.root, request, **fields)

    def move_up_or_down(self, request: MoveRequest | None = None, **fields: Any):
        return move_up_or_down(self.root, request, **fields)

    def paste_items(self, request: PasteRequest | None = None, **fields: Any):
        return paste_items(self.root, request, **fields)

    def join_files(self, request: JoinRequest | None = None, **fields: Any):
        return join_files(self.root, request, **fields)

    def make_folder(self, request: MakeFolderRequest | None = None, **fields: Any):
        return make_folder(self.root, request, **fields)

    def normalize_ordinals(self, request: NormalizeRequest | None = None, **fields: Any):
        return normalize_ordinals(self.root, request, **fields)
