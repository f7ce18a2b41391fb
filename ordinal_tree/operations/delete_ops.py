"""Batch deletion of files and folders.

Folders are removed recursively. Each name is handled independently; a
failure is recorded and the batch moves on. Deleting never renumbers the
remaining siblings.
"""

import logging
import os
import shutil
from pathlib import Path

from ..access import check_access
from ..access import resolve_in_root
from ..error_handler import as_tree_error
from ..error_handler import error_info
from ..error_handler import tree_operation
from ..exceptions import InvalidRequestError
from ..exceptions import NodeNotFoundError
from ..exceptions import TreeError
from ..models import DeleteRequest
from ..models import DeleteResult
from ..models import OperationStatus
from .common import require_folder

logger = logging.getLogger(__name__)


def _delete_one(root: Path, folder: Path, tree_folder: str, name: str) -> str:
    """Delete one entry and return its kind ("File" or "Folder")."""
    target = resolve_in_root(root, tree_folder, name)
    if not os.path.lexists(target):
        raise NodeNotFoundError(name, "File or folder")

    canonical = check_access(target, root)
    if canonical == check_access(folder, root) or canonical == check_access(root, root):
        raise InvalidRequestError(f"Refusing to delete the containing folder: {name}", field="names", value=name)

    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
        logger.info("Folder deleted: %s", target)
        return "Folder"
    target.unlink()
    logger.info("File deleted: %s", target)
    return "File"


@tree_operation("delete_file_or_folder", DeleteRequest, DeleteResult)
def delete_file_or_folder(root: Path, request: DeleteRequest) -> DeleteResult:
    folder = require_folder(root, request.tree_folder)

    deleted: list[str] = []
    errors: list[str] = []
    failures: list[TreeError] = []
    last_kind = "File"
    for name in request.names:
        try:
            last_kind = _delete_one(root, folder, request.tree_folder, name)
            deleted.append(name)
        except (OSError, TreeError) as e:
            error = as_tree_error(e, "delete_file_or_folder")
            failures.append(error)
            if isinstance(error, NodeNotFoundError):
                errors.append(f"File or folder not found: {name}")
            else:
                errors.append(f"Failed to delete {name}: {error.message}")
            logger.warning("Error deleting %s: %s", name, error.message)

    total = len(request.names)
    if total == 1:
        if deleted:
            message = f"{last_kind} deleted successfully"
            return DeleteResult(
                success=True,
                message=message,
                deleted_count=1,
                total_items=1,
                deleted=deleted,
                legacy=OperationStatus(success=True, message=message),
            )
        return DeleteResult(
            success=False,
            message=errors[0],
            error=error_info(failures[0]),
            total_items=1,
            errors=errors,
            legacy=OperationStatus(success=False, message=errors[0]),
        )

    return DeleteResult(
        success=bool(deleted),
        message=f"Successfully deleted {len(deleted)} of {total} items",
        error=error_info(failures[0]) if not deleted else None,
        deleted_count=len(deleted),
        total_items=total,
        deleted=deleted,
        errors=errors,
    )
