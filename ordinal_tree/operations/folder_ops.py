"""Folder operations.

- rename_folder: rename a folder inside its parent
- make_folder: convert a file into a folder at the same position
"""

import logging
import os
from pathlib import Path

from ..access import resolve_in_root
from ..error_handler import as_tree_error
from ..error_handler import failure_result
from ..error_handler import tree_operation
from ..exceptions import InvalidRequestError
from ..exceptions import NodeConflictError
from ..exceptions import NodeNotFoundError
from ..exceptions import NotAFolderError
from ..exceptions import TreeError
from ..models import MakeFolderRequest
from ..models import MakeFolderResult
from ..models import RenameFolderRequest
from ..models import RenameFolderResult
from ..ordinals import ORDINAL_SEPARATOR
from ..ordinals import parse_name
from .common import require_file
from .common import require_folder

logger = logging.getLogger(__name__)

FOLDER_CHILD_NAME = "0001_file.md"


@tree_operation("rename_folder", RenameFolderRequest, RenameFolderResult)
def rename_folder(root: Path, request: RenameFolderRequest) -> RenameFolderResult:
    require_folder(root, request.tree_folder)

    old_path = resolve_in_root(root, request.tree_folder, request.old_name)
    if not os.path.lexists(old_path):
        raise NodeNotFoundError(request.old_name, "Folder")
    if not old_path.is_dir():
        raise NotAFolderError(request.old_name)

    if request.old_name == request.new_name:
        return RenameFolderResult(
            success=True,
            message="Folder name is unchanged",
            old_name=request.old_name,
            new_name=request.new_name,
        )

    new_path = resolve_in_root(root, request.tree_folder, request.new_name)
    if os.path.lexists(new_path):
        raise NodeConflictError(request.new_name, "A folder with the new name already exists")

    os.rename(old_path, new_path)
    logger.info("Folder renamed: %s -> %s", old_path, new_path)
    return RenameFolderResult(
        success=True,
        message="Folder renamed successfully",
        old_name=request.old_name,
        new_name=request.new_name,
    )


@tree_operation("make_folder", MakeFolderRequest, MakeFolderResult)
def make_folder(root: Path, request: MakeFolderRequest) -> MakeFolderResult:
    """Replace a file with a folder that inherits its ordinal prefix.

    Non-blank ``remaining_content`` is written to ``0001_file.md`` inside the
    new folder. The steps are not rolled back if one fails part way; the
    result lists the steps that completed.
    """
    if "/" in request.folder_name or "\\" in request.folder_name:
        raise InvalidRequestError("Folder name must not contain path separators", field="folder_name")

    require_folder(root, request.tree_folder)
    source = require_file(root, request.tree_folder, request.filename)

    prefix = ""
    if parse_name(request.filename).ordinal is not None:
        prefix = request.filename.partition(ORDINAL_SEPARATOR)[0] + ORDINAL_SEPARATOR
    folder_name = prefix + request.folder_name

    folder_path = resolve_in_root(root, request.tree_folder, folder_name)
    if os.path.lexists(folder_path):
        raise NodeConflictError(folder_name, "A folder with this name already exists")

    has_remaining = bool(request.remaining_content and request.remaining_content.strip())
    child_path = resolve_in_root(root, request.tree_folder, folder_name, FOLDER_CHILD_NAME) if has_remaining else None

    steps: list[str] = []
    try:
        source.unlink()
        steps.append(f"deleted {request.filename}")
        folder_path.mkdir()
        steps.append(f"created {folder_name}")
        if child_path is not None:
            child_path.write_text(request.remaining_content, encoding="utf-8")
            steps.append(f"wrote {FOLDER_CHILD_NAME}")
    except (OSError, TreeError) as e:
        error = as_tree_error(e, "make_folder")
        logger.error("Folder conversion of %s stopped after %s", request.filename, steps)
        return failure_result(MakeFolderResult, error, folder_name=folder_name, completed_steps=steps)

    message = f'File "{request.filename}" converted to folder "{folder_name}" successfully'
    if child_path is not None:
        message += f" with remaining content saved as {FOLDER_CHILD_NAME}"
    return MakeFolderResult(
        success=True,
        message=message,
        folder_name=folder_name,
        child_file=FOLDER_CHILD_NAME if child_path is not None else None,
        completed_steps=steps,
    )
