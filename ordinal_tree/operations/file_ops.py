"""File content operations.

- save_file: overwrite a file, optionally renaming it or splitting its
  content into ordered siblings
- join_files: concatenate several siblings into the lowest-ordinal one
"""

import logging
import os
from pathlib import Path

from ..access import check_access
from ..access import resolve_in_root
from ..error_handler import as_tree_error
from ..error_handler import failure_result
from ..error_handler import tree_operation
from ..exceptions import InvalidRequestError
from ..exceptions import NodeConflictError
from ..exceptions import NotAFileError
from ..exceptions import TreeError
from ..logger_config import ErrorCategory
from ..logger_config import safe_operation
from ..models import JoinRequest
from ..models import JoinResult
from ..models import SaveFileRequest
from ..models import SaveFileResult
from ..ordering import shift_ordinals_down
from ..ordinals import ordinal_of
from ..ordinals import with_ordinal
from .common import require_file
from .common import require_folder

logger = logging.getLogger(__name__)

SPLIT_DELIMITER = "\n~\n"
JOIN_SEPARATOR = "\n\n"
DEFAULT_EXTENSION = ".md"


def _with_default_extension(file_name: str | None) -> str | None:
    if file_name and not os.path.splitext(file_name)[1]:
        return file_name + DEFAULT_EXTENSION
    return file_name


@tree_operation("save_file", SaveFileRequest, SaveFileResult)
def save_file(root: Path, request: SaveFileRequest) -> SaveFileResult:
    """Save file content, optionally renaming and splitting it.

    With ``split`` set, content containing the ``\\n~\\n`` delimiter is cut
    into parts. The first part overwrites the target; part ``i`` becomes a
    sibling with ordinal ``original + i`` and the same base name, after the
    following siblings are shifted down to make room.
    """
    folder = require_folder(root, request.tree_folder, "Directory")
    target = resolve_in_root(root, request.tree_folder, request.filename)

    if target.is_dir():
        raise NotAFileError(request.filename)

    new_file_name = _with_default_extension(request.new_file_name)
    if new_file_name and new_file_name != request.filename:
        renamed = resolve_in_root(root, request.tree_folder, new_file_name)
        if target.exists():
            if os.path.lexists(renamed):
                raise NodeConflictError(new_file_name, "A file with the new name already exists")
            os.rename(target, renamed)
            logger.info("File renamed: %s -> %s", target, renamed)
        target = renamed

    if target.is_dir():
        raise NotAFileError(target.name)

    if request.split and SPLIT_DELIMITER in request.content:
        return _save_split(root, folder, target, request.content)

    target.write_text(request.content, encoding="utf-8")
    message = "File saved successfully"
    if request.split:
        message += " (no split delimiter found)"
    return SaveFileResult(success=True, message=message, file_name=target.name, parts_written=[target.name])


def _save_split(root: Path, folder: Path, target: Path, content: str) -> SaveFileResult:
    parts = content.split(SPLIT_DELIMITER)
    original_ordinal = ordinal_of(target.name)

    # The first part keeps the target's slot; only the rest need room.
    remapper = shift_ordinals_down(len(parts) - 1, folder, original_ordinal + 1, root)

    written: list[str] = []
    for index, part in enumerate(parts):
        part_path = target if index == 0 else folder / with_ordinal(target.name, original_ordinal + index)
        try:
            check_access(part_path, root)
            part_path.write_text(part.strip(), encoding="utf-8")
        except (OSError, TreeError) as e:
            error = as_tree_error(e, "save_file")
            logger.error("Split stopped after %d of %d parts: %s", len(written), len(parts), error.message)
            return failure_result(
                SaveFileResult,
                error,
                file_name=target.name,
                parts_written=written,
                path_map=remapper.to_dict(),
            )
        written.append(part_path.name)
        logger.debug("Split part %d saved: %s", index + 1, part_path)

    return SaveFileResult(
        success=True,
        message=f"File split into {len(parts)} parts successfully",
        file_name=target.name,
        parts_written=written,
        path_map=remapper.to_dict(),
    )


@tree_operation("join_files", JoinRequest, JoinResult)
def join_files(root: Path, request: JoinRequest) -> JoinResult:
    """Join files into the one with the lowest ordinal and delete the others.

    Contents are concatenated in ordinal order with a blank line between
    them. A file that cannot be read as text contributes empty content.
    """
    filenames = list(dict.fromkeys(request.filenames))
    if len(filenames) < 2:
        raise InvalidRequestError("At least 2 filenames are required for joining", field="filenames")

    require_folder(root, request.tree_folder)

    members: list[tuple[int, str, Path, str]] = []
    unreadable: list[str] = []
    for filename in filenames:
        path = require_file(root, request.tree_folder, filename)
        ok, content, _ = safe_operation(
            "read_join_member",
            path.read_text,
            encoding="utf-8",
            error_category=ErrorCategory.WARNING,
        )
        if not ok:
            content = ""
            unreadable.append(filename)
        members.append((ordinal_of(filename), filename, path, content))

    members.sort(key=lambda member: member[0])
    joined_content = JOIN_SEPARATOR.join(content for _, _, _, content in members)

    _, survivor, survivor_path, _ = members[0]
    check_access(survivor_path, root)
    survivor_path.write_text(joined_content, encoding="utf-8")

    deleted: list[str] = []
    for _, filename, path, _ in members[1:]:
        try:
            check_access(path, root)
            path.unlink()
            deleted.append(filename)
        except (OSError, TreeError) as e:
            logger.error("Error deleting joined file %s: %s", filename, e)

    return JoinResult(
        success=True,
        message=f"Successfully joined {len(members)} files into {survivor}",
        joined_file=survivor,
        deleted_files=deleted,
        unreadable_files=unreadable,
    )
