"""Batch paste (move) of entries into an ordered folder.

Items are placed at consecutive ordinals starting right after
``target_ordinal``. Existing siblings at or after that slot are shifted down
once for the whole batch. Items already in the target folder are parked
under temp names first so the shift cannot collide with them. Items from
other folders may live inside a folder the shift renamed; their paths are
rewritten through the shift's PathRemapper before they are moved.
"""

from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass
from pathlib import Path

from ..access import check_access
from ..access import resolve_in_root
from ..error_handler import as_tree_error
from ..error_handler import error_info
from ..error_handler import failure_result
from ..error_handler import tree_operation
from ..exceptions import InvalidRequestError
from ..exceptions import NodeNotFoundError
from ..exceptions import TreeError
from ..models import PasteItemResult
from ..models import PasteRequest
from ..models import PasteResult
from ..ordering import relative_path
from ..ordering import rename_checked
from ..ordering import shift_ordinals_down
from ..ordering import unique_temp_name
from ..ordinals import format_ordinal
from ..ordinals import parse_name
from ..remap import PathRemapper
from .common import require_folder

logger = logging.getLogger(__name__)


def _folder_key(path: str) -> str:
    """Normalize a root-relative folder path; the root itself is ``""``."""
    normalized = posixpath.normpath("/" + path.replace("\\", "/").strip("/"))
    return normalized.strip("/")


def insert_ordinal_for(target_ordinal: int | str | None) -> int:
    """First ordinal of the pasted batch.

    ``target_ordinal`` may be a number or an ordinal-prefixed sibling name;
    the batch goes right after it. Without one, the batch goes to the top.
    """
    if target_ordinal is None:
        return 0
    if isinstance(target_ordinal, str):
        text = target_ordinal.strip()
        if text.isascii() and text.isdigit():
            ordinal = int(text)
        else:
            ordinal = parse_name(text).ordinal
            if ordinal is None:
                return 0
    else:
        ordinal = target_ordinal
    if ordinal < 0:
        raise InvalidRequestError("target_ordinal must be non-negative", field="target_ordinal", value=ordinal)
    return ordinal + 1


@dataclass
class _PendingItem:
    source: str
    name: str
    same_folder: bool
    temp_path: Path | None = None
    outcome: PasteItemResult | None = None

    def fail(self, error: TreeError) -> None:
        self.outcome = PasteItemResult(
            source=self.source, success=False, message=error.message, error=error_info(error)
        )

    def succeed(self, destination: str) -> None:
        self.outcome = PasteItemResult(
            source=self.source, destination=destination, success=True, message=f"Moved to {destination}"
        )


def _park_same_folder_item(root: Path, target_dir: Path, item: _PendingItem) -> None:
    source = resolve_in_root(root, item.source)
    if not os.path.lexists(source):
        raise NodeNotFoundError(item.source, "Source file")
    temp_path = target_dir / unique_temp_name(target_dir, item.name, tag="paste")
    rename_checked(source, temp_path, root)
    item.temp_path = temp_path


def _check_source(root: Path, target_dir: Path, item: _PendingItem) -> None:
    source = resolve_in_root(root, item.source)
    if not os.path.lexists(source):
        raise NodeNotFoundError(item.source, "Source file")
    if source.is_dir() and not source.is_symlink():
        canonical_source = check_access(source, root)
        canonical_target = check_access(target_dir, root)
        if canonical_target == canonical_source or canonical_source in canonical_target.parents:
            raise InvalidRequestError(
                f"Cannot paste a folder into itself: {item.source}", field="items", value=item.source
            )


def _place_item(root: Path, item: _PendingItem, destination: Path) -> None:
    if item.temp_path is not None:
        rename_checked(item.temp_path, destination, root)
        return

    source = resolve_in_root(root, item.source)
    if not os.path.lexists(source):
        raise NodeNotFoundError(item.source, "Source file")
    rename_checked(source, destination, root)


@tree_operation("paste_items", PasteRequest, PasteResult)
def paste_items(root: Path, request: PasteRequest) -> PasteResult:
    """Move ``request.items`` into the target folder as one ordered batch.

    Sources that are missing, or folders that would end up inside
    themselves, fail before anything is renamed and do not take a slot.
    """
    target_dir = require_folder(root, request.target_folder, "Target directory")
    insert_ordinal = insert_ordinal_for(request.target_ordinal)
    target_key = _folder_key(request.target_folder)

    items = list(dict.fromkeys(sorted(request.items)))
    pending = []
    for source in items:
        stripped = source.replace("\\", "/").rstrip("/")
        pending.append(
            _PendingItem(
                source=source,
                name=posixpath.basename(stripped),
                same_folder=_folder_key(posixpath.dirname(stripped)) == target_key,
            )
        )

    for item in pending:
        try:
            if item.same_folder:
                _park_same_folder_item(root, target_dir, item)
            else:
                _check_source(root, target_dir, item)
        except (OSError, TreeError) as e:
            item.fail(as_tree_error(e, "paste_items"))

    movable = [item for item in pending if item.outcome is None]
    remapper = PathRemapper()
    if movable:
        try:
            remapper = shift_ordinals_down(len(movable), target_dir, insert_ordinal, root, None)
        except (OSError, TreeError) as e:
            error = as_tree_error(e, "paste_items")
            parked = [item.temp_path.name for item in movable if item.temp_path is not None]
            logger.error("Shift before paste failed; parked entries left in place: %s", parked)
            return failure_result(
                PasteResult,
                error,
                total_items=len(items),
                errors=[error.message],
                items=[item.outcome for item in pending if item.outcome is not None],
            )

    for item in movable:
        if item.same_folder:
            continue
        remapped = remapper.remap(item.source)
        if remapped != item.source:
            logger.debug("Source path remapped: %s -> %s", item.source, remapped)
            item.source = remapped

    for position, item in enumerate(movable):
        final_name = format_ordinal(insert_ordinal + position) + parse_name(item.name).base
        try:
            destination = resolve_in_root(root, request.target_folder, final_name)
            _place_item(root, item, destination)
            item.succeed(relative_path(destination, root))
        except (OSError, TreeError) as e:
            error = as_tree_error(e, "paste_items")
            item.fail(error)
            logger.warning("Error pasting %s: %s", item.source, error.message)

    outcomes = [item.outcome for item in pending]
    pasted = sum(1 for outcome in outcomes if outcome.success)
    errors = [f"{outcome.source}: {outcome.message}" for outcome in outcomes if not outcome.success]
    first_error = next((outcome.error for outcome in outcomes if not outcome.success), None)
    return PasteResult(
        success=pasted > 0,
        message=f"Successfully pasted {pasted} of {len(items)} items",
        error=first_error if pasted == 0 else None,
        pasted_count=pasted,
        total_items=len(items),
        errors=errors,
        items=outcomes,
        path_map=remapper.to_dict(),
    )
