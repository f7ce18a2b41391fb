"""Ordering operations.

- move_up_or_down: swap an entry's ordinal prefix with its neighbour's
- normalize_ordinals: renumber a folder to 0000..n-1 and report leftovers
  of interrupted swaps and pastes
"""

import logging
import os
from pathlib import Path

from ..access import check_access
from ..error_handler import as_tree_error
from ..error_handler import failure_result
from ..error_handler import tree_operation
from ..exceptions import BoundaryError
from ..exceptions import NodeConflictError
from ..exceptions import NodeNotFoundError
from ..exceptions import TreeError
from ..models import Direction
from ..models import MoveRequest
from ..models import MoveResult
from ..models import NormalizeRequest
from ..models import NormalizeResult
from ..ordering import is_temp_name
from ..ordering import list_ordinal_children
from ..ordering import original_name_of_temp
from ..ordering import relative_path
from ..ordering import rename_checked
from ..ordering import unique_temp_name
from ..ordinals import ORDINAL_SEPARATOR
from ..ordinals import with_ordinal
from ..remap import PathRemapper
from .common import require_folder

logger = logging.getLogger(__name__)


@tree_operation("move_up_or_down", MoveRequest, MoveResult)
def move_up_or_down(root: Path, request: MoveRequest) -> MoveResult:
    """Swap the ordinal prefixes of ``filename`` and its neighbour.

    There is no atomic two-way rename, so the swap goes through a temp name:
    ``A -> temp``, ``B -> B's base with A's prefix``, ``temp -> A's base with
    B's prefix``. A failure part way is reported through
    ``completed_steps`` and may leave the temp entry behind.
    """
    folder = require_folder(root, request.tree_folder)

    siblings = list_ordinal_children(folder)
    if request.filename not in siblings:
        raise NodeNotFoundError(request.filename, "File", details={"folder": request.tree_folder})
    index = siblings.index(request.filename)

    if request.direction is Direction.UP:
        if index == 0:
            raise BoundaryError(request.filename, request.direction.value)
        neighbour = siblings[index - 1]
    else:
        if index == len(siblings) - 1:
            raise BoundaryError(request.filename, request.direction.value)
        neighbour = siblings[index + 1]

    current = request.filename
    current_prefix, _, current_base = current.partition(ORDINAL_SEPARATOR)
    neighbour_prefix, _, neighbour_base = neighbour.partition(ORDINAL_SEPARATOR)
    if current_prefix == neighbour_prefix:
        raise NodeConflictError(
            neighbour,
            f"{current} and {neighbour} share ordinal {current_prefix}; normalize the folder first",
        )

    new_current = f"{neighbour_prefix}{ORDINAL_SEPARATOR}{current_base}"
    new_neighbour = f"{current_prefix}{ORDINAL_SEPARATOR}{neighbour_base}"

    current_path = folder / current
    neighbour_path = folder / neighbour
    temp_path = folder / unique_temp_name(folder, current)
    for path in (current_path, neighbour_path, temp_path):
        check_access(path, root)

    names = {
        "old_name1": current,
        "new_name1": new_current,
        "old_name2": neighbour,
        "new_name2": new_neighbour,
    }
    steps: list[str] = []
    try:
        rename_checked(current_path, temp_path, root)
        steps.append(f"{current} -> {temp_path.name}")
        rename_checked(neighbour_path, folder / new_neighbour, root)
        steps.append(f"{neighbour} -> {new_neighbour}")
        rename_checked(temp_path, folder / new_current, root)
        steps.append(f"{temp_path.name} -> {new_current}")
    except (OSError, TreeError) as e:
        error = as_tree_error(e, "move_up_or_down")
        logger.error("Swap of %s and %s stopped after %d steps: %s", current, neighbour, len(steps), error.message)
        return failure_result(MoveResult, error, completed_steps=steps, **names)

    return MoveResult(success=True, message="Files moved successfully", completed_steps=steps, **names)


@tree_operation("normalize_ordinals", NormalizeRequest, NormalizeResult)
def normalize_ordinals(root: Path, request: NormalizeRequest) -> NormalizeResult:
    """Renumber the ordinal entries of a folder to a gap-free sequence.

    Order is preserved. Renames run in two phases through temp names so that
    no intermediate name collides. Temp entries left by interrupted swaps or
    pastes are reported, not renamed.
    """
    folder = require_folder(root, request.tree_folder)

    stray = sorted(name for name in os.listdir(folder) if is_temp_name(name))
    stray_originals = {name: original_name_of_temp(name) for name in stray}
    plan = []
    for ordinal, name in enumerate(list_ordinal_children(folder)):
        final_name = with_ordinal(name, ordinal)
        if final_name != name:
            plan.append((name, final_name))

    remapper = PathRemapper()
    renamed: dict[str, str] = {}
    staged: list[tuple[str, Path, str, bool]] = []
    try:
        for name, final_name in plan:
            source = folder / name
            temp_path = folder / unique_temp_name(folder, name, tag="norm")
            is_folder = source.is_dir()
            rename_checked(source, temp_path, root)
            staged.append((name, temp_path, final_name, is_folder))

        for name, temp_path, final_name, is_folder in staged:
            destination = folder / final_name
            rename_checked(temp_path, destination, root)
            renamed[name] = final_name
            if is_folder:
                remapper.record(relative_path(folder / name, root), relative_path(destination, root))
    except (OSError, TreeError) as e:
        error = as_tree_error(e, "normalize_ordinals")
        logger.error("Normalizing %s stopped after %d renames: %s", folder, len(renamed), error.message)
        return failure_result(
            NormalizeResult,
            error,
            renamed=renamed,
            stray_temp_entries=stray,
            stray_original_names=stray_originals,
            path_map=remapper.to_dict(),
        )

    message = f"Renumbered {len(renamed)} entries"
    if stray:
        message += f"; {len(stray)} leftover temp entries need manual review"
    return NormalizeResult(
        success=True,
        message=message,
        renamed=renamed,
        stray_temp_entries=stray,
        stray_original_names=stray_originals,
        path_map=remapper.to_dict(),
    )
