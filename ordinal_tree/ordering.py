"""Sibling listing and ordinal shifting.

These helpers work on one directory at a time and only ever rename entries
inside it. They raise TreeError subclasses and let OSError propagate; the
operation boundary classifies both.
"""

from __future__ import annotations

import logging
import os
import re
import uuid
from pathlib import Path

from .access import check_access
from .exceptions import NodeConflictError
from .ordinals import is_ordinal_name
from .ordinals import parse_name
from .ordinals import with_ordinal
from .remap import PathRemapper

logger = logging.getLogger(__name__)

TEMP_PREFIX = "temp_"
_TEMP_NAME_PATTERN = re.compile(r"^temp_[a-z]+_[0-9a-f]{12}_")


def list_ordinal_children(directory: Path) -> list[str]:
    """Return the ordinal-named entries of ``directory`` sorted by name."""
    return sorted(name for name in os.listdir(directory) if is_ordinal_name(name))


def unique_temp_name(directory: Path, name: str, tag: str = "swap") -> str:
    """Return a temp name for ``name`` that does not exist in ``directory``."""
    while True:
        candidate = f"{TEMP_PREFIX}{tag}_{uuid.uuid4().hex[:12]}_{name}"
        if not os.path.lexists(directory / candidate):
            return candidate


def is_temp_name(name: str) -> bool:
    return bool(_TEMP_NAME_PATTERN.match(name))


def original_name_of_temp(name: str) -> str:
    """Strip the temp prefix added by ``unique_temp_name``."""
    match = _TEMP_NAME_PATTERN.match(name)
    return name[match.end():] if match else name


def relative_path(path: Path, root: Path) -> str:
    """Root-relative POSIX form of a path built under ``root``."""
    return Path(path).relative_to(Path(root)).as_posix()


def rename_checked(source: Path, destination: Path, root: Path) -> None:
    """Rename after checking both ends against the root and the destination is free."""
    check_access(source, root)
    check_access(destination, root)
    if os.path.lexists(destination):
        raise NodeConflictError(relative_path(destination, root))
    os.rename(source, destination)


def shift_ordinals_down(
    n: int,
    directory: str | os.PathLike,
    from_ordinal: int,
    root: str | os.PathLike,
    ignore: list[str] | set[str] | None = None,
) -> PathRemapper:
    """Add ``n`` to the ordinal of every sibling with ordinal >= ``from_ordinal``.

    Entries are renamed in descending ordinal order so that no rename lands
    on a name still in use. Names in ``ignore`` are left untouched.

    Returns:
        PathRemapper with an ``old -> new`` entry for every renamed folder.
    """
    directory = Path(directory)
    root = Path(root)
    check_access(directory, root)

    remapper = PathRemapper()
    if n <= 0:
        return remapper

    skipped = set(ignore or ())
    candidates = []
    for name in list_ordinal_children(directory):
        ordinal = parse_name(name).ordinal
        if name not in skipped and ordinal is not None and ordinal >= from_ordinal:
            candidates.append((ordinal, name))
    candidates.sort(reverse=True)

    for ordinal, name in candidates:
        source = directory / name
        destination = directory / with_ordinal(name, ordinal + n)
        is_folder = source.is_dir()
        rename_checked(source, destination, root)
        logger.debug("Shifted %s -> %s", source, destination.name)
        if is_folder:
            remapper.record(relative_path(source, root), relative_path(destination, root))

    if candidates:
        logger.info(
            "Shifted %d entries in %s by %d from ordinal %d", len(candidates), directory, n, from_ordinal
        )
    return remapper
