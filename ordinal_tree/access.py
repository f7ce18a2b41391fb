"""Root containment checks.

Every path built from caller-supplied components is canonicalized (symlinks
resolved, ``..`` collapsed) and must equal the root or sit below it before
any filesystem call touches it.
"""

from __future__ import annotations

import os
from pathlib import Path

from .exceptions import AccessDeniedError


def _canonical(path: str | os.PathLike) -> Path:
    return Path(os.path.realpath(os.path.abspath(path)))


def check_access(path: str | os.PathLike, root: str | os.PathLike) -> Path:
    """Raise AccessDeniedError unless ``path`` resolves inside ``root``.

    Returns:
        The canonical form of ``path``.
    """
    canonical_root = _canonical(root)
    canonical_path = _canonical(path)
    if canonical_path != canonical_root and canonical_root not in canonical_path.parents:
        raise AccessDeniedError(str(path), str(root))
    return canonical_path


def resolve_in_root(root: str | os.PathLike, *parts: str) -> Path:
    """Join caller-relative ``parts`` onto ``root`` and check containment.

    Leading slashes are stripped so that ``"/docs"`` means ``<root>/docs``.
    The returned path is not canonicalized: renaming a symlink must rename
    the link itself, not its target.
    """
    path = Path(root)
    for part in parts:
        path = path / part.lstrip("/\\")
    check_access(path, root)
    return path
