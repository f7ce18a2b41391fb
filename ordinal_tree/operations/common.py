"""Lookups shared by the tree operations."""

from pathlib import Path

from ..access import resolve_in_root
from ..exceptions import NodeNotFoundError
from ..exceptions import NotAFileError
from ..exceptions import NotAFolderError


def require_folder(root: Path, tree_folder: str, node_type: str = "Parent directory") -> Path:
    """Resolve ``tree_folder`` and check that it is an existing directory."""
    folder = resolve_in_root(root, tree_folder)
    if not folder.exists():
        raise NodeNotFoundError(tree_folder, node_type)
    if not folder.is_dir():
        raise NotAFolderError(tree_folder)
    return folder


def require_file(root: Path, tree_folder: str, filename: str) -> Path:
    path = resolve_in_root(root, tree_folder, filename)
    if not path.exists():
        raise NodeNotFoundError(filename, "File")
    if not path.is_file():
        raise NotAFileError(filename)
    return path
