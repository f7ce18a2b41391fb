"""Ordinal-ordered document tree mutation engine.

Files and folders are ordered inside their parent by a zero-padded numeric
name prefix (``0007_notes.md``). This package inserts, reorders, splits,
joins, converts and moves such entries while keeping sibling ordinals
unique, using nothing but renames, writes and deletes.

Usage:
    from ordinal_tree import TreeMutator

    tree = TreeMutator("/srv/docs")
    result = tree.move_up_or_down(tree_folder="/guide", filename="0002_setup.md", direction="up")
    if not result.success:
        print(result.error.kind, result.message)
"""

from .access import check_access
from .exceptions import ErrorKind
from .exceptions import TreeError
from .models import Direction
from .models import OperationStatus
from .mutator import TreeMutator
from .operations import delete_file_or_folder
from .operations import join_files
from .operations import make_folder
from .operations import move_up_or_down
from .operations import normalize_ordinals
from .operations import paste_items
from .operations import rename_folder
from .operations import save_file
from .ordering import shift_ordinals_down
from .ordinals import format_ordinal
from .ordinals import is_ordinal_name
from .ordinals import parse_name
from .remap import PathRemapper

__version__ = "0.1.0"

__all__ = [
    "TreeMutator",
    "ErrorKind",
    "TreeError",
    "Direction",
    "OperationStatus",
    "PathRemapper",
    "check_access",
    "format_ordinal",
    "is_ordinal_name",
    "parse_name",
    "shift_ordinals_down",
    "save_file",
    "rename_folder",
    "delete_file_or_folder",
    "move_up_or_down",
    "paste_items",
    "join_files",
    "make_folder",
    "normalize_ordinals",
]
