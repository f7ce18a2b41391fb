"""Tree mutation operations.

Every operation takes the root directory first, followed by its request
model (or a dict, or the request fields as keywords), and returns a result
model. Failures are reported in the result, never raised.
"""

from .delete_ops import delete_file_or_folder
from .file_ops import join_files
from .file_ops import save_file
from .folder_ops import make_folder
from .folder_ops import rename_folder
from .paste_ops import paste_items
from .reorder_ops import move_up_or_down
from .reorder_ops import normalize_ordinals

__all__ = [
    "save_file",
    "rename_folder",
    "delete_file_or_folder",
    "move_up_or_down",
    "paste_items",
    "join_files",
    "make_folder",
    "normalize_ordinals",
]
