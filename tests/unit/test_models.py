"""Unit tests for request and result models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ordinal_tree.models import MAX_FOLDER_NAME_LENGTH
from ordinal_tree.models import DeleteRequest
from ordinal_tree.models import Direction
from ordinal_tree.models import JoinRequest
from ordinal_tree.models import MakeFolderRequest
from ordinal_tree.models import MoveRequest
from ordinal_tree.models import PasteRequest
from ordinal_tree.models import SaveFileRequest


class TestRequestValidation:
    """Tests for required and optional request fields."""

    def test_save_file_defaults(self):
        request = SaveFileRequest(tree_folder="/docs", filename="0001_a.md", content="")

        assert request.new_file_name is None
        assert request.split is False

    def test_blank_filename_rejected(self):
        with pytest.raises(ValidationError):
            SaveFileRequest(tree_folder="/docs", filename=" ", content="x")

    def test_direction_parsed(self):
        request = MoveRequest(tree_folder="/docs", filename="0001_a.md", direction="down")

        assert request.direction is Direction.DOWN

    def test_delete_needs_names(self):
        with pytest.raises(ValidationError):
            DeleteRequest(tree_folder="/docs", names=[])

    def test_join_needs_two_files(self):
        with pytest.raises(ValidationError):
            JoinRequest(tree_folder="/docs", filenames=["0001_a.md"])

    def test_paste_target_ordinal_forms(self):
        """Test that the target ordinal accepts numbers and names."""
        assert PasteRequest(target_folder="/", items=["/a.md"], target_ordinal=3).target_ordinal == 3
        named = PasteRequest(target_folder="/", items=["/a.md"], target_ordinal="0003_x.md")
        assert named.target_ordinal == "0003_x.md"
        assert PasteRequest(target_folder="/", items=["/a.md"]).target_ordinal is None

    def test_folder_name_length_limit(self):
        MakeFolderRequest(tree_folder="/", filename="0001_a.md", folder_name="x" * MAX_FOLDER_NAME_LENGTH)

        with pytest.raises(ValidationError):
            MakeFolderRequest(
                tree_folder="/", filename="0001_a.md", folder_name="x" * (MAX_FOLDER_NAME_LENGTH + 1)
            )
