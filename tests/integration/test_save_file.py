"""Integration tests for save_file."""

from __future__ import annotations

import pytest

from ordinal_tree.exceptions import ErrorKind
from ordinal_tree.operations import save_file

pytestmark = pytest.mark.integration


class TestSaveFile:
    """Tests for plain saves and renames."""

    def test_overwrite(self, tree_factory):
        root = tree_factory({"docs": {"0001_a.md": "old"}})

        result = save_file(root, tree_folder="/docs", filename="0001_a.md", content="new")

        assert result.success
        assert result.message == "File saved successfully"
        assert (root / "docs" / "0001_a.md").read_text() == "new"

    def test_creates_missing_file(self, tree_factory):
        root = tree_factory({"docs": {}})

        result = save_file(root, tree_folder="/docs", filename="0003_new.md", content="hello")

        assert result.success
        assert (root / "docs" / "0003_new.md").read_text() == "hello"

    def test_rename_then_write(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": "old"}})

        result = save_file(
            root, tree_folder="/docs", filename="0001_a.md", content="new", new_file_name="0001_b.md"
        )

        assert result.success
        assert result.file_name == "0001_b.md"
        assert listing(root / "docs") == ["0001_b.md"]
        assert (root / "docs" / "0001_b.md").read_text() == "new"

    def test_rename_adds_default_extension(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": "old"}})

        save_file(root, tree_folder="/docs", filename="0001_a.md", content="x", new_file_name="0001_b")

        assert listing(root / "docs") == ["0001_b.md"]

    def test_rename_conflict(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": "a", "0002_b.md": "b"}})

        result = save_file(
            root, tree_folder="/docs", filename="0001_a.md", content="x", new_file_name="0002_b.md"
        )

        assert not result.success
        assert result.error.kind is ErrorKind.CONFLICT
        assert result.message == "A file with the new name already exists"
        assert (root / "docs" / "0002_b.md").read_text() == "b"
        assert listing(root / "docs") == ["0001_a.md", "0002_b.md"]

    def test_missing_folder(self, tree_root):
        result = save_file(tree_root, tree_folder="/nope", filename="0001_a.md", content="x")

        assert result.error.kind is ErrorKind.NOT_FOUND
        assert result.error.status_code == 404

    def test_target_is_directory(self, tree_factory):
        root = tree_factory({"docs": {"0001_sub": {}}})

        result = save_file(root, tree_folder="/docs", filename="0001_sub", content="x")

        assert result.error.kind is ErrorKind.NOT_A_FILE

    def test_rename_of_folder_rejected_before_renaming(self, tree_factory, listing):
        """Test that a folder target fails without being renamed."""
        root = tree_factory({"docs": {"0002_sub": {"0001_x.md": "x"}}})

        result = save_file(
            root, tree_folder="/docs", filename="0002_sub", content="c", new_file_name="0002_renamed.md"
        )

        assert result.error.kind is ErrorKind.NOT_A_FILE
        assert listing(root / "docs") == ["0002_sub"]
        assert (root / "docs" / "0002_sub" / "0001_x.md").read_text() == "x"

    def test_path_outside_root(self, tree_factory):
        root = tree_factory({"docs": {}})

        result = save_file(root, tree_folder="/docs", filename="../../escape.md", content="x")

        assert result.error.kind is ErrorKind.ACCESS_DENIED
        assert not (root.parent / "escape.md").exists()


class TestSaveFileSplit:
    """Tests for splitting content into ordered siblings."""

    def test_split_shifts_following_siblings(self, tree_factory, listing):
        """Test three parts written at 5..7 with the old 6 pushed to 8."""
        root = tree_factory({"docs": {"0005_note.md": "old", "0006_other.md": "other"}})

        result = save_file(
            root, tree_folder="/docs", filename="0005_note.md", content="X\n~\nY\n~\nZ", split=True
        )

        docs = root / "docs"
        assert result.success
        assert result.parts_written == ["0005_note.md", "0006_note.md", "0007_note.md"]
        assert listing(docs) == ["0005_note.md", "0006_note.md", "0007_note.md", "0008_other.md"]
        assert (docs / "0005_note.md").read_text() == "X"
        assert (docs / "0006_note.md").read_text() == "Y"
        assert (docs / "0007_note.md").read_text() == "Z"
        assert (docs / "0008_other.md").read_text() == "other"

    def test_split_parts_are_stripped(self, tree_factory):
        root = tree_factory({"docs": {"0001_a.md": ""}})

        save_file(root, tree_folder="/docs", filename="0001_a.md", content="  one  \n~\n\n two\n", split=True)

        assert (root / "docs" / "0001_a.md").read_text() == "one"
        assert (root / "docs" / "0002_a.md").read_text() == "two"

    def test_split_reports_renamed_folders(self, tree_factory):
        root = tree_factory({"docs": {"0001_a.md": "", "0002_sub": {"0001_x.md": "x"}}})

        result = save_file(root, tree_folder="/docs", filename="0001_a.md", content="A\n~\nB", split=True)

        assert result.path_map == {"docs/0002_sub": "docs/0003_sub"}
        assert (root / "docs" / "0003_sub" / "0001_x.md").read_text() == "x"

    def test_split_without_delimiter(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": ""}})

        result = save_file(root, tree_folder="/docs", filename="0001_a.md", content="just text", split=True)

        assert result.success
        assert result.message == "File saved successfully (no split delimiter found)"
        assert listing(root / "docs") == ["0001_a.md"]

    def test_delimiter_ignored_without_split(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": ""}})

        save_file(root, tree_folder="/docs", filename="0001_a.md", content="A\n~\nB")

        assert listing(root / "docs") == ["0001_a.md"]
        assert (root / "docs" / "0001_a.md").read_text() == "A\n~\nB"
