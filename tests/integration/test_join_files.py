"""Integration tests for join_files."""

from __future__ import annotations

import pytest

from ordinal_tree.exceptions import ErrorKind
from ordinal_tree.operations import join_files

pytestmark = pytest.mark.integration


class TestJoinFiles:
    """Tests for concatenating siblings."""

    def test_join_in_ordinal_order(self, tree_factory, listing):
        """Test that input order does not matter; the lowest ordinal survives."""
        root = tree_factory({"docs": {"0001_a.md": "A", "0002_b.md": "B"}})

        result = join_files(root, tree_folder="/docs", filenames=["0002_b.md", "0001_a.md"])

        assert result.success
        assert result.joined_file == "0001_a.md"
        assert result.deleted_files == ["0002_b.md"]
        assert result.message == "Successfully joined 2 files into 0001_a.md"
        assert listing(root / "docs") == ["0001_a.md"]
        assert (root / "docs" / "0001_a.md").read_text() == "A\n\nB"

    def test_join_leaves_others_alone(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": "A", "0002_b.md": "B", "0003_c.md": "C", "0004_d.md": "D"}})

        join_files(root, tree_folder="/docs", filenames=["0001_a.md", "0003_c.md"])

        assert listing(root / "docs") == ["0001_a.md", "0002_b.md", "0004_d.md"]
        assert (root / "docs" / "0001_a.md").read_text() == "A\n\nC"

    def test_missing_file_changes_nothing(self, tree_factory, listing):
        root = tree_factory({"docs": {"0001_a.md": "A", "0002_b.md": "B"}})

        result = join_files(root, tree_folder="/docs", filenames=["0001_a.md", "0002_b.md", "0009_z.md"])

        assert result.error.kind is ErrorKind.NOT_FOUND
        assert listing(root / "docs") == ["0001_a.md", "0002_b.md"]
        assert (root / "docs" / "0001_a.md").read_text() == "A"

    def test_duplicate_names_count_once(self, tree_factory):
        root = tree_factory({"docs": {"0001_a.md": "A"}})

        result = join_files(root, tree_folder="/docs", filenames=["0001_a.md", "0001_a.md"])

        assert result.error.kind is ErrorKind.BAD_REQUEST
        assert (root / "docs" / "0001_a.md").read_text() == "A"

    def test_unreadable_file_contributes_empty(self, tree_root, listing):
        docs = tree_root / "docs"
        docs.mkdir()
        (docs / "0001_a.md").write_text("A")
        (docs / "0002_bin.md").write_bytes(b"\xff\xfe\x00")

        result = join_files(tree_root, tree_folder="/docs", filenames=["0001_a.md", "0002_bin.md"])

        assert result.success
        assert result.unreadable_files == ["0002_bin.md"]
        assert (docs / "0001_a.md").read_text() == "A\n\n"
        assert listing(docs) == ["0001_a.md"]

    def test_folder_member_rejected(self, tree_factory):
        root = tree_factory({"docs": {"0001_a.md": "A", "0002_sub": {}}})

        result = join_files(root, tree_folder="/docs", filenames=["0001_a.md", "0002_sub"])

        assert result.error.kind is ErrorKind.NOT_A_FILE
