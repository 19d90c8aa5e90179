"""Tests for the ordered stage builder."""

import pytest

from wpspawn.compiler.stages import StagedList


class TestStagedList:
    """Test StagedList."""

    def test_build_concatenates_in_order(self):
        """Test that stages are flattened in insertion order."""
        staged = StagedList().add("a", [1, 2]).add("b", []).add("c", [3])

        assert staged.build() == [1, 2, 3]
        assert list(staged) == [1, 2, 3]
        assert len(staged) == 3

    def test_names(self):
        """Test stage names with and without empty stages."""
        staged = StagedList().add("a", [1]).add("b", []).add("c", [3])

        assert staged.names() == ["a", "b", "c"]
        assert staged.active_names() == ["a", "c"]

    def test_get_stage(self):
        """Test reading a single stage."""
        staged = StagedList().add("a", [1]).add("b", [2, 3])

        assert staged.get("b") == [2, 3]
        with pytest.raises(KeyError):
            staged.get("missing")

    def test_duplicate_stage_rejected(self):
        """Test that stage names are unique."""
        staged = StagedList().add("a", [1])

        with pytest.raises(ValueError):
            staged.add("a", [2])

    def test_items_are_snapshotted(self):
        """Test that later changes to the source list are not seen."""
        items = [1]
        staged = StagedList().add("a", items)
        items.append(2)

        assert staged.build() == [1]
