"""Tests for DirectoryLister."""

import os
from datetime import datetime

import pytest

from dirmanager.core.directory_lister import DirectoryLister, DirectoryListingError


class TestDirectoryLister:
    """Listing immediate children with metadata."""

    def test_lists_immediate_children(self, lister, working_dir):
        """Files and subdirectories appear, nested entries do not."""
        (working_dir / "sub" / "nested.txt").write_text("hidden deeper")

        names = {entry.name for entry in lister.list_directory(working_dir)}

        assert names == {"a.txt", "b.log", "sub"}

    def test_entry_metadata(self, lister, working_dir):
        """Size is in bytes and the timestamp matches the file mtime."""
        mtime = datetime(2024, 1, 2, 3, 4, 5).timestamp()
        os.utime(working_dir / "a.txt", (mtime, mtime))

        entries = {entry.name: entry for entry in lister.list_directory(working_dir)}

        assert entries["a.txt"].size == len("alpha content")
        assert entries["a.txt"].modified == datetime(2024, 1, 2, 3, 4, 5)
        assert entries["a.txt"].is_dir is False
        assert entries["sub"].is_dir is True

    def test_empty_directory(self, lister, working_dir):
        """An empty directory lists nothing."""
        assert lister.list_directory(working_dir / "sub") == []

    def test_missing_directory_raises(self, lister, working_dir):
        """A vanished directory surfaces as DirectoryListingError."""
        with pytest.raises(DirectoryListingError) as exc_info:
            lister.list_directory(working_dir / "gone")

        assert isinstance(exc_info.value.error, FileNotFoundError)

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
    def test_dangling_symlink_is_listed(self, lister, working_dir):
        """A broken symlink does not break the listing."""
        try:
            os.symlink(working_dir / "missing-target", working_dir / "broken")
        except OSError:
            pytest.skip("cannot create symlinks here")

        names = {entry.name for entry in lister.list_directory(working_dir)}

        assert "broken" in names
