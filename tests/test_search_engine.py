"""Tests for SearchEngine name matching."""

import pytest

from dirmanager.config.settings import CaseSensitivity
from dirmanager.core.directory_lister import DirectoryListingError
from dirmanager.utils.search_engine import SearchEngine


class TestSearchEngine:
    """Substring / glob search over immediate children."""

    def test_extension_term(self, working_dir):
        """'.txt' only matches a.txt."""
        results = SearchEngine().search(working_dir, ".txt")
        assert [entry.name for entry in results] == ["a.txt"]

    def test_empty_term_matches_listing(self, lister, working_dir):
        """An empty term returns the same entries as a listing."""
        results = SearchEngine(lister).search(working_dir, "")
        assert set(results) == set(lister.list_directory(working_dir))

    def test_hidden_files_match_empty_term(self, working_dir):
        """Dot files are not special-cased."""
        (working_dir / ".hidden").write_text("")
        names = {entry.name for entry in SearchEngine().search(working_dir, "")}
        assert ".hidden" in names

    def test_glob_characters_are_honoured(self, working_dir):
        """Wildcards inside the term keep their glob meaning."""
        names = {entry.name for entry in SearchEngine().search(working_dir, "?.log")}
        assert names == {"b.log"}

    def test_non_recursive(self, working_dir):
        """Nested files never appear in results."""
        (working_dir / "sub" / "deep.txt").write_text("")
        names = {entry.name for entry in SearchEngine().search(working_dir, "deep")}
        assert names == set()

    def test_no_match(self, working_dir):
        """A term matching nothing yields an empty list."""
        assert SearchEngine().search(working_dir, "zzz") == []

    def test_case_sensitive(self, working_dir):
        """Sensitive mode distinguishes letter case."""
        engine = SearchEngine(case_sensitivity=CaseSensitivity.SENSITIVE)
        assert engine.search(working_dir, "A.TXT") == []

    def test_case_insensitive(self, working_dir):
        """Insensitive mode ignores letter case."""
        engine = SearchEngine(case_sensitivity=CaseSensitivity.INSENSITIVE)
        assert [entry.name for entry in engine.search(working_dir, "A.TXT")] == ["a.txt"]

    def test_missing_directory_raises(self, working_dir):
        """Listing errors propagate unchanged."""
        with pytest.raises(DirectoryListingError):
            SearchEngine().search(working_dir / "gone", "a")
