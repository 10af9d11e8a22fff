import fnmatch
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..config.settings import CaseSensitivity
from ..core.directory_lister import DirectoryLister
from ..core.models import DirectoryEntry

logger = logging.getLogger(__name__)


class SearchEngine:
    """Name search over the immediate children of a directory.

    A term matches when the file name matches the glob ``*term*``. Glob
    metacharacters inside the term keep their meaning, so ``*.txt`` works
    as well as ``.txt``. An empty term matches every entry.
    """

    def __init__(self, lister: Optional[DirectoryLister] = None,
                 case_sensitivity: CaseSensitivity = CaseSensitivity.HOST):
        self.lister = lister or DirectoryLister()
        self.case_sensitivity = case_sensitivity

    @staticmethod
    def build_pattern(term: str) -> str:
        return f"*{term}*"

    def search(self, directory: Union[str, Path], term: str) -> List[DirectoryEntry]:
        """Return entries of ``directory`` whose name contains ``term``.

        Raises DirectoryListingError if the directory cannot be read.
        """
        pattern = self.build_pattern(term)
        entries = self.lister.list_directory(directory)
        results = [entry for entry in entries if self._match_pattern(entry.name, pattern)]

        logger.info(f"Search for '{term}' in {directory} matched {len(results)} of {len(entries)} entries")
        return results

    def _match_pattern(self, filename: str, pattern: str) -> bool:
        if self.case_sensitivity is CaseSensitivity.SENSITIVE:
            return fnmatch.fnmatchcase(filename, pattern)
        if self.case_sensitivity is CaseSensitivity.INSENSITIVE:
            return fnmatch.fnmatchcase(filename.lower(), pattern.lower())
        # HOST: fnmatch follows os.path.normcase
        return fnmatch.fnmatch(filename, pattern)
