"""
Core module for DirManager
Contains the directory-operation command layer
"""

from .models import DirectoryEntry, OperationResult, OperationStatus
from .path_resolver import (
    PathResolver,
    PathOutsideWorkingDirectoryError,
    WorkingDirectoryError,
    validate_working_directory,
)
from .directory_lister import DirectoryLister, DirectoryListingError
from .file_operations import FileOperations

__all__ = [
    'DirectoryEntry',
    'OperationResult',
    'OperationStatus',
    'PathResolver',
    'PathOutsideWorkingDirectoryError',
    'WorkingDirectoryError',
    'validate_working_directory',
    'DirectoryLister',
    'DirectoryListingError',
    'FileOperations'
]

__version__ = '1.0.0'
