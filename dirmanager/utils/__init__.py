"""
Utils module for DirManager
Contains utility functions and helper classes
"""

from .file_utils import FileUtils
from .search_engine import SearchEngine
from .operation_log import OperationLog

__all__ = [
    'FileUtils',
    'SearchEngine',
    'OperationLog'
]

__version__ = '1.0.0'
