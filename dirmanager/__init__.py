"""
DirManager Application
An interactive, menu-driven manager for a single directory

Version: 1.0.0
License: MIT
"""

from .config import APP_NAME, APP_VERSION

__title__ = APP_NAME
__version__ = APP_VERSION
__license__ = 'MIT'

# Main application modules
from .core import (
    DirectoryEntry,
    DirectoryLister,
    DirectoryListingError,
    FileOperations,
    OperationResult,
    OperationStatus,
    PathResolver,
)
from .utils import FileUtils, SearchEngine, OperationLog
from .ui import CommandDispatcher
from .config import SettingsManager

__all__ = [
    # Core modules
    'DirectoryEntry',
    'DirectoryLister',
    'DirectoryListingError',
    'FileOperations',
    'OperationResult',
    'OperationStatus',
    'PathResolver',

    # UI modules
    'CommandDispatcher',

    # Utility modules
    'FileUtils',
    'SearchEngine',
    'OperationLog',

    # Configuration
    'SettingsManager'
]
