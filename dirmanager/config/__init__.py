"""
Config module for DirManager
Contains configuration settings and constants
"""

from .settings import (
    AppSettings,
    SettingsManager,
    SettingsError,
    ContainmentPolicy,
    OverwritePolicy,
    CaseSensitivity,
)

__all__ = [
    'AppSettings',
    'SettingsManager',
    'SettingsError',
    'ContainmentPolicy',
    'OverwritePolicy',
    'CaseSensitivity',
]

__version__ = '1.0.0'

APP_NAME = 'DirManager'
APP_VERSION = '1.0.0'
