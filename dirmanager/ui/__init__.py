"""
UI module for DirManager
Contains the console menu and command dispatcher
"""

from .command_dispatcher import Command, CommandDispatcher

__all__ = [
    'Command',
    'CommandDispatcher'
]

__version__ = '1.0.0'
