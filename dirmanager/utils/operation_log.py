"""
Append-only diagnostic log for failed operations.

The log is an explicit collaborator: it is opened at startup, handed to the
command dispatcher and closed on exit. Nothing written here reaches the
interactive console.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..core.models import OperationResult, OperationStatus

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ROOT_LOGGER_NAME = 'dirmanager'


class OperationLog:
    """File-backed logging collaborator with an open/close lifecycle"""

    def __init__(self, log_dir: Union[str, Path] = "logs",
                 log_file: str = "filemanager.log",
                 level: Union[int, str] = logging.INFO):
        self.log_dir = Path(log_dir)
        self.log_path = self.log_dir / log_file
        self.level = logging.getLevelName(level) if isinstance(level, str) else level
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.operations")
        self._root = logging.getLogger(ROOT_LOGGER_NAME)
        self._handler: Optional[logging.FileHandler] = None
        self._previous_propagate = True
        self._previous_level = logging.NOTSET

    @property
    def is_open(self) -> bool:
        return self._handler is not None

    def open(self) -> 'OperationLog':
        """Create the log directory and attach the file handler"""
        if self._handler is not None:
            return self

        self.log_dir.mkdir(parents=True, exist_ok=True)

        # delay=True: the file is created on the first record
        handler = logging.FileHandler(self.log_path, mode='a', encoding='utf-8', delay=True)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(self.level)

        self._previous_propagate = self._root.propagate
        self._previous_level = self._root.level
        self._root.addHandler(handler)
        self._root.setLevel(self.level)
        self._root.propagate = False
        self._handler = handler

        self.logger.info("Operation log opened")
        return self

    def close(self):
        """Flush, detach and close the file handler"""
        if self._handler is None:
            return

        self.logger.info("Operation log closed")
        self._handler.flush()
        self._root.removeHandler(self._handler)
        self._handler.close()
        self._root.propagate = self._previous_propagate
        self._root.setLevel(self._previous_level)
        self._handler = None

    def record_failure(self, context: str, error: Optional[BaseException] = None,
                       level: int = logging.ERROR):
        """Record a failure with its underlying error detail"""
        if error is None:
            self.logger.log(level, context)
        else:
            self.logger.log(level, f"{context}: {error}", exc_info=error)

    def record_result(self, context: str, result: OperationResult):
        if result.ok:
            self.logger.info(f"{context}: {result.message} ({result.path})")
            return

        level = logging.ERROR if result.status is OperationStatus.IO_FAILURE else logging.WARNING
        message = f"{context} failed [{result.status.value}]: {result.message} ({result.path})"
        self.record_failure(message, result.error, level)

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
