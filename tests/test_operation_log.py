"""Tests for the OperationLog collaborator."""

import errno
import logging

from dirmanager.core.models import OperationResult, OperationStatus
from dirmanager.utils.operation_log import OperationLog


def _read(log):
    for handler in logging.getLogger("dirmanager").handlers:
        handler.flush()
    return log.log_path.read_text(encoding="utf-8")


class TestOperationLog:
    """Lifecycle and record formatting."""

    def test_open_creates_log_directory(self, tmp_path):
        """The log directory exists once the log is opened."""
        log = OperationLog(tmp_path / "logs")
        with log:
            assert (tmp_path / "logs").is_dir()
            assert log.is_open
        assert not log.is_open

    def test_record_failure_includes_error_detail(self, operation_log):
        """Severity, message and the underlying error are written."""
        error = FileNotFoundError(errno.ENOENT, "No such file or directory", "x.txt")

        operation_log.record_failure("Copy failed", error)

        text = _read(operation_log)
        assert "ERROR" in text
        assert "Copy failed" in text
        assert "No such file or directory" in text

    def test_record_result_levels(self, operation_log):
        """IO failures are errors, other failures are warnings."""
        operation_log.record_result("Delete directory", OperationResult.failure(
            OperationStatus.NOT_EMPTY, "Directory not empty"))
        operation_log.record_result("Copy", OperationResult.io_failure(
            "Error copying", None, PermissionError(errno.EACCES, "Permission denied")))

        text = _read(operation_log)
        assert "WARNING - Delete directory failed [not_empty]" in text
        assert "ERROR - Copy failed [io_failure]" in text

    def test_appends_across_sessions(self, tmp_path):
        """Reopening the log keeps earlier records."""
        with OperationLog(tmp_path / "logs") as log:
            log.record_failure("first session")
        with OperationLog(tmp_path / "logs") as log:
            log.record_failure("second session")

        text = log.log_path.read_text(encoding="utf-8")
        assert "first session" in text
        assert "second session" in text

    def test_close_detaches_handler(self, tmp_path):
        """No handler stays on the package logger after close."""
        root = logging.getLogger("dirmanager")
        before = list(root.handlers)

        log = OperationLog(tmp_path / "logs").open()
        assert len(root.handlers) == len(before) + 1
        log.close()

        assert root.handlers == before
