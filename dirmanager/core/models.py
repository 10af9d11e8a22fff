from pathlib import Path
from datetime import datetime
from typing import Optional
from dataclasses import dataclass
from enum import Enum


class OperationStatus(Enum):
    """Enum cho kết quả của các thao tác file/thư mục"""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    NOT_EMPTY = "not_empty"
    NOT_A_FILE = "not_a_file"
    REJECTED = "rejected"
    IO_FAILURE = "io_failure"


@dataclass(frozen=True)
class DirectoryEntry:
    """Một phần tử con trực tiếp của thư mục"""
    name: str
    size: int
    modified: datetime
    is_dir: bool = False


@dataclass(frozen=True)
class OperationResult:
    """Kết quả của một thao tác đơn (không có trạng thái thành công một phần)"""
    status: OperationStatus
    message: str
    path: Optional[Path] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    @classmethod
    def success(cls, message: str, path: Optional[Path] = None) -> 'OperationResult':
        return cls(OperationStatus.SUCCESS, message, path)

    @classmethod
    def failure(cls, status: OperationStatus, message: str,
                path: Optional[Path] = None,
                error: Optional[BaseException] = None) -> 'OperationResult':
        return cls(status, message, path, error)

    @classmethod
    def io_failure(cls, message: str, path: Optional[Path], error: OSError) -> 'OperationResult':
        reason = error.strerror or str(error)
        return cls(OperationStatus.IO_FAILURE, f"{message}: {reason}", path, error)

    @classmethod
    def invalid_name(cls, path: Optional[Path], error: ValueError) -> 'OperationResult':
        return cls(OperationStatus.REJECTED, "Invalid file name", path, error)
