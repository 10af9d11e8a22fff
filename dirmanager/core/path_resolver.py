import os
from pathlib import Path
from typing import Union

from ..config.settings import ContainmentPolicy


class WorkingDirectoryError(Exception):
    """Thư mục làm việc không hợp lệ khi khởi động"""
    pass


class PathOutsideWorkingDirectoryError(ValueError):
    """Đường dẫn nằm ngoài thư mục làm việc (chế độ sandboxed)"""

    def __init__(self, name: str, path: Path):
        super().__init__(f"Path '{name}' is outside the working directory")
        self.name = name
        self.path = path


def validate_working_directory(raw: str) -> Path:
    """Kiểm tra đường dẫn người dùng nhập và trả về đường dẫn tuyệt đối"""
    text = (raw or "").strip()
    if not text:
        raise WorkingDirectoryError("Directory path is empty.")

    path = Path(text).expanduser()

    if not path.exists():
        raise WorkingDirectoryError("Directory does not exist or is not accessible.")

    if not path.is_dir():
        raise WorkingDirectoryError("Path is not a directory.")

    if not os.access(path, os.R_OK):
        raise WorkingDirectoryError("Permission denied.")

    return path.resolve()


class PathResolver:
    """Ghép tên do người dùng nhập vào thư mục làm việc"""

    def __init__(self, working_directory: Union[str, Path],
                 containment: ContainmentPolicy = ContainmentPolicy.UNRESTRICTED):
        self._working_directory = Path(working_directory).resolve()
        self.containment = containment

    @property
    def working_directory(self) -> Path:
        return self._working_directory

    def resolve(self, name: str) -> Path:
        """Ghép name vào thư mục làm việc.

        Tên tuyệt đối thay thế thư mục gốc (theo ngữ nghĩa join của hệ điều hành).
        Ở chế độ SANDBOXED, đường dẫn thoát ra ngoài thư mục làm việc sẽ bị từ chối.
        """
        candidate = self._working_directory / name

        if self.containment is ContainmentPolicy.SANDBOXED and not self.is_contained(candidate):
            raise PathOutsideWorkingDirectoryError(name, candidate)

        return candidate

    def is_contained(self, path: Union[str, Path]) -> bool:
        """Kiểm tra path có nằm trong thư mục làm việc không (tránh path traversal)"""
        try:
            target = Path(path).resolve()
        except (OSError, ValueError):
            # Không resolve được (tên quá dài, ký tự NUL, vòng lặp symlink)
            return False

        try:
            target.relative_to(self._working_directory)
            return True
        except ValueError:
            return False

    def is_working_directory(self, path: Union[str, Path]) -> bool:
        try:
            return Path(path).resolve() == self._working_directory
        except (OSError, ValueError):
            return False
