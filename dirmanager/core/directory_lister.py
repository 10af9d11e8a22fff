import logging
from pathlib import Path
from datetime import datetime
from typing import List, Union

from .models import DirectoryEntry

logger = logging.getLogger(__name__)


class DirectoryListingError(Exception):
    """Không thể liệt kê thư mục (mất quyền truy cập, bị xóa đồng thời...)"""

    def __init__(self, directory: Path, error: OSError):
        reason = error.strerror or str(error)
        super().__init__(f"Cannot list {directory}: {reason}")
        self.directory = directory
        self.error = error


class DirectoryLister:
    """Liệt kê các phần tử con trực tiếp của một thư mục"""

    def list_directory(self, directory: Union[str, Path]) -> List[DirectoryEntry]:
        """Liệt kê nội dung thư mục theo thứ tự của hệ thống file (không sắp xếp)"""
        dir_path = Path(directory)
        entries = []

        try:
            for item in dir_path.iterdir():
                entries.append(self._make_entry(item))
        except OSError as e:
            logger.debug(f"Listing {dir_path} failed: {e}")
            raise DirectoryListingError(dir_path, e) from e

        return entries

    def _make_entry(self, item: Path) -> DirectoryEntry:
        try:
            stat_info = item.stat()
        except FileNotFoundError:
            # Symlink hỏng: dùng thông tin của chính link
            if not item.is_symlink():
                raise
            stat_info = item.lstat()

        return DirectoryEntry(
            name=item.name,
            size=stat_info.st_size,
            modified=datetime.fromtimestamp(stat_info.st_mtime),
            is_dir=item.is_dir(),
        )
