import logging
from pathlib import Path
from typing import Optional, Union

import psutil  # để kiểm tra dung lượng ổ đĩa trước khi copy


class FileUtils:
    """Lớp tiện ích cho hiển thị và kiểm tra dung lượng"""

    # Logger
    logger = logging.getLogger(__name__)

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Định dạng kích thước theo đơn vị 1024 (KiB, MiB...)"""
        size_names = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]
        i = 0
        size = float(size_bytes)
        while size >= 1024 and i < len(size_names) - 1:
            size /= 1024
            i += 1

        return f"{size:.1f} {size_names[i]}"

    @staticmethod
    def get_free_space(path: Union[str, Path]) -> Optional[int]:
        """Dung lượng trống (bytes) của ổ chứa path, None nếu không xác định được"""
        try:
            return psutil.disk_usage(str(path)).free
        except (OSError, ValueError) as e:
            FileUtils.logger.debug(f"Cannot read disk usage for {path}: {e}")
            return None

    @staticmethod
    def format_entry_row(entry,
                         name_width: int = 30,
                         size_width: int = 10,
                         timestamp_format: str = "%Y-%m-%d %H:%M:%S") -> str:
        """Một dòng listing: tên (thư mục có hậu tố '/'), kích thước bytes, thời gian sửa"""
        name = entry.name + "/" if entry.is_dir else entry.name
        modified = entry.modified.strftime(timestamp_format)
        return f"{name:<{name_width}} Size: {entry.size:<{size_width}} Last Modified: {modified}"
