import os
import errno
import shutil
import logging
import tempfile
from pathlib import Path
from typing import Optional, Union

from .models import OperationResult, OperationStatus
from ..utils.file_utils import FileUtils

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileOperations:
    """Class xử lý các thao tác file cơ bản (một đối tượng, không đệ quy)

    Copy/move ghi đè đích đã tồn tại mà không hỏi lại (replace-existing).
    Việc xác nhận ghi đè, nếu có, thuộc về tầng giao diện.
    Mọi lỗi OSError/ValueError (tên quá dài, ký tự NUL, không có quyền...)
    đều được trả về dưới dạng OperationResult, không bao giờ ném ra ngoài.
    """

    def __init__(self, check_free_space: bool = True):
        self.check_free_space = check_free_space

    def destination_for(self, source: PathLike, destination: PathLike) -> Path:
        """Đường dẫn thực sự sẽ được ghi khi copy/move source tới destination"""
        dest_path = Path(destination)
        try:
            if dest_path.is_dir():
                return dest_path / Path(source).name
        except (OSError, ValueError):
            pass
        return dest_path

    def check_source(self, source: PathLike) -> Optional[OperationResult]:
        """Kiểm tra file nguồn của copy/move, trả về None nếu hợp lệ"""
        src_path = Path(source)
        try:
            return self._check_source(src_path)
        except ValueError as e:
            return OperationResult.invalid_name(src_path, e)
        except OSError as e:
            return OperationResult.io_failure("Cannot access source", src_path, e)

    def copy_file(self, source: PathLike, destination: PathLike) -> OperationResult:
        """Sao chép file, ghi đè file đích nếu đã tồn tại"""
        src_path = Path(source)
        dest_path = Path(destination)
        try:
            failure = self._check_source(src_path)
            if failure:
                return failure

            dest_path = self.destination_for(src_path, destination)
            if not dest_path.parent.is_dir():
                return OperationResult.failure(OperationStatus.NOT_FOUND,
                                               "Destination directory not found", dest_path)

            if dest_path.exists() and dest_path.samefile(src_path):
                return OperationResult.success("Source and destination are the same file", dest_path)

            failure = self._check_space(src_path, dest_path)
            if failure:
                return failure

            shutil.copy2(src_path, dest_path)
        except ValueError as e:
            return OperationResult.invalid_name(dest_path, e)
        except OSError as e:
            return OperationResult.io_failure("Error copying", dest_path, e)

        logger.info(f"Copied {src_path} -> {dest_path}")
        return OperationResult.success("File copied successfully", dest_path)

    def move_file(self, source: PathLike, destination: PathLike) -> OperationResult:
        """Di chuyển file, ghi đè file đích nếu đã tồn tại"""
        src_path = Path(source)
        dest_path = Path(destination)
        try:
            failure = self._check_source(src_path)
            if failure:
                return failure

            dest_path = self.destination_for(src_path, destination)
            if not dest_path.parent.is_dir():
                return OperationResult.failure(OperationStatus.NOT_FOUND,
                                               "Destination directory not found", dest_path)

            try:
                os.replace(src_path, dest_path)
            except OSError as e:
                if e.errno != errno.EXDEV:
                    raise
                return self._move_across_devices(src_path, dest_path)
        except ValueError as e:
            return OperationResult.invalid_name(dest_path, e)
        except OSError as e:
            return OperationResult.io_failure("Error moving", dest_path, e)

        logger.info(f"Moved {src_path} -> {dest_path}")
        return OperationResult.success("File moved successfully", dest_path)

    def _move_across_devices(self, src_path: Path, dest_path: Path) -> OperationResult:
        """Copy sang file tạm cạnh đích, rename atomic, rồi mới xóa file nguồn"""
        logger.debug(f"Cross-device move {src_path} -> {dest_path}, copying instead")

        temp_file = None
        try:
            failure = self._check_space(src_path, dest_path)
            if failure:
                return failure

            fd, temp_name = tempfile.mkstemp(prefix=f".{dest_path.name}.", suffix=".part",
                                             dir=str(dest_path.parent))
            os.close(fd)
            temp_file = Path(temp_name)

            shutil.copy2(src_path, temp_file)
            with open(temp_file, 'rb+') as f:
                os.fsync(f.fileno())

            os.replace(temp_file, dest_path)
            temp_file = None
        except OSError as e:
            return OperationResult.io_failure("Error moving", dest_path, e)
        finally:
            if temp_file is not None:
                try:
                    temp_file.unlink()
                except OSError as e:
                    logger.warning(f"Could not remove temporary file {temp_file}: {e}")

        try:
            src_path.unlink()
        except OSError as e:
            return OperationResult.io_failure("File copied but source could not be removed",
                                              src_path, e)

        logger.info(f"Moved {src_path} -> {dest_path} (copy and delete)")
        return OperationResult.success("File moved successfully", dest_path)

    def delete_file(self, target: PathLike) -> OperationResult:
        """Xóa một file (không xóa thư mục)"""
        file_path = Path(target)
        try:
            if not file_path.exists() and not file_path.is_symlink():
                return OperationResult.failure(OperationStatus.NOT_FOUND, "File not found", file_path)

            if file_path.is_dir() and not file_path.is_symlink():
                return OperationResult.failure(OperationStatus.NOT_A_FILE,
                                               "Path is a directory, use Delete Directory", file_path)

            file_path.unlink()
        except ValueError as e:
            return OperationResult.invalid_name(file_path, e)
        except OSError as e:
            return OperationResult.io_failure("Error deleting", file_path, e)

        logger.info(f"Deleted file {file_path}")
        return OperationResult.success("File deleted successfully", file_path)

    def create_directory(self, target: PathLike) -> OperationResult:
        """Tạo đúng một cấp thư mục (thư mục cha phải tồn tại)"""
        dir_path = Path(target)
        try:
            if dir_path.exists() or dir_path.is_symlink():
                return OperationResult.failure(OperationStatus.ALREADY_EXISTS,
                                               "Directory already exists", dir_path)

            dir_path.mkdir()
        except FileExistsError as e:
            return OperationResult.failure(OperationStatus.ALREADY_EXISTS,
                                           "Directory already exists", dir_path, e)
        except FileNotFoundError as e:
            return OperationResult.failure(OperationStatus.NOT_FOUND,
                                           "Parent directory not found", dir_path, e)
        except ValueError as e:
            return OperationResult.invalid_name(dir_path, e)
        except OSError as e:
            return OperationResult.io_failure("Error creating directory", dir_path, e)

        logger.info(f"Created directory {dir_path}")
        return OperationResult.success("Directory created successfully", dir_path)

    def delete_directory(self, target: PathLike) -> OperationResult:
        """Xóa thư mục rỗng (không bao giờ xóa đệ quy)"""
        dir_path = Path(target)
        try:
            if dir_path.is_symlink() or not dir_path.is_dir():
                return OperationResult.failure(OperationStatus.NOT_FOUND,
                                               "Directory not found", dir_path)

            with os.scandir(dir_path) as it:
                has_entries = any(True for _ in it)
            if has_entries:
                return OperationResult.failure(OperationStatus.NOT_EMPTY,
                                               "Directory not empty", dir_path)

            dir_path.rmdir()
        except ValueError as e:
            return OperationResult.invalid_name(dir_path, e)
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                return OperationResult.failure(OperationStatus.NOT_EMPTY,
                                               "Directory not empty", dir_path, e)
            return OperationResult.io_failure("Error deleting directory", dir_path, e)

        logger.info(f"Deleted directory {dir_path}")
        return OperationResult.success("Directory deleted successfully", dir_path)

    def _check_source(self, src_path: Path) -> Optional[OperationResult]:
        if not src_path.exists():
            return OperationResult.failure(OperationStatus.NOT_FOUND, "File not found", src_path)
        if src_path.is_dir():
            return OperationResult.failure(OperationStatus.NOT_A_FILE,
                                           "Source is a directory", src_path)
        return None

    def _check_space(self, src_path: Path, dest_path: Path) -> Optional[OperationResult]:
        """Từ chối copy nếu ổ đích không đủ chỗ trống"""
        if not self.check_free_space:
            return None

        free = FileUtils.get_free_space(dest_path.parent)
        if free is None:
            return None

        needed = src_path.stat().st_size
        if dest_path.is_file():
            # File đích cũ sẽ bị thay thế
            needed -= dest_path.stat().st_size

        if needed > free:
            return OperationResult.failure(
                OperationStatus.IO_FAILURE,
                f"Not enough free space ({FileUtils.format_file_size(free)} available)",
                dest_path)
        return None
