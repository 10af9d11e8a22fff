import json
import os
import sys
import shutil
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union
from dataclasses import dataclass, asdict, field
from enum import Enum
from datetime import datetime
import jsonschema
from jsonschema import validate


class ContainmentPolicy(Enum):
    """Enum cho chính sách giới hạn đường dẫn"""
    UNRESTRICTED = "unrestricted"  # Như công cụ quản lý file thông thường
    SANDBOXED = "sandboxed"  # Không cho thoát khỏi thư mục làm việc


class OverwritePolicy(Enum):
    """Enum cho cách xử lý khi copy/move đè lên file đã có"""
    REPLACE = "replace"
    CONFIRM = "confirm"


class CaseSensitivity(Enum):
    """Enum cho chế độ phân biệt hoa thường khi tìm kiếm"""
    HOST = "host"  # Theo hệ điều hành
    SENSITIVE = "sensitive"
    INSENSITIVE = "insensitive"


@dataclass
class PathSettings:
    """Cấu hình đường dẫn"""
    containment: ContainmentPolicy = ContainmentPolicy.UNRESTRICTED


@dataclass
class OperationSettings:
    """Cấu hình thao tác file"""
    overwrite: OverwritePolicy = OverwritePolicy.REPLACE
    check_free_space: bool = True


@dataclass
class SearchSettings:
    """Cấu hình tìm kiếm"""
    case_sensitivity: CaseSensitivity = CaseSensitivity.HOST


@dataclass
class DisplaySettings:
    """Cấu hình hiển thị listing"""
    name_width: int = 30
    size_width: int = 10
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingSettings:
    """Cấu hình log"""
    log_dir: str = "logs"
    log_file: str = "filemanager.log"
    level: str = "INFO"


@dataclass
class AppSettings:
    """Cấu hình tổng thể của ứng dụng"""
    config_version: str = "1.0"
    last_updated: str = field(default_factory=lambda: datetime.now().isoformat())

    paths: PathSettings = field(default_factory=PathSettings)
    operations: OperationSettings = field(default_factory=OperationSettings)
    search: SearchSettings = field(default_factory=SearchSettings)
    display: DisplaySettings = field(default_factory=DisplaySettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def _enum_values(enum_cls) -> list:
    return [member.value for member in enum_cls]


SETTINGS_SCHEMA = {
    "type": "object",
    "properties": {
        "config_version": {"type": "string"},
        "last_updated": {"type": "string"},
        "paths": {
            "type": "object",
            "properties": {
                "containment": {"enum": _enum_values(ContainmentPolicy)}
            }
        },
        "operations": {
            "type": "object",
            "properties": {
                "overwrite": {"enum": _enum_values(OverwritePolicy)},
                "check_free_space": {"type": "boolean"}
            }
        },
        "search": {
            "type": "object",
            "properties": {
                "case_sensitivity": {"enum": _enum_values(CaseSensitivity)}
            }
        },
        "display": {
            "type": "object",
            "properties": {
                "name_width": {"type": "integer", "minimum": 1},
                "size_width": {"type": "integer", "minimum": 1},
                "timestamp_format": {"type": "string", "minLength": 1}
            }
        },
        "logging": {
            "type": "object",
            "properties": {
                "log_dir": {"type": "string", "minLength": 1},
                "log_file": {"type": "string", "minLength": 1},
                "level": {"enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]}
            }
        }
    }
}


class SettingsError(Exception):
    """File cấu hình không hợp lệ"""
    pass


class SettingsManager:
    """Quản lý cấu hình ứng dụng (được truyền tường minh, không dùng singleton)"""

    def __init__(self, config_file: Optional[Union[str, Path]] = None, auto_load: bool = True):
        self.logger = logging.getLogger(__name__)

        if config_file is None:
            self.config_file = self._get_config_directory() / 'settings.json'
        else:
            self.config_file = Path(config_file)
        self.backup_file = self.config_file.with_name(self.config_file.stem + '.backup.json')

        self.settings = AppSettings()

        if auto_load:
            self.load_settings()

    def _get_config_directory(self) -> Path:
        """Lấy thư mục config phù hợp với từng OS"""
        if os.name == 'nt':  # Windows
            return Path(os.environ.get('APPDATA', Path.home())) / 'DirManager'
        if sys.platform == 'darwin':  # macOS
            return Path.home() / 'Library' / 'Application Support' / 'DirManager'
        return Path.home() / '.config' / 'dirmanager'

    def load_settings(self) -> bool:
        """Tải cấu hình từ file, dùng backup rồi mặc định nếu lỗi"""
        for candidate in (self.config_file, self.backup_file):
            if not candidate.exists():
                continue
            try:
                self.settings = self._load_from_file(candidate)
                if candidate == self.backup_file:
                    self.logger.warning("Main config unavailable, loaded from backup")
                return True
            except (OSError, ValueError, SettingsError) as e:
                self.logger.warning(f"Could not load settings from {candidate}: {e}")

        if self.config_file.exists() or self.backup_file.exists():
            self.settings = AppSettings()
            return False

        self.logger.info("No config file found, using defaults")
        return True

    def _load_from_file(self, file_path: Path) -> AppSettings:
        """Load settings từ file cụ thể"""
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return self.from_dict(data)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> AppSettings:
        """Validate bằng JSON schema rồi dựng AppSettings (giữ mặc định cho key thiếu)"""
        try:
            validate(instance=data, schema=SETTINGS_SCHEMA)
        except jsonschema.ValidationError as e:
            raise SettingsError(f"Settings validation failed: {e.message}") from e

        new_settings = AppSettings()
        for section_name, section_data in data.items():
            if not hasattr(new_settings, section_name):
                continue

            section_obj = getattr(new_settings, section_name)
            if not hasattr(section_obj, '__dataclass_fields__'):
                setattr(new_settings, section_name, section_data)
                continue

            for field_name, value in section_data.items():
                if field_name not in section_obj.__dataclass_fields__:
                    continue
                current = getattr(section_obj, field_name)
                if isinstance(current, Enum):
                    value = type(current)(value)
                setattr(section_obj, field_name, value)

        return new_settings

    def save_settings(self, create_backup: bool = True) -> bool:
        """Lưu cấu hình vào file với backup, ghi atomic"""
        try:
            if create_backup and self.config_file.exists():
                shutil.copy2(self.config_file, self.backup_file)

            self.settings.last_updated = datetime.now().isoformat()
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            temp_file = self.config_file.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

            temp_file.replace(self.config_file)

            self.logger.info("Settings saved successfully")
            return True

        except OSError as e:
            self.logger.error(f"Error saving settings: {e}")
            return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dict with proper enum handling"""
        def convert_value(obj):
            if isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, dict):
                return {k: convert_value(v) for k, v in obj.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert_value(item) for item in obj]
            return obj

        return convert_value(asdict(self.settings))

    def get(self, key: str, default: Any = None) -> Any:
        """Lấy giá trị cấu hình với dot notation, ví dụ 'display.name_width'"""
        obj = self.settings
        for k in key.split('.'):
            if not hasattr(obj, k):
                return default
            obj = getattr(obj, k)
        return obj

    def set(self, key: str, value: Any) -> bool:
        """Đặt giá trị cấu hình với dot notation (enum nhận cả giá trị chuỗi)"""
        keys = key.split('.')
        obj = self.settings

        for k in keys[:-1]:
            if not hasattr(obj, k):
                return False
            obj = getattr(obj, k)

        final_key = keys[-1]
        if not hasattr(obj, final_key):
            return False

        current = getattr(obj, final_key)
        if isinstance(current, Enum) and not isinstance(value, Enum):
            try:
                value = type(current)(value)
            except ValueError:
                self.logger.warning(f"Invalid value {value!r} for {key}")
                return False

        setattr(obj, final_key, value)
        return True
