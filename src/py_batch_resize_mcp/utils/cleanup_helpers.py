"""清理工具模块。

提供预览临时文件的创建、清理和资源管理功能。
"""

import tempfile
from pathlib import Path
from typing import Any

from .logging_helpers import get_logger


logger = get_logger()


class TempFileManager:
    """临时文件管理器

    预览句柄以临时文件的形式存在，批次清空或被替换时统一释放。
    """

    def __init__(self, directory: Path | None = None):
        self.directory = directory
        self.temp_files: set[Path] = set()

    def register_temp_file(self, file_path: Path) -> None:
        """注册临时文件"""
        self.temp_files.add(file_path)

    def create_temp_file(
        self, data: bytes, suffix: str = ".png", prefix: str = "preview_"
    ) -> Path:
        """写入数据到新的临时文件并注册

        Args:
            data: 文件内容
            suffix: 文件后缀
            prefix: 文件名前缀

        Returns:
            Path: 临时文件路径
        """
        with tempfile.NamedTemporaryFile(
            mode="wb",
            suffix=suffix,
            prefix=prefix,
            dir=self.directory,
            delete=False,
        ) as handle:
            handle.write(data)
            file_path = Path(handle.name)

        self.register_temp_file(file_path)
        return file_path

    def release(self, file_path: Path) -> bool:
        """释放单个临时文件"""
        self.temp_files.discard(file_path)
        try:
            if file_path.exists():
                file_path.unlink()
                logger.debug(f"已清理临时文件: {file_path}")
                return True
        except OSError as e:
            logger.warning(f"清理临时文件失败 {file_path}: {e}")
        return False

    def cleanup_temp_files(self) -> int:
        """清理所有注册的临时文件"""
        cleaned_count = sum(1 for path in list(self.temp_files) if self.release(path))
        self.temp_files.clear()
        return cleaned_count

    @property
    def active_count(self) -> int:
        """当前仍持有的临时文件数量"""
        return len(self.temp_files)

    def __enter__(self):
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """上下文管理器退出时清理临时文件"""
        del exc_type, exc_val, exc_tb
        self.cleanup_temp_files()
