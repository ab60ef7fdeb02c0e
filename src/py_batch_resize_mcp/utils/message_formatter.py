"""消息格式化工具模块。

提供统一的错误消息、统计摘要和字节大小格式化功能。
"""

from pathlib import Path
from typing import Any, Final


# 1024 进制单位，最高到 GB
SIZE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB")

EMPTY_STATE_MESSAGE: Final[str] = "No files processed yet."
NOTHING_PROCESSED_MESSAGE: Final[str] = (
    "No files could be processed. Check the console for errors."
)
EMPTY_SELECTION_MESSAGE: Final[str] = "Please select at least one image file."
ARCHIVE_FAILED_MESSAGE: Final[str] = (
    "Failed to generate ZIP. Check console for details."
)


def format_bytes(num_bytes: int) -> str:
    """将字节数格式化为 1024 进制的可读字符串

    保留两位小数并去掉末尾的 0，例如 1536 -> "1.5 KB"。
    """
    if num_bytes <= 0:
        return "0 B"

    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {SIZE_UNITS[unit_index]}"


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        """文件不存在错误消息"""
        return f"文件不存在: {file_path}"

    @staticmethod
    def directory_not_found(directory: str | Path) -> str:
        """目录不存在错误消息"""
        return f"目录不存在: {directory}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def validation_error(field: str, value: Any, reason: str | None = None) -> str:
        """参数验证错误消息"""
        msg = f"参数验证失败 - {field}: {value}"
        if reason:
            msg += f" ({reason})"
        return msg

    @staticmethod
    def format_error(operation: str, target: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{target}]: {error}"

    @staticmethod
    def batch_stats(file_count: int, total_bytes: int) -> str:
        """批量统计摘要，如 "3 file(s) · 1.5 KB" """
        if file_count == 0:
            return EMPTY_STATE_MESSAGE
        return f"{file_count} file(s) · {format_bytes(total_bytes)}"

    @staticmethod
    def preview_label(width: int, height: int, size_bytes: int) -> str:
        """预览条目的尺寸与大小描述"""
        return f"{width}×{height}px · {format_bytes(size_bytes)}"

