"""Python 批量图像尺寸调整库。

基于 Pillow 的批量尺寸调整：统一输出 PNG、顺序命名并打包为 ZIP。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "批量图像尺寸调整库，基于 Pillow 11"

# 核心功能导出
from .core.dimensions import resolve
from .models import BatchState, InputFile, ProcessedResult, ResizeConfig
from .resizer import BatchResizer, resize_batch
from .utils.message_formatter import format_bytes


__all__ = [
    "BatchResizer",
    "BatchState",
    "InputFile",
    "ProcessedResult",
    "ResizeConfig",
    "format_bytes",
    "get_version",
    "resize_batch",
    "resolve",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
