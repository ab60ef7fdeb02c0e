"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

# 从清理助手模块导入
from .cleanup_helpers import TempFileManager

# 从日志工具模块导入
from .logging_helpers import get_logger, setup_logging

# 从消息格式化模块导入
from .message_formatter import (
    MessageFormatter,
    format_bytes,
)

# 从命名助手模块导入
from .naming_helpers import FileNamingStrategy


# file_helpers 依赖 models 和 exceptions，按需从子模块导入
__all__ = [
    "FileNamingStrategy",
    "MessageFormatter",
    "TempFileManager",
    "format_bytes",
    "get_logger",
    "setup_logging",
]
