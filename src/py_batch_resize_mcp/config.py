"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ResizeDefaults:
    """尺寸调整与输出相关的默认配置"""

    # 命名设置
    NAME_PREFIX: str = "image_"
    START_INDEX: int = 1
    INDEX_PAD_WIDTH: int = 3

    # 输出编码 - 固定 PNG
    OUTPUT_FORMAT: str = "PNG"
    ENCODE_QUALITY: float = 0.92  # 0-1 区间，PNG 无损时不影响输出
    PNG_COMPRESS_LEVEL: int = 6
    RESAMPLING: str = "LANCZOS"

    # 归档
    ARCHIVE_NAME: str = "images.zip"


@dataclass(frozen=True)
class LimitDefaults:
    """尺寸与文件大小限制"""

    MAX_DIMENSION: int = 16384
    MAX_FILE_SIZE_MB: float = 100.0


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    # 日志级别
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "py_batch_resize.log"
    LOG_FILE_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT: int = 5


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.resize = ResizeDefaults()
        self.limits = LimitDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if name_prefix := os.getenv("PBR_NAME_PREFIX"):
            object.__setattr__(self.resize, "NAME_PREFIX", name_prefix)

        if compress_level := os.getenv("PBR_PNG_COMPRESS_LEVEL"):
            level = min(9, max(0, int(compress_level)))
            object.__setattr__(self.resize, "PNG_COMPRESS_LEVEL", level)

        if max_dimension := os.getenv("PBR_MAX_DIMENSION"):
            cap = max(1, int(max_dimension))
            object.__setattr__(self.limits, "MAX_DIMENSION", cap)

        # 日志配置
        if log_level := os.getenv("PBR_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("PBR_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                enable_file_log.lower() in ("true", "1", "yes"),
            )

    @property
    def max_file_size_bytes(self) -> int:
        """单文件大小上限（字节）"""
        return int(self.limits.MAX_FILE_SIZE_MB * 1024 * 1024)


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
