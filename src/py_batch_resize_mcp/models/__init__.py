"""数据模型包。

定义批量尺寸调整相关的数据结构和模型。
"""

from .batch_state import (
    BatchState,
    BatchStatus,
    FailedItem,
    ProcessedResult,
)
from .constants import (
    ImageFormats,
    get_format_alias,
    get_mime_type,
)
from .image_models import (
    EncodedImage,
    ResolvedDimensions,
    SourceImage,
)
from .resize_config import InputFile, ResizeConfig


__all__ = [
    "BatchState",
    "BatchStatus",
    "EncodedImage",
    "FailedItem",
    "ImageFormats",
    "InputFile",
    "ProcessedResult",
    "ResizeConfig",
    "ResolvedDimensions",
    "SourceImage",
    "get_format_alias",
    "get_mime_type",
]
