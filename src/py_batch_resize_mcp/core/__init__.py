"""核心模块包。

解码、尺寸解析和绘制编码等单图处理功能。
"""

from .decoder import ImageDecoder, decode_image
from .dimensions import resolve, resolve_for
from .formats import FormatProcessor
from .renderer import ImageRenderer


__all__ = [
    "FormatProcessor",
    "ImageDecoder",
    "ImageRenderer",
    "decode_image",
    "resolve",
    "resolve_for",
]
