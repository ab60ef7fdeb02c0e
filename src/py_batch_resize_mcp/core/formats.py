"""格式处理器模块。

为缩放与 PNG 输出准备图片的色彩模式，并给出保存参数。
"""

import logging
from typing import Any

from PIL import Image

from ..exceptions import EncodeError


logger = logging.getLogger(__name__)

# 缩放与 PNG 输出都能直接处理的模式
_DRAWABLE_MODES = ("RGB", "RGBA", "L", "LA")


class FormatProcessor:
    """格式处理器"""

    def __init__(self) -> None:
        """初始化格式处理器"""
        # 动态获取支持的格式
        self.supported_formats = {
            fmt.upper() for fmt in Image.registered_extensions().values() if fmt
        }
        logger.debug(f"支持的格式: {sorted(self.supported_formats)}")

    def prepare_for_drawing(self, img: Image.Image) -> Image.Image:
        """把任意模式转换为可平滑缩放的模式

        调色板、二值、CMYK 等模式先转为 RGB/RGBA/L，
        透明信息保留在 alpha 通道中。
        """
        if img.mode in _DRAWABLE_MODES:
            return img

        if img.mode == "P" or img.mode == "PA":
            if img.mode == "PA" or "transparency" in img.info:
                return img.convert("RGBA")
            return img.convert("RGB")

        if img.mode == "1":
            return img.convert("L")

        if "transparency" in img.info:
            return img.convert("RGBA")
        return img.convert("RGB")

    def prepare_for_format(self, img: Image.Image, target_format: str) -> Image.Image:
        """为目标格式准备图片

        Args:
            img: PIL图片对象
            target_format: 目标格式

        Returns:
            Image.Image: 处理后的图片对象
        """
        match target_format.upper():
            case "PNG":
                # PNG 支持缩放后可能出现的全部模式
                return img
            case _:
                raise EncodeError(f"不支持的输出格式: {target_format}")


def get_save_parameters(
    format_name: str, quality: float, compress_level: int
) -> dict[str, Any]:
    """获取保存参数

    Args:
        format_name: 输出格式
        quality: 0-1 区间的编码质量
        compress_level: PNG zlib 压缩级别

    Returns:
        dict: 传给 Image.save 的参数（不含 format）
    """
    match format_name.upper():
        case "PNG":
            # PNG 为无损格式，quality 不影响输出
            del quality
            return {"compress_level": compress_level, "optimize": False}
        case _:
            raise EncodeError(f"不支持的输出格式: {format_name}")
