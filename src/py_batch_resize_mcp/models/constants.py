"""图像处理相关常量定义。

基于 Pillow 动态能力的图像格式管理，避免硬编码重复。
"""

from typing import Final

from PIL import Image


class ImageFormats:
    """基于 Pillow 的动态图像格式管理"""

    # 只定义必要的别名映射（用户友好的别名）
    ALIASES: Final[dict[str, str]] = {
        "JPG": "JPEG",
    }

    # 输入端至少需要支持的格式
    REQUIRED_DECODE_FORMATS: Final[tuple[str, ...]] = (
        "PNG",
        "JPEG",
        "GIF",
        "BMP",
        "WEBP",
    )

    # 只定义 Pillow 未提供的特殊 MIME 类型
    SPECIAL_MIME_TYPES: Final[dict[str, str]] = {
        "ICO": "image/x-icon",
        "BMP": "image/bmp",
    }

    @classmethod
    def get_supported_formats(cls) -> set[str]:
        """动态获取 Pillow 支持的所有格式"""
        return {fmt.upper() for fmt in Image.registered_extensions().values() if fmt}

    @classmethod
    def get_missing_decode_formats(cls) -> list[str]:
        """返回当前 Pillow 构建中缺失的必需格式"""
        supported = cls.get_supported_formats()
        return [fmt for fmt in cls.REQUIRED_DECODE_FORMATS if fmt not in supported]

    @classmethod
    def get_mime_type(cls, format_name: str) -> str:
        """获取 MIME 类型"""
        Image.init()
        format_upper = get_format_alias(format_name)
        if format_upper in cls.SPECIAL_MIME_TYPES:
            return cls.SPECIAL_MIME_TYPES[format_upper]
        return Image.MIME.get(format_upper, f"image/{format_upper.lower()}")


def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_upper = format_str.upper()
    return ImageFormats.ALIASES.get(format_upper, format_upper)


def get_mime_type(format_str: str) -> str:
    """获取格式的MIME类型"""
    return ImageFormats.get_mime_type(format_str)
