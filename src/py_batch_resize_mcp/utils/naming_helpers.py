"""文件命名工具模块。

提供统一的输出文件命名策略：前缀 + 补零序号 + 扩展名。
"""

from functools import lru_cache

from PIL import Image

from ..config import get_config


class FileNamingStrategy:
    """文件命名策略类"""

    @staticmethod
    def generate_output_name(
        prefix: str,
        index: int,
        target_format: str | None = None,
        pad_width: int | None = None,
    ) -> str:
        """生成输出文件名

        序号至少补零到 pad_width 位，超出时完整保留，不截断。

        Args:
            prefix: 文件名前缀
            index: 序号（非负整数）
            target_format: 目标格式，默认使用配置中的输出格式
            pad_width: 最小位数，默认使用配置值

        Returns:
            str: 生成的文件名（不含路径），如 "image_001.png"
        """
        resize_defaults = get_config().resize
        width = pad_width if pad_width is not None else resize_defaults.INDEX_PAD_WIDTH
        ext = FileNamingStrategy._get_extension(
            target_format or resize_defaults.OUTPUT_FORMAT
        )
        return f"{prefix}{index:0{width}d}{ext}"

    @staticmethod
    @lru_cache(maxsize=32)
    def _get_extension(target_format: str) -> str:
        """获取文件扩展名

        常见格式使用首选扩展名，其余从 Pillow 的注册表中查找。
        """
        format_upper = target_format.upper()
        common_defaults = {
            "JPEG": ".jpg",
            "PNG": ".png",
            "WEBP": ".webp",
            "GIF": ".gif",
            "BMP": ".bmp",
        }
        if format_upper in common_defaults:
            return common_defaults[format_upper]

        for ext, fmt in Image.registered_extensions().items():
            if fmt and fmt.upper() == format_upper:
                return str(ext)

        return f".{format_upper.lower()}"
