"""绘制与编码模块。

把源图像缩放到解析后的尺寸并编码为固定格式的输出。
"""

import asyncio
from io import BytesIO

from PIL import Image

from ..config import get_config
from ..exceptions import EncodeError, handle_image_errors
from ..models.image_models import EncodedImage, ResolvedDimensions, SourceImage
from ..utils.logging_helpers import get_logger
from .formats import FormatProcessor, get_save_parameters


logger = get_logger()


class ImageRenderer:
    """绘制与编码器

    画布尺寸严格等于解析后的尺寸，源图像拉伸填满画布，
    不留边也不裁剪。
    """

    def __init__(
        self,
        output_format: str | None = None,
        quality: float | None = None,
        compress_level: int | None = None,
        resampling: str | None = None,
    ):
        """初始化绘制器

        Args:
            output_format: 输出格式，默认使用配置值（PNG）
            quality: 0-1 区间的编码质量，默认 0.92
            compress_level: PNG 压缩级别
            resampling: Pillow 重采样滤镜名称，如 "LANCZOS"
        """
        resize_defaults = get_config().resize
        self.output_format = (output_format or resize_defaults.OUTPUT_FORMAT).upper()
        self.quality = (
            quality if quality is not None else resize_defaults.ENCODE_QUALITY
        )
        self.compress_level = (
            compress_level
            if compress_level is not None
            else resize_defaults.PNG_COMPRESS_LEVEL
        )
        self.resampling = Image.Resampling[
            (resampling or resize_defaults.RESAMPLING).upper()
        ]
        self.format_processor = FormatProcessor()

    @handle_image_errors("图像编码", EncodeError)
    def render(
        self, source: SourceImage, dimensions: ResolvedDimensions
    ) -> EncodedImage:
        """绘制并编码

        Raises:
            EncodeError: 画布无法生成有效输出时
        """
        drawable = self.format_processor.prepare_for_drawing(source.image)
        target_size = dimensions.as_tuple()

        try:
            if drawable.size == target_size:
                canvas = drawable.copy()
            else:
                canvas = drawable.resize(target_size, self.resampling)
        finally:
            if drawable is not source.image:
                drawable.close()

        canvas = self.format_processor.prepare_for_format(canvas, self.output_format)

        save_params = get_save_parameters(
            self.output_format, self.quality, self.compress_level
        )
        buffer = BytesIO()
        try:
            canvas.save(buffer, format=self.output_format, **save_params)
        finally:
            canvas.close()

        payload = buffer.getvalue()
        if not payload:
            raise EncodeError("编码结果为空", source.name)

        logger.debug(
            f"编码完成 [{source.name}]: {dimensions} {self.output_format} "
            f"{len(payload)} bytes"
        )
        return EncodedImage(
            payload=payload,
            format=self.output_format,
            width=dimensions.width,
            height=dimensions.height,
        )

    async def render_async(
        self, source: SourceImage, dimensions: ResolvedDimensions
    ) -> EncodedImage:
        """异步绘制并编码，挂起调用方直到编码完成"""
        return await asyncio.to_thread(self.render, source, dimensions)
