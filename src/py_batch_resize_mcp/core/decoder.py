"""图像解码模块。

把原始文件字节解码为带固有尺寸的源图像。
"""

import asyncio
from io import BytesIO

from PIL import Image, ImageOps

from ..exceptions import DecodeError, handle_image_errors
from ..models.image_models import SourceImage
from ..utils.logging_helpers import get_logger


logger = get_logger()


@handle_image_errors("图像解码", DecodeError)
def decode_image(data: bytes, name: str = "<memory>") -> SourceImage:
    """解码单个图像

    不按扩展名过滤，Pillow 能识别的位图格式都会被接受。
    多帧图像只取第一帧，EXIF 方向信息会被应用。

    Args:
        data: 原始文件字节
        name: 输入项名称，用于日志和错误上下文

    Returns:
        SourceImage: 解码后的源图像

    Raises:
        DecodeError: 数据为空、损坏或格式不受支持时
    """
    if not data:
        raise DecodeError("文件内容为空", name)

    with Image.open(BytesIO(data)) as img:
        detected_format = img.format or "UNKNOWN"
        img.load()
        # exif_transpose 总是返回新图像，原图随 with 关闭
        decoded = ImageOps.exif_transpose(img)

    if decoded.width <= 0 or decoded.height <= 0:
        decoded.close()
        raise DecodeError(f"图像尺寸无效: {decoded.width}x{decoded.height}", name)

    logger.debug(
        f"解码完成 [{name}]: {detected_format} {decoded.mode} "
        f"{decoded.width}x{decoded.height}"
    )
    return SourceImage(name=name, image=decoded, format=detected_format)


class ImageDecoder:
    """图像解码器

    解码在工作线程中执行，调用方以协程方式等待。
    """

    def decode(self, data: bytes, name: str = "<memory>") -> SourceImage:
        """同步解码"""
        return decode_image(data, name)

    async def decode_async(self, data: bytes, name: str = "<memory>") -> SourceImage:
        """异步解码，挂起调用方直到解码完成"""
        return await asyncio.to_thread(decode_image, data, name)
