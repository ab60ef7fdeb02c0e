"""图像数据模型。

定义解码后的源图像、解析后的输出尺寸和编码结果。
"""

from dataclasses import dataclass, field

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, computed_field


@dataclass
class SourceImage:
    """解码后的源图像

    只属于创建它的那次处理，编码完成后关闭。
    """

    name: str
    image: Image.Image = field(repr=False)
    format: str = "UNKNOWN"

    @property
    def width(self) -> int:
        """固有宽度"""
        return self.image.width

    @property
    def height(self) -> int:
        """固有高度"""
        return self.image.height

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size

    def close(self) -> None:
        """释放像素数据"""
        self.image.close()

    def __enter__(self) -> "SourceImage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ResolvedDimensions(BaseModel):
    """解析后的输出尺寸"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(ge=1, description="输出宽度")
    height: int = Field(ge=1, description="输出高度")

    def as_tuple(self) -> tuple[int, int]:
        return (self.width, self.height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


class EncodedImage(BaseModel):
    """编码后的输出图像"""

    model_config = ConfigDict(frozen=True)

    payload: bytes = Field(repr=False, description="编码后的字节")
    format: str = Field(description="输出格式")
    width: int = Field(ge=1)
    height: int = Field(ge=1)

    @computed_field
    def size(self) -> int:
        """编码后的字节数"""
        return len(self.payload)
