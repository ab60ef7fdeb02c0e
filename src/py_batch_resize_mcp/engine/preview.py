"""预览输出模块。

预览接收器接收每个成功条目的 (名称, 预览句柄, 大小, 宽, 高)。
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ..utils.message_formatter import MessageFormatter


@runtime_checkable
class PreviewSink(Protocol):
    """预览接收器接口"""

    def add_item(
        self, name: str, handle: Path, size: int, width: int, height: int
    ) -> None:
        """添加一个成功条目的预览"""
        ...

    def clear(self) -> None:
        """清空所有预览"""
        ...


class PreviewItem(BaseModel):
    """单个预览条目"""

    name: str
    handle: Path
    size: int = Field(ge=0)
    width: int = Field(ge=1)
    height: int = Field(ge=1)
    badge: str = "PNG"

    @property
    def label(self) -> str:
        """尺寸与大小描述，如 "200×100px · 1.5 KB" """
        return MessageFormatter.preview_label(self.width, self.height, self.size)


class PreviewList:
    """内存中的预览列表"""

    def __init__(self, badge: str = "PNG"):
        self.badge = badge
        self.items: list[PreviewItem] = []

    def add_item(
        self, name: str, handle: Path, size: int, width: int, height: int
    ) -> None:
        self.items.append(
            PreviewItem(
                name=name,
                handle=handle,
                size=size,
                width=width,
                height=height,
                badge=self.badge,
            )
        )

    def clear(self) -> None:
        self.items.clear()

    @property
    def show_help(self) -> bool:
        """没有预览时显示帮助提示"""
        return not self.items

    def __len__(self) -> int:
        return len(self.items)
