"""尺寸调整配置模型。

定义批量尺寸调整的配置参数、表单解析和输入文件。
"""

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..config import get_config
from ..exceptions import ValidationError


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_TRUTHY = {"1", "true", "yes", "on"}


def _parse_leading_int(value: Any) -> int | None:
    """按前缀解析整数，"12px" -> 12，无法解析时返回 None"""
    match value:
        case None:
            return None
        case bool():
            return int(value)
        case int():
            return value
        case float():
            return int(value) if value == value else None  # NaN 不是数字
        case str():
            found = _LEADING_INT.match(value)
            return int(found.group(1)) if found else None
        case _:
            return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class InputFile(BaseModel):
    """用户选择的输入文件：原始文件名 + 原始字节"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="原始文件名，仅用于日志")
    data: bytes = Field(repr=False, description="原始文件字节")
    error: str | None = Field(
        None, description="读取阶段的错误，处理时按失败条目记录"
    )

    @property
    def size(self) -> int:
        """原始字节数"""
        return len(self.data)

    @classmethod
    def from_path(cls, path: str | Path) -> "InputFile":
        """从磁盘读取输入文件"""
        path = Path(path)
        return cls(name=path.name, data=path.read_bytes())

    @classmethod
    def rejected(cls, name: str, reason: str) -> "InputFile":
        """无法读取或被拒绝的输入，不携带数据"""
        return cls(name=name, data=b"", error=reason)


class ResizeConfig(BaseModel):
    """批量尺寸调整配置，单次批量处理内不可变"""

    model_config = ConfigDict(frozen=True)

    name_prefix: str = Field(
        default_factory=lambda: get_config().resize.NAME_PREFIX,
        description="输出文件名前缀",
    )
    start_index: int = Field(
        default_factory=lambda: get_config().resize.START_INDEX,
        ge=0,
        description="起始序号",
    )
    target_width: int | None = Field(None, gt=0, description="目标宽度，None 表示未设置")
    target_height: int | None = Field(
        None, gt=0, description="目标高度，None 表示未设置"
    )
    keep_aspect: bool = Field(False, description="只给出一边时保持宽高比")

    @field_validator("name_prefix")
    @classmethod
    def default_blank_prefix(cls, v: str) -> str:
        return v or get_config().resize.NAME_PREFIX

    @property
    def has_target(self) -> bool:
        """是否设置了任一目标尺寸"""
        return self.target_width is not None or self.target_height is not None

    @classmethod
    def from_form(
        cls,
        name_prefix: str | None = None,
        start_index: Any = None,
        width: Any = None,
        height: Any = None,
        keep_aspect: Any = False,
    ) -> "ResizeConfig":
        """从表单原始值构建配置

        - 空前缀使用默认前缀
        - 起始序号无法解析或为负数时回退到默认值 1
        - 宽高留空表示未设置；非数字、0 或负数视为无效输入

        Raises:
            ValidationError: 宽高无效时
        """
        resize_defaults = get_config().resize

        index = _parse_leading_int(start_index)
        if index is None or index < 0:
            index = resize_defaults.START_INDEX

        dimensions: dict[str, int | None] = {}
        for field_name, raw in (("target_width", width), ("target_height", height)):
            if _is_blank(raw):
                dimensions[field_name] = None
                continue
            parsed = _parse_leading_int(raw)
            if parsed is None or parsed <= 0:
                raise ValidationError(
                    f"{field_name} 必须是正整数或留空，得到: {raw!r}"
                )
            dimensions[field_name] = parsed

        if isinstance(keep_aspect, str):
            keep_aspect = keep_aspect.strip().lower() in _TRUTHY

        try:
            return cls(
                name_prefix=name_prefix or resize_defaults.NAME_PREFIX,
                start_index=index,
                keep_aspect=bool(keep_aspect),
                **dimensions,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"配置构建失败: {e}") from e
