"""输出尺寸解析模块。

根据目标宽高、固有尺寸和保持宽高比策略计算输出尺寸。
"""

import math

from ..models.image_models import ResolvedDimensions, SourceImage
from ..models.resize_config import ResizeConfig


def _round_half_up(value: float) -> int:
    """四舍五入，0.5 向上取整"""
    return math.floor(value + 0.5)


def _scaled(other_intrinsic: int, provided: int, corresponding_intrinsic: int) -> int:
    """按给定边的缩放比例计算另一边"""
    scale = provided / max(1, corresponding_intrinsic)
    return _round_half_up(other_intrinsic * scale)


def _capped(width: int, height: int, cap: int) -> tuple[int, int]:
    """按比例缩小到最长边不超过 cap，保持宽高比"""
    longest = max(width, height)
    if longest <= cap:
        return width, height
    factor = cap / longest
    return (
        max(1, min(cap, _round_half_up(width * factor))),
        max(1, min(cap, _round_half_up(height * factor))),
    )


def resolve(
    intrinsic_width: int,
    intrinsic_height: int,
    target_width: int | None = None,
    target_height: int | None = None,
    keep_aspect: bool = False,
    max_dimension: int | None = None,
) -> ResolvedDimensions:
    """计算输出尺寸

    规则：
    - 宽高都未设置：保持固有尺寸
    - 只设置一边且保持宽高比：另一边按比例缩放并四舍五入
    - 只设置一边且不保持宽高比：另一边使用固有尺寸
    - 宽高都设置：直接使用，忽略宽高比设置

    None 表示未设置，与 0 不同。结果至少为 1，给出 max_dimension
    时按比例缩小到最长边不超过上限（上限至少为 1）。
    任何输入组合都不会抛出异常。

    Args:
        intrinsic_width: 固有宽度
        intrinsic_height: 固有高度
        target_width: 目标宽度
        target_height: 目标高度
        keep_aspect: 是否保持宽高比
        max_dimension: 单边上限（可选）

    Returns:
        ResolvedDimensions: 输出尺寸
    """
    width = intrinsic_width if target_width is None else target_width
    height = intrinsic_height if target_height is None else target_height

    if keep_aspect:
        if target_width is not None and target_height is None:
            height = _scaled(intrinsic_height, target_width, intrinsic_width)
        elif target_height is not None and target_width is None:
            width = _scaled(intrinsic_width, target_height, intrinsic_height)

    width, height = max(1, int(width)), max(1, int(height))
    if max_dimension is not None:
        width, height = _capped(width, height, max(1, max_dimension))

    return ResolvedDimensions(width=width, height=height)


def resolve_for(
    source: SourceImage, config: ResizeConfig, max_dimension: int | None = None
) -> ResolvedDimensions:
    """按批量配置计算某个源图像的输出尺寸"""
    return resolve(
        source.width,
        source.height,
        target_width=config.target_width,
        target_height=config.target_height,
        keep_aspect=config.keep_aspect,
        max_dimension=max_dimension,
    )
