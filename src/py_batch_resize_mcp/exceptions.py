"""批量尺寸调整异常处理模块。

定义统一的异常类和错误处理机制，包含现代化的异常处理装饰器。
"""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .utils.logging_helpers import get_logger
from .utils.message_formatter import (
    EMPTY_SELECTION_MESSAGE,
    MessageFormatter,
)


if TYPE_CHECKING:
    from .models.batch_state import FailedItem


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class ResizeError(Exception):
    """尺寸调整相关错误基类"""

    def __init__(self, message: str, item_name: str | None = None):
        super().__init__(message)
        self.message = message
        self.item_name = item_name


class ValidationError(ResizeError):
    """参数验证错误 - 统一的验证错误类型"""

    pass


class EmptyBatchError(ResizeError):
    """未选择任何输入文件，批量处理不会开始"""

    def __init__(self, message: str = EMPTY_SELECTION_MESSAGE):
        super().__init__(message)


class DecodeError(ResizeError):
    """输入无法解码为支持的位图"""

    stage = "图像解码"


class EncodeError(ResizeError):
    """绘制或编码输出失败"""

    stage = "图像编码"


class ArchiveError(ResizeError):
    """归档打包失败，批量结果保留以便重试"""

    pass


def _item_name_from_call(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> str | None:
    """从调用参数中取出输入项名称（name 参数或 source.name），用于错误上下文"""
    try:
        bound = inspect.signature(func).bind_partial(*args, **kwargs)
    except TypeError:
        return None
    name = bound.arguments.get("name")
    if name is None and "source" in bound.arguments:
        name = getattr(bound.arguments["source"], "name", None)
    return str(name) if name is not None else None


# 现代化异常处理装饰器
def handle_image_errors(
    operation_name: str, error_cls: type[ResizeError] = DecodeError
):
    """统一的图像处理异常处理装饰器

    把 Pillow 和系统层面的异常映射为该阶段的错误类型，已经是
    ResizeError 的异常原样抛出。

    Args:
        operation_name: 操作名称，用于日志记录
        error_cls: 映射后的异常类型
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except ResizeError:
                raise
            except UnidentifiedImageError as e:
                logger.debug(f"{operation_name} - 无法识别图像格式: {e}")
                raise error_cls(
                    f"不支持的图像格式: {e}", _item_name_from_call(func, args, kwargs)
                ) from e
            except DecompressionBombError as e:
                logger.debug(f"{operation_name} - 图像过大: {e}")
                raise error_cls(
                    f"图像尺寸过大，可能存在安全风险: {e}",
                    _item_name_from_call(func, args, kwargs),
                ) from e
            except (OSError, SyntaxError) as e:
                logger.debug(f"{operation_name} - 数据读取失败: {e}")
                raise error_cls(
                    f"图像数据损坏或无法读取: {e}",
                    _item_name_from_call(func, args, kwargs),
                ) from e
            except (ValueError, TypeError, MemoryError) as e:
                logger.debug(f"{operation_name} - 处理失败: {e}")
                raise error_cls(
                    f"{operation_name}失败: {e}",
                    _item_name_from_call(func, args, kwargs),
                ) from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误处理和日志记录功能。
    """

    @staticmethod
    def _log_error(
        operation: str, target: str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称（如"图像解码"、"图像编码"等）
            target: 相关输入项名称
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, target, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def handle_item_error(error: Exception, item_name: str) -> "FailedItem":
        """记录单个输入项的失败并生成失败记录

        解码、编码错误按各自阶段记录，其他异常归为未知错误。
        """
        from .models.batch_state import FailedItem  # 避免循环导入

        match error:
            case DecodeError() | EncodeError() as stage_error:
                stage = stage_error.stage
            case ValidationError():
                stage = "参数验证"
            case _:
                stage = "图像处理"

        ErrorHandler._log_error(stage, item_name, error, "error")
        return FailedItem(name=item_name, stage=stage, error=str(error))

    @staticmethod
    def handle_archive_error(error: Exception, archive_name: str) -> ArchiveError:
        """记录归档失败并转换为 ArchiveError"""
        ErrorHandler._log_error("归档打包", archive_name, error)
        if isinstance(error, ArchiveError):
            return error
        return ArchiveError(f"归档打包失败: {error}", archive_name)
