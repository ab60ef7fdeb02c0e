"""批量图像尺寸调整 MCP 服务器。

把批量尺寸调整、图片信息和尺寸预估暴露为 MCP 工具。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .core.decoder import decode_image
from .core.dimensions import resolve_for
from .exceptions import (
    ArchiveError,
    DecodeError,
    EmptyBatchError,
    ResizeError,
    ValidationError,
)
from .models import BatchState, ImageFormats, InputFile, ResizeConfig, get_mime_type
from .resizer import BatchResizer
from .utils.logging_helpers import get_logger, setup_logging
from .utils.message_formatter import (
    ARCHIVE_FAILED_MESSAGE,
    MessageFormatter,
    format_bytes,
)


# MCP 服务器响应类型定义
MCPResizeResponse = dict[str, Any]
MCPImageInfoResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def validation_error(message: str, field: str | None = None) -> dict[str, Any]:
        """构建验证错误结果"""
        details = {"field": field} if field else None
        return MCPResponseBuilder.error(message, "validation", details)

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> dict[str, Any]:
        """构建文件相关错误结果"""
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(message, "file", details)

    @staticmethod
    def processing_error(message: str, operation: str | None = None) -> dict[str, Any]:
        """构建处理错误结果"""
        details = {"operation": operation} if operation else None
        return MCPResponseBuilder.error(message, "processing", details)

    @staticmethod
    def from_resize_error(error: ResizeError, operation: str) -> dict[str, Any]:
        """按异常类型选择响应格式"""
        match error:
            case EmptyBatchError() | ValidationError():
                return MCPResponseBuilder.validation_error(
                    error.message, error.item_name
                )
            case ArchiveError():
                return MCPResponseBuilder.error(
                    ARCHIVE_FAILED_MESSAGE,
                    "processing",
                    {"operation": "归档导出", "cause": error.message},
                )
            case _:
                return MCPResponseBuilder.processing_error(error.message, operation)


logger = get_logger()

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("批量图像尺寸调整服务")


def _format_batch_state(state: BatchState) -> dict[str, Any]:
    """格式化批量状态为MCP响应格式"""
    return {
        "status": state.status.value,
        "summary": state.get_summary(),
        "stats_text": state.stats_text(),
        "status_message": state.status_message(),
        "total_files": state.total_inputs,
        "successful_files": state.get_success_count(),
        "failed_files": state.get_failure_count(),
        "total_size": state.get_total_size(),
        "total_size_human": format_bytes(state.get_total_size()),
        "items": [
            {
                "name": r.name,
                "source_name": r.source_name,
                "width": r.width,
                "height": r.height,
                "size": r.size,
                "size_human": r.get_size_human(),
            }
            for r in state.results
        ],
        "failures": [f.model_dump() for f in state.failures],
    }


def _load_single_file(input_path: str) -> InputFile | None:
    path = Path(input_path)
    if not path.is_file():
        return None
    return InputFile.from_path(path)


# ============================================================================
# 批量尺寸调整工具
# ============================================================================


@mcp.tool()
async def resize_images(
    input_paths: list[str],
    output_dir: str | None = None,
    name_prefix: str | None = None,
    start_index: int | str | None = None,
    width: int | str | None = None,
    height: int | str | None = None,
    keep_aspect: bool = False,
) -> MCPResizeResponse:
    """批量调整图像尺寸并打包为 PNG 归档

    按给定顺序处理每个输入，成功的文件依次命名为
    <前缀><至少三位序号>.png；无法解码的文件会被跳过且不占用序号。

    Args:
        input_paths: 输入文件或目录，按顺序处理
        output_dir: 归档输出目录（可选），写入 images.zip
        name_prefix: 文件名前缀，留空为 "image_"
        start_index: 起始序号，无效时为 1
        width: 目标宽度，留空保持原宽度
        height: 目标高度，留空保持原高度
        keep_aspect: 只给出一边时按比例计算另一边

    Returns:
        dict: 批量处理结果，包含每个文件的名称、尺寸和大小

    使用场景:
        # 📂 目录统一缩放到宽 800，高度按比例
        resize_images(["photos/"], output_dir="out/", width=800, keep_aspect=True)

        # 🔢 自定义命名从 7 开始：img_007.png, img_008.png
        resize_images(["a.jpg", "b.gif"], name_prefix="img_", start_index=7)
    """
    try:
        with BatchResizer() as resizer:
            state = await resizer.process_paths(
                input_paths,
                name_prefix=name_prefix,
                start_index=start_index,
                width=width,
                height=height,
                keep_aspect=keep_aspect,
            )
            archive_path = None
            if output_dir is not None:
                archive_path = await resizer.write_archive(output_dir)

        result = _format_batch_state(state)
        return {
            "success": state.has_results,
            "result": result,
            "archive_path": str(archive_path) if archive_path else None,
            "error": None if state.has_results else state.status_message(),
        }

    except ResizeError as e:
        targets = ", ".join(input_paths)
        logger.error(MessageFormatter.operation_failed("批量尺寸调整", targets, e))
        return MCPResponseBuilder.from_resize_error(e, "批量尺寸调整")
    except OSError as e:
        targets = ", ".join(input_paths)
        logger.error(MessageFormatter.operation_failed("读取输入", targets, e))
        return MCPResponseBuilder.file_error(str(e), getattr(e, "filename", None))


# ============================================================================
# 图片信息获取工具
# ============================================================================


@mcp.tool()
def get_image_info(input_path: str) -> MCPImageInfoResponse:
    """获取图片的基础信息

    Args:
        input_path: 输入图像文件路径

    Returns:
        dict: 图片信息，包含尺寸、格式、颜色模式和文件大小
    """
    try:
        input_file = _load_single_file(input_path)
        if input_file is None:
            return MCPResponseBuilder.file_error(
                MessageFormatter.file_not_found(input_path), input_path
            )

        with decode_image(input_file.data, input_file.name) as source:
            return {
                "success": True,
                "file_path": input_path,
                "file_size": input_file.size,
                "file_size_human": format_bytes(input_file.size),
                "format": source.format,
                "mime_type": get_mime_type(source.format),
                "mode": source.image.mode,
                "width": source.width,
                "height": source.height,
            }

    except DecodeError as e:
        return MCPResponseBuilder.from_resize_error(e, "图片信息获取")
    except OSError as e:
        logger.error(MessageFormatter.operation_failed("获取图片信息", input_path, e))
        return MCPResponseBuilder.file_error(str(e), input_path)


@mcp.tool()
def preview_dimensions(
    input_path: str,
    width: int | str | None = None,
    height: int | str | None = None,
    keep_aspect: bool = False,
) -> dict[str, Any]:
    """预估某张图片在给定设置下的输出尺寸，不生成文件

    Args:
        input_path: 输入图像文件路径
        width: 目标宽度，留空表示未设置
        height: 目标高度，留空表示未设置
        keep_aspect: 只给出一边时按比例计算另一边

    Returns:
        dict: 原始尺寸与输出尺寸
    """
    try:
        config = ResizeConfig.from_form(
            width=width, height=height, keep_aspect=keep_aspect
        )
        input_file = _load_single_file(input_path)
        if input_file is None:
            return MCPResponseBuilder.file_error(
                MessageFormatter.file_not_found(input_path), input_path
            )

        with decode_image(input_file.data, input_file.name) as source:
            dimensions = resolve_for(source, config)
            return {
                "success": True,
                "original_width": source.width,
                "original_height": source.height,
                "width": dimensions.width,
                "height": dimensions.height,
                "dimensions": str(dimensions),
            }

    except ResizeError as e:
        return MCPResponseBuilder.from_resize_error(e, "尺寸预估")
    except OSError as e:
        logger.error(MessageFormatter.operation_failed("尺寸预估", input_path, e))
        return MCPResponseBuilder.file_error(str(e), input_path)


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    setup_logging()
    if missing := ImageFormats.get_missing_decode_formats():
        logger.warning(f"当前 Pillow 缺少以下格式的解码支持: {missing}")
    logger.info("启动批量图像尺寸调整 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
