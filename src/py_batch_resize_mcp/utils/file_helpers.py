"""工具函数模块。

提供输入文件发现与读取的实用工具函数。
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from PIL import Image

from ..config import get_config
from ..exceptions import ValidationError
from ..models.resize_config import InputFile
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger()


def find_image_files(
    directory: str | Path,
    recursive: bool = False,
) -> Iterator[Path]:
    """查找目录中的图像文件。

    结果按路径排序，保证批量命名顺序稳定。

    Args:
        directory: 搜索目录
        recursive: 是否递归搜索子目录

    Yields:
        Path: 图像文件路径
    """
    directory = Path(directory)

    if not directory.is_dir():
        logger.warning(MessageFormatter.directory_not_found(directory))
        return

    pattern = "**/*" if recursive else "*"

    # 获取支持的扩展名（直接使用 Pillow API）
    supported_extensions = set(Image.registered_extensions().keys())

    for file_path in sorted(directory.glob(pattern)):
        if file_path.is_file() and file_path.suffix.lower() in supported_extensions:
            yield file_path


def expand_input_paths(paths: Iterable[str | Path]) -> list[Path]:
    """展开输入路径：文件原样保留，目录展开为其中的图像文件

    Raises:
        ValidationError: 路径不存在时
    """
    expanded: list[Path] = []
    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            expanded.extend(find_image_files(path))
        elif path.is_file():
            expanded.append(path)
        else:
            raise ValidationError(MessageFormatter.file_not_found(path), str(path))
    return expanded


def load_input_files(paths: Iterable[str | Path]) -> list[InputFile]:
    """读取输入文件内容

    超过大小上限或无法读取的文件不会中断整批处理，而是作为带错误的
    输入项返回，由批量处理器记为失败条目。

    Raises:
        ValidationError: 路径不存在时
    """
    max_size = get_config().max_file_size_bytes
    input_files: list[InputFile] = []

    for path in expand_input_paths(paths):
        try:
            size = path.stat().st_size
            if size > max_size:
                reason = MessageFormatter.validation_error(
                    "文件大小", path, f"超过上限 {max_size} 字节"
                )
                logger.debug(reason)
                input_files.append(InputFile.rejected(path.name, reason))
                continue
            input_files.append(InputFile.from_path(path))
        except OSError as e:
            reason = MessageFormatter.operation_failed("读取文件", path, e)
            logger.debug(reason)
            input_files.append(InputFile.rejected(path.name, reason))

    return input_files
