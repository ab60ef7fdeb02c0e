"""批量尺寸调整器接口。

基于批量处理引擎的简洁用户接口：处理、导出归档、清空。
"""

import asyncio
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from .engine.archive import ArchiveBundler, ArchiveExporter
from .engine.batch import BatchProcessor
from .engine.preview import PreviewSink
from .exceptions import ValidationError
from .models import BatchState, InputFile, ResizeConfig
from .utils.file_helpers import load_input_files
from .utils.logging_helpers import get_logger


logger = get_logger()


class BatchResizer:
    """批量尺寸调整器。

    持有当前批量状态；每次处理都会替换上一次的结果并释放其预览。
    """

    def __init__(
        self,
        preview_sink: PreviewSink | None = None,
        bundler: ArchiveBundler | None = None,
        max_dimension: int | None = None,
    ):
        """初始化调整器。

        Args:
            preview_sink: 预览接收器（可选）
            bundler: 归档器，默认 ZIP
            max_dimension: 输出单边上限
        """
        self.processor = BatchProcessor(
            preview_sink=preview_sink, max_dimension=max_dimension
        )
        self.exporter = ArchiveExporter(bundler=bundler)
        self._state = BatchState.empty()

        logger.debug("初始化批量尺寸调整器")

    @property
    def state(self) -> BatchState:
        """当前批量状态"""
        return self._state

    async def process(
        self,
        files: Sequence[InputFile],
        config: ResizeConfig | None = None,
        **form: Any,
    ) -> BatchState:
        """处理一批输入文件。

        Args:
            files: 输入文件，按选择顺序
            config: 配置；为 None 时用 form 中的原始表单值构建
            **form: 传给 ResizeConfig.from_form 的表单值

        Returns:
            BatchState: 本次处理的状态

        Raises:
            EmptyBatchError: 没有输入文件时，当前状态保持不变
            ValidationError: 表单值无效时

        Examples:
            >>> resizer = BatchResizer()
            >>> state = await resizer.process(files, width="800", keep_aspect=True)
            >>> print(state.stats_text())
        """
        if config is None:
            config = ResizeConfig.from_form(**form)
        elif form:
            raise ValidationError("config 与表单参数不能同时提供")

        self._state = await self.processor.run(files, config, previous=self._state)
        return self._state

    async def process_paths(
        self,
        paths: Iterable[str | Path],
        config: ResizeConfig | None = None,
        **form: Any,
    ) -> BatchState:
        """读取文件或目录后处理"""
        files = load_input_files(paths)
        return await self.process(files, config, **form)

    async def export_archive(self) -> bytes | None:
        """导出当前结果为归档字节，没有结果时为 None"""
        return await self.exporter.export(self._state)

    async def write_archive(self, output_dir: str | Path) -> Path | None:
        """把当前结果写入 output_dir 下的归档文件"""
        return await self.exporter.write(self._state, output_dir)

    def clear(self) -> BatchState:
        """清空当前结果并释放预览"""
        self._state = self.processor.clear(self._state)
        return self._state

    def close(self) -> None:
        """清空并释放所有临时资源"""
        self.clear()
        self.processor.close()

    def __enter__(self) -> "BatchResizer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# 便捷函数


def resize_batch(
    paths: Iterable[str | Path],
    output_dir: str | Path | None = None,
    **form: Any,
) -> tuple[BatchState, Path | None]:
    """便捷的批量尺寸调整函数

    Args:
        paths: 输入文件或目录
        output_dir: 归档输出目录，为 None 时不写归档
        **form: 表单值，包括 name_prefix、start_index、width、height、keep_aspect

    Returns:
        tuple: (批量状态, 归档路径或 None)

    Examples:
        >>> state, archive = resize_batch(["photos/"], "out/", width=640, keep_aspect=True)
        >>> print(state.stats_text(), archive)
    """

    async def _run() -> tuple[BatchState, Path | None]:
        with BatchResizer() as resizer:
            state = await resizer.process_paths(paths, **form)
            archive_path = None
            if output_dir is not None:
                archive_path = await resizer.write_archive(output_dir)
            return state, archive_path

    return asyncio.run(_run())
