"""批量处理器模块。

按选择顺序逐个处理输入文件：解码 → 尺寸解析 → 绘制编码 → 命名。
"""

import time
from collections.abc import Sequence
from datetime import timedelta
from pathlib import Path

from humanize import naturaldelta

from ..config import get_config
from ..core.decoder import ImageDecoder
from ..core.dimensions import resolve_for
from ..core.renderer import ImageRenderer
from ..exceptions import DecodeError, EmptyBatchError, ErrorHandler
from ..models.batch_state import BatchState, BatchStatus, ProcessedResult
from ..models.image_models import EncodedImage
from ..models.resize_config import InputFile, ResizeConfig
from ..utils.cleanup_helpers import TempFileManager
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from ..utils.naming_helpers import FileNamingStrategy
from .preview import PreviewSink


logger = get_logger()


class BatchProcessor:
    """批量尺寸调整处理器

    状态机：IDLE -> PROCESSING -> (COMPLETED | COMPLETED_WITH_FAILURES)。
    条目严格串行处理，每个条目完成（或失败）后才开始下一个，
    输出序号顺序与输入顺序一致。单个条目失败只记录日志，不中断批次。
    """

    def __init__(
        self,
        decoder: ImageDecoder | None = None,
        renderer: ImageRenderer | None = None,
        preview_sink: PreviewSink | None = None,
        temp_manager: TempFileManager | None = None,
        max_dimension: int | None = None,
    ):
        """初始化批量处理器

        Args:
            decoder: 解码器
            renderer: 绘制编码器
            preview_sink: 预览接收器，为 None 时不生成预览句柄
            temp_manager: 预览临时文件管理器
            max_dimension: 输出单边上限，默认使用配置值
        """
        self.decoder = decoder or ImageDecoder()
        self.renderer = renderer or ImageRenderer()
        self.preview_sink = preview_sink
        self.temp_manager = temp_manager or TempFileManager()
        self.max_dimension = (
            max_dimension
            if max_dimension is not None
            else get_config().limits.MAX_DIMENSION
        )

    async def run(
        self,
        files: Sequence[InputFile],
        config: ResizeConfig,
        previous: BatchState | None = None,
    ) -> BatchState:
        """执行一次批量处理

        Args:
            files: 输入文件，按选择顺序
            config: 本次处理的配置
            previous: 上一次的批量状态，开始前会被清空并释放预览

        Returns:
            BatchState: 处理完成后的状态

        Raises:
            EmptyBatchError: 没有输入文件时，previous 保持不变
        """
        if not files:
            logger.warning("没有选择输入文件，批量处理未开始")
            raise EmptyBatchError()

        if previous is not None:
            self.clear(previous)

        state = BatchState(
            status=BatchStatus.PROCESSING,
            config=config,
            next_index=config.start_index,
            total_inputs=len(files),
        )
        logger.info(f"开始批量处理 {len(files)} 个文件")
        started = time.perf_counter()

        for input_file in files:
            state = await self._process_item(state, input_file, config)

        state.status = (
            BatchStatus.COMPLETED
            if state.has_results
            else BatchStatus.COMPLETED_WITH_FAILURES
        )

        elapsed = timedelta(seconds=time.perf_counter() - started)
        logger.info(
            f"批量处理完成: {state.get_summary()}，"
            f"用时 {naturaldelta(elapsed, minimum_unit='milliseconds')}"
        )
        return state

    async def _process_item(
        self, state: BatchState, input_file: InputFile, config: ResizeConfig
    ) -> BatchState:
        """处理单个输入文件，成功时分配下一个序号"""
        try:
            self._check_readable(input_file)
            source = await self.decoder.decode_async(input_file.data, input_file.name)
            with source:
                dimensions = resolve_for(source, config, self.max_dimension)
                encoded = await self.renderer.render_async(source, dimensions)
        except Exception as e:
            state.failures.append(ErrorHandler.handle_item_error(e, input_file.name))
            return state

        name = FileNamingStrategy.generate_output_name(
            config.name_prefix, state.next_index, encoded.format
        )
        state.next_index += 1

        result = ProcessedResult(
            name=name,
            payload=encoded.payload,
            size=encoded.size,
            width=encoded.width,
            height=encoded.height,
            source_name=input_file.name,
            preview_path=self._publish_preview(name, encoded),
        )
        state.results.append(result)
        logger.debug(f"处理成功: {input_file.name} -> {result.get_summary()}")
        return state

    @staticmethod
    def _check_readable(input_file: InputFile) -> None:
        """读取阶段被拒绝或超过大小上限的输入按解码失败处理"""
        if input_file.error is not None:
            raise DecodeError(input_file.error, input_file.name)

        max_size = get_config().max_file_size_bytes
        if input_file.size > max_size:
            raise DecodeError(
                MessageFormatter.validation_error(
                    "文件大小", input_file.name, f"超过上限 {max_size} 字节"
                ),
                input_file.name,
            )

    def _publish_preview(self, name: str, encoded: EncodedImage) -> Path | None:
        """生成预览句柄并交给预览接收器

        预览失败不影响结果本身。
        """
        if self.preview_sink is None:
            return None

        try:
            handle = self.temp_manager.create_temp_file(
                encoded.payload, suffix=f".{encoded.format.lower()}"
            )
        except OSError as e:
            logger.warning(MessageFormatter.operation_failed("生成预览", name, e))
            return None

        self.preview_sink.add_item(
            name, handle, encoded.size, encoded.width, encoded.height
        )
        return handle

    def clear(self, state: BatchState) -> BatchState:
        """清空批量状态并释放所有预览句柄

        Returns:
            BatchState: 新的空闲状态
        """
        released = sum(
            1 for path in state.get_preview_paths() if self.temp_manager.release(path)
        )
        if self.preview_sink is not None:
            self.preview_sink.clear()
        if released:
            logger.debug(f"已释放 {released} 个预览句柄")
        return BatchState.empty()

    def close(self) -> None:
        """释放处理器持有的全部临时文件"""
        self.temp_manager.cleanup_temp_files()
