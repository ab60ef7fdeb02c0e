"""归档导出模块。

把批量结果按顺序打包为单个 ZIP 归档。
"""

import asyncio
import zipfile
from collections.abc import Sequence
from io import BytesIO
from pathlib import Path
from typing import Protocol

from ..config import get_config
from ..exceptions import ArchiveError, ErrorHandler
from ..models.batch_state import BatchState
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import format_bytes


logger = get_logger()


class ArchiveBundler(Protocol):
    """归档器接口：有序 (名称, 字节) 列表 -> 单个归档字节"""

    def bundle(self, entries: Sequence[tuple[str, bytes]]) -> bytes: ...


class ZipArchiveBundler:
    """ZIP 归档器"""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED):
        self.compression = compression

    def bundle(self, entries: Sequence[tuple[str, bytes]]) -> bytes:
        """打包条目

        Raises:
            ArchiveError: 条目名称重复时
        """
        seen: set[str] = set()
        for name, _ in entries:
            if name in seen:
                raise ArchiveError(f"归档中存在重复的文件名: {name}", name)
            seen.add(name)

        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=self.compression) as zf:
            for name, payload in entries:
                zf.writestr(name, payload)
        return buffer.getvalue()


class ArchiveExporter:
    """归档导出器

    没有成功结果时导出为空操作；失败时抛出 ArchiveError，
    批量状态保持不变以便重试。
    """

    def __init__(
        self, bundler: ArchiveBundler | None = None, archive_name: str | None = None
    ):
        self.bundler = bundler or ZipArchiveBundler()
        self.archive_name = archive_name or get_config().resize.ARCHIVE_NAME

    async def export(self, state: BatchState) -> bytes | None:
        """生成归档字节

        Returns:
            bytes | None: 归档内容，没有可导出的结果时为 None

        Raises:
            ArchiveError: 打包失败时
        """
        if not state.has_results:
            logger.debug("没有可导出的结果，跳过归档")
            return None

        try:
            payload = await asyncio.to_thread(
                self.bundler.bundle, state.archive_entries()
            )
        except Exception as e:
            raise ErrorHandler.handle_archive_error(e, self.archive_name) from e

        logger.info(
            f"归档完成 [{self.archive_name}]: {state.get_success_count()} 个文件, "
            f"{format_bytes(len(payload))}"
        )
        return payload

    async def write(self, state: BatchState, output_dir: str | Path) -> Path | None:
        """生成归档并写入 output_dir/<archive_name>

        Returns:
            Path | None: 归档路径，没有可导出的结果时为 None

        Raises:
            ArchiveError: 打包或写入失败时
        """
        payload = await self.export(state)
        if payload is None:
            return None

        archive_path = Path(output_dir) / self.archive_name
        try:
            archive_path.parent.mkdir(parents=True, exist_ok=True)
            archive_path.write_bytes(payload)
        except OSError as e:
            raise ErrorHandler.handle_archive_error(e, str(archive_path)) from e

        return archive_path
