"""批量处理状态模型。

定义单次批量处理的结果集合、失败记录和状态机状态。
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ..utils.message_formatter import (
    EMPTY_STATE_MESSAGE,
    NOTHING_PROCESSED_MESSAGE,
    MessageFormatter,
    format_bytes,
)
from .resize_config import ResizeConfig


class BatchStatus(str, Enum):
    """批量处理状态"""

    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    COMPLETED_WITH_FAILURES = "completed_with_failures"  # 没有任何文件成功


class ProcessedResult(BaseModel):
    """单个成功处理的文件"""

    name: str = Field(description="生成的文件名")
    payload: bytes = Field(repr=False, description="编码后的字节")
    size: int = Field(ge=0, description="编码后的字节数")
    width: int = Field(ge=1, description="输出宽度")
    height: int = Field(ge=1, description="输出高度")
    source_name: str | None = Field(None, description="原始文件名")
    preview_path: Path | None = Field(None, description="预览句柄（临时文件）")

    def get_size_human(self) -> str:
        """人类可读的文件大小"""
        return format_bytes(self.size)

    def get_summary(self) -> str:
        """结果摘要"""
        label = MessageFormatter.preview_label(self.width, self.height, self.size)
        return f"{self.name}: {label}"


class FailedItem(BaseModel):
    """单个失败的输入项"""

    name: str = Field(description="原始文件名")
    stage: str = Field(description="失败阶段")
    error: str = Field(description="错误信息")


class BatchState(BaseModel):
    """单次批量处理的状态

    结果按输入顺序排列，序号只在成功时递增。
    """

    status: BatchStatus = Field(BatchStatus.IDLE, description="状态")
    config: ResizeConfig | None = Field(None, description="本次处理的配置")
    results: list[ProcessedResult] = Field(default_factory=list)
    failures: list[FailedItem] = Field(default_factory=list)
    next_index: int = Field(0, ge=0, description="下一个待分配的序号")
    total_inputs: int = Field(0, ge=0, description="输入文件数")

    @classmethod
    def empty(cls) -> "BatchState":
        """空闲状态"""
        return cls()

    @property
    def has_results(self) -> bool:
        return bool(self.results)

    def get_success_count(self) -> int:
        return len(self.results)

    def get_failure_count(self) -> int:
        return len(self.failures)

    def get_total_size(self) -> int:
        """所有成功结果的总字节数"""
        return sum(r.size for r in self.results)

    def get_names(self) -> list[str]:
        return [r.name for r in self.results]

    def get_preview_paths(self) -> list[Path]:
        return [r.preview_path for r in self.results if r.preview_path is not None]

    def archive_entries(self) -> list[tuple[str, bytes]]:
        """按顺序返回 (文件名, 字节) 列表，交给归档器"""
        return [(r.name, r.payload) for r in self.results]

    def stats_text(self) -> str:
        """统计栏文本"""
        return MessageFormatter.batch_stats(
            self.get_success_count(), self.get_total_size()
        )

    def status_message(self) -> str:
        """面向用户的状态提示"""
        match self.status:
            case BatchStatus.COMPLETED_WITH_FAILURES:
                return NOTHING_PROCESSED_MESSAGE
            case BatchStatus.COMPLETED:
                return self.stats_text()
            case _:
                return EMPTY_STATE_MESSAGE

    def get_summary(self) -> str:
        """批量处理摘要"""
        if self.status in (BatchStatus.IDLE, BatchStatus.PROCESSING):
            return EMPTY_STATE_MESSAGE

        summary = (
            f"处理 {self.get_success_count()}/{self.total_inputs} 个文件, "
            f"总大小 {format_bytes(self.get_total_size())}"
        )
        if self.failures:
            summary += f", 失败 {self.get_failure_count()} 个"
        return summary
