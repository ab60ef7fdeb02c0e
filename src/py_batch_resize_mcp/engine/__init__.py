"""批量尺寸调整处理引擎模块。

包含批量编排、预览输出和归档导出等处理逻辑。
"""

from .archive import ArchiveBundler, ArchiveExporter, ZipArchiveBundler
from .batch import BatchProcessor
from .preview import PreviewItem, PreviewList, PreviewSink


__all__ = [
    "ArchiveBundler",
    "ArchiveExporter",
    "BatchProcessor",
    "PreviewItem",
    "PreviewList",
    "PreviewSink",
    "ZipArchiveBundler",
]
