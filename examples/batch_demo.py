#!/usr/bin/env python3
"""批量尺寸调整演示脚本。

展示 py_batch_resize_mcp 库的核心功能，包括：
- 生成演示图片并批量缩放
- 预览列表与统计信息
- 导出 images.zip
"""

import asyncio
import shutil
from pathlib import Path

from PIL import Image

from py_batch_resize_mcp import BatchResizer, resize_batch
from py_batch_resize_mcp.engine import PreviewList
from py_batch_resize_mcp.exceptions import EmptyBatchError


DEMO_DIR = Path(__file__).parent.parent / "tmp" / "batch_demo"


def create_demo_images() -> Path:
    """创建几张不同格式和尺寸的演示图片"""
    input_dir = DEMO_DIR / "input"
    if input_dir.exists():
        shutil.rmtree(input_dir)
    input_dir.mkdir(parents=True)

    samples = [
        ("landscape.jpg", (1600, 900), "JPEG", "RGB", "steelblue"),
        ("portrait.png", (600, 1200), "PNG", "RGBA", (255, 128, 0, 180)),
        ("icon.gif", (64, 64), "GIF", "RGB", "green"),
        ("scan.bmp", (800, 800), "BMP", "L", 200),
    ]
    for name, size, fmt, mode, color in samples:
        Image.new(mode, size, color=color).save(input_dir / name, fmt)

    (input_dir / "broken.webp").write_bytes(b"not really a webp")
    print(f"📁 演示图片已生成: {input_dir}")
    return input_dir


async def demo_batch_resizer(input_dir: Path) -> None:
    """使用 BatchResizer 处理并导出"""
    print("\n📐 宽度统一为 320，保持宽高比")
    preview_list = PreviewList()

    with BatchResizer(preview_sink=preview_list) as resizer:
        state = await resizer.process_paths(
            [input_dir], name_prefix="demo_", width="320", keep_aspect=True
        )

        for item in preview_list.items:
            print(f"  [{item.badge}] {item.name}: {item.label}")
        for failure in state.failures:
            print(f"  ⚠️ 跳过 {failure.name}: {failure.error}")
        print(f"  📊 {state.stats_text()}")

        archive_path = await resizer.write_archive(DEMO_DIR / "output")
        print(f"  📦 归档: {archive_path}")

        try:
            await resizer.process([])
        except EmptyBatchError as e:
            print(f"  ℹ️ {e.message}")


def demo_resize_batch(input_dir: Path) -> None:
    """使用便捷函数固定输出尺寸"""
    print("\n🔲 固定输出 128x128，从 7 开始编号")
    state, archive_path = resize_batch(
        [input_dir],
        DEMO_DIR / "thumbs",
        name_prefix="thumb_",
        start_index=7,
        width=128,
        height=128,
    )
    print(f"  {', '.join(state.get_names())}")
    print(f"  📊 {state.get_summary()}")
    print(f"  📦 归档: {archive_path}")


def main():
    """主函数"""
    print("🖼️  批量尺寸调整演示")
    print("=" * 50)

    input_dir = create_demo_images()
    asyncio.run(demo_batch_resizer(input_dir))
    demo_resize_batch(input_dir)

    print("\n✅ 所有演示完成！")


if __name__ == "__main__":
    main()
