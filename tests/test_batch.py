"""批量处理器测试。

测试顺序命名、失败跳过、状态机和预览释放。
"""

from io import BytesIO

import pytest
from PIL import Image

from py_batch_resize_mcp.core.renderer import ImageRenderer
from py_batch_resize_mcp.engine.batch import BatchProcessor
from py_batch_resize_mcp.engine.preview import PreviewList, PreviewSink
from py_batch_resize_mcp.exceptions import EmptyBatchError, EncodeError
from py_batch_resize_mcp.models import BatchState, BatchStatus, InputFile
from py_batch_resize_mcp.utils.cleanup_helpers import TempFileManager
from tests.conftest import create_config, create_input


pytestmark = pytest.mark.anyio


@pytest.fixture
def preview_list():
    return PreviewList()


@pytest.fixture
def processor(preview_list, temp_dir):
    processor = BatchProcessor(
        preview_sink=preview_list,
        temp_manager=TempFileManager(directory=temp_dir),
    )
    yield processor
    processor.close()


@pytest.fixture
def five_inputs(image_bytes):
    return [
        create_input(f"{key}.{key}", image_bytes[key])
        for key in ("png", "jpeg", "gif", "bmp", "webp")
    ]


class TestBatchNaming:
    """顺序命名测试"""

    async def test_default_names(self, processor, five_inputs):
        state = await processor.run(five_inputs, create_config())

        assert state.status == BatchStatus.COMPLETED
        assert state.get_names() == [
            "image_001.png",
            "image_002.png",
            "image_003.png",
            "image_004.png",
            "image_005.png",
        ]
        assert state.next_index == 6
        assert state.total_inputs == 5

    async def test_custom_prefix_and_start(self, processor, image_bytes):
        files = [
            create_input("a.png", image_bytes["png"]),
            create_input("b.jpg", image_bytes["jpeg"]),
        ]
        state = await processor.run(
            files, create_config(name_prefix="img_", start_index=7)
        )
        assert state.get_names() == ["img_007.png", "img_008.png"]

    async def test_failed_item_does_not_consume_index(
        self, processor, image_bytes, corrupt_bytes
    ):
        files = [
            create_input("a.png", image_bytes["png"]),
            create_input("broken.jpg", corrupt_bytes),
            create_input("c.bmp", image_bytes["bmp"]),
        ]
        state = await processor.run(files, create_config())

        assert state.status == BatchStatus.COMPLETED
        assert state.get_names() == ["image_001.png", "image_002.png"]
        assert [r.source_name for r in state.results] == ["a.png", "c.bmp"]
        assert state.get_failure_count() == 1
        assert state.failures[0].name == "broken.jpg"
        assert state.failures[0].stage == "图像解码"

    async def test_encode_failure_does_not_consume_index(
        self, preview_list, temp_dir, image_bytes
    ):
        class FlakyRenderer(ImageRenderer):
            """第二次绘制时失败"""

            calls = 0

            def render(self, source, dimensions):
                self.calls += 1
                if self.calls == 2:
                    raise EncodeError("画布编码失败", source.name)
                return super().render(source, dimensions)

        processor = BatchProcessor(
            renderer=FlakyRenderer(),
            preview_sink=preview_list,
            temp_manager=TempFileManager(directory=temp_dir),
        )
        files = [
            create_input("a.png", image_bytes["png"]),
            create_input("b.jpg", image_bytes["jpeg"]),
            create_input("c.bmp", image_bytes["bmp"]),
        ]
        state = await processor.run(files, create_config())
        processor.close()

        assert state.status == BatchStatus.COMPLETED
        assert state.get_names() == ["image_001.png", "image_002.png"]
        assert [r.source_name for r in state.results] == ["a.png", "c.bmp"]
        assert [(f.name, f.stage) for f in state.failures] == [("b.jpg", "图像编码")]

    async def test_rejected_input_is_item_failure(self, processor, image_bytes):
        files = [
            create_input("a.png", image_bytes["png"]),
            InputFile.rejected("big.jpg", "文件过大"),
            create_input("c.gif", image_bytes["gif"]),
        ]
        state = await processor.run(files, create_config())

        assert state.get_names() == ["image_001.png", "image_002.png"]
        assert state.failures[0].name == "big.jpg"
        assert state.failures[0].stage == "图像解码"

    async def test_oversized_input_is_item_failure(
        self, processor, image_bytes, monkeypatch
    ):
        from py_batch_resize_mcp.config import get_config

        limit = len(image_bytes["png"])
        monkeypatch.setattr(type(get_config()), "max_file_size_bytes", limit)
        files = [
            create_input("small.png", image_bytes["png"]),
            create_input("large.jpg", image_bytes["jpeg"] + b"\0" * limit),
        ]
        state = await processor.run(files, create_config())

        assert state.get_names() == ["image_001.png"]
        assert [f.name for f in state.failures] == ["large.jpg"]

    async def test_tiny_side_cap_still_succeeds(self, image_bytes):
        processor = BatchProcessor(max_dimension=0)
        state = await processor.run(
            [create_input("a.png", image_bytes["png"])], create_config()
        )
        assert state.status == BatchStatus.COMPLETED
        assert (state.results[0].width, state.results[0].height) == (1, 1)

    async def test_results_follow_input_order(self, processor, image_bytes):
        sizes = [(10, 10), (20, 10), (30, 10), (40, 10)]
        files = []
        for i, size in enumerate(sizes):
            buffer = BytesIO()
            Image.new("RGB", size).save(buffer, format="PNG")
            files.append(create_input(f"{i}.png", buffer.getvalue()))

        state = await processor.run(files, create_config())
        assert [r.width for r in state.results] == [10, 20, 30, 40]


class TestBatchOutput:
    """输出内容测试"""

    async def test_outputs_are_resized_png(self, processor, five_inputs):
        state = await processor.run(
            five_inputs, create_config(target_width=64, keep_aspect=True)
        )
        for result in state.results:
            assert result.size == len(result.payload)
            with Image.open(BytesIO(result.payload)) as img:
                assert img.format == "PNG"
                assert img.size == (result.width, result.height)
                assert img.width == 64

        # 200x100 -> 64x32
        assert (state.results[0].width, state.results[0].height) == (64, 32)

    async def test_stats_text(self, processor, image_bytes):
        state = await processor.run(
            [create_input("a.png", image_bytes["png"])], create_config()
        )
        assert state.stats_text().startswith("1 file(s) · ")
        assert state.status_message() == state.stats_text()


class TestBatchStateMachine:
    """状态机测试"""

    async def test_all_items_fail(self, processor, corrupt_bytes, preview_list):
        files = [create_input(f"{i}.jpg", corrupt_bytes) for i in range(3)]
        state = await processor.run(files, create_config())

        assert state.status == BatchStatus.COMPLETED_WITH_FAILURES
        assert not state.has_results
        assert state.get_failure_count() == 3
        assert state.status_message() == (
            "No files could be processed. Check the console for errors."
        )
        assert state.stats_text() == "No files processed yet."
        assert len(preview_list) == 0

    async def test_empty_selection_keeps_previous_state(
        self, processor, image_bytes
    ):
        previous = await processor.run(
            [create_input("a.png", image_bytes["png"])], create_config()
        )
        preview = previous.results[0].preview_path

        with pytest.raises(EmptyBatchError) as exc_info:
            await processor.run([], create_config(), previous=previous)

        assert exc_info.value.message == "Please select at least one image file."
        assert previous.get_names() == ["image_001.png"]
        assert preview.exists()

    async def test_new_run_replaces_previous(
        self, processor, image_bytes, preview_list
    ):
        first = await processor.run(
            [
                create_input("a.png", image_bytes["png"]),
                create_input("b.png", image_bytes["png"]),
            ],
            create_config(),
        )
        old_previews = first.get_preview_paths()

        second = await processor.run(
            [create_input("c.gif", image_bytes["gif"])],
            create_config(name_prefix="new_"),
            previous=first,
        )

        assert second.get_names() == ["new_001.png"]
        assert not any(p.exists() for p in old_previews)
        assert [item.name for item in preview_list.items] == ["new_001.png"]

    async def test_idle_state(self):
        state = BatchState.empty()
        assert state.status == BatchStatus.IDLE
        assert state.status_message() == "No files processed yet."


class TestPreview:
    """预览输出与释放测试"""

    async def test_preview_items(self, processor, image_bytes, preview_list):
        await processor.run(
            [create_input("a.png", image_bytes["png"])], create_config()
        )

        assert isinstance(preview_list, PreviewSink)
        assert not preview_list.show_help
        item = preview_list.items[0]
        assert item.name == "image_001.png"
        assert item.badge == "PNG"
        assert item.handle.exists()
        assert item.label.startswith("200×100px · ")

    async def test_clear_releases_previews(self, processor, five_inputs, preview_list):
        state = await processor.run(five_inputs, create_config())
        previews = state.get_preview_paths()
        assert len(previews) == 5
        assert processor.temp_manager.active_count == 5

        cleared = processor.clear(state)

        assert cleared.status == BatchStatus.IDLE
        assert cleared.stats_text() == "No files processed yet."
        assert not any(p.exists() for p in previews)
        assert processor.temp_manager.active_count == 0
        assert preview_list.show_help

    async def test_no_sink_no_previews(self, image_bytes):
        processor = BatchProcessor()
        state = await processor.run(
            [create_input("a.png", image_bytes["png"])], create_config()
        )
        assert state.results[0].preview_path is None
        assert processor.temp_manager.active_count == 0
