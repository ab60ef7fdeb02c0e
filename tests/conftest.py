"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from py_batch_resize_mcp.config import reset_config


def make_image_bytes(
    size: tuple[int, int] = (200, 100),
    fmt: str = "PNG",
    mode: str = "RGB",
    color: tuple[int, ...] | str = "red",
) -> bytes:
    """用 Pillow 生成指定格式的图片字节"""
    img = Image.new(mode, size, color=color)
    draw = ImageDraw.Draw(img)
    fill = 1 if mode == "P" else "blue"
    draw.rectangle([0, 0, size[0] // 2, size[1] // 2], fill=fill)
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


def create_input(name: str, data: bytes):
    """创建 InputFile"""
    from py_batch_resize_mcp.models import InputFile

    return InputFile(name=name, data=data)


def create_config(**kwargs):
    """创建完整的ResizeConfig，提供默认值"""
    from py_batch_resize_mcp.models import ResizeConfig

    defaults = {
        "name_prefix": "image_",
        "start_index": 1,
        "target_width": None,
        "target_height": None,
        "keep_aspect": False,
    }
    defaults.update(kwargs)
    return ResizeConfig(**defaults)


@pytest.fixture(autouse=True)
def fresh_config():
    """每个测试使用干净的全局配置"""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def image_bytes() -> dict[str, bytes]:
    """各种常见格式的测试图片"""
    return {
        "png": make_image_bytes((200, 100), "PNG"),
        "jpeg": make_image_bytes((640, 480), "JPEG"),
        "gif": make_image_bytes((30, 20), "GIF", mode="P", color=0),
        "bmp": make_image_bytes((16, 16), "BMP"),
        "webp": make_image_bytes((120, 90), "WEBP"),
        "rgba": make_image_bytes((50, 50), "PNG", mode="RGBA", color=(0, 0, 0, 0)),
    }


@pytest.fixture
def corrupt_bytes() -> bytes:
    """不是图片的字节"""
    return b"this is definitely not an image"


@pytest.fixture
def image_dir(temp_dir: Path, image_bytes: dict[str, bytes]) -> Path:
    """包含若干图片和一个非图片文件的目录"""
    input_dir = temp_dir / "input"
    input_dir.mkdir()
    (input_dir / "b_photo.jpg").write_bytes(image_bytes["jpeg"])
    (input_dir / "a_icon.png").write_bytes(image_bytes["png"])
    (input_dir / "c_anim.gif").write_bytes(image_bytes["gif"])
    (input_dir / "notes.txt").write_text("not an image")
    return input_dir
