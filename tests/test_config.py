"""配置与表单解析测试。"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from py_batch_resize_mcp.config import get_config, reset_config
from py_batch_resize_mcp.exceptions import ValidationError
from py_batch_resize_mcp.models import ResizeConfig


class TestResizeConfig:
    """尺寸调整配置测试"""

    def test_defaults(self):
        config = ResizeConfig()
        assert config.name_prefix == "image_"
        assert config.start_index == 1
        assert config.target_width is None
        assert config.target_height is None
        assert config.keep_aspect is False
        assert not config.has_target

    def test_blank_prefix_uses_default(self):
        assert ResizeConfig(name_prefix="").name_prefix == "image_"

    def test_immutable(self):
        config = ResizeConfig()
        with pytest.raises(PydanticValidationError):
            config.start_index = 5


class TestFromForm:
    """表单原始值解析测试"""

    def test_empty_form(self):
        config = ResizeConfig.from_form()
        assert config.name_prefix == "image_"
        assert config.start_index == 1
        assert not config.has_target

    def test_text_values(self):
        config = ResizeConfig.from_form(
            name_prefix="img_",
            start_index="7",
            width="800",
            height="",
            keep_aspect="true",
        )
        assert config.name_prefix == "img_"
        assert config.start_index == 7
        assert config.target_width == 800
        assert config.target_height is None
        assert config.keep_aspect is True

    @pytest.mark.parametrize("raw", ["abc", "", None, "-3", -1])
    def test_invalid_start_index_falls_back(self, raw):
        assert ResizeConfig.from_form(start_index=raw).start_index == 1

    def test_start_index_leading_digits(self):
        assert ResizeConfig.from_form(start_index="12abc").start_index == 12
        assert ResizeConfig.from_form(start_index=0).start_index == 0

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_dimension_is_unset(self, raw):
        config = ResizeConfig.from_form(width=raw, height=raw)
        assert config.target_width is None
        assert config.target_height is None

    @pytest.mark.parametrize("raw", ["0", 0, "-20", "wide"])
    def test_invalid_dimension_rejected(self, raw):
        with pytest.raises(ValidationError):
            ResizeConfig.from_form(width=raw)
        with pytest.raises(ValidationError):
            ResizeConfig.from_form(height=raw)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("on", True), ("1", True), ("false", False), ("", False), (True, True)],
    )
    def test_keep_aspect_parsing(self, raw, expected):
        assert ResizeConfig.from_form(keep_aspect=raw).keep_aspect is expected


class TestAppConfig:
    """环境变量配置测试"""

    def test_defaults(self):
        config = get_config()
        assert config.resize.ARCHIVE_NAME == "images.zip"
        assert config.resize.OUTPUT_FORMAT == "PNG"
        assert config.resize.INDEX_PAD_WIDTH == 3
        assert config.limits.MAX_DIMENSION == 16384
        assert config.max_file_size_bytes == 100 * 1024 * 1024

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("PBR_NAME_PREFIX", "scan_")
        monkeypatch.setenv("PBR_PNG_COMPRESS_LEVEL", "42")
        monkeypatch.setenv("PBR_MAX_DIMENSION", "2048")
        monkeypatch.setenv("PBR_LOG_LEVEL", "debug")
        monkeypatch.setenv("PBR_ENABLE_FILE_LOGGING", "yes")
        reset_config()

        config = get_config()
        assert config.resize.NAME_PREFIX == "scan_"
        assert config.resize.PNG_COMPRESS_LEVEL == 9
        assert config.limits.MAX_DIMENSION == 2048
        assert config.logging.LOG_LEVEL == "DEBUG"
        assert config.logging.ENABLE_FILE_LOGGING is True
        assert ResizeConfig.from_form().name_prefix == "scan_"

    @pytest.mark.parametrize("raw", ["0", "-10"])
    def test_non_positive_max_dimension_clamped(self, monkeypatch, raw):
        monkeypatch.setenv("PBR_MAX_DIMENSION", raw)
        reset_config()

        assert get_config().limits.MAX_DIMENSION == 1
