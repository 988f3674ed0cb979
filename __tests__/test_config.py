import logging
import pytest
from pydantic import ValidationError
from memoryboard.config import EditorSettings, get_settings, reset_settings
from memoryboard.utils.log_utils import configure_logging


class TestEditorSettings:
    """Tests for settings defaults and environment overrides."""

    def test_defaults(self):
        settings = EditorSettings()
        assert settings.max_blocks == 10
        assert settings.max_image_size == 1024 * 1024
        assert settings.max_images_per_block == 5
        assert settings.debounce_seconds == 0.1

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MEMORYBOARD_MAX_BLOCKS", "4")
        monkeypatch.setenv("MEMORYBOARD_DEBOUNCE_MS", "250")
        reset_settings()
        settings = get_settings()
        assert settings.max_blocks == 4
        assert settings.debounce_seconds == 0.25

    def test_settings_are_cached(self):
        assert get_settings() is get_settings()

    def test_invalid_values(self):
        with pytest.raises(ValidationError):
            EditorSettings(max_blocks=0)


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_level_from_settings(self, monkeypatch):
        monkeypatch.setenv("MEMORYBOARD_LOG_LEVEL", "DEBUG")
        reset_settings()
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        try:
            configure_logging()
            assert logging.getLogger("memoryboard").getEffectiveLevel() == logging.DEBUG
        finally:
            root.handlers[:] = handlers
            root.setLevel(level)
