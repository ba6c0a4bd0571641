"""Unit tests for recording permission."""

import pytest

from stats_logger.core import settings as settings_module
from stats_logger.core.settings import LoggerSettings, detect_editor


class TestDetectEditor:

    def test_source_checkout_is_editor(self, monkeypatch):
        monkeypatch.setattr(settings_module, "is_frozen", lambda: False)
        assert detect_editor() is True

    def test_frozen_build_is_not_editor(self, monkeypatch):
        monkeypatch.setattr(settings_module, "is_frozen", lambda: True)
        assert detect_editor() is False

    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("0", False), ("off", False)])
    def test_env_override(self, monkeypatch, value, expected):
        monkeypatch.setattr(settings_module, "is_frozen", lambda: not expected)
        monkeypatch.setenv("STATS_LOGGER_EDITOR", value)

        assert detect_editor() is expected

    def test_unrecognized_override_falls_back(self, monkeypatch):
        monkeypatch.setattr(settings_module, "is_frozen", lambda: True)
        monkeypatch.setenv("STATS_LOGGER_EDITOR", "perhaps")

        assert detect_editor() is False


class TestLoggerSettings:

    @pytest.mark.parametrize(
        "record_in_editor,is_editor,expected",
        [
            (False, False, True),
            (True, False, True),
            (True, True, True),
            (False, True, False),
        ],
    )
    def test_can_record(self, record_in_editor, is_editor, expected):
        settings = LoggerSettings(record_in_editor=record_in_editor, is_editor=is_editor)
        assert settings.can_record is expected

    def test_is_editor_detected_when_unset(self, monkeypatch):
        monkeypatch.setenv("STATS_LOGGER_EDITOR", "1")

        settings = LoggerSettings()

        assert settings.is_editor is True
        assert settings.can_record is False
