"""
Unit tests for LogCatSettings.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from logcat.config import DEFAULT_TAG, LogCatSettings, LogFormat, SinkName
from logcat.core import LogCat


class TestDefaults:
    def test_defaults(self) -> None:
        settings = LogCatSettings()
        assert settings.enabled is True
        assert settings.tag == DEFAULT_TAG
        assert settings.trace_enabled is True
        assert settings.max_chunk_length == 3800
        assert settings.sink == SinkName.STDIO
        assert settings.format == LogFormat.CONSOLE
        assert settings.configure_structlog is False


class TestEnvironment:
    """LOGCAT_* environment variables"""

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGCAT_ENABLED", "false")
        monkeypatch.setenv("LOGCAT_TAG", "App")
        monkeypatch.setenv("LOGCAT_TRACE_ENABLED", "0")
        monkeypatch.setenv("LOGCAT_MAX_CHUNK_LENGTH", "100")
        monkeypatch.setenv("LOGCAT_SINK", "structlog")
        monkeypatch.setenv("LOGCAT_FORMAT", "json")

        settings = LogCatSettings()
        assert settings.enabled is False
        assert settings.tag == "App"
        assert settings.trace_enabled is False
        assert settings.max_chunk_length == 100
        assert settings.sink == SinkName.STRUCTLOG
        assert settings.format == LogFormat.JSON

    def test_invalid_sink_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("LOGCAT_SINK", "syslog")
        with pytest.raises(ValidationError):
            LogCatSettings()


class TestValidation:
    def test_chunk_length_must_be_positive(self) -> None:
        with pytest.raises(ValidationError, match="max_chunk_length"):
            LogCatSettings(max_chunk_length=0)

    def test_settings_are_frozen(self) -> None:
        settings = LogCatSettings()
        with pytest.raises(ValidationError):
            settings.tag = "other"  # type: ignore[misc]


class TestFromSettings:
    def test_instance_takes_initial_state(self, sink) -> None:
        settings = LogCatSettings(enabled=False, tag="App", trace_enabled=False, max_chunk_length=5)
        logcat = LogCat.from_settings(settings, sink=sink)

        assert logcat.sink is sink
        assert logcat.enabled is False
        assert logcat.tag == "App"
        assert logcat.trace_enabled is False

        logcat.enabled = True
        logcat.i("abcdefghijk")
        assert sink.messages == ["abcde", "fghij", "k"]
