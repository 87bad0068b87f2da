"""Unit tests for logging utilities."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from layouts import create_logger, get_logger

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestCreateLogger:
    def test_creates_log_directory_if_missing(self, fs: "FakeFilesystem") -> None:
        log_path = Path("/logs/test.log")
        assert not log_path.parent.exists()

        _ = create_logger(log_file=str(log_path))

        assert log_path.parent.exists()

    def test_json_format(self, fs: "FakeFilesystem") -> None:
        logger = create_logger(log_file="/logs/test.log", log_format="json")

        logger.warning("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert '"event": "test_event"' in log_content
        assert '"key": "value"' in log_content

    def test_text_format_is_default(self, fs: "FakeFilesystem") -> None:
        logger = create_logger(log_file="/logs/test.log")

        logger.warning("test_event", key="value")

        log_content = Path("/logs/test.log").read_text()
        assert "test_event" in log_content
        assert "key=value" in log_content

    def test_default_level_is_warning(self, fs: "FakeFilesystem") -> None:
        logger = create_logger(log_file="/logs/test.log")

        logger.info("info_message")
        logger.warning("warning_message")

        log_content = Path("/logs/test.log").read_text()
        assert "info_message" not in log_content
        assert "warning_message" in log_content

    def test_explicit_level(self, fs: "FakeFilesystem") -> None:
        logger = create_logger(level="error", log_file="/logs/test.log")

        logger.warning("warning_message")
        logger.error("error_message")

        log_content = Path("/logs/test.log").read_text()
        assert "warning_message" not in log_content
        assert "error_message" in log_content

    def test_log_level_env_var(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAYOUTS_LOG_LEVEL", "info")
        logger = create_logger(log_file="/logs/test.log")

        logger.info("info_message")

        assert "info_message" in Path("/logs/test.log").read_text()

    def test_debug_env_var_overrides_level(
        self, fs: "FakeFilesystem", monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LAYOUTS_DEBUG", "1")
        logger = create_logger(level="error", log_file="/logs/test.log")

        logger.debug("debug_message")

        assert "debug_message" in Path("/logs/test.log").read_text()

    def test_logs_to_stderr_without_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_logger()

        logger.warning("stderr_event")

        captured = capsys.readouterr()
        assert "stderr_event" in captured.err
        assert captured.out == ""


class TestCreateLoggerRotation:
    def test_with_rotation_uses_stdlib_logger(self, fs: "FakeFilesystem") -> None:
        _ = create_logger(
            log_file="/logs/rotating.log",
            max_bytes=1000,
            backup_count=3,
        )

        found = False
        for name in logging.root.manager.loggerDict:
            if name.startswith("layouts.rotating."):
                stdlib_logger = logging.getLogger(name)
                assert len(stdlib_logger.handlers) == 1
                handler = stdlib_logger.handlers[0]
                assert isinstance(handler, RotatingFileHandler)
                assert handler.maxBytes == 1000
                assert handler.backupCount == 3
                found = True
                break

        assert found, "RotatingFileHandler not found"

    def test_rotation_requires_both_params(self, fs: "FakeFilesystem") -> None:
        logger = create_logger(log_file="/logs/single.log", max_bytes=1000)
        logger.warning("test")

        assert "test" in Path("/logs/single.log").read_text()


class TestGetLogger:
    def test_binds_component(self, capsys: pytest.CaptureFixture[str]) -> None:
        get_logger("resolver").warning("bound_event")

        assert "component=resolver" in capsys.readouterr().err
