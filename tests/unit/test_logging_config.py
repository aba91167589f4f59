"""Tests for logging configuration."""

from pathlib import Path

import structlog

from sched_debugger import logging_config
from sched_debugger.logging_config import configure_logging, get_logger


class TestConfigureLogging:
    def test_configure_default(self):
        configure_logging()
        log = structlog.get_logger()
        assert log is not None

    def test_configure_with_level(self):
        configure_logging(level="DEBUG")
        # Should not raise

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(level="chatty")
        # Should not raise

    def test_log_file_creates_parent_dirs(self, tmp_path: Path):
        log_file = tmp_path / "deep" / "nested" / "debugger.log"
        configure_logging(log_file=log_file)
        assert log_file.parent.exists()

    def test_log_file_receives_plain_text(self, tmp_path: Path):
        log_file = tmp_path / "debugger.log"
        configure_logging(log_file=log_file)
        get_logger(component="test").info("hello")
        line = log_file.read_text().splitlines()[-1]
        assert "hello" in line
        assert "[info" in line
        assert "component=test" in line
        assert "\x1b[" not in line

    def test_multiline_event_written_verbatim(self, tmp_path: Path):
        log_file = tmp_path / "debugger.log"
        configure_logging(log_file=log_file)
        get_logger().info("Dump of scheduling queue:\nname: p2, namespace: ns2\n")
        text = log_file.read_text()
        assert "Dump of scheduling queue:\nname: p2, namespace: ns2\n" in text
        assert "\\n" not in text

    def test_level_filters(self, tmp_path: Path):
        log_file = tmp_path / "debugger.log"
        configure_logging(level="WARNING", log_file=log_file)
        log = get_logger()
        log.info("dropped")
        log.warning("kept")
        text = log_file.read_text()
        assert "kept" in text
        assert "dropped" not in text

    def test_reconfigure_closes_previous_log_file(self, tmp_path: Path):
        configure_logging(log_file=tmp_path / "first.log")
        first = logging_config._log_stream
        configure_logging(log_file=tmp_path / "second.log")
        assert first.closed
        configure_logging()
        assert logging_config._log_stream is None


class TestGetLogger:
    def test_basic_logger(self):
        configure_logging()
        assert get_logger() is not None

    def test_logger_with_component(self):
        with structlog.testing.capture_logs() as logs:
            get_logger(component="cache-dumper").info("event")
        assert logs[0]["component"] == "cache-dumper"

    def test_logger_with_extra_kwargs(self):
        with structlog.testing.capture_logs() as logs:
            get_logger(component="cache-dumper", node="n1").info("event")
        assert logs[0]["node"] == "n1"
