"""Tests for structured logging."""

import json
import logging
from pathlib import Path

import httpx
import pytest
import structlog

from buildless.cache.credentials import Credentials, ObjectStoreTarget
from buildless.cache.transports import build_object_store
from buildless.config.models import LoggingConfig, LogOutputConfig
from buildless.core.logging import configure_logging, get_log_file_path, get_logger


class TestLoggingConfiguration:
    """Logging configuration tests."""

    def setup_method(self) -> None:
        """Reset structlog and stdlib logging before each test."""
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_json_format_when_log_then_valid_json_output(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON format produces valid JSON with required fields."""
        # Given
        configure_logging(json_format=True, level="INFO")
        logger = get_logger("test")

        # When
        logger.info("test message", key="value")

        # Then
        captured = capsys.readouterr()
        lines = [line for line in captured.err.strip().split("\n") if line]
        if lines:
            data = json.loads(lines[-1])
            assert data["event"] == "test message"
            assert data["key"] == "value"
            assert "timestamp" in data
            assert data["level"] == "info"

    def test_given_config_object_when_configure_then_takes_precedence(self, tmp_path: Path) -> None:
        """LoggingConfig object takes precedence over simple params."""
        # Given
        log_file = tmp_path / "test.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[LogOutputConfig(format="json", destination=str(log_file))],
        )

        # When - config's DEBUG should override the level="ERROR" param
        configure_logging(config=config, json_format=False, level="ERROR")
        get_logger().debug("debug msg")

        # Then
        assert "debug msg" in log_file.read_text()
        assert get_log_file_path() == log_file

    def test_given_multi_output_config_when_configure_then_logs_to_all(
        self, tmp_path: Path
    ) -> None:
        """Multiple outputs receive logs according to their levels."""
        # Given
        debug_file = tmp_path / "debug.log"
        info_file = tmp_path / "nested" / "info.log"
        config = LoggingConfig(
            level="DEBUG",
            outputs=[
                LogOutputConfig(format="json", destination=str(info_file), level="INFO"),
                LogOutputConfig(format="json", destination=str(debug_file)),
            ],
        )

        # When
        configure_logging(config=config)
        logger = get_logger()
        logger.debug("debug only")
        logger.info("info msg")

        # Then
        info_content = info_file.read_text()
        assert "info msg" in info_content
        assert "debug only" not in info_content

        debug_content = debug_file.read_text()
        assert "debug only" in debug_content
        assert "info msg" in debug_content

    def test_given_stream_outputs_when_configure_then_no_log_file(self) -> None:
        configure_logging(level="INFO")

        assert get_log_file_path() is None


class TestObjectStoreRequestLogging:
    """The object store logs every request through structlog."""

    def setup_method(self) -> None:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()

    def test_given_debug_file_output_when_request_then_logged_without_secret(
        self, tmp_path: Path
    ) -> None:
        # Given
        log_file = tmp_path / "cache.log"
        configure_logging(
            config=LoggingConfig(
                level="DEBUG",
                outputs=[LogOutputConfig(format="json", destination=str(log_file))],
            )
        )
        target = ObjectStoreTarget(
            endpoint="http://local.less.build:42011",
            root="/cache/generic",
            credentials=Credentials(username="apikey", secret="k-123"),
        )
        client = build_object_store(
            target, transport=httpx.MockTransport(lambda _: httpx.Response(404))
        )

        # When
        client.read("ab/cd")

        # Then
        events = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        names = [event["event"] for event in events]
        assert "object_store_request" in names
        assert "object_store_response" in names
        response = next(e for e in events if e["event"] == "object_store_response")
        assert response["status"] == 404
        assert response["url"].endswith("/cache/generic/ab/cd")
        assert "k-123" not in log_file.read_text()
