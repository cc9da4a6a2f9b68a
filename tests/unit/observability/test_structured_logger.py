"""Unit tests for SDK logging."""

import logging

import pytest

from flowise_ai_sdk.observability.logging import (
    Logger,
    SilentLogger,
    StructuredLogger,
    get_logger,
    set_logger,
)
from tests.helpers.flowise_mocks import RecordingLogger

pytestmark = pytest.mark.unit


class TestStructuredLogger:

    def test_formats_fields(self, caplog):
        logger = StructuredLogger("uploads")

        with caplog.at_level(logging.DEBUG, logger="flowise_ai_sdk.uploads"):
            logger.debug("Chosen upload type", file="a.pdf", upload_type="file:full", skipped=None)

        assert caplog.records[0].name == "flowise_ai_sdk.uploads"
        assert caplog.records[0].getMessage() == (
            "[provider=flowise file=a.pdf upload_type=file:full] Chosen upload type"
        )

    def test_warn_and_error(self, caplog):
        logger = StructuredLogger("streaming")

        with caplog.at_level(logging.WARNING, logger="flowise_ai_sdk.streaming"):
            logger.warn("Skipping unknown event type", kind="mystery")
            logger.error("Stream error", error=ValueError("bad"))

        assert [r.levelno for r in caplog.records] == [logging.WARNING, logging.ERROR]
        assert caplog.records[1].getMessage() == (
            "[provider=flowise error_type=ValueError error_msg=bad] Stream error"
        )

    def test_debug_suppressed_by_level(self, caplog):
        with caplog.at_level(logging.INFO, logger="flowise_ai_sdk.http"):
            StructuredLogger("http").debug("hidden")

        assert caplog.records == []


class TestGlobalLogger:

    def test_default_is_silent(self):
        assert isinstance(get_logger(), SilentLogger)

    def test_set_logger(self):
        recording = RecordingLogger()
        previous = get_logger()
        try:
            set_logger(recording)
            get_logger().warn("hello", k=1)
        finally:
            set_logger(previous)

        assert recording.records == [("warn", "hello", {"k": 1})]

    def test_protocol(self):
        assert isinstance(StructuredLogger("x"), Logger)
        assert isinstance(SilentLogger(), Logger)
        assert isinstance(RecordingLogger(), Logger)
