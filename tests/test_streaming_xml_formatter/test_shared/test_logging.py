"""Tests for correlation-aware logging."""

import io
import logging

from streaming_xml_formatter.shared.logging import CorrelationLogger, get_logger
from streaming_xml_formatter.stream import FormatStreamProcessor


class TestCorrelationLogger:
    """Test CorrelationLogger."""

    def test_component_defaults_to_last_name_part(self):
        """Test the default component name."""
        logger = get_logger("streaming_xml_formatter.stream")

        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "stream"
        assert logger.correlation_id is None
        assert logger.fields == {}

    def test_records_carry_correlation_fields(self, caplog):
        """Test that extra fields are attached to log records."""
        # Arrange
        logger = get_logger("streaming_xml_formatter.test", "run-7", "tester")

        # Act
        with caplog.at_level(logging.DEBUG, logger="streaming_xml_formatter.test"):
            logger.debug("chunk done", extra={"bytes_read": 12})

        # Assert
        record = caplog.records[-1]
        assert record.getMessage() == "chunk done"
        assert record.component == "tester"
        assert record.correlation_id == "run-7"
        assert record.bytes_read == 12

    def test_levels(self, caplog):
        """Test that each helper logs at its level."""
        # Arrange
        logger = get_logger("streaming_xml_formatter.levels")

        # Act
        with caplog.at_level(logging.DEBUG, logger="streaming_xml_formatter.levels"):
            logger.info("i")
            logger.warning("w")
            logger.error("e", exc_info=False)

        # Assert
        assert [record.levelno for record in caplog.records] == [
            logging.INFO, logging.WARNING, logging.ERROR,
        ]

    def test_disabled_level_emits_nothing(self, caplog):
        """Test that records below the logger level are not created."""
        logger = get_logger("streaming_xml_formatter.quiet")

        with caplog.at_level(logging.WARNING, logger="streaming_xml_formatter.quiet"):
            logger.debug("hidden")

        assert caplog.records == []


class TestBind:
    """Test bound logging fields."""

    def test_bind_adds_fields_without_changing_parent(self, caplog):
        """Test that bound fields appear on records of the bound logger only."""
        # Arrange
        parent = get_logger("streaming_xml_formatter.bind", "run-1")

        # Act
        child = parent.bind(chunk_size=64)
        with caplog.at_level(logging.DEBUG, logger="streaming_xml_formatter.bind"):
            child.debug("bound")

        # Assert
        assert caplog.records[-1].chunk_size == 64
        assert caplog.records[-1].correlation_id == "run-1"
        assert child.component == parent.component
        assert parent.fields == {}

    def test_call_extra_overrides_bound_field(self, caplog):
        """Test that per-call extra wins over a bound field."""
        logger = get_logger("streaming_xml_formatter.bind2").bind(phase="start")

        with caplog.at_level(logging.DEBUG, logger="streaming_xml_formatter.bind2"):
            logger.debug("x", extra={"phase": "end"})

        assert caplog.records[-1].phase == "end"

    def test_stream_records_carry_chunk_size(self, caplog):
        """Test that stream runs log with their chunk size bound."""
        # Act
        with caplog.at_level(logging.DEBUG, logger="streaming_xml_formatter.stream"):
            FormatStreamProcessor().process_stream(io.BytesIO(b"<a/>"), io.BytesIO())

        # Assert
        started = [
            record for record in caplog.records
            if record.getMessage() == "Starting stream formatting"
        ]
        assert started[0].chunk_size == 8192
        assert started[0].component == "stream_processor"
