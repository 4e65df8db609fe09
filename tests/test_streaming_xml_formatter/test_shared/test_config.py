"""Tests for the configuration system."""

import json

import pytest

from streaming_xml_formatter.shared.config import (
    DEFAULT_CHUNK_SIZE,
    ConfigError,
    ConfigValidationError,
    FormatterConfig,
    StreamingConfig,
)
from streaming_xml_formatter.shared.result import DiagnosticSeverity


class TestStreamingConfig:
    """Test suite for StreamingConfig."""

    def test_default_configuration(self):
        """Test default streaming configuration values."""
        config = StreamingConfig()

        assert config.chunk_size == DEFAULT_CHUNK_SIZE == 8192
        assert config.flush_each_chunk is True
        assert config.progress_interval_chunks == 1

    @pytest.mark.parametrize("field_name,value", [
        ("chunk_size", 0),
        ("chunk_size", -5),
        ("progress_interval_chunks", 0),
    ])
    def test_invalid_values(self, field_name, value):
        """Test that non-positive sizes are rejected."""
        with pytest.raises(ValueError, match=field_name):
            StreamingConfig(**{field_name: value})


class TestFormatterConfig:
    """Test suite for FormatterConfig."""

    def test_default_configuration(self):
        """Test default formatter configuration values."""
        config = FormatterConfig()

        assert isinstance(config.streaming, StreamingConfig)
        assert config.correlation_id is None
        assert config.enable_diagnostics is True
        assert config.diagnostic_level == "INFO"
        assert config.minimum_severity is DiagnosticSeverity.INFO

    def test_invalid_diagnostic_level(self):
        """Test that unknown severity names raise ConfigValidationError."""
        with pytest.raises(ConfigValidationError) as exc_info:
            FormatterConfig(diagnostic_level="LOUD")

        assert exc_info.value.field_name == "diagnostic_level"
        assert "WARNING" in exc_info.value.suggestions
        assert isinstance(exc_info.value, ConfigError)

    def test_diagnostic_level_is_case_insensitive(self):
        """Test lowercase severity names."""
        assert FormatterConfig(diagnostic_level="warning").minimum_severity is (
            DiagnosticSeverity.WARNING
        )

    def test_invalid_nested_streaming_config(self):
        """Test that a nested config mutated into an invalid state is caught."""
        streaming = StreamingConfig()
        streaming.chunk_size = 0

        with pytest.raises(ConfigValidationError, match="chunk_size"):
            FormatterConfig(streaming=streaming)


class TestPresets:
    """Test configuration presets."""

    def test_default_preset(self):
        """Test that the default preset equals the default constructor."""
        assert FormatterConfig.default() == FormatterConfig()

    def test_low_latency_preset(self):
        """Test small, flushed chunks."""
        config = FormatterConfig.low_latency()

        assert config.streaming.chunk_size < DEFAULT_CHUNK_SIZE
        assert config.streaming.flush_each_chunk is True

    def test_throughput_preset(self):
        """Test large, unflushed chunks."""
        config = FormatterConfig.throughput()

        assert config.streaming.chunk_size > DEFAULT_CHUNK_SIZE
        assert config.streaming.flush_each_chunk is False


class TestOverride:
    """Test configuration overrides."""

    def test_override_streaming_and_top_level_fields(self):
        """Test that overrides route to the right level."""
        base = FormatterConfig()

        config = base.override(chunk_size=64, correlation_id="abc")

        assert config.streaming.chunk_size == 64
        assert config.correlation_id == "abc"
        assert base.streaming.chunk_size == DEFAULT_CHUNK_SIZE
        assert base.correlation_id is None

    def test_override_unknown_field(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ConfigValidationError) as exc_info:
            FormatterConfig().override(indent="  ")

        assert exc_info.value.field_name == "indent"

    def test_override_invalid_value(self):
        """Test that overrides are validated."""
        with pytest.raises(ConfigValidationError, match="chunk_size"):
            FormatterConfig().override(chunk_size=0)


class TestSerialization:
    """Test dictionary and JSON round trips."""

    def test_to_dict(self):
        """Test dictionary layout."""
        data = FormatterConfig(correlation_id="x").to_dict()

        assert data == {
            "streaming": {
                "chunk_size": 8192,
                "flush_each_chunk": True,
                "progress_interval_chunks": 1,
            },
            "correlation_id": "x",
            "enable_diagnostics": True,
            "diagnostic_level": "INFO",
        }

    def test_json_round_trip(self):
        """Test that JSON serialization preserves the configuration."""
        original = FormatterConfig.throughput().override(diagnostic_level="ERROR")

        restored = FormatterConfig.from_json(original.to_json())

        assert restored == original
        assert json.loads(original.to_json())["diagnostic_level"] == "ERROR"

    def test_from_dict_ignores_unknown_keys(self):
        """Test forward compatibility with extra keys."""
        config = FormatterConfig.from_dict({
            "streaming": {"chunk_size": 10, "future_option": 1},
            "another_future_option": True,
        })

        assert config.streaming.chunk_size == 10

    def test_from_dict_invalid_value(self):
        """Test that invalid values in a dictionary are rejected."""
        with pytest.raises(ConfigValidationError):
            FormatterConfig.from_dict({"streaming": {"chunk_size": -1}})
