"""Configuration classes for streaming XML formatting.

The formatting rules and the indent unit are fixed; configuration only covers
how the input is read and written and how much diagnostic detail is kept.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .result import DiagnosticSeverity

DEFAULT_CHUNK_SIZE = 8192
LOW_LATENCY_CHUNK_SIZE = 128
THROUGHPUT_CHUNK_SIZE = 1024 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass
class StreamingConfig:
    """Configuration for chunked stream reading and writing."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    flush_each_chunk: bool = True
    progress_interval_chunks: int = 1

    def __post_init__(self) -> None:
        """Validate streaming configuration."""
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be > 0")
        if self.progress_interval_chunks <= 0:
            raise ValueError("progress_interval_chunks must be > 0")


@dataclass
class FormatterConfig:
    """Top-level configuration for a formatting run."""

    streaming: StreamingConfig = field(default_factory=StreamingConfig)
    correlation_id: Optional[str] = None
    enable_diagnostics: bool = True
    diagnostic_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate the formatter configuration."""
        try:
            self.streaming.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        try:
            DiagnosticSeverity.from_name(self.diagnostic_level)
        except ValueError as e:
            raise ConfigValidationError(
                str(e),
                field_name="diagnostic_level",
                suggestions=[severity.name for severity in DiagnosticSeverity],
            ) from e

    @property
    def minimum_severity(self) -> DiagnosticSeverity:
        """Severity below which diagnostics are dropped from results."""
        return DiagnosticSeverity.from_name(self.diagnostic_level)

    def override(self, **kwargs: Any) -> "FormatterConfig":
        """Create a new configuration with specific overrides.

        Keys naming ``StreamingConfig`` fields are applied to the nested
        streaming configuration.

        Raises:
            ConfigValidationError: If a key is unknown or a value is invalid
        """
        streaming_fields = set(StreamingConfig.__dataclass_fields__)
        top_fields = set(FormatterConfig.__dataclass_fields__) - {"streaming"}

        streaming_values = self.streaming.__dict__.copy()
        top_values = {name: getattr(self, name) for name in top_fields}

        for key, value in kwargs.items():
            if key in streaming_fields:
                streaming_values[key] = value
            elif key in top_fields:
                top_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", field_name=key
                )

        try:
            streaming = StreamingConfig(**streaming_values)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e
        return FormatterConfig(streaming=streaming, **top_values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "streaming": dict(self.streaming.__dict__),
            "correlation_id": self.correlation_id,
            "enable_diagnostics": self.enable_diagnostics,
            "diagnostic_level": self.diagnostic_level,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FormatterConfig":
        """Create configuration from dictionary.

        Unknown keys are ignored so that dictionaries written by newer
        versions still load.
        """
        streaming_data = data.get("streaming", {})
        try:
            streaming = StreamingConfig(**{
                key: value for key, value in streaming_data.items()
                if key in StreamingConfig.__dataclass_fields__
            })
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        top_values = {
            key: value for key, value in data.items()
            if key in cls.__dataclass_fields__ and key != "streaming"
        }
        return cls(streaming=streaming, **top_values)

    @classmethod
    def from_json(cls, json_str: str) -> "FormatterConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "FormatterConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def low_latency(cls) -> "FormatterConfig":
        """Small chunks flushed as soon as they are formatted, for live pipes."""
        return cls(streaming=StreamingConfig(
            chunk_size=LOW_LATENCY_CHUNK_SIZE,
            flush_each_chunk=True,
        ))

    @classmethod
    def throughput(cls) -> "FormatterConfig":
        """Large chunks and no per-chunk flushing, for big files."""
        return cls(streaming=StreamingConfig(
            chunk_size=THROUGHPUT_CHUNK_SIZE,
            flush_each_chunk=False,
            progress_interval_chunks=16,
        ))
