"""Shared utilities for streaming XML formatting.

This module provides the configuration objects, result types and logging
helpers used by the formatter, the stream driver and the command line tool.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    FormatMetrics,
    FormatResult,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    FormatterConfig,
    StreamingConfig,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "FormatMetrics",
    "FormatResult",
    "ConfigError",
    "ConfigValidationError",
    "FormatterConfig",
    "StreamingConfig",
    "CorrelationLogger",
    "get_logger",
]
