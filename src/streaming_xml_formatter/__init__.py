"""Streaming XML Formatter.

A best-effort formatter that lays out XML-like markup with newlines and tab
indentation at tag boundaries. It never validates or parses the markup, so
malformed, partial or non-well-formed input still gets a deterministic layout.

Progressive API Disclosure:
- Level 1: Simple functions - format_bytes(), format_string(), format_file(), format_stream()
- Level 2: Configured processor - FormatStreamProcessor class
- Level 3: Raw state machine - StreamFormatter with feed()/finish()
"""

__version__ = "0.1.0"
__author__ = "Streaming XML Formatter Team"

# Level 1: Simple functions
from .api import format_bytes, format_file, format_stream, format_string

# Level 3: State machine
from .formatter import StreamFormatter, TagKind

# Configuration and results
from .shared.config import FormatterConfig, StreamingConfig
from .shared.result import DiagnosticEntry, DiagnosticSeverity, FormatResult

# Level 2: Configured processor
from .stream import FormatStreamProcessor

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple formatting functions
    "format_bytes",
    "format_string",
    "format_file",
    "format_stream",

    # Level 2: Configured processor
    "FormatStreamProcessor",

    # Level 3: State machine
    "StreamFormatter",
    "TagKind",

    # Configuration and results
    "FormatterConfig",
    "StreamingConfig",
    "FormatResult",
    "DiagnosticEntry",
    "DiagnosticSeverity",
]
