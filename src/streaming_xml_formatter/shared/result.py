"""Result objects and diagnostic types for streaming XML formatting.

Formatting never fails on malformed markup, so the only way the formatter
reports anything unusual about its input is through diagnostics attached to
the result of a run.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries, ordered by value."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def from_name(cls, name: str) -> "DiagnosticSeverity":
        """Look up a severity by case-insensitive name."""
        if not isinstance(name, str):
            raise ValueError(f"Diagnostic severity must be a name, got {name!r}")
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown diagnostic severity: {name!r}") from None


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "position": self.position,
            "details": self.details,
            "correlation_id": self.correlation_id,
        }


@dataclass
class FormatMetrics:
    """Counters collected while formatting a stream."""

    bytes_read: int = 0
    bytes_written: int = 0
    chunks_processed: int = 0
    newlines_inserted: int = 0
    newlines_stripped: int = 0
    whitespace_stripped: int = 0
    max_level: int = 0
    processing_time_ms: float = 0.0

    @property
    def bytes_per_second(self) -> float:
        """Calculate input bytes processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.bytes_read * 1000.0) / self.processing_time_ms

    @property
    def expansion_ratio(self) -> float:
        """Ratio of output size to input size."""
        if self.bytes_read == 0:
            return 1.0
        return self.bytes_written / self.bytes_read


@dataclass
class FormatResult:
    """Result of a formatting run.

    Attributes:
        output: Formatted bytes; empty when the output went straight to a sink
        success: False only when reading or writing the stream failed
        metrics: Counters collected during the run
        diagnostics: Notes about leftovers at end of input and I/O failures
        final_level: Nesting level when the input ended
        metadata: Additional run metadata
    """

    output: bytes = b""
    success: bool = True
    metrics: FormatMetrics = field(default_factory=FormatMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    final_level: int = 0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """Formatted output decoded as UTF-8, undecodable bytes replaced."""
        return self.output.decode("utf-8", errors="replace")

    @property
    def warning_count(self) -> int:
        """Number of diagnostics at WARNING severity or above."""
        return sum(
            1 for diag in self.diagnostics
            if diag.severity.value >= DiagnosticSeverity.WARNING.value
        )

    @property
    def has_warnings(self) -> bool:
        """Check if any diagnostic is at WARNING severity or above."""
        return self.warning_count > 0
