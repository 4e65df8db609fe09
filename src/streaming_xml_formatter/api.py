"""Simple formatting functions.

Level-1 entry points for callers who do not need to manage a
``FormatStreamProcessor`` themselves.
"""

from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from .shared.config import FormatterConfig
from .shared.logging import get_logger
from .shared.result import DiagnosticEntry, DiagnosticSeverity, FormatResult
from .stream import FormatStreamProcessor, ProgressCallback


def format_bytes(data: bytes, config: Optional[FormatterConfig] = None) -> bytes:
    """Format markup bytes and return the formatted bytes.

    Examples:
        >>> format_bytes(b"<a/><b/>")
        b'<a/>\\n<b/>'
        >>> format_bytes(b"<a>text</a>")
        b'<a>text</a>'
    """
    return FormatStreamProcessor(config).process(data).output


def format_string(text: str, config: Optional[FormatterConfig] = None) -> str:
    """Format markup text and return the formatted text.

    The text is handled as UTF-8 bytes; only ASCII bytes are structural, so
    non-ASCII characters pass through unchanged.
    """
    return FormatStreamProcessor(config).process(text).text


def format_file(
    path: Union[str, Path], config: Optional[FormatterConfig] = None
) -> FormatResult:
    """Format the contents of a file.

    Args:
        path: Path of the file to read
        config: Optional formatter configuration

    Returns:
        FormatResult with the formatted output; ``success`` is False when the
        file cannot be read
    """
    path = Path(path)
    correlation_id = config.correlation_id if config else None
    logger = get_logger(__name__, correlation_id, "format_file")

    try:
        with path.open("rb") as source:
            result = FormatStreamProcessor(config).process(source)
    except OSError as e:
        logger.exception("Could not open input file", extra={"file": str(path)})
        return FormatResult(
            success=False,
            diagnostics=[DiagnosticEntry(
                severity=DiagnosticSeverity.ERROR,
                message=f"Could not open {path}: {e}",
                component="format_file",
                correlation_id=correlation_id,
            )],
            metadata={"error": True, "error_type": type(e).__name__, "file": str(path)},
        )

    result.metadata["file"] = str(path)
    return result


def format_stream(
    source: Union[BinaryIO, TextIO],
    sink: BinaryIO,
    config: Optional[FormatterConfig] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> FormatResult:
    """Format ``source`` into ``sink`` incrementally.

    Returns:
        FormatResult with counters and diagnostics; the output is in ``sink``
    """
    return FormatStreamProcessor(config).process_stream(
        source, sink, progress_callback
    )
