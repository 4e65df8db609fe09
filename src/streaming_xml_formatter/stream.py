"""Stream processing API with never-fail guarantee.

This module drives a ``StreamFormatter`` over in-memory data or file-like
objects, reading in bounded chunks and wrapping the run's output, counters
and diagnostics in a ``FormatResult``.
"""

import io
import time
from typing import (
    BinaryIO,
    Callable,
    Iterator,
    List,
    Optional,
    TextIO,
    Union,
)

from .formatter import StreamFormatter
from .shared.config import FormatterConfig
from .shared.logging import get_logger
from .shared.result import DiagnosticEntry, DiagnosticSeverity, FormatResult

# Type definitions for input data
InputType = Union[bytes, bytearray, memoryview, str, BinaryIO, TextIO]
ProgressCallback = Callable[[int, int], bool]  # (bytes_read, chunks) -> continue

COMPONENT = "stream_processor"


class FormatStreamProcessor:
    """Formats in-memory data and streams with comprehensive results.

    Every call uses a fresh ``StreamFormatter``, so one processor can be
    reused for any number of independent runs.
    """

    def __init__(self, config: Optional[FormatterConfig] = None) -> None:
        """Initialize the stream processor.

        Args:
            config: Formatter configuration; defaults to ``FormatterConfig()``
        """
        self.config = config or FormatterConfig()
        self.logger = get_logger(__name__, self.config.correlation_id, COMPONENT)

    def process(self, input_data: InputType) -> FormatResult:
        """Format complete input and return the output in the result.

        Args:
            input_data: Input as bytes, string (UTF-8 encoded before formatting)
                or a binary or text file-like object

        Returns:
            FormatResult with the formatted output and run metadata

        Raises:
            Never raises - read failures are reported in the result
        """
        start_time = time.time()
        formatter = self._new_formatter()

        if isinstance(input_data, (bytes, bytearray, memoryview)):
            input_type = "bytes"
        elif isinstance(input_data, str):
            input_type = "str"
        elif hasattr(input_data, "read"):
            input_type = "file"
        else:
            return self._create_error_result(
                formatter,
                f"Unsupported input type: {type(input_data).__name__}",
                start_time,
            )

        try:
            if input_type == "bytes":
                output = formatter.feed(bytes(input_data))
            elif input_type == "str":
                output = formatter.feed(input_data.encode("utf-8"))
            else:
                buffer = bytearray()
                for chunk in self._read_chunks(input_data):
                    buffer += formatter.feed(chunk)
                output = bytes(buffer)
        except (OSError, ValueError) as e:
            self.logger.exception(
                "Failed to read input", extra={"input_type": input_type}
            )
            return self._create_error_result(
                formatter, f"Read failed: {e}", start_time, error=e
            )

        result = self._build_result(formatter, output, start_time)
        result.metadata["input_type"] = input_type
        return result

    def process_stream(
        self,
        source: Union[BinaryIO, TextIO],
        sink: BinaryIO,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> FormatResult:
        """Format ``source`` into ``sink`` chunk by chunk.

        Each chunk's output is written as soon as it is formatted. The
        result's ``output`` is empty; the formatted bytes are in ``sink``.

        Args:
            source: Readable binary or text stream
            sink: Writable binary stream
            progress_callback: Optional callback receiving (bytes_read, chunks);
                returning False stops reading

        Returns:
            FormatResult with counters and diagnostics for the run

        Raises:
            TypeError: If ``sink`` is a text stream
        """
        if isinstance(sink, io.TextIOBase):
            raise TypeError("sink must be a binary stream")

        start_time = time.time()
        formatter = self._new_formatter()
        streaming = self.config.streaming
        cancelled = False
        logger = self.logger.bind(
            chunk_size=streaming.chunk_size, input_type="stream"
        )

        logger.debug("Starting stream formatting")

        try:
            for chunk in self._read_chunks(source):
                output = formatter.feed(chunk)
                if output:
                    self._write(sink, output)

                chunks = formatter.metrics.chunks_processed
                if (
                    progress_callback is not None
                    and chunks % streaming.progress_interval_chunks == 0
                    and not progress_callback(formatter.metrics.bytes_read, chunks)
                ):
                    cancelled = True
                    break
            if not streaming.flush_each_chunk:
                self._flush(sink)
        except BrokenPipeError as e:
            # Reader went away; an ordinary end of a pipeline.
            logger.debug(
                "Output closed by reader",
                extra={"bytes_read": formatter.metrics.bytes_read}
            )
            return self._create_error_result(
                formatter, f"Stream I/O failed: {e}", start_time, error=e
            )
        except (OSError, ValueError) as e:
            logger.exception(
                "Stream formatting failed",
                extra={"bytes_read": formatter.metrics.bytes_read}
            )
            return self._create_error_result(
                formatter, f"Stream I/O failed: {e}", start_time, error=e
            )

        result = self._build_result(formatter, b"", start_time)
        result.metadata["input_type"] = "stream"
        if cancelled:
            result.metadata["cancelled"] = True
            result.diagnostics.append(DiagnosticEntry(
                severity=DiagnosticSeverity.WARNING,
                message="Formatting cancelled by progress callback",
                component=COMPONENT,
                position={"offset": formatter.metrics.bytes_read},
                correlation_id=self.config.correlation_id,
            ))
        return result

    def iter_chunks(self, source: Union[BinaryIO, TextIO]) -> Iterator[bytes]:
        """Yield formatted output for each chunk read from ``source``.

        Unlike ``process_stream``, read errors propagate to the caller.
        Empty outputs (e.g. a chunk of stripped whitespace) are skipped.
        """
        formatter = self._new_formatter()
        for chunk in self._read_chunks(source):
            output = formatter.feed(chunk)
            if output:
                yield output
        for diagnostic in formatter.finish():
            self.logger.debug(
                diagnostic.message, extra={"severity": diagnostic.severity.name}
            )

    def _new_formatter(self) -> StreamFormatter:
        return StreamFormatter(correlation_id=self.config.correlation_id)

    def _read_chunks(self, source: Union[BinaryIO, TextIO]) -> Iterator[bytes]:
        """Read ``source`` to end of stream in configured chunk sizes."""
        chunk_size = self.config.streaming.chunk_size
        while True:
            data = source.read(chunk_size)
            if not data:
                return
            if isinstance(data, str):
                data = data.encode("utf-8")
            yield data

    def _write(self, sink: BinaryIO, data: bytes) -> None:
        sink.write(data)
        if self.config.streaming.flush_each_chunk:
            self._flush(sink)

    @staticmethod
    def _flush(sink: BinaryIO) -> None:
        flush = getattr(sink, "flush", None)
        if flush is not None:
            flush()

    def _filter_diagnostics(
        self, diagnostics: List[DiagnosticEntry]
    ) -> List[DiagnosticEntry]:
        if not self.config.enable_diagnostics:
            return []
        minimum = self.config.minimum_severity.value
        return [diag for diag in diagnostics if diag.severity.value >= minimum]

    def _build_result(
        self, formatter: StreamFormatter, output: bytes, start_time: float
    ) -> FormatResult:
        diagnostics = self._filter_diagnostics(list(formatter.finish()))
        metrics = formatter.metrics
        metrics.processing_time_ms = (time.time() - start_time) * 1000

        self.logger.debug(
            "Formatting completed",
            extra={
                "bytes_read": metrics.bytes_read,
                "bytes_written": metrics.bytes_written,
                "processing_time_ms": metrics.processing_time_ms,
            }
        )

        return FormatResult(
            output=output,
            success=True,
            metrics=metrics,
            diagnostics=diagnostics,
            final_level=formatter.state.level,
            metadata={"chunk_size": self.config.streaming.chunk_size},
        )

    def _create_error_result(
        self,
        formatter: StreamFormatter,
        error_message: str,
        start_time: float,
        error: Optional[BaseException] = None,
    ) -> FormatResult:
        """Create a result object for error conditions."""
        metrics = formatter.metrics
        metrics.processing_time_ms = (time.time() - start_time) * 1000
        metadata = {"error": True}
        if error is not None:
            metadata["error_type"] = type(error).__name__

        return FormatResult(
            output=b"",
            success=False,
            metrics=metrics,
            diagnostics=[DiagnosticEntry(
                severity=DiagnosticSeverity.ERROR,
                message=error_message,
                component=COMPONENT,
                position={"offset": metrics.bytes_read},
                correlation_id=self.config.correlation_id,
            )],
            final_level=formatter.state.level,
            metadata=metadata,
        )
