"""Byte-level state machine that lays out XML-like markup.

The formatter reads bytes one at a time and decides, for each, whether it is
escaped, quoted, a tag delimiter or plain content. A '<' is withheld until the
byte after it shows what kind of tag it opens; at that point the transition
table decides whether a newline and indentation go in front of it.

The formatter never looks further ahead than the current byte and never
fails: every byte has a defined handling, and malformed input simply gets a
less tidy layout.
"""

from typing import List, Optional

from ..shared.logging import get_logger
from ..shared.result import DiagnosticEntry, DiagnosticSeverity, FormatMetrics
from .state import Boundary, FormatterState, QuoteMode, TagKind
from .transitions import apply_transition, lookup_transition

TAB = 0x09
NEWLINE = 0x0A
SPACE = 0x20
DOUBLE_QUOTE = 0x22
SINGLE_QUOTE = 0x27
SLASH = 0x2F
LEFT_ANGLE = 0x3C
RIGHT_ANGLE = 0x3E
BACKSLASH = 0x5C

# Bytes that still need their own structural handling after they resolve a
# withheld '<'. Anything else is simply the first byte of the tag.
DELIMITERS = frozenset((BACKSLASH, DOUBLE_QUOTE, SINGLE_QUOTE, LEFT_ANGLE, RIGHT_ANGLE))

COMPONENT = "stream_formatter"


class StreamFormatter:
    """Streaming transducer from raw markup bytes to indented markup bytes.

    State persists across ``feed`` calls, so input may be split into chunks
    at arbitrary positions without changing the output.

    Example:
        >>> formatter = StreamFormatter()
        >>> formatter.format(b"<a><b></b></a>")
        b'<a>\\n\\t<b></b>\\n</a>'
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the formatter.

        Args:
            correlation_id: Optional correlation ID attached to logs and diagnostics
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, COMPONENT)
        self.reset()

    def reset(self) -> None:
        """Return to the initial state for a new run."""
        self.state = FormatterState()
        self.metrics = FormatMetrics()
        self.diagnostics: List[DiagnosticEntry] = []
        self._offset = 0
        self._withheld_offset: Optional[int] = None
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def feed(self, chunk: bytes) -> bytes:
        """Format one chunk of input.

        Args:
            chunk: Next slice of the input stream

        Returns:
            Output determined by this chunk; may be shorter or longer than it

        Raises:
            TypeError: If ``chunk`` is text rather than bytes
            RuntimeError: If called after ``finish``
        """
        if self._finished:
            raise RuntimeError("Cannot feed a formatter that has already finished")
        if isinstance(chunk, str):
            raise TypeError("StreamFormatter.feed() expects bytes, not str")

        out = bytearray()
        for byte in bytes(chunk):
            self._step(byte, out)
            self._offset += 1

        self.metrics.bytes_read += len(chunk)
        self.metrics.bytes_written += len(out)
        self.metrics.chunks_processed += 1
        return bytes(out)

    def finish(self) -> List[DiagnosticEntry]:
        """Mark the end of input.

        A '<' still withheld is dropped; nothing else is corrected.

        Returns:
            Diagnostics describing state left over at end of input
        """
        if self._finished:
            return self.diagnostics
        self._finished = True
        state = self.state

        if state.boundary.withholds_angle:
            self._diagnose(
                DiagnosticSeverity.WARNING,
                "Discarded unresolved '<' at end of input",
                offset=self._withheld_offset,
            )
            state.boundary = Boundary.CONTENT
            state.pending_kind = TagKind.NONE
            self._withheld_offset = None

        if state.in_quote:
            self._diagnose(
                DiagnosticSeverity.WARNING,
                "Input ended inside a quoted span",
                details={"quote": state.quote.name},
            )

        if state.escape_next:
            self._diagnose(
                DiagnosticSeverity.INFO,
                "Input ended directly after an escape character",
            )

        if state.level > 0:
            self._diagnose(
                DiagnosticSeverity.INFO,
                f"Input ended at nesting level {state.level}",
                details={"level": state.level},
            )

        self.logger.debug(
            "Formatting finished",
            extra={
                "bytes_read": self.metrics.bytes_read,
                "bytes_written": self.metrics.bytes_written,
                "newlines_inserted": self.metrics.newlines_inserted,
                "final_level": state.level,
                "diagnostic_count": len(self.diagnostics),
            }
        )
        return self.diagnostics

    def format(self, data: bytes) -> bytes:
        """Format a complete input in one call."""
        output = self.feed(data)
        self.finish()
        return output

    def _step(self, byte: int, out: bytearray) -> None:
        """Process a single input byte through the state machine."""
        state = self.state

        if state.escape_next:
            state.escape_next = False
            out.append(byte)
            return

        if state.skip_whitespace:
            if byte == SPACE or byte == TAB:
                self.metrics.whitespace_stripped += 1
                return
            state.skip_whitespace = False

        if state.boundary.withholds_angle and byte != NEWLINE:
            self._resolve_tag(byte, out)
            if byte not in DELIMITERS:
                out.append(byte)
                return

        if byte == BACKSLASH:
            state.escape_next = True
            out.append(byte)
            return

        if state.in_quote and QuoteMode.for_byte(byte) is not state.quote:
            out.append(byte)
            return

        if byte == NEWLINE:
            state.skip_whitespace = True
            self.metrics.newlines_stripped += 1
            return

        if byte == DOUBLE_QUOTE or byte == SINGLE_QUOTE:
            # Quotes in text between tags are content; only toggle once a tag
            # has been seen since the last plain text.
            if state.previous_kind is not TagKind.NONE:
                mode = QuoteMode.for_byte(byte)
                state.quote = QuoteMode.NONE if state.quote is mode else mode
            out.append(byte)
            return

        if byte == LEFT_ANGLE:
            if state.boundary is Boundary.CLOSED:
                state.boundary = Boundary.ADJACENT
            else:
                state.boundary = Boundary.OPEN
            state.pending_kind = TagKind.OPENING
            self._withheld_offset = self._offset
            return

        if byte == RIGHT_ANGLE:
            if state.after_slash:
                state.previous_kind = TagKind.EMPTY
            state.after_slash = False
            state.boundary = Boundary.CLOSED
            out.append(byte)
            return

        if state.boundary is Boundary.CLOSED:
            state.previous_kind = TagKind.CLOSING if byte == SLASH else TagKind.NONE
            state.boundary = Boundary.CONTENT
            out.append(byte)
            return

        if byte == SLASH:
            state.after_slash = True
        else:
            state.after_slash = False
            state.boundary = Boundary.CONTENT
        out.append(byte)

    def _resolve_tag(self, byte: int, out: bytearray) -> None:
        """Emit the withheld '<' now that ``byte`` shows which kind of tag it opens."""
        state = self.state
        if byte == SLASH:
            state.pending_kind = TagKind.CLOSING

        if state.boundary is Boundary.ADJACENT:
            action = lookup_transition(state.previous_kind, state.pending_kind)
            state.level, layout = apply_transition(state.level, action)
            if layout:
                out += layout
                self.metrics.newlines_inserted += 1
                self.metrics.max_level = max(self.metrics.max_level, state.level)

        out.append(LEFT_ANGLE)
        state.previous_kind = state.pending_kind
        state.pending_kind = TagKind.NONE
        state.boundary = Boundary.CONTENT
        self._withheld_offset = None

    def _diagnose(
        self,
        severity: DiagnosticSeverity,
        message: str,
        offset: Optional[int] = None,
        details: Optional[dict] = None,
    ) -> None:
        self.diagnostics.append(DiagnosticEntry(
            severity=severity,
            message=message,
            component=COMPONENT,
            position={"offset": offset if offset is not None else self._offset},
            details=details,
            correlation_id=self.correlation_id,
        ))
