"""State carried by the formatter from one input byte to the next.

The formatter's state is a tagged ``Boundary`` variant describing where the
current byte sits relative to angle brackets, plus the context that survives
across tags: a pending self-closing slash, the quote mode, the kind of the
last resolved tag and the nesting level.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TagKind(Enum):
    """Classification of a tag for layout purposes."""

    NONE = auto()       # No tag resolved, or plain text since the last one
    OPENING = auto()    # <name ...>
    CLOSING = auto()    # </name>
    EMPTY = auto()      # <name .../>


class Boundary(Enum):
    """Position of the current byte relative to tag delimiters."""

    CONTENT = auto()    # Nothing structural pending
    OPEN = auto()       # '<' withheld after plain text
    CLOSED = auto()     # Previous structural byte was '>'
    ADJACENT = auto()   # '<' withheld directly after a '>'

    @property
    def withholds_angle(self) -> bool:
        """Whether a '<' is waiting for its tag kind to be known."""
        return self in (Boundary.OPEN, Boundary.ADJACENT)


class QuoteMode(Enum):
    """Active quoted span, if any."""

    NONE = auto()
    DOUBLE = auto()
    SINGLE = auto()

    @classmethod
    def for_byte(cls, byte: int) -> "QuoteMode":
        """Quote mode opened or closed by ``byte``."""
        if byte == 0x22:
            return cls.DOUBLE
        if byte == 0x27:
            return cls.SINGLE
        return cls.NONE


@dataclass
class FormatterState:
    """Mutable state threaded through every input byte of one run."""

    level: int = 0
    escape_next: bool = False
    quote: QuoteMode = QuoteMode.NONE
    boundary: Boundary = Boundary.CONTENT
    previous_kind: TagKind = TagKind.NONE
    pending_kind: TagKind = TagKind.NONE
    after_slash: bool = False  # last tag-relevant byte was a bare '/'
    skip_whitespace: bool = True

    def __post_init__(self) -> None:
        """Validate state values."""
        if self.level < 0:
            raise ValueError("Nesting level must be >= 0")
        if self.boundary.withholds_angle != (self.pending_kind is not TagKind.NONE):
            raise ValueError(
                "pending_kind must be set exactly while a '<' is withheld"
            )
        if self.after_slash and self.after_close_angle:
            raise ValueError("after_slash cannot be set directly after a '>'")

    @property
    def after_open_angle(self) -> bool:
        return self.boundary.withholds_angle

    @property
    def after_close_angle(self) -> bool:
        return self.boundary in (Boundary.CLOSED, Boundary.ADJACENT)

    @property
    def in_double_quote(self) -> bool:
        return self.quote is QuoteMode.DOUBLE

    @property
    def in_single_quote(self) -> bool:
        return self.quote is QuoteMode.SINGLE

    @property
    def in_quote(self) -> bool:
        return self.quote is not QuoteMode.NONE
