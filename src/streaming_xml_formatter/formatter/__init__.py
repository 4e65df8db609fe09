"""Formatting engine for streaming XML layout.

Key Components:
    StreamFormatter: Per-byte state machine that inserts newlines and indentation
    FormatterState: State threaded through every byte of one run
    TagKind: Classification of tags (opening, closing, empty)
    Boundary: Position relative to tag delimiters
    TRANSITIONS: Layout action for each pair of adjacent tag kinds
"""

from .machine import StreamFormatter
from .state import Boundary, FormatterState, QuoteMode, TagKind
from .transitions import (
    INDENT_UNIT,
    TRANSITIONS,
    TransitionAction,
    apply_transition,
    indent,
    lookup_transition,
)

__all__ = [
    "StreamFormatter",
    "Boundary",
    "FormatterState",
    "QuoteMode",
    "TagKind",
    "INDENT_UNIT",
    "TRANSITIONS",
    "TransitionAction",
    "apply_transition",
    "indent",
    "lookup_transition",
]
